from .fastq import *
from .phred import *
from .qual import *

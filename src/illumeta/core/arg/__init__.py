from .cli import *
from .cmd import *

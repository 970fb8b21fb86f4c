"""

illumeta
========================================================================

Parse the metadata in the identifiers of Illumina reads and bin their
quality scores.

    >>> from illumeta import parse_ident
    >>> parse_ident("HWUSI-EAS100R:6:73:941:1973#0/1").lane
    6

"""

from . import binq, ident, test
from .binq import DEFAULT_SCHEME, Scheme, bin_compress
from .core.version import __version__
from .ident import Metadata, parse, parse_ident

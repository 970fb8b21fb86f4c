from .main import cli, run
from .meta import Coordinate, Metadata, Multiplex, Type
from .parse import (BadIdentifierError,
                    BadTagError,
                    IdentifierError,
                    parse,
                    parse_ident,
                    parse_safely)

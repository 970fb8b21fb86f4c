from .compress import bin_compress
from .main import cli, run
from .scheme import DEFAULT_SCHEME, Scheme, load_scheme, write_scheme

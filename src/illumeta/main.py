from pathlib import Path

from click import group, version_option

from . import binq, ident, test, __version__
from .core import path
from .core.arg import (opt_exit_on_error,
                       opt_log,
                       opt_log_color,
                       opt_quiet,
                       opt_verbose)
from .core.logs import logger, set_config

params = [
    opt_verbose,
    opt_quiet,
    opt_log,
    opt_log_color,
    opt_exit_on_error,
]


@group(params=params, context_settings={"show_default": True})
@version_option(__version__)
def cli(verbose: int,
        quiet: int,
        log: str | Path,
        log_color: bool,
        exit_on_error: bool):
    """ Command line interface of illumeta. """
    log_file_path = path.sanitize(log) if log else None
    set_config(verbose - quiet, log_file_path, log_color, exit_on_error)
    logger.detail(f"This is illumeta version {__version__}")


for module in [ident, binq, test]:
    cli.add_command(module.cli)

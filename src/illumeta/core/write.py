from pathlib import Path

from .logs import logger


def need_write(query: str | Path, force: bool = False, warn: bool = True):
    """ Determine whether a file must be written.

    Parameters
    ----------
    query: str | Path
        File for which to check the need for writing.
    force: bool = False
        Force the file to be written, even if it already exists.
    warn: bool = True
        If the file does not need to be written, then log a warning.

    Returns
    -------
    bool
        Whether the file must be written.
    """
    if not isinstance(query, Path):
        query = Path(query)
    if force or not query.exists():
        return True
    if warn:
        logger.warning(f"{query} exists: use --force to overwrite")
    return False

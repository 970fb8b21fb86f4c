"""

Path Core Module

========================================================================

Find FASTQ files and determine where their outputs go.

"""

import os
import pathlib
from itertools import chain
from typing import Iterable

from .logs import logger

GZIP_EXT = ".gz"
CSV_EXT = ".csv"
FQ_EXTS = (".fq.gz",
           ".fastq.gz",
           ".fq",
           ".fastq")
IDENT_EXT = f".ident{CSV_EXT}"


class PathError(Exception):
    """ Any error involving a path. """


class WrongFileExtensionError(PathError, ValueError):
    """ A file has the wrong extension. """


def sanitize(path: str | pathlib.Path, strict: bool = False):
    """ Return an absolute, normalized, symlink-free Path.

    Parameters
    ----------
    path: str | pathlib.Path
        Path to sanitize.
    strict: bool = False
        Require the path to exist and contain no symbolic link loops.

    Returns
    -------
    pathlib.Path
        Absolute, normalized, symlink-free path.
    """
    return pathlib.Path(path).resolve(strict=strict)


def fastq_ext(path: str | pathlib.Path):
    """ Return the FASTQ extension of a file, or an empty string if the
    file does not have a FASTQ extension. """
    name = pathlib.Path(path).name
    # Check longer extensions first so that .fq.gz wins over .gz.
    for ext in sorted(FQ_EXTS, key=len, reverse=True):
        if name.endswith(ext) and len(name) > len(ext):
            return ext
    return ""


def check_fastq_ext(path: str | pathlib.Path):
    """ Raise an error if a file does not have a FASTQ extension. """
    if not (ext := fastq_ext(path)):
        raise WrongFileExtensionError(
            f"{path} does not end with any of {FQ_EXTS}"
        )
    return ext


def fastq_gz(path: str | pathlib.Path):
    """ Return whether a FASTQ file is compressed with gzip. """
    return check_fastq_ext(path).endswith(GZIP_EXT)


def fastq_stem(path: str | pathlib.Path):
    """ Name of a FASTQ file without its FASTQ extension. """
    path = pathlib.Path(path)
    return path.name[:-len(check_fastq_ext(path))]


def find_fastqs(path: str | pathlib.Path):
    """ Yield every FASTQ file at `path`: the path itself if it is a
    FASTQ file, or every FASTQ file in it (recursively) if it is a
    directory. """
    path = sanitize(path, strict=True)
    if path.is_file():
        if fastq_ext(path):
            logger.detail(f"Found FASTQ file {path}")
            yield path
        else:
            logger.warning(f"Skipped {path}: not a FASTQ file")
    else:
        logger.routine(f"Began searching directory {path}")
        yield from chain(*map(find_fastqs, sorted(path.iterdir())))
        logger.routine(f"Ended searching directory {path}")


def find_fastqs_chain(paths: Iterable[str | pathlib.Path]):
    """ Yield each FASTQ file in any of `paths` once. """
    found = set()
    for path in paths:
        try:
            for fastq in find_fastqs(path):
                if fastq not in found:
                    found.add(fastq)
                    yield fastq
        except Exception as error:
            logger.error(error)


def transpath(to_dir: str | pathlib.Path,
              from_dir: str | pathlib.Path,
              path: str | pathlib.Path,
              strict: bool = False):
    """ Return the path that would result from moving `path` from
    `from_dir` to `to_dir`, without moving anything. """
    from_dir = sanitize(from_dir, strict)
    relpath = sanitize(path, strict).relative_to(from_dir)
    if relpath == pathlib.Path():
        # The path is from_dir itself: keep its name under to_dir.
        return transpath(to_dir, from_dir.parent, path, strict)
    return sanitize(to_dir, strict).joinpath(relpath)


def transpaths(to_dir: str | pathlib.Path,
               paths: Iterable[str | pathlib.Path],
               strict: bool = False):
    """ Return the paths that would result from moving every path in
    `paths` from their longest common directory to `to_dir`. """
    paths = list(paths)
    if not paths:
        return tuple()
    sanitized = [sanitize(p, strict) for p in paths]
    common_path = os.path.commonpath(sanitized)
    return tuple(transpath(to_dir, common_path, p, strict) for p in paths)

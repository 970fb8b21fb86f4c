from pathlib import Path
from typing import Iterable

import pandas as pd

from .meta import METADATA_FIELDS
from .parse import ReadIdentifier, parse_safely
from ..core.logs import logger
from ..core.write import need_write

READ_NAME = "read"
ERROR = "error"
TABLE_COLUMNS = [READ_NAME] + METADATA_FIELDS + [ERROR]


def tabulate_metadata(records: Iterable[ReadIdentifier],
                      keep_bad: bool = True):
    """ Parse the identifier of every read into one row of a table.

    Parameters
    ----------
    records: Iterable[ReadIdentifier]
        Reads whose identifiers to parse.
    keep_bad: bool = True
        Keep a row (with type "undefined" and the reason in the column
        "error") for every read whose identifier cannot be parsed; if
        False, then drop such reads and log a warning for each.

    Returns
    -------
    pd.DataFrame
        One row per read, with columns `TABLE_COLUMNS`.
    """
    rows = list()
    num_reads = 0
    num_bad = 0
    for record in records:
        num_reads += 1
        metadata, error = parse_safely(record)
        if error is not None:
            num_bad += 1
            if not keep_bad:
                logger.warning(f"Dropped read {repr(record.name)}: {error}")
                continue
            logger.detail(f"Failed to parse read {repr(record.name)}: {error}")
        rows.append({READ_NAME: record.name,
                     **metadata.to_dict(),
                     ERROR: str(error) if error is not None else ""})
    if num_bad:
        logger.warning(f"Failed to parse {num_bad} of {num_reads} "
                       f"read identifier(s)")
    return pd.DataFrame.from_records(rows, columns=TABLE_COLUMNS)


def write_metadata_table(table: pd.DataFrame,
                         csv_file: Path,
                         force: bool = False):
    """ Write a table of metadata to a CSV file. """
    if need_write(csv_file, force):
        csv_file.parent.mkdir(parents=True, exist_ok=True)
        table.to_csv(csv_file, index=False)
        logger.action(f"Wrote metadata of {len(table)} read(s) to {csv_file}")
    return csv_file


def read_metadata_table(csv_file: Path):
    """ Read a table of metadata written by `write_metadata_table`. """
    return pd.read_csv(csv_file,
                       dtype={"instrument": str,
                              "flow_cell": str,
                              "tag": str,
                              ERROR: str},
                       keep_default_na=False)

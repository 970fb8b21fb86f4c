"""

Binning Scheme Module

========================================================================

A binning scheme maps each of the 256 possible Phred scores to a
representative score. The default scheme follows the Illumina white
paper on quality score binning:

    Old quality score   New quality score
          0-1                   0
          2-9                   6
         10-19                 15
         20-24                 22
         25-29                 27
         30-34                 33
         35-39                 37
          ≥ 40                 40

"""

from pathlib import Path
from typing import Iterable

import numpy as np
import pandas as pd

from ..core.logs import logger
from ..core.validate import (require_atleast,
                             require_between,
                             require_equal,
                             require_less)
from ..core.write import need_write

NUM_QUALS = 256
MAX_QUAL = NUM_QUALS - 1

MIN_PHRED_COL = "min_phred"
BIN_PHRED_COL = "bin_phred"

# Lowest score of each bin and the score that represents the bin; scores
# below the lowest bin map to 0.
DEFAULT_BINS = ((2, 6),
                (10, 15),
                (20, 22),
                (25, 27),
                (30, 33),
                (35, 37),
                (40, 40))


class Scheme(object):
    """ Immutable table that maps every Phred score to its bin. """
    __slots__ = ["_table"]

    def __init__(self, table: Iterable[int]):
        array = np.array(table if isinstance(table, np.ndarray)
                         else list(table))
        require_equal("len(table)", array.size, NUM_QUALS)
        if not np.issubdtype(array.dtype, np.integer):
            raise TypeError(f"Scheme entries must be integers, "
                            f"but got dtype {array.dtype}")
        require_between("minimum entry", int(array.min()), 0, MAX_QUAL)
        require_between("maximum entry", int(array.max()), 0, MAX_QUAL)
        self._table = array.astype(np.uint8)
        self._table.flags.writeable = False

    @classmethod
    def from_bins(cls, bins: Iterable[tuple[int, int]]):
        """ Make a scheme from the lowest score of each bin and the
        score that represents it. Each bin extends up to the lowest
        score of the next bin (or to 255); scores below the first bin
        map to 0. """
        bins = list(bins)
        table = np.zeros(NUM_QUALS, dtype=np.int64)
        highs = [low for low, _ in bins[1:]] + [NUM_QUALS]
        for (low, value), high in zip(bins, highs, strict=True):
            require_between("lowest score of bin", low, 0, MAX_QUAL,
                            classes=(int, np.integer))
            require_less("lowest score of bin", low, high,
                         "lowest score of next bin")
            require_between("score of bin", value, 0, MAX_QUAL,
                            classes=(int, np.integer))
            table[low: high] = value
        return cls(table)

    @property
    def table(self):
        """ Read-only array of the bin of every score. """
        return self._table

    def bins(self):
        """ Lowest score of each bin and the score that represents it,
        as `from_bins` accepts. """
        starts = np.flatnonzero(np.diff(self._table.astype(np.int16),
                                        prepend=-1) != 0)
        return [(int(low), int(self._table[low])) for low in starts]

    def is_idempotent(self):
        """ Whether binning a binned score leaves it unchanged. """
        return bool(np.array_equal(self._table[self._table], self._table))

    def __getitem__(self, phred: int):
        return int(self._table[phred])

    def __len__(self):
        return self._table.size

    def __eq__(self, other):
        if isinstance(other, Scheme):
            return bool(np.array_equal(self._table, other._table))
        return NotImplemented

    def __hash__(self):
        return hash(self._table.tobytes())

    def __reduce__(self):
        # Rebuild through __init__ so that the table stays read-only.
        return type(self), (self._table.tolist(),)

    def __repr__(self):
        return f"{type(self).__name__}.from_bins({self.bins()})"


DEFAULT_SCHEME = Scheme.from_bins(DEFAULT_BINS)


def load_scheme(csv_file: str | Path):
    """ Load a scheme from a CSV file of bins, with the lowest score of
    each bin in column `min_phred` and its score in column `bin_phred`. """
    bins = pd.read_csv(csv_file)
    for column in (MIN_PHRED_COL, BIN_PHRED_COL):
        if column not in bins.columns:
            raise ValueError(f"{csv_file} has no column {repr(column)}")
    require_atleast("number of bins", len(bins.index), 1)
    bins = bins.sort_values(MIN_PHRED_COL)
    scheme = Scheme.from_bins(zip(bins[MIN_PHRED_COL].astype(int).tolist(),
                                  bins[BIN_PHRED_COL].astype(int).tolist(),
                                  strict=True))
    if not scheme.is_idempotent():
        logger.warning(f"Scheme in {csv_file} is not idempotent: binning "
                       f"the same scores twice will change them again")
    logger.detail(f"Loaded {scheme} from {csv_file}")
    return scheme


def write_scheme(scheme: Scheme, csv_file: str | Path, force: bool = False):
    """ Write the bins of a scheme to a CSV file. """
    csv_file = Path(csv_file)
    if need_write(csv_file, force):
        bins = pd.DataFrame.from_records(scheme.bins(),
                                         columns=[MIN_PHRED_COL,
                                                  BIN_PHRED_COL])
        bins.to_csv(csv_file, index=False)
        logger.action(f"Wrote {scheme} to {csv_file}")
    return csv_file

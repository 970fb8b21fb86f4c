import numpy as np

from .scheme import DEFAULT_SCHEME, Scheme
from ..core.ngs.phred import phred_to_prob, prob_to_phred
from ..core.ngs.qual import PHRED_DTYPE, QLETTER_DTYPE, Scorer, Slicer
from ..core.validate import require_isinstance


def bin_compress(scorer: Scorer, scheme: Scheme | None = None):
    """ Bin the qualities of a scorer in place.

    Parameters
    ----------
    scorer: Scorer
        Qualities to bin. If it is a `Slicer` whose storage is an array
        of letters with Phred scores (`QLETTER_DTYPE`) or of Phred
        scores (`PHRED_DTYPE`), then the array is binned directly;
        otherwise, every position is read and written as a probability
        of error, so non-Phred scores (e.g. Solexa) are binned via the
        Phred score with the same probability.
    scheme: Scheme | None = None
        Scheme with which to bin; if None, use `DEFAULT_SCHEME`.

    Raises
    ------
    Exception
        The first error raised by `scorer.set_e`, after which no more
        positions are binned; positions already binned stay binned.
    """
    if scheme is None:
        scheme = DEFAULT_SCHEME
    require_isinstance("scheme", scheme, Scheme)
    if isinstance(scorer, Slicer):
        data = scorer.slice()
        if isinstance(data, np.ndarray) and data.ndim == 1:
            if data.dtype == QLETTER_DTYPE:
                data["qual"] = scheme.table[data["qual"]]
                return
            if data.dtype == PHRED_DTYPE:
                data[:] = scheme.table[data]
                return
    _bin_compress_each(scorer, scheme)


def _bin_compress_each(scorer: Scorer, scheme: Scheme):
    for i in range(scorer.start, scorer.end):
        binned = scheme[prob_to_phred(scorer.e_at(i))]
        scorer.set_e(i, phred_to_prob(binned))

"""

Quality Container Core Module

========================================================================

Containers of per-base quality scores that can be read and written by
position as probabilities of error.

A `Scorer` exposes its qualities over the half-open range [start, end)
through `e_at` and `set_e`. A container that also implements `Slicer`
exposes its internal storage, which code that recognizes the storage
can modify in place without converting every score to a probability.

"""

from abc import ABC, abstractmethod
from typing import Any, Iterable

import numpy as np

from .fastq import FastqRecord
from .phred import (LO_PHRED,
                    NAN_PHRED,
                    MIN_SOLEXA,
                    MAX_SOLEXA,
                    decode_phreds,
                    decode_solexas,
                    encode_phreds,
                    phred_to_prob,
                    prob_to_phred,
                    solexa_to_prob,
                    prob_to_solexa)
from ..validate import require_equal, require_isinstance

# Each element is one base call: its letter and its Phred score.
QLETTER_DTYPE = np.dtype([("letter", "S1"), ("qual", np.uint8)])
# Each element is the Phred score of one base call.
PHRED_DTYPE = np.dtype(np.uint8)
# Each element is the Solexa score of one base call.
SOLEXA_DTYPE = np.dtype(np.int8)


class Scorer(ABC):
    """ Qualities that can be read and written as probabilities. """

    @property
    @abstractmethod
    def start(self) -> int:
        """ First position (inclusive). """

    @property
    @abstractmethod
    def end(self) -> int:
        """ Last position (exclusive). """

    @abstractmethod
    def e_at(self, i: int) -> float:
        """ Probability that the base call at position `i` is wrong. """

    @abstractmethod
    def set_e(self, i: int, e: float) -> None:
        """ Set the probability that the base call at position `i` is
        wrong; raise an error if the position or value is invalid. """

    def __len__(self):
        return self.end - self.start


class Slicer(ABC):
    """ Container whose internal storage can be accessed directly. """

    @abstractmethod
    def slice(self) -> Any:
        """ Internal storage; modifying it modifies the container. """


def _as_scores(scores: Iterable[int], dtype: np.dtype, lo: int, hi: int):
    array = np.asarray(scores if isinstance(scores, np.ndarray)
                       else list(scores))
    if array.size == 0:
        return np.array([], dtype=dtype)
    if not np.issubdtype(array.dtype, np.integer):
        raise TypeError(f"Quality scores must be integers, "
                        f"but got dtype {array.dtype}")
    if array.ndim != 1:
        raise ValueError(f"Quality scores must be 1-dimensional, "
                         f"but got {array.ndim} dimensions")
    if array.min() < lo or array.max() > hi:
        raise ValueError(f"Quality scores must be in [{lo}, {hi}], "
                         f"but got [{array.min()}, {array.max()}]")
    return array.astype(dtype)


class ArrayScorer(Scorer, Slicer, ABC):
    """ Scorer backed by a NumPy array, with position `offset` stored
    at index 0. """
    __slots__ = "_data", "_offset"

    def __init__(self, data: np.ndarray, offset: int = 0):
        require_isinstance("offset", offset, int)
        self._data = data
        self._offset = offset

    @property
    def start(self):
        return self._offset

    @property
    def end(self):
        return self._offset + self._data.size

    def _index(self, i: int):
        if not self.start <= i < self.end:
            raise IndexError(f"Position {i} is not in "
                             f"[{self.start}, {self.end})")
        return i - self._offset

    def slice(self):
        return self._data

    @property
    @abstractmethod
    def scores(self) -> np.ndarray:
        """ Quality scores (a view into the internal storage). """

    def __eq__(self, other):
        if type(self) is type(other):
            return (self.start == other.start
                    and np.array_equal(self._data, other._data))
        return NotImplemented

    def __repr__(self):
        return f"{type(self).__name__}({self.scores.tolist()})"


class QualSeq(ArrayScorer):
    """ Base calls, each a letter with a Phred score. """

    def __init__(self, seq: str, quals: Iterable[int], offset: int = 0):
        scores = _as_scores(quals, PHRED_DTYPE, LO_PHRED, NAN_PHRED)
        require_equal("len(seq)", len(seq), scores.size, "len(quals)")
        data = np.empty(scores.size, dtype=QLETTER_DTYPE)
        data["letter"] = np.array(list(seq), dtype="S1")
        data["qual"] = scores
        super().__init__(data, offset)

    @classmethod
    def from_fastq(cls, record: FastqRecord, phred_enc: int):
        return cls(record.seq, decode_phreds(record.qual, phred_enc))

    @property
    def seq(self):
        return self._data["letter"].tobytes().decode("ascii")

    @property
    def scores(self):
        return self._data["qual"]

    def e_at(self, i: int):
        return phred_to_prob(int(self.scores[self._index(i)]))

    def set_e(self, i: int, e: float):
        self.scores[self._index(i)] = prob_to_phred(e)

    def format_qual(self, phred_enc: int):
        return encode_phreds(self.scores, phred_enc)


class PhredSeq(ArrayScorer):
    """ Phred scores without letters. """

    def __init__(self, quals: Iterable[int], offset: int = 0):
        super().__init__(_as_scores(quals, PHRED_DTYPE, LO_PHRED, NAN_PHRED),
                         offset)

    @classmethod
    def from_str(cls, quals: str, phred_enc: int):
        return cls(decode_phreds(quals, phred_enc))

    @property
    def scores(self):
        return self._data

    def e_at(self, i: int):
        return phred_to_prob(int(self._data[self._index(i)]))

    def set_e(self, i: int, e: float):
        self._data[self._index(i)] = prob_to_phred(e)

    def format_qual(self, phred_enc: int):
        return encode_phreds(self._data, phred_enc)


class SolexaSeq(ArrayScorer):
    """ Solexa scores without letters. """

    def __init__(self, quals: Iterable[int], offset: int = 0):
        super().__init__(_as_scores(quals, SOLEXA_DTYPE,
                                    MIN_SOLEXA, MAX_SOLEXA),
                         offset)

    @classmethod
    def from_str(cls, quals: str, phred_enc: int):
        return cls(decode_solexas(quals, phred_enc))

    @property
    def scores(self):
        return self._data

    def e_at(self, i: int):
        return solexa_to_prob(int(self._data[self._index(i)]))

    def set_e(self, i: int, e: float):
        self._data[self._index(i)] = prob_to_solexa(e)

    def format_qual(self, phred_enc: int):
        return encode_phreds(self._data, phred_enc)

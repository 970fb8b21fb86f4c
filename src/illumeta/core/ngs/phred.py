"""

Quality Score Core Module

========================================================================

Encode, decode, and convert quality scores. A Phred score Q and the
probability E that a base call is wrong are related by

    Q = -10 log10(E)

and a Solexa score S by

    S = -10 log10(E / (1 - E))

"""

import math

import numpy as np

from ..validate import require_between

# Phred scores.
LO_PHRED = 0
HI_PHRED = 40
# Phred score of a base call with no chance of error.
MAX_PHRED = 254
# Phred score of a base call whose chance of error is undefined.
NAN_PHRED = 255
# Solexa scores in FASTQ files span ASCII ';' to '~' with offset 64.
MIN_SOLEXA = -5
MAX_SOLEXA = 62
# Printable ASCII codes allowed in FASTQ quality strings.
MIN_QUAL_CODE = ord("!")
MAX_QUAL_CODE = ord("~")


def encode_phred(phred_score: int, phred_encoding: int):
    """
    Encode a numeric quality score as an ASCII character.

    Parameters
    ----------
    phred_score : int
        The quality score as an integer.
    phred_encoding : int
        The encoding offset for quality scores. A score is encoded as
        the character whose ASCII value is the sum of the score and the
        encoding offset.

    Returns
    -------
    str
        The character that represents the quality score.
    """
    return chr(phred_score + phred_encoding)


def decode_phred(quality_code: str, phred_encoding: int):
    """
    Decode the ASCII character for a quality score to an integer.

    Parameters
    ----------
    quality_code : str
        The quality score encoded as an ASCII character.
    phred_encoding : int
        The encoding offset for quality scores.

    Returns
    -------
    int
        The quality score represented by the ASCII character.
    """
    return ord(quality_code) - phred_encoding


def _quality_codes(quals: str):
    if not quals:
        return np.array([], dtype=np.int16)
    codes = np.frombuffer(quals.encode("ascii"), dtype=np.uint8)
    if codes.size > 0:
        require_between("quality code",
                        int(codes.min()),
                        MIN_QUAL_CODE,
                        None)
        require_between("quality code",
                        int(codes.max()),
                        None,
                        MAX_QUAL_CODE)
    return codes.astype(np.int16)


def decode_phreds(quals: str, phred_encoding: int):
    """ Decode a string of quality characters into an array of Phred
    scores (dtype uint8). """
    scores = _quality_codes(quals) - phred_encoding
    if scores.size > 0:
        require_between("Phred score", int(scores.min()), LO_PHRED, None)
    return scores.astype(np.uint8)


def decode_solexas(quals: str, phred_encoding: int):
    """ Decode a string of quality characters into an array of Solexa
    scores (dtype int8). """
    scores = _quality_codes(quals) - phred_encoding
    if scores.size > 0:
        require_between("Solexa score",
                        int(scores.min()),
                        MIN_SOLEXA,
                        MAX_SOLEXA)
    return scores.astype(np.int8)


def encode_phreds(scores: np.ndarray, phred_encoding: int):
    """ Encode an array of quality scores as a string of characters. """
    codes = np.asarray(scores, dtype=np.int16) + phred_encoding
    if codes.size > 0:
        require_between("quality code",
                        int(codes.min()),
                        MIN_QUAL_CODE,
                        MAX_QUAL_CODE)
    return codes.astype(np.uint8).tobytes().decode("ascii")


def phred_to_prob(phred: int):
    """ Probability of error of a base call with a Phred score. """
    if phred == MAX_PHRED:
        return 0.
    if phred == NAN_PHRED:
        return math.nan
    return 10. ** (-phred / 10.)


def prob_to_phred(prob: float):
    """ Phred score (rounded to the nearest integer, from 0 to 254) of a
    base call with a probability of error; NaN gives 255. """
    if math.isnan(prob):
        return NAN_PHRED
    if prob <= 0.:
        return MAX_PHRED
    phred = -10. * math.log10(prob) + 0.5
    return min(max(int(phred), LO_PHRED), MAX_PHRED)


def solexa_to_prob(solexa: int):
    """ Probability of error of a base call with a Solexa score. """
    return 1. / (1. + 10. ** (solexa / 10.))


def prob_to_solexa(prob: float):
    """ Solexa score (rounded to the nearest integer, from -5 to 62) of
    a base call with a probability of error. """
    if math.isnan(prob):
        raise ValueError("Cannot convert a NaN probability to a Solexa score")
    if prob <= 0.:
        return MAX_SOLEXA
    if prob >= 1.:
        return MIN_SOLEXA
    solexa = math.floor(-10. * math.log10(prob / (1. - prob)) + 0.5)
    return min(max(solexa, MIN_SOLEXA), MAX_SOLEXA)

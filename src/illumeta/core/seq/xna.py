"""

Sequence Core Module.

========================================================================

Define alphabets of nucleic acid sequences.

"""

from abc import ABC, abstractmethod
from functools import cache

# Nucleic acid sequence alphabets.
BASEA = "A"
BASEC = "C"
BASEG = "G"
BASET = "T"
BASEN = "N"

NUM_BASES = 4


class XNA(ABC):

    @classmethod
    @abstractmethod
    def alph(cls) -> tuple[str, str, str, str, str]:
        """ Sequence alphabet. """

    @classmethod
    @cache
    def four(cls):
        """ Get the four standard bases. """
        four = tuple(n for n in cls.alph() if n != BASEN)
        if len(four) != NUM_BASES:
            raise ValueError(f"Expected {NUM_BASES} bases, but got {four}")
        return four

    @classmethod
    @cache
    def get_fourset(cls):
        """ Get the four standard bases, in both cases, as a set. """
        return frozenset(cls.four()) | frozenset(b.lower() for b in cls.four())

    @classmethod
    def is_definite(cls, text: str):
        """ Whether every character of `text` is one of the four standard
        bases, in upper or lower case; True if `text` is empty. """
        return cls.get_fourset().issuperset(text)


class DNA(XNA):

    @classmethod
    def alph(cls):
        return BASEA, BASEC, BASEN, BASEG, BASET


def is_dna_tag(tag: str):
    """ Whether a multiplex tag consists only of DNA bases (A, C, G, T,
    in either case). """
    return DNA.is_definite(tag)

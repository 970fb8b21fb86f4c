"""

Tests for Sequence Core Module.

========================================================================

"""
import unittest as ut
from string import printable

from illumeta.core.seq.xna import DNA, XNA, is_dna_tag


class TestDNA(ut.TestCase):
    """ Test class `DNA`. """

    def test_alph(self):
        self.assertEqual(DNA.alph(), ("A", "C", "N", "G", "T"))

    def test_four(self):
        self.assertEqual(DNA.four(), ("A", "C", "G", "T"))

    def test_get_fourset(self):
        self.assertEqual(DNA.get_fourset(),
                         {"A", "C", "G", "T", "a", "c", "g", "t"})

    def test_is_definite(self):
        self.assertTrue(DNA.is_definite("ACGTacgt"))
        self.assertFalse(DNA.is_definite("ACGTN"))

    def test_wrong_number_of_bases(self):

        class BadXNA(XNA):

            @classmethod
            def alph(cls):
                return "A", "C", "G", "T", "U"

        self.assertRaisesRegex(ValueError,
                               "Expected 4 bases",
                               BadXNA.four)


class TestIsDnaTag(ut.TestCase):

    def test_valid(self):
        for tag in ["", "A", "ATCACG", "atcacg", "AtCaCg"]:
            with self.subTest(tag=tag):
                self.assertTrue(is_dna_tag(tag))

    def test_invalid(self):
        for char in set(printable) - set("ACGTacgt"):
            with self.subTest(char=char):
                self.assertFalse(is_dna_tag(f"ATC{char}CG"))

    def test_n_is_invalid(self):
        self.assertFalse(is_dna_tag("ATCNCG"))
        self.assertFalse(is_dna_tag("NNNNNN"))


if __name__ == "__main__":
    ut.main(verbosity=2)

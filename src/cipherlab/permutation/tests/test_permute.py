"""Tests for the block codec."""

import unittest

from cipherlab.permutation.key import PermutationKey, invert_permutation
from cipherlab.permutation.permute import (
    apply_permutation,
    apply_to_block,
    chunk_by,
    trim_right_pad,
    unapply_permutation,
)

KEY = [3, 1, 4, 2]
PLAINTEXT = "ENIGMA IS FUN"


class TestChunkBy(unittest.TestCase):
    """Tests for chunk_by."""

    def test_remainder_block(self):
        self.assertEqual(chunk_by(PLAINTEXT, 4), ["ENIG", "MA I", "S FU", "N"])

    def test_exact_multiple(self):
        self.assertEqual(chunk_by("abcdef", 3), ["abc", "def"])

    def test_empty(self):
        for n in [2, 4, 64]:
            self.assertEqual(chunk_by("", n), [])


class TestApplyToBlock(unittest.TestCase):
    """Tests for apply_to_block."""

    def test_full_block(self):
        # E->3, N->1, I->4, G->2
        self.assertEqual(apply_to_block("ENIG", KEY), "NGEI")

    def test_short_block_without_padding_is_unchanged(self):
        self.assertEqual(apply_to_block("N", KEY), "N")
        self.assertEqual(apply_to_block("NU", KEY, "_", False), "NU")

    def test_short_block_with_empty_pad_char_is_unchanged(self):
        self.assertEqual(apply_to_block("N", KEY, "", True), "N")
        self.assertEqual(apply_to_block("N", KEY, None, True), "N")

    def test_short_block_padded(self):
        self.assertEqual(apply_to_block("N", KEY, "_", True), "__N_")

    def test_accepts_permutation_key(self):
        self.assertEqual(apply_to_block("ENIG", PermutationKey(KEY)), "NGEI")


class TestApplyPermutation(unittest.TestCase):
    """Tests for apply_permutation and unapply_permutation."""

    def test_encrypt_without_padding(self):
        self.assertEqual(apply_permutation(PLAINTEXT, KEY), "NGEIAIM  USFN")

    def test_encrypt_with_padding(self):
        self.assertEqual(apply_permutation(PLAINTEXT, KEY, "_", True), "NGEIAIM  USF__N_")

    def test_decrypt_with_inverse_key(self):
        inverse = invert_permutation(KEY)
        self.assertEqual(inverse, [2, 4, 1, 3])
        self.assertEqual(apply_permutation("NGEIAIM  USFN", inverse, "", False), PLAINTEXT)

    def test_round_trip_with_padding_and_trim(self):
        cipher = apply_permutation(PLAINTEXT, KEY, "_", True)
        self.assertEqual(unapply_permutation(cipher, KEY), PLAINTEXT + "___")
        self.assertEqual(unapply_permutation(cipher, KEY, "_", trim_pad=True), PLAINTEXT)

    def test_round_trip_many_keys(self):
        texts = ["", "a", "permutation cipher", "x" * 64, "日本語のテキストも並べ替える"]
        for n in [2, 3, 5, 8, 13]:
            key = PermutationKey.random(n, seed=n)
            for text in texts:
                with self.subTest(n=n, text=text):
                    cipher = apply_permutation(text, key, "#", True)
                    self.assertEqual(len(cipher) % n, 0)
                    self.assertEqual(unapply_permutation(cipher, key, "#", trim_pad=True), text)

    def test_ciphertext_is_a_rearrangement(self):
        cipher = apply_permutation(PLAINTEXT, KEY)
        self.assertEqual(sorted(cipher), sorted(PLAINTEXT))

    def test_empty_text(self):
        self.assertEqual(apply_permutation("", KEY, "_", True), "")


class TestTrimRightPad(unittest.TestCase):
    """Tests for trim_right_pad."""

    def test_trims_suffix(self):
        self.assertEqual(trim_right_pad("abc___", "_"), "abc")

    def test_no_pad_char(self):
        self.assertEqual(trim_right_pad("abc___", ""), "abc___")
        self.assertEqual(trim_right_pad("abc___", None), "abc___")

    def test_only_suffix_is_trimmed(self):
        self.assertEqual(trim_right_pad("_a_b__", "_"), "_a_b")

    def test_all_pad(self):
        self.assertEqual(trim_right_pad("____", "_"), "")

    def test_genuine_trailing_pad_chars_are_lost(self):
        """Suffix padding cannot tell plaintext pad characters from filler."""
        cipher = apply_permutation("LOOK!!", KEY, "!", True)
        self.assertEqual(unapply_permutation(cipher, KEY, "!", trim_pad=True), "LOOK")


if __name__ == "__main__":
    unittest.main()

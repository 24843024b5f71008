"""Tests for random key generation."""

import random
import unittest
from collections import Counter

from cipherlab.permutation.generate import generate_random_permutation
from cipherlab.permutation.key import validate_permutation


class FixedRandom:
    """Random source that always draws the same end of [0, i]."""

    def __init__(self, high: bool):
        self.high = high

    def randint(self, a, b):
        return b if self.high else a


class TestGenerateRandomPermutation(unittest.TestCase):

    def test_always_valid(self):
        rng = random.Random(0)
        for n in range(2, 65):
            with self.subTest(n=n):
                perm = generate_random_permutation(n, rng=rng)
                self.assertEqual(len(perm), n)
                self.assertTrue(validate_permutation(perm).ok)

    def test_seed_is_reproducible(self):
        self.assertEqual(
            generate_random_permutation(16, seed=123),
            generate_random_permutation(16, seed=123),
        )

    def test_too_short(self):
        for n in [-1, 0, 1]:
            with self.assertRaises(ValueError):
                generate_random_permutation(n)

    def test_backward_pass(self):
        """Swapping i with itself every step leaves the identity."""
        self.assertEqual(generate_random_permutation(5, rng=FixedRandom(high=True)), [1, 2, 3, 4, 5])
        # i=3 swaps with 0, then i=2, then i=1
        self.assertEqual(generate_random_permutation(4, rng=FixedRandom(high=False)), [2, 3, 4, 1])

    def test_system_random(self):
        perm = generate_random_permutation(32, rng=random.SystemRandom())
        self.assertTrue(validate_permutation(perm).ok)

    def test_roughly_uniform(self):
        """Each of the 3! keys appears about 1/6 of the time."""
        rng = random.Random(2024)
        counts = Counter(tuple(generate_random_permutation(3, rng=rng)) for _ in range(6000))
        self.assertEqual(len(counts), 6)
        for perm, count in counts.items():
            self.assertGreater(count, 800, perm)
            self.assertLess(count, 1200, perm)


if __name__ == "__main__":
    unittest.main()

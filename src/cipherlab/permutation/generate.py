"""Random permutation keys (Fisher-Yates)."""

import random
from typing import List, Optional


def generate_random_permutation(n: int, seed: Optional[int] = None, rng: Optional[random.Random] = None) -> List[int]:
    """Generate a uniformly random permutation of 1..n.

    Backward Fisher-Yates pass over the identity: for i from n-1 down to 1,
    swap position i with a uniformly drawn j in [0, i].

    Args:
        n: Permutation length (block size), at least 2.
        seed: Random seed for reproducibility. Ignored if rng is given.
        rng: Random source. Pass random.SystemRandom() for key material
            that should not be reproducible.

    Returns:
        List containing a permutation of 1..n.

    Raises:
        ValueError: If n < 2.
    """
    if n < 2:
        raise ValueError(f"Permutation length must be at least 2, got {n}")

    if rng is None:
        rng = random.Random(seed)

    perm = list(range(1, n + 1))
    for i in range(n - 1, 0, -1):
        j = rng.randint(0, i)
        perm[i], perm[j] = perm[j], perm[i]
    return perm

#!/usr/bin/env python3
"""Check that the random key generator is uniform.

Samples many keys and tests two things with chi-square:
  - every value is equally likely at every position (n x n count matrix)
  - for small n, every one of the n! permutations is equally likely

Usage:
    python scripts/check_key_uniformity.py --length 4 --samples 100000 \
        --output_dir plots/key_uniformity
"""

import argparse
import math
import os
import random
from collections import Counter

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
from scipy.stats import chisquare
from tqdm import tqdm

from cipherlab.permutation import generate_random_permutation


def sample_keys(length: int, samples: int, seed: int):
    """Draw keys and count value occurrences per position."""
    py_rng = random.Random(seed)

    position_counts = np.zeros((length, length), dtype=np.int64)
    perm_counts = Counter()
    for _ in tqdm(range(samples), desc=f"Sampling keys (n={length})"):
        perm = generate_random_permutation(length, rng=py_rng)
        position_counts[np.arange(length), np.asarray(perm) - 1] += 1
        perm_counts[tuple(perm)] += 1
    return position_counts, perm_counts


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--length", type=int, default=4)
    parser.add_argument("--samples", type=int, default=100000)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--alpha", type=float, default=0.001,
                        help="Significance level for the chi-square tests")
    parser.add_argument("--output_dir", type=str, default="plots/key_uniformity",
                        help="Directory to save plots")
    args = parser.parse_args()

    os.makedirs(args.output_dir, exist_ok=True)

    position_counts, perm_counts = sample_keys(args.length, args.samples, args.seed)

    # Each row should be flat: value v at position i with probability 1/n
    print(f"\nPer-position chi-square (n={args.length}, samples={args.samples:,})")
    failures = 0
    for i, row in enumerate(position_counts):
        stat, p = chisquare(row)
        flag = "FAIL" if p < args.alpha else "ok"
        failures += p < args.alpha
        print(f"  position {i + 1:>2}: chi2={stat:8.2f}  p={p:.4f}  {flag}")

    if math.factorial(args.length) <= 5040:
        expected = math.factorial(args.length)
        observed = np.array([perm_counts.get(p, 0) for p in sorted(perm_counts)] +
                            [0] * (expected - len(perm_counts)))
        stat, p = chisquare(observed)
        flag = "FAIL" if p < args.alpha else "ok"
        failures += p < args.alpha
        print(f"\nAll {expected} permutations: seen {len(perm_counts)}, chi2={stat:.2f}  p={p:.4f}  {flag}")

    probs = position_counts / position_counts.sum(axis=1, keepdims=True)
    fig, ax = plt.subplots(figsize=(6, 5))
    im = ax.imshow(probs, cmap="viridis", vmin=0, vmax=2.0 / args.length)
    ax.set_xlabel("value")
    ax.set_ylabel("position")
    ax.set_xticks(range(args.length))
    ax.set_xticklabels(range(1, args.length + 1))
    ax.set_yticks(range(args.length))
    ax.set_yticklabels(range(1, args.length + 1))
    ax.set_title(f"P(value | position), n={args.length}")
    fig.colorbar(im, ax=ax)
    fig.tight_layout()
    out_path = os.path.join(args.output_dir, f"position_heatmap_n{args.length}.png")
    fig.savefig(out_path, dpi=150)
    plt.close(fig)
    print(f"\nSaved heatmap to {out_path}")

    print("\nPASS" if failures == 0 else f"\n{failures} test(s) below alpha={args.alpha}")


if __name__ == "__main__":
    main()

"""Permutation module for block transposition.

This module provides the cipher engine: parsing and validating permutation
keys, inverting them, applying them block by block to text, and generating
random keys.
"""

from cipherlab.permutation.errors import (
    CipherLabError,
    InvalidPermutationError,
    KeyStoreError,
    NoKeyError,
    PatternFormatError,
)
from cipherlab.permutation.generate import generate_random_permutation
from cipherlab.permutation.key import (
    PermutationKey,
    ValidationReason,
    ValidationResult,
    build_pattern_string,
    invert_permutation,
    load_key,
    parse_pattern,
    save_key,
    validate_permutation,
)
from cipherlab.permutation.permute import (
    apply_permutation,
    apply_to_block,
    chunk_by,
    trim_right_pad,
    unapply_permutation,
)
from cipherlab.permutation.store import KeyStore, SavedKey

__all__ = [
    "CipherLabError",
    "InvalidPermutationError",
    "KeyStoreError",
    "NoKeyError",
    "PatternFormatError",
    "PermutationKey",
    "ValidationReason",
    "ValidationResult",
    "build_pattern_string",
    "invert_permutation",
    "load_key",
    "parse_pattern",
    "save_key",
    "validate_permutation",
    "generate_random_permutation",
    "apply_permutation",
    "apply_to_block",
    "chunk_by",
    "trim_right_pad",
    "unapply_permutation",
    "KeyStore",
    "SavedKey",
]

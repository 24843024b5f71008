"""Permutation keys: parsing, validation and inversion.

A key is a permutation of 1..n written as a pattern string such as "3-1-4-2".
Position i of a block is sent to position key[i] when encrypting. This module
turns pattern strings into integer sequences, checks that a sequence really is
a permutation, computes inverses, and loads/saves single keys as JSON files.
"""

import json
import re
from collections.abc import Sequence as SequenceABC
from dataclasses import dataclass
from enum import Enum
from numbers import Integral
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from cipherlab.permutation.errors import InvalidPermutationError, PatternFormatError
from cipherlab.permutation.generate import generate_random_permutation

MIN_KEY_LENGTH = 2
MAX_KEY_LENGTH = 64
DEFAULT_KEY_LENGTH = 4

# Hyphen, whitespace, ASCII comma, full-width comma, ideographic comma.
DELIMITERS = "-, ，、"
_SPLIT_RE = re.compile(r"[\s,\-，、]+")
_TRAILING_DELIMITER_RE = re.compile(r"[\s,\-，、]$")


def parse_pattern(text: Optional[str], expected_length: Optional[int] = None) -> Optional[List[int]]:
    """Parse a pattern string into a list of integers.

    Accepts "3-1-4-2", "3 1 4 2", "3,1,4,2" and any mixture of the supported
    delimiters. A token is accepted only if it survives an int/str round trip,
    so "01", "+1" and "1.0" are rejected.

    Args:
        text: The pattern string.
        expected_length: If given, the number of integers required.

    Returns:
        The parsed integers, or None if the string is malformed.
    """
    if not text:
        return None

    trimmed = text.strip()
    if not trimmed or _TRAILING_DELIMITER_RE.search(trimmed):
        return None

    numbers = []
    for token in _SPLIT_RE.split(trimmed):
        if not token:
            continue
        try:
            value = int(token, 10)
        except ValueError:
            return None
        if str(value) != token:
            return None
        numbers.append(value)

    if expected_length and len(numbers) != expected_length:
        return None
    return numbers


def build_pattern_string(perm: Sequence[int]) -> str:
    """Serialize a permutation to its canonical hyphen-joined form."""
    return "-".join(str(v) for v in perm)


class ValidationReason(Enum):
    """Why a candidate sequence is not a permutation, in checking order."""

    TOO_SHORT = "pattern too short"
    NOT_POSITIVE_INTEGER = "non-positive or non-integer values"
    OUT_OF_RANGE = "values out of range"
    DUPLICATE = "duplicate values"
    MISSING = "missing values"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validate_permutation.

    Attributes:
        ok: True if the candidate is a permutation of 1..n.
        reason: The first failing check, or None on success.
        values: The offending values for that check.
        length: Length of the candidate (0 if it was not a sequence).
    """
    ok: bool
    reason: Optional[ValidationReason] = None
    values: Tuple[Any, ...] = ()
    length: int = 0

    @classmethod
    def success(cls, length: int) -> "ValidationResult":
        return cls(ok=True, length=length)

    @classmethod
    def failure(cls, reason: ValidationReason, values=(), length: int = 0) -> "ValidationResult":
        return cls(ok=False, reason=reason, values=tuple(values), length=length)

    def __bool__(self) -> bool:
        return self.ok

    @property
    def message(self) -> str:
        """Human-readable diagnostic listing the offending values."""
        if self.ok:
            return "valid permutation"
        listed = ", ".join(str(v) for v in self.values)
        if self.reason is ValidationReason.TOO_SHORT:
            return f"Pattern too short: specify a pattern of length {MIN_KEY_LENGTH} or more"
        if self.reason is ValidationReason.NOT_POSITIVE_INTEGER:
            return f"Non-positive or non-integer values: {listed} (only integers >= 1 are allowed)"
        if self.reason is ValidationReason.OUT_OF_RANGE:
            return f"Values out of range: {listed} (only values 1-{self.length} are allowed)"
        if self.reason is ValidationReason.DUPLICATE:
            return f"Duplicate values: {listed}"
        return f"Missing values: {listed}"


def _is_integer(value: Any) -> bool:
    # numpy integer scalars register as Integral
    return isinstance(value, Integral) and not isinstance(value, bool)


def validate_permutation(candidate: Any) -> ValidationResult:
    """Check that a sequence is a permutation of 1..n.

    Checks run in a fixed order and only the first failing category is
    reported, with every offending value in that category.

    Args:
        candidate: The sequence to check.

    Returns:
        ValidationResult describing the outcome.
    """
    if isinstance(candidate, (str, bytes)):
        return ValidationResult.failure(ValidationReason.TOO_SHORT)
    if not isinstance(candidate, SequenceABC):
        if not hasattr(candidate, "tolist"):
            return ValidationResult.failure(ValidationReason.TOO_SHORT)
        candidate = candidate.tolist()
        if not isinstance(candidate, list):
            return ValidationResult.failure(ValidationReason.TOO_SHORT)

    n = len(candidate)
    if n < MIN_KEY_LENGTH:
        return ValidationResult.failure(ValidationReason.TOO_SHORT, length=n)

    bad = [x for x in candidate if not _is_integer(x) or x < 1]
    if bad:
        return ValidationResult.failure(ValidationReason.NOT_POSITIVE_INTEGER, bad, n)

    out_of_range = list(dict.fromkeys(x for x in candidate if x > n))
    if out_of_range:
        return ValidationResult.failure(ValidationReason.OUT_OF_RANGE, out_of_range, n)

    seen = set()
    duplicates = []
    for x in candidate:
        if x in seen and x not in duplicates:
            duplicates.append(x)
        seen.add(x)
    if len(seen) != n:
        return ValidationResult.failure(ValidationReason.DUPLICATE, duplicates, n)

    missing = [i for i in range(1, n + 1) if i not in seen]
    if missing:
        return ValidationResult.failure(ValidationReason.MISSING, missing, n)

    return ValidationResult.success(n)


def invert_permutation(perm: Sequence[int]) -> List[int]:
    """Compute the inverse of a validated permutation.

    If perm[i] = j (1-based) then inverse[j] = i.

    Example:
        >>> invert_permutation([3, 1, 4, 2])
        [2, 4, 1, 3]
    """
    inverse = [0] * len(perm)
    for i, j in enumerate(perm):
        inverse[j - 1] = i + 1
    return inverse


@dataclass(frozen=True)
class PermutationKey:
    """A validated permutation key.

    Construction always validates, so any PermutationKey instance is a
    permutation of 1..n with n >= 2.

    Attributes:
        values: The permutation, 1-based.
    """
    values: Tuple[int, ...]

    def __post_init__(self):
        values = tuple(self.values)
        result = validate_permutation(values)
        if not result.ok:
            raise InvalidPermutationError(result)
        object.__setattr__(self, "values", tuple(int(v) for v in values))

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self):
        return iter(self.values)

    def __getitem__(self, index):
        return self.values[index]

    def __str__(self) -> str:
        return self.to_pattern()

    @property
    def size(self) -> int:
        """Block size the key operates on."""
        return len(self.values)

    def inverse(self) -> "PermutationKey":
        return PermutationKey(invert_permutation(self.values))

    def to_pattern(self) -> str:
        return build_pattern_string(self.values)

    def to_list(self) -> List[int]:
        return list(self.values)

    def to_dict(self) -> Dict[str, str]:
        return {"pattern": self.to_pattern()}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "PermutationKey":
        return cls.from_pattern(d["pattern"])

    @classmethod
    def from_pattern(cls, text: Optional[str], expected_length: Optional[int] = None) -> "PermutationKey":
        """Parse and validate a pattern string.

        Raises:
            PatternFormatError: If the string does not parse.
            InvalidPermutationError: If the integers are not a permutation.
        """
        numbers = parse_pattern(text, expected_length)
        if numbers is None:
            raise PatternFormatError(text, expected_length)
        return cls(numbers)

    @classmethod
    def from_list(cls, values: Sequence[int]) -> "PermutationKey":
        """Build a key from an ordered arrangement of integers."""
        return cls(values)

    @classmethod
    def random(cls, n: int, seed: Optional[int] = None, rng=None) -> "PermutationKey":
        """Generate a uniformly random key of size n."""
        return cls(generate_random_permutation(n, seed=seed, rng=rng))


def clamp_key_length(length: Optional[Union[int, str]]) -> int:
    """Clamp a requested key length to [MIN_KEY_LENGTH, MAX_KEY_LENGTH].

    Missing or unparseable lengths fall back to DEFAULT_KEY_LENGTH.
    """
    try:
        n = int(length) if length is not None else 0
    except (TypeError, ValueError):
        n = 0
    if not n:
        n = DEFAULT_KEY_LENGTH
    return max(MIN_KEY_LENGTH, min(MAX_KEY_LENGTH, n))


def load_key(path: str) -> PermutationKey:
    """Load a permutation key from a JSON file.

    Args:
        path: Path to the JSON key file, e.g. {"pattern": "3-1-4-2"}.

    Returns:
        PermutationKey object.

    Raises:
        FileNotFoundError: If the key file doesn't exist.
        json.JSONDecodeError: If the file is not valid JSON.
        PatternFormatError: If the stored pattern does not parse.
        InvalidPermutationError: If the stored pattern is not a permutation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Key file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if "pattern" not in data:
        raise PatternFormatError(None)
    return PermutationKey.from_dict(data)


def save_key(key: PermutationKey, path: str) -> None:
    """Save a permutation key to a JSON file.

    Args:
        key: The permutation key to save.
        path: Path where to save the JSON file.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(key.to_dict(), f, indent=2)

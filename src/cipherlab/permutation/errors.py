"""Exceptions raised at the trusted-key and storage boundaries."""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from cipherlab.permutation.key import ValidationResult


class CipherLabError(Exception):
    """Base class for all CipherLab errors."""


class PatternFormatError(CipherLabError, ValueError):
    """A pattern string could not be parsed into integers."""

    def __init__(self, text: Optional[str], expected_length: Optional[int] = None):
        self.text = text
        self.expected_length = expected_length
        if expected_length:
            msg = (
                f"Invalid pattern {text!r}: expected {expected_length} integers "
                f"separated by '-', ',' or spaces (e.g. 3-1-4-2)"
            )
        else:
            msg = f"Invalid pattern {text!r} (e.g. 3-1-4-2)"
        super().__init__(msg)


class InvalidPermutationError(CipherLabError, ValueError):
    """A sequence of integers is not a permutation of 1..n."""

    def __init__(self, result: "ValidationResult"):
        self.result = result
        super().__init__(result.message)


class KeyStoreError(CipherLabError):
    """A saved key entry could not be added, found or removed."""


class NoKeyError(CipherLabError):
    """An operation needs a current key but none has been set."""

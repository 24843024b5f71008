"""Session state for interactive use.

The cipher functions are pure and take the key explicitly. A CipherSession
holds the one piece of state the application needs between calls (the
current key) and the block-by-block views of the last encrypt/decrypt run.
"""

import logging
from dataclasses import dataclass, field
from itertools import zip_longest
from typing import List, Optional, Sequence, Tuple

from cipherlab.permutation.errors import NoKeyError, PatternFormatError
from cipherlab.permutation.key import PermutationKey, clamp_key_length, parse_pattern
from cipherlab.permutation.permute import apply_permutation, chunk_by, unapply_permutation
from cipherlab.permutation.visualize import mapping_table

logger = logging.getLogger(__name__)

DEFAULT_PATTERN = "3-1-4-2"
DEFAULT_PLAINTEXT = "ENIGMA IS FUN"


@dataclass
class BlockView:
    """Input and output of one block of the last run."""
    index: int
    before: str
    after: str
    direction: str = "forward"

    def rows(self) -> List[Tuple[int, str, str]]:
        return mapping_table(self.before, self.after, self.direction)


@dataclass
class CipherSession:
    """Current key plus the block views of the most recent operation."""
    current_key: Optional[PermutationKey] = None
    blocks: List[BlockView] = field(default_factory=list)

    @classmethod
    def with_defaults(cls) -> "CipherSession":
        return cls(current_key=PermutationKey.from_pattern(DEFAULT_PATTERN))

    def _require_key(self) -> PermutationKey:
        if self.current_key is None:
            raise NoKeyError("No key set: generate or enter a key first")
        return self.current_key

    def set_key(self, key: Optional[PermutationKey]) -> None:
        self.current_key = key
        self.blocks = []
        if key is not None:
            logger.debug("Current key set to %s (block size %d)", key, key.size)

    def clear_key(self) -> None:
        self.set_key(None)

    def set_key_from_pattern(self, text: str, expected_length: Optional[int] = None) -> PermutationKey:
        """Parse, length-check and validate a typed pattern.

        Raises:
            PatternFormatError: Empty or malformed pattern, or wrong length.
            InvalidPermutationError: Not a permutation of 1..n.
        """
        perm = parse_pattern(text)
        if perm is None:
            raise PatternFormatError(text)
        if expected_length and len(perm) != expected_length:
            raise PatternFormatError(text, expected_length)
        key = PermutationKey(perm)
        self.set_key(key)
        return key

    def set_key_from_arrangement(self, values: Sequence[int]) -> PermutationKey:
        """Use a rearranged sequence of 1..n (e.g. from a drag-and-drop editor)."""
        key = PermutationKey.from_list(values)
        self.set_key(key)
        return key

    def generate_key(self, length=None, seed: Optional[int] = None) -> PermutationKey:
        """Generate a random key; the length is clamped to the supported range."""
        key = PermutationKey.random(clamp_key_length(length), seed=seed)
        self.set_key(key)
        return key

    def encrypt(self, text: str, pad_char: Optional[str] = "", pad_enabled: bool = False) -> str:
        """Encrypt with the current key and record per-block views.

        Raises:
            NoKeyError: If no key is set.
        """
        key = self._require_key()
        pad_char = (pad_char or "")[:1]
        output = apply_permutation(text, key, pad_char, pad_enabled)
        self.blocks = [
            BlockView(i, before, after, "forward")
            for i, (before, after) in enumerate(zip(chunk_by(text, key.size), chunk_by(output, key.size)))
        ]
        logger.debug("Encrypted %d characters in %d blocks", len(text), len(self.blocks))
        return output

    def decrypt(self, text: str, pad_char: Optional[str] = "", trim_pad: bool = False) -> str:
        """Decrypt with the inverse of the current key.

        Raises:
            NoKeyError: If no key is set.
        """
        key = self._require_key()
        pad_char = (pad_char or "")[:1]
        output = unapply_permutation(text, key, pad_char, trim_pad)
        pairs = zip_longest(chunk_by(output, key.size), chunk_by(text, key.size), fillvalue="")
        self.blocks = [BlockView(i, plain, cipher, "reverse") for i, (plain, cipher) in enumerate(pairs)]
        logger.debug("Decrypted %d characters in %d blocks", len(text), len(self.blocks))
        return output

    @property
    def block_count(self) -> int:
        return len(self.blocks)

    def block(self, index: int) -> BlockView:
        """Block view of the last run.

        Raises:
            IndexError: If index is outside [0, block_count).
        """
        if not 0 <= index < len(self.blocks):
            raise IndexError(f"Block {index} out of range (0-{len(self.blocks) - 1})")
        return self.blocks[index]

"""Apply and reverse block permutations on text.

Text is cut into blocks of len(key) characters. Within each block the
character at position i moves to position key[i] - 1. Decryption applies the
inverse key with padding disabled.

None of these functions re-validate the key; pass a PermutationKey or a
sequence that already passed validate_permutation.
"""

from typing import TYPE_CHECKING, List, Optional, Sequence, Union

from cipherlab.permutation.key import invert_permutation

if TYPE_CHECKING:
    from cipherlab.permutation.key import PermutationKey

KeyLike = Union["PermutationKey", Sequence[int]]


def chunk_by(text: str, size: int) -> List[str]:
    """Split text into consecutive blocks of `size` characters.

    The final block holds the remainder and is absent when len(text) is a
    multiple of size.
    """
    return [text[i:i + size] for i in range(0, len(text), size)]


def apply_to_block(block: str, perm: KeyLike, pad_char: Optional[str] = "", pad_enabled: bool = False) -> str:
    """Permute a single block.

    A block shorter than the key is right-padded with pad_char when padding
    is enabled. Without padding (or with an empty pad_char) a short block is
    returned unchanged: partial blocks are never permuted.

    Args:
        block: Input block, at most len(perm) characters.
        perm: Permutation key (1-based).
        pad_char: Padding character.
        pad_enabled: Whether to pad a short block.

    Returns:
        The permuted block.
    """
    n = len(perm)
    if len(block) < n:
        if pad_enabled and pad_char:
            block = block + pad_char * (n - len(block))
        else:
            return block

    out = [""] * n
    for i in range(n):
        out[perm[i] - 1] = block[i]
    return "".join(out)


def apply_permutation(text: str, perm: KeyLike, pad_char: Optional[str] = "", pad_enabled: bool = False) -> str:
    """Encrypt text block by block with a permutation key.

    Args:
        text: Input text.
        perm: Permutation key (1-based).
        pad_char: Padding character for a short final block.
        pad_enabled: Whether to pad a short final block.

    Returns:
        The permuted text.
    """
    n = len(perm)
    return "".join(apply_to_block(block, perm, pad_char, pad_enabled) for block in chunk_by(text, n))


def trim_right_pad(text: str, pad_char: Optional[str]) -> str:
    """Remove the longest suffix made only of pad_char.

    Trailing pad characters that belonged to the plaintext are removed too;
    suffix padding cannot tell them apart.
    """
    if not pad_char:
        return text
    i = len(text) - 1
    while i >= 0 and text[i] == pad_char:
        i -= 1
    return text[:i + 1]


def unapply_permutation(text: str, perm: KeyLike, pad_char: Optional[str] = "", trim_pad: bool = False) -> str:
    """Decrypt text encrypted with apply_permutation(text, perm, ...).

    Applies the inverse key with padding disabled, then optionally strips
    trailing pad characters.

    Args:
        text: Ciphertext.
        perm: The key used for encryption (not its inverse).
        pad_char: Padding character used at encryption time.
        trim_pad: Whether to strip trailing pad characters.

    Returns:
        The recovered plaintext.
    """
    inverse = invert_permutation(list(perm))
    out = apply_permutation(text, inverse, "", False)
    if trim_pad:
        out = trim_right_pad(out, pad_char)
    return out

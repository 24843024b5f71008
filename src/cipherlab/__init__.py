"""CipherLab: an educational block permutation (transposition) cipher.

Text is split into blocks of n characters and each block is reordered by a
permutation key of 1..n. Decryption applies the inverse key.

Modules:
    permutation: Key parsing/validation, block codec, key generation and storage
    session: Current-key state and block views for the CLI
    cli: Command-line interface
"""

__version__ = "0.1.0"

"""Command-line interface for the permutation cipher.

Usage:
    cipherlab keygen --length 8 --save demo
    cipherlab validate "3-1-4-2"
    cipherlab encrypt --key 3-1-4-2 --text "ENIGMA IS FUN" --pad --pad_char _
    cipherlab decrypt --name demo --text "IEGN..." --pad_char _ --trim_pad
    cipherlab show 3-1-4-2 --plot key.png
    cipherlab keys list
"""

import argparse
import logging
import sys
from typing import List, Optional

from cipherlab.permutation.errors import CipherLabError
from cipherlab.permutation.key import PermutationKey, clamp_key_length, load_key, save_key
from cipherlab.permutation.store import KeyStore
from cipherlab.permutation.visualize import (
    animation_steps,
    format_mapping_table,
    plot_key,
    render_key_diagram,
)
from cipherlab.session import CipherSession

logger = logging.getLogger(__name__)


def _add_key_source(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--key", type=str, help="Key pattern, e.g. 3-1-4-2")
    group.add_argument("--name", type=str, help="Name of a saved key")
    group.add_argument("--key_path", type=str, help="Path to a JSON key file")


def _add_text_source(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--text", type=str, default=None,
                        help="Input text (read from stdin if omitted)")
    parser.add_argument("--blocks", action="store_true",
                        help="Print the mapping table of every block")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="cipherlab", description="Block permutation cipher lab")
    parser.add_argument("--store", type=str, default=None,
                        help="Saved key file (default: $CIPHERLAB_STORE or ~/.cipherlab/keys.json)")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("keygen", help="Generate a random key")
    p.add_argument("--length", type=int, default=None, help="Key length, clamped to 2-64 (default: 4)")
    p.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    p.add_argument("--save", type=str, default=None, help="Save the key under this name")
    p.add_argument("--output", type=str, default=None, help="Also write the key to a JSON file")

    p = sub.add_parser("validate", help="Check a key pattern")
    p.add_argument("pattern", type=str)
    p.add_argument("--length", type=int, default=None, help="Required key length")

    p = sub.add_parser("encrypt", help="Encrypt text")
    _add_key_source(p)
    _add_text_source(p)
    p.add_argument("--pad", action="store_true", help="Pad a short final block")
    p.add_argument("--pad_char", type=str, default="", help="Padding character")
    p.add_argument("--demo", action="store_true",
                   help="Show the step-by-step placement for the first block")

    p = sub.add_parser("decrypt", help="Decrypt text")
    _add_key_source(p)
    _add_text_source(p)
    p.add_argument("--pad_char", type=str, default="", help="Padding character used to encrypt")
    p.add_argument("--trim_pad", action="store_true", help="Strip trailing padding characters")

    p = sub.add_parser("show", help="Show forward and inverse diagrams of a key")
    p.add_argument("pattern", type=str)
    p.add_argument("--plot", type=str, default=None, help="Save a figure of the key to this path")

    p = sub.add_parser("keys", help="Manage saved keys")
    keys_sub = p.add_subparsers(dest="keys_command", required=True)
    keys_sub.add_parser("list", help="List saved keys")
    kp = keys_sub.add_parser("save", help="Save a key pattern under a name")
    kp.add_argument("name", type=str)
    kp.add_argument("pattern", type=str)
    kp = keys_sub.add_parser("delete", help="Delete a saved key")
    kp.add_argument("name", type=str)

    return parser.parse_args(argv)


def _resolve_key(args: argparse.Namespace, store: KeyStore) -> PermutationKey:
    if args.key is not None:
        return PermutationKey.from_pattern(args.key)
    if args.name is not None:
        return PermutationKey.from_pattern(store.get(args.name).pattern)
    return load_key(args.key_path)


def _read_text(args: argparse.Namespace) -> str:
    if args.text is not None:
        return args.text
    text = sys.stdin.read()
    # Only the newline the shell adds; the text itself may end in newlines.
    return text[:-1] if text.endswith("\n") else text


def _print_blocks(session: CipherSession, headers) -> None:
    for view in session.blocks:
        print(f"\nBlock {view.index + 1} / {session.block_count}")
        print(format_mapping_table(view.rows(), headers))


def cmd_keygen(args, store: KeyStore) -> int:
    session = CipherSession()
    n = clamp_key_length(args.length)
    if args.length is not None and n != args.length:
        logger.warning("Key length %d clamped to %d", args.length, n)
    key = session.generate_key(n, seed=args.seed)
    print(key.to_pattern())
    print(f"inverse: {key.inverse().to_pattern()}")
    if args.save:
        store.add(args.save, key.to_pattern())
        print(f"Saved as {args.save!r}")
    if args.output:
        save_key(key, args.output)
        print(f"Wrote key to {args.output}")
    return 0


def cmd_validate(args, store: KeyStore) -> int:
    session = CipherSession()
    key = session.set_key_from_pattern(args.pattern, args.length)
    print(f"Valid key (length {key.size}): {key.to_pattern()}")
    return 0


def cmd_encrypt(args, store: KeyStore) -> int:
    session = CipherSession()
    session.set_key(_resolve_key(args, store))
    text = _read_text(args)
    if args.demo and len(text) < session.current_key.size:
        raise ValueError(f"Text needs at least {session.current_key.size} characters for a demo, got {len(text)}")
    print(session.encrypt(text, args.pad_char, args.pad))
    if args.blocks:
        _print_blocks(session, ("#", "plain", "cipher"))
    if args.demo:
        print()
        for step in animation_steps(text[:session.current_key.size], session.current_key):
            print(f"{step.position}: {step.char!r} -> position {step.destination}")
    return 0


def cmd_decrypt(args, store: KeyStore) -> int:
    session = CipherSession()
    session.set_key(_resolve_key(args, store))
    print(session.decrypt(_read_text(args), args.pad_char, args.trim_pad))
    if args.blocks:
        _print_blocks(session, ("#", "cipher", "plain"))
    return 0


def cmd_show(args, store: KeyStore) -> int:
    key = PermutationKey.from_pattern(args.pattern)
    print(render_key_diagram(key))
    if args.plot:
        plot_key(key, args.plot)
        print(f"Saved plot to {args.plot}")
    return 0


def cmd_keys(args, store: KeyStore) -> int:
    if args.keys_command == "list":
        entries = store.load()
        if not entries:
            print("(no saved keys)")
        for entry in entries:
            print(f"{entry.name}\t{entry.pattern}")
    elif args.keys_command == "save":
        key = PermutationKey.from_pattern(args.pattern)
        store.add(args.name, key.to_pattern())
        print(f"Saved {args.name!r}: {key.to_pattern()}")
    else:
        store.remove(args.name)
        print(f"Deleted {args.name!r}")
    return 0


COMMANDS = {
    "keygen": cmd_keygen,
    "validate": cmd_validate,
    "encrypt": cmd_encrypt,
    "decrypt": cmd_decrypt,
    "show": cmd_show,
    "keys": cmd_keys,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    store = KeyStore(args.store)
    try:
        return COMMANDS[args.command](args, store)
    except (CipherLabError, ValueError, FileNotFoundError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

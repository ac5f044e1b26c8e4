"""Command-line interface for tinyland-base58.

Provides subcommands:
  encode    - Base58-encode data from stdin
  decode    - Base58-decode data from stdin
  alphabets - List the built-in alphabets

The alphabet comes from --alphabet, then --alphabet-name, then the
TINYLAND_B58_ALPHABET environment variable, then the Bitcoin alphabet.

Exit codes:
    0 - Success
    3 - Invalid input or alphabet
"""

import argparse
import logging
import os
import shutil
import sys

from tinyland_base58.base58 import (
    ALPHABETS,
    BITCOIN_ALPHABET,
    Encoding,
    InvalidAlphabetError,
    InvalidCharacterError,
)
from tinyland_base58.stream import new_encoder

logger = logging.getLogger(__name__)

ALPHABET_ENV = "TINYLAND_B58_ALPHABET"


def _resolve_encoding(args) -> Encoding:
    """Build the codec selected by CLI arguments or the environment.

    Exits with code 3 when the alphabet is invalid.
    """
    if getattr(args, "alphabet", None):
        alphabet, origin = args.alphabet, "--alphabet"
    elif getattr(args, "alphabet_name", None):
        alphabet, origin = ALPHABETS[args.alphabet_name], args.alphabet_name
    elif os.environ.get(ALPHABET_ENV):
        alphabet, origin = os.environ[ALPHABET_ENV], ALPHABET_ENV
    else:
        alphabet, origin = BITCOIN_ALPHABET, "default"

    try:
        encoding = Encoding(alphabet)
    except InvalidAlphabetError as exc:
        print(f"error: {exc} (from {origin})", file=sys.stderr)
        sys.exit(3)
    logger.debug("using alphabet from %s", origin)
    return encoding


# ---------------------------------------------------------------------------
# Subcommand handlers
# ---------------------------------------------------------------------------


def cmd_encode(args) -> int:
    """Handle the 'encode' subcommand -- reads stdin, writes base58."""
    encoding = _resolve_encoding(args)
    with new_encoder(encoding, sys.stdout) as encoder:
        shutil.copyfileobj(sys.stdin.buffer, encoder)
    if args.newline:
        sys.stdout.write("\n")
    return 0


def cmd_decode(args) -> int:
    """Handle the 'decode' subcommand -- reads stdin, writes decoded."""
    encoding = _resolve_encoding(args)
    encoded = sys.stdin.read().strip()
    if not encoded:
        return 0
    try:
        decoded = encoding.decode_string(encoded)
    except InvalidCharacterError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 3
    sys.stdout.buffer.write(decoded)
    return 0


def cmd_alphabets(args) -> int:
    """Handle the 'alphabets' subcommand."""
    for name in sorted(ALPHABETS):
        print(f"{name}\t{ALPHABETS[name]}")
    return 0


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def _add_alphabet_args(parser: argparse.ArgumentParser) -> None:
    """Add the alphabet selection arguments to a subparser."""
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--alphabet",
        default=None,
        help="Literal 58-character alphabet to use",
    )
    group.add_argument(
        "--alphabet-name",
        choices=sorted(ALPHABETS),
        default=None,
        help=f"Built-in alphabet to use (default: ${ALPHABET_ENV} or bitcoin)",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="tinyland-base58",
        description="Base58 encoder/decoder with configurable alphabets",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__import__('tinyland_base58').__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug details to stderr",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # -- encode --
    p_enc = sub.add_parser("encode", help="Base58-encode data from stdin")
    _add_alphabet_args(p_enc)
    p_enc.add_argument(
        "--newline",
        action="store_true",
        help="Terminate the output with a newline",
    )
    p_enc.set_defaults(func=cmd_encode)

    # -- decode --
    p_dec = sub.add_parser("decode", help="Base58-decode data from stdin")
    _add_alphabet_args(p_dec)
    p_dec.set_defaults(func=cmd_decode)

    # -- alphabets --
    p_alpha = sub.add_parser("alphabets", help="List the built-in alphabets")
    p_alpha.set_defaults(func=cmd_alphabets)

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    return args.func(args)

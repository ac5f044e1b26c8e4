"""Tinyland Base58 - byte-array base58 codec with configurable alphabets.

Converts between raw bytes and base58 text by long division over byte
arrays. Provides an importable codec, whole-buffer stream adapters and a
small CLI for encoding and decoding on stdin/stdout.
"""

__version__ = "0.1.0"

from tinyland_base58.base58 import (  # noqa: F401
    ALPHABETS,
    BITCOIN_ALPHABET,
    FLICKR_ALPHABET,
    FLICKR_ENCODING,
    STD_ENCODING,
    Base58Error,
    Encoding,
    InvalidAlphabetError,
    InvalidCharacterError,
    b58decode,
    b58decode_str,
    b58encode,
    b58encode_str,
    divmod_digits,
    new_encoding,
    standard_encoding,
)
from tinyland_base58.stream import (  # noqa: F401
    Base58Decoder,
    Base58Encoder,
    new_decoder,
    new_encoder,
)
from tinyland_base58.cli import main  # noqa: F401

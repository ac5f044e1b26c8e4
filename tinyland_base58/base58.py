"""Base58 codec with configurable alphabets.

Numbers are converted between base 256 and base 58 by repeated long division
over byte arrays, so the payload is never turned into one big integer.
Leading zero bytes survive the round trip as leading zero symbols.

The module-level ``b58*`` helpers use the Bitcoin alphabet; build an
:class:`Encoding` for any other 58-symbol alphabet.
"""

from typing import Tuple, Union

BITCOIN_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
FLICKR_ALPHABET = "123456789abcdefghijkmnopqrstuvwxyzABCDEFGHJKLMNPQRSTUVWXYZ"

ALPHABETS = {
    "bitcoin": BITCOIN_ALPHABET,
    "flickr": FLICKR_ALPHABET,
}

ALPHABET_SIZE = 58

# Marks byte values that are not part of the alphabet in the reverse table.
_INVALID = -1

BytesLike = Union[bytes, bytearray, memoryview]


class Base58Error(Exception):
    """Base exception for base58 operations."""


class InvalidAlphabetError(Base58Error, ValueError):
    """Raised when an alphabet is not 58 distinct single-byte symbols."""


class InvalidCharacterError(Base58Error, ValueError):
    """Raised when decoding meets a symbol that is not in the alphabet.

    ``char`` is the offending byte value (or code point, for text input) and
    ``position`` its index in the decoded input.
    """

    def __init__(self, char: int, position: int) -> None:
        self.char = char
        self.position = position
        super().__init__(
            f"Invalid base58 character {chr(char)!r} at position {position}"
        )

    def __reduce__(self):
        return type(self), (self.char, self.position)


def _as_bytes(data, what: str = "Input") -> bytes:
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"{what} must be bytes")
    return bytes(data)


def divmod_digits(digits: BytesLike, base_in: int, divisor: int) -> Tuple[bytearray, int]:
    """Long-divide a big-endian digit array in ``base_in`` by ``divisor``.

    Returns the quotient as digits in the same base, without leading zero
    digits, and the remainder. Calling this repeatedly on its own quotient
    yields the digits of the number in base ``divisor``, least significant
    first.
    """
    quotient = bytearray()
    remainder = 0
    for digit in digits:
        acc = digit + remainder * base_in
        q, remainder = divmod(acc, divisor)
        if quotient or q:
            quotient.append(q)
    return quotient, remainder


def _rebase(number: bytearray, base_in: int, base_out: int) -> bytearray:
    """Return ``number`` as base ``base_out`` digits, least significant first.

    ``number`` must not carry leading zero digits.
    """
    out = bytearray()
    while number:
        number, remainder = divmod_digits(number, base_in, base_out)
        out.append(remainder)
    return out


def _leading_zeros(data: BytesLike) -> int:
    return len(data) - len(data.lstrip(b"\x00"))


class Encoding:
    """A base58 codec built from one 58-symbol alphabet.

    The forward table maps digit values 0-57 to symbol bytes and the reverse
    table maps every byte value to its digit, or -1 when the byte is not a
    symbol. Both tables are fixed at construction, so an instance can be
    shared freely between threads.

    Raises:
        InvalidAlphabetError: If the alphabet is not exactly 58 distinct
            single-byte symbols.
    """

    def __init__(self, alphabet: Union[str, bytes]) -> None:
        if isinstance(alphabet, str):
            try:
                alphabet = alphabet.encode("latin-1")
            except UnicodeEncodeError as exc:
                raise InvalidAlphabetError(
                    "base58 alphabet must contain single-byte characters only"
                ) from exc
        else:
            alphabet = _as_bytes(alphabet, "Alphabet")

        if len(alphabet) != ALPHABET_SIZE:
            raise InvalidAlphabetError(
                f"base58 alphabet must be {ALPHABET_SIZE} characters, got {len(alphabet)}"
            )
        if len(set(alphabet)) != ALPHABET_SIZE:
            raise InvalidAlphabetError("base58 alphabet must not repeat characters")

        reverse = [_INVALID] * 256
        for value, symbol in enumerate(alphabet):
            reverse[symbol] = value

        self._encode_table = alphabet
        self._decode_table = tuple(reverse)

    @property
    def alphabet(self) -> str:
        return self._encode_table.decode("latin-1")

    @property
    def encode_table(self) -> bytes:
        return self._encode_table

    @property
    def decode_table(self) -> Tuple[int, ...]:
        return self._decode_table

    def __repr__(self) -> str:
        return f"Encoding({self.alphabet!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Encoding):
            return NotImplemented
        return self._encode_table == other._encode_table

    def __hash__(self) -> int:
        return hash(self._encode_table)

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------

    def encode_to_bytes(self, src: BytesLike) -> bytes:
        """Encode ``src`` and return the symbols as bytes."""
        data = _as_bytes(src)
        zeros = _leading_zeros(data)

        digits = _rebase(bytearray(data[zeros:]), 256, ALPHABET_SIZE)
        digits.extend(bytes(zeros))
        digits.reverse()

        table = self._encode_table
        return bytes(table[d] for d in digits)

    def encode_to_string(self, src: BytesLike) -> str:
        """Encode ``src`` and return the symbols as a string."""
        return self.encode_to_bytes(src).decode("latin-1")

    def encode(self, dst: Union[bytearray, memoryview], src: BytesLike) -> int:
        """Encode ``src`` into the caller's buffer ``dst``.

        Copies as many symbols as ``dst`` can hold and returns the full
        encoded length; a return value larger than ``len(dst)`` means the
        output was truncated.
        """
        encoded = self.encode_to_bytes(src)
        n = min(len(dst), len(encoded))
        dst[:n] = encoded[:n]
        return len(encoded)

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------

    def decode_to_bytes(self, src: BytesLike) -> bytes:
        """Decode the symbol bytes ``src``.

        Raises:
            InvalidCharacterError: On the first symbol not in the alphabet.
        """
        data = _as_bytes(src)
        table = self._decode_table

        digits = bytearray(len(data))
        for position, char in enumerate(data):
            value = table[char]
            if value == _INVALID:
                raise InvalidCharacterError(char, position)
            digits[position] = value

        zeros = _leading_zeros(digits)
        out = _rebase(digits[zeros:], ALPHABET_SIZE, 256)
        out.extend(bytes(zeros))
        out.reverse()
        return bytes(out)

    def decode_string(self, s: str) -> bytes:
        """Decode a base58 string."""
        if not isinstance(s, str):
            raise TypeError("Input must be a string")
        try:
            data = s.encode("latin-1")
        except UnicodeEncodeError as exc:
            # Nothing outside Latin-1 can be a symbol.
            raise InvalidCharacterError(ord(s[exc.start]), exc.start) from None
        return self.decode_to_bytes(data)

    def decode(self, dst: Union[bytearray, memoryview], src: BytesLike) -> int:
        """Decode ``src`` into the caller's buffer ``dst``.

        Same copy rule as :meth:`encode`. Nothing is written to ``dst`` when
        decoding fails.
        """
        decoded = self.decode_to_bytes(src)
        n = min(len(dst), len(decoded))
        dst[:n] = decoded[:n]
        return len(decoded)


def new_encoding(alphabet: Union[str, bytes]) -> Encoding:
    """Build an :class:`Encoding` for a custom alphabet."""
    return Encoding(alphabet)


STD_ENCODING = Encoding(BITCOIN_ALPHABET)
FLICKR_ENCODING = Encoding(FLICKR_ALPHABET)


def standard_encoding() -> Encoding:
    """Return the shared Bitcoin-alphabet codec."""
    return STD_ENCODING


# ---------------------------------------------------------------------------
# Bitcoin-alphabet helpers
# ---------------------------------------------------------------------------


def b58encode(data: bytes) -> str:
    """Encode bytes to a base58 string using the Bitcoin alphabet."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError("Input must be bytes")
    return STD_ENCODING.encode_to_string(data)


def b58decode(encoded: Union[str, bytes]) -> bytes:
    """Decode a base58 string (or its ASCII bytes) using the Bitcoin alphabet."""
    if isinstance(encoded, str):
        return STD_ENCODING.decode_string(encoded)
    if isinstance(encoded, (bytes, bytearray, memoryview)):
        return STD_ENCODING.decode_to_bytes(encoded)
    raise TypeError("Input must be a string or bytes")


def b58encode_str(text: str, encoding: str = "utf-8") -> str:
    """Encode a text string to base58."""
    return b58encode(text.encode(encoding))


def b58decode_str(encoded: str, encoding: str = "utf-8") -> str:
    """Decode a base58 string to text."""
    return b58decode(encoded).decode(encoding)

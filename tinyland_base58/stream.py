"""File-like base58 adapters.

Neither adapter transcodes incrementally. :class:`Base58Encoder` collects
everything written to it and encodes once on ``close()``;
:class:`Base58Decoder` drains its whole source on the first read and decodes
once. Errors therefore surface at close or first read, never per chunk.
"""

import errno
import io
import logging
from typing import List, Optional, Union

from tinyland_base58.base58 import Base58Error, Encoding

logger = logging.getLogger(__name__)


class Base58Encoder(io.RawIOBase):
    """Writable stream that base58-encodes its buffered input on close.

    ``sink`` may be a binary or a text stream. It is written to and flushed
    once, on :meth:`close`, and errors raised by the sink propagate from
    there. Like any ``io`` object, an encoder left open is closed when it is
    garbage-collected, which also writes the encoded output to the sink.
    """

    def __init__(self, encoding: Encoding, sink) -> None:
        super().__init__()
        self._encoding = encoding
        self._sink = sink
        self._buffer = bytearray()

    def writable(self) -> bool:
        return True

    def write(self, b) -> int:
        if self.closed:
            raise ValueError("write to closed Base58Encoder")
        with memoryview(b) as view:
            self._buffer += view
            return view.nbytes

    def close(self) -> None:
        if self.closed:
            return
        try:
            encoded = self._encoding.encode_to_bytes(self._buffer)
            logger.debug(
                "encoded %d buffered bytes into %d symbols",
                len(self._buffer),
                len(encoded),
            )
            if isinstance(self._sink, io.TextIOBase):
                self._sink.write(encoded.decode("latin-1"))
            else:
                self._sink.write(encoded)
            flush = getattr(self._sink, "flush", None)
            if flush is not None:
                flush()
        finally:
            self._buffer = bytearray()
            super().close()


class Base58Decoder(io.RawIOBase):
    """Readable stream over the decoded contents of a base58 source.

    The first read pulls ``source`` to end of input (``read()`` returning
    ``b""`` or ``""``) and decodes it in one go. I/O errors from the source
    abort the drain and propagate; chunks already pulled are kept, so the
    next read resumes the drain where it stopped. A non-blocking source with
    no data ready (``read()`` returning ``None``) raises
    :class:`BlockingIOError` in the same resumable way. A decode failure is
    raised by that read and by every later one; no partial output is served.
    """

    def __init__(self, encoding: Encoding, source) -> None:
        super().__init__()
        self._encoding = encoding
        self._source = source
        self._pending: List[Union[bytes, str]] = []
        self._decoded: Optional[bytes] = None
        self._offset = 0
        self._error: Optional[Base58Error] = None

    def readable(self) -> bool:
        return True

    def readinto(self, b) -> int:
        if self.closed:
            raise ValueError("read from closed Base58Decoder")
        if self._error is not None:
            raise self._error
        if self._decoded is None:
            self._decoded = self._drain()

        with memoryview(b) as view, view.cast("B") as target:
            n = min(len(target), len(self._decoded) - self._offset)
            target[:n] = self._decoded[self._offset:self._offset + n]
        self._offset += n
        return n

    def _drain(self) -> bytes:
        chunks = self._pending
        while True:
            chunk = self._source.read(io.DEFAULT_BUFFER_SIZE)
            if chunk is None:
                raise BlockingIOError(
                    errno.EAGAIN, "base58 source has no data ready"
                )
            if not chunk:
                break
            chunks.append(chunk)
        self._pending = []

        try:
            if chunks and isinstance(chunks[0], str):
                decoded = self._encoding.decode_string("".join(chunks))
            else:
                decoded = self._encoding.decode_to_bytes(b"".join(chunks))
        except Base58Error as exc:
            self._error = exc
            raise

        logger.debug(
            "decoded %d drained symbols into %d bytes",
            sum(len(c) for c in chunks),
            len(decoded),
        )
        return decoded


def new_encoder(encoding: Encoding, sink) -> Base58Encoder:
    """Return a stream that writes the base58 form of its input to ``sink``."""
    return Base58Encoder(encoding, sink)


def new_decoder(encoding: Encoding, source) -> Base58Decoder:
    """Return a stream that reads the decoded contents of ``source``."""
    return Base58Decoder(encoding, source)

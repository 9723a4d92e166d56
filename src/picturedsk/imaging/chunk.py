"""
Growable, tagged byte buffer used to build WOZ chunks.

A chunk is written front to back through a write mark. The mark can also
be moved: backwards to truncate and rewrite, forwards to reserve a
zero-filled region that is filled in or left as padding.

Growth policy:
    When a write does not fit, capacity doubles; if doubling is still not
    enough, capacity grows to exactly the required size. Capacity never
    shrinks and growing never disturbs bytes already written.
"""

import logging
import struct

logger = logging.getLogger(__name__)


CHUNK_INITIAL_BUFFER = 4096
CHUNK_NAME_LENGTH = 4
PAD_BYTE = 0x20  # Space, used to pad fixed-width strings


class WozChunk:
    """
    A named chunk payload under construction.

    Attributes:
        name: Four-character ASCII chunk tag
        mark: Current write position, also the logical payload length
        capacity: Allocated buffer size in bytes

    Example:
        >>> chunk = WozChunk('INFO')
        >>> chunk.write_uint8(2)
        >>> chunk.write_uint16(0x7F)
        >>> chunk.data
        b'\\x02\\x7f\\x00'
    """

    def __init__(self, name: str, initial_capacity: int = CHUNK_INITIAL_BUFFER):
        if len(name) != CHUNK_NAME_LENGTH or not name.isascii():
            raise ValueError(f"Chunk name must be 4 ASCII characters, got {name!r}")
        if initial_capacity <= 0:
            raise ValueError(f"Initial capacity must be positive, got {initial_capacity}")

        self._name = name
        self._buffer = bytearray(initial_capacity)
        self._mark = 0

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def name(self) -> str:
        return self._name

    @property
    def mark(self) -> int:
        return self._mark

    @property
    def capacity(self) -> int:
        return len(self._buffer)

    @property
    def data(self) -> bytes:
        """Payload bytes written so far (up to the mark)."""
        return bytes(self._buffer[:self._mark])

    @property
    def size_on_disk(self) -> int:
        """Serialized size: tag, length and payload."""
        return CHUNK_NAME_LENGTH + 4 + self._mark

    # =========================================================================
    # Writing
    # =========================================================================

    def write_uint8(self, value: int) -> None:
        self._pack('<B', value, 0xFF)

    def write_uint16(self, value: int) -> None:
        self._pack('<H', value, 0xFFFF)

    def write_uint32(self, value: int) -> None:
        self._pack('<I', value, 0xFFFFFFFF)

    def write_utf8(self, text: str, n: int) -> None:
        """
        Write `text` as exactly `n` bytes of UTF-8.

        Shorter text is padded with spaces; longer text is truncated. No NUL
        terminator is written.
        """
        if n < 0:
            raise ValueError(f"Field width must not be negative, got {n}")
        encoded = text.encode('utf-8')[:n]
        self.write_bytes(encoded.ljust(n, bytes((PAD_BYTE,))))

    def write_bytes(self, data: bytes) -> None:
        length = len(data)
        self._ensure_writable(length)
        self._buffer[self._mark:self._mark + length] = data
        self._mark += length

    def set_mark(self, mark: int) -> None:
        """
        Move the write mark.

        Moving backwards truncates the payload (capacity is kept). Moving
        forwards zero-fills everything between the old and new mark.
        """
        if mark < 0:
            raise ValueError(f"Mark must not be negative, got {mark}")
        if mark <= self._mark:
            self._mark = mark
            return

        gap = mark - self._mark
        self._ensure_writable(gap)
        self._buffer[self._mark:mark] = bytes(gap)
        self._mark = mark

    def advance_mark(self, offset: int) -> None:
        self.set_mark(self._mark + offset)

    # =========================================================================
    # Serialization
    # =========================================================================

    def serialize(self) -> bytes:
        """Chunk as written to the file: tag, little-endian length, payload."""
        return (
            self._name.encode('ascii')
            + struct.pack('<I', self._mark)
            + self._buffer[:self._mark]
        )

    # =========================================================================
    # Private Helpers
    # =========================================================================

    def _pack(self, fmt: str, value: int, maximum: int) -> None:
        if not 0 <= value <= maximum:
            raise ValueError(
                f"Value {value} out of range for {self._name} field (0-{maximum})"
            )
        size = struct.calcsize(fmt)
        self._ensure_writable(size)
        struct.pack_into(fmt, self._buffer, self._mark, value)
        self._mark += size

    def _ensure_writable(self, count: int) -> None:
        required = self._mark + count
        capacity = len(self._buffer)
        if required <= capacity:
            return

        new_capacity = capacity * 2
        if required > new_capacity:
            new_capacity = required

        try:
            self._buffer.extend(bytes(new_capacity - capacity))
        except MemoryError:
            logger.critical(
                "Out of memory expanding %s chunk buffer to %d bytes",
                self._name, new_capacity
            )
            raise

        logger.debug(
            "Grew %s chunk buffer: %d -> %d bytes",
            self._name, capacity, new_capacity
        )

    def __len__(self) -> int:
        return self._mark

    def __repr__(self) -> str:
        return f"WozChunk({self._name!r}, mark={self._mark}, capacity={self.capacity})"

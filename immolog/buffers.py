"""Byte and bit level buffers for the big-endian event log wire format."""

from __future__ import annotations

import math

__all__ = [
    "DecodeError",
    "ByteBuf",
    "BitReader",
    "BitWriter",
    "round_half_away",
]

_ENCODING = "utf-8"
_STRING_ERRORS = "surrogateescape"


class DecodeError(ValueError):
    """Raised when the input ends before a field is complete."""


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    if math.isnan(value) or math.isinf(value):
        raise ValueError(f"cannot round {value!r}")
    magnitude = math.floor(abs(value) + 0.5)
    return int(-magnitude if value < 0 else magnitude)


def _check_size(size: int) -> None:
    if size <= 0:
        raise ValueError(f"field size must be positive, got {size}")


def _check_count(n: int) -> None:
    if n < 0:
        raise ValueError(f"count must not be negative, got {n}")


class ByteBuf:
    """A growable byte buffer with separate reader and writer positions.

    All multi-byte integers are big-endian. Written integers are truncated
    to the width of their field, as fixed-width wire fields are.
    """

    def __init__(self, data: bytes | bytearray | memoryview = b"") -> None:
        self._data = bytearray(data)
        self._reader = 0

    def __len__(self) -> int:
        return len(self._data) - self._reader

    def __repr__(self) -> str:
        return (
            f"ByteBuf(reader_index={self._reader}, "
            f"writer_index={len(self._data)})"
        )

    def readable(self) -> bool:
        """True while unread bytes remain."""
        return self._reader < len(self._data)

    @property
    def reader_index(self) -> int:
        return self._reader

    @property
    def writer_index(self) -> int:
        return len(self._data)

    def _take(self, n: int) -> bytes:
        _check_count(n)
        end = self._reader + n
        if end > len(self._data):
            raise DecodeError(
                f"need {n} bytes at offset {self._reader}, "
                f"only {len(self._data) - self._reader} left"
            )
        chunk = bytes(self._data[self._reader:end])
        self._reader = end
        return chunk

    def peek_uint16(self) -> int:
        """Return the next big-endian uint16 without consuming it."""
        end = self._reader + 2
        if end > len(self._data):
            raise DecodeError(f"need 2 bytes at offset {self._reader}")
        return int.from_bytes(self._data[self._reader:end], "big")

    def read_uint(self, size: int) -> int:
        _check_size(size)
        return int.from_bytes(self._take(size), "big", signed=False)

    def read_int(self, size: int) -> int:
        _check_size(size)
        return int.from_bytes(self._take(size), "big", signed=True)

    def write_uint(self, value: int, size: int) -> None:
        _check_size(size)
        masked = int(value) & ((1 << (size * 8)) - 1)
        self._data += masked.to_bytes(size, "big")

    def write_int(self, value: int, size: int) -> None:
        # Two's complement truncated to the field width.
        self.write_uint(value, size)

    def read_bytes(self, n: int) -> bytes:
        return self._take(n)

    def write_bytes(self, data: bytes | bytearray | memoryview) -> None:
        self._data += data

    def read_string(self, n: int) -> str:
        """Read exactly ``n`` bytes as UTF-8, keeping any padding bytes."""
        return self._take(n).decode(_ENCODING, _STRING_ERRORS)

    def write_string(self, text: str) -> None:
        self._data += text.encode(_ENCODING, _STRING_ERRORS)

    def skip(self, n: int) -> None:
        self._take(n)

    def write_zero(self, n: int) -> None:
        _check_count(n)
        self._data += bytes(n)

    def to_bytes(self) -> bytes:
        """Return the bytes not yet read."""
        return bytes(self._data[self._reader:])


class BitReader:
    """Reads MSB-first bit fields, pulling bytes from a ByteBuf on demand."""

    def __init__(self, buf: ByteBuf) -> None:
        self._buf = buf
        self._current = 0
        self._available = 0

    def __enter__(self) -> "BitReader":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.finish()

    def read(self, bits: int, unsigned: bool = True) -> int:
        _check_count(bits)
        value = 0
        needed = bits
        while needed:
            if not self._available:
                self._current = self._buf.read_uint(1)
                self._available = 8
            take = min(needed, self._available)
            shift = self._available - take
            value = (value << take) | ((self._current >> shift) & ((1 << take) - 1))
            self._available -= take
            needed -= take
        if not unsigned and bits and value & (1 << (bits - 1)):
            value -= 1 << bits
        return value

    def skip(self, bits: int) -> None:
        self.read(bits)

    def finish(self) -> None:
        """Drop the unread bits of the current byte."""
        self._current = 0
        self._available = 0


class BitWriter:
    """Writes MSB-first bit fields, emitting each byte once it is full."""

    def __init__(self, buf: ByteBuf) -> None:
        self._buf = buf
        self._current = 0
        self._used = 0

    def __enter__(self) -> "BitWriter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.finish()

    def write(self, value: int, bits: int, unsigned: bool = True) -> None:
        _check_count(bits)
        value = int(value) & ((1 << bits) - 1)
        remaining = bits
        while remaining:
            space = 8 - self._used
            take = min(remaining, space)
            chunk = (value >> (remaining - take)) & ((1 << take) - 1)
            self._current |= chunk << (space - take)
            self._used += take
            remaining -= take
            if self._used == 8:
                self._buf.write_uint(self._current, 1)
                self._current = 0
                self._used = 0

    def skip(self, bits: int) -> None:
        self.write(0, bits)

    def finish(self) -> None:
        """Flush a partly filled byte, padding it with zero bits."""
        if self._used:
            self._buf.write_uint(self._current, 1)
        self._current = 0
        self._used = 0
"""Little-endian primitive reader for things data streams."""

from __future__ import annotations

import io
import struct
from typing import BinaryIO

_U16 = struct.Struct("<H")
_I16 = struct.Struct("<h")
_U32 = struct.Struct("<I")
_I32 = struct.Struct("<i")
_U64 = struct.Struct("<Q")

TEXT_ENCODING = "latin-1"


class ThingsError(Exception):
    """Raised when things data is malformed."""


class UnexpectedEOFError(ThingsError, EOFError):
    """Raised when the data ends in the middle of a value."""


class BinaryReader:
    """Reads primitive values from a binary stream, tracking the offset."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        try:
            self._pos = stream.tell()
        except (AttributeError, OSError, io.UnsupportedOperation):
            self._pos = 0

    def offset(self) -> int:
        """Current offset in the stream."""
        return self._pos

    def seek(self, offset: int) -> None:
        """Move to an absolute offset in the stream."""
        self._stream.seek(offset, io.SEEK_SET)
        self._pos = offset

    def _read_upto(self, n: int) -> bytes:
        chunks = []
        remaining = n
        while remaining > 0:
            chunk = self._stream.read(remaining)
            if not chunk:
                break
            chunks.append(chunk)
            remaining -= len(chunk)
        data = b"".join(chunks)
        self._pos += len(data)
        return data

    def read(self, n: int) -> bytes:
        """Read exactly n bytes."""
        data = self._read_upto(n)
        if len(data) < n:
            raise UnexpectedEOFError(f"expected {n} bytes, got {len(data)}")
        return data

    def skip(self, n: int) -> None:
        self.read(n)

    def skip_bytes8(self) -> None:
        self.skip(self.read_u8())

    def skip_bytes16(self) -> None:
        self.skip(self.read_u16())

    def read_sect(self) -> str | None:
        """Read a four-byte section tag; None at a clean end of data."""
        data = self._read_upto(4)
        if not data:
            return None
        if len(data) < 4:
            raise UnexpectedEOFError("truncated section tag")
        return data[::-1].decode(TEXT_ENCODING)

    def check_end(self) -> None:
        """Consume an END tag, raising if something else is found."""
        data = self._read_upto(4)
        if len(data) < 4:
            raise UnexpectedEOFError("expected END, got end of data")
        name = data[::-1].decode(TEXT_ENCODING)
        if name != "END ":
            raise ThingsError(f"expected END, got section: {name!r}")

    def check_zeros(self) -> None:
        """Consume one padding byte, which must be zero if present."""
        data = self._read_upto(1)
        if data and data[0] != 0:
            raise ThingsError(f"expected zero bytes, got 0x{data[0]:x}")

    def read_u8(self) -> int:
        return self.read(1)[0]

    def read_i8(self) -> int:
        v = self.read_u8()
        return v - 0x100 if v >= 0x80 else v

    def read_u16(self) -> int:
        return _U16.unpack(self.read(2))[0]

    def read_i16(self) -> int:
        return _I16.unpack(self.read(2))[0]

    def read_u32(self) -> int:
        return _U32.unpack(self.read(4))[0]

    def read_i32(self) -> int:
        return _I32.unpack(self.read(4))[0]

    def read_u64_align(self) -> int:
        """Skip to the next 8-byte boundary and read a 64-bit value."""
        over = self._pos % 8
        if over:
            self.skip(8 - over)
        return _U64.unpack(self.read(8))[0]

    def read_bytes8(self) -> bytes:
        return self.read(self.read_u8())

    def read_bytes16(self) -> bytes:
        return self.read(self.read_u16())

    def read_string8(self) -> str:
        return self.read_bytes8().decode(TEXT_ENCODING)

    def read_string16(self) -> str:
        return self.read_bytes16().decode(TEXT_ENCODING)
"""Bounds-checked little-endian cursor over an immutable byte buffer."""

import struct
import warnings

from ._constants import MAX_STRING_CHARS
from ._types import Buffer
from .errors import InvalidOffset, LnkWarning, UnexpectedEnd

_U8 = struct.Struct("<B")
_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")
_U64 = struct.Struct("<Q")
_I16 = struct.Struct("<h")
_I32 = struct.Struct("<i")
_I64 = struct.Struct("<q")


class Cursor:
    """Read position inside the region ``[start, end)`` of *data*.

    Offsets accepted and reported by a cursor are relative to its region
    start, so a child cursor created with :meth:`sub` or :meth:`at` gives
    a nested structure its own offset base.  The underlying buffer is never
    copied or modified; the position is the only mutable state.
    """

    __slots__ = ("_data", "_start", "_end", "_pos", "section")

    def __init__(
        self,
        data: Buffer,
        section: str = "ShellLink",
        start: int = 0,
        end: int | None = None,
    ):
        self._data = data if isinstance(data, memoryview) else memoryview(data)
        self._start = start
        self._end = len(self._data) if end is None else end
        self._pos = start
        self.section = section

    def __repr__(self) -> str:
        return (
            f"<Cursor {self.section} offset=0x{self.offset:X} "
            f"size=0x{len(self):X}>"
        )

    def __len__(self) -> int:
        return self._end - self._start

    @property
    def offset(self) -> int:
        """Current position relative to the region start."""
        return self._pos - self._start

    @property
    def remaining(self) -> int:
        return self._end - self._pos

    # -- positioning -------------------------------------------------------
    def seek(self, offset: int, field: str = "") -> None:
        """Move to *offset* from the region start (the end itself is allowed)."""
        if offset < 0 or offset > len(self):
            raise InvalidOffset(self.section, field, offset, len(self))
        self._pos = self._start + offset

    def skip(self, size: int, field: str = "") -> None:
        self._require(size, field)
        self._pos += size

    def _require(self, size: int, field: str) -> None:
        if size < 0 or size > self.remaining:
            raise UnexpectedEnd(self.section, field, self.offset, size, self.remaining)

    # -- fixed-width reads -------------------------------------------------
    def _unpack(self, fmt: struct.Struct, field: str) -> int:
        self._require(fmt.size, field)
        (value,) = fmt.unpack_from(self._data, self._pos)
        self._pos += fmt.size
        return value

    def u8(self, field: str = "") -> int:
        return self._unpack(_U8, field)

    def u16(self, field: str = "") -> int:
        return self._unpack(_U16, field)

    def u32(self, field: str = "") -> int:
        return self._unpack(_U32, field)

    def u64(self, field: str = "") -> int:
        return self._unpack(_U64, field)

    def i16(self, field: str = "") -> int:
        return self._unpack(_I16, field)

    def i32(self, field: str = "") -> int:
        return self._unpack(_I32, field)

    def i64(self, field: str = "") -> int:
        return self._unpack(_I64, field)

    def read(self, size: int, field: str = "") -> bytes:
        """Read exactly *size* bytes and advance past them."""
        self._require(size, field)
        value = bytes(self._data[self._pos : self._pos + size])
        self._pos += size
        return value

    def guid(self, field: str = "") -> bytes:
        return self.read(16, field)

    def rest(self) -> bytes:
        """Read everything up to the region end."""
        return self.read(self.remaining)

    # -- strings -----------------------------------------------------------
    def cstring(self, field: str = "") -> bytes:
        """Read a zero-terminated 8-bit string, without its terminator."""
        return self._scan(1, field)

    def wstring(self, field: str = "") -> bytes:
        """Read a zero-terminated UTF-16LE string, without its terminator."""
        return self._scan(2, field)

    def _scan(self, width: int, field: str) -> bytes:
        limit = min(self._end, self._pos + MAX_STRING_CHARS * width)
        nul = b"\x00" * width
        pos = self._pos
        while pos + width <= limit:
            if self._data[pos : pos + width] == nul:
                value = bytes(self._data[self._pos : pos])
                self._pos = pos + width
                return value
            pos += width
        if limit < self._end:
            warnings.warn(
                f"{self.section}.{field}: no terminator within "
                f"{MAX_STRING_CHARS} characters, string truncated",
                LnkWarning,
                stacklevel=3,
            )
            value = bytes(self._data[self._pos : limit])
            self._pos = limit
            return value
        raise UnexpectedEnd(
            self.section, field, self.offset, self.remaining + width, self.remaining
        )

    def counted_string(self, unicode: bool, field: str = "") -> bytes:
        """Read a 16-bit character count followed by that many characters."""
        count = self.u16(field)
        return self.read(count * 2 if unicode else count, field)

    # -- child cursors -----------------------------------------------------
    def sub(self, size: int, section: str) -> "Cursor":
        """Return a cursor over the next *size* bytes and advance past them."""
        self._require(size, section)
        child = Cursor(self._data, section, self._pos, self._pos + size)
        self._pos += size
        return child

    def at(self, offset: int, section: str, field: str = "") -> "Cursor":
        """Return a cursor from *offset* (relative to region start) to region end."""
        if offset < 0 or offset >= len(self):
            raise InvalidOffset(self.section, field, offset, len(self))
        return Cursor(self._data, section, self._start + offset, self._end)

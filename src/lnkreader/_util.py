"""Internal utility helpers for GUIDs, timestamps and fixed string slots."""

import codecs
import struct
from datetime import UTC, datetime, timedelta

from ._constants import HOTKEY_MOD, VK_KEYS

_FILETIME_EPOCH = datetime(1601, 1, 1, tzinfo=UTC)


def format_guid(data: bytes, off: int = 0) -> str:
    """Format 16 bytes at *off* as an uppercase ``{GUID}`` string.

    Windows GUIDs are stored in mixed-endian layout:
    uint32-LE, uint16-LE, uint16-LE, 8 raw bytes.
    """
    if len(data) - off < 16:
        return "?"
    d1, d2, d3 = struct.unpack_from("<IHH", data, off)
    d4 = data[off + 8 : off + 10].hex().upper()
    d5 = data[off + 10 : off + 16].hex().upper()
    return f"{{{d1:08X}-{d2:04X}-{d3:04X}-{d4}-{d5}}}"


def filetime_to_datetime(ft: int) -> datetime | None:
    """Convert FILETIME ticks (100 ns since 1601) to an aware UTC datetime.

    Returns ``None`` for 0 (unset) and for values beyond ``datetime.max``.
    """
    if ft == 0:
        return None
    try:
        return _FILETIME_EPOCH + timedelta(microseconds=ft // 10)
    except OverflowError:
        return None


def format_hotkey(vk: int, mod: int) -> str:
    """Render a HotKeyFlags pair as e.g. ``CTRL+ALT+F5`` (empty if unset)."""
    mod_parts = [n for b, n in HOTKEY_MOD.items() if mod & b]
    vk_name = VK_KEYS.get(vk, f"0x{vk:02X}") if vk else ""
    if not (mod_parts or vk_name):
        return ""
    return "+".join(mod_parts + ([vk_name] if vk_name else []))


def trim_cstring(raw: bytes) -> bytes:
    """Cut a fixed-size 8-bit slot at its first NUL."""
    end = raw.find(b"\x00")
    return raw if end < 0 else raw[:end]


def trim_wstring(raw: bytes) -> bytes:
    """Cut a fixed-size UTF-16LE slot at its first NUL code unit."""
    for pos in range(0, len(raw) - 1, 2):
        if raw[pos] == 0 and raw[pos + 1] == 0:
            return raw[:pos]
    return raw[: len(raw) & ~1]


def text_codec(name: str) -> str:
    """Return the canonical name of text encoding *name*.

    Raises ValueError for unknown codecs and for bytes-to-bytes codecs such
    as ``hex`` that cannot decode to ``str``.
    """
    try:
        b"".decode(name)
    except LookupError:
        raise ValueError(f"Unknown codepage: {name!r} (not a text encoding)") from None
    return codecs.lookup(name).name

"""Render a decoded :class:`~lnkreader.structures.ShellLink` for people or JSON."""

import base64
import struct
from dataclasses import fields, is_dataclass
from datetime import datetime

from ._constants import ANSI_CODEPAGE, UNICODE_ENCODING
from ._util import format_guid, trim_wstring
from .structures import (
    ExtendedLinkInfo,
    ExtraDataBlock,
    ItemID,
    PropertyStoreDataBlock,
    ShellLink,
    Text,
    UnknownDataBlock,
    VistaAndAboveIDListDataBlock,
)

# Fields rendered separately (or not at all) in the EXTRA DATA section
_BLOCK_SKIP = {"size", "signature", "payload", "stores", "items"}

_STRING_LABELS = {
    "name": "Name",
    "relative_path": "RelativePath",
    "working_dir": "WorkingDir",
    "arguments": "Arguments",
    "icon_location": "IconLocation",
}


# ---------------------------------------------------------------------------
# Shell item descriptions
# ---------------------------------------------------------------------------
def _dos_date_str(val):
    day = val & 0x1F
    month = (val >> 5) & 0x0F
    year = ((val >> 9) & 0x7F) + 1980
    return f"{year}-{month:02d}-{day:02d}"


def _dos_time_str(val):
    sec = (val & 0x1F) * 2
    minute = (val >> 5) & 0x3F
    hour = (val >> 11) & 0x1F
    return f"{hour:02d}:{minute:02d}:{sec:02d}"


def _u16(body, off):
    return struct.unpack_from("<H", body, off)[0] if len(body) >= off + 2 else 0


def _long_name(body: bytes, name_end: int) -> str:
    """Unicode name from the BEEF0004 extension block following a short name."""
    ext_off = name_end + 1
    if ext_off % 2:
        ext_off += 1
    ext = body[ext_off:]
    if len(ext) < 8:
        return ""
    ext_size, ext_ver, ext_sig = struct.unpack_from("<HHI", ext, 0)
    if ext_sig != 0xBEEF0004 or ext_size > len(ext):
        return ""
    if ext_ver >= 9 and len(ext) >= 46:
        name_off = _u16(ext, 16)
        if name_off >= ext_size:
            return ""
    elif ext_ver >= 3:
        name_off = 12
    else:
        return ""
    raw = trim_wstring(ext[name_off:])
    return raw.decode(UNICODE_ENCODING, errors="replace")


def describe_item(item: ItemID) -> str:
    """One-line description of a shell item (root, drive, file/folder, network)."""
    body = item.data
    type_byte = item.type_byte

    if type_byte == 0x1F:
        sort_idx = body[1] if len(body) > 1 else 0
        return f"[Root] sort=0x{sort_idx:02X} CLSID={format_guid(body, 2)}"

    if type_byte == 0x2F:
        drive = body[1:].split(b"\x00")[0].decode(ANSI_CODEPAGE, errors="replace")
        return f"[Drive] {drive}"

    if type_byte in (0x31, 0x32, 0x35, 0x36):
        kind = "Dir" if type_byte in (0x31, 0x35) else "File"
        fsize = struct.unpack_from("<I", body, 2)[0] if len(body) >= 6 else 0
        date_w = _u16(body, 6)
        time_w = _u16(body, 8)
        attrs = _u16(body, 10)

        name_end = body.find(b"\x00", 12)
        if name_end < 0:
            name_end = len(body)
        short_name = body[12:name_end].decode(ANSI_CODEPAGE, errors="replace")
        return (
            f'[{kind}] short="{short_name}" long="{_long_name(body, name_end)}" '
            f"fsize={fsize} date={_dos_date_str(date_w)} "
            f"time={_dos_time_str(time_w)} attrs=0x{attrs:04X}"
        )

    if type_byte & 0x70 == 0x40:
        net_name = body[2:].split(b"\x00")[0].decode(ANSI_CODEPAGE, errors="replace")
        return f"[Network] {net_name}"

    return f"type=0x{type_byte:02X}"


# ---------------------------------------------------------------------------
# Human-readable formatter
# ---------------------------------------------------------------------------
def _filetime_str(dt: datetime | None, ft: int) -> str:
    if ft == 0:
        return "0 (unset)"
    if dt is None:
        return f"0x{ft:016X}"
    return dt.strftime("%Y-%m-%d %H:%M:%S UTC")


def _quote(text: Text | None) -> str:
    if text is None:
        return "(absent)"
    shown = f'"{text.value}"'
    if not text.valid:
        shown += f" (invalid {text.encoding})"
    return shown


def _show(value) -> str:
    if isinstance(value, Text):
        return _quote(value)
    if isinstance(value, tuple):
        return " ".join(f"0x{v:08X}" for v in value)
    return str(value)


def _item_lines(items: tuple[ItemID, ...], indent: str = "  ") -> list[str]:
    return [
        f"{indent}Item[{i}]: size={item.size}  {describe_item(item)}"
        for i, item in enumerate(items)
    ]


def format_lnk(link: ShellLink) -> str:
    """Return a human-readable string representation of *link*."""
    lines: list[str] = []
    hdr = link.header

    lines.append("--- HEADER ---")
    lines.append(f"  LinkFlags:       0x{hdr.link_flags_word:08X}")
    for name in hdr.link_flags.names():
        lines.append(f"    - {name}")
    lines.append(f"  FileAttributes:  0x{hdr.file_attributes_word:08X}")
    for name in hdr.file_attributes.names():
        lines.append(f"    - {name}")
    lines.append(f"  CreationTime:    {_filetime_str(hdr.created, hdr.creation_time)}")
    lines.append(f"  AccessTime:      {_filetime_str(hdr.accessed, hdr.access_time)}")
    lines.append(f"  WriteTime:       {_filetime_str(hdr.modified, hdr.write_time)}")
    lines.append(f"  FileSize:        {hdr.file_size} (0x{hdr.file_size:08X})")
    lines.append(f"  IconIndex:       {hdr.icon_index}")
    lines.append(f"  ShowCommand:     {hdr.show_command} ({hdr.show_command_name})")
    lines.append(
        f"  HotKey:          {hdr.hotkey_str or 'None'} "
        f"(vk=0x{hdr.hotkey_vk:02X} mod=0x{hdr.hotkey_mod:02X})"
    )

    if link.target_id_list is not None:
        lines.append("")
        lines.append("--- LINK TARGET ID LIST ---")
        lines.append(f"  IDListSize:      {link.target_id_list.size}")
        lines.extend(_item_lines(link.target_id_list.items))

    info = link.link_info
    if info is not None:
        layout = "extended" if isinstance(info, ExtendedLinkInfo) else "legacy"
        lines.append("")
        lines.append("--- LINK INFO ---")
        lines.append(
            f"  Size:            {info.size} (header 0x{info.header_size:X}, {layout})"
        )
        lines.append(f"  Flags:           0x{info.flags:08X}")
        vol = info.volume_id
        if vol is not None:
            lines.append(f'  VolumeLabel:     "{vol.label}"')
            lines.append(f"  DriveType:       {vol.drive_type} ({vol.drive_type_name})")
            lines.append(f"  DriveSerial:     0x{vol.drive_serial_number:08X}")
        if info.base_path:
            lines.append(f'  LocalBasePath:   "{info.base_path}"')
        if info.path_suffix:
            lines.append(f'  CommonPath:      "{info.path_suffix}"')
        cnrl = info.common_network_relative_link
        if cnrl is not None:
            lines.append(f'  NetworkShare:    "{cnrl.share_name}"')
            if cnrl.device:
                lines.append(f'  DeviceName:      "{cnrl.device}"')
            if cnrl.network_provider_name:
                lines.append(f"  NetProvider:     {cnrl.network_provider_name}")

    present = link.string_data.present()
    if present:
        lines.append("")
        lines.append("--- STRING DATA ---")
        for name, text in present:
            lines.append(f"  {_STRING_LABELS[name] + ':':<19}{_quote(text)}")

    if link.extra_data:
        lines.append("")
        lines.append("--- EXTRA DATA ---")
        for block in link.extra_data:
            lines.append(
                f"  Block: size={block.size} sig=0x{block.signature:08X} ({block.name})"
            )
            for f in fields(block):
                if f.name not in _BLOCK_SKIP:
                    lines.append(f"    {f.name}: {_show(getattr(block, f.name))}")
            if isinstance(block, VistaAndAboveIDListDataBlock):
                lines.extend(_item_lines(block.items, indent="    "))
            elif isinstance(block, UnknownDataBlock):
                lines.append(f"    payload: {len(block.payload)} byte(s)")

    store_block = link.find_block(PropertyStoreDataBlock)
    if store_block is not None and store_block.stores:
        lines.append("")
        lines.append("--- PROPERTY STORES ---")
        for i, store in enumerate(store_block.stores):
            lines.append(f"  Store[{i}]: {store.format_id} ({store.format_name})")
            for prop in store.properties:
                value = prop.value
                shown = _quote(value) if isinstance(value, Text) else repr(value)
                lines.append(f"    PID={prop.id} Type={prop.type_name} Value={shown}")

    strings = link.string_data
    arguments = strings.arguments.value if strings.arguments else ""
    working_dir = strings.working_dir.value if strings.working_dir else ""
    description = strings.name.value if strings.name else ""
    icon_display = strings.icon_location.value if strings.icon_location else ""
    if icon_display:
        icon_display = f"{icon_display},{hdr.icon_index}"

    lines.append("")
    lines.append("--- RESOLVED ---")
    lines.append(f"  TargetPath:      {link.target_path or '(empty)'}")
    lines.append(f"  Arguments:       {arguments or '(empty)'}")
    lines.append(f"  WorkingDirectory: {working_dir or '(empty)'}")
    lines.append(f"  Description:     {description or '(empty)'}")
    lines.append(f"  IconLocation:    {icon_display or '(empty)'}")
    lines.append(f"  Hotkey:          {hdr.hotkey_str or '(empty)'}")
    lines.append(f"  WindowStyle:     {hdr.show_command_name}")

    return "\n".join(lines)


# ---------------------------------------------------------------------------
# JSON-friendly conversion
# ---------------------------------------------------------------------------
def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _jsonable(value):
    if isinstance(value, Text):
        d = {"value": value.value, "valid": value.valid}
        if not value.valid:
            d["raw"] = _b64(value.raw)
        return d
    if is_dataclass(value):
        d = {f.name: _jsonable(getattr(value, f.name)) for f in fields(value)}
        if isinstance(value, ExtraDataBlock):
            d = {"type": type(value).__name__, "name": value.name, **d}
        return d
    if isinstance(value, (bytes, bytearray)):
        return _b64(bytes(value))
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (tuple, list)):
        return [_jsonable(v) for v in value]
    return value


def to_dict(link: ShellLink) -> dict:
    """Convert *link* to a dict that :func:`json.dumps` accepts.

    Bytes become base64 strings, :class:`Text` becomes ``{"value", "valid"}``
    (plus base64 ``raw`` when invalid) and datetimes become ISO 8601 strings.
    """
    d = _jsonable(link)
    hdr = link.header
    d["header"].update(
        link_flags=hdr.link_flags.names(),
        file_attributes=hdr.file_attributes.names(),
        created=_jsonable(hdr.created),
        accessed=_jsonable(hdr.accessed),
        modified=_jsonable(hdr.modified),
        show_command_name=hdr.show_command_name,
        hotkey_str=hdr.hotkey_str,
    )
    if link.link_info is not None:
        d["link_info"]["layout"] = (
            "extended" if isinstance(link.link_info, ExtendedLinkInfo) else "legacy"
        )
    d["target_path"] = link.target_path
    return d

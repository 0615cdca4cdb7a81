"""Decode Windows .lnk files (MS-SHLLINK) into structured data."""

import warnings

from ._constants import (
    ANSI_CODEPAGE,
    CNRL_MIN_SIZE,
    CNRL_UNICODE_MIN_OFFSET,
    HEADER_SIZE,
    LI_COMMON_NETWORK_RELATIVE_LINK,
    LI_VOLUME_ID_AND_LOCAL_BASE_PATH,
    LINK_CLSID,
    LINK_INFO_HEADER_EXTENDED,
    LINK_INFO_HEADER_LEGACY,
    LINK_INFO_MIN_SIZE,
    STRING_DATA_FIELDS,
    UNICODE_ENCODING,
    VOLUME_ID_MIN_SIZE,
    VOLUME_LABEL_UNICODE_SENTINEL,
)
from ._reader import Cursor
from ._types import Buffer
from ._util import text_codec
from .errors import FormatMismatch, LnkWarning, SizeTooSmall
from .extra import decode_extra_data
from .flags import LinkFlags
from .idlist import decode_id_list
from .structures import (
    CommonNetworkRelativeLink,
    ExtendedLinkInfo,
    LinkInfo,
    ShellLink,
    ShellLinkHeader,
    StringData,
    Text,
    VolumeID,
)

__all__ = [
    "decode",
    "decode_header",
    "decode_id_list",
    "decode_link_info",
    "decode_string_data",
]

# StringData field -> MS-SHLLINK field name, for error messages
_STRING_DATA_LABELS = {
    "name": "NameString",
    "relative_path": "RelativePath",
    "working_dir": "WorkingDir",
    "arguments": "CommandLineArguments",
    "icon_location": "IconLocation",
}


# ---------------------------------------------------------------------------
# Header
# ---------------------------------------------------------------------------
def decode_header(cur: Cursor) -> ShellLinkHeader:
    """Decode the 76-byte ShellLinkHeader at the position of *cur*."""
    hdr = cur.sub(HEADER_SIZE, "ShellLinkHeader")

    header_size = hdr.u32("HeaderSize")
    if header_size != HEADER_SIZE:
        raise FormatMismatch(hdr.section, "HeaderSize", HEADER_SIZE, header_size)
    link_clsid = hdr.guid("LinkCLSID")
    if link_clsid != LINK_CLSID:
        raise FormatMismatch(hdr.section, "LinkCLSID", LINK_CLSID, link_clsid)

    header = ShellLinkHeader(
        header_size=header_size,
        link_clsid=link_clsid,
        link_flags_word=hdr.u32("LinkFlags"),
        file_attributes_word=hdr.u32("FileAttributes"),
        creation_time=hdr.u64("CreationTime"),
        access_time=hdr.u64("AccessTime"),
        write_time=hdr.u64("WriteTime"),
        file_size=hdr.u32("FileSize"),
        icon_index=hdr.i32("IconIndex"),
        show_command=hdr.u32("ShowCommand"),
        hotkey=hdr.u16("HotKey"),
        reserved1=hdr.u16("Reserved1"),
        reserved2=hdr.u32("Reserved2"),
        reserved3=hdr.u32("Reserved3"),
    )

    for label, value in (
        ("Reserved1", header.reserved1),
        ("Reserved2", header.reserved2),
        ("Reserved3", header.reserved3),
    ):
        if value:
            warnings.warn(
                f"ShellLinkHeader.{label} is 0x{value:X} (must be zero)",
                LnkWarning,
                stacklevel=2,
            )
    return header


# ---------------------------------------------------------------------------
# LinkInfo
# ---------------------------------------------------------------------------
def _string_at(
    cur: Cursor, offset: int, offset_field: str, field: str, encoding: str
) -> Text | None:
    """Zero-terminated string at *offset* inside *cur*; None when offset is 0."""
    if offset == 0:
        return None
    target = cur.at(offset, cur.section, offset_field)
    if encoding == UNICODE_ENCODING:
        raw = target.wstring(field)
    else:
        raw = target.cstring(field)
    return Text.decode(raw, encoding, f"{cur.section}.{field}")


def _scoped(
    parent: Cursor,
    offset: int,
    offset_field: str,
    section: str,
    size_field: str,
    minimum: int,
) -> Cursor:
    """Cursor over a size-prefixed structure found at *offset* in *parent*."""
    probe = parent.at(offset, section, offset_field)
    size = probe.u32(size_field)
    if size < minimum:
        raise SizeTooSmall(section, size_field, minimum, size)
    probe.seek(0)
    body = probe.sub(size, section)
    body.skip(4, size_field)
    return body


def _decode_volume_id(li: Cursor, offset: int, codepage: str) -> VolumeID:
    vol = _scoped(
        li,
        offset,
        "VolumeIDOffset",
        "LinkInfo.VolumeID",
        "VolumeIDSize",
        VOLUME_ID_MIN_SIZE,
    )
    drive_type = vol.u32("DriveType")
    serial = vol.u32("DriveSerialNumber")
    label_offset = vol.u32("VolumeLabelOffset")

    label_offset_unicode = None
    label = label_unicode = None
    if label_offset == VOLUME_LABEL_UNICODE_SENTINEL:
        label_offset_unicode = vol.u32("VolumeLabelOffsetUnicode")
        label_unicode = _string_at(
            vol,
            label_offset_unicode,
            "VolumeLabelOffsetUnicode",
            "VolumeLabelUnicode",
            UNICODE_ENCODING,
        )
    else:
        label = _string_at(
            vol, label_offset, "VolumeLabelOffset", "VolumeLabel", codepage
        )

    return VolumeID(
        size=len(vol),
        drive_type=drive_type,
        drive_serial_number=serial,
        volume_label_offset=label_offset,
        volume_label_offset_unicode=label_offset_unicode,
        volume_label=label,
        volume_label_unicode=label_unicode,
    )


def _decode_network_link(
    li: Cursor, offset: int, codepage: str
) -> CommonNetworkRelativeLink:
    cnrl = _scoped(
        li,
        offset,
        "CommonNetworkRelativeLinkOffset",
        "LinkInfo.CommonNetworkRelativeLink",
        "CommonNetworkRelativeLinkSize",
        CNRL_MIN_SIZE,
    )
    flags = cnrl.u32("CommonNetworkRelativeLinkFlags")
    net_name_offset = cnrl.u32("NetNameOffset")
    device_name_offset = cnrl.u32("DeviceNameOffset")
    provider_type = cnrl.u32("NetworkProviderType")

    net_name_offset_unicode = device_name_offset_unicode = None
    net_name_unicode = device_name_unicode = None
    if net_name_offset > CNRL_UNICODE_MIN_OFFSET:
        net_name_offset_unicode = cnrl.u32("NetNameOffsetUnicode")
        device_name_offset_unicode = cnrl.u32("DeviceNameOffsetUnicode")
        net_name_unicode = _string_at(
            cnrl,
            net_name_offset_unicode,
            "NetNameOffsetUnicode",
            "NetNameUnicode",
            UNICODE_ENCODING,
        )
        device_name_unicode = _string_at(
            cnrl,
            device_name_offset_unicode,
            "DeviceNameOffsetUnicode",
            "DeviceNameUnicode",
            UNICODE_ENCODING,
        )

    return CommonNetworkRelativeLink(
        size=len(cnrl),
        flags=flags,
        net_name_offset=net_name_offset,
        device_name_offset=device_name_offset,
        network_provider_type=provider_type,
        net_name_offset_unicode=net_name_offset_unicode,
        device_name_offset_unicode=device_name_offset_unicode,
        net_name=_string_at(cnrl, net_name_offset, "NetNameOffset", "NetName", codepage),
        device_name=_string_at(
            cnrl, device_name_offset, "DeviceNameOffset", "DeviceName", codepage
        ),
        net_name_unicode=net_name_unicode,
        device_name_unicode=device_name_unicode,
    )


def decode_link_info(cur: Cursor, codepage: str = ANSI_CODEPAGE) -> LinkInfo:
    """Decode the LinkInfo structure at the position of *cur*.

    Offsets inside LinkInfo count from its first byte (the LinkInfoSize
    field).  A header size of 0x24 or more selects the extended layout with
    Unicode offsets, returned as :class:`ExtendedLinkInfo`.
    """
    start = cur.offset
    size = cur.u32("LinkInfoSize")
    if size < LINK_INFO_MIN_SIZE:
        raise SizeTooSmall("LinkInfo", "LinkInfoSize", LINK_INFO_MIN_SIZE, size)
    cur.seek(start)
    li = cur.sub(size, "LinkInfo")
    li.skip(4, "LinkInfoSize")

    header_size = li.u32("LinkInfoHeaderSize")
    if header_size < LINK_INFO_HEADER_LEGACY:
        raise SizeTooSmall(
            li.section, "LinkInfoHeaderSize", LINK_INFO_HEADER_LEGACY, header_size
        )
    flags = li.u32("LinkInfoFlags")
    volume_id_offset = li.u32("VolumeIDOffset")
    local_base_path_offset = li.u32("LocalBasePathOffset")
    cnrl_offset = li.u32("CommonNetworkRelativeLinkOffset")
    suffix_offset = li.u32("CommonPathSuffixOffset")

    extended = header_size >= LINK_INFO_HEADER_EXTENDED
    if extended:
        local_base_path_offset_unicode = li.u32("LocalBasePathOffsetUnicode")
        suffix_offset_unicode = li.u32("CommonPathSuffixOffsetUnicode")

    volume_id = local_base_path = local_base_path_unicode = None
    if flags & LI_VOLUME_ID_AND_LOCAL_BASE_PATH:
        if volume_id_offset:
            volume_id = _decode_volume_id(li, volume_id_offset, codepage)
        local_base_path = _string_at(
            li,
            local_base_path_offset,
            "LocalBasePathOffset",
            "LocalBasePath",
            codepage,
        )
        if extended:
            local_base_path_unicode = _string_at(
                li,
                local_base_path_offset_unicode,
                "LocalBasePathOffsetUnicode",
                "LocalBasePathUnicode",
                UNICODE_ENCODING,
            )

    network_link = None
    if flags & LI_COMMON_NETWORK_RELATIVE_LINK and cnrl_offset:
        network_link = _decode_network_link(li, cnrl_offset, codepage)

    fields = dict(
        size=size,
        header_size=header_size,
        flags=flags,
        volume_id_offset=volume_id_offset,
        local_base_path_offset=local_base_path_offset,
        common_network_relative_link_offset=cnrl_offset,
        common_path_suffix_offset=suffix_offset,
        volume_id=volume_id,
        local_base_path=local_base_path,
        common_network_relative_link=network_link,
        common_path_suffix=_string_at(
            li, suffix_offset, "CommonPathSuffixOffset", "CommonPathSuffix", codepage
        ),
    )
    if not extended:
        return LinkInfo(**fields)
    return ExtendedLinkInfo(
        **fields,
        local_base_path_offset_unicode=local_base_path_offset_unicode,
        common_path_suffix_offset_unicode=suffix_offset_unicode,
        local_base_path_unicode=local_base_path_unicode,
        common_path_suffix_unicode=_string_at(
            li,
            suffix_offset_unicode,
            "CommonPathSuffixOffsetUnicode",
            "CommonPathSuffixUnicode",
            UNICODE_ENCODING,
        ),
    )


# ---------------------------------------------------------------------------
# StringData
# ---------------------------------------------------------------------------
def decode_string_data(
    cur: Cursor, flags: LinkFlags, codepage: str = ANSI_CODEPAGE
) -> StringData:
    """Decode the StringData fields selected by *flags*, in stream order.

    The whole section uses one encoding: UTF-16LE when IsUnicode is set,
    *codepage* otherwise.  Counts are in characters and no terminator is
    consumed.
    """
    unicode = flags.is_unicode
    encoding = UNICODE_ENCODING if unicode else codepage
    values = {}
    for name, flag in STRING_DATA_FIELDS:
        if not getattr(flags, flag):
            continue
        label = f"StringData.{_STRING_DATA_LABELS[name]}"
        raw = cur.counted_string(unicode, label)
        values[name] = Text.decode(raw, encoding, label)
    return StringData(is_unicode=unicode, **values)


# ---------------------------------------------------------------------------
# Main decoder
# ---------------------------------------------------------------------------
def decode(data: Buffer, *, codepage: str = ANSI_CODEPAGE) -> ShellLink:
    """Decode a whole .lnk file held in memory and return a :class:`ShellLink`.

    Args:
        data: The raw bytes of a .lnk file.
        codepage: Encoding of the legacy 8-bit strings.

    Raises:
        DecodeError: The data is not a well-formed shell link.
        ValueError: *codepage* is not a text encoding.
    """
    text_codec(codepage)
    cur = Cursor(data)
    header = decode_header(cur)
    flags = header.link_flags

    target_id_list = decode_id_list(cur) if flags.has_link_target_id_list else None
    link_info = decode_link_info(cur, codepage) if flags.has_link_info else None
    if flags.has_string_data:
        string_data = decode_string_data(cur, flags, codepage)
    else:
        string_data = StringData(is_unicode=flags.is_unicode)
    extra_data = decode_extra_data(cur, codepage)

    return ShellLink(
        header=header,
        target_id_list=target_id_list,
        link_info=link_info,
        string_data=string_data,
        extra_data=extra_data,
    )

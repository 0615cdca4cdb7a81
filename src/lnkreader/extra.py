"""Decode the ExtraData block chain (MS-SHLLINK 2.5)."""

import warnings
from enum import IntEnum

from ._constants import (
    ANSI_CODEPAGE,
    ANSI_SLOT_SIZE,
    EXTRA_BLOCK_HEADER_SIZE,
    EXTRA_SIGS,
    PROPERTY_SET_GUIDS,
    PROPERTY_STORAGE_HEADER_SIZE,
    PROPERTY_STORAGE_VERSION,
    SHIM_MIN_SIZE,
    STRING_NAMED_FORMAT_ID,
    TRACKER_LENGTH,
    TRACKER_VERSION,
    UNICODE_ENCODING,
    UNICODE_SLOT_SIZE,
    VT_TYPES,
)
from ._reader import Cursor
from ._util import filetime_to_datetime, format_guid, trim_cstring, trim_wstring
from .errors import FormatMismatch, LnkWarning, SizeTooSmall, UnexpectedEnd
from .idlist import decode_item_ids
from .structures import (
    ConsoleDataBlock,
    ConsoleFEDataBlock,
    DarwinDataBlock,
    EnvironmentVariableDataBlock,
    ExtraDataBlock,
    IconEnvironmentDataBlock,
    KnownFolderDataBlock,
    PropertyStore,
    PropertyStoreDataBlock,
    PropertyValue,
    ShimDataBlock,
    SpecialFolderDataBlock,
    Text,
    TrackerDataBlock,
    UnknownDataBlock,
    VistaAndAboveIDListDataBlock,
)


class BlockSignature(IntEnum):
    ENVIRONMENT_VARIABLE = 0xA0000001
    CONSOLE = 0xA0000002
    TRACKER = 0xA0000003
    CONSOLE_FE = 0xA0000004
    SPECIAL_FOLDER = 0xA0000005
    DARWIN = 0xA0000006
    ICON_ENVIRONMENT = 0xA0000007
    SHIM = 0xA0000008
    PROPERTY_STORE = 0xA0000009
    KNOWN_FOLDER = 0xA000000B
    VISTA_AND_ABOVE_ID_LIST = 0xA000000C


# ---------------------------------------------------------------------------
# String slot helpers
# ---------------------------------------------------------------------------
def _ansi_slot(cur: Cursor, size: int, field: str, codepage: str) -> Text:
    raw = trim_cstring(cur.read(size, field))
    return Text.decode(raw, codepage, f"{cur.section}.{field}")


def _unicode_slot(cur: Cursor, size: int, field: str) -> Text:
    raw = trim_wstring(cur.read(size, field))
    return Text.decode(raw, UNICODE_ENCODING, f"{cur.section}.{field}")


# ---------------------------------------------------------------------------
# Per-signature decoders
# ---------------------------------------------------------------------------
def _decode_environment(body: Cursor, head: dict, codepage: str):
    return EnvironmentVariableDataBlock(
        **head,
        target_ansi=_ansi_slot(body, ANSI_SLOT_SIZE, "TargetAnsi", codepage),
        target_unicode=_unicode_slot(body, UNICODE_SLOT_SIZE, "TargetUnicode"),
    )


def _decode_icon_environment(body: Cursor, head: dict, codepage: str):
    return IconEnvironmentDataBlock(
        **head,
        target_ansi=_ansi_slot(body, ANSI_SLOT_SIZE, "TargetAnsi", codepage),
        target_unicode=_unicode_slot(body, UNICODE_SLOT_SIZE, "TargetUnicode"),
    )


def _decode_darwin(body: Cursor, head: dict, codepage: str):
    return DarwinDataBlock(
        **head,
        darwin_data_ansi=_ansi_slot(body, ANSI_SLOT_SIZE, "DarwinDataAnsi", codepage),
        darwin_data_unicode=_unicode_slot(
            body, UNICODE_SLOT_SIZE, "DarwinDataUnicode"
        ),
    )


_CONSOLE_WINDOW = (
    ("fill_attributes", "FillAttributes"),
    ("popup_fill_attributes", "PopupFillAttributes"),
    ("screen_buffer_size_x", "ScreenBufferSizeX"),
    ("screen_buffer_size_y", "ScreenBufferSizeY"),
    ("window_size_x", "WindowSizeX"),
    ("window_size_y", "WindowSizeY"),
    ("window_origin_x", "WindowOriginX"),
    ("window_origin_y", "WindowOriginY"),
)
_CONSOLE_FONT = (
    ("font_size", "FontSize"),
    ("font_family", "FontFamily"),
    ("font_weight", "FontWeight"),
)
_CONSOLE_OPTIONS = (
    ("cursor_size", "CursorSize"),
    ("full_screen", "FullScreen"),
    ("quick_edit", "QuickEdit"),
    ("insert_mode", "InsertMode"),
    ("auto_position", "AutoPosition"),
    ("history_buffer_size", "HistoryBufferSize"),
    ("number_of_history_buffers", "NumberOfHistoryBuffers"),
    ("history_no_dup", "HistoryNoDup"),
)


def _decode_console(body: Cursor, head: dict, codepage: str):
    values = {name: body.u16(label) for name, label in _CONSOLE_WINDOW}
    body.skip(8, "Unused1")
    values.update({name: body.u32(label) for name, label in _CONSOLE_FONT})
    values["face_name"] = _unicode_slot(body, 64, "FaceName")
    values.update({name: body.u32(label) for name, label in _CONSOLE_OPTIONS})
    values["color_table"] = tuple(body.u32("ColorTable") for _ in range(16))
    return ConsoleDataBlock(**head, **values)


def _decode_console_fe(body: Cursor, head: dict, codepage: str):
    return ConsoleFEDataBlock(**head, code_page=body.u32("CodePage"))


def _decode_known_folder(body: Cursor, head: dict, codepage: str):
    return KnownFolderDataBlock(
        **head,
        known_folder_id=format_guid(body.guid("KnownFolderID")),
        offset=body.u32("Offset"),
    )


def _decode_special_folder(body: Cursor, head: dict, codepage: str):
    return SpecialFolderDataBlock(
        **head,
        special_folder_id=body.u32("SpecialFolderID"),
        offset=body.u32("Offset"),
    )


def _decode_tracker(body: Cursor, head: dict, codepage: str):
    length = body.u32("Length")
    version = body.u32("Version")
    if length != TRACKER_LENGTH:
        warnings.warn(
            f"TrackerDataBlock Length 0x{length:X} (expected 0x{TRACKER_LENGTH:X})",
            LnkWarning,
            stacklevel=3,
        )
    if version != TRACKER_VERSION:
        warnings.warn(
            f"TrackerDataBlock Version {version} (expected {TRACKER_VERSION})",
            LnkWarning,
            stacklevel=3,
        )
    return TrackerDataBlock(
        **head,
        length=length,
        version=version,
        machine_id=_ansi_slot(body, 16, "MachineID", codepage),
        droid_volume_id=format_guid(body.guid("DroidVolumeID")),
        droid_file_id=format_guid(body.guid("DroidFileID")),
        birth_droid_volume_id=format_guid(body.guid("BirthDroidVolumeID")),
        birth_droid_file_id=format_guid(body.guid("BirthDroidFileID")),
    )


def _decode_shim(body: Cursor, head: dict, codepage: str):
    raw = trim_wstring(body.rest())
    return ShimDataBlock(
        **head,
        layer_name=Text.decode(raw, UNICODE_ENCODING, f"{body.section}.LayerName"),
    )


def _decode_vista_id_list(body: Cursor, head: dict, codepage: str):
    return VistaAndAboveIDListDataBlock(**head, items=decode_item_ids(body))


# ---------------------------------------------------------------------------
# Property Store (MS-PROPSTORE)
# ---------------------------------------------------------------------------
def _decode_typed_value(cur: Cursor, codepage: str) -> tuple[int, object]:
    """Decode a TypedPropertyValue.  Returns ``(vtype, value)``."""
    if cur.remaining < 4:
        return 0, None
    vtype = cur.u16("Type")
    cur.skip(2, "Padding")

    if vtype == 0x0002:  # VT_I2
        return vtype, cur.i16("Value")
    elif vtype == 0x0003:  # VT_I4
        return vtype, cur.i32("Value")
    elif vtype == 0x0013:  # VT_UI4
        return vtype, cur.u32("Value")
    elif vtype == 0x0014:  # VT_I8
        return vtype, cur.i64("Value")
    elif vtype == 0x0015:  # VT_UI8
        return vtype, cur.u64("Value")
    elif vtype == 0x000B:  # VT_BOOL
        return vtype, cur.u16("Value") != 0
    elif vtype == 0x001F:  # VT_LPWSTR
        char_count = cur.u32("Length")
        raw = trim_wstring(cur.read(char_count * 2, "Value"))
        return vtype, Text.decode(raw, UNICODE_ENCODING, f"{cur.section}.Value")
    elif vtype == 0x001E:  # VT_LPSTR
        byte_count = cur.u32("Length")
        raw = trim_cstring(cur.read(byte_count, "Value"))
        return vtype, Text.decode(raw, codepage, f"{cur.section}.Value")
    elif vtype == 0x0040:  # VT_FILETIME
        return vtype, filetime_to_datetime(cur.u64("Value"))
    elif vtype == 0x0048:  # VT_CLSID
        return vtype, format_guid(cur.guid("Value"))
    else:
        return vtype, cur.rest()


def _decode_property_values(
    cur: Cursor, string_named: bool, codepage: str
) -> tuple[PropertyValue, ...]:
    props = []
    while cur.remaining >= 4:
        value_size = cur.u32("ValueSize")
        if value_size == 0:
            break
        if value_size < 9:
            raise SizeTooSmall(cur.section, "ValueSize", 9, value_size)
        entry = cur.sub(value_size - 4, "PropertyValue")
        if string_named:
            name_size = entry.u32("NameSize")
            entry.skip(1, "Reserved")
            raw = trim_wstring(entry.read(name_size, "Name"))
            pid = Text.decode(raw, UNICODE_ENCODING, f"{entry.section}.Name")
        else:
            pid = entry.u32("Id")
            entry.skip(1, "Reserved")
        vtype, value = _decode_typed_value(entry, codepage)
        type_name = VT_TYPES.get(vtype, f"0x{vtype:04X}")
        props.append(PropertyValue(id=pid, type=vtype, type_name=type_name, value=value))
    return tuple(props)


def decode_property_stores(cur: Cursor, codepage: str = ANSI_CODEPAGE):
    """Decode a sequence of Serialized Property Storages."""
    stores = []
    while cur.remaining >= 4:
        storage_size = cur.u32("StorageSize")
        if storage_size == 0:
            break
        if storage_size < PROPERTY_STORAGE_HEADER_SIZE:
            raise SizeTooSmall(
                cur.section, "StorageSize", PROPERTY_STORAGE_HEADER_SIZE, storage_size
            )
        storage = cur.sub(storage_size - 4, "PropertyStorage")
        version = storage.u32("Version")
        if version != PROPERTY_STORAGE_VERSION:
            raise FormatMismatch(
                storage.section, "Version", PROPERTY_STORAGE_VERSION, version
            )
        fmt_id = format_guid(storage.guid("FormatID"))
        props = _decode_property_values(
            storage, fmt_id == STRING_NAMED_FORMAT_ID, codepage
        )
        stores.append(
            PropertyStore(
                format_id=fmt_id,
                format_name=PROPERTY_SET_GUIDS.get(fmt_id, "Unknown"),
                properties=props,
            )
        )
    return tuple(stores)


def _decode_property_store(body: Cursor, head: dict, codepage: str):
    return PropertyStoreDataBlock(**head, stores=decode_property_stores(body, codepage))


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------
# signature -> (minimum BlockSize, decoder)
_DECODERS = {
    BlockSignature.ENVIRONMENT_VARIABLE: (0x314, _decode_environment),
    BlockSignature.CONSOLE: (0xCC, _decode_console),
    BlockSignature.TRACKER: (0x60, _decode_tracker),
    BlockSignature.CONSOLE_FE: (0x0C, _decode_console_fe),
    BlockSignature.SPECIAL_FOLDER: (0x10, _decode_special_folder),
    BlockSignature.DARWIN: (0x314, _decode_darwin),
    BlockSignature.ICON_ENVIRONMENT: (0x314, _decode_icon_environment),
    BlockSignature.SHIM: (SHIM_MIN_SIZE, _decode_shim),
    BlockSignature.PROPERTY_STORE: (0x0C, _decode_property_store),
    BlockSignature.KNOWN_FOLDER: (0x1C, _decode_known_folder),
    BlockSignature.VISTA_AND_ABOVE_ID_LIST: (0x0A, _decode_vista_id_list),
}


def decode_block(body: Cursor, size: int, signature: int, codepage: str):
    """Decode one block whose payload is the whole of *body*."""
    payload = body.read(body.remaining)
    body.seek(0)
    head = {"size": size, "signature": signature, "payload": payload}

    entry = _DECODERS.get(signature)
    if entry is None:
        return UnknownDataBlock(**head)
    minimum, decoder = entry
    if size < minimum:
        if signature != BlockSignature.SHIM:
            raise SizeTooSmall(body.section, "BlockSize", minimum, size)
        warnings.warn(
            f"ShimDataBlock BlockSize 0x{size:X} is below 0x{minimum:X}",
            LnkWarning,
            stacklevel=2,
        )
    return decoder(body, head, codepage)


def decode_extra_data(
    cur: Cursor, codepage: str = ANSI_CODEPAGE
) -> tuple[ExtraDataBlock, ...]:
    """Decode blocks until the terminal block (size < 8) or the end of *cur*."""
    blocks = []
    while cur.remaining >= 4:
        start = cur.offset
        size = cur.u32("BlockSize")
        if size < EXTRA_BLOCK_HEADER_SIZE:
            break
        if size - 4 > cur.remaining:
            raise UnexpectedEnd(cur.section, "BlockSize", start, size, cur.remaining + 4)
        signature = cur.u32("BlockSignature")
        name = EXTRA_SIGS.get(signature, f"ExtraDataBlock(0x{signature:08X})")
        body = cur.sub(size - EXTRA_BLOCK_HEADER_SIZE, name)
        blocks.append(decode_block(body, size, signature, codepage))
    else:
        if cur.remaining:
            warnings.warn(
                f"{cur.section}: {cur.remaining} trailing byte(s) after ExtraData",
                LnkWarning,
                stacklevel=2,
            )
    return tuple(blocks)

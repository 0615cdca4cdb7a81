"""Immutable result types produced by :func:`lnkreader.decode`."""

import warnings
from dataclasses import dataclass
from datetime import datetime

from ._constants import (
    CNRL_VALID_DEVICE,
    CNRL_VALID_NET_TYPE,
    DRIVE_TYPES,
    EXTRA_SIGS,
    KNOWN_FOLDER_NAMES,
    LI_COMMON_NETWORK_RELATIVE_LINK,
    LI_VOLUME_ID_AND_LOCAL_BASE_PATH,
    SHOW_CMD,
    STRING_DATA_FIELDS,
    WNNC_NET_TYPES,
)
from ._util import filetime_to_datetime, format_hotkey
from .errors import TextDecodeFailure
from .flags import FileAttributes, LinkFlags


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class Text:
    """A string field together with the bytes it was decoded from.

    ``valid`` is False when *raw* is not valid in *encoding*; *value* then
    carries U+FFFD replacement characters and *raw* is the lossless copy.
    """

    value: str
    raw: bytes
    encoding: str
    valid: bool = True

    def __str__(self) -> str:
        return self.value

    @classmethod
    def decode(cls, raw: bytes, encoding: str, where: str = "") -> "Text":
        try:
            return cls(raw.decode(encoding), raw, encoding)
        except UnicodeDecodeError as exc:
            warnings.warn(
                f"{where}: {len(raw)} byte(s) are not valid {encoding} ({exc.reason})",
                TextDecodeFailure,
                stacklevel=2,
            )
            return cls(raw.decode(encoding, errors="replace"), raw, encoding, False)


def _text(*candidates: "Text | None") -> str:
    """First non-empty value among *candidates*."""
    for t in candidates:
        if t is not None and t.value:
            return t.value
    return ""


# ---------------------------------------------------------------------------
# Header
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class ShellLinkHeader:
    """The fixed 76-byte ShellLinkHeader.

    Timestamps are raw FILETIME values; ``created``/``accessed``/``modified``
    convert them.  ``link_flags`` and ``file_attributes`` are views over the
    raw words.
    """

    header_size: int
    link_clsid: bytes
    link_flags_word: int
    file_attributes_word: int
    creation_time: int
    access_time: int
    write_time: int
    file_size: int
    icon_index: int
    show_command: int
    hotkey: int
    reserved1: int
    reserved2: int
    reserved3: int

    @property
    def link_flags(self) -> LinkFlags:
        return LinkFlags.from_word(self.link_flags_word)

    @property
    def file_attributes(self) -> FileAttributes:
        return FileAttributes.from_word(self.file_attributes_word)

    @property
    def created(self) -> datetime | None:
        return filetime_to_datetime(self.creation_time)

    @property
    def accessed(self) -> datetime | None:
        return filetime_to_datetime(self.access_time)

    @property
    def modified(self) -> datetime | None:
        return filetime_to_datetime(self.write_time)

    @property
    def show_command_name(self) -> str:
        # Any other value MUST be treated as SW_SHOWNORMAL.
        return SHOW_CMD.get(self.show_command, "SW_SHOWNORMAL")

    @property
    def hotkey_vk(self) -> int:
        return self.hotkey & 0xFF

    @property
    def hotkey_mod(self) -> int:
        return self.hotkey >> 8

    @property
    def hotkey_str(self) -> str:
        return format_hotkey(self.hotkey_vk, self.hotkey_mod)


# ---------------------------------------------------------------------------
# LinkTargetIDList
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class ItemID:
    """One opaque SHITEMID; *size* includes the 2-byte size field."""

    size: int
    data: bytes

    @property
    def type_byte(self) -> int:
        return self.data[0] if self.data else 0


@dataclass(frozen=True, slots=True)
class TargetIDList:
    size: int
    items: tuple[ItemID, ...]


# ---------------------------------------------------------------------------
# LinkInfo
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class VolumeID:
    """Volume the link target was stored on.

    The label is Unicode only when ``volume_label_offset`` is the 0x14
    sentinel, in which case ``volume_label_offset_unicode`` is set and
    ``volume_label`` is None.
    """

    size: int
    drive_type: int
    drive_serial_number: int
    volume_label_offset: int
    volume_label_offset_unicode: int | None
    volume_label: Text | None
    volume_label_unicode: Text | None

    @property
    def drive_type_name(self) -> str:
        return DRIVE_TYPES.get(self.drive_type, f"0x{self.drive_type:X}")

    @property
    def label(self) -> str:
        return _text(self.volume_label_unicode, self.volume_label)


@dataclass(frozen=True, slots=True)
class CommonNetworkRelativeLink:
    size: int
    flags: int
    net_name_offset: int
    device_name_offset: int
    network_provider_type: int
    net_name_offset_unicode: int | None
    device_name_offset_unicode: int | None
    net_name: Text | None
    device_name: Text | None
    net_name_unicode: Text | None
    device_name_unicode: Text | None

    @property
    def valid_device(self) -> bool:
        return bool(self.flags & CNRL_VALID_DEVICE)

    @property
    def valid_net_type(self) -> bool:
        return bool(self.flags & CNRL_VALID_NET_TYPE)

    @property
    def network_provider_name(self) -> str:
        if not self.valid_net_type:
            return ""
        return WNNC_NET_TYPES.get(
            self.network_provider_type, f"0x{self.network_provider_type:08X}"
        )

    @property
    def share_name(self) -> str:
        return _text(self.net_name_unicode, self.net_name)

    @property
    def device(self) -> str:
        return _text(self.device_name_unicode, self.device_name)


@dataclass(frozen=True, slots=True)
class LinkInfo:
    """LinkInfo in the legacy layout (``header_size < 0x24``).

    All ``*_offset`` values are relative to the first byte of the LinkInfo
    structure; 0 means the item is absent.
    """

    size: int
    header_size: int
    flags: int
    volume_id_offset: int
    local_base_path_offset: int
    common_network_relative_link_offset: int
    common_path_suffix_offset: int
    volume_id: VolumeID | None
    local_base_path: Text | None
    common_network_relative_link: CommonNetworkRelativeLink | None
    common_path_suffix: Text | None

    @property
    def has_volume_id_and_local_base_path(self) -> bool:
        return bool(self.flags & LI_VOLUME_ID_AND_LOCAL_BASE_PATH)

    @property
    def has_common_network_relative_link(self) -> bool:
        return bool(self.flags & LI_COMMON_NETWORK_RELATIVE_LINK)

    @property
    def base_path(self) -> str:
        return _text(self.local_base_path)

    @property
    def path_suffix(self) -> str:
        return _text(self.common_path_suffix)


@dataclass(frozen=True, slots=True)
class ExtendedLinkInfo(LinkInfo):
    """LinkInfo with the Unicode offsets (``header_size >= 0x24``)."""

    local_base_path_offset_unicode: int
    common_path_suffix_offset_unicode: int
    local_base_path_unicode: Text | None
    common_path_suffix_unicode: Text | None

    @property
    def base_path(self) -> str:
        return _text(self.local_base_path_unicode, self.local_base_path)

    @property
    def path_suffix(self) -> str:
        return _text(self.common_path_suffix_unicode, self.common_path_suffix)


# ---------------------------------------------------------------------------
# StringData
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class StringData:
    """The optional display strings; absent fields are None, not empty."""

    is_unicode: bool = False
    name: Text | None = None
    relative_path: Text | None = None
    working_dir: Text | None = None
    arguments: Text | None = None
    icon_location: Text | None = None

    def present(self) -> list[tuple[str, Text]]:
        """``(field, value)`` pairs for the fields found, in stream order."""
        return [
            (name, getattr(self, name))
            for name, _ in STRING_DATA_FIELDS
            if getattr(self, name) is not None
        ]


# ---------------------------------------------------------------------------
# ExtraData
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class ExtraDataBlock:
    """Common part of every ExtraData block.

    *size* is the declared BlockSize including the 8-byte size/signature
    header; *payload* is everything after that header, verbatim.
    """

    size: int
    signature: int
    payload: bytes

    @property
    def name(self) -> str:
        return EXTRA_SIGS.get(self.signature, f"Unknown(0x{self.signature:08X})")


@dataclass(frozen=True, slots=True)
class UnknownDataBlock(ExtraDataBlock):
    """Block with a signature this package does not interpret."""


@dataclass(frozen=True, slots=True)
class EnvironmentVariableDataBlock(ExtraDataBlock):
    target_ansi: Text
    target_unicode: Text

    @property
    def target(self) -> str:
        return _text(self.target_unicode, self.target_ansi)


@dataclass(frozen=True, slots=True)
class IconEnvironmentDataBlock(ExtraDataBlock):
    target_ansi: Text
    target_unicode: Text

    @property
    def target(self) -> str:
        return _text(self.target_unicode, self.target_ansi)


@dataclass(frozen=True, slots=True)
class DarwinDataBlock(ExtraDataBlock):
    darwin_data_ansi: Text
    darwin_data_unicode: Text


@dataclass(frozen=True, slots=True)
class ConsoleDataBlock(ExtraDataBlock):
    """Console window settings for console application targets."""

    fill_attributes: int
    popup_fill_attributes: int
    screen_buffer_size_x: int
    screen_buffer_size_y: int
    window_size_x: int
    window_size_y: int
    window_origin_x: int
    window_origin_y: int
    font_size: int
    font_family: int
    font_weight: int
    face_name: Text
    cursor_size: int
    full_screen: int
    quick_edit: int
    insert_mode: int
    auto_position: int
    history_buffer_size: int
    number_of_history_buffers: int
    history_no_dup: int
    color_table: tuple[int, ...]


@dataclass(frozen=True, slots=True)
class ConsoleFEDataBlock(ExtraDataBlock):
    code_page: int


@dataclass(frozen=True, slots=True)
class KnownFolderDataBlock(ExtraDataBlock):
    known_folder_id: str
    offset: int

    @property
    def known_folder_name(self) -> str:
        return KNOWN_FOLDER_NAMES.get(self.known_folder_id, "Unknown")


@dataclass(frozen=True, slots=True)
class SpecialFolderDataBlock(ExtraDataBlock):
    special_folder_id: int
    offset: int


@dataclass(frozen=True, slots=True)
class TrackerDataBlock(ExtraDataBlock):
    """Distributed Link Tracking data (machine NetBIOS name and droids)."""

    length: int
    version: int
    machine_id: Text
    droid_volume_id: str
    droid_file_id: str
    birth_droid_volume_id: str
    birth_droid_file_id: str


@dataclass(frozen=True, slots=True)
class ShimDataBlock(ExtraDataBlock):
    layer_name: Text


@dataclass(frozen=True, slots=True)
class PropertyValue:
    """A single property from a Serialized Property Store."""

    id: int | Text
    type: int
    type_name: str
    value: object


@dataclass(frozen=True, slots=True)
class PropertyStore:
    """One serialized property storage (one Format ID's properties)."""

    format_id: str
    format_name: str
    properties: tuple[PropertyValue, ...]


@dataclass(frozen=True, slots=True)
class PropertyStoreDataBlock(ExtraDataBlock):
    stores: tuple[PropertyStore, ...]


@dataclass(frozen=True, slots=True)
class VistaAndAboveIDListDataBlock(ExtraDataBlock):
    items: tuple[ItemID, ...]


# ---------------------------------------------------------------------------
# ShellLink
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class ShellLink:
    """A decoded .lnk file."""

    header: ShellLinkHeader
    target_id_list: TargetIDList | None
    link_info: LinkInfo | None
    string_data: StringData
    extra_data: tuple[ExtraDataBlock, ...]

    @property
    def link_flags(self) -> LinkFlags:
        return self.header.link_flags

    def find_block(self, block_type: type[ExtraDataBlock]) -> ExtraDataBlock | None:
        """First extra-data block of *block_type*, or None."""
        for block in self.extra_data:
            if isinstance(block, block_type):
                return block
        return None

    @property
    def target_path(self) -> str:
        """Target path composed from LinkInfo (empty if unavailable).

        LinkInfo is ignored when the ForceNoLinkInfo flag is set.
        """
        info = self.link_info
        if info is None or self.link_flags.force_no_link_info:
            return ""
        suffix = info.path_suffix
        if info.has_volume_id_and_local_base_path and info.base_path:
            return info.base_path + suffix
        cnrl = info.common_network_relative_link
        if info.has_common_network_relative_link and cnrl is not None:
            share = cnrl.share_name
            return f"{share}\\{suffix}" if suffix else share
        return ""

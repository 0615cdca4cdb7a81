"""lnkreader -- decode Windows .lnk files (MS-SHLLINK)."""

__version__ = "0.1.0"

from .errors import (
    DecodeError,
    FormatMismatch,
    InvalidOffset,
    LnkWarning,
    SizeTooSmall,
    TextDecodeFailure,
    UnexpectedEnd,
)
from .extra import BlockSignature
from .flags import FileAttributes, LinkFlags
from .parser import decode
from .report import format_lnk, to_dict
from .structures import (
    CommonNetworkRelativeLink,
    ConsoleDataBlock,
    ConsoleFEDataBlock,
    DarwinDataBlock,
    EnvironmentVariableDataBlock,
    ExtendedLinkInfo,
    ExtraDataBlock,
    IconEnvironmentDataBlock,
    ItemID,
    KnownFolderDataBlock,
    LinkInfo,
    PropertyStore,
    PropertyStoreDataBlock,
    PropertyValue,
    ShellLink,
    ShellLinkHeader,
    ShimDataBlock,
    SpecialFolderDataBlock,
    StringData,
    TargetIDList,
    Text,
    TrackerDataBlock,
    UnknownDataBlock,
    VistaAndAboveIDListDataBlock,
    VolumeID,
)

__all__ = [
    "decode",
    "format_lnk",
    "to_dict",
    "ShellLink",
    "ShellLinkHeader",
    "LinkFlags",
    "FileAttributes",
    "TargetIDList",
    "ItemID",
    "LinkInfo",
    "ExtendedLinkInfo",
    "VolumeID",
    "CommonNetworkRelativeLink",
    "StringData",
    "Text",
    "BlockSignature",
    "ExtraDataBlock",
    "UnknownDataBlock",
    "ConsoleDataBlock",
    "ConsoleFEDataBlock",
    "DarwinDataBlock",
    "EnvironmentVariableDataBlock",
    "IconEnvironmentDataBlock",
    "KnownFolderDataBlock",
    "PropertyStoreDataBlock",
    "ShimDataBlock",
    "SpecialFolderDataBlock",
    "TrackerDataBlock",
    "VistaAndAboveIDListDataBlock",
    "PropertyStore",
    "PropertyValue",
    "DecodeError",
    "FormatMismatch",
    "SizeTooSmall",
    "UnexpectedEnd",
    "InvalidOffset",
    "LnkWarning",
    "TextDecodeFailure",
    "__version__",
]

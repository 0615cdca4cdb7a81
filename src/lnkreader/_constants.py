"""MS-SHLLINK constants and lookup tables shared by the decoders."""

# ---------------------------------------------------------------------------
# ANSI code page
# ---------------------------------------------------------------------------
# Legacy string fields are encoded with the "system default code page" of
# the machine that created the link.  Western/English Windows uses CP-1252;
# East Asian systems use CP-932, CP-936, CP-949 or CP-950.  Callers that know
# better pass ``codepage=`` to :func:`lnkreader.decode`.
ANSI_CODEPAGE = "cp1252"
UNICODE_ENCODING = "utf-16-le"

# Upper bound for zero-terminated string scans (characters, not bytes).
MAX_STRING_CHARS = 0x8000

# ---------------------------------------------------------------------------
# Header
# ---------------------------------------------------------------------------
HEADER_SIZE = 0x4C

LINK_CLSID = b"\x01\x14\x02\x00\x00\x00\x00\x00\xc0\x00\x00\x00\x00\x00\x00\x46"

# ---------------------------------------------------------------------------
# ShowWindow commands (MS-SHLLINK 2.1.1)
# ---------------------------------------------------------------------------
SW_SHOWNORMAL = 1
SW_MAXIMIZED = 3
SW_MINIMIZED = 7

SHOW_CMD = {
    SW_SHOWNORMAL: "SW_SHOWNORMAL",
    SW_MAXIMIZED: "SW_MAXIMIZED",
    SW_MINIMIZED: "SW_MINIMIZED",
}

# ---------------------------------------------------------------------------
# LinkFlags bits: (field name, bit, MS-SHLLINK name)
# ---------------------------------------------------------------------------
# Bits 27-31 are "unused, MUST be zero" in the published format; the names
# are the shell's SLDF_* meanings for them.
LINK_FLAG_BITS = (
    ("has_link_target_id_list", 0, "HasLinkTargetIDList"),
    ("has_link_info", 1, "HasLinkInfo"),
    ("has_name", 2, "HasName"),
    ("has_relative_path", 3, "HasRelativePath"),
    ("has_working_dir", 4, "HasWorkingDir"),
    ("has_arguments", 5, "HasArguments"),
    ("has_icon_location", 6, "HasIconLocation"),
    ("is_unicode", 7, "IsUnicode"),
    ("force_no_link_info", 8, "ForceNoLinkInfo"),
    ("has_exp_string", 9, "HasExpString"),
    ("run_in_separate_process", 10, "RunInSeparateProcess"),
    ("unused1", 11, "Unused1"),
    ("has_darwin_id", 12, "HasDarwinID"),
    ("run_as_user", 13, "RunAsUser"),
    ("has_exp_icon", 14, "HasExpIcon"),
    ("no_pidl_alias", 15, "NoPidlAlias"),
    ("unused2", 16, "Unused2"),
    ("run_with_shim_layer", 17, "RunWithShimLayer"),
    ("force_no_link_track", 18, "ForceNoLinkTrack"),
    ("enable_target_metadata", 19, "EnableTargetMetadata"),
    ("disable_link_path_tracking", 20, "DisableLinkPathTracking"),
    ("disable_known_folder_tracking", 21, "DisableKnownFolderTracking"),
    ("disable_known_folder_alias", 22, "DisableKnownFolderAlias"),
    ("allow_link_to_link", 23, "AllowLinkToLink"),
    ("unalias_on_save", 24, "UnaliasOnSave"),
    ("prefer_environment_path", 25, "PreferEnvironmentPath"),
    ("keep_local_id_list_for_unc_target", 26, "KeepLocalIDListForUNCTarget"),
    ("persist_volume_id_relative", 27, "PersistVolumeIDRelative"),
    ("html_no_sub_dir_creation", 28, "HTMLNoSubDirCreation"),
    ("disallow_user_view", 29, "DisallowUserView"),
    ("force_perceived_type_system", 30, "ForcePerceivedTypeSystem"),
    ("include_slow_info", 31, "IncludeSlowInfo"),
)

# The five StringData presence flags, in stream order.
STRING_DATA_FIELDS = (
    ("name", "has_name"),
    ("relative_path", "has_relative_path"),
    ("working_dir", "has_working_dir"),
    ("arguments", "has_arguments"),
    ("icon_location", "has_icon_location"),
)

# ---------------------------------------------------------------------------
# FileAttributes bits
# ---------------------------------------------------------------------------
FILE_ATTRIBUTE_BITS = (
    ("read_only", 0, "FILE_ATTRIBUTE_READONLY"),
    ("hidden", 1, "FILE_ATTRIBUTE_HIDDEN"),
    ("system", 2, "FILE_ATTRIBUTE_SYSTEM"),
    ("volume_label", 3, "FILE_ATTRIBUTE_VOLUME_LABEL"),  # Reserved1
    ("directory", 4, "FILE_ATTRIBUTE_DIRECTORY"),
    ("archive", 5, "FILE_ATTRIBUTE_ARCHIVE"),
    ("normal", 7, "FILE_ATTRIBUTE_NORMAL"),
    ("temporary", 8, "FILE_ATTRIBUTE_TEMPORARY"),
    ("sparse_file", 9, "FILE_ATTRIBUTE_SPARSE_FILE"),
    ("reparse_point", 10, "FILE_ATTRIBUTE_REPARSE_POINT"),
    ("compressed", 11, "FILE_ATTRIBUTE_COMPRESSED"),
    ("offline", 12, "FILE_ATTRIBUTE_OFFLINE"),
    ("not_content_indexed", 13, "FILE_ATTRIBUTE_NOT_CONTENT_INDEXED"),
    ("encrypted", 14, "FILE_ATTRIBUTE_ENCRYPTED"),
)

# ---------------------------------------------------------------------------
# Hotkey modifier masks and virtual key names
# ---------------------------------------------------------------------------
HOTKEY_MOD = {0x01: "SHIFT", 0x02: "CTRL", 0x04: "ALT"}

VK_KEYS = {
    **{k: chr(k) for k in range(0x30, 0x3A)},  # 0-9
    **{k: chr(k) for k in range(0x41, 0x5B)},  # A-Z
    **{k: f"F{k - 0x6F}" for k in range(0x70, 0x88)},  # F1-F24
    **{k: f"NUMPAD{k - 0x60}" for k in range(0x60, 0x6A)},  # Numpad 0-9
    0x08: "BACKSPACE",
    0x09: "TAB",
    0x0D: "ENTER",
    0x1B: "ESC",
    0x20: "SPACE",
    0x21: "PAGEUP",
    0x22: "PAGEDOWN",
    0x23: "END",
    0x24: "HOME",
    0x25: "LEFT",
    0x26: "UP",
    0x27: "RIGHT",
    0x28: "DOWN",
    0x2D: "INSERT",
    0x2E: "DELETE",
    0x6A: "MULTIPLY",
    0x6B: "ADD",
    0x6D: "SUBTRACT",
    0x6E: "DECIMAL",
    0x6F: "DIVIDE",
    0x90: "NUM LOCK",
    0x91: "SCROLL LOCK",
}

# ---------------------------------------------------------------------------
# LinkInfo (MS-SHLLINK 2.3)
# ---------------------------------------------------------------------------
LINK_INFO_MIN_SIZE = 0x1C
LINK_INFO_HEADER_LEGACY = 0x1C
LINK_INFO_HEADER_EXTENDED = 0x24  # >= this: Unicode offsets follow

LI_VOLUME_ID_AND_LOCAL_BASE_PATH = 0x01
LI_COMMON_NETWORK_RELATIVE_LINK = 0x02

VOLUME_ID_MIN_SIZE = 0x10
VOLUME_LABEL_UNICODE_SENTINEL = 0x14

CNRL_MIN_SIZE = 0x14
CNRL_UNICODE_MIN_OFFSET = 0x14  # NetNameOffset above this: Unicode offsets follow
CNRL_VALID_DEVICE = 0x01
CNRL_VALID_NET_TYPE = 0x02

# ---------------------------------------------------------------------------
# Drive types (VolumeID)
# ---------------------------------------------------------------------------
DRIVE_TYPES = {
    0: "DRIVE_UNKNOWN",
    1: "DRIVE_NO_ROOT_DIR",
    2: "DRIVE_REMOVABLE",
    3: "DRIVE_FIXED",
    4: "DRIVE_REMOTE",
    5: "DRIVE_CDROM",
    6: "DRIVE_RAMDISK",
}

# ---------------------------------------------------------------------------
# ExtraData block signatures (MS-SHLLINK 2.5)
# ---------------------------------------------------------------------------
EXTRA_BLOCK_HEADER_SIZE = 8

EXTRA_SIGS = {
    0xA0000001: "EnvironmentVariableDataBlock",
    0xA0000002: "ConsoleDataBlock",
    0xA0000003: "TrackerDataBlock",
    0xA0000004: "ConsoleFEDataBlock",
    0xA0000005: "SpecialFolderDataBlock",
    0xA0000006: "DarwinDataBlock",
    0xA0000007: "IconEnvironmentDataBlock",
    0xA0000008: "ShimDataBlock",
    0xA0000009: "PropertyStoreDataBlock",
    0xA000000B: "KnownFolderDataBlock",
    0xA000000C: "VistaAndAboveIDListDataBlock",
}

# Fixed-size string slots of the environment/darwin/icon blocks.
ANSI_SLOT_SIZE = 260
UNICODE_SLOT_SIZE = 520

TRACKER_LENGTH = 0x58
TRACKER_VERSION = 0
SHIM_MIN_SIZE = 0x88

# ---------------------------------------------------------------------------
# WNNC_NET_* Network Provider Types (CommonNetworkRelativeLink)
# ---------------------------------------------------------------------------
WNNC_NET_TYPES = {
    0x00020000: "WNNC_NET_LANMAN",
    0x00030000: "WNNC_NET_NETWARE",
    0x00090000: "WNNC_NET_9TILES",
    0x000B0000: "WNNC_NET_LOCUS",
    0x000D0000: "WNNC_NET_SUN_PC_NFS",
    0x00110000: "WNNC_NET_LANSTEP",
    0x00130000: "WNNC_NET_CLEARCASE",
    0x00140000: "WNNC_NET_FRONTIER",
    0x00150000: "WNNC_NET_BMC",
    0x00160000: "WNNC_NET_DCE",
    0x001A0000: "WNNC_NET_AVID",
    0x001B0000: "WNNC_NET_DOCUSPACE",
    0x001C0000: "WNNC_NET_MANGOSOFT",
    0x001D0000: "WNNC_NET_SERNET",
    0x001E0000: "WNNC_NET_RIVERFRONT1",
    0x001F0000: "WNNC_NET_RIVERFRONT2",
    0x00200000: "WNNC_NET_DECORB",
    0x00210000: "WNNC_NET_PROTSTOR",
    0x00220000: "WNNC_NET_FJ_REDIR",
    0x00230000: "WNNC_NET_DISTINCT",
    0x00240000: "WNNC_NET_TWINS",
    0x00250000: "WNNC_NET_RDR2SAMPLE",
    0x00260000: "WNNC_NET_CSC",
    0x00270000: "WNNC_NET_3IN1",
    0x00290000: "WNNC_NET_EXTENDNET",
    0x002A0000: "WNNC_NET_STAC",
    0x002B0000: "WNNC_NET_FOXBAT",
    0x002C0000: "WNNC_NET_YAHOO",
    0x002D0000: "WNNC_NET_EXIFS",
    0x002E0000: "WNNC_NET_DAV",
    0x002F0000: "WNNC_NET_KNOWARE",
    0x00300000: "WNNC_NET_OBJECT_DIRE",
    0x00310000: "WNNC_NET_MASFAX",
    0x00320000: "WNNC_NET_HOB_NFS",
    0x00330000: "WNNC_NET_SHIVA",
    0x00340000: "WNNC_NET_IBMAL",
    0x00350000: "WNNC_NET_LOCK",
    0x00360000: "WNNC_NET_TERMSRV",
    0x00370000: "WNNC_NET_SRT",
    0x00380000: "WNNC_NET_QUINCY",
    0x00390000: "WNNC_NET_OPENAFS",
    0x003A0000: "WNNC_NET_AVID1",
    0x003B0000: "WNNC_NET_DFS",
    0x003C0000: "WNNC_NET_KWNP",
    0x003D0000: "WNNC_NET_ZENWORKS",
    0x003E0000: "WNNC_NET_DRIVEONWEB",
    0x003F0000: "WNNC_NET_VMWARE",
    0x00400000: "WNNC_NET_RSFX",
    0x00410000: "WNNC_NET_MFILES",
    0x00420000: "WNNC_NET_MS_NFS",
    0x00430000: "WNNC_NET_GOOGLE",
}

# ---------------------------------------------------------------------------
# Known Folder GUIDs -> friendly name
# ---------------------------------------------------------------------------
KNOWN_FOLDER_NAMES = {
    "{B4BFCC3A-DB2C-424C-B029-7FE99A87C641}": "Desktop",
    "{FDD39AD0-238F-46AF-ADB4-6C85480369C7}": "Documents",
    "{374DE290-123F-4565-9164-39C4925E467B}": "Downloads",
    "{4BD8D571-6D19-48D3-BE97-422220080E43}": "Music",
    "{33E28130-4E1E-4676-835A-98395C3BC3BB}": "Pictures",
    "{18989B1D-99B5-455B-841C-AB7C74E4DDFC}": "Videos",
    "{3EB685DB-65F9-4CF6-A03A-E3EF65729F3D}": "AppData",
    "{F1B32785-6FBA-4FCF-9D55-7B8E7F157091}": "LocalAppData",
    "{905E63B6-C1BF-494E-B29C-65B732D3D21A}": "ProgramFiles",
    "{7C5A40EF-A0FB-4BFC-874A-C0F2E0B9FA8E}": "ProgramFilesX86",
    "{1AC14E77-02E7-4E5D-B744-2EB1AE5198B7}": "System",
    "{F38BF404-1D43-42F2-9305-67DE0B28FC23}": "Windows",
    "{B97D20BB-F46A-4C97-BA10-5E3608430854}": "Startup",
    "{8983036C-27C0-404B-8F08-102D10DCFD74}": "SendTo",
    "{A63293E8-664E-48DB-A079-DF759E0509F7}": "Templates",
    "{FD228CB7-AE11-4AE3-864C-16F3910AB8FE}": "Fonts",
    "{A52BBA46-E9E1-435F-B3D9-28DAA648C0F6}": "OneDrive",
    "{5E6C858F-0E22-4760-9AFE-EA3317B67173}": "Profile",
    "{DFDF76A2-C82A-4D63-906A-5644AC457385}": "Public",
    "{C4AA340D-F20F-4863-AFEF-F87EF2E6BA25}": "PublicDesktop",
    "{ED4824AF-DCE4-45A8-81E2-FC7965083634}": "PublicDocuments",
    "{AE50C081-EBD2-438A-8655-8A092E34987A}": "Recent",
    "{A4115719-D62E-491D-AA7C-E74B8BE3B067}": "CommonStartMenu",
    "{0139D44E-6AFE-49F2-8690-3DAFCAE6FFB8}": "CommonPrograms",
    "{724EF170-A42D-4FEF-9F26-B60E846FBA4F}": "AdminTools",
    "{62AB5D82-FDC1-4DC3-A9DD-070D1D495D97}": "ProgramData",
    "{0762D272-C50A-4BB0-A382-697DCD729B80}": "UserProfiles",
    "{1777F761-68AD-4D8A-87BD-30B759FA33DD}": "Favorites",
    "{C5ABBF53-E17F-4121-8900-86626FC2C973}": "NetHood",
    "{9274BD8D-CFD1-41C3-B35E-B13F55A758F4}": "PrintHood",
}

# ---------------------------------------------------------------------------
# Serialized Property Store (MS-PROPSTORE)
# ---------------------------------------------------------------------------
PROPERTY_STORAGE_VERSION = 0x53505331  # "1SPS"
PROPERTY_STORAGE_HEADER_SIZE = 24
STRING_NAMED_FORMAT_ID = "{D5CDD505-2E9C-101B-9397-08002B2CF9AE}"

VT_TYPES = {
    0x0000: "VT_EMPTY",
    0x0002: "VT_I2",
    0x0003: "VT_I4",
    0x000B: "VT_BOOL",
    0x0013: "VT_UI4",
    0x0014: "VT_I8",
    0x0015: "VT_UI8",
    0x001E: "VT_LPSTR",
    0x001F: "VT_LPWSTR",
    0x0040: "VT_FILETIME",
    0x0041: "VT_BLOB",
    0x0042: "VT_STREAM",
    0x0048: "VT_CLSID",
    0x1002: "VT_VECTOR|VT_I2",
    0x1003: "VT_VECTOR|VT_I4",
    0x101F: "VT_VECTOR|VT_LPWSTR",
}

PROPERTY_SET_GUIDS = {
    "{B9B4B3FC-2B51-4A42-B5D8-324146AFCF25}": "SID_SPS_METADATA",
    "{46588AE2-4CBC-4338-BBFC-139326986DCE}": "SID_SPS_METADATA2",
    "{28636AA6-953D-11D2-B5D6-00C04FD918D0}": "System.Properties",
    "{D5CDD505-2E9C-101B-9397-08002B2CF9AE}": "DocumentSummaryInformation",
    "{F29F85E0-4FF9-1068-AB91-08002B27B3D9}": "SummaryInformation",
    "{DABD30ED-0043-4B2E-87B4-6C698306D0D6}": "System.Volume",
    "{86D40B4D-9069-443C-8192-C1B02B9FF69C}": "System.Link",
    "{56A3372E-CE9C-11D2-9F0E-006097C686F6}": "System.Document",
}

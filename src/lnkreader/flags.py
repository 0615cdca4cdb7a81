"""LinkFlags and FileAttributes as records of named booleans."""

from dataclasses import dataclass

from ._constants import FILE_ATTRIBUTE_BITS, LINK_FLAG_BITS

_FILE_ATTRIBUTE_MASK = sum(1 << bit for _, bit, _ in FILE_ATTRIBUTE_BITS)


def _unpack_bits(table, word: int) -> dict[str, bool]:
    return {name: bool(word >> bit & 1) for name, bit, _ in table}


def _pack_bits(table, record) -> int:
    word = 0
    for name, bit, _ in table:
        if getattr(record, name):
            word |= 1 << bit
    return word


def _set_names(table, record) -> list[str]:
    return [label for name, _, label in table if getattr(record, name)]


@dataclass(frozen=True, slots=True)
class LinkFlags:
    """The 32 LinkFlags bits of the header (MS-SHLLINK 2.1.1)."""

    has_link_target_id_list: bool = False
    has_link_info: bool = False
    has_name: bool = False
    has_relative_path: bool = False
    has_working_dir: bool = False
    has_arguments: bool = False
    has_icon_location: bool = False
    is_unicode: bool = False
    force_no_link_info: bool = False
    has_exp_string: bool = False
    run_in_separate_process: bool = False
    unused1: bool = False
    has_darwin_id: bool = False
    run_as_user: bool = False
    has_exp_icon: bool = False
    no_pidl_alias: bool = False
    unused2: bool = False
    run_with_shim_layer: bool = False
    force_no_link_track: bool = False
    enable_target_metadata: bool = False
    disable_link_path_tracking: bool = False
    disable_known_folder_tracking: bool = False
    disable_known_folder_alias: bool = False
    allow_link_to_link: bool = False
    unalias_on_save: bool = False
    prefer_environment_path: bool = False
    keep_local_id_list_for_unc_target: bool = False
    persist_volume_id_relative: bool = False
    html_no_sub_dir_creation: bool = False
    disallow_user_view: bool = False
    force_perceived_type_system: bool = False
    include_slow_info: bool = False

    @classmethod
    def from_word(cls, word: int) -> "LinkFlags":
        return cls(**_unpack_bits(LINK_FLAG_BITS, word))

    def to_word(self) -> int:
        return _pack_bits(LINK_FLAG_BITS, self)

    def names(self) -> list[str]:
        """MS-SHLLINK names of the set flags, in bit order."""
        return _set_names(LINK_FLAG_BITS, self)

    @property
    def has_string_data(self) -> bool:
        return (
            self.has_name
            or self.has_relative_path
            or self.has_working_dir
            or self.has_arguments
            or self.has_icon_location
        )


@dataclass(frozen=True, slots=True)
class FileAttributes:
    """FileAttributesFlags of the link target (MS-SHLLINK 2.1.2).

    Reserved1 (bit 3) is exposed as *volume_label*. Reserved2 (bit 6) and
    attributes newer than the format have no field; they are kept in
    *other_bits* so :meth:`to_word` still returns the original word.
    """

    read_only: bool = False
    hidden: bool = False
    system: bool = False
    volume_label: bool = False
    directory: bool = False
    archive: bool = False
    normal: bool = False
    temporary: bool = False
    sparse_file: bool = False
    reparse_point: bool = False
    compressed: bool = False
    offline: bool = False
    not_content_indexed: bool = False
    encrypted: bool = False
    other_bits: int = 0

    @classmethod
    def from_word(cls, word: int) -> "FileAttributes":
        return cls(
            **_unpack_bits(FILE_ATTRIBUTE_BITS, word),
            other_bits=word & ~_FILE_ATTRIBUTE_MASK & 0xFFFFFFFF,
        )

    def to_word(self) -> int:
        return _pack_bits(FILE_ATTRIBUTE_BITS, self) | self.other_bits

    def names(self) -> list[str]:
        return _set_names(FILE_ATTRIBUTE_BITS, self)

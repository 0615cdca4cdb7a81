"""End-to-end tests for lnkreader.decode."""

import warnings

import pytest

import lnkbytes as lb
import lnkreader
from lnkreader import (
    DecodeError,
    FormatMismatch,
    IconEnvironmentDataBlock,
    KnownFolderDataBlock,
    ShellLink,
    StringData,
    TrackerDataBlock,
    UnexpectedEnd,
    decode,
)


class TestMinimal:
    """A header with every flag clear."""

    def test_all_sections_absent(self, minimal_lnk_bytes):
        link = decode(minimal_lnk_bytes)
        assert isinstance(link, ShellLink)
        assert link.target_id_list is None
        assert link.link_info is None
        assert link.string_data == StringData()
        assert link.extra_data == ()

    def test_header_only_without_terminal(self):
        link = decode(lb.lnk(terminal=False))
        assert link.extra_data == ()

    def test_short_buffer(self):
        with pytest.raises(UnexpectedEnd):
            decode(b"\x4c\x00\x00\x00" + b"\x00" * 40)

    def test_empty_buffer(self):
        with pytest.raises(UnexpectedEnd):
            decode(b"")

    def test_wrong_header_size(self):
        with pytest.raises(FormatMismatch) as exc_info:
            decode(lb.lnk(size=0x4D))
        assert (exc_info.value.expected, exc_info.value.actual) == (0x4C, 0x4D)

    def test_errors_share_a_base(self):
        with pytest.raises(DecodeError):
            decode(b"not a shell link at all")


class TestCodepage:
    """The codepage argument must name a text encoding."""

    @pytest.mark.parametrize("codepage", ["no-such-codec", "hex", "zlib"])
    def test_rejected_up_front(self, minimal_lnk_bytes, codepage):
        # No legacy string is present, so the check cannot rely on one
        with pytest.raises(ValueError, match="Unknown codepage"):
            decode(minimal_lnk_bytes, codepage=codepage)

    def test_alias_accepted(self):
        data = lb.lnk(lb.HAS_NAME, strings=lb.counted("Café", unicode=False))
        assert decode(data, codepage="windows-1252").string_data.name.value == "Café"


class TestLocalLink:
    """A realistic local shortcut with every section present."""

    def test_sections(self, local_lnk_bytes):
        link = decode(local_lnk_bytes)
        assert link.header.file_size == 201216
        assert link.header.hotkey_str == "CTRL+C"
        assert len(link.target_id_list.items) == 3
        assert link.link_info.volume_id.label == "Windows"
        assert link.string_data.name.value == "Notepad"
        assert [b.name for b in link.extra_data] == [
            "IconEnvironmentDataBlock",
            "TrackerDataBlock",
            "KnownFolderDataBlock",
        ]

    def test_find_block(self, local_lnk_bytes):
        link = decode(local_lnk_bytes)
        tracker = link.find_block(TrackerDataBlock)
        assert tracker.machine_id.value == "WORKSTATION01"
        assert link.find_block(KnownFolderDataBlock).known_folder_name == "Windows"
        icon = link.find_block(IconEnvironmentDataBlock)
        assert icon.target == "%SystemRoot%\\notepad.exe"
        assert link.find_block(lnkreader.ShimDataBlock) is None

    def test_link_flags_shortcut(self, local_lnk_bytes):
        link = decode(local_lnk_bytes)
        assert link.link_flags == link.header.link_flags
        assert link.link_flags.has_link_target_id_list

    def test_decodes_without_warnings(self, local_lnk_bytes):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            decode(local_lnk_bytes)

    @pytest.mark.parametrize("wrap", [bytes, bytearray, memoryview])
    def test_buffer_types(self, local_lnk_bytes, wrap):
        assert decode(wrap(local_lnk_bytes)) == decode(local_lnk_bytes)

    def test_input_untouched(self, local_lnk_bytes):
        data = bytearray(local_lnk_bytes)
        decode(data)
        assert bytes(data) == local_lnk_bytes

    def test_result_is_immutable(self, local_lnk_bytes):
        link = decode(local_lnk_bytes)
        with pytest.raises(AttributeError):
            link.extra_data = ()

    def test_truncated_anywhere_raises_decode_error(self, local_lnk_bytes):
        # Cutting inside a sized section must fail rather than yield less data
        cut_points = [80, 120, 200, 260, 300]
        for cut in cut_points:
            with pytest.raises(DecodeError):
                decode(local_lnk_bytes[:cut])


class TestSectionOrder:
    """Sections follow each other in file order, gated by flags."""

    def test_string_data_after_id_list(self):
        data = lb.lnk(
            lb.HAS_ID_LIST | lb.HAS_NAME,
            idlist=lb.id_list(lb.item(b"\x31xyz")),
            strings=lb.counted("n", unicode=False),
        )
        link = decode(data)
        assert link.target_id_list.items[0].data == b"\x31xyz"
        assert link.string_data.name.value == "n"

    def test_extra_data_after_strings(self):
        data = lb.lnk(
            lb.HAS_ARGUMENTS | lb.IS_UNICODE,
            strings=lb.counted("/x"),
            extra=lb.console_fe_block(850),
        )
        link = decode(data)
        assert link.string_data.arguments.value == "/x"
        assert link.extra_data[0].code_page == 850

    def test_codepage_applies_to_all_legacy_strings(self):
        data = lb.lnk(
            lb.HAS_LINK_INFO | lb.HAS_NAME,
            linkinfo=lb.link_info(
                volume=lb.volume_id("Диск".encode("cp1251")),
                local_base_path="C:\\Папка".encode("cp1251"),
            ),
            strings=lb.counted("Имя", unicode=False, codepage="cp1251"),
        )
        link = decode(data, codepage="cp1251")
        assert link.link_info.volume_id.label == "Диск"
        assert link.target_path == "C:\\Папка"
        assert link.string_data.name.value == "Имя"

"""Tests for LinkInfo, VolumeID and CommonNetworkRelativeLink decoding."""

import struct

import pytest

import lnkbytes as lb
from lnkreader._reader import Cursor
from lnkreader.errors import InvalidOffset, SizeTooSmall, UnexpectedEnd
from lnkreader.parser import decode, decode_link_info
from lnkreader.structures import ExtendedLinkInfo, LinkInfo


def _decode(blob, codepage="cp1252"):
    return decode_link_info(Cursor(blob), codepage)


def _patch_u32(blob, offset, value):
    return blob[:offset] + struct.pack("<I", value) + blob[offset + 4 :]


class TestLegacyLayout:
    """Header size 0x1C: no Unicode offsets at all."""

    def test_local_target(self):
        blob = lb.link_info(
            volume=lb.volume_id(b"Windows"),
            local_base_path=b"C:\\Windows\\notepad.exe",
        )
        info = _decode(blob)
        assert type(info) is LinkInfo
        assert info.size == len(blob)
        assert info.header_size == 0x1C
        assert info.has_volume_id_and_local_base_path
        assert not info.has_common_network_relative_link
        assert info.volume_id_offset == 0x1C
        assert info.local_base_path.value == "C:\\Windows\\notepad.exe"
        assert info.base_path == "C:\\Windows\\notepad.exe"
        assert info.common_path_suffix.value == ""
        assert info.common_network_relative_link is None

    def test_no_unicode_attributes(self):
        info = _decode(lb.link_info(volume=lb.volume_id(), local_base_path=b"C:\\"))
        assert not hasattr(info, "local_base_path_offset_unicode")
        assert not hasattr(info, "common_path_suffix_unicode")

    def test_header_between_thresholds_is_legacy(self):
        blob = lb.link_info(
            volume=lb.volume_id(), local_base_path=b"C:\\x", header_size=0x20
        )
        info = _decode(blob)
        assert type(info) is LinkInfo
        assert info.header_size == 0x20
        assert info.base_path == "C:\\x"

    def test_offsets_count_from_linkinfo_start(self):
        blob = lb.link_info(volume=lb.volume_id(b"VOL"), local_base_path=b"C:\\a")
        info = _decode(blob)
        start = info.local_base_path_offset
        assert blob[start : start + 4] == b"C:\\a"

    def test_cursor_advances_past_linkinfo(self):
        blob = lb.link_info(volume=lb.volume_id(), local_base_path=b"C:\\")
        cur = Cursor(blob + b"AFTER")
        decode_link_info(cur)
        assert cur.offset == len(blob)

    def test_codepage(self):
        blob = lb.link_info(
            volume=lb.volume_id(), local_base_path="C:\\Файл".encode("cp1251")
        )
        assert _decode(blob, "cp1251").base_path == "C:\\Файл"


class TestExtendedLayout:
    """Header size >= 0x24 adds the Unicode path offsets."""

    def test_unicode_paths(self):
        blob = lb.link_info(
            volume=lb.volume_id(b"DATA"),
            local_base_path=b"C:\\??",
            unicode_base_path="C:\\日本",
            suffix=b"",
            unicode_suffix="",
        )
        info = _decode(blob)
        assert isinstance(info, ExtendedLinkInfo)
        assert isinstance(info, LinkInfo)
        assert info.header_size == 0x24
        assert info.local_base_path.value == "C:\\??"
        assert info.local_base_path_unicode.value == "C:\\日本"
        assert info.base_path == "C:\\日本"
        assert info.common_path_suffix_unicode.value == ""

    def test_zero_unicode_offsets_are_absent(self):
        blob = lb.link_info(
            volume=lb.volume_id(), local_base_path=b"C:\\x", header_size=0x24
        )
        info = _decode(blob)
        assert isinstance(info, ExtendedLinkInfo)
        assert info.local_base_path_offset_unicode == 0
        assert info.local_base_path_unicode is None
        assert info.base_path == "C:\\x"


class TestVolumeID:
    """Drive metadata and the two label encodings."""

    def test_ansi_label(self):
        info = _decode(
            lb.link_info(
                volume=lb.volume_id(b"SYSTEM", drive_type=3, serial=0xCAFEBABE),
                local_base_path=b"C:\\",
            )
        )
        vol = info.volume_id
        assert vol.drive_type == 3
        assert vol.drive_type_name == "DRIVE_FIXED"
        assert vol.drive_serial_number == 0xCAFEBABE
        assert vol.volume_label_offset == 0x10
        assert vol.volume_label_offset_unicode is None
        assert vol.volume_label.value == "SYSTEM"
        assert vol.volume_label_unicode is None
        assert vol.label == "SYSTEM"

    def test_unicode_label(self):
        info = _decode(
            lb.link_info(
                volume=lb.volume_id(unicode_label="Données"),
                local_base_path=b"D:\\",
            )
        )
        vol = info.volume_id
        assert vol.volume_label_offset == 0x14
        assert vol.volume_label_offset_unicode == 0x14
        assert vol.volume_label is None
        assert vol.volume_label_unicode.value == "Données"
        assert vol.label == "Données"

    def test_volume_too_small(self):
        vol = _patch_u32(lb.volume_id(b"X"), 0, 0x0C)
        with pytest.raises(SizeTooSmall) as exc_info:
            _decode(lb.link_info(volume=vol, local_base_path=b"C:\\"))
        assert exc_info.value.expected == 0x10
        assert exc_info.value.actual == 0x0C

    def test_volume_larger_than_linkinfo(self):
        vol = _patch_u32(lb.volume_id(b"X"), 0, 0x400)
        with pytest.raises(UnexpectedEnd):
            _decode(lb.link_info(volume=vol, local_base_path=b"C:\\"))

    def test_label_offset_outside_volume(self):
        vol = _patch_u32(lb.volume_id(b"X"), 12, 0x80)
        with pytest.raises(InvalidOffset) as exc_info:
            _decode(lb.link_info(volume=vol, local_base_path=b"C:\\"))
        assert exc_info.value.value == 0x80
        assert exc_info.value.field == "VolumeLabelOffset"

    def test_not_read_without_flag(self):
        blob = lb.link_info(
            volume=lb.volume_id(b"X"), local_base_path=b"C:\\", flags=0
        )
        info = _decode(blob)
        assert info.volume_id is None
        assert info.local_base_path is None


class TestNetworkLink:
    """CommonNetworkRelativeLink, with and without Unicode names."""

    def test_legacy_names(self):
        info = _decode(
            lb.link_info(
                network=lb.network_link(b"\\\\SERVER\\share", b"Z:", flags=0x03),
                suffix=b"dir\\file.txt",
            )
        )
        cnrl = info.common_network_relative_link
        assert info.has_common_network_relative_link
        assert cnrl.valid_device
        assert cnrl.valid_net_type
        assert cnrl.net_name_offset == 0x14
        assert cnrl.net_name_offset_unicode is None
        assert cnrl.share_name == "\\\\SERVER\\share"
        assert cnrl.device == "Z:"
        assert cnrl.network_provider_name == "WNNC_NET_LANMAN"
        assert info.path_suffix == "dir\\file.txt"

    def test_unicode_names(self):
        info = _decode(
            lb.link_info(
                network=lb.network_link(
                    b"\\\\SRV\\s", unicode_names=("\\\\SRV\\ß", None)
                ),
            )
        )
        cnrl = info.common_network_relative_link
        assert cnrl.net_name_offset == 0x1C
        assert cnrl.net_name_offset_unicode is not None
        assert cnrl.device_name_offset_unicode == 0
        assert cnrl.net_name.value == "\\\\SRV\\s"
        assert cnrl.net_name_unicode.value == "\\\\SRV\\ß"
        assert cnrl.share_name == "\\\\SRV\\ß"
        assert cnrl.device_name is None
        assert cnrl.device == ""

    def test_provider_hidden_without_valid_net_type(self):
        info = _decode(lb.link_info(network=lb.network_link(flags=0)))
        assert info.common_network_relative_link.network_provider_name == ""

    def test_too_small(self):
        net = _patch_u32(lb.network_link(), 0, 0x10)
        with pytest.raises(SizeTooSmall) as exc_info:
            _decode(lb.link_info(network=net))
        assert exc_info.value.expected == 0x14


class TestLinkInfoValidation:
    """Declared sizes and offsets are checked before use."""

    def test_size_too_small(self):
        blob = _patch_u32(lb.link_info(), 0, 0x10)
        with pytest.raises(SizeTooSmall) as exc_info:
            _decode(blob)
        assert exc_info.value.expected == 0x1C
        assert exc_info.value.actual == 0x10

    def test_header_size_too_small(self):
        blob = _patch_u32(lb.link_info(), 4, 0x18)
        with pytest.raises(SizeTooSmall) as exc_info:
            _decode(blob)
        assert exc_info.value.field == "LinkInfoHeaderSize"

    def test_size_larger_than_buffer(self):
        blob = lb.link_info()
        with pytest.raises(UnexpectedEnd):
            _decode(_patch_u32(blob, 0, len(blob) + 1))

    def test_offset_outside_linkinfo(self):
        blob = lb.link_info(volume=lb.volume_id(), local_base_path=b"C:\\")
        bad = _patch_u32(blob, 16, 0x400)
        with pytest.raises(InvalidOffset) as exc_info:
            _decode(bad)
        err = exc_info.value
        assert err.section == "LinkInfo"
        assert err.field == "LocalBasePathOffset"
        assert err.value == 0x400
        assert err.limit == len(blob)

    def test_offsets_not_clamped_to_buffer(self):
        # The bytes after LinkInfo exist but lie outside the structure
        blob = lb.link_info(volume=lb.volume_id(), local_base_path=b"C:\\")
        bad = _patch_u32(blob, 16, len(blob))
        with pytest.raises(InvalidOffset):
            decode_link_info(Cursor(bad + b"outside\x00"))


class TestTargetPath:
    """ShellLink.target_path composes LinkInfo paths."""

    def test_local(self, local_lnk_bytes):
        assert decode(local_lnk_bytes).target_path == "C:\\Windows\\notepad.exe"

    def test_unc(self, unc_lnk_bytes):
        assert decode(unc_lnk_bytes).target_path == "\\\\SERVER\\share\\folder\\file.txt"

    def test_unc_without_suffix(self):
        data = lb.lnk(
            lb.HAS_LINK_INFO, linkinfo=lb.link_info(network=lb.network_link())
        )
        assert decode(data).target_path == "\\\\SERVER\\share"

    def test_force_no_link_info(self):
        data = lb.lnk(
            lb.HAS_LINK_INFO | lb.FORCE_NO_LINK_INFO,
            linkinfo=lb.link_info(volume=lb.volume_id(), local_base_path=b"C:\\x"),
        )
        link = decode(data)
        assert link.link_info is not None
        assert link.target_path == ""

    def test_without_linkinfo(self, minimal_lnk_bytes):
        assert decode(minimal_lnk_bytes).target_path == ""

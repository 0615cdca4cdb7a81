"""Tests for lnkreader.report."""

import base64
import json

import lnkbytes as lb
from lnkreader import decode, format_lnk, to_dict
from lnkreader.report import describe_item
from lnkreader.structures import ItemID


def _item(raw):
    return ItemID(size=len(raw) + 2, data=raw)


class TestDescribeItem:
    """One-line descriptions of common shell items."""

    def test_root(self):
        desc = describe_item(_item(lb.MY_COMPUTER_ITEM[2:]))
        assert desc == "[Root] sort=0x50 CLSID={20D04FE0-3AEA-1069-A2D8-08002B30309D}"

    def test_drive(self):
        assert describe_item(_item(b"\x2fC:\\\x00\x00")) == "[Drive] C:\\"

    def test_file(self):
        raw = lb.file_item(b"NOTEPAD.EXE", fsize=201216, date=0x5A21, time=0x6000)[2:]
        desc = describe_item(_item(raw))
        assert desc.startswith('[File] short="NOTEPAD.EXE" long=""')
        assert "fsize=201216" in desc
        assert "date=2025-01-01" in desc
        assert "time=12:00:00" in desc
        assert "attrs=0x0020" in desc

    def test_folder_with_long_name(self):
        # BEEF0004 extension (version 3): long name at offset 12 of the extension
        long_name = lb.wz("Program Files")
        ext_body = b"\x00" * 4 + long_name
        ext = (len(ext_body) + 8).to_bytes(2, "little") + b"\x03\x00" + (
            0xBEEF0004
        ).to_bytes(4, "little") + ext_body
        raw = lb.file_item(b"PROGRA~1", kind=0x31)[2:]
        raw += b"\x00" * (len(raw) % 2)  # short name padded to even
        desc = describe_item(_item(raw + ext))
        assert desc.startswith('[Dir] short="PROGRA~1" long="Program Files"')

    def test_network(self):
        desc = describe_item(_item(b"\x41\x00\\\\SERVER\x00"))
        assert desc == "[Network] \\\\SERVER"

    def test_other(self):
        assert describe_item(_item(b"\x74abc")) == "type=0x74"


class TestFormatLnk:
    """Sectioned text report."""

    def test_local_sections(self, local_lnk_bytes):
        text = format_lnk(decode(local_lnk_bytes))
        for section in (
            "--- HEADER ---",
            "--- LINK TARGET ID LIST ---",
            "--- LINK INFO ---",
            "--- STRING DATA ---",
            "--- EXTRA DATA ---",
            "--- RESOLVED ---",
        ):
            assert section in text
        assert "HasLinkTargetIDList" in text
        assert "FILE_ATTRIBUTE_ARCHIVE" in text
        assert "2024-01-01 00:00:00 UTC" in text
        assert "CTRL+C" in text
        assert "[Drive] C:\\" in text
        assert 'VolumeLabel:     "Windows"' in text
        assert "DRIVE_FIXED" in text
        assert "TargetPath:      C:\\Windows\\notepad.exe" in text
        assert "TrackerDataBlock" in text

    def test_minimal(self, minimal_lnk_bytes):
        text = format_lnk(decode(minimal_lnk_bytes))
        assert "--- HEADER ---" in text
        assert "--- LINK INFO ---" not in text
        assert "--- EXTRA DATA ---" not in text
        assert "TargetPath:      (empty)" in text
        assert "CreationTime:    0 (unset)" in text

    def test_unc(self, unc_lnk_bytes):
        text = format_lnk(decode(unc_lnk_bytes))
        assert 'NetworkShare:    "\\\\SERVER\\share"' in text
        assert "WNNC_NET_LANMAN" in text

    def test_property_stores(self, property_store_lnk_bytes):
        text = format_lnk(decode(property_store_lnk_bytes))
        assert "--- PROPERTY STORES ---" in text
        assert "SID_SPS_METADATA" in text
        assert 'Value="test string"' in text

    def test_unknown_block(self):
        link = decode(lb.lnk(extra=lb.block(0xA00000FF, b"abcd")))
        text = format_lnk(link)
        assert "Unknown(0xA00000FF)" in text
        assert "payload: 4 byte(s)" in text


class TestToDict:
    """JSON-friendly conversion."""

    def test_json_serializable(self, local_lnk_bytes):
        d = to_dict(decode(local_lnk_bytes))
        json.dumps(d)
        assert d["target_path"] == "C:\\Windows\\notepad.exe"
        assert d["header"]["created"] == "2024-01-01T00:00:00+00:00"
        assert d["header"]["accessed"] == "2024-01-01T00:00:00+00:00"
        assert "HasLinkInfo" in d["header"]["link_flags"]
        assert d["header"]["hotkey_str"] == "CTRL+C"
        assert d["link_info"]["layout"] == "legacy"
        assert d["string_data"]["name"] == {"value": "Notepad", "valid": True}
        assert d["string_data"]["relative_path"] is None

    def test_bytes_are_base64(self, local_lnk_bytes):
        link = decode(local_lnk_bytes)
        d = to_dict(link)
        assert base64.b64decode(d["header"]["link_clsid"]) == lb.LINK_CLSID
        item = d["target_id_list"]["items"][0]
        assert base64.b64decode(item["data"]) == lb.MY_COMPUTER_ITEM[2:]

    def test_blocks_carry_type_and_name(self, local_lnk_bytes):
        blocks = to_dict(decode(local_lnk_bytes))["extra_data"]
        assert blocks[1]["type"] == "TrackerDataBlock"
        assert blocks[1]["name"] == "TrackerDataBlock"
        assert blocks[1]["machine_id"]["value"] == "WORKSTATION01"

    def test_invalid_text_keeps_raw(self):
        link = decode(lb.lnk(lb.HAS_NAME, strings=lb.counted(b"a\x81", unicode=False)))
        name = to_dict(link)["string_data"]["name"]
        assert name["valid"] is False
        assert base64.b64decode(name["raw"]) == b"a\x81"

    def test_property_values(self, property_store_lnk_bytes):
        d = to_dict(decode(property_store_lnk_bytes))
        props = d["extra_data"][0]["stores"][0]["properties"]
        assert props[0] == {
            "id": 2,
            "type": 0x1F,
            "type_name": "VT_LPWSTR",
            "value": {"value": "test string", "valid": True},
        }

"""Shared fixtures for lnkreader tests."""

import pytest

import lnkbytes as lb


@pytest.fixture
def minimal_lnk_bytes():
    """Header with every flag clear, followed by the terminal block."""
    return lb.lnk()


@pytest.fixture
def local_lnk_bytes():
    """A .lnk targeting C:\\Windows\\notepad.exe on a fixed drive."""
    flags = (
        lb.HAS_ID_LIST
        | lb.HAS_LINK_INFO
        | lb.HAS_NAME
        | lb.HAS_WORKING_DIR
        | lb.HAS_ARGUMENTS
        | lb.HAS_ICON_LOCATION
        | lb.IS_UNICODE
    )
    return lb.lnk(
        flags,
        attrs=0x20,
        ctime=lb.FT_2024,
        atime=lb.FT_2024,
        wtime=lb.FT_2024,
        file_size=201216,
        hotkey=0x0243,
        idlist=lb.id_list(
            lb.MY_COMPUTER_ITEM,
            lb.drive_item(b"C:\\"),
            lb.file_item(b"NOTEPAD.EXE", fsize=201216, date=0x5A21, time=0x6000),
        ),
        linkinfo=lb.link_info(
            volume=lb.volume_id(b"Windows"),
            local_base_path=b"C:\\Windows\\notepad.exe",
        ),
        strings=(
            lb.counted("Notepad")
            + lb.counted("C:\\Windows")
            + lb.counted("--flag value")
            + lb.counted("%SystemRoot%\\notepad.exe")
        ),
        extra=(
            lb.env_block("%SystemRoot%\\notepad.exe", signature=0xA0000007)
            + lb.tracker_block()
            + lb.known_folder_block("{F38BF404-1D43-42F2-9305-67DE0B28FC23}", 0x1E)
        ),
    )


@pytest.fixture
def unc_lnk_bytes():
    """A .lnk targeting \\\\SERVER\\share\\folder\\file.txt."""
    return lb.lnk(
        lb.HAS_LINK_INFO,
        linkinfo=lb.link_info(
            network=lb.network_link(b"\\\\SERVER\\share", b"Z:"),
            suffix=b"folder\\file.txt",
        ),
    )


@pytest.fixture
def property_store_lnk_bytes():
    """A .lnk whose only extra data is a PropertyStoreDataBlock."""
    return lb.lnk(
        extra=lb.property_store_block(
            lb.storage(
                "{B9B4B3FC-2B51-4A42-B5D8-324146AFCF25}",
                lb.int_value(2, lb.typed(0x001F, b"\x0c\x00\x00\x00" + lb.wz("test string"))),
                lb.int_value(3, lb.typed(0x0013, (42).to_bytes(4, "little"))),
                lb.int_value(4, lb.typed(0x000B, b"\xff\xff\x00\x00")),
            )
        )
    )

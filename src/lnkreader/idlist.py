"""Decode IDLists: LinkTargetIDList and the one embedded in ExtraData."""

import warnings

from ._reader import Cursor
from .errors import LnkWarning, SizeTooSmall
from .structures import ItemID, TargetIDList


def decode_item_ids(cur: Cursor) -> tuple[ItemID, ...]:
    """Read size-prefixed ItemIDs until a zero size or the end of *cur*.

    The terminating zero is consumed but not returned.  Item contents are
    kept opaque.
    """
    items = []
    while cur.remaining:
        size = cur.u16("ItemIDSize")
        if size == 0:
            if cur.remaining:
                warnings.warn(
                    f"{cur.section}: {cur.remaining} byte(s) after the "
                    "IDList terminator ignored",
                    LnkWarning,
                    stacklevel=2,
                )
            break
        if size < 2:
            raise SizeTooSmall(cur.section, "ItemIDSize", 2, size)
        items.append(ItemID(size=size, data=cur.read(size - 2, "ItemID.Data")))
    return tuple(items)


def decode_id_list(cur: Cursor) -> TargetIDList:
    """Decode a LinkTargetIDList at the position of *cur*.

    Item decoding is scoped to the declared IDListSize, so a malformed list
    cannot run into the following section.
    """
    size = cur.u16("IDListSize")
    body = cur.sub(size, "LinkTargetIDList")
    return TargetIDList(size=size, items=decode_item_ids(body))

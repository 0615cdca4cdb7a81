"""Shared type aliases for lnkreader modules."""

Buffer = bytes | bytearray | memoryview

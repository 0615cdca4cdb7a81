"""Exceptions and warning categories raised while decoding .lnk data."""


def _fmt(value: object) -> str:
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, int):
        return f"0x{value:X}"
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex(" ").upper() or "(empty)"
    return str(value)


class DecodeError(Exception):
    """Raised when data does not conform to the MS-SHLLINK format.

    Attributes:
        section: Structure being decoded, e.g. ``"LinkInfo.VolumeID"``.
        field: Field being read when the problem was found (may be empty).
    """

    def __init__(self, message: str, section: str = "", field: str = ""):
        self.section = section
        self.field = field
        where = ".".join(p for p in (section, field) if p)
        super().__init__(f"{where}: {message}" if where else message)


class FormatMismatch(DecodeError):
    """A structural constant does not have its required value."""

    def __init__(self, section: str, field: str, expected: object, actual: object):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"expected {_fmt(expected)}, got {_fmt(actual)}", section, field
        )


class SizeTooSmall(FormatMismatch):
    """A declared size cannot hold the structure's mandatory fields.

    ``expected`` holds the minimum size.
    """

    def __init__(self, section: str, field: str, minimum: int, actual: int):
        self.expected = minimum
        self.actual = actual
        DecodeError.__init__(
            self,
            f"declared size {_fmt(actual)} is below the minimum {_fmt(minimum)}",
            section,
            field,
        )


class UnexpectedEnd(DecodeError):
    """A read needs more bytes than the enclosing structure holds."""

    def __init__(
        self, section: str, field: str, offset: int, needed: int, available: int
    ):
        self.offset = offset
        self.needed = needed
        self.available = available
        super().__init__(
            f"need {needed} byte(s) at offset {_fmt(offset)}, "
            f"only {available} available",
            section,
            field,
        )


class InvalidOffset(DecodeError):
    """An offset field points outside the structure that contains it."""

    def __init__(self, section: str, field: str, value: int, limit: int):
        self.value = value
        self.limit = limit
        super().__init__(
            f"offset {_fmt(value)} is outside the structure (size {_fmt(limit)})",
            section,
            field,
        )


class LnkWarning(UserWarning):
    """Non-fatal anomaly in otherwise decodable data."""


class TextDecodeFailure(LnkWarning):
    """A text field is not valid in its declared encoding.

    The field is kept as a :class:`~lnkreader.structures.Text` with
    ``valid=False`` and its raw bytes; decoding continues.
    """

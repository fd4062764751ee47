"""
Rendering of column values as SQL literals, chosen by column data type.
"""

from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Any

NUMERIC_TYPES = frozenset({
    'bit', 'tinyint', 'smallint', 'mediumint', 'int', 'integer',
    'bigint', 'real', 'double', 'float', 'decimal', 'numeric',
})

QUOTED_TYPES = frozenset({
    'varchar', 'tinytext', 'text', 'mediumtext', 'longtext', 'datetime',
})

NULL_LITERAL = 'NULL'

_ESCAPES = str.maketrans({
    '\\': '\\\\',
    "'": "\\'",
    '"': '\\"',
    '\0': '\\0',
    '\n': '\\n',
    '\r': '\\r',
    '\x1a': '\\Z',
})


class LiteralStyle(Enum):
    """How a column's values are written."""
    RAW = "raw"
    QUOTED = "quoted"
    HEX = "hex"


def classify(data_type: str) -> LiteralStyle:
    """Map an information_schema data type to its literal style.

    Matching is exact and case-sensitive; unknown types fall through to
    the binary-safe hex style.
    """
    if data_type in NUMERIC_TYPES:
        return LiteralStyle.RAW
    if data_type in QUOTED_TYPES:
        return LiteralStyle.QUOTED
    return LiteralStyle.HEX


def quote(text: str) -> str:
    """Quote and escape text the way QUOTE() / mysql_real_escape_string do."""
    return "'" + text.translate(_ESCAPES) + "'"


def escape_identifier(name: str) -> str:
    """Double embedded backticks so a name can sit inside `...` quotes."""
    return name.replace("`", "``")


def hex_literal(data: bytes) -> str:
    """Write bytes as an uppercase X'...' literal."""
    return f"X'{data.hex().upper()}'"


def _format_timedelta(value: timedelta) -> str:
    sign = '-' if value < timedelta(0) else ''
    value = abs(value)
    hours, remainder = divmod(value.days * 86400 + value.seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    text = f"{sign}{hours:02d}:{minutes:02d}:{seconds:02d}"
    if value.microseconds:
        text += f".{value.microseconds:06d}"
    return text


def to_text(value: Any) -> str:
    """Convert a driver value to the text the server would print for it."""
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode('utf-8')
    if isinstance(value, datetime):
        return value.isoformat(sep=' ')
    if isinstance(value, (date, time)):
        return value.isoformat()
    if isinstance(value, timedelta):
        return _format_timedelta(value)
    if isinstance(value, (set, frozenset)):
        return ','.join(sorted(value))
    if isinstance(value, bool):
        return '1' if value else '0'
    return str(value)


def to_bytes(value: Any) -> bytes:
    """Return the bytes a value is stored as; text is encoded as UTF-8."""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    return to_text(value).encode('utf-8')


def render(data_type: str, value: Any) -> str:
    """Render one column value as a SQL literal."""
    if value is None:
        return NULL_LITERAL

    style = classify(data_type)
    if style is LiteralStyle.HEX:
        return hex_literal(to_bytes(value))
    if data_type == 'bit' and isinstance(value, (bytes, bytearray)):
        # raw BIT values are big-endian binary, not digits
        return str(int.from_bytes(value, 'big'))

    try:
        text = to_text(value)
    except UnicodeDecodeError:
        # bytes that are not valid UTF-8 stay binary-safe
        return hex_literal(to_bytes(value))
    return text if style is LiteralStyle.RAW else quote(text)

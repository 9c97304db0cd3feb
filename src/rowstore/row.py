"""Fixed-width row layout and codec."""

from __future__ import annotations

import struct
from dataclasses import dataclass

COLUMN_ID_SIZE = 4
COLUMN_USERNAME_SIZE = 32
COLUMN_EMAIL_SIZE = 255

# <I: uint32 id, then two NUL-padded byte fields
ROW_FORMAT = f"<I{COLUMN_USERNAME_SIZE}s{COLUMN_EMAIL_SIZE}s"
ROW_SIZE = struct.calcsize(ROW_FORMAT)

ID_MAX = (1 << (8 * COLUMN_ID_SIZE)) - 1

ENCODING = "utf-8"
# Undecodable input bytes travel as lone surrogates and are stored unchanged
ENCODING_ERRORS = "surrogateescape"


@dataclass(frozen=True)
class Row:
    """One record of the users table."""

    id: int
    username: str
    email: str


def serialize_row(row: Row) -> bytes:
    """Pack a row into exactly ROW_SIZE bytes.

    Text fields are NUL-padded to their column width. Callers are expected to
    have checked the widths already; struct silently truncates longer values.
    """
    return struct.pack(
        ROW_FORMAT,
        row.id,
        row.username.encode(ENCODING, ENCODING_ERRORS),
        row.email.encode(ENCODING, ENCODING_ERRORS),
    )


def deserialize_row(data: bytes | bytearray | memoryview) -> Row:
    """Unpack ROW_SIZE bytes into a row, dropping the column padding."""
    row_id, username, email = struct.unpack(ROW_FORMAT, data)
    return Row(
        id=row_id,
        username=username.rstrip(b"\x00").decode(ENCODING, ENCODING_ERRORS),
        email=email.rstrip(b"\x00").decode(ENCODING, ENCODING_ERRORS),
    )

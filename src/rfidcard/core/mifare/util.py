from __future__ import annotations

UID_SIZE = 4


def format_identifier(uid: bytes | None) -> str:
    """Format a 4-byte card identifier as 8 uppercase hex digits, or "" if it is not one."""
    if uid is None or len(uid) != UID_SIZE:
        return ""
    return bytes(uid).hex().upper()

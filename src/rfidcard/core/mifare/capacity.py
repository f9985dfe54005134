"""Card capacity from the contactless ATR.

PC/SC readers synthesize a 20-byte ATR for storage cards. Its historical
bytes carry the PC/SC card name as a two-byte value at offsets 13-14:
00 01 is MIFARE Classic 1K and 00 02 is MIFARE Classic 4K. Nothing else
is recognized.
"""

from __future__ import annotations

import enum

ATR_LENGTH = 20
_CARD_NAME_HI = 13
_CARD_NAME_LO = 14


class Capacity(enum.IntEnum):
    """Total number of 16-byte blocks on the card."""

    MIFARE_1K = 64
    MIFARE_4K = 255
    UNSUPPORTED = -1

    @property
    def supported(self) -> bool:
        return self is not Capacity.UNSUPPORTED


_CARD_NAMES = {
    0x01: Capacity.MIFARE_1K,
    0x02: Capacity.MIFARE_4K,
}


def resolve_capacity(atr: bytes | None) -> Capacity:
    """Map an ATR to the card's block count."""
    if atr is None or len(atr) != ATR_LENGTH or atr[_CARD_NAME_HI] != 0:
        return Capacity.UNSUPPORTED
    return _CARD_NAMES.get(atr[_CARD_NAME_LO], Capacity.UNSUPPORTED)

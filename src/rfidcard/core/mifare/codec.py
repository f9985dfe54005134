"""MIFARE Classic command frames for PC/SC readers.

Readers expose MIFARE Classic through CLA FF pseudo-APDUs. The read,
write and UID commands are common to all PC/SC readers; key loading and
block authentication differ by vendor, so each reader family gets its own
codec. Codecs are plain classes that satisfy the ``FrameCodec`` protocol,
and the session picks one when it opens a reader.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

from rfidcard.core.smartcard import APDU

lg = logging.getLogger(__name__)

BLOCK_SIZE = 16
KEY_SIZE = 6
DEFAULT_KEY = b"\xff" * KEY_SIZE

KEY_TYPE_A = 0x60

# Reader key slots the codecs load the key into.
HID_KEY_SLOT = 0x1A
ACS_KEY_SLOT = 0x00


class FrameCodec(Protocol):
    """Command frames for one reader family."""

    name: str

    def load_key(self) -> bytes: ...
    def authenticate(self, block: int) -> bytes: ...
    def get_uid(self) -> bytes: ...
    def read_block(self, block: int) -> bytes: ...
    def write_block(self, block: int, data: bytes) -> bytes: ...


def check_key(key: bytes) -> bytes:
    key = bytes(key)
    if len(key) != KEY_SIZE:
        raise ValueError(f"MIFARE key must be {KEY_SIZE} bytes, got {len(key)}")
    return key


def _check_block(block: int) -> None:
    if not 0 <= block <= 0xFF:
        raise ValueError(f"block out of range: {block}")


def get_uid_frame() -> bytes:
    """GET DATA (FF CA 00 00, Le=00): card UID."""
    return APDU(cla=0xFF, ins=0xCA, p1=0x00, p2=0x00, le=0x00).to_bytes()


def read_block_frame(block: int) -> bytes:
    """READ BINARY (FF B0 00 <block>, Le=10): one 16-byte block."""
    return APDU(cla=0xFF, ins=0xB0, p1=0x00, p2=block, le=BLOCK_SIZE).to_bytes()


def write_block_frame(block: int, data: bytes) -> bytes:
    """UPDATE BINARY (FF D6 00 <block>, Lc=len(data)): data is sent as given."""
    if not data:
        raise ValueError("nothing to write")
    return APDU(cla=0xFF, ins=0xD6, p1=0x00, p2=block, data=bytes(data)).to_bytes()


def strip_response(frame: bytes) -> bytes:
    """Drop the trailing status word. Only call on a validated frame."""
    return bytes(frame[:-2])


class HIDGlobalCodec:
    """HID Global OMNIKEY readers.

    Keys are loaded into slot 1A and authentication uses the OMNIKEY
    FF 88 command, whose P3 carries the key type instead of a length.
    """

    name = "HID Global"

    def __init__(self, key: bytes = DEFAULT_KEY) -> None:
        self._key = check_key(key)

    def load_key(self) -> bytes:
        # P1=20: key is stored in the reader's non-volatile memory
        return APDU(cla=0xFF, ins=0x82, p1=0x20, p2=HID_KEY_SLOT, data=self._key).to_bytes()

    def authenticate(self, block: int) -> bytes:
        _check_block(block)
        return bytes([0xFF, 0x88, 0x00, block, KEY_TYPE_A, HID_KEY_SLOT])

    def get_uid(self) -> bytes:
        return get_uid_frame()

    def read_block(self, block: int) -> bytes:
        return read_block_frame(block)

    def write_block(self, block: int, data: bytes) -> bytes:
        return write_block_frame(block, data)


class ACSCodec:
    """ACS ACR122/ACR1252 readers: PC/SC 2.07 GENERAL AUTHENTICATE."""

    name = "ACS"

    def __init__(self, key: bytes = DEFAULT_KEY) -> None:
        self._key = check_key(key)

    def load_key(self) -> bytes:
        return APDU(cla=0xFF, ins=0x82, p1=0x00, p2=ACS_KEY_SLOT, data=self._key).to_bytes()

    def authenticate(self, block: int) -> bytes:
        _check_block(block)
        # version 01, block MSB 00, block LSB, key type, key slot
        data = bytes([0x01, 0x00, block, KEY_TYPE_A, ACS_KEY_SLOT])
        return APDU(cla=0xFF, ins=0x86, p1=0x00, p2=0x00, data=data).to_bytes()

    def get_uid(self) -> bytes:
        return get_uid_frame()

    def read_block(self, block: int) -> bytes:
        return read_block_frame(block)

    def write_block(self, block: int, data: bytes) -> bytes:
        return write_block_frame(block, data)


# Reader name fragment (case-insensitive) -> codec factory. First match wins.
READER_FAMILIES: list[tuple[str, Callable[[bytes], FrameCodec]]] = [
    ("omnikey", HIDGlobalCodec),
    ("hid global", HIDGlobalCodec),
    ("acr", ACSCodec),
    ("acs", ACSCodec),
]

DEFAULT_CODEC: Callable[[bytes], FrameCodec] = HIDGlobalCodec


def select_codec(reader_name: str, key: bytes | None = None) -> FrameCodec:
    """Pick the codec for a reader by its PC/SC name."""
    key = DEFAULT_KEY if key is None else key
    lowered = reader_name.lower()
    for fragment, factory in READER_FAMILIES:
        if fragment in lowered:
            codec = factory(key)
            break
    else:
        codec = DEFAULT_CODEC(key)
    lg.debug("using %s codec for %s", codec.name, reader_name)
    return codec

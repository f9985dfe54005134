"""In-memory reader and MIFARE Classic card for session tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from rfidcard.core.mifare import CardSession
from rfidcard.core.smartcard import TransportError

READER_NAME = "HID Global OMNIKEY 5022 Smart Card Reader 00 00"
ACS_READER_NAME = "ACS ACR122U PICC Interface 00 00"

KEY = b"\xff" * 6
RAW_UID = bytes([0x04, 0xA1, 0xB2, 0xC3])

OK = b"\x90\x00"
AUTH_FAILED = b"\x63\x00"
NOT_ALLOWED = b"\x69\x82"
UNKNOWN_INS = b"\x6d\x00"

# PC/SC contactless storage-card ATR, card name 00 01 (MIFARE Classic 1K)
ATR_1K = bytes.fromhex("3B8F8001804F0CA000000306030001000000006A")
ATR_4K = bytes.fromhex("3B8F8001804F0CA000000306030002000000006A")


class SimulatedCard:
    """MIFARE Classic card behind a PC/SC reader.

    Understands both the OMNIKEY (FF 88) and the PC/SC 2.07 (FF 86)
    authenticate commands. A block can be read or written only after its
    sector was authenticated with the card's key.
    """

    def __init__(self, atr: bytes = ATR_1K, key: bytes = KEY, uid: bytes = RAW_UID) -> None:
        self.atr = atr
        self.key = key
        self.uid = uid
        self.blocks: dict[int, bytes] = {}
        self.loaded_key: bytes | None = None
        self.authenticated_sector: int | None = None

    def _authenticate(self, block: int) -> bytes:
        if self.loaded_key != self.key:
            self.authenticated_sector = None
            return AUTH_FAILED
        self.authenticated_sector = block // 4
        return OK

    def _allowed(self, block: int) -> bool:
        return self.authenticated_sector == block // 4

    def handle(self, command: bytes) -> bytes:
        cla, ins = command[0], command[1]
        if cla != 0xFF:
            return UNKNOWN_INS
        if ins == 0x82:
            self.loaded_key = bytes(command[5:5 + command[4]])
            return OK
        if ins == 0x88:
            return self._authenticate(command[3])
        if ins == 0x86:
            return self._authenticate(command[7])
        if ins == 0xCA:
            return self.uid + OK
        if ins == 0xB0:
            block = command[3]
            if not self._allowed(block):
                return NOT_ALLOWED
            return self.blocks.get(block, b"\x00" * command[4]) + OK
        if ins == 0xD6:
            block = command[3]
            if not self._allowed(block):
                return NOT_ALLOWED
            self.blocks[block] = bytes(command[5:5 + command[4]])
            return OK
        return UNKNOWN_INS


class SimulatedTransport:
    def __init__(self, reader: SimulatedReader) -> None:
        self._reader = reader
        self.connected = True

    def transmit(self, command: bytes) -> bytes | None:
        reader = self._reader
        reader.commands.append(bytes(command))
        if reader.transmit_error is not None:
            raise reader.transmit_error
        if reader.scripted:
            return reader.scripted.pop(0)
        return reader.card.handle(command)

    def get_atr(self) -> bytes:
        if self._reader.atr_error is not None:
            raise self._reader.atr_error
        return self._reader.card.atr

    def disconnect(self) -> None:
        self.connected = False
        self._reader.disconnects += 1
        if self._reader.disconnect_error is not None:
            raise self._reader.disconnect_error


class SimulatedReader:
    """Reader handle that records every command frame it is given."""

    def __init__(self, name: str = READER_NAME, card: SimulatedCard | None = None) -> None:
        self.name = name
        self.card = card
        self.commands: list[bytes] = []
        # Responses returned in order instead of asking the card.
        self.scripted: list[bytes | None] = []
        self.transmit_error: TransportError | None = None
        self.atr_error: TransportError | None = None
        self.disconnect_error: TransportError | None = None
        self.connect_error: TransportError | None = None
        self.disconnects = 0

    def is_card_present(self) -> bool:
        return self.card is not None

    def connect(self) -> SimulatedTransport:
        if self.connect_error is not None:
            raise self.connect_error
        return SimulatedTransport(self)


class SimulatedProvider:
    def __init__(self, *readers: SimulatedReader) -> None:
        self.readers = list(readers)

    def list_readers(self) -> list[SimulatedReader]:
        return list(self.readers)


@pytest.fixture
def card() -> SimulatedCard:
    return SimulatedCard()


@pytest.fixture
def reader(card) -> SimulatedReader:
    return SimulatedReader(card=card)


@pytest.fixture
def provider(reader) -> SimulatedProvider:
    return SimulatedProvider(SimulatedReader("Other Reader 01"), reader)


@pytest.fixture
def session(provider) -> Iterator[CardSession]:
    s = CardSession(READER_NAME, provider)
    assert s.open()
    yield s
    s.close()

"""Card session: block-level access to one MIFARE Classic card."""

from __future__ import annotations

import logging

from rfidcard.core.mifare.capacity import Capacity, resolve_capacity
from rfidcard.core.mifare.codec import FrameCodec, check_key, select_codec, strip_response
from rfidcard.core.smartcard import (
    ReaderNotFoundError,
    Response,
    TransportError,
    is_valid_response,
)
from rfidcard.core.smartcard.logging import PROTOCOL
from rfidcard.core.smartcard.transport import ReaderHandle, Transport, TransportProvider

lg = logging.getLogger(__name__)

_GREEN = "\033[32m"
_RED = "\033[31m"
_RESET = "\033[0m"


class CardSession:
    """Owns the channel to the card on one named reader.

    The session is closed until open() finds a card, and closed again after
    close(). Card operations on a closed session log a warning and return
    a negative result without touching the reader. Status word failures are
    returned as False/None; TransportError from the reader is always raised.

    Not thread-safe: use one session per reader.
    """

    def __init__(
        self,
        reader_name: str,
        provider: TransportProvider,
        *,
        key: bytes | None = None,
        codec: FrameCodec | None = None,
    ) -> None:
        self._reader_name = reader_name
        self._provider = provider
        self._key = None if key is None else check_key(key)
        self._codec_override = codec
        self._transport: Transport | None = None
        self._codec: FrameCodec | None = None
        self._capacity = Capacity.UNSUPPORTED

    @property
    def reader_name(self) -> str:
        return self._reader_name

    @property
    def active(self) -> bool:
        return self._transport is not None

    # -- lifecycle --

    def open(self) -> bool:
        """Connect to the card on the reader.

        Returns False, leaving the session closed, if no card is present.
        Raises ReaderNotFoundError if the reader does not exist and
        TransportError if the channel cannot be established.
        """
        if self.active:
            return True
        reader = self._find_reader()
        if not reader.is_card_present():
            lg.info("no card on %s", self._reader_name)
            return False

        codec = self._codec_override or select_codec(self._reader_name, self._key)
        transport = reader.connect()
        try:
            atr = transport.get_atr()
        except TransportError:
            transport.disconnect()
            raise
        self._codec = codec
        self._capacity = resolve_capacity(atr)
        # active only once codec and capacity are set
        self._transport = transport
        lg.info("connected to %s", self._reader_name)
        lg.debug("ATR %s capacity %s", atr.hex(" ").upper(), self._capacity.name)
        return True

    def close(self) -> None:
        """Release the channel and drop all cached card state.

        State is cleared even if the reader fails to release the channel;
        that TransportError is raised afterwards.
        """
        transport = self._transport
        self._transport = None
        self._codec = None
        self._capacity = Capacity.UNSUPPORTED
        if transport is not None:
            transport.disconnect()
            lg.info("disconnected from %s", self._reader_name)

    def __enter__(self) -> CardSession:
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close()
            return
        try:
            self.close()
        except TransportError as release_error:
            lg.error("release of %s failed: %s", self._reader_name, release_error)

    def _find_reader(self) -> ReaderHandle:
        for reader in self._provider.list_readers():
            if reader.name == self._reader_name:
                return reader
        raise ReaderNotFoundError(self._reader_name)

    # -- transmission --

    def _require_active(self, operation: str) -> bool:
        if self._transport is None:
            lg.warning("%s: no active card session on %s", operation, self._reader_name)
            return False
        return True

    def _send(self, label: str, command: bytes) -> bytes | None:
        response = self._transport.transmit(command)
        if response is None:
            lg.log(PROTOCOL, "%s %sno response%s", label, _RED, _RESET)
        elif len(response) >= 2:
            resp = Response.from_frame(response)
            color = _GREEN if resp.success else _RED
            lg.log(PROTOCOL, "%s %s%04X%s", label, color, resp.sw, _RESET)
        else:
            lg.log(PROTOCOL, "%s %sshort response (%d bytes)%s", label, _RED, len(response), _RESET)
        return response

    # -- operations --

    def authenticate(self, block: int) -> bool:
        """Load the key and authenticate to a block with key A."""
        if not self._require_active("authenticate"):
            return False
        response = self._send("LOAD KEY", self._codec.load_key())
        if not is_valid_response(response):
            return False
        response = self._send(f"AUTHENTICATE block={block}", self._codec.authenticate(block))
        return is_valid_response(response)

    def identify(self) -> bytes | None:
        """Return the 4-byte card UID, most significant byte first, or None."""
        if not self._require_active("identify"):
            return None
        response = self._send("GET UID", self._codec.get_uid())
        if not is_valid_response(response) or len(response) < 6:
            return None
        return bytes(reversed(response[:4]))

    def read(self, block: int) -> bytes | None:
        """Read one block. None if the card refuses, e.g. the block is not authenticated."""
        if not self._require_active("read"):
            return None
        response = self._send(f"READ block={block}", self._codec.read_block(block))
        if not is_valid_response(response):
            return None
        return strip_response(response)

    def write(self, block: int, data: bytes) -> bool:
        """Write data to a block. True only if the card accepted all of it."""
        if not self._require_active("write"):
            return False
        command = self._codec.write_block(block, data)
        response = self._send(f"WRITE block={block} len={len(data)}", command)
        return is_valid_response(response)

    def capacity(self) -> Capacity:
        """Return the block count resolved from the ATR when the session opened."""
        if not self._require_active("capacity"):
            return Capacity.UNSUPPORTED
        return self._capacity

    def __repr__(self) -> str:
        state = "active" if self.active else "closed"
        return f"CardSession({self._reader_name!r}, {state})"

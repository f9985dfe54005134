from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from smartcard.CardRequest import CardRequest
from smartcard.Exceptions import CardRequestTimeoutException, SmartcardException
from smartcard.System import readers

from rfidcard.core.smartcard.errors import TransportError
from rfidcard.core.smartcard.observer import LoggingCardObserver

if TYPE_CHECKING:
    from smartcard.CardConnection import CardConnection
    from smartcard.reader.Reader import Reader

lg = logging.getLogger(__name__)


class PcscTransport:
    """Open pyscard connection to the card on one reader."""

    def __init__(self, connection: CardConnection, observer: LoggingCardObserver) -> None:
        self._connection = connection
        self._observer = observer

    def transmit(self, command: bytes) -> bytes:
        try:
            data, sw1, sw2 = self._connection.transmit(list(command))
        except SmartcardException as exc:
            raise TransportError(f"transmit failed: {exc}") from exc
        return bytes(data) + bytes([sw1, sw2])

    def get_atr(self) -> bytes:
        try:
            return bytes(self._connection.getATR())
        except SmartcardException as exc:
            raise TransportError(f"cannot read ATR: {exc}") from exc

    def disconnect(self) -> None:
        try:
            self._connection.disconnect()
        except SmartcardException as exc:
            raise TransportError(f"disconnect failed: {exc}") from exc
        finally:
            self._connection.deleteObserver(self._observer)


class PcscReader:
    """A PC/SC reader as seen by pyscard."""

    def __init__(self, reader: Reader) -> None:
        self._reader = reader
        self.name = str(reader)

    def is_card_present(self) -> bool:
        request = CardRequest(timeout=0, readers=[self._reader])
        try:
            request.waitforcard()
        except CardRequestTimeoutException:
            return False
        except SmartcardException as exc:
            raise TransportError(f"card presence check failed on {self.name}: {exc}") from exc
        return True

    def connect(self) -> PcscTransport:
        observer = LoggingCardObserver()
        connection = self._reader.createConnection()
        connection.addObserver(observer)
        try:
            connection.connect()
        except SmartcardException as exc:
            connection.deleteObserver(observer)
            raise TransportError(f"cannot connect to {self.name}: {exc}") from exc
        return PcscTransport(connection, observer)

    def __repr__(self) -> str:
        return f"PcscReader({self.name!r})"


class PcscProvider:
    """Transport provider backed by the system PC/SC service."""

    def list_readers(self) -> list[PcscReader]:
        try:
            available = readers()
        except SmartcardException as exc:
            raise TransportError(f"cannot list readers: {exc}") from exc
        lg.debug("found %d reader(s)", len(available))
        return [PcscReader(reader) for reader in available]

from rfidcard.core.smartcard.card import PcscProvider, PcscReader, PcscTransport
from rfidcard.core.smartcard.errors import CardError, ReaderNotFoundError, TransportError
from rfidcard.core.smartcard.logging import PROTOCOL, TRACE, configure_logging
from rfidcard.core.smartcard.transport import ReaderHandle, Transport, TransportProvider
from rfidcard.core.smartcard.types import APDU, Response, is_valid_response

__all__ = [
    "APDU",
    "CardError",
    "PROTOCOL",
    "PcscProvider",
    "PcscReader",
    "PcscTransport",
    "ReaderHandle",
    "ReaderNotFoundError",
    "Response",
    "TRACE",
    "Transport",
    "TransportError",
    "TransportProvider",
    "configure_logging",
    "is_valid_response",
]

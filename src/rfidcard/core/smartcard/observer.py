from __future__ import annotations

import logging

from smartcard.CardConnectionObserver import CardConnectionObserver

from rfidcard.core.smartcard.logging import PROTOCOL, TRACE

lg = logging.getLogger(__name__)


# One MIFARE block per line.
LINE_BYTES = 16

_GREEN = "\033[32m"
_RED = "\033[31m"
_RESET = "\033[0m"

# FF 82: load key into reader memory.
_LOAD_KEY = (0xFF, 0x82)


def _color_sw(sw1: int, sw2: int) -> str:
    """Return ANSI color for a status word: green only for 90 00."""
    if sw1 == 0x90 and sw2 == 0x00:
        return _GREEN
    return _RED


def _mask_key(command: bytes) -> bytes:
    """Blank out key material in a load-key command before it is logged."""
    if len(command) > 5 and tuple(command[:2]) == _LOAD_KEY:
        return command[:5] + b"\x00" * (len(command) - 5)
    return command


class LoggingCardObserver(CardConnectionObserver):
    """CardConnectionObserver that logs reader traffic via Python logging."""

    def _log_hex(self, prefix: str, data: bytes) -> None:
        pad = " " * len(prefix)
        for i in range(0, len(data), LINE_BYTES):
            chunk = data[i : i + LINE_BYTES].hex(" ").upper()
            lg.log(TRACE, "%s%s", prefix if i == 0 else pad, chunk)

    def update(self, observable, event):
        if event.type in ("connect", "reconnect", "disconnect"):
            lg.log(PROTOCOL, event.type)

        elif event.type == "command":
            self._log_hex(">> ", _mask_key(bytes(event.args[0])))

        elif event.type == "response":
            data, sw1, sw2 = event.args[0], event.args[1], event.args[2]
            if data:
                self._log_hex("<< ", bytes(data))
            lg.log(TRACE, "<< %s%02X %02X%s", _color_sw(sw1, sw2), sw1, sw2, _RESET)

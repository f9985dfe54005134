"""Transport interfaces the card session depends on.

The session never talks to PC/SC directly. It receives a provider, looks
up a reader handle by name, and drives the transport that handle returns.
``card.py`` implements these on pyscard; tests implement them in memory.
"""

from __future__ import annotations

from typing import Protocol


class Transport(Protocol):
    """An open channel to the card on one reader."""

    def transmit(self, command: bytes) -> bytes:
        """Send a command frame and return the raw response frame, status word included."""
        ...

    def get_atr(self) -> bytes: ...

    def disconnect(self) -> None: ...


class ReaderHandle(Protocol):
    """A named reader that may or may not hold a card."""

    name: str

    def is_card_present(self) -> bool: ...

    def connect(self) -> Transport: ...


class TransportProvider(Protocol):
    """Enumerates the readers attached to the host."""

    def list_readers(self) -> list[ReaderHandle]: ...

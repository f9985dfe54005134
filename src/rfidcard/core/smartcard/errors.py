"""Exceptions raised by the smartcard layer.

Only system faults are exceptions. A card that answers with a non-9000
status word, or that is not on the reader, is a normal outcome and is
reported as a return value by the session.
"""

from __future__ import annotations


class CardError(Exception):
    """Base class for reader and transport faults."""


class ReaderNotFoundError(CardError):
    """The requested reader name is not among the enumerated readers."""

    def __init__(self, name: str) -> None:
        super().__init__(f"reader not found: {name}")
        self.name = name


class TransportError(CardError):
    """The PC/SC channel failed while connecting, transmitting or releasing."""

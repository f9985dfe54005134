"""MIFARE Classic messages and results.

Each card operation has a Message/Result pair. Results carry a Status so
callers branch on a value: SUCCESS with the operation's value,
PROTOCOL_FAILURE when the card said no (or is gone), TRANSPORT_ERROR when
the reader channel failed.
"""

from __future__ import annotations

from dataclasses import dataclass

from rfidcard.core.base import Message, Result
from rfidcard.core.mifare.capacity import Capacity
from rfidcard.core.mifare.util import format_identifier


@dataclass
class AuthenticateMessage(Message):
    """Load the key and authenticate to a block with key A."""

    block: int


@dataclass
class AuthenticateResult(Result):
    pass


@dataclass
class IdentifyMessage(Message):
    """Request the 4-byte card identifier."""


@dataclass
class IdentifyResult(Result):
    uid: bytes | None = None

    @property
    def uid_hex(self) -> str:
        return format_identifier(self.uid)


@dataclass
class ReadBlockMessage(Message):
    """Read one 16-byte block."""

    block: int


@dataclass
class ReadBlockResult(Result):
    data: bytes | None = None


@dataclass
class WriteBlockMessage(Message):
    """Write data to one block."""

    block: int
    data: bytes


@dataclass
class WriteBlockResult(Result):
    pass


@dataclass
class CapacityMessage(Message):
    """Request the card's block count."""


@dataclass
class CapacityResult(Result):
    capacity: Capacity = Capacity.UNSUPPORTED

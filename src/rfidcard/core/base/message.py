from __future__ import annotations

import enum
from dataclasses import dataclass


class Status(enum.Enum):
    """Outcome of one terminal operation."""

    SUCCESS = "success"
    # The card answered, but not with 90 00, or there was no card to answer.
    PROTOCOL_FAILURE = "protocol_failure"
    # The reader channel itself failed.
    TRANSPORT_ERROR = "transport_error"


@dataclass
class Message:
    """Base class for messages sent to a terminal."""


@dataclass
class Result:
    """Base class for typed results from a terminal operation."""

    status: Status
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is Status.SUCCESS

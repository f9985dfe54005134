from __future__ import annotations

import logging
from typing import Callable, Protocol

from rfidcard.core.base.message import Message, Result, Status
from rfidcard.core.smartcard.errors import TransportError

lg = logging.getLogger(__name__)


class Session(Protocol):
    """What a terminal needs from the card session it drives."""

    def open(self) -> bool: ...
    def close(self) -> None: ...


def handles(message_cls: type[Message], result_cls: type[Result]) -> Callable:
    """Decorator that registers a method as handler for a message type.

    ``result_cls`` is used to report a transport failure when the handler
    does not return normally.
    """

    def decorator(method: Callable) -> Callable:
        method._handles_message = message_cls
        method._result_type = result_cls
        return method

    return decorator


class Terminal:
    """Base terminal that drives card operations through a session.

    Callers send Message objects via send() and receive Result objects.
    Subclasses register handlers with the @handles decorator. The send()
    method dispatches to the appropriate handler based on message type and
    turns a TransportError into a TRANSPORT_ERROR result.
    """

    _handlers: dict[type[Message], str]

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        cls._handlers = {}
        for base in reversed(cls.__mro__):
            if hasattr(base, "_handlers"):
                cls._handlers.update(base._handlers)
        for name in vars(cls):
            method = getattr(cls, name)
            if callable(method) and hasattr(method, "_handles_message"):
                cls._handlers[method._handles_message] = name

    def __init__(self, session: Session) -> None:
        self._session = session

    def connect(self) -> bool:
        """Open the session. Returns False if no card is on the reader."""
        return self._session.open()

    def disconnect(self) -> None:
        """Close the session."""
        self._session.close()

    def send(self, message: Message) -> Result:
        """Dispatch a message to the registered handler."""
        handler_name = self._handlers.get(type(message))
        if handler_name is None:
            raise ValueError(f"unsupported message: {message}")
        handler = getattr(self, handler_name)
        try:
            return handler(message)
        except TransportError as exc:
            self.on_error(exc)
            return handler._result_type(status=Status.TRANSPORT_ERROR, error=str(exc))

    @property
    def supported_messages(self) -> list[type[Message]]:
        """Return the message types this terminal can handle."""
        return list(self._handlers.keys())

    def on_error(self, error: Exception) -> None:
        """Handle a transport error raised by a handler."""
        lg.error("terminal error: %s", error)

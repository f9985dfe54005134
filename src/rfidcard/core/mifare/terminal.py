from __future__ import annotations

from rfidcard.core.base import Status, Terminal, handles
from rfidcard.core.mifare.messages import (
    AuthenticateMessage,
    AuthenticateResult,
    CapacityMessage,
    CapacityResult,
    IdentifyMessage,
    IdentifyResult,
    ReadBlockMessage,
    ReadBlockResult,
    WriteBlockMessage,
    WriteBlockResult,
)
from rfidcard.core.mifare.session import CardSession


def _status(ok: bool) -> Status:
    return Status.SUCCESS if ok else Status.PROTOCOL_FAILURE


class MifareTerminal(Terminal):
    """Terminal for MIFARE Classic cards.

    Translates messages into CardSession calls and wraps the outcome in a
    Result with a Status, so a caller never has to catch TransportError.
    """

    def __init__(self, session: CardSession) -> None:
        super().__init__(session)
        self._card = session

    @handles(AuthenticateMessage, AuthenticateResult)
    def _authenticate(self, message: AuthenticateMessage) -> AuthenticateResult:
        return AuthenticateResult(status=_status(self._card.authenticate(message.block)))

    @handles(IdentifyMessage, IdentifyResult)
    def _identify(self, message: IdentifyMessage) -> IdentifyResult:
        uid = self._card.identify()
        return IdentifyResult(status=_status(uid is not None), uid=uid)

    @handles(ReadBlockMessage, ReadBlockResult)
    def _read_block(self, message: ReadBlockMessage) -> ReadBlockResult:
        data = self._card.read(message.block)
        return ReadBlockResult(status=_status(data is not None), data=data)

    @handles(WriteBlockMessage, WriteBlockResult)
    def _write_block(self, message: WriteBlockMessage) -> WriteBlockResult:
        ok = self._card.write(message.block, message.data)
        return WriteBlockResult(status=_status(ok))

    @handles(CapacityMessage, CapacityResult)
    def _capacity(self, message: CapacityMessage) -> CapacityResult:
        capacity = self._card.capacity()
        return CapacityResult(status=_status(capacity.supported), capacity=capacity)

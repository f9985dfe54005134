import pytest

from rfidcard.core.base import Message, Status
from rfidcard.core.mifare import (
    AuthenticateMessage,
    AuthenticateResult,
    Capacity,
    CapacityMessage,
    CapacityResult,
    CardSession,
    IdentifyMessage,
    IdentifyResult,
    MifareTerminal,
    ReadBlockMessage,
    ReadBlockResult,
    WriteBlockMessage,
    WriteBlockResult,
)
from rfidcard.core.smartcard import ReaderNotFoundError, TransportError

from conftest import READER_NAME, SimulatedProvider, SimulatedReader


@pytest.fixture
def terminal(provider):
    terminal = MifareTerminal(CardSession(READER_NAME, provider))
    assert terminal.connect()
    yield terminal
    terminal.disconnect()


def test_supported_messages(terminal):
    assert set(terminal.supported_messages) == {
        AuthenticateMessage,
        IdentifyMessage,
        ReadBlockMessage,
        WriteBlockMessage,
        CapacityMessage,
    }


def test_unsupported_message(terminal):
    with pytest.raises(ValueError):
        terminal.send(Message())


def test_write_read(terminal):
    result = terminal.send(AuthenticateMessage(block=4))
    assert isinstance(result, AuthenticateResult)
    assert result.ok

    result = terminal.send(WriteBlockMessage(block=4, data=b"\x5a" * 16))
    assert isinstance(result, WriteBlockResult)
    assert result.status is Status.SUCCESS

    result = terminal.send(ReadBlockMessage(block=4))
    assert isinstance(result, ReadBlockResult)
    assert result.ok
    assert result.data == b"\x5a" * 16


def test_protocol_failure(terminal):
    result = terminal.send(ReadBlockMessage(block=4))
    assert result.status is Status.PROTOCOL_FAILURE
    assert result.data is None
    assert result.error is None


def test_identify(terminal):
    result = terminal.send(IdentifyMessage())
    assert isinstance(result, IdentifyResult)
    assert result.ok
    assert result.uid_hex == "C3B2A104"


def test_capacity(terminal):
    result = terminal.send(CapacityMessage())
    assert isinstance(result, CapacityResult)
    assert result.ok
    assert result.capacity is Capacity.MIFARE_1K


def test_transport_error_is_a_result(terminal, reader, caplog):
    reader.transmit_error = TransportError("card removed")
    result = terminal.send(IdentifyMessage())
    assert isinstance(result, IdentifyResult)
    assert result.status is Status.TRANSPORT_ERROR
    assert result.error == "card removed"
    assert result.uid is None
    assert "card removed" in caplog.text


def test_closed_terminal_reports_protocol_failure(provider):
    terminal = MifareTerminal(CardSession(READER_NAME, provider))
    result = terminal.send(CapacityMessage())
    assert result.status is Status.PROTOCOL_FAILURE
    assert result.capacity is Capacity.UNSUPPORTED


def test_connect_without_card():
    reader = SimulatedReader(card=None)
    terminal = MifareTerminal(CardSession(READER_NAME, SimulatedProvider(reader)))
    assert terminal.connect() is False


def test_connect_unknown_reader(provider):
    terminal = MifareTerminal(CardSession("Missing", provider))
    with pytest.raises(ReaderNotFoundError):
        terminal.connect()

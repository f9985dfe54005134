from rfidcard.core.mifare.capacity import Capacity, resolve_capacity
from rfidcard.core.mifare.codec import (
    BLOCK_SIZE,
    DEFAULT_KEY,
    ACSCodec,
    FrameCodec,
    HIDGlobalCodec,
    select_codec,
    strip_response,
)
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
from rfidcard.core.mifare.terminal import MifareTerminal
from rfidcard.core.mifare.util import format_identifier

__all__ = [
    "ACSCodec",
    "AuthenticateMessage",
    "AuthenticateResult",
    "BLOCK_SIZE",
    "Capacity",
    "CapacityMessage",
    "CapacityResult",
    "CardSession",
    "DEFAULT_KEY",
    "FrameCodec",
    "HIDGlobalCodec",
    "IdentifyMessage",
    "IdentifyResult",
    "MifareTerminal",
    "ReadBlockMessage",
    "ReadBlockResult",
    "WriteBlockMessage",
    "WriteBlockResult",
    "format_identifier",
    "resolve_capacity",
    "select_codec",
    "strip_response",
]

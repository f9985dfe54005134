from __future__ import annotations

from dataclasses import dataclass

SW_SUCCESS = 0x9000


def _check_byte(name: str, value: int) -> None:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{name} out of range: {value}")


@dataclass(frozen=True)
class APDU:
    """Short-form ISO 7816 command APDU.

    Reader pseudo-APDUs (CLA FF) never need extended lengths, so Lc and Le
    are single bytes.
    """

    cla: int
    ins: int
    p1: int
    p2: int
    data: bytes = b""
    le: int | None = None

    def __post_init__(self) -> None:
        for name in ("cla", "ins", "p1", "p2"):
            _check_byte(name, getattr(self, name))
        if len(self.data) > 0xFF:
            raise ValueError(f"command data too long: {len(self.data)} bytes")
        if self.le is not None and not 0 <= self.le <= 256:
            raise ValueError(f"le out of range: {self.le}")

    def to_bytes(self) -> bytes:
        buf = bytearray([self.cla, self.ins, self.p1, self.p2])
        if self.data:
            buf.append(len(self.data))
            buf.extend(self.data)
        if self.le is not None:
            buf.append(0x00 if self.le == 256 else self.le)
        return bytes(buf)

    def __repr__(self) -> str:
        return self.to_bytes().hex(" ").upper()


@dataclass(frozen=True)
class Response:
    """ISO 7816 response APDU split into data and status word."""

    data: bytes
    sw1: int
    sw2: int

    @classmethod
    def from_frame(cls, frame: bytes) -> Response:
        """Split a raw response frame. The frame must hold at least the status word."""
        if len(frame) < 2:
            raise ValueError(f"response frame too short: {len(frame)} bytes")
        return cls(data=bytes(frame[:-2]), sw1=frame[-2], sw2=frame[-1])

    @property
    def sw(self) -> int:
        return (self.sw1 << 8) | self.sw2

    @property
    def success(self) -> bool:
        return self.sw == SW_SUCCESS

    def __repr__(self) -> str:
        sw = f"SW={self.sw:04X}"
        if self.data:
            return f"{self.data.hex(' ').upper()} {sw}"
        return sw


def is_valid_response(frame: bytes | None) -> bool:
    """Return True if the frame ends in status word 90 00.

    This is the only success criterion: absent frames and frames shorter
    than a status word are invalid.
    """
    if frame is None or len(frame) < 2:
        return False
    return frame[-2] == 0x90 and frame[-1] == 0x00

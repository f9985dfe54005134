from rfidcard.core.base.message import Message, Result, Status
from rfidcard.core.base.terminal import Terminal, handles

__all__ = ["Message", "Result", "Status", "Terminal", "handles"]

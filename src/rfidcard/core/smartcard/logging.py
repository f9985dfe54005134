from __future__ import annotations

import logging

TRACE = 15
PROTOCOL = 18
logging.addLevelName(TRACE, "TRACE")
logging.addLevelName(PROTOCOL, "PROTOCOL")

LOG_FORMAT = "%(levelname)-8s %(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging: TRACE shows raw frames, PROTOCOL one line per command."""
    logging.basicConfig(level=TRACE if verbose else PROTOCOL, format=LOG_FORMAT)

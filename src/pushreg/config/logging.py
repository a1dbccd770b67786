"""Root logger setup for the pushreg CLI."""

from __future__ import annotations

import logging
from typing import Final

LOG_FORMAT: Final[str] = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

# Per-request transport chatter, shown only at DEBUG.
NOISY_LOGGERS: Final[tuple[str, ...]] = ("httpx", "httpcore")


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Configure the root logger for command-line runs.

    ``force=True`` replaces handlers installed by an earlier call, which the
    CLI uses when ``--verbose`` switches to DEBUG after startup.
    """

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S", force=force)
    transport_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)

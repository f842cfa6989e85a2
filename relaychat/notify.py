"""User-facing notification hook. Presentation is up to the application."""

from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def notify(self, message: str) -> None: ...


class LogNotifier:
    """Default notifier: writes the message to the log."""

    def notify(self, message: str) -> None:
        logger.warning("%s", message)

"""Reporter implementing the ``BuildReporter`` port through ``logging``."""

from __future__ import annotations

import logging


class LoggingReporter:
    """Forward build progress to a standard library logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger("resource_builder.build")

    def info(self, message: str) -> None:
        self.logger.info(message)

    def step(self, message: str) -> None:
        self.logger.info(message)

    def success(self, message: str) -> None:
        self.logger.info(message)

    def warning(self, message: str) -> None:
        self.logger.warning(message)

    def failure(self, message: str) -> None:
        self.logger.error(message)

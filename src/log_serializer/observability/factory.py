"""Observability – structlog configuration with masking."""
from __future__ import annotations

import logging
from typing import Any

import structlog

from log_serializer.masking import MaskingPolicy
from log_serializer.observability.processors import MaskingProcessor


class MaskingLoggerFactory:
    """Configure structlog so every logged object passes through masking."""

    @staticmethod
    def configure(
        level: int = logging.INFO,
        policy: MaskingPolicy | None = None,
        json: bool = True,
    ) -> None:
        """
        Parameters
        ----------
        level:
            Root logger level.
        policy:
            Explicit masking policy; ``None`` follows the process-wide default.
        json:
            Render JSON lines; ``False`` uses the structlog console renderer.
        """
        shared_processors: list[Any] = [
            structlog.contextvars.merge_contextvars,
            MaskingProcessor(policy),
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
        ]
        structlog.configure(
            processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        renderer: Any = (
            structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()
        )
        formatter = structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        root = logging.getLogger()
        root.handlers.clear()
        root.addHandler(handler)
        root.setLevel(level)


def configure_logging(
    level: int = logging.INFO,
    policy: MaskingPolicy | None = None,
    json: bool = True,
) -> None:
    """Shortcut for :meth:`MaskingLoggerFactory.configure`."""
    MaskingLoggerFactory.configure(level=level, policy=policy, json=json)


__all__ = ["MaskingLoggerFactory", "configure_logging"]

"""Logging setup: structlog processors rendered through stdlib handlers."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

from bookfold.settings import Settings, get_settings

if TYPE_CHECKING:
    from structlog.typing import EventDict, Processor, WrappedLogger

_configured = False


def _event_as_message(_logger: WrappedLogger, _method_name: str, event_dict: EventDict) -> EventDict:
    """Publish the log text under `message` instead of structlog's `event`."""
    text = event_dict.pop("event", None)
    if text is not None:
        event_dict["message"] = text
    return event_dict


def _stamp_app_env(app_env: str) -> Processor:
    """Build a processor tagging every record with the running environment."""

    def _stamp(_logger: WrappedLogger, _method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("app_env", app_env)
        return event_dict

    return _stamp


def _handlers(settings: Settings) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file, encoding="utf-8"))
    return handlers


def _renderer(settings: Settings) -> Processor:
    if settings.log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=False)


def configure_logging(*, settings: Settings | None = None, force: bool = False) -> None:
    """Wire structlog and the stdlib root logger from settings.

    Runs once per process unless `force` is set, which also replaces the
    root handlers installed by an earlier call.

    Args:
        settings (Settings | None): Settings to read; defaults to `get_settings()`.
        force (bool): Reconfigure even if logging is already set up.
    """
    global _configured  # noqa: PLW0603

    if _configured and not force:
        return

    settings = settings or get_settings()
    level = logging.getLevelNamesMapping().get(settings.log_level.upper(), logging.INFO)

    logging.basicConfig(level=level, format="%(message)s", handlers=_handlers(settings), force=force)
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            _stamp_app_env(settings.app_env),
            _event_as_message,
            structlog.processors.format_exc_info,
            _renderer(settings),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: str = "bookfold") -> structlog.BoundLogger:
    """Return a named structlog logger, configuring logging on first use."""
    configure_logging()
    return structlog.get_logger(name)

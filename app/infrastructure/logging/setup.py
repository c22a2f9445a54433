"""Structlog configuration for the bot process.

Logging is configured on import. Console rendering is used when PREFIX
is set (dev/staging), JSON lines when it is empty (production). Under
pytest the chain stays valid but nothing is emitted.

Usage:
    from infrastructure.logging import get_module_logger

    logger = get_module_logger()
    logger.info("user_settings_created", user_id="42")
"""

import inspect
import logging
import sys
from typing import Any, List, Optional

import structlog
from structlog.stdlib import BoundLogger
from structlog.types import EventDict, Processor, WrappedLogger

from infrastructure.configuration import Settings

settings = Settings()

SILENT_LEVEL = logging.CRITICAL + 1


def _is_test_environment() -> bool:
    return "pytest" in sys.modules


def add_release(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    """Stamp every entry with the deployed git sha."""
    event_dict.setdefault("git_sha", settings.GIT_SHA)
    return event_dict


def _processors(prod_mode: bool) -> List[Processor]:
    chain: List[Processor] = [
        # interaction scope: correlation_id, user_id, chat_id
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_release,
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if prod_mode:
        chain.append(structlog.processors.JSONRenderer(ensure_ascii=False))
    else:
        chain.append(structlog.dev.ConsoleRenderer())
    return chain


def configure_logging(
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """(Re)configure structlog and the stdlib root logger.

    Args:
        log_level: Overrides settings.LOG_LEVEL.
        is_production: Overrides settings.is_production (JSON vs console).

    Returns:
        A logger using the new configuration.
    """
    if _is_test_environment():
        structlog.configure(
            processors=[
                structlog.stdlib.add_log_level,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(format="%(message)s", level=SILENT_LEVEL, force=True)
        logging.root.setLevel(SILENT_LEVEL)
        return structlog.stdlib.get_logger()

    prod_mode = settings.is_production if is_production is None else is_production
    level_name = (log_level or settings.LOG_LEVEL).upper()

    structlog.configure(
        processors=_processors(prod_mode),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level_name, logging.INFO),
    )
    return structlog.stdlib.get_logger()


logger: BoundLogger = configure_logging()


def _caller_module_name(depth: int = 2) -> Optional[str]:
    frame = inspect.currentframe()
    for _ in range(depth):
        if frame is None:
            return None
        frame = frame.f_back
    if frame is None:
        return None
    module = inspect.getmodule(frame)
    return module.__name__ if module else None


def get_logger(name: Optional[str] = None) -> BoundLogger:
    """Logger bound to ``logger_name``: ``name`` if given, else the caller's module."""
    name = name or _caller_module_name()
    return logger.bind(logger_name=name or "unknown")


def get_module_logger(**initial_context: Any) -> BoundLogger:
    """Logger for the calling module.

    Binds ``component`` (last dotted segment) and ``module_path``, plus any
    ``initial_context``.

    Example:
        # in modules/preferences/service.py
        logger = get_module_logger()
        # -> component="service", module_path="modules.preferences.service"
    """
    module_name = _caller_module_name()
    if module_name is None:
        return logger.bind(component="unknown", **initial_context)
    return logger.bind(
        component=module_name.rsplit(".", 1)[-1],
        module_path=module_name,
        **initial_context,
    )

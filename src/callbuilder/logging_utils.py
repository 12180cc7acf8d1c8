"""Runtime logging helpers."""

from __future__ import annotations

import inspect
import logging
import sys
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from callbuilder.config import Settings

_FORMAT = "{time:HH:mm:ss.SSS} | {level:<7} | {name}:{function}:{line} | {message}"


class InterceptHandler(logging.Handler):
    """Handler that forwards stdlib logging messages to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = inspect.currentframe(), 0
        while frame:
            filename = frame.f_code.co_filename
            is_logging = filename == logging.__file__
            is_frozen = "importlib" in filename and "_bootstrap" in filename
            if depth > 0 and not (is_logging or is_frozen):
                break
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _level(name: str) -> str:
    level = name.upper()
    try:
        logger.level(level)
    except ValueError:
        msg = f"unknown log level {name!r}"
        raise ValueError(msg) from None
    return level


def parse_log_filter(spec: str) -> tuple[str, dict[str, str | bool]]:
    """Parse a log filter.

    Format: "level" or "level,module=level"
    Examples:
        - "info" - global INFO level
        - "info,callbuilder.unification=debug" - solver details at DEBUG
        - "debug,callbuilder.fields=false" - DEBUG, field planner silenced

    Returns:
        (global_level, module_filter_dict)

    Raises:
        ValueError: If a level is not one loguru knows
    """
    filter_dict: dict[str, str | bool] = {}
    global_level = "info"

    for raw in spec.lower().split(","):
        part = raw.strip()
        if not part:
            continue
        if "=" in part:
            module, level = (s.strip() for s in part.split("=", 1))
            filter_dict[module] = False if level == "false" else _level(level)
        else:
            _level(part)
            global_level = part

    filter_dict.setdefault("", global_level.upper())
    return global_level, filter_dict


def configure_logging(settings: Settings) -> None:
    """Send callbuilder's log records to stderr according to the settings."""
    global_level, module_filter = parse_log_filter(settings.log_filter)

    logger.remove()
    logger.add(
        sys.stderr,
        level="TRACE",
        format=_FORMAT,
        backtrace=False,
        diagnose=False,
        filter=module_filter,
    )
    logger.enable("callbuilder")
    root = logging.getLogger()
    if not any(isinstance(h, InterceptHandler) for h in root.handlers):
        root.addHandler(InterceptHandler())
    logger.debug("logging.configured level={} filter={}", global_level, module_filter)

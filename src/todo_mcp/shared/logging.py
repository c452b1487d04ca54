from __future__ import annotations

import json
import logging
import sys
from typing import Any, Optional

from .config import LoggingConfig


def configure_logging(config: LoggingConfig) -> None:
    # stdout carries protocol lines, so logs never go there
    handlers: list[logging.Handler] = []
    if config.file:
        handlers.append(logging.FileHandler(config.file, encoding="utf-8"))
    else:
        handlers.append(logging.StreamHandler(sys.stderr))

    logging.basicConfig(
        level=getattr(logging, config.level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
        handlers=handlers,
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name if name else "todo_mcp")


def log_event(logger: logging.Logger, level: int, message: str, **context: Any) -> None:
    """Log ``message`` with a JSON context suffix, e.g. ``Tool executed | {"tool": "create_task"}``."""
    if not logger.isEnabledFor(level):
        return
    if context:
        message = f"{message} | {json.dumps(context, default=str, ensure_ascii=False)}"
    logger.log(level, message)

"""Logging configuration for Label Catalog."""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, MutableMapping, Optional, Tuple
import os

from catalog.config import settings


class ContextLogger(logging.LoggerAdapter):
    """Logger that accepts a ``context`` mapping (entity id, action, ...).

    In development the context is appended to the message. In production it
    is dropped from the text and only attached to the record as
    ``record.context``, which is where a monitoring handler picks it up.
    """

    def __init__(self, logger: logging.Logger, include_context: Optional[bool] = None):
        super().__init__(logger, {})
        self._include_context = include_context

    @property
    def include_context(self) -> bool:
        if self._include_context is None:
            return settings.is_development
        return self._include_context

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        context: Dict[str, Any] = kwargs.pop("context", None) or {}
        if context:
            extra = dict(kwargs.get("extra") or {})
            extra["context"] = context
            kwargs["extra"] = extra
            if self.include_context:
                rendered = ", ".join(f"{k}={v}" for k, v in context.items())
                msg = f"{msg} [{rendered}]"
        return msg, kwargs


def setup_logging():
    """Configure application logging."""
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    # Create formatter
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)

    handlers = [console_handler]

    # File handler (if log path configured)
    log_path = settings.log_path or os.getenv('LOG_PATH', '')
    if log_path:
        log_file = Path(log_path)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    # Configure root logger
    logging.basicConfig(
        level=log_level,
        handlers=handlers
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)


def get_logger(name: str) -> ContextLogger:
    """Get context-aware logger for module."""
    return ContextLogger(logging.getLogger(name))

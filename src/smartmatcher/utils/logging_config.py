"""
Unified logging configuration for smartmatcher.
"""

import logging
import logging.config
from typing import Any, Dict, Optional

from ..config import AppConfig, get_config


class LoggingConfig:
    """Unified logging configuration handler."""

    def __init__(self, debug: bool = False, app_config: Optional[AppConfig] = None):
        """Initialize logging configuration.

        Args:
            debug: Enable debug logging if True
            app_config: Application configuration, defaults to the global one
        """
        self.debug = debug
        self.app_config = app_config or get_config()

    def _get_log_level(self) -> str:
        """Get the appropriate log level based on debug mode."""
        return "DEBUG" if self.debug else self.app_config.logging.level.upper()

    def _get_handlers(self) -> Dict[str, Dict[str, Any]]:
        """Get configured handlers."""
        handlers: Dict[str, Dict[str, Any]] = {
            "console": {
                "class": "rich.logging.RichHandler",
                "formatter": "console",
                "level": self._get_log_level(),
                "rich_tracebacks": True,
                "show_path": False,
            },
        }

        log_file = self.app_config.logging.file
        if log_file:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            handlers["file"] = {
                "class": "logging.handlers.RotatingFileHandler",
                "formatter": "detailed",
                "filename": str(log_file),
                "maxBytes": self.app_config.logging.max_size,
                "backupCount": self.app_config.logging.backup_count,
                "encoding": "utf-8",
                "level": self.app_config.logging.file_level.upper(),
            }

        return handlers

    def _get_formatters(self) -> Dict[str, Dict[str, Any]]:
        """Get configured formatters."""
        return {
            "console": {
                "format": "%(message)s",
                "datefmt": "[%X]",
            },
            "detailed": {
                "format": self.app_config.logging.format,
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        }

    def _get_loggers(self) -> Dict[str, Dict[str, Any]]:
        """Get configured loggers."""
        handler_names = list(self._get_handlers().keys())
        return {
            "": {  # root logger
                "handlers": ["console"],
                "level": "WARNING",
                "propagate": True,
            },
            "smartmatcher": {
                "handlers": handler_names,
                "level": self._get_log_level(),
                "propagate": False,
            },
        }

    def build(self) -> Dict[str, Any]:
        """Build the ``dictConfig`` mapping."""
        return {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": self._get_formatters(),
            "handlers": self._get_handlers(),
            "loggers": self._get_loggers(),
        }

    def setup(self) -> None:
        """Set up the logging configuration."""
        try:
            logging.config.dictConfig(self.build())
        except (ValueError, TypeError, AttributeError, ImportError, OSError) as e:
            # Fallback to basic config if setup fails
            logging.basicConfig(
                level=self._get_log_level(),
                format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            )
            logger = logging.getLogger("smartmatcher")
            logger.error(f"Failed to configure logging: {e}", exc_info=True)
            logger.info("Falling back to basic logging configuration")

    @staticmethod
    def get_logger(name: Optional[str] = None) -> logging.Logger:
        """Get a named logger or the package logger."""
        return logging.getLogger(name or "smartmatcher")

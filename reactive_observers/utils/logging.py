from typing import Any, Optional
import logging
from reactive_observers.config.logging import LoggerAdapter, create_formatter
from reactive_observers.config.settings import get_settings


class Logger:
    def __init__(self, name: str, type: str, level: Optional[str] = None):
        settings = get_settings()
        self.name = name
        self.type = type
        self.level = (level or settings.effective_log_level).upper()

        self.formatter = create_formatter(
            self.type,
            settings.logging.log_format,
            use_colors=settings.logging.use_colors,
        )

        self._logger = logging.getLogger(self.name)
        self._logger.setLevel(getattr(logging, self.level, logging.WARNING))

        # Ensure no duplicate handlers are added
        if not self._logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(self.formatter)
            self._logger.addHandler(handler)
            self._logger.propagate = False

        self.logger = LoggerAdapter(self._logger, {"class_name": self.name})

    def get_logger(self):
        return self._logger

    def is_enabled_for(self, level: str) -> bool:
        return self._logger.isEnabledFor(getattr(logging, level.upper()))

    def log(self, message: str, level: str = "info", exc_info=None):
        self.logger.log(
            getattr(logging, level.upper()),
            message,
            extra={"class_name": self.name, "formatter": self.formatter},
            exc_info=exc_info,
        )

    def info(self, message: Any):
        self.log(message, "info")

    def debug(self, message: str, exc_info=None):
        self.log(message, "debug", exc_info=exc_info)

    def error(self, message: str, exc_info=True):
        self.log(message, "error", exc_info=exc_info)

    def warning(self, message: str, exc_info=None):
        self.log(message, "warning", exc_info=exc_info)

    def critical(self, message: str, exc_info=True):
        self.log(message, "critical", exc_info=exc_info)

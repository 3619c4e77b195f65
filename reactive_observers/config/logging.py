import logging
import sys
import traceback
from typing import Dict
from colorlog import ColoredFormatter

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class LoggerAdapter(logging.LoggerAdapter):
    def __init__(self, logger, extra):
        super().__init__(logger, extra)
        self.logger = logger
        self.extra = extra

    def log(self, level, msg, *args, **kwargs):
        if kwargs.get("exc_info"):
            # Format exception with full traceback
            exc_info = kwargs.pop("exc_info")
            if exc_info is True:
                exc_info = sys.exc_info()
            elif isinstance(exc_info, BaseException):
                exc_info = (type(exc_info), exc_info, exc_info.__traceback__)
            if isinstance(exc_info, tuple) and exc_info[1] is not None:
                msg = f"{msg}\n" + "".join(
                    traceback.format_exception(exc_info[0], exc_info[1], exc_info[2])
                )

        extra = kwargs.setdefault("extra", {})
        formatter = extra.pop("formatter", None)
        if formatter and self.logger.handlers:
            self.logger.handlers[0].setFormatter(formatter)
        extra.setdefault("class_name", self.extra.get("class_name", self.logger.name))

        self.logger.log(level, msg, *args, **kwargs)


default_log_colors = {
    "DEBUG": "cyan",
    "INFO": "light_blue",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}

class_color_map: Dict[str, Dict[str, str]] = {
    "registry": {
        "INFO": "green",
        "DEBUG": "cyan",
        "ERROR": "red",
        "WARNING": "yellow",
        "CRITICAL": "red,bg_white",
    },
}


def get_log_colors(type: str) -> Dict[str, str]:
    """Colors per level for a component type, falling back to the defaults"""
    colors = class_color_map.get(type, {})
    return {level: colors.get(level, color) for level, color in default_log_colors.items()}


def create_formatter(
    type: str, log_format: str, use_colors: bool = True
) -> logging.Formatter:
    """Build the formatter used by component loggers"""
    if use_colors:
        return ColoredFormatter(
            log_format,
            datefmt=DATE_FORMAT,
            log_colors=get_log_colors(type),
            reset=True,
        )
    return ColoredFormatter(
        log_format,
        datefmt=DATE_FORMAT,
        log_colors={},
        reset=False,
        no_color=True,
    )

# File: /fieldview/core/logging.py | Version: 1.0 | Title: Engine logging configuration (plain or JSON console)
import json
import logging
import logging.config
from typing import Optional

from fieldview.core.config import settings


class JsonConsole(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        base = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False)


def configure_logging(level: Optional[str] = None, use_json: Optional[bool] = None) -> None:
    level = (level or settings.LOG_LEVEL).upper()
    if use_json is None:
        use_json = settings.LOG_JSON

    if use_json:
        formatter = {"()": JsonConsole}
    else:
        formatter = {
            "format": "%(levelname)s %(asctime)s %(name)s: %(message)s",
            "class": "logging.Formatter",
        }

    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": formatter,
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "level": level,
            },
        },
        "root": {
            "handlers": ["console"],
            "level": level,
        },
        "loggers": {
            "fieldview": {"level": level},
        },
    }

    logging.config.dictConfig(config)

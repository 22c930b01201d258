"""Structured logging for the Binnacle server.

Each record is emitted as one JSON object tagged with the deployment
environment. Fields passed through ``extra=`` (cache keys, query names,
status codes) are copied into the object.
"""

import json
import logging
from typing import Any, Dict, Union

# Attributes every LogRecord has; anything else came in through extra=
_RECORD_ATTRS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    def __init__(self, environment: str = "production"):
        super().__init__(datefmt="%Y-%m-%dT%H:%M:%S%z")
        self.environment = environment

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": self.formatTime(record, self.datefmt),
            "env": self.environment,
            "level": record.levelname,
            "logger": record.name,
            "where": f"{record.module}:{record.lineno}",
            "msg": record.getMessage(),
        }
        for name, value in vars(record).items():
            if name not in _RECORD_ATTRS and not name.startswith("_"):
                payload[name] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging(level: Union[int, str] = logging.INFO, environment: str = "production") -> None:
    """Attach the JSON handler to the binnacle logger tree once."""
    logger = logging.getLogger("binnacle")
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    if any(isinstance(h.formatter, JsonFormatter) for h in logger.handlers):
        return
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter(environment))
    logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)

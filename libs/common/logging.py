import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Optional

from libs.common.config import get_settings

# Record attributes copied into JSON output when a call passes them via extra=
CONTEXT_FIELDS = ("product_id", "media_id", "username")

_HANDLER_NAME = "catalog"


class JsonFormatter(logging.Formatter):
    """
    One JSON object per line, tagged with the environment name.
    """

    def __init__(self, environment: str = "local") -> None:
        super().__init__()
        self.environment = environment

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "env": self.environment,
            "message": record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                payload[field] = value

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def _resolve_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(
    level: Optional[str] = None, *, stream: Optional[IO[str]] = None
) -> logging.Handler:
    """
    Install the catalog log handler on the root logger.

    ``level`` overrides ``LOG_LEVEL`` (the init command's ``--log-level``).
    Calling this again swaps the previous catalog handler; handlers added by
    anything else are left alone.
    """
    settings = get_settings()
    log_level = _resolve_level(level or settings.LOG_LEVEL)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.set_name(_HANDLER_NAME)
    if settings.ENVIRONMENT == "local":
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)-7s %(name)s: %(message)s")
        )
    else:
        handler.setFormatter(JsonFormatter(settings.ENVIRONMENT))

    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    # SQL echo is opt-in through DB_ECHO
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.DB_ECHO else logging.WARNING
    )
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    return handler


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)

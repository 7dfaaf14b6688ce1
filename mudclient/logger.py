import json
import logging
import os

from datetime import datetime, timezone

from .config import LOG_DIR, LOG_LEVEL

_LOGGER_CONFIGURED = False

# Campos extras (logger.x(..., extra={...})) copiados para o JSON
_CONTEXT_FIELDS = ("rule", "kind", "event")


class JsonFormatter(logging.Formatter):
    def format(self, record):
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }
        for field in _CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_entry[field] = value

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False)


def _configure_root_logger():
    global _LOGGER_CONFIGURED
    if _LOGGER_CONFIGURED:
        return

    root_logger = logging.getLogger()
    if not root_logger.handlers:
        os.makedirs(LOG_DIR, exist_ok=True)

        timestamp = datetime.now().strftime("%Y_%m_%d_%H_%M_%S")
        log_file_path = os.path.join(LOG_DIR, f"patterns_{timestamp}.log")

        # Só arquivo: o terminal fica livre para o host
        file_handler = logging.FileHandler(log_file_path, encoding="utf-8", mode="a")
        file_handler.setFormatter(JsonFormatter())

        root_logger.addHandler(file_handler)

    root_logger.setLevel(LOG_LEVEL)
    _LOGGER_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    _configure_root_logger()
    return logging.getLogger(name)

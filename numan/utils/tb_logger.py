# file: numan/utils/tb_logger.py
# Structured JSON logging for the numan CLI
#   - JSONL file logs (one object per line) below the config directory
#   - optional plain console handler for --verbose runs

import datetime
import json
import logging
import os
from typing import Any, Dict, Optional, Tuple

loggerNameOfNuman = 'numan'


# ---------------------------------------------------------------------------
# JSON Formatter
# ---------------------------------------------------------------------------

class JsonLogFormatter(logging.Formatter):
    """
    Formats log records as single-line JSON (JSONL).
    """

    _SKIP_FIELDS = frozenset({
        "name", "msg", "args", "created", "relativeCreated",
        "exc_info", "exc_text", "stack_info", "lineno", "funcName",
        "filename", "module", "levelno", "levelname", "pathname",
        "thread", "threadName", "process", "processName",
        "message", "msecs", "taskName",
    })

    def __init__(self, app_id: str = "", **kwargs):
        super().__init__()
        self.app_id = app_id

    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()

        log_dict: Dict[str, Any] = {
            "timestamp": datetime.datetime.fromtimestamp(
                record.created, tz=datetime.timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "filename": record.filename,
            "lineno": record.lineno,
            "funcName": record.funcName,
            "message": record.message,
        }

        if self.app_id:
            log_dict["app_id"] = self.app_id

        # extra={...} fields (package, path, status_code, ...)
        for key, value in record.__dict__.items():
            if key not in self._SKIP_FIELDS and not key.startswith("_"):
                try:
                    json.dumps(value)
                    log_dict[key] = value
                except (TypeError, ValueError):
                    log_dict[key] = str(value)

        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            log_dict["exception"] = record.exc_text
        if record.stack_info:
            log_dict["stack"] = record.stack_info

        return json.dumps(log_dict, ensure_ascii=False, default=str)


# ---------------------------------------------------------------------------
# setup_logging
# ---------------------------------------------------------------------------

def setup_logging(
    level: int,
    name: str = loggerNameOfNuman,
    file_level: Optional[int] = None,
    interminal: bool = False,
    logs_directory: Optional[str] = None,
    app_name: str = "numan",
) -> Tuple[logging.Logger, Optional[str]]:
    """
    Configure the application logger.

    Console output uses a plain text format, the file handler writes JSONL
    into ``<logs_directory>/Logs-<name>-<date>.log``. Without a logs directory
    only the console handler (if any) is attached.

    Returns:
        (logger, log_filename or None)
    """
    global loggerNameOfNuman

    if not file_level:
        file_level = level

    available_log_levels = [
        logging.CRITICAL, logging.ERROR, logging.WARNING,
        logging.INFO, logging.DEBUG, logging.NOTSET,
    ]
    for lbl, val in [("level", level), ("file_level", file_level)]:
        if val not in available_log_levels:
            raise ValueError(f"{lbl} must be one of {available_log_levels}, but is {val}")

    loggerNameOfNuman = name

    logger = logging.getLogger(name)
    logger.setLevel(min(level, file_level))
    if logger.hasHandlers():
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()
    logger.propagate = False

    log_filename = None
    if logs_directory:
        os.makedirs(logs_directory, exist_ok=True)
        log_date = datetime.datetime.today().strftime('%Y-%m-%d')
        log_filename = os.path.join(logs_directory, f"Logs-{name}-{log_date}.log")

        file_handler = logging.FileHandler(log_filename, encoding="utf-8")
        file_handler.setFormatter(JsonLogFormatter(app_id=app_name))
        file_handler.setLevel(file_level)
        logger.addHandler(file_handler)

    if interminal:
        console_handler = logging.StreamHandler()
        log_format = '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
        console_handler.setFormatter(logging.Formatter(log_format))
        console_handler.setLevel(level)
        logger.addHandler(console_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger, log_filename


def get_logger() -> logging.Logger:
    """
    Return the active numan logger.
    """
    return logging.getLogger(loggerNameOfNuman)

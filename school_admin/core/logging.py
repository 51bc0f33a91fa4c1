import logging
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
import os
import json
from datetime import datetime, timezone
from typing import Any, Dict, Optional
import traceback

from school_admin.core.config import settings

# Attributes passed through `extra=` by the middleware and services
REQUEST_FIELDS = ('request_id', 'method', 'path', 'status_code', 'user_id', 'school_id')


class CustomJsonFormatter(logging.Formatter):
    """One JSON object per line, with request context when the record has it"""
    def __init__(self, fields=REQUEST_FIELDS):
        super().__init__()
        self.fields = tuple(fields)

    def format(self, record):
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "where": f"{record.module}.{record.funcName}:{record.lineno}",
            "message": record.getMessage(),
        }
        entry.update({
            field: getattr(record, field)
            for field in self.fields
            if getattr(record, field, None) is not None
        })

        if hasattr(record, 'duration'):
            entry['duration_ms'] = record.duration

        if record.exc_info:
            exc_type, exc_value, exc_tb = record.exc_info
            entry['exception'] = {
                'type': exc_type.__name__,
                'message': str(exc_value),
                'traceback': traceback.format_exception(exc_type, exc_value, exc_tb)
            }

        return json.dumps(entry, default=str)

class LoggerFactory:
    """Factory class for creating and configuring loggers"""

    @staticmethod
    def create_logger(name: str, log_dir: Optional[str] = None, level: str = "INFO"):
        logger = logging.getLogger(name)
        logger.setLevel(getattr(logging, level))
        logger.propagate = False

        # Remove existing handlers if any
        if logger.handlers:
            logger.handlers.clear()

        console = logging.StreamHandler()
        console.setLevel(getattr(logging, level))
        console.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
        logger.addHandler(console)

        # File logging is opt-in through LOG_DIR
        if not log_dir:
            return logger

        os.makedirs(log_dir, exist_ok=True)

        handlers = {
            'app': RotatingFileHandler(
                os.path.join(log_dir, 'app.log'),
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5
            ),
            'error': RotatingFileHandler(
                os.path.join(log_dir, 'error.log'),
                maxBytes=10 * 1024 * 1024,
                backupCount=5
            ),
            'access': TimedRotatingFileHandler(
                os.path.join(log_dir, 'access.log'),
                when='midnight',
                interval=1,
                backupCount=30
            ),
        }

        for handler_name, handler in handlers.items():
            if handler_name == 'error':
                handler.setLevel(logging.ERROR)
            else:
                handler.setLevel(getattr(logging, level))
            if handler_name == 'access':
                handler.addFilter(lambda record: hasattr(record, 'duration'))
            handler.setFormatter(CustomJsonFormatter())
            logger.addHandler(handler)

        return logger

# Create default logger instance
logger = LoggerFactory.create_logger(
    "school_admin",
    log_dir=settings.LOG_DIR,
    level=settings.LOG_LEVEL
)

"""로깅 설정 유틸리티./Logging configuration utilities."""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict


class JsonFormatter(logging.Formatter):
    """JSON 포맷터 구현./Implement JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        """레코드를 JSON 문자열로 직렬화./Serialize record into JSON string."""

        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "name": record.name,
            "thread": record.threadName,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def configure_logging(log_file: Path | None = None, level: str = "INFO") -> None:
    """JSON 로거를 설정한다./Configure the ``treescan`` JSON logger.

    Logs go to ``log_file`` when given, otherwise to stderr.
    """

    handler: Dict[str, Any]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = {
            "class": "logging.FileHandler",
            "formatter": "json",
            "filename": str(log_file),
            "encoding": "utf-8",
        }
    else:
        handler = {
            "class": "logging.StreamHandler",
            "formatter": "json",
            "stream": "ext://sys.stderr",
        }
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {
                    "()": "treescan.logging.JsonFormatter",
                }
            },
            "handlers": {"main": handler},
            "loggers": {
                "treescan": {
                    "level": level.upper(),
                    "handlers": ["main"],
                    "propagate": False,
                }
            },
        }
    )


__all__ = ["configure_logging", "JsonFormatter"]

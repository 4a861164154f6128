"""
Logging configuration: one sink for every logger, status polls suppressed.
"""

import logging
import logging.config
from typing import Any, Dict, Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class StatusPollFilter(logging.Filter):
    """Filter to suppress status polling logs."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter out GET /status requests from uvicorn access logs."""
        # Clients poll /status while waiting for the device to become free.
        if record.name == "uvicorn.access":
            message = record.getMessage()
            if "GET /status " in message:
                return False
        return True


def get_logging_config(log_path: Optional[str] = None, log_level: str = "INFO") -> Dict[str, Any]:
    """
    Get logging configuration.

    Args:
        log_path: Write all logs to this file.  Defaults to stderr.
        log_level: Level for the server and uvicorn loggers

    Returns:
        A dictConfig-compatible dictionary
    """
    level = log_level.upper()

    # Normally, some log levels go to stdout, others to stderr.
    # Log all levels to the same place, through a single handler.
    if log_path:
        handler: Dict[str, Any] = {
            "class": "logging.FileHandler",
            "formatter": "default",
            "filename": log_path,
            "encoding": "utf-8",
        }
    else:
        handler = {
            "class": "logging.StreamHandler",
            "formatter": "default",
            "stream": "ext://sys.stderr",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "status_poll_filter": {
                "()": StatusPollFilter
            }
        },
        "formatters": {
            "default": {
                "format": LOG_FORMAT
            }
        },
        "handlers": {
            "default": handler
        },
        "loggers": {
            "uvicorn": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            },
            "uvicorn.error": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            },
            "uvicorn.access": {
                "handlers": ["default"],
                "filters": ["status_poll_filter"],
                "level": level,
                "propagate": False
            },
            "webdriver_server": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            }
        },
        "root": {
            "level": level,
            "handlers": ["default"]
        }
    }


def configure_logging(log_path: Optional[str] = None, log_level: str = "INFO") -> None:
    """Apply the logging configuration to the running process."""
    logging.config.dictConfig(get_logging_config(log_path, log_level))

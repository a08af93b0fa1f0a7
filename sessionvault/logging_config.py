"""
Logging setup for the session service.

Probe traffic on /health and /healthz is dropped from the access log; the
``sessionvault`` logger follows LOG_LEVEL.
"""

import logging
from typing import Any, Dict

HEALTH_CHECK_PATHS = ("/health", "/healthz")

# Third-party loggers that are noisy below WARNING
QUIET_LOGGERS = ("redis", "httpx", "httpcore")


class HealthCheckFilter(logging.Filter):
    """Drop uvicorn access records for health probes."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name != "uvicorn.access":
            return True
        message = record.getMessage()
        return not ("GET" in message and any(path in message for path in HEALTH_CHECK_PATHS))


def get_logging_config(log_level: str = "INFO") -> Dict[str, Any]:
    """
    Build a dictConfig mapping for the service.

    Args:
        log_level: Level for the ``sessionvault`` logger and the root logger

    Returns:
        Mapping suitable for logging.config.dictConfig and uvicorn's log_config
    """
    level = log_level.upper()

    loggers: Dict[str, Any] = {
        "sessionvault": {"handlers": ["console"], "level": level, "propagate": False},
        # uvicorn.error and uvicorn propagate to root
        "uvicorn.access": {"handlers": ["access"], "level": "INFO", "propagate": False},
    }
    for name in QUIET_LOGGERS:
        loggers[name] = {"level": "WARNING"}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {"health_probes": {"()": HealthCheckFilter}},
        "formatters": {
            "console": {"format": "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"},
            "access": {"format": "%(asctime)s %(message)s"},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "console",
                "stream": "ext://sys.stdout",
            },
            "access": {
                "class": "logging.StreamHandler",
                "formatter": "access",
                "stream": "ext://sys.stdout",
                "filters": ["health_probes"],
            },
        },
        "loggers": loggers,
        "root": {"level": level, "handlers": ["console"]},
    }

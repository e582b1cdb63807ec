import json
import logging
import logging.config
import sys

from moments.core.config import configs

# Attributes passed through `extra=` that are worth keeping in structured output
CONTEXT_FIELDS = ("generation", "event_id", "duration_ms")


class JsonFormatter(logging.Formatter):
    """
    One JSON object per line, with rebuild/event context when the call site supplies it.
    """
    def format(self, record):
        log_record = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_record[field] = value
        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(log_record, default=str)


class EndpointFilter(logging.Filter):
    """Drops access log lines for the prometheus scrape endpoint."""

    def filter(self, record: logging.LogRecord) -> bool:
        return "/metrics" not in record.getMessage()


def build_logging_config(config=configs) -> dict:
    log_level = config.LOG_LEVEL.upper()
    handler = "json" if config.ENVIRONMENT == "production" else "default"

    def _logger(level, **extra):
        return {"level": level, "handlers": [handler], "propagate": False, **extra}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "json": {
                "()": JsonFormatter,
                "datefmt": "%Y-%m-%dT%H:%M:%S%z",
            },
        },
        "filters": {"metrics": {"()": EndpointFilter}},
        "handlers": {
            name: {"class": "logging.StreamHandler", "stream": sys.stdout, "formatter": name}
            for name in ("default", "json")
        },
        "loggers": {
            "moments": _logger(log_level),
            # Segmenters and the pipeline log per rebuild; keep them quieter than the app
            "moments.domain": _logger(config.CLUSTERING_LOG_LEVEL.upper()),
            "uvicorn.access": _logger("INFO", filters=["metrics"]),
            "uvicorn.error": _logger("ERROR"),
        },
        "root": {"level": log_level, "handlers": [handler]},
    }


def setup_logging(config=configs):
    logging.config.dictConfig(build_logging_config(config))
    logging.getLogger(__name__).info(
        f"Logging ready ({config.ENVIRONMENT}, app level {config.LOG_LEVEL.upper()}, "
        f"clustering level {config.CLUSTERING_LOG_LEVEL.upper()})"
    )

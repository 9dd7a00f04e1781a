"""
Logging configuration.
"""

import json
import logging
import sys
from typing import Any, Dict, cast

from loguru import logger

from catalog.core.config import settings

INTERCEPTED_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "fastapi", "sqlalchemy.engine.Engine")


class InterceptHandler(logging.Handler):
    """
    Intercept standard logging messages toward Loguru.
    """

    def emit(self, record: logging.LogRecord) -> None:
        logger_opt = logger.opt(depth=6, exception=record.exc_info)
        msg = record.getMessage()
        level = record.levelno

        if level >= logging.CRITICAL:
            logger_opt.critical(msg)
        elif level >= logging.ERROR:
            logger_opt.error(msg)
        elif level >= logging.WARNING:
            logger_opt.warning(msg)
        elif level >= logging.INFO:
            logger_opt.info(msg)
        else:
            logger_opt.debug(msg)


def serialize_record(record: Dict[str, Any]) -> str:
    """
    Render a Loguru record as a single JSON line.
    """
    try:
        subset = {
            "timestamp": record["time"].isoformat(),
            "level": record["level"].name,
            "message": record["message"],
            "service": settings.PROJECT_NAME,
            "environment": settings.ENVIRONMENT,
        }

        for source, target in (("name", "module"), ("function", "function"), ("line", "line")):
            if source in record:
                subset[target] = record[source]

        # Bound context (request_id, entity ids, ...)
        extra = record.get("extra")
        if isinstance(extra, dict):
            for key, value in extra.items():
                if not key.startswith("_"):
                    subset[key] = value

        if record.get("exception"):
            subset["exception"] = str(record["exception"])

        return json.dumps(subset)
    except Exception as e:
        # Fall back to a minimal line so a bad extra never loses the message
        timestamp = record.get("time", "")
        return json.dumps(
            {
                "timestamp": timestamp.isoformat() if hasattr(timestamp, "isoformat") else str(timestamp),
                "level": "ERROR",
                "message": f"Error serializing log: {str(e)}",
                "original_message": str(record.get("message", "")),
                "service": settings.PROJECT_NAME,
                "environment": settings.ENVIRONMENT,
            }
        )


def configure_logging() -> None:
    """
    Configure loguru logger.
    """
    logger.remove()

    if settings.JSON_LOGS:
        logger.add(
            lambda msg: print(serialize_record(cast(Dict[str, Any], msg.record)), file=sys.stderr),
            level=settings.LOG_LEVEL,
            backtrace=True,
            diagnose=settings.DEBUG,
        )
    else:
        logger.add(
            sys.stderr,
            level=settings.LOG_LEVEL,
            format="{time} | {level} | {message} | {extra}",
            backtrace=True,
            diagnose=settings.DEBUG,
        )

    logging.getLogger().handlers = [InterceptHandler()]

    for logger_name in INTERCEPTED_LOGGERS:
        logging_logger = logging.getLogger(logger_name)
        logging_logger.handlers = [InterceptHandler()]
        logging_logger.propagate = False

    logger.info("Logging configured successfully.")

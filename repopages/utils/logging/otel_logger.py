"""
JSON logging for the repository pages service.

Every logger writes JSON lines to stderr. When OTEL_EXPORTER_OTLP_ENDPOINT is
set (and the `otel` extra is installed) records are also shipped over OTLP.
"""

import logging
import os
from typing import Dict, Optional

from pythonjsonlogger import jsonlogger

SERVICE_NAME: str = "repopages"
SERVICE_VERSION: str = "1.0.0"

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

BASE_LOGGER_CACHE: Dict[str, logging.Logger] = {}

_otel_provider = None


def _log_level() -> int:
    return logging.getLevelName(os.getenv("LOG_LEVEL", "DEBUG").upper())


def _json_stream_handler() -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setFormatter(jsonlogger.JsonFormatter(LOG_FORMAT))
    return handler


def _otel_handler(endpoint: str) -> logging.Handler:
    # One provider per process, shared by all named loggers
    global _otel_provider

    from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
    from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
    from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
    from opentelemetry.sdk.resources import Resource

    if _otel_provider is None:
        _otel_provider = LoggerProvider(
            Resource.create(
                {
                    "service.name": SERVICE_NAME,
                    "service.version": SERVICE_VERSION,
                    "host.name": os.getenv("DOMAIN_NAME", "ENV_NOT_SET"),
                }
            )
        )
        _otel_provider.add_log_record_processor(
            BatchLogRecordProcessor(OTLPLogExporter(endpoint=endpoint, insecure=True))
        )
    return LoggingHandler(level=logging.DEBUG, logger_provider=_otel_provider)


def get_logger(name: str) -> logging.Logger:
    """
    Returns the logger with the given name if it exists, else creates a new one.
    """
    if name in BASE_LOGGER_CACHE:
        return BASE_LOGGER_CACHE[name]

    base_logger = logging.getLogger(name)
    base_logger.setLevel(_log_level())
    base_logger.propagate = False
    base_logger.addHandler(_json_stream_handler())
    BASE_LOGGER_CACHE[name] = base_logger

    endpoint: Optional[str] = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
    if endpoint:
        try:
            base_logger.addHandler(_otel_handler(endpoint))
            base_logger.debug(f"OTEL handler configured for logger '{name}'")
        except Exception as e:
            base_logger.error(f"Could not configure OTEL handler for '{name}': {e}")

    return base_logger


logger = get_logger(SERVICE_NAME)

"""Logging setup with optional OpenTelemetry log export."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from opentelemetry._logs import set_logger_provider
from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
from opentelemetry.sdk.resources import Resource

if TYPE_CHECKING:
    from .config import TelemetryConfig

_LOGGER: logging.Logger | None = None
_OTLP_HANDLER: logging.Handler | None = None


def get_logger(name: str = "naval") -> logging.Logger:
    global _LOGGER
    if _LOGGER is None:
        _LOGGER = logging.getLogger(name)
    return _LOGGER


def init_logging(config: TelemetryConfig) -> logging.Logger:
    """Configure the root logger and, when enabled, ship records over OTLP."""
    root_logger = logging.getLogger()
    level = logging.getLevelName(config.log_level.upper())
    if not isinstance(level, int):
        level = logging.WARNING
    if not root_logger.handlers:
        logging.basicConfig(level=level, format=config.log_format)
    root_logger.setLevel(level)

    logger = get_logger(config.service_name)
    if config.enable_logging and config.otlp_logs_endpoint:
        _install_otlp_handler(config, level)
    return logger


def _install_otlp_handler(config: TelemetryConfig, level: int) -> None:
    """Attach the OTLP logging handler to the root logger once."""
    global _OTLP_HANDLER
    if _OTLP_HANDLER is not None:
        return

    provider = LoggerProvider(resource=Resource.create(config.resource_dict()))
    exporter = OTLPLogExporter(endpoint=config.otlp_logs_endpoint, insecure=True)
    provider.add_log_record_processor(BatchLogRecordProcessor(exporter))
    set_logger_provider(provider)

    _OTLP_HANDLER = LoggingHandler(level=level, logger_provider=provider)
    logging.getLogger().addHandler(_OTLP_HANDLER)

"""Logging and tracing setup for the facility request core."""

from __future__ import annotations

import logging
from logging.config import dictConfig
from typing import Any

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from app.core.config import Settings

# Packages whose loggers follow the configured level.
_APP_LOGGERS = ("app", "app.requests", "app.assets", "app.permissions")

_active_provider: TracerProvider | None = None


def _parse_headers(header_string: str | None) -> dict[str, str]:
    """Parse ``key=value,key2=value2`` OTLP header strings."""

    headers: dict[str, str] = {}
    for item in (header_string or "").split(","):
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            continue
        headers[key.strip()] = value.strip()
    return headers


def _logging_config(settings: Settings, level: int) -> dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"desk": {"format": settings.log_format}},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "desk",
                "level": level,
            }
        },
        "root": {"handlers": ["console"], "level": level},
        "loggers": {name: {"level": level} for name in _APP_LOGGERS},
    }


def configure_logging(settings: Settings) -> logging.Logger:
    """Apply the configured level and format; return the desk's named logger."""

    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    dictConfig(_logging_config(settings, level))

    logger = logging.getLogger(settings.app_name)
    logger.setLevel(level)
    return logger


def _span_exporter(settings: Settings) -> OTLPSpanExporter:
    options: dict[str, Any] = {}
    if settings.otel_exporter_otlp_endpoint:
        options["endpoint"] = settings.otel_exporter_otlp_endpoint
    headers = _parse_headers(settings.otel_exporter_otlp_headers)
    if headers:
        options["headers"] = headers
    return OTLPSpanExporter(**options)


def init_tracer(settings: Settings) -> TracerProvider | None:
    """Install an OTLP-exporting tracer provider when tracing is enabled.

    Returns ``None`` when tracing is disabled or a provider is already active.
    """

    global _active_provider

    if not settings.otel_enabled or _active_provider is not None:
        return None

    provider = TracerProvider(
        resource=Resource(
            attributes={
                "service.name": settings.otel_service_name,
                "service.namespace": settings.app_name,
                "deployment.environment": settings.environment,
            }
        )
    )
    provider.add_span_processor(BatchSpanProcessor(_span_exporter(settings)))
    trace.set_tracer_provider(provider)
    _active_provider = provider
    return provider


def shutdown_tracer(provider: TracerProvider | None) -> None:
    """Flush and shut down a provider returned by :func:`init_tracer`."""

    global _active_provider

    if provider is None:
        return
    provider.shutdown()
    if provider is _active_provider:
        _active_provider = None

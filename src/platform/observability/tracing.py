"""
OpenTelemetry setup for the reading room service.

Spans come from three places: FastAPI requests, SQLAlchemy statements and the manual
spans around terminate and waiting list dispatch. Export is OTLP/gRPC when
OTEL_EXPORTER_OTLP_ENDPOINT is set, console when OTEL_CONSOLE_EXPORT is true,
otherwise spans are created and dropped.
"""

from typing import Any

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import (
    DEPLOYMENT_ENVIRONMENT,
    SERVICE_NAME,
    SERVICE_VERSION,
    Resource,
)
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

from src.platform.config.core_setting import settings


# Probes and scrapes would drown the request spans
UNTRACED_URLS = 'health,metrics'


class TracingConfig:
    def __init__(
        self,
        *,
        service_name: str | None = None,
        otlp_endpoint: str | None = None,
        enable_console: bool | None = None,
    ) -> None:
        self.service_name = service_name or settings.SERVICE_NAME
        self.otlp_endpoint = otlp_endpoint or settings.OTEL_EXPORTER_OTLP_ENDPOINT
        self.enable_console = (
            settings.OTEL_CONSOLE_EXPORT if enable_console is None else enable_console
        )
        self._provider: TracerProvider | None = None

    @property
    def exporting(self) -> bool:
        return bool(self.otlp_endpoint or self.enable_console)

    def setup(self) -> None:
        """Install the global tracer provider, once per process"""
        resource = Resource.create(
            {
                SERVICE_NAME: self.service_name,
                SERVICE_VERSION: settings.VERSION,
                DEPLOYMENT_ENVIRONMENT: settings.DEPLOY_ENV,
            }
        )
        self._provider = TracerProvider(resource=resource)

        if self.otlp_endpoint:
            self._provider.add_span_processor(
                BatchSpanProcessor(OTLPSpanExporter(endpoint=self.otlp_endpoint))
            )
        if self.enable_console:
            self._provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

        trace.set_tracer_provider(self._provider)

    def instrument_fastapi(self, *, app: Any) -> None:
        FastAPIInstrumentor.instrument_app(app, excluded_urls=UNTRACED_URLS)

    def instrument_sqlalchemy(self, *, engine: Any) -> None:
        # AsyncEngine wraps a sync engine, the instrumentor hooks into that one
        SQLAlchemyInstrumentor().instrument(engine=getattr(engine, 'sync_engine', engine))

    def shutdown(self) -> None:
        """Flush buffered spans"""
        if self._provider:
            self._provider.shutdown()

"""
OpenTelemetry tracing.

Spans are exported over OTLP when ``OTEL_EXPORTER_OTLP_ENDPOINT`` is set, or printed
when ``OTEL_CONSOLE_EXPORT`` is on. With neither, the global no-op provider stays in
place and the spans opened by use cases and controllers cost nothing.
"""

from typing import Any

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)

from eventhub.platform.config.core_setting import settings


class TracingConfig:
    def __init__(
        self,
        *,
        service_name: str | None = None,
        otlp_endpoint: str | None = None,
        console: bool | None = None,
    ) -> None:
        self.service_name = service_name or settings.SERVICE_NAME
        self.otlp_endpoint = otlp_endpoint or settings.OTEL_EXPORTER_OTLP_ENDPOINT
        self.console = settings.OTEL_CONSOLE_EXPORT if console is None else console
        self._provider: TracerProvider | None = None

    @property
    def is_exporting(self) -> bool:
        return bool(self.otlp_endpoint or self.console)

    def _exporters(self) -> list[SpanExporter]:
        exporters: list[SpanExporter] = []
        if self.otlp_endpoint:
            exporters.append(OTLPSpanExporter(endpoint=self.otlp_endpoint))
        if self.console:
            exporters.append(ConsoleSpanExporter())
        return exporters

    def setup(self) -> None:
        """Install the SDK provider; call once per process before serving requests"""
        if not self.is_exporting:
            return

        self._provider = TracerProvider(
            resource=Resource(attributes={SERVICE_NAME: self.service_name})
        )
        for exporter in self._exporters():
            self._provider.add_span_processor(BatchSpanProcessor(exporter))
        trace.set_tracer_provider(self._provider)

    @staticmethod
    def instrument_fastapi(*, app: Any, excluded_urls: str = 'health,metrics') -> None:
        FastAPIInstrumentor.instrument_app(app, excluded_urls=excluded_urls)

    @staticmethod
    def instrument_sqlalchemy(*, engine: Any) -> None:
        # AsyncEngine wraps the sync engine the instrumentor hooks into
        SQLAlchemyInstrumentor().instrument(engine=getattr(engine, 'sync_engine', engine))

    def shutdown(self) -> None:
        """Flush pending spans"""
        if self._provider:
            self._provider.shutdown()

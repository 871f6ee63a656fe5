# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Request instrumentation for the AutoML transport.

Every HTTP call made by :class:`~CloudML.AutoML.core.transport._RestTransport`
runs inside :meth:`TelemetryManager.trace_request`. Depending on
:class:`TelemetryConfig` this opens an OpenTelemetry client span named after
the remote method, records latency and error metrics, logs one line per
response, and notifies user hooks. With nothing enabled the transport uses
:class:`NoOpTelemetryManager` and pays no cost.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import (
    Any,
    Dict,
    Generator,
    List,
    Optional,
    Protocol,
    Union,
    runtime_checkable,
)

from ..common.constants import (
    OTEL_ATTR_AUTOML_REQUEST_ID,
    OTEL_ATTR_AUTOML_RESOURCE,
    OTEL_ATTR_HTTP_METHOD,
    OTEL_ATTR_HTTP_STATUS_CODE,
    OTEL_ATTR_HTTP_URL,
    OTEL_ATTR_RPC_METHOD,
    OTEL_ATTR_RPC_SERVICE,
    OTEL_ATTR_RPC_SYSTEM,
)

# Optional OpenTelemetry imports
try:
    from opentelemetry import trace, metrics
    from opentelemetry.trace import Status, StatusCode

    _OTEL_AVAILABLE = True
except ImportError:
    _OTEL_AVAILABLE = False
    trace = None  # type: ignore
    metrics = None  # type: ignore
    Status = None  # type: ignore
    StatusCode = None  # type: ignore

_logger = logging.getLogger(__name__)

_SCHEMA_URL = "https://opentelemetry.io/schemas/1.21.0"
_INSTRUMENTATION_NAME = "CloudML.AutoML"
_RPC_SERVICE = "google.cloud.automl.v1"


@dataclass(frozen=True)
class TelemetryConfig:
    """
    Opt-in observability settings, passed as ``AutoMLConfig(telemetry=...)``.

    :param enable_tracing: Emit one OpenTelemetry span per HTTP call.
    :type enable_tracing: bool
    :param enable_metrics: Record ``automl.client.*`` duration and count instruments.
    :type enable_metrics: bool
    :param enable_logging: Log each response on ``logger_name``.
    :type enable_logging: bool
    :param log_level: Level set on that logger, e.g. ``"DEBUG"``.
    :type log_level: str
    :param hooks: Objects implementing any subset of :class:`TelemetryHook`.
    :type hooks: list

    Example::

        config = AutoMLConfig(
            telemetry=TelemetryConfig(enable_logging=True, log_level="DEBUG")
        )
        client = AutoMlClient(credential, config=config)
    """

    enable_tracing: bool = False
    enable_metrics: bool = False
    enable_logging: bool = False

    log_level: str = "WARNING"
    logger_name: str = "CloudML.AutoML"

    hooks: List["TelemetryHook"] = field(default_factory=list)

    @property
    def is_active(self) -> bool:
        return bool(self.enable_tracing or self.enable_metrics or self.enable_logging or self.hooks)


@dataclass
class RequestContext:
    """State of one in-flight HTTP call, shared with hooks."""

    client_request_id: str
    method: str  # HTTP verb
    url: str
    operation: str  # remote method, e.g. "DeployModel"
    resource_name: Optional[str] = None

    start_time: float = field(default_factory=time.perf_counter)

    # Free-form storage for hooks
    custom_data: Dict[str, Any] = field(default_factory=dict)

    _span: Any = field(default=None, repr=False)
    _responded: bool = field(default=False, repr=False)

    @property
    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self.start_time) * 1000


@dataclass
class ResponseContext:
    """Outcome of one HTTP call."""

    status_code: int
    duration_ms: float
    error: Optional[Exception] = None


@runtime_checkable
class TelemetryHook(Protocol):
    """
    Callbacks around each HTTP call. Implement only the methods you need;
    exceptions raised by a hook are logged at DEBUG and otherwise ignored.

    Example::

        class SlowCallReporter:
            def on_request_end(self, request, response):
                if response.duration_ms > 5000:
                    print("slow", request.operation, request.resource_name)
    """

    def on_request_start(self, context: RequestContext) -> None: ...

    def on_request_end(self, request: RequestContext, response: ResponseContext) -> None: ...

    def on_request_error(self, request: RequestContext, error: Exception) -> None: ...

    def get_additional_headers(self) -> Dict[str, str]: ...


@dataclass
class _Instruments:
    duration: Any
    requests: Any
    errors: Any

    @classmethod
    def create(cls, meter: Any) -> "_Instruments":
        return cls(
            duration=meter.create_histogram(
                name="automl.client.request.duration",
                description="Latency of AutoML API calls",
                unit="ms",
            ),
            requests=meter.create_counter(
                name="automl.client.request.count",
                description="AutoML API calls made",
                unit="1",
            ),
            errors=meter.create_counter(
                name="automl.client.error.count",
                description="AutoML API calls that failed or were answered with an error status",
                unit="1",
            ),
        )

    def record(self, ctx: RequestContext, status_code: int, duration_ms: float) -> None:
        attributes = {"operation": ctx.operation, "method": ctx.method, "status_code": status_code}
        self.duration.record(duration_ms, attributes)
        self.requests.add(1, attributes)
        if status_code >= 400:
            self.errors.add(1, attributes)

    def record_failure(self, ctx: RequestContext, error: Exception, duration_ms: float) -> None:
        # no HTTP response was received
        attributes = {"operation": ctx.operation, "method": ctx.method, "error_type": type(error).__name__}
        self.duration.record(duration_ms, attributes)
        self.requests.add(1, attributes)
        self.errors.add(1, attributes)


def _span_attributes(ctx: RequestContext) -> Dict[str, Any]:
    attributes: Dict[str, Any] = {
        OTEL_ATTR_RPC_SYSTEM: "http",
        OTEL_ATTR_RPC_SERVICE: _RPC_SERVICE,
        OTEL_ATTR_RPC_METHOD: ctx.operation,
        OTEL_ATTR_HTTP_METHOD: ctx.method,
        OTEL_ATTR_HTTP_URL: ctx.url,
        OTEL_ATTR_AUTOML_REQUEST_ID: ctx.client_request_id,
    }
    if ctx.resource_name:
        attributes[OTEL_ATTR_AUTOML_RESOURCE] = ctx.resource_name
    return attributes


class TelemetryManager:
    """
    Instrumentation bound to one transport.

    Internal; build it with :func:`create_telemetry_manager`.
    """

    def __init__(self, config: Optional[TelemetryConfig] = None) -> None:
        self._config = config or TelemetryConfig()
        self._hooks = list(self._config.hooks)
        self._tracer: Optional[Any] = None
        self._instruments: Optional[_Instruments] = None
        self._response_logger: Optional[logging.Logger] = None

        if self.is_tracing_enabled:
            self._tracer = trace.get_tracer(_INSTRUMENTATION_NAME, schema_url=_SCHEMA_URL)
        if self.is_metrics_enabled:
            self._instruments = _Instruments.create(
                metrics.get_meter(_INSTRUMENTATION_NAME, schema_url=_SCHEMA_URL)
            )
        if self._config.enable_logging:
            self._response_logger = logging.getLogger(self._config.logger_name)
            self._response_logger.setLevel(getattr(logging, self._config.log_level.upper()))

    @property
    def is_tracing_enabled(self) -> bool:
        return self._config.enable_tracing and _OTEL_AVAILABLE

    @property
    def is_metrics_enabled(self) -> bool:
        return self._config.enable_metrics and _OTEL_AVAILABLE

    @contextmanager
    def trace_request(
        self,
        operation: str,
        method: str,
        url: str,
        client_request_id: str,
        resource_name: Optional[str] = None,
    ) -> Generator[RequestContext, None, None]:
        """
        Instrument one HTTP call.

        The span, if any, is ended when the block exits. Exceptions are always
        re-raised unchanged. A call that got a response is reported once,
        through :meth:`record_response` and ``on_request_end``, even when the
        block then raises the resulting :class:`ApiError`. An exception raised
        before any response was recorded marks the span as failed, counts as
        an error in the metrics and reaches ``on_request_error`` hooks.

        Usage::

            with telemetry.trace_request("GetModel", "GET", url, request_id, name) as ctx:
                response = http._request("GET", url)
                telemetry.record_response(ctx, response.status_code)
        """
        ctx = RequestContext(
            client_request_id=client_request_id,
            method=method,
            url=url,
            operation=operation,
            resource_name=resource_name,
        )
        self._notify("on_request_start", ctx)
        if self._tracer is not None:
            ctx._span = self._tracer.start_span(
                f"AutoML {operation}",
                kind=trace.SpanKind.CLIENT,
                attributes=_span_attributes(ctx),
            )
        try:
            yield ctx
        except Exception as e:
            if not ctx._responded:
                self._record_failure(ctx, e)
            raise
        finally:
            if ctx._span is not None:
                ctx._span.end()

    def record_response(self, ctx: RequestContext, status_code: int, error: Optional[Exception] = None) -> None:
        """Report the HTTP status of the call traced by ``ctx``, and the error it maps to if any."""
        ctx._responded = True
        duration_ms = ctx.elapsed_ms
        if ctx._span is not None:
            ctx._span.set_attribute(OTEL_ATTR_HTTP_STATUS_CODE, status_code)
            if error is not None:
                ctx._span.set_status(Status(StatusCode.ERROR, str(error)))
                ctx._span.record_exception(error)
        if self._instruments is not None:
            self._instruments.record(ctx, status_code, duration_ms)
        if self._response_logger is not None:
            self._response_logger.log(
                logging.WARNING if status_code >= 400 else logging.DEBUG,
                "%s %s %d %.1fms",
                ctx.operation,
                ctx.method,
                status_code,
                duration_ms,
                extra={"client_request_id": ctx.client_request_id, "resource_name": ctx.resource_name},
            )
        self._notify("on_request_end", ctx, ResponseContext(status_code, duration_ms, error))

    def _record_failure(self, ctx: RequestContext, error: Exception) -> None:
        duration_ms = ctx.elapsed_ms
        if ctx._span is not None:
            ctx._span.set_status(Status(StatusCode.ERROR, str(error)))
            ctx._span.record_exception(error)
        if self._instruments is not None:
            self._instruments.record_failure(ctx, error, duration_ms)
        if self._response_logger is not None:
            self._response_logger.warning(
                "%s %s failed after %.1fms: %s",
                ctx.operation,
                ctx.method,
                duration_ms,
                error,
                extra={"client_request_id": ctx.client_request_id, "resource_name": ctx.resource_name},
            )
        self._notify("on_request_error", ctx, error)

    def get_additional_headers(self) -> Dict[str, str]:
        """Merge the extra headers every hook asks for; later hooks win."""
        headers: Dict[str, str] = {}
        for hook in self._hooks:
            extra = self._call_hook(hook, "get_additional_headers")
            if extra:
                headers.update(extra)
        return headers

    def _notify(self, event: str, *args: Any) -> None:
        for hook in self._hooks:
            self._call_hook(hook, event, *args)

    @staticmethod
    def _call_hook(hook: Any, name: str, *args: Any) -> Any:
        fn = getattr(hook, name, None)
        if fn is None:
            return None
        try:
            return fn(*args)
        except Exception:
            _logger.debug("Telemetry hook %r failed in %s", hook, name, exc_info=True)
            return None


class NoOpTelemetryManager:
    """Stand-in used when telemetry is off."""

    @contextmanager
    def trace_request(
        self,
        operation: str,
        method: str,
        url: str,
        client_request_id: str,
        resource_name: Optional[str] = None,
    ) -> Generator[RequestContext, None, None]:
        yield RequestContext(client_request_id, method, url, operation, resource_name)

    def record_response(self, *args: Any, **kwargs: Any) -> None:
        pass

    def get_additional_headers(self) -> Dict[str, str]:
        return {}


def create_telemetry_manager(
    config: Optional[TelemetryConfig],
) -> Union[TelemetryManager, NoOpTelemetryManager]:
    """Return a :class:`TelemetryManager` when ``config`` enables anything, else a no-op."""
    if config is None or not config.is_active:
        return NoOpTelemetryManager()
    return TelemetryManager(config)


__all__ = [
    "TelemetryConfig",
    "TelemetryHook",
    "TelemetryManager",
    "NoOpTelemetryManager",
    "RequestContext",
    "ResponseContext",
    "create_telemetry_manager",
]

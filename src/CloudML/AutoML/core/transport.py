# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Transport adapter between the client facade and the AutoML service.

The facade only depends on the :class:`Transport` protocol: ``invoke`` sends
one request record (already validated and encoded with ``to_dict()``) for a
named remote method and returns the decoded JSON response. Tests substitute a
fake transport; production code uses :class:`_RestTransport`, which speaks the
service's HTTP/JSON surface through :class:`~CloudML.AutoML.core._http._HttpClient`.
"""

from __future__ import annotations

import platform
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Protocol, Tuple, Union, runtime_checkable
from urllib.parse import quote

import requests

from ..__version__ import __version__
from ..common.constants import API_CLIENT_HEADER, CLIENT_LIBRARY_NAME, REQUEST_PARAMS_HEADER
from ._auth import _AuthManager
from ._error_codes import (
    DEADLINE_EXCEEDED,
    TRANSIENT_HTTP_STATUSES,
    UNAVAILABLE,
    UNKNOWN,
    resolve_code,
)
from ._http import _HttpClient
from .config import AutoMLConfig
from .errors import ApiError
from .telemetry import NoOpTelemetryManager, TelemetryManager, create_telemetry_manager


@dataclass(frozen=True)
class CallOptions:
    """
    Per-call overrides.

    :param timeout: Request timeout in seconds. None uses the HTTP client default.
    :type timeout: float | None
    :param retry: Force retrying on (True) or off (False). None uses the
        method's fixed idempotency classification.
    :type retry: bool | None
    :param metadata: Extra request headers.
    :type metadata: dict[str, str]
    """

    timeout: Optional[float] = None
    retry: Optional[bool] = None
    metadata: Mapping[str, str] = field(default_factory=dict)


DEFAULT_CALL_OPTIONS = CallOptions()


@runtime_checkable
class Transport(Protocol):
    """Protocol every transport implements."""

    def invoke(
        self, method: str, request: Mapping[str, Any], options: Optional[CallOptions] = None
    ) -> Dict[str, Any]:
        """Send ``request`` for remote ``method`` and return the decoded response."""
        ...

    def get_operation(self, name: str, options: Optional[CallOptions] = None) -> Dict[str, Any]: ...

    def cancel_operation(self, name: str, options: Optional[CallOptions] = None) -> None: ...

    def delete_operation(self, name: str, options: Optional[CallOptions] = None) -> None: ...

    def close(self) -> None: ...


@dataclass(frozen=True)
class _MethodSpec:
    """
    HTTP binding of one remote method.

    ``path_field`` names the request field (dotted for nested fields) holding
    the resource name the URL is built from; ``body`` is ``None`` (no body),
    ``"*"`` (every request field except the path field and query fields) or
    the name of a single request field.
    """

    verb: str
    path_field: str
    suffix: str = ""
    body: Optional[str] = None
    query: Tuple[str, ...] = ()
    idempotent: bool = False


_PAGING = ("filter", "pageSize", "pageToken")

_METHODS: Dict[str, _MethodSpec] = {
    # datasets
    "CreateDataset": _MethodSpec("POST", "parent", "/datasets", body="dataset"),
    "GetDataset": _MethodSpec("GET", "name", idempotent=True),
    "ListDatasets": _MethodSpec("GET", "parent", "/datasets", query=_PAGING, idempotent=True),
    "UpdateDataset": _MethodSpec("PATCH", "dataset.name", body="dataset", query=("updateMask",)),
    "DeleteDataset": _MethodSpec("DELETE", "name", idempotent=True),
    "ImportData": _MethodSpec("POST", "name", ":importData", body="*"),
    "ExportData": _MethodSpec("POST", "name", ":exportData", body="*"),
    "GetAnnotationSpec": _MethodSpec("GET", "name", idempotent=True),
    # models
    "CreateModel": _MethodSpec("POST", "parent", "/models", body="model"),
    "GetModel": _MethodSpec("GET", "name", idempotent=True),
    "UpdateModel": _MethodSpec("PATCH", "model.name", body="model", query=("updateMask",)),
    "ListModels": _MethodSpec("GET", "parent", "/models", query=_PAGING, idempotent=True),
    "DeleteModel": _MethodSpec("DELETE", "name", idempotent=True),
    "DeployModel": _MethodSpec("POST", "name", ":deploy", body="*"),
    "UndeployModel": _MethodSpec("POST", "name", ":undeploy", body="*"),
    "ExportModel": _MethodSpec("POST", "name", ":export", body="*"),
    "GetModelEvaluation": _MethodSpec("GET", "name", idempotent=True),
    "ListModelEvaluations": _MethodSpec("GET", "parent", "/modelEvaluations", query=_PAGING, idempotent=True),
    # prediction
    "Predict": _MethodSpec("POST", "name", ":predict", body="*"),
    "BatchPredict": _MethodSpec("POST", "name", ":batchPredict", body="*"),
    # long-running operations
    "GetOperation": _MethodSpec("GET", "name", idempotent=True),
    "CancelOperation": _MethodSpec("POST", "name", ":cancel", body="*"),
    "DeleteOperation": _MethodSpec("DELETE", "name", idempotent=True),
    "ListOperations": _MethodSpec("GET", "name", "/operations", query=_PAGING, idempotent=True),
}


def method_spec(method: str) -> _MethodSpec:
    """Return the HTTP binding of ``method``; raises ``KeyError`` for unknown methods."""
    return _METHODS[method]


def is_idempotent(method: str) -> bool:
    return _METHODS[method].idempotent


def _lookup(request: Mapping[str, Any], dotted: str) -> Any:
    value: Any = request
    for part in dotted.split("."):
        if not isinstance(value, Mapping):
            return None
        value = value.get(part)
    return value


class _RestTransport:
    """
    HTTP/JSON transport.

    :param auth: Token provider.
    :type auth: ~CloudML.AutoML.core._auth._AuthManager
    :param config: Client configuration.
    :type config: ~CloudML.AutoML.core.config.AutoMLConfig
    :param session: Optional pooled session, closed together with the transport.
    :type session: requests.Session | None
    """

    def __init__(
        self,
        auth: _AuthManager,
        config: Optional[AutoMLConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.auth = auth
        self.config = config or AutoMLConfig.from_env()
        self.base_url = self.config.base_url
        self._http = _HttpClient(
            retries=self.config.http_retries,
            backoff=self.config.http_backoff,
            timeout=self.config.http_timeout,
            max_backoff=self.config.http_max_backoff,
            jitter=self.config.http_jitter,
            retry_transient_errors=self.config.http_retry_transient_errors,
            session=session,
        )
        self._telemetry: Union[TelemetryManager, NoOpTelemetryManager] = create_telemetry_manager(
            self.config.telemetry
        )
        self._api_client = (
            f"gl-python/{platform.python_version()} {CLIENT_LIBRARY_NAME}/{__version__} "
            f"requests/{requests.__version__}"
        )

    # ------------------------------------------------------------- protocol

    def invoke(
        self, method: str, request: Mapping[str, Any], options: Optional[CallOptions] = None
    ) -> Dict[str, Any]:
        try:
            spec = _METHODS[method]
        except KeyError:
            raise ValueError(f"Unknown AutoML method: {method}") from None
        options = options or DEFAULT_CALL_OPTIONS

        resource = _lookup(request, spec.path_field)
        if not isinstance(resource, str) or not resource:
            raise ValueError(f"{method} request is missing '{spec.path_field}'")

        url = f"{self.base_url}/{quote(resource, safe='/')}{spec.suffix}"
        params = {k: request[k] for k in spec.query if request.get(k) not in (None, "")}
        body = self._body(spec, request)
        headers = self._headers(spec, resource, options)
        retry = spec.idempotent if options.retry is None else options.retry
        client_request_id = str(uuid.uuid4())

        kwargs: Dict[str, Any] = {"headers": headers, "retry": retry, "timeout": options.timeout}
        if params:
            kwargs["params"] = params
        if body is not None:
            kwargs["json"] = body

        with self._telemetry.trace_request(method, spec.verb, url, client_request_id, resource) as ctx:
            try:
                response = self._http._request(spec.verb, url, **kwargs)
            except requests.exceptions.Timeout as e:
                raise ApiError(
                    f"{method} timed out: {e}",
                    code=DEADLINE_EXCEEDED,
                    is_transient=True,
                    request_id=client_request_id,
                ) from e
            except requests.exceptions.ConnectionError as e:
                raise ApiError(
                    f"{method} could not reach {self.base_url}: {e}",
                    code=UNAVAILABLE,
                    is_transient=True,
                    request_id=client_request_id,
                ) from e
            except requests.exceptions.RequestException as e:
                raise ApiError(f"{method} failed: {e}", code=UNKNOWN, request_id=client_request_id) from e

            error: Optional[ApiError] = None
            data: Dict[str, Any] = {}
            if response.status_code >= 400:
                error = self._error_from_response(method, response, client_request_id)
            else:
                try:
                    data = self._decode(method, response, client_request_id)
                except ApiError as e:
                    error = e
            self._telemetry.record_response(ctx, response.status_code, error)
            if error is not None:
                raise error
            return data

    def get_operation(self, name: str, options: Optional[CallOptions] = None) -> Dict[str, Any]:
        return self.invoke("GetOperation", {"name": name}, options)

    def cancel_operation(self, name: str, options: Optional[CallOptions] = None) -> None:
        self.invoke("CancelOperation", {"name": name}, options)

    def delete_operation(self, name: str, options: Optional[CallOptions] = None) -> None:
        self.invoke("DeleteOperation", {"name": name}, options)

    def close(self) -> None:
        self._http.close()

    def _adopt_session(self, session: requests.Session) -> None:
        """Route later calls through ``session`` unless one is already in use."""
        if self._http._session is None:
            self._http._session = session

    # -------------------------------------------------------------- helpers

    def _headers(self, spec: _MethodSpec, resource: str, options: CallOptions) -> Dict[str, str]:
        token = self.auth._acquire_token(self.config.scopes).access_token
        headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
            API_CLIENT_HEADER: self._api_client,
            REQUEST_PARAMS_HEADER: f"{spec.path_field}={quote(resource, safe='/')}",
        }
        if spec.body is not None:
            headers["Content-Type"] = "application/json"
        headers.update(self._telemetry.get_additional_headers())
        headers.update(options.metadata or {})
        return headers

    @staticmethod
    def _body(spec: _MethodSpec, request: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        if spec.body is None:
            return None
        if spec.body == "*":
            skip = {spec.path_field, *spec.query}
            return {k: v for k, v in request.items() if k not in skip}
        return dict(request.get(spec.body) or {})

    @staticmethod
    def _decode(method: str, response: requests.Response, client_request_id: str) -> Dict[str, Any]:
        text = response.text or ""
        if not text.strip():
            return {}
        try:
            data = response.json()
        except ValueError as e:
            raise ApiError(
                f"{method} returned a non-JSON response",
                code=UNKNOWN,
                status_code=response.status_code,
                request_id=client_request_id,
                body_excerpt=text[:200],
            ) from e
        if not isinstance(data, dict):
            raise ApiError(
                f"{method} returned an unexpected JSON payload",
                code=UNKNOWN,
                status_code=response.status_code,
                request_id=client_request_id,
                body_excerpt=text[:200],
            )
        return data

    @staticmethod
    def _error_from_response(method: str, response: requests.Response, client_request_id: str) -> ApiError:
        status_code = response.status_code
        text = response.text or ""
        envelope: Dict[str, Any] = {}
        try:
            body = response.json() if text.strip() else {}
        except ValueError:
            body = {}
        if isinstance(body, dict) and isinstance(body.get("error"), dict):
            envelope = body["error"]

        message = envelope.get("message") or text.strip()[:200] or f"HTTP {status_code}"
        code = resolve_code(envelope.get("status"), envelope.get("code"), status_code)

        retry_after: Optional[int] = None
        raw_retry_after = (response.headers or {}).get("Retry-After")
        if raw_retry_after is not None:
            try:
                retry_after = int(raw_retry_after)
            except (TypeError, ValueError):
                retry_after = None

        return ApiError(
            message,
            code=code,
            status_code=status_code,
            is_transient=status_code in TRANSIENT_HTTP_STATUSES,
            error_details=envelope.get("details") or None,
            request_id=client_request_id,
            retry_after=retry_after,
            body_excerpt=None if envelope else (text[:200] or None),
        )


__all__ = ["Transport", "CallOptions", "DEFAULT_CALL_OPTIONS", "method_spec", "is_idempotent"]

# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Structured errors raised by the AutoML client.

Errors fall into three groups by origin:

- :class:`ValidationError`: malformed or missing arguments, raised locally
  before any network call.
- :class:`ApiError`: a coded failure returned by the service for the call
  itself (not found, permission denied, unavailable, deadline exceeded, ...).
- :class:`OperationError`: a long-running operation that finished with an
  error. Only raised when the operation's outcome is requested.
"""

from __future__ import annotations

import datetime as _dt
from typing import Any, Dict, List, Optional

from ._error_codes import INVALID_ARGUMENT, DEADLINE_EXCEEDED, UNKNOWN, code_name


class AutoMLError(Exception):
    """
    Base structured error for the AutoML client.

    :param message: Human readable message.
    :type message: :class:`str`
    :param code: Canonical status code (see :mod:`~CloudML.AutoML.core._error_codes`).
    :type code: :class:`int`
    :param details: Extra structured details.
    :type details: :class:`dict` | None
    :param source: ``"client"`` for locally raised errors, ``"server"`` otherwise.
    :type source: :class:`str` | None
    """

    def __init__(
        self,
        message: str,
        *,
        code: int,
        details: Optional[Dict[str, Any]] = None,
        source: Optional[str] = None,
        is_transient: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = code_name(code)
        self.details = details or {}
        self.source = source or "client"
        self.is_transient = is_transient
        self.timestamp = _dt.datetime.now(_dt.timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "status": self.status,
            "details": self.details,
            "source": self.source,
            "is_transient": self.is_transient,
            "timestamp": self.timestamp,
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"{self.__class__.__name__}(code={self.code!r}, status={self.status!r}, message={self.message!r})"


class ValidationError(AutoMLError):
    """Raised when an argument or resource name is missing or malformed."""

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code=INVALID_ARGUMENT, details=details, source="client")


class ApiError(AutoMLError):
    """
    A coded failure returned by the service.

    :param message: Message from the service's error envelope.
    :type message: :class:`str`
    :param code: Canonical status code.
    :type code: :class:`int`
    :param status_code: HTTP status of the response, when the failure came from HTTP.
    :type status_code: :class:`int` | None
    :param error_details: The ``details`` list of the service's error envelope.
    :type error_details: :class:`list` | None
    """

    def __init__(
        self,
        message: str,
        *,
        code: int,
        status_code: Optional[int] = None,
        is_transient: bool = False,
        error_details: Optional[List[Any]] = None,
        request_id: Optional[str] = None,
        retry_after: Optional[int] = None,
        body_excerpt: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        d = details or {}
        if error_details:
            d["error_details"] = error_details
        if request_id is not None:
            d["request_id"] = request_id
        if retry_after is not None:
            d["retry_after"] = retry_after
        if body_excerpt is not None:
            d["body_excerpt"] = body_excerpt
        super().__init__(message, code=code, details=d, source="server", is_transient=is_transient)
        self.status_code = status_code
        self.error_details = list(error_details or [])
        self.request_id = request_id
        self.retry_after = retry_after

    def to_dict(self) -> Dict[str, Any]:
        out = super().to_dict()
        out["status_code"] = self.status_code
        return out


class OperationError(ApiError):
    """
    A long-running operation finished with an error.

    :param operation_name: Name of the failed operation.
    :type operation_name: :class:`str`
    """

    def __init__(
        self,
        message: str,
        *,
        code: int,
        operation_name: str,
        error_details: Optional[List[Any]] = None,
    ) -> None:
        super().__init__(
            message,
            code=code,
            error_details=error_details,
            details={"operation_name": operation_name},
        )
        self.operation_name = operation_name

    @classmethod
    def from_status(cls, operation_name: str, status: Dict[str, Any]) -> "OperationError":
        """Build from an operation's ``error`` status record."""
        code = status.get("code")
        return cls(
            status.get("message") or "",
            code=code if isinstance(code, int) else UNKNOWN,
            operation_name=operation_name,
            error_details=status.get("details") or None,
        )


class OperationTimeoutError(AutoMLError, TimeoutError):
    """
    Raised when a caller stops waiting for an operation.

    The remote operation keeps running; cancel it explicitly with
    :meth:`~CloudML.AutoML.core.operation.Operation.cancel` if needed.
    """

    def __init__(self, operation_name: str, timeout: float) -> None:
        super().__init__(
            f"Operation {operation_name} did not complete within {timeout} seconds",
            code=DEADLINE_EXCEEDED,
            details={"operation_name": operation_name, "timeout": timeout},
            source="client",
        )
        self.operation_name = operation_name
        self.timeout = timeout


__all__ = [
    "AutoMLError",
    "ValidationError",
    "ApiError",
    "OperationError",
    "OperationTimeoutError",
]

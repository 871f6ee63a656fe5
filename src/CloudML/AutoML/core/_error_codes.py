# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Canonical status codes used by the AutoML service.

Codes are the service's canonical RPC codes. HTTP/JSON responses carry the
canonical name in ``error.status``; when it is missing the HTTP status code is
mapped with :data:`HTTP_TO_CODE`.
"""

from __future__ import annotations

from typing import Dict, Optional

OK = 0
CANCELLED = 1
UNKNOWN = 2
INVALID_ARGUMENT = 3
DEADLINE_EXCEEDED = 4
NOT_FOUND = 5
ALREADY_EXISTS = 6
PERMISSION_DENIED = 7
RESOURCE_EXHAUSTED = 8
FAILED_PRECONDITION = 9
ABORTED = 10
OUT_OF_RANGE = 11
UNIMPLEMENTED = 12
INTERNAL = 13
UNAVAILABLE = 14
DATA_LOSS = 15
UNAUTHENTICATED = 16

CODE_NAMES: Dict[int, str] = {
    OK: "OK",
    CANCELLED: "CANCELLED",
    UNKNOWN: "UNKNOWN",
    INVALID_ARGUMENT: "INVALID_ARGUMENT",
    DEADLINE_EXCEEDED: "DEADLINE_EXCEEDED",
    NOT_FOUND: "NOT_FOUND",
    ALREADY_EXISTS: "ALREADY_EXISTS",
    PERMISSION_DENIED: "PERMISSION_DENIED",
    RESOURCE_EXHAUSTED: "RESOURCE_EXHAUSTED",
    FAILED_PRECONDITION: "FAILED_PRECONDITION",
    ABORTED: "ABORTED",
    OUT_OF_RANGE: "OUT_OF_RANGE",
    UNIMPLEMENTED: "UNIMPLEMENTED",
    INTERNAL: "INTERNAL",
    UNAVAILABLE: "UNAVAILABLE",
    DATA_LOSS: "DATA_LOSS",
    UNAUTHENTICATED: "UNAUTHENTICATED",
}

NAME_TO_CODE: Dict[str, int] = {name: code for code, name in CODE_NAMES.items()}

HTTP_TO_CODE: Dict[int, int] = {
    400: INVALID_ARGUMENT,
    401: UNAUTHENTICATED,
    403: PERMISSION_DENIED,
    404: NOT_FOUND,
    409: ALREADY_EXISTS,
    412: FAILED_PRECONDITION,
    429: RESOURCE_EXHAUSTED,
    499: CANCELLED,
    500: INTERNAL,
    501: UNIMPLEMENTED,
    503: UNAVAILABLE,
    504: DEADLINE_EXCEEDED,
}

# Status codes the HTTP layer retries for idempotent methods
TRANSIENT_HTTP_STATUSES = frozenset({429, 502, 503, 504})


def code_name(code: Optional[int]) -> str:
    """Return the canonical name for ``code`` (``"UNKNOWN"`` for unmapped values)."""
    if code is None:
        return CODE_NAMES[UNKNOWN]
    return CODE_NAMES.get(code, CODE_NAMES[UNKNOWN])


def code_from_http_status(status_code: int) -> int:
    """Map an HTTP status to a canonical code."""
    if status_code in HTTP_TO_CODE:
        return HTTP_TO_CODE[status_code]
    if 400 <= status_code < 500:
        return FAILED_PRECONDITION
    if status_code >= 500:
        return INTERNAL
    return UNKNOWN


def resolve_code(status: Optional[str], code: Optional[int], http_status: int) -> int:
    """
    Resolve the canonical code of a JSON error envelope.

    The canonical ``status`` name wins; a ``code`` already in canonical range
    is used next (operation errors carry canonical codes); otherwise the HTTP
    status is mapped.
    """
    if status and status in NAME_TO_CODE:
        return NAME_TO_CODE[status]
    if isinstance(code, int) and code in CODE_NAMES and code != http_status:
        return code
    return code_from_http_status(http_status)

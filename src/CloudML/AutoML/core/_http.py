# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
HTTP client with retry logic, timeout handling, and optional session support.

This module provides :class:`~CloudML.AutoML.core._http._HttpClient`, a wrapper
around the requests library that adds configurable retry behavior for
idempotent calls, default timeouts based on HTTP method, and optional
connection pooling via session reuse.
"""

from __future__ import annotations

import random
import time
from typing import Any, Optional

import requests

from ._error_codes import TRANSIENT_HTTP_STATUSES


class _HttpClient:
    """
    HTTP client with configurable retry logic, timeout handling, and optional session support.

    Retries apply only when the caller marks a request as retryable; the
    transport does that for methods classified idempotent. Non-retryable
    requests are attempted exactly once.

    :param retries: Maximum number of attempts for retryable requests. Default is 5.
    :type retries: :class:`int` | None
    :param backoff: Base delay in seconds between retry attempts. Default is 0.5.
    :type backoff: :class:`float` | None
    :param timeout: Default request timeout in seconds. If None, uses per-method defaults.
    :type timeout: :class:`float` | None
    :param max_backoff: Upper bound of a single retry delay in seconds. Default is 60.0.
    :type max_backoff: :class:`float` | None
    :param jitter: Whether to add +/-25% random variation to retry delays.
    :type jitter: :class:`bool`
    :param retry_transient_errors: Whether to retry HTTP 429, 502, 503 and 504 responses.
    :type retry_transient_errors: :class:`bool`
    :param session: Optional requests.Session for connection pooling.
    :type session: :class:`requests.Session` | None
    """

    def __init__(
        self,
        retries: Optional[int] = None,
        backoff: Optional[float] = None,
        timeout: Optional[float] = None,
        max_backoff: Optional[float] = None,
        jitter: Optional[bool] = None,
        retry_transient_errors: Optional[bool] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.max_attempts = retries if retries is not None else 5
        self.base_delay = backoff if backoff is not None else 0.5
        self.max_backoff = max_backoff if max_backoff is not None else 60.0
        self.default_timeout: Optional[float] = timeout
        self.jitter = jitter if jitter is not None else True
        self.retry_transient_errors = retry_transient_errors if retry_transient_errors is not None else True
        self.transient_status_codes = set(TRANSIENT_HTTP_STATUSES)
        self._session = session

    def _request(self, method: str, url: str, *, retry: bool = False, **kwargs: Any) -> requests.Response:
        """
        Execute an HTTP request with optional retry logic and timeout management.

        Applies default timeouts based on HTTP method (120s for POST/PATCH/DELETE,
        30s for others). When ``retry`` is true, network errors and transient HTTP
        statuses are retried with exponential backoff; the last response or
        exception is surfaced once attempts run out.

        :param method: HTTP method (GET, POST, PATCH, DELETE).
        :type method: :class:`str`
        :param url: Target URL for the request.
        :type url: :class:`str`
        :param retry: Whether this request may be retried.
        :type retry: :class:`bool`
        :param kwargs: Additional arguments passed to ``requests.request()`` or
            ``session.request()``, including headers, params, json.
        :return: HTTP response object.
        :rtype: :class:`requests.Response`
        :raises requests.exceptions.RequestException: If all attempts fail.
        """
        if kwargs.get("timeout") is None:
            kwargs.pop("timeout", None)
            if self.default_timeout is not None:
                kwargs["timeout"] = self.default_timeout
            else:
                m = (method or "").lower()
                kwargs["timeout"] = 120 if m in ("post", "patch", "delete") else 30

        attempts = self.max_attempts if retry else 1
        attempts = max(attempts, 1)
        for attempt in range(attempts):
            try:
                response = self._send(method, url, **kwargs)
            except requests.exceptions.RequestException:
                if attempt == attempts - 1:
                    raise
                time.sleep(self._calculate_retry_delay(attempt))
                continue

            if (
                self.retry_transient_errors
                and response.status_code in self.transient_status_codes
                and attempt < attempts - 1
            ):
                time.sleep(self._calculate_retry_delay(attempt, response))
                continue
            return response

        # Unreachable: the loop either returns or raises on the last attempt
        raise RuntimeError("Unexpected end of retry loop")

    def _send(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        if self._session is not None:
            return self._session.request(method, url, **kwargs)
        return requests.request(method, url, **kwargs)

    def _calculate_retry_delay(self, attempt: int, response: Optional[requests.Response] = None) -> float:
        """
        Delay before the next attempt.

        A valid integer ``Retry-After`` header wins (capped at ``max_backoff``);
        otherwise ``base_delay * 2**attempt`` capped at ``max_backoff``, with
        +/-25% jitter when enabled.

        :param attempt: Zero-based attempt number that just failed.
        :type attempt: :class:`int`
        :param response: Response carrying headers, if any.
        :type response: :class:`requests.Response` | None
        :return: Delay in seconds, always >= 0.
        :rtype: :class:`float`
        """
        if response is not None and "Retry-After" in (response.headers or {}):
            try:
                retry_after = int(response.headers["Retry-After"])
                return min(retry_after, self.max_backoff)
            except (ValueError, TypeError):
                pass

        delay = min(self.base_delay * (2**attempt), self.max_backoff)
        if self.jitter:
            jitter_range = delay * 0.25
            delay = max(0, delay + random.uniform(-jitter_range, jitter_range))
        return delay

    def close(self) -> None:
        """
        Close the HTTP client and release resources.

        If a session was provided, this method closes it. Safe to call multiple times.
        """
        if self._session is not None:
            self._session.close()
            self._session = None

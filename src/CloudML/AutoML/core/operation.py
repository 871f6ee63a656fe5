# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Handle for long-running operations.

Methods such as dataset creation or model deployment return immediately with
an :class:`Operation`. The handle polls the service for the operation's
status and turns the terminal record into either a decoded result or an
:class:`~CloudML.AutoML.core.errors.OperationError`.

Once the operation is done, the outcome is decoded a single time and cached:
further calls to :meth:`Operation.poll`, :meth:`Operation.result` or
:meth:`Operation.exception` never contact the service again.
"""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

from .config import AutoMLConfig
from .errors import OperationError, OperationTimeoutError
from .transport import CallOptions
from ..models.operation_metadata import OperationMetadata

_logger = logging.getLogger(__name__)

T = TypeVar("T")

ResultDecoder = Callable[[Dict[str, Any]], T]


def _empty_result(_: Dict[str, Any]) -> None:
    return None


class Operation(Generic[T]):
    """
    A long-running operation.

    :param transport: Transport used to poll and cancel the operation.
    :type transport: ~CloudML.AutoML.core.transport.Transport
    :param raw: Operation record as returned by the service
        (``{"name", "metadata", "done", "error", "response"}``).
    :type raw: dict
    :param result_decoder: Turns the ``response`` object of a successful
        operation into the caller-facing result. Defaults to returning None,
        for operations whose response is empty.
    :type result_decoder: Callable[[dict], T] | None
    :param config: Polling configuration.
    :type config: ~CloudML.AutoML.core.config.AutoMLConfig | None
    :param options: Call options applied to every status poll and to cancellation,
        normally those of the call that started the operation.
    :type options: ~CloudML.AutoML.core.transport.CallOptions | None

    Example:
        Wait for a dataset to be created::

            op = client.datasets.create(parent, Dataset(display_name="flowers", ...))
            dataset = op.result(timeout=600)

        Await it from a coroutine::

            dataset = await op.result_async(timeout=600)
    """

    def __init__(
        self,
        transport: Any,
        raw: Dict[str, Any],
        result_decoder: Optional[ResultDecoder] = None,
        *,
        config: Optional[AutoMLConfig] = None,
        options: Optional[CallOptions] = None,
    ) -> None:
        if not isinstance(raw, dict) or not raw.get("name"):
            raise ValueError("Operation record must be a dict with a non-empty 'name'")
        self._transport = transport
        self._decode_result: ResultDecoder = result_decoder or _empty_result
        self._config = config or AutoMLConfig.from_env()
        self._options = options
        self._lock = threading.Lock()
        self._raw: Dict[str, Any] = raw
        self._metadata: Optional[OperationMetadata] = None
        self._resolved = False
        self._result: Optional[T] = None
        self._error: Optional[OperationError] = None
        self._apply(raw)

    def __repr__(self) -> str:
        return f"Operation(name={self.name!r}, done={self.done!r})"

    # ------------------------------------------------------------ accessors

    @property
    def name(self) -> str:
        return self._raw["name"]

    @property
    def done(self) -> bool:
        return bool(self._raw.get("done"))

    @property
    def metadata(self) -> Optional[OperationMetadata]:
        """Most recent progress metadata reported by the service."""
        return self._metadata

    @property
    def raw(self) -> Dict[str, Any]:
        """Most recent operation record."""
        return self._raw

    # -------------------------------------------------------------- polling

    def poll(self) -> bool:
        """
        Refresh the operation status once.

        Does nothing when the operation is already done.

        :return: Whether the operation is done.
        :rtype: bool
        :raises ~CloudML.AutoML.core.errors.ApiError: If the status lookup fails.
        """
        if self.done:
            return True
        raw = self._transport.get_operation(self.name, self._options)
        with self._lock:
            if not self.done:
                self._apply(raw)
        _logger.debug("Polled operation %s: done=%s", self.name, self.done)
        return self.done

    def _apply(self, raw: Dict[str, Any]) -> None:
        merged = dict(raw)
        merged.setdefault("name", self._raw.get("name"))
        self._raw = merged
        metadata = merged.get("metadata")
        if isinstance(metadata, dict):
            self._metadata = OperationMetadata.from_api_response(metadata)

    def _outcome(self) -> T:
        if not self._resolved:
            with self._lock:
                if not self._resolved:
                    error = self._raw.get("error")
                    if error:
                        self._error = OperationError.from_status(self.name, error)
                    else:
                        self._result = self._decode_result(self._raw.get("response") or {})
                    self._resolved = True
                    _logger.debug("Operation %s finished (error=%s)", self.name, self._error is not None)
        if self._error is not None:
            raise self._error
        return self._result  # type: ignore[return-value]

    def _next_delay(self, delay: float) -> float:
        return min(delay * self._config.poll_multiplier, self._config.poll_max_delay)

    def result(self, timeout: Optional[float] = None) -> T:
        """
        Block until the operation is done and return its result.

        Polls with exponential backoff between ``poll_initial_delay`` and
        ``poll_max_delay`` seconds.

        :param timeout: Seconds to wait. None uses ``AutoMLConfig.poll_timeout``;
            when that is also None, waits indefinitely.
        :type timeout: float | None
        :return: The decoded result.
        :raises ~CloudML.AutoML.core.errors.OperationError: If the operation
            finished with an error.
        :raises ~CloudML.AutoML.core.errors.OperationTimeoutError: If the wait
            exceeded ``timeout``. The remote operation is not cancelled.
        :raises ~CloudML.AutoML.core.errors.ApiError: If a status lookup fails.
        """
        if timeout is None:
            timeout = self._config.poll_timeout
        deadline = None if timeout is None else time.monotonic() + timeout
        delay = self._config.poll_initial_delay

        while not self.poll():
            if deadline is not None:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise OperationTimeoutError(self.name, timeout)
                time.sleep(min(delay, remaining))
            else:
                time.sleep(delay)
            delay = self._next_delay(delay)
        return self._outcome()

    async def result_async(self, timeout: Optional[float] = None) -> T:
        """
        Coroutine version of :meth:`result`.

        Status lookups run in a worker thread and waits use :func:`asyncio.sleep`,
        so the event loop stays responsive. Cancelling the awaiting task stops
        the wait only; the remote operation keeps running.
        """
        if timeout is None:
            timeout = self._config.poll_timeout
        loop = asyncio.get_running_loop()
        deadline = None if timeout is None else loop.time() + timeout
        delay = self._config.poll_initial_delay

        while not await asyncio.to_thread(self.poll):
            if deadline is not None:
                remaining = deadline - loop.time()
                if remaining <= 0:
                    raise OperationTimeoutError(self.name, timeout)
                await asyncio.sleep(min(delay, remaining))
            else:
                await asyncio.sleep(delay)
            delay = self._next_delay(delay)
        return self._outcome()

    def exception(self, timeout: Optional[float] = None) -> Optional[OperationError]:
        """
        Wait for the operation and return its error, or None when it succeeded.

        :raises ~CloudML.AutoML.core.errors.OperationTimeoutError: If the wait
            exceeded ``timeout``.
        """
        try:
            self.result(timeout)
        except OperationError as e:
            return e
        return None

    def cancel(self) -> bool:
        """
        Ask the service to cancel the operation.

        Cancellation is best effort; poll afterwards to observe the outcome,
        which is usually an :class:`~CloudML.AutoML.core.errors.OperationError`
        with code ``CANCELLED``.

        :return: False when the operation was already done, True otherwise.
        :rtype: bool
        """
        if self.done:
            return False
        self._transport.cancel_operation(self.name, self._options)
        _logger.debug("Requested cancellation of operation %s", self.name)
        return True


__all__ = ["Operation"]

# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Long-running operation management namespace."""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional, TYPE_CHECKING

from ..core.operation import Operation
from ..core.pager import ItemPager
from ..core.transport import CallOptions
from ..models.requests import ListOperationsRequest
from ..models.resource_names import validate_operation_name

if TYPE_CHECKING:
    from ..client import _BaseClient


def _raw_response(response: Dict[str, Any]) -> Dict[str, Any]:
    return response


class LongRunningOperations:
    """
    Look up, cancel and delete operations by name.

    Accessed via ``client.operations``. Useful to resume waiting on an
    operation started by another process::

        op = client.operations.get(saved_operation_name)
        op.result(timeout=3600)

    Handles built here decode the operation ``response`` as a plain dict
    unless ``result_decoder`` is given, e.g. ``Dataset.from_api_response``.
    """

    def __init__(self, client: "_BaseClient") -> None:
        self._client = client

    def get(
        self,
        name: str,
        result_decoder: Optional[Callable[[Dict[str, Any]], Any]] = None,
        *,
        options: Optional[CallOptions] = None,
    ) -> Operation[Any]:
        """
        Fetch the current state of an operation.

        :param name: Operation name, ``projects/{project}/locations/{location}/operations/{operation}``.
        :type name: str
        :param result_decoder: Decoder of the operation response.
        :type result_decoder: Callable[[dict], Any] | None
        :rtype: ~CloudML.AutoML.core.operation.Operation
        """
        validate_operation_name(name)
        raw = self._client._get_transport().get_operation(name, options)
        return self._client._operation(raw, result_decoder or _raw_response, options)

    def cancel(self, name: str, *, options: Optional[CallOptions] = None) -> None:
        """Request cancellation of an operation; the outcome is observed by polling."""
        validate_operation_name(name)
        self._client._get_transport().cancel_operation(name, options)

    def delete(self, name: str, *, options: Optional[CallOptions] = None) -> None:
        """Delete an operation record. Does not cancel the operation."""
        validate_operation_name(name)
        self._client._get_transport().delete_operation(name, options)

    def list(
        self,
        location: str,
        *,
        filter: Optional[str] = None,
        page_size: Optional[int] = None,
        options: Optional[CallOptions] = None,
    ) -> ItemPager[Operation[Any]]:
        """
        List operations in a location.

        :param location: Location name.
        :type location: str
        :param filter: Optional filter, e.g. ``"done=true"``.
        :type filter: str | None
        :param page_size: Requested page size hint.
        :type page_size: int | None
        :return: Lazy iterable of operation handles (raw records via ``.raw``).
        :rtype: ~CloudML.AutoML.core.pager.ItemPager[Operation]
        """
        request = ListOperationsRequest(name=location, filter=filter, page_size=page_size)
        return self._client._pager(
            request, "operations", lambda raw: self._client._operation(raw, _raw_response, options), options
        )


__all__ = ["LongRunningOperations"]

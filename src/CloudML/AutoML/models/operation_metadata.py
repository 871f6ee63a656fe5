# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Progress metadata attached to AutoML long-running operations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class OperationMetadata:
    """
    Intermediate state of a long-running operation.

    Refreshed on every poll while the operation is pending. Content is not
    guaranteed to change monotonically, only to be the most recent report.

    :param progress_percent: Progress of the operation in percent, when reported.
    :type progress_percent: int | None
    :param partial_failures: Non-fatal errors encountered so far.
    :type partial_failures: list[dict]
    :param create_time: RFC 3339 time the operation was created.
    :type create_time: str | None
    :param update_time: RFC 3339 time of the last update.
    :type update_time: str | None
    :param details_kind: Wire field carrying operation-specific details,
        e.g. ``"createDatasetDetails"`` or ``"deployModelDetails"``.
    :type details_kind: str | None
    :param details: Value of that field.
    :type details: dict[str, Any]
    """

    progress_percent: Optional[int] = None
    partial_failures: List[Dict[str, Any]] = field(default_factory=list)
    create_time: Optional[str] = None
    update_time: Optional[str] = None
    details_kind: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_api_response(cls, data: Dict[str, Any]) -> "OperationMetadata":
        details_kind = next((k for k in data if k.endswith("Details")), None)
        progress = data.get("progressPercent")
        return cls(
            progress_percent=int(progress) if progress is not None else None,
            partial_failures=list(data.get("partialFailures") or []),
            create_time=data.get("createTime"),
            update_time=data.get("updateTime"),
            details_kind=details_kind,
            details=dict(data.get(details_kind) or {}) if details_kind else {},
        )


__all__ = ["OperationMetadata"]

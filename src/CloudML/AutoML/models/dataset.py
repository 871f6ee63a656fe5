# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Dataset and annotation spec models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, FrozenSet, Optional

from .resource_names import resource_id


def _metadata_entries(data: Dict[str, Any], suffix: str) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if k.endswith(suffix)}


@dataclass
class Dataset:
    """
    A workspace for solving a single, particular machine learning problem.

    :param name: Resource name, e.g. ``projects/p/locations/us-central1/datasets/TCN123``.
        Empty for a dataset that has not been created yet.
    :type name: str
    :param display_name: Human-readable name.
    :type display_name: str | None
    :param description: User description.
    :type description: str | None
    :param example_count: Number of examples in the dataset (output only).
    :type example_count: int | None
    :param create_time: RFC 3339 creation timestamp (output only).
    :type create_time: str | None
    :param etag: Used for optimistic concurrency on update.
    :type etag: str | None
    :param labels: User labels.
    :type labels: dict[str, str]
    :param dataset_metadata: Problem-type metadata keyed by its wire field,
        e.g. ``{"textClassificationDatasetMetadata": {"classificationType": "MULTICLASS"}}``.
    :type dataset_metadata: dict[str, Any]
    :param extra: Fields returned by the service that this model does not name.
    :type extra: dict[str, Any]

    Example::

        dataset = Dataset(
            display_name="my_dataset",
            dataset_metadata={"translationDatasetMetadata": {"sourceLanguageCode": "en", "targetLanguageCode": "ja"}},
        )
        operation = client.datasets.create(client.location_path("my-project", "us-central1"), dataset)
        created = operation.result()
        print(created.dataset_id)
    """

    name: str = ""
    display_name: Optional[str] = None
    description: Optional[str] = None
    example_count: Optional[int] = None
    create_time: Optional[str] = None
    etag: Optional[str] = None
    labels: Dict[str, str] = field(default_factory=dict)
    dataset_metadata: Dict[str, Any] = field(default_factory=dict)
    extra: Dict[str, Any] = field(default_factory=dict)

    _KNOWN: ClassVar[FrozenSet[str]] = frozenset(
        {"name", "displayName", "description", "exampleCount", "createTime", "etag", "labels"}
    )

    @property
    def dataset_id(self) -> str:
        """Last segment of :attr:`name`."""
        return resource_id(self.name)

    @classmethod
    def from_api_response(cls, data: Dict[str, Any]) -> "Dataset":
        """
        Create a Dataset from a service response.

        :param data: Decoded JSON object.
        :type data: dict[str, Any]
        :rtype: Dataset
        """
        metadata = _metadata_entries(data, "DatasetMetadata")
        example_count = data.get("exampleCount")
        return cls(
            name=data.get("name", ""),
            display_name=data.get("displayName"),
            description=data.get("description"),
            example_count=int(example_count) if example_count is not None else None,
            create_time=data.get("createTime"),
            etag=data.get("etag"),
            labels=dict(data.get("labels") or {}),
            dataset_metadata=metadata,
            extra={k: v for k, v in data.items() if k not in cls._KNOWN and k not in metadata and k != "@type"},
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Wire representation; unset optional fields are omitted.

        :rtype: dict[str, Any]
        """
        out: Dict[str, Any] = dict(self.extra)
        if self.name:
            out["name"] = self.name
        if self.display_name is not None:
            out["displayName"] = self.display_name
        if self.description is not None:
            out["description"] = self.description
        if self.example_count is not None:
            out["exampleCount"] = self.example_count
        if self.create_time is not None:
            out["createTime"] = self.create_time
        if self.etag is not None:
            out["etag"] = self.etag
        if self.labels:
            out["labels"] = dict(self.labels)
        out.update(self.dataset_metadata)
        return out


@dataclass
class AnnotationSpec:
    """
    A definition of an annotation (label) within a dataset.

    :param name: Resource name of the annotation spec.
    :type name: str
    :param display_name: Name shown in the interface and in predictions.
    :type display_name: str | None
    :param example_count: Number of examples annotated with this spec (output only).
    :type example_count: int | None
    """

    name: str = ""
    display_name: Optional[str] = None
    example_count: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    _KNOWN: ClassVar[FrozenSet[str]] = frozenset({"name", "displayName", "exampleCount"})

    @property
    def annotation_spec_id(self) -> str:
        return resource_id(self.name)

    @classmethod
    def from_api_response(cls, data: Dict[str, Any]) -> "AnnotationSpec":
        example_count = data.get("exampleCount")
        return cls(
            name=data.get("name", ""),
            display_name=data.get("displayName"),
            example_count=int(example_count) if example_count is not None else None,
            extra={k: v for k, v in data.items() if k not in cls._KNOWN and k != "@type"},
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = dict(self.extra)
        if self.name:
            out["name"] = self.name
        if self.display_name is not None:
            out["displayName"] = self.display_name
        if self.example_count is not None:
            out["exampleCount"] = self.example_count
        return out


__all__ = ["Dataset", "AnnotationSpec"]

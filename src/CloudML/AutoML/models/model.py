# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Model and model evaluation models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, FrozenSet, Optional

from .resource_names import resource_id

DEPLOYMENT_STATE_UNSPECIFIED = "DEPLOYMENT_STATE_UNSPECIFIED"
DEPLOYED = "DEPLOYED"
UNDEPLOYED = "UNDEPLOYED"


@dataclass
class Model:
    """
    API proto representing a trained machine learning model.

    :param name: Resource name of the model. Empty before creation.
    :type name: str
    :param display_name: Human-readable name.
    :type display_name: str | None
    :param dataset_id: Id of the dataset used to train the model (the last
        segment of the dataset name, not the full name).
    :type dataset_id: str | None
    :param create_time: RFC 3339 creation timestamp (output only).
    :type create_time: str | None
    :param update_time: RFC 3339 last update timestamp (output only).
    :type update_time: str | None
    :param deployment_state: ``"DEPLOYED"``, ``"UNDEPLOYED"`` or ``"DEPLOYMENT_STATE_UNSPECIFIED"``.
    :type deployment_state: str | None
    :param etag: Used for optimistic concurrency on update.
    :type etag: str | None
    :param labels: User labels.
    :type labels: dict[str, str]
    :param model_metadata: Problem-type metadata keyed by its wire field,
        e.g. ``{"imageClassificationModelMetadata": {"trainBudgetMilliNodeHours": "1000"}}``.
    :type model_metadata: dict[str, Any]

    Example::

        for model in client.models.list(client.location_path("my-project", "us-central1")):
            print(model.model_id, model.display_name, model.deployment_state)
    """

    name: str = ""
    display_name: Optional[str] = None
    dataset_id: Optional[str] = None
    create_time: Optional[str] = None
    update_time: Optional[str] = None
    deployment_state: Optional[str] = None
    etag: Optional[str] = None
    labels: Dict[str, str] = field(default_factory=dict)
    model_metadata: Dict[str, Any] = field(default_factory=dict)
    extra: Dict[str, Any] = field(default_factory=dict)

    _KNOWN: ClassVar[FrozenSet[str]] = frozenset(
        {
            "name",
            "displayName",
            "datasetId",
            "createTime",
            "updateTime",
            "deploymentState",
            "etag",
            "labels",
        }
    )

    @property
    def model_id(self) -> str:
        """Last segment of :attr:`name`."""
        return resource_id(self.name)

    @property
    def is_deployed(self) -> bool:
        return self.deployment_state == DEPLOYED

    @classmethod
    def from_api_response(cls, data: Dict[str, Any]) -> "Model":
        """
        Create a Model from a service response.

        :param data: Decoded JSON object.
        :type data: dict[str, Any]
        :rtype: Model
        """
        metadata = {k: v for k, v in data.items() if k.endswith("ModelMetadata")}
        return cls(
            name=data.get("name", ""),
            display_name=data.get("displayName"),
            dataset_id=data.get("datasetId"),
            create_time=data.get("createTime"),
            update_time=data.get("updateTime"),
            deployment_state=data.get("deploymentState"),
            etag=data.get("etag"),
            labels=dict(data.get("labels") or {}),
            model_metadata=metadata,
            extra={k: v for k, v in data.items() if k not in cls._KNOWN and k not in metadata and k != "@type"},
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = dict(self.extra)
        if self.name:
            out["name"] = self.name
        for key, value in (
            ("displayName", self.display_name),
            ("datasetId", self.dataset_id),
            ("createTime", self.create_time),
            ("updateTime", self.update_time),
            ("deploymentState", self.deployment_state),
            ("etag", self.etag),
        ):
            if value is not None:
                out[key] = value
        if self.labels:
            out["labels"] = dict(self.labels)
        out.update(self.model_metadata)
        return out


@dataclass
class ModelEvaluation:
    """
    Evaluation results of a model.

    :param name: Resource name of the evaluation.
    :type name: str
    :param annotation_spec_id: Id of the annotation spec the evaluation applies
        to; empty for the overall evaluation.
    :type annotation_spec_id: str | None
    :param display_name: Display name of the annotation spec, when applicable.
    :type display_name: str | None
    :param evaluated_example_count: Number of examples used for the evaluation.
    :type evaluated_example_count: int | None
    :param evaluation_metrics: Problem-type metrics keyed by wire field, e.g.
        ``{"classificationEvaluationMetrics": {"auPrc": 0.93}}``.
    :type evaluation_metrics: dict[str, Any]
    """

    name: str = ""
    annotation_spec_id: Optional[str] = None
    display_name: Optional[str] = None
    create_time: Optional[str] = None
    evaluated_example_count: Optional[int] = None
    evaluation_metrics: Dict[str, Any] = field(default_factory=dict)
    extra: Dict[str, Any] = field(default_factory=dict)

    _KNOWN: ClassVar[FrozenSet[str]] = frozenset(
        {"name", "annotationSpecId", "displayName", "createTime", "evaluatedExampleCount"}
    )

    @property
    def model_evaluation_id(self) -> str:
        return resource_id(self.name)

    @classmethod
    def from_api_response(cls, data: Dict[str, Any]) -> "ModelEvaluation":
        metrics = {k: v for k, v in data.items() if k.endswith("EvaluationMetrics")}
        count = data.get("evaluatedExampleCount")
        return cls(
            name=data.get("name", ""),
            annotation_spec_id=data.get("annotationSpecId"),
            display_name=data.get("displayName"),
            create_time=data.get("createTime"),
            evaluated_example_count=int(count) if count is not None else None,
            evaluation_metrics=metrics,
            extra={k: v for k, v in data.items() if k not in cls._KNOWN and k not in metrics and k != "@type"},
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = dict(self.extra)
        if self.name:
            out["name"] = self.name
        for key, value in (
            ("annotationSpecId", self.annotation_spec_id),
            ("displayName", self.display_name),
            ("createTime", self.create_time),
            ("evaluatedExampleCount", self.evaluated_example_count),
        ):
            if value is not None:
                out[key] = value
        out.update(self.evaluation_metrics)
        return out


__all__ = ["Model", "ModelEvaluation", "DEPLOYED", "UNDEPLOYED", "DEPLOYMENT_STATE_UNSPECIFIED"]

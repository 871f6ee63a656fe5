# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Request records, one per remote method.

Each record validates its resource names and arguments when constructed, so
a malformed request raises :class:`~CloudML.AutoML.core.errors.ValidationError`
before any network call. :meth:`to_dict` returns exactly the wire fields of
the method: required fields are always present and optional fields are left
out when unset.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, ClassVar, Dict, List, Optional, Sequence

from ..core.errors import ValidationError
from .dataset import Dataset
from .io import (
    BatchPredictInputConfig,
    BatchPredictOutputConfig,
    InputConfig,
    ModelExportOutputConfig,
    OutputConfig,
)
from .model import Model
from .prediction import ExamplePayload
from .resource_names import (
    validate_annotation_spec_name,
    validate_dataset_name,
    validate_location_name,
    validate_model_evaluation_name,
    validate_model_name,
)


def _require_type(value: Any, expected: type, what: str) -> None:
    if not isinstance(value, expected):
        raise ValidationError(f"{what} must be {expected.__name__}, got {type(value).__name__}")


def _check_page_size(page_size: Optional[int]) -> None:
    if page_size is None:
        return
    if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size <= 0:
        raise ValidationError(f"page_size must be a positive int, got {page_size!r}")


def _check_update_mask(update_mask: Sequence[str]) -> None:
    if isinstance(update_mask, str) or not update_mask:
        raise ValidationError("update_mask must be a non-empty list of field paths")
    if not all(isinstance(p, str) and p for p in update_mask):
        raise ValidationError("update_mask entries must be non-empty strings")


def _check_params(params: Dict[str, str]) -> None:
    if not isinstance(params, dict):
        raise ValidationError("params must be a dict of str to str")
    for key, value in params.items():
        if not isinstance(key, str) or not isinstance(value, str):
            raise ValidationError("params must be a dict of str to str")


@dataclass(frozen=True)
class _Request:
    METHOD: ClassVar[str] = ""

    def to_dict(self) -> Dict[str, Any]:  # pragma: no cover
        raise NotImplementedError


@dataclass(frozen=True)
class _NameRequest(_Request):
    """Request addressing a single resource by name."""

    name: str

    _validate_name: ClassVar[Any] = None

    def __post_init__(self) -> None:
        type(self)._validate_name(self.name)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name}


@dataclass(frozen=True)
class _ListRequest(_Request):
    """Request for one page of a collection under ``parent``."""

    parent: str
    filter: Optional[str] = None
    page_size: Optional[int] = None
    page_token: Optional[str] = None

    _validate_parent: ClassVar[Any] = None

    def __post_init__(self) -> None:
        type(self)._validate_parent(self.parent)
        _check_page_size(self.page_size)
        if self.filter is not None and not isinstance(self.filter, str):
            raise ValidationError("filter must be str")

    def with_page_token(self, page_token: Optional[str]) -> "_ListRequest":
        """Return a copy requesting the page identified by ``page_token``."""
        return replace(self, page_token=page_token or None)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"parent": self.parent}
        if self.filter is not None:
            out["filter"] = self.filter
        if self.page_size is not None:
            out["pageSize"] = self.page_size
        if self.page_token:
            out["pageToken"] = self.page_token
        return out


# ------------------------------------------------------------------ datasets


@dataclass(frozen=True)
class CreateDatasetRequest(_Request):
    METHOD: ClassVar[str] = "CreateDataset"

    parent: str
    dataset: Dataset

    def __post_init__(self) -> None:
        validate_location_name(self.parent)
        _require_type(self.dataset, Dataset, "dataset")

    def to_dict(self) -> Dict[str, Any]:
        return {"parent": self.parent, "dataset": self.dataset.to_dict()}


@dataclass(frozen=True)
class GetDatasetRequest(_NameRequest):
    METHOD: ClassVar[str] = "GetDataset"
    _validate_name = staticmethod(validate_dataset_name)


@dataclass(frozen=True)
class ListDatasetsRequest(_ListRequest):
    METHOD: ClassVar[str] = "ListDatasets"
    _validate_parent = staticmethod(validate_location_name)


@dataclass(frozen=True)
class UpdateDatasetRequest(_Request):
    METHOD: ClassVar[str] = "UpdateDataset"

    dataset: Dataset
    update_mask: Sequence[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        _require_type(self.dataset, Dataset, "dataset")
        validate_dataset_name(self.dataset.name)
        _check_update_mask(self.update_mask)

    def to_dict(self) -> Dict[str, Any]:
        return {"dataset": self.dataset.to_dict(), "updateMask": ",".join(self.update_mask)}


@dataclass(frozen=True)
class DeleteDatasetRequest(_NameRequest):
    METHOD: ClassVar[str] = "DeleteDataset"
    _validate_name = staticmethod(validate_dataset_name)


@dataclass(frozen=True)
class ImportDataRequest(_Request):
    METHOD: ClassVar[str] = "ImportData"

    name: str
    input_config: InputConfig

    def __post_init__(self) -> None:
        validate_dataset_name(self.name)
        _require_type(self.input_config, InputConfig, "input_config")

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "inputConfig": self.input_config.to_dict()}


@dataclass(frozen=True)
class ExportDataRequest(_Request):
    METHOD: ClassVar[str] = "ExportData"

    name: str
    output_config: OutputConfig

    def __post_init__(self) -> None:
        validate_dataset_name(self.name)
        _require_type(self.output_config, OutputConfig, "output_config")

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "outputConfig": self.output_config.to_dict()}


@dataclass(frozen=True)
class GetAnnotationSpecRequest(_NameRequest):
    METHOD: ClassVar[str] = "GetAnnotationSpec"
    _validate_name = staticmethod(validate_annotation_spec_name)


# -------------------------------------------------------------------- models


@dataclass(frozen=True)
class CreateModelRequest(_Request):
    METHOD: ClassVar[str] = "CreateModel"

    parent: str
    model: Model

    def __post_init__(self) -> None:
        validate_location_name(self.parent)
        _require_type(self.model, Model, "model")

    def to_dict(self) -> Dict[str, Any]:
        return {"parent": self.parent, "model": self.model.to_dict()}


@dataclass(frozen=True)
class GetModelRequest(_NameRequest):
    METHOD: ClassVar[str] = "GetModel"
    _validate_name = staticmethod(validate_model_name)


@dataclass(frozen=True)
class UpdateModelRequest(_Request):
    METHOD: ClassVar[str] = "UpdateModel"

    model: Model
    update_mask: Sequence[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        _require_type(self.model, Model, "model")
        validate_model_name(self.model.name)
        _check_update_mask(self.update_mask)

    def to_dict(self) -> Dict[str, Any]:
        return {"model": self.model.to_dict(), "updateMask": ",".join(self.update_mask)}


@dataclass(frozen=True)
class ListModelsRequest(_ListRequest):
    METHOD: ClassVar[str] = "ListModels"
    _validate_parent = staticmethod(validate_location_name)


@dataclass(frozen=True)
class DeleteModelRequest(_NameRequest):
    METHOD: ClassVar[str] = "DeleteModel"
    _validate_name = staticmethod(validate_model_name)


@dataclass(frozen=True)
class DeployModelRequest(_Request):
    """
    Deploy a model for online prediction.

    ``image_classification_node_count`` and ``image_object_detection_node_count``
    are mutually exclusive; both omitted deploys with service defaults.
    """

    METHOD: ClassVar[str] = "DeployModel"

    name: str
    image_classification_node_count: Optional[int] = None
    image_object_detection_node_count: Optional[int] = None

    def __post_init__(self) -> None:
        validate_model_name(self.name)
        counts = [
            c for c in (self.image_classification_node_count, self.image_object_detection_node_count) if c is not None
        ]
        if len(counts) > 1:
            raise ValidationError("Only one deployment metadata kind may be set")
        for count in counts:
            if isinstance(count, bool) or not isinstance(count, int) or count <= 0:
                raise ValidationError(f"node_count must be a positive int, got {count!r}")

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"name": self.name}
        if self.image_classification_node_count is not None:
            out["imageClassificationModelDeploymentMetadata"] = {"nodeCount": self.image_classification_node_count}
        if self.image_object_detection_node_count is not None:
            out["imageObjectDetectionModelDeploymentMetadata"] = {"nodeCount": self.image_object_detection_node_count}
        return out


@dataclass(frozen=True)
class UndeployModelRequest(_NameRequest):
    METHOD: ClassVar[str] = "UndeployModel"
    _validate_name = staticmethod(validate_model_name)


@dataclass(frozen=True)
class ExportModelRequest(_Request):
    METHOD: ClassVar[str] = "ExportModel"

    name: str
    output_config: ModelExportOutputConfig

    def __post_init__(self) -> None:
        validate_model_name(self.name)
        _require_type(self.output_config, ModelExportOutputConfig, "output_config")

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "outputConfig": self.output_config.to_dict()}


# --------------------------------------------------------- model evaluations


@dataclass(frozen=True)
class GetModelEvaluationRequest(_NameRequest):
    METHOD: ClassVar[str] = "GetModelEvaluation"
    _validate_name = staticmethod(validate_model_evaluation_name)


@dataclass(frozen=True)
class ListModelEvaluationsRequest(_ListRequest):
    """The service requires a filter, e.g. ``"annotation_spec_id:*"`` or ``""``-free expressions."""

    METHOD: ClassVar[str] = "ListModelEvaluations"
    _validate_parent = staticmethod(validate_model_name)

    def __post_init__(self) -> None:
        super().__post_init__()
        if not self.filter:
            raise ValidationError("filter is required for ListModelEvaluations")


# ---------------------------------------------------------------- prediction


@dataclass(frozen=True)
class PredictRequest(_Request):
    METHOD: ClassVar[str] = "Predict"

    name: str
    payload: ExamplePayload
    params: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        validate_model_name(self.name)
        _require_type(self.payload, ExamplePayload, "payload")
        _check_params(self.params)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"name": self.name, "payload": self.payload.to_dict()}
        if self.params:
            out["params"] = dict(self.params)
        return out


@dataclass(frozen=True)
class BatchPredictRequest(_Request):
    METHOD: ClassVar[str] = "BatchPredict"

    name: str
    input_config: BatchPredictInputConfig
    output_config: BatchPredictOutputConfig
    params: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        validate_model_name(self.name)
        _require_type(self.input_config, BatchPredictInputConfig, "input_config")
        _require_type(self.output_config, BatchPredictOutputConfig, "output_config")
        _check_params(self.params)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "name": self.name,
            "inputConfig": self.input_config.to_dict(),
            "outputConfig": self.output_config.to_dict(),
        }
        if self.params:
            out["params"] = dict(self.params)
        return out


# ---------------------------------------------------------------- operations


@dataclass(frozen=True)
class ListOperationsRequest(_Request):
    """List operations under a location (``name`` is the location name)."""

    METHOD: ClassVar[str] = "ListOperations"

    name: str
    filter: Optional[str] = None
    page_size: Optional[int] = None
    page_token: Optional[str] = None

    def __post_init__(self) -> None:
        validate_location_name(self.name)
        _check_page_size(self.page_size)

    def with_page_token(self, page_token: Optional[str]) -> "ListOperationsRequest":
        return replace(self, page_token=page_token or None)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"name": self.name}
        if self.filter is not None:
            out["filter"] = self.filter
        if self.page_size is not None:
            out["pageSize"] = self.page_size
        if self.page_token:
            out["pageToken"] = self.page_token
        return out


__all__: List[str] = [
    "CreateDatasetRequest",
    "GetDatasetRequest",
    "ListDatasetsRequest",
    "UpdateDatasetRequest",
    "DeleteDatasetRequest",
    "ImportDataRequest",
    "ExportDataRequest",
    "GetAnnotationSpecRequest",
    "CreateModelRequest",
    "GetModelRequest",
    "UpdateModelRequest",
    "ListModelsRequest",
    "DeleteModelRequest",
    "DeployModelRequest",
    "UndeployModelRequest",
    "ExportModelRequest",
    "GetModelEvaluationRequest",
    "ListModelEvaluationsRequest",
    "PredictRequest",
    "BatchPredictRequest",
    "ListOperationsRequest",
]

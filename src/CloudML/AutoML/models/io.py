# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Input and output configuration records for import, export and batch prediction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence

from ..core.errors import ValidationError


def _check_gcs_uri(uri: str, what: str) -> str:
    if not isinstance(uri, str) or not uri.startswith("gs://") or len(uri) <= len("gs://"):
        raise ValidationError(f"{what} must be a gs:// URI, got {uri!r}", details={"uri": uri})
    return uri


@dataclass(frozen=True)
class GcsSource:
    """Cloud Storage location(s) to read from."""

    input_uris: Sequence[str]

    def __post_init__(self) -> None:
        if isinstance(self.input_uris, str) or not self.input_uris:
            raise ValidationError("input_uris must be a non-empty list of gs:// URIs")
        for uri in self.input_uris:
            _check_gcs_uri(uri, "input uri")

    def to_dict(self) -> Dict[str, Any]:
        return {"inputUris": list(self.input_uris)}


@dataclass(frozen=True)
class GcsDestination:
    """Cloud Storage directory to write to."""

    output_uri_prefix: str

    def __post_init__(self) -> None:
        _check_gcs_uri(self.output_uri_prefix, "output_uri_prefix")

    def to_dict(self) -> Dict[str, Any]:
        return {"outputUriPrefix": self.output_uri_prefix}


@dataclass(frozen=True)
class InputConfig:
    """
    Input configuration for :meth:`~CloudML.AutoML.operations.datasets.DatasetOperations.import_data`.

    :param gcs_source: Files to import.
    :type gcs_source: GcsSource
    :param params: Additional domain-specific parameters, e.g. ``{"schema_inference_version": "1"}``.
    :type params: dict[str, str]

    Example::

        config = InputConfig.from_uris("gs://my-bucket/dataset.csv")
    """

    gcs_source: GcsSource
    params: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_uris(cls, *uris: str, params: Optional[Dict[str, str]] = None) -> "InputConfig":
        return cls(gcs_source=GcsSource(list(uris)), params=dict(params or {}))

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"gcsSource": self.gcs_source.to_dict()}
        if self.params:
            out["params"] = dict(self.params)
        return out


@dataclass(frozen=True)
class OutputConfig:
    """Output configuration for dataset export."""

    gcs_destination: GcsDestination

    @classmethod
    def from_prefix(cls, output_uri_prefix: str) -> "OutputConfig":
        return cls(gcs_destination=GcsDestination(output_uri_prefix))

    def to_dict(self) -> Dict[str, Any]:
        return {"gcsDestination": self.gcs_destination.to_dict()}


@dataclass(frozen=True)
class ModelExportOutputConfig:
    """
    Output configuration for model export.

    :param gcs_destination: Directory receiving the exported model.
    :type gcs_destination: GcsDestination
    :param model_format: Export format, e.g. ``"tflite"``, ``"edgetpu_tflite"``,
        ``"tf_saved_model"``, ``"tf_js"``, ``"core_ml"``. Omitted when None.
    :type model_format: str | None
    :param params: Additional format-specific parameters.
    :type params: dict[str, str]
    """

    gcs_destination: GcsDestination
    model_format: Optional[str] = None
    params: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_prefix(cls, output_uri_prefix: str, model_format: Optional[str] = None) -> "ModelExportOutputConfig":
        return cls(gcs_destination=GcsDestination(output_uri_prefix), model_format=model_format)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"gcsDestination": self.gcs_destination.to_dict()}
        if self.model_format is not None:
            out["modelFormat"] = self.model_format
        if self.params:
            out["params"] = dict(self.params)
        return out


@dataclass(frozen=True)
class BatchPredictInputConfig:
    """Input configuration for batch prediction."""

    gcs_source: GcsSource

    @classmethod
    def from_uris(cls, *uris: str) -> "BatchPredictInputConfig":
        return cls(gcs_source=GcsSource(list(uris)))

    def to_dict(self) -> Dict[str, Any]:
        return {"gcsSource": self.gcs_source.to_dict()}


@dataclass(frozen=True)
class BatchPredictOutputConfig:
    """Output configuration for batch prediction."""

    gcs_destination: GcsDestination

    @classmethod
    def from_prefix(cls, output_uri_prefix: str) -> "BatchPredictOutputConfig":
        return cls(gcs_destination=GcsDestination(output_uri_prefix))

    def to_dict(self) -> Dict[str, Any]:
        return {"gcsDestination": self.gcs_destination.to_dict()}


__all__ = [
    "GcsSource",
    "GcsDestination",
    "InputConfig",
    "OutputConfig",
    "ModelExportOutputConfig",
    "BatchPredictInputConfig",
    "BatchPredictOutputConfig",
]

# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Online and batch prediction payloads.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..core.errors import ValidationError


@dataclass(frozen=True)
class ExamplePayload:
    """
    Example data used for online prediction.

    Exactly one payload kind is carried, keyed by its wire field
    (``"image"``, ``"textSnippet"``, ``"document"``). Use the constructors
    rather than building the mapping by hand.

    Example::

        payload = ExamplePayload.text("Hello, world", mime_type="text/plain")
        response = prediction_client.predict(model_name, payload)
    """

    data: Dict[str, Any]

    def __post_init__(self) -> None:
        if not isinstance(self.data, dict) or len(self.data) != 1:
            raise ValidationError("ExamplePayload must carry exactly one payload kind")

    @classmethod
    def text(cls, content: str, mime_type: str = "text/plain") -> "ExamplePayload":
        if not isinstance(content, str):
            raise ValidationError("text content must be str")
        return cls({"textSnippet": {"content": content, "mimeType": mime_type}})

    @classmethod
    def image(cls, image_bytes: bytes) -> "ExamplePayload":
        if not isinstance(image_bytes, (bytes, bytearray)) or not image_bytes:
            raise ValidationError("image_bytes must be non-empty bytes")
        return cls({"image": {"imageBytes": base64.b64encode(bytes(image_bytes)).decode("ascii")}})

    @classmethod
    def document(cls, gcs_uri: str, mime_type: str = "application/pdf") -> "ExamplePayload":
        return cls({"document": {"inputConfig": {"gcsSource": {"inputUris": [gcs_uri]}}, "mimeType": mime_type}})

    @property
    def kind(self) -> str:
        return next(iter(self.data))

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.data)


@dataclass
class AnnotationPayload:
    """
    One prediction annotation.

    :param annotation_spec_id: Id of the annotation spec the payload refers to.
    :type annotation_spec_id: str | None
    :param display_name: Display name of the annotation spec.
    :type display_name: str | None
    :param detail: Problem-specific detail keyed by wire field, e.g.
        ``{"classification": {"score": 0.97}}``.
    :type detail: dict[str, Any]
    """

    annotation_spec_id: Optional[str] = None
    display_name: Optional[str] = None
    detail: Dict[str, Any] = field(default_factory=dict)

    @property
    def score(self) -> Optional[float]:
        """Score of a classification, detection or extraction annotation when present."""
        for key in ("classification", "imageObjectDetection", "textExtraction"):
            value = self.detail.get(key)
            if isinstance(value, dict) and "score" in value:
                return float(value["score"])
        return None

    @classmethod
    def from_api_response(cls, data: Dict[str, Any]) -> "AnnotationPayload":
        return cls(
            annotation_spec_id=data.get("annotationSpecId"),
            display_name=data.get("displayName"),
            detail={k: v for k, v in data.items() if k not in ("annotationSpecId", "displayName")},
        )


@dataclass
class PredictResponse:
    """
    Response of an online prediction.

    :param payload: Prediction results, in service order.
    :type payload: list[AnnotationPayload]
    :param preprocessed_input: Preprocessed example, returned for some problem types.
    :type preprocessed_input: dict[str, Any] | None
    :param metadata: Additional domain-specific prediction response metadata.
    :type metadata: dict[str, str]
    """

    payload: List[AnnotationPayload] = field(default_factory=list)
    preprocessed_input: Optional[Dict[str, Any]] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_api_response(cls, data: Dict[str, Any]) -> "PredictResponse":
        return cls(
            payload=[AnnotationPayload.from_api_response(p) for p in data.get("payload") or []],
            preprocessed_input=data.get("preprocessedInput"),
            metadata=dict(data.get("metadata") or {}),
        )


@dataclass
class BatchPredictResult:
    """
    Result of a finished batch prediction.

    :param metadata: Additional domain-specific result metadata, e.g. the
        output directory of the predictions.
    :type metadata: dict[str, str]
    """

    metadata: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_api_response(cls, data: Dict[str, Any]) -> "BatchPredictResult":
        return cls(metadata=dict(data.get("metadata") or {}))


__all__ = ["ExamplePayload", "AnnotationPayload", "PredictResponse", "BatchPredictResult"]

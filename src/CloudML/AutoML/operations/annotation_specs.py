# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Annotation spec operations namespace."""

from __future__ import annotations

from typing import Optional, TYPE_CHECKING

from ..core.transport import CallOptions
from ..models.dataset import AnnotationSpec
from ..models.requests import GetAnnotationSpecRequest

if TYPE_CHECKING:
    from ..client import AutoMlClient


class AnnotationSpecOperations:
    """Accessed via ``client.annotation_specs``."""

    def __init__(self, client: "AutoMlClient") -> None:
        self._client = client

    def get(self, name: str, *, options: Optional[CallOptions] = None) -> AnnotationSpec:
        """
        Fetch an annotation spec (a label of a dataset).

        :param name: Annotation spec name,
            ``projects/{project}/locations/{location}/datasets/{dataset}/annotationSpecs/{annotation_spec}``.
        :type name: str
        :rtype: ~CloudML.AutoML.models.dataset.AnnotationSpec
        """
        request = GetAnnotationSpecRequest(name=name)
        return AnnotationSpec.from_api_response(self._client._invoke(request, options))


__all__ = ["AnnotationSpecOperations"]

# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Model evaluation operations namespace."""

from __future__ import annotations

from typing import Optional, TYPE_CHECKING

from ..core.pager import ItemPager
from ..core.transport import CallOptions
from ..models.model import ModelEvaluation
from ..models.requests import GetModelEvaluationRequest, ListModelEvaluationsRequest

if TYPE_CHECKING:
    from ..client import AutoMlClient


class ModelEvaluationOperations:
    """
    Read access to model evaluations, via ``client.model_evaluations``.

    Example::

        model = client.model_path("my-project", "us-central1", "ICN123")
        for evaluation in client.model_evaluations.list(model, "annotation_spec_id=7"):
            print(evaluation.display_name, evaluation.evaluation_metrics)
    """

    def __init__(self, client: "AutoMlClient") -> None:
        self._client = client

    def get(self, name: str, *, options: Optional[CallOptions] = None) -> ModelEvaluation:
        request = GetModelEvaluationRequest(name=name)
        return ModelEvaluation.from_api_response(self._client._invoke(request, options))

    def list(
        self,
        parent: str,
        filter: str,
        *,
        page_size: Optional[int] = None,
        options: Optional[CallOptions] = None,
    ) -> ItemPager[ModelEvaluation]:
        """
        List evaluations of a model.

        :param parent: Model name.
        :type parent: str
        :param filter: Required filter expression, e.g. ``"annotation_spec_id=7"``
            or ``"annotation_spec_id:*"`` for all of them.
        :type filter: str
        :param page_size: Requested page size hint.
        :type page_size: int | None
        :rtype: ~CloudML.AutoML.core.pager.ItemPager[ModelEvaluation]
        :raises ~CloudML.AutoML.core.errors.ValidationError: If ``filter`` is empty.
        """
        request = ListModelEvaluationsRequest(parent=parent, filter=filter, page_size=page_size)
        return self._client._pager(request, "modelEvaluation", ModelEvaluation.from_api_response, options)


__all__ = ["ModelEvaluationOperations"]

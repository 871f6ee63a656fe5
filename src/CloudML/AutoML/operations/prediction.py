# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Online and batch prediction operations."""

from __future__ import annotations

from typing import Dict, Optional, TYPE_CHECKING

from ..core.operation import Operation
from ..core.transport import CallOptions
from ..models.io import BatchPredictInputConfig, BatchPredictOutputConfig
from ..models.prediction import BatchPredictResult, ExamplePayload, PredictResponse
from ..models.requests import BatchPredictRequest, PredictRequest

if TYPE_CHECKING:
    from ..client import PredictionServiceClient


class PredictionOperations:
    """
    Prediction calls against a deployed (online) or trained (batch) model.

    Backs :meth:`~CloudML.AutoML.client.PredictionServiceClient.predict` and
    :meth:`~CloudML.AutoML.client.PredictionServiceClient.batch_predict`.
    """

    def __init__(self, client: "PredictionServiceClient") -> None:
        self._client = client

    def predict(
        self,
        name: str,
        payload: ExamplePayload,
        params: Optional[Dict[str, str]] = None,
        *,
        options: Optional[CallOptions] = None,
    ) -> PredictResponse:
        """
        Run an online prediction. The model must be deployed.

        :param name: Model name.
        :type name: str
        :param payload: Example to predict on.
        :type payload: ~CloudML.AutoML.models.prediction.ExamplePayload
        :param params: Domain-specific parameters, e.g. ``{"score_threshold": "0.8"}``.
        :type params: dict[str, str] | None
        :rtype: ~CloudML.AutoML.models.prediction.PredictResponse
        """
        request = PredictRequest(name=name, payload=payload, params=dict(params or {}))
        return PredictResponse.from_api_response(self._client._invoke(request, options))

    def batch_predict(
        self,
        name: str,
        input_config: BatchPredictInputConfig,
        output_config: BatchPredictOutputConfig,
        params: Optional[Dict[str, str]] = None,
        *,
        options: Optional[CallOptions] = None,
    ) -> Operation[BatchPredictResult]:
        """
        Start a batch prediction over files in Cloud Storage.

        :param name: Model name.
        :type name: str
        :param input_config: Input files.
        :type input_config: ~CloudML.AutoML.models.io.BatchPredictInputConfig
        :param output_config: Output directory.
        :type output_config: ~CloudML.AutoML.models.io.BatchPredictOutputConfig
        :param params: Domain-specific parameters.
        :type params: dict[str, str] | None
        :rtype: ~CloudML.AutoML.core.operation.Operation[BatchPredictResult]
        """
        request = BatchPredictRequest(
            name=name,
            input_config=input_config,
            output_config=output_config,
            params=dict(params or {}),
        )
        raw = self._client._invoke(request, options)
        return self._client._operation(raw, BatchPredictResult.from_api_response, options)


__all__ = ["PredictionOperations"]

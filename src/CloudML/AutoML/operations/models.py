# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Model operations namespace."""

from __future__ import annotations

from typing import Optional, Sequence, TYPE_CHECKING

from ..core.operation import Operation
from ..core.pager import ItemPager
from ..core.transport import CallOptions
from ..models.io import ModelExportOutputConfig
from ..models.model import Model
from ..models.requests import (
    CreateModelRequest,
    DeleteModelRequest,
    DeployModelRequest,
    ExportModelRequest,
    GetModelRequest,
    ListModelsRequest,
    UndeployModelRequest,
    UpdateModelRequest,
)

if TYPE_CHECKING:
    from ..client import AutoMlClient


class ModelOperations:
    """
    Model training, deployment and export.

    Accessed via ``client.models``. Creation (training), deletion, deployment,
    undeployment and export are long-running.

    Example::

        name = client.model_path("my-project", "us-central1", "ICN123")
        client.models.deploy(name, image_classification_node_count=2).result()
        print(client.models.get(name).deployment_state)
    """

    def __init__(self, client: "AutoMlClient") -> None:
        self._client = client

    def create(self, parent: str, model: Model, *, options: Optional[CallOptions] = None) -> Operation[Model]:
        """
        Train a model.

        :param parent: Location name.
        :type parent: str
        :param model: Model to train; must reference a ``dataset_id``.
        :type model: ~CloudML.AutoML.models.model.Model
        :return: Operation whose result is the trained model.
        :rtype: ~CloudML.AutoML.core.operation.Operation[Model]
        """
        request = CreateModelRequest(parent=parent, model=model)
        raw = self._client._invoke(request, options)
        return self._client._operation(raw, Model.from_api_response, options)

    def get(self, name: str, *, options: Optional[CallOptions] = None) -> Model:
        request = GetModelRequest(name=name)
        return Model.from_api_response(self._client._invoke(request, options))

    def list(
        self,
        parent: str,
        *,
        filter: Optional[str] = None,
        page_size: Optional[int] = None,
        options: Optional[CallOptions] = None,
    ) -> ItemPager[Model]:
        """
        List models in a location.

        :param parent: Location name.
        :type parent: str
        :param filter: Optional filter, e.g. ``"dataset_id=5"`` or
            ``"image_classification_model_metadata:*"``.
        :type filter: str | None
        :param page_size: Requested page size hint.
        :type page_size: int | None
        :rtype: ~CloudML.AutoML.core.pager.ItemPager[Model]
        """
        request = ListModelsRequest(parent=parent, filter=filter, page_size=page_size)
        return self._client._pager(request, "model", Model.from_api_response, options)

    def update(self, model: Model, update_mask: Sequence[str], *, options: Optional[CallOptions] = None) -> Model:
        """Update fields of a model named by ``model.name``."""
        request = UpdateModelRequest(model=model, update_mask=list(update_mask))
        return Model.from_api_response(self._client._invoke(request, options))

    def delete(self, name: str, *, options: Optional[CallOptions] = None) -> Operation[None]:
        request = DeleteModelRequest(name=name)
        return self._client._operation(self._client._invoke(request, options), options=options)

    def deploy(
        self,
        name: str,
        *,
        image_classification_node_count: Optional[int] = None,
        image_object_detection_node_count: Optional[int] = None,
        options: Optional[CallOptions] = None,
    ) -> Operation[None]:
        """
        Deploy a model for online prediction.

        :param name: Model name.
        :type name: str
        :param image_classification_node_count: Node count for image
            classification models.
        :type image_classification_node_count: int | None
        :param image_object_detection_node_count: Node count for image object
            detection models.
        :type image_object_detection_node_count: int | None
        :rtype: ~CloudML.AutoML.core.operation.Operation[None]
        :raises ~CloudML.AutoML.core.errors.ValidationError: If both node counts are given.
        """
        request = DeployModelRequest(
            name=name,
            image_classification_node_count=image_classification_node_count,
            image_object_detection_node_count=image_object_detection_node_count,
        )
        return self._client._operation(self._client._invoke(request, options), options=options)

    def undeploy(self, name: str, *, options: Optional[CallOptions] = None) -> Operation[None]:
        request = UndeployModelRequest(name=name)
        return self._client._operation(self._client._invoke(request, options), options=options)

    def export(
        self, name: str, output_config: ModelExportOutputConfig, *, options: Optional[CallOptions] = None
    ) -> Operation[None]:
        """
        Export a trained model, e.g. as TF Lite for edge devices.

        :param name: Model name.
        :type name: str
        :param output_config: Destination and model format.
        :type output_config: ~CloudML.AutoML.models.io.ModelExportOutputConfig
        """
        request = ExportModelRequest(name=name, output_config=output_config)
        return self._client._operation(self._client._invoke(request, options), options=options)


__all__ = ["ModelOperations"]

# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Dataset operations namespace."""

from __future__ import annotations

from typing import Optional, Sequence, TYPE_CHECKING

from ..core.operation import Operation
from ..core.pager import ItemPager
from ..core.transport import CallOptions
from ..models.dataset import Dataset
from ..models.io import InputConfig, OutputConfig
from ..models.requests import (
    CreateDatasetRequest,
    DeleteDatasetRequest,
    ExportDataRequest,
    GetDatasetRequest,
    ImportDataRequest,
    ListDatasetsRequest,
    UpdateDatasetRequest,
)

if TYPE_CHECKING:
    from ..client import AutoMlClient


class DatasetOperations:
    """
    Dataset management.

    Accessed via ``client.datasets``. Creation, deletion, import and export are
    long-running and return an :class:`~CloudML.AutoML.core.operation.Operation`.

    Example::

        parent = client.location_path("my-project", "us-central1")
        op = client.datasets.create(
            parent,
            Dataset(
                display_name="flowers",
                dataset_metadata={"imageClassificationDatasetMetadata": {"classificationType": "MULTICLASS"}},
            ),
        )
        dataset = op.result()

        client.datasets.import_data(
            dataset.name, InputConfig.from_uris("gs://my-bucket/flowers.csv")
        ).result()

        for ds in client.datasets.list(parent):
            print(ds.dataset_id, ds.display_name, ds.example_count)
    """

    def __init__(self, client: "AutoMlClient") -> None:
        self._client = client

    def create(self, parent: str, dataset: Dataset, *, options: Optional[CallOptions] = None) -> Operation[Dataset]:
        """
        Create a dataset.

        :param parent: Location name, ``projects/{project}/locations/{location}``.
        :type parent: str
        :param dataset: Dataset to create; ``name`` is assigned by the service.
        :type dataset: ~CloudML.AutoML.models.dataset.Dataset
        :return: Operation whose result is the created dataset.
        :rtype: ~CloudML.AutoML.core.operation.Operation[Dataset]
        :raises ~CloudML.AutoML.core.errors.ValidationError: If ``parent`` is malformed.
        :raises ~CloudML.AutoML.core.errors.ApiError: If the service rejects the call.
        """
        request = CreateDatasetRequest(parent=parent, dataset=dataset)
        raw = self._client._invoke(request, options)
        return self._client._operation(raw, Dataset.from_api_response, options)

    def get(self, name: str, *, options: Optional[CallOptions] = None) -> Dataset:
        """
        Fetch a dataset by name.

        :param name: Dataset name.
        :type name: str
        :rtype: ~CloudML.AutoML.models.dataset.Dataset
        """
        request = GetDatasetRequest(name=name)
        return Dataset.from_api_response(self._client._invoke(request, options))

    def list(
        self,
        parent: str,
        *,
        filter: Optional[str] = None,
        page_size: Optional[int] = None,
        options: Optional[CallOptions] = None,
    ) -> ItemPager[Dataset]:
        """
        List datasets in a location.

        :param parent: Location name.
        :type parent: str
        :param filter: Optional filter expression, e.g.
            ``"translation_dataset_metadata:*"``.
        :type filter: str | None
        :param page_size: Requested page size hint.
        :type page_size: int | None
        :return: Lazy iterable of datasets.
        :rtype: ~CloudML.AutoML.core.pager.ItemPager[Dataset]
        """
        request = ListDatasetsRequest(parent=parent, filter=filter, page_size=page_size)
        return self._client._pager(request, "datasets", Dataset.from_api_response, options)

    def update(
        self,
        dataset: Dataset,
        update_mask: Sequence[str],
        *,
        options: Optional[CallOptions] = None,
    ) -> Dataset:
        """
        Update fields of a dataset.

        :param dataset: Dataset carrying its ``name`` and the new field values.
        :type dataset: ~CloudML.AutoML.models.dataset.Dataset
        :param update_mask: Wire field paths to update, e.g. ``["displayName", "labels"]``.
        :type update_mask: list[str]
        :return: The updated dataset.
        :rtype: ~CloudML.AutoML.models.dataset.Dataset
        """
        request = UpdateDatasetRequest(dataset=dataset, update_mask=list(update_mask))
        return Dataset.from_api_response(self._client._invoke(request, options))

    def delete(self, name: str, *, options: Optional[CallOptions] = None) -> Operation[None]:
        """Delete a dataset and all of its examples."""
        request = DeleteDatasetRequest(name=name)
        return self._client._operation(self._client._invoke(request, options), options=options)

    def import_data(
        self, name: str, input_config: InputConfig, *, options: Optional[CallOptions] = None
    ) -> Operation[None]:
        """
        Import examples into a dataset.

        :param name: Dataset name.
        :type name: str
        :param input_config: Source files.
        :type input_config: ~CloudML.AutoML.models.io.InputConfig
        :rtype: ~CloudML.AutoML.core.operation.Operation[None]
        """
        request = ImportDataRequest(name=name, input_config=input_config)
        return self._client._operation(self._client._invoke(request, options), options=options)

    def export_data(
        self, name: str, output_config: OutputConfig, *, options: Optional[CallOptions] = None
    ) -> Operation[None]:
        """Export a dataset's examples to Cloud Storage."""
        request = ExportDataRequest(name=name, output_config=output_config)
        return self._client._operation(self._client._invoke(request, options), options=options)


__all__ = ["DatasetOperations"]

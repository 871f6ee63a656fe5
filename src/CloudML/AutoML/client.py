# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

import requests
from azure.core.credentials import TokenCredential

from .core._auth import _AuthManager
from .core.config import DEFAULT_API_ENDPOINT, DEFAULT_PORT, AutoMLConfig
from .core.operation import Operation
from .core.pager import ItemPager
from .core.transport import CallOptions, Transport, _RestTransport
from .models import resource_names
from .models.io import BatchPredictInputConfig, BatchPredictOutputConfig
from .models.prediction import BatchPredictResult, ExamplePayload, PredictResponse
from .operations.annotation_specs import AnnotationSpecOperations
from .operations.datasets import DatasetOperations
from .operations.lro import LongRunningOperations
from .operations.model_evaluations import ModelEvaluationOperations
from .operations.models import ModelOperations
from .operations.prediction import PredictionOperations


class _BaseClient:
    """
    Shared construction, transport and lifecycle handling of the AutoML clients.

    :param credential: Credential used to obtain bearer tokens: a ``TokenCredential``
        or ``google.auth`` credentials. May be None only when ``transport`` is given.
    :type credential: ~azure.core.credentials.TokenCredential | google.auth.credentials.Credentials | None
    :param config: Optional configuration; defaults come from
        :meth:`~CloudML.AutoML.core.config.AutoMLConfig.from_env`.
    :type config: ~CloudML.AutoML.core.config.AutoMLConfig | None
    :param transport: Optional transport used verbatim instead of the
        built-in HTTP/JSON transport. The client never closes it.
    :type transport: ~CloudML.AutoML.core.transport.Transport | None
    """

    SERVICE_ADDRESS = DEFAULT_API_ENDPOINT
    DEFAULT_SERVICE_PORT = DEFAULT_PORT

    def __init__(
        self,
        credential: Optional[TokenCredential] = None,
        config: Optional[AutoMLConfig] = None,
        transport: Optional[Transport] = None,
    ) -> None:
        if transport is None or credential is not None:
            self.auth: Optional[_AuthManager] = _AuthManager(credential)
        else:
            self.auth = None
        self._config = config or AutoMLConfig.from_env()
        self._transport: Optional[Transport] = transport
        self._owns_transport: bool = transport is None
        self._session: Optional[requests.Session] = None
        self._owns_session: bool = False

        self.operations = LongRunningOperations(self)

    @property
    def api_endpoint(self) -> str:
        """Host name of the service endpoint in use."""
        return self._config.api_endpoint

    def __enter__(self):
        """
        Enter the context manager.

        Creates an HTTP session for connection pooling, reused by every call
        made within the context. A built-in transport created before entering
        picks the session up as well.

        Example::

            with AutoMlClient(credential) as client:
                for model in client.models.list(client.location_path("my-project", "us-central1")):
                    print(model.display_name)
        """
        if self._session is None:
            self._session = requests.Session()
            self._owns_session = True
        if self._owns_transport and isinstance(self._transport, _RestTransport):
            self._transport._adopt_session(self._session)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """
        Release the HTTP session and the built-in transport.

        Safe to call multiple times. Operations and pagers obtained from the
        client must not be used afterwards. An injected transport is left open.
        """
        if self._transport is not None and self._owns_transport:
            self._transport.close()
            self._transport = None
        if self._session is not None and self._owns_session:
            self._session.close()
            self._session = None
            self._owns_session = False

    def _get_transport(self) -> Transport:
        """
        Get or create the transport.

        The built-in transport is created on first use; a session opened by the
        context manager is handed to it for connection pooling.
        """
        if self._transport is None:
            self._transport = _RestTransport(self.auth, self._config, session=self._session)
            self._owns_transport = True
        return self._transport

    # ------------------------------------------------ namespace plumbing

    def _invoke(self, request: Any, options: Optional[CallOptions] = None) -> Dict[str, Any]:
        return self._get_transport().invoke(request.METHOD, request.to_dict(), options)

    def _operation(
        self,
        raw: Dict[str, Any],
        result_decoder: Optional[Callable[[Dict[str, Any]], Any]] = None,
        options: Optional[CallOptions] = None,
    ) -> Operation[Any]:
        return Operation(self._get_transport(), raw, result_decoder, config=self._config, options=options)

    def _pager(
        self,
        request: Any,
        items_field: str,
        item_decoder: Optional[Callable[[Dict[str, Any]], Any]] = None,
        options: Optional[CallOptions] = None,
    ) -> ItemPager[Any]:
        def fetch_page(page_token: Optional[str]) -> Dict[str, Any]:
            page_request = request if page_token is None else request.with_page_token(page_token)
            return self._invoke(page_request, options)

        return ItemPager(fetch_page, items_field, item_decoder)

    # ------------------------------------------------------ path helpers

    location_path = staticmethod(resource_names.location_path)
    model_path = staticmethod(resource_names.model_path)
    operation_path = staticmethod(resource_names.operation_path)
    parse_location_path = staticmethod(resource_names.parse_location_path)
    parse_model_path = staticmethod(resource_names.parse_model_path)
    parse_operation_path = staticmethod(resource_names.parse_operation_path)


class AutoMlClient(_BaseClient):
    """
    Client for AutoML datasets, models, model evaluations and annotation specs.

    Operations are grouped in namespaces:

    - ``client.datasets``: create, get, list, update, delete, import_data, export_data
    - ``client.models``: create, get, list, update, delete, deploy, undeploy, export
    - ``client.model_evaluations``: get, list
    - ``client.annotation_specs``: get
    - ``client.operations``: get, cancel, delete, list

    Long-running methods return an :class:`~CloudML.AutoML.core.operation.Operation`,
    list methods an :class:`~CloudML.AutoML.core.pager.ItemPager`, and the others
    the resource itself. Malformed arguments raise
    :class:`~CloudML.AutoML.core.errors.ValidationError` before any network call;
    service failures raise :class:`~CloudML.AutoML.core.errors.ApiError`.

    :param credential: Credential used to obtain bearer tokens.
    :type credential: ~azure.core.credentials.TokenCredential | google.auth.credentials.Credentials
    :param config: Optional configuration.
    :type config: ~CloudML.AutoML.core.config.AutoMLConfig | None
    :param transport: Optional transport replacing the built-in HTTP/JSON one.
    :type transport: ~CloudML.AutoML.core.transport.Transport | None

    .. note::
        The transport is created lazily on first use, so constructing the
        client makes no network calls.

    Example:
        Using the context manager (recommended)::

            from CloudML.AutoML import AutoMlClient, GoogleAuthCredential

            with AutoMlClient(GoogleAuthCredential()) as client:
                name = client.model_path("my-project", "us-central1", "ICN123")
                client.models.deploy(name).result()

        Without context manager::

            client = AutoMlClient(credential)
            try:
                dataset = client.datasets.get(client.dataset_path("my-project", "us-central1", "ICN456"))
            finally:
                client.close()
    """

    def __init__(
        self,
        credential: Optional[TokenCredential] = None,
        config: Optional[AutoMLConfig] = None,
        transport: Optional[Transport] = None,
    ) -> None:
        super().__init__(credential, config, transport)
        self.datasets = DatasetOperations(self)
        self.models = ModelOperations(self)
        self.model_evaluations = ModelEvaluationOperations(self)
        self.annotation_specs = AnnotationSpecOperations(self)

    dataset_path = staticmethod(resource_names.dataset_path)
    annotation_spec_path = staticmethod(resource_names.annotation_spec_path)
    model_evaluation_path = staticmethod(resource_names.model_evaluation_path)
    parse_dataset_path = staticmethod(resource_names.parse_dataset_path)
    parse_annotation_spec_path = staticmethod(resource_names.parse_annotation_spec_path)
    parse_model_evaluation_path = staticmethod(resource_names.parse_model_evaluation_path)


class PredictionServiceClient(_BaseClient):
    """
    Client for online and batch prediction.

    :param credential: Credential used to obtain bearer tokens.
    :type credential: ~azure.core.credentials.TokenCredential | google.auth.credentials.Credentials
    :param config: Optional configuration.
    :type config: ~CloudML.AutoML.core.config.AutoMLConfig | None
    :param transport: Optional transport replacing the built-in HTTP/JSON one.
    :type transport: ~CloudML.AutoML.core.transport.Transport | None

    Example::

        with PredictionServiceClient(credential) as client:
            name = client.model_path("my-project", "us-central1", "TCN789")
            response = client.predict(name, ExamplePayload.text("I love this product"))
            for annotation in response.payload:
                print(annotation.display_name, annotation.score)
    """

    def __init__(
        self,
        credential: Optional[TokenCredential] = None,
        config: Optional[AutoMLConfig] = None,
        transport: Optional[Transport] = None,
    ) -> None:
        super().__init__(credential, config, transport)
        self._prediction = PredictionOperations(self)

    def predict(
        self,
        name: str,
        payload: ExamplePayload,
        params: Optional[Dict[str, str]] = None,
        *,
        options: Optional[CallOptions] = None,
    ) -> PredictResponse:
        """
        Run an online prediction against a deployed model.

        See :meth:`~CloudML.AutoML.operations.prediction.PredictionOperations.predict`.
        """
        return self._prediction.predict(name, payload, params, options=options)

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
        Start a batch prediction; returns a long-running operation.

        See :meth:`~CloudML.AutoML.operations.prediction.PredictionOperations.batch_predict`.
        """
        return self._prediction.batch_predict(name, input_config, output_config, params, options=options)


__all__ = ["AutoMlClient", "PredictionServiceClient"]

# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import unittest
from unittest.mock import MagicMock, patch

import pytest
from azure.core.credentials import TokenCredential

from CloudML.AutoML import AutoMlClient, PredictionServiceClient
from CloudML.AutoML.core._error_codes import NOT_FOUND, PERMISSION_DENIED
from CloudML.AutoML.core.config import AutoMLConfig
from CloudML.AutoML.core.errors import ApiError, ValidationError
from CloudML.AutoML.core.transport import CallOptions, _RestTransport


class TestAutoMlClientConstruction(unittest.TestCase):
    def setUp(self):
        self.mock_credential = MagicMock(spec=TokenCredential)

    def test_defaults(self):
        client = AutoMlClient(self.mock_credential)
        self.assertEqual(client.api_endpoint, "automl.googleapis.com")
        self.assertEqual(AutoMlClient.SERVICE_ADDRESS, "automl.googleapis.com")
        self.assertEqual(AutoMlClient.DEFAULT_SERVICE_PORT, 443)
        self.assertIsNone(client._transport)

    def test_custom_endpoint(self):
        client = AutoMlClient(self.mock_credential, config=AutoMLConfig(api_endpoint="eu-automl.googleapis.com"))
        self.assertEqual(client.api_endpoint, "eu-automl.googleapis.com")

    def test_credential_type_checked(self):
        with self.assertRaises(TypeError):
            AutoMlClient("not-a-credential")

    def test_credential_required_without_transport(self):
        with self.assertRaises(TypeError):
            AutoMlClient()

    def test_namespaces(self):
        client = AutoMlClient(self.mock_credential)
        for attr in ("datasets", "models", "model_evaluations", "annotation_specs", "operations"):
            self.assertTrue(hasattr(client, attr), attr)

    def test_transport_created_lazily(self):
        client = AutoMlClient(self.mock_credential)
        transport = client._get_transport()
        self.assertIsInstance(transport, _RestTransport)
        self.assertIs(client._get_transport(), transport)
        self.assertEqual(transport.base_url, "https://automl.googleapis.com/v1")


class TestPathHelpers(unittest.TestCase):
    def test_builders_available_on_class(self):
        self.assertEqual(AutoMlClient.location_path("p", "l"), "projects/p/locations/l")
        self.assertEqual(AutoMlClient.dataset_path("p", "l", "d"), "projects/p/locations/l/datasets/d")
        self.assertEqual(
            AutoMlClient.annotation_spec_path("p", "l", "d", "a"),
            "projects/p/locations/l/datasets/d/annotationSpecs/a",
        )
        self.assertEqual(
            AutoMlClient.model_evaluation_path("p", "l", "m", "e"),
            "projects/p/locations/l/models/m/modelEvaluations/e",
        )
        self.assertEqual(PredictionServiceClient.model_path("p", "l", "m"), "projects/p/locations/l/models/m")

    def test_parsers(self):
        self.assertEqual(
            AutoMlClient.parse_operation_path("projects/p/locations/l/operations/op-1"),
            {"project": "p", "location": "l", "operation": "op-1"},
        )
        self.assertEqual(AutoMlClient.parse_dataset_path("projects/p/locations/l/models/m"), {})

    def test_prediction_client_has_no_dataset_helpers(self):
        self.assertFalse(hasattr(PredictionServiceClient, "dataset_path"))


class TestInjectedTransport:
    def test_credential_optional(self, fake_transport):
        client = AutoMlClient(transport=fake_transport)
        assert client.auth is None
        assert client._get_transport() is fake_transport

    def test_injected_transport_not_closed(self, fake_transport):
        with AutoMlClient(transport=fake_transport):
            pass
        assert fake_transport.closed is False

    def test_owned_transport_closed(self, dummy_credential):
        client = AutoMlClient(dummy_credential)
        transport = client._get_transport()
        with patch.object(transport, "close") as close:
            client.close()
        close.assert_called_once()
        assert client._transport is None

    def test_not_found_surfaces_verbatim(self, fake_transport):
        error = ApiError("Dataset TCN404 not found", code=NOT_FOUND, status_code=404)
        fake_transport.reply("GetDataset", error)
        client = AutoMlClient(transport=fake_transport)

        with pytest.raises(ApiError) as exc_info:
            client.datasets.get("projects/p/locations/l/datasets/TCN404")

        assert exc_info.value is error
        assert exc_info.value.code == 5
        assert fake_transport.count("GetDataset") == 1

    def test_permission_denied_not_recoded(self, fake_transport):
        fake_transport.reply("GetModel", ApiError("denied", code=PERMISSION_DENIED))
        client = AutoMlClient(transport=fake_transport)

        with pytest.raises(ApiError) as exc_info:
            client.models.get("projects/p/locations/l/models/m")
        assert exc_info.value.code == PERMISSION_DENIED

    def test_validation_before_transport(self, fake_transport):
        client = AutoMlClient(transport=fake_transport)

        with pytest.raises(ValidationError) as exc_info:
            client.datasets.get("datasets/TCN1")

        assert exc_info.value.code == 3
        assert fake_transport.calls == []

    def test_call_options_forwarded(self, fake_transport):
        fake_transport.reply("GetModel", {"name": "projects/p/locations/l/models/m"})
        client = AutoMlClient(transport=fake_transport)
        options = CallOptions(timeout=5.0, metadata={"x-trace": "1"})

        client.models.get("projects/p/locations/l/models/m", options=options)

        assert fake_transport.calls[0][2] is options

# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import unittest
from unittest.mock import MagicMock

from azure.core.credentials import TokenCredential

from CloudML.AutoML import PredictionServiceClient
from CloudML.AutoML.core.errors import ValidationError
from CloudML.AutoML.models.io import BatchPredictInputConfig, BatchPredictOutputConfig
from CloudML.AutoML.models.prediction import BatchPredictResult, ExamplePayload, PredictResponse

MODEL = "projects/my-project/locations/us-central1/models/TCN7"
OPERATION = "projects/my-project/locations/us-central1/operations/TCN7-batch"


class TestPredictionServiceClient(unittest.TestCase):
    def setUp(self):
        self.mock_credential = MagicMock(spec=TokenCredential)
        self.client = PredictionServiceClient(self.mock_credential)
        self.client._transport = MagicMock()
        self.transport = self.client._transport

    def test_predict_text(self):
        self.transport.invoke.return_value = {
            "payload": [{"displayName": "positive", "classification": {"score": 0.97}}],
        }

        response = self.client.predict(MODEL, ExamplePayload.text("Great product"), {"score_threshold": "0.5"})

        self.assertIsInstance(response, PredictResponse)
        self.assertEqual(response.payload[0].display_name, "positive")
        self.assertAlmostEqual(response.payload[0].score, 0.97)
        self.transport.invoke.assert_called_once_with(
            "Predict",
            {
                "name": MODEL,
                "payload": {"textSnippet": {"content": "Great product", "mimeType": "text/plain"}},
                "params": {"score_threshold": "0.5"},
            },
            None,
        )

    def test_predict_without_params_omits_field(self):
        self.transport.invoke.return_value = {}

        self.client.predict(MODEL, ExamplePayload.text("x"))

        request = self.transport.invoke.call_args[0][1]
        self.assertNotIn("params", request)

    def test_predict_rejects_bad_name(self):
        with self.assertRaises(ValidationError):
            self.client.predict("models/TCN7", ExamplePayload.text("x"))
        self.transport.invoke.assert_not_called()

    def test_batch_predict(self):
        self.transport.invoke.return_value = {"name": OPERATION}
        self.transport.get_operation.return_value = {
            "name": OPERATION,
            "done": True,
            "metadata": {"batchPredictDetails": {"inputConfig": {}}},
            "response": {"metadata": {"gcs_output_directory": "gs://b/out/prediction-1"}},
        }

        op = self.client.batch_predict(
            MODEL,
            BatchPredictInputConfig.from_uris("gs://b/in.csv"),
            BatchPredictOutputConfig.from_prefix("gs://b/out"),
        )
        result = op.result()

        self.assertIsInstance(result, BatchPredictResult)
        self.assertEqual(result.metadata["gcs_output_directory"], "gs://b/out/prediction-1")
        self.assertEqual(op.metadata.details_kind, "batchPredictDetails")
        self.transport.get_operation.assert_called_once_with(OPERATION, None)

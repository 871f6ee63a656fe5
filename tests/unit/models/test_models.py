# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import base64

import pytest

from CloudML.AutoML.core.errors import ValidationError
from CloudML.AutoML.models.dataset import AnnotationSpec, Dataset
from CloudML.AutoML.models.model import DEPLOYED, Model, ModelEvaluation
from CloudML.AutoML.models.operation_metadata import OperationMetadata
from CloudML.AutoML.models.prediction import BatchPredictResult, ExamplePayload, PredictResponse

DATASET_NAME = "projects/p/locations/us-central1/datasets/TRL123"


class TestDataset:
    def test_from_api_response(self):
        data = {
            "name": DATASET_NAME,
            "displayName": "en_ja",
            "exampleCount": 42,
            "createTime": "2024-01-02T03:04:05Z",
            "etag": "abc",
            "translationDatasetMetadata": {"sourceLanguageCode": "en", "targetLanguageCode": "ja"},
        }

        dataset = Dataset.from_api_response(data)

        assert dataset.dataset_id == "TRL123"
        assert dataset.display_name == "en_ja"
        assert dataset.example_count == 42
        assert dataset.dataset_metadata == {
            "translationDatasetMetadata": {"sourceLanguageCode": "en", "targetLanguageCode": "ja"}
        }
        assert dataset.extra == {}

    def test_unknown_fields_preserved(self):
        data = {"name": DATASET_NAME, "someNewField": {"x": 1}, "@type": "type.googleapis.com/x"}

        dataset = Dataset.from_api_response(data)

        assert dataset.extra == {"someNewField": {"x": 1}}
        assert dataset.to_dict() == {"name": DATASET_NAME, "someNewField": {"x": 1}}

    def test_to_dict_omits_unset_fields(self):
        assert Dataset(display_name="d").to_dict() == {"displayName": "d"}

    def test_example_count_string_coerced(self):
        # int64 fields arrive as JSON strings
        assert Dataset.from_api_response({"exampleCount": "7"}).example_count == 7


class TestAnnotationSpec:
    def test_round_trip(self):
        data = {"name": f"{DATASET_NAME}/annotationSpecs/42", "displayName": "daisy", "exampleCount": 10}

        spec = AnnotationSpec.from_api_response(data)

        assert spec.annotation_spec_id == "42"
        assert spec.to_dict() == data


class TestModel:
    def test_from_api_response(self):
        model = Model.from_api_response(
            {
                "name": "projects/p/locations/l/models/ICN9",
                "displayName": "flowers_model",
                "datasetId": "ICN1",
                "deploymentState": "DEPLOYED",
                "imageClassificationModelMetadata": {"trainBudgetMilliNodeHours": "8000"},
            }
        )

        assert model.model_id == "ICN9"
        assert model.dataset_id == "ICN1"
        assert model.deployment_state == DEPLOYED
        assert model.is_deployed
        assert "imageClassificationModelMetadata" in model.model_metadata

    def test_undeployed(self):
        assert not Model.from_api_response({"deploymentState": "UNDEPLOYED"}).is_deployed

    def test_to_dict(self):
        model = Model(
            display_name="m",
            dataset_id="ICN1",
            model_metadata={"imageClassificationModelMetadata": {"modelType": "cloud"}},
        )
        assert model.to_dict() == {
            "displayName": "m",
            "datasetId": "ICN1",
            "imageClassificationModelMetadata": {"modelType": "cloud"},
        }


class TestModelEvaluation:
    def test_from_api_response(self):
        evaluation = ModelEvaluation.from_api_response(
            {
                "name": "projects/p/locations/l/models/m/modelEvaluations/e1",
                "annotationSpecId": "42",
                "displayName": "daisy",
                "evaluatedExampleCount": 120,
                "classificationEvaluationMetrics": {"auPrc": 0.93},
            }
        )

        assert evaluation.model_evaluation_id == "e1"
        assert evaluation.annotation_spec_id == "42"
        assert evaluation.evaluated_example_count == 120
        assert evaluation.evaluation_metrics == {"classificationEvaluationMetrics": {"auPrc": 0.93}}


class TestExamplePayload:
    def test_text(self):
        payload = ExamplePayload.text("hello")
        assert payload.kind == "textSnippet"
        assert payload.to_dict() == {"textSnippet": {"content": "hello", "mimeType": "text/plain"}}

    def test_image_is_base64(self):
        payload = ExamplePayload.image(b"\x89PNG")
        assert payload.kind == "image"
        assert base64.b64decode(payload.to_dict()["image"]["imageBytes"]) == b"\x89PNG"

    def test_image_requires_bytes(self):
        with pytest.raises(ValidationError):
            ExamplePayload.image(b"")

    def test_exactly_one_kind(self):
        with pytest.raises(ValidationError):
            ExamplePayload({"image": {}, "textSnippet": {}})
        with pytest.raises(ValidationError):
            ExamplePayload({})


class TestPredictResponse:
    def test_payload_order_and_scores(self):
        response = PredictResponse.from_api_response(
            {
                "payload": [
                    {"annotationSpecId": "1", "displayName": "positive", "classification": {"score": 0.9}},
                    {"annotationSpecId": "2", "displayName": "negative", "classification": {"score": 0.1}},
                    {"translation": {"translatedContent": {"content": "hola"}}},
                ],
                "metadata": {"sentiment_score": "0.8"},
            }
        )

        assert [p.display_name for p in response.payload] == ["positive", "negative", None]
        assert response.payload[0].score == pytest.approx(0.9)
        assert response.payload[2].score is None
        assert response.payload[2].detail == {"translation": {"translatedContent": {"content": "hola"}}}
        assert response.metadata == {"sentiment_score": "0.8"}

    def test_empty_response(self):
        response = PredictResponse.from_api_response({})
        assert response.payload == []
        assert response.preprocessed_input is None


def test_batch_predict_result():
    result = BatchPredictResult.from_api_response({"metadata": {"gcs_output_directory": "gs://b/out/x"}})
    assert result.metadata["gcs_output_directory"] == "gs://b/out/x"


class TestOperationMetadata:
    def test_details_and_progress(self):
        metadata = OperationMetadata.from_api_response(
            {
                "@type": "type.googleapis.com/google.cloud.automl.v1.OperationMetadata",
                "progressPercent": 40,
                "createTime": "2024-01-01T00:00:00Z",
                "createModelDetails": {},
                "partialFailures": [{"code": 3, "message": "row 7 skipped"}],
            }
        )

        assert metadata.progress_percent == 40
        assert metadata.details_kind == "createModelDetails"
        assert metadata.partial_failures == [{"code": 3, "message": "row 7 skipped"}]

    def test_empty(self):
        metadata = OperationMetadata.from_api_response({})
        assert metadata.progress_percent is None
        assert metadata.details_kind is None
        assert metadata.details == {}

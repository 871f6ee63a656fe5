# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Batch prediction over files in Cloud Storage.

Usage::

    python examples/batch_predict.py my-project us-central1 ICN123 gs://bucket/input.csv gs://bucket/output/
"""

import argparse
import sys
from pathlib import Path

# Add src to PYTHONPATH for local runs
sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from CloudML.AutoML import PredictionServiceClient, GoogleAuthCredential
from CloudML.AutoML.models.io import BatchPredictInputConfig, BatchPredictOutputConfig


def main() -> int:
    parser = argparse.ArgumentParser(description="Batch prediction")
    parser.add_argument("project_id")
    parser.add_argument("location")
    parser.add_argument("model_id")
    parser.add_argument("input_uri")
    parser.add_argument("output_uri_prefix")
    args = parser.parse_args()

    with PredictionServiceClient(GoogleAuthCredential()) as client:
        name = client.model_path(args.project_id, args.location, args.model_id)
        operation = client.batch_predict(
            name,
            BatchPredictInputConfig.from_uris(args.input_uri),
            BatchPredictOutputConfig.from_prefix(args.output_uri_prefix),
        )
        print(f"Waiting for operation {operation.name} to complete...")
        result = operation.result()
        print(f"Batch Prediction results saved to Cloud Storage bucket. {result.metadata}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

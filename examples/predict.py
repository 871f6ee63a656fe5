# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Online prediction with a deployed model.

Usage::

    python examples/predict.py my-project us-central1 TCN123 --text "I love this product"
    python examples/predict.py my-project us-central1 ICN456 --image flower.jpg --score-threshold 0.5
"""

import argparse
import sys
from pathlib import Path

# Add src to PYTHONPATH for local runs
sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from CloudML.AutoML import PredictionServiceClient, GoogleAuthCredential
from CloudML.AutoML.models.prediction import ExamplePayload


def main() -> int:
    parser = argparse.ArgumentParser(description="Online prediction")
    parser.add_argument("project_id")
    parser.add_argument("location")
    parser.add_argument("model_id")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--text", help="text snippet to classify")
    source.add_argument("--image", help="path of an image file")
    parser.add_argument("--score-threshold", default=None)
    args = parser.parse_args()

    if args.text is not None:
        payload = ExamplePayload.text(args.text)
    else:
        payload = ExamplePayload.image(Path(args.image).read_bytes())
    params = {"score_threshold": args.score_threshold} if args.score_threshold else None

    with PredictionServiceClient(GoogleAuthCredential()) as client:
        name = client.model_path(args.project_id, args.location, args.model_id)
        response = client.predict(name, payload, params)
        for annotation in response.payload:
            print(f"Predicted class name: {annotation.display_name}")
            print(f"Predicted class score: {annotation.score}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

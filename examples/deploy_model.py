# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Deploy a model, optionally with an explicit node count for image classification.

Usage::

    python examples/deploy_model.py my-project us-central1 ICN123 --node-count 2
"""

import argparse
import sys
from pathlib import Path

# Add src to PYTHONPATH for local runs
sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from CloudML.AutoML import AutoMlClient, GoogleAuthCredential


def main() -> int:
    parser = argparse.ArgumentParser(description="Deploy an AutoML model")
    parser.add_argument("project_id")
    parser.add_argument("location")
    parser.add_argument("model_id")
    parser.add_argument("--node-count", type=int, default=None, help="image classification node count")
    parser.add_argument("--timeout", type=float, default=None, help="seconds to wait for the deployment")
    args = parser.parse_args()

    with AutoMlClient(GoogleAuthCredential()) as client:
        name = client.model_path(args.project_id, args.location, args.model_id)
        operation = client.models.deploy(name, image_classification_node_count=args.node_count)
        print(f"Deployment operation: {operation.name}")
        operation.result(timeout=args.timeout)
        print("Model deployment finished.")
        print(f"Deployment state: {client.models.get(name).deployment_state}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

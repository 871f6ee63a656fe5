# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Undeploy a model and wait for the operation to finish.

Usage::

    python examples/undeploy_model.py my-project us-central1 TCN7483069430457434112
"""

import argparse
import sys
from pathlib import Path

# Add src to PYTHONPATH for local runs
sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from CloudML.AutoML import AutoMlClient, GoogleAuthCredential


def main() -> int:
    parser = argparse.ArgumentParser(description="Undeploy an AutoML model")
    parser.add_argument("project_id")
    parser.add_argument("location")
    parser.add_argument("model_id")
    args = parser.parse_args()

    with AutoMlClient(GoogleAuthCredential()) as client:
        name = client.model_path(args.project_id, args.location, args.model_id)
        operation = client.models.undeploy(name)
        print(f"Undeployment operation: {operation.name}")
        operation.result()
        print("Model undeployment finished.")
    return 0


if __name__ == "__main__":
    sys.exit(main())

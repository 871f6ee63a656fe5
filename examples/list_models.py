# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
List the models of a project location.

Usage::

    python examples/list_models.py my-project us-central1 --filter "translation_model_metadata:*"
"""

import argparse
import sys
from pathlib import Path

# Add src to PYTHONPATH for local runs
sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from CloudML.AutoML import AutoMlClient, GoogleAuthCredential


def main() -> int:
    parser = argparse.ArgumentParser(description="List AutoML models")
    parser.add_argument("project_id")
    parser.add_argument("location", nargs="?", default="us-central1")
    parser.add_argument("--filter", default=None, help='e.g. "translation_model_metadata:*"')
    parser.add_argument("--page-size", type=int, default=None)
    args = parser.parse_args()

    with AutoMlClient(GoogleAuthCredential()) as client:
        parent = client.location_path(args.project_id, args.location)
        print("List of models:")
        for model in client.models.list(parent, filter=args.filter, page_size=args.page_size):
            print(f"Model name: {model.name}")
            print(f"Model id: {model.model_id}")
            print(f"Model display name: {model.display_name}")
            print(f"Model create time: {model.create_time}")
            print(f"Model deployment state: {model.deployment_state}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

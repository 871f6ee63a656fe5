# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Dataset management walkthrough with one subcommand per call.

Usage::

    python examples/dataset_management.py create my-project us-central1 my_dataset
    python examples/dataset_management.py import my-project us-central1 TCN123 gs://bucket/data.csv
    python examples/dataset_management.py list my-project us-central1
    python examples/dataset_management.py get my-project us-central1 TCN123
    python examples/dataset_management.py export my-project us-central1 TCN123 gs://bucket/export/
    python examples/dataset_management.py delete my-project us-central1 TCN123
"""

import argparse
import sys
from pathlib import Path

# Add src to PYTHONPATH for local runs
sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from CloudML.AutoML import AutoMlClient, GoogleAuthCredential
from CloudML.AutoML.models.dataset import Dataset
from CloudML.AutoML.models.io import InputConfig, OutputConfig


def print_dataset(dataset: Dataset) -> None:
    print(f"Dataset name: {dataset.name}")
    print(f"Dataset id: {dataset.dataset_id}")
    print(f"Dataset display name: {dataset.display_name}")
    print(f"Dataset example count: {dataset.example_count}")
    print(f"Dataset create time: {dataset.create_time}")


def main() -> int:
    parser = argparse.ArgumentParser(description="AutoML dataset management")
    sub = parser.add_subparsers(dest="command", required=True)
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("project_id")
    common.add_argument("location")

    create = sub.add_parser("create", parents=[common])
    create.add_argument("display_name")
    create.add_argument("--classification-type", default="MULTICLASS")

    imp = sub.add_parser("import", parents=[common])
    imp.add_argument("dataset_id")
    imp.add_argument("input_uri")

    sub.add_parser("list", parents=[common])

    get = sub.add_parser("get", parents=[common])
    get.add_argument("dataset_id")

    export = sub.add_parser("export", parents=[common])
    export.add_argument("dataset_id")
    export.add_argument("output_uri_prefix")

    delete = sub.add_parser("delete", parents=[common])
    delete.add_argument("dataset_id")

    args = parser.parse_args()

    with AutoMlClient(GoogleAuthCredential()) as client:
        parent = client.location_path(args.project_id, args.location)

        if args.command == "create":
            metadata = {"textClassificationDatasetMetadata": {"classificationType": args.classification_type}}
            operation = client.datasets.create(parent, Dataset(display_name=args.display_name, dataset_metadata=metadata))
            print(f"Waiting for operation {operation.name} to complete...")
            print_dataset(operation.result())
            return 0

        if args.command == "list":
            print("List of datasets:")
            for dataset in client.datasets.list(parent):
                print_dataset(dataset)
            return 0

        name = client.dataset_path(args.project_id, args.location, args.dataset_id)
        if args.command == "get":
            print_dataset(client.datasets.get(name))
        elif args.command == "import":
            operation = client.datasets.import_data(name, InputConfig.from_uris(args.input_uri))
            print(f"Waiting for import operation {operation.name} to complete...")
            operation.result()
            print("Data imported.")
        elif args.command == "export":
            operation = client.datasets.export_data(name, OutputConfig.from_prefix(args.output_uri_prefix))
            print(f"Waiting for export operation {operation.name} to complete...")
            operation.result()
            print("Dataset exported.")
        elif args.command == "delete":
            client.datasets.delete(name).result()
            print("Dataset deleted.")
    return 0


if __name__ == "__main__":
    sys.exit(main())

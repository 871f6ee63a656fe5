# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
List the evaluations of a model.

Usage::

    python examples/list_model_evaluations.py my-project us-central1 ICN123
"""

import argparse
import sys
from pathlib import Path

# Add src to PYTHONPATH for local runs
sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from CloudML.AutoML import AutoMlClient, GoogleAuthCredential


def main() -> int:
    parser = argparse.ArgumentParser(description="List AutoML model evaluations")
    parser.add_argument("project_id")
    parser.add_argument("location")
    parser.add_argument("model_id")
    parser.add_argument("--filter", default="annotation_spec_id:*")
    parser.add_argument("--csv", default=None, help="also write the evaluations to this CSV file")
    args = parser.parse_args()

    with AutoMlClient(GoogleAuthCredential()) as client:
        parent = client.model_path(args.project_id, args.location, args.model_id)
        evaluations = client.model_evaluations.list(parent, args.filter)
        print("List of model evaluations:")
        for evaluation in evaluations:
            print(f"Model evaluation name: {evaluation.name}")
            print(f"Annotation spec id: {evaluation.annotation_spec_id}")
            print(f"Display name: {evaluation.display_name}")
            print(f"Evaluated example count: {evaluation.evaluated_example_count}")
            for kind, metrics in evaluation.evaluation_metrics.items():
                print(f"{kind}: {metrics}")
        if args.csv:
            evaluations.to_dataframe().to_csv(args.csv, index=False)
            print(f"Wrote {args.csv}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

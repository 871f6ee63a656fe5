# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Operation namespace classes for the AutoML client.

This module contains the namespace classes that organize related calls:
- DatasetOperations: dataset CRUD, import and export
- ModelOperations: model training, deployment and export
- ModelEvaluationOperations: model evaluation lookups
- AnnotationSpecOperations: annotation spec lookups
- PredictionOperations: online and batch prediction
- LongRunningOperations: operation lookup, cancellation and deletion
"""

__all__ = []

# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Python client for the AutoML platform: datasets, models, model evaluations,
annotation specs, online and batch prediction.
"""

from .__version__ import __version__
from .client import AutoMlClient, PredictionServiceClient
from .core._auth import GoogleAuthCredential
from .core.config import AutoMLConfig
from .core.errors import ApiError, AutoMLError, OperationError, OperationTimeoutError, ValidationError
from .core.operation import Operation
from .core.pager import ItemPager, Page
from .core.transport import CallOptions, Transport

__all__ = [
    "__version__",
    "AutoMlClient",
    "PredictionServiceClient",
    "AutoMLConfig",
    "GoogleAuthCredential",
    "AutoMLError",
    "ApiError",
    "OperationError",
    "OperationTimeoutError",
    "ValidationError",
    "Operation",
    "ItemPager",
    "Page",
    "CallOptions",
    "Transport",
]

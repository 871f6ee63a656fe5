# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Utility helpers for the AutoML client.
"""

__all__ = []

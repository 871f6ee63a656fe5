# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Core infrastructure components for the AutoML client.

This module contains the foundational components including authentication,
configuration, HTTP client, transport, long-running operations, paging and
error handling.
"""

__all__ = []

# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Version information for the CloudML AutoML client."""

__version__ = "0.1.0"

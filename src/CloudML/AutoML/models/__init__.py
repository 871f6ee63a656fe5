# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data models and request records for the AutoML client.

- :mod:`~CloudML.AutoML.models.resource_names`: resource-name builders and parsers.
- :mod:`~CloudML.AutoML.models.requests`: one validated request record per remote method.
- :mod:`~CloudML.AutoML.models.dataset`, :mod:`~CloudML.AutoML.models.model`:
  entity records.
- :mod:`~CloudML.AutoML.models.io`, :mod:`~CloudML.AutoML.models.prediction`:
  input, output and prediction payloads.

Note:
    This ``__init__.py`` does not re-export models; import them from their
    modules.
"""

__all__ = []

# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Header names and telemetry attribute keys.
"""

# Request headers
API_CLIENT_HEADER = "x-goog-api-client"
REQUEST_PARAMS_HEADER = "x-goog-request-params"
CLIENT_LIBRARY_NAME = "cloudml-automl"

# OpenTelemetry attribute names
OTEL_ATTR_RPC_SYSTEM = "rpc.system"
OTEL_ATTR_RPC_SERVICE = "rpc.service"
OTEL_ATTR_RPC_METHOD = "rpc.method"
OTEL_ATTR_HTTP_METHOD = "http.request.method"
OTEL_ATTR_HTTP_URL = "url.full"
OTEL_ATTR_HTTP_STATUS_CODE = "http.response.status_code"
OTEL_ATTR_AUTOML_RESOURCE = "automl.resource_name"
OTEL_ATTR_AUTOML_REQUEST_ID = "automl.client_request_id"

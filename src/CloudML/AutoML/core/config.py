# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .telemetry import TelemetryConfig

DEFAULT_API_ENDPOINT = "automl.googleapis.com"
DEFAULT_PORT = 443
DEFAULT_SCOPES: Tuple[str, ...] = ("https://www.googleapis.com/auth/cloud-platform",)


@dataclass(frozen=True)
class AutoMLConfig:
    """
    Configuration settings for AutoML client operations.

    Supplied once at client construction and immutable afterwards.

    :param api_endpoint: Service host name (default: ``"automl.googleapis.com"``).
    :type api_endpoint: str
    :param port: Service port (default: 443). Omitted from URLs when 443.
    :type port: int
    :param api_version: API version path segment (default: ``"v1"``).
    :type api_version: str
    :param scopes: OAuth scopes requested from the credential.
    :type scopes: tuple of str
    :param http_retries: Maximum number of attempts for idempotent HTTP requests (default: 5).
    :type http_retries: int or None
    :param http_backoff: Base delay in seconds for exponential backoff (default: 0.5).
    :type http_backoff: float or None
    :param http_max_backoff: Maximum delay between retry attempts in seconds (default: 60.0).
    :type http_max_backoff: float or None
    :param http_timeout: Request timeout in seconds (default: method-dependent).
    :type http_timeout: float or None
    :param http_jitter: Whether to add jitter to retry delays (default: True).
    :type http_jitter: bool or None
    :param http_retry_transient_errors: Whether to retry HTTP 429, 502, 503, 504 for idempotent methods (default: True).
    :type http_retry_transient_errors: bool or None
    :param poll_initial_delay: First delay in seconds between operation polls (default: 1.0).
    :type poll_initial_delay: float
    :param poll_multiplier: Growth factor of the poll delay (default: 1.5).
    :type poll_multiplier: float
    :param poll_max_delay: Upper bound of the poll delay in seconds (default: 45.0).
    :type poll_max_delay: float
    :param poll_timeout: Default wait limit for ``Operation.result()`` in seconds; None waits forever.
    :type poll_timeout: float or None
    :param telemetry: Optional telemetry configuration.
    :type telemetry: ~CloudML.AutoML.core.telemetry.TelemetryConfig or None
    """

    api_endpoint: str = DEFAULT_API_ENDPOINT
    port: int = DEFAULT_PORT
    api_version: str = "v1"
    scopes: Tuple[str, ...] = DEFAULT_SCOPES

    # HTTP retry and resilience configuration
    http_retries: Optional[int] = None
    http_backoff: Optional[float] = None
    http_max_backoff: Optional[float] = None
    http_timeout: Optional[float] = None
    http_jitter: Optional[bool] = None
    http_retry_transient_errors: Optional[bool] = None

    # Long-running operation polling
    poll_initial_delay: float = 1.0
    poll_multiplier: float = 1.5
    poll_max_delay: float = 45.0
    poll_timeout: Optional[float] = None

    telemetry: Optional["TelemetryConfig"] = field(default=None)

    @property
    def base_url(self) -> str:
        """
        Root URL of the versioned HTTP/JSON API.

        :rtype: str
        """
        host = self.api_endpoint.rstrip("/")
        if "://" not in host:
            host = f"https://{host}"
        if self.port and self.port != DEFAULT_PORT:
            host = f"{host}:{self.port}"
        return f"{host}/{self.api_version}"

    @classmethod
    def from_env(cls) -> "AutoMLConfig":
        """
        Create a configuration instance with default settings.

        :return: Configuration instance with default values.
        :rtype: ~CloudML.AutoML.core.config.AutoMLConfig
        """
        # Environment-free defaults
        return cls(
            api_endpoint=DEFAULT_API_ENDPOINT,
            port=DEFAULT_PORT,
            http_retries=None,  # Will default to 5 in _HttpClient
            http_backoff=None,  # Will default to 0.5 in _HttpClient
            http_max_backoff=None,  # Will default to 60.0 in _HttpClient
            http_timeout=None,  # Will use method-dependent defaults in _HttpClient
            http_jitter=None,  # Will default to True in _HttpClient
            http_retry_transient_errors=None,  # Will default to True in _HttpClient
        )

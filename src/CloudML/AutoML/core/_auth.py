# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import timezone
from typing import Any, Optional, Sequence

import google.auth
import google.auth.transport.requests
from azure.core.credentials import AccessToken, TokenCredential
from google.oauth2 import service_account

from .config import DEFAULT_SCOPES


@dataclass
class _TokenPair:
    scope: str
    access_token: str


class GoogleAuthCredential(TokenCredential):
    """
    Adapts ``google.auth`` credentials to the ``get_token`` interface used by the clients.

    The wrapped credentials are refreshed when they hold no token or have
    expired; scopes passed to :meth:`get_token` are ignored because Google
    credentials carry their scopes from construction.

    :param credentials: A ``google.auth.credentials.Credentials`` instance.
        Defaults to Application Default Credentials.
    :param scopes: OAuth scopes requested when loading default credentials.
    :type scopes: Sequence[str]

    Example::

        credential = GoogleAuthCredential.from_service_account_file("key.json")
        with AutoMlClient(credential) as client:
            ...
    """

    def __init__(self, credentials: Optional[Any] = None, *, scopes: Sequence[str] = DEFAULT_SCOPES) -> None:
        if credentials is None:
            credentials, _ = google.auth.default(scopes=list(scopes))
        self.credentials = credentials
        self._request = google.auth.transport.requests.Request()
        self._lock = threading.Lock()

    @classmethod
    def from_service_account_file(cls, filename: str, scopes: Sequence[str] = DEFAULT_SCOPES) -> "GoogleAuthCredential":
        """Load a service account JSON key file."""
        return cls(service_account.Credentials.from_service_account_file(filename, scopes=list(scopes)))

    @classmethod
    def from_service_account_info(cls, info: dict, scopes: Sequence[str] = DEFAULT_SCOPES) -> "GoogleAuthCredential":
        """Build from an already parsed service account key."""
        return cls(service_account.Credentials.from_service_account_info(info, scopes=list(scopes)))

    def get_token(self, *scopes: str, **kwargs: Any) -> AccessToken:
        creds = self.credentials
        with self._lock:
            if not creds.token or not getattr(creds, "valid", True):
                creds.refresh(self._request)
        expiry = getattr(creds, "expiry", None)
        # google.auth reports naive UTC expiry; 0 when unknown
        expires_on = int(expiry.replace(tzinfo=timezone.utc).timestamp()) if expiry is not None else 0
        return AccessToken(creds.token, expires_on)


def _is_google_credentials(credential: Any) -> bool:
    return hasattr(credential, "token") and callable(getattr(credential, "refresh", None))


class _AuthManager:
    """
    Bearer-token helper.

    Accepts any :class:`~azure.core.credentials.TokenCredential`, or
    ``google.auth`` credentials, which are wrapped in :class:`GoogleAuthCredential`.
    """

    def __init__(self, credential: Any) -> None:
        if isinstance(credential, TokenCredential):
            self.credential: TokenCredential = credential
        elif _is_google_credentials(credential):
            self.credential = GoogleAuthCredential(credential)
        else:
            raise TypeError(
                "credential must implement azure.core.credentials.TokenCredential "
                "or be a google.auth.credentials.Credentials instance."
            )

    def _acquire_token(self, scopes: Sequence[str]) -> _TokenPair:
        """Acquire an access token for the given scopes."""
        token = self.credential.get_token(*scopes)
        return _TokenPair(scope=" ".join(scopes), access_token=token.token)

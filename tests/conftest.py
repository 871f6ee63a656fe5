# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Shared pytest fixtures for AutoML client tests.

The central test double is :class:`FakeTransport`, a scripted stand-in for
the transport seam: replies are queued per remote method and every call is
recorded, so tests never touch the network.
"""

from collections import defaultdict, deque

import pytest
from azure.core.credentials import TokenCredential

from CloudML.AutoML.core.config import AutoMLConfig


class FakeTransport:
    """Scripted transport. Queue replies with :meth:`reply`; inspect :attr:`calls`."""

    def __init__(self):
        self.calls = []
        self.closed = False
        self._replies = defaultdict(deque)

    def reply(self, method, *responses):
        """Queue responses (dicts, or exceptions to raise) for ``method``."""
        self._replies[method].extend(responses)
        return self

    def invoke(self, method, request, options=None):
        self.calls.append((method, dict(request), options))
        queue = self._replies.get(method)
        if not queue:
            raise AssertionError(f"No scripted reply for {method}")
        response = queue.popleft()
        if isinstance(response, BaseException):
            raise response
        return response

    def get_operation(self, name, options=None):
        return self.invoke("GetOperation", {"name": name}, options)

    def cancel_operation(self, name, options=None):
        self.invoke("CancelOperation", {"name": name}, options)

    def delete_operation(self, name, options=None):
        self.invoke("DeleteOperation", {"name": name}, options)

    def close(self):
        self.closed = True

    def methods(self):
        return [method for method, _, _ in self.calls]

    def count(self, method):
        return self.methods().count(method)


class DummyCredential(TokenCredential):
    def get_token(self, *scopes, **kwargs):
        class Tok:
            token = "dummy-token"

        return Tok()


@pytest.fixture
def fake_transport():
    """Fresh scripted transport."""
    return FakeTransport()


@pytest.fixture
def fast_config():
    """Configuration with tiny poll delays."""
    return AutoMLConfig(poll_initial_delay=0.01, poll_multiplier=2.0, poll_max_delay=0.05)


@pytest.fixture
def dummy_credential():
    return DummyCredential()


@pytest.fixture
def location():
    return "projects/my-project/locations/us-central1"

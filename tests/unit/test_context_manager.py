# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Unit tests for AutoML client context manager support."""

import unittest
from unittest.mock import MagicMock

import requests
from azure.core.credentials import TokenCredential

from CloudML.AutoML import AutoMlClient, PredictionServiceClient


class TestContextManager(unittest.TestCase):
    """Test context manager support on the AutoML clients."""

    def setUp(self):
        self.mock_credential = MagicMock(spec=TokenCredential)

    def test_enter_creates_session(self):
        client = AutoMlClient(self.mock_credential)
        self.assertIsNone(client._session)

        result = client.__enter__()

        self.assertIsInstance(client._session, requests.Session)
        self.assertTrue(client._owns_session)
        self.assertIs(result, client)

    def test_exit_closes_session(self):
        client = AutoMlClient(self.mock_credential)
        client.__enter__()

        mock_session = MagicMock(spec=requests.Session)
        client._session = mock_session
        client._owns_session = True

        client.__exit__(None, None, None)

        mock_session.close.assert_called_once()
        self.assertIsNone(client._session)
        self.assertFalse(client._owns_session)

    def test_context_manager_protocol(self):
        with PredictionServiceClient(self.mock_credential) as client:
            self.assertIsInstance(client, PredictionServiceClient)
            self.assertIsInstance(client._session, requests.Session)

        self.assertIsNone(client._session)

    def test_session_handed_to_transport(self):
        with AutoMlClient(self.mock_credential) as client:
            transport = client._get_transport()
            self.assertIs(transport._http._session, client._session)

    def test_session_reaches_transport_created_before_enter(self):
        client = AutoMlClient(self.mock_credential)
        transport = client._get_transport()
        self.assertIsNone(transport._http._session)

        with client:
            self.assertIs(client._get_transport(), transport)
            self.assertIs(transport._http._session, client._session)

    def test_injected_transport_not_given_session(self):
        transport = MagicMock()
        with AutoMlClient(transport=transport):
            pass
        transport._adopt_session.assert_not_called()

    def test_close_idempotent(self):
        client = AutoMlClient(self.mock_credential)
        client.__enter__()

        client.close()
        client.close()
        client.close()

        self.assertIsNone(client._session)

    def test_close_without_enter(self):
        client = AutoMlClient(self.mock_credential)
        client.close()
        self.assertIsNone(client._session)

    def test_reentry_reuses_session(self):
        client = AutoMlClient(self.mock_credential)
        client.__enter__()
        session = client._session
        client.__enter__()
        self.assertIs(client._session, session)
        client.close()

    def test_exception_inside_context_still_closes(self):
        with self.assertRaises(RuntimeError):
            with AutoMlClient(self.mock_credential) as client:
                raise RuntimeError("boom")
        self.assertIsNone(client._session)

# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from unittest.mock import Mock, patch

import pytest
import requests

from CloudML.AutoML.core._http import _HttpClient

URL = "https://automl.googleapis.com/v1/projects/p/locations/l/models"


class TestHttpClientRetryLogic:
    """Retry behavior of _HttpClient for retryable and non-retryable calls."""

    def test_default_configuration(self):
        client = _HttpClient()
        assert client.max_attempts == 5
        assert client.base_delay == 0.5
        assert client.max_backoff == 60.0
        assert client.jitter is True
        assert client.retry_transient_errors is True
        assert client.transient_status_codes == {429, 502, 503, 504}

    def test_custom_configuration(self):
        client = _HttpClient(retries=3, backoff=1.0, max_backoff=30.0, jitter=False, retry_transient_errors=False)
        assert client.max_attempts == 3
        assert client.base_delay == 1.0
        assert client.max_backoff == 30.0
        assert client.jitter is False
        assert client.retry_transient_errors is False

    @patch("requests.request")
    def test_successful_request_no_retry(self, mock_request):
        mock_request.return_value = Mock(status_code=200)

        response = _HttpClient()._request("GET", URL, retry=True)

        assert response.status_code == 200
        assert mock_request.call_count == 1

    @patch("requests.request")
    @patch("time.sleep")
    def test_network_error_retry(self, mock_sleep, mock_request):
        mock_request.side_effect = [
            requests.exceptions.ConnectionError("Network error"),
            requests.exceptions.ConnectionError("Network error"),
            Mock(status_code=200),
        ]

        response = _HttpClient(jitter=False)._request("GET", URL, retry=True)

        assert response.status_code == 200
        assert mock_request.call_count == 3
        assert mock_sleep.call_count == 2
        mock_sleep.assert_any_call(0.5)
        mock_sleep.assert_any_call(1.0)

    @patch("requests.request")
    @patch("time.sleep")
    def test_non_retryable_request_attempted_once_on_network_error(self, mock_sleep, mock_request):
        mock_request.side_effect = requests.exceptions.ConnectionError("Network error")

        with pytest.raises(requests.exceptions.ConnectionError):
            _HttpClient()._request("POST", URL)

        assert mock_request.call_count == 1
        mock_sleep.assert_not_called()

    @patch("requests.request")
    @patch("time.sleep")
    def test_non_retryable_request_returns_transient_status(self, mock_sleep, mock_request):
        mock_request.return_value = Mock(status_code=503, headers={})

        response = _HttpClient()._request("POST", URL, retry=False)

        assert response.status_code == 503
        assert mock_request.call_count == 1
        mock_sleep.assert_not_called()

    @patch("requests.request")
    @patch("time.sleep")
    def test_transient_http_error_retry(self, mock_sleep, mock_request):
        mock_request.side_effect = [Mock(status_code=429, headers={}), Mock(status_code=200, headers={})]

        response = _HttpClient(jitter=False)._request("GET", URL, retry=True)

        assert response.status_code == 200
        assert mock_request.call_count == 2
        mock_sleep.assert_called_once_with(0.5)

    @patch("requests.request")
    @patch("time.sleep")
    def test_retry_after_header_respected(self, mock_sleep, mock_request):
        mock_request.side_effect = [
            Mock(status_code=429, headers={"Retry-After": "5"}),
            Mock(status_code=200, headers={}),
        ]

        response = _HttpClient(jitter=False)._request("GET", URL, retry=True)

        assert response.status_code == 200
        mock_sleep.assert_called_once_with(5)

    @patch("requests.request")
    @patch("time.sleep")
    def test_retry_after_header_capped_at_max_backoff(self, mock_sleep, mock_request):
        mock_request.side_effect = [
            Mock(status_code=429, headers={"Retry-After": "120"}),
            Mock(status_code=200, headers={}),
        ]

        _HttpClient(jitter=False, max_backoff=30.0)._request("GET", URL, retry=True)

        mock_sleep.assert_called_once_with(30.0)

    @patch("requests.request")
    @patch("time.sleep")
    def test_invalid_retry_after_header_fallback(self, mock_sleep, mock_request):
        mock_request.side_effect = [
            Mock(status_code=429, headers={"Retry-After": "invalid"}),
            Mock(status_code=200, headers={}),
        ]

        _HttpClient(jitter=False)._request("GET", URL, retry=True)

        mock_sleep.assert_called_once_with(0.5)

    @patch("requests.request")
    def test_non_transient_error_no_retry(self, mock_request):
        mock_request.return_value = Mock(status_code=404, headers={})

        response = _HttpClient()._request("GET", URL, retry=True)

        assert response.status_code == 404
        assert mock_request.call_count == 1

    @patch("requests.request")
    @patch("time.sleep")
    def test_retry_disabled_for_transient_errors(self, mock_sleep, mock_request):
        mock_request.return_value = Mock(status_code=429, headers={})

        response = _HttpClient(retry_transient_errors=False)._request("GET", URL, retry=True)

        assert response.status_code == 429
        assert mock_request.call_count == 1
        assert mock_sleep.call_count == 0

    @patch("requests.request")
    @patch("time.sleep")
    def test_last_transient_response_returned_when_attempts_exhausted(self, mock_sleep, mock_request):
        mock_request.return_value = Mock(status_code=503, headers={})

        response = _HttpClient(retries=3, jitter=False)._request("GET", URL, retry=True)

        assert response.status_code == 503
        assert mock_request.call_count == 3
        assert mock_sleep.call_count == 2

    @patch("requests.request")
    @patch("time.sleep")
    def test_max_attempts_respected(self, mock_sleep, mock_request):
        mock_request.side_effect = requests.exceptions.ConnectionError("Network error")

        with pytest.raises(requests.exceptions.ConnectionError):
            _HttpClient(retries=2, jitter=False)._request("GET", URL, retry=True)

        assert mock_request.call_count == 2
        assert mock_sleep.call_count == 1

    @patch("requests.request")
    @patch("time.sleep")
    def test_exponential_backoff_capped(self, mock_sleep, mock_request):
        mock_request.side_effect = [
            requests.exceptions.ConnectionError("Network error"),
            requests.exceptions.ConnectionError("Network error"),
            requests.exceptions.ConnectionError("Network error"),
            Mock(status_code=200),
        ]

        client = _HttpClient(retries=4, backoff=10.0, max_backoff=15.0, jitter=False)
        response = client._request("GET", URL, retry=True)

        assert response.status_code == 200
        delays = [c[0][0] for c in mock_sleep.call_args_list]
        assert delays == [10.0, 15.0, 15.0]

    @patch("requests.request")
    @patch("time.sleep")
    @patch("random.uniform")
    def test_jitter_applied(self, mock_uniform, mock_sleep, mock_request):
        mock_uniform.return_value = 0.1
        mock_request.side_effect = [requests.exceptions.ConnectionError("Network error"), Mock(status_code=200)]

        _HttpClient(jitter=True, backoff=1.0)._request("GET", URL, retry=True)

        mock_uniform.assert_called_with(-0.25, 0.25)
        mock_sleep.assert_called_with(1.1)

    @patch("requests.request")
    def test_method_specific_timeouts(self, mock_request):
        mock_request.return_value = Mock(status_code=200)
        client = _HttpClient()

        client._request("GET", URL)
        assert mock_request.call_args[1]["timeout"] == 30

        client._request("POST", URL)
        assert mock_request.call_args[1]["timeout"] == 120

        client._request("DELETE", URL)
        assert mock_request.call_args[1]["timeout"] == 120

    @patch("requests.request")
    def test_custom_timeout_respected(self, mock_request):
        mock_request.return_value = Mock(status_code=200)

        _HttpClient(timeout=12.5)._request("GET", URL)

        assert mock_request.call_args[1]["timeout"] == 12.5

    @patch("requests.request")
    def test_per_call_timeout_overrides_default(self, mock_request):
        mock_request.return_value = Mock(status_code=200)

        _HttpClient(timeout=12.5)._request("GET", URL, timeout=3)

        assert mock_request.call_args[1]["timeout"] == 3

    @patch("requests.request")
    @patch("time.sleep")
    def test_all_transient_status_codes_retried(self, mock_sleep, mock_request):
        for status_code in [429, 502, 503, 504]:
            mock_sleep.reset_mock()
            mock_request.reset_mock()
            mock_request.side_effect = [Mock(status_code=status_code, headers={}), Mock(status_code=200, headers={})]

            response = _HttpClient(jitter=False)._request("GET", URL, retry=True)

            assert response.status_code == 200
            assert mock_request.call_count == 2
            mock_sleep.assert_called_once_with(0.5)

    def test_session_used_when_provided(self):
        session = Mock(spec=requests.Session)
        session.request.return_value = Mock(status_code=200)

        client = _HttpClient(session=session)
        client._request("GET", URL)

        session.request.assert_called_once()
        client.close()
        session.close.assert_called_once()
        assert client._session is None

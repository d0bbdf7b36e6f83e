"""Unit tests for confluence_client.retry_logic module."""

import pytest
from unittest.mock import patch, MagicMock
from src.confluence_client.retry_logic import retry_on_rate_limit, _is_rate_limit_error
from src.confluence_client.errors import APIAccessError


class TestIsRateLimitError:
    """Test cases for _is_rate_limit_error function."""

    def test_detects_429_in_message(self):
        assert _is_rate_limit_error(Exception("HTTP 429 Too Many Requests")) is True

    def test_detects_rate_limit_text_in_message(self):
        assert _is_rate_limit_error(Exception("Rate limit exceeded")) is True

    def test_detects_status_code_attribute(self):
        error = Exception("API error")
        error.status_code = 429
        assert _is_rate_limit_error(error) is True

    def test_detects_response_status_code_attribute(self):
        error = Exception("API error")
        error.response = MagicMock()
        error.response.status_code = 429
        assert _is_rate_limit_error(error) is True

    def test_returns_false_for_non_rate_limit_error(self):
        assert _is_rate_limit_error(Exception("Something went wrong")) is False

    def test_returns_false_for_404_status_code(self):
        error = Exception("Not found")
        error.status_code = 404
        assert _is_rate_limit_error(error) is False


class TestRetryOnRateLimit:
    """Test cases for retry_on_rate_limit function."""

    def test_success_on_first_attempt(self):
        mock_func = MagicMock(return_value="success")
        result = retry_on_rate_limit(mock_func, "arg1", kwarg1="value1")

        assert result == "success"
        mock_func.assert_called_once_with("arg1", kwarg1="value1")

    @patch('time.sleep')
    def test_exponential_backoff_timing(self, mock_sleep):
        """retry_on_rate_limit should use exponential backoff: 1s, 2s, 4s."""
        mock_func = MagicMock()
        rate_limit_error = Exception("429")
        mock_func.side_effect = [rate_limit_error, rate_limit_error, rate_limit_error, "success"]

        result = retry_on_rate_limit(mock_func)

        assert result == "success"
        assert mock_func.call_count == 4
        assert [call[0][0] for call in mock_sleep.call_args_list] == [1, 2, 4]

    @patch('time.sleep')
    def test_raises_api_access_error_after_max_retries(self, mock_sleep):
        mock_func = MagicMock(side_effect=Exception("429 Too Many Requests"))

        with pytest.raises(APIAccessError) as exc_info:
            retry_on_rate_limit(mock_func)

        assert str(exc_info.value) == "Confluence API failure (after 3 retries)"
        assert mock_func.call_count == 4
        assert mock_sleep.call_count == 3

    def test_fails_fast_on_non_rate_limit_error(self):
        mock_func = MagicMock(side_effect=Exception("Page not found"))

        with pytest.raises(Exception) as exc_info:
            retry_on_rate_limit(mock_func)

        assert str(exc_info.value) == "Page not found"
        assert mock_func.call_count == 1


class TestRetryAfter:
    """Test cases for honoring the Retry-After header."""

    @staticmethod
    def _rate_limited(headers):
        error = Exception("429 Too Many Requests")
        error.response = MagicMock()
        error.response.status_code = 429
        error.response.headers = headers
        return error

    @patch('time.sleep')
    def test_waits_for_retry_after_seconds(self, mock_sleep):
        mock_func = MagicMock(side_effect=[self._rate_limited({"Retry-After": "7"}), "ok"])

        assert retry_on_rate_limit(mock_func) == "ok"
        mock_sleep.assert_called_once_with(7)

    @patch('time.sleep')
    def test_retry_after_is_capped(self, mock_sleep):
        mock_func = MagicMock(side_effect=[self._rate_limited({"Retry-After": "3600"}), "ok"])

        retry_on_rate_limit(mock_func)

        mock_sleep.assert_called_once_with(60)

    @pytest.mark.parametrize("headers", [
        {},
        {"Retry-After": "Wed, 21 Oct 2026 07:28:00 GMT"},
        {"Retry-After": "0"},
    ])
    @patch('time.sleep')
    def test_unusable_header_falls_back_to_schedule(self, mock_sleep, headers):
        mock_func = MagicMock(side_effect=[self._rate_limited(headers), "ok"])

        retry_on_rate_limit(mock_func)

        mock_sleep.assert_called_once_with(1)

"""Tests for the HTTP helpers."""

from unittest.mock import Mock, patch

import requests

from clawdjob.core.web_scraper import WebScraper, html_to_text


def test_headers_configuration():
    """Test custom headers configuration."""
    scraper = WebScraper(headers={"User-Agent": "Custom Agent"})
    assert scraper.headers["User-Agent"] == "Custom Agent"
    # Should merge with default headers
    assert scraper.headers["Accept"] == "application/json"
    assert scraper.session.headers["User-Agent"] == "Custom Agent"


def test_default_user_agent():
    assert WebScraper().headers["User-Agent"] == "ClawdJob/1.0"


def test_get_json_success():
    scraper = WebScraper()
    with patch('requests.Session.get') as mock_get:
        mock_response = Mock(spec=requests.Response)
        mock_response.json.return_value = [{"id": 1}]
        mock_get.return_value = mock_response

        assert scraper.get_json("https://example.com/api", params={"q": "x"}) == [{"id": 1}]
        mock_get.assert_called_once_with(
            "https://example.com/api", params={"q": "x"}, timeout=scraper.timeout
        )


def test_get_request_failure():
    scraper = WebScraper()
    with patch('requests.Session.get') as mock_get:
        mock_get.side_effect = requests.exceptions.ConnectionError("boom")
        assert scraper.get("https://example.com") is None
        assert scraper.get_json("https://example.com") is None


def test_http_error_status():
    scraper = WebScraper()
    with patch('requests.Session.get') as mock_get:
        mock_response = Mock(spec=requests.Response)
        mock_response.raise_for_status.side_effect = requests.exceptions.HTTPError("503")
        mock_get.return_value = mock_response
        assert scraper.get_json("https://example.com") is None


def test_invalid_json():
    scraper = WebScraper()
    with patch('requests.Session.get') as mock_get:
        mock_response = Mock(spec=requests.Response)
        mock_response.json.side_effect = ValueError("not json")
        mock_get.return_value = mock_response
        assert scraper.get_json("https://example.com") is None


def test_html_to_text():
    text = html_to_text("<p>Hello <b>world</b></p>")
    assert "<" not in text
    assert "Hello" in text and "world" in text
    assert html_to_text("plain text") == "plain text"
    assert html_to_text("") == ""

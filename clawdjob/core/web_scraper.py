"""HTTP helpers for the public job-board APIs."""

from typing import Any, Dict, Optional

import requests
from bs4 import BeautifulSoup

from clawdjob.core.logging import setup_logging

logger = setup_logging('web_scraper')


class WebScraper:
    """Thin wrapper around a ``requests`` session for JSON job feeds."""

    DEFAULT_HEADERS = {
        "User-Agent": "ClawdJob/1.0",
        "Accept": "application/json",
    }

    def __init__(
        self,
        headers: Optional[Dict[str, str]] = None,
        timeout: float = 30,
    ):
        """Initialize the scraper.

        Args:
            headers: Optional headers merged over the defaults
            timeout: Request timeout in seconds
        """
        self.timeout = timeout
        self.headers = self.DEFAULT_HEADERS.copy()
        if headers:
            self.headers.update(headers)

        self.session = requests.Session()
        self.session.headers.update(self.headers)

    def get(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        **kwargs
    ) -> Optional[requests.Response]:
        """Make a GET request.

        Args:
            url: URL to request
            params: Optional query parameters
            **kwargs: Additional arguments passed to ``Session.get``

        Returns:
            Response object or None if the request failed
        """
        try:
            response = self.session.get(
                url,
                params=params,
                timeout=self.timeout,
                **kwargs
            )
            response.raise_for_status()
            return response

        except requests.exceptions.RequestException as e:
            logger.error(f"Error fetching {url}: {str(e)}")
            return None

    def get_json(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        **kwargs
    ) -> Optional[Any]:
        """GET a URL and decode the JSON body.

        Returns:
            Decoded payload or None if the request or decoding failed
        """
        response = self.get(url, params, **kwargs)
        if response is None:
            return None

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON from {url}: {str(e)}")
            return None

    def close(self):
        """Close the underlying session."""
        self.session.close()


def html_to_text(markup: str) -> str:
    """Strip HTML tags from a job description, keeping line breaks."""
    if not markup or '<' not in markup:
        return markup or ""
    soup = BeautifulSoup(markup, 'html.parser')
    return soup.get_text(separator="\n").strip()

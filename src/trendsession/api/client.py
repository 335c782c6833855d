"""HTTP client for the Google sign-in flow."""

import logging
from typing import Optional

import requests
from requests.cookies import RequestsCookieJar

from trendsession.config import Settings

logger = logging.getLogger(__name__)

REFERRER = "https://www.google.com/accounts/ServiceLoginBoxAuth"


class HttpClient:
    """
    Thin wrapper around a requests session.

    The session carries the fixed request headers, the redirect bound and the
    cookie jar shared with the caller. Every response keeps the effective URL
    reached after redirects in ``response.url``.
    """

    def __init__(self, settings: Settings, cookies: Optional[RequestsCookieJar] = None):
        self.settings = settings
        self.session = self._create_session(cookies)

    def _create_session(self, cookies: Optional[RequestsCookieJar]) -> requests.Session:
        """Create and configure HTTP session."""
        session = requests.Session()
        session.headers.update({
            "User-Agent": self.settings.user_agent,
            "Content-type": "application/x-www-form-urlencoded",
            "Accept": "text/plain",
            "Referrer": REFERRER,
        })
        session.max_redirects = self.settings.max_redirects
        if cookies is not None:
            session.cookies = cookies
        return session

    @property
    def cookies(self) -> RequestsCookieJar:
        """Cookie jar attached to every request."""
        return self.session.cookies

    @cookies.setter
    def cookies(self, jar: RequestsCookieJar):
        self.session.cookies = jar

    def send(self, method: str, url: str, params: Optional[dict] = None) -> requests.Response:
        """
        Send a request, following redirects.

        Args:
            method: HTTP method (GET, POST).
            url: Target URL.
            params: Fields sent as query string parameters.

        Returns:
            The final response; ``response.url`` is the effective URL.

        Raises:
            requests.RequestException: On transport failure or redirect overflow.
        """
        logger.debug(f"{method} {url}")
        response = self.session.request(
            method,
            url,
            params=params,
            allow_redirects=True,
            timeout=self.settings.request_timeout,
        )
        if response.history:
            logger.debug(f"Redirected {len(response.history)}x to {response.url}")
        return response

    def get(self, url: str, params: Optional[dict] = None) -> requests.Response:
        return self.send("GET", url, params=params)

    def post(self, url: str, params: Optional[dict] = None) -> requests.Response:
        return self.send("POST", url, params=params)

    def close(self):
        """Release pooled connections."""
        self.session.close()

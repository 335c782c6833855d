"""
Pytest configuration and fixtures.

The HTTP client is replaced by a recording fake, or its session gets a routing
adapter mounted, so no test touches the network.
"""

from http.client import HTTPMessage
from types import SimpleNamespace

import pytest
import requests
from requests.adapters import BaseAdapter
from requests.cookies import RequestsCookieJar
from requests.structures import CaseInsensitiveDict

from trendsession.auth.session import AUTH_URL, ACCOUNTS_URL, CHECK_COOKIE_URL, NCR_URL
from trendsession.config import Settings

LOGIN_PAGE = b"""
<html><body>
<form id="gaia_loginform" action="ServiceLoginAuth" method="post">
  <input type="hidden" name="GALX" value="abc">
  <input type="email" name="Email" value="">
  <input type="password" name="Passwd" value="">
</form>
</body></html>
"""


class FakeResponse:
    """Just enough of requests.Response for the sign-in flow."""

    def __init__(self, url: str, content: bytes = b""):
        self.url = url
        self.content = content
        self.history = []


class FakeClient:
    """Records every request and answers from a URL -> response table."""

    def __init__(self, routes: dict = None):
        self.routes = routes or {}
        self.calls = []
        self.cookies = RequestsCookieJar()
        self.closed = False

    def send(self, method, url, params=None):
        self.calls.append((method, url, dict(params) if params is not None else None))
        route = self.routes.get((method, url))
        if route is None:
            return FakeResponse(url)
        if isinstance(route, Exception):
            raise route
        return route

    def get(self, url, params=None):
        return self.send("GET", url, params=params)

    def post(self, url, params=None):
        return self.send("POST", url, params=params)

    def close(self):
        self.closed = True


@pytest.fixture
def settings():
    """Settings isolated from the environment and any .env file."""
    return Settings(
        _env_file=None,
        email="user@example.com",
        password="hunter2",
        recovery_email="backup@example.com",
        language="de_DE",
    )


@pytest.fixture
def login_routes():
    """Routes for a sign-in without verification."""
    return {
        ("GET", NCR_URL): FakeResponse("https://www.google.com/"),
        ("GET", AUTH_URL): FakeResponse(AUTH_URL, LOGIN_PAGE),
        ("POST", AUTH_URL): FakeResponse("http://www.google.com/trends"),
        ("GET", CHECK_COOKIE_URL): FakeResponse("http://www.google.com/trends"),
        ("GET", ACCOUNTS_URL): FakeResponse("https://myaccount.google.com/"),
    }


@pytest.fixture
def fake_client(login_routes):
    return FakeClient(login_routes)


class _RawResponse:
    """Stands in for urllib3's response; cookie extraction reads ``_original_response.msg``."""

    def __init__(self, headers):
        msg = HTTPMessage()
        for name, value in headers:
            msg[name] = value
        self._original_response = SimpleNamespace(msg=msg)

    def read(self, *args, **kwargs):
        return b""

    def close(self):
        pass

    def release_conn(self):
        pass


class RoutingAdapter(BaseAdapter):
    """
    Transport adapter answering from a table, so the real requests session
    still follows redirects and stores cookies.

    Routes map ``(method, url without query)`` to ``(status, headers, body)``
    where headers is a list of ``(name, value)`` pairs.
    """

    def __init__(self, routes: dict):
        super().__init__()
        self.routes = routes
        self.requests = []

    def send(self, request, **kwargs):
        self.requests.append(request)
        key = (request.method, request.url.split("?", 1)[0])
        status, headers, body = self.routes.get(key, (200, [], b""))

        response = requests.Response()
        response.status_code = status
        response.reason = "Found" if status in (301, 302, 303) else "OK"
        response.headers = CaseInsensitiveDict(headers)
        response.url = request.url
        response.request = request
        response.raw = _RawResponse(headers)
        response._content = body
        response._content_consumed = True
        response.encoding = "utf-8"
        return response

    def close(self):
        pass


def mount_routes(client, routes: dict) -> RoutingAdapter:
    """Mount a RoutingAdapter for http and https on an HttpClient's session."""
    adapter = RoutingAdapter(routes)
    client.session.mount("http://", adapter)
    client.session.mount("https://", adapter)
    return adapter

"""
Google sign-in session.

Walks the classic ServiceLoginBoxAuth form flow with a requests cookie jar so
later Google Trends requests can reuse the signed-in cookies.
"""

import logging
from typing import Optional
from urllib.parse import urlparse

from requests.cookies import RequestsCookieJar, create_cookie

from trendsession.api.client import HttpClient
from trendsession.auth.forms import FormExtractor
from trendsession.config import Settings

logger = logging.getLogger(__name__)

# Google URLs
AUTH_URL = "https://accounts.google.com/ServiceLoginBoxAuth"
NCR_URL = "http://www.google.com/ncr"
CHECK_COOKIE_URL = "https://www.google.com/accounts/CheckCookie?chtml=LoginDoneHtml"
ACCOUNTS_URL = "https://accounts.google.com"
CONTINUE_URL = "http://www.google.com/trends"

# Trends locale cookie
LOCALE_COOKIE = "I4SUserLocale"
LOCALE_DOMAIN = "www.google.com"
LOCALE_PATH = "/trends"

VERIFICATION_MARKER = "LoginVerification"
LOGIN_MARKER = "ServiceLogin"
RECOVERY_CHALLENGE = "RecoveryEmailChallenge"


class GoogleSession:
    """
    Signs into a Google account and keeps the resulting cookies.

    Construction never touches the network. Call ``authenticate()`` to run the
    sign-in flow, then ``check_auth()`` to find out whether it worked; the flow
    itself has no success signal.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[HttpClient] = None,
        extractor: Optional[FormExtractor] = None,
        **overrides,
    ):
        """
        Initialize the session.

        Args:
            settings: Session settings. Built from ``overrides`` (plus
                environment and .env) when omitted.
            client: HTTP client to use. A new HttpClient is created if None.
            extractor: Form extractor to use. A FormExtractor if None.
            **overrides: Settings fields, e.g. ``email=...``, ``password=...``.
        """
        if settings is None:
            settings = Settings(**overrides)
        elif overrides:
            settings = Settings(**{**settings.model_dump(), **overrides})

        self._settings = settings
        self._cookie_jar = RequestsCookieJar()
        self._client = client if client is not None else HttpClient(settings)
        self._client.cookies = self._cookie_jar
        self._extractor = extractor if extractor is not None else FormExtractor()

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def client(self) -> HttpClient:
        return self._client

    @property
    def cookie_jar(self) -> RequestsCookieJar:
        """Cookie jar holding the session cookies."""
        return self._cookie_jar

    @cookie_jar.setter
    def cookie_jar(self, jar: RequestsCookieJar):
        self._cookie_jar = jar
        self._client.cookies = jar

    @property
    def user_agent(self) -> str:
        return self._settings.user_agent

    @property
    def language(self) -> str:
        return self._settings.language

    @property
    def max_sleep_interval(self) -> int:
        """Maximum sleep interval between requests (in s/100)."""
        return self._settings.max_sleep_interval

    def authenticate(self) -> "GoogleSession":
        """
        Authenticate on Google and collect the required cookies.

        Returns:
            The session itself, for chaining.

        Raises:
            requests.RequestException: On transport failure.
        """
        logger.info("Signing in")
        logger.debug(f"Account: {self._settings.email or '<no email>'}")

        # Seed generic google.com cookies
        self._client.get(NCR_URL)

        # Fetch the login page and replay its form
        response = self._client.get(AUTH_URL)
        params = self._extractor.extract_inputs(response.content)

        params["Email"] = self._settings.email
        params["Passwd"] = self._settings.password.get_secret_value()
        params["pstMsg"] = "1"
        params["continue"] = CONTINUE_URL

        response = self._client.post(AUTH_URL, params=params)
        effective_url = response.url or ""
        logger.debug(f"Login form submitted, landed on {effective_url}")

        if VERIFICATION_MARKER in effective_url:
            self._answer_recovery_challenge(response.content, effective_url)

        # Let Google finalize the session cookies
        self._client.get(CHECK_COOKIE_URL)

        self._set_locale_cookie()
        logger.info(f"Sign-in flow finished ({len(self._cookie_jar)} cookies)")

        return self

    def _answer_recovery_challenge(self, content: bytes, effective_url: str):
        """Submit the recovery email answer for a login verification page."""
        logger.info("Login verification requested, answering recovery email challenge")

        params = self._extractor.extract_inputs(content)
        params["challengetype"] = RECOVERY_CHALLENGE
        params["emailAnswer"] = self._settings.recovery_email

        if not self._settings.recovery_email:
            logger.warning("No recovery email configured, challenge will likely fail")

        url = effective_url.split("?", 1)[0]
        self._client.post(url, params=params)

    def _set_locale_cookie(self):
        """Set language for Trends."""
        cookie = create_cookie(
            LOCALE_COOKIE,
            self._settings.language,
            domain=LOCALE_DOMAIN,
            path=LOCALE_PATH,
            secure=True,
            rest={"HttpOnly": None},
        )
        self._cookie_jar.set_cookie(cookie)

    def check_auth(self) -> bool:
        """
        Check if the cookie jar is signed into a Google account.

        Google redirects anonymous visitors of the accounts root to a
        ServiceLogin page. This is a heuristic on the redirect target and
        breaks silently if Google changes it.

        Raises:
            requests.RequestException: On transport failure.
        """
        response = self._client.get(ACCOUNTS_URL)
        path = urlparse(response.url or "").path

        if LOGIN_MARKER in path:
            logger.info(f"Not signed in (redirected to {response.url})")
            return False

        logger.info("Signed in")
        return True

    def close(self):
        """Release the HTTP client's connections."""
        self._client.close()

    def __enter__(self) -> "GoogleSession":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

"""
Authentication module for trendsession.

Provides:
- Google sign-in flow with recovery email challenge
- Login form field scraping
"""

from trendsession.auth.forms import FormExtractor
from trendsession.auth.session import (
    GoogleSession,
    AUTH_URL,
    LOCALE_COOKIE,
)

__all__ = [
    # Session
    "GoogleSession",
    "AUTH_URL",
    "LOCALE_COOKIE",
    # Forms
    "FormExtractor",
]

"""HTTP layer."""

from trendsession.api.client import HttpClient

__all__ = ["HttpClient"]

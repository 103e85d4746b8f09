"""
Error types raised while converting Itau statements.

Parsers and the downloader raise these; nothing in the conversion core
catches them, so a failed conversion never produces a partial CSV.
"""
from typing import Optional


class ItauFetchError(Exception):
    """Base class for all itau_fetch errors."""


class MalformedPayload(ItauFetchError):
    """The credit card JSON does not have the expected structure or fields."""


class UnparseableDate(ItauFetchError):
    """A statement date could not be turned into a calendar date."""

    def __init__(self, message: str, text: Optional[str] = None):
        super().__init__(message)
        self.text = text


class RetrievalError(ItauFetchError):
    """The bank backend answered a statement request with a non-OK status."""

    def __init__(self, url: str, status: int, status_text: str = ""):
        super().__init__(f"GET {url} failed: {status} {status_text}".rstrip())
        self.url = url
        self.status = status
        self.status_text = status_text

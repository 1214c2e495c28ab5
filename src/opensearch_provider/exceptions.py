"""Provider exceptions."""

from __future__ import annotations


class ProviderError(Exception):
    """Base exception for OpenSearch provider errors."""


class ParseError(ProviderError):
    """Raised when a description document is not well-formed XML or has no known root."""


class DescriptionIOError(ProviderError):
    """Raised when a description document cannot be read from disk."""


class ConfigurationError(ProviderError):
    """Raised when the description lacks what an operation needs."""


class TemplateError(ProviderError):
    """Raised when a URL template cannot be expanded into a valid URL."""


class RequestError(ProviderError):
    """Raised when the search endpoint answers with an unusable response."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

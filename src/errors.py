"""Exceptions raised by the release catalog."""


class CatalogError(Exception):
    """Base class for all release catalog errors."""


class RetrievalError(CatalogError):
    """The releases file could not be fetched (network, HTTP or file error)."""

    def __init__(self, uri: str, message: str):
        self.uri = uri
        super().__init__(f"Failed to retrieve releases from {uri}: {message}")


# Same error under its retrieval-step name
FetchError = RetrievalError


class ParseError(CatalogError):
    """The releases payload is not a valid list of release records."""


class NotFoundError(CatalogError):
    """No release matched a fully resolved version query."""

"""Errors raised by the code intelligence backends."""


class CodeIntelError(Exception):
    """Base class for code intelligence errors."""


class MalformedUri(CodeIntelError, ValueError):
    """Raised when a location token does not have the git://repo?rev#path shape."""

    def __init__(self, uri: str) -> None:
        super().__init__(f"unexpected uri format: {uri}")
        self.uri = uri


class TransportFailure(CodeIntelError, RuntimeError):
    """Raised when the remote GraphQL call fails."""


class MalformedResponse(CodeIntelError, ValueError):
    """Raised when a GraphQL response is missing fields the query selected."""

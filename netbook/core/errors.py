"""Error types raised across netbook."""


class NetbookError(Exception):
    """Base class for all netbook errors."""


class CollectionError(NetbookError):
    """Collection file could not be used."""


class CollectionNotFound(CollectionError):
    """Collection file does not exist."""


class CollectionParseError(CollectionError):
    """Collection file exists but could not be parsed."""


class RequestNotFound(NetbookError):
    """No request with the given name exists in the collection."""

    def __init__(self, name: str):
        super().__init__(f"Request '{name}' not found")
        self.name = name


class TransportFailure(NetbookError):
    """HTTP exchange failed before a response was received.

    Covers connection errors, timeouts, TLS failures and redirect-limit
    overruns.
    """

    def __init__(self, message: str, details: str = ""):
        super().__init__(message)
        self.message = message
        self.details = details or message


class EditorFailure(NetbookError):
    """External editor could not be run or exited with an error."""


class EditDecodeFailure(NetbookError):
    """Editor output is not a valid request template."""


class PersistenceFailure(NetbookError):
    """History, variables or collection could not be read or written."""

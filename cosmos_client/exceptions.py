"""
Custom exceptions for the Cosmos DB REST client library.
"""


class CosmosClientError(Exception):
    """Base exception for Cosmos client errors."""
    pass


class ConfigurationError(CosmosClientError):
    """Raised when client configuration is invalid."""
    pass


class CredentialError(CosmosClientError):
    """Raised when the master key cannot be decoded or used for signing."""
    pass


class TransportError(CosmosClientError):
    """Raised when the service cannot be reached or the response cannot be read."""
    pass


class ResponseFormatError(CosmosClientError):
    """Raised when a response body is not a JSON object."""
    pass


class QueryStateError(CosmosClientError):
    """Raised when a container is fetched before a query was opened."""
    pass


class ServiceError(CosmosClientError):
    """
    Raised for a non-success status returned by the service.

    The low-level operations never raise this; it comes from
    ``raise_for_status()`` on a result.
    """

    def __init__(self, status: str, code: str = "", message: str = ""):
        self.status = status
        self.code = code
        self.message = message
        try:
            self.status_code = int(status.split(" ", 1)[0])
        except (ValueError, AttributeError):
            self.status_code = 0
        detail = " ".join(part for part in (code, message) if part)
        super().__init__(f"{status}: {detail}" if detail else status)

    @property
    def not_found(self) -> bool:
        return self.status_code == 404

    @property
    def conflict(self) -> bool:
        return self.status_code == 409

    @property
    def throttled(self) -> bool:
        return self.status_code == 429

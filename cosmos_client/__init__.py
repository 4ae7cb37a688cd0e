"""
Cosmos DB REST Client Library

A Python client library for the Cosmos DB SQL API that signs requests
with the account master key and pages through query results with
continuation tokens.

Example usage:
    from cosmos_client import CosmosClient, Credentials, Query

    client = CosmosClient(Credentials("https://acct.documents.azure.com:443/", key, "mydb"))
    container = client.container("dictionary")
    container.open_query(3, Query.build("SELECT * FROM c WHERE c.word = @w", w="Zwerg"))
    status, body = container.fetch()
"""

from .client import CosmosClient
from .config import Credentials
from .container import Container, PaginationState
from .exceptions import (
    CosmosClientError,
    ConfigurationError,
    CredentialError,
    TransportError,
    ServiceError,
    ResponseFormatError,
    QueryStateError
)
from .models import (
    Parameter,
    Query,
    ResponseEnvelope,
    OperationResult,
    QueryResult
)
from .signer import sign, http_date
from .constants import API_VERSION, NO_CONTENT_STATUS, DEFAULT_CONFIG

__version__ = "1.0.0"
__all__ = [
    "CosmosClient",
    "Credentials",
    "Container",
    "PaginationState",
    "CosmosClientError",
    "ConfigurationError",
    "CredentialError",
    "TransportError",
    "ServiceError",
    "ResponseFormatError",
    "QueryStateError",
    "Parameter",
    "Query",
    "ResponseEnvelope",
    "OperationResult",
    "QueryResult",
    "sign",
    "http_date",
    "API_VERSION",
    "NO_CONTENT_STATUS",
    "DEFAULT_CONFIG"
]

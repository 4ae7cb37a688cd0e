"""
Constants for the Cosmos DB REST client library.
Compatible with the Cosmos DB SQL API wire protocol.
"""

# HTTP Headers
HEADER_AUTHORIZATION = "authorization"
HEADER_DATE = "x-ms-date"
HEADER_VERSION = "x-ms-version"
HEADER_IS_QUERY = "x-ms-documentdb-isquery"
HEADER_ENABLE_CROSS_PARTITION = "x-ms-documentdb-query-enablecrosspartition"
HEADER_PARTITION_KEY = "x-ms-documentdb-partitionkey"
HEADER_MAX_ITEM_COUNT = "x-ms-max-item-count"
HEADER_CONTINUATION = "x-ms-continuation"
HEADER_IS_UPSERT = "x-ms-documentdb-is-upsert"

# Content types
CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_QUERY = "application/query+json"

# Master key authorization token
TOKEN_TYPE = "master"
TOKEN_VERSION = "1.0"
RESOURCE_TYPE_DOCS = "docs"

API_VERSION = "2020-11-05"

# Returned by Container.fetch() once the result set is exhausted
NO_CONTENT_STATUS = "204 No Content"

# Default configuration values
DEFAULT_CONFIG = {
    'api_version': API_VERSION,
    'timeout': 30,              # HTTP timeout in seconds, None disables
}

# Environment variables read by Credentials.from_env()
ENV_ENDPOINT = "ENDPOINT_URI"
ENV_MASTER_KEY = "MASTER_KEY"
ENV_DATABASE = "DATABASE"

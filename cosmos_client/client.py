"""
Cosmos DB REST client.

This module provides the document operations of the Cosmos DB SQL API
(query, read, create/upsert, delete) signed with a master key.
"""

import json
import logging
from typing import Any, Dict, Optional, Union

import requests

from .config import Credentials
from .container import Container
from .constants import (
    CONTENT_TYPE_JSON,
    CONTENT_TYPE_QUERY,
    DEFAULT_CONFIG,
    HEADER_AUTHORIZATION,
    HEADER_CONTINUATION,
    HEADER_DATE,
    HEADER_ENABLE_CROSS_PARTITION,
    HEADER_IS_QUERY,
    HEADER_IS_UPSERT,
    HEADER_MAX_ITEM_COUNT,
    HEADER_PARTITION_KEY,
    HEADER_VERSION,
    RESOURCE_TYPE_DOCS,
)
from .exceptions import ConfigurationError, TransportError
from .models import OperationResult, Query, QueryResult
from .signer import collection_link, decode_master_key, document_link, http_date, sign

logger = logging.getLogger(__name__)


class CosmosClient:
    """
    Client for the document operations of one Cosmos DB database.

    Operations take all per-call state as parameters and return the raw
    status line and body. A non-success status is returned, not raised;
    use ``raise_for_status()`` on the result to turn it into a ServiceError.
    """

    def __init__(self, credentials: Credentials, **config):
        """
        Initialize the client.

        Args:
            credentials: Endpoint, master key and database
            **config: Configuration options (api_version, timeout)

        Raises:
            ConfigurationError: If the configuration is invalid
            CredentialError: If the master key is not valid base64
        """
        self.credentials = credentials

        # Merge default config with user overrides
        self.config = {**DEFAULT_CONFIG, **config}

        self._validate_config()

        self.session = requests.Session()

    @classmethod
    def from_env(cls, env_file: Optional[str] = None, **config) -> "CosmosClient":
        """Create a client from ENDPOINT_URI, MASTER_KEY and DATABASE."""
        return cls(Credentials.from_env(env_file), **config)

    def _validate_config(self):
        """Validate client configuration."""
        if not isinstance(self.credentials, Credentials):
            raise ConfigurationError("credentials must be a Credentials instance")

        if not self.config['api_version']:
            raise ConfigurationError("api_version cannot be empty")

        timeout = self.config['timeout']
        if timeout is not None and (
                isinstance(timeout, bool) or not isinstance(timeout, (int, float))):
            raise ConfigurationError("timeout must be a number or None")
        if timeout is not None and timeout <= 0:
            raise ConfigurationError("timeout must be positive")

        # fail early instead of on the first request
        decode_master_key(self.credentials.master_key)

    def _base_headers(self, verb: str, resource_link: str) -> Dict[str, str]:
        """Authorization, date and version headers for one request."""
        date = http_date()
        return {
            'Accept': '*/*',
            HEADER_AUTHORIZATION: sign(verb, RESOURCE_TYPE_DOCS, resource_link,
                                       date, self.credentials.master_key),
            HEADER_VERSION: self.config['api_version'],
            HEADER_DATE: date,
        }

    @staticmethod
    def _partition_key_header(partition_key: str) -> str:
        return json.dumps([partition_key])

    @staticmethod
    def _prepare_request_body(document: Union[Dict[str, Any], list, str, bytes]) -> bytes:
        """Serialize a document payload, passing str/bytes through unchanged."""
        if isinstance(document, bytes):
            return document
        if isinstance(document, str):
            return document.encode('utf-8')
        return json.dumps(document, separators=(',', ':')).encode('utf-8')

    def _make_request(self, method: str, resource_path: str, headers: Dict[str, str],
                      body: Optional[bytes] = None) -> requests.Response:
        """
        Send a signed request and read the whole response.

        Raises:
            TransportError: If the request fails or the body cannot be read
        """
        url = self.credentials.endpoint + resource_path
        logger.debug("%s %s", method, url)

        try:
            response = self.session.request(
                method, url,
                headers=headers,
                data=body,
                timeout=self.config['timeout'],
            )
            # read the body here so read failures surface as TransportError
            response.content
        except requests.RequestException as e:
            raise TransportError(f"HTTP request failed: {e}")

        logger.debug("%s %s -> %s", method, url, response.status_code)
        return response

    @staticmethod
    def _status_line(response: requests.Response) -> str:
        return f"{response.status_code} {response.reason or ''}".strip()

    def execute_query(self, container: str, query: Union[Query, Dict[str, Any], str],
                      partition_key: str = "", max_item_count: int = 0,
                      continuation: str = "") -> QueryResult:
        """
        Execute a SQL query against a container.

        Args:
            container: Container (collection) name
            query: Query, its dict form, or bare query text
            partition_key: Restrict to one partition, else cross-partition
            max_item_count: Page size, 0 for the service default
            continuation: Token returned by the previous page

        Returns:
            QueryResult of (status, body, continuation). The continuation is
            returned whatever the status.

        Raises:
            TransportError: If the service cannot be reached
            CredentialError: If the master key cannot be used for signing
        """
        link = collection_link(self.credentials.database, container)
        headers = self._base_headers('POST', link)
        headers[HEADER_IS_QUERY] = 'True'
        headers['Content-Type'] = CONTENT_TYPE_QUERY

        if partition_key:
            headers[HEADER_PARTITION_KEY] = self._partition_key_header(partition_key)
        else:
            headers[HEADER_ENABLE_CROSS_PARTITION] = 'True'

        if max_item_count > 0:
            headers[HEADER_MAX_ITEM_COUNT] = str(max_item_count)

        if continuation:
            headers[HEADER_CONTINUATION] = continuation

        body = Query.coerce(query).to_json().encode('utf-8')
        response = self._make_request('POST', link + '/docs', headers, body)

        return QueryResult(
            self._status_line(response),
            response.text,
            response.headers.get(HEADER_CONTINUATION, ''),
        )

    def get_document(self, container: str, document_id: str,
                     partition_key: str = "") -> OperationResult:
        """Read a document by id."""
        link = document_link(self.credentials.database, container, document_id)
        headers = self._base_headers('GET', link)
        headers['Content-Type'] = CONTENT_TYPE_JSON
        if partition_key:
            headers[HEADER_PARTITION_KEY] = self._partition_key_header(partition_key)

        response = self._make_request('GET', link, headers)
        return OperationResult(self._status_line(response), response.text)

    def create_document(self, container: str, document: Union[Dict[str, Any], str, bytes],
                        partition_key: str = "", upsert: bool = False) -> OperationResult:
        """
        Create a document, or create-or-replace it when ``upsert`` is set.

        Without upsert an existing id is answered with 409 Conflict. The
        partition key is required when the container is partitioned.
        """
        link = collection_link(self.credentials.database, container)
        headers = self._base_headers('POST', link)
        headers['Content-Type'] = CONTENT_TYPE_JSON
        if upsert:
            headers[HEADER_IS_UPSERT] = 'True'
        if partition_key:
            headers[HEADER_PARTITION_KEY] = self._partition_key_header(partition_key)

        body = self._prepare_request_body(document)
        response = self._make_request('POST', link + '/docs', headers, body)
        return OperationResult(self._status_line(response), response.text)

    def delete_document(self, container: str, document_id: str,
                        partition_key: str = "") -> OperationResult:
        """Delete a document by id. The body is empty on success."""
        link = document_link(self.credentials.database, container, document_id)
        headers = self._base_headers('DELETE', link)
        headers['Content-Type'] = CONTENT_TYPE_JSON
        if partition_key:
            headers[HEADER_PARTITION_KEY] = self._partition_key_header(partition_key)

        response = self._make_request('DELETE', link, headers)
        return OperationResult(self._status_line(response), response.text)

    def container(self, name: str, partition_key: str = "") -> Container:
        """Return a Container bound to this client."""
        return Container(self, name, partition_key)

    def close(self):
        """Close HTTP session."""
        if self.session:
            self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

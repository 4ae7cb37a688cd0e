"""
Paginated access to one container.

A Container keeps the open query and its continuation state between
``fetch()`` calls. One instance serves one pagination sequence at a time
and must not be shared between threads.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional, Union

from .constants import NO_CONTENT_STATUS
from .exceptions import QueryStateError
from .models import OperationResult, Query, QueryResult

logger = logging.getLogger(__name__)


@dataclass
class PaginationState:
    """Continuation state of the open query."""

    continuation: str = ""
    steps: int = 0
    status: str = ""
    body: str = ""

    def reset(self):
        self.continuation = ""
        self.steps = 0
        self.status = ""
        self.body = ""

    @property
    def exhausted(self) -> bool:
        return self.steps > 0 and not self.continuation


class Container:
    """
    A container of one database, bound to a client and partition key.

    Example:
        container = client.container("dictionary")
        container.open_query(3, Query.build("SELECT * FROM c WHERE c.word = @w", w="Zwerg"))
        for page in container.pages():
            page.raise_for_status()
            print(page.envelope().documents)
    """

    def __init__(self, client, name: str, partition_key: str = ""):
        self.client = client
        self.name = name
        self.partition_key = partition_key
        self.query: Optional[Query] = None
        self.max_item_count = 0
        self.state = PaginationState()

    def __repr__(self):
        return f"{self.__class__.__name__}({self.name!r}, steps={self.state.steps})"

    @property
    def continuation(self) -> str:
        return self.state.continuation

    @property
    def exhausted(self) -> bool:
        """True once a page came back without a continuation token."""
        return self.state.exhausted

    def open_query(self, max_item_count: int, query: Union[Query, Dict[str, Any], str]):
        """Set the query for fetch mode and reset the pagination state."""
        self.query = Query.coerce(query)
        self.max_item_count = max_item_count
        self.state.reset()

    def fetch(self) -> OperationResult:
        """
        Fetch the next page of the open query.

        The first call always hits the service. Later calls only do so
        while a continuation token is held; after that they return
        ("204 No Content", "") and leave the stored state untouched. The
        status of the last page does not matter, only the token does.

        Raises:
            QueryStateError: If no query was opened
            TransportError: If the service cannot be reached
        """
        if self.query is None:
            raise QueryStateError("fetch() called before open_query()")

        state = self.state
        if state.exhausted:
            return OperationResult(NO_CONTENT_STATUS, "")

        logger.debug("fetching page %d of %s", state.steps + 1, self.name)
        result = self.client.execute_query(
            self.name, self.query,
            partition_key=self.partition_key,
            max_item_count=self.max_item_count,
            continuation=state.continuation,
        )
        state.steps += 1
        state.status, state.body, state.continuation = result
        return OperationResult(state.status, state.body)

    def pages(self) -> Iterator[OperationResult]:
        """Yield pages of the open query until no continuation token is left."""
        while not self.exhausted:
            yield self.fetch()

    def execute_query(self, query: Union[Query, Dict[str, Any], str],
                      max_item_count: int = 0, continuation: str = "") -> QueryResult:
        """Run a single query page without touching the pagination state."""
        return self.client.execute_query(
            self.name, query,
            partition_key=self.partition_key,
            max_item_count=max_item_count,
            continuation=continuation,
        )

    def get_document(self, document_id: str) -> OperationResult:
        return self.client.get_document(self.name, document_id, self.partition_key)

    def create_document(self, document, upsert: bool = False) -> OperationResult:
        return self.client.create_document(self.name, document, self.partition_key, upsert)

    def delete_document(self, document_id: str) -> OperationResult:
        return self.client.delete_document(self.name, document_id, self.partition_key)

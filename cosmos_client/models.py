"""
Request and response types for the Cosmos DB REST client.

Documents are opaque: they are decoded JSON values and are never mapped
onto a schema by this library.
"""

import json
from collections import namedtuple
from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

from .exceptions import ResponseFormatError, ServiceError


@dataclass(frozen=True)
class Parameter:
    """Named query placeholder, e.g. ``Parameter("@word", "Zwerg")``."""

    name: str
    value: Any

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value}


@dataclass(frozen=True)
class Query:
    """
    SQL query text with ordered named parameters.

    Example:
        Query("SELECT * FROM c WHERE c.word = @w", [Parameter("@w", "Zwerg")])
    """

    query: str
    parameters: List[Parameter] = field(default_factory=list)

    @classmethod
    def build(cls, query: str, **params) -> "Query":
        """Build a query from keyword parameters, adding the ``@`` prefix."""
        return cls(query, [
            Parameter(name if name.startswith('@') else f"@{name}", value)
            for name, value in params.items()
        ])

    @classmethod
    def coerce(cls, query: Union["Query", Dict[str, Any], str]) -> "Query":
        """Accept a Query, its dict form, or bare query text."""
        if isinstance(query, cls):
            return query
        if isinstance(query, str):
            return cls(query)
        if isinstance(query, dict):
            return cls(query.get("query", ""), [
                Parameter(p["name"], p["value"])
                for p in query.get("parameters", [])
            ])
        raise TypeError(f"unsupported query type: {type(query).__name__}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "query": self.query,
            "parameters": [p.to_dict() for p in self.parameters],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(',', ':'))


@dataclass
class ResponseEnvelope:
    """Parsed response body: documents on success, code/message on failure."""

    code: str = ""
    message: str = ""
    rid: str = ""
    documents: List[Any] = field(default_factory=list)
    count: int = 0

    @classmethod
    def parse(cls, body: Union[str, bytes]) -> "ResponseEnvelope":
        """
        Parse a response body.

        Raises:
            ResponseFormatError: If the body is not a JSON object
        """
        if not body:
            return cls()
        try:
            data = json.loads(body)
        except ValueError as e:
            raise ResponseFormatError(f"response body is not JSON: {e}")
        if not isinstance(data, dict):
            raise ResponseFormatError("response body is not a JSON object")

        return cls(
            code=data.get("code", "") or "",
            message=data.get("message", "") or "",
            rid=data.get("_rid", "") or "",
            documents=list(data.get("Documents") or []),
            count=int(data.get("_count", 0) or 0),
        )

    @property
    def is_error(self) -> bool:
        return bool(self.code)


class _StatusMixin:
    __slots__ = ()

    @property
    def status_code(self) -> int:
        """Numeric part of the status line, 0 if there is none."""
        try:
            return int(self.status.split(" ", 1)[0])
        except (ValueError, AttributeError):
            return 0

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def envelope(self) -> ResponseEnvelope:
        return ResponseEnvelope.parse(self.body)

    def json(self) -> Any:
        """Decode the body as JSON, None for an empty body."""
        if not self.body:
            return None
        try:
            return json.loads(self.body)
        except ValueError as e:
            raise ResponseFormatError(f"response body is not JSON: {e}")

    def raise_for_status(self):
        """Raise ServiceError if the status is not 2xx."""
        if self.ok:
            return
        code, message = "", ""
        try:
            envelope = self.envelope()
            code, message = envelope.code, envelope.message
        except ResponseFormatError:
            message = self.body
        raise ServiceError(self.status, code, message)


class OperationResult(_StatusMixin, namedtuple('OperationResult', ['status', 'body'])):
    """Status line and raw body of a request, e.g. ("201 Created", "{...}")."""
    __slots__ = ()


class QueryResult(_StatusMixin, namedtuple('QueryResult', ['status', 'body', 'continuation'])):
    """Status line, raw body and continuation token of a query page."""
    __slots__ = ()

    def documents(self) -> List[Any]:
        return self.envelope().documents

    @property
    def has_more(self) -> bool:
        return bool(self.continuation)

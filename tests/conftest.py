"""
Shared fixtures: an in-memory stand-in for the Cosmos DB REST endpoint.
"""

import base64
import json
import re
from types import SimpleNamespace
from unittest.mock import patch
from urllib.parse import urlsplit

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from cosmos_client import CosmosClient, Credentials
from cosmos_client.signer import sign

ENDPOINT = "https://test-account.documents.azure.com:443/"
DATABASE = "lerneria-express"
MASTER_KEY = base64.b64encode(b"test-master-key-0123456789").decode('ascii')

REASONS = {
    200: "OK",
    201: "Created",
    204: "No Content",
    401: "Unauthorized",
    404: "Not Found",
    409: "Conflict",
}


def make_response(status_code, body=b"", headers=None):
    """Build a real requests.Response."""
    response = requests.Response()
    response.status_code = status_code
    response.reason = REASONS.get(status_code, "")
    response.headers = CaseInsensitiveDict(headers or {})
    if isinstance(body, (dict, list)):
        body = json.dumps(body).encode('utf-8')
    response._content = body
    response.encoding = 'utf-8'
    return response


def error_response(status_code, code, message):
    return make_response(status_code, {"code": code, "message": message})


class FakeCosmos:
    """
    Answers signed requests for one database the way the service does.

    Queries support ``c.<field> = @param`` filters joined by AND and page
    with ``x-ms-max-item-count`` / ``x-ms-continuation``.
    """

    DEFAULT_PAGE_SIZE = 100

    def __init__(self, master_key=MASTER_KEY):
        self.master_key = master_key
        self.containers = {}
        self.calls = []

    def add(self, container, *documents):
        docs = self.containers.setdefault(container.lower(), {})
        for doc in documents:
            docs[doc["id"]] = dict(doc)

    @property
    def query_calls(self):
        return [c for c in self.calls if c.headers.get("x-ms-documentdb-isquery")]

    def __call__(self, method, url, headers=None, data=None, timeout=None):
        headers = headers or {}
        self.calls.append(SimpleNamespace(method=method, url=url, headers=headers, body=data))

        path = urlsplit(url).path.lstrip('/')
        match = re.match(r"^dbs/([^/]+)/colls/([^/]+)/docs(?:/(.+))?$", path)
        if not match:
            return error_response(404, "NotFound", "unknown resource")
        _, container, doc_id = match.groups()

        link = path if doc_id else path[:-len("/docs")]
        expected = sign(method, "docs", link, headers.get("x-ms-date", ""), self.master_key)
        if headers.get("authorization") != expected:
            return error_response(401, "Unauthorized", "signature mismatch")

        docs = self.containers.setdefault(container, {})
        if method == "POST" and headers.get("x-ms-documentdb-isquery"):
            return self._query(docs, headers, data)
        if method == "POST":
            return self._create(docs, headers, data)
        if method == "GET":
            if doc_id not in docs:
                return error_response(404, "NotFound", "Entity with the specified id does not exist")
            return make_response(200, docs[doc_id])
        if method == "DELETE":
            if doc_id not in docs:
                return error_response(404, "NotFound", "Entity with the specified id does not exist")
            del docs[doc_id]
            return make_response(204)
        return error_response(405, "MethodNotAllowed", method)

    def _query(self, docs, headers, data):
        payload = json.loads(data)
        params = {p["name"]: p["value"] for p in payload["parameters"]}
        filters = re.findall(r"c\.(\w+)\s*=\s*(@\w+)", payload["query"])
        matched = [
            doc for doc in docs.values()
            if all(doc.get(field) == params.get(name) for field, name in filters)
        ]

        size = int(headers.get("x-ms-max-item-count", self.DEFAULT_PAGE_SIZE))
        offset = 0
        token = headers.get("x-ms-continuation")
        if token:
            offset = int(json.loads(token)["offset"])
        page = matched[offset:offset + size]

        response_headers = {}
        if offset + size < len(matched):
            response_headers["x-ms-continuation"] = json.dumps({"offset": offset + size})
        body = {"_rid": "rid==", "Documents": page, "_count": len(page)}
        return make_response(200, body, response_headers)

    def _create(self, docs, headers, data):
        doc = json.loads(data)
        exists = doc["id"] in docs
        upsert = headers.get("x-ms-documentdb-is-upsert") == "True"
        if exists and not upsert:
            return error_response(409, "Conflict",
                                  "Entity with the specified id already exists in the system.")
        docs[doc["id"]] = doc
        return make_response(200 if exists else 201, doc)


@pytest.fixture
def credentials():
    return Credentials(ENDPOINT, MASTER_KEY, DATABASE)


@pytest.fixture
def client(credentials):
    with CosmosClient(credentials) as client:
        yield client


@pytest.fixture
def fake_service():
    """Route every session request of the client to a FakeCosmos."""
    service = FakeCosmos()
    with patch('cosmos_client.client.requests.Session.request', side_effect=service):
        yield service

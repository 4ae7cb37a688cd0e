#!/usr/bin/env python3
"""
Basic usage examples for the Cosmos DB REST client library.

This script demonstrates paged queries and document operations against a
live account. Credentials are read from ENDPOINT_URI, MASTER_KEY and
DATABASE, or from a .env file in the working directory.
"""

import logging
import sys
import uuid

from cosmos_client import CosmosClient, CosmosClientError, Query

CONTAINER = "dictionary"


def main():
    """Run basic usage examples."""

    print("=== Cosmos DB REST Client Basic Usage Examples ===\n")

    print("1. Creating client from environment...")
    client = CosmosClient.from_env()
    print(f"   Endpoint: {client.credentials.endpoint}")
    print(f"   Database: {client.credentials.database}\n")

    try:
        # Example 1: single query pages, driven by hand
        print("2. Paging a query with execute_query()...")
        query = Query.build(
            "SELECT * FROM c WHERE c.word = @word1 OR c.word = @word2",
            word1="Zwerg",
            word2="Nase",
        )
        continuation = ""
        step = 0
        while continuation or step == 0:
            step += 1
            result = client.execute_query(CONTAINER, query, max_item_count=3,
                                          continuation=continuation)
            print(f"   Step {step}: {result.status}")
            if not result.ok:
                print(f"   ✗ {result.envelope().message}")
                break
            for doc in result.documents():
                print(f"     {doc.get('id')}: {doc.get('word')}")
            # the response token becomes the next request token
            continuation = result.continuation
        print()

        # Example 2: the same query through a Container
        print("3. Paging a query with Container.fetch()...")
        container = client.container(CONTAINER)
        container.open_query(3, query)
        for page in container.pages():
            print(f"   Status: {page.status}")
            if not page.ok:
                break
            envelope = page.envelope()
            print(f"   Count: {envelope.count}, continuation: {container.continuation!r}")
        print()

        # Example 3: document lifecycle
        print("4. Creating, upserting and deleting a document...")
        doc_id = str(uuid.uuid4())
        doc = {"id": doc_id, "word": "Beispiel", "snippet": "created by example_usage.py"}

        result = client.create_document(CONTAINER, doc, partition_key=doc_id)
        print(f"   Create: {result.status}")

        result = client.create_document(CONTAINER, doc, partition_key=doc_id)
        print(f"   Create again: {result.status}")

        doc["snippet"] = "replaced"
        result = client.create_document(CONTAINER, doc, partition_key=doc_id, upsert=True)
        print(f"   Upsert: {result.status}")

        result = client.get_document(CONTAINER, doc_id, partition_key=doc_id)
        print(f"   Read: {result.status} -> {result.json()}")

        result = client.delete_document(CONTAINER, doc_id, partition_key=doc_id)
        print(f"   Delete: {result.status}")

        result = client.get_document(CONTAINER, doc_id, partition_key=doc_id)
        print(f"   Read after delete: {result.status}")
        print()

        print("=== All Examples Completed Successfully! ===")

    except CosmosClientError as e:
        print(f"Cosmos Client Error: {e}")
        sys.exit(1)
    finally:
        client.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    try:
        main()
    except CosmosClientError as e:
        print(f"Could not create client: {e}")
        sys.exit(1)

import logging
from typing import Any

from opensearchpy import OpenSearch
from opensearchpy.exceptions import NotFoundError as OSNotFoundError

logger = logging.getLogger(__name__)

PESSOA_MAPPINGS: dict[str, Any] = {
    "properties": {
        "id": {"type": "long"},
        "name": {"type": "text", "fields": {"keyword": {"type": "keyword", "ignore_above": 256}}},
        "email": {"type": "keyword"},
        "phone": {"type": "keyword"},
        "document": {"type": "keyword"},
        "birth_date": {"type": "date"},
        "deletion_timestamp": {"type": "date"},
    }
}


def index_document(client: OpenSearch, index: str, doc_id: str, body: dict[str, Any]) -> dict[str, Any]:
    return client.index(index=index, id=doc_id, body=body, refresh=True)


def get_document(client: OpenSearch, index: str, doc_id: str) -> dict[str, Any] | None:
    try:
        response = client.get(index=index, id=doc_id)
        return response["_source"]
    except OSNotFoundError:
        return None


def document_exists(client: OpenSearch, index: str, doc_id: str) -> bool:
    return bool(client.exists(index=index, id=doc_id))


def search(
    client: OpenSearch,
    index: str,
    body: dict[str, Any],
    size: int = 50,
    offset: int = 0,
) -> dict[str, Any]:
    return client.search(index=index, body=body, size=size, from_=offset)


def extract_hits(response: dict[str, Any]) -> list[dict[str, Any]]:
    return [hit["_source"] for hit in response["hits"]["hits"]]


def extract_total(response: dict[str, Any]) -> int:
    total = response["hits"]["total"]
    if isinstance(total, dict):
        return int(total["value"])
    return int(total)


def next_sequence_value(client: OpenSearch, sequence_index: str, name: str) -> int:
    """Atomically increment and return the named counter, starting at 1."""
    response = client.update(
        index=sequence_index,
        id=name,
        body={
            "script": {"source": "ctx._source.value += 1", "lang": "painless"},
            "upsert": {"value": 1},
        },
        refresh=True,
        retry_on_conflict=5,
        _source=True,
    )
    value = int(response["get"]["_source"]["value"])
    logger.debug("Allocated %s sequence value %d", name, value)
    return value


def ensure_index(client: OpenSearch, index: str, sequence_index: str, *, recreate: bool = False) -> None:
    """Create the data and sequence indices if they are missing."""
    if recreate and client.indices.exists(index=index):
        logger.info("Deleting index %s", index)
        client.indices.delete(index=index)

    if not client.indices.exists(index=index):
        logger.info("Creating index %s", index)
        client.indices.create(index=index, body={"mappings": PESSOA_MAPPINGS})

    if not client.indices.exists(index=sequence_index):
        logger.info("Creating sequence index %s", sequence_index)
        client.indices.create(
            index=sequence_index,
            body={"mappings": {"properties": {"value": {"type": "long"}}}},
        )

import logging
from typing import Any

from opensearchpy import OpenSearch

from pessoa_api.models import (
    ENTITY_NAME,
    SORTABLE_FIELDS,
    Page,
    PageRequest,
    PessoaDTO,
    PessoaPatch,
    merge_patch,
)
from pessoa_api.services.os_client import (
    document_exists,
    extract_hits,
    extract_total,
    get_document,
    index_document,
    next_sequence_value,
    search,
)

logger = logging.getLogger(__name__)

NOT_EXCLUDED_QUERY: dict[str, Any] = {
    "bool": {"must_not": [{"exists": {"field": "deletion_timestamp"}}]},
}


def _build_sort(page_request: PageRequest) -> list[dict[str, Any]]:
    if not page_request.sort:
        return [{"id": {"order": "asc"}}]
    return [
        {SORTABLE_FIELDS[order.property]: {"order": order.direction.value, "missing": "_last"}}
        for order in page_request.sort
    ]


class OpenSearchPessoaService:
    """Person persistence backed by one OpenSearch document per person."""

    def __init__(self, client: OpenSearch, index: str, sequence_index: str) -> None:
        self.client = client
        self.index = index
        self.sequence_index = sequence_index

    def save(self, dto: PessoaDTO) -> PessoaDTO:
        if dto.id is None:
            dto = dto.model_copy(update={"id": next_sequence_value(self.client, self.sequence_index, ENTITY_NAME)})
        logger.debug("Request to save Pessoa : %s", dto)
        index_document(self.client, self.index, str(dto.id), dto.model_dump(mode="json"))
        return dto

    def partial_update(self, patch: PessoaPatch) -> PessoaDTO | None:
        logger.debug("Request to partially update Pessoa : %s", patch)
        existing = self.find_one(patch.id)
        if existing is None:
            return None
        return self.save(merge_patch(existing, patch))

    def find_one(self, pessoa_id: int) -> PessoaDTO | None:
        logger.debug("Request to get Pessoa : %s", pessoa_id)
        source = get_document(self.client, self.index, str(pessoa_id))
        if source is None:
            return None
        return PessoaDTO.model_validate({**source, "id": pessoa_id})

    def find_all_not_excluded(self, page_request: PageRequest) -> Page:
        logger.debug("Request to get all Pessoas not excluded")
        body: dict[str, Any] = {
            "query": NOT_EXCLUDED_QUERY,
            "sort": _build_sort(page_request),
            "track_total_hits": True,
        }
        response = search(self.client, self.index, body, size=page_request.size, offset=page_request.offset)
        return Page(
            content=[PessoaDTO.model_validate(hit) for hit in extract_hits(response)],
            total=extract_total(response),
            page=page_request.page,
            size=page_request.size,
        )


class OpenSearchPessoaRepository:
    def __init__(self, client: OpenSearch, index: str) -> None:
        self.client = client
        self.index = index

    def exists_by_id(self, pessoa_id: int) -> bool:
        return document_exists(self.client, self.index, str(pessoa_id))

"""
In-memory person storage.

Implements both the service and repository operations over a plain dict so the
API can run without an OpenSearch cluster (local development, tests).
"""

import itertools
import logging

from pessoa_api.models import Page, PageRequest, PessoaDTO, PessoaPatch, SortDirection, merge_patch

logger = logging.getLogger(__name__)


class InMemoryPessoaStore:
    def __init__(self) -> None:
        self._records: dict[int, PessoaDTO] = {}
        self._ids = itertools.count(1)

    def save(self, dto: PessoaDTO) -> PessoaDTO:
        if dto.id is None:
            dto = dto.model_copy(update={"id": next(self._ids)})
        logger.debug("Request to save Pessoa : %s", dto)
        self._records[dto.id] = dto
        return dto

    def partial_update(self, patch: PessoaPatch) -> PessoaDTO | None:
        logger.debug("Request to partially update Pessoa : %s", patch)
        existing = self._records.get(patch.id)
        if existing is None:
            return None
        return self.save(merge_patch(existing, patch))

    def find_one(self, pessoa_id: int) -> PessoaDTO | None:
        return self._records.get(pessoa_id)

    def find_all_not_excluded(self, page_request: PageRequest) -> Page:
        active = [dto for dto in self._records.values() if dto.deletion_timestamp is None]
        active.sort(key=lambda dto: dto.id)
        # Stable sorts applied from the least to the most significant order.
        for order in reversed(page_request.sort):
            present = [dto for dto in active if getattr(dto, order.property) is not None]
            missing = [dto for dto in active if getattr(dto, order.property) is None]
            present.sort(
                key=lambda dto: getattr(dto, order.property),
                reverse=order.direction == SortDirection.DESC,
            )
            active = present + missing
        start = page_request.offset
        return Page(
            content=active[start:start + page_request.size],
            total=len(active),
            page=page_request.page,
            size=page_request.size,
        )

    def exists_by_id(self, pessoa_id: int) -> bool:
        return pessoa_id in self._records

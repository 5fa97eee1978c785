from typing import Protocol

from pessoa_api.config import Config, index_name, opensearch_client, sequence_index_name
from pessoa_api.models import Page, PageRequest, PessoaDTO, PessoaPatch
from pessoa_api.services.memory import InMemoryPessoaStore
from pessoa_api.services.pessoas import OpenSearchPessoaRepository, OpenSearchPessoaService


class PessoaService(Protocol):
    def save(self, dto: PessoaDTO) -> PessoaDTO: ...

    def partial_update(self, patch: PessoaPatch) -> PessoaDTO | None: ...

    def find_one(self, pessoa_id: int) -> PessoaDTO | None: ...

    def find_all_not_excluded(self, page_request: PageRequest) -> Page: ...


class PessoaRepository(Protocol):
    def exists_by_id(self, pessoa_id: int) -> bool: ...


memory_store = InMemoryPessoaStore()


def get_pessoa_service() -> PessoaService:
    if Config.STORAGE_BACKEND == "memory":
        return memory_store
    return OpenSearchPessoaService(opensearch_client, index_name, sequence_index_name)


def get_pessoa_repository() -> PessoaRepository:
    if Config.STORAGE_BACKEND == "memory":
        return memory_store
    return OpenSearchPessoaRepository(opensearch_client, index_name)

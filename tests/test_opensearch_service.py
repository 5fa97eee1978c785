from datetime import date
from unittest.mock import MagicMock

from opensearchpy.exceptions import NotFoundError as OSNotFoundError

from pessoa_api.models import PageRequest, PessoaDTO, PessoaPatch, SortDirection, SortOrder
from pessoa_api.services.os_client import ensure_index
from pessoa_api.services.pessoas import OpenSearchPessoaRepository, OpenSearchPessoaService

INDEX = "pessoa"
SEQUENCE_INDEX = "pessoa_sequence"


def _service(client):
    return OpenSearchPessoaService(client, INDEX, SEQUENCE_INDEX)


def _search_response(sources, total):
    return {
        "hits": {
            "total": {"value": total, "relation": "eq"},
            "hits": [{"_id": str(s["id"]), "_source": s} for s in sources],
        }
    }


def test_save_new_pessoa_allocates_id_from_sequence():
    client = MagicMock()
    client.update.return_value = {"get": {"_source": {"value": 12}}}

    result = _service(client).save(PessoaDTO(name="Ana", birth_date=date(1985, 1, 2)))

    assert result.id == 12
    seq_kwargs = client.update.call_args.kwargs
    assert seq_kwargs["index"] == SEQUENCE_INDEX
    assert seq_kwargs["id"] == "pessoa"
    assert seq_kwargs["body"]["upsert"] == {"value": 1}
    client.index.assert_called_once()
    index_kwargs = client.index.call_args.kwargs
    assert index_kwargs["index"] == INDEX
    assert index_kwargs["id"] == "12"
    assert index_kwargs["body"]["birth_date"] == "1985-01-02"
    assert index_kwargs["body"]["deletion_timestamp"] is None


def test_save_existing_pessoa_keeps_id():
    client = MagicMock()

    result = _service(client).save(PessoaDTO(id=3, name="Ana"))

    assert result.id == 3
    client.update.assert_not_called()
    assert client.index.call_args.kwargs["id"] == "3"


def test_find_one_missing_returns_none():
    client = MagicMock()
    client.get.side_effect = OSNotFoundError(404, "not_found", {})

    assert _service(client).find_one(9) is None


def test_find_one_returns_dto():
    client = MagicMock()
    client.get.return_value = {"_source": {"id": 4, "name": "Ana", "deletion_timestamp": None}}

    result = _service(client).find_one(4)

    assert result == PessoaDTO(id=4, name="Ana")
    client.get.assert_called_once_with(index=INDEX, id="4")


def test_partial_update_merges_non_null_fields():
    client = MagicMock()
    client.get.return_value = {"_source": {"id": 4, "name": "Ana", "email": "ana@example.com", "phone": "1"}}

    result = _service(client).partial_update(PessoaPatch(id=4, phone="2"))

    assert result.name == "Ana"
    assert result.email == "ana@example.com"
    assert result.phone == "2"
    assert client.index.call_args.kwargs["body"]["phone"] == "2"


def test_partial_update_missing_returns_none():
    client = MagicMock()
    client.get.side_effect = OSNotFoundError(404, "not_found", {})

    assert _service(client).partial_update(PessoaPatch(id=4, phone="2")) is None
    client.index.assert_not_called()


def test_find_all_not_excluded_filters_deleted_and_paginates():
    client = MagicMock()
    client.search.return_value = _search_response([{"id": 5, "name": "Bia"}], total=7)
    page_request = PageRequest(
        page=2,
        size=3,
        sort=[SortOrder(property="name", direction=SortDirection.DESC)],
    )

    page = _service(client).find_all_not_excluded(page_request)

    assert page.total == 7
    assert page.total_pages == 3
    assert [p.id for p in page.content] == [5]
    kwargs = client.search.call_args.kwargs
    assert kwargs["size"] == 3
    assert kwargs["from_"] == 6
    body = kwargs["body"]
    assert body["query"] == {"bool": {"must_not": [{"exists": {"field": "deletion_timestamp"}}]}}
    assert body["sort"] == [{"name.keyword": {"order": "desc", "missing": "_last"}}]
    assert body["track_total_hits"] is True


def test_find_all_not_excluded_sorts_by_id_by_default():
    client = MagicMock()
    client.search.return_value = _search_response([], total=0)

    _service(client).find_all_not_excluded(PageRequest())

    assert client.search.call_args.kwargs["body"]["sort"] == [{"id": {"order": "asc"}}]


def test_repository_exists_by_id():
    client = MagicMock()
    client.exists.return_value = True

    assert OpenSearchPessoaRepository(client, INDEX).exists_by_id(8) is True
    client.exists.assert_called_once_with(index=INDEX, id="8")


def test_ensure_index_creates_missing_indices():
    client = MagicMock()
    client.indices.exists.return_value = False

    ensure_index(client, INDEX, SEQUENCE_INDEX)

    created = [call.kwargs["index"] for call in client.indices.create.call_args_list]
    assert created == [INDEX, SEQUENCE_INDEX]
    client.indices.delete.assert_not_called()


def test_ensure_index_recreate_drops_data_index():
    client = MagicMock()
    client.indices.exists.side_effect = [True, False, True]

    ensure_index(client, INDEX, SEQUENCE_INDEX, recreate=True)

    client.indices.delete.assert_called_once_with(index=INDEX)
    assert [call.kwargs["index"] for call in client.indices.create.call_args_list] == [INDEX]

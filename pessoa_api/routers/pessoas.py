import logging
from datetime import UTC, datetime
from typing import Annotated, Any, TypeVar

from fastapi import APIRouter, Body, Depends, Request, Response, status
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from pessoa_api import header_util
from pessoa_api.dependencies import PessoaRepository, PessoaService, get_pessoa_repository, get_pessoa_service
from pessoa_api.exceptions import BadRequestAlertError, NotFoundError
from pessoa_api.models import ENTITY_NAME, PageRequest, PessoaDTO, PessoaPatch
from pessoa_api.pagination import generate_pagination_headers, get_page_request

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pessoas", tags=["pessoas"])

ServiceDep = Annotated[PessoaService, Depends(get_pessoa_service)]
RepositoryDep = Annotated[PessoaRepository, Depends(get_pessoa_repository)]
JsonBody = Annotated[dict[str, Any], Body()]

M = TypeVar("M", bound=BaseModel)


def _validate(model: type[M], payload: dict[str, Any]) -> M:
    """Validate a raw body after the identifier checks have run."""
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        errors = [{**error, "loc": ("body", *error["loc"])} for error in exc.errors(include_url=False)]
        raise RequestValidationError(errors) from exc


def _create(request: Request, response: Response, payload: dict[str, Any], service: PessoaService) -> PessoaDTO:
    if payload.get("id") is not None:
        raise BadRequestAlertError("A new pessoa cannot already have an ID", ENTITY_NAME, "idexists")
    result = service.save(_validate(PessoaDTO, payload))
    response.status_code = status.HTTP_201_CREATED
    response.headers["Location"] = request.app.url_path_for("get_pessoa", pessoa_id=str(result.id))
    response.headers.update(header_util.entity_creation_alert(ENTITY_NAME, str(result.id)))
    return result


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_pessoa(request: Request, response: Response, body: JsonBody, service: ServiceDep) -> PessoaDTO:
    """Create a new pessoa. The body must not carry an id."""
    logger.debug("REST request to save Pessoa : %s", body)
    return _create(request, response, body, service)


@router.put("/{pessoa_id}")
async def update_pessoa(
    pessoa_id: int,
    request: Request,
    response: Response,
    body: JsonBody,
    service: ServiceDep,
    repository: RepositoryDep,
) -> PessoaDTO:
    """Replace an existing pessoa, or fall back to create when the id is unknown."""
    logger.debug("REST request to update Pessoa : %s, %s", pessoa_id, body)
    if body.get("id") is None:
        raise BadRequestAlertError("Invalid id", ENTITY_NAME, "idnull")

    if not repository.exists_by_id(pessoa_id):
        return _create(request, response, body, service)

    # The stored record is always the one addressed by the path.
    dto = _validate(PessoaDTO, body).model_copy(update={"id": pessoa_id})
    result = service.save(dto)
    response.headers.update(header_util.entity_update_alert(ENTITY_NAME, str(pessoa_id)))
    return result


@router.patch(
    "/{pessoa_id}",
    openapi_extra={
        "requestBody": {
            "content": {
                "application/json": {"schema": PessoaPatch.model_json_schema()},
                "application/merge-patch+json": {"schema": PessoaPatch.model_json_schema()},
            }
        }
    },
)
async def partial_update_pessoa(
    pessoa_id: int,
    response: Response,
    body: JsonBody,
    service: ServiceDep,
    repository: RepositoryDep,
) -> PessoaDTO:
    """Apply the non-null fields of the body to an existing pessoa."""
    logger.debug("REST request to partial update Pessoa partially : %s, %s", pessoa_id, body)
    if body.get("id") is None:
        raise BadRequestAlertError("Invalid id", ENTITY_NAME, "idnull")

    try:
        body_id = int(body["id"])
    except (TypeError, ValueError):
        raise BadRequestAlertError("Invalid ID", ENTITY_NAME, "idinvalid") from None
    if body_id != pessoa_id:
        raise BadRequestAlertError("Invalid ID", ENTITY_NAME, "idinvalid")

    patch = _validate(PessoaPatch, body)

    if not repository.exists_by_id(pessoa_id):
        raise BadRequestAlertError("Entity not found", ENTITY_NAME, "idnotfound")

    result = service.partial_update(patch)
    if result is None:
        raise NotFoundError("Pessoa", str(pessoa_id))
    response.headers.update(header_util.entity_update_alert(ENTITY_NAME, str(patch.id)))
    return result


@router.get("")
async def get_all_pessoas(
    request: Request,
    response: Response,
    page_request: Annotated[PageRequest, Depends(get_page_request)],
    service: ServiceDep,
) -> list[PessoaDTO]:
    """List a page of pessoas that have not been soft-deleted."""
    logger.debug("REST request to get a page of Pessoas")
    page = service.find_all_not_excluded(page_request)
    response.headers.update(generate_pagination_headers(request.url, page))
    return page.content


@router.get("/{pessoa_id}")
async def get_pessoa(pessoa_id: int, service: ServiceDep) -> PessoaDTO:
    """Get a pessoa by id, including soft-deleted ones."""
    logger.debug("REST request to get Pessoa : %s", pessoa_id)
    pessoa = service.find_one(pessoa_id)
    if pessoa is None:
        raise NotFoundError("Pessoa", str(pessoa_id))
    return pessoa


@router.delete("/{pessoa_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_pessoa(pessoa_id: int, service: ServiceDep) -> Response:
    """Soft-delete a pessoa by stamping its deletion timestamp."""
    logger.debug("REST request to delete Pessoa: %s", pessoa_id)
    pessoa = service.find_one(pessoa_id)
    if pessoa is not None:
        service.save(pessoa.model_copy(update={"deletion_timestamp": datetime.now(UTC)}))

    return Response(
        status_code=status.HTTP_204_NO_CONTENT,
        headers=header_util.entity_deletion_alert(ENTITY_NAME, str(pessoa_id)),
    )

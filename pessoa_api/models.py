from __future__ import annotations

from datetime import date, datetime
from enum import StrEnum

from pydantic import BaseModel, Field

ENTITY_NAME = "pessoa"

_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


class PessoaDTO(BaseModel):
    id: int | None = None
    name: str = Field(min_length=1, max_length=255)
    email: str | None = Field(default=None, max_length=254, pattern=_EMAIL_PATTERN)
    phone: str | None = Field(default=None, max_length=32)
    document: str | None = Field(default=None, max_length=32)
    birth_date: date | None = None
    deletion_timestamp: datetime | None = None


class PessoaPatch(BaseModel):
    """Merge-patch payload: fields left as null keep their stored value."""

    id: int | None = None
    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: str | None = Field(default=None, max_length=254, pattern=_EMAIL_PATTERN)
    phone: str | None = Field(default=None, max_length=32)
    document: str | None = Field(default=None, max_length=32)
    birth_date: date | None = None
    deletion_timestamp: datetime | None = None


# Properties accepted in the ``sort`` query parameter. Text properties are
# sorted on their keyword sub-field in OpenSearch.
SORTABLE_FIELDS: dict[str, str] = {
    "id": "id",
    "name": "name.keyword",
    "email": "email",
    "phone": "phone",
    "document": "document",
    "birth_date": "birth_date",
    "deletion_timestamp": "deletion_timestamp",
}


class SortOrder(BaseModel):
    property: str
    direction: SortDirection = SortDirection.ASC


class PageRequest(BaseModel):
    page: int = Field(default=0, ge=0)
    size: int = Field(default=20, ge=1, le=2000)
    sort: list[SortOrder] = Field(default_factory=list)

    @property
    def offset(self) -> int:
        return self.page * self.size


class Page(BaseModel):
    content: list[PessoaDTO] = Field(default_factory=list)
    total: int
    page: int
    size: int

    @property
    def total_pages(self) -> int:
        if self.size == 0:
            return 1
        return -(-self.total // self.size)


def merge_patch(existing: PessoaDTO, patch: PessoaPatch) -> PessoaDTO:
    """Overlay the non-null fields of ``patch`` on ``existing``."""
    changes = patch.model_dump(exclude_none=True, exclude={"id"})
    return existing.model_copy(update=changes)

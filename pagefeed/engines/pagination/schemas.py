"""Wire schemas for the paged character endpoint."""

from __future__ import annotations

from pydantic import BaseModel, Field


class PageInfo(BaseModel):
    """Pagination metadata; only the presence of ``next`` drives paging."""

    count: int = 0
    pages: int = 0
    next: str | None = None
    prev: str | None = None


class CharacterResponse(BaseModel):
    id: int
    name: str
    status: str
    species: str
    gender: str
    image: str


class CharacterListResponse(BaseModel):
    """Body of ``GET /character?page=N``."""

    info: PageInfo
    results: list[CharacterResponse] = Field(default_factory=list)

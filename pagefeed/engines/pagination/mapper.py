"""Raw page response → domain ``Page``."""

from __future__ import annotations

import structlog

from pagefeed.engines.pagination.models import Item, Page
from pagefeed.engines.pagination.schemas import CharacterListResponse, CharacterResponse

log = structlog.get_logger("pagefeed.engine")


class ResponseMapper:
    """Pure conversion from wire schema to domain models.

    The response body does not echo the page that was requested, so the
    caller passes it in explicitly.
    """

    def to_page(self, raw: CharacterListResponse, requested_page: int) -> Page:
        page = Page(
            items=tuple(self.to_item(entry) for entry in raw.results),
            # Presence of the next pointer, not the item count.
            has_next_page=raw.info.next is not None,
        )
        log.debug(
            "mapper.page",
            page=requested_page,
            items=len(page.items),
            has_next_page=page.has_next_page,
        )
        return page

    @staticmethod
    def to_item(entry: CharacterResponse) -> Item:
        return Item(
            id=entry.id,
            name=entry.name,
            status=entry.status,
            species=entry.species,
            gender=entry.gender,
            image_url=entry.image,
        )

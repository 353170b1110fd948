"""Async client for the paged character endpoint.

One call, one request: no retries here. Failures come back as ``Failure``
values; only cancellation escapes as an exception.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TypeVar

import httpx
import structlog
from pydantic import ValidationError

from pagefeed.core.config import Settings
from pagefeed.engines.pagination.models import (
    Failure,
    Result,
    Success,
    Unknown,
)
from pagefeed.engines.pagination.schemas import CharacterListResponse

log = structlog.get_logger("pagefeed.http")

T = TypeVar("T")

_UNKNOWN_ERROR = "Unknown error"


class RemoteSource:
    """Thin async wrapper around ``GET /{items_path}?page=N``."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._path = self._settings.items_path.strip("/")
        self._client = httpx.AsyncClient(
            base_url=self._settings.base_url.rstrip("/") + "/",
            headers={"Accept": "application/json"},
            timeout=self._settings.timeout,
            transport=transport,
            event_hooks={
                "request": [self._log_request],
                "response": [self._log_response],
            },
        )

    # ── lifecycle ──────────────────────────────────────────────────────────

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> RemoteSource:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    # ── public ─────────────────────────────────────────────────────────────

    async def fetch_page(self, page: int) -> Result[CharacterListResponse]:
        """Fetch and validate a single page (1-indexed)."""
        if page < 1:
            raise ValueError(f"page numbers start at 1, got {page}")
        return await self.safe_call(lambda: self._get_page(page))

    @staticmethod
    async def safe_call(block: Callable[[], Awaitable[T]]) -> Result[T]:
        """Run *block*, classifying expected failures into a ``Result``.

        ``asyncio.CancelledError`` is a ``BaseException`` and passes through.
        """
        try:
            return Success(await block())
        except httpx.HTTPStatusError as exc:
            return Failure(Unknown(_status_message(exc.response)))
        except ValidationError as exc:
            return Failure(Unknown(f"malformed response: {exc.error_count()} validation error(s)"))
        except httpx.TimeoutException as exc:
            return Failure(Unknown(str(exc) or "request timed out"))
        except Exception as exc:
            return Failure(Unknown(str(exc) or _UNKNOWN_ERROR))

    # ── internal ───────────────────────────────────────────────────────────

    async def _get_page(self, page: int) -> CharacterListResponse:
        response = await self._client.get(self._path, params={"page": page})
        response.raise_for_status()
        return CharacterListResponse.model_validate(response.json())

    async def _log_request(self, request: httpx.Request) -> None:
        log.info("http.request", method=request.method, url=str(request.url))

    async def _log_response(self, response: httpx.Response) -> None:
        request = response.request
        fields: dict[str, object] = {
            "method": request.method,
            "url": str(request.url),
            "status": response.status_code,
        }
        if self._settings.http_log_body:
            await response.aread()
            fields["body"] = response.text
        log.info("http.response", **fields)


def _status_message(response: httpx.Response) -> str:
    reason = response.reason_phrase or ""
    return f"HTTP {response.status_code} {reason}".strip()

"""Remote quiz service provider over HTTP/JSON.

Talks to the sentence service with an ``httpx.AsyncClient``:

    GET  /api/new/     -> first item of a fresh 5-sentence session
    POST /api/check/   -> grade an answer, maybe carrying the next item
    POST /api/hint/    -> one hint for the current item

Every failure is mapped to one ``ProviderError`` subclass: transport problems
to ConnectivityError, non-2xx statuses to ServerError, unusable bodies to
MalformedResponseError. Nothing is retried here; retrying is the player's
call.

Tier 2 service — imports from base.py (Tier 1) + httpx.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from pronoms.errors import (
    INVALID_REQUEST_MESSAGE,
    ConnectivityError,
    MalformedResponseError,
    ServerError,
)
from pronoms.providers.base import SentenceProvider
from pronoms.schemas import AnswerRequest, AnswerResult, FirstItem, HintRequest, HintResult

logger = logging.getLogger(__name__)

NEW_PATH = "/api/new/"
CHECK_PATH = "/api/check/"
HINT_PATH = "/api/hint/"

DEFAULT_TOTAL_ITEMS = 5
_DEFAULT_TIMEOUT = 10.0


class RemoteProvider(SentenceProvider):
    """Sentence provider backed by the remote quiz service.

    Use as an async context manager so the underlying connection pool is
    closed:

        async with RemoteProvider("http://localhost:8000") as provider:
            first = await provider.fetch_next()

    Args:
        base_url: Root URL of the service.
        timeout: Per-request timeout in seconds, None for no timeout.
        client: Pre-built client, used as is (tests pass one with a
            MockTransport). ``base_url`` and ``timeout`` are ignored then.
    """

    issues_sessions = True
    supports_hints = True

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        *,
        timeout: float | None = _DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._client = client or httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self) -> RemoteProvider:
        await self._client.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self._client.__aexit__(exc_type, exc_val, exc_tb)

    async def aclose(self) -> None:
        await self._client.aclose()

    # -- transport ---------------------------------------------------------

    async def _call(self, method: str, path: str, body: BaseModel | None = None) -> dict[str, Any]:
        """Performs one request and returns the decoded JSON object."""
        payload = body.model_dump(by_alias=True) if body is not None else None
        try:
            response = await self._client.request(method, path, json=payload)
        except httpx.TransportError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise ConnectivityError() from exc

        if response.status_code == 400:
            raise ServerError(400, INVALID_REQUEST_MESSAGE)
        if not response.is_success:
            logger.warning("%s %s returned %d", method, path, response.status_code)
            raise ServerError(
                response.status_code,
                f"Error del servidor: {response.status_code} {response.reason_phrase}".rstrip(),
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise MalformedResponseError() from exc
        if not isinstance(data, dict):
            raise MalformedResponseError()
        return data

    # -- SentenceProvider --------------------------------------------------

    async def fetch_next(self) -> FirstItem:
        data = await self._call("GET", NEW_PATH)
        # Older deployments omit the count.
        data["totalSentences"] = data.get("totalSentences") or DEFAULT_TOTAL_ITEMS
        try:
            first = FirstItem.model_validate(data)
        except ValidationError as exc:
            raise MalformedResponseError() from exc
        if not first.session_id:
            raise MalformedResponseError()
        logger.info("Started remote session %s (%d items)", first.session_id, first.total_items)
        return first

    async def submit_answer(self, request: AnswerRequest) -> AnswerResult:
        data = await self._call("POST", CHECK_PATH, request)
        try:
            return AnswerResult.model_validate(data)
        except ValidationError as exc:
            raise MalformedResponseError() from exc

    async def request_hint(self, request: HintRequest) -> HintResult:
        data = await self._call("POST", HINT_PATH, request)
        try:
            return HintResult.model_validate(data)
        except ValidationError as exc:
            raise MalformedResponseError() from exc

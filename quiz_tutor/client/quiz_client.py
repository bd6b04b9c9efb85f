from __future__ import annotations

from typing import Any, Self

import httpx

from quiz_tutor.client.errors import ClassifiedError, ErrorKind
from quiz_tutor.client.resilience import (
    DEFAULT_RETRY_CONFIG,
    RetryConfig,
    RetryingFetcher,
    RetryOverride,
)
from quiz_tutor.constants import API_PREFIX, DEFAULT_LOCALE

DEFAULT_TIMEOUT_SECS = 30


class QuizClient:
    """Async client for the quiz REST API.

    Every call goes through :class:`RetryingFetcher`, so failures surface as
    :class:`~quiz_tutor.client.errors.ClassifiedError`.
    """

    def __init__(
        self,
        base_url: str,
        *,
        retry_config: RetryConfig = DEFAULT_RETRY_CONFIG,
        client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECS,
        locale: str = DEFAULT_LOCALE,
        **fetcher_kwargs: Any,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._api_url = f"{base_url.rstrip('/')}{API_PREFIX}"
        self.fetcher = RetryingFetcher(
            self._client, config=retry_config, locale=locale, **fetcher_kwargs
        )

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _request(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: dict[str, Any] | None = None,
        retry_config: RetryOverride = None,
    ) -> Any:
        url = f"{self._api_url}{path}"
        if params:
            query = {key: value for key, value in params.items() if value is not None}
            if query:
                url = str(httpx.URL(url, params=query))
        response = await self.fetcher.execute(
            url, method=method, body=body, retry_config=retry_config
        )
        if not response.content:
            return None
        return response.json()

    # Quiz taking

    async def get_categories(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/categories")

    async def get_levels(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/levels")

    async def get_questions(
        self, category_id: str, level_id: str, limit: int | None = None
    ) -> list[dict[str, Any]]:
        return await self._request(
            "GET",
            "/questions",
            params={"categoryId": category_id, "levelId": level_id, "limit": limit},
        )

    # Admin

    async def get_all_questions(
        self,
        search: str | None = None,
        category_id: str | None = None,
        level_id: str | None = None,
    ) -> list[dict[str, Any]]:
        return await self._request(
            "GET",
            "/all-questions",
            params={"search": search, "categoryId": category_id, "levelId": level_id},
        )

    async def create_question(self, data: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", "/questions", body=data)

    async def update_question(
        self, question_id: int | str, data: dict[str, Any]
    ) -> dict[str, Any]:
        return await self._request("PUT", f"/questions/{question_id}", body=data)

    async def delete_question(self, question_id: int | str) -> dict[str, Any]:
        return await self._request("DELETE", f"/questions/{question_id}")

    async def create_category(self, data: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", "/categories", body=data)

    async def update_category(
        self, category_id: str, data: dict[str, Any]
    ) -> dict[str, Any]:
        return await self._request("PUT", f"/categories/{category_id}", body=data)

    async def delete_category(self, category_id: str) -> dict[str, Any]:
        return await self._request("DELETE", f"/categories/{category_id}")

    async def login(self, email: str, password: str) -> bool:
        try:
            result = await self._request(
                "POST",
                "/admin/login",
                body={"email": email, "password": password},
                retry_config={"disable_retry": True},
            )
        except ClassifiedError as exc:
            if exc.kind == ErrorKind.HTTP_CLIENT and exc.status_code == 401:
                return False
            raise
        return bool(result and result.get("success"))

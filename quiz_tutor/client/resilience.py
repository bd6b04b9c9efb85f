from __future__ import annotations

import asyncio
import itertools
import logging
from collections.abc import Awaitable, Callable, Iterator, Mapping
from dataclasses import dataclass, fields, replace
from typing import Any

import httpx
from hyx.retry.backoffs import expo

from quiz_tutor.client.errors import (
    DEFAULT_RETRYABLE_STATUSES,
    ClassifiedError,
    classify,
)
from quiz_tutor.constants import DEFAULT_LOCALE

logger = logging.getLogger(__name__)

# Verbs with side effects get at most one retry
MUTATING_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


@dataclass(frozen=True)
class RetryConfig:
    max_retries: int = 3
    base_delay_ms: int = 1000
    max_delay_ms: int = 8000
    retryable_statuses: frozenset[int] = DEFAULT_RETRYABLE_STATUSES
    disable_retry: bool = False

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {self.max_retries}")
        if self.base_delay_ms < 0 or self.max_delay_ms < 0:
            raise ValueError("Retry delays must be >= 0")
        object.__setattr__(
            self, "retryable_statuses", frozenset(self.retryable_statuses)
        )

    def merged(self, override: RetryOverride = None) -> RetryConfig:
        """Return a new config with ``override`` applied on top of this one."""
        if override is None:
            return self
        if isinstance(override, RetryConfig):
            return override
        known = {field.name for field in fields(self)}
        unknown = set(override) - known
        if unknown:
            raise ValueError(f"Unknown retry options: {', '.join(sorted(unknown))}")
        return replace(self, **override)


RetryOverride = RetryConfig | Mapping[str, Any] | None

DEFAULT_RETRY_CONFIG = RetryConfig()

SleepFunc = Callable[[float], Awaitable[Any]]


def _backoff_schedule(config: RetryConfig) -> Iterator[float]:
    """Delays in seconds: base, base * 2, base * 4, ... capped at max."""
    return iter(
        expo(
            min_delay_secs=config.base_delay_ms / 1000,
            base=2,
            max_delay_secs=config.max_delay_ms / 1000,
        )
    )


def _to_ms(delay_secs: float, config: RetryConfig) -> int:
    # expo treats a zero cap as "no cap"
    return min(round(delay_secs * 1000), config.max_delay_ms)


def backoff_delay(attempt: int, config: RetryConfig = DEFAULT_RETRY_CONFIG) -> int:
    """Milliseconds to wait after the failed attempt number ``attempt`` (0-based)."""
    if attempt < 0:
        raise ValueError(f"attempt must be >= 0, got {attempt}")
    delay_secs = next(itertools.islice(_backoff_schedule(config), attempt, None))
    return _to_ms(delay_secs, config)


def effective_max_retries(method: str, config: RetryConfig) -> int:
    if method.upper() in MUTATING_METHODS:
        return min(config.max_retries, 1)
    return config.max_retries


class RetryingFetcher:
    """Runs one logical HTTP call as a bounded series of physical attempts.

    Retryable failures (see :func:`quiz_tutor.client.errors.classify`) are
    repeated with exponential backoff until the attempt budget runs out.
    The call ends with either the first successful response or a single
    :class:`ClassifiedError`.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        config: RetryConfig = DEFAULT_RETRY_CONFIG,
        sleep: SleepFunc = asyncio.sleep,
        locale: str = DEFAULT_LOCALE,
    ) -> None:
        self.client = client
        self.config = config
        self._sleep = sleep
        self._locale = locale

    async def execute(
        self,
        url: str,
        method: str = "GET",
        body: Any = None,
        retry_config: RetryOverride = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        config = self.config.merged(retry_config)
        method = method.upper()

        if config.disable_retry:
            max_retries = 0
        else:
            max_retries = effective_max_retries(method, config)

        schedule = _backoff_schedule(config)
        attempt = 0

        while True:
            is_final = attempt >= max_retries

            try:
                response = await self._send(url, method, body, headers)
            except Exception as exc:
                error = classify(
                    exc,
                    retryable_statuses=config.retryable_statuses,
                    locale=self._locale,
                )
                if not error.retryable or is_final:
                    self._log_failure(url, method, attempt, error)
                    raise error from exc
            else:
                if response.is_success:
                    if attempt > 0:
                        logger.info(
                            "Request %s %s succeeded after %d retries",
                            method,
                            url,
                            attempt,
                        )
                    return response

                error = self._classify_response(response, config)
                if not error.retryable or is_final:
                    self._log_failure(url, method, attempt, error)
                    raise error from error.cause

            delay_ms = _to_ms(next(schedule), config)
            logger.warning(
                "Retry attempt %d/%d for %s %s: %s, next retry in %dms",
                attempt + 1,
                max_retries,
                method,
                url,
                error.message,
                delay_ms,
            )
            await self._sleep(delay_ms / 1000)
            attempt += 1

    async def _send(
        self,
        url: str,
        method: str,
        body: Any,
        headers: Mapping[str, str] | None,
    ) -> httpx.Response:
        if body is None:
            return await self.client.request(method, url, headers=headers)
        return await self.client.request(method, url, json=body, headers=headers)

    def _classify_response(
        self, response: httpx.Response, config: RetryConfig
    ) -> ClassifiedError:
        cause = httpx.HTTPStatusError(
            f"HTTP {response.status_code}",
            request=response.request,
            response=response,
        )
        return classify(
            cause,
            response,
            retryable_statuses=config.retryable_statuses,
            locale=self._locale,
        )

    def _log_failure(
        self, url: str, method: str, attempt: int, error: ClassifiedError
    ) -> None:
        logger.error(
            "Request %s %s failed after %d attempt(s): kind=%s status=%s retryable=%s",
            method,
            url,
            attempt + 1,
            error.kind.value,
            error.status_code,
            error.retryable,
        )

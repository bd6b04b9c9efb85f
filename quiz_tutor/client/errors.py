"""Classification of failed HTTP calls.

Every failure of a physical attempt (a transport exception, or a response
with a non-success status) is mapped to a :class:`ClassifiedError` that
records what went wrong, whether repeating the request can help, and a
user-facing message in the product's display language.
"""

from __future__ import annotations

from collections.abc import Collection
from enum import StrEnum

import httpx

from quiz_tutor.constants import DEFAULT_LOCALE
from quiz_tutor.i18n.manager import get_translator

DEFAULT_RETRYABLE_STATUSES = frozenset({408, 429, 503})

# Statuses with a dedicated message; other statuses get a generic one
_STATUS_MESSAGE_KEYS = {
    408: "errors.status_408",
    429: "errors.status_429",
    503: "errors.status_503",
}


class ErrorKind(StrEnum):
    NETWORK = "NETWORK"
    HTTP_CLIENT = "HTTP_CLIENT"
    HTTP_SERVER = "HTTP_SERVER"
    TIMEOUT = "TIMEOUT"
    UNKNOWN = "UNKNOWN"


class ClassifiedError(Exception):
    """A failed request together with its classification.

    Attributes:
        kind: Broad category of the failure.
        retryable: Whether a repeated attempt may succeed.
        status_code: HTTP status of the failed response, if one was received.
        message: Localized, user-facing description.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        retryable: bool,
        status_code: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.retryable = retryable
        self.status_code = status_code
        self.cause = cause

    def __repr__(self) -> str:
        return (
            f"ClassifiedError(kind={self.kind.value}, retryable={self.retryable}, "
            f"status_code={self.status_code}, message={self.message!r})"
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "kind": self.kind.value,
            "retryable": self.retryable,
            "status_code": self.status_code,
            "message": self.message,
        }


def is_transport_error(error: BaseException | None) -> bool:
    """True for failures raised before any response arrived (DNS, connect, reset, timeouts)."""
    return isinstance(error, httpx.TransportError)


def _status_message(status_code: int, default_key: str, locale: str) -> str:
    key = _STATUS_MESSAGE_KEYS.get(status_code, default_key)
    return get_translator().t(locale, key, status=status_code)


def classify(
    error: BaseException | None,
    response: httpx.Response | None = None,
    *,
    retryable_statuses: Collection[int] = DEFAULT_RETRYABLE_STATUSES,
    locale: str = DEFAULT_LOCALE,
) -> ClassifiedError:
    """Classify the outcome of one failed attempt. Never raises.

    Rules, first match wins:

    1. no response and a transport failure -> NETWORK, retryable;
    2. a non-success response:
       a. status >= 500 -> HTTP_SERVER, retryable;
       b. a 4xx status listed in ``retryable_statuses`` -> TIMEOUT for 408,
          HTTP_SERVER otherwise, retryable;
       c. any other status >= 400 -> HTTP_CLIENT, not retryable;
    3. anything else -> UNKNOWN, not retryable, carrying the error's own text.
    """
    translator = get_translator()

    if response is None and is_transport_error(error):
        return ClassifiedError(
            ErrorKind.NETWORK,
            translator.t(locale, "errors.network"),
            retryable=True,
            cause=error,
        )

    if response is not None and not response.is_success:
        status_code = response.status_code

        if status_code >= 500:
            return ClassifiedError(
                ErrorKind.HTTP_SERVER,
                _status_message(status_code, "errors.server_unavailable", locale),
                retryable=True,
                status_code=status_code,
                cause=error,
            )

        if 400 <= status_code < 500 and status_code in retryable_statuses:
            return ClassifiedError(
                ErrorKind.TIMEOUT if status_code == 408 else ErrorKind.HTTP_SERVER,
                _status_message(status_code, "errors.server_status", locale),
                retryable=True,
                status_code=status_code,
                cause=error,
            )

        if status_code >= 400:
            return ClassifiedError(
                ErrorKind.HTTP_CLIENT,
                translator.t(locale, "errors.client_status", status=status_code),
                retryable=False,
                status_code=status_code,
                cause=error,
            )

    message = str(error) if error is not None else ""
    return ClassifiedError(
        ErrorKind.UNKNOWN,
        message or translator.t(locale, "errors.unknown"),
        retryable=False,
        cause=error,
    )

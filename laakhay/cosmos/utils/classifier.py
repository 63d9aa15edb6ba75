"""Transient error classification.

One set of rules decides whether a failed exchange is worth repeating:

- Status 429, 503 and 504 are transient on the server side.
- A response or error mentioning that the authorization token is not valid
  at the current time is transient on the client side: the signed headers
  went stale and must be regenerated.
- Everything else that is not 2xx is permanent.

Status classification is primary. The message rule is applied to response
bodies and to exceptions raised outside the transport.
"""

from __future__ import annotations

from enum import Enum

from ..core.exceptions import AuthorizationExpiredError, ServiceBusyError, TransientError

TRANSIENT_STATUS_CODES: dict[int, str] = {
    429: "Too many requests.",
    503: "Service unavailable.",
    504: "Gateway time-out.",
}

AUTH_EXPIRED_MESSAGE = "authorization token is not valid at the current time"


class Transience(str, Enum):
    """Outcome of classifying a failure."""

    SERVER = "server"
    CLIENT = "client"
    PERMANENT = "permanent"

    @property
    def is_transient(self) -> bool:
        return self is not Transience.PERMANENT


def is_success(status: int) -> bool:
    return 200 <= status < 300


def classify_response(status: int, body: str = "") -> Transience | None:
    """Classify an HTTP response by status code, then by body text.

    Returns:
        None for 2xx responses, otherwise the failure's Transience
    """
    if is_success(status):
        return None
    if status in TRANSIENT_STATUS_CODES:
        return Transience.SERVER
    if AUTH_EXPIRED_MESSAGE in body.lower():
        return Transience.CLIENT
    return Transience.PERMANENT


def classify_error(error: BaseException) -> Transience:
    """Classify a raised error."""
    if isinstance(error, AuthorizationExpiredError):
        return Transience.CLIENT
    if isinstance(error, TransientError):
        return Transience.SERVER
    if AUTH_EXPIRED_MESSAGE in str(error).lower():
        return Transience.CLIENT
    return Transience.PERMANENT


def is_transient_error(error: BaseException) -> bool:
    """Default retry predicate."""
    return classify_error(error).is_transient


def raise_for_transient_response(status: int, body: str = "") -> None:
    """Raise a TransientError subclass if the response is transient.

    Non-transient responses, successful or not, are left to the caller.

    Raises:
        ServiceBusyError: For 429, 503 and 504
        AuthorizationExpiredError: When the body reports stale signed headers
    """
    transience = classify_response(status, body)
    if transience is Transience.SERVER:
        raise ServiceBusyError(TRANSIENT_STATUS_CODES[status], status_code=status)
    if transience is Transience.CLIENT:
        raise AuthorizationExpiredError(
            f"Authorization token expired: {body.strip()[:200]}", status_code=status
        )

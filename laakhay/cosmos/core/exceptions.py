"""Custom exception hierarchy."""

from __future__ import annotations


class CosmosError(Exception):
    """Base exception for all library errors."""

    pass


class CredentialError(CosmosError):
    """Master key material could not be turned into a signing credential."""

    pass


class TransientError(CosmosError):
    """Condition that may clear up if the same operation is attempted again.

    Instances are consumed by the retry executor. They only reach the caller
    once the retry policy is exhausted.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ServiceBusyError(TransientError):
    """Service is throttling or temporarily unavailable (429, 503, 504)."""

    pass


class AuthorizationExpiredError(TransientError):
    """Signed headers fell outside the service's validity window.

    Retrying regenerates the headers with a fresh timestamp.
    """

    pass


class RequestError(CosmosError):
    """Non-transient failure of a single request.

    Carries enough of the exchange to diagnose it without re-running it.
    """

    def __init__(
        self,
        message: str,
        *,
        method: str,
        path: str,
        status_code: int,
        body: str = "",
    ) -> None:
        super().__init__(f"{message} ({method} {path} -> {status_code})\n{body}")
        self.method = method
        self.path = path
        self.status_code = status_code
        self.body = body


class AggregationError(CosmosError):
    """Cross-partition results could not be combined as requested."""

    pass

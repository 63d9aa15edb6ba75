"""Unit tests for the exception hierarchy."""

from laakhay.cosmos.core import (
    AggregationError,
    AuthorizationExpiredError,
    CosmosError,
    CredentialError,
    RequestError,
    ServiceBusyError,
    TransientError,
)


def test_hierarchy():
    for cls in (CredentialError, TransientError, RequestError, AggregationError):
        assert issubclass(cls, CosmosError)
    assert issubclass(ServiceBusyError, TransientError)
    assert issubclass(AuthorizationExpiredError, TransientError)
    assert not issubclass(RequestError, TransientError)


def test_transient_error_status_code():
    assert ServiceBusyError("busy", status_code=503).status_code == 503
    assert TransientError("network").status_code is None


def test_request_error_carries_exchange():
    err = RequestError(
        "Unable to get document",
        method="GET",
        path="dbs/db/colls/c/docs/1",
        status_code=400,
        body='{"code":"BadRequest"}',
    )
    assert err.method == "GET"
    assert err.path == "dbs/db/colls/c/docs/1"
    assert err.status_code == 400
    assert err.body == '{"code":"BadRequest"}'
    assert str(err) == (
        'Unable to get document (GET dbs/db/colls/c/docs/1 -> 400)\n{"code":"BadRequest"}'
    )

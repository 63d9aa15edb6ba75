"""Unit tests for transient error classification."""

from __future__ import annotations

import pytest

from laakhay.cosmos.core import (
    AuthorizationExpiredError,
    RequestError,
    ServiceBusyError,
    TransientError,
)
from laakhay.cosmos.utils import (
    Transience,
    classify_error,
    classify_response,
    is_transient_error,
    raise_for_transient_response,
)

STALE_BODY = '{"code":"Unauthorized","message":"The authorization token is not valid at the current time."}'


class TestClassifyResponse:
    @pytest.mark.parametrize("status", [200, 201, 204])
    def test_success_is_not_a_failure(self, status):
        assert classify_response(status) is None

    @pytest.mark.parametrize("status", [429, 503, 504])
    def test_throttling_and_unavailability_are_server_transient(self, status):
        assert classify_response(status) is Transience.SERVER

    @pytest.mark.parametrize("status", [400, 401, 403, 404, 409, 412, 500, 502])
    def test_other_statuses_are_permanent(self, status):
        assert classify_response(status, '{"message":"nope"}') is Transience.PERMANENT

    def test_stale_authorization_body_is_client_transient(self):
        assert classify_response(401, STALE_BODY) is Transience.CLIENT

    def test_message_match_is_case_insensitive(self):
        assert classify_response(403, STALE_BODY.upper()) is Transience.CLIENT

    def test_status_takes_precedence_over_body(self):
        assert classify_response(503, STALE_BODY) is Transience.SERVER

    def test_transience_flags(self):
        assert Transience.SERVER.is_transient
        assert Transience.CLIENT.is_transient
        assert not Transience.PERMANENT.is_transient


class TestClassifyError:
    def test_service_busy_is_server(self):
        assert classify_error(ServiceBusyError("busy", status_code=429)) is Transience.SERVER

    def test_authorization_expired_is_client(self):
        assert classify_error(AuthorizationExpiredError("stale")) is Transience.CLIENT

    def test_plain_error_with_stale_message_is_client(self):
        err = RuntimeError("The authorization token is not valid at the current time")
        assert classify_error(err) is Transience.CLIENT
        assert is_transient_error(err)

    def test_request_error_is_permanent(self):
        err = RequestError("Unable to read", method="GET", path="dbs", status_code=404)
        assert classify_error(err) is Transience.PERMANENT
        assert not is_transient_error(err)

    def test_unrelated_error_is_permanent(self):
        assert not is_transient_error(ValueError("bad value"))


class TestRaiseForTransientResponse:
    @pytest.mark.parametrize("status", [429, 503, 504])
    def test_raises_service_busy(self, status):
        with pytest.raises(ServiceBusyError) as exc_info:
            raise_for_transient_response(status)
        assert exc_info.value.status_code == status
        assert isinstance(exc_info.value, TransientError)

    def test_raises_authorization_expired(self):
        with pytest.raises(AuthorizationExpiredError) as exc_info:
            raise_for_transient_response(401, STALE_BODY)
        assert exc_info.value.status_code == 401

    @pytest.mark.parametrize("status", [200, 201, 404, 412, 500])
    def test_leaves_other_responses_alone(self, status):
        raise_for_transient_response(status, '{"message":"whatever"}')

"""Unit tests for the signed transport and response header helpers."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock
from urllib.parse import unquote

import pytest

from laakhay.cosmos.core import (
    AuthorizationExpiredError,
    HttpVerb,
    ResourceType,
    ServiceBusyError,
)
from laakhay.cosmos.runtime.rest import (
    CosmosTransport,
    HTTPClient,
    continuation_token,
    request_charge,
    request_duration_ms,
    session_token,
)


@pytest.fixture
def http():
    client = MagicMock(spec=HTTPClient)
    client.base_url = "https://acct.example.com"
    client.request = AsyncMock()
    client.close = AsyncMock()
    return client


@pytest.fixture
def transport(credential, http):
    return CosmosTransport("https://acct.example.com", credential, http=http)


class TestCosmosTransportSend:
    @pytest.mark.asyncio
    async def test_signs_and_sends(self, transport, http, make_response):
        http.request.return_value = make_response(200, {"Databases": []})

        response = await transport.send(
            verb=HttpVerb.GET,
            resource_type=ResourceType.DATABASE,
            resource_link="",
            path="dbs",
        )

        assert response.status == 200
        method, path = http.request.await_args.args
        headers = http.request.await_args.kwargs["headers"]
        assert (method, path) == ("GET", "dbs")
        assert unquote(headers["Authorization"]).startswith("type=master&ver=1.0&sig=")
        assert headers["x-ms-version"] == "2018-12-31"
        assert headers["x-ms-date"].endswith("GMT")
        assert headers["content-type"] == "application/json"
        assert http.request.await_args.kwargs["data"] is None

    @pytest.mark.asyncio
    async def test_encodes_json_body_and_merges_headers(self, transport, http, make_response):
        http.request.return_value = make_response(201, {"id": "d1"})

        await transport.send(
            verb=HttpVerb.POST,
            resource_type=ResourceType.DOCUMENT,
            resource_link="dbs/db/colls/c",
            path="dbs/db/colls/c/docs",
            headers={"x-ms-documentdb-is-upsert": "True"},
            json_body={"id": "d1"},
            content_type="application/query+json",
        )

        kwargs = http.request.await_args.kwargs
        assert json.loads(kwargs["data"]) == {"id": "d1"}
        assert kwargs["headers"]["x-ms-documentdb-is-upsert"] == "True"
        assert kwargs["headers"]["content-type"] == "application/query+json"

    @pytest.mark.asyncio
    async def test_each_send_signs_again(self, transport, http, make_response, monkeypatch):
        http.request.return_value = make_response(200, {})
        signed = []

        from laakhay.cosmos.runtime.rest import transport as transport_module

        real_sign = transport_module.sign_request

        def recording_sign(*args, **kwargs):
            result = real_sign(*args, **kwargs)
            signed.append(result)
            return result

        monkeypatch.setattr(transport_module, "sign_request", recording_sign)

        for _ in range(2):
            await transport.send(
                verb=HttpVerb.GET, resource_type=ResourceType.DATABASE, resource_link="", path="dbs"
            )

        assert len(signed) == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [429, 503, 504])
    async def test_throttling_raises_service_busy(self, transport, http, make_response, status):
        http.request.return_value = make_response(status, {"code": "TooManyRequests"})

        with pytest.raises(ServiceBusyError) as exc_info:
            await transport.send(
                verb=HttpVerb.GET, resource_type=ResourceType.DATABASE, resource_link="", path="dbs"
            )
        assert exc_info.value.status_code == status

    @pytest.mark.asyncio
    async def test_stale_token_raises_authorization_expired(self, transport, http, make_response):
        http.request.return_value = make_response(
            401, {"message": "The authorization token is not valid at the current time."}
        )

        with pytest.raises(AuthorizationExpiredError):
            await transport.send(
                verb=HttpVerb.GET, resource_type=ResourceType.DATABASE, resource_link="", path="dbs"
            )

    @pytest.mark.asyncio
    async def test_permanent_failure_is_returned(self, transport, http, make_response):
        http.request.return_value = make_response(404, {"code": "NotFound"})

        response = await transport.send(
            verb=HttpVerb.GET,
            resource_type=ResourceType.DOCUMENT,
            resource_link="dbs/db/colls/c/docs/x",
            path="dbs/db/colls/c/docs/x",
        )
        assert response.status == 404

    @pytest.mark.asyncio
    async def test_close_closes_http(self, transport, http):
        await transport.close()
        http.close.assert_awaited_once()

    def test_base_url(self, transport):
        assert transport.base_url == "https://acct.example.com"


class TestResponseHeaderHelpers:
    def test_charge_and_duration(self, make_response):
        response = make_response(200, charge=2.86, duration=1.25)
        assert request_charge(response) == pytest.approx(2.86)
        assert request_duration_ms(response) == pytest.approx(1.25)

    def test_missing_or_malformed_accounting_is_zero(self, make_response):
        assert request_charge(make_response(200)) == 0.0
        assert request_duration_ms(make_response(200, headers={"x-ms-request-duration-ms": "n/a"})) == 0.0

    def test_malformed_charge_is_logged(self, make_response, caplog):
        response = make_response(200, headers={"x-ms-request-charge": "lots"})

        with caplog.at_level("WARNING", logger="laakhay.cosmos.runtime.rest.transport"):
            assert request_charge(response) == 0.0

        assert [r.getMessage() for r in caplog.records] == ["malformed_accounting_header"]
        assert caplog.records[0].header == "x-ms-request-charge"
        assert caplog.records[0].value == "lots"

    def test_missing_charge_is_not_logged(self, make_response, caplog):
        with caplog.at_level("WARNING", logger="laakhay.cosmos.runtime.rest.transport"):
            assert request_charge(make_response(200)) == 0.0
        assert caplog.records == []

    def test_session_and_continuation(self, make_response):
        response = make_response(200, session="0:1#42", continuation="+RID:abc")
        assert session_token(response) == "0:1#42"
        assert continuation_token(response) == "+RID:abc"

    def test_empty_continuation_means_none(self, make_response):
        assert continuation_token(make_response(200, continuation="")) is None
        assert session_token(make_response(200)) is None

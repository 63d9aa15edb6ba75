"""Unit tests for continuation-token pagination."""

from __future__ import annotations

import pytest

from laakhay.cosmos.core import RequestError, ServiceBusyError
from laakhay.cosmos.models import CollectionTarget, QueryParameter
from laakhay.cosmos.runtime.paging import PageAccumulator, QueryDriver, QueryPage, QueryRequest, run_query

TARGET = CollectionTarget(database="db", collection="people")


def query_request(**kwargs) -> QueryRequest:
    return QueryRequest(
        target=TARGET,
        query="SELECT * FROM c WHERE c.city = @city",
        parameters=(QueryParameter(name="@city", value="Bournemouth"),),
        **kwargs,
    )


def three_pages(make_response):
    return [
        make_response(200, {"Documents": [{"id": "1"}, {"id": "2"}]}, charge=1.0, duration=2.0, continuation="t1"),
        make_response(200, {"Documents": [{"id": "3"}]}, charge=1.5, duration=3.0, continuation="t2"),
        make_response(200, {"Documents": [{"id": "4"}]}, charge=0.5, duration=1.0),
    ]


class TestQueryDriverRun:
    @pytest.mark.asyncio
    async def test_follows_continuations_and_sums_accounting(self, mock_transport, make_response, fast_policy):
        mock_transport.send.side_effect = three_pages(make_response)
        driver = QueryDriver(mock_transport, fast_policy)

        result = await driver.run(query_request())

        assert [r["id"] for r in result.records] == ["1", "2", "3", "4"]
        assert result.request_charge == pytest.approx(3.0)
        assert result.request_duration_ms == pytest.approx(6.0)
        assert mock_transport.send.await_count == 3

    @pytest.mark.asyncio
    async def test_continuation_header_only_after_first_page(self, mock_transport, make_response, fast_policy):
        mock_transport.send.side_effect = three_pages(make_response)
        driver = QueryDriver(mock_transport, fast_policy)

        await driver.run(query_request(routing_headers={"x-ms-documentdb-partitionkey": '["pk"]'}))

        sent = [call.kwargs["headers"] for call in mock_transport.send.await_args_list]
        assert "x-ms-continuation" not in sent[0]
        assert sent[1]["x-ms-continuation"] == "t1"
        assert sent[2]["x-ms-continuation"] == "t2"
        assert all(h["x-ms-documentdb-partitionkey"] == '["pk"]' for h in sent)

    @pytest.mark.asyncio
    async def test_page_request_shape(self, mock_transport, make_response, fast_policy):
        mock_transport.send.return_value = make_response(200, {"Documents": []})
        driver = QueryDriver(mock_transport, fast_policy)

        result = await driver.run(query_request())

        kwargs = mock_transport.send.await_args.kwargs
        assert kwargs["verb"].value == "POST"
        assert kwargs["resource_type"].value == "docs"
        assert kwargs["resource_link"] == "dbs/db/colls/people"
        assert kwargs["path"] == "dbs/db/colls/people/docs"
        assert kwargs["content_type"] == "application/query+json"
        assert kwargs["json_body"] == {
            "query": "SELECT * FROM c WHERE c.city = @city",
            "parameters": [{"name": "@city", "value": "Bournemouth"}],
        }
        assert result.records == []
        assert result.request_charge == 0.0

    @pytest.mark.asyncio
    async def test_transient_failure_repeats_only_that_page(self, mock_transport, make_response, fast_policy):
        first, second, third = three_pages(make_response)
        mock_transport.send.side_effect = [
            first,
            ServiceBusyError("busy", status_code=429),
            second,
            third,
        ]
        driver = QueryDriver(mock_transport, fast_policy)

        result = await driver.run(query_request())

        assert [r["id"] for r in result.records] == ["1", "2", "3", "4"]
        continuations = [
            call.kwargs["headers"].get("x-ms-continuation")
            for call in mock_transport.send.await_args_list
        ]
        assert continuations == [None, "t1", "t1", "t2"]

    @pytest.mark.asyncio
    async def test_permanent_failure_aborts_query(self, mock_transport, make_response, fast_policy):
        first, _, _ = three_pages(make_response)
        mock_transport.send.side_effect = [first, make_response(400, {"code": "BadRequest"})]
        driver = QueryDriver(mock_transport, fast_policy)

        with pytest.raises(RequestError) as exc_info:
            await driver.run(query_request())

        assert exc_info.value.status_code == 400
        assert "BadRequest" in exc_info.value.body
        assert mock_transport.send.await_count == 2

    @pytest.mark.asyncio
    async def test_exhausted_retries_propagate(self, mock_transport, fast_policy):
        mock_transport.send.side_effect = ServiceBusyError("busy", status_code=503)
        driver = QueryDriver(mock_transport, fast_policy)

        with pytest.raises(ServiceBusyError):
            await driver.run(query_request())
        assert mock_transport.send.await_count == fast_policy.max_attempts

    @pytest.mark.asyncio
    async def test_missing_documents_field_is_empty_page(self, mock_transport, make_response, fast_policy):
        mock_transport.send.return_value = make_response(200, {"_rid": "abc", "_count": 0})
        result = await QueryDriver(mock_transport, fast_policy).run(query_request())
        assert result.records == []

    @pytest.mark.asyncio
    async def test_run_query_helper(self, mock_transport, make_response, fast_policy):
        mock_transport.send.side_effect = three_pages(make_response)
        result = await run_query(mock_transport, query_request(), retry_policy=fast_policy)
        assert len(result.records) == 4


class TestQueryDriverIterPages:
    @pytest.mark.asyncio
    async def test_yields_pages_lazily(self, mock_transport, make_response, fast_policy):
        mock_transport.send.side_effect = three_pages(make_response)
        driver = QueryDriver(mock_transport, fast_policy)

        pages = driver.iter_pages(query_request())
        first = await pages.__anext__()

        assert first.page_index == 0
        assert first.continuation == "t1"
        assert mock_transport.send.await_count == 1
        await pages.aclose()

    @pytest.mark.asyncio
    async def test_page_indexes(self, mock_transport, make_response, fast_policy):
        mock_transport.send.side_effect = three_pages(make_response)
        driver = QueryDriver(mock_transport, fast_policy)

        pages = [page async for page in driver.iter_pages(query_request())]

        assert [p.page_index for p in pages] == [0, 1, 2]
        assert [p.is_last for p in pages] == [False, False, True]


class TestPageAccumulator:
    def test_add(self):
        totals = PageAccumulator()
        totals.add(QueryPage(records=[1, 2], continuation="x", request_charge=1.0, request_duration_ms=2.0))
        totals.add(QueryPage(records=[3], continuation=None, request_charge=0.5, request_duration_ms=0.5))

        assert totals.records == [1, 2, 3]
        assert totals.request_charge == pytest.approx(1.5)
        assert totals.request_duration_ms == pytest.approx(2.5)
        assert totals.pages_used == 2


class TestQueryRequest:
    def test_routing_headers_are_read_only(self):
        request = query_request(routing_headers={"x-ms-session-token": "0:1"})

        with pytest.raises(TypeError):
            request.routing_headers["x-ms-continuation"] = "t1"
        assert dict(request.routing_headers) == {"x-ms-session-token": "0:1"}

    def test_routing_headers_are_copied_from_caller(self):
        headers = {"x-ms-session-token": "0:1"}
        request = query_request(routing_headers=headers)

        headers["x-ms-session-token"] = "0:2"
        assert request.routing_headers["x-ms-session-token"] == "0:1"

    def test_default_routing_headers_empty(self):
        assert dict(query_request().routing_headers) == {}

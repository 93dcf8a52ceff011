"""Precise unit tests for RestRunner.

Tests focus on endpoint execution and parameter building.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from p2precon.runtime.rest import ResponseAdapter, RestEndpointSpec, RestRunner, RESTTransport


class TestRestRunner:
    """Test RestRunner endpoint execution."""

    @pytest.fixture
    def mock_transport(self):
        transport = MagicMock(spec=RESTTransport)
        transport.get = AsyncMock(return_value={"data": "test"})
        return transport

    @pytest.fixture
    def runner(self, mock_transport):
        return RestRunner(mock_transport)

    @pytest.fixture
    def mock_adapter(self):
        adapter = MagicMock(spec=ResponseAdapter)
        adapter.parse = MagicMock(return_value={"parsed": "data"})
        return adapter

    @pytest.mark.asyncio
    async def test_run_get_endpoint(self, runner, mock_transport, mock_adapter):
        spec = RestEndpointSpec(
            id="test",
            method="GET",
            build_path=lambda p: f"/test/{p['id']}",
            build_query=lambda p: {"param": p.get("param")},
            build_headers=lambda p: {"X-KEY": "k"},
        )

        result = await runner.run(
            spec=spec, adapter=mock_adapter, params={"id": "123", "param": "value"}
        )

        assert result == {"parsed": "data"}
        mock_transport.get.assert_called_once_with(
            "/test/123", params={"param": "value"}, headers={"X-KEY": "k"}
        )
        mock_adapter.parse.assert_called_once_with(
            {"data": "test"}, {"id": "123", "param": "value"}
        )

    @pytest.mark.asyncio
    async def test_run_without_query_builder(self, runner, mock_transport, mock_adapter):
        spec = RestEndpointSpec(id="test", method="GET", build_path=lambda p: "/test")

        await runner.run(spec=spec, adapter=mock_adapter, params={})

        mock_transport.get.assert_called_once_with("/test", params=None, headers=None)

    @pytest.mark.asyncio
    async def test_run_rejects_non_get(self, runner, mock_adapter):
        spec = RestEndpointSpec(id="test", method="POST", build_path=lambda p: "/test")

        with pytest.raises(ValueError):
            await runner.run(spec=spec, adapter=mock_adapter, params={})

    def test_default_adapter_passthrough(self):
        assert ResponseAdapter().parse({"a": 1}, {}) == {"a": 1}

"""Tests for AgentDiscovery from vargos_cli.agent.discovery."""

import httpx
import pytest

from vargos_cli.agent.discovery import AgentDiscovery
from vargos_cli.core.errors import DirectoryError


@pytest.fixture
def make_discovery(make_client):
    def _make(handler):
        client = make_client(handler)
        return AgentDiscovery(client.base_url, client=client)

    return _make


class TestValidateAgent:
    @pytest.mark.asyncio
    async def test_known_agent(self, make_discovery):
        async with make_discovery(lambda request: httpx.Response(200, json={"name": "weather"})) as discovery:
            assert await discovery.validate_agent("weather") is True

    @pytest.mark.asyncio
    async def test_unknown_agent(self, make_discovery):
        async with make_discovery(lambda request: httpx.Response(404)) as discovery:
            assert await discovery.validate_agent("ghost") is False

    @pytest.mark.asyncio
    async def test_unreachable_server_reports_false(self, make_discovery):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with make_discovery(handler) as discovery:
            assert await discovery.validate_agent("weather") is False

    @pytest.mark.asyncio
    async def test_malformed_body_reports_false(self, make_discovery):
        async with make_discovery(lambda request: httpx.Response(200, text="not json")) as discovery:
            assert await discovery.validate_agent("weather") is False


class TestDirectoryPassthrough:
    @pytest.mark.asyncio
    async def test_list_agents(self, make_discovery):
        def handler(request):
            return httpx.Response(200, json=[{"name": "weather"}, {"name": "notes"}])

        async with make_discovery(handler) as discovery:
            agents = await discovery.list_agents()

        assert [a.name for a in agents] == ["weather", "notes"]

    @pytest.mark.asyncio
    async def test_get_agent_propagates_errors(self, make_discovery):
        async with make_discovery(lambda request: httpx.Response(404)) as discovery:
            with pytest.raises(DirectoryError):
                await discovery.get_agent("ghost")

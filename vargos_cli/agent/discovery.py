"""Agent discovery on the server's agent directory."""

from typing import List, Optional

import httpx
import structlog

from vargos_cli.api.client import AgentClient
from vargos_cli.api.models import Agent
from vargos_cli.core.errors import VargosError

logger = structlog.get_logger(__name__)


class AgentDiscovery:
    """Lists, fetches and validates agents by name."""

    def __init__(self, base_url: str, *, client: Optional[AgentClient] = None) -> None:
        self.client = client or AgentClient(base_url=base_url)

    async def close(self) -> None:
        await self.client.close()

    async def __aenter__(self) -> "AgentDiscovery":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def list_agents(self) -> List[Agent]:
        return await self.client.list_agents()

    async def get_agent(self, name: str) -> Agent:
        return await self.client.get_agent(name)

    async def validate_agent(self, name: str) -> bool:
        """Return True if the server knows ``name``.

        Any failure, including an unreachable server, reports False.
        """
        try:
            await self.get_agent(name)
        except (VargosError, httpx.HTTPError) as e:
            logger.debug("agent_validation_failed", agent=name, error=str(e))
            return False
        return True

"""Agent module for the Vargos CLI."""

from vargos_cli.agent.discovery import AgentDiscovery

__all__ = [
    "AgentDiscovery",
]

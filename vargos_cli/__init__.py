"""Vargos CLI - terminal client for Mastra agent servers."""

__version__ = "0.1.0"

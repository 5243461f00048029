"""Extensible JSON wire encoding for MCP messages."""

__version__ = "0.1.0"

"""Launcher for the prebuilt databricks-mcp-server binaries."""

__version__ = "0.1.0"

"""
Configuration for the databricks-mcp-server launcher.

All settings are centralized here for easy auditing.
"""

import os

from pydantic import BaseModel, Field

DEBUG_ENV_VAR = "DATABRICKS_MCP_LAUNCHER_DEBUG"


class ArtifactLayout(BaseModel):
    """Where a platform package keeps its executable.

    The binary lives at ``<package>/<bin_dir>/<executable><suffix>``.
    """

    package_prefix: str = Field(default="databricks-mcp-server")
    bin_dir: str = Field(default="bin")
    executable: str = Field(default="databricks-mcp-server")


class ExitCodes(BaseModel):
    """Exit statuses the launcher produces itself."""

    # Same meaning as a shell's "command not found"
    resolution_failed: int = Field(default=127)
    # Same meaning as a shell's "found but not executable"
    spawn_failed: int = Field(default=126)
    # A child killed by signal N exits the launcher with signal_base + N
    signal_base: int = Field(default=128)


class Config(BaseModel):
    """Root configuration."""

    layout: ArtifactLayout = Field(default_factory=ArtifactLayout)
    exit_codes: ExitCodes = Field(default_factory=ExitCodes)
    debug: bool | None = Field(default=None)

    def __init__(self, **data):
        super().__init__(**data)
        if self.debug is None:
            value = os.getenv(DEBUG_ENV_VAR, "")
            self.debug = value.strip().lower() in ("1", "true", "yes", "on")


# Global config instance
config = Config()

"""
Platform Table - which prebuilt binary belongs to which host.

Each supported (operating system, CPU architecture) pair maps to the
platform package that ships its executable. The table is fixed when the
launcher is built; hosts outside it are unsupported.

Identifiers use the ``sys.platform`` vocabulary for the OS ("darwin",
"linux", "win32") and "x64"/"arm64" for the architecture.
"""

from __future__ import annotations

import platform
import sys
from types import MappingProxyType
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict

from .config import config

# Raw platform.machine() values and the architecture they stand for
ARCH_ALIASES = {
    "x86_64": "x64",
    "amd64": "x64",
    "x64": "x64",
    "aarch64": "arm64",
    "arm64": "arm64",
}


class PlatformKey(NamedTuple):
    """An (operating system, CPU architecture) pair."""

    os: str
    arch: str

    def __str__(self) -> str:
        return f"{self.os}/{self.arch}"


class ArtifactDescriptor(BaseModel):
    """The installable package holding one platform's binary."""

    model_config = ConfigDict(frozen=True)

    name: str  # distribution name, e.g. "databricks-mcp-server-linux-amd64"
    suffix: str = ""  # "" or ".exe"

    @property
    def module(self) -> str:
        """Import name of the package."""
        return self.name.replace("-", "_")


def _descriptor(target: str, suffix: str = "") -> ArtifactDescriptor:
    return ArtifactDescriptor(name=f"{config.layout.package_prefix}-{target}", suffix=suffix)


# =============================================================================
# Binary Map
# =============================================================================

BINARY_MAP: MappingProxyType[PlatformKey, ArtifactDescriptor] = MappingProxyType(
    {
        PlatformKey("darwin", "x64"): _descriptor("darwin-amd64"),
        PlatformKey("darwin", "arm64"): _descriptor("darwin-arm64"),
        PlatformKey("linux", "x64"): _descriptor("linux-amd64"),
        PlatformKey("linux", "arm64"): _descriptor("linux-arm64"),
        PlatformKey("win32", "x64"): _descriptor("windows-amd64", ".exe"),
        PlatformKey("win32", "arm64"): _descriptor("windows-arm64", ".exe"),
    }
)


def normalize_os(raw: str) -> str:
    """Map a ``sys.platform`` value onto the table's OS vocabulary.

    Unknown values come back unchanged so lookups fail with the real name.
    """
    value = raw.lower()
    if value.startswith("linux"):
        return "linux"
    if value in ("win32", "cygwin", "msys"):
        return "win32"
    return value


def normalize_arch(raw: str) -> str:
    """Map a ``platform.machine()`` value onto "x64" or "arm64"."""
    value = raw.lower()
    return ARCH_ALIASES.get(value, value)


def detect_platform() -> PlatformKey:
    """Platform key of the running interpreter."""
    return PlatformKey(normalize_os(sys.platform), normalize_arch(platform.machine()))


def lookup(key: PlatformKey) -> ArtifactDescriptor | None:
    """Descriptor for ``key``, or None when the pair is unsupported."""
    return BINARY_MAP.get(key)

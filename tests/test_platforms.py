"""
Tests for the platform table.

Verifies host detection and the static binary map.
"""

import pytest
from pydantic import ValidationError

from databricks_mcp_server import platforms
from databricks_mcp_server.platforms import (
    BINARY_MAP,
    ArtifactDescriptor,
    PlatformKey,
    detect_platform,
    lookup,
    normalize_arch,
    normalize_os,
)


class TestBinaryMap:
    """Test the static platform -> package table."""

    def test_supported_platforms(self):
        """Every published binary has an entry."""
        assert set(BINARY_MAP) == {
            PlatformKey("darwin", "x64"),
            PlatformKey("darwin", "arm64"),
            PlatformKey("linux", "x64"),
            PlatformKey("linux", "arm64"),
            PlatformKey("win32", "x64"),
            PlatformKey("win32", "arm64"),
        }

    def test_package_names(self):
        """Package names follow <tool>-<os>-<arch>."""
        assert BINARY_MAP[PlatformKey("darwin", "arm64")].name == "databricks-mcp-server-darwin-arm64"
        assert BINARY_MAP[PlatformKey("linux", "x64")].name == "databricks-mcp-server-linux-amd64"
        assert BINARY_MAP[PlatformKey("win32", "x64")].name == "databricks-mcp-server-windows-amd64"

    def test_only_windows_has_exe_suffix(self):
        """Windows binaries end in .exe, the rest have no suffix."""
        for key, descriptor in BINARY_MAP.items():
            expected = ".exe" if key.os == "win32" else ""
            assert descriptor.suffix == expected

    def test_map_is_read_only(self):
        """The table cannot be changed at runtime."""
        with pytest.raises(TypeError):
            BINARY_MAP[PlatformKey("freebsd", "x64")] = ArtifactDescriptor(name="x")

    def test_descriptor_is_frozen(self):
        """Descriptors cannot be changed at runtime."""
        descriptor = BINARY_MAP[PlatformKey("linux", "x64")]

        with pytest.raises(ValidationError):
            descriptor.suffix = ".exe"

    def test_module_name(self):
        """Import names use underscores."""
        descriptor = BINARY_MAP[PlatformKey("linux", "arm64")]

        assert descriptor.module == "databricks_mcp_server_linux_arm64"

    def test_lookup_unknown_platform(self):
        """Unsupported pairs have no descriptor."""
        assert lookup(PlatformKey("freebsd", "x64")) is None
        assert lookup(PlatformKey("linux", "ia32")) is None


class TestNormalization:
    """Test mapping raw interpreter values onto table identifiers."""

    @pytest.mark.parametrize(
        "raw, expected",
        [("x86_64", "x64"), ("AMD64", "x64"), ("aarch64", "arm64"), ("arm64", "arm64")],
    )
    def test_arch_aliases(self, raw, expected):
        assert normalize_arch(raw) == expected

    def test_unknown_arch_passes_through(self):
        """Unknown values are kept so errors name them."""
        assert normalize_arch("riscv64") == "riscv64"

    @pytest.mark.parametrize(
        "raw, expected",
        [("linux", "linux"), ("linux2", "linux"), ("darwin", "darwin"), ("win32", "win32"), ("cygwin", "win32")],
    )
    def test_os_names(self, raw, expected):
        assert normalize_os(raw) == expected

    def test_unknown_os_passes_through(self):
        assert normalize_os("sunos5") == "sunos5"

    def test_detect_platform(self, monkeypatch):
        """Host detection combines sys.platform and platform.machine()."""
        monkeypatch.setattr(platforms.sys, "platform", "darwin")
        monkeypatch.setattr(platforms.platform, "machine", lambda: "arm64")

        assert detect_platform() == PlatformKey("darwin", "arm64")

    def test_platform_key_str(self):
        assert str(PlatformKey("linux", "x64")) == "linux/x64"

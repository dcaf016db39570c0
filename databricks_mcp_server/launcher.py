"""
Launcher - runs the prebuilt databricks-mcp-server binary for this host.

Flow:
1. Detect the host (OS, architecture) and look it up in the binary map
2. Find the matching platform package on the import path
3. Run its executable with our arguments and inherited stdio
4. Exit with the child's status

The launcher never writes to stdout. Errors and debug traces go to stderr.
"""

from __future__ import annotations

import importlib.util
import os
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path, PurePosixPath

from rich.console import Console
from rich.markup import escape

from .config import config
from .platforms import ArtifactDescriptor, PlatformKey, detect_platform, lookup

console = Console(stderr=True, highlight=False)


class LauncherError(Exception):
    """Base exception for launcher failures."""

    def __init__(self, message: str, key: PlatformKey | None = None):
        super().__init__(message)
        self.key = key

    @property
    def exit_code(self) -> int:
        return config.exit_codes.resolution_failed


class UnsupportedPlatform(LauncherError):
    """The host has no entry in the binary map."""

    def __init__(self, key: PlatformKey):
        super().__init__(f"Unsupported platform/arch: {key.os}/{key.arch}", key)


class BinaryNotFound(LauncherError):
    """The host is supported but its platform package is not installed."""

    def __init__(self, key: PlatformKey, descriptor: ArtifactDescriptor, expected: PurePosixPath):
        super().__init__(
            f"Could not find the binary for platform/arch: {key.os}/{key.arch} "
            f"(expected {expected}). Install it with: pip install {descriptor.name}",
            key,
        )
        self.descriptor = descriptor
        self.expected = expected


class SpawnFailure(LauncherError):
    """The binary was found but could not be started."""

    def __init__(self, path: Path, reason: OSError, key: PlatformKey | None = None):
        detail = reason.strerror or str(reason)
        super().__init__(f"Could not execute {path}: {detail}", key)
        self.path = path
        self.reason = reason

    @property
    def exit_code(self) -> int:
        return config.exit_codes.spawn_failed


def _trace(message: str) -> None:
    if config.debug:
        console.print(f"[dim]{escape(message)}[/dim]", soft_wrap=True)


def _relative_path(descriptor: ArtifactDescriptor) -> PurePosixPath:
    layout = config.layout
    return PurePosixPath(descriptor.module, layout.bin_dir, layout.executable + descriptor.suffix)


def expected_binary_path(key: PlatformKey) -> PurePosixPath:
    """
    Where the binary for ``key`` lives, relative to the import path.

    Example: expected_binary_path(PlatformKey("linux", "x64"))
             -> "databricks_mcp_server_linux_amd64/bin/databricks-mcp-server"

    Raises:
        UnsupportedPlatform: If ``key`` is not in the binary map
    """
    descriptor = lookup(key)
    if descriptor is None:
        raise UnsupportedPlatform(key)
    return _relative_path(descriptor)


def _locate(descriptor: ArtifactDescriptor) -> Path | None:
    """Search the installed platform package for its executable."""
    spec = importlib.util.find_spec(descriptor.module)
    if spec is None or not spec.submodule_search_locations:
        return None

    relative = _relative_path(descriptor)
    for location in spec.submodule_search_locations:
        candidate = Path(location).joinpath(*relative.parts[1:])
        if candidate.is_file():
            return candidate.resolve()
    return None


def resolve_binary_path(key: PlatformKey | None = None) -> Path:
    """
    Resolve the absolute path of the binary for ``key`` (default: this host).

    Raises:
        UnsupportedPlatform: If the platform is not in the binary map
        BinaryNotFound: If the platform package or its binary is missing
    """
    if key is None:
        key = detect_platform()
    _trace(f"Detected platform/arch: {key}")

    descriptor = lookup(key)
    if descriptor is None:
        raise UnsupportedPlatform(key)

    path = _locate(descriptor)
    if path is None:
        raise BinaryNotFound(key, descriptor, _relative_path(descriptor))

    _trace(f"Resolved binary: {path}")
    return path


def exit_status(returncode: int) -> int:
    """Translate a child's return code into the launcher's exit status.

    A negative code means the child was killed by that signal (POSIX).
    """
    if returncode < 0:
        return config.exit_codes.signal_base - returncode
    return returncode


def execute(path: Path | str, args: Sequence[str], key: PlatformKey | None = None) -> int:
    """
    Run the binary with ``args`` and wait for it to finish.

    Standard input, output and error are inherited untouched.

    Returns:
        The exit status the launcher should exit with

    Raises:
        SpawnFailure: If the process could not be started
    """
    cmd = [os.fspath(path), *args]

    try:
        process = subprocess.Popen(cmd)
    except OSError as e:
        raise SpawnFailure(Path(path), e, key) from e

    while True:
        try:
            returncode = process.wait()
            break
        except KeyboardInterrupt:
            # The child got the same interrupt; its exit decides ours
            continue

    _trace(f"Binary exited with code {returncode}")
    return exit_status(returncode)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: resolve the binary for this host and run it."""
    args = list(sys.argv[1:] if argv is None else argv)

    try:
        key = detect_platform()
        path = resolve_binary_path(key)
        return execute(path, args, key)
    except LauncherError as e:
        console.print(f"[red]{config.layout.executable}: {escape(str(e))}[/red]", soft_wrap=True)
        return e.exit_code


if __name__ == "__main__":
    sys.exit(main())

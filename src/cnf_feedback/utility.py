"""Locating and running the command-not-found helper."""

from __future__ import annotations

import asyncio
import contextlib
import stat
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from loguru import logger

from .errors import ConfigurationError, ProcessLaunchError
from .types import ToolOutput

NO_FAILURE_MSG_FLAG = "--no-failure-msg"

_UNRESOLVED = object()


def is_supported_platform() -> bool:
    """The helper only exists on Linux distributions."""
    return sys.platform.startswith("linux")


def is_other_executable(path: Path) -> bool:
    try:
        mode = path.stat().st_mode
    except OSError:
        return False
    return stat.S_ISREG(mode) and bool(mode & stat.S_IXOTH)


class UtilityLocator:
    """Resolve the helper path once and remember the answer, found or not."""

    def __init__(self, candidates: Sequence[Path]) -> None:
        self._candidates = tuple(Path(candidate) for candidate in candidates)
        if not self._candidates:
            raise ConfigurationError("no command-not-found locations configured")
        self._resolved: Path | None | object = _UNRESOLVED

    @property
    def candidates(self) -> tuple[Path, ...]:
        return self._candidates

    def resolve(self) -> Path | None:
        if self._resolved is _UNRESOLVED:
            self._resolved = next((path for path in self._candidates if is_other_executable(path)), None)
            logger.debug("utility.resolved path={}", self._resolved)
        return self._resolved  # type: ignore[return-value]


def helper_arguments(target: str, *, no_failure_msg: bool = True) -> list[str]:
    if no_failure_msg:
        return [NO_FAILURE_MSG_FLAG, target]
    return [target]


class ProcessRunner(Protocol):
    """Capability to run one external program to completion."""

    async def run(self, executable: str, args: Sequence[str]) -> ToolOutput: ...


class SubprocessRunner:
    """Run a program with asyncio and capture both output streams.

    There is no timeout; callers cancel the awaiting task instead. The child is
    killed and reaped before the cancellation propagates.
    """

    encoding = "utf-8"

    async def run(self, executable: str, args: Sequence[str]) -> ToolOutput:
        try:
            process = await asyncio.create_subprocess_exec(
                executable,
                *args,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise ProcessLaunchError(f"cannot start {executable}: {exc}") from exc

        try:
            stdout, stderr = await process.communicate()
        except asyncio.CancelledError:
            with contextlib.suppress(ProcessLookupError):
                process.kill()
            await process.wait()
            logger.debug("utility.cancelled executable={} pid={}", executable, process.pid)
            raise

        return ToolOutput(
            stderr_lines=stderr.decode(self.encoding, errors="replace").splitlines(),
            stdout_text=stdout.decode(self.encoding, errors="replace"),
            exit_status=process.returncode if process.returncode is not None else -1,
        )

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from pathlib import Path

import pytest
from loguru import logger

from cnf_feedback.config import Settings
from cnf_feedback.types import ToolOutput

FIXTURES = Path(__file__).parent / "fixtures"


class FakeRunner:
    """Records invocations and replays canned helper output."""

    def __init__(self, stderr: str = "", stdout: str = "", exit_status: int = 0) -> None:
        self.stderr = stderr
        self.stdout = stdout
        self.exit_status = exit_status
        self.calls: list[tuple[str, list[str]]] = []

    async def run(self, executable: str, args: Sequence[str]) -> ToolOutput:
        self.calls.append((executable, list(args)))
        return ToolOutput(
            stderr_lines=self.stderr.splitlines(),
            stdout_text=self.stdout,
            exit_status=self.exit_status,
        )


def _write_executable(path: Path, body: str = "#!/bin/sh\nexit 0\n", mode: int = 0o755) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(body, encoding="utf-8")
    path.chmod(mode)
    return path


@pytest.fixture
def read_fixture() -> Callable[[str], str]:
    def _read(name: str) -> str:
        return (FIXTURES / name).read_text(encoding="utf-8")

    return _read


@pytest.fixture
def write_executable() -> Callable[..., Path]:
    return _write_executable


@pytest.fixture
def fake_runner() -> Callable[..., FakeRunner]:
    return FakeRunner


@pytest.fixture
def utility(tmp_path: Path) -> Path:
    return _write_executable(tmp_path / "bin" / "command-not-found")


@pytest.fixture
def settings(utility: Path) -> Settings:
    return Settings(utility_paths=[utility])


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    messages: list[str] = []
    logger.enable("cnf_feedback")
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG")
    try:
        yield messages
    finally:
        logger.remove(handler_id)
        logger.disable("cnf_feedback")

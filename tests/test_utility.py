from __future__ import annotations

import asyncio
from collections.abc import Callable
from pathlib import Path

import pytest

from cnf_feedback.errors import ConfigurationError, ProcessLaunchError
from cnf_feedback.utility import SubprocessRunner, UtilityLocator, helper_arguments, is_other_executable


def test_locator_prefers_first_executable_candidate(tmp_path: Path, write_executable: Callable[..., Path]) -> None:
    first = write_executable(tmp_path / "lib" / "command-not-found")
    second = write_executable(tmp_path / "share" / "command-not-found")

    assert UtilityLocator([first, second]).resolve() == first


def test_locator_skips_candidates_not_executable_by_others(
    tmp_path: Path, write_executable: Callable[..., Path]
) -> None:
    private = write_executable(tmp_path / "lib" / "command-not-found", mode=0o750)
    shared = write_executable(tmp_path / "share" / "command-not-found")

    assert not is_other_executable(private)
    assert UtilityLocator([private, shared]).resolve() == shared


def test_locator_ignores_directories(tmp_path: Path) -> None:
    directory = tmp_path / "command-not-found"
    directory.mkdir()
    directory.chmod(0o755)

    assert UtilityLocator([directory]).resolve() is None


def test_locator_caches_missing_result(tmp_path: Path, write_executable: Callable[..., Path]) -> None:
    path = tmp_path / "command-not-found"
    locator = UtilityLocator([path])

    assert locator.resolve() is None
    write_executable(path)
    assert locator.resolve() is None


def test_locator_caches_found_result(tmp_path: Path, write_executable: Callable[..., Path]) -> None:
    path = write_executable(tmp_path / "command-not-found")
    locator = UtilityLocator([path])

    assert locator.resolve() == path
    path.unlink()
    assert locator.resolve() == path


def test_helper_arguments_variants() -> None:
    assert helper_arguments("cargo") == ["--no-failure-msg", "cargo"]
    assert helper_arguments("cargo", no_failure_msg=False) == ["cargo"]


@pytest.mark.asyncio
async def test_subprocess_runner_captures_both_streams(tmp_path: Path, write_executable: Callable[..., Path]) -> None:
    script = write_executable(
        tmp_path / "helper",
        "#!/bin/sh\nprintf 'Command %s not found\\nsudo apt install %s\\n' \"$2\" \"$2\" >&2\necho footer\nexit 127\n",
    )

    output = await SubprocessRunner().run(str(script), ["--no-failure-msg", "cargo"])

    assert output.stderr_lines == ["Command cargo not found", "sudo apt install cargo"]
    assert output.stdout_text == "footer\n"
    assert output.exit_status == 127


@pytest.mark.asyncio
async def test_subprocess_runner_reports_launch_failure(tmp_path: Path) -> None:
    with pytest.raises(ProcessLaunchError):
        await SubprocessRunner().run(str(tmp_path / "missing"), ["cargo"])


@pytest.mark.asyncio
async def test_subprocess_runner_kills_child_on_cancel(tmp_path: Path, write_executable: Callable[..., Path]) -> None:
    script = write_executable(tmp_path / "slow", "#!/bin/sh\nexec sleep 30\n")

    task = asyncio.create_task(SubprocessRunner().run(str(script), []))
    await asyncio.sleep(0.2)
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await asyncio.wait_for(task, timeout=5)


def test_locator_requires_candidates() -> None:
    with pytest.raises(ConfigurationError):
        UtilityLocator([])

from __future__ import annotations

from pathlib import Path

import pytest

from cnf_feedback.config import DEFAULT_UTILITY_PATHS, Settings


def test_defaults_point_at_well_known_paths(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)

    settings = Settings()

    assert settings.utility_paths == list(DEFAULT_UTILITY_PATHS)
    assert settings.no_failure_msg is True
    assert settings.script_suffixes == [".ps1", ".sh"]


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CNF_FEEDBACK_NO_FAILURE_MSG", "false")
    monkeypatch.setenv("CNF_FEEDBACK_UTILITY_PATHS", '["/opt/cnf/helper"]')
    monkeypatch.setenv("CNF_FEEDBACK_LOG_LEVEL", " debug ")

    settings = Settings()

    assert settings.no_failure_msg is False
    assert settings.utility_paths == [Path("/opt/cnf/helper")]
    assert settings.log_level == "DEBUG"


def test_script_suffixes_are_casefolded() -> None:
    assert Settings(script_suffixes=[".PS1", "", ".Bash"]).script_suffixes == [".ps1", ".bash"]

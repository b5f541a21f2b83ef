"""cnf-feedback CLI."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Annotated

import typer

from cnf_feedback.config import get_settings
from cnf_feedback.framework import FeedbackFramework
from cnf_feedback.parser import parse_output
from cnf_feedback.render import Renderer
from cnf_feedback.types import FeedbackItem, FeedbackRequest
from cnf_feedback.utility import is_supported_platform

app = typer.Typer(
    name="cnf-feedback",
    help="Explain unknown shell commands using the command-not-found helper.",
    add_completion=False,
    no_args_is_help=True,
)


def _framework() -> FeedbackFramework:
    framework = FeedbackFramework(get_settings(log_profile="cli"))
    framework.load_plugins()
    return framework


def _request_feedback(framework: FeedbackFramework, command: str) -> FeedbackItem | None:
    request = FeedbackRequest(target=command, command_line=command, platform_supported=is_supported_platform())
    return asyncio.run(framework.request_feedback(request))


@app.command()
def explain(command: Annotated[str, typer.Argument(help="Command name that was not found")]) -> None:
    """Explain why COMMAND was not found and how to install it."""

    renderer = Renderer()
    framework = _framework()
    item = _request_feedback(framework, command)
    if item is None:
        renderer.info(f"No feedback for '{command}'.")
        raise typer.Exit(1)
    renderer.feedback(item)
    renderer.suggestions(framework.request_predictions(""))


@app.command()
def parse(
    file: Annotated[Path | None, typer.Argument(help="Captured helper stderr; stdin when omitted")] = None,
    stdout_file: Annotated[Path | None, typer.Option("--stdout-file", help="Captured helper stdout")] = None,
) -> None:
    """Parse captured helper output without running the helper."""

    renderer = Renderer()
    if file is None:
        lines = sys.stdin.read().splitlines()
    else:
        lines = file.read_text(encoding="utf-8").splitlines()
    stdout_text = stdout_file.read_text(encoding="utf-8") if stdout_file is not None else ""
    result = parse_output(lines, stdout_text)
    renderer.parse_result(result)
    if not result.present:
        raise typer.Exit(1)


@app.command()
def predict(
    command: Annotated[str, typer.Argument(help="Command name that was not found")],
    prefix: Annotated[str, typer.Argument(help="Partially typed command line")] = "",
) -> None:
    """Print the predictions offered for PREFIX after COMMAND failed."""

    framework = _framework()
    _request_feedback(framework, command)
    for suggestion in framework.request_predictions(prefix):
        typer.echo(suggestion)


@app.command()
def hooks() -> None:
    """Show which providers implement which hooks."""

    framework = _framework()
    Renderer().hook_report(framework.hook_report())
    for name, reason in framework.failed_plugins.items():
        Renderer().error(f"{name}: {reason}")

"""Rich rendering of feedback for the CLI."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from cnf_feedback.types import FeedbackItem, FeedbackLayout, ParseResult


class Renderer:
    """CLI renderer using Rich for terminal output."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def feedback(self, item: FeedbackItem) -> None:
        self._print(f"[bold]{escape(item.header)}[/bold]")
        for action in item.actions:
            self._print(f"  [green]{escape(action)}[/green]")
        if item.footer and item.layout is FeedbackLayout.EXPANDED:
            self._print("")
            self._print(f"[dim]{escape(item.footer)}[/dim]")

    def suggestions(self, suggestions: list[str]) -> None:
        if not suggestions:
            return
        self._print("[bold]Suggestions:[/bold]")
        for suggestion in suggestions:
            self._print(f"  [cyan]{escape(suggestion)}[/cyan]")

    def parse_result(self, result: ParseResult) -> None:
        status = "present" if result.present else "absent"
        self._print(f"[bold]Result:[/bold] {status}")
        self._print(f"[bold]Header:[/bold] {escape(result.header or '-')}")
        for action in result.actions:
            self._print(f"[bold]Action:[/bold] {escape(action)}")
        self._print(f"[bold]Footer:[/bold] {escape(result.footer or '-')}")
        for suggestion in result.candidates:
            self._print(f"[bold]Suggestion:[/bold] {escape(suggestion)}")

    def hook_report(self, report: dict[str, list[str]]) -> None:
        for hook_name, providers in report.items():
            self._print(f"[bold]{hook_name}[/bold]: {', '.join(providers)}")

    def info(self, message: str) -> None:
        self._print(message)

    def error(self, message: str) -> None:
        self._print(f"[bold red]Error:[/bold red] {message}")

    def _print(self, message: str) -> None:
        self.console.print(message, highlight=False)

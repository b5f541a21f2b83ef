from __future__ import annotations

from cnf_feedback.hookspecs import hookimpl
from cnf_feedback.types import FeedbackKind, FeedbackRequest


class ExtraPredictionsProvider:
    """Offers fixed predictions and records every notification it receives."""

    def __init__(self, suggestions: list[str]) -> None:
        self.suggestions = suggestions
        self.accepted: list[list[str]] = []
        self.executed: list[tuple[str, bool]] = []

    @hookimpl
    def provide_predictions(self, input_text: str) -> list[str]:
        folded = input_text.casefold()
        return [item for item in self.suggestions if item.casefold().startswith(folded)]

    @hookimpl
    def accepts_feedback(self, kind: FeedbackKind) -> bool:
        return kind in (FeedbackKind.COMMAND_LINE_ACCEPTED, FeedbackKind.COMMAND_LINE_EXECUTED)

    @hookimpl
    def on_command_line_accepted(self, history: list[str]) -> None:
        self.accepted.append(list(history))

    @hookimpl
    def on_command_line_executed(self, command_line: str, success: bool) -> None:
        self.executed.append((command_line, success))


class BrokenProvider:
    @hookimpl
    def provide_predictions(self, input_text: str) -> list[str]:
        raise RuntimeError("predictions broke on purpose")

    @hookimpl
    async def provide_feedback(self, request: FeedbackRequest) -> None:
        raise RuntimeError("feedback broke on purpose")


class ErrorRecorder:
    def __init__(self) -> None:
        self.stages: list[str] = []

    @hookimpl
    def on_error(self, stage: str, error: Exception, request: FeedbackRequest | None) -> None:
        _ = error, request
        self.stages.append(stage)

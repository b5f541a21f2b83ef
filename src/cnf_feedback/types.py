"""Shared value types."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, StrEnum


class LineKind(Enum):
    """Shape of one line of helper output, in classification priority order."""

    ACTION = "action"
    CANDIDATE = "candidate"
    TEXT = "text"
    BLANK = "blank"


class FeedbackLayout(StrEnum):
    """Presentation hint passed to the host along with a feedback item."""

    COMPACT = "compact"
    EXPANDED = "expanded"


class FeedbackKind(StrEnum):
    """Host notifications a predictor may subscribe to."""

    COMMAND_LINE_ACCEPTED = "command_line_accepted"
    COMMAND_LINE_EXECUTED = "command_line_executed"
    SUGGESTION_DISPLAYED = "suggestion_displayed"
    SUGGESTION_ACCEPTED = "suggestion_accepted"


@dataclass(frozen=True)
class ParseResult:
    """Typed view of one helper run."""

    header: str | None = None
    actions: list[str] = field(default_factory=list)
    footer: str | None = None
    suggestions: list[str] = field(default_factory=list)
    # snap info follow-ups derived from action lines
    extra_suggestions: list[str] = field(default_factory=list)

    @property
    def present(self) -> bool:
        return bool(self.header) and bool(self.actions)

    @property
    def candidates(self) -> list[str]:
        """Everything worth offering as a prediction, in order."""
        return [*self.suggestions, *self.extra_suggestions]


@dataclass(frozen=True)
class FeedbackItem:
    """Explanation returned to the host after a failed command."""

    header: str
    actions: list[str]
    footer: str | None = None
    layout: FeedbackLayout = FeedbackLayout.COMPACT

    @classmethod
    def from_result(cls, result: ParseResult) -> FeedbackItem:
        if not result.present:
            raise ValueError("cannot build feedback from an absent parse result")
        header = result.header or ""
        if result.footer:
            return cls(
                header=header,
                actions=list(result.actions),
                footer=result.footer,
                layout=FeedbackLayout.EXPANDED,
            )
        return cls(header=header, actions=list(result.actions))


@dataclass(frozen=True)
class FeedbackRequest:
    """One failed-command event as reported by the host."""

    target: str
    command_line: str = ""
    error_id: str = "CommandNotFoundException"
    platform_supported: bool = True


@dataclass(frozen=True)
class ToolOutput:
    """Captured output of one helper invocation."""

    stderr_lines: list[str] = field(default_factory=list)
    stdout_text: str = ""
    exit_status: int = 0

"""Pluggy hook namespace and provider hook specifications."""

from __future__ import annotations

import pluggy

from cnf_feedback.types import FeedbackItem, FeedbackKind, FeedbackRequest

CNF_HOOK_NAMESPACE = "cnf_feedback"
hookspec = pluggy.HookspecMarker(CNF_HOOK_NAMESPACE)
hookimpl = pluggy.HookimplMarker(CNF_HOOK_NAMESPACE)


class FeedbackHookSpecs:
    """Hook contract for feedback and prediction providers."""

    @hookspec(firstresult=True)
    def provide_feedback(self, request: FeedbackRequest) -> FeedbackItem | None:
        """Explain one failed command. May be a coroutine function."""

    @hookspec
    def provide_predictions(self, input_text: str) -> list[str] | None:
        """Return predictive suggestions for partially typed input."""

    @hookspec
    def accepts_feedback(self, kind: FeedbackKind) -> bool | None:
        """Tell the host whether this provider wants one kind of notification."""

    @hookspec
    def on_command_line_accepted(self, history: list[str]) -> None:
        """Observe the user accepting a command line."""

    @hookspec
    def on_command_line_executed(self, command_line: str, success: bool) -> None:
        """Observe a command line finishing."""

    @hookspec
    def on_suggestion_displayed(self, session: int, count_or_index: int) -> None:
        """Observe suggestions being shown."""

    @hookspec
    def on_suggestion_accepted(self, session: int, accepted_suggestion: str) -> None:
        """Observe one suggestion being accepted."""

    @hookspec
    def on_error(self, stage: str, error: Exception, request: FeedbackRequest | None) -> None:
        """Observe provider errors from any stage."""

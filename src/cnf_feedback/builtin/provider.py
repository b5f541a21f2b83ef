"""Builtin feedback and prediction provider backed by command-not-found."""

from __future__ import annotations

import uuid

from loguru import logger

from cnf_feedback.config import Settings
from cnf_feedback.errors import (
    FeedbackUnavailableError,
    TargetNotApplicableError,
    UnsupportedPlatformError,
    UtilityNotFoundError,
)
from cnf_feedback.hookspecs import hookimpl
from cnf_feedback.parser import parse_output
from cnf_feedback.session import SuggestionSession
from cnf_feedback.types import FeedbackItem, FeedbackKind, FeedbackRequest, ParseResult
from cnf_feedback.utility import ProcessRunner, SubprocessRunner, UtilityLocator, helper_arguments

COMMAND_NOT_FOUND_ERROR_ID = "CommandNotFoundException"
PROVIDER_ID = uuid.UUID("47013747-cb9d-4ebc-9f02-f32b8ab19d48")


class CommandNotFoundProvider:
    """Explain unknown commands and predict the remediation the user types next.

    One instance lives for one shell session. It owns the cached helper
    location and the suggestion session.
    """

    id = PROVIDER_ID
    name = "cmd-not-found"
    description = "The built-in feedback/prediction source for the Linux command utility."

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        runner: ProcessRunner | None = None,
        locator: UtilityLocator | None = None,
        session: SuggestionSession | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.runner = runner or SubprocessRunner()
        self.locator = locator or UtilityLocator(self.settings.utility_paths)
        self.session = session or SuggestionSession()

    @hookimpl
    async def provide_feedback(self, request: FeedbackRequest) -> FeedbackItem | None:
        with logger.contextualize(command=request.target):
            logger.debug("feedback.requested command_line={!r}", request.command_line)
            try:
                result = await self.explain(request)
            except (FeedbackUnavailableError, OSError) as exc:
                logger.debug("feedback.unavailable reason={} detail={}", type(exc).__name__, exc)
                return None

            if not result.present:
                logger.debug("feedback.absent actions={} header={!r}", len(result.actions), result.header)
                return None

            self.session.record(result.candidates)
            logger.debug("feedback.recorded suggestions={}", len(result.candidates))
            return FeedbackItem.from_result(result)

    async def explain(self, request: FeedbackRequest) -> ParseResult:
        """Run the helper for ``request`` and parse what it printed.

        Raises:
            FeedbackUnavailableError: the request is not one the helper can explain.
        """

        self._check_applicable(request)
        utility = self.locator.resolve()
        if utility is None:
            raise UtilityNotFoundError(", ".join(str(path) for path in self.locator.candidates))

        args = helper_arguments(request.target.strip(), no_failure_msg=self.settings.no_failure_msg)
        output = await self.runner.run(str(utility), args)
        logger.debug("feedback.helper_exited status={} lines={}", output.exit_status, len(output.stderr_lines))
        return parse_output(output.stderr_lines, output.stdout_text)

    def _check_applicable(self, request: FeedbackRequest) -> None:
        if not request.platform_supported:
            raise UnsupportedPlatformError("command-not-found helper is Linux only")
        if request.error_id != COMMAND_NOT_FOUND_ERROR_ID:
            raise TargetNotApplicableError(f"error {request.error_id} is not a missing command")
        target = request.target.strip()
        if not target:
            raise TargetNotApplicableError("empty target")
        if self.is_script(target):
            raise TargetNotApplicableError(f"{target} is a script")

    def is_script(self, target: str) -> bool:
        if "/" in target:
            return True
        folded = target.casefold()
        return any(folded.endswith(suffix) for suffix in self.settings.script_suffixes)

    @hookimpl
    def provide_predictions(self, input_text: str) -> list[str]:
        return self.session.match(input_text)

    @hookimpl
    def accepts_feedback(self, kind: FeedbackKind) -> bool:
        return kind == FeedbackKind.COMMAND_LINE_ACCEPTED

    @hookimpl
    def on_command_line_accepted(self, history: list[str]) -> None:
        _ = history
        self.session.clear()

    @hookimpl
    def on_command_line_executed(self, command_line: str, success: bool) -> None:
        _ = command_line, success

    @hookimpl
    def on_suggestion_displayed(self, session: int, count_or_index: int) -> None:
        _ = session, count_or_index

    @hookimpl
    def on_suggestion_accepted(self, session: int, accepted_suggestion: str) -> None:
        _ = session, accepted_suggestion

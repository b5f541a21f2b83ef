"""Host-side framework that wires providers into a shell session."""

from __future__ import annotations

import asyncio
from typing import Any

import pluggy
from loguru import logger

from cnf_feedback.builtin import CommandNotFoundProvider
from cnf_feedback.concurrency import run_until_stopped, stopped_by
from cnf_feedback.config import Settings
from cnf_feedback.errors import ConfigurationError
from cnf_feedback.hook_runtime import HookRuntime
from cnf_feedback.hookspecs import CNF_HOOK_NAMESPACE, FeedbackHookSpecs
from cnf_feedback.types import FeedbackItem, FeedbackKind, FeedbackRequest
from cnf_feedback.utility import ProcessRunner

BUILTIN_PLUGIN_NAME = "builtin:cmd-not-found"

_NOTIFICATION_HOOKS: dict[FeedbackKind, str] = {
    FeedbackKind.COMMAND_LINE_ACCEPTED: "on_command_line_accepted",
    FeedbackKind.COMMAND_LINE_EXECUTED: "on_command_line_executed",
    FeedbackKind.SUGGESTION_DISPLAYED: "on_suggestion_displayed",
    FeedbackKind.SUGGESTION_ACCEPTED: "on_suggestion_accepted",
}


class FeedbackFramework:
    """Provider registry plus the three inbound operations a shell needs.

    Construct one per shell session and drop it with the session.
    """

    def __init__(self, settings: Settings | None = None, *, runner: ProcessRunner | None = None) -> None:
        self.settings = settings or Settings()
        self._runner = runner
        self._plugin_manager = pluggy.PluginManager(CNF_HOOK_NAMESPACE)
        self._plugin_manager.add_hookspecs(FeedbackHookSpecs)
        self._hook_runtime = HookRuntime(self._plugin_manager)
        self._failed_plugins: dict[str, str] = {}
        self.builtin: CommandNotFoundProvider | None = None

    @property
    def failed_plugins(self) -> dict[str, str]:
        return dict(self._failed_plugins)

    @property
    def plugin_names(self) -> list[str]:
        return [name for name, _ in self._plugin_manager.list_name_plugin()]

    def load_plugins(self, *, entry_points: bool = True) -> None:
        """Register the builtin provider, then third-party ones from entry points."""

        self._failed_plugins = {}
        if self._plugin_manager.get_plugin(BUILTIN_PLUGIN_NAME) is None:
            try:
                provider = CommandNotFoundProvider(self.settings, runner=self._runner)
            except ConfigurationError as exc:
                self._failed_plugins[BUILTIN_PLUGIN_NAME] = str(exc)
                logger.warning("plugin.load_failed name={} reason={}", BUILTIN_PLUGIN_NAME, exc)
            else:
                self.builtin = provider
                self._plugin_manager.register(provider, name=BUILTIN_PLUGIN_NAME)

        if not entry_points:
            return
        try:
            loaded = self._plugin_manager.load_setuptools_entrypoints(CNF_HOOK_NAMESPACE)
        except Exception as exc:
            self._failed_plugins["entrypoints"] = str(exc)
            logger.opt(exception=True).warning("plugin.load_failed group={}", CNF_HOOK_NAMESPACE)
            return
        logger.debug("plugin.entrypoints_loaded count={}", loaded)

    def register(self, plugin: Any, name: str) -> None:
        """Register one provider object; failures are recorded, not raised."""

        try:
            self._plugin_manager.register(plugin, name=name)
        except Exception as exc:
            self._failed_plugins[name] = str(exc)
            logger.opt(exception=True).warning("plugin.register_failed name={}", name)

    def unload_plugins(self) -> None:
        for name, plugin in list(self._plugin_manager.list_name_plugin()):
            self._plugin_manager.unregister(plugin=plugin, name=name)
        self.builtin = None

    async def request_feedback(
        self,
        request: FeedbackRequest,
        stop_event: asyncio.Event | None = None,
    ) -> FeedbackItem | None:
        """Ask providers to explain one failed command.

        Returns None when nobody could, or when ``stop_event`` fired first.
        """

        try:
            value = await run_until_stopped(
                self._hook_runtime.call_first("provide_feedback", request=request),
                stop_event,
            )
        except asyncio.CancelledError:
            if stopped_by(stop_event):
                logger.debug("feedback.cancelled target={}", request.target)
                return None
            raise
        if isinstance(value, FeedbackItem):
            return value
        return None

    def request_predictions(self, input_text: str) -> list[str]:
        """Matches from every provider, in precedence order, without duplicates."""

        seen: set[str] = set()
        suggestions: list[str] = []
        for batch in self._hook_runtime.call_many_sync("provide_predictions", input_text=input_text):
            for suggestion in batch or ():
                if suggestion in seen:
                    continue
                seen.add(suggestion)
                suggestions.append(suggestion)
        return suggestions

    def notify(self, kind: FeedbackKind, **kwargs: Any) -> None:
        """Deliver one host notification to the providers that asked for it."""

        accepting = self._hook_runtime.plugins_accepting("accepts_feedback", kind=kind)
        if not accepting:
            return
        self._hook_runtime.call_many_sync(_NOTIFICATION_HOOKS[kind], only=accepting, **kwargs)

    def notify_command_line_accepted(self, history: list[str] | None = None) -> None:
        self.notify(FeedbackKind.COMMAND_LINE_ACCEPTED, history=list(history or []))

    def hook_report(self) -> dict[str, list[str]]:
        """Return hook implementation summary for diagnostics."""

        return self._hook_runtime.hook_report()

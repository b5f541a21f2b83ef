"""Hook execution runtime with per-provider fault isolation."""

from __future__ import annotations

import inspect
from typing import Any

import pluggy
from loguru import logger

from cnf_feedback.types import FeedbackRequest


class HookRuntime:
    """Safe wrapper around pluggy hook execution."""

    def __init__(self, plugin_manager: pluggy.PluginManager) -> None:
        self._plugin_manager = plugin_manager

    async def call_first(self, hook_name: str, **kwargs: Any) -> Any:
        """Run hook implementations in precedence order and return first non-None value."""

        for impl in self._iter_hookimpls(hook_name):
            value = await self._invoke_impl_async(hook_name=hook_name, impl=impl, kwargs=kwargs)
            if value is _SKIP_VALUE:
                continue
            if value is not None:
                return value
        return None

    def call_many_sync(self, hook_name: str, *, only: set[str] | None = None, **kwargs: Any) -> list[Any]:
        """Run all implementations and collect successful return values.

        ``only`` restricts the call to the named plugins.
        """

        results: list[Any] = []
        for impl in self._iter_hookimpls(hook_name):
            if only is not None and impl.plugin_name not in only:
                continue
            value = self._invoke_impl_sync(hook_name=hook_name, impl=impl, kwargs=kwargs)
            if value is _SKIP_VALUE:
                continue
            results.append(value)
        return results

    def plugins_accepting(self, hook_name: str, **kwargs: Any) -> set[str]:
        """Names of plugins whose ``hook_name`` implementation returned True."""

        accepted: set[str] = set()
        for impl in self._iter_hookimpls(hook_name):
            value = self._invoke_impl_sync(hook_name=hook_name, impl=impl, kwargs=kwargs)
            if value is True:
                accepted.add(impl.plugin_name)
        return accepted

    def notify_error(self, *, stage: str, error: Exception, request: FeedbackRequest | None) -> None:
        """Call on_error hooks, swallowing observer failures."""

        logger.opt(exception=error).debug("hook.failed stage={}", stage)
        for impl in self._iter_hookimpls("on_error"):
            call_kwargs = self._kwargs_for_impl(impl, {"stage": stage, "error": error, "request": request})
            try:
                value = impl.function(**call_kwargs)
            except Exception:
                logger.opt(exception=True).warning(
                    "hook.on_error_failed stage={} provider={}",
                    stage,
                    impl.plugin_name or "<unknown>",
                )
                continue
            if inspect.isawaitable(value):
                _close_awaitable(value)
                logger.warning(
                    "hook.async_not_supported hook=on_error provider={}",
                    impl.plugin_name or "<unknown>",
                )

    def hook_report(self) -> dict[str, list[str]]:
        """Build a hook->providers mapping for diagnostics."""

        report: dict[str, list[str]] = {}
        for hook_name, hook_caller in sorted(self._plugin_manager.hook.__dict__.items()):
            if hook_name.startswith("_") or not hasattr(hook_caller, "get_hookimpls"):
                continue
            provider_names = [impl.plugin_name for impl in reversed(hook_caller.get_hookimpls())]
            if provider_names:
                report[hook_name] = provider_names
        return report

    async def _invoke_impl_async(self, *, hook_name: str, impl: Any, kwargs: dict[str, Any]) -> Any:
        call_kwargs = self._kwargs_for_impl(impl, kwargs)
        try:
            value = impl.function(**call_kwargs)
            if inspect.isawaitable(value):
                value = await value
        except Exception as error:
            self.notify_error(
                stage=f"{hook_name}:{impl.plugin_name or '<unknown>'}",
                error=error,
                request=_request_from_kwargs(kwargs),
            )
            return _SKIP_VALUE
        return value

    def _invoke_impl_sync(self, *, hook_name: str, impl: Any, kwargs: dict[str, Any]) -> Any:
        call_kwargs = self._kwargs_for_impl(impl, kwargs)
        try:
            value = impl.function(**call_kwargs)
        except Exception as error:
            self.notify_error(
                stage=f"{hook_name}:{impl.plugin_name or '<unknown>'}",
                error=error,
                request=_request_from_kwargs(kwargs),
            )
            return _SKIP_VALUE
        if inspect.isawaitable(value):
            _close_awaitable(value)
            logger.warning(
                "hook.async_not_supported hook={} provider={}",
                hook_name,
                impl.plugin_name or "<unknown>",
            )
            return _SKIP_VALUE
        return value

    def _iter_hookimpls(self, hook_name: str) -> list[Any]:
        hook = getattr(self._plugin_manager.hook, hook_name, None)
        if hook is None or not hasattr(hook, "get_hookimpls"):
            return []
        return list(reversed(hook.get_hookimpls()))

    @staticmethod
    def _kwargs_for_impl(impl: Any, kwargs: dict[str, Any]) -> dict[str, Any]:
        return {name: kwargs[name] for name in impl.argnames if name in kwargs}


def _request_from_kwargs(kwargs: dict[str, Any]) -> FeedbackRequest | None:
    request = kwargs.get("request")
    if isinstance(request, FeedbackRequest):
        return request
    return None


def _close_awaitable(value: Any) -> None:
    close = getattr(value, "close", None)
    if callable(close):
        close()


_SKIP_VALUE = object()

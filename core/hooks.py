"""Before/after fetch hook registry."""

import inspect
from collections.abc import Awaitable, Callable
from typing import Any

from core.signals import AfterFetchSignal, BeforeFetchSignal

BeforeFetchHook = Callable[[BeforeFetchSignal], Awaitable[None] | None]
AfterFetchHook = Callable[[AfterFetchSignal], Awaitable[None] | None]


class PrerenderHooks:
    """Ordered lists of callbacks run around the backend fetch.

    Hooks may be plain functions or coroutine functions. They run one after
    another in registration order; their return values are ignored.
    """

    def __init__(
        self,
        before_fetch: list[BeforeFetchHook] | None = None,
        after_fetch: list[AfterFetchHook] | None = None,
    ) -> None:
        self.before_fetch: list[BeforeFetchHook] = list(before_fetch or [])
        self.after_fetch: list[AfterFetchHook] = list(after_fetch or [])

    def on_before_fetch(self, hook: BeforeFetchHook) -> BeforeFetchHook:
        """Register a before-fetch hook (usable as a decorator)."""
        self.before_fetch.append(hook)
        return hook

    def on_after_fetch(self, hook: AfterFetchHook) -> AfterFetchHook:
        """Register an after-fetch hook (usable as a decorator)."""
        self.after_fetch.append(hook)
        return hook

    async def dispatch_before(self, signal: BeforeFetchSignal) -> BeforeFetchSignal:
        for hook in self.before_fetch:
            await _call(hook, signal)
        return signal

    async def dispatch_after(self, signal: AfterFetchSignal) -> None:
        for hook in self.after_fetch:
            await _call(hook, signal)


async def _call(hook: Callable[[Any], Any], signal: Any) -> None:
    result = hook(signal)
    if inspect.isawaitable(result):
        await result

"""Ordered strategy chain: first success wins, every attempt isolated."""

import logging
from typing import Awaitable, Callable, Optional, Sequence

from .contracts import Query, ResolverResult

Strategy = Callable[[Query], Awaitable[ResolverResult]]
Terminal = Callable[[Query], str]


class FallbackChain:
    """
    Tries strategies in order until one returns a succeeded result.

    A strategy that raises is logged and skipped. When nothing succeeds, the
    last declined result that still carries text wins (resolvers use this for
    their own sentinels); failing that, the terminal callable supplies the text.
    """

    def __init__(self, name: str, strategies: Sequence[Strategy], terminal: Terminal):
        if not strategies:
            raise ValueError("FallbackChain requires at least one strategy")
        self.name = name
        self.strategies = list(strategies)
        self.terminal = terminal
        self.log = logging.getLogger("fallback")

    async def run(self, query: Query) -> ResolverResult:
        last_declined: Optional[ResolverResult] = None
        for strategy in self.strategies:
            label = getattr(strategy, "__name__", repr(strategy))
            try:
                result = await strategy(query)
            except Exception as e:
                self.log.warning("%s: strategy %s failed: %s", self.name, label, e)
                continue
            if result is None:
                continue
            if result.succeeded and result.text:
                self.log.debug("%s: strategy %s answered", self.name, label)
                return result
            self.log.info("%s: strategy %s declined", self.name, label)
            if result.text:
                last_declined = result
        if last_declined is not None:
            return last_declined
        return ResolverResult.declined(self.terminal(query))

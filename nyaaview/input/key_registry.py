"""Reusable key-combo registry primitives."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

KeyAction = Callable[[], Awaitable[bool]]


@dataclass(frozen=True)
class KeyComboBinding:
    """Mapping from one or more key tokens to a single action coroutine."""

    combos: tuple[str, ...]
    handler: KeyAction


class KeyComboRegistry:
    """Small key-dispatch table keyed by exact key tokens."""

    def __init__(self) -> None:
        self._handlers: dict[str, KeyAction] = {}

    def register_binding(self, binding: KeyComboBinding) -> KeyComboRegistry:
        """Register one binding, overwriting existing handlers for same combos."""
        for combo in binding.combos:
            self._handlers[combo] = binding.handler
        return self

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        """Register multiple bindings and return ``self`` for fluent usage."""
        for binding in bindings:
            self.register_binding(binding)
        return self

    def __contains__(self, key: str) -> bool:
        return key in self._handlers

    async def dispatch(self, key: str) -> bool | None:
        """Await bound handler for ``key``; ``None`` means the key is unbound."""
        handler = self._handlers.get(key)
        if handler is None:
            return None
        return await handler()

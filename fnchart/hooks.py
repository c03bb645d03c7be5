"""Callback registries for chart lifecycle notifications."""

from __future__ import annotations

import logging
import warnings
from typing import Any, Callable, Dict, Hashable, Optional

logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


class HookRegistry:
    """
    Ordered set of callbacks fired with a single event payload.

    Hooks run in registration order. A failing hook is reported (warning plus
    a logged traceback) and does not prevent the remaining hooks, or the
    transition that fired them, from running.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._hooks: Dict[Hashable, Callable[[Any], Any]] = {}
        self._hook_counter: int = 0

    def add_hook(self, callback: Callable[[Any], Any], hook_id: Optional[Hashable] = None) -> Hashable:
        """
        Register ``callback`` and return its hook id.

        Parameters
        ----------
        callback : callable
            Called with the event payload.
        hook_id : hashable, optional
            Explicit identifier; re-using an id replaces the previous callback.

        Returns
        -------
        hashable
            The hook id, ``"<name>:<n>"`` when generated.
        """
        if not callable(callback):
            raise TypeError(f"{self.name} hook must be callable, got {type(callback).__name__}")
        if hook_id is None:
            self._hook_counter += 1
            hook_id = f"{self.name}:{self._hook_counter}"
        self._hooks[hook_id] = callback
        return hook_id

    def remove_hook(self, hook_id: Hashable) -> bool:
        """Unregister a hook; return whether it existed."""
        return self._hooks.pop(hook_id, None) is not None

    def get_hooks(self) -> Dict[Hashable, Callable[[Any], Any]]:
        return self._hooks.copy()

    def __contains__(self, hook_id: Hashable) -> bool:
        return hook_id in self._hooks

    def __len__(self) -> int:
        return len(self._hooks)

    def fire(self, event: Any) -> None:
        for h_id, callback in list(self._hooks.items()):
            try:
                callback(event)
            except Exception as e:
                logger.exception("%s hook %s failed", self.name, h_id)
                warnings.warn(f"Hook {h_id} failed: {e}")


__all__ = ["HookRegistry"]

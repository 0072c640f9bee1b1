"""Key press to action bindings."""

from typing import Any, Callable, List

from ...infrastructure.logging import LoggerMixin


class KeyBinding:
    """Handle of a single binding; unbinding ends its lifetime."""

    def __init__(self, binder: "KeyBinder", key: str, callback: Callable[[], Any]) -> None:
        self._binder = binder
        self.key = key
        self.callback = callback
        self.active = True

    def unbind(self) -> None:
        """Remove the binding. Calling it again is a no-op."""
        if self.active:
            self.active = False
            self._binder._remove(self)

    def __enter__(self) -> "KeyBinding":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.unbind()


class KeyBinder(LoggerMixin):
    """Dispatches key presses to bound callbacks.

    Key names are compared case-insensitively, so ``"Escape"`` and
    ``"escape"`` address the same key.
    """

    def __init__(self) -> None:
        self._bindings: List[KeyBinding] = []

    def bind(self, key: str, callback: Callable[[], Any]) -> KeyBinding:
        """Invoke ``callback`` whenever ``key`` is pressed, until unbound.

        Args:
            key: Key name, e.g. "Enter".
            callback: Zero-argument action.

        Returns:
            Binding handle; also usable as a context manager.
        """
        binding = KeyBinding(self, key.lower(), callback)
        self._bindings.append(binding)
        self.logger.debug(f"Bound key {key}")
        return binding

    def dispatch(self, key: str) -> bool:
        """Run every callback bound to ``key``.

        Args:
            key: Key name that was pressed.

        Returns:
            True if at least one callback ran.
        """
        key = key.lower()
        # Callbacks may unbind themselves or others while running
        matching = [b for b in self._bindings if b.key == key]
        ran = False
        for binding in matching:
            if binding.active:
                binding.callback()
                ran = True
        return ran

    def _remove(self, binding: KeyBinding) -> None:
        self._bindings.remove(binding)
        self.logger.debug(f"Unbound key {binding.key}")

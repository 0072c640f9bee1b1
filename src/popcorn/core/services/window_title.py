"""Window title with scoped overrides."""

from typing import Any, Callable, Optional

from ...config.models import Config
from ...infrastructure.logging import LoggerMixin


class TitleOverride:
    """A held title override. Releasing restores the default title once."""

    def __init__(self, window_title: "WindowTitle", title: str) -> None:
        self._window_title = window_title
        self.title = title
        self.released = False

    def release(self) -> None:
        """Restore the default title. Subsequent calls do nothing."""
        if self.released:
            return
        self.released = True
        self._window_title._set(self._window_title.default)

    def __enter__(self) -> "TitleOverride":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.release()


class WindowTitle(LoggerMixin):
    """Title of the hosting window or terminal."""

    def __init__(self, config: Config) -> None:
        """Initialize window title.

        Args:
            config: Application configuration.
        """
        self.default = config.ui.default_title
        self.current = self.default
        self.on_change: Optional[Callable[[str], None]] = None

    def override(self, title: str) -> TitleOverride:
        """Show ``title`` until the returned override is released."""
        self._set(title)
        return TitleOverride(self, title)

    def _set(self, title: str) -> None:
        self.current = title
        self.logger.debug(f"Window title set to {title!r}")
        if self.on_change is not None:
            self.on_change(title)

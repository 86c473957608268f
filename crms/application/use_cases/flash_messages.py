"""
Flash Messages - Transient notices shown after user actions.

Success and warning notices clear themselves after a fixed delay. A newer
notice of the same level cancels the pending clear of the previous one,
so every notice stays visible for the full delay.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional


logger = logging.getLogger(__name__)

DEFAULT_CLEAR_DELAY = 3.0  # seconds


class NoticeLevel(Enum):
    """Severity of a notice."""
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class ActionResult:
    """Outcome of a user action, returned instead of raising."""
    ok: bool
    message: str = ""
    level: NoticeLevel = NoticeLevel.SUCCESS
    redirect_to: Optional[str] = None

    @classmethod
    def success(cls, message: str = "", redirect_to: Optional[str] = None) -> "ActionResult":
        return cls(ok=True, message=message, level=NoticeLevel.SUCCESS, redirect_to=redirect_to)

    @classmethod
    def warning(cls, message: str) -> "ActionResult":
        return cls(ok=False, message=message, level=NoticeLevel.WARNING)

    @classmethod
    def failure(cls, message: str) -> "ActionResult":
        return cls(ok=False, message=message, level=NoticeLevel.ERROR)


class FlashMessages:
    """
    Holder for the current success, warning and error notices.

    Errors stay until cleared explicitly (usually when the next action
    starts); success and warning notices expire on their own.
    """

    AUTO_CLEARED = (NoticeLevel.SUCCESS, NoticeLevel.WARNING)

    def __init__(
        self,
        clear_delay: float = DEFAULT_CLEAR_DELAY,
        on_change: Optional[Callable[[], None]] = None,
    ) -> None:
        """
        Initialize the holder.

        Args:
            clear_delay: Seconds before auto-cleared notices disappear.
            on_change: Called whenever a notice appears or disappears.
        """
        self.clear_delay = clear_delay
        self.on_change = on_change
        self._messages: dict[NoticeLevel, Optional[str]] = {level: None for level in NoticeLevel}
        self._timers: dict[NoticeLevel, asyncio.TimerHandle] = {}

    @property
    def success(self) -> Optional[str]:
        return self._messages[NoticeLevel.SUCCESS]

    @property
    def warning(self) -> Optional[str]:
        return self._messages[NoticeLevel.WARNING]

    @property
    def error(self) -> Optional[str]:
        return self._messages[NoticeLevel.ERROR]

    def set_success(self, message: str) -> None:
        self._set(NoticeLevel.SUCCESS, message)

    def set_warning(self, message: str) -> None:
        self._set(NoticeLevel.WARNING, message)

    def set_error(self, message: str) -> None:
        self._set(NoticeLevel.ERROR, message)

    def report(self, result: ActionResult) -> None:
        """Show the notice matching an action result."""
        if result.message:
            self._set(result.level, result.message)

    def clear_error(self) -> None:
        self._clear(NoticeLevel.ERROR)

    def clear(self) -> None:
        """Drop every notice and pending clear."""
        for level in NoticeLevel:
            self._cancel_timer(level)
            self._messages[level] = None
        self._notify()

    def _set(self, level: NoticeLevel, message: str) -> None:
        self._messages[level] = message
        if level in self.AUTO_CLEARED:
            self._schedule_clear(level)
        self._notify()

    def _schedule_clear(self, level: NoticeLevel) -> None:
        self._cancel_timer(level)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running loop; %s notice will not expire", level.value)
            return
        self._timers[level] = loop.call_later(self.clear_delay, self._clear, level)

    def _cancel_timer(self, level: NoticeLevel) -> None:
        timer = self._timers.pop(level, None)
        if timer:
            timer.cancel()

    def _clear(self, level: NoticeLevel) -> None:
        self._timers.pop(level, None)
        if self._messages[level] is None:
            return
        self._messages[level] = None
        self._notify()

    def _notify(self) -> None:
        if not self.on_change:
            return
        try:
            self.on_change()
        except Exception as e:
            logger.error(f"Notice callback error: {e}")

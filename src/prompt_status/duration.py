from __future__ import annotations
from collections.abc import Callable
from dataclasses import dataclass, field
import logging
import math
import time

log = logging.getLogger(__name__)


@dataclass
class DurationState:
    #: When the command currently running started, as seconds since the epoch,
    #: or `None` if no command has started since the last prompt
    start_timestamp: float | None = None

    #: The formatted duration of the most recently finished command, or `None`
    #: if no command ran before the current prompt
    formatted: str | None = None


@dataclass
class DurationTracker:
    """
    Times commands between the shell's pre-execution hook
    (`on_command_start()`) and its pre-prompt hook (`on_prompt_return()`)
    """

    state: DurationState = field(default_factory=DurationState)
    clock: Callable[[], float] = time.time

    @classmethod
    def resume(
        cls, start: float | None, clock: Callable[[], float] = time.time
    ) -> DurationTracker:
        """
        Construct a tracker for a command that started at ``start`` (a
        timestamp carried over by the shell), or for no command at all if
        ``start`` is `None`
        """
        return cls(state=DurationState(start_timestamp=start), clock=clock)

    def on_command_start(self) -> None:
        self.state.start_timestamp = self.clock()

    def on_prompt_return(self) -> str | None:
        """
        Stop timing the current command and return its formatted duration.  If
        no command was started since the last call, return `None`.
        """
        start = self.state.start_timestamp
        if start is None:
            self.state.formatted = None
            return None
        self.state.start_timestamp = None
        self.state.formatted = format_duration(self.clock() - start)
        return self.state.formatted


def format_duration(seconds: float) -> str:
    """
    Format a duration in seconds at a precision appropriate to its magnitude:

    >>> format_duration(3661)
    '1h1m'
    >>> format_duration(75)
    '1m15s'
    >>> format_duration(12.34)
    '12.34s'
    >>> format_duration(1.234)
    '1.234s'
    >>> format_duration(0.0007)
    '1ms'
    """
    if seconds >= 3600:
        hours, rem = divmod(int(seconds), 3600)
        return f"{hours}h{rem // 60}m"
    elif seconds >= 60:
        minutes, secs = divmod(int(seconds), 60)
        return f"{minutes}m{secs}s"
    elif seconds >= 10:
        return f"{seconds:.2f}s"
    elif seconds >= 1:
        return f"{seconds:.3f}s"
    else:
        # Clock steps can make the elapsed time negative, and rounding must not
        # carry over into the seconds band
        return f"{min(max(round(seconds * 1000), 0), 999)}ms"


def parse_timestamp(s: str | None) -> float | None:
    """
    Parse a timestamp as produced by the shell's ``$EPOCHREALTIME``, which uses
    the locale's decimal separator.  Return `None` if ``s`` is empty or not a
    number.
    """
    if not s:
        return None
    try:
        ts = float(s.strip().replace(",", "."))
    except ValueError:
        ts = math.nan
    if not math.isfinite(ts):
        log.debug("Ignoring unparseable command start timestamp %r", s)
        return None
    return ts


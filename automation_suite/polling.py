from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .errors import PollTimeoutError


@dataclass(frozen=True)
class PollResult:
    attempts: int
    value: Any


def poll_until(
    check: Callable[[], Any],
    *,
    action: Optional[Callable[[], Any]] = None,
    max_attempts: int = 5,
    interval_s: float = 5.0,
    sleep: Callable[[float], Any] = time.sleep,
    message: str = "Condition not met",
) -> PollResult:
    """
    Repeat action -> sleep -> check until `check` returns a truthy value.

    Runs at most `max_attempts` checks. Raises PollTimeoutError with
    `message` when every check came back falsy.
    """
    if max_attempts <= 0:
        raise ValueError("max_attempts must be > 0")
    if interval_s < 0:
        raise ValueError("interval_s must be >= 0")

    for attempt in range(1, max_attempts + 1):
        if action is not None:
            action()
        if interval_s > 0:
            sleep(interval_s)
        value = check()
        if value:
            return PollResult(attempts=attempt, value=value)
    raise PollTimeoutError(message, attempts=max_attempts)

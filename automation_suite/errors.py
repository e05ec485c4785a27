from __future__ import annotations

from typing import Optional


class StepFailure(AssertionError):
    """
    Explicit, fatal failure of the current step.

    Subclasses AssertionError so behave reports it as a failed step rather
    than an errored one.
    """


class ElementNotFoundError(StepFailure):
    def __init__(self, locator: object, *, timeout_s: Optional[float] = None) -> None:
        detail = f" within {timeout_s:g}s" if timeout_s is not None else ""
        super().__init__(f"Element not found{detail}: {locator!r}")
        self.locator = locator
        self.timeout_s = timeout_s


class PollTimeoutError(StepFailure):
    def __init__(self, message: str, *, attempts: int) -> None:
        super().__init__(message)
        self.attempts = attempts


class SlotUnavailableError(StepFailure):
    pass


class SuiteConfigError(ValueError):
    pass

"""Tests for poll_until."""
import pytest

from automation_suite.errors import PollTimeoutError, StepFailure
from automation_suite.polling import poll_until


def test_stops_at_first_truthy_check():
    """Test that polling stops as soon as the check passes."""
    checks = iter([0, 0, 1, 1])
    actions = []
    sleeps = []
    result = poll_until(
        lambda: next(checks),
        action=lambda: actions.append("tap"),
        sleep=sleeps.append,
    )
    assert result.attempts == 3
    assert result.value == 1
    assert actions == ["tap", "tap", "tap"]
    assert sleeps == [5.0, 5.0, 5.0]


def test_raises_after_max_attempts():
    """Test that a check which never passes fails after five attempts."""
    calls = []

    def check():
        calls.append(1)
        return 0

    with pytest.raises(PollTimeoutError) as exc:
        poll_until(check, sleep=lambda _s: None, message="Call not received")
    assert len(calls) == 5
    assert exc.value.attempts == 5
    assert str(exc.value) == "Call not received"
    assert isinstance(exc.value, StepFailure)


def test_zero_interval_never_sleeps():
    """Test that a zero interval skips sleeping."""
    sleeps = []
    poll_until(lambda: True, interval_s=0, sleep=sleeps.append)
    assert sleeps == []


def test_invalid_arguments():
    """Test argument validation."""
    with pytest.raises(ValueError):
        poll_until(lambda: True, max_attempts=0)
    with pytest.raises(ValueError):
        poll_until(lambda: True, interval_s=-1)

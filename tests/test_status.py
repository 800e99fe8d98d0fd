"""Tests for transient status messages."""

import pytest

from src.notifications import StatusKind, StatusNotifier


class FakeTimer:
    """Stands in for threading.Timer; fire() runs the callback."""

    def __init__(self, interval, function):
        self.interval = interval
        self.function = function
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        self.function()


class TimerRecorder:
    def __init__(self):
        self.timers = []

    def __call__(self, interval, function):
        timer = FakeTimer(interval, function)
        self.timers.append(timer)
        return timer


@pytest.fixture
def timers():
    return TimerRecorder()


@pytest.fixture
def notifier(timers):
    return StatusNotifier(dismiss_after=3.0, timer_factory=timers)


class TestStatusNotifier:
    """Tests for StatusNotifier."""

    def test_nothing_shown_initially(self, notifier):
        """No message until one is shown."""
        assert notifier.current is None

    def test_show_arms_a_timer(self, notifier, timers):
        """Showing a message starts one daemon timer for the dismiss delay."""
        message = notifier.show("Receipt saved")

        assert notifier.current is message
        assert message.kind == StatusKind.SUCCESS
        assert len(timers.timers) == 1
        assert timers.timers[0].interval == 3.0
        assert timers.timers[0].started
        assert timers.timers[0].daemon

    def test_timer_clears_message(self, notifier, timers):
        """When the timer fires, the message goes away."""
        notifier.show("Receipt saved")
        timers.timers[0].fire()
        assert notifier.current is None

    def test_new_message_cancels_previous_timer(self, notifier, timers):
        """Only one timer is live at a time."""
        notifier.show("first")
        notifier.show("second", StatusKind.ERROR)

        first_timer, second_timer = timers.timers
        assert first_timer.cancelled
        assert not second_timer.cancelled
        assert notifier.current.text == "second"
        assert notifier.current.kind == StatusKind.ERROR

    def test_stale_timer_does_not_clear_newer_message(self, notifier, timers):
        """A timer that fires late only clears its own message."""
        notifier.show("first")
        notifier.show("second")

        timers.timers[0].fire()

        assert notifier.current.text == "second"

    def test_dismiss(self, notifier, timers):
        """dismiss() clears the message and cancels the timer."""
        notifier.show("Receipt saved")
        notifier.dismiss()

        assert notifier.current is None
        assert timers.timers[0].cancelled

    def test_dismiss_without_message(self, notifier):
        """dismiss() with nothing shown is harmless."""
        notifier.dismiss()
        assert notifier.current is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

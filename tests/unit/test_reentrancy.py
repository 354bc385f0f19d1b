"""Tests for the reentrancy guard."""

import pytest

from zapper.errors import ReentrancyViolation, ZapError
from zapper.reentrancy import ReentrancyLock, nonreentrant


class Guarded:
    """Minimal object with a guarded method that can call back into itself."""

    def __init__(self):
        self._reentrancy_lock = ReentrancyLock()
        self.callback = None

    @nonreentrant
    def run(self, value):
        """Return value, calling the callback first if one is set."""
        if self.callback is not None:
            self.callback()
        return value


class TestReentrancyLock:
    """Tests for ReentrancyLock."""

    def test_acquire_and_release(self):
        lock = ReentrancyLock()
        with lock:
            assert lock.locked
        assert not lock.locked

    def test_nested_entry_raises(self):
        lock = ReentrancyLock()
        with lock:
            with pytest.raises(ReentrancyViolation):
                with lock:
                    pass
            assert lock.locked
        assert not lock.locked

    def test_released_on_exception(self):
        lock = ReentrancyLock()
        with pytest.raises(RuntimeError):
            with lock:
                raise RuntimeError("boom")
        assert not lock.locked

    def test_violation_is_zap_error(self):
        assert issubclass(ReentrancyViolation, ZapError)

    def test_separate_locks_are_independent(self):
        """A lock held by one owner does not block another owner's lock."""
        first, second = ReentrancyLock(), ReentrancyLock()
        with first:
            with second:
                assert first.locked and second.locked
        assert not first.locked and not second.locked


class TestNonreentrant:
    """Tests for the nonreentrant decorator."""

    def test_passes_through(self):
        assert Guarded().run(7) == 7

    def test_preserves_metadata(self):
        assert Guarded.run.__name__ == "run"
        assert "callback" in Guarded.run.__doc__

    def test_reentry_raises(self):
        guarded = Guarded()
        guarded.callback = lambda: guarded.run(1)

        with pytest.raises(ReentrancyViolation):
            guarded.run(0)

    def test_usable_after_violation(self):
        guarded = Guarded()
        guarded.callback = lambda: guarded.run(1)
        with pytest.raises(ReentrancyViolation):
            guarded.run(0)

        guarded.callback = None
        assert guarded.run(2) == 2

    def test_instances_are_independent(self):
        """Another instance's guard does not block."""
        first, second = Guarded(), Guarded()
        first.callback = lambda: second.run(1)
        assert first.run(0) == 0

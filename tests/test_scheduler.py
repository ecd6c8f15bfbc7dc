"""Tests for keyguide.core.scheduler – virtual clock and Qt timers."""

from __future__ import annotations

from typing import List

from keyguide.core.scheduler import ManualScheduler, QtScheduler


# ---------------------------------------------------------------------------
# ManualScheduler
# ---------------------------------------------------------------------------

class TestManualScheduler:
    def test_clock_starts_at_zero(self):
        assert ManualScheduler().now == 0

    def test_fires_when_due(self):
        s = ManualScheduler()
        fired: List[str] = []
        s.call_later(100, lambda: fired.append("x"))
        s.advance(99)
        assert fired == []
        s.advance(1)
        assert fired == ["x"]
        assert s.now == 100

    def test_deadline_order(self):
        s = ManualScheduler()
        fired: List[str] = []
        s.call_later(300, lambda: fired.append("late"))
        s.call_later(100, lambda: fired.append("early"))
        assert s.advance(500) == 2
        assert fired == ["early", "late"]

    def test_equal_deadlines_fire_in_scheduling_order(self):
        s = ManualScheduler()
        fired: List[int] = []
        for i in range(5):
            s.call_later(200, lambda i=i: fired.append(i))
        s.advance(200)
        assert fired == [0, 1, 2, 3, 4]

    def test_cancelled_timer_never_fires(self):
        s = ManualScheduler()
        fired: List[str] = []
        handle = s.call_later(100, lambda: fired.append("x"))
        handle.cancel()
        assert not handle.active
        s.advance(1000)
        assert fired == []

    def test_handle_inactive_after_firing(self):
        s = ManualScheduler()
        handle = s.call_later(10, lambda: None)
        assert handle.active
        s.advance(10)
        assert not handle.active

    def test_callbacks_can_reschedule_within_advance(self):
        s = ManualScheduler()
        fired: List[int] = []

        def tick():
            fired.append(s.now)
            if len(fired) < 3:
                s.call_later(100, tick)

        s.call_later(100, tick)
        s.advance(1000)
        assert fired == [100, 200, 300]
        assert s.now == 1000

    def test_callback_sees_deadline_as_now(self):
        s = ManualScheduler()
        seen: List[int] = []
        s.call_later(40, lambda: seen.append(s.now))
        s.advance(100)
        assert seen == [40]

    def test_pending_count(self):
        s = ManualScheduler()
        s.call_later(10, lambda: None)
        h = s.call_later(20, lambda: None)
        assert s.pending == 2
        h.cancel()
        assert s.pending == 1

    def test_negative_delay_treated_as_zero(self):
        s = ManualScheduler()
        fired: List[str] = []
        s.call_later(-5, lambda: fired.append("x"))
        s.advance(0)
        assert fired == ["x"]


# ---------------------------------------------------------------------------
# QtScheduler
# ---------------------------------------------------------------------------

class TestQtScheduler:
    def test_fires_on_event_loop(self, qt_app):
        from PySide6.QtTest import QTest

        s = QtScheduler()
        fired: List[str] = []
        handle = s.call_later(10, lambda: fired.append("x"))
        assert handle.active
        QTest.qWait(200)
        assert fired == ["x"]
        assert not handle.active
        assert s.pending == 0

    def test_cancel_prevents_firing(self, qt_app):
        from PySide6.QtTest import QTest

        s = QtScheduler()
        fired: List[str] = []
        handle = s.call_later(10, lambda: fired.append("x"))
        handle.cancel()
        QTest.qWait(100)
        assert fired == []
        assert s.pending == 0

    def test_cancel_after_fire_is_safe(self, qt_app):
        from PySide6.QtTest import QTest

        s = QtScheduler()
        handle = s.call_later(0, lambda: None)
        QTest.qWait(50)
        handle.cancel()
        assert not handle.active

"""Tests for the animation scheduler."""

import pytest

from glyphmind.visualizers.scheduler import (
    AnimationScheduler,
    AnimationState,
    ManualScheduler,
    PygameScheduler,
)


@pytest.fixture
def host():
    return ManualScheduler(frame_time=0.1)


@pytest.fixture
def loop(host):
    return AnimationScheduler(host)


class TestManualScheduler:
    def test_schedule_and_step(self, host):
        calls = []
        host.schedule(lambda: calls.append(host.now()))
        assert host.pending == 1
        host.step()
        assert calls == [pytest.approx(0.1)]
        assert host.pending == 0

    def test_cancel(self, host):
        calls = []
        handle = host.schedule(lambda: calls.append(1))
        host.cancel(handle)
        host.cancel(handle)
        host.step()
        assert calls == []

    def test_rescheduled_callbacks_wait_for_next_step(self, host):
        calls = []

        def again():
            calls.append(1)
            host.schedule(again)

        host.schedule(again)
        host.step()
        assert calls == [1]
        host.step(3)
        assert len(calls) == 4


class TestAnimationScheduler:
    def test_starts_idle(self, loop):
        assert loop.state is AnimationState.IDLE
        assert not loop.is_running

    def test_elapsed_time_passed_to_frames(self, loop, host):
        times = []
        loop.start(times.append)
        host.step(3)
        assert times == [pytest.approx(0.1), pytest.approx(0.2), pytest.approx(0.3)]
        assert loop.frames_drawn == 3

    def test_restart_resets_clock(self, loop, host):
        times = []
        loop.start(times.append)
        host.step(5)
        loop.start(times.append)
        host.step()
        assert times[-1] == pytest.approx(0.1)

    def test_double_start_single_pending(self, loop, host):
        loop.start(lambda t: None)
        loop.start(lambda t: None)
        assert host.pending == 1

    def test_stop_start_cycles_keep_one_callback(self, loop, host):
        for _ in range(3):
            loop.stop()
            loop.stop()
            loop.start(lambda t: None)
            loop.start(lambda t: None)
        assert host.pending == 1
        host.step(2)
        assert host.pending == 1

    def test_stop_prevents_drawing(self, loop, host):
        frames = []
        loop.start(frames.append)
        host.step()
        loop.stop()
        host.step(3)
        assert len(frames) == 1
        assert loop.state is AnimationState.IDLE
        assert host.pending == 0

    def test_stop_is_idempotent(self, loop):
        loop.stop()
        loop.stop()
        assert loop.state is AnimationState.IDLE

    def test_superseded_callback_ignored(self, loop):
        class LeakyHost(ManualScheduler):
            def cancel(self, handle):
                pass  # cancellation never reaches the host

        host = LeakyHost()
        loop = AnimationScheduler(host)
        first, second = [], []
        loop.start(first.append)
        loop.start(second.append)
        host.step()
        assert first == []
        assert len(second) == 1

    def test_frame_exception_skips_frame(self, loop, host, caplog):
        calls = []

        def flaky(t):
            calls.append(t)
            if len(calls) == 2:
                raise ValueError("boom")

        with caplog.at_level("ERROR", logger="glyphmind.visualizers.scheduler"):
            loop.start(flaky)
            host.step(4)

        assert len(calls) == 4
        assert loop.frames_skipped == 1
        assert loop.frames_drawn == 3
        assert loop.is_running
        assert "boom" in caplog.text

    def test_stop_from_inside_frame(self, loop, host):
        def once(t):
            loop.stop()

        loop.start(once)
        host.step()
        assert not loop.is_running
        assert host.pending == 0


class TestPygameScheduler:
    def test_runs_until_nothing_scheduled(self):
        host = PygameScheduler(fps=1000)
        calls = []

        def tick():
            calls.append(1)
            if len(calls) < 3:
                host.schedule(tick)

        host.schedule(tick)
        host.run()
        assert len(calls) == 3

    def test_quit(self):
        host = PygameScheduler(fps=1000)
        calls = []

        def tick():
            calls.append(1)
            host.schedule(tick)
            if len(calls) == 2:
                host.quit()

        host.schedule(tick)
        host.run()
        assert len(calls) == 2

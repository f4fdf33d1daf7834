"""
Frame scheduling.

The animation loop never sleeps or blocks on its own. It hands a
callback to a host :class:`Scheduler`, which decides when the next frame
happens: a pygame window loop in production, a manual stepper in tests.
"""

import abc
import enum
import logging
import time
from typing import Callable

import pygame

logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


class Scheduler(abc.ABC):
    """Host frame scheduler: runs each scheduled callback once, on its next frame."""

    @abc.abstractmethod
    def schedule(self, callback: Callable[[], None]) -> int:
        """Queue ``callback`` for the next frame and return a cancel handle."""

    @abc.abstractmethod
    def cancel(self, handle: int) -> None:
        """Drop a queued callback. Unknown or already-run handles are ignored."""

    @abc.abstractmethod
    def now(self) -> float:
        """Monotonic time in seconds."""


class _QueueScheduler(Scheduler):
    """Shared handle bookkeeping for the concrete schedulers."""

    def __init__(self):
        self._pending: dict[int, Callable[[], None]] = {}
        self._next_handle = 1

    def schedule(self, callback: Callable[[], None]) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel(self, handle: int) -> None:
        self._pending.pop(handle, None)

    @property
    def pending(self) -> int:
        """Number of callbacks waiting for the next frame."""
        return len(self._pending)

    def run_pending(self) -> int:
        """Run the callbacks queued so far; ones they schedule wait for the next frame."""
        callbacks = list(self._pending.values())
        self._pending.clear()
        for callback in callbacks:
            callback()
        return len(callbacks)


class ManualScheduler(_QueueScheduler):
    """
    Deterministic scheduler for tests and offline rendering.

    Time only moves when :meth:`step` or :meth:`advance` is called.
    """

    def __init__(self, start: float = 0.0, frame_time: float = 1 / 60):
        super().__init__()
        self.time = start
        self.frame_time = frame_time

    def now(self) -> float:
        return self.time

    def advance(self, seconds: float):
        self.time += seconds

    def step(self, frames: int = 1) -> int:
        """Advance one frame time and run pending callbacks, ``frames`` times."""
        ran = 0
        for _ in range(frames):
            self.time += self.frame_time
            ran += self.run_pending()
        return ran


class PygameScheduler(_QueueScheduler):
    """Window loop paced by ``pygame.time.Clock``."""

    def __init__(self, fps: int = 60):
        super().__init__()
        self.fps = fps
        self.clock = pygame.time.Clock()
        self._running = False

    def now(self) -> float:
        return time.perf_counter()

    def quit(self):
        """Make :meth:`run` return after the current frame."""
        self._running = False

    def run(self, on_event: Callable[[pygame.event.Event], None] | None = None):
        """
        Pump events, run due callbacks and flip the display until the
        window closes, :meth:`quit` is called or nothing is scheduled.
        """
        self._running = True
        while self._running:
            # No event queue without an initialized display
            events = pygame.event.get() if pygame.display.get_init() else []
            for event in events:
                if event.type == pygame.QUIT:
                    self._running = False
                elif on_event is not None:
                    on_event(event)

            if not self._running or not self._pending:
                break

            self.run_pending()
            if pygame.display.get_surface() is not None:
                pygame.display.flip()
            self.clock.tick(self.fps)
        self._running = False


class AnimationState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"


class AnimationScheduler:
    """
    Idle -> Running -> Idle frame loop on top of a host Scheduler.

    At most one callback is queued at a time. Every :meth:`start` begins a
    new run; callbacks belonging to an older run do nothing when they fire.
    """

    def __init__(self, scheduler: Scheduler):
        self.scheduler = scheduler
        self.state = AnimationState.IDLE
        self.frames_drawn = 0
        self.frames_skipped = 0
        self._on_frame: FrameCallback | None = None
        self._handle: int | None = None
        self._origin = 0.0
        self._run_id = 0

    @property
    def is_running(self) -> bool:
        return self.state is AnimationState.RUNNING

    def start(self, on_frame: FrameCallback):
        """
        Start calling ``on_frame(elapsed_seconds)`` once per host frame.

        A loop that is already running is replaced, and its clock restarts at 0.
        """
        self._cancel_pending()
        self._run_id += 1
        self._on_frame = on_frame
        self._origin = self.scheduler.now()
        self.frames_drawn = 0
        self.frames_skipped = 0
        self.state = AnimationState.RUNNING
        self._schedule_next(self._run_id)

    def stop(self):
        """Cancel the pending frame and go idle. Safe to call repeatedly."""
        self._cancel_pending()
        self._on_frame = None
        self.state = AnimationState.IDLE

    def _cancel_pending(self):
        if self._handle is not None:
            self.scheduler.cancel(self._handle)
            self._handle = None

    def _schedule_next(self, run_id: int):
        self._handle = self.scheduler.schedule(lambda: self._tick(run_id))

    def _tick(self, run_id: int):
        if run_id != self._run_id or not self.is_running:
            return
        self._handle = None

        elapsed = self.scheduler.now() - self._origin
        try:
            self._on_frame(elapsed)
            self.frames_drawn += 1
        except Exception:
            self.frames_skipped += 1
            logger.exception("Frame at t=%.3fs failed; skipping", elapsed)

        # on_frame may have stopped or restarted the loop
        if run_id == self._run_id and self.is_running and self._handle is None:
            self._schedule_next(run_id)

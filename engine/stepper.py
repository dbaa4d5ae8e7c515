"""
stepper.py — Step Playback Store
=================================
Replays an already generated step list at variable speed.  Engines know
nothing about it: the caller generates the steps and hands the finished
list over with set_steps().

State machine:
    any        →  set_steps() / reset()       →  IDLE      (index 0)
    IDLE|PAUSED →  play()                     →  PLAYING   (COMPLETED if at the last index)
    PLAYING    →  pause()                     →  PAUSED
    PLAYING    →  tick() reaches last index   →  COMPLETED
    any        →  step_backward()             →  PAUSED

Timing:
  tick() is meant to be called from the host's timer / event loop.  While
  PLAYING it advances one index every BASE_TICK_MS / speed milliseconds,
  measured with time.monotonic().  Not thread-safe: drive it from one
  thread.
"""

import time
from enum import Enum
from typing import Callable, Dict, List, Optional

from algorithms.step import AlgorithmStep
from utils.logger import get_logger

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class PlaybackStatus(Enum):
    IDLE      = "idle"
    PLAYING   = "playing"
    PAUSED    = "paused"
    COMPLETED = "completed"


# ---------------------------------------------------------------------------
# Speed (multiplier of the base tick rate)
# ---------------------------------------------------------------------------
MIN_SPEED:    float = 0.25
MAX_SPEED:    float = 4.0
BASE_TICK_MS: float = 1000.0

SPEED_PRESETS: Dict[str, float] = {
    "slow":   0.5,    # teaching mode
    "normal": 1.0,
    "fast":   2.0,
    "turbo":  4.0,    # demo mode
}


def clamp_speed(speed: float) -> float:
    return max(MIN_SPEED, min(MAX_SPEED, speed))


# ---------------------------------------------------------------------------
# PlaybackStore
# ---------------------------------------------------------------------------
class PlaybackStore:
    """
    Attributes:
        steps              : The step list being replayed (never mutated).
        current_step_index : Index of the step currently displayed.
        status             : Current PlaybackStatus.
        speed              : Playback multiplier in [MIN_SPEED, MAX_SPEED].
    """

    def __init__(self, on_step: Optional[Callable[[Optional[AlgorithmStep]], None]] = None):
        self.steps:              List[AlgorithmStep] = []
        self.current_step_index: int                 = 0
        self.status:             PlaybackStatus      = PlaybackStatus.IDLE
        self.speed:              float               = 1.0

        self._subscribers: List[Callable[[Optional[AlgorithmStep]], None]] = []
        if on_step is not None:
            self._subscribers.append(on_step)

        # for auto-play timing
        self._last_tick: float = 0.0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def set_steps(self, steps: List[AlgorithmStep]) -> None:
        """Load a finished run; position 0, IDLE."""
        self.steps              = list(steps)
        self.current_step_index = 0
        self.status             = PlaybackStatus.IDLE
        logger.debug("playback_loaded", steps=len(self.steps))
        self._notify()

    def reset(self) -> None:
        self._move_to(0)
        self.status = PlaybackStatus.IDLE

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        if self.current_step_index >= len(self.steps) - 1:
            self.status = PlaybackStatus.COMPLETED
            return
        self.status     = PlaybackStatus.PLAYING
        self._last_tick = time.monotonic()

    def pause(self) -> None:
        self.status = PlaybackStatus.PAUSED

    def toggle_play(self) -> None:
        if self.status == PlaybackStatus.PLAYING:
            self.pause()
        else:
            self.play()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def step_forward(self) -> bool:
        """Advance one step.  Returns False (and marks COMPLETED) at the end."""
        if self.current_step_index < len(self.steps) - 1:
            if self.status != PlaybackStatus.PLAYING:
                self.status = PlaybackStatus.PAUSED
            self._move_to(self.current_step_index + 1)
            return True
        self.status = PlaybackStatus.COMPLETED
        return False

    def step_backward(self) -> bool:
        """Rewind one step.  Returns False if already at the start."""
        if self.current_step_index <= 0:
            return False
        self.status = PlaybackStatus.PAUSED
        self._move_to(self.current_step_index - 1)
        return True

    def set_current_step_index(self, index: int) -> None:
        """Jump anywhere; out-of-range indices are clamped."""
        if not self.steps:
            self.status = PlaybackStatus.IDLE
            self._move_to(0)
            return

        last    = len(self.steps) - 1
        clamped = max(0, min(last, index))
        if clamped >= last:
            self.status = PlaybackStatus.COMPLETED
        elif self.status == PlaybackStatus.COMPLETED:
            self.status = PlaybackStatus.PAUSED
        self._move_to(clamped)

    # ------------------------------------------------------------------
    # Tick  (call this from your event loop / timer)
    # ------------------------------------------------------------------
    def tick(self, now: Optional[float] = None) -> bool:
        """
        Call periodically (e.g. every 50 ms).  If playing and a full
        interval has elapsed, advances one step.  Returns True if a step
        was taken.
        """
        if self.status != PlaybackStatus.PLAYING:
            return False
        now = time.monotonic() if now is None else now
        if (now - self._last_tick) * 1000.0 < self.interval_ms:
            return False

        self._last_tick = now
        advanced = self.step_forward()
        if self.current_step_index >= len(self.steps) - 1:
            self.status = PlaybackStatus.COMPLETED
        return advanced

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, speed: float) -> None:
        self.speed = clamp_speed(speed)

    def set_speed_preset(self, preset: str) -> None:
        self.set_speed(SPEED_PRESETS.get(preset, 1.0))

    @property
    def interval_ms(self) -> float:
        return BASE_TICK_MS / self.speed

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    def get_current_step(self) -> Optional[AlgorithmStep]:
        if 0 <= self.current_step_index < len(self.steps):
            return self.steps[self.current_step_index]
        return None

    @property
    def is_playing(self) -> bool:
        return self.status == PlaybackStatus.PLAYING

    @property
    def is_completed(self) -> bool:
        return self.status == PlaybackStatus.COMPLETED

    def to_dict(self) -> Dict[str, object]:
        step = self.get_current_step()
        return {
            "current_step_index": self.current_step_index,
            "total_steps":        len(self.steps),
            "status":             self.status.value,
            "speed":              self.speed,
            "step":               step.to_dict() if step is not None else None,
        }

    # ------------------------------------------------------------------
    # Subscribers
    # ------------------------------------------------------------------
    def subscribe(self, callback: Callable[[Optional[AlgorithmStep]], None]) -> Callable[[], None]:
        """Register `callback(step)`; returns a function that unsubscribes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _move_to(self, index: int) -> None:
        changed = index != self.current_step_index
        self.current_step_index = index
        if changed:
            self._notify()

    def _notify(self) -> None:
        step = self.get_current_step()
        for callback in list(self._subscribers):
            callback(step)

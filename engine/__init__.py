"""
engine/
-------
Playback & recording layer.

    from engine import PlaybackStore, Recorder, compare, compare_pathfinding
"""

from engine.stepper  import PlaybackStore, PlaybackStatus, SPEED_PRESETS, MIN_SPEED, MAX_SPEED
from engine.recorder import (
    ComparisonResult,
    PathfindingRow,
    Recorder,
    RunMetrics,
    compare,
    compare_pathfinding,
)

__all__ = [
    "PlaybackStore",
    "PlaybackStatus",
    "SPEED_PRESETS",
    "MIN_SPEED",
    "MAX_SPEED",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "PathfindingRow",
    "compare",
    "compare_pathfinding",
]

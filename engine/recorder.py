"""
recorder.py — Run Recorder & Comparison
========================================
Runs one registered algorithm on one input, keeps every step, and
computes the summary the Analytics panel and Comparison Mode need.
Wall-clock time is measured here, around generate_steps(); the engines
themselves never look at a clock.

Usage:
    rec = Recorder()
    rec.start("quick-sort", [5, 2, 8, 1])
    metrics = rec.run_to_completion()   # RunMetrics
    store = rec.playback()              # PlaybackStore loaded with the steps
    rec.export()                        # JSON-friendly snapshot

Comparison Mode:
    compare(rec1, rec2)          → ComparisonResult for two finished runs
    compare_pathfinding(grid)    → one PathfindingRow per grid variant
"""

import time
from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, List, Optional

from algorithms import AlgoInfo, get_algorithm
from algorithms.base import AlgorithmEngine
from algorithms.exceptions import EngineNotInitializedError, UnknownAlgorithmError
from algorithms.grid_pathfinding import GridPathfindingEngine, PathVariant
from algorithms.step import AlgorithmMetrics, AlgorithmStep
from engine.stepper import PlaybackStore
from utils.logger import get_logger

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Metrics dataclass — what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:          str   = ""
    algo_label:        str   = ""
    category:          str   = ""
    total_steps:       int   = 0          # number of steps generated
    total_operations:  int   = 0
    total_comparisons: int   = 0
    peak_memory:       int   = 0          # element-count proxy, not bytes
    wall_time_ms:      float = 0.0        # wall-clock time of generate_steps()
    time_complexity:   str   = ""         # average case
    space_complexity:  str   = ""
    # grid pathfinding only
    path_found:        Optional[bool] = None
    path_length:       Optional[int]  = None   # edges, not cells
    cells_visited:     Optional[int]  = None


# ---------------------------------------------------------------------------
# ComparisonResult — side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived
    winner_operations:  str = ""   # which algo did fewer operations
    winner_comparisons: str = ""
    winner_steps:       str = ""
    winner_time:        str = ""


@dataclass
class PathfindingRow:
    variant:      str
    label:        str
    elapsed_ms:   float
    steps:        int
    operations:   int
    comparisons:  int
    peak_memory:  int
    path_length:  int
    found:        bool


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        steps   : Full list of steps from the run.
        metrics : Computed RunMetrics (available after run_to_completion).
        engine  : The engine instance driving this run.
    """

    def __init__(self):
        self.steps:   List[AlgorithmStep]        = []
        self.metrics: Optional[RunMetrics]       = None
        self.engine:  Optional[AlgorithmEngine]  = None

        self._algo_info: Optional[AlgoInfo] = None

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(self, algo_key: str, input_data: Any) -> None:
        """Create and initialise the engine for this run (validates the input)."""
        info = get_algorithm(algo_key)
        if info is None:
            raise UnknownAlgorithmError(f"Unknown algorithm '{algo_key}'")

        engine = info.engine()
        engine.initialize(info.descriptor, input_data)

        self._algo_info = info
        self.engine     = engine
        self.steps      = []
        self.metrics    = None

    def run_to_completion(self) -> RunMetrics:
        """Generate every step and compute metrics."""
        if self.engine is None:
            raise EngineNotInitializedError("Call start() first.")

        started = time.perf_counter()
        self.steps = self.engine.generate_steps()
        wall_ms = (time.perf_counter() - started) * 1000

        self.metrics = self._compute_metrics(self.engine.get_metrics(), wall_ms)
        logger.info(
            "run_completed",
            algorithm=self.metrics.algo_key,
            steps=self.metrics.total_steps,
            operations=self.metrics.total_operations,
            comparisons=self.metrics.total_comparisons,
            wall_time_ms=self.metrics.wall_time_ms,
        )
        return self.metrics

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    def playback(self) -> PlaybackStore:
        """A fresh PlaybackStore holding this run's steps."""
        store = PlaybackStore()
        store.set_steps(self.steps)
        return store

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        info = self._algo_info
        return {
            "algo_key":   info.key if info else "",
            "pseudocode": list(info.pseudocode) if info else [],
            "metrics":    asdict(self.metrics) if self.metrics else {},
            "steps":      [s.to_dict() for s in self.steps],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, summary: AlgorithmMetrics, wall_ms: float) -> RunMetrics:
        info = self._algo_info
        metrics = RunMetrics(
            algo_key=info.key if info else "",
            algo_label=info.label if info else "",
            category=info.category if info else "",
            total_steps=summary.execution_steps,
            total_operations=summary.total_operations,
            total_comparisons=summary.total_comparisons,
            peak_memory=summary.peak_memory_usage,
            wall_time_ms=round(wall_ms, 3),
            time_complexity=summary.time_complexity.average,
            space_complexity=summary.space_complexity.average,
        )
        if isinstance(self.engine, GridPathfindingEngine):
            metrics.path_found    = self.engine.found
            metrics.path_length   = self.engine.path_length
            metrics.cells_visited = len(self.engine.visited_order)
        return metrics


# ---------------------------------------------------------------------------
# Comparison helpers
# ---------------------------------------------------------------------------
def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two completed Recorders, produce a ComparisonResult."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()

    def winner(l_val, r_val, l_key, r_key):
        if l_val == r_val:
            return "tie"
        return l_key if l_val < r_val else r_key

    return ComparisonResult(
        left=l,
        right=r,
        winner_operations =winner(l.total_operations, r.total_operations, l.algo_label, r.algo_label),
        winner_comparisons=winner(l.total_comparisons, r.total_comparisons, l.algo_label, r.algo_label),
        winner_steps      =winner(l.total_steps, r.total_steps, l.algo_label, r.algo_label),
        winner_time       =winner(l.wall_time_ms, r.wall_time_ms, l.algo_label, r.algo_label),
    )


def compare_pathfinding(grid: Any, variants: Optional[List[PathVariant]] = None) -> List[PathfindingRow]:
    """Run each grid variant on the same grid; one row per variant, in order."""
    rows: List[PathfindingRow] = []
    for variant in variants or list(PathVariant):
        rec = Recorder()
        rec.start(variant.value, _with_variant(grid, variant))
        m = rec.run_to_completion()
        rows.append(PathfindingRow(
            variant=variant.value,
            label=variant.label,
            elapsed_ms=m.wall_time_ms,
            steps=m.total_steps,
            operations=m.total_operations,
            comparisons=m.total_comparisons,
            peak_memory=m.peak_memory,
            path_length=m.path_length or 0,
            found=bool(m.path_found),
        ))
    return rows


def _with_variant(grid: Any, variant: PathVariant) -> Any:
    if isinstance(grid, dict):
        patched = {k: v for k, v in grid.items() if k not in ("variant", "algorithm")}
        patched["variant"] = variant
        return patched
    return replace(grid, variant=variant)

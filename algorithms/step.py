"""
step.py — Algorithm Step Snapshot
==================================
Every engine emits an ordered list of AlgorithmStep objects.
A step is a frozen-in-time picture of everything the visualizer
needs to render one frame and narrate it:

    • What kind of event happened (compare / swap / insert / …)
    • Which positions it concerns (affected_indices)
    • The container BEFORE and AFTER the event
    • The cumulative counters at the moment the step was produced
    • Which line of pseudocode is executing right now
    • Free-form variables + a detailed explanation for Learning Mode

Design decisions:
  - Steps are plain frozen dataclasses.  They are SNAPSHOTS: the engine
    is the only writer, playback / renderers are pure readers.
  - `snapshot()` deep-copies data and metadata so no two states alias —
    every step stays inspectable after the whole run has finished.
  - `StepBuilder` is the single point where steps are created.  It owns
    the counters, hands out `step-<n>` ids and tracks peak memory, so the
    counter semantics are identical for every engine.
"""

import copy
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence


# ---------------------------------------------------------------------------
# Enums — string values match what renderers / the explanation layer expect
# ---------------------------------------------------------------------------
class StepType(Enum):
    COMPARE   = "compare"
    SWAP      = "swap"
    INSERT    = "insert"
    DELETE    = "delete"
    UPDATE    = "update"
    HIGHLIGHT = "highlight"
    TRAVERSE  = "traverse"


class StructureKind(Enum):
    ARRAY       = "array"
    LINKED_LIST = "linked-list"
    TREE        = "tree"
    GRAPH       = "graph"
    STACK       = "stack"
    QUEUE       = "queue"
    HASH_TABLE  = "hash-table"


# ---------------------------------------------------------------------------
# Static algorithm metadata
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class ComplexityInfo:
    best:        str
    average:     str
    worst:       str
    explanation: str = ""


@dataclass(frozen=True)
class AlgorithmDescriptor:
    """
    Read-only card handed to an engine at initialize() time.
    Engines only use it to annotate metrics; they never branch on it.
    """

    id:               str
    name:             str
    category:         str
    time_complexity:  ComplexityInfo
    space_complexity: ComplexityInfo


# ---------------------------------------------------------------------------
# Snapshots & metrics
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class DataStructureState:
    kind:     StructureKind
    data:     Any
    metadata: Dict[str, Any] = field(default_factory=dict)


def snapshot(kind: StructureKind, data: Any, metadata: Optional[Dict[str, Any]] = None) -> DataStructureState:
    """Build a state whose data/metadata share nothing with the caller's objects."""
    return DataStructureState(
        kind=kind,
        data=copy.deepcopy(data),
        metadata=copy.deepcopy(metadata) if metadata else {},
    )


@dataclass(frozen=True)
class StepMetrics:
    operation_count:  int
    comparison_count: int
    memory_usage:     int
    time_complexity:  str


@dataclass(frozen=True)
class AlgorithmStep:
    """
    Attributes:
        id                   : "step-<n>", n = 0-based position in the run.
        type                 : StepType — drives the default visual treatment.
        description          : One-line summary of the event.
        pseudocode_line      : 0-based index into the engine's PSEUDOCODE.
        affected_indices     : Positions the step is about (flattened row*cols+col for grids).
        before_state         : Container before the event.
        after_state          : Container after the event (== before for read-only steps).
        metrics              : Cumulative counters at the moment of the step.
        detailed_explanation : Longer "why" text for Learning Mode (optional).
        variables            : Temporary variables worth showing (optional).
    """

    id:                   str
    type:                 StepType
    description:          str
    pseudocode_line:      int
    affected_indices:     List[int]
    before_state:         DataStructureState
    after_state:          DataStructureState
    metrics:              StepMetrics
    detailed_explanation: Optional[str]            = None
    variables:            Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly form used by the recorder export and the web API."""
        return {
            "id":                   self.id,
            "type":                 self.type.value,
            "description":          self.description,
            "detailed_explanation": self.detailed_explanation,
            "pseudocode_line":      self.pseudocode_line,
            "affected_indices":     list(self.affected_indices),
            "before_state":         _state_to_dict(self.before_state),
            "after_state":          _state_to_dict(self.after_state),
            "metrics": {
                "operation_count":  self.metrics.operation_count,
                "comparison_count": self.metrics.comparison_count,
                "memory_usage":     self.metrics.memory_usage,
                "time_complexity":  self.metrics.time_complexity,
            },
            "variables":            _jsonable(self.variables) if self.variables is not None else None,
        }


@dataclass(frozen=True)
class AlgorithmMetrics:
    total_operations:  int
    total_comparisons: int
    peak_memory_usage: int
    execution_steps:   int
    time_complexity:   ComplexityInfo
    space_complexity:  ComplexityInfo

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_operations":  self.total_operations,
            "total_comparisons": self.total_comparisons,
            "peak_memory_usage": self.peak_memory_usage,
            "execution_steps":   self.execution_steps,
            "time_complexity":   self.time_complexity.__dict__.copy(),
            "space_complexity":  self.space_complexity.__dict__.copy(),
        }


# ---------------------------------------------------------------------------
# StepBuilder — the only way steps enter a run
# ---------------------------------------------------------------------------
class StepBuilder:
    """
    Counter + id bookkeeping shared by every engine.

    Usage inside an engine's step generator:
        self.sb.count_comparison()
        state = snapshot(StructureKind.ARRAY, arr)
        yield self.sb.build(StepType.COMPARE, "Comparing 5 and 2", 3, [0, 1], state, state)
    """

    def __init__(self, time_complexity: str = "O(n)"):
        self.time_complexity = time_complexity
        self.reset()

    def reset(self) -> None:
        self.operation_count:  int = 0
        self.comparison_count: int = 0
        self.peak_memory:      int = 0
        self.emitted:          int = 0

    # -- counters --
    def count_operation(self) -> None:
        self.operation_count += 1

    def count_comparison(self) -> None:
        self.comparison_count += 1

    # -- construction --
    def build(
        self,
        step_type: StepType,
        description: str,
        pseudocode_line: int,
        affected_indices: Sequence[int],
        before: DataStructureState,
        after: DataStructureState,
        explanation: Optional[str] = None,
        variables: Optional[Dict[str, Any]] = None,
        memory: Optional[int] = None,
    ) -> AlgorithmStep:
        """`memory` overrides the proxy taken from `after.data` (grid runs pass their working-set size)."""
        if memory is None:
            memory = memory_usage(after.data)
        if memory > self.peak_memory:
            self.peak_memory = memory

        step = AlgorithmStep(
            id=f"step-{self.emitted}",
            type=step_type,
            description=description,
            pseudocode_line=pseudocode_line,
            affected_indices=list(affected_indices),
            before_state=before,
            after_state=after,
            metrics=StepMetrics(
                operation_count=self.operation_count,
                comparison_count=self.comparison_count,
                memory_usage=memory,
                time_complexity=self.time_complexity,
            ),
            detailed_explanation=explanation,
            variables=copy.deepcopy(variables) if variables is not None else None,
        )
        self.emitted += 1
        return step


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def memory_usage(data: Any) -> int:
    """Element count for sequences, key count for mappings, 1 otherwise."""
    if isinstance(data, (list, tuple)):
        return len(data)
    if isinstance(data, dict):
        return len(data)
    return 1


def _state_to_dict(state: DataStructureState) -> Dict[str, Any]:
    return {
        "kind":     state.kind.value,
        "data":     _jsonable(state.data),
        "metadata": _jsonable(state.metadata),
    }


def _jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, float) and math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return value

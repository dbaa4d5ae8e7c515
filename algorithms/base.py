"""
base.py — Engine Lifecycle
===========================
Every engine follows the same three-call contract:

    engine.initialize(descriptor, input)   # validate + store + reset counters
    steps = engine.generate_steps()        # run to completion, full list
    metrics = engine.get_metrics()         # summary counters

Subclasses supply two things:
  • `_validate(input)`  – check the input shape and return a private,
                          normalised copy (raise InputValidationError).
  • `_generate()`       – a generator yielding AlgorithmStep objects, all
                          built through `self.sb` (the StepBuilder).

The generator style keeps each algorithm readable top-to-bottom (and lets
recursive algorithms `yield from` their sub-calls) while the base class
materialises the complete list — callers never see a partial run.
"""

import math
from abc import ABC, abstractmethod
from typing import Any, Dict, Generator, List, Optional

from algorithms.exceptions import (
    EngineNotInitializedError,
    EngineStateError,
    InputValidationError,
)
from algorithms.step import (
    AlgorithmDescriptor,
    AlgorithmMetrics,
    AlgorithmStep,
    DataStructureState,
    StepBuilder,
    StructureKind,
    snapshot,
)
from utils.logger import get_logger

logger = get_logger(__name__)


class AlgorithmEngine(ABC):
    """
    Attributes:
        descriptor : AlgorithmDescriptor given at initialize() (None before).
        input      : Normalised private copy of the caller's input.
        sb         : StepBuilder holding counters for the current run.
    """

    KIND: StructureKind = StructureKind.ARRAY

    def __init__(self):
        self.descriptor: Optional[AlgorithmDescriptor] = None
        self.input:      Any                           = None
        self.sb:         StepBuilder                   = StepBuilder()
        self._steps:     List[AlgorithmStep]           = []
        self._generated: bool                          = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def initialize(self, descriptor: AlgorithmDescriptor, input_data: Any) -> None:
        """Validate and store the input, reset all bookkeeping."""
        if descriptor is None:
            raise InputValidationError("An algorithm descriptor is required")
        normalised = self._validate(input_data)

        self.descriptor = descriptor
        self.input      = normalised
        self.sb         = StepBuilder(descriptor.time_complexity.average)
        self._steps     = []
        self._generated = False

    def generate_steps(self) -> List[AlgorithmStep]:
        """Run the algorithm to completion and return every step in order."""
        if self.descriptor is None:
            raise EngineNotInitializedError("Algorithm not initialized")
        if self._generated:
            raise EngineStateError(
                f"{type(self).__name__} already generated its steps; call initialize() again"
            )

        logger.debug("generation_started", engine=type(self).__name__, algorithm=self.descriptor.id)
        self._steps = list(self._generate())
        self._generated = True
        logger.debug(
            "generation_finished",
            engine=type(self).__name__,
            steps=len(self._steps),
            operations=self.sb.operation_count,
            comparisons=self.sb.comparison_count,
        )
        return list(self._steps)

    def get_metrics(self) -> AlgorithmMetrics:
        if self.descriptor is None:
            raise EngineNotInitializedError("Algorithm not initialized")
        return AlgorithmMetrics(
            total_operations=self.sb.operation_count,
            total_comparisons=self.sb.comparison_count,
            peak_memory_usage=self.sb.peak_memory,
            execution_steps=len(self._steps),
            time_complexity=self.descriptor.time_complexity,
            space_complexity=self.descriptor.space_complexity,
        )

    @property
    def steps(self) -> List[AlgorithmStep]:
        return list(self._steps)

    # ------------------------------------------------------------------
    # Subclass hooks
    # ------------------------------------------------------------------
    @abstractmethod
    def _validate(self, input_data: Any) -> Any:
        """Return a normalised copy of `input_data` or raise InputValidationError."""

    @abstractmethod
    def _generate(self) -> Generator[AlgorithmStep, None, None]:
        """Yield every step of the run."""

    # ------------------------------------------------------------------
    # Shared helpers
    # ------------------------------------------------------------------
    def _state(self, data: Any, **metadata: Any) -> DataStructureState:
        return snapshot(self.KIND, data, metadata)


# ---------------------------------------------------------------------------
# Input validation helpers
# ---------------------------------------------------------------------------
def is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not (isinstance(value, float) and math.isnan(value))


def require_number_list(value: Any, what: str = "Input") -> List[float]:
    if not isinstance(value, (list, tuple)):
        raise InputValidationError(f"{what} must be an array of numbers")
    for item in value:
        if not is_number(item):
            raise InputValidationError(f"{what} contains a non-numeric value: {item!r}")
    return list(value)


def require_mapping(value: Any, what: str) -> Dict[Any, Any]:
    if not isinstance(value, dict):
        raise InputValidationError(f"{what} must be a mapping")
    return value


class ArrayEngine(AlgorithmEngine):
    """Engines whose input is a plain array of numbers (sorts, BST values)."""

    KIND = StructureKind.ARRAY

    def _validate(self, input_data: Any) -> List[float]:
        return require_number_list(input_data)

    def _sorted_state(self, arr: List[float]) -> DataStructureState:
        return self._state(arr, sorted=True)

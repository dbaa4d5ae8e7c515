import pytest
from typing import Any, List

from algorithms import REGISTRY, get_algorithm
from algorithms.base import AlgorithmEngine
from algorithms.step import AlgorithmStep


def run_engine(key: str, input_data: Any) -> AlgorithmEngine:
    """Fresh engine for `key`, initialised and already run."""
    info = get_algorithm(key)
    engine = info.engine()
    engine.initialize(info.descriptor, input_data)
    engine.generate_steps()
    return engine


def check_step_invariants(key: str, steps: List[AlgorithmStep]) -> None:
    """Properties every run must have, whatever the algorithm."""
    pseudocode = REGISTRY[key].pseudocode
    assert steps, "a run always emits at least one step"

    prev_ops = prev_cmp = 0
    for n, step in enumerate(steps):
        assert step.id == f"step-{n}"
        assert 0 <= step.pseudocode_line < len(pseudocode)
        assert step.metrics.operation_count >= prev_ops
        assert step.metrics.comparison_count >= prev_cmp
        prev_ops = step.metrics.operation_count
        prev_cmp = step.metrics.comparison_count

        assert all(i >= 0 for i in step.affected_indices)
        if isinstance(step.after_state.data, list):
            bound = max(len(step.before_state.data), len(step.after_state.data))
            assert all(i < bound for i in step.affected_indices), step.description


@pytest.fixture
def run():
    return run_engine


@pytest.fixture
def invariants():
    return check_step_invariants

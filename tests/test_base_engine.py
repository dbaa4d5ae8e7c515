import pytest

from algorithms import create_engine, descriptor_for
from algorithms.exceptions import (
    EngineNotInitializedError,
    EngineStateError,
    InputValidationError,
    VisualizerError,
)


class TestLifecycle:
    """initialize → generate_steps → get_metrics contract shared by all engines."""

    def test_generate_before_initialize_raises(self):
        engine = create_engine("bubble-sort")
        with pytest.raises(EngineNotInitializedError, match="Algorithm not initialized"):
            engine.generate_steps()

    def test_metrics_before_initialize_raises(self):
        with pytest.raises(EngineNotInitializedError):
            create_engine("stack").get_metrics()

    def test_second_generation_needs_reinitialize(self):
        engine = create_engine("bubble-sort")
        engine.initialize(descriptor_for("bubble-sort"), [3, 1, 2])
        first = engine.generate_steps()

        with pytest.raises(EngineStateError):
            engine.generate_steps()

        engine.initialize(descriptor_for("bubble-sort"), [3, 1, 2])
        again = engine.generate_steps()
        assert [s.description for s in again] == [s.description for s in first]
        assert engine.get_metrics().total_comparisons == 3

    def test_missing_descriptor_is_rejected(self):
        with pytest.raises(InputValidationError):
            create_engine("bubble-sort").initialize(None, [1])

    def test_invalid_input_leaves_engine_uninitialised(self):
        engine = create_engine("quick-sort")
        with pytest.raises(InputValidationError):
            engine.initialize(descriptor_for("quick-sort"), [1, "two", 3])
        with pytest.raises(EngineNotInitializedError):
            engine.generate_steps()

    def test_errors_share_a_base_class(self):
        assert issubclass(InputValidationError, VisualizerError)
        assert issubclass(InputValidationError, ValueError)
        assert issubclass(EngineStateError, RuntimeError)


class TestSnapshots:

    def test_caller_input_is_never_mutated(self):
        data = [5, 4, 3, 2, 1]
        engine = create_engine("selection-sort")
        engine.initialize(descriptor_for("selection-sort"), data)
        engine.generate_steps()
        assert data == [5, 4, 3, 2, 1]

    def test_states_are_independent(self):
        engine = create_engine("bubble-sort")
        engine.initialize(descriptor_for("bubble-sort"), [2, 1])
        steps = engine.generate_steps()

        steps[0].after_state.data.append(99)
        assert steps[1].before_state.data == [2, 1]
        assert steps[-1].after_state.data == [1, 2]

    def test_returned_list_is_a_copy(self):
        engine = create_engine("bubble-sort")
        engine.initialize(descriptor_for("bubble-sort"), [2, 1])
        steps = engine.generate_steps()
        steps.clear()
        assert engine.steps

    def test_metrics_summarise_the_run(self):
        engine = create_engine("insertion-sort")
        engine.initialize(descriptor_for("insertion-sort"), [4, 3, 2, 1])
        steps = engine.generate_steps()
        metrics = engine.get_metrics()

        assert metrics.execution_steps == len(steps)
        assert metrics.total_operations == steps[-1].metrics.operation_count
        assert metrics.total_comparisons == steps[-1].metrics.comparison_count
        assert metrics.peak_memory_usage == max(s.metrics.memory_usage for s in steps)
        assert metrics.time_complexity.average == "O(n²)"

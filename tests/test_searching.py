import pytest

from algorithms.exceptions import InputValidationError
from algorithms.searching import SearchInput
from algorithms.step import StepType


class TestBinarySearch:

    def test_finds_target_in_worked_example(self, run, invariants):
        engine = run("binary-search", {"array": [1, 2, 3, 5, 8, 9], "target": 8})
        steps = engine.steps
        invariants("binary-search", steps)

        final = steps[-1]
        assert final.description == "Target 8 found at index 4!"
        assert final.affected_indices == [4]
        assert final.after_state.metadata["found"] == 4
        assert engine.get_metrics().total_comparisons == 2

    def test_first_window_spans_the_array(self, run):
        steps = run("binary-search", SearchInput(array=(1, 2, 3, 5, 8, 9), target=8)).steps
        window = steps[1]
        assert window.pseudocode_line == 2
        assert window.affected_indices == [0, 1, 2, 3, 4, 5]
        assert window.after_state.metadata["mid"] == 2
        assert window.after_state.metadata["target"] == 8

    def test_narrowing_steps(self, run):
        steps = run("binary-search", {"array": [1, 2, 3, 5, 8, 9], "target": 1}).steps
        left_halves = [s for s in steps if s.pseudocode_line == 8]
        assert left_halves[0].affected_indices == [0, 1]
        assert steps[-1].after_state.metadata["found"] == 0

    def test_missing_target(self, run):
        engine = run("binary-search", {"array": [1, 3, 5, 7], "target": 4})
        final = engine.steps[-1]
        assert final.pseudocode_line == 10
        assert final.after_state.metadata["notFound"] is True
        assert final.affected_indices == []

    def test_empty_array(self, run):
        engine = run("binary-search", {"array": [], "target": 4})
        assert len(engine.steps) == 2
        assert engine.get_metrics().total_comparisons == 0

    def test_comparisons_are_logarithmic(self, run):
        engine = run("binary-search", {"array": list(range(1024)), "target": 1023})
        assert engine.get_metrics().total_comparisons <= 11


class TestLinearSearch:

    def test_stops_at_first_match(self, run, invariants):
        engine = run("linear-search", {"array": [4, 7, 7, 1], "target": 7})
        steps = engine.steps
        invariants("linear-search", steps)

        compares = [s for s in steps if s.type == StepType.COMPARE]
        assert [s.affected_indices for s in compares] == [[0], [1]]
        assert steps[-1].after_state.metadata["found"] == 1
        assert engine.get_metrics().total_comparisons == 2

    def test_not_found_checks_everything(self, run):
        engine = run("linear-search", {"array": [4, 7, 1], "target": 9})
        assert engine.get_metrics().total_comparisons == 3
        assert engine.steps[-1].description == "Target 9 not found in array"


@pytest.mark.parametrize("bad", [
    [1, 2, 3],
    {"array": [1, 2]},
    {"target": 3},
    {"array": [1, "x"], "target": 3},
    {"array": [1, 2], "target": "3"},
])
def test_search_input_validation(run, bad):
    with pytest.raises(InputValidationError):
        run("binary-search", bad)


@pytest.mark.parametrize("k", range(9))
def test_windows_shrink_around_target(run, k):
    arr = [2, 4, 6, 8, 10, 12, 14, 16, 18]
    steps = run("binary-search", {"array": arr, "target": arr[k]}).steps
    windows = [(s.after_state.metadata["left"], s.after_state.metadata["right"])
               for s in steps if s.pseudocode_line == 2]

    for left, right in windows:
        assert left <= k <= right
    sizes = [right - left for left, right in windows]
    assert sizes == sorted(set(sizes), reverse=True)
    assert steps[-1].after_state.metadata["found"] == k

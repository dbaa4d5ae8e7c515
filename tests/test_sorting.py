import pytest

from algorithms.exceptions import InputValidationError
from algorithms.step import StepType

SORTS = ["bubble-sort", "selection-sort", "insertion-sort", "merge-sort", "quick-sort", "heap-sort"]

INPUTS = [
    [5, 2, 8, 1, 9, 3],
    [1, 2, 3, 4],
    [4, 3, 2, 1],
    [3, 1, 3, 2, 1],
    [-2.5, 7, 0, -2.5],
    [42],
    [],
]


@pytest.mark.parametrize("key", SORTS)
@pytest.mark.parametrize("values", INPUTS)
def test_every_sort_ends_sorted(run, invariants, key, values):
    engine = run(key, values)
    steps = engine.steps

    invariants(key, steps)
    final = steps[-1]
    assert final.type == StepType.HIGHLIGHT
    assert final.after_state.data == sorted(values)
    assert final.after_state.metadata.get("sorted") is True
    assert steps[0].before_state.data == values


@pytest.mark.parametrize("key", SORTS)
def test_swaps_change_only_the_swapped_positions(run, key):
    engine = run(key, [9, 4, 7, 1, 8, 2])
    for step in engine.steps:
        if step.type != StepType.SWAP:
            continue
        before, after = step.before_state.data, step.after_state.data
        untouched = [i for i in range(len(before)) if i not in step.affected_indices]
        assert all(before[i] == after[i] for i in untouched)
        assert sorted(before) == sorted(after)


class TestBubbleSort:

    def test_worked_example(self, run):
        engine = run("bubble-sort", [5, 2, 8, 1, 9, 3])
        steps = engine.steps
        metrics = engine.get_metrics()

        assert steps[-1].after_state.data == [1, 2, 3, 5, 8, 9]
        assert metrics.total_comparisons == 15
        assert metrics.total_operations == 7  # one per inversion
        assert sum(1 for s in steps if s.type == StepType.SWAP) == 7
        assert steps[0].description == "Starting Bubble Sort"
        assert steps[1].type == StepType.COMPARE
        assert steps[1].affected_indices == [0, 1]

    def test_comparison_count_independent_of_order(self, run):
        for values in ([1, 2, 3, 4, 5], [5, 4, 3, 2, 1]):
            assert run("bubble-sort", values).get_metrics().total_comparisons == 10

    def test_each_pass_finalises_the_tail(self, run):
        steps = run("bubble-sort", [3, 2, 1]).steps
        tails = [s.affected_indices for s in steps if s.pseudocode_line == 6]
        assert tails == [[2], [1]]


class TestInsertionSort:

    def test_sorted_input_needs_no_shifts(self, run):
        engine = run("insertion-sort", [1, 2, 3, 4])
        assert not any(s.type == StepType.UPDATE for s in engine.steps)
        assert engine.get_metrics().total_comparisons == 3

    def test_every_key_ends_with_an_insert(self, run):
        engine = run("insertion-sort", [1, 2, 3, 4])
        inserts = [s for s in engine.steps if s.type == StepType.INSERT]
        assert [s.affected_indices for s in inserts] == [[1], [2], [3]]
        assert all(s.before_state.data == s.after_state.data for s in inserts)
        assert engine.get_metrics().total_operations == 3


class TestMergeAndQuick:

    def test_merge_sort_writes_are_updates(self, run):
        steps = run("merge-sort", [4, 1, 3, 2]).steps
        kinds = {s.type for s in steps}
        assert StepType.UPDATE in kinds
        assert StepType.SWAP not in kinds

    def test_quick_sort_announces_pivots(self, run):
        steps = run("quick-sort", [3, 6, 1, 5, 2]).steps
        assert any(s.description.startswith("Selected pivot: 2") for s in steps)

    def test_quick_sort_finishes_left_range_before_right(self, run):
        steps = run("quick-sort", [2, 5, 1, 4, 3]).steps
        calls = [(s.description, s.after_state.metadata["depth"])
                 for s in steps if s.after_state.metadata.get("phase") == "call"]
        assert calls == [("Quick Sort on range [0..4]", 0),
                         ("Quick Sort on range [0..1]", 1),
                         ("Quick Sort on range [3..4]", 1)]

    def test_quick_sort_sorted_input_goes_one_level_per_element(self, run):
        values = list(range(40))
        steps = run("quick-sort", values).steps
        depths = [s.after_state.metadata["depth"] for s in steps
                  if s.after_state.metadata.get("phase") == "call"]
        assert depths == list(range(39))
        assert steps[-1].after_state.data == values


class TestHeapSort:

    def test_extractions_fill_from_the_end(self, run):
        steps = run("heap-sort", [4, 10, 3, 5, 1]).steps
        extractions = [s for s in steps if s.pseudocode_line == 6]
        assert [s.affected_indices for s in extractions] == [[0, 4], [0, 3], [0, 2], [0, 1]]
        assert [s.after_state.data[s.affected_indices[1]] for s in extractions] == [10, 5, 4, 3]

    def test_heap_built_before_extraction(self, run):
        steps = run("heap-sort", [4, 10, 3, 5, 1]).steps
        built = next(s for s in steps if s.description == "Max-heap built")
        assert built.after_state.data[0] == 10


def test_rejects_non_numeric_values(run):
    with pytest.raises(InputValidationError):
        run("bubble-sort", [1, None])
    with pytest.raises(InputValidationError):
        run("heap-sort", [True, 2])
    with pytest.raises(InputValidationError):
        run("merge-sort", "not a list")


@pytest.mark.parametrize("key", SORTS)
def test_consecutive_steps_chain(run, key):
    steps = run(key, [9, 4, 7, 1, 8, 2]).steps
    for prev, nxt in zip(steps, steps[1:]):
        assert prev.after_state.data == nxt.before_state.data


def test_merge_sort_tags_recursion(run):
    steps = run("merge-sort", [4, 1, 3, 2]).steps
    phases = {s.after_state.metadata.get("phase") for s in steps}
    assert {"divide", "merge"} <= phases
    depths = [s.after_state.metadata["depth"] for s in steps if "depth" in s.after_state.metadata]
    assert min(depths) == 0
    assert max(depths) == 1

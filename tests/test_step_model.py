import json

from algorithms.step import (
    StepBuilder,
    StepType,
    StructureKind,
    memory_usage,
    snapshot,
)


def test_snapshot_does_not_alias_caller_data():
    data = [1, 2, 3]
    meta = {"window": [0, 2]}
    state = snapshot(StructureKind.ARRAY, data, meta)

    data.append(4)
    meta["window"].append(9)

    assert state.data == [1, 2, 3]
    assert state.metadata == {"window": [0, 2]}


def test_snapshot_without_metadata_is_empty_dict():
    assert snapshot(StructureKind.STACK, []).metadata == {}


def test_builder_numbers_steps_and_freezes_counters():
    sb = StepBuilder("O(n)")
    state = snapshot(StructureKind.ARRAY, [3, 1])

    first = sb.build(StepType.HIGHLIGHT, "start", 0, [], state, state)
    sb.count_comparison()
    sb.count_operation()
    sb.count_operation()
    second = sb.build(StepType.SWAP, "swap", 1, [0, 1], state, state)

    assert (first.id, second.id) == ("step-0", "step-1")
    assert first.metrics.comparison_count == 0
    assert first.metrics.operation_count == 0
    assert second.metrics.comparison_count == 1
    assert second.metrics.operation_count == 2
    assert second.metrics.time_complexity == "O(n)"


def test_builder_tracks_peak_memory_and_accepts_override():
    sb = StepBuilder()
    small = snapshot(StructureKind.ARRAY, [1])
    big = snapshot(StructureKind.ARRAY, [1, 2, 3, 4])

    sb.build(StepType.HIGHLIGHT, "a", 0, [], small, big)
    assert sb.peak_memory == 4

    step = sb.build(StepType.HIGHLIGHT, "b", 0, [], small, small, memory=10)
    assert step.metrics.memory_usage == 10
    assert sb.peak_memory == 10

    sb.build(StepType.HIGHLIGHT, "c", 0, [], small, small)
    assert sb.peak_memory == 10


def test_variables_are_copied():
    sb = StepBuilder()
    state = snapshot(StructureKind.ARRAY, [])
    variables = {"seen": [1]}
    step = sb.build(StepType.HIGHLIGHT, "x", 0, [], state, state, variables=variables)
    variables["seen"].append(2)
    assert step.variables == {"seen": [1]}


def test_memory_usage_proxy():
    assert memory_usage([1, 2, 3]) == 3
    assert memory_usage({"a": 1, "b": 2}) == 2
    assert memory_usage(None) == 1


def test_to_dict_is_json_serialisable():
    sb = StepBuilder()
    state = snapshot(StructureKind.GRAPH, [0, float("inf")], {"nodes": ("a", "b"), 3: StructureKind.TREE})
    step = sb.build(StepType.UPDATE, "relax", 3, [1], state, state, "why", {"d": float("inf")})

    out = step.to_dict()
    json.dumps(out)

    assert out["type"] == "update"
    assert out["after_state"]["kind"] == "graph"
    assert out["after_state"]["data"] == [0, "Infinity"]
    assert out["after_state"]["metadata"] == {"nodes": ["a", "b"], "3": "tree"}
    assert out["variables"] == {"d": "Infinity"}
    assert out["detailed_explanation"] == "why"

import math
import sys

import pytest

from algorithms.exceptions import InputValidationError
from algorithms.graph_input import Edge, GraphInput, node_order
from algorithms.step import StepType

DIAMOND = {"adjacency": {0: [1, 2], 1: [3], 2: [3], 3: []}, "start": 0}

WEIGHTED = {
    "adjacency": {
        "A": [{"to": "B", "weight": 4}, {"to": "C", "weight": 1}],
        "B": [("D", 1)],
        "C": [Edge("B", 2), Edge("D", 5)],
        "D": [],
        "E": [],
    },
    "start": "A",
}


def _visits(steps):
    return [s.after_state.metadata["current"] for s in steps if s.type == StepType.TRAVERSE]


class TestBFS:

    def test_visit_order(self, run, invariants):
        engine = run("bfs", DIAMOND)
        invariants("bfs", engine.steps)

        assert _visits(engine.steps) == [0, 1, 2, 3]
        assert engine.steps[-1].after_state.data == [0, 1, 2, 3]
        assert engine.get_metrics().total_operations == 4
        assert engine.get_metrics().total_comparisons == 4

    def test_visits_in_hop_distance_order(self, run):
        adjacency = {0: [5, 1], 1: [2], 2: [3], 3: [], 5: [6], 6: [7], 7: [3]}
        order = _visits(run("bfs", {"adjacency": adjacency, "start": 0}).steps)
        hops = {0: 0, 5: 1, 1: 1, 6: 2, 2: 2, 7: 3, 3: 3}
        assert [hops[n] for n in order] == sorted(hops[n] for n in order)
        assert order.index(3) > order.index(2)

    def test_each_node_enqueued_once(self, run):
        steps = run("bfs", DIAMOND).steps
        enqueued = [s.after_state.metadata["enqueued"] for s in steps if s.pseudocode_line == 2]
        assert enqueued == [1, 2, 3]

    def test_unreachable_nodes_are_not_visited(self, run):
        engine = run("bfs", {"adjacency": {"a": ["b"], "b": [], "c": ["a"]}, "start": "a"})
        assert engine.steps[-1].after_state.data == ["a", "b"]


class TestDFS:

    def test_visit_order_and_depth(self, run, invariants):
        steps = run("dfs", GraphInput(adjacency=DIAMOND["adjacency"], start=0)).steps
        invariants("dfs", steps)

        assert _visits(steps) == [0, 1, 3, 2]
        depths = [s.after_state.metadata["depth"] for s in steps if s.type == StepType.TRAVERSE]
        assert depths == [0, 1, 2, 1]

    def test_edge_highlight_precedes_visit(self, run):
        steps = run("dfs", DIAMOND).steps
        for i, step in enumerate(steps):
            if step.type == StepType.TRAVERSE and step.after_state.metadata["current"] != 0:
                assert steps[i - 1].pseudocode_line == 2

    def test_cycles_terminate(self, run):
        engine = run("dfs", {"adjacency": {1: [2], 2: [3], 3: [1]}, "start": 1})
        assert engine.steps[-1].after_state.data == [1, 2, 3]

    def test_long_chain_deeper_than_recursion_limit(self, run):
        n = sys.getrecursionlimit() + 100
        adjacency = {i: [i + 1] for i in range(n)}
        adjacency[n] = []
        engine = run("dfs", {"adjacency": adjacency, "start": 0})

        assert engine.steps[-1].after_state.data == list(range(n + 1))
        deepest = [s for s in engine.steps if s.type == StepType.TRAVERSE][-1]
        assert deepest.after_state.metadata["depth"] == n

    def test_backtracks_to_latest_open_node(self, run):
        adjacency = {0: [1, 4], 1: [2, 3], 2: [], 3: [0], 4: [3]}
        steps = run("dfs", {"adjacency": adjacency, "start": 0}).steps
        assert _visits(steps) == [0, 1, 2, 3, 4]
        edges = [s.description for s in steps if s.pseudocode_line == 2]
        assert edges == ["Traverse edge 0 -> 1", "Traverse edge 1 -> 2",
                         "Traverse edge 1 -> 3", "Traverse edge 0 -> 4"]


class TestDijkstra:

    def test_shortest_distances(self, run, invariants):
        engine = run("dijkstra", WEIGHTED)
        invariants("dijkstra", engine.steps)

        final = engine.steps[-1].after_state
        assert final.metadata["nodes"] == ["A", "B", "C", "D", "E"]
        assert final.data[:4] == [0, 3, 1, 4]
        assert math.isinf(final.data[4])
        assert engine.distances["D"] == 4

    def test_path_reconstruction(self, run):
        engine = run("dijkstra", WEIGHTED)
        assert engine.path_to("D") == ["A", "C", "B", "D"]
        assert engine.path_to("A") == ["A"]
        assert engine.path_to("E") == []

    def test_updates_only_on_strict_improvement(self, run):
        steps = run("dijkstra", WEIGHTED).steps
        updates = [(s.variables["updatedNode"], s.variables["newDistance"])
                   for s in steps if s.type == StepType.UPDATE]
        assert updates == [("B", 4), ("C", 1), ("B", 3), ("D", 6), ("D", 4)]

    def test_nodes_finalised_by_distance(self, run):
        steps = run("dijkstra", WEIGHTED).steps
        picked = [s.variables["node"] for s in steps if s.pseudocode_line == 1]
        assert picked == ["A", "C", "B", "D"]

    @pytest.mark.parametrize("adjacency", [
        {0: [(1, -1)], 1: []},
        {0: [(1, "heavy")], 1: []},
        {0: [(7, 1)], 1: []},
        {0: [1], 1: []},
    ])
    def test_rejects_bad_edges(self, run, adjacency):
        with pytest.raises(InputValidationError):
            run("dijkstra", {"adjacency": adjacency, "start": 0})


@pytest.mark.parametrize("key", ["bfs", "dfs", "dijkstra"])
def test_start_must_exist(run, key):
    with pytest.raises(InputValidationError):
        run(key, {"adjacency": {0: []}, "start": 9})


def test_node_order_puts_numbers_first():
    assert sorted(["b", 10, "a", 2], key=node_order) == [2, 10, "a", "b"]

import pytest

from algorithms import descriptor_for
from algorithms.exceptions import InputValidationError
from algorithms.grid_pathfinding import (
    GRID_COLS,
    GRID_ROWS,
    GridInput,
    GridPathfindingEngine,
    PathVariant,
    empty_walls,
    manhattan,
)
from algorithms.step import StepType

VARIANTS = [v.value for v in PathVariant]


def _walls(rows, cols, blocked):
    return [[(r, c) in blocked for c in range(cols)] for r in range(rows)]


def _open_grid(rows=5, cols=5, **extra):
    grid = {"rows": rows, "cols": cols, "start": (0, 0), "end": (rows - 1, cols - 1)}
    grid.update(extra)
    return grid


# column 2 blocked except the bottom row
DETOUR = _open_grid(walls=_walls(5, 5, {(0, 2), (1, 2), (2, 2), (3, 2)}))
# column 2 fully blocked
SEALED = _open_grid(walls=_walls(5, 5, {(r, 2) for r in range(5)}))


def _assert_valid_path(engine, grid):
    path = engine.final_path
    walls = grid["walls"] if "walls" in grid else empty_walls(grid["rows"], grid["cols"])
    assert path[0] == tuple(grid["start"])
    assert path[-1] == tuple(grid["end"])
    for a, b in zip(path, path[1:]):
        assert manhattan(a, b) == 1
    assert not any(walls[r][c] for r, c in path)


@pytest.mark.parametrize("key", VARIANTS)
class TestEveryVariant:

    def test_open_grid_shortest_path(self, run, invariants, key):
        engine = run(key, _open_grid())
        invariants(key, engine.steps)

        assert engine.found
        assert engine.path_length == 8
        _assert_valid_path(engine, _open_grid())
        assert engine.steps[-1].description == "Path found! Length: 8"

    def test_detour_around_wall(self, run, key):
        engine = run(key, DETOUR)
        assert engine.found
        assert engine.path_length == 8
        assert (4, 2) in engine.final_path
        _assert_valid_path(engine, DETOUR)

    def test_sealed_grid_has_no_path(self, run, key):
        engine = run(key, SEALED)
        final = engine.steps[-1]

        assert not engine.found
        assert engine.final_path == []
        assert engine.path_length == 0
        assert final.type == StepType.HIGHLIGHT
        assert final.description == "No path found from start to end"
        assert final.after_state.data["final_path"] == []
        assert all(c < 2 for _, c in engine.visited_order)

    def test_start_equals_end(self, run, key):
        engine = run(key, {"rows": 3, "cols": 3, "start": (1, 1), "end": (1, 1)})
        assert engine.found
        assert engine.final_path == [(1, 1)]
        assert engine.path_length == 0

    def test_step_shape(self, run, key):
        engine = run(key, DETOUR)
        steps = engine.steps
        assert steps[0].pseudocode_line == 0
        assert steps[-1].pseudocode_line == 4
        for step in steps:
            assert all(0 <= i < 25 for i in step.affected_indices)
            assert step.after_state.metadata["variant"] == key
        path_steps = [s for s in steps if s.type == StepType.UPDATE]
        assert path_steps[0].after_state.data["final_path"] == [(0, 0)]
        assert path_steps[-1].after_state.data["final_path"] == engine.final_path

    def test_peak_memory_is_working_set(self, run, key):
        engine = run(key, _open_grid())
        peak = engine.get_metrics().peak_memory_usage
        assert len(engine.visited_order) <= peak <= 25 * 2


def test_all_variants_agree_on_length(run):
    lengths = {key: run(key, DETOUR).path_length for key in VARIANTS}
    assert set(lengths.values()) == {8}


def test_astar_visits_no_more_than_bfs(run):
    grid = _open_grid(rows=12, cols=12)
    bfs = run("pathfinding-bfs", grid)
    astar = run("pathfinding-astar", grid)
    assert len(astar.visited_order) <= len(bfs.visited_order)


def test_bfs_and_dijkstra_explore_identically(run):
    bfs = run("pathfinding-bfs", DETOUR)
    dij = run("pathfinding-dijkstra", DETOUR)
    assert bfs.visited_order == dij.visited_order
    assert bfs.final_path == dij.final_path


def test_visit_steps_are_sampled(run):
    engine = run("pathfinding-bfs", _open_grid(rows=10, cols=10))
    traverses = [s for s in engine.steps if s.type == StepType.TRAVERSE]
    assert len(traverses) < len(engine.visited_order)
    assert engine.get_metrics().total_operations >= len(engine.visited_order)


def test_defaults_and_dataclass_input():
    engine = GridPathfindingEngine()
    grid = GridInput(rows=GRID_ROWS, cols=GRID_COLS, walls=empty_walls(),
                     start=(0, 0), end=(0, 3), variant=PathVariant.ASTAR)
    engine.initialize(descriptor_for("pathfinding-bfs"), grid)
    engine.generate_steps()
    assert engine.variant is PathVariant.ASTAR
    assert engine.final_path == [(0, 0), (0, 1), (0, 2), (0, 3)]


def test_input_variant_overrides_engine(run):
    engine = run("pathfinding-bfs", _open_grid(variant="pathfinding-astar"))
    assert engine.variant is PathVariant.ASTAR
    assert engine.steps[0].variables["algorithm"] == "A* Search"


def test_input_variant_applies_to_one_run_only():
    engine = GridPathfindingEngine(PathVariant.DIJKSTRA)
    descriptor = descriptor_for("pathfinding-dijkstra")

    engine.initialize(descriptor, _open_grid(variant="pathfinding-astar"))
    engine.generate_steps()
    assert engine.variant is PathVariant.ASTAR

    engine.initialize(descriptor, _open_grid())
    steps = engine.generate_steps()
    assert engine.variant is PathVariant.DIJKSTRA
    assert engine.default_variant is PathVariant.DIJKSTRA
    assert steps[0].variables["algorithm"] == "Dijkstra's Algorithm"


def test_rows_and_cols_default_to_full_grid(run):
    engine = run("pathfinding-astar", {"start": (0, 0), "end": (44, 59)})
    assert engine.steps[0].after_state.data["rows"] == 45
    assert engine.steps[0].after_state.data["cols"] == 60
    assert engine.path_length == 44 + 59


@pytest.mark.parametrize("grid", [
    {"rows": 0, "cols": 5, "start": (0, 0), "end": (0, 1)},
    _open_grid(start=(5, 0)),
    _open_grid(end=[1]),
    _open_grid(start=(0, True)),
    _open_grid(walls=[[False] * 5] * 4),
    _open_grid(walls=_walls(5, 5, {(0, 0)})),
    _open_grid(variant="pathfinding-dfs"),
    [1, 2, 3],
])
def test_invalid_grids(run, grid):
    with pytest.raises(InputValidationError):
        run("pathfinding-bfs", grid)

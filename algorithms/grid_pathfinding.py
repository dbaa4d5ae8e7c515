"""
grid_pathfinding.py — Grid Pathfinding (BFS / Dijkstra / A*)
=============================================================
One best-first search over a rows × cols grid with 4-directional, unit
cost moves.  The three algorithms differ in exactly two places, both
selected by PathVariant:

    priority of an open cell   g (hop count)           BFS, Dijkstra
                               f = g + manhattan(end)   A*
    improvement test           first discovery only     BFS
                               strictly smaller g       Dijkstra, A*

With unit costs BFS and Dijkstra explore identically; they stay separate
variants so each keeps its own label and descriptor.

Node selection is a linear scan of the open set (insertion-ordered, so the
first-seen cell wins ties).  Output is sampled to keep a 45 × 60 grid
renderable:
  • TRAVERSE   for the first visited cell, every VISIT_STEP_INTERVAL-th
               visited cell, and the goal
  • HIGHLIGHT  per discovery, only while the visited count is a multiple
               of VISIT_STEP_INTERVAL
  • UPDATE     while the path is rebuilt: first cell, last cell and every
               PATH_STEP_INTERVAL-th cell
Counters still tick for every visit and every neighbour check.

"No path" is an ordinary outcome: an empty final path plus a closing
HIGHLIGHT saying so.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generator, List, Optional, Tuple

from algorithms.base import AlgorithmEngine, require_mapping
from algorithms.exceptions import InputValidationError
from algorithms.step import AlgorithmStep, StepType, StructureKind


Cell = Tuple[int, int]

VISIT_STEP_INTERVAL: int = 12
PATH_STEP_INTERVAL:  int = 4
GRID_ROWS:           int = 45
GRID_COLS:           int = 60

DIRECTIONS: List[Cell] = [(-1, 0), (1, 0), (0, -1), (0, 1)]

PSEUDOCODE: List[str] = [
    "open ← {start}; g[start] ← 0",             # 0
    "while open: current ← argmin priority(open); visit(current)",  # 1
    "    for nbr in neighbours(current) if not wall: if improves(nbr): came_from[nbr] ← current; open.add(nbr)",  # 2
    "path ← walk came_from from end back to start",  # 3
    "return path (or no path)",                 # 4
]


class PathVariant(Enum):
    BFS      = "pathfinding-bfs"
    DIJKSTRA = "pathfinding-dijkstra"
    ASTAR    = "pathfinding-astar"

    @property
    def label(self) -> str:
        return PATH_LABELS[self]

    @property
    def uses_heuristic(self) -> bool:
        return self is PathVariant.ASTAR

    @property
    def first_discovery_only(self) -> bool:
        return self is PathVariant.BFS


PATH_LABELS: Dict[PathVariant, str] = {
    PathVariant.BFS:      "Breadth-First Search",
    PathVariant.DIJKSTRA: "Dijkstra's Algorithm",
    PathVariant.ASTAR:    "A* Search",
}


@dataclass(frozen=True)
class GridInput:
    """
    Attributes:
        walls   : rows × cols booleans, True = blocked.
        variant : None lets the engine's own variant decide.
    """

    rows:    int
    cols:    int
    walls:   Tuple[Tuple[bool, ...], ...]
    start:   Cell
    end:     Cell
    variant: Optional[PathVariant] = None


def empty_walls(rows: int = GRID_ROWS, cols: int = GRID_COLS) -> Tuple[Tuple[bool, ...], ...]:
    return tuple(tuple(False for _ in range(cols)) for _ in range(rows))


def manhattan(a: Cell, b: Cell) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
class GridPathfindingEngine(AlgorithmEngine):
    """
    Attributes:
        default_variant : Variant chosen at construction; an input naming
                          its own variant overrides it for that run only.
        variant         : Variant of the current run.

    Valid after generate_steps:
        found         : True when the goal was reached.
        final_path    : Cells from start to end, [] when there is no path.
        visited_order : Cells in the order they were visited.
    """

    KIND = StructureKind.GRAPH

    def __init__(self, variant: PathVariant = PathVariant.BFS):
        super().__init__()
        self.default_variant: PathVariant = variant
        self.variant:         PathVariant = variant
        self.found:           bool        = False
        self.final_path:      List[Cell]  = []
        self.visited_order:   List[Cell]  = []

    @property
    def path_length(self) -> int:
        """Edges on the final path (0 when none was found)."""
        return max(len(self.final_path) - 1, 0)

    # ------------------------------------------------------------------
    def _validate(self, input_data: Any) -> GridInput:
        grid = _coerce_grid(input_data)
        self.variant = grid.variant if grid.variant is not None else self.default_variant
        self.found, self.final_path, self.visited_order = False, [], []
        return grid

    def _generate(self) -> Generator[AlgorithmStep, None, None]:
        sb      = self.sb
        grid    = self.input
        variant = self.variant
        start, end, cols = grid.start, grid.end, grid.cols

        visited_order: List[Cell]           = []
        visited:       set                  = set()
        came_from:     Dict[Cell, Cell]     = {}
        g_score:       Dict[Cell, int]      = {start: 0}
        f_score:       Dict[Cell, int]      = {start: manhattan(start, end)}
        open_set:      Dict[Cell, None]     = {start: None}

        def state(frontier, current, final_path):
            data = {
                "rows":          grid.rows,
                "cols":          grid.cols,
                "start":         start,
                "end":           end,
                "walls":         grid.walls,
                "visited_order": visited_order,
                "frontier":      list(frontier),
                "current":       current,
                "final_path":    final_path,
            }
            return self._state(data, rows=grid.rows, cols=cols, variant=variant.value)

        def working_set() -> int:
            return len(visited_order) + len(open_set)

        initial = state([start], None, [])
        yield sb.build(StepType.HIGHLIGHT,
                       f"Starting {variant.label} from ({start[0]}, {start[1]}) to ({end[0]}, {end[1]})",
                       0, [], initial, initial,
                       "Pathfinding explores walkable cells while avoiding walls, then reconstructs "
                       "the best path to the destination.",
                       {"algorithm": variant.label, "rows": grid.rows, "cols": cols},
                       memory=working_set())

        priority = f_score if variant.uses_heuristic else g_score
        found = False
        while open_set:
            current = min(open_set, key=lambda cell: priority.get(cell, float("inf")))
            del open_set[current]
            row, col = current

            if current not in visited:
                visited.add(current)
                visited_order.append(current)
            sb.count_operation()

            if len(visited_order) == 1 or len(visited_order) % VISIT_STEP_INTERVAL == 0 or current == end:
                visit = state(open_set, current, [])
                yield sb.build(StepType.TRAVERSE, f"Visiting cell ({row}, {col})", 1,
                               [row * cols + col], visit, visit,
                               variables={"frontierSize": len(open_set),
                                          "visitedCount": len(visited_order)},
                               memory=working_set())

            if current == end:
                found = True
                break

            for dr, dc in DIRECTIONS:
                nr, nc = row + dr, col + dc
                if not (0 <= nr < grid.rows and 0 <= nc < cols) or grid.walls[nr][nc]:
                    continue
                neighbour = (nr, nc)
                sb.count_comparison()

                new_g = g_score[current] + 1
                if variant.first_discovery_only:
                    improved = neighbour not in g_score
                else:
                    improved = new_g < g_score.get(neighbour, float("inf"))
                if not improved:
                    continue

                g_score[neighbour] = new_g
                f_score[neighbour] = new_g + manhattan(neighbour, end)
                came_from[neighbour] = current
                open_set[neighbour] = None

                if len(visited_order) % VISIT_STEP_INTERVAL == 0:
                    discovered = state(open_set, current, [])
                    yield sb.build(StepType.HIGHLIGHT, f"Discover cell ({nr}, {nc})", 2,
                                   [nr * cols + nc], discovered, discovered,
                                   variables={"parent": f"({row}, {col})",
                                              "discovered": f"({nr}, {nc})"},
                                   memory=working_set())

        final_path = _reconstruct(came_from, start, end) if found else []
        self.found = bool(final_path)
        self.final_path = list(final_path)
        self.visited_order = list(visited_order)

        if not final_path:
            done = state([], None, [])
            yield sb.build(StepType.HIGHLIGHT, "No path found from start to end", 4, [], done, done,
                           variables={"algorithm": variant.label, "visited": len(visited_order)},
                           memory=working_set())
            return

        growing: List[Cell] = []
        for index, cell in enumerate(final_path):
            growing.append(cell)
            sb.count_operation()
            if index == 0 or index == len(final_path) - 1 or index % PATH_STEP_INTERVAL == 0:
                building = state([], cell, growing)
                yield sb.build(StepType.UPDATE, f"Building final path through ({cell[0]}, {cell[1]})", 3,
                               [cell[0] * cols + cell[1]], building, building,
                               variables={"pathLength": len(growing)},
                               memory=working_set())

        done = state([], end, final_path)
        yield sb.build(StepType.HIGHLIGHT, f"Path found! Length: {len(final_path) - 1}", 4,
                       [r * cols + c for r, c in final_path], done, done,
                       variables={"algorithm": variant.label, "visited": len(visited_order),
                                  "pathLength": len(final_path) - 1},
                       memory=working_set())


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _reconstruct(came_from: Dict[Cell, Cell], start: Cell, end: Cell) -> List[Cell]:
    path = [end]
    cur = end
    while cur != start:
        if cur not in came_from:
            return []
        cur = came_from[cur]
        path.append(cur)
    path.reverse()
    return path


def _coerce_grid(input_data: Any) -> GridInput:
    if isinstance(input_data, GridInput):
        raw = {
            "rows": input_data.rows, "cols": input_data.cols, "walls": input_data.walls,
            "start": input_data.start, "end": input_data.end, "variant": input_data.variant,
        }
    else:
        raw = require_mapping(input_data, "Grid input")

    rows, cols = raw.get("rows", GRID_ROWS), raw.get("cols", GRID_COLS)
    for name, value in (("rows", rows), ("cols", cols)):
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise InputValidationError(f"Grid {name} must be a positive integer, got {value!r}")

    walls = raw.get("walls")
    if walls is None:
        walls = empty_walls(rows, cols)
    if not isinstance(walls, (list, tuple)) or len(walls) != rows:
        raise InputValidationError(f"Walls must have {rows} rows")
    for r, line in enumerate(walls):
        if not isinstance(line, (list, tuple)) or len(line) != cols:
            raise InputValidationError(f"Walls row {r} must have {cols} cells")
    walls = tuple(tuple(bool(cell) for cell in line) for line in walls)

    start = _cell(raw.get("start"), "start", rows, cols)
    end   = _cell(raw.get("end"), "end", rows, cols)
    for name, cell in (("start", start), ("end", end)):
        if walls[cell[0]][cell[1]]:
            raise InputValidationError(f"Grid {name} {cell} is a wall")

    variant = raw.get("variant", raw.get("algorithm"))
    if variant is not None and not isinstance(variant, PathVariant):
        try:
            variant = PathVariant(variant)
        except ValueError as e:
            raise InputValidationError(f"Unknown pathfinding variant {variant!r}") from e

    return GridInput(rows=rows, cols=cols, walls=walls, start=start, end=end, variant=variant)


def _cell(value: Any, name: str, rows: int, cols: int) -> Cell:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise InputValidationError(f"Grid {name} must be a (row, col) pair")
    r, c = value
    if isinstance(r, bool) or isinstance(c, bool) or not isinstance(r, int) or not isinstance(c, int):
        raise InputValidationError(f"Grid {name} must hold integers")
    if not (0 <= r < rows and 0 <= c < cols):
        raise InputValidationError(f"Grid {name} ({r}, {c}) is outside the {rows}x{cols} grid")
    return (r, c)

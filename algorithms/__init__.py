"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the visualizer knows about.

    from algorithms import REGISTRY, create_engine

REGISTRY is a dict:
    {
        "bubble-sort": AlgoInfo(key, label, category, engine, pseudocode, …),
        …
    }

AlgoInfo is a lightweight dataclass.  The recorder and the web host both
consume it, so adding a new algorithm is: write the engine module, add one
entry here.
"""

from dataclasses import dataclass, field
from functools import partial
from typing import Callable, Dict, List, Optional

from algorithms.base import AlgorithmEngine
from algorithms.exceptions import UnknownAlgorithmError
from algorithms.step import AlgorithmDescriptor, ComplexityInfo

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms.bubble_sort      import BubbleSortEngine,      PSEUDOCODE as _bubble_pc
from algorithms.selection_sort   import SelectionSortEngine,   PSEUDOCODE as _selection_pc
from algorithms.insertion_sort   import InsertionSortEngine,   PSEUDOCODE as _insertion_pc
from algorithms.merge_sort       import MergeSortEngine,       PSEUDOCODE as _merge_pc
from algorithms.quick_sort       import QuickSortEngine,       PSEUDOCODE as _quick_pc
from algorithms.heap_sort        import HeapSortEngine,        PSEUDOCODE as _heap_pc
from algorithms.linear_search    import LinearSearchEngine,    PSEUDOCODE as _linear_pc
from algorithms.binary_search    import BinarySearchEngine,    PSEUDOCODE as _binary_pc
from algorithms.stack            import StackEngine,           PSEUDOCODE as _stack_pc
from algorithms.queue            import QueueEngine,           PSEUDOCODE as _queue_pc
from algorithms.linked_list      import LinkedListEngine,      PSEUDOCODE as _list_pc
from algorithms.binary_tree      import BinaryTreeEngine,      PSEUDOCODE as _tree_pc
from algorithms.hash_table       import HashTableEngine,       PSEUDOCODE as _hash_pc
from algorithms.bfs              import BFSEngine,             PSEUDOCODE as _bfs_pc
from algorithms.dfs              import DFSEngine,             PSEUDOCODE as _dfs_pc
from algorithms.dijkstra         import DijkstraEngine,        PSEUDOCODE as _dij_pc
from algorithms.grid_pathfinding import GridPathfindingEngine, PathVariant, PSEUDOCODE as _grid_pc


def _cx(best: str, average: Optional[str] = None, worst: Optional[str] = None, explanation: str = "") -> ComplexityInfo:
    average = average or best
    return ComplexityInfo(best, average, worst or average, explanation)


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:         str                               # registry key, e.g. "bubble-sort"
    label:       str                               # human label, e.g. "Bubble Sort"
    category:    str                               # "sorting" | "searching" | "data-structure" | "graph" | "pathfinding"
    engine:      Callable[[], AlgorithmEngine]     # zero-arg factory for a fresh engine
    pseudocode:  List[str]                         # lines for the side-panel
    time:        ComplexityInfo
    space:       ComplexityInfo
    difficulty:  str       = "beginner"
    tags:        List[str] = field(default_factory=list)
    description: str       = ""                    # one-liner for the UI card

    @property
    def descriptor(self) -> AlgorithmDescriptor:
        return AlgorithmDescriptor(
            id=self.key,
            name=self.label,
            category=self.category,
            time_complexity=self.time,
            space_complexity=self.space,
        )

    def to_dict(self) -> Dict[str, object]:
        return {
            "key":         self.key,
            "label":       self.label,
            "category":    self.category,
            "difficulty":  self.difficulty,
            "tags":        list(self.tags),
            "description": self.description,
            "time":        self.time.__dict__.copy(),
            "space":       self.space.__dict__.copy(),
            "pseudocode":  list(self.pseudocode),
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    # -- sorting --
    "bubble-sort": AlgoInfo(
        key="bubble-sort", label="Bubble Sort", category="sorting",
        engine=BubbleSortEngine, pseudocode=_bubble_pc,
        time=_cx("O(n)", "O(n²)"), space=_cx("O(1)"),
        tags=["stable", "in-place"],
        description="Repeatedly compares adjacent elements and swaps them when out of order.",
    ),

    "selection-sort": AlgoInfo(
        key="selection-sort", label="Selection Sort", category="sorting",
        engine=SelectionSortEngine, pseudocode=_selection_pc,
        time=_cx("O(n²)"), space=_cx("O(1)"),
        tags=["in-place"],
        description="Finds the minimum of the unsorted part and moves it to the front.",
    ),

    "insertion-sort": AlgoInfo(
        key="insertion-sort", label="Insertion Sort", category="sorting",
        engine=InsertionSortEngine, pseudocode=_insertion_pc,
        time=_cx("O(n)", "O(n²)"), space=_cx("O(1)"),
        tags=["stable", "in-place"],
        description="Builds the sorted array one item at a time by shifting larger items right.",
    ),

    "merge-sort": AlgoInfo(
        key="merge-sort", label="Merge Sort", category="sorting",
        engine=MergeSortEngine, pseudocode=_merge_pc,
        time=_cx("O(n log n)"), space=_cx("O(n)"),
        difficulty="intermediate", tags=["stable", "divide-and-conquer"],
        description="Splits the array in halves, sorts them and merges them back together.",
    ),

    "quick-sort": AlgoInfo(
        key="quick-sort", label="Quick Sort", category="sorting",
        engine=QuickSortEngine, pseudocode=_quick_pc,
        time=_cx("O(n log n)", "O(n log n)", "O(n²)"), space=_cx("O(log n)", "O(log n)", "O(n)"),
        difficulty="intermediate", tags=["in-place", "divide-and-conquer"],
        description="Partitions around a pivot, then sorts both sides recursively.",
    ),

    "heap-sort": AlgoInfo(
        key="heap-sort", label="Heap Sort", category="sorting",
        engine=HeapSortEngine, pseudocode=_heap_pc,
        time=_cx("O(n log n)"), space=_cx("O(1)"),
        difficulty="advanced", tags=["in-place"],
        description="Builds a max-heap, then repeatedly moves the root to the end.",
    ),

    # -- searching --
    "linear-search": AlgoInfo(
        key="linear-search", label="Linear Search", category="searching",
        engine=LinearSearchEngine, pseudocode=_linear_pc,
        time=_cx("O(1)", "O(n)"), space=_cx("O(1)"),
        description="Checks each element in turn until the target is found or the array ends.",
    ),

    "binary-search": AlgoInfo(
        key="binary-search", label="Binary Search", category="searching",
        engine=BinarySearchEngine, pseudocode=_binary_pc,
        time=_cx("O(1)", "O(log n)"), space=_cx("O(1)"),
        tags=["sorted-input"],
        description="Halves the search window of a sorted array on every comparison.",
    ),

    # -- data structures --
    "stack": AlgoInfo(
        key="stack", label="Stack (LIFO)", category="data-structure",
        engine=StackEngine, pseudocode=_stack_pc,
        time=_cx("O(1)"), space=_cx("O(n)"),
        description="Last-In-First-Out: elements are added and removed at the top.",
    ),

    "queue": AlgoInfo(
        key="queue", label="Queue (FIFO)", category="data-structure",
        engine=QueueEngine, pseudocode=_queue_pc,
        time=_cx("O(1)"), space=_cx("O(n)"),
        description="First-In-First-Out: elements join at the rear and leave from the front.",
    ),

    "linked-list": AlgoInfo(
        key="linked-list", label="Linked List", category="data-structure",
        engine=LinkedListEngine, pseudocode=_list_pc,
        time=_cx("O(1)", "O(n)"), space=_cx("O(n)"),
        difficulty="intermediate",
        description="Nodes in sequence, each pointing to the next.",
    ),

    "binary-tree": AlgoInfo(
        key="binary-tree", label="Binary Tree", category="data-structure",
        engine=BinaryTreeEngine, pseudocode=_tree_pc,
        time=_cx("O(log n)", "O(log n)", "O(n)"), space=_cx("O(n)"),
        difficulty="intermediate", tags=["bst"],
        description="Binary search tree insertion with an in-order walkthrough.",
    ),

    "hash-table": AlgoInfo(
        key="hash-table", label="Hash Table", category="data-structure",
        engine=HashTableEngine, pseudocode=_hash_pc,
        time=_cx("O(1)", "O(1)", "O(n)"), space=_cx("O(n)"),
        difficulty="intermediate", tags=["linear-probing"],
        description="Maps keys to slots with key % size and resolves collisions by linear probing.",
    ),

    # -- graphs --
    "bfs": AlgoInfo(
        key="bfs", label="Breadth-First Search", category="graph",
        engine=BFSEngine, pseudocode=_bfs_pc,
        time=_cx("O(V + E)"), space=_cx("O(V)"),
        difficulty="intermediate", tags=["unweighted", "traversal"],
        description="Explores layer-by-layer. Visits nodes in order of hop distance.",
    ),

    "dfs": AlgoInfo(
        key="dfs", label="Depth-First Search", category="graph",
        engine=DFSEngine, pseudocode=_dfs_pc,
        time=_cx("O(V + E)"), space=_cx("O(V)"),
        difficulty="intermediate", tags=["unweighted", "traversal"],
        description="Dives deep before backtracking.",
    ),

    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", category="graph",
        engine=DijkstraEngine, pseudocode=_dij_pc,
        time=_cx("O(V² + E)", explanation="Linear scan for the closest unvisited node each round."),
        space=_cx("O(V)"),
        difficulty="advanced", tags=["weighted", "shortest-path"],
        description="Finalises the closest node each round. Needs non-negative weights.",
    ),

    # -- grid pathfinding --
    "pathfinding-bfs": AlgoInfo(
        key="pathfinding-bfs", label="Grid BFS Pathfinding", category="pathfinding",
        engine=partial(GridPathfindingEngine, PathVariant.BFS), pseudocode=_grid_pc,
        time=_cx("O(V + E)"), space=_cx("O(V)"),
        tags=["grid", "shortest-path"],
        description="Shortest path on a walled grid using breadth-first expansion.",
    ),

    "pathfinding-dijkstra": AlgoInfo(
        key="pathfinding-dijkstra", label="Grid Dijkstra Pathfinding", category="pathfinding",
        engine=partial(GridPathfindingEngine, PathVariant.DIJKSTRA), pseudocode=_grid_pc,
        time=_cx("O((V + E) log V)"), space=_cx("O(V)"),
        difficulty="intermediate", tags=["grid", "shortest-path"],
        description="Shortest path on a uniform-cost grid, lowest known distance first.",
    ),

    "pathfinding-astar": AlgoInfo(
        key="pathfinding-astar", label="Grid A* Pathfinding", category="pathfinding",
        engine=partial(GridPathfindingEngine, PathVariant.ASTAR), pseudocode=_grid_pc,
        time=_cx("O((V + E) log V)"), space=_cx("O(V)"),
        difficulty="advanced", tags=["grid", "shortest-path", "heuristic"],
        description="Manhattan-distance guided search. Optimal with an admissible heuristic.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_category(category: str) -> List[AlgoInfo]:
    return [a for a in REGISTRY.values() if a.category == category]


def descriptor_for(key: str) -> AlgorithmDescriptor:
    info = REGISTRY.get(key)
    if info is None:
        raise UnknownAlgorithmError(f"Unknown algorithm '{key}'")
    return info.descriptor


def create_engine(key: str) -> AlgorithmEngine:
    """Fresh, uninitialised engine for `key`."""
    info = REGISTRY.get(key)
    if info is None:
        raise UnknownAlgorithmError(f"Unknown algorithm '{key}'")
    return info.engine()


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_category",
    "descriptor_for",
    "create_engine",
]

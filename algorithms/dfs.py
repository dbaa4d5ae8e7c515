"""
dfs.py — Depth-First Search
============================
Pre-order DFS.  TRAVERSE on entering a node, HIGHLIGHT for each edge
followed into an unvisited neighbour (immediately before entering it).
State data is the visit order so far.

The walk keeps its own stack of (node, remaining neighbours, depth)
frames, so a long chain is as safe as a short one.  Steps come out in
exactly the order the recursive textbook version would produce them.
"""

from typing import Generator, Hashable, Iterator, List, Set, Tuple

from algorithms.graph_input import GraphEngine
from algorithms.step import AlgorithmStep, StepType


PSEUDOCODE: List[str] = [
    "def dfs(node):",                           # 0
    "    visited.add(node); visit(node)",       # 1
    "    for nbr in adj(node): if nbr not in visited: dfs(nbr)",  # 2
    "return order",                             # 3
]

_EXHAUSTED = object()


class DFSEngine(GraphEngine):

    def _generate(self) -> Generator[AlgorithmStep, None, None]:
        sb = self.sb
        adjacency = self.input.adjacency
        start = self.input.start
        order:   List[Hashable] = []
        visited: Set[Hashable]  = set()

        initial = self._state(order)
        yield sb.build(StepType.HIGHLIGHT, f"Start DFS from node {start}", 0, [], initial, initial,
                       "DFS follows one branch as deep as it goes before backtracking to the "
                       "most recent node with an unexplored edge.")

        yield self._visit(start, order, visited, 0)
        frames: List[Tuple[Hashable, Iterator[Hashable], int]] = [
            (start, iter(adjacency.get(start, [])), 0)
        ]
        while frames:
            node, neighbours, depth = frames[-1]
            neighbour = next(neighbours, _EXHAUSTED)
            if neighbour is _EXHAUSTED:
                frames.pop()
                continue

            sb.count_comparison()
            if neighbour in visited:
                continue
            state = self._state(order, current=node, depth=depth)
            yield sb.build(StepType.HIGHLIGHT, f"Traverse edge {node} -> {neighbour}", 2,
                           [len(order) - 1], state, state,
                           variables={"from": node, "to": neighbour})
            yield self._visit(neighbour, order, visited, depth + 1)
            frames.append((neighbour, iter(adjacency.get(neighbour, [])), depth + 1))

        final = self._state(order, complete=True)
        yield sb.build(StepType.HIGHLIGHT, "DFS traversal complete", 3, list(range(len(order))),
                       final, final, variables={"order": _fmt(order)})

    def _visit(self, node: Hashable, order: List[Hashable], visited: Set[Hashable],
               depth: int) -> AlgorithmStep:
        sb = self.sb
        visited.add(node)
        before = self._state(order)
        order.append(node)
        sb.count_operation()
        after = self._state(order, current=node, depth=depth)
        return sb.build(StepType.TRAVERSE, f"Visit node {node}", 1, [len(order) - 1], before, after,
                        variables={"node": node, "depth": depth, "visited": _fmt(order)})


def _fmt(values) -> str:
    return "[" + ", ".join(str(v) for v in values) + "]"

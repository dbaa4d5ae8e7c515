"""
bfs.py — Breadth-First Search
==============================
Queue-based level expansion over an adjacency map.  Emits:
  1. Start highlight
  2. Dequeue a node  →  TRAVERSE (the visit order grows by one)
  3. Each newly discovered neighbour  →  HIGHLIGHT (enqueue)
  4. Final highlight over the whole visit order

A neighbour is marked visited when it is enqueued, so nothing is ever
queued twice.  State data is the visit order so far.
"""

from collections import deque
from typing import Generator, Hashable, List, Set

from algorithms.graph_input import GraphEngine
from algorithms.step import AlgorithmStep, StepType


PSEUDOCODE: List[str] = [
    "queue ← [start]; visited ← {start}",       # 0
    "while queue: node ← queue.dequeue(); visit(node)",  # 1
    "    for nbr in adj(node): if nbr not in visited: visited.add(nbr); queue.enqueue(nbr)",  # 2
    "return order",                             # 3
]


class BFSEngine(GraphEngine):

    def _generate(self) -> Generator[AlgorithmStep, None, None]:
        sb        = self.sb
        adjacency = self.input.adjacency
        start     = self.input.start

        queue   = deque([start])
        visited: Set[Hashable]  = {start}
        order:   List[Hashable] = []

        initial = self._state(order)
        yield sb.build(StepType.HIGHLIGHT, f"Start BFS from node {start}", 0, [], initial, initial,
                       "BFS explores the graph layer by layer: every node one edge away from the "
                       "start, then every node two edges away, and so on.",
                       {"queue": _fmt(queue), "visited": "[]"})

        while queue:
            node = queue.popleft()
            before = self._state(order)
            order.append(node)
            sb.count_operation()
            after = self._state(order, current=node)
            yield sb.build(StepType.TRAVERSE, f"Visit node {node}", 1, [len(order) - 1], before, after,
                           variables={"node": node, "queue": _fmt(queue), "order": _fmt(order)})

            for neighbour in adjacency.get(node, []):
                sb.count_comparison()
                if neighbour in visited:
                    continue
                visited.add(neighbour)
                queue.append(neighbour)
                state = self._state(order, current=node, enqueued=neighbour)
                yield sb.build(StepType.HIGHLIGHT, f"Enqueue neighbor {neighbour}", 2, [len(order) - 1],
                               state, state,
                               variables={"from": node, "enqueued": neighbour, "queue": _fmt(queue)})

        final = self._state(order, complete=True)
        yield sb.build(StepType.HIGHLIGHT, "BFS traversal complete", 3, list(range(len(order))),
                       final, final, variables={"order": _fmt(order)})


def _fmt(values) -> str:
    return "[" + ", ".join(str(v) for v in values) + "]"

"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Single-source shortest distances over a non-negatively weighted
adjacency map.

Each round scans every node for the unvisited one with the smallest
tentative distance (a plain O(V) scan, one comparison counted per node
looked at, not a heap), marks it visited and relaxes its outgoing edges:
  • HIGHLIGHT  the picked node
  • COMPARE    per edge check
  • UPDATE     whenever the edge gives a strictly shorter distance

Stops when every node is visited or the closest unvisited node is
unreachable.  State data is the distance list in sorted node order
(`metadata["nodes"]` names the order); unreachable nodes stay at +inf.
"""

from typing import Dict, Generator, Hashable, List, Optional

from algorithms.graph_input import GraphEngine, node_order
from algorithms.step import AlgorithmStep, StepType


INF = float("inf")

PSEUDOCODE: List[str] = [
    "dist ← {v: ∞ for v in V}; dist[start] ← 0",  # 0
    "while unvisited: u ← argmin dist over unvisited; visited.add(u)",  # 1
    "    for (v, w) in adj(u): if dist[u] + w < dist[v]:",  # 2
    "        dist[v] ← dist[u] + w",            # 3
    "return dist",                              # 4
]


class DijkstraEngine(GraphEngine):

    WEIGHTED = True

    def __init__(self):
        super().__init__()
        self.distances: Dict[Hashable, float]              = {}
        self.previous:  Dict[Hashable, Optional[Hashable]] = {}

    def _generate(self) -> Generator[AlgorithmStep, None, None]:
        sb        = self.sb
        adjacency = self.input.adjacency
        start     = self.input.start
        nodes     = sorted(adjacency, key=node_order)
        index     = {node: i for i, node in enumerate(nodes)}

        dist: Dict[Hashable, float] = {node: INF for node in nodes}
        dist[start] = 0
        previous: Dict[Hashable, Optional[Hashable]] = {start: None}
        visited: List[Hashable] = []
        self.distances, self.previous = dist, previous

        def state(**metadata):
            return self._state([dist[n] for n in nodes], nodes=nodes, visited=visited, **metadata)

        initial = state()
        yield sb.build(StepType.HIGHLIGHT, f"Initialize distances from source {start}", 0,
                       [index[start]], initial, initial,
                       "Every distance starts at infinity except the source, which is 0. Each round "
                       "finalises the closest node not yet visited.",
                       {"source": start, "distances": _fmt_dist(dist, nodes)})

        while len(visited) < len(nodes):
            current: Optional[Hashable] = None
            best = INF
            for node in nodes:
                sb.count_comparison()
                if node not in visited and dist[node] < best:
                    best = dist[node]
                    current = node

            if current is None:
                break

            visited.append(current)
            sb.count_operation()
            picked = state(current=current)
            yield sb.build(StepType.HIGHLIGHT, f"Pick next closest node {current}", 1, [index[current]],
                           picked, picked, variables={"node": current, "distance": dist[current]})

            for edge in adjacency[current]:
                candidate = dist[current] + edge.weight
                sb.count_comparison()
                before = state(current=current)
                yield sb.build(StepType.COMPARE,
                               f"Check path {current} -> {edge.to} (weight {edge.weight})", 2,
                               [index[current], index[edge.to]], before, before,
                               variables={"from": current, "to": edge.to, "candidate": candidate,
                                          "currentBest": dist[edge.to]})

                if candidate < dist[edge.to]:
                    dist[edge.to] = candidate
                    previous[edge.to] = current
                    sb.count_operation()
                    after = state(current=current)
                    yield sb.build(StepType.UPDATE, f"Update distance of {edge.to} to {candidate}", 3,
                                   [index[edge.to]], before, after,
                                   variables={"updatedNode": edge.to, "newDistance": candidate,
                                              "via": current})

        final = state(complete=True)
        yield sb.build(StepType.HIGHLIGHT, "Dijkstra complete", 4, list(range(len(nodes))), final, final,
                       variables={"distances": _fmt_dist(dist, nodes)})

    def path_to(self, target: Hashable) -> List[Hashable]:
        """Shortest path from the start to `target`, or [] when unreachable."""
        if target not in self.previous:
            return []
        path: List[Hashable] = []
        cur: Optional[Hashable] = target
        while cur is not None:
            path.append(cur)
            cur = self.previous[cur]
        path.reverse()
        return path


def _fmt_dist(dist: Dict[Hashable, float], nodes: List[Hashable]) -> str:
    return ", ".join(f"{n}: {'∞' if dist[n] == INF else dist[n]}" for n in nodes)

"""
graph_input.py — Adjacency Input
=================================
Shared input record and validation for the BFS / DFS / Dijkstra engines.

    {"adjacency": {0: [1, 2], 1: [3], 2: [], 3: []}, "start": 0}
    {"adjacency": {0: [{"to": 1, "weight": 4}], 1: []}, "start": 0}

The graph is taken as complete: nodes are the adjacency keys, nothing is
discovered on the fly.  Weighted edges may also be given as (to, weight)
pairs and are normalised to Edge records.
"""

from dataclasses import dataclass
from typing import Any, Dict, Hashable, List, Union

from algorithms.base import AlgorithmEngine, is_number, require_mapping
from algorithms.exceptions import InputValidationError
from algorithms.step import StructureKind


@dataclass(frozen=True)
class Edge:
    to:     Hashable
    weight: float


@dataclass(frozen=True)
class GraphInput:
    adjacency: Dict[Hashable, List[Union[Hashable, Edge]]]
    start:     Hashable


def node_order(node: Hashable):
    """Sort key putting numeric ids first, then everything else by text."""
    if is_number(node):
        return (0, node, "")
    return (1, 0, str(node))


class GraphEngine(AlgorithmEngine):
    """Engines over an adjacency map; state data is a per-node sequence."""

    KIND     = StructureKind.GRAPH
    WEIGHTED = False

    def _validate(self, input_data: Any) -> GraphInput:
        if isinstance(input_data, GraphInput):
            adjacency, start = input_data.adjacency, input_data.start
        else:
            raw = require_mapping(input_data, "Graph input")
            if "adjacency" not in raw or "start" not in raw:
                raise InputValidationError("Graph input needs 'adjacency' and 'start'")
            adjacency, start = raw["adjacency"], raw["start"]

        adjacency = require_mapping(adjacency, "Adjacency")
        if start not in adjacency:
            raise InputValidationError(f"Start node {start!r} is not in the adjacency map")

        normalised: Dict[Hashable, List[Any]] = {}
        for node, neighbours in adjacency.items():
            if not isinstance(neighbours, (list, tuple)):
                raise InputValidationError(f"Neighbours of {node!r} must be a list")
            if self.WEIGHTED:
                normalised[node] = [_edge(node, raw, adjacency) for raw in neighbours]
            else:
                normalised[node] = list(neighbours)
        return GraphInput(adjacency=normalised, start=start)


def _edge(node: Hashable, raw: Any, adjacency: Dict[Hashable, Any]) -> Edge:
    if isinstance(raw, Edge):
        to, weight = raw.to, raw.weight
    elif isinstance(raw, dict) and "to" in raw and "weight" in raw:
        to, weight = raw["to"], raw["weight"]
    elif isinstance(raw, (list, tuple)) and len(raw) == 2:
        to, weight = raw
    else:
        raise InputValidationError(f"Edge from {node!r} must be {{'to', 'weight'}} or (to, weight): {raw!r}")

    if not is_number(weight):
        raise InputValidationError(f"Edge {node!r} -> {to!r} has a non-numeric weight")
    if weight < 0:
        raise InputValidationError(f"Edge {node!r} -> {to!r} has a negative weight ({weight})")
    if to not in adjacency:
        raise InputValidationError(f"Edge {node!r} -> {to!r} points to an unknown node")
    return Edge(to=to, weight=weight)

"""
linked_list.py — Singly Linked List Operations
===============================================
The list is rendered head → tail as a plain sequence of node values.

  insert  → append at the tail (INSERT)
  delete  → unlink the first node holding the value (DELETE), or a
            HIGHLIGHT when no node matches
  search  → COMPARE per visited node, then a found / not-found HIGHLIGHT
"""

from typing import Any, Generator, List

from algorithms.base import AlgorithmEngine
from algorithms.operations import ListOp, require_operations
from algorithms.step import AlgorithmStep, StepType, StructureKind


PSEUDOCODE: List[str] = [
    "head ← None",                              # 0
    "insert(v): tail.next ← Node(v)",           # 1
    "delete(v): if no node holds v: return",    # 2
    "    prev.next ← node.next",                # 3
    "search(v): for node from head: if node.value == v",  # 4
    "    return node (or None)",                # 5
    "done",                                     # 6
]


class LinkedListEngine(AlgorithmEngine):

    KIND = StructureKind.LINKED_LIST

    def _validate(self, input_data: Any) -> List[ListOp]:
        return require_operations(input_data, ListOp)

    def _state(self, data, **metadata):
        if data:
            metadata.setdefault("head", 0)
            metadata.setdefault("tail", len(data) - 1)
        return super()._state(data, **metadata)

    def _generate(self) -> Generator[AlgorithmStep, None, None]:
        sb = self.sb
        nodes: List[float] = []

        initial = self._state(nodes)
        yield sb.build(StepType.HIGHLIGHT, "Linked list initialized (empty)", 0, [], initial, initial,
                       "A linked list stores nodes in sequence. Node values are shown from head "
                       "to tail.")

        for op in self.input:
            if op.kind == "insert":
                yield from self._insert(nodes, op.value)
            elif op.kind == "delete":
                yield from self._delete(nodes, op.value)
            else:
                yield from self._search(nodes, op.value)

        done = self._state(nodes, complete=True)
        yield sb.build(StepType.HIGHLIGHT, "Linked list operations complete", 6,
                       list(range(len(nodes))), done, done, variables={"size": len(nodes)})

    # ------------------------------------------------------------------
    def _insert(self, nodes: List[float], value: float) -> Generator[AlgorithmStep, None, None]:
        before = self._state(nodes)
        nodes.append(value)
        self.sb.count_operation()
        after = self._state(nodes)
        yield self.sb.build(StepType.INSERT, f"Insert node {value} at tail", 1, [len(nodes) - 1],
                            before, after, variables={"value": value, "size": len(nodes)})

    def _delete(self, nodes: List[float], value: float) -> Generator[AlgorithmStep, None, None]:
        if value not in nodes:
            state = self._state(nodes, missing=value)
            yield self.sb.build(StepType.HIGHLIGHT, f"Value {value} not found for deletion", 2, [],
                                state, state, variables={"value": value})
            return

        index = nodes.index(value)
        before = self._state(nodes)
        del nodes[index]
        self.sb.count_operation()
        after = self._state(nodes)
        yield self.sb.build(StepType.DELETE, f"Delete node {value}", 3, [index], before, after,
                            variables={"value": value, "deletedIndex": index})

    def _search(self, nodes: List[float], value: float) -> Generator[AlgorithmStep, None, None]:
        sb = self.sb
        found_at = -1
        for i, current in enumerate(nodes):
            sb.count_comparison()
            state = self._state(nodes, current=i)
            yield sb.build(StepType.COMPARE, f"Compare node {current} with target {value}", 4, [i],
                           state, state, variables={"index": i, "current": current, "target": value})
            if current == value:
                found_at = i
                break

        if found_at >= 0:
            state = self._state(nodes, found=found_at)
            yield sb.build(StepType.HIGHLIGHT, f"Found {value} at node {found_at}", 5, [found_at],
                           state, state, variables={"target": value, "foundAt": found_at})
        else:
            state = self._state(nodes, notFound=True)
            yield sb.build(StepType.HIGHLIGHT, f"{value} not found in list", 5, [], state, state,
                           variables={"target": value, "foundAt": -1})

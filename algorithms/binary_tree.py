"""
binary_tree.py — Binary Search Tree
====================================
Values are inserted in input order: smaller goes left, everything else
(including duplicates) goes right.

State data is always the in-order sequence of the tree, so an array
renderer can show it as-is; `metadata["tree"]` carries the nested shape
({"value", "left", "right"}) for tree renderers.

  • COMPARE per node visited on the way down
  • INSERT once the value is linked; affected index = its in-order position
  • TRAVERSE per node of the final in-order walkthrough, then a closing
    TRAVERSE over the whole sequence
"""

from bisect import bisect_right
from typing import Any, Dict, Generator, List, Optional

from algorithms.base import AlgorithmEngine, require_number_list
from algorithms.step import AlgorithmStep, StepType, StructureKind


PSEUDOCODE: List[str] = [
    "root ← None",                              # 0
    "insert(node, v): if node is None: return Node(v)",  # 1
    "    if v < node.value: node.left ← insert(node.left, v)",   # 2
    "    else: node.right ← insert(node.right, v)",              # 3
    "inorder(node): inorder(left); visit(node); inorder(right)",  # 4
    "return inorder(root)",                     # 5
]


class TreeNode:
    __slots__ = ("value", "left", "right")

    def __init__(self, value: float):
        self.value: float              = value
        self.left:  Optional[TreeNode] = None
        self.right: Optional[TreeNode] = None


class BinaryTreeEngine(AlgorithmEngine):

    KIND = StructureKind.TREE

    def __init__(self):
        super().__init__()
        self.root: Optional[TreeNode] = None

    def _validate(self, input_data: Any) -> List[float]:
        return require_number_list(input_data, "Tree values")

    def _generate(self) -> Generator[AlgorithmStep, None, None]:
        sb = self.sb
        self.root = None

        initial = self._tree_state()
        yield sb.build(StepType.HIGHLIGHT, "Binary tree initialized (empty)", 0, [], initial, initial,
                       "Values are inserted as a Binary Search Tree: smaller values go left, "
                       "larger or equal values go right.")

        for value in self.input:
            yield from self._insert(value)

        order = inorder(self.root)
        for index, value in enumerate(order):
            state = self._tree_state(traversal="inorder", visiting=index)
            yield sb.build(StepType.TRAVERSE, f"Visit {value}", 4, [index], state, state,
                           variables={"visited": _fmt(order[:index + 1])})

        final = self._tree_state(traversal="inorder", complete=True)
        yield sb.build(StepType.TRAVERSE, "In-order traversal complete", 5, list(range(len(order))),
                       final, final, variables={"inorder": _fmt(order)})

    # ------------------------------------------------------------------
    def _insert(self, value: float) -> Generator[AlgorithmStep, None, None]:
        sb = self.sb
        before = self._tree_state()

        parent: Optional[TreeNode] = None
        node = self.root
        go_left = False
        while node is not None:
            sb.count_comparison()
            go_left = value < node.value
            position = _position_of(self.root, node)
            state = self._tree_state(comparing=position)
            yield sb.build(StepType.COMPARE, f"Compare {value} with node {node.value}", 2 if go_left else 3,
                           [position], state, state,
                           variables={"value": value, "node": node.value,
                                      "direction": "left" if go_left else "right"})
            parent, node = node, (node.left if go_left else node.right)

        fresh = TreeNode(value)
        if parent is None:
            self.root = fresh
        elif go_left:
            parent.left = fresh
        else:
            parent.right = fresh
        sb.count_operation()

        order = inorder(self.root)
        index = bisect_right(order, value) - 1
        after = self._tree_state(inserted=index)
        yield sb.build(StepType.INSERT, f"Insert {value} into binary tree", 1, [index], before, after,
                       variables={"inserted": value, "inorder": _fmt(order)})

    def _tree_state(self, **metadata: Any):
        return self._state(inorder(self.root), tree=to_dict(self.root), **metadata)


# ---------------------------------------------------------------------------
# Tree helpers
# ---------------------------------------------------------------------------
def inorder(node: Optional[TreeNode]) -> List[float]:
    return [n.value for n in _inorder_nodes(node)]


def _inorder_nodes(node: Optional[TreeNode]) -> List[TreeNode]:
    out: List[TreeNode] = []
    stack: List[TreeNode] = []
    while stack or node is not None:
        while node is not None:
            stack.append(node)
            node = node.left
        node = stack.pop()
        out.append(node)
        node = node.right
    return out


def _position_of(root: Optional[TreeNode], target: TreeNode) -> int:
    for i, node in enumerate(_inorder_nodes(root)):
        if node is target:
            return i
    return -1


def to_dict(node: Optional[TreeNode]) -> Optional[Dict[str, Any]]:
    if node is None:
        return None
    return {"value": node.value, "left": to_dict(node.left), "right": to_dict(node.right)}


def _fmt(values) -> str:
    return "[" + ", ".join(str(v) for v in values) + "]"

"""
merge_sort.py — Merge Sort
===========================
Recursive top-down merge sort flattened into one step list.

The call tree is recoverable from step metadata alone: every step emitted
inside a call carries `depth`, `phase` ("divide" | "merge") and the
`left` / `mid` / `right` range of that call.  An explanation view groups
contiguous steps by (depth, phase) to redraw the recursion tree.

Events:
  • divide  →  HIGHLIGHT over [left..right]
  • merge   →  HIGHLIGHT over [left..right], then COMPARE per element
               comparison and UPDATE per placement (merged or remainder)
"""

from typing import Generator, List

from algorithms.base import ArrayEngine
from algorithms.step import AlgorithmStep, StepType


PSEUDOCODE: List[str] = [
    "def merge_sort(arr, left, right):",        # 0
    "    if left ≥ right: return",              # 1
    "    mid ← (left + right) // 2",            # 2
    "    merge_sort(arr, left, mid)",           # 3
    "    merge_sort(arr, mid+1, right)",        # 4
    "    merge(arr, left, mid, right)",         # 5
    "        if L[i] ≤ R[j]:",                  # 6
    "            arr[k] ← L[i]; i += 1",        # 7
    "        else: arr[k] ← R[j]; j += 1",      # 8
    "    copy remaining L / R into arr",        # 9
    "    return arr",                           # 10
]


class MergeSortEngine(ArrayEngine):

    def _generate(self) -> Generator[AlgorithmStep, None, None]:
        sb  = self.sb
        arr = list(self.input)

        initial = self._state(arr)
        yield sb.build(StepType.HIGHLIGHT, "Starting Merge Sort", 0, [], initial, initial,
                       "Merge Sort splits the array in halves until single elements remain, "
                       "then merges the sorted halves back together.",
                       {"n": len(arr)})

        yield from self._sort(arr, 0, len(arr) - 1, 0)

        final = self._sorted_state(arr)
        yield sb.build(StepType.HIGHLIGHT, "Array is now sorted", 10, list(range(len(arr))),
                       final, final)

    # ------------------------------------------------------------------
    def _sort(self, arr: List[float], left: int, right: int, depth: int) -> Generator[AlgorithmStep, None, None]:
        if left >= right:
            return

        mid = (left + right) // 2
        state = self._state(arr, dividing=True, left=left, mid=mid, right=right,
                            depth=depth, phase="divide")
        yield self.sb.build(StepType.HIGHLIGHT, f"Dividing array from index {left} to {right}", 2,
                            list(range(left, right + 1)), state, state,
                            variables={"left": left, "mid": mid, "right": right, "depth": depth})

        yield from self._sort(arr, left, mid, depth + 1)
        yield from self._sort(arr, mid + 1, right, depth + 1)
        yield from self._merge(arr, left, mid, right, depth)

    def _merge(self, arr: List[float], left: int, mid: int, right: int, depth: int) -> Generator[AlgorithmStep, None, None]:
        sb = self.sb
        left_part  = arr[left:mid + 1]
        right_part = arr[mid + 1:right + 1]
        ctx = {"left": left, "mid": mid, "right": right, "depth": depth, "phase": "merge"}

        state = self._state(arr, merging=True, **ctx)
        yield sb.build(StepType.HIGHLIGHT,
                       f"Merging subarrays [{left}..{mid}] and [{mid + 1}..{right}]", 5,
                       list(range(left, right + 1)), state, state,
                       variables={"L": list(left_part), "R": list(right_part), "depth": depth})

        i = j = 0
        k = left
        while i < len(left_part) and j < len(right_part):
            sb.count_comparison()
            state = self._state(arr, **ctx)
            yield sb.build(StepType.COMPARE, f"Comparing {left_part[i]} and {right_part[j]}", 6,
                           [left + i, mid + 1 + j], state, state,
                           variables={"L[i]": left_part[i], "R[j]": right_part[j], "k": k})

            before = self._state(arr, **ctx)
            if left_part[i] <= right_part[j]:
                arr[k] = left_part[i]
                i += 1
                line = 7
            else:
                arr[k] = right_part[j]
                j += 1
                line = 8
            sb.count_operation()
            after = self._state(arr, **ctx)
            yield sb.build(StepType.UPDATE, f"Placing {arr[k]} at index {k}", line, [k],
                           before, after, variables={"k": k, "value": arr[k]})
            k += 1

        for remaining, start in ((left_part, i), (right_part, j)):
            for value in remaining[start:]:
                before = self._state(arr, **ctx)
                arr[k] = value
                sb.count_operation()
                after = self._state(arr, **ctx)
                yield sb.build(StepType.UPDATE, f"Copying remaining element {value} to index {k}", 9,
                               [k], before, after, variables={"k": k, "value": value})
                k += 1

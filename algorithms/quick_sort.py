"""
quick_sort.py — Quick Sort (Lomuto partition)
==============================================
Pivot = last element of the range.  Per range [low..high]:
  • HIGHLIGHT on entry to [low..high]              phase "call"
  • HIGHLIGHT on pivot selection                   phase "pivot"
  • COMPARE per scanned element vs the pivot       phase "partition-compare"
  • SWAP for each in-place exchange (skipped when i == j)
  • SWAP for the final pivot placement
  • HIGHLIGHT announcing the pivot's final index   phase "partition-done"

Like merge sort, `depth` + `phase` metadata let an explanation view
rebuild the recursion tree.  Pending ranges sit on an explicit stack
(left side on top), so steps follow the recursive order at any depth.
Not stable.
"""

from typing import Generator, List, Tuple

from algorithms.base import ArrayEngine
from algorithms.step import AlgorithmStep, StepType


PSEUDOCODE: List[str] = [
    "def quick_sort(arr, low, high):",          # 0
    "    if low < high:",                       # 1
    "        pivot ← arr[high]",                # 2
    "        i ← low - 1",                      # 3
    "        for j in low .. high-1:",          # 4
    "            if arr[j] < pivot:",           # 5
    "                i += 1; swap(arr[i], arr[j])",  # 6
    "        swap(arr[i+1], arr[high])",        # 7
    "        p ← i + 1",                        # 8
    "        quick_sort(arr, low, p-1); quick_sort(arr, p+1, high)",  # 9
    "    return arr",                           # 10
]


class QuickSortEngine(ArrayEngine):

    def _generate(self) -> Generator[AlgorithmStep, None, None]:
        sb  = self.sb
        arr = list(self.input)

        initial = self._state(arr)
        yield sb.build(StepType.HIGHLIGHT, "Starting Quick Sort", 0, [], initial, initial,
                       "Quick Sort picks a pivot, moves smaller elements to its left, and then "
                       "sorts both sides recursively.",
                       {"n": len(arr)})

        yield from self._sort(arr)

        final = self._sorted_state(arr)
        yield sb.build(StepType.HIGHLIGHT, "Array is now sorted", 10, list(range(len(arr))),
                       final, final)

    # ------------------------------------------------------------------
    def _sort(self, arr: List[float]) -> Generator[AlgorithmStep, None, None]:
        """Left range first, then right: the same order as the recursive calls."""
        pending: List[Tuple[int, int, int]] = [(0, len(arr) - 1, 0)]
        while pending:
            low, high, depth = pending.pop()
            if low >= high:
                continue

            state = self._state(arr, low=low, high=high, depth=depth, phase="call")
            yield self.sb.build(StepType.HIGHLIGHT, f"Quick Sort on range [{low}..{high}]", 1,
                                list(range(low, high + 1)), state, state,
                                variables={"low": low, "high": high, "depth": depth})

            pivot_index = yield from self._partition(arr, low, high, depth)

            pending.append((pivot_index + 1, high, depth + 1))
            pending.append((low, pivot_index - 1, depth + 1))

    def _partition(self, arr: List[float], low: int, high: int, depth: int) -> Generator[AlgorithmStep, None, int]:
        sb    = self.sb
        pivot = arr[high]

        state = self._state(arr, pivot=high, pivotIndex=high, pivotValue=pivot,
                            low=low, high=high, depth=depth, phase="pivot")
        yield sb.build(StepType.HIGHLIGHT, f"Selected pivot: {pivot} at index {high}", 2, [high],
                       state, state, variables={"pivot": pivot, "pivotIndex": high})

        i = low - 1
        for j in range(low, high):
            sb.count_comparison()
            state = self._state(arr, pivot=high, pivotValue=pivot, comparing=j,
                                low=low, high=high, depth=depth, phase="partition-compare")
            yield sb.build(StepType.COMPARE, f"Comparing {arr[j]} with pivot {pivot}", 5, [j, high],
                           state, state, variables={"i": i, "j": j, "arr[j]": arr[j], "pivot": pivot})

            if arr[j] < pivot:
                i += 1
                if i != j:
                    before = self._state(arr, pivot=high, low=low, high=high, depth=depth,
                                         phase="partition-swap")
                    arr[i], arr[j] = arr[j], arr[i]
                    sb.count_operation()
                    after = self._state(arr, pivot=high, low=low, high=high, depth=depth,
                                        phase="partition-swap")
                    yield sb.build(StepType.SWAP, f"Swapping {arr[j]} and {arr[i]}", 6, [i, j],
                                   before, after, variables={"i": i, "j": j})

        before = self._state(arr, pivot=high, low=low, high=high, depth=depth, phase="pivot-place")
        arr[i + 1], arr[high] = arr[high], arr[i + 1]
        sb.count_operation()
        after = self._state(arr, pivot=i + 1, low=low, high=high, depth=depth, phase="pivot-place")
        yield sb.build(StepType.SWAP, f"Placing pivot {arr[i + 1]} at index {i + 1}", 7,
                       [i + 1, high], before, after,
                       variables={"pivotValue": pivot, "pivotIndex": i + 1})

        state = self._state(arr, partitioned=i + 1, pivotIndex=i + 1, pivotValue=pivot,
                            low=low, high=high, depth=depth, phase="partition-done")
        yield sb.build(StepType.HIGHLIGHT, f"Partition complete. Pivot at index {i + 1}", 8,
                       [i + 1], state, state,
                       variables={"pivotIndex": i + 1, "pivotValue": pivot})
        return i + 1

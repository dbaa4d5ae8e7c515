"""
heap_sort.py — Heap Sort
=========================
Two phases:
  1. Build a max-heap bottom-up (sift-down from the last parent to the root).
  2. Repeatedly swap the root with the last heap slot, shrink the heap,
     and sift the new root down.

Sift-down emits a COMPARE against each existing child and a SWAP when a
child is promoted.  Every state carries `heapSize`; extraction swaps add
`sortedFrom` (first index of the sorted tail).
"""

from typing import Generator, List

from algorithms.base import ArrayEngine
from algorithms.step import AlgorithmStep, StepType


PSEUDOCODE: List[str] = [
    "def heap_sort(arr):",                      # 0
    "    heapify(size, root):",                 # 1
    "        if arr[left] > arr[largest]: largest ← left",    # 2
    "        if arr[right] > arr[largest]: largest ← right",  # 3
    "        if largest ≠ root: swap; heapify(size, largest)",  # 4
    "    build max-heap from n//2-1 down to 0",  # 5
    "    for end in n-1 .. 1: swap(arr[0], arr[end]); heapify(end, 0)",  # 6
    "    return arr",                           # 7
]


class HeapSortEngine(ArrayEngine):

    def _generate(self) -> Generator[AlgorithmStep, None, None]:
        sb  = self.sb
        arr = list(self.input)
        n   = len(arr)

        initial = self._state(arr)
        yield sb.build(StepType.HIGHLIGHT, "Starting Heap Sort", 0, [], initial, initial,
                       "Heap Sort first builds a max-heap, then repeatedly moves the root (largest "
                       "value) to the end and restores heap order.",
                       {"size": n})

        for root in range(n // 2 - 1, -1, -1):
            yield from self._sift_down(arr, n, root)

        built = self._state(arr)
        yield sb.build(StepType.HIGHLIGHT, "Max-heap built", 5, list(range(n)), built, built,
                       variables={"heap": _fmt(arr)})

        for end in range(n - 1, 0, -1):
            before = self._state(arr, heapSize=end + 1, sortedFrom=end + 1)
            arr[0], arr[end] = arr[end], arr[0]
            sb.count_operation()
            after = self._state(arr, heapSize=end, sortedFrom=end)
            yield sb.build(StepType.SWAP, f"Move current max {arr[end]} to index {end}", 6,
                           [0, end], before, after,
                           variables={"extractedMax": arr[end], "sortedIndex": end})

            yield from self._sift_down(arr, end, 0)

        final = self._sorted_state(arr)
        yield sb.build(StepType.HIGHLIGHT, "Heap Sort complete", 7, list(range(n)), final, final,
                       variables={"sorted": _fmt(arr)})

    def _sift_down(self, arr: List[float], size: int, root: int) -> Generator[AlgorithmStep, None, None]:
        sb      = self.sb
        largest = root
        left    = 2 * root + 1
        right   = 2 * root + 2

        if left < size:
            sb.count_comparison()
            state = self._state(arr, heapSize=size)
            yield sb.build(StepType.COMPARE,
                           f"Compare root {arr[largest]} with left child {arr[left]}", 2,
                           [largest, left], state, state,
                           variables={"root": root, "left": left, "heapSize": size})
            if arr[left] > arr[largest]:
                largest = left

        if right < size:
            sb.count_comparison()
            state = self._state(arr, heapSize=size)
            yield sb.build(StepType.COMPARE,
                           f"Compare current largest {arr[largest]} with right child {arr[right]}", 3,
                           [largest, right], state, state,
                           variables={"root": root, "right": right, "heapSize": size})
            if arr[right] > arr[largest]:
                largest = right

        if largest != root:
            before = self._state(arr, heapSize=size)
            arr[root], arr[largest] = arr[largest], arr[root]
            sb.count_operation()
            after = self._state(arr, heapSize=size)
            yield sb.build(StepType.SWAP,
                           f"Swap {arr[largest]} and {arr[root]} to maintain max-heap", 4,
                           [root, largest], before, after,
                           variables={"root": root, "largest": largest, "heapSize": size})

            yield from self._sift_down(arr, size, largest)


def _fmt(values) -> str:
    return "[" + ", ".join(str(v) for v in values) + "]"

"""
selection_sort.py — Selection Sort
===================================
Per outer index i:
  • HIGHLIGHT the start of the scan
  • COMPARE every candidate against the current minimum
  • HIGHLIGHT whenever the minimum moves
  • SWAP only if the minimum is not already at i
  • HIGHLIGHT marking i as finalised

Not stable: the long-distance swap can jump an element over an equal one.
"""

from typing import Generator, List

from algorithms.base import ArrayEngine
from algorithms.step import AlgorithmStep, StepType


PSEUDOCODE: List[str] = [
    "def selection_sort(arr):",                 # 0
    "    for i in 0 .. n-2:",                   # 1
    "        min_idx ← i",                      # 2
    "        for j in i+1 .. n-1:",             # 3
    "            if arr[j] < arr[min_idx]:",    # 4
    "                min_idx ← j",              # 5
    "        if min_idx ≠ i:",                  # 6
    "            swap(arr[i], arr[min_idx])",   # 7
    "        arr[i] is in place",               # 8
    "    return arr",                           # 9
]


class SelectionSortEngine(ArrayEngine):

    def _generate(self) -> Generator[AlgorithmStep, None, None]:
        sb  = self.sb
        arr = list(self.input)
        n   = len(arr)

        initial = self._state(arr)
        yield sb.build(StepType.HIGHLIGHT, "Starting Selection Sort", 0, [], initial, initial,
                       "Each pass finds the smallest remaining element and moves it to the front "
                       "of the unsorted region.",
                       {"n": n})

        for i in range(n - 1):
            min_idx = i

            state = self._state(arr, currentIndex=i)
            yield sb.build(StepType.HIGHLIGHT, f"Finding minimum element from index {i}", 2, [i],
                           state, state, variables={"i": i, "min_idx": min_idx})

            for j in range(i + 1, n):
                sb.count_comparison()
                state = self._state(arr, minIdx=min_idx, comparing=j)
                yield sb.build(StepType.COMPARE, f"Comparing {arr[min_idx]} with {arr[j]}", 4,
                               [min_idx, j], state, state,
                               variables={"i": i, "j": j, "min_idx": min_idx,
                                          "arr[min_idx]": arr[min_idx], "arr[j]": arr[j]})

                if arr[j] < arr[min_idx]:
                    min_idx = j
                    state = self._state(arr, minIdx=min_idx)
                    yield sb.build(StepType.HIGHLIGHT,
                                   f"New minimum found: {arr[min_idx]} at index {min_idx}", 5,
                                   [min_idx], state, state,
                                   variables={"min_idx": min_idx, "minimum": arr[min_idx]})

            if min_idx != i:
                before = self._state(arr)
                arr[i], arr[min_idx] = arr[min_idx], arr[i]
                sb.count_operation()
                after = self._state(arr)
                yield sb.build(StepType.SWAP, f"Swapping {arr[min_idx]} and {arr[i]}", 7,
                               [i, min_idx], before, after,
                               variables={"i": i, "min_idx": min_idx})

            state = self._state(arr, sortedIndex=i)
            yield sb.build(StepType.HIGHLIGHT, f"Element at index {i} is now in its final position",
                           8, [i], state, state, variables={"sorted position": i, "value": arr[i]})

        final = self._sorted_state(arr)
        yield sb.build(StepType.HIGHLIGHT, "Array is now sorted", 9, list(range(n)), final, final)

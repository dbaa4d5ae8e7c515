"""
insertion_sort.py — Insertion Sort
===================================
Per outer index i:
  • HIGHLIGHT the key being inserted
  • COMPARE + UPDATE (shift right) pairs while the left neighbour is larger
  • INSERT placing the key into the gap

Every key comparison counts — including the last one that stops the scan —
so a sorted input still costs n-1 comparisons.  The INSERT is emitted
and counted for every key, even one written back to its own slot.
Stable: equal keys never shift past each other.
"""

from typing import Generator, List

from algorithms.base import ArrayEngine
from algorithms.step import AlgorithmStep, StepType


PSEUDOCODE: List[str] = [
    "def insertion_sort(arr):",                 # 0
    "    for i in 1 .. n-1:",                   # 1
    "        key ← arr[i]",                     # 2
    "        j ← i - 1",                        # 3
    "        while j ≥ 0 and arr[j] > key:",    # 4
    "            arr[j+1] ← arr[j]",            # 5
    "            j ← j - 1",                    # 6
    "        arr[j+1] ← key",                   # 7
    "    return arr",                           # 8
]


class InsertionSortEngine(ArrayEngine):

    def _generate(self) -> Generator[AlgorithmStep, None, None]:
        sb  = self.sb
        arr = list(self.input)
        n   = len(arr)

        initial = self._state(arr)
        yield sb.build(StepType.HIGHLIGHT, "Starting Insertion Sort", 0, [], initial, initial,
                       "The left part of the array is always sorted. Each new key is shifted left "
                       "until it meets a smaller or equal element.",
                       {"n": n})

        for i in range(1, n):
            key = arr[i]
            j = i - 1

            state = self._state(arr, key=i)
            yield sb.build(StepType.HIGHLIGHT, f"Inserting element {key} into sorted portion", 2,
                           [i], state, state, variables={"i": i, "key": key})

            while j >= 0:
                sb.count_comparison()
                state = self._state(arr, key=i, comparing=j)
                yield sb.build(StepType.COMPARE, f"Comparing {arr[j]} with {key}", 4, [j, j + 1],
                               state, state, variables={"j": j, "arr[j]": arr[j], "key": key})
                if arr[j] <= key:
                    break

                before = self._state(arr)
                arr[j + 1] = arr[j]
                sb.count_operation()
                after = self._state(arr)
                yield sb.build(StepType.UPDATE, f"Shifting {arr[j]} to the right", 5, [j, j + 1],
                               before, after, variables={"from": j, "to": j + 1, "key": key})
                j -= 1

            before = self._state(arr)
            arr[j + 1] = key
            sb.count_operation()
            after = self._state(arr)
            yield sb.build(StepType.INSERT, f"Inserting {key} at index {j + 1}", 7, [j + 1],
                           before, after, variables={"key": key, "position": j + 1})

        final = self._sorted_state(arr)
        yield sb.build(StepType.HIGHLIGHT, "Array is now sorted", 8, list(range(n)), final, final)

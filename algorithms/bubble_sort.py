"""
bubble_sort.py — Bubble Sort
=============================
Emits, in order:
  1. Start highlight (no affected indices)
  2. For every adjacent pair  →  COMPARE, then SWAP only if out of order
  3. End of each pass  →  HIGHLIGHT of the newly finalised tail position
  4. Final highlight over the whole array with metadata.sorted = True

No early exit when a pass makes no swaps: the step count (and the
comparison count, n·(n-1)/2) is the same for every input of length n.
"""

from typing import Generator, List

from algorithms.base import ArrayEngine
from algorithms.step import AlgorithmStep, StepType


PSEUDOCODE: List[str] = [
    "def bubble_sort(arr):",                    # 0
    "    n ← len(arr)",                         # 1
    "    for i in 0 .. n-2:",                   # 2
    "        for j in 0 .. n-i-2:",             # 3
    "            if arr[j] > arr[j+1]:",        # 4
    "                swap(arr[j], arr[j+1])",   # 5
    "        arr[n-i-1] is in place",           # 6
    "    return arr",                           # 7
]


class BubbleSortEngine(ArrayEngine):

    def _generate(self) -> Generator[AlgorithmStep, None, None]:
        sb  = self.sb
        arr = list(self.input)
        n   = len(arr)

        initial = self._state(arr)
        yield sb.build(
            StepType.HIGHLIGHT,
            "Starting Bubble Sort",
            0,
            [],
            initial,
            initial,
            "We will iterate through the array multiple times, comparing adjacent elements "
            "and swapping them if they are in the wrong order. This \"bubbles\" the largest "
            "element to the end in each pass.",
            {"n": n, "i": 0, "j": 0},
        )

        for i in range(n - 1):
            for j in range(n - i - 1):
                sb.count_comparison()
                state = self._state(arr, i=i, j=j)
                yield sb.build(
                    StepType.COMPARE,
                    f"Comparing {arr[j]} and {arr[j + 1]}",
                    4,
                    [j, j + 1],
                    state,
                    state,
                    f"We compare arr[{j}] = {arr[j]} with arr[{j + 1}] = {arr[j + 1]}. "
                    f"If arr[{j}] > arr[{j + 1}], we swap them to keep ascending order.",
                    {"i": i, "j": j, "arr[j]": arr[j], "arr[j+1]": arr[j + 1],
                     "comparing": f"{arr[j]} vs {arr[j + 1]}"},
                )

                if arr[j] > arr[j + 1]:
                    before = self._state(arr, i=i, j=j)
                    temp = arr[j]
                    arr[j], arr[j + 1] = arr[j + 1], arr[j]
                    sb.count_operation()
                    after = self._state(arr, i=i, j=j)
                    yield sb.build(
                        StepType.SWAP,
                        f"Swapping {temp} and {arr[j]}",
                        5,
                        [j, j + 1],
                        before,
                        after,
                        f"Since {temp} > {arr[j]}, we swap them: temp = {temp}, "
                        f"arr[{j}] = {arr[j]}, arr[{j + 1}] = {temp}. "
                        f"After swap: {_fmt(arr)}",
                        {"i": i, "j": j, "temp": temp,
                         "before swap": _fmt(before.data), "after swap": _fmt(arr)},
                    )

            sorted_index = n - i - 1
            state = self._state(arr, sortedIndex=sorted_index)
            yield sb.build(
                StepType.HIGHLIGHT,
                f"Element at index {sorted_index} is now in its final position",
                6,
                [sorted_index],
                state,
                state,
                f"Pass {i + 1} complete! The largest element of the unsorted portion "
                f"({arr[sorted_index]}) has bubbled to position {sorted_index}.",
                {"pass": i + 1, "sorted position": sorted_index,
                 "sorted element": arr[sorted_index], "remaining passes": n - i - 2},
            )

        final = self._sorted_state(arr)
        yield sb.build(
            StepType.HIGHLIGHT,
            "Array is now sorted",
            7,
            list(range(n)),
            final,
            final,
            f"Bubble Sort complete! Total comparisons: {sb.comparison_count}, "
            f"total swaps: {sb.operation_count}. The array {_fmt(arr)} is fully sorted.",
            {"total comparisons": sb.comparison_count, "total swaps": sb.operation_count,
             "sorted array": _fmt(arr)},
        )


def _fmt(values) -> str:
    return "[" + ", ".join(str(v) for v in values) + "]"

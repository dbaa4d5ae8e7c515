"""
linear_search.py — Linear Search
=================================
One COMPARE per scanned element; stops at the first match with a
"found" HIGHLIGHT, otherwise ends with a "not found" HIGHLIGHT.
"""

from typing import Generator, List

from algorithms.searching import SearchEngine
from algorithms.step import AlgorithmStep, StepType


PSEUDOCODE: List[str] = [
    "def linear_search(arr, target):",          # 0
    "    for i in 0 .. n-1:",                   # 1
    "        if arr[i] == target:",             # 2
    "            return i",                     # 3
    "    # exhausted",                          # 4
    "    return -1",                            # 5
]


class LinearSearchEngine(SearchEngine):

    def _generate(self) -> Generator[AlgorithmStep, None, None]:
        sb     = self.sb
        arr    = list(self.input)
        target = self.target

        initial = self._state(arr)
        yield sb.build(StepType.HIGHLIGHT, f"Starting Linear Search for target: {target}", 0, [],
                       initial, initial,
                       "Linear search checks every element from left to right until it finds "
                       "the target or runs out of elements.",
                       {"target": target, "array size": len(arr)})

        for i, value in enumerate(arr):
            sb.count_comparison()
            state = self._state(arr, searching=i)
            yield sb.build(StepType.COMPARE, f"Comparing {value} with target {target}", 2, [i],
                           state, state, variables={"i": i, "arr[i]": value, "target": target})

            if value == target:
                found = self._state(arr, found=i)
                yield sb.build(StepType.HIGHLIGHT, f"Target {target} found at index {i}!", 3, [i],
                               found, found,
                               variables={"found at": i, "total comparisons": sb.comparison_count})
                return

        missing = self._state(arr, notFound=True)
        yield sb.build(StepType.HIGHLIGHT, f"Target {target} not found in array", 5, [],
                       missing, missing,
                       variables={"result": "not found", "total comparisons": sb.comparison_count})

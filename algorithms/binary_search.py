"""
binary_search.py — Binary Search
=================================
Per iteration over the window [left..right]:
  • HIGHLIGHT the window and its midpoint  (mid = (left + right) // 2)
  • COMPARE arr[mid] with the target
  • HIGHLIGHT "found", or the half the search continues in

Ends on a match or once left > right ("not found" HIGHLIGHT).
The input must already be ascending; nothing here sorts it.
"""

from typing import Generator, List

from algorithms.searching import SearchEngine
from algorithms.step import AlgorithmStep, StepType


PSEUDOCODE: List[str] = [
    "def binary_search(arr, target):",          # 0
    "    left ← 0; right ← n - 1",              # 1
    "    while left ≤ right:  mid ← (left + right) // 2",  # 2
    "        if arr[mid] == target:",           # 3
    "            return mid",                   # 4
    "        elif arr[mid] < target:",          # 5
    "            left ← mid + 1",               # 6
    "        else:",                            # 7
    "            right ← mid - 1",              # 8
    "    # window empty",                       # 9
    "    return -1",                            # 10
]


class BinarySearchEngine(SearchEngine):

    def _generate(self) -> Generator[AlgorithmStep, None, None]:
        sb     = self.sb
        arr    = list(self.input)
        target = self.target

        initial = self._state(arr)
        yield sb.build(
            StepType.HIGHLIGHT,
            f"Starting Binary Search for target: {target}",
            0,
            [],
            initial,
            initial,
            f"Binary search works on sorted arrays by repeatedly dividing the search space in half. "
            f"We'll compare the target {target} with the middle element and eliminate half of the "
            f"remaining elements in each step.",
            {"target": target, "array size": len(arr), "left": 0, "right": len(arr) - 1},
        )

        left, right = 0, len(arr) - 1
        while left <= right:
            mid = (left + right) // 2

            window = self._state(arr, left=left, right=right, mid=mid)
            yield sb.build(
                StepType.HIGHLIGHT,
                f"Search space: [{left}..{right}], checking middle index {mid}",
                2,
                list(range(left, right + 1)),
                window,
                window,
                f"Current search boundaries: left = {left}, right = {right}. We calculate "
                f"mid = floor(({left} + {right}) / 2) = {mid}. The middle element is "
                f"arr[{mid}] = {arr[mid]}.",
                {"left": left, "right": right, "mid": mid, "arr[mid]": arr[mid],
                 "search space size": right - left + 1},
            )

            sb.count_comparison()
            state = self._state(arr, left=left, right=right, mid=mid, comparing=True)
            yield sb.build(
                StepType.COMPARE,
                f"Comparing {arr[mid]} with target {target}",
                3,
                [mid],
                state,
                state,
                f"We compare the middle element arr[{mid}] = {arr[mid]} with our target {target}. "
                f"If they're equal, we found it! If target is greater, search right half. "
                f"If target is smaller, search left half.",
                {"arr[mid]": arr[mid], "target": target, "comparison": f"{arr[mid]} vs {target}"},
            )

            if arr[mid] == target:
                found = self._state(arr, found=mid)
                yield sb.build(
                    StepType.HIGHLIGHT,
                    f"Target {target} found at index {mid}!",
                    4,
                    [mid],
                    found,
                    found,
                    f"Success! arr[{mid}] = {arr[mid]} equals our target {target}. Binary search "
                    f"found the element in O(log n) time, making {sb.comparison_count} comparisons.",
                    {"found at": mid, "value": arr[mid], "total comparisons": sb.comparison_count},
                )
                return

            if arr[mid] < target:
                narrowed = self._state(arr, left=mid + 1, right=right)
                yield sb.build(
                    StepType.HIGHLIGHT,
                    f"{arr[mid]} < {target}, searching right half",
                    6,
                    list(range(mid + 1, right + 1)),
                    narrowed,
                    narrowed,
                    f"Since {arr[mid]} < {target}, the target must be in the right half. We eliminate "
                    f"the left half and middle element by setting left = mid + 1 = {mid + 1}. "
                    f"New search space: [{mid + 1}..{right}].",
                    {"decision": "search right", "new left": mid + 1, "right": right},
                )
                left = mid + 1
            else:
                narrowed = self._state(arr, left=left, right=mid - 1)
                yield sb.build(
                    StepType.HIGHLIGHT,
                    f"{arr[mid]} > {target}, searching left half",
                    8,
                    list(range(left, mid)),
                    narrowed,
                    narrowed,
                    f"Since {arr[mid]} > {target}, the target must be in the left half. We eliminate "
                    f"the right half and middle element by setting right = mid - 1 = {mid - 1}. "
                    f"New search space: [{left}..{mid - 1}].",
                    {"decision": "search left", "left": left, "new right": mid - 1},
                )
                right = mid - 1

        missing = self._state(arr, notFound=True)
        yield sb.build(
            StepType.HIGHLIGHT,
            f"Target {target} not found in array",
            10,
            [],
            missing,
            missing,
            f"Search space exhausted. The target {target} is not in the array. We made "
            f"{sb.comparison_count} comparisons, so we can conclude it's not present.",
            {"result": "not found", "target": target, "total comparisons": sb.comparison_count},
        )

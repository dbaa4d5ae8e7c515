"""
searching.py — Search Input
============================
Shared input record and validation for the two array searches.

Callers may pass either a SearchInput or a plain mapping
`{"array": [...], "target": n}`.  Binary search does NOT sort: the
caller is responsible for handing it an ascending array.
"""

from dataclasses import dataclass
from typing import Any, List, Tuple

from algorithms.base import ArrayEngine, is_number, require_number_list
from algorithms.exceptions import InputValidationError


@dataclass(frozen=True)
class SearchInput:
    array:  Tuple[float, ...]
    target: float


class SearchEngine(ArrayEngine):
    """Array engine whose input also names a target; every state carries it."""

    def __init__(self):
        super().__init__()
        self.target: float = 0

    def _validate(self, input_data: Any) -> List[float]:
        if isinstance(input_data, SearchInput):
            array, target = input_data.array, input_data.target
        elif isinstance(input_data, dict):
            if "array" not in input_data or "target" not in input_data:
                raise InputValidationError("Search input needs 'array' and 'target'")
            array, target = input_data["array"], input_data["target"]
        else:
            raise InputValidationError("Search input must be a SearchInput or a mapping")

        if not is_number(target):
            raise InputValidationError(f"Search target must be a number, got {target!r}")
        values = require_number_list(array, "Search array")
        self.target = target
        return values

    def _state(self, data, **metadata):
        metadata["target"] = self.target
        return super()._state(data, **metadata)

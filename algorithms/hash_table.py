"""
hash_table.py — Hash Table (linear probing)
============================================
Open addressing over a fixed number of buckets:

    slot = key % size,  then slot + 1, slot + 2, … (wrapping) on collision

State data is the list of stored keys, EMPTY (-1) marking a free slot;
the stored values ride along in `metadata["values"]` and the slots freed
by a delete in `metadata["deleted"]`.

  set     → COMPARE per probed slot that does not end the search, then
            INSERT into a free slot or UPDATE of the slot already holding
            the key.  A full table with the key absent reports a
            HIGHLIGHT instead.
  get     → COMPARE per probed slot, then a found / not-found HIGHLIGHT.
  delete  → COMPARE per probed slot, then DELETE or a not-found HIGHLIGHT.

A deleted slot reads EMPTY but stays a tombstone: get / delete probe past
it, and set reuses the first one only after the probe has reached a
never-used slot (or run out of slots) without meeting the key.  Probing
stops at a never-used slot or after `size` probes.
"""

from typing import Any, Dict, Generator, List, Optional, Set

from algorithms.base import AlgorithmEngine, require_mapping
from algorithms.exceptions import InputValidationError
from algorithms.operations import HashOp, require_hash_operations
from algorithms.step import AlgorithmStep, StepType, StructureKind


EMPTY:              int = -1
MIN_TABLE_SIZE:     int = 3
DEFAULT_TABLE_SIZE: int = 7

PSEUDOCODE: List[str] = [
    "table ← [EMPTY] * size",                   # 0
    "set(k, v): slot ← probe(k); table[slot] ← (k, v)",  # 1
    "get(k): probe from k % size past DELETED until k or EMPTY",  # 2
    "    return slot (or not found)",           # 3
    "delete(k): table[probe(k)] ← DELETED",     # 4
    "done",                                     # 5
]


class HashTableEngine(AlgorithmEngine):

    KIND = StructureKind.HASH_TABLE

    def __init__(self):
        super().__init__()
        self.size: int = DEFAULT_TABLE_SIZE
        self._deleted: Set[int] = set()

    def _validate(self, input_data: Any) -> List[HashOp]:
        raw = require_mapping(input_data, "Hash table input")
        size = raw.get("size", DEFAULT_TABLE_SIZE)
        if isinstance(size, bool) or not isinstance(size, int):
            raise InputValidationError(f"Hash table size must be an integer, got {size!r}")
        ops = require_hash_operations(raw.get("operations", []))
        self.size = max(MIN_TABLE_SIZE, size)
        return ops

    def _generate(self) -> Generator[AlgorithmStep, None, None]:
        sb = self.sb
        keys:   List[int]           = [EMPTY] * self.size
        values: List[Optional[Any]] = [None] * self.size
        self._deleted = set()

        initial = self._table_state(keys, values)
        yield sb.build(StepType.HIGHLIGHT, f"Hash table initialized with {self.size} buckets", 0, [],
                       initial, initial,
                       "Each key is stored at key % size. When that slot is taken, linear probing "
                       "tries the next slot until a free one is found.",
                       {"size": self.size})

        for op in self.input:
            if op.kind == "set":
                yield from self._set(keys, values, op.key, op.value)
            elif op.kind == "get":
                yield from self._get(keys, values, op.key)
            else:
                yield from self._delete(keys, values, op.key)

        final = self._table_state(keys, values, complete=True)
        yield sb.build(StepType.HIGHLIGHT, "Hash table operations complete", 5,
                       list(range(self.size)), final, final,
                       variables={"occupied": sum(1 for k in keys if k != EMPTY), "size": self.size})

    # ------------------------------------------------------------------
    def _set(self, keys: List[int], values: List[Any], key: int, value: Any) -> Generator[AlgorithmStep, None, None]:
        sb    = self.sb
        home  = key % self.size
        slot  = home
        reuse: Optional[int] = None
        target: Optional[int] = None
        for _ in range(self.size):
            if keys[slot] == key:
                target = slot
                break
            if keys[slot] == EMPTY and slot not in self._deleted:
                target = slot if reuse is None else reuse
                break

            sb.count_comparison()
            state = self._table_state(keys, values, probing=slot)
            if keys[slot] == EMPTY:
                if reuse is None:
                    reuse = slot
                description = f"Slot {slot} was deleted, keep probing for key {key}"
            else:
                description = f"Collision at slot {slot} (holds key {keys[slot]})"
            yield sb.build(StepType.COMPARE, description, 1, [slot], state, state,
                           variables={"key": key, "slot": slot, "stored": keys[slot], "home": home})
            slot = (slot + 1) % self.size
        else:
            target = reuse

        if target is None:
            state = self._table_state(keys, values, full=True)
            yield sb.build(StepType.HIGHLIGHT, f"Table full, cannot set key {key}", 1, [], state, state,
                           variables={"key": key, "value": value, "size": self.size})
            return

        before = self._table_state(keys, values)
        existing = keys[target] == key
        keys[target] = key
        values[target] = value
        self._deleted.discard(target)
        sb.count_operation()
        after = self._table_state(keys, values)
        if existing:
            yield sb.build(StepType.UPDATE, f"Update key {key} at slot {target}", 1, [target], before, after,
                           variables={"key": key, "value": value, "slot": target})
        else:
            yield sb.build(StepType.INSERT, f"Set key {key} at slot {target}", 1, [target], before, after,
                           variables={"key": key, "value": value, "slot": target,
                                      "probes": (target - home) % self.size})

    def _probe(self, keys: List[int], values: List[Any], key: int, line: int) -> Generator[AlgorithmStep, None, int]:
        """COMPARE per probed slot; returns the slot holding `key` or EMPTY."""
        sb   = self.sb
        slot = key % self.size
        for _ in range(self.size):
            if keys[slot] == EMPTY and slot not in self._deleted:
                break
            sb.count_comparison()
            state = self._table_state(keys, values, probing=slot)
            yield sb.build(StepType.COMPARE, f"Probe slot {slot} for key {key}", line, [slot],
                           state, state, variables={"key": key, "slot": slot, "stored": keys[slot]})
            if keys[slot] == key:
                return slot
            slot = (slot + 1) % self.size
        return EMPTY

    def _get(self, keys: List[int], values: List[Any], key: int) -> Generator[AlgorithmStep, None, None]:
        found = yield from self._probe(keys, values, key, 2)
        if found == EMPTY:
            state = self._table_state(keys, values, notFound=key)
            yield self.sb.build(StepType.HIGHLIGHT, f"Key {key} not found", 3, [], state, state,
                                variables={"key": key, "found": EMPTY})
        else:
            state = self._table_state(keys, values, found=found)
            yield self.sb.build(StepType.HIGHLIGHT, f"Key {key} found at slot {found}", 3, [found],
                                state, state,
                                variables={"key": key, "found": found, "value": values[found]})

    def _delete(self, keys: List[int], values: List[Any], key: int) -> Generator[AlgorithmStep, None, None]:
        found = yield from self._probe(keys, values, key, 4)
        if found == EMPTY:
            state = self._table_state(keys, values, notFound=key)
            yield self.sb.build(StepType.HIGHLIGHT, f"Key {key} not found for deletion", 4, [],
                                state, state, variables={"key": key})
            return

        before = self._table_state(keys, values)
        keys[found] = EMPTY
        values[found] = None
        self._deleted.add(found)
        self.sb.count_operation()
        after = self._table_state(keys, values)
        yield self.sb.build(StepType.DELETE, f"Delete key {key} from slot {found}", 4, [found],
                            before, after, variables={"key": key, "slot": found})

    def _table_state(self, keys: List[int], values: List[Any], **metadata: Any):
        metadata["values"] = values
        metadata["size"] = self.size
        metadata["deleted"] = sorted(self._deleted)
        return self._state(keys, **metadata)

    def snapshot_table(self) -> Dict[int, Any]:
        """Key → value mapping as of the last generated step."""
        if not self._steps:
            return {}
        state = self._steps[-1].after_state
        return {k: v for k, v in zip(state.data, state.metadata["values"]) if k != EMPTY}

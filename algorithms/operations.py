"""
operations.py — Operation Records
==================================
The data-structure engines replay a pre-parsed list of operations against
an initially empty container.  Each operation is a tiny frozen record:

    StackOp("push", 5)      StackOp("pop")        StackOp("peek")
    QueueOp("enqueue", 5)   QueueOp("dequeue")    QueueOp("peek")
    ListOp("insert", 5)     ListOp("delete", 5)   ListOp("search", 5)
    HashOp("set", 3, 10)    HashOp("get", 3)      HashOp("delete", 3)

Plain mappings such as {"kind": "push", "value": 5} are accepted too and
converted on validation (that is what the JSON API hands over).
"""

from dataclasses import dataclass
from typing import Any, FrozenSet, List, Optional, Type, TypeVar

from algorithms.base import is_number
from algorithms.exceptions import InputValidationError


@dataclass(frozen=True)
class StackOp:
    kind:  str
    value: Optional[float] = None

    KINDS       = frozenset({"push", "pop", "peek"})
    VALUE_KINDS = frozenset({"push"})


@dataclass(frozen=True)
class QueueOp:
    kind:  str
    value: Optional[float] = None

    KINDS       = frozenset({"enqueue", "dequeue", "peek"})
    VALUE_KINDS = frozenset({"enqueue"})


@dataclass(frozen=True)
class ListOp:
    kind:  str
    value: Optional[float] = None

    KINDS       = frozenset({"insert", "delete", "search"})
    VALUE_KINDS = frozenset({"insert", "delete", "search"})


@dataclass(frozen=True)
class HashOp:
    """`key` is required for every kind; `value` only for "set"."""

    kind:  str
    key:   int
    value: Optional[Any] = None

    KINDS = frozenset({"set", "get", "delete"})


Op = TypeVar("Op", StackOp, QueueOp, ListOp)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------
def require_operations(value: Any, op_type: Type[Op]) -> List[Op]:
    """Normalise a list of op records (or mappings) for one engine family."""
    if not isinstance(value, (list, tuple)):
        raise InputValidationError(f"Expected a list of {op_type.__name__} operations")

    kinds:       FrozenSet[str] = op_type.KINDS
    value_kinds: FrozenSet[str] = op_type.VALUE_KINDS
    ops: List[Op] = []
    for position, raw in enumerate(value):
        op = _coerce(raw, op_type, position)
        if op.kind not in kinds:
            raise InputValidationError(
                f"Operation {position}: unknown kind {op.kind!r} (expected one of {sorted(kinds)})"
            )
        if op.kind in value_kinds and not is_number(op.value):
            raise InputValidationError(f"Operation {position}: {op.kind} needs a numeric value")
        ops.append(op)
    return ops


def require_hash_operations(value: Any) -> List[HashOp]:
    if not isinstance(value, (list, tuple)):
        raise InputValidationError("Expected a list of HashOp operations")

    ops: List[HashOp] = []
    for position, raw in enumerate(value):
        op = _coerce(raw, HashOp, position)
        if op.kind not in HashOp.KINDS:
            raise InputValidationError(
                f"Operation {position}: unknown kind {op.kind!r} (expected one of {sorted(HashOp.KINDS)})"
            )
        if isinstance(op.key, bool) or not isinstance(op.key, int) or op.key < 0:
            raise InputValidationError(f"Operation {position}: key must be a non-negative integer")
        if op.kind == "set" and op.value is None:
            raise InputValidationError(f"Operation {position}: set needs a value")
        ops.append(op)
    return ops


def _coerce(raw: Any, op_type: type, position: int):
    if isinstance(raw, op_type):
        return raw
    if isinstance(raw, dict):
        fields = {k: raw[k] for k in ("kind", "key", "value") if k in raw}
        try:
            return op_type(**fields)
        except TypeError as e:
            raise InputValidationError(f"Operation {position}: {e}") from e
    raise InputValidationError(f"Operation {position}: expected {op_type.__name__}, got {raw!r}")

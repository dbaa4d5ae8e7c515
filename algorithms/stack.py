"""
stack.py — Stack Operations
============================
Array-backed LIFO stack; the top is the last element of `data`.

  push  → INSERT, then HIGHLIGHT naming the new top
  pop   → DELETE, then HIGHLIGHT naming the new top (if any)
  peek  → HIGHLIGHT only; never counts as an operation

Popping or peeking an empty stack is not an error: it produces a
HIGHLIGHT whose metadata carries `underflow: True`.
"""

from typing import Any, Generator, List

from algorithms.base import AlgorithmEngine
from algorithms.operations import StackOp, require_operations
from algorithms.step import AlgorithmStep, StepType, StructureKind


PSEUDOCODE: List[str] = [
    "stack ← []",                               # 0
    "push(value):",                             # 1
    "    stack.append(value)",                  # 2
    "    top ← len(stack) - 1",                 # 3
    "pop():",                                   # 4
    "    if empty: underflow",                  # 5
    "    value ← stack.pop()",                  # 6
    "    top ← len(stack) - 1",                 # 7
    "peek():",                                  # 8
    "    if empty: nothing to peek",            # 9
    "    return stack[top]",                    # 10
    "done",                                     # 11
]


class StackEngine(AlgorithmEngine):

    KIND = StructureKind.STACK

    def _validate(self, input_data: Any) -> List[StackOp]:
        return require_operations(input_data, StackOp)

    def _generate(self) -> Generator[AlgorithmStep, None, None]:
        sb = self.sb
        stack: List[float] = []

        initial = self._state(stack)
        yield sb.build(StepType.HIGHLIGHT, "Stack initialized (empty)", 0, [], initial, initial,
                       "A stack is a LIFO (Last-In-First-Out) data structure. Elements are added "
                       "and removed from the top. Think of it like a stack of plates.",
                       {"size": 0, "top": None, "isEmpty": True})

        for op in self.input:
            if op.kind == "push":
                yield from self._push(stack, op.value)
            elif op.kind == "pop":
                yield from self._pop(stack)
            else:
                yield from self._peek(stack)

        final = self._state(stack, complete=True)
        yield sb.build(StepType.HIGHLIGHT, f"Operations complete. Stack size: {len(stack)}", 11,
                       list(range(len(stack))), final, final,
                       variables={"size": len(stack), "stack": _fmt(stack)})

    # ------------------------------------------------------------------
    def _push(self, stack: List[float], value: float) -> Generator[AlgorithmStep, None, None]:
        sb = self.sb
        before = self._state(stack)
        stack.append(value)
        sb.count_operation()
        after = self._state(stack)
        top = len(stack) - 1
        yield sb.build(
            StepType.INSERT,
            f"Push {value} onto stack",
            2,
            [top],
            before,
            after,
            f"Adding {value} to the top of the stack. The operation stack.push({value}) adds the "
            f"element to the end of the array. The new top index is {top}.",
            {"operation": "push", "value": value, "new top": value, "top index": top,
             "size": len(stack)},
        )

        state = self._state(stack, top=top)
        yield sb.build(
            StepType.HIGHLIGHT,
            f"Top of stack is now {value}",
            3,
            [top],
            state,
            state,
            f"The top pointer now points to {value} at index {top}. This is the element that "
            f"will be removed if we call pop().",
            {"top": value, "top index": top, "stack": _fmt(stack)},
        )

    def _pop(self, stack: List[float]) -> Generator[AlgorithmStep, None, None]:
        sb = self.sb
        if not stack:
            state = self._state(stack, underflow=True, operation="pop")
            yield sb.build(
                StepType.HIGHLIGHT,
                "Stack underflow! Cannot pop from empty stack",
                5,
                [],
                state,
                state,
                "Attempting to pop from an empty stack causes an underflow. Always check if the "
                "stack is empty before popping!",
                {"error": "Stack Underflow", "size": 0, "isEmpty": True},
            )
            return

        before = self._state(stack)
        previous_size = len(stack)
        popped = stack.pop()
        sb.count_operation()
        after = self._state(stack)
        yield sb.build(
            StepType.DELETE,
            f"Pop {popped} from stack",
            6,
            [len(stack)],
            before,
            after,
            f"Removing the top element {popped} from the stack. The stack size decreases from "
            f"{previous_size} to {len(stack)}.",
            {"operation": "pop", "popped value": popped, "previous size": previous_size,
             "new size": len(stack)},
        )

        if stack:
            top = len(stack) - 1
            state = self._state(stack, top=top)
            yield sb.build(
                StepType.HIGHLIGHT,
                f"Top of stack is now {stack[top]}",
                7,
                [top],
                state,
                state,
                f"After popping {popped}, the new top element is {stack[top]} at index {top}. "
                f"This is now the most recently added element.",
                {"new top": stack[top], "top index": top, "stack": _fmt(stack)},
            )

    def _peek(self, stack: List[float]) -> Generator[AlgorithmStep, None, None]:
        sb = self.sb
        if not stack:
            state = self._state(stack, underflow=True, operation="peek")
            yield sb.build(StepType.HIGHLIGHT, "Stack is empty, nothing to peek", 9, [], state, state,
                           "Peek on an empty stack has nothing to return. The stack has no elements "
                           "to view.",
                           {"operation": "peek", "result": None, "isEmpty": True, "size": 0})
            return

        top = len(stack) - 1
        state = self._state(stack, peeking=True, top=top)
        yield sb.build(StepType.HIGHLIGHT, f"Peek: Top element is {stack[top]}", 10, [top], state, state,
                       f"Peek lets us view the top element ({stack[top]}) without removing it. "
                       f"The stack remains unchanged.",
                       {"operation": "peek", "top value": stack[top], "top index": top,
                        "size": len(stack)})


def _fmt(values) -> str:
    return "[" + ", ".join(str(v) for v in values) + "]"

"""
queue.py — Queue Operations
============================
Array-backed FIFO queue: index 0 is the front, the last index the rear.
Same step pattern as the stack engine; an empty dequeue/peek yields a
HIGHLIGHT with `underflow: True` in its metadata.
"""

from typing import Any, Generator, List

from algorithms.base import AlgorithmEngine
from algorithms.operations import QueueOp, require_operations
from algorithms.step import AlgorithmStep, StepType, StructureKind


PSEUDOCODE: List[str] = [
    "queue ← []",                               # 0
    "enqueue(value):",                          # 1
    "    queue.append(value)",                  # 2
    "    front ← 0; rear ← len(queue) - 1",     # 3
    "dequeue():",                               # 4
    "    if empty: underflow",                  # 5
    "    value ← queue.pop(0)",                 # 6
    "    front ← 0",                            # 7
    "peek():",                                  # 8
    "    if empty: nothing to peek",            # 9
    "    return queue[front]",                  # 10
    "done",                                     # 11
]


class QueueEngine(AlgorithmEngine):

    KIND = StructureKind.QUEUE

    def _validate(self, input_data: Any) -> List[QueueOp]:
        return require_operations(input_data, QueueOp)

    def _generate(self) -> Generator[AlgorithmStep, None, None]:
        sb = self.sb
        queue: List[float] = []

        initial = self._state(queue)
        yield sb.build(StepType.HIGHLIGHT, "Queue initialized (empty)", 0, [], initial, initial,
                       "A queue is a FIFO (First-In-First-Out) structure: elements join at the "
                       "rear and leave from the front.",
                       {"size": 0})

        for op in self.input:
            if op.kind == "enqueue":
                before = self._state(queue)
                queue.append(op.value)
                sb.count_operation()
                rear = len(queue) - 1
                after = self._state(queue, rear=rear)
                yield sb.build(StepType.INSERT, f"Enqueue {op.value} to rear of queue", 2, [rear],
                               before, after,
                               variables={"operation": "enqueue", "value": op.value, "size": len(queue)})

                state = self._state(queue, front=0, rear=rear)
                yield sb.build(StepType.HIGHLIGHT, f"Front: {queue[0]}, Rear: {queue[rear]}", 3,
                               [0, rear], state, state,
                               variables={"front": queue[0], "rear": queue[rear]})

            elif op.kind == "dequeue":
                if not queue:
                    state = self._state(queue, underflow=True, operation="dequeue")
                    yield sb.build(StepType.HIGHLIGHT, "Queue underflow! Cannot dequeue from empty queue",
                                   5, [], state, state,
                                   variables={"error": "Queue Underflow", "size": 0})
                    continue

                before = self._state(queue)
                value = queue.pop(0)
                sb.count_operation()
                after = self._state(queue)
                yield sb.build(StepType.DELETE, f"Dequeue {value} from front of queue", 6, [0],
                               before, after,
                               variables={"operation": "dequeue", "value": value, "size": len(queue)})

                if queue:
                    state = self._state(queue, front=0)
                    yield sb.build(StepType.HIGHLIGHT, f"New front element is {queue[0]}", 7, [0],
                                   state, state, variables={"front": queue[0]})

            else:
                if not queue:
                    state = self._state(queue, underflow=True, operation="peek")
                    yield sb.build(StepType.HIGHLIGHT, "Queue is empty, nothing to peek", 9, [],
                                   state, state, variables={"operation": "peek", "result": None})
                    continue

                state = self._state(queue, peeking=True, front=0)
                yield sb.build(StepType.HIGHLIGHT, f"Peek: Front element is {queue[0]}", 10, [0],
                               state, state, variables={"operation": "peek", "front": queue[0]})

        final = self._state(queue, complete=True)
        yield sb.build(StepType.HIGHLIGHT, f"Operations complete. Queue size: {len(queue)}", 11,
                       list(range(len(queue))), final, final, variables={"size": len(queue)})

# services/single_flight.py - IN-FLIGHT REQUEST COALESCING
import asyncio
from typing import Any, Awaitable, Callable, Dict


class SingleFlight:
    """
    Share one running coroutine between concurrent callers of the same key

    The first caller for a key starts the work as a task; callers arriving
    before it finishes await that same task. Once it completes the key is
    released, so later calls start fresh work. Results and exceptions are
    delivered to every waiter. Waiters are shielded: a cancelled caller
    does not cancel the shared task.
    """

    def __init__(self):
        self._inflight: Dict[str, asyncio.Task] = {}

    async def do(self, key: str, fn: Callable[[], Awaitable[Any]]) -> Any:
        task = self._inflight.get(key)

        if task is None:
            task = asyncio.ensure_future(fn())
            self._inflight[key] = task
            task.add_done_callback(lambda _t, k=key: self._release(k, _t))

        return await asyncio.shield(task)

    def _release(self, key: str, task: asyncio.Task) -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]
        # Mark the exception retrieved when every waiter was cancelled
        if not task.cancelled():
            task.exception()

    def in_flight(self, key: str) -> bool:
        return key in self._inflight

    def __len__(self) -> int:
        return len(self._inflight)

"""SignalOnce — latch letting exactly one of many racing callers through."""

import threading


class SignalOnce:
    """Idempotent fire-once latch.

    ``fire`` returns True for the first caller only. The flag is guarded by a
    lock so the latch also holds when callers live on different threads.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._fired = False

    @property
    def fired(self) -> bool:
        return self._fired

    def fire(self) -> bool:
        with self._lock:
            if self._fired:
                return False
            self._fired = True
            return True

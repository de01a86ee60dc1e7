"""Per-key serial task queue.

Tasks queued under the same key run one at a time, in FIFO order; tasks
under different keys never wait on each other. The refresher uses one
key per playlist so that two refreshes of a playlist cannot interleave
their remove/add calls on Spotify.

A key is present in the table only while it has pending tasks. The task
at the front stays in the table while it runs and is removed once it has
finished, whether it succeeded or raised.
"""

from collections import deque
from concurrent.futures import Future
from dataclasses import dataclass
import threading
from typing import Any, Callable, Deque, Dict, List, Set, TypeVar

from playlist_remix.core import log_debug, log_warning

T = TypeVar("T")
Task = Callable[[], Any]


@dataclass
class _QueuedTask:
    fn: Task
    future: Future


def _completed_future() -> Future:
    done: Future = Future()
    done.set_result(None)
    return done


class KeyedSerialQueue:
    """
    Serialize zero-argument tasks per key.

    One instance is meant to live for the whole process and be shared by
    everything that refreshes playlists.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._state: Dict[str, Deque[_QueuedTask]] = {}
        self._draining: Set[str] = set()

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._state)

    def pending(self, key: str) -> List[Task]:
        """Tasks still queued for `key`, the running one first."""
        with self._lock:
            return [queued.fn for queued in self._state.get(key, ())]

    def enqueue(self, key: str, task: Task) -> Future:
        """
        Append `task` to the key's queue and return right away.

        The returned future carries the task's result or exception once a
        drain loop has run it.
        """
        queued = _QueuedTask(fn=task, future=Future())
        with self._lock:
            entries = self._state.setdefault(key, deque())
            entries.append(queued)
            size = len(entries)
        log_debug(f"Updated queue for {key} ({size} pending).")
        return queued.future

    def drain(self, key: str) -> Future:
        """
        Run the key's queued tasks and return a future for the last one
        queued at call time.

        - No entry for the key: no-op, the future is already done.
        - A drain loop already active for the key: nothing runs in this
          thread; that loop picks up the tasks and the future completes
          when it reaches them.
        - Otherwise this thread becomes the key's drain loop and runs
          until the key's queue is empty.
        """
        with self._lock:
            entries = self._state.get(key)
            if not entries:
                return _completed_future()
            tail = entries[-1].future
            if key in self._draining:
                return tail
            self._draining.add(key)

        log_debug(f"Draining queue for {key}.")
        self._run_loop(key)
        return tail

    def run_exclusive(self, key: str, task: Callable[[], T]) -> T:
        """
        Queue `task` under `key`, drain, and wait for it.

        Returns the task's result or raises its exception. This is the
        only way the refresher touches the queue, so a key never ends up
        with two drain loops.
        """
        future = self.enqueue(key, task)
        self.drain(key)
        return future.result()

    def _run_loop(self, key: str) -> None:
        while True:
            with self._lock:
                current = self._state[key][0]

            try:
                self._run_task(key, current)
            except BaseException:
                # KeyboardInterrupt and friends end this loop; the remaining
                # tasks stay queued for the next drain of the key.
                with self._lock:
                    self._pop_front(key)
                    self._draining.discard(key)
                raise

            with self._lock:
                if self._pop_front(key):
                    self._draining.discard(key)
                    log_debug(f"Queue for {key} is empty; key removed.")
                    return

    def _pop_front(self, key: str) -> bool:
        """Drop the finished front task; True when the key was removed. Lock held."""
        entries = self._state[key]
        entries.popleft()
        if entries:
            return False
        del self._state[key]
        return True

    @staticmethod
    def _run_task(key: str, queued: _QueuedTask) -> None:
        if not queued.future.set_running_or_notify_cancel():
            return
        try:
            result = queued.fn()
        except Exception as exc:  # noqa: BLE001
            log_warning(f"Queued task for {key} failed: {exc}")
            queued.future.set_exception(exc)
        except BaseException as exc:
            queued.future.set_exception(exc)
            raise
        else:
            queued.future.set_result(result)

"""Run tasks concurrently, stopping after too many of them fail."""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable
from typing import Any

Task = Callable[[], Any]


class ErrorsLimitExceeded(Exception):
    """Too many tasks raised errors."""

    def __init__(self, message: str = "errors limit exceeded") -> None:
        super().__init__(message)


class NoWorkersError(ValueError):
    """No worker was requested to run the tasks."""

    def __init__(self, message: str = "no workers to handle tasks") -> None:
        super().__init__(message)


def run(tasks: Iterable[Task], worker_count: int, max_error_count: int) -> None:
    """Run ``tasks`` in ``worker_count`` threads.

    A task fails by raising an exception. Once ``max_error_count`` tasks
    have failed no new task is started and :class:`ErrorsLimitExceeded` is
    raised after the running ones finish. A limit below 1 ignores errors.
    """
    if worker_count < 1:
        raise NoWorkersError()

    ignore_errors = max_error_count < 1
    pending = iter(tasks)
    lock = threading.Lock()
    stop = threading.Event()
    error_count = 0

    def next_task() -> Task | None:
        with lock:
            if stop.is_set():
                return None
            return next(pending, None)

    def worker() -> None:
        nonlocal error_count
        while (task := next_task()) is not None:
            try:
                task()
                failed = False
            except Exception:
                failed = True
            with lock:
                if stop.is_set():
                    return
                if failed and not ignore_errors:
                    error_count += 1
                    if error_count >= max_error_count:
                        stop.set()
                        return

    workers = [threading.Thread(target=worker) for _ in range(worker_count)]
    for thread in workers:
        thread.start()
    for thread in workers:
        thread.join()

    if stop.is_set():
        raise ErrorsLimitExceeded()
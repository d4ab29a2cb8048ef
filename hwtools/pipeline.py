"""Run a chain of stages concurrently, each in its own thread."""

from __future__ import annotations

import queue
import threading
from collections.abc import Callable, Iterable, Iterator
from typing import Any, Protocol

Stage = Callable[[Iterable[Any]], Iterable[Any]]

_POLL_INTERVAL = 0.005
_END = object()


class DoneSignal(Protocol):
    def is_set(self) -> bool: ...


class _Failure:
    __slots__ = ("error",)

    def __init__(self, error: BaseException) -> None:
        self.error = error


def _put(channel: queue.Queue, item: Any, done: DoneSignal | None) -> bool:
    if done is None:
        channel.put(item)
        return True
    while True:
        try:
            channel.put(item, timeout=_POLL_INTERVAL)
            return True
        except queue.Full:
            if done.is_set():
                return False


def _pump(items: Iterable[Any], channel: queue.Queue, done: DoneSignal | None) -> None:
    try:
        for item in items:
            if not _put(channel, item, done):
                return
    except Exception as exc:
        _put(channel, _Failure(exc), done)
        return
    _put(channel, _END, done)


def _read(channel: queue.Queue, done: DoneSignal | None) -> Iterator[Any]:
    while True:
        if done is None:
            item = channel.get()
        else:
            try:
                item = channel.get(timeout=_POLL_INTERVAL)
            except queue.Empty:
                if done.is_set():
                    return
                continue
            if done.is_set():
                return
        if item is _END:
            return
        if isinstance(item, _Failure):
            raise item.error
        yield item


def _channel(
    items: Iterable[Any], done: DoneSignal | None, *, stop_reading: bool
) -> Iterator[Any]:
    channel: queue.Queue = queue.Queue(maxsize=1)
    threading.Thread(target=_pump, args=(items, channel, done), daemon=True).start()
    return _read(channel, done if stop_reading else None)


def execute_pipeline(
    source: Iterable[Any], done: DoneSignal | None, *stages: Stage
) -> Iterable[Any]:
    """Chain ``stages`` over ``source`` and return the final output.

    Every stage runs in its own thread so values flow through stages
    concurrently. When ``done`` (an object with ``is_set()``, such as a
    ``threading.Event``) is set, stages stop receiving new values.
    """
    out: Iterable[Any] = source
    for stage in stages:
        if done is not None:
            out = _channel(out, done, stop_reading=True)
        out = _channel(stage(out), done, stop_reading=False)
    return out
import threading
import time

import pytest

from hwtools.pipeline import execute_pipeline

SLEEP_PER_STAGE = 0.1
FAULT = SLEEP_PER_STAGE / 2
DATA = [1, 2, 3, 4, 5]


def _stage(func):
    def stage(values):
        for value in values:
            time.sleep(SLEEP_PER_STAGE)
            yield func(value)

    return stage


def _failing_stage(values):
    for value in values:
        if value == 3:
            raise KeyError(value)
        yield value


STAGES = [
    _stage(lambda v: v),
    _stage(lambda v: v * 2),
    _stage(lambda v: v + 100),
    _stage(str),
]


def test_simple_case():
    start = time.monotonic()
    result = list(execute_pipeline(DATA, None, *STAGES))
    elapsed = time.monotonic() - start
    assert result == ["102", "104", "106", "108", "110"]
    assert elapsed < SLEEP_PER_STAGE * (len(STAGES) + len(DATA) - 1) + FAULT


def test_done_case():
    done = threading.Event()
    abort_after = SLEEP_PER_STAGE * 2
    timer = threading.Timer(abort_after, done.set)
    timer.start()
    start = time.monotonic()
    result = list(execute_pipeline(DATA, done, *STAGES))
    elapsed = time.monotonic() - start
    timer.join()
    assert result == []
    assert elapsed < abort_after + FAULT


def test_no_stages():
    assert list(execute_pipeline(DATA, None)) == DATA


def test_no_data():
    assert list(execute_pipeline([], None, *STAGES)) == []


def test_done_not_set_passes_everything():
    done = threading.Event()
    result = list(execute_pipeline(DATA, done, *STAGES))
    assert result == ["102", "104", "106", "108", "110"]


def test_error_raised_by_stage_propagates():
    with pytest.raises(KeyError):
        list(execute_pipeline(DATA, None, _failing_stage))
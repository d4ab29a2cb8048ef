import io
import subprocess
from unittest import mock

import pytest

from hwtools.progress import (
    ProgressBar,
    WriteLimitExceeded,
    parse_terminal_size,
    terminal_size,
)


def _step(bar, out, size):
    out.seek(0)
    out.truncate(0)
    written = bar.write(bytes(size))
    return written, out.getvalue()


def test_bar_width_10():
    out = io.StringIO()
    bar = ProgressBar(100, out, 10)
    bar.reset()
    assert _step(bar, out, 0) == (0, "\r[...] 0%")
    assert _step(bar, out, 15) == (15, "\r[...] 15%")
    assert _step(bar, out, 30) == (30, "\r[#..] 45%")
    assert _step(bar, out, 30) == (30, "\r[##.] 75%")
    assert _step(bar, out, 25) == (25, "\r[###] 100%\n")


def test_bar_width_20():
    out = io.StringIO()
    bar = ProgressBar(100, out, 20)
    assert _step(bar, out, 50) == (50, "\r[######.......] 50%")
    assert _step(bar, out, 10) == (10, "\r[#######......] 60%")


def test_bar_width_30_and_limit():
    out = io.StringIO()
    bar = ProgressBar(100, out, 30)
    assert _step(bar, out, 50) == (50, "\r[###########............] 50%")
    assert _step(bar, out, 50) == (50, "\r[#######################] 100%\n")

    bar.reset()
    assert _step(bar, out, 50) == (50, "\r[###########............] 50%")
    out.seek(0)
    out.truncate(0)
    with pytest.raises(WriteLimitExceeded) as info:
        bar.write(bytes(60))
    assert info.value.written == 50
    assert str(info.value) == "write limit exceed"
    assert out.getvalue() == ""


def test_bar_minimum_width():
    out = io.StringIO()
    bar = ProgressBar(100, out, 2)
    assert bar.write(bytes(100)) == 100
    assert out.getvalue() == "\r[#] 100%\n"


def test_parse_terminal_size():
    assert parse_terminal_size(b"16 22") == (22, 16)
    assert parse_terminal_size("24 80\n") == (80, 24)


def test_parse_terminal_size_wrong_input():
    with pytest.raises(ValueError):
        parse_terminal_size(b"NAN NAN")
    with pytest.raises(ValueError):
        parse_terminal_size(b"16 NAN")


def test_terminal_size_uses_stty():
    completed = subprocess.CompletedProcess(["stty", "size"], 0, b"30 100\n", b"")
    with mock.patch("hwtools.progress.subprocess.run", return_value=completed) as run:
        assert terminal_size() == (100, 30)
    assert run.call_args.args[0] == ["stty", "size"]


def test_terminal_size_failure():
    error = subprocess.CalledProcessError(1, ["stty", "size"])
    with mock.patch("hwtools.progress.subprocess.run", side_effect=error):
        with pytest.raises(OSError, match="get term size error"):
            terminal_size()
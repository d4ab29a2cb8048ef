import socket
import struct
import threading
from datetime import datetime, timedelta, timezone

import pytest

from hwtools.timecheck import main, ntp_time, round_to_second

NTP_EPOCH = datetime(1900, 1, 1, tzinfo=timezone.utc)
MOMENT = datetime(1945, 5, 9, 10, 3, 2, tzinfo=timezone.utc)


def _ntp_reply(moment):
    def build(request):
        seconds = int((moment - NTP_EPOCH).total_seconds())
        stamp = struct.pack("!II", seconds, 0)
        return bytes([0x24, 1, 0, 0]) + bytes(20) + request[40:48] + stamp + stamp

    return build


def _serve_once(build):
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(5)
    port = sock.getsockname()[1]

    def handle():
        with sock:
            data, addr = sock.recvfrom(1024)
            sock.sendto(build(data), addr)

    thread = threading.Thread(target=handle, daemon=True)
    thread.start()
    return f"127.0.0.1:{port}", thread


def _parse(line, prefix):
    assert line.startswith(prefix)
    date, clock, offset = line[len(prefix):].split()[:3]
    return datetime.strptime(f"{date} {clock} {offset}", "%Y-%m-%d %H:%M:%S %z")


def test_ntp_time_uses_server_clock():
    host, thread = _serve_once(_ntp_reply(MOMENT))
    result = ntp_time(host, 5)
    thread.join()
    assert abs(result - MOMENT) < timedelta(seconds=1)
    assert round_to_second(result) == MOMENT


def test_ntp_time_rejects_short_reply():
    host, thread = _serve_once(lambda request: b"short")
    with pytest.raises(ValueError):
        ntp_time(host, 5)
    thread.join()


def test_ntp_time_rejects_client_mode_reply():
    def build(request):
        return bytes([0x23, 1]) + bytes(22) + request[40:48] + bytes(16)

    host, thread = _serve_once(build)
    with pytest.raises(ValueError):
        ntp_time(host, 5)
    thread.join()


@pytest.mark.parametrize(
    "moment, expected",
    [
        (datetime(1945, 5, 9, 10, 3, 0, 499_999), datetime(1945, 5, 9, 10, 3, 0)),
        (datetime(1945, 5, 9, 10, 3, 0, 500_000), datetime(1945, 5, 9, 10, 3, 1)),
        (datetime(1945, 5, 9, 10, 3, 59, 900_000), datetime(1945, 5, 9, 10, 4, 0)),
        (datetime(1945, 5, 9, 10, 3, 0), datetime(1945, 5, 9, 10, 3, 0)),
    ],
)
def test_round_to_second(moment, expected):
    assert round_to_second(moment) == expected


def test_main_prints_both_times(capsys):
    host, thread = _serve_once(_ntp_reply(MOMENT))
    main([host])
    thread.join()
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 2
    current = _parse(lines[0], "current time: ")
    assert abs(current - datetime.now(timezone.utc)) < timedelta(seconds=5)
    assert _parse(lines[1], "exact time: ") == MOMENT


def test_main_fails_on_bad_server(capsys):
    host, thread = _serve_once(lambda request: b"")
    with pytest.raises(SystemExit) as info:
        main([host])
    thread.join()
    assert info.value.code == 1
    assert "Getting time from ntp server failed" in capsys.readouterr().err
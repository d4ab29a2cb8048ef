"""Compare the local clock with the time reported by an NTP server."""

from __future__ import annotations

import argparse
import socket
import struct
import sys
import time
from datetime import datetime, timedelta, timezone

DEFAULT_SERVER = "pool.ntp.org"
NTP_PORT = 123

_NTP_DELTA = 2208988800  # seconds between 1900-01-01 and 1970-01-01
_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_PACKET_SIZE = 48
_MODE_CLIENT = 3
_MODE_SERVER = 4
_VERSION = 4


def _to_ntp(stamp: float) -> bytes:
    seconds = int(stamp // 1)
    fraction = int((stamp - seconds) * 2**32)
    return struct.pack("!II", (seconds + _NTP_DELTA) & 0xFFFFFFFF, fraction)


def _from_ntp(data: bytes) -> float:
    seconds, fraction = struct.unpack("!II", data)
    return seconds - _NTP_DELTA + fraction / 2**32


def _split_host(host: str) -> tuple[str, int]:
    if host.startswith("["):
        name, _, rest = host[1:].partition("]")
        port = rest[1:] if rest.startswith(":") else ""
    elif host.count(":") == 1:
        name, _, port = host.partition(":")
    else:
        name, port = host, ""
    return name, int(port) if port else NTP_PORT


def ntp_time(host: str, timeout: float = 5.0) -> datetime:
    """Query an NTP server and return the current time it implies, in UTC.

    ``host`` may carry a port as ``host:port``. Network failures raise
    ``OSError``; malformed replies raise ``ValueError``.
    """
    name, port = _split_host(host)
    family, kind, proto, _, address = socket.getaddrinfo(
        name, port, type=socket.SOCK_DGRAM
    )[0]
    request = bytearray(_PACKET_SIZE)
    request[0] = (_VERSION << 3) | _MODE_CLIENT
    with socket.socket(family, kind, proto) as sock:
        sock.settimeout(timeout)
        sent_at = time.time()
        request[40:48] = _to_ntp(sent_at)
        sock.sendto(bytes(request), address)
        reply, _ = sock.recvfrom(1024)
        received_at = time.time()

    if len(reply) < _PACKET_SIZE:
        raise ValueError(f"short NTP reply: {len(reply)} bytes")
    if reply[0] & 0x07 != _MODE_SERVER:
        raise ValueError("invalid NTP reply mode")
    if reply[1] == 0:
        raise ValueError("NTP server sent kiss of death")
    if reply[24:32] != request[40:48]:
        raise ValueError("NTP reply does not match the request")

    server_received = _from_ntp(reply[32:40])
    server_sent = _from_ntp(reply[40:48])
    offset = ((server_received - sent_at) + (server_sent - received_at)) / 2
    return _UNIX_EPOCH + timedelta(seconds=received_at + offset)


def round_to_second(moment: datetime) -> datetime:
    """Round a datetime to the nearest second, halves rounding up."""
    whole = moment.replace(microsecond=0)
    if moment.microsecond >= 500_000:
        whole += timedelta(seconds=1)
    return whole


def _format(moment: datetime) -> str:
    return moment.strftime("%Y-%m-%d %H:%M:%S %z %Z")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Show local and NTP time.")
    parser.add_argument("server", nargs="?", default=DEFAULT_SERVER)
    args = parser.parse_args(argv)

    print("current time:", _format(round_to_second(datetime.now().astimezone())))
    try:
        exact = ntp_time(args.server)
    except (OSError, ValueError) as exc:
        print(f"Getting time from ntp server failed: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    print("exact time:", _format(round_to_second(exact.astimezone())))


if __name__ == "__main__":
    main()
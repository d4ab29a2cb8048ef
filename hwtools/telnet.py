"""A minimal telnet-like client that pipes streams through a TCP connection."""

from __future__ import annotations

import argparse
import queue
import re
import socket
import sys
import threading
from collections.abc import Callable
from typing import BinaryIO

LOG_PREFIX = "..."
LOG_EOF = "EOF"
LOG_CLOSED = "Connection was closed by peer"

_CHUNK_SIZE = 4096

_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")


def _log(message: str) -> None:
    print(f"{LOG_PREFIX}{message}", file=sys.stderr, flush=True)


def _split_address(address: str) -> tuple[str, int]:
    if address.startswith("["):
        host, _, rest = address[1:].partition("]")
        if not rest.startswith(":"):
            raise ValueError(f"missing port in address {address!r}")
        port = rest[1:]
    else:
        host, sep, port = address.rpartition(":")
        if not sep:
            raise ValueError(f"missing port in address {address!r}")
    return host, int(port)


def _join_host_port(host: str, port: str) -> str:
    return f"[{host}]:{port}" if ":" in host else f"{host}:{port}"


def _parse_duration(text: str) -> float:
    """Parse a duration such as ``10s`` or ``1m30s`` into seconds."""
    sign = 1.0
    body = text
    if body and body[0] in "+-":
        sign = -1.0 if body[0] == "-" else 1.0
        body = body[1:]
    if body == "0":
        return 0.0
    if not body:
        raise ValueError(f"invalid duration {text!r}")
    total = 0.0
    pos = 0
    while pos < len(body):
        match = _DURATION_PART.match(body, pos)
        if match is None:
            raise ValueError(f"invalid duration {text!r}")
        total += float(match[1]) * _DURATION_UNITS[match[2]]
        pos = match.end()
    return sign * total


class TelnetClient:
    """Copies ``source`` to a TCP peer and the peer's replies to ``sink``."""

    def __init__(self, address: str, timeout: float, source: BinaryIO, sink: BinaryIO) -> None:
        self.address = address
        self.timeout = timeout
        self.source = source
        self.sink = sink
        self._conn: socket.socket | None = None

    def __enter__(self) -> TelnetClient:
        self.connect()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _connection(self) -> socket.socket:
        if self._conn is None:
            raise RuntimeError("client is not connected")
        return self._conn

    def connect(self) -> None:
        """Open the connection, waiting at most ``timeout`` seconds."""
        host, port = _split_address(self.address)
        timeout = self.timeout if self.timeout and self.timeout > 0 else None
        self._conn = socket.create_connection((host, port), timeout=timeout)
        self._conn.settimeout(None)
        _log(f"Connected to {self.address}")

    def send(self) -> None:
        """Send everything from ``source`` until it ends."""
        conn = self._connection()
        read: Callable[[int], bytes] = getattr(self.source, "read1", None) or self.source.read
        while chunk := read(_CHUNK_SIZE):
            conn.sendall(chunk)
        _log(LOG_EOF)

    def receive(self) -> None:
        """Write everything the peer sends to ``sink`` until it disconnects."""
        conn = self._connection()
        flush = getattr(self.sink, "flush", None)
        while chunk := conn.recv(_CHUNK_SIZE):
            self.sink.write(chunk)
            if flush is not None:
                flush()
        _log(LOG_CLOSED)

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Connect stdin and stdout to a TCP server.")
    parser.add_argument("-timeout", "--timeout", type=_parse_duration, default=10.0)
    parser.add_argument("params", nargs="*", metavar="host port")
    args = parser.parse_args(argv)
    if len(args.params) < 2:
        print("Params `host` and `port` are mandatory", file=sys.stderr)
        raise SystemExit(1)
    address = _join_host_port(args.params[0], args.params[1])

    client = TelnetClient(address, args.timeout, sys.stdin.buffer, sys.stdout.buffer)
    try:
        client.connect()
    except (OSError, ValueError) as exc:
        print(exc, file=sys.stderr)
        return

    results: queue.Queue[BaseException | None] = queue.Queue()

    def run(func: Callable[[], None]) -> None:
        try:
            func()
        except Exception as exc:
            results.put(exc)
        else:
            results.put(None)

    for func in (client.send, client.receive):
        threading.Thread(target=run, args=(func,), daemon=True).start()

    try:
        while True:
            try:
                error = results.get(timeout=0.1)
            except queue.Empty:
                continue
            if error is not None:
                print(error, file=sys.stderr)
            break
    except KeyboardInterrupt:
        pass
    finally:
        client.close()


if __name__ == "__main__":
    main()
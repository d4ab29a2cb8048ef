"""Copy a byte range of one file into another, showing progress."""

from __future__ import annotations

import argparse
import os
import stat
import sys
from collections.abc import Callable
from typing import BinaryIO

from hwtools.progress import ProgressBar, terminal_size

_CHUNK_SIZE = 32 * 1024


class CopyError(Exception):
    """Copying could not be done."""


class UnsupportedFileError(CopyError):
    def __init__(self, message: str = "unsupported file") -> None:
        super().__init__(message)


class OffsetExceedsFileSizeError(CopyError):
    def __init__(self, message: str = "offset exceeds file size") -> None:
        super().__init__(message)


class SameFilesError(CopyError):
    def __init__(self, message: str = "from and to files are same") -> None:
        super().__init__(message)


def _calc_limit(info: os.stat_result, offset: int, limit: int) -> int:
    if not stat.S_ISREG(info.st_mode):
        if limit < 1:
            raise UnsupportedFileError()
        return limit
    size = info.st_size
    if size < offset:
        raise OffsetExceedsFileSizeError()
    if limit < 1 or size < offset + limit:
        return size - offset
    return limit


def _copy_n(source: BinaryIO, writers: list[Callable[[bytes], object]], count: int) -> None:
    remaining = count
    while remaining > 0:
        chunk = source.read(min(remaining, _CHUNK_SIZE))
        if not chunk:
            raise CopyError("copy error: EOF")
        for write in writers:
            write(chunk)
        remaining -= len(chunk)


def copy_file(from_path: str, to_path: str, offset: int = 0, limit: int = 0) -> None:
    """Copy ``limit`` bytes of ``from_path`` starting at ``offset`` to ``to_path``.

    A ``limit`` below 1 copies up to the end of a regular file; other files
    need a positive limit.
    """
    with open(from_path, "rb") as source:
        source_stat = os.fstat(source.fileno())
        try:
            target_stat = os.stat(to_path)
        except FileNotFoundError:
            target_stat = None
        if target_stat is not None and os.path.samestat(source_stat, target_stat):
            raise SameFilesError()
        with open(to_path, "wb") as target:
            count = _calc_limit(source_stat, offset, limit)
            if offset > 0:
                try:
                    source.seek(offset)
                except OSError as exc:
                    raise CopyError(f"offset error: {exc}") from exc

            writers: list[Callable[[bytes], object]] = [target.write]
            try:
                width, _ = terminal_size()
            except (OSError, ValueError):
                pass  # no terminal: copy without a progress bar
            else:
                writers.append(ProgressBar(count, sys.stdout, width).write)
            _copy_n(source, writers, count)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Copy part of a file.")
    parser.add_argument("-from", "--from", dest="from_path", default="", help="file to read from")
    parser.add_argument("-to", "--to", dest="to_path", default="", help="file to write to")
    parser.add_argument("-limit", "--limit", type=int, default=0, help="limit of bytes to copy")
    parser.add_argument("-offset", "--offset", type=int, default=0, help="offset in input file")
    args = parser.parse_args(argv)
    try:
        copy_file(args.from_path, args.to_path, args.offset, args.limit)
    except (OSError, CopyError) as exc:
        parser.exit(1, f"{exc}\n")


if __name__ == "__main__":
    main()
"""Run a command with an environment read from a directory of files."""

from __future__ import annotations

import os
import shutil
import subprocess
import sys
from collections.abc import Sequence

WRONG_ENV_NAME_CHARS = "="
TRIM_CHARS = " \n\t"

EXIT_CODE_IO_ERROR = 5
EXIT_CODE_COMMAND_NOT_FOUND = 127


class Environment(dict):
    """Environment variables by name."""

    def strings(self) -> list[str]:
        """Return the variables as ``["key=value", ...]``."""
        return [f"{key}={value}" for key, value in self.items()]


def normalize_value(value: str) -> str:
    """Trim trailing blanks and turn NUL characters into newlines."""
    if not value:
        return value
    return value.rstrip(TRIM_CHARS).replace("\x00", "\n")


def _first_line(path: str) -> str:
    with open(path, "rb") as handle:
        line = handle.readline()
    if line.endswith(b"\n"):
        line = line[:-1]
        if line.endswith(b"\r"):
            line = line[:-1]
    return line.decode("utf-8", errors="surrogateescape")


def read_dir(path: str) -> Environment:
    """Read variables from ``path``: file name is the name, first line the value.

    Files with ``=`` in the name, non-regular files and empty values are skipped.
    """
    env = Environment()
    with os.scandir(path) as entries:
        files = sorted(entries, key=lambda entry: entry.name)
    for entry in files:
        if not entry.is_file(follow_symlinks=False):
            continue
        if any(char in entry.name for char in WRONG_ENV_NAME_CHARS):
            continue
        value = normalize_value(_first_line(entry.path))
        if value:
            env[entry.name] = value
    return env


def run_cmd(cmd: Sequence[str], env: Environment) -> int:
    """Run ``cmd`` with exactly the variables of ``env``; return its exit code."""
    if not cmd:
        return EXIT_CODE_COMMAND_NOT_FOUND
    program = shutil.which(cmd[0])
    if program is None:
        return EXIT_CODE_IO_ERROR
    try:
        completed = subprocess.run(list(cmd), executable=program, env=dict(env))
    except OSError:
        return EXIT_CODE_IO_ERROR
    return completed.returncode if completed.returncode >= 0 else -1


def main(argv: list[str] | None = None) -> None:
    args = sys.argv[1:] if argv is None else argv
    if len(args) < 2:
        raise SystemExit("args are not provided: <env_dir> <command ...>")
    directory, command = args[0], args[1:]
    try:
        env = read_dir(directory)
    except OSError as exc:
        print(f"read dir error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    raise SystemExit(run_cmd(command, env))


if __name__ == "__main__":
    main()
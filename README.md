# hwtools

A set of small, independent utilities, usable both as a library and from
the command line. No third-party packages are needed.

## Installation

    pip install .

For running the tests:

    pip install .[test]
    pytest

## Command-line tools

### hwtools-now

Prints the local time and the time obtained from an NTP server, both
rounded to the second. The server defaults to `pool.ntp.org`; another one
may be given, optionally as `host:port`.

    hwtools-now
    hwtools-now time.example.com

If the server cannot be queried, an error is printed and the exit code is 1.

### hwtools-copy

Copies part of a file. When `stty size` reports a terminal size, a
progress bar is drawn on standard output.

    hwtools-copy -from input.txt -to output.txt -offset 100 -limit 1000

A limit of 0 copies up to the end of the file. Files that are not regular
files (such as `/dev/urandom`) need a positive limit. Copying a file onto
itself, or an offset beyond the end of the file, is an error.

### hwtools-envdir

Runs a command with environment variables read from a directory: each file
name is a variable name and the first line of the file is its value.
Trailing spaces, tabs and newlines are trimmed and NUL characters become
newlines. Files whose names contain `=`, entries that are not regular files
and empty values are skipped. The command gets only these variables.

    hwtools-envdir ./env sh -c 'echo $HELLO'

The exit code of the command is passed through; a command that cannot be
found gives exit code 5.

### hwtools-telnet

A minimal TCP client: it sends standard input to the server and writes what
the server returns to standard output. Status messages such as
`...Connected to host:port`, `...EOF` and `...Connection was closed by peer`
go to standard error. The connection timeout (default `10s`) accepts
durations such as `500ms`, `5s` or `1m30s`.

    hwtools-telnet --timeout 5s example.com 80

## Library

- `hwtools.unpack.unpack(text)` — expands `"a4bc2d5e"` into
  `"aaaabccddddde"`; a backslash escapes a digit or a backslash; raises
  `InvalidStringError` for malformed input.
- `hwtools.frequency.top10(text)` — up to ten of the most frequent words,
  compared case-insensitively, ignoring lone dashes.
- `hwtools.lrucache.LRUCache(capacity)` — a thread-safe LRU cache with
  `set` (returns whether the key was already cached), `get(key, default)`,
  `lookup(key)` returning `(value, found)`, and `clear`. `LinkedList` and
  `ListItem` are the doubly linked list it is built on.
- `hwtools.parallel.run(tasks, worker_count, max_error_count)` — runs
  callables in worker threads; a task fails by raising. After
  `max_error_count` failures no new task is started and
  `ErrorsLimitExceeded` is raised; a limit below 1 ignores failures.
  `NoWorkersError` is raised when `worker_count` is below 1.
- `hwtools.pipeline.execute_pipeline(source, done, *stages)` — chains
  stages (callables taking and returning an iterable), each in its own
  thread; once `done` (anything with `is_set()`, such as a
  `threading.Event`) is set, stages stop receiving values.
- `hwtools.progress.ProgressBar(total, out, width)` — draws
  `[###..] 65%` as bytes are written through `write`; `reset` starts
  over. `parse_terminal_size` and `terminal_size` read the terminal's
  `(width, height)`.
- `hwtools.filecopy.copy_file(from_path, to_path, offset, limit)` — the
  function behind `hwtools-copy`; errors derive from `CopyError`.
- `hwtools.envdir.read_dir(path)` returns an `Environment` (a dict with a
  `strings()` method giving `"KEY=value"` items), and
  `hwtools.envdir.run_cmd(cmd, env)` runs a command and returns its exit
  code.
- `hwtools.telnet.TelnetClient(address, timeout, source, sink)` — with
  `connect`, `send`, `receive` and `close`; also usable as a context
  manager.
- `hwtools.timecheck.ntp_time(host, timeout)` and `round_to_second(moment)`.
- `hwtools.validator.validate(obj)` — validates dataclass fields against
  `"validate"` field metadata such as `"min:18|max:50"`, `"len:36"`,
  `"regexp:^\\w+$"`, `"in:admin,stuff"` and `"nested"`, raising
  `ValidationErrors`; malformed constraints raise `ConstraintError`.
- `hwtools.domainstat.get_domain_stat(stream, domain)` — counts e-mail
  domains in a stream of JSON user records, one per line, for example an
  `"Email"` of `user@example.com` counts towards `example.com` for the
  domain `com`.

Example:

```python
from hwtools.lrucache import LRUCache

cache = LRUCache(2)
cache.set("a", 1)
cache.set("b", 2)
cache.get("a")      # 1
cache.set("c", 3)   # evicts "b"
```

## What it does not do

- `hwtools-telnet` passes raw bytes; it does no telnet option negotiation.
- `hwtools.validator` works only on dataclass instances.
- The progress bar of `hwtools-copy` depends on the `stty` command; without
  it the copy runs silently.
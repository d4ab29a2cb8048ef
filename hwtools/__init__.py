"""Small utilities: string unpacking, word frequency, LRU cache, parallel and pipeline runners, file copying, envdir, TCP client, NTP time, dataclass validation and e-mail domain statistics."""

__version__ = "0.1.0"
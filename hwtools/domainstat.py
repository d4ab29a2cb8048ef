"""Count users' e-mail domains under a given top-level domain."""

from __future__ import annotations

import json
import re
from collections import Counter
from collections.abc import Iterable
from typing import Any

_TOP_DOMAIN = re.compile(r"[A-Za-z]{2,}")
_EMAIL_KEY = "Email"


class WrongDomainError(ValueError):
    def __init__(self, message: str = "wrong domain") -> None:
        super().__init__(message)


class WrongEmailError(ValueError):
    def __init__(self, message: str = "wrong email") -> None:
        super().__init__(message)


def _email_of(record: Any) -> str:
    if record is None:
        return ""
    if not isinstance(record, dict):
        raise ValueError(f"user record must be an object, got {type(record).__name__}")
    if _EMAIL_KEY in record:
        value = record[_EMAIL_KEY]
    else:
        value = None
        for key, candidate in record.items():
            if key.lower() == _EMAIL_KEY.lower():
                value = candidate
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"email must be a string, got {type(value).__name__}")
    return value


def get_domain_stat(stream: Iterable[str | bytes], domain: str) -> dict[str, int]:
    """Count e-mail domains ending in ``.domain`` among JSON user lines.

    ``stream`` yields one JSON object per line, text or bytes. Malformed JSON
    raises ``ValueError``.
    """
    if not _TOP_DOMAIN.fullmatch(domain):
        raise WrongDomainError()
    suffix = "." + domain.lower()
    result: Counter[str] = Counter()
    for line in stream:
        text = line.rstrip(b"\r\n") if isinstance(line, bytes) else line.rstrip("\r\n")
        email = _email_of(json.loads(text)).lower()
        if not email.endswith(suffix):
            continue
        parts = email.split("@")
        if len(parts) != 2:
            raise WrongEmailError()
        result[parts[1]] += 1
    return dict(result)
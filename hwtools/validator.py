"""Validate dataclass fields against constraints declared in field metadata.

A field is checked when its metadata holds a ``"validate"`` entry such as
``"min:18|max:50"``, ``"len:36"``, ``"regexp:^\\d+$"``, ``"in:a,b"`` or
``"nested"``. Integers accept ``min``, ``max`` and ``in``; strings accept
``len``, ``regexp`` and ``in``; lists and tuples apply the constraints to
every element; nested dataclasses accept only ``nested``.
"""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Callable, Iterable, Iterator
from functools import lru_cache
from typing import Any

TAG_NAME = "validate"
TAG_SEP = "|"
TAG_VALUE_SEP = ":"
TAG_IN_SEP = ","

TAG_MIN = "min"
TAG_MAX = "max"
TAG_IN = "in"
TAG_LEN = "len"
TAG_REGEXP = "regexp"
TAG_NESTED = "nested"

_INTEGER = re.compile(r"[+-]?[0-9]+")


class ConstraintError(ValueError):
    """A constraint is malformed or does not apply to the field's type."""


def _go_list(items: Iterable[Any]) -> str:
    return "[" + " ".join(str(item) for item in items) + "]"


@dataclasses.dataclass(frozen=True)
class LessThan:
    value: int
    min: int

    def __str__(self) -> str:
        return f"{self.value} < {self.min}"


@dataclasses.dataclass(frozen=True)
class GreaterThan:
    value: int
    max: int

    def __str__(self) -> str:
        return f"{self.value} > {self.max}"


@dataclasses.dataclass(frozen=True)
class IntNotIn:
    value: int
    items: tuple[int, ...]

    def __str__(self) -> str:
        return f"{self.value} not in {_go_list(self.items)}"


@dataclasses.dataclass(frozen=True)
class LenNotEqual:
    len: int
    expected: int

    def __str__(self) -> str:
        return f"len {self.len} != {self.expected}"


@dataclasses.dataclass(frozen=True)
class RegexpNotMatch:
    value: str
    regexp: re.Pattern

    def __str__(self) -> str:
        return f"'{self.value}' not matches '{self.regexp.pattern}'"


@dataclasses.dataclass(frozen=True)
class StrNotIn:
    value: str
    items: tuple[str, ...]

    def __str__(self) -> str:
        return f"{self.value} not in {_go_list(self.items)}"


class ValidationErrors(Exception):
    """Every validation failure found in one object."""

    def __init__(self, errors: Iterable[ValidationError] = ()) -> None:
        self.errors = list(errors)
        super().__init__(self.errors)

    def __iter__(self) -> Iterator[ValidationError]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    def __getitem__(self, index: int) -> ValidationError:
        return self.errors[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationErrors):
            return NotImplemented
        return self.errors == other.errors

    def __hash__(self) -> int:
        return hash(str(self))

    def __str__(self) -> str:
        return ", ".join(str(error) for error in self.errors)

    def __repr__(self) -> str:
        return f"ValidationErrors({self.errors!r})"


class ValidationError(Exception):
    """A field failed one of its constraints."""

    def __init__(self, field: str, err: Any) -> None:
        super().__init__(field, err)
        self.field = field
        self.err = err

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationError):
            return NotImplemented
        return (self.field, self.err) == (other.field, other.err)

    def __hash__(self) -> int:
        return hash((self.field, str(self.err)))

    def __str__(self) -> str:
        if isinstance(self.err, ValidationErrors):
            return f"{self.field}: {{ {self.err} }}"
        return f"{self.field}: {self.err}"

    def __repr__(self) -> str:
        return f"ValidationError({self.field!r}, {self.err!r})"


def _atoi(raw: str, what: str) -> int:
    if not _INTEGER.fullmatch(raw):
        raise ConstraintError(f"{what} format error: invalid syntax {raw!r}")
    return int(raw)


@lru_cache(maxsize=None)
def _int_items(raw: str) -> frozenset[int]:
    return frozenset(_atoi(item, "int in") for item in raw.split(TAG_IN_SEP))


@lru_cache(maxsize=None)
def _str_items(raw: str) -> frozenset[str]:
    return frozenset(raw.split(TAG_IN_SEP))


@lru_cache(maxsize=None)
def _compile(pattern: str) -> re.Pattern:
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise ConstraintError(f"regexp format error: {exc}") from exc


def int_min(name: str, constraint: str, value: int) -> None:
    """Raise :class:`ValidationError` if ``value`` is below ``constraint``."""
    minimum = _atoi(constraint, "int min")
    if value < minimum:
        raise ValidationError(name, LessThan(value, minimum))


def int_max(name: str, constraint: str, value: int) -> None:
    """Raise :class:`ValidationError` if ``value`` is above ``constraint``."""
    maximum = _atoi(constraint, "int max")
    if value > maximum:
        raise ValidationError(name, GreaterThan(value, maximum))


def int_in(name: str, constraint: str, value: int) -> None:
    """Raise :class:`ValidationError` unless ``value`` is one of the listed ints."""
    items = _int_items(constraint)
    if value not in items:
        raise ValidationError(name, IntNotIn(value, tuple(sorted(items))))


def str_len(name: str, constraint: str, value: str) -> None:
    """Raise :class:`ValidationError` unless ``value`` has the given byte length."""
    expected = _atoi(constraint, "str len")
    length = len(value.encode("utf-8"))
    if length != expected:
        raise ValidationError(name, LenNotEqual(length, expected))


def str_regexp(name: str, constraint: str, value: str) -> None:
    """Raise :class:`ValidationError` unless ``value`` matches the pattern."""
    pattern = _compile(constraint)
    if pattern.search(value) is None:
        raise ValidationError(name, RegexpNotMatch(value, pattern))


def str_in(name: str, constraint: str, value: str) -> None:
    """Raise :class:`ValidationError` unless ``value`` is one of the listed strings."""
    items = _str_items(constraint)
    if value not in items:
        raise ValidationError(name, StrNotIn(value, tuple(sorted(items))))


_INT_VALIDATORS: dict[str, Callable[[str, str, int], None]] = {
    TAG_MIN: int_min,
    TAG_MAX: int_max,
    TAG_IN: int_in,
}

_STR_VALIDATORS: dict[str, Callable[[str, str, str], None]] = {
    TAG_LEN: str_len,
    TAG_REGEXP: str_regexp,
    TAG_IN: str_in,
}


def parse_constraints(tag: str) -> dict[str, str]:
    """Split ``"min:10|max:20"`` into ``{"min": "10", "max": "20"}``."""
    constraints: dict[str, str] = {}
    for raw in tag.split(TAG_SEP):
        name, sep, value = raw.partition(TAG_VALUE_SEP)
        if name == TAG_NESTED:
            constraints[name] = ""
            continue
        if not sep:
            raise ConstraintError(f"wrong validate format '{raw}'")
        constraints[name] = value
    return constraints


def _is_instance_of_dataclass(value: Any) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def _validate_value(name: str, value: Any, constraint_name: str, constraint: str) -> None:
    if isinstance(value, bool):
        return
    if isinstance(value, int):
        check = _INT_VALIDATORS.get(constraint_name)
        if check is None:
            raise ConstraintError(f"unknown tag '{constraint_name}'")
        check(name, constraint, value)
    elif isinstance(value, str):
        check_str = _STR_VALIDATORS.get(constraint_name)
        if check_str is None:
            raise ConstraintError(f"unknown tag '{constraint_name}'")
        check_str(name, constraint, value)
    elif isinstance(value, (list, tuple)):
        nested: list[ValidationError] = []
        for item in value:
            try:
                _validate_value(name, item, constraint_name, constraint)
            except ValidationError as exc:
                nested.append(exc)
        if nested:
            raise ValidationErrors(nested)
    elif _is_instance_of_dataclass(value):
        if constraint_name != TAG_NESTED:
            raise ConstraintError(f"unknown tag '{constraint_name}'")
        try:
            validate(value)
        except ValidationErrors as exc:
            raise ValidationError(name, exc) from None


def validate(obj: Any) -> None:
    """Check every constrained field of dataclass instance ``obj``.

    Raises :class:`ValidationErrors` listing all failures, or
    :class:`ConstraintError` if a constraint itself is wrong.
    """
    if not _is_instance_of_dataclass(obj):
        raise TypeError(f"expected a dataclass instance, got {type(obj).__name__}")
    errors: list[ValidationError] = []
    for field in dataclasses.fields(obj):
        tag = field.metadata.get(TAG_NAME)
        if tag is None:
            continue
        value = getattr(obj, field.name)
        for constraint_name, constraint in parse_constraints(tag).items():
            try:
                _validate_value(field.name, value, constraint_name, constraint)
            except ValidationError as exc:
                errors.append(exc)
            except ValidationErrors as exc:
                errors.extend(exc)
    if errors:
        raise ValidationErrors(errors)
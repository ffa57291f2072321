# src/plotprimer/config/schema.py
"""Declarative description of the settings ``plotprimer`` understands."""
from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from .loader import ConfigError

Validator = Callable[[Any], None]
TypeSpec = Union[type, Tuple[type, ...]]


@dataclass
class KeySpec:
    """
    One allowed key: its Python type, whether it must be given, its default
    and an optional ``validator`` that raises :class:`ValueError` on bad content.
    """
    expected_type: TypeSpec
    required: bool = False
    default: Any = None
    validator: Optional[Validator] = None

    def __post_init__(self) -> None:
        if self.validator is not None and not callable(self.validator):
            raise TypeError(f"validator must be callable, got {type(self.validator).__name__}")

    def describe_type(self) -> str:
        kinds = self.expected_type if isinstance(self.expected_type, tuple) else (self.expected_type,)
        return " | ".join(kind.__name__ for kind in kinds)


SchemaMap = Mapping[str, Mapping[str, KeySpec]]


def _items(value: Any) -> List[Any]:
    return value if isinstance(value, list) else [value]


def make_choices_validator(choices: Iterable[Any]) -> Validator:
    """Accept only values (or lists whose items are) in ``choices``."""
    allowed = frozenset(choices)
    shown = sorted(allowed, key=str)

    def check(value: Any) -> None:
        rejected = [item for item in _items(value) if item not in allowed]
        if rejected:
            raise ValueError(f"{rejected!r} not among {shown!r}")

    return check


def make_positive_validator() -> Validator:
    """Accept numbers, or lists of numbers, greater than zero. Booleans are rejected."""

    def check(value: Any) -> None:
        for item in _items(value):
            if isinstance(item, bool) or not isinstance(item, (int, float)) or item <= 0:
                raise ValueError(f"{item!r} is not a positive number")

    return check


def apply_defaults(data: Dict[str, Dict[str, Any]], schema: SchemaMap) -> None:
    """Add a copy of every optional default that ``data`` lacks, creating sections on the way."""
    for section, specs in schema.items():
        values = data.setdefault(section, {})
        for key, spec in specs.items():
            if not spec.required:
                values.setdefault(key, deepcopy(spec.default))


def _problems(section: str, values: Mapping[str, Any], specs: Mapping[str, KeySpec]) -> Iterator[str]:
    for key in values:
        if key not in specs:
            yield f"[{section}] unknown key '{key}'"

    for key, spec in specs.items():
        if key not in values:
            if spec.required:
                yield f"[{section}] missing required key '{key}'"
            continue
        value = values[key]
        # an unset optional key keeps its None default
        if value is None and spec.default is None and not spec.required:
            continue
        if not isinstance(value, spec.expected_type):
            yield f"[{section}] key '{key}' expected {spec.describe_type()}, got {value!r}"
            continue
        if spec.validator is not None:
            try:
                spec.validator(value)
            except ValueError as exc:
                yield f"[{section}] key '{key}' failed validation: {exc}"


def validate_data(data: Mapping[str, Mapping[str, Any]], schema: SchemaMap) -> None:
    """
    Check ``data`` against ``schema`` and report every problem at once.

    Sections outside the schema are left alone, which lets ``extends`` parents
    such as ``[base]`` live next to the real sections. Inside a schema section
    unknown keys are errors, since they are almost always typos.

    :raises ConfigError: One line per problem.
    """
    problems: List[str] = []
    for section, specs in schema.items():
        problems.extend(_problems(section, data.get(section) or {}, specs))
    if problems:
        raise ConfigError("\n".join(problems))


__all__ = [
    "KeySpec",
    "Validator",
    "SchemaMap",
    "make_choices_validator",
    "make_positive_validator",
    "apply_defaults",
    "validate_data",
]

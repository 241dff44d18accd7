"""
value comparison used by the expectation engine.

every value is classified into one of a few kinds (primitive, sequence,
mapping, set) and compared by kind. `differences` walks two structures
recursively over the union of their keys and collects every mismatch
instead of stopping at the first one.
"""
import numbers
from collections.abc import Mapping, Sequence, Set
from enum import Enum
from typing import Any, Dict, Hashable, List, Tuple

import numpy as np
import pandas as pd

from .types import UNDEFINED


class ValueKind(Enum):
    PRIMITIVE = 'primitive'
    SEQUENCE = 'sequence'
    MAPPING = 'mapping'
    SET = 'set'


_TEXT = (str, bytes, bytearray)


def value_kind(value: Any) -> ValueKind:
    """classify a value for structural comparison"""
    if value is None or value is UNDEFINED or isinstance(value, _TEXT):
        return ValueKind.PRIMITIVE
    if isinstance(value, np.ndarray) and value.ndim == 0:
        return ValueKind.PRIMITIVE
    if isinstance(value, (np.ndarray, pd.Series)):
        return ValueKind.SEQUENCE
    if isinstance(value, (Mapping, pd.DataFrame)):
        return ValueKind.MAPPING
    if isinstance(value, Set):
        return ValueKind.SET
    if isinstance(value, Sequence):
        return ValueKind.SEQUENCE
    if isinstance(value, (numbers.Number, np.generic, type)) or callable(value):
        return ValueKind.PRIMITIVE
    if hasattr(value, '__dict__'):
        return ValueKind.MAPPING
    return ValueKind.PRIMITIVE


def is_object(value: Any) -> bool:
    return value_kind(value) is not ValueKind.PRIMITIVE


def _type_tag(value: Any) -> Any:
    # ints and floats share one tag, bools get their own
    if value is None: return 'null'
    if value is UNDEFINED: return 'undefined'
    if isinstance(value, (bool, np.bool_)): return 'boolean'
    if isinstance(value, (numbers.Number, np.number)): return 'number'
    if isinstance(value, str): return 'string'
    return type(value)


def _unwrap_scalar(value: Any) -> Any:
    # 0-d arrays compare as the scalar they hold
    if isinstance(value, np.ndarray) and value.ndim == 0:
        return value.item()
    return value


def strict_equal(actual: Any, expected: Any) -> bool:
    """identity for objects, same type tag and value for primitives. no coercion."""
    actual, expected = _unwrap_scalar(actual), _unwrap_scalar(expected)
    if actual is expected:
        return True
    if is_object(actual) or is_object(expected):
        return False
    if _type_tag(actual) != _type_tag(expected):
        return False
    try:
        return bool(actual == expected)
    except (TypeError, ValueError):
        return False


def _is_nullish(value: Any) -> bool:
    return value is None or value is UNDEFINED


def _as_number(value: Any) -> Any:
    if isinstance(value, (bool, np.bool_)):
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if not text: return 0
        return float(text)
    return value


def loose_equal(actual: Any, expected: Any) -> bool:
    """equality with coercion between null-ish values, booleans, numbers and numeric strings"""
    if strict_equal(actual, expected):
        return True
    if _is_nullish(actual) or _is_nullish(expected):
        return _is_nullish(actual) and _is_nullish(expected)

    if isinstance(actual, np.ndarray) or isinstance(expected, np.ndarray):
        return bool(np.array_equal(np.asarray(actual, dtype=object), np.asarray(expected, dtype=object)))
    if isinstance(actual, (pd.Series, pd.DataFrame)):
        return type(actual) is type(expected) and bool(actual.equals(expected))

    scalar_tags = ('boolean', 'number', 'string')
    tags = (_type_tag(actual), _type_tag(expected))
    if tags[0] != tags[1] and tags[0] in scalar_tags and tags[1] in scalar_tags:
        try:
            return _as_number(actual) == _as_number(expected)
        except ValueError:
            return False

    try:
        return bool(actual == expected)
    except (TypeError, ValueError):
        return False


class Difference:
    """one mismatch found by `differences`"""

    def __init__(self, path: str, actual: Any, expected: Any):
        self.path = path
        self.actual = actual
        self.expected = expected

    def __str__(self) -> str:
        return f"{self.path or '(root)'}: {self.actual} !== {self.expected}"

    def __repr__(self) -> str:
        return f"Difference(path={self.path!r}, actual={self.actual!r}, expected={self.expected!r})"


def _entries(value: Any, kind: ValueKind) -> Dict[Hashable, Any]:
    if kind is ValueKind.SEQUENCE:
        items = value.tolist() if isinstance(value, (np.ndarray, pd.Series)) else list(value)
        return dict(enumerate(items))
    if isinstance(value, pd.DataFrame):
        return {column: value[column].tolist() for column in value.columns}
    if isinstance(value, Mapping):
        return dict(value)
    return dict(vars(value))


def _join(path: str, key: Hashable) -> str:
    return f"{path}.{key}" if path else str(key)


def differences(actual: Any, expected: Any) -> List[Difference]:
    """every mismatch between two structures, in key order of the actual side first"""
    found: List[Difference] = []
    # container pairs currently being compared, held so their ids stay unique
    in_progress: Dict[Tuple[int, int], Tuple[Any, Any]] = {}
    _compare(actual, expected, '', found, in_progress)
    return found


def _compare(actual: Any, expected: Any, path: str,
             found: List[Difference], in_progress: Dict[Tuple[int, int], Tuple[Any, Any]]) -> None:
    actual_kind, expected_kind = value_kind(actual), value_kind(expected)

    if ValueKind.PRIMITIVE in (actual_kind, expected_kind) or actual_kind is not expected_kind:
        if not strict_equal(actual, expected):
            found.append(Difference(path, actual, expected))
        return

    if actual_kind is ValueKind.SET:
        if set(actual) != set(expected):
            found.append(Difference(path, actual, expected))
        return

    pair = (id(actual), id(expected))
    if pair in in_progress:
        # already being compared further up: a cycle
        return
    in_progress[pair] = (actual, expected)

    left, right = _entries(actual, actual_kind), _entries(expected, expected_kind)
    keys = list(left) + [k for k in right if k not in left]
    for key in keys:
        _compare(left.get(key, UNDEFINED), right.get(key, UNDEFINED), _join(path, key), found, in_progress)
    del in_progress[pair]


def deep_equal(actual: Any, expected: Any) -> bool:
    return not differences(actual, expected)

"""Classification of dynamically typed test values.

Every check and value producer in the package decides what it can do with a
value by asking :func:`kind_of`. Keeping that decision in one module means the
rest of the code branches on a closed set of kinds and always has an explicit
"unsupported" branch.
"""

from __future__ import annotations

import asyncio
import dataclasses
import io
import numbers
import queue
import types
import weakref
from collections import deque
from collections.abc import Mapping, Sequence, Set
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Generic, TypeVar

import numpy as np

T = TypeVar("T")


class Kind(str, Enum):
    NONE = "none"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    BYTES = "bytes"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    SET = "set"
    CHANNEL = "channel"
    REF = "ref"
    ERROR = "error"
    TIMESTAMP = "timestamp"
    OPAQUE = "opaque"


_CHANNEL_TYPES = (queue.Queue, queue.SimpleQueue, asyncio.Queue)
_FUNCTION_TYPES = (types.FunctionType, types.BuiltinFunctionType, types.MethodType)


@dataclasses.dataclass(frozen=True, eq=False)
class Ref(Generic[T]):
    """An owned reference to a value of a known type.

    ``Ref(None, T)`` is a typed nil: a reference to a ``T`` that holds nothing.
    Equality follows the pointee, not the reference.
    """

    value: T | None
    type_: type | None = None

    def __post_init__(self) -> None:
        if self.type_ is None and self.value is not None:
            object.__setattr__(self, "type_", type(self.value))

    @property
    def is_nil(self) -> bool:
        return self.value is None

    @property
    def type_name(self) -> str:
        inner = type_name(self.type_) if self.type_ is not None else "Any"
        return f"Ref[{inner}]"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ref):
            return NotImplemented
        return deep_equal(self, other)

    def __hash__(self) -> int:
        return hash((Ref, self.type_))


def kind_of(v: Any) -> Kind:
    """Return the kind used to dispatch operations on *v*."""
    if v is None:
        return Kind.NONE
    if isinstance(v, (bool, np.bool_)):
        return Kind.BOOL
    if isinstance(v, numbers.Integral):
        return Kind.INT
    if isinstance(v, (numbers.Real, Decimal)):
        return Kind.FLOAT
    if isinstance(v, str):
        return Kind.STRING
    if isinstance(v, (bytes, bytearray, memoryview)):
        return Kind.BYTES
    if isinstance(v, (Ref, weakref.ref)):
        return Kind.REF
    if isinstance(v, BaseException):
        return Kind.ERROR
    if isinstance(v, datetime):
        return Kind.TIMESTAMP
    if isinstance(v, np.ndarray):
        return Kind.SEQUENCE if v.ndim > 0 else Kind.OPAQUE
    if isinstance(v, Mapping):
        return Kind.MAPPING
    if isinstance(v, Set):
        return Kind.SET
    if isinstance(v, (Sequence, deque)):
        return Kind.SEQUENCE
    if isinstance(v, _CHANNEL_TYPES):
        return Kind.CHANNEL
    return Kind.OPAQUE


def type_name(t: type) -> str:
    module = getattr(t, "__module__", "builtins")
    if module == "builtins" or module.startswith("numpy"):
        return t.__qualname__
    return f"{module}.{t.__qualname__}"


def deref(v: Any) -> Any:
    """Follow a :class:`Ref` or weak reference; other values pass through."""
    if isinstance(v, Ref):
        return v.value
    if isinstance(v, weakref.ref):
        return v()
    return v


def is_nil(v: Any) -> bool:
    """Report whether *v* is None or a reference holding no value."""
    if v is None:
        return True
    return kind_of(v) is Kind.REF and deref(v) is None


# --- numeric coercion ---


def as_float64(v: Any) -> tuple[float, bool]:
    kind = kind_of(v)
    if kind is Kind.INT:
        return float(int(v)), True
    if kind is Kind.FLOAT:
        return float(v), True
    if kind is Kind.STRING:
        # Mirror a strict float parser: no padding, no digit separators.
        if not v or v != v.strip() or "_" in v:
            return 0.0, False
        try:
            return float(v), True
        except ValueError:
            return 0.0, False
    return 0.0, False


# --- length, capacity and indexing ---


def as_len(v: Any) -> tuple[int, bool]:
    kind = kind_of(v)
    if kind in (Kind.STRING, Kind.BYTES, Kind.SEQUENCE, Kind.MAPPING, Kind.SET):
        return len(v), True
    if kind is Kind.CHANNEL:
        return v.qsize(), True
    return 0, False


def as_cap(v: Any) -> tuple[int, bool]:
    kind = kind_of(v)
    if kind is Kind.SEQUENCE and isinstance(v, deque) and v.maxlen is not None:
        return v.maxlen, True
    if kind in (Kind.BYTES, Kind.SEQUENCE):
        return len(v), True
    if kind is Kind.CHANNEL:
        return getattr(v, "maxsize", 0), True
    return 0, False


def supports_index(v: Any) -> bool:
    return kind_of(v) in (Kind.SEQUENCE, Kind.STRING, Kind.BYTES)


# --- structural equality ---


def deep_equal(a: Any, b: Any) -> bool:
    """Recursive structural equality.

    Two values are equal when they have the same dynamic type and equal
    contents. References compare by pointee, mappings by key regardless of
    order. Revisiting a pair already under comparison counts as equal, which
    keeps cyclic structures from recursing forever.
    """
    return _deep_equal(a, b, {})


def _deep_equal(a: Any, b: Any, visited: dict[tuple[int, int], tuple[Any, Any]]) -> bool:
    if a is b:
        return True
    if type(a) is not type(b):
        return False

    kind = kind_of(a)
    if kind in (Kind.NONE, Kind.BOOL, Kind.INT, Kind.FLOAT, Kind.STRING, Kind.BYTES):
        return bool(a == b)
    if kind is Kind.TIMESTAMP:
        return a == b and a.tzinfo == b.tzinfo

    pair = (id(a), id(b))
    if pair in visited:
        return True
    # Holding the operands keeps their ids from being reused mid-comparison.
    visited[pair] = (a, b)

    if kind is Kind.REF:
        if isinstance(a, Ref) and a.type_ is not b.type_:
            return False
        return _deep_equal(deref(a), deref(b), visited)
    if isinstance(a, np.ndarray):
        return a.dtype == b.dtype and a.shape == b.shape and bool(np.array_equal(a, b))
    if kind is Kind.MAPPING:
        if len(a) != len(b):
            return False
        for key, item in a.items():
            if key not in b or not _deep_equal(item, b[key], visited):
                return False
        return True
    if kind is Kind.SEQUENCE:
        if len(a) != len(b):
            return False
        return all(_deep_equal(x, y, visited) for x, y in zip(a, b))
    if kind is Kind.SET:
        return a == b
    if kind is Kind.ERROR:
        if type(a).__eq__ is not BaseException.__eq__:
            return a == b
        return _deep_equal(a.args, b.args, visited) and _deep_equal(
            _attributes(a), _attributes(b), visited
        )
    if kind is Kind.CHANNEL or isinstance(a, (io.IOBase, *_FUNCTION_TYPES)):
        return False

    attrs_a = _attributes(a)
    if attrs_a is None:
        return bool(a == b)
    return _deep_equal(attrs_a, _attributes(b), visited)


def _attributes(v: Any) -> dict[str, Any] | None:
    if dataclasses.is_dataclass(v) and not isinstance(v, type):
        return {f.name: getattr(v, f.name) for f in dataclasses.fields(v)}
    attrs: dict[str, Any] = {}
    has_state = False
    if hasattr(v, "__dict__"):
        attrs.update(vars(v))
        has_state = True
    for cls in type(v).__mro__:
        for slot in getattr(cls, "__slots__", ()):
            if slot in ("__dict__", "__weakref__") or not hasattr(v, slot):
                continue
            attrs[slot] = getattr(v, slot)
            has_state = True
    return attrs if has_state else None

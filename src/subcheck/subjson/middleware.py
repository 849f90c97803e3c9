"""Middleware decoding the JSON test value before delegating to a check."""

from __future__ import annotations

from typing import Any, Callable

from subcheck.check import Check, CheckFunc, CheckLike, as_check
from subcheck.errors import PrefixError
from subcheck.subjson import decode
from subcheck.values import ValueFunc


def _on(shape: str, produce: Callable[[Any], ValueFunc], c: Check | CheckLike) -> CheckFunc:
    inner = as_check(c)
    prefix = f"on JSON decoded {shape}"

    def fn(got: Any) -> BaseException | None:
        err = inner.check(produce(got))
        if err is not None:
            return PrefixError(prefix, err)
        return None

    return CheckFunc(fn)


def on_string(c: Check | CheckLike) -> CheckFunc:
    return _on("string", decode.string, c)


def on_int64(c: Check | CheckLike) -> CheckFunc:
    return _on("int64", decode.int64, c)


def on_float64(c: Check | CheckLike) -> CheckFunc:
    return _on("float64", decode.float64, c)


def on_number(c: Check | CheckLike) -> CheckFunc:
    """Decode into a :class:`~subcheck.subjson.decode.Number` before running *c*."""
    return _on("number", decode.number, c)


def on_slice(c: Check | CheckLike) -> CheckFunc:
    """Decode into a list of raw elements before running *c*."""
    return _on("slice", decode.raw_slice, c)


def on_map(c: Check | CheckLike) -> CheckFunc:
    """Decode into a dict of raw values before running *c*."""
    return _on("map", decode.raw_map, c)


def on_time(c: Check | CheckLike) -> CheckFunc:
    return _on("time", decode.timestamp, c)


def on_value(c: Check | CheckLike) -> CheckFunc:
    """Decode into plain Python values before running *c*."""
    return _on("value", decode.value, c)

"""Middleware: checks that transform the test value before delegating."""

from __future__ import annotations

from typing import Any, Callable

from subcheck import values
from subcheck.check import Check, CheckFunc, CheckLike, as_check
from subcheck.errors import PrefixError
from subcheck.values import ValueFunc


def _wrap(prefix: str, produce: Callable[[Any], ValueFunc], c: Check | CheckLike) -> CheckFunc:
    inner = as_check(c)

    def fn(got: Any) -> BaseException | None:
        err = inner.check(produce(got))
        if err is not None:
            return PrefixError(prefix, err)
        return None

    return CheckFunc(fn)


def on_float64(c: Check | CheckLike) -> CheckFunc:
    """Run *c* against the test value converted to float."""
    return _wrap("on float64 value", values.float64, c)


def on_len(c: Check | CheckLike) -> CheckFunc:
    """Run *c* against the length of the test value."""
    return _wrap("on len", values.len_of, c)


def on_cap(c: Check | CheckLike) -> CheckFunc:
    """Run *c* against the capacity of the test value."""
    return _wrap("on cap", values.cap_of, c)


def on_index(i: int, c: Check | CheckLike) -> CheckFunc:
    """Run *c* against element *i* of the test value."""
    return _wrap(f"on index {i}", lambda got: values.index(got, i), c)

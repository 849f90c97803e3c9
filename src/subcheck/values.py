"""Value producers: deferred sources of the value under test.

A :class:`ValueFunc` wraps a zero-argument callable. A producer that can not
produce its value raises; checks turn the exception into a failure that says
the value function failed, so a broken test setup reads differently from a
failed comparison.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import TYPE_CHECKING, Any, Callable

from subcheck import check as checks
from subcheck.adapter import Runnable, to_runnable
from subcheck.failure import Failure, fail_got
from subcheck.kinds import as_cap, as_float64, as_len, supports_index

if TYPE_CHECKING:
    from subcheck.check import Check, CheckLike
    from subcheck.schema import Schema

MSG_NOT_LEN_TYPE = "type does not support len"
MSG_NOT_CAP_TYPE = "type does not support cap"
MSG_NOT_INDEX_TYPE = "type does not support index operation"
MSG_INDEX_OUT_OF_RANGE = "index out of range"
MSG_NOT_FLOAT64 = "not convertable to float64"


class ValueFunc:
    """A deferred value. Calling it returns the value or raises."""

    def __init__(self, fn: Callable[[], Any]):
        self._fn = fn

    def __call__(self) -> Any:
        return self._fn()

    def __repr__(self) -> str:
        return f"ValueFunc({self._fn!r})"

    def test(self, c: Check | CheckLike) -> Runnable:
        """Return a runnable test failing fatally when *c* fails against self."""
        return to_runnable(checks.as_check(c), self)

    # Short-hand for self.test(<check>) with each built-in check.

    def deep_equal(self, expect: Any) -> Runnable:
        return self.test(checks.deep_equal(expect))

    def not_deep_equal(self, reject: Any) -> Runnable:
        return self.test(checks.not_deep_equal(reject))

    def compare_equal(self, expect: Any) -> Runnable:
        return self.test(checks.compare_equal(expect))

    def not_compare_equal(self, reject: Any) -> Runnable:
        return self.test(checks.not_compare_equal(reject))

    def less_than(self, v: float) -> Runnable:
        return self.test(checks.less_than(v))

    def less_than_or_equal(self, v: float) -> Runnable:
        return self.test(checks.less_than_or_equal(v))

    def greater_than(self, v: float) -> Runnable:
        return self.test(checks.greater_than(v))

    def greater_than_or_equal(self, v: float) -> Runnable:
        return self.test(checks.greater_than_or_equal(v))

    def numeric_equal(self, v: float) -> Runnable:
        return self.test(checks.numeric_equal(v))

    def not_numeric_equal(self, v: float) -> Runnable:
        return self.test(checks.not_numeric_equal(v))

    def before(self, t: datetime) -> Runnable:
        return self.test(checks.before(t))

    def not_before(self, t: datetime) -> Runnable:
        return self.test(checks.not_before(t))

    def time_equal(self, t: datetime) -> Runnable:
        return self.test(checks.time_equal(t))

    def not_time_equal(self, t: datetime) -> Runnable:
        return self.test(checks.not_time_equal(t))

    def is_nil(self) -> Runnable:
        return self.test(checks.is_nil())

    def not_nil(self) -> Runnable:
        return self.test(checks.not_nil())

    def match_regexp(self, r: re.Pattern) -> Runnable:
        return self.test(checks.match_regexp(r))

    def match_pattern(self, pattern: str) -> Runnable:
        return self.test(checks.match_pattern(pattern))

    def no_error(self) -> Runnable:
        return self.test(checks.no_error())

    def error(self) -> Runnable:
        return self.test(checks.error())

    def error_is(self, target: BaseException | type) -> Runnable:
        return self.test(checks.error_is(target))

    def error_is_not(self, target: BaseException | type) -> Runnable:
        return self.test(checks.error_is_not(target))

    def contains_match(self, c: Check | CheckLike) -> Runnable:
        return self.test(checks.contains_match(c))

    def contains(self, v: Any) -> Runnable:
        return self.test(checks.contains(v))

    def validate_map(self, schema: Schema) -> Runnable:
        return self.test(schema)


def value(v: Any) -> ValueFunc:
    """Return a ValueFunc for the static value *v*."""
    return ValueFunc(lambda: v)


def len_of(v: Any) -> ValueFunc:
    """Return a ValueFunc for the length of *v*."""

    def produce() -> int:
        n, ok = as_len(v)
        if not ok:
            raise fail_got(MSG_NOT_LEN_TYPE, v)
        return n

    return ValueFunc(produce)


def cap_of(v: Any) -> ValueFunc:
    """Return a ValueFunc for the capacity of *v*.

    Sequences and byte strings report their length, bounded deques their
    ``maxlen`` and queues their ``maxsize``.
    """

    def produce() -> int:
        n, ok = as_cap(v)
        if not ok:
            raise fail_got(MSG_NOT_CAP_TYPE, v)
        return n

    return ValueFunc(produce)


def index(v: Any, i: int) -> ValueFunc:
    """Return a ValueFunc for ``v[i]``. Accepts sequences, strings and bytes."""

    def produce() -> Any:
        if not supports_index(v):
            raise fail_got(MSG_NOT_INDEX_TYPE, v)
        if i < 0 or i >= len(v):
            raise Failure(MSG_INDEX_OUT_OF_RANGE)
        return v[i]

    return ValueFunc(produce)


def float64(v: Any) -> ValueFunc:
    """Return a ValueFunc converting *v* to float.

    Integer and float kinds convert directly; strings are parsed.
    """

    def produce() -> float:
        f, ok = as_float64(v)
        if not ok:
            raise fail_got(MSG_NOT_FLOAT64, v)
        return f

    return ValueFunc(produce)

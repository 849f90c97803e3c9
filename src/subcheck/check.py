"""Checks and the built-in check constructors.

A check is anything with a ``check(vf)`` method returning ``None`` on success
or an error describing the failure. :class:`CheckFunc` adapts a plain
predicate ``got -> error | None`` to that interface, and is what every
constructor in this module returns.
"""

from __future__ import annotations

import io
import re
from datetime import datetime
from typing import TYPE_CHECKING, Any, Callable, Optional, Protocol, Union, runtime_checkable

from subcheck import kinds
from subcheck import values
from subcheck.adapter import Runnable, to_runnable
from subcheck.errors import Errors, PrefixError, is_in_chain
from subcheck.failure import Failure, fail_expect, fail_got, fail_reject
from subcheck.formatting import format_type
from subcheck.kinds import Kind, kind_of

if TYPE_CHECKING:
    from subcheck.values import ValueFunc

CheckLike = Callable[[Any], Optional[BaseException]]

MSG_MISSING_VALUE_FUNC = "missing value function"
MSG_VALUE_FUNC_ERROR = "value function returns an error"
MSG_NOT_DEEP_EQUAL = "not deep equal"
MSG_DEEP_EQUAL = "deep equal"
MSG_NOT_COMPARE_EQUAL = "not compare equal"
MSG_COMPARE_EQUAL = "compare equal"
MSG_NOT_NUMERIC_EQUAL = "not numeric equal"
MSG_NUMERIC_EQUAL = "numeric equal"
MSG_NOT_TIME_TYPE = "type is not a timestamp type"
MSG_TIME_NOT_COMPARABLE = "timestamps are not comparable"
MSG_TIME_NOT_EQUAL = "times not equal"
MSG_NOT_REFLECT_NIL = "typed or untyped nil"
MSG_REFLECT_NIL = "neither typed nor untyped nil"
MSG_NOT_MATCHABLE = "type not matchable by regular expression"
MSG_NOT_MATCHING = "value not matching regular expression"
MSG_NOT_ERROR_TYPE = "value is not an error type"
MSG_NO_ERROR = "error value is not nil"
MSG_ERROR = "error value is nil"
MSG_ERROR_IS_NOT = "error value is matching target error"
MSG_ERROR_IS = "error value is not matching target error"
MSG_NOT_SEQUENCE = "type is not a sequence"
MSG_NO_MATCH = "does not match any elements"
MSG_LEN_MISMATCH = "length does not match number of checks"


@runtime_checkable
class Check(Protocol):
    def check(self, vf: ValueFunc) -> BaseException | None: ...


def produce(vf: ValueFunc | None) -> tuple[Any, Failure | None]:
    """Run *vf*, converting a missing or failing producer into a failure."""
    if vf is None:
        return None, fail_got(MSG_MISSING_VALUE_FUNC, None)
    try:
        return vf(), None
    except Exception as exc:
        return None, fail_got(MSG_VALUE_FUNC_ERROR, exc)


class CheckFunc:
    """A check built from a predicate on the produced value.

    Can be used as a decorator::

        @CheckFunc
        def is_even(got):
            if got % 2:
                return fail_got("not even", got)
            return None
    """

    def __init__(self, fn: CheckLike):
        self._fn = fn

    def __call__(self, got: Any) -> BaseException | None:
        return self._fn(got)

    def __repr__(self) -> str:
        return f"CheckFunc({getattr(self._fn, '__qualname__', self._fn)!r})"

    def check(self, vf: ValueFunc | None) -> BaseException | None:
        got, err = produce(vf)
        if err is not None:
            return err
        return self._fn(got)

    def test(self, got: Any) -> Runnable:
        """Return a runnable test failing fatally when ``self(got)`` fails."""
        return to_runnable(self, values.value(got))


def as_check(c: Check | CheckLike) -> Check:
    """Accept either a check or a bare predicate callable."""
    if isinstance(c, Check):
        return c
    if callable(c):
        return CheckFunc(c)
    raise TypeError(f"not a check: {c!r}")


class AllOf(list):
    """A check that passes only if all member checks pass.

    Every member is evaluated; failures are collected rather than stopping at
    the first one.
    """

    def __init__(self, *checks: Union[Check, CheckLike]):
        super().__init__(as_check(c) for c in checks)

    def check(self, vf: ValueFunc | None) -> BaseException | None:
        errs = Errors()
        for c in self:
            err = c.check(vf)
            if err is not None:
                errs.append(err)
        return errs if errs else None


def anything() -> CheckFunc:
    """Return a check that never fails."""
    return CheckFunc(lambda got: None)


# --- equality ---


def deep_equal(expect: Any) -> CheckFunc:
    """Fail unless the test value is structurally equal to *expect*."""

    def fn(got: Any) -> BaseException | None:
        if not kinds.deep_equal(expect, got):
            return fail_expect(MSG_NOT_DEEP_EQUAL, got, expect)
        return None

    return CheckFunc(fn)


def not_deep_equal(reject: Any) -> CheckFunc:
    """Fail when the test value is structurally equal to *reject*."""

    def fn(got: Any) -> BaseException | None:
        if kinds.deep_equal(reject, got):
            return fail_reject(MSG_DEEP_EQUAL, got, reject)
        return None

    return CheckFunc(fn)


def compare_equal(expect: Any) -> CheckFunc:
    """Fail unless ``got == expect``."""

    def fn(got: Any) -> BaseException | None:
        if not got == expect:
            return fail_expect(MSG_NOT_COMPARE_EQUAL, got, expect)
        return None

    return CheckFunc(fn)


def not_compare_equal(reject: Any) -> CheckFunc:
    """Fail when ``got == reject``."""

    def fn(got: Any) -> BaseException | None:
        if got == reject:
            return fail_reject(MSG_COMPARE_EQUAL, got, reject)
        return None

    return CheckFunc(fn)


# --- numeric comparison ---


def _numeric(passes: Callable[[float], bool], prefix: str) -> CheckFunc:
    def fn(got: Any) -> BaseException | None:
        f, ok = kinds.as_float64(got)
        if not ok:
            return fail_got(values.MSG_NOT_FLOAT64, got)
        if not passes(f):
            return fail_got(prefix, got)
        return None

    return CheckFunc(fn)


def less_than(v: float) -> CheckFunc:
    return _numeric(lambda f: f < v, f"not less than {v:f}")


def less_than_or_equal(v: float) -> CheckFunc:
    return _numeric(lambda f: f <= v, f"not less than or equal to {v:f}")


def greater_than(v: float) -> CheckFunc:
    return _numeric(lambda f: f > v, f"not greater than {v:f}")


def greater_than_or_equal(v: float) -> CheckFunc:
    return _numeric(lambda f: f >= v, f"not greater than or equal to {v:f}")


def numeric_equal(v: float) -> CheckFunc:
    """Fail unless the test value converts to a float equal to *v*."""
    expect = float(v)

    def fn(got: Any) -> BaseException | None:
        f, ok = kinds.as_float64(got)
        if not ok:
            return fail_got(values.MSG_NOT_FLOAT64, got)
        if f != expect:
            return fail_expect(MSG_NOT_NUMERIC_EQUAL, got, expect)
        return None

    return CheckFunc(fn)


def not_numeric_equal(v: float) -> CheckFunc:
    """Fail when the test value converts to a float equal to *v*."""
    reject = float(v)

    def fn(got: Any) -> BaseException | None:
        f, ok = kinds.as_float64(got)
        if not ok:
            return fail_got(values.MSG_NOT_FLOAT64, got)
        if f == reject:
            return fail_reject(MSG_NUMERIC_EQUAL, got, reject)
        return None

    return CheckFunc(fn)


# --- time comparison ---


def _is_aware(t: datetime) -> bool:
    return t.tzinfo is not None and t.utcoffset() is not None


def _time_check(t: datetime, compare: Callable[[Any, datetime], BaseException | None]) -> CheckFunc:
    def fn(got: Any) -> BaseException | None:
        tv = kinds.deref(got) if kind_of(got) is Kind.REF else got
        if kind_of(tv) is not Kind.TIMESTAMP:
            return fail_got(MSG_NOT_TIME_TYPE, got)
        if _is_aware(tv) != _is_aware(t):
            return fail_expect(MSG_TIME_NOT_COMPARABLE, got, t)
        return compare(got, tv)

    return CheckFunc(fn)


def before(t: datetime) -> CheckFunc:
    """Fail unless the test value is a timestamp before *t*."""

    def compare(got: Any, tv: datetime) -> BaseException | None:
        if not tv < t:
            return fail_got(f"time not before {t}", got)
        return None

    return _time_check(t, compare)


def not_before(t: datetime) -> CheckFunc:
    """Fail when the test value is a timestamp before *t*."""

    def compare(got: Any, tv: datetime) -> BaseException | None:
        if tv < t:
            return fail_got(f"time before {t}", got)
        return None

    return _time_check(t, compare)


def time_equal(t: datetime) -> CheckFunc:
    """Fail unless the test value denotes the same instant as *t*."""

    def compare(got: Any, tv: datetime) -> BaseException | None:
        if tv != t:
            return fail_expect(MSG_TIME_NOT_EQUAL, got, t)
        return None

    return _time_check(t, compare)


def not_time_equal(t: datetime) -> CheckFunc:
    """Fail when the test value denotes the same instant as *t*."""

    def compare(got: Any, tv: datetime) -> BaseException | None:
        if tv == t:
            return fail_reject(MSG_TIME_NOT_EQUAL, got, t)
        return None

    return _time_check(t, compare)


# --- nil ---


def is_nil() -> CheckFunc:
    """Fail unless the test value is None or a reference holding nothing."""

    def fn(got: Any) -> BaseException | None:
        if not kinds.is_nil(got):
            return fail_got(MSG_REFLECT_NIL, got)
        return None

    return CheckFunc(fn)


def not_nil() -> CheckFunc:
    """Fail when the test value is None or a reference holding nothing."""

    def fn(got: Any) -> BaseException | None:
        if kinds.is_nil(got):
            return fail_got(MSG_NOT_REFLECT_NIL, got)
        return None

    return CheckFunc(fn)


# --- regular expressions ---


def _matchable_text(got: Any) -> str | bytes | None:
    kind = kind_of(got)
    if kind is Kind.STRING:
        return got
    if kind is Kind.BYTES:
        return bytes(got)
    if kind is Kind.ERROR:
        return str(got)
    if isinstance(got, io.IOBase) and got.readable():
        return got.read()
    return None


def match_regexp(r: re.Pattern) -> CheckFunc:
    """Fail unless the test value contains a match for *r*.

    Accepts str, bytes-like values, text or binary streams (read to the end)
    and exceptions (matched on their message).
    """

    def fn(got: Any) -> BaseException | None:
        text = _matchable_text(got)
        if text is None:
            return fail_got(MSG_NOT_MATCHABLE, got)
        if isinstance(r.pattern, str) and isinstance(text, bytes):
            text = text.decode("utf-8", errors="replace")
        elif isinstance(r.pattern, bytes) and isinstance(text, str):
            text = text.encode("utf-8")
        if r.search(text) is None:
            return fail_expect(MSG_NOT_MATCHING, got, r.pattern)
        return None

    return CheckFunc(fn)


def match_pattern(pattern: str) -> CheckFunc:
    """Compile *pattern* and return :func:`match_regexp` for it."""
    return match_regexp(re.compile(pattern))


# --- errors ---


def _as_error(got: Any) -> tuple[BaseException | None, bool]:
    if got is None:
        return None, True
    if kind_of(got) is Kind.ERROR:
        return got, True
    return None, False


def no_error() -> CheckFunc:
    """Fail when the test value is an exception, or not error-shaped."""

    def fn(got: Any) -> BaseException | None:
        err, ok = _as_error(got)
        if not ok:
            return fail_got(MSG_NOT_ERROR_TYPE, got)
        if err is not None:
            return fail_got(MSG_NO_ERROR, err)
        return None

    return CheckFunc(fn)


def error() -> CheckFunc:
    """Fail when the test value is None, or not error-shaped."""

    def fn(got: Any) -> BaseException | None:
        err, ok = _as_error(got)
        if not ok:
            return fail_got(MSG_NOT_ERROR_TYPE, got)
        if err is None:
            return fail_got(MSG_ERROR, err)
        return None

    return CheckFunc(fn)


def error_is(target: BaseException | type) -> CheckFunc:
    """Fail unless *target* is found in the wrap chain of the test value."""

    def fn(got: Any) -> BaseException | None:
        err, ok = _as_error(got)
        if not ok:
            return fail_got(MSG_NOT_ERROR_TYPE, got)
        if not is_in_chain(err, target):
            return fail_expect(MSG_ERROR_IS, err, target)
        return None

    return CheckFunc(fn)


def error_is_not(target: BaseException | type) -> CheckFunc:
    """Fail when *target* is found in the wrap chain of the test value."""

    def fn(got: Any) -> BaseException | None:
        err, ok = _as_error(got)
        if not ok:
            return fail_got(MSG_NOT_ERROR_TYPE, got)
        if is_in_chain(err, target):
            return fail_reject(MSG_ERROR_IS_NOT, err, target)
        return None

    return CheckFunc(fn)


# --- sequences ---


def contains_match(c: Check | CheckLike) -> CheckFunc:
    """Fail unless at least one element of the test value passes *c*.

    Elements are tried in order and the search stops at the first match. When
    nothing matches, the failure reports the whole sequence as got, along with
    the expectation of the last element's failure.
    """
    c = as_check(c)

    def fn(got: Any) -> BaseException | None:
        if kind_of(got) is not Kind.SEQUENCE:
            return fail_got(MSG_NOT_SEQUENCE, got)
        last: BaseException | None = None
        for item in got:
            last = c.check(values.value(item))
            if last is None:
                return None
        expect = last.expect if isinstance(last, Failure) else ""
        return Failure(MSG_NO_MATCH, got=format_type(got), expect=expect)

    return CheckFunc(fn)


def contains(v: Any) -> CheckFunc:
    """Fail unless an element of the test value is deep equal to *v*."""
    return contains_match(deep_equal(v))


def iterate(*checks: Check | CheckLike) -> CheckFunc:
    """Check element ``i`` of the test value against ``checks[i]``.

    The sequence must hold exactly one element per check.
    """
    element_checks = [as_check(c) for c in checks]

    def fn(got: Any) -> BaseException | None:
        if kind_of(got) is not Kind.SEQUENCE:
            return fail_got(MSG_NOT_SEQUENCE, got)
        errs = Errors()
        if len(got) != len(element_checks):
            errs.append(fail_expect(MSG_LEN_MISMATCH, len(got), len(element_checks)))
        for i, (item, c) in enumerate(zip(got, element_checks)):
            err = c.check(values.value(item))
            if err is not None:
                errs.append(PrefixError(f"index {i}", err))
        return errs if errs else None

    return CheckFunc(fn)

"""Short-hand checks for JSON encoded test values."""

from __future__ import annotations

from typing import Any

from subcheck import check as checks
from subcheck import schema
from subcheck.check import Check, CheckFunc, CheckLike
from subcheck.subjson.middleware import on_map, on_number, on_slice, on_value
from subcheck.subjson.decode import RawJSON
from subcheck.values import ValueFunc


class Fields(schema.Fields):
    """Short-hand for ``on_map(subcheck.Fields(...))``.

    Values of the decoded map are :class:`RawJSON`, so field checks are
    usually JSON checks themselves, e.g. ``RawEqual('"bar"')``.
    """

    def check(self, vf: ValueFunc | None) -> BaseException | None:
        return on_map(schema.Fields(self)).check(vf)


class RawEqual(RawJSON):
    """Short-hand for ``deep_equal(RawJSON(...))``: byte-exact JSON text."""

    def check(self, vf: ValueFunc | None) -> BaseException | None:
        return checks.deep_equal(RawJSON(self)).check(vf)


def iterate_slice(*cs: Check | CheckLike) -> CheckFunc:
    """Short-hand for ``on_slice(iterate(*cs))``."""
    return on_slice(checks.iterate(*cs))


def less_than(expect: float) -> CheckFunc:
    return on_number(checks.less_than(expect))


def less_than_or_equal(expect: float) -> CheckFunc:
    return on_number(checks.less_than_or_equal(expect))


def greater_than(expect: float) -> CheckFunc:
    return on_number(checks.greater_than(expect))


def greater_than_or_equal(expect: float) -> CheckFunc:
    return on_number(checks.greater_than_or_equal(expect))


def numeric_equal(expect: float) -> CheckFunc:
    return on_number(checks.numeric_equal(expect))


def not_numeric_equal(expect: float) -> CheckFunc:
    return on_number(checks.not_numeric_equal(expect))


def decodes_to(expect: Any) -> CheckFunc:
    """Short-hand for ``on_value(deep_equal(expect))``."""
    return on_value(checks.deep_equal(expect))


def not_decodes_to(reject: Any) -> CheckFunc:
    """Short-hand for ``on_value(not_deep_equal(reject))``."""
    return on_value(checks.not_deep_equal(reject))


def nil() -> CheckFunc:
    """Pass when the value decodes to JSON ``null``."""
    return on_value(checks.deep_equal(None))


def not_nil() -> CheckFunc:
    """Pass when the value decodes to anything but JSON ``null``."""
    return on_value(checks.not_deep_equal(None))

"""Structured failures returned by checks."""

from __future__ import annotations

from typing import Any

from subcheck.formatting import Formatting, format_type


class Failure(Exception):
    """A check failure with pre-formatted operands.

    Operands are formatted when the failure is built, so mutating a value
    afterwards can not change what is reported. Two failures are equal when
    their four text fields are equal; this is what lets tests assert that a
    check produced exactly some failure.

    Attributes:
        prefix: Human-readable cause.
        got: Formatted test value, or "".
        expect: Formatted expected value, or "".
        reject: Formatted rejected value, or "".
    """

    def __init__(
        self,
        prefix: str,
        got: str = "",
        expect: str = "",
        reject: str = "",
        wrapped: BaseException | None = None,
    ):
        super().__init__(prefix, got, expect, reject)
        self.prefix = prefix
        self.got = got
        self.expect = expect
        self.reject = reject
        self.wrapped = wrapped

    def unwrap(self) -> BaseException | None:
        return self.wrapped

    def _fields(self) -> tuple[str, str, str, str]:
        return (self.prefix, self.got, self.expect, self.reject)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Failure):
            return NotImplemented
        return self._fields() == other._fields()

    def __hash__(self) -> int:
        return hash(self._fields())

    def __str__(self) -> str:
        s = self.prefix
        if self.got:
            s += f"\ngot: {self.got}"
        if self.expect:
            s += f"\nwant: {self.expect}"
        if self.reject:
            s += f"\ndon't want: {self.reject}"
        return s

    def __repr__(self) -> str:
        fields = ", ".join(
            f"{name}={value!r}"
            for name, value in zip(("prefix", "got", "expect", "reject"), self._fields())
            if value
        )
        return f"Failure({fields})"


def _wrapped(got: Any) -> BaseException | None:
    return got if isinstance(got, BaseException) else None


def failf(fmt: str, *args: Any) -> Failure:
    """Build a plain text failure."""
    return Failure(prefix=fmt % args if args else fmt)


def fail_expect(
    prefix: str, got: Any, expect: Any, formatting: Formatting | None = None
) -> Failure:
    """Failure for a value that does not match an expected value."""
    return Failure(
        prefix=prefix,
        got=format_type(got, formatting),
        expect=format_type(expect, formatting),
        wrapped=_wrapped(got),
    )


def fail_reject(
    prefix: str, got: Any, reject: Any, formatting: Formatting | None = None
) -> Failure:
    """Failure for a value that matches a rejected value."""
    return Failure(
        prefix=prefix,
        got=format_type(got, formatting),
        reject=format_type(reject, formatting),
        wrapped=_wrapped(got),
    )


def fail_got(prefix: str, got: Any, formatting: Formatting | None = None) -> Failure:
    """Failure for an unexpected value."""
    return Failure(prefix=prefix, got=format_type(got, formatting), wrapped=_wrapped(got))

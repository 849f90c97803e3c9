"""Structural validation of mapping values."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Hashable, Optional, Sequence

from subcheck.check import Check, CheckFunc, as_check, produce
from subcheck.errors import Errors, PrefixError, key_error
from subcheck.failure import fail_got, failf
from subcheck.kinds import Kind, kind_of
from subcheck.values import value

if TYPE_CHECKING:
    from subcheck.values import ValueFunc

MSG_NOT_MAP = "not a map"
MSG_NOT_MATCHING_SCHEMA = "not matching schema"


def _sort_keys(keys: Any) -> list[Any]:
    return sorted(keys, key=str)


def _join_keys(keys: Sequence[Any]) -> str:
    return ", ".join(repr(k) for k in keys)


_MISSING = object()


def _lookup(m: Any, key: Any, default: Any = None) -> Any:
    """Return m[key] where the stored key also has the type of *key*.

    Plain dict lookup would let ``True`` find an entry stored under ``1``.
    """
    if key not in m:
        return default
    for k in m:
        if type(k) is type(key) and k == key:
            return m[k]
    return default


class Fields(dict):
    """Map of keys to the checks their values must pass.

    Used on its own, a Fields value is a check requiring every listed key
    and rejecting unlisted ones.
    """

    def ordered_keys(self) -> list[Hashable]:
        return _sort_keys(self.keys())

    def check(self, vf: ValueFunc | None) -> BaseException | None:
        return Schema(fields=self).check(vf)


@dataclass
class Schema:
    """Validation policy for mapping values.

    Attributes:
        fields: Checks for known keys.
        required: Keys that must be present. ``None`` means every key in
            ``fields``; an empty list means no key is required.
        additional_fields: Check for keys not in ``fields``. ``None`` rejects
            such keys.
    """

    fields: Fields = field(default_factory=Fields)
    required: Optional[list[Hashable]] = None
    additional_fields: Optional[Check] = None

    def __post_init__(self) -> None:
        if not isinstance(self.fields, Fields):
            self.fields = Fields(self.fields)

    def check(self, vf: ValueFunc | None) -> BaseException | None:
        got, err = produce(vf)
        if err is not None:
            return err
        return self._validate(got)

    def validate_map(self) -> CheckFunc:
        """Return a check running this schema against a raw value."""
        return CheckFunc(self._validate)

    def _validate(self, got: Any) -> BaseException | None:
        if kind_of(got) is not Kind.MAPPING:
            return fail_got(MSG_NOT_MAP, got)

        errs = Errors()
        additional = []
        for key in _sort_keys(got.keys()):
            c = _lookup(self.fields, key)
            if c is None:
                c = self.additional_fields
            if c is None:
                additional.append(key)
                continue
            err = as_check(c).check(value(got[key]))
            if err is not None:
                errs.append(key_error(key, err))

        if additional:
            errs.append(failf("got additional keys: " + _join_keys(additional)))

        required = self.fields.ordered_keys() if self.required is None else self.required
        missing = [k for k in required if _lookup(got, k, _MISSING) is _MISSING]
        if missing:
            errs.append(failf("missing required keys: " + _join_keys(missing)))

        if errs:
            return PrefixError(MSG_NOT_MATCHING_SCHEMA, errs)
        return None

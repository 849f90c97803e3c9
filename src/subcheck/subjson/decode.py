"""Value producers decoding JSON input into a target shape.

Input may be ``str``, ``bytes``, ``bytearray`` or :class:`RawJSON`. A value that
can not be decoded into the requested shape is a production error: the producer
raises and the check reports that the value function failed.
"""

from __future__ import annotations

import json
import re
from datetime import datetime
from typing import Annotated, Any, Callable

from pydantic import Field, TypeAdapter, ValidationError

from subcheck import values
from subcheck.failure import fail_got
from subcheck.values import ValueFunc

MSG_NOT_DECODABLE = "type is not JSON decodable"

_WHITESPACE = re.compile(r"[ \t\n\r]*")
_NUMBER = re.compile(r"-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][-+]?\d+)?\Z")

Int64 = Annotated[int, Field(ge=-(2**63), le=2**63 - 1)]

_STRING = TypeAdapter(str)
_INT64 = TypeAdapter(Int64)
_FLOAT64 = TypeAdapter(float)
_TIMESTAMP = TypeAdapter(datetime)

_decoder = json.JSONDecoder()


class RawJSON(bytes):
    """Undecoded JSON text, kept byte for byte."""

    def __new__(cls, data: str | bytes | bytearray = b""):
        if isinstance(data, str):
            data = data.encode("utf-8")
        return super().__new__(cls, data)

    def __repr__(self) -> str:
        return f"RawJSON({bytes(self)!r})"

    def __str__(self) -> str:
        return self.decode("utf-8", errors="replace")


class Number(str):
    """A JSON number literal kept as text, so no precision is lost."""

    def __new__(cls, literal: str):
        if not _NUMBER.match(literal):
            raise ValueError(f"invalid number literal {literal!r}")
        return super().__new__(cls, literal)

    def __repr__(self) -> str:
        return f"Number({str(self)!r})"

    def as_float(self) -> float:
        return float(self)

    def as_int(self) -> int:
        return int(self)


def _text(got: Any) -> str:
    if isinstance(got, str):
        return got
    if isinstance(got, (bytes, bytearray)):
        try:
            return bytes(got).decode("utf-8")
        except UnicodeDecodeError as e:
            raise fail_got(str(e), got) from e
    raise fail_got(MSG_NOT_DECODABLE, got)


def _validation_message(e: ValidationError) -> str:
    return "; ".join(err["msg"] for err in e.errors())


def _decode_typed(got: Any, adapter: TypeAdapter) -> Any:
    text = _text(got)
    try:
        return adapter.validate_json(text, strict=True)
    except ValidationError as e:
        raise fail_got(_validation_message(e), got) from e


def _decode(got: Any, **kwargs: Any) -> Any:
    text = _text(got)
    try:
        return json.loads(text, **kwargs)
    except json.JSONDecodeError as e:
        raise fail_got(str(e), got) from e


def _reject_constant(name: str) -> Any:
    raise json.JSONDecodeError(f"invalid number literal {name}", name, 0)


# --- splitting containers into raw elements ---


def _skip(s: str, i: int) -> int:
    return _WHITESPACE.match(s, i).end()


def _expect(s: str, i: int, chars: str, what: str) -> str:
    if i >= len(s) or s[i] not in chars:
        raise json.JSONDecodeError(f"Expecting {what}", s, i)
    return s[i]


def _raw_value(s: str, i: int) -> tuple[RawJSON, int]:
    _, end = _decoder.raw_decode(s, i)
    return RawJSON(s[i:end]), end


def _check_end(s: str, i: int) -> None:
    i = _skip(s, i)
    if i != len(s):
        raise json.JSONDecodeError("Extra data", s, i)


def split_array(s: str) -> list[RawJSON]:
    """Split a JSON array into the raw text of its elements."""
    i = _skip(s, 0)
    _expect(s, i, "[", "'['")
    i = _skip(s, i + 1)
    items: list[RawJSON] = []
    if i < len(s) and s[i] == "]":
        _check_end(s, i + 1)
        return items
    while True:
        item, i = _raw_value(s, i)
        items.append(item)
        i = _skip(s, i)
        sep = _expect(s, i, ",]", "',' delimiter")
        i = _skip(s, i + 1)
        if sep == "]":
            break
    _check_end(s, i)
    return items


def split_object(s: str) -> dict[str, RawJSON]:
    """Split a JSON object into its keys and the raw text of their values."""
    i = _skip(s, 0)
    _expect(s, i, "{", "'{'")
    i = _skip(s, i + 1)
    items: dict[str, RawJSON] = {}
    if i < len(s) and s[i] == "}":
        _check_end(s, i + 1)
        return items
    while True:
        _expect(s, i, '"', "property name enclosed in double quotes")
        key, i = _decoder.raw_decode(s, i)
        i = _skip(s, i)
        _expect(s, i, ":", "':' delimiter")
        i = _skip(s, i + 1)
        items[key], i = _raw_value(s, i)
        i = _skip(s, i)
        sep = _expect(s, i, ",}", "',' delimiter")
        i = _skip(s, i + 1)
        if sep == "}":
            break
    _check_end(s, i)
    return items


def _split(got: Any, splitter: Callable[[str], Any]) -> Any:
    text = _text(got)
    try:
        return splitter(text)
    except json.JSONDecodeError as e:
        raise fail_got(str(e), got) from e


# --- producers ---


def string(v: Any) -> ValueFunc:
    """Return a ValueFunc decoding *v* as a JSON string."""
    return ValueFunc(lambda: _decode_typed(v, _STRING))


def int64(v: Any) -> ValueFunc:
    """Return a ValueFunc decoding *v* as a JSON integer in the int64 range."""
    return ValueFunc(lambda: _decode_typed(v, _INT64))


def float64(v: Any) -> ValueFunc:
    """Return a ValueFunc decoding *v* as a JSON number, as float."""
    return ValueFunc(lambda: float(_decode_typed(v, _FLOAT64)))


def number(v: Any) -> ValueFunc:
    """Return a ValueFunc decoding *v* into a :class:`Number`.

    Accepts a JSON number, or a JSON string holding a valid number literal.
    """

    def produce() -> Number:
        decoded = _decode(v, parse_int=Number, parse_float=Number, parse_constant=_reject_constant)
        if isinstance(decoded, Number):
            return decoded
        if isinstance(decoded, str) and _NUMBER.match(decoded):
            return Number(decoded)
        raise fail_got(f"can not decode {type(decoded).__name__} into Number", v)

    return ValueFunc(produce)


def raw_slice(v: Any) -> ValueFunc:
    """Return a ValueFunc decoding *v* into a list of :class:`RawJSON` elements."""
    return ValueFunc(lambda: _split(v, split_array))


def raw_map(v: Any) -> ValueFunc:
    """Return a ValueFunc decoding *v* into a dict of :class:`RawJSON` values."""
    return ValueFunc(lambda: _split(v, split_object))


def timestamp(v: Any) -> ValueFunc:
    """Return a ValueFunc decoding *v* as an RFC 3339 timestamp string."""
    return ValueFunc(lambda: _decode_typed(v, _TIMESTAMP))


def value(v: Any) -> ValueFunc:
    """Return a ValueFunc decoding *v* into plain Python values."""
    return ValueFunc(lambda: _decode(v))


def len_of(v: Any) -> ValueFunc:
    """Return a ValueFunc for the length of the decoded value."""
    return ValueFunc(lambda: values.len_of(_decode(v))())

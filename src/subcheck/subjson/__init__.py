"""Checks and value producers for JSON encoded test values."""

from subcheck.subjson.check import (
    Fields,
    RawEqual,
    decodes_to,
    greater_than,
    greater_than_or_equal,
    iterate_slice,
    less_than,
    less_than_or_equal,
    nil,
    not_decodes_to,
    not_nil,
    not_numeric_equal,
    numeric_equal,
)
from subcheck.subjson.middleware import (
    on_float64,
    on_int64,
    on_map,
    on_number,
    on_slice,
    on_string,
    on_time,
    on_value,
)
from subcheck.subjson.decode import (
    Number,
    RawJSON,
    float64,
    int64,
    len_of,
    number,
    raw_map,
    raw_slice,
    string,
    timestamp,
    value,
)

__all__ = [
    "Fields",
    "Number",
    "RawEqual",
    "RawJSON",
    "decodes_to",
    "float64",
    "greater_than",
    "greater_than_or_equal",
    "int64",
    "iterate_slice",
    "len_of",
    "less_than",
    "less_than_or_equal",
    "nil",
    "not_decodes_to",
    "not_nil",
    "not_numeric_equal",
    "number",
    "numeric_equal",
    "on_float64",
    "on_int64",
    "on_map",
    "on_number",
    "on_slice",
    "on_string",
    "on_time",
    "on_value",
    "raw_map",
    "raw_slice",
    "string",
    "timestamp",
    "value",
]

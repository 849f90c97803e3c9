"""Composable checks for unit tests."""

from subcheck.adapter import HostContext, Runnable, from_func, to_runnable
from subcheck.check import (
    AllOf,
    Check,
    CheckFunc,
    anything,
    as_check,
    before,
    compare_equal,
    contains,
    contains_match,
    deep_equal,
    error,
    error_is,
    error_is_not,
    greater_than,
    greater_than_or_equal,
    is_nil,
    iterate,
    less_than,
    less_than_or_equal,
    match_pattern,
    match_regexp,
    no_error,
    not_before,
    not_compare_equal,
    not_deep_equal,
    not_nil,
    not_numeric_equal,
    not_time_equal,
    numeric_equal,
    time_equal,
)
from subcheck.errors import Errors, PrefixError, is_in_chain, key_error
from subcheck.failure import Failure, fail_expect, fail_got, fail_reject, failf
from subcheck.formatting import Formatting, format_type, set_indent, set_type_formatter
from subcheck.kinds import Kind, Ref, kind_of
from subcheck.middleware import on_cap, on_float64, on_index, on_len
from subcheck.schema import Fields, Schema
from subcheck.values import ValueFunc, cap_of, float64, index, len_of, value

__all__ = [
    "AllOf",
    "Check",
    "CheckFunc",
    "Errors",
    "Failure",
    "Fields",
    "Formatting",
    "HostContext",
    "Kind",
    "PrefixError",
    "Ref",
    "Runnable",
    "Schema",
    "ValueFunc",
    "anything",
    "as_check",
    "before",
    "cap_of",
    "compare_equal",
    "contains",
    "contains_match",
    "deep_equal",
    "error",
    "error_is",
    "error_is_not",
    "fail_expect",
    "fail_got",
    "fail_reject",
    "failf",
    "float64",
    "format_type",
    "from_func",
    "greater_than",
    "greater_than_or_equal",
    "index",
    "is_in_chain",
    "is_nil",
    "iterate",
    "key_error",
    "kind_of",
    "len_of",
    "less_than",
    "less_than_or_equal",
    "match_pattern",
    "match_regexp",
    "no_error",
    "not_before",
    "not_compare_equal",
    "not_deep_equal",
    "not_nil",
    "not_numeric_equal",
    "not_time_equal",
    "numeric_equal",
    "on_cap",
    "on_float64",
    "on_index",
    "on_len",
    "set_indent",
    "set_type_formatter",
    "time_equal",
    "to_runnable",
    "value",
]

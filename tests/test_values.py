"""Tests for value producers."""

import queue
from collections import deque

import numpy as np
import pytest

from subcheck.failure import Failure, fail_got
from subcheck.values import (
    MSG_INDEX_OUT_OF_RANGE,
    MSG_NOT_CAP_TYPE,
    MSG_NOT_FLOAT64,
    MSG_NOT_INDEX_TYPE,
    MSG_NOT_LEN_TYPE,
    ValueFunc,
    cap_of,
    float64,
    index,
    len_of,
    value,
)


def test_value_returns_static_value():
    items = [1, 2]
    assert value(items)() is items
    assert value(None)() is None


def test_value_func_wraps_callable():
    calls = []

    def produce():
        calls.append(1)
        return "x"

    vf = ValueFunc(produce)
    assert vf() == "x"
    assert vf() == "x"
    assert len(calls) == 2


# --- len_of ---


@pytest.mark.parametrize(
    "v, n",
    [("abc", 3), (b"ab", 2), ([1, 2, 3], 3), ({"a": 1}, 1), ({1}, 1), (np.array([1, 2]), 2)],
)
def test_len_of(v, n):
    assert len_of(v)() == n


def test_len_of_unsupported():
    with pytest.raises(Failure) as exc_info:
        len_of(42)()
    assert exc_info.value == fail_got(MSG_NOT_LEN_TYPE, 42)


# --- cap_of ---


def test_cap_of():
    assert cap_of([1, 2])() == 2
    assert cap_of(deque(maxlen=8))() == 8
    assert cap_of(queue.Queue(maxsize=3))() == 3


def test_cap_of_unsupported():
    with pytest.raises(Failure) as exc_info:
        cap_of({"a": 1})()
    assert exc_info.value == fail_got(MSG_NOT_CAP_TYPE, {"a": 1})


# --- index ---


def test_index():
    assert index([10, 20, 30], 1)() == 20
    assert index("abc", 2)() == "c"
    assert index(b"abc", 0)() == ord("a")


@pytest.mark.parametrize("i", [-1, 3])
def test_index_out_of_range(i):
    with pytest.raises(Failure) as exc_info:
        index([1, 2, 3], i)()
    assert exc_info.value == Failure(MSG_INDEX_OUT_OF_RANGE)


def test_index_unsupported():
    with pytest.raises(Failure) as exc_info:
        index({"a": 1}, 0)()
    assert exc_info.value == fail_got(MSG_NOT_INDEX_TYPE, {"a": 1})


# --- float64 ---


@pytest.mark.parametrize("v, f", [(42, 42.0), (np.int16(41), 41.0), (1.5, 1.5), ("41", 41.0)])
def test_float64(v, f):
    got = float64(v)()
    assert isinstance(got, float)
    assert got == f


@pytest.mark.parametrize("v", ["abc", True, None, [1]])
def test_float64_unsupported(v):
    with pytest.raises(Failure) as exc_info:
        float64(v)()
    assert exc_info.value == fail_got(MSG_NOT_FLOAT64, v)


# --- shortcuts ---


def test_value_func_shortcuts_return_runnables(host):
    value("foo").deep_equal("foo")(host)
    value(41).less_than(42)(host)
    value([1, 2]).contains(2)(host)
    assert not host.failed

    value("foo").deep_equal("bar")(host)
    assert host.messages == ["not deep equal\ngot: str\n    'foo'\nwant: str\n    'bar'"]

"""Tests for failures, aggregate errors and chain matching."""

from subcheck.errors import Errors, PrefixError, is_in_chain, key_error, unwrap
from subcheck.failure import Failure, fail_expect, fail_got, fail_reject, failf
from subcheck.formatting import Formatting


class WrappingError(Exception):
    def __init__(self, msg, inner):
        super().__init__(msg)
        self.inner = inner

    def unwrap(self):
        return self.inner


# --- Failure ---


def test_failure_renders_non_empty_fields_in_order():
    f = Failure("prefix", got="g", expect="e", reject="r")
    assert str(f) == "prefix\ngot: g\nwant: e\ndon't want: r"


def test_failure_prefix_only():
    assert str(Failure("just this")) == "just this"


def test_fail_expect_formats_operands():
    f = fail_expect("not deep equal", "foo", "bar")
    assert f.prefix == "not deep equal"
    assert f.got == "str\n    'foo'"
    assert f.expect == "str\n    'bar'"
    assert f.reject == ""
    assert str(f) == "not deep equal\ngot: str\n    'foo'\nwant: str\n    'bar'"


def test_fail_reject_formats_operands():
    f = fail_reject("deep equal", 1, 1)
    assert f.got == "int\n    1"
    assert f.reject == "int\n    1"
    assert f.expect == ""


def test_fail_got_none():
    f = fail_got("missing value function", None)
    assert str(f) == "missing value function\ngot: None"


def test_failf():
    assert failf("got %d keys", 3) == Failure("got 3 keys")
    assert failf("100% literal") == Failure("100% literal")


def test_failures_with_same_fields_are_equal():
    a = fail_expect("p", [1, 2], {"a": 1})
    b = fail_expect("p", [1, 2], {"a": 1})
    assert a == b
    assert hash(a) == hash(b)
    assert a != fail_expect("p", [1, 2], {"a": 2})


def test_failure_formats_eagerly():
    got = [1, 2]
    f = fail_got("p", got)
    got.append(3)
    assert f == fail_got("p", [1, 2])


def test_failure_wraps_got_error():
    cause = ValueError("boom")
    f = fail_got("value function returns an error", cause)
    assert f.unwrap() is cause
    assert f.got == "ValueError\n    'boom'"


def test_failure_with_explicit_formatting():
    formatting = Formatting(type_formatter=lambda v: f"<{v}>")
    f = fail_expect("p", 1, 2, formatting=formatting)
    assert f.got == "<1>"
    assert f.expect == "<2>"


# --- PrefixError ---


def test_prefix_error():
    inner = Failure("inner")
    err = PrefixError("on len", inner)
    assert str(err) == "on len: inner"
    assert err.unwrap() is inner
    assert err == PrefixError("on len", Failure("inner"))
    assert err != PrefixError("on cap", Failure("inner"))


def test_prefix_error_newline():
    err = PrefixError("key", Failure("inner"), newline=True)
    assert str(err) == "key:\ninner"


def test_key_error():
    assert key_error("foo", Failure("x")) == PrefixError("key 'foo'", Failure("x"))
    assert str(key_error(1, Failure("x"))) == "key 1: x"


# --- Errors ---


def test_errors_rendering():
    errs = Errors([Failure("first"), Failure("second\ngot: x")])
    assert str(errs) == (
        "2 issue(s)\n"
        "issue #0:\n"
        "    first\n"
        "issue #1:\n"
        "    second\n"
        "    got: x"
    )


def test_errors_rendering_follows_indent():
    from subcheck.formatting import set_indent

    set_indent("  ")
    assert str(Errors([Failure("x")])) == "1 issue(s)\nissue #0:\n  x"


def test_errors_collection_protocol():
    errs = Errors()
    assert not errs
    errs.append(Failure("a"))
    errs.extend([Failure("b")])
    assert len(errs) == 2
    assert errs[1] == Failure("b")
    assert list(errs) == [Failure("a"), Failure("b")]


def test_errors_equality():
    assert Errors([Failure("a")]) == Errors([Failure("a")])
    assert Errors([Failure("a")]) != Errors([Failure("b")])
    assert Errors([Failure("a")]) != Errors([Failure("a"), Failure("a")])


# --- chain matching ---


def test_unwrap_prefers_method_over_cause():
    inner = ValueError("inner")
    outer = WrappingError("outer", inner)
    assert unwrap(outer) is inner

    try:
        try:
            raise KeyError("k")
        except KeyError as e:
            raise RuntimeError("wrapped") from e
    except RuntimeError as e:
        assert isinstance(unwrap(e), KeyError)


def test_is_in_chain_identity_and_equality():
    target = ValueError("target")
    assert is_in_chain(target, target)
    assert is_in_chain(PrefixError("x", target), target)
    assert is_in_chain(PrefixError("x", Failure("f")), Failure("f"))
    assert not is_in_chain(PrefixError("x", Failure("f")), Failure("g"))


def test_is_in_chain_class_target():
    err = PrefixError("x", WrappingError("w", KeyError("k")))
    assert is_in_chain(err, KeyError)
    assert is_in_chain(err, LookupError)
    assert not is_in_chain(err, TypeError)


def test_is_in_chain_follows_cause():
    cause = OSError("disk")
    err = RuntimeError("failed")
    err.__cause__ = cause
    assert is_in_chain(err, cause)


def test_is_in_chain_errors_members():
    target = Failure("b")
    errs = Errors([Failure("a"), PrefixError("x", target)])
    assert is_in_chain(errs, target)
    assert is_in_chain(errs, Errors([Failure("a"), PrefixError("x", Failure("b"))]))
    assert not is_in_chain(errs, Failure("c"))


def test_is_in_chain_none():
    assert is_in_chain(None, None)
    assert not is_in_chain(None, ValueError())
    assert not is_in_chain(ValueError(), None)


def test_is_in_chain_stops_on_loops():
    a = WrappingError("a", None)
    b = WrappingError("b", a)
    a.inner = b
    assert not is_in_chain(a, KeyError)

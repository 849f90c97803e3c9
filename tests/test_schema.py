"""Tests for the structural schema validator."""

from subcheck.check import anything, deep_equal, greater_than
from subcheck.errors import Errors, PrefixError, key_error
from subcheck.failure import fail_expect, fail_got, failf
from subcheck.schema import Fields, Schema
from subcheck.values import value


def _schema_error(*errs):
    return PrefixError("not matching schema", Errors(errs))


# --- end to end ---


def test_matching_map_passes():
    schema = Schema(
        fields=Fields({"foo": deep_equal("bar"), "bar": greater_than(41)}),
        required=["foo", "bar"],
    )
    assert schema.check(value({"foo": "bar", "bar": 42})) is None


def test_failing_field_is_reported_under_its_key():
    schema = Schema(
        fields=Fields({"foo": deep_equal("bar"), "bar": greater_than(100)}),
        required=["foo", "bar"],
    )
    err = schema.check(value({"foo": "bar", "bar": 42}))
    assert err == _schema_error(key_error("bar", fail_got("not greater than 100.000000", 42)))
    assert "key 'bar'" in str(err)


# --- required keys ---


def test_required_none_means_all_fields():
    schema = Schema(fields={"a": anything(), "b": anything()})
    assert schema.check(value({"a": 1, "b": 2})) is None
    err = schema.check(value({"a": 1}))
    assert err == _schema_error(failf("missing required keys: 'b'"))


def test_required_empty_means_nothing_required():
    schema = Schema(fields={"a": anything(), "b": anything()}, required=[])
    assert schema.check(value({})) is None
    assert schema.check(value({"b": 1})) is None


def test_explicit_required_keys():
    schema = Schema(fields={"a": anything()}, required=["a", "z"])
    err = schema.check(value({"a": 1}))
    assert err == _schema_error(failf("missing required keys: 'z'"))


def test_only_required_keys_pass_without_additional_fields():
    schema = Schema(fields=Fields({"a": deep_equal(1)}), required=["a"])
    assert schema.check(value({"a": 1})) is None


# --- additional keys ---


def test_additional_keys_rejected_by_default():
    schema = Schema(fields={"a": anything()})
    err = schema.check(value({"a": 1, "c": 3, "b": 2}))
    assert err == _schema_error(failf("got additional keys: 'b', 'c'"))


def test_additional_fields_check():
    schema = Schema(fields={"a": anything()}, additional_fields=greater_than(0))
    assert schema.check(value({"a": 1, "b": 2})) is None
    err = schema.check(value({"a": 1, "b": -1}))
    assert err == _schema_error(key_error("b", fail_got("not greater than 0.000000", -1)))


def test_additional_fields_anything():
    schema = Schema(fields={}, required=[], additional_fields=anything())
    assert schema.check(value({"x": 1, "y": 2})) is None


def test_field_without_check_uses_additional_fields():
    schema = Schema(fields={"a": None}, additional_fields=greater_than(0))
    assert schema.check(value({"a": 1})) is None
    err = schema.check(value({"a": -1}))
    assert err == _schema_error(key_error("a", fail_got("not greater than 0.000000", -1)))


def test_field_without_check_and_no_additional_fields_is_rejected():
    schema = Schema(fields={"a": None})
    err = schema.check(value({"a": 1}))
    assert err == _schema_error(failf("got additional keys: 'a'"))


# --- aggregation and ordering ---


def test_all_problems_are_aggregated_in_order():
    schema = Schema(fields={"a": deep_equal(1), "b": deep_equal(2), "c": anything()})
    err = schema.check(value({"b": 3, "a": 0, "z": 1}))
    assert err == _schema_error(
        key_error("a", fail_expect("not deep equal", 0, 1)),
        key_error("b", fail_expect("not deep equal", 3, 2)),
        failf("got additional keys: 'z'"),
        failf("missing required keys: 'c'"),
    )


def test_non_string_keys():
    schema = Schema(fields={1: deep_equal("one"), 2: deep_equal("two")})
    assert schema.check(value({1: "one", 2: "two"})) is None
    err = schema.check(value({1: "one", 2: "zwei"}))
    assert err == _schema_error(key_error(2, fail_expect("not deep equal", "zwei", "two")))


def test_keys_match_by_type():
    schema = Schema(fields={1: anything()})
    err = schema.check(value({True: "x"}))
    assert err == _schema_error(
        failf("got additional keys: True"),
        failf("missing required keys: 1"),
    )


def test_validation_is_idempotent():
    schema = Schema(fields={"a": deep_equal(1)})
    got = {"a": 2, "b": 1}
    assert schema.check(value(got)) == schema.check(value(got))


def test_not_a_map():
    schema = Schema(fields={"a": anything()})
    assert schema.check(value([1])) == fail_got("not a map", [1])


def test_production_error_is_returned():
    assert Schema().check(None) == fail_got("missing value function", None)


# --- Fields ---


def test_fields_ordered_keys():
    assert Fields({"b": anything(), "a": anything(), 10: anything()}).ordered_keys() == [10, "a", "b"]


def test_fields_is_a_check():
    fields = Fields({"a": deep_equal(1)})
    assert fields.check(value({"a": 1})) is None
    assert fields.check(value({})) == _schema_error(failf("missing required keys: 'a'"))


def test_fields_accept_plain_callables():
    fields = Fields({"a": lambda got: None if got == 1 else failf("bad")})
    assert fields.check(value({"a": 1})) is None
    assert fields.check(value({"a": 2})) == _schema_error(key_error("a", failf("bad")))


def test_validate_map_returns_check_func():
    cf = Schema(fields={"a": anything()}).validate_map()
    assert cf({"a": 1}) is None
    assert cf({}) == _schema_error(failf("missing required keys: 'a'"))


def test_value_func_validate_map(host):
    value({"a": 1}).validate_map(Schema(fields={"a": deep_equal(1)}))(host)
    assert not host.failed
    value({"a": 2}).validate_map(Schema(fields={"a": deep_equal(1)}))(host)
    assert host.messages[0].startswith("not matching schema: 1 issue(s)")

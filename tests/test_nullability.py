"""Tests for the nullability directive codec."""

import pytest

from typegen.codegen.core.nullability import (
    NullabilityFlags,
    format_nullability,
    is_valid_directive,
    parse_nullability,
)

N = NullabilityFlags


@pytest.mark.parametrize(
    "flags, expected",
    [
        (N.NONE, ""),
        (N.NULL, "null"),
        (N.UNDEFINED, "undefined"),
        (N.NULL | N.UNDEFINED, "null|undefined"),
        (N.OPTIONAL, ""),
        (N.UNDEFINED | N.OPTIONAL, "undefined"),
    ],
)
def test_to_flag_string(flags, expected):
    assert flags.to_flag_string() == expected
    assert format_nullability(flags) == expected


@pytest.mark.parametrize(
    "directive, expected",
    [
        ("", N.NONE),
        (None, N.NONE),
        ("asdff", N.NONE),
        ("gibberish", N.NONE),
        ("null", N.NULL),
        ("undefined", N.UNDEFINED),
        ("optional", N.OPTIONAL),
        ("null|undefined", N.NULL | N.UNDEFINED),
        ("undefined|null", N.NULL | N.UNDEFINED),
        ("null|undefined|optional", N.NULL | N.UNDEFINED | N.OPTIONAL),
        ("optional|undefined|null", N.NULL | N.UNDEFINED | N.OPTIONAL),
        ("undefined|optional|null", N.NULL | N.UNDEFINED | N.OPTIONAL),
        ("undefined|null|sdfg", N.NULL | N.UNDEFINED),
        ("undefined|sdfg", N.UNDEFINED),
        (" NULL | Undefined ", N.NULL | N.UNDEFINED),
        ("null|null", N.NULL),
    ],
)
def test_parse(directive, expected):
    assert NullabilityFlags.parse(directive) == expected
    assert parse_nullability(directive) == expected


def test_token_order_does_not_matter():
    assert N.parse("undefined|null") == N.parse("null|undefined")
    assert N.parse("undefined|null").to_flag_string() == "null|undefined"


def test_optional_only_affects_marker():
    flags = N.parse("optional")
    assert flags.is_optional
    assert flags.to_flag_string() == ""
    assert flags.union_members() == []


def test_union_members():
    assert N.parse("undefined|null|optional").union_members() == ["null", "undefined"]


def test_is_valid_directive():
    assert is_valid_directive("null|Optional")
    assert not is_valid_directive("null|maybe")

"""Tests for type-expression reconstruction."""

from __future__ import annotations

import pytest

from gojagen.errors import UnsupportedFeatureError
from gojagen.go_parser import GoPackageParser
from gojagen.imports import ImportResolver
from gojagen.models import (
    Field,
    FuncType,
    Literal,
    MapType,
    Named,
    Pointer,
    Slice,
    Unsupported,
    Variadic,
)
from gojagen.types import TypeFormatter, check_supported


@pytest.fixture
def formatter(resolver: ImportResolver) -> TypeFormatter:
    return TypeFormatter("widget", resolver)


def test_exported_name_is_qualified_with_package(formatter: TypeFormatter) -> None:
    assert formatter.format(Named("Thing")) == "widget.Thing"
    assert formatter.format(Pointer(Named("Thing"))) == "*widget.Thing"


def test_unexported_and_qualified_names_are_unchanged(formatter: TypeFormatter) -> None:
    assert formatter.format(Named("error")) == "error"
    assert formatter.format(Named("thing")) == "thing"
    assert formatter.format(Named("Decoder", qualifier="json")) == "json.Decoder"


def test_composite_types(formatter: TypeFormatter) -> None:
    assert formatter.format(Slice(Named("byte"))) == "[]byte"
    assert formatter.format(Slice(Named("int"), Literal("4"))) == "[4]int"
    assert formatter.format(Slice(Named("byte"), Named("Size"))) == "[widget.Size]byte"
    assert formatter.format(MapType(Named("string"), Slice(Named("Thing")))) == (
        "map[string][]widget.Thing"
    )
    assert formatter.format(Variadic(Named("any"))) == "any"
    assert formatter.format(Literal("interface{}")) == "interface{}"


def test_function_types(formatter: TypeFormatter) -> None:
    callback = FuncType(
        params=(Field(("a", "b"), Named("int")),),
        results=(Field((), Named("int")), Field((), Named("error"))),
    )
    assert formatter.format(callback) == "func(a, b int) (int, error)"
    assert formatter.format(FuncType()) == "func()"
    assert formatter.format(FuncType(results=(Field((), Named("bool")),))) == "func() bool"


def test_results_are_parenthesized_when_named(formatter: TypeFormatter) -> None:
    assert formatter.format_results(()) == ""
    assert formatter.format_results((Field((), Named("error")),)) == "error"
    assert formatter.format_results((Field(("err",), Named("error")),)) == "(err error)"
    assert formatter.format_results(
        (Field(("n",), Named("int")), Field(("err",), Named("error")))
    ) == "(n int, err error)"


def test_field_names_only(formatter: TypeFormatter) -> None:
    fields = (Field(("a", "b"), Named("int")), Field(("rest",), Variadic(Named("string"))))
    assert formatter.format_fields(fields) == "a, b int, rest string"
    assert formatter.format_fields(fields, include_types=False) == "a, b, rest"


def test_qualifiers_are_registered(resolver: ImportResolver, formatter: TypeFormatter) -> None:
    resolver.learn(["encoding/json"])
    formatter.format(MapType(Named("string"), Pointer(Named("Decoder", qualifier="json"))))
    formatter.format(Named("Thing"))
    assert resolver.imports == ("encoding/json", "example.com/lib/widget")


def test_builtin_names_register_nothing(resolver: ImportResolver, formatter: TypeFormatter) -> None:
    formatter.format(FuncType(params=(Field(("s",), Slice(Named("string"))),)))
    assert resolver.imports == ()


def test_channel_type_raises_typed_error(formatter: TypeFormatter) -> None:
    with pytest.raises(UnsupportedFeatureError) as excinfo:
        formatter.format(Slice(Unsupported("channel", "chan int")))
    assert excinfo.value.kind == "channel"


def test_check_supported_finds_nested_channel() -> None:
    nested = FuncType(params=(Field(("c",), Unsupported("channel", "<-chan int")),))
    with pytest.raises(UnsupportedFeatureError):
        check_supported([Field(("fn",), nested)])
    check_supported([Field(("m",), MapType(Named("string"), Named("int")))])


@pytest.mark.parametrize(
    "text",
    [
        "int",
        "*json.Decoder",
        "[]*widget.Thing",
        "[16]byte",
        "[sha256.Size]byte",
        "map[string][]int",
        "**[]map[int]string",
    ],
)
def test_rendering_round_trips_through_parser(text: str, formatter: TypeFormatter) -> None:
    parser = GoPackageParser()
    parsed = parser.parse_type(text)
    rendered = formatter.format(parsed)
    assert rendered == text
    assert parser.parse_type(rendered) == parsed

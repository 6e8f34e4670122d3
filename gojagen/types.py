"""Reconstruction of Go type-expression text from parsed type nodes."""

from __future__ import annotations

from typing import Iterable, Sequence

from .errors import UnsupportedFeatureError
from .imports import ImportResolver
from .models import (
    Field,
    FuncType,
    Literal,
    MapType,
    Named,
    Pointer,
    Slice,
    TypeExpression,
    Unsupported,
    Variadic,
    is_exported,
    iter_type_nodes,
)


class TypeFormatter:
    """Renders type expressions as they must appear outside the bridged package.

    Exported names declared in the bridged package itself are qualified with
    the package name, and every qualifier that ends up in the text is
    registered with the resolver.
    """

    def __init__(self, package_name: str, resolver: ImportResolver) -> None:
        self.package_name = package_name
        self.resolver = resolver

    def format(self, expr: TypeExpression | None) -> str:
        if expr is None:
            return ""
        if isinstance(expr, Named):
            return self._format_named(expr)
        if isinstance(expr, Pointer):
            return f"*{self.format(expr.inner)}"
        if isinstance(expr, Slice):
            return f"[{self.format(expr.length)}]{self.format(expr.inner)}"
        if isinstance(expr, Variadic):
            return self.format(expr.inner)
        if isinstance(expr, FuncType):
            results = self.format_results(expr.results)
            signature = f"func({self.format_fields(expr.params)})"
            return f"{signature} {results}" if results else signature
        if isinstance(expr, MapType):
            return f"map[{self.format(expr.key)}]{self.format(expr.value)}"
        if isinstance(expr, Literal):
            return expr.text
        if isinstance(expr, Unsupported):
            raise UnsupportedFeatureError(expr.kind, expr.text)
        raise TypeError(f"unknown type expression {expr!r}")

    def format_fields(
        self, fields: Sequence[Field], include_types: bool = True, keep_variadic: bool = False
    ) -> str:
        """Render field groups as ``a, b int, c string`` (or just names).

        With ``keep_variadic`` a trailing ``...T`` group keeps its marker.
        """
        parts = []
        for group in fields:
            names = ", ".join(group.names)
            if not include_types:
                if names:
                    parts.append(names)
                continue
            type_text = self.format(group.type)
            if keep_variadic and isinstance(group.type, Variadic):
                type_text = f"...{type_text}"
            parts.append(f"{names} {type_text}" if names else type_text)
        return ", ".join(parts)

    def format_results(self, fields: Sequence[Field]) -> str:
        if not fields:
            return ""
        text = self.format_fields(fields)
        if len(fields) == 1 and not fields[0].names:
            return text
        return f"({text})"

    def _format_named(self, expr: Named) -> str:
        qualifier = expr.qualifier
        if qualifier is None:
            if not is_exported(expr.identifier):
                return expr.identifier
            qualifier = self.package_name
        self.resolver.register(qualifier)
        return f"{qualifier}.{expr.identifier}"


def check_supported(fields: Iterable[Field]) -> None:
    """Raise for the first unsupported node without rendering anything."""
    for group in fields:
        for node in iter_type_nodes(group.type):
            if isinstance(node, Unsupported):
                raise UnsupportedFeatureError(node.kind, node.text)


__all__ = ["TypeFormatter", "check_supported"]

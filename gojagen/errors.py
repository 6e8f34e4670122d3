"""Fault types raised while generating a bridge package."""

from __future__ import annotations


class GenerationError(RuntimeError):
    """Base class for faults that abort a generation run."""


class SourceParseError(GenerationError):
    """Raised when the Go package directory cannot be read or parsed."""


class StructuralError(GenerationError):
    """Raised when a declaration has a shape the generator cannot bridge."""

    def __init__(self, message: str, *, declaration: str, file: str | None = None) -> None:
        location = f" ({file})" if file else ""
        super().__init__(f"{message} for {declaration}{location}")
        self.declaration = declaration
        self.file = file


class UnsupportedFeatureError(GenerationError):
    """Raised when a type expression has no textual form in the bridge."""

    def __init__(self, kind: str, text: str = "", *, declaration: str | None = None) -> None:
        detail = f" {text!r}" if text else ""
        owner = f" in {declaration}" if declaration else ""
        super().__init__(f"unsupported {kind} type{detail}{owner}")
        self.kind = kind
        self.text = text
        self.declaration = declaration


__all__ = [
    "GenerationError",
    "SourceParseError",
    "StructuralError",
    "UnsupportedFeatureError",
]

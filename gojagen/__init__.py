"""Generate goja bridge packages from the exported surface of Go packages."""

from .errors import GenerationError, SourceParseError, StructuralError, UnsupportedFeatureError
from .pipeline import BridgeGenerator, GenerateOptions, GenerationResult

__all__ = [
    "BridgeGenerator",
    "GenerateOptions",
    "GenerationError",
    "GenerationResult",
    "SourceParseError",
    "StructuralError",
    "UnsupportedFeatureError",
]

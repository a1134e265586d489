"""
Standardized Error Handling for codegraph-tiers

Provides hierarchical exception classes with error codes and context.
Every error is fatal for the module being compiled: no partial output.
"""

from typing import Any


class TierCompilerError(Exception):
    """Base exception for all tier compiler errors.

    Includes error code for programmatic handling and context for debugging.

    Example:
        raise TierCompilerError(
            code="STRUCTURAL_ERROR",
            message="Module must open with a tier marker",
            offset=0,
        )
    """

    def __init__(self, code: str, message: str, **context: Any) -> None:
        self.code = code
        self.message = message
        self.context = context
        super().__init__(f"[{code}] {message}")

    def __repr__(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r}, {ctx_str})"


# ==============================================================================
# Marker Errors
# ==============================================================================


class StructuralError(TierCompilerError):
    """Module layout cannot be partitioned into tier blocks."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(code="STRUCTURAL_ERROR", message=message, **context)


class TierPlacementError(TierCompilerError):
    """Tier marker inside a non-async function."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(code="TIER_PLACEMENT_ERROR", message=message, **context)


class MarkerShapeError(TierCompilerError):
    """Marker payload is not a list of known tier names."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(code="MARKER_SHAPE_ERROR", message=message, **context)


# ==============================================================================
# Provider Errors
# ==============================================================================


class SourceParseError(TierCompilerError):
    """Source text could not be parsed without syntax errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(code="SOURCE_PARSE_ERROR", message=message, **context)


class ConfigurationError(TierCompilerError):
    """Error in compiler configuration (e.g. missing grammar)."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(code="CONFIGURATION_ERROR", message=message, **context)


class ComponentError(TierCompilerError):
    """Component document flagged for compilation has no usable script."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(code="COMPONENT_ERROR", message=message, **context)


__all__ = [
    "TierCompilerError",
    "StructuralError",
    "TierPlacementError",
    "MarkerShapeError",
    "SourceParseError",
    "ConfigurationError",
    "ComponentError",
]

"""
CodeGraph Tiers

Compiler that splits a tier-annotated JavaScript module into server
fragments with the cross-tier marshalling already inserted.

Quick Start:
    >>> from codegraph_tiers import compile_source
    >>> result = compile_source("on: client\\nlet x = 1\\non: server\\nconsole.log(x)\\n")
    >>> result.to_output()["server"][0]["sessionRequired"]
    False
"""

__version__ = "0.1.0"  # Keep in sync with pyproject.toml

from codegraph_tiers.compiler import TierCompiler, compile_source
from codegraph_tiers.config import TierSettings, get_settings
from codegraph_tiers.errors import (
    ComponentError,
    ConfigurationError,
    MarkerShapeError,
    SourceParseError,
    StructuralError,
    TierCompilerError,
    TierPlacementError,
)
from codegraph_tiers.integration import ComponentLoader
from codegraph_tiers.models import BlockSummary, CompilationResult, Fragment, Tier, TierBlock, TierMarker

__all__ = [
    "TierCompiler",
    "compile_source",
    "TierSettings",
    "get_settings",
    "ComponentLoader",
    "Tier",
    "TierMarker",
    "TierBlock",
    "Fragment",
    "BlockSummary",
    "CompilationResult",
    "TierCompilerError",
    "StructuralError",
    "TierPlacementError",
    "MarkerShapeError",
    "SourceParseError",
    "ConfigurationError",
    "ComponentError",
]

"""
Build-tool integration

Exported Classes:
- ComponentLoader: compiles flagged component documents, passes others through
"""

from .component_loader import ComponentLoader, ComponentResult, ScriptSection, extract_script

__all__ = [
    "ComponentLoader",
    "ComponentResult",
    "ScriptSection",
    "extract_script",
]

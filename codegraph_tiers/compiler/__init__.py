"""Tier Compiler.

Complete compilation pipeline:
    markers → blocks → classified blocks → fragments

Modules:
    - scanner: tier marker discovery and validation
    - segmenter: blocks and position → block resolution
    - classifier: tier-crossing detection per reference
    - generator: server fragment rendering
    - compiler: TierCompiler orchestration
"""

from codegraph_tiers.compiler.classifier import classify, classify_reference
from codegraph_tiers.compiler.compiler import TierCompiler, compile_source
from codegraph_tiers.compiler.generator import generate_fragments, render_block
from codegraph_tiers.compiler.scanner import is_marker, marker_identifiers, scan_markers
from codegraph_tiers.compiler.segmenter import BlockResolver, segment_blocks

__all__ = [
    "TierCompiler",
    "compile_source",
    "scan_markers",
    "is_marker",
    "marker_identifiers",
    "segment_blocks",
    "BlockResolver",
    "classify",
    "classify_reference",
    "generate_fragments",
    "render_block",
]

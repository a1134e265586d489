"""TierCompiler - module → server fragments.

Pipeline:
    text → AST/scope graph → markers → blocks → classified blocks → fragments

Each ``compile`` call builds fresh marker, block and reference state;
nothing is carried over between modules.
"""

import time
from pathlib import Path

from codegraph_tiers.compiler.classifier import classify
from codegraph_tiers.compiler.generator import generate_fragments
from codegraph_tiers.compiler.scanner import scan_markers
from codegraph_tiers.compiler.segmenter import BlockResolver, segment_blocks
from codegraph_tiers.config import TierSettings, get_settings
from codegraph_tiers.logging import LogPerformance, get_logger
from codegraph_tiers.models import BlockSummary, CompilationResult
from codegraph_tiers.syntax.ast_tree import AstTree
from codegraph_tiers.syntax.scope import analyze_scopes
from codegraph_tiers.syntax.source_file import SourceFile

logger = get_logger(__name__)


class TierCompiler:
    """Tier compiler.

    Usage:
        >>> compiler = TierCompiler()
        >>> result = compiler.compile("on: client\\nlet x = 1\\non: server\\nconsole.log(x)\\n")
        >>> result.server[0].input_names
        ['x']
    """

    def __init__(self, settings: TierSettings | None = None) -> None:
        self.settings = settings or get_settings()
        self.stats = {
            "markers": 0,
            "blocks": 0,
            "fragments": 0,
            "references": 0,
            "compilation_time_ms": 0.0,
        }

    def compile(self, text: str, file_path: str = "<memory>") -> CompilationResult:
        """Compile module source text.

        Raises:
            StructuralError, TierPlacementError, MarkerShapeError: Invalid markers
            SourceParseError: Source has syntax errors
        """
        source = SourceFile.from_content(file_path, text, language=self.settings.language)
        return self.compile_source_file(source)

    def compile_file(self, path: str | Path) -> CompilationResult:
        """Compile a module read from disk."""
        source = SourceFile.from_file(path, language=self.settings.language)
        return self.compile_source_file(source)

    def compile_source_file(self, source: SourceFile) -> CompilationResult:
        start_time = time.perf_counter()

        with LogPerformance(logger, "tier_compile", file_path=source.file_path) as perf:
            program = AstTree.parse(source).to_syntax()
            scope_graph = analyze_scopes(program)

            markers = scan_markers(program, label=self.settings.marker_label)
            blocks = segment_blocks(markers, source.byte_size)

            tier_identifiers = [identifier for marker in markers for identifier in marker.identifiers]
            classified = classify(
                scope_graph.resolved_references(),
                BlockResolver(blocks),
                excluded=tier_identifiers,
            )

            for block in blocks:
                block.freeze()

            fragments = generate_fragments(blocks, source, self.settings.channels)
            perf.update(
                markers=len(markers),
                blocks=len(blocks),
                fragments=len(fragments),
                references=classified,
                uses=len(scope_graph),
            )

        self.stats = {
            "markers": len(markers),
            "blocks": len(blocks),
            "fragments": len(fragments),
            "references": classified,
            "compilation_time_ms": (time.perf_counter() - start_time) * 1000,
        }

        return CompilationResult(
            server=fragments,
            blocks=[BlockSummary.from_block(block) for block in blocks],
        )


def compile_source(text: str, settings: TierSettings | None = None, file_path: str = "<memory>") -> CompilationResult:
    """Compile one module with a throwaway compiler."""
    return TierCompiler(settings).compile(text, file_path=file_path)


__all__ = ["TierCompiler", "compile_source"]

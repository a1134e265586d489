"""
Component document loader

Build-tool entry point. Given a component document (e.g. a Vue single
file component) and its resource path, compiles the embedded ``<script>``
only when the resource is flagged for tier compilation:

    src/App.vue?tiers=true   → compiled
    src/App.vue              → passed through unchanged
"""

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import TYPE_CHECKING
from urllib.parse import parse_qs

from codegraph_tiers.compiler.compiler import TierCompiler
from codegraph_tiers.config import TierSettings, get_settings
from codegraph_tiers.errors import ComponentError
from codegraph_tiers.logging import get_logger
from codegraph_tiers.models import CompilationResult
from codegraph_tiers.syntax.ast_tree import AstTree
from codegraph_tiers.syntax.source_file import SourceFile

if TYPE_CHECKING:
    from tree_sitter import Node as TSNode

logger = get_logger(__name__)

TRUTHY_FLAG_VALUES = frozenset(["", "1", "true", "yes"])


@dataclass(frozen=True)
class ScriptSection:
    """Raw script text and where it sits in the document (byte offsets)."""

    text: str
    start: int
    end: int


@dataclass(frozen=True)
class ComponentResult:
    """
    Loader outcome.

    Attributes:
        document: The original document, always unchanged
        passthrough: True when the document was not compiled
        script: Extracted script section (compiled documents only)
        result: Compiler output (compiled documents only)
    """

    document: str
    passthrough: bool
    script: ScriptSection | None = None
    result: CompilationResult | None = None


class ComponentLoader:
    """
    Component document loader.

    Usage:
        >>> loader = ComponentLoader()
        >>> outcome = loader.load(document, "src/Todo.vue?tiers=true")
        >>> outcome.result.to_output()
    """

    def __init__(self, settings: TierSettings | None = None, compiler: TierCompiler | None = None):
        self.settings = settings or get_settings()
        self.compiler = compiler or TierCompiler(self.settings)

    def should_compile(self, resource_path: str) -> bool:
        """Resource has a component extension and carries the tier flag."""
        path, _, query = resource_path.partition("?")
        extensions = {ext.lower() for ext in self.settings.component.extensions}
        if PurePosixPath(path).suffix.lower() not in extensions:
            return False

        values = parse_qs(query, keep_blank_values=True).get(self.settings.component.flag)
        if not values:
            return False
        return values[-1].lower() in TRUTHY_FLAG_VALUES

    def load(self, document: str, resource_path: str) -> ComponentResult:
        """
        Compile the document's script when flagged, otherwise pass it through.

        Raises:
            ComponentError: Flagged document without a <script> element
            TierCompilerError: Any compilation failure of the script
        """
        if not self.should_compile(resource_path):
            logger.debug("component_passthrough", resource_path=resource_path)
            return ComponentResult(document=document, passthrough=True)

        script = extract_script(document, resource_path)
        result = self.compiler.compile(script.text, file_path=resource_path)
        logger.info(
            "component_compiled",
            resource_path=resource_path,
            fragments=len(result.server),
        )
        return ComponentResult(document=document, passthrough=False, script=script, result=result)


def extract_script(document: str, resource_path: str = "<component>") -> ScriptSection:
    """
    Locate the first ``<script>`` element of a component document.

    Raises:
        ComponentError: No script element present
    """
    source = SourceFile.from_content(resource_path, document, language="html")
    ast_tree = AstTree.parse(source, allow_errors=True)

    script_node = _find_script_element(ast_tree.root)
    if script_node is None:
        raise ComponentError(f"No <script> element in {resource_path}", resource_path=resource_path)

    raw_text = next((child for child in script_node.children if child.type == "raw_text"), None)
    if raw_text is None:
        # <script></script>: empty script positioned after the start tag
        start_tag = script_node.children[0]
        return ScriptSection(text="", start=start_tag.end_byte, end=start_tag.end_byte)

    return ScriptSection(
        text=ast_tree.get_text(raw_text),
        start=raw_text.start_byte,
        end=raw_text.end_byte,
    )


def _find_script_element(root: "TSNode") -> "TSNode | None":
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "script_element":
            return node
        stack.extend(reversed(node.children))
    return None


__all__ = [
    "ComponentLoader",
    "ComponentResult",
    "ScriptSection",
    "extract_script",
]

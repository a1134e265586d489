"""
AST Tree wrapper for Tree-sitter

Parses module text and converts the concrete tree into the closed
node variants from ``codegraph_tiers.syntax.nodes``.
"""

from tree_sitter import Node as TSNode
from tree_sitter import Tree as TSTree

from codegraph_tiers.errors import ConfigurationError, SourceParseError
from codegraph_tiers.logging import get_logger
from codegraph_tiers.syntax.nodes import Block, FunctionLike, Identifier, LabeledStatement, Other, SyntaxNode
from codegraph_tiers.syntax.parser_registry import get_registry
from codegraph_tiers.syntax.source_file import SourceFile

logger = get_logger(__name__)

FUNCTION_KINDS = frozenset(
    [
        "function_declaration",
        "function_expression",
        "function",
        "generator_function_declaration",
        "generator_function",
        "arrow_function",
        "method_definition",
    ]
)

BLOCK_KINDS = frozenset(["program", "statement_block", "class_body", "switch_body"])

IDENTIFIER_KINDS = frozenset(
    [
        "identifier",
        "shorthand_property_identifier",
        "shorthand_property_identifier_pattern",
    ]
)

SKIPPED_KINDS = frozenset(["comment", "html_comment"])

# Error nodes reported in a SourceParseError
MAX_REPORTED_ERRORS = 5


class _Frame:
    """Conversion frame for one concrete node (iterative post-order)."""

    __slots__ = ("node", "field", "pending", "converted", "keywords")

    def __init__(self, node: TSNode, field: str | None):
        self.node = node
        self.field = field
        self.pending: list[tuple[TSNode, str | None]] = []
        self.converted: list[SyntaxNode] = []
        keywords: set[str] = set()

        cursor = node.walk()
        if cursor.goto_first_child():
            while True:
                child = cursor.node
                if child.is_named:
                    if child.type not in SKIPPED_KINDS:
                        self.pending.append((child, cursor.field_name))
                elif child.type.isalpha():
                    keywords.add(child.type)
                if not cursor.goto_next_sibling():
                    break

        self.pending.reverse()
        self.keywords = frozenset(keywords)


class AstTree:
    """
    Wrapper for Tree-sitter AST.

    Provides error inspection and conversion to syntax node variants.
    """

    def __init__(self, source: SourceFile, tree: TSTree):
        self.source = source
        self.tree = tree
        self._root = tree.root_node

    @classmethod
    def parse(cls, source: SourceFile, allow_errors: bool = False) -> "AstTree":
        """
        Parse source file into AST.

        Args:
            source: Source file to parse
            allow_errors: Keep trees containing ERROR/missing nodes

        Returns:
            AstTree instance

        Raises:
            ConfigurationError: If the grammar is not available
            SourceParseError: If the source has syntax errors
        """
        parser = get_registry().get_parser(source.language)
        if parser is None:
            raise ConfigurationError(f"Language not supported: {source.language}", language=source.language)

        tree = parser.parse(source.data)
        if tree is None:
            raise SourceParseError(f"Failed to parse file: {source.file_path}", file_path=source.file_path)

        ast_tree = cls(source, tree)
        if not allow_errors and ast_tree.has_error():
            offsets = [node.start_byte for node in ast_tree.get_errors()[:MAX_REPORTED_ERRORS]]
            logger.warning("syntax_errors_found", file_path=source.file_path, offsets=offsets)
            raise SourceParseError(
                f"Syntax error in {source.file_path} at byte offset {offsets[0]}",
                file_path=source.file_path,
                offsets=offsets,
            )
        return ast_tree

    @property
    def root(self) -> TSNode:
        return self._root

    def get_text(self, node: TSNode) -> str:
        return self.source.slice(node.start_byte, node.end_byte)

    def has_error(self, node: TSNode | None = None) -> bool:
        """Check if AST has any error or missing nodes."""
        if node is None:
            node = self._root
        return node.has_error

    def get_errors(self, node: TSNode | None = None) -> list[TSNode]:
        """
        Get all error nodes.

        Args:
            node: Starting node (defaults to root)

        Returns:
            List of error nodes, in source order
        """
        if node is None:
            node = self._root

        errors = []
        stack = [node]
        while stack:
            current = stack.pop()
            if current.type == "ERROR" or current.is_missing:
                errors.append(current)
            stack.extend(reversed(current.children))
        return errors

    def to_syntax(self) -> SyntaxNode:
        """
        Convert the concrete tree to syntax node variants.

        Anonymous tokens are dropped, except word tokens (``async``, ``var``,
        ``let`` ...) which are kept in each node's ``keywords``. Comments are
        dropped.
        """
        stack = [_Frame(self._root, None)]

        while True:
            frame = stack[-1]
            if frame.pending:
                child, field = frame.pending.pop()
                stack.append(_Frame(child, field))
                continue

            stack.pop()
            node = self._make_node(frame)
            if not stack:
                return node
            stack[-1].converted.append(node)

    def _make_node(self, frame: _Frame) -> SyntaxNode:
        ts_node = frame.node
        kind = ts_node.type
        common = {
            "kind": kind,
            "start": ts_node.start_byte,
            "end": ts_node.end_byte,
            "field": frame.field,
            "children": tuple(frame.converted),
            "keywords": frame.keywords,
        }

        if kind == "labeled_statement":
            label_node = ts_node.child_by_field_name("label")
            label = self.get_text(label_node) if label_node is not None else ""
            return LabeledStatement(label=label, **common)
        if kind in FUNCTION_KINDS:
            return FunctionLike(is_async="async" in frame.keywords, **common)
        if kind in BLOCK_KINDS:
            return Block(**common)
        if kind in IDENTIFIER_KINDS:
            return Identifier(name=self.get_text(ts_node), **common)
        return Other(**common)

    def __repr__(self) -> str:
        return f"AstTree(file={self.source.file_path}, language={self.source.language})"

"""
Foundation: Syntax Layer

Tree-sitter based parsing and lexical scope resolution.

Components:
- parser_registry: grammar management
- source_file: source text with byte-offset slicing
- ast_tree: tree-sitter wrapper, conversion to node variants
- nodes: closed set of syntax node variants and traversal
- scope: identifier use → declaration resolution
"""

from codegraph_tiers.syntax.ast_tree import AstTree
from codegraph_tiers.syntax.nodes import (
    SKIP,
    Block,
    FunctionLike,
    Identifier,
    LabeledStatement,
    Other,
    SyntaxNode,
    traverse,
)
from codegraph_tiers.syntax.parser_registry import ParserRegistry, get_registry
from codegraph_tiers.syntax.scope import Reference, ScopeGraph, analyze_scopes
from codegraph_tiers.syntax.source_file import SourceFile

__all__ = [
    "AstTree",
    "ParserRegistry",
    "get_registry",
    "SourceFile",
    "SyntaxNode",
    "LabeledStatement",
    "FunctionLike",
    "Block",
    "Identifier",
    "Other",
    "SKIP",
    "traverse",
    "Reference",
    "ScopeGraph",
    "analyze_scopes",
]

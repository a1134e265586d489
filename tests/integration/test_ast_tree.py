"""
AST Tree Tests

Tests for tree-sitter parsing and conversion to node variants.
"""

import pytest

from codegraph_tiers.errors import ConfigurationError, SourceParseError
from codegraph_tiers.syntax import AstTree, Block, FunctionLike, Identifier, LabeledStatement, SourceFile


def convert(code: str):
    return AstTree.parse(SourceFile.from_content("t.js", code)).to_syntax()


class TestConversion:
    """Test node variants produced from real source."""

    def test_program_root(self):
        """Test the root is the program block spanning the module."""
        code = "on: server\nrun()\n"

        root = convert(code)

        assert isinstance(root, Block)
        assert root.kind == "program"
        assert (root.start, root.end) == (0, len(code))

    def test_labeled_statement(self):
        """Test label name and body."""
        root = convert("on: server\n")

        statement = root.children[0]
        assert isinstance(statement, LabeledStatement)
        assert statement.label == "on"
        assert statement.body is not None
        assert isinstance(statement.body.children[0], Identifier)

    @pytest.mark.parametrize(
        ("code", "is_async"),
        [
            ("async function f() {}\n", True),
            ("function f() {}\n", False),
            ("const g = async () => {}\n", True),
        ],
    )
    def test_function_async_flag(self, code, is_async):
        """Test async keyword detection."""
        function = next(node for node in convert(code).iter_tree() if isinstance(node, FunctionLike))

        assert function.is_async is is_async
        assert function.body is not None

    def test_keywords_and_fields(self):
        """Test keyword tokens and field names are kept."""
        declaration = convert("let x = 1\n").children[0]

        assert "let" in declaration.keywords
        declarator = declaration.children[0]
        assert declarator.child("name").name == "x"

    def test_comments_dropped(self):
        """Test comments produce no nodes."""
        root = convert("// note\non: client\n")

        assert [child.kind for child in root.children] == ["labeled_statement"]


class TestParse:
    """Test parse failures."""

    def test_syntax_error(self):
        """Test error nodes raise with offsets."""
        with pytest.raises(SourceParseError) as exc_info:
            AstTree.parse(SourceFile.from_content("bad.js", "let = (\n"))

        assert exc_info.value.context["offsets"]

    def test_errors_allowed(self):
        """Test error-tolerant parsing keeps the tree."""
        tree = AstTree.parse(SourceFile.from_content("bad.js", "let = (\n"), allow_errors=True)

        assert tree.has_error()
        assert tree.get_errors()

    def test_unknown_language(self):
        """Test unregistered grammar."""
        with pytest.raises(ConfigurationError):
            AstTree.parse(SourceFile.from_content("x.py", "x = 1\n", language="python"))

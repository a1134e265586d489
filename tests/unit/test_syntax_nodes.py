"""
Syntax Node Tests

Tests for node variants and enter/leave traversal.
"""

from codegraph_tiers.syntax.nodes import SKIP, Block, Other, traverse
from tests.helpers.syntax_builders import function, ident, marker, program, statement


class TestNodeVariants:
    """Test node variant helpers."""

    def test_child_by_field(self):
        """Test field lookup on children."""
        node = marker(0, "server")

        assert node.label == "on"
        assert node.body is not None
        assert node.body.kind == "expression_statement"
        assert node.child("missing") is None

    def test_nodes_compare_by_identity(self):
        """Test equal-looking nodes stay distinct dict keys."""
        first = ident("x", 4)
        second = ident("x", 4)

        assert first != second
        assert len({first: 1, second: 2}) == 2

    def test_iter_tree_is_preorder(self):
        """Test pre-order iteration."""
        inner = ident("a", 2)
        stmt = statement(0, 5, inner)
        root = Block(kind="program", start=0, end=5, children=(stmt,))

        assert list(root.iter_tree()) == [root, stmt, inner]

    def test_repr_mentions_offsets(self):
        """Test repr is compact."""
        assert repr(ident("x", 3)) == "Identifier(name='x', start=3, end=4)"
        assert "start=0" in repr(Other(kind="number", start=0, end=1))


class TestTraverse:
    """Test enter/leave traversal."""

    def test_enter_leave_order(self):
        """Test enter is pre-order and leave is post-order."""
        a = ident("a", 1)
        b = ident("b", 3)
        stmt = statement(0, 5, a, b)
        root = program(5, stmt)

        events = []
        traverse(
            root,
            enter=lambda node, ancestors: events.append(("enter", node.kind, node.start)),
            leave=lambda node, ancestors: events.append(("leave", node.kind, node.start)),
        )

        assert events == [
            ("enter", "program", 0),
            ("enter", "expression_statement", 0),
            ("enter", "identifier", 1),
            ("leave", "identifier", 1),
            ("enter", "identifier", 3),
            ("leave", "identifier", 3),
            ("leave", "expression_statement", 0),
            ("leave", "program", 0),
        ]

    def test_skip_prevents_descent(self):
        """Test SKIP keeps children unvisited but still leaves the node."""
        m = marker(0, "server")
        root = program(m.end, m)

        entered = []
        left = []

        def enter(node, ancestors):
            entered.append(node)
            if node is m:
                return SKIP
            return None

        traverse(root, enter=enter, leave=lambda node, ancestors: left.append(node))

        assert entered == [root, m]
        assert left == [m, root]

    def test_ancestors_are_outermost_first(self):
        """Test ancestor tuple passed to callbacks."""
        inner = marker(20, "server")
        fn = function(10, 40, inner, is_async=True)
        root = program(40, fn)

        seen = {}
        traverse(root, enter=lambda node, ancestors: seen.__setitem__(node, ancestors))

        assert seen[inner] == (root, fn, fn.body)

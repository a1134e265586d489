"""
Syntax node variants

A closed set of node shapes the compiler understands. Every node carries
byte offsets ``[start, end)`` into the UTF-8 encoded source, the grammar
``kind`` it came from, and the ``field`` name it occupies in its parent.

Variants:
- LabeledStatement: ``label: body`` statements (tier markers are these)
- FunctionLike: functions, arrows, methods (with their async flag)
- Block: program, statement blocks, class and switch bodies
- Identifier: identifiers that can declare or read a binding
- Other: everything else

Nodes compare by identity so they can key dicts and sets.
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field as dc_field


@dataclass(frozen=True, eq=False)
class SyntaxNode:
    kind: str
    start: int
    end: int
    field: str | None = None
    children: tuple["SyntaxNode", ...] = ()
    keywords: frozenset[str] = dc_field(default_factory=frozenset)

    def child(self, field_name: str) -> "SyntaxNode | None":
        """First child stored under ``field_name``."""
        for child in self.children:
            if child.field == field_name:
                return child
        return None

    def iter_tree(self) -> Iterator["SyntaxNode"]:
        """Pre-order iteration over this subtree."""
        stack: list[SyntaxNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind!r}, start={self.start}, end={self.end})"


@dataclass(frozen=True, eq=False, repr=False)
class LabeledStatement(SyntaxNode):
    label: str = ""

    @property
    def body(self) -> SyntaxNode | None:
        return self.child("body")


@dataclass(frozen=True, eq=False, repr=False)
class FunctionLike(SyntaxNode):
    is_async: bool = False

    @property
    def body(self) -> SyntaxNode | None:
        return self.child("body")


@dataclass(frozen=True, eq=False, repr=False)
class Block(SyntaxNode):
    pass


@dataclass(frozen=True, eq=False, repr=False)
class Identifier(SyntaxNode):
    name: str = ""

    def __repr__(self) -> str:
        return f"Identifier(name={self.name!r}, start={self.start}, end={self.end})"


@dataclass(frozen=True, eq=False, repr=False)
class Other(SyntaxNode):
    pass


# ============================================================
# Traversal
# ============================================================


class VisitorOption:
    """Return values understood by ``traverse`` enter callbacks."""

    SKIP = "skip"


SKIP = VisitorOption.SKIP

EnterCallback = Callable[[SyntaxNode, tuple[SyntaxNode, ...]], str | None]
LeaveCallback = Callable[[SyntaxNode, tuple[SyntaxNode, ...]], None]


def traverse(
    root: SyntaxNode,
    enter: EnterCallback | None = None,
    leave: LeaveCallback | None = None,
) -> None:
    """
    Depth-first enter/leave traversal.

    Both callbacks receive the node and its ancestors (outermost first).
    ``enter`` may return ``SKIP`` to keep the traversal from descending
    below the node; ``leave`` still fires for skipped nodes.
    """
    # (node, ancestors, leaving)
    stack: list[tuple[SyntaxNode, tuple[SyntaxNode, ...], bool]] = [(root, (), False)]
    while stack:
        node, ancestors, leaving = stack.pop()
        if leaving:
            if leave is not None:
                leave(node, ancestors)
            continue

        option = enter(node, ancestors) if enter is not None else None
        stack.append((node, ancestors, True))
        if option == SKIP:
            continue

        child_ancestors = ancestors + (node,)
        for child in reversed(node.children):
            stack.append((child, child_ancestors, False))


__all__ = [
    "SyntaxNode",
    "LabeledStatement",
    "FunctionLike",
    "Block",
    "Identifier",
    "Other",
    "VisitorOption",
    "SKIP",
    "traverse",
]

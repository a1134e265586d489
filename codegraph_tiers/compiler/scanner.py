"""
Tier marker scanner.

Finds every ``<label>: <tier>[, <tier>...]`` statement in a module and
validates it:

- the module must open with a marker
- a marker inside a function needs that function to be async
- a marker must sit directly in the module body or directly in the body
  of its async function (tier switches inside control flow are rejected)
- the payload must be identifiers naming known tiers

Discovery is flat: traversal does not descend below a matched marker.
"""

from codegraph_tiers.errors import MarkerShapeError, StructuralError, TierPlacementError
from codegraph_tiers.logging import get_logger
from codegraph_tiers.models import TIER_NAMES, Tier, TierMarker
from codegraph_tiers.syntax.nodes import (
    SKIP,
    FunctionLike,
    Identifier,
    LabeledStatement,
    SyntaxNode,
    traverse,
)

logger = get_logger(__name__)

DEFAULT_MARKER_LABEL = "on"


def is_marker(node: SyntaxNode, label: str = DEFAULT_MARKER_LABEL) -> bool:
    return isinstance(node, LabeledStatement) and node.label == label


def _unwrap_parentheses(node: SyntaxNode) -> SyntaxNode:
    # `on: (server)` is the same marker as `on: server`
    while node.kind == "parenthesized_expression" and len(node.children) == 1:
        node = node.children[0]
    return node


def marker_identifiers(node: LabeledStatement) -> list[Identifier]:
    """
    Identifiers spelling a marker's tiers.

    ``on: server`` yields one identifier, ``on: server, client`` yields
    them left to right. Parentheses around the payload or its items are
    ignored.

    Raises:
        MarkerShapeError: Payload is not an identifier or comma-sequence of identifiers
    """
    body = node.body
    if body is None or body.kind != "expression_statement" or len(body.children) != 1:
        raise MarkerShapeError("Tier marker must be followed by tier names", offset=node.start)

    payload = _unwrap_parentheses(body.children[0])
    if isinstance(payload, Identifier):
        return [payload]
    if payload.kind != "sequence_expression":
        raise MarkerShapeError(
            f"Tier marker payload must be identifiers, got {payload.kind}",
            offset=payload.start,
        )

    identifiers: list[Identifier] = []
    # Sequences may nest to the right depending on grammar version
    pending = [payload]
    while pending:
        current = pending.pop()
        for child in reversed(current.children):
            child = _unwrap_parentheses(child)
            if child.kind == "sequence_expression":
                pending.append(child)
            elif isinstance(child, Identifier) and child.kind == "identifier":
                identifiers.append(child)
            else:
                raise MarkerShapeError(
                    f"Tier marker payload must be identifiers, got {child.kind}",
                    offset=child.start,
                )
    identifiers.sort(key=lambda identifier: identifier.start)
    return identifiers


def _marker_tiers(identifiers: list[Identifier]) -> tuple[Tier, ...]:
    tiers = []
    for identifier in identifiers:
        if identifier.name not in TIER_NAMES:
            raise MarkerShapeError(
                f"Unknown tier {identifier.name!r} (expected one of: {', '.join(sorted(TIER_NAMES))})",
                offset=identifier.start,
                tier=identifier.name,
            )
        tiers.append(Tier(identifier.name))
    return tuple(tiers)


def _check_placement(
    node: LabeledStatement,
    parent: SyntaxNode | None,
    function: FunctionLike | None,
) -> None:
    if function is not None and not function.is_async:
        raise TierPlacementError(
            "Tier marker inside a non-async function",
            offset=node.start,
            function_offset=function.start,
        )

    home = function.body if function is not None else None
    if function is None and parent is not None and parent.kind == "program":
        return
    if home is not None and parent is home:
        return
    raise StructuralError(
        "Tier marker must be placed at the top of the module or of an async function body",
        offset=node.start,
    )


def scan_markers(program: SyntaxNode, label: str = DEFAULT_MARKER_LABEL) -> list[TierMarker]:
    """
    Collect all tier markers of a module, ordered by start offset.

    Args:
        program: Module root node
        label: Statement label that introduces a marker

    Raises:
        StructuralError: Module does not open with a marker, unsupported
            marker placement, or unbalanced function nesting
        TierPlacementError: Marker inside a non-async function
        MarkerShapeError: Malformed marker payload
    """
    if not program.children or not is_marker(program.children[0], label):
        raise StructuralError(f"Module must open with a '{label}:' tier marker", offset=0)

    markers: list[TierMarker] = []
    function_stack: list[FunctionLike] = []

    def enter(node: SyntaxNode, ancestors: tuple[SyntaxNode, ...]) -> str | None:
        if isinstance(node, FunctionLike):
            function_stack.append(node)
        if isinstance(node, LabeledStatement) and is_marker(node, label):
            function = function_stack[-1] if function_stack else None
            _check_placement(node, ancestors[-1] if ancestors else None, function)
            identifiers = marker_identifiers(node)
            tiers = _marker_tiers(identifiers)
            markers.append(
                TierMarker(
                    tiers=tiers,
                    start=node.start,
                    end=node.end,
                    function=function,
                    node=node,
                    identifiers=tuple(identifiers),
                )
            )
            logger.debug("marker_found", tiers=[tier.value for tier in tiers], offset=node.end)
            return SKIP
        return None

    def leave(node: SyntaxNode, ancestors: tuple[SyntaxNode, ...]) -> None:
        if function_stack and function_stack[-1] is node:
            function_stack.pop()

    traverse(program, enter, leave)

    if function_stack:
        raise StructuralError(
            "Unterminated function nesting at end of traversal",
            offset=function_stack[-1].start,
        )

    markers.sort(key=lambda marker: marker.start)
    return markers


__all__ = [
    "DEFAULT_MARKER_LABEL",
    "is_marker",
    "marker_identifiers",
    "scan_markers",
]

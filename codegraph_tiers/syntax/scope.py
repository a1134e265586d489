"""
Lexical scope analysis

``analyze_scopes`` is a pure function from a program node to a
``ScopeGraph``: every identifier use, mapped to the identifier node that
declares the binding it reads, or to ``None`` when the name is unresolved
(globals, ambient names).

Scoping follows ECMAScript modules:
- ``var`` and function parameters bind in the nearest function (or module)
- ``let``, ``const``, ``class`` and function declarations bind in the
  enclosing block
- ``for`` heads and ``catch`` clauses open their own scope
- a named function or class expression binds its own name inside itself
- imports bind in the module scope

Resolution runs after every declaration is known, so uses may precede
their declarations (hoisting).
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Literal

from codegraph_tiers.syntax.nodes import FunctionLike, Identifier, SyntaxNode

ScopeKind = Literal["module", "function", "block", "for", "catch", "class"]

PATTERN_KINDS = frozenset(["object_pattern", "array_pattern"])
DECLARATION_FUNCTION_KINDS = frozenset(["function_declaration", "generator_function_declaration"])
EXPRESSION_FUNCTION_KINDS = frozenset(["function_expression", "function", "generator_function"])


@dataclass(eq=False)
class Scope:
    """One lexical scope and the bindings it declares."""

    kind: ScopeKind
    parent: "Scope | None" = None
    bindings: dict[str, Identifier] = field(default_factory=dict)

    def declare(self, identifier: Identifier) -> None:
        # First declaration wins (redeclared vars keep their first site)
        self.bindings.setdefault(identifier.name, identifier)

    def lookup(self, name: str) -> Identifier | None:
        scope: Scope | None = self
        while scope is not None:
            declared = scope.bindings.get(name)
            if declared is not None:
                return declared
            scope = scope.parent
        return None

    def variable_scope(self) -> "Scope":
        """Nearest function or module scope (where ``var`` lands)."""
        scope = self
        while scope.kind not in ("function", "module") and scope.parent is not None:
            scope = scope.parent
        return scope


@dataclass(frozen=True)
class Reference:
    """A read of a binding at one source location."""

    identifier: Identifier
    resolved: Identifier | None

    @property
    def name(self) -> str:
        return self.identifier.name


@dataclass
class ScopeGraph:
    """Use-site identifiers (source order) mapped to their declarations."""

    resolutions: dict[Identifier, Identifier | None]
    declarations: frozenset[Identifier] = frozenset()

    @property
    def references(self) -> list[Reference]:
        return [Reference(identifier=use, resolved=decl) for use, decl in self.resolutions.items()]

    def resolved_references(self) -> Iterator[Reference]:
        for use, decl in self.resolutions.items():
            if decl is not None:
                yield Reference(identifier=use, resolved=decl)

    def __len__(self) -> int:
        return len(self.resolutions)


class _ScopeBuilder:
    """Collects declarations per scope and the scope of every use."""

    def __init__(self) -> None:
        self.uses: list[tuple[Identifier, Scope]] = []
        self.declarations: set[Identifier] = set()

    # ------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------

    def _declare(self, identifier: Identifier, scope: Scope) -> None:
        scope.declare(identifier)
        self.declarations.add(identifier)

    def declare_pattern(self, node: SyntaxNode | None, target: Scope, current: Scope) -> None:
        """
        Declare every binding in a (possibly destructuring) pattern.

        Default values and computed keys inside the pattern are ordinary
        expressions evaluated in ``current``.
        """
        if node is None:
            return
        if isinstance(node, Identifier):
            self._declare(node, target)
        elif node.kind in PATTERN_KINDS:
            for child in node.children:
                self.declare_pattern(child, target, current)
        elif node.kind == "pair_pattern":
            key = node.child("key")
            if key is not None:
                self.visit(key, current)
            self.declare_pattern(node.child("value"), target, current)
        elif node.kind in ("assignment_pattern", "object_assignment_pattern"):
            self.declare_pattern(node.child("left"), target, current)
            right = node.child("right")
            if right is not None:
                self.visit(right, current)
        elif node.kind == "rest_pattern":
            for child in node.children:
                self.declare_pattern(child, target, current)
        else:
            # e.g. member expressions as assignment targets
            self.visit(node, current)

    def _declare_variables(self, node: SyntaxNode, target: Scope, current: Scope) -> None:
        for declarator in node.children:
            if declarator.kind != "variable_declarator":
                continue
            self.declare_pattern(declarator.child("name"), target, current)
            value = declarator.child("value")
            if value is not None:
                self.visit(value, current)

    def _declare_imports(self, node: SyntaxNode, module: Scope) -> None:
        for sub in node.iter_tree():
            if sub.kind == "import_specifier":
                alias = sub.child("alias")
                name = alias if alias is not None else sub.child("name")
                if isinstance(name, Identifier):
                    self._declare(name, module)
            elif sub.kind in ("import_clause", "namespace_import"):
                for child in sub.children:
                    if isinstance(child, Identifier):
                        self._declare(child, module)

    # ------------------------------------------------------------
    # Scoped constructs
    # ------------------------------------------------------------

    def _visit_function(self, node: FunctionLike, scope: Scope) -> None:
        name = node.child("name")
        if node.kind in DECLARATION_FUNCTION_KINDS and isinstance(name, Identifier):
            self._declare(name, scope)

        function_scope = Scope("function", parent=scope)
        if node.kind in EXPRESSION_FUNCTION_KINDS and isinstance(name, Identifier):
            self._declare(name, function_scope)
        if node.kind == "method_definition" and name is not None:
            # Computed method names are evaluated outside the method
            self.visit(name, scope)

        parameter = node.child("parameter")
        if parameter is not None:
            self.declare_pattern(parameter, function_scope, function_scope)
        parameters = node.child("parameters")
        if parameters is not None:
            for param in parameters.children:
                self.declare_pattern(param, function_scope, function_scope)

        body = node.body
        if body is None:
            return
        if body.kind == "statement_block":
            # Body statements share the function scope
            self._visit_children(body, function_scope)
        else:
            self.visit(body, function_scope)

    def _visit_class(self, node: SyntaxNode, scope: Scope) -> None:
        name = node.child("name")
        inner = scope
        if node.kind == "class_declaration":
            if isinstance(name, Identifier):
                self._declare(name, scope)
        elif isinstance(name, Identifier):
            inner = Scope("class", parent=scope)
            self._declare(name, inner)

        for child in node.children:
            if child is not name:
                self.visit(child, inner)

    def _visit_for_in(self, node: SyntaxNode, scope: Scope) -> None:
        for_scope = Scope("for", parent=scope)
        left = node.child("left")
        if "var" in node.keywords:
            self.declare_pattern(left, for_scope.variable_scope(), for_scope)
        elif "let" in node.keywords or "const" in node.keywords:
            self.declare_pattern(left, for_scope, for_scope)
        elif left is not None:
            self.visit(left, for_scope)

        for child in node.children:
            if child is not left:
                self.visit(child, for_scope)

    def _visit_catch(self, node: SyntaxNode, scope: Scope) -> None:
        catch_scope = Scope("catch", parent=scope)
        parameter = node.child("parameter")
        self.declare_pattern(parameter, catch_scope, catch_scope)
        for child in node.children:
            if child is not parameter:
                self.visit(child, catch_scope)

    def _visit_export_clause(self, node: SyntaxNode, scope: Scope, re_export: bool) -> None:
        if re_export:
            return
        for specifier in node.children:
            name = specifier.child("name")
            if isinstance(name, Identifier):
                self.uses.append((name, scope))

    # ------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------

    def _visit_children(self, node: SyntaxNode, scope: Scope) -> None:
        for child in node.children:
            self.visit(child, scope)

    def visit(self, node: SyntaxNode, scope: Scope) -> None:
        kind = node.kind

        if isinstance(node, Identifier):
            self.uses.append((node, scope))
        elif isinstance(node, FunctionLike):
            self._visit_function(node, scope)
        elif kind in ("class_declaration", "class"):
            self._visit_class(node, scope)
        elif kind == "variable_declaration":
            self._declare_variables(node, scope.variable_scope(), scope)
        elif kind == "lexical_declaration":
            self._declare_variables(node, scope, scope)
        elif kind in ("statement_block", "switch_body"):
            self._visit_children(node, Scope("block", parent=scope))
        elif kind == "for_statement":
            self._visit_children(node, Scope("for", parent=scope))
        elif kind == "for_in_statement":
            self._visit_for_in(node, scope)
        elif kind == "catch_clause":
            self._visit_catch(node, scope)
        elif kind == "import_statement":
            self._declare_imports(node, scope.variable_scope())
        elif kind == "export_statement":
            re_export = node.child("source") is not None
            for child in node.children:
                if child.kind == "export_clause":
                    self._visit_export_clause(child, scope, re_export)
                elif child.field != "source":
                    self.visit(child, scope)
        else:
            self._visit_children(node, scope)


def analyze_scopes(program: SyntaxNode) -> ScopeGraph:
    """
    Resolve every identifier use in ``program``.

    Args:
        program: Root node of a module

    Returns:
        ScopeGraph with uses in source order
    """
    builder = _ScopeBuilder()
    module = Scope("module")
    for child in program.children:
        builder.visit(child, module)

    ordered = sorted(builder.uses, key=lambda item: (item[0].start, item[0].end))
    resolutions = {use: scope.lookup(use.name) for use, scope in ordered}
    return ScopeGraph(resolutions=resolutions, declarations=frozenset(builder.declarations))


__all__ = [
    "Scope",
    "Reference",
    "ScopeGraph",
    "analyze_scopes",
]

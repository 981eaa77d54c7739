"""Canonical text rendering of the Coq AST.

Rendering is pure and deterministic. Indentation is done by wrapping a value
in ``Indent``, which prefixes every line of the wrapped value's rendering, so
nested multi-line expressions indent correctly at any depth.
"""

from __future__ import annotations

from typing import Any

from roq import ast


class Indent:
    """Render a value with each line prefixed by ``indent``.

    Every line of the result, including the last, ends with a newline.
    """

    def __init__(self, val: Any, indent: str = "\t") -> None:
        self.val = val
        self.indent = indent

    @classmethod
    def tab(cls, val: Any) -> "Indent":
        return cls(val, "\t")

    def __str__(self) -> str:
        text = render(self.val)
        return "".join(f"{self.indent}{line}\n" for line in text.splitlines())


def render(node: Any) -> str:
    """Render an AST node (or an ``Indent`` of one) as Coq text.

    Raises:
        TypeError: If ``node`` is not part of the AST
    """
    if isinstance(node, Indent):
        return str(node)
    if isinstance(node, ast.Vernacular):
        return "\n".join(render(stmt) for stmt in node.statements)
    if isinstance(node, ast.Definition):
        return render_definition(node)
    if isinstance(node, ast.Binder):
        return f"{node.name}: {node.ty}"
    if isinstance(node, ast.Ty):
        return node.value
    if isinstance(node, ast.MatchCase):
        return f"| {render(node.pattern)} =>\n{Indent.tab(node.body)}"
    if isinstance(node, ast.ExprPattern):
        return render_expr(node.expr)
    return render_expr(node)


def render_definition(defn: ast.Definition) -> str:
    binders = "".join(f" ({render(binder)})" for binder in defn.args)
    return (
        f"Definition {defn.name}{binders} : {defn.ret} :=\n"
        f"{Indent.tab(defn.body)}"
        ".\n"
    )


def render_expr(expr: ast.Expr) -> str:
    if isinstance(expr, ast.Apply):
        parts = [expr.func] + [render_argument(arg) for arg in expr.args]
        return "(" + " ".join(parts) + ")"
    if isinstance(expr, ast.Var):
        return expr.name
    if isinstance(expr, ast.Nat):
        return str(expr.value)
    if isinstance(expr, ast.Bool):
        return "true" if expr.value else "false"
    if isinstance(expr, ast.Tt):
        return "tt"
    if isinstance(expr, ast.LetIn):
        # Binding and scope share one indentation level.
        return f"let {expr.ident} := {render_expr(expr.value)} in\n{render_expr(expr.child)}"
    if isinstance(expr, ast.Match):
        arms = "".join(render(case) for case in expr.cases)
        return f"match {render_expr(expr.scrutinee)} with\n{arms}end"
    raise TypeError(f"Cannot render {type(expr).__name__} as a Coq expression")


def render_argument(expr: ast.Expr) -> str:
    # A let-in scope extends as far right as possible, so as an argument it
    # would swallow the arguments after it.
    if isinstance(expr, ast.LetIn):
        return f"({render_expr(expr)})"
    return render_expr(expr)

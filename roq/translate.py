"""Translate host function syntax into Coq definitions.

Translation is all-or-nothing: the first unsupported construct raises and no
partial AST escapes.

Usage:
    from roq.translate import translate_function
    definition = translate_function(fn_item)
    print(definition)
"""

from __future__ import annotations

from roq import ast, syntax
from roq.errors import ParseRejected, StructuralViolation

# Host binary operators and the Coq functions they apply.
OPERATORS: dict[str, str] = {
    "+": "plus",
    "-": "minus",
    "*": "mult",
    "/": "div",
    "%": "mod",
    "&&": "andb",
    "||": "orb",
    "<<": "shiftl",
    ">>": "shiftr",
    "==": "eqb",
    "<": "ltb",
    "<=": "leb",
}

# Host type paths and the Coq types they map to.
TYPES: dict[tuple[str, ...], ast.Ty] = {
    ("u64",): ast.Ty.NAT,
    ("std", "u64"): ast.Ty.NAT,
    ("bool",): ast.Ty.BOOL,
    ("std", "bool"): ast.Ty.BOOL,
}


def translate_type(ty: syntax.Type) -> ast.Ty:
    """Map a host type to ``nat`` or ``bool``.

    Raises:
        ParseRejected: For any type outside the whitelist
    """
    if isinstance(ty, syntax.PathType):
        coq_ty = TYPES.get(ty.segments)
        if coq_ty is None:
            path = "::".join(ty.segments)
            raise ParseRejected(f"unsupported type `{path}`", kind="type", location=ty.loc)
        return coq_ty
    if isinstance(ty, syntax.OtherType):
        raise ParseRejected(
            f"expected a path type (e.g. `std::u64` or `bool`), found {ty.kind} type",
            kind=ty.kind,
            location=ty.loc,
        )
    raise TypeError(f"Not a host type: {type(ty).__name__}")


def translate_expr(expr: syntax.Expr) -> ast.Expr:
    """Translate a host expression.

    Raises:
        ParseRejected: For unsupported expression kinds and operators
        StructuralViolation: For malformed blocks inside the expression
    """
    if isinstance(expr, syntax.IntLit):
        if expr.value < 0:
            raise ParseRejected(
                f"expected an unsigned integer literal, found {expr.value}",
                kind="int",
                location=expr.loc,
            )
        return ast.Nat(expr.value)

    if isinstance(expr, syntax.BoolLit):
        return ast.Bool(expr.value)

    if isinstance(expr, syntax.PathExpr):
        if len(expr.segments) != 1:
            raise ParseRejected(
                f"expected a single path segment, found `{'::'.join(expr.segments)}`",
                kind="path",
                location=expr.loc,
            )
        return ast.Var(expr.segments[0])

    if isinstance(expr, syntax.BinaryExpr):
        func = OPERATORS.get(expr.op)
        if func is None:
            raise ParseRejected(
                f"unsupported binary operator `{expr.op}`",
                kind="binary",
                location=expr.loc,
            )
        lhs = translate_expr(expr.left)
        rhs = translate_expr(expr.right)
        return ast.Apply(func=func, args=(lhs, rhs))

    if isinstance(expr, syntax.ParenExpr):
        return translate_expr(expr.expr)

    if isinstance(expr, syntax.BlockExpr):
        return translate_block(expr.block)

    if isinstance(expr, syntax.IfExpr):
        scrutinee = translate_expr(expr.cond)
        then_body = translate_block(expr.then_branch)
        if expr.else_branch is None:
            else_body: ast.Expr = ast.Tt()
        else:
            else_body = translate_expr(expr.else_branch)
        return ast.Match(
            scrutinee=scrutinee,
            cases=(
                ast.MatchCase(pattern=ast.ExprPattern(ast.Bool(True)), body=then_body),
                ast.MatchCase(pattern=ast.ExprPattern(ast.Bool(False)), body=else_body),
            ),
        )

    if isinstance(expr, syntax.OtherExpr):
        raise ParseRejected(
            f"unsupported expression type `{expr.kind}`",
            kind=expr.kind,
            location=expr.loc,
        )

    raise TypeError(f"Not a host expression: {type(expr).__name__}")


def translate_block(block: syntax.Block) -> ast.Expr:
    """Lower a block to nested ``let ... in`` expressions.

    The trailing expression is the innermost body; each local binding, walked
    from last to first, wraps what has been built so far. Expression
    statements before the end and nested items have no value and are skipped.

    Raises:
        StructuralViolation: If the block does not end with an expression, or
            a local binding is uninitialized or destructures a pattern
    """
    stmts = block.stmts

    if block.tail is not None:
        body = translate_expr(block.tail)
    elif not stmts:
        # Empty blocks evaluate to the unit value.
        return ast.Tt()
    else:
        last = stmts[-1]
        if not isinstance(last, syntax.ExprStmt):
            raise StructuralViolation(
                "expected block to end with an expression",
                location=last.loc or block.loc,
            )
        body = translate_expr(last.expr)

    for stmt in reversed(stmts):
        if not isinstance(stmt, syntax.LocalStmt):
            continue
        if stmt.init is None:
            raise StructuralViolation(
                "expected local variable to be initialized",
                location=stmt.loc,
            )
        value = translate_expr(stmt.init)
        if not isinstance(stmt.pat, syntax.IdentPat):
            raise StructuralViolation(
                "expected a single identifier, not a pattern, in local variable",
                location=stmt.pat.loc or stmt.loc,
            )
        body = ast.LetIn(ident=stmt.pat.name, value=value, child=body)

    return body


def translate_function(item: syntax.FnItem) -> ast.Definition:
    """Translate a host function into a Coq ``Definition``.

    Raises:
        ParseRejected: For unsupported types, operators or expressions, or a
            body nested too deeply to translate
        StructuralViolation: For a missing return type, a ``self`` parameter,
            destructured parameters, or a malformed body
    """
    if item.output is None:
        raise StructuralViolation("expected a return type", location=item.loc)
    ret = translate_type(item.output)

    args = []
    for arg in item.inputs:
        if isinstance(arg, syntax.ReceiverArg):
            raise StructuralViolation(
                "can't generate Coq `Definition` for function which takes `self`",
                location=arg.loc,
            )
        if not isinstance(arg.pat, syntax.IdentPat):
            raise StructuralViolation(
                "expected a single identifier, not a pattern, in function argument",
                location=arg.pat.loc or arg.loc,
            )
        args.append(ast.Binder(name=arg.pat.name, ty=translate_type(arg.ty)))

    try:
        body = translate_block(item.block)
    except RecursionError:
        raise ParseRejected(
            "function body nests too deeply to translate",
            kind="block",
            location=item.loc,
        ) from None

    return ast.Definition(name=item.name, args=tuple(args), ret=ret, body=body)


def vernacular(item: syntax.FnItem) -> ast.Vernacular:
    """Translate a host function into a one-statement vernacular file."""
    return ast.Vernacular.from_statement(translate_function(item))

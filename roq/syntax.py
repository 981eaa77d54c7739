"""Host function syntax consumed by the translator.

These nodes are the closed set of host constructs roq understands. They are
produced by a front end (or decoded from JSON with ``function_from_dict``);
roq never parses host source text itself. Constructs outside the supported
subset are represented by the ``Other*`` nodes, which carry a tag naming the
syntactic kind so the translator can report it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from roq.errors import RoqError, SourceLocation


class SyntaxDecodeError(RoqError):
    """A dictionary does not describe a host syntax node."""


# ---------------------------------------------------------------------------
# Types and patterns
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PathType:
    """A type named by a path, e.g. ``u64`` or ``std::bool``."""

    segments: tuple[str, ...]
    loc: SourceLocation | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "segments", tuple(self.segments))


@dataclass(frozen=True)
class OtherType:
    """Any non-path type (references, tuples, arrays, ...)."""

    kind: str
    loc: SourceLocation | None = None


Type = Union[PathType, OtherType]


@dataclass(frozen=True)
class IdentPat:
    """A pattern binding a single name."""

    name: str
    mutable: bool = False
    loc: SourceLocation | None = None


@dataclass(frozen=True)
class OtherPat:
    """Any destructuring pattern (tuple, struct, wildcard, ...)."""

    kind: str
    loc: SourceLocation | None = None


Pat = Union[IdentPat, OtherPat]


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class IntLit:
    value: int
    loc: SourceLocation | None = None


@dataclass(frozen=True)
class BoolLit:
    value: bool
    loc: SourceLocation | None = None


@dataclass(frozen=True)
class PathExpr:
    """A variable reference, possibly qualified (``a`` or ``m::a``)."""

    segments: tuple[str, ...]
    loc: SourceLocation | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "segments", tuple(self.segments))


@dataclass(frozen=True)
class BinaryExpr:
    """``left <op> right`` where ``op`` is the operator token, e.g. ``"+"``."""

    op: str
    left: Expr
    right: Expr
    loc: SourceLocation | None = None


@dataclass(frozen=True)
class ParenExpr:
    expr: Expr
    loc: SourceLocation | None = None


@dataclass(frozen=True)
class BlockExpr:
    block: Block
    loc: SourceLocation | None = None


@dataclass(frozen=True)
class IfExpr:
    """``if cond { then } else <else_branch>``; ``else_branch`` may be absent."""

    cond: Expr
    then_branch: Block
    else_branch: Expr | None = None
    loc: SourceLocation | None = None


@dataclass(frozen=True)
class OtherExpr:
    """Any expression kind outside the supported subset."""

    kind: str
    loc: SourceLocation | None = None


Expr = Union[IntLit, BoolLit, PathExpr, BinaryExpr, ParenExpr, BlockExpr, IfExpr, OtherExpr]


# ---------------------------------------------------------------------------
# Statements and blocks
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LocalStmt:
    """``let <pat> = <init>;``"""

    pat: Pat
    init: Expr | None = None
    loc: SourceLocation | None = None


@dataclass(frozen=True)
class ExprStmt:
    """An expression used as a statement, with or without a semicolon."""

    expr: Expr
    semi: bool = False
    loc: SourceLocation | None = None


@dataclass(frozen=True)
class ItemStmt:
    """A nested item declaration (fn, struct, use, ...)."""

    kind: str
    loc: SourceLocation | None = None


Stmt = Union[LocalStmt, ExprStmt, ItemStmt]


@dataclass(frozen=True)
class Block:
    """Statements optionally followed by a trailing (value) expression."""

    stmts: tuple[Stmt, ...] = ()
    tail: Expr | None = None
    loc: SourceLocation | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "stmts", tuple(self.stmts))


# ---------------------------------------------------------------------------
# Functions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TypedArg:
    """A ``pat: ty`` function parameter."""

    pat: Pat
    ty: Type
    loc: SourceLocation | None = None


@dataclass(frozen=True)
class ReceiverArg:
    """A ``self`` parameter."""

    loc: SourceLocation | None = None


FnArg = Union[TypedArg, ReceiverArg]


@dataclass(frozen=True)
class FnItem:
    """A host function: signature plus body."""

    name: str
    inputs: tuple[FnArg, ...]
    output: Type | None
    block: Block
    loc: SourceLocation | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "inputs", tuple(self.inputs))


# ---------------------------------------------------------------------------
# Dictionary decoding
# ---------------------------------------------------------------------------


def _loc(d: dict[str, Any]) -> SourceLocation | None:
    if "line" not in d:
        return None
    return SourceLocation(
        line=int(d["line"]),
        column=int(d.get("column", 0)),
        file=d.get("file", "<input>"),
    )


def _field(d: dict[str, Any], key: str) -> Any:
    try:
        return d[key]
    except KeyError:
        raise SyntaxDecodeError(f"'{d.get('kind', '?')}' node is missing '{key}'") from None


def _kind(d: Any) -> str:
    if not isinstance(d, dict) or "kind" not in d:
        raise SyntaxDecodeError(f"Expected a node with a 'kind', got {d!r}")
    return d["kind"]


def type_from_dict(d: dict[str, Any]) -> Type:
    kind = _kind(d)
    if kind == "path":
        return PathType(segments=tuple(_field(d, "segments")), loc=_loc(d))
    return OtherType(kind=kind, loc=_loc(d))


def pat_from_dict(d: dict[str, Any]) -> Pat:
    kind = _kind(d)
    if kind == "ident":
        return IdentPat(name=_field(d, "name"), mutable=bool(d.get("mutable", False)), loc=_loc(d))
    return OtherPat(kind=kind, loc=_loc(d))


def expr_from_dict(d: dict[str, Any]) -> Expr:
    """Decode an expression node.

    Unknown kinds become ``OtherExpr`` rather than raising, so that the
    translator reports them with their location.
    """
    kind = _kind(d)
    loc = _loc(d)
    if kind == "int":
        value = _field(d, "value")
        if isinstance(value, bool) or not isinstance(value, int):
            raise SyntaxDecodeError(f"'int' node has non-integer value {value!r}")
        return IntLit(value=value, loc=loc)
    if kind == "bool":
        return BoolLit(value=bool(_field(d, "value")), loc=loc)
    if kind == "path":
        return PathExpr(segments=tuple(_field(d, "segments")), loc=loc)
    if kind == "binary":
        return BinaryExpr(
            op=_field(d, "op"),
            left=expr_from_dict(_field(d, "left")),
            right=expr_from_dict(_field(d, "right")),
            loc=loc,
        )
    if kind == "paren":
        return ParenExpr(expr=expr_from_dict(_field(d, "expr")), loc=loc)
    if kind == "block":
        return BlockExpr(block=block_from_dict(d), loc=loc)
    if kind == "if":
        else_branch = d.get("else")
        return IfExpr(
            cond=expr_from_dict(_field(d, "cond")),
            then_branch=block_from_dict(_field(d, "then")),
            else_branch=expr_from_dict(else_branch) if else_branch is not None else None,
            loc=loc,
        )
    return OtherExpr(kind=kind, loc=loc)


def stmt_from_dict(d: dict[str, Any]) -> Stmt:
    kind = _kind(d)
    loc = _loc(d)
    if kind == "local":
        init = d.get("init")
        return LocalStmt(
            pat=pat_from_dict(_field(d, "pat")),
            init=expr_from_dict(init) if init is not None else None,
            loc=loc,
        )
    if kind == "expr":
        return ExprStmt(
            expr=expr_from_dict(_field(d, "expr")),
            semi=bool(d.get("semi", False)),
            loc=loc,
        )
    return ItemStmt(kind=d.get("item", kind), loc=loc)


def block_from_dict(d: dict[str, Any]) -> Block:
    """Decode ``{"stmts": [...], "tail": {...}}`` (``kind`` is optional)."""
    if not isinstance(d, dict):
        raise SyntaxDecodeError(f"Expected a block, got {d!r}")
    tail = d.get("tail")
    return Block(
        stmts=tuple(stmt_from_dict(s) for s in d.get("stmts", [])),
        tail=expr_from_dict(tail) if tail is not None else None,
        loc=_loc(d),
    )


def arg_from_dict(d: dict[str, Any]) -> FnArg:
    kind = _kind(d)
    if kind == "receiver":
        return ReceiverArg(loc=_loc(d))
    if kind == "typed":
        return TypedArg(
            pat=pat_from_dict(_field(d, "pat")),
            ty=type_from_dict(_field(d, "ty")),
            loc=_loc(d),
        )
    raise SyntaxDecodeError(f"Unknown function argument kind: {kind!r}")


def function_from_dict(d: dict[str, Any]) -> FnItem:
    """Decode a host function.

    Example:
        {"name": "double",
         "inputs": [{"kind": "typed", "pat": {"kind": "ident", "name": "a"},
                     "ty": {"kind": "path", "segments": ["u64"]}}],
         "output": {"kind": "path", "segments": ["u64"]},
         "block": {"tail": {"kind": "binary", "op": "+",
                            "left": {"kind": "path", "segments": ["a"]},
                            "right": {"kind": "path", "segments": ["a"]}}}}
    """
    if not isinstance(d, dict):
        raise SyntaxDecodeError(f"Expected a function object, got {d!r}")
    output = d.get("output")
    try:
        block = block_from_dict(_field(d, "block"))
    except RecursionError:
        raise SyntaxDecodeError("Function body nests too deeply to decode") from None
    return FnItem(
        name=_field(d, "name"),
        inputs=tuple(arg_from_dict(a) for a in d.get("inputs", [])),
        output=type_from_dict(output) if output is not None else None,
        block=block,
        loc=_loc(d),
    )

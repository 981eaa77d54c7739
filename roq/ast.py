"""Coq vernacular AST.

Every node is a frozen dataclass and sequence fields are stored as tuples, so
a tree is immutable once built. ``str(node)`` renders canonical Coq text (see
``roq.display``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Sequence, Union

# TODO: Newtype restricting this to valid Coq identifiers.
Ident = str


class Ty(Enum):
    """Scalar Coq types a host function may use."""

    NAT = "nat"
    BOOL = "bool"

    def __str__(self) -> str:
        return self.value


class _Node:
    """Mixin giving AST nodes their canonical text form."""

    def __str__(self) -> str:
        from roq.display import render

        return render(self)


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Apply(_Node):
    """Prefix application of a named Coq function."""

    func: str
    args: tuple[Expr, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": "apply",
            "func": self.func,
            "args": [arg.to_dict() for arg in self.args],
        }


@dataclass(frozen=True)
class Var(_Node):
    """A variable name."""

    name: Ident

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "var", "name": self.name}


@dataclass(frozen=True)
class Nat(_Node):
    """A ``nat`` literal."""

    value: int

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "nat", "value": self.value}


@dataclass(frozen=True)
class Bool(_Node):
    """A ``bool`` literal."""

    value: bool

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "bool", "value": self.value}


@dataclass(frozen=True)
class Tt(_Node):
    """Coq's unit value."""

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "tt"}


@dataclass(frozen=True)
class LetIn(_Node):
    """A single ``let ... in`` binding scoping over ``child``."""

    ident: Ident
    value: Expr
    child: Expr

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": "let_in",
            "ident": self.ident,
            "value": self.value.to_dict(),
            "child": self.child.to_dict(),
        }


@dataclass(frozen=True)
class ExprPattern(_Node):
    """Match against a particular (literal) expression."""

    expr: Expr

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "expr_pattern", "expr": self.expr.to_dict()}


Pattern = ExprPattern


@dataclass(frozen=True)
class MatchCase(_Node):
    """One ``| pattern => body`` arm."""

    pattern: Pattern
    body: Expr

    def to_dict(self) -> dict[str, Any]:
        return {"pattern": self.pattern.to_dict(), "body": self.body.to_dict()}


@dataclass(frozen=True)
class Match(_Node):
    """A ``match ... with ... end`` expression."""

    scrutinee: Expr
    cases: tuple[MatchCase, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "cases", tuple(self.cases))

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": "match",
            "scrutinee": self.scrutinee.to_dict(),
            "cases": [case.to_dict() for case in self.cases],
        }


Expr = Union[Apply, Var, Nat, Bool, Tt, LetIn, Match]


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Binder(_Node):
    """A single formal parameter."""

    name: Ident
    ty: Ty

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "ty": self.ty.value}


@dataclass(frozen=True)
class Definition(_Node):
    """A Coq ``Definition``: one translated host function."""

    name: Ident
    args: tuple[Binder, ...]
    ret: Ty
    body: Expr

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": "definition",
            "name": self.name,
            "args": [binder.to_dict() for binder in self.args],
            "ret": self.ret.value,
            "body": self.body.to_dict(),
        }


Statement = Definition


@dataclass(frozen=True)
class Vernacular(_Node):
    """A Coq vernacular file: an ordered sequence of statements."""

    statements: tuple[Statement, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "statements", tuple(self.statements))

    @classmethod
    def from_statement(cls, statement: Statement) -> "Vernacular":
        """Wrap a single statement in its own vernacular file."""
        return cls(statements=(statement,))

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": "vernacular",
            "statements": [stmt.to_dict() for stmt in self.statements],
        }


# ---------------------------------------------------------------------------
# Deserialization
# ---------------------------------------------------------------------------


def _exprs(items: Sequence[dict[str, Any]]) -> tuple[Expr, ...]:
    return tuple(from_dict(item) for item in items)


def from_dict(d: dict[str, Any]) -> Any:
    """Rebuild an AST node from the output of its ``to_dict``.

    Raises:
        ValueError: If the dictionary does not describe a known node
    """
    kind = d.get("kind")
    if kind == "apply":
        return Apply(func=d["func"], args=_exprs(d.get("args", [])))
    if kind == "var":
        return Var(d["name"])
    if kind == "nat":
        return Nat(int(d["value"]))
    if kind == "bool":
        return Bool(bool(d["value"]))
    if kind == "tt":
        return Tt()
    if kind == "let_in":
        return LetIn(
            ident=d["ident"],
            value=from_dict(d["value"]),
            child=from_dict(d["child"]),
        )
    if kind == "match":
        cases = tuple(
            MatchCase(pattern=from_dict(c["pattern"]), body=from_dict(c["body"]))
            for c in d.get("cases", [])
        )
        return Match(scrutinee=from_dict(d["scrutinee"]), cases=cases)
    if kind == "expr_pattern":
        return ExprPattern(from_dict(d["expr"]))
    if kind == "definition":
        return Definition(
            name=d["name"],
            args=tuple(Binder(name=b["name"], ty=Ty(b["ty"])) for b in d.get("args", [])),
            ret=Ty(d["ret"]),
            body=from_dict(d["body"]),
        )
    if kind == "vernacular":
        return Vernacular(statements=tuple(from_dict(s) for s in d.get("statements", [])))
    raise ValueError(f"Unknown AST node kind: {kind!r}")

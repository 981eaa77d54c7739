"""Tests for decoding host syntax from dictionaries."""

import pytest

from roq import syntax
from roq.errors import SourceLocation

DOUBLE = {
    "name": "double",
    "line": 1,
    "column": 0,
    "inputs": [
        {
            "kind": "typed",
            "pat": {"kind": "ident", "name": "a"},
            "ty": {"kind": "path", "segments": ["u64"]},
        }
    ],
    "output": {"kind": "path", "segments": ["u64"]},
    "block": {
        "stmts": [],
        "tail": {
            "kind": "binary",
            "op": "+",
            "left": {"kind": "path", "segments": ["a"]},
            "right": {"kind": "path", "segments": ["a"]},
        },
    },
}


class TestFunctionFromDict:
    """Tests for function_from_dict."""

    def test_double(self):
        item = syntax.function_from_dict(DOUBLE)
        assert item.name == "double"
        assert item.loc == SourceLocation(line=1, column=0)
        assert item.inputs == (
            syntax.TypedArg(syntax.IdentPat("a"), syntax.PathType(("u64",))),
        )
        assert item.output == syntax.PathType(("u64",))
        assert item.block.tail == syntax.BinaryExpr(
            "+", syntax.PathExpr(("a",)), syntax.PathExpr(("a",))
        )

    def test_missing_output(self):
        data = dict(DOUBLE, output=None)
        assert syntax.function_from_dict(data).output is None

    def test_receiver(self):
        data = dict(DOUBLE, inputs=[{"kind": "receiver"}])
        assert syntax.function_from_dict(data).inputs == (syntax.ReceiverArg(),)

    def test_unknown_argument_kind(self):
        data = dict(DOUBLE, inputs=[{"kind": "variadic"}])
        with pytest.raises(syntax.SyntaxDecodeError, match="variadic"):
            syntax.function_from_dict(data)

    def test_missing_name(self):
        data = {k: v for k, v in DOUBLE.items() if k != "name"}
        with pytest.raises(syntax.SyntaxDecodeError, match="name"):
            syntax.function_from_dict(data)


class TestExprFromDict:
    """Tests for expression decoding."""

    def test_unknown_kind_becomes_other(self):
        expr = syntax.expr_from_dict({"kind": "call", "line": 4, "column": 2})
        assert expr == syntax.OtherExpr("call", loc=SourceLocation(4, 2))

    def test_if_with_else(self):
        expr = syntax.expr_from_dict(
            {
                "kind": "if",
                "cond": {"kind": "bool", "value": True},
                "then": {"tail": {"kind": "int", "value": 1}},
                "else": {"kind": "block", "tail": {"kind": "int", "value": 2}},
            }
        )
        assert expr == syntax.IfExpr(
            cond=syntax.BoolLit(True),
            then_branch=syntax.Block(tail=syntax.IntLit(1)),
            else_branch=syntax.BlockExpr(syntax.Block(tail=syntax.IntLit(2))),
        )

    def test_block_statements(self):
        expr = syntax.expr_from_dict(
            {
                "kind": "block",
                "stmts": [
                    {"kind": "local", "pat": {"kind": "ident", "name": "x"}, "init": {"kind": "int", "value": 1}},
                    {"kind": "local", "pat": {"kind": "tuple"}},
                    {"kind": "expr", "expr": {"kind": "path", "segments": ["x"]}, "semi": True},
                    {"kind": "item", "item": "fn"},
                ],
            }
        )
        stmts = expr.block.stmts
        assert stmts[0] == syntax.LocalStmt(syntax.IdentPat("x"), syntax.IntLit(1))
        assert stmts[1] == syntax.LocalStmt(syntax.OtherPat("tuple"))
        assert stmts[2] == syntax.ExprStmt(syntax.PathExpr(("x",)), semi=True)
        assert stmts[3] == syntax.ItemStmt("fn")

    def test_int_must_be_integer(self):
        with pytest.raises(syntax.SyntaxDecodeError):
            syntax.expr_from_dict({"kind": "int", "value": "1"})

    def test_node_without_kind(self):
        with pytest.raises(syntax.SyntaxDecodeError, match="kind"):
            syntax.expr_from_dict({"value": 1})

    def test_non_path_type(self):
        assert syntax.type_from_dict({"kind": "reference"}) == syntax.OtherType("reference")


class TestDeepNesting:
    """Tests for input too deeply nested to decode."""

    def test_deep_body_is_decode_error(self):
        tail = {"kind": "int", "value": 0}
        for _ in range(5000):
            tail = {"kind": "paren", "expr": tail}
        data = dict(DOUBLE, block={"tail": tail})
        with pytest.raises(syntax.SyntaxDecodeError, match="too deeply"):
            syntax.function_from_dict(data)

"""
Domain Model Serialization to S-Expressions
============================================

Renders a Module as a canonical S-expression for the CLI, for debugging and
for golden-style tests:

    (module "main"
      (globals)
      (function "add"
        (returns "int")
        (args (variable "a" "int") (variable "b" "int"))
        (body (declaration (expr (variable "x" "int") (literal "5"))))))

Keywords are sexpdata symbols (unquoted); names, types and literal text are
strings (quoted). Structured sexpr (nested lists) is built first, then
pretty-printed.
"""

from typing import Any, List

import sexpdata

from ..utils.config import SEXPR_INDENT, SEXPR_MAX_LINE
from .nodes import Expr, Function, Literal, Module, Statement, Variable, VariableRef


def _pretty_dumps(sexpr: Any, indent: int = 0, indent_str: str = SEXPR_INDENT,
                  max_line: int = SEXPR_MAX_LINE) -> str:
    """Keep short forms on one line; break a list per child only when it is too long."""
    if not isinstance(sexpr, list):
        return sexpdata.dumps(sexpr)
    if not sexpr:
        return "()"
    parts = [_pretty_dumps(e, indent + 1, indent_str, max_line) for e in sexpr]
    one_line = "(" + " ".join(parts) + ")"
    if len(one_line) + len(indent_str) * indent <= max_line and "\n" not in one_line:
        return one_line
    # Head symbol and leading atoms stay on the opening line
    head = [parts[0]]
    rest = parts[1:]
    while rest and not isinstance(sexpr[len(head)], list):
        head.append(rest.pop(0))
    if not rest:
        return one_line
    next_prefix = indent_str * (indent + 1)
    body = "\n".join(next_prefix + p for p in rest)
    return "(" + " ".join(head) + "\n" + body + ")"


def serialize_module(module: Module, pretty: bool = True) -> str:
    """
    Serialize a Module (or any model node) to an S-expression string.

    Args:
        module: node to serialize
        pretty: multi-line indented output (default). False gives one line.
    """
    sexpr = ModelSerializer().serialize_to_sexpr(module)
    if pretty:
        return _pretty_dumps(sexpr)
    return sexpdata.dumps(sexpr)


class ModelSerializer:
    """Domain model -> structured sexpr (nested lists of Symbol / str)."""

    def _sym(self, s: str) -> sexpdata.Symbol:
        return sexpdata.Symbol(s)

    def serialize_to_sexpr(self, node: Any) -> Any:
        if node is None:
            return self._sym("nil")
        method = getattr(self, f"_serialize_{type(node).__name__}", None)
        if method is None:
            raise TypeError(f"Cannot serialize {type(node).__name__}")
        return method(node)

    def _serialize_Module(self, node: Module) -> List[Any]:
        return [
            self._sym("module"), node.name,
            [self._sym("globals")] + [self.serialize_to_sexpr(v) for v in node.global_variables],
        ] + [self.serialize_to_sexpr(f) for f in node.functions]

    def _serialize_Function(self, node: Function) -> List[Any]:
        return [
            self._sym("function"), node.name,
            [self._sym("returns"), node.return_type],
            [self._sym("args")] + [self.serialize_to_sexpr(a) for a in node.args],
            [self._sym("body")] + [self.serialize_to_sexpr(s) for s in node.body],
        ]

    def _serialize_Statement(self, node: Statement) -> List[Any]:
        return [self._sym(node.kind)] + [self.serialize_to_sexpr(e) for e in node.expr]

    def _serialize_Expr(self, node: Expr) -> List[Any]:
        out: List[Any] = [self._sym("expr"), self.serialize_to_sexpr(node.left)]
        if node.operator:
            out.append([self._sym("op"), node.operator])
        if node.right is not None:
            out.append(self.serialize_to_sexpr(node.right))
        return out

    def _serialize_Variable(self, node: Variable) -> List[Any]:
        out: List[Any] = [self._sym("variable"), node.name, node.type_name]
        if node.value is not None:
            out.append([self._sym("value"), node.value])
        return out

    def _serialize_Literal(self, node: Literal) -> List[Any]:
        return [self._sym("literal"), node.value]

    def _serialize_VariableRef(self, node: VariableRef) -> List[Any]:
        return [self._sym("ref"), node.name]

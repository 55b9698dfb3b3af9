"""
Domain Model

Owned, typed output of a reduction run:

    Module
      ├── global_variables: [Variable]
      └── functions: [Function]
            ├── args: [Variable]
            └── body: [Statement]
                  └── expr: [Expr]  (left: Variable, right: RightHandSide)

All nodes are plain dataclasses, so two models built from identical input
compare equal field for field.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

from typing_extensions import TypeAlias

from ..utils.config import (
    DEFAULT_EXPR_KIND,
    DEFAULT_MODULE_NAME,
    LITERAL_EXPR_KIND,
    VARIABLE_EXPR_KIND,
)


@dataclass
class Variable:
    """A named, typed slot: a parameter or the left side of a declaration."""
    name: str = ""
    type_name: str = ""
    value: Optional[str] = None  # only ever a literal's text


@dataclass
class Literal:
    """Numeric literal on the right-hand side of a declaration, kept as source text."""
    value: str

    def as_variable(self) -> Variable:
        return Variable(name="", type_name="", value=self.value)

    def to_expr(self) -> Expr:
        return Expr(kind=LITERAL_EXPR_KIND, left=self.as_variable())


@dataclass
class VariableRef:
    """Reference to another variable by name (`int y = x;`). Not produced yet."""
    name: str

    def to_expr(self) -> Expr:
        return Expr(kind=VARIABLE_EXPR_KIND, left=Variable(name=self.name))


# Closed set of right-hand sides; add a variant here to support more initializers
RightHandSide: TypeAlias = Union[Literal, VariableRef]


@dataclass
class Expr:
    kind: str = DEFAULT_EXPR_KIND
    left: Variable = field(default_factory=Variable)
    operator: str = ""  # reserved
    right: Optional[RightHandSide] = None


@dataclass
class Statement:
    """
    One statement of a function body.

    Created with a single placeholder Expr so the declaration being parsed
    always has a slot to fill.
    """
    kind: str
    expr: List[Expr] = field(default_factory=lambda: [Expr()])

    @property
    def pending_expr(self) -> Expr:
        return self.expr[-1]


@dataclass
class Function:
    return_type: str = ""
    name: str = ""
    args: List[Variable] = field(default_factory=list)
    body: List[Statement] = field(default_factory=list)


@dataclass
class Module:
    """Root of ownership for everything built by one reduction run."""
    name: str = DEFAULT_MODULE_NAME
    global_variables: List[Variable] = field(default_factory=list)
    functions: List[Function] = field(default_factory=list)

    def function(self, name: str) -> Optional[Function]:
        """First function with the given name, if any."""
        for func in self.functions:
            if func.name == name:
                return func
        return None

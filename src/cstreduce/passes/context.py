"""
Context frames for the CST reducer

The reducer interprets each node against two registers: the innermost
syntactic context that is open (`context`) and the role it anticipates for
the next matching node (`expected`). Both live in the top Frame of a
ContextStack. Constructs that open a context push a frame on ENTER and pop
it on EXIT; role changes only rewrite the top frame.

A frame also carries the Domain Model objects it mutates (the Function being
built, the Statement being filled), inherited from the enclosing frame.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional

from ..shared.errors import ReducerStateError
from ..shared.nodes import Expr, Function, Statement


class Context(Enum):
    NONE = ""
    FUNCTION_DEFINITION = "function_definition"
    FUNCTION_DECLARATOR = "function_declarator"
    PARAMETER_LIST = "parameter_list"
    PARAMETER_DECLARATION = "parameter_declaration"
    COMPOUND_STATEMENT = "compound_statement"
    LOCAL_DECLARATION = "local_declaration"
    LOCAL_INIT_DECLARATOR = "local_init_declarator"


class Expected(Enum):
    NONE = ""
    RETURN_TYPE = "return_type"
    FUNCTION_NAME = "function_name"
    PARAMETER = "parameter"
    PARAMETER_TYPE = "parameter_type"
    PARAMETER_NAME = "parameter_name"
    STATEMENT = "statement"
    VARIABLE_TYPE = "variable_type"
    VARIABLE_NAME = "variable_name"
    LOCAL_INIT_DECLARATOR_RIGHT = "local_init_declarator_right"


@dataclass
class Frame:
    context: Context = Context.NONE
    expected: Expected = Expected.NONE
    function: Optional[Function] = None
    statement: Optional[Statement] = None

    def require_function(self) -> Function:
        if self.function is None:
            raise ReducerStateError(
                f"no function owns context '{self.context.value}'"
            )
        return self.function

    def require_expr(self) -> Expr:
        if self.statement is None:
            raise ReducerStateError(
                f"no declaration owns context '{self.context.value}'"
            )
        return self.statement.pending_expr


class ContextStack:
    """Stack of frames; the bottom frame is the empty root context."""

    def __init__(self):
        self._frames: List[Frame] = [Frame()]

    @property
    def top(self) -> Frame:
        return self._frames[-1]

    @property
    def context(self) -> Context:
        return self.top.context

    @property
    def expected(self) -> Expected:
        return self.top.expected

    @expected.setter
    def expected(self, value: Expected) -> None:
        self.top.expected = value

    def at(self, context: Context, expected: Optional[Expected] = None) -> bool:
        """True if the top frame is `context` (and expects `expected`, when given)."""
        if self.top.context is not context:
            return False
        return expected is None or self.top.expected is expected

    def push(self, context: Context, expected: Expected,
             function: Optional[Function] = None,
             statement: Optional[Statement] = None) -> Frame:
        frame = replace(self.top, context=context, expected=expected)
        if function is not None:
            frame.function = function
            frame.statement = None
        if statement is not None:
            frame.statement = statement
        self._frames.append(frame)
        return frame

    def pop(self) -> Frame:
        if len(self._frames) == 1:
            raise ReducerStateError("cannot leave the root context")
        return self._frames.pop()

    def depth(self) -> int:
        """Number of open contexts above the root."""
        return len(self._frames) - 1

    def is_root(self) -> bool:
        return len(self._frames) == 1

    def __repr__(self) -> str:
        path = " > ".join(f"{f.context.value or '<root>'}:{f.expected.value}" for f in self._frames)
        return f"ContextStack({path})"

"""
Shared components: domain model, walker, grammar vocabulary, diagnostics.
"""

from .source_location import SourceLocation
from .errors import (
    Error, ErrorReporter, ReducerError, ReducerSourceError,
    ParseError, UnsupportedConstructError, ReducerStateError,
)
from .nodes import (
    Module, Function, Statement, Expr, Variable,
    Literal, VariableRef, RightHandSide,
)
from .node_kinds import NodeKind, classify, is_recognized
from .tree_walker import ControlFlow, Step, SyntaxNode, traverse
from .serialization import serialize_module

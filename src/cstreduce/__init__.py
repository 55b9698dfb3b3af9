"""
cstreduce: reduce a C concrete syntax tree into a small program model.

    from cstreduce import CParser, CSTReducer

    result = CSTReducer().reduce(CParser().parse("int add(int a, int b) { }"))
    result.module.functions[0].name  # "add"
"""

from .shared import (
    ControlFlow, Step, SyntaxNode, traverse,
    Module, Function, Statement, Expr, Variable, Literal, VariableRef,
    NodeKind, classify,
    ParseError, ReducerError, UnsupportedConstructError, ReducerStateError,
    serialize_module,
)
from .frontend import CParser, LarkSyntaxNode
from .passes.cst_reduction import (
    CSTReducer, ReductionResult, ReductionStatus, UnsupportedConstruct, reduce_tree,
)
from .compiler.driver import ReductionDriver, ReductionOutcome

__version__ = "0.1.0"

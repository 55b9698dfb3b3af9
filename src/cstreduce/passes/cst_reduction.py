"""
CST to Domain Model reduction

Drives the Tree Walker over a concrete syntax tree and builds a Module while
the traversal is in flight. Every named node is classified into a NodeKind
and interpreted against the top context frame:

    ENTER function_definition      append Function, open (function_definition, return_type)
    ENTER primitive_type           return type / new parameter / declared type
    ENTER function_declarator      open (function_declarator, function_name)
    ENTER identifier               function name / parameter name / declared name
    ENTER parameter_list           open (parameter_list, parameter)
    ENTER parameter_declaration    open (parameter_declaration, parameter_type)
    ENTER compound_statement       open (compound_statement, statement)
    ENTER declaration              append Statement, open (local_declaration, variable_type)
    ENTER init_declarator          open (local_init_declarator, variable_name)
    ENTER number_literal           right-hand side literal

EXIT closes whatever the matching ENTER opened. Unnamed nodes and comments
are pruned. Anything else stops the reduction; the partial Module is kept
and the offending node is described by an UnsupportedConstruct diagnostic.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, FrozenSet, Optional

from ..shared.errors import Error, UnsupportedConstructError
from ..shared.node_kinds import NodeKind, classify
from ..shared.nodes import Expr, Function, Literal, Module, Statement, Variable
from ..shared.source_location import SourceLocation
from ..shared.tree_walker import ControlFlow, Step, SyntaxNode, traverse
from ..utils.config import (
    DEFAULT_MODULE_NAME,
    UNRECOGNIZED_SYMBOL_CODE,
    UNSUPPORTED_CONSTRUCT_CODE,
)
from .context import Context, ContextStack, Expected

logger = logging.getLogger(__name__)

_SUPPORTED_SUBSET_HELP = (
    "only function definitions, scalar parameters and local declarations "
    "with numeric-literal initializers are reduced"
)

# Kinds whose ENTER opens a context frame; their EXIT closes it
_OPENING_KINDS: FrozenSet[NodeKind] = frozenset({
    NodeKind.FUNCTION_DEFINITION,
    NodeKind.FUNCTION_DECLARATOR,
    NodeKind.PARAMETER_LIST,
    NodeKind.PARAMETER_DECLARATION,
    NodeKind.COMPOUND_STATEMENT,
    NodeKind.DECLARATION,
    NodeKind.INIT_DECLARATOR,
})

# Kinds handled on ENTER only; their EXIT is a no-op
_LEAF_KINDS: FrozenSet[NodeKind] = frozenset({
    NodeKind.TRANSLATION_UNIT,
    NodeKind.PRIMITIVE_TYPE,
    NodeKind.IDENTIFIER,
    NodeKind.NUMBER_LITERAL,
})


class ReductionStatus(Enum):
    COMPLETE = "complete"
    ABORTED = "aborted"


@dataclass(frozen=True)
class UnsupportedConstruct:
    """Why and where a reduction stopped."""
    kind: str
    step: Step
    context: Context
    location: Optional[SourceLocation] = None
    recognized: bool = True

    @property
    def code(self) -> str:
        return UNSUPPORTED_CONSTRUCT_CODE if self.recognized else UNRECOGNIZED_SYMBOL_CODE

    @property
    def message(self) -> str:
        if not self.recognized:
            return f"unsupported construct '{self.kind}'"
        where = self.context.value or "top level"
        return f"'{self.kind}' is not supported in {where} context"

    @property
    def note(self) -> str:
        if not self.recognized:
            return f"'{self.kind}' is not part of the grammar vocabulary the reducer understands"
        return f"reduction stopped on {self.step.value} of '{self.kind}'"

    def to_error(self) -> Error:
        return Error(
            message=self.message,
            location=self.location,
            code=self.code,
            help=_SUPPORTED_SUBSET_HELP,
            note=self.note,
        )

    def to_exception(self, source_code: Optional[str] = None) -> UnsupportedConstructError:
        return UnsupportedConstructError(
            self.message,
            location=self.location,
            error_code=self.code,
            source_code=source_code,
            help=_SUPPORTED_SUBSET_HELP,
            note=self.note,
        )


@dataclass
class ReductionResult:
    """
    Outcome of one reduction run.

    The Module is always present: complete, or as far as it got before the
    reduction stopped. unwrap() is for callers that treat a stop as failure.
    """
    module: Module
    status: ReductionStatus
    diagnostic: Optional[UnsupportedConstruct] = None

    @property
    def completed(self) -> bool:
        return self.status is ReductionStatus.COMPLETE

    def unwrap(self, source_code: Optional[str] = None) -> Module:
        if self.completed:
            return self.module
        assert self.diagnostic is not None
        raise self.diagnostic.to_exception(source_code)


Handler = Callable[[SyntaxNode], ControlFlow]


class CSTReducer:
    """
    Pushdown automaton reducing a CST to a Module in a single traversal.

    One instance can run many reductions, one at a time; all per-run state is
    reset by reduce().
    """

    def __init__(self, module_name: str = DEFAULT_MODULE_NAME):
        self.module_name = module_name
        self._module = Module(name=module_name)
        self._stack = ContextStack()
        self._diagnostic: Optional[UnsupportedConstruct] = None
        self._entered = 0
        self._enter_handlers: Dict[NodeKind, Handler] = {
            NodeKind.TRANSLATION_UNIT: self._enter_translation_unit,
            NodeKind.COMMENT: self._enter_comment,
            NodeKind.FUNCTION_DEFINITION: self._enter_function_definition,
            NodeKind.PRIMITIVE_TYPE: self._enter_primitive_type,
            NodeKind.FUNCTION_DECLARATOR: self._enter_function_declarator,
            NodeKind.IDENTIFIER: self._enter_identifier,
            NodeKind.PARAMETER_LIST: self._enter_parameter_list,
            NodeKind.PARAMETER_DECLARATION: self._enter_parameter_declaration,
            NodeKind.COMPOUND_STATEMENT: self._enter_compound_statement,
            NodeKind.DECLARATION: self._enter_declaration,
            NodeKind.INIT_DECLARATOR: self._enter_init_declarator,
            NodeKind.NUMBER_LITERAL: self._enter_number_literal,
        }

    @property
    def stack(self) -> ContextStack:
        return self._stack

    def reduce(self, root: SyntaxNode) -> ReductionResult:
        self._module = Module(name=self.module_name)
        self._stack = ContextStack()
        self._diagnostic = None
        self._entered = 0

        signal = traverse(root, self._visit)

        if signal is ControlFlow.QUIT:
            logger.debug(
                f"Reduction aborted after {self._entered} nodes, "
                f"{self._stack.depth()} context(s) open: {self._diagnostic}"
            )
            return ReductionResult(self._module, ReductionStatus.ABORTED, self._diagnostic)
        logger.debug(
            f"Reduced {self._entered} nodes into {len(self._module.functions)} function(s)"
        )
        return ReductionResult(self._module, ReductionStatus.COMPLETE)

    # =========================================================================
    # EVENT DISPATCH
    # =========================================================================

    def _visit(self, step: Step, node: SyntaxNode) -> ControlFlow:
        if not node.is_named:
            return ControlFlow.SKIP
        kind = classify(node.kind)
        if step is Step.ENTER:
            self._entered += 1
            handler = self._enter_handlers.get(kind)
            if handler is None:
                return self._unsupported(step, node, recognized=kind is not NodeKind.UNRECOGNIZED)
            signal = handler(node)
            logger.debug(f"enter {node.kind} -> {signal.value} {self._stack!r}")
            return signal

        if kind in _OPENING_KINDS:
            self._stack.pop()
            logger.debug(f"exit {node.kind} {self._stack!r}")
            return ControlFlow.CONTINUE
        if kind in _LEAF_KINDS:
            return ControlFlow.CONTINUE
        return self._unsupported(step, node, recognized=kind is not NodeKind.UNRECOGNIZED)

    def _unsupported(self, step: Step, node: SyntaxNode, recognized: bool = True) -> ControlFlow:
        self._diagnostic = UnsupportedConstruct(
            kind=node.kind,
            step=step,
            context=self._stack.context,
            location=node.location,
            recognized=recognized,
        )
        return ControlFlow.QUIT

    # =========================================================================
    # ENTER HANDLERS
    # =========================================================================

    def _enter_translation_unit(self, node: SyntaxNode) -> ControlFlow:
        return ControlFlow.CONTINUE

    def _enter_comment(self, node: SyntaxNode) -> ControlFlow:
        return ControlFlow.SKIP

    def _enter_function_definition(self, node: SyntaxNode) -> ControlFlow:
        function = Function()
        self._module.functions.append(function)
        self._stack.push(Context.FUNCTION_DEFINITION, Expected.RETURN_TYPE, function=function)
        return ControlFlow.CONTINUE

    def _enter_primitive_type(self, node: SyntaxNode) -> ControlFlow:
        frame = self._stack.top
        if frame.context is Context.FUNCTION_DEFINITION:
            if frame.expected is Expected.RETURN_TYPE:
                frame.require_function().return_type = node.text
            return ControlFlow.CONTINUE

        if frame.context is Context.PARAMETER_DECLARATION:
            if frame.expected is Expected.PARAMETER_TYPE:
                frame.require_function().args.append(Variable(name="", type_name=node.text))
                frame.expected = Expected.PARAMETER_NAME
            return ControlFlow.CONTINUE

        if frame.context is Context.LOCAL_DECLARATION:
            if frame.expected is Expected.VARIABLE_TYPE:
                frame.require_expr().left.type_name = node.text
                frame.expected = Expected.VARIABLE_NAME
            return ControlFlow.CONTINUE

        return self._unsupported(Step.ENTER, node)

    def _enter_function_declarator(self, node: SyntaxNode) -> ControlFlow:
        # Prototypes inside a body would otherwise rename the enclosing function
        if not self._stack.at(Context.FUNCTION_DEFINITION):
            return self._unsupported(Step.ENTER, node)
        self._stack.push(Context.FUNCTION_DECLARATOR, Expected.FUNCTION_NAME)
        return ControlFlow.CONTINUE

    def _enter_identifier(self, node: SyntaxNode) -> ControlFlow:
        frame = self._stack.top
        if frame.context is Context.FUNCTION_DECLARATOR:
            if frame.expected is Expected.FUNCTION_NAME:
                frame.require_function().name = node.text
            return ControlFlow.CONTINUE

        if frame.context is Context.PARAMETER_DECLARATION:
            if frame.expected is Expected.PARAMETER_NAME:
                args = frame.require_function().args
                args[-1].name = node.text
            return ControlFlow.CONTINUE

        if frame.context is Context.LOCAL_INIT_DECLARATOR:
            if frame.expected is Expected.VARIABLE_NAME:
                self._declarator_slot().left.name = node.text
                frame.expected = Expected.LOCAL_INIT_DECLARATOR_RIGHT
            return ControlFlow.CONTINUE

        if frame.context is Context.LOCAL_DECLARATION:
            # Declared without initializer: `int x;`
            if frame.expected is Expected.VARIABLE_NAME:
                self._declarator_slot().left.name = node.text
            return ControlFlow.CONTINUE

        return self._unsupported(Step.ENTER, node)

    def _enter_parameter_list(self, node: SyntaxNode) -> ControlFlow:
        self._stack.push(Context.PARAMETER_LIST, Expected.PARAMETER)
        return ControlFlow.CONTINUE

    def _enter_parameter_declaration(self, node: SyntaxNode) -> ControlFlow:
        self._stack.push(Context.PARAMETER_DECLARATION, Expected.PARAMETER_TYPE)
        return ControlFlow.CONTINUE

    def _enter_compound_statement(self, node: SyntaxNode) -> ControlFlow:
        self._stack.push(Context.COMPOUND_STATEMENT, Expected.STATEMENT)
        return ControlFlow.CONTINUE

    def _enter_declaration(self, node: SyntaxNode) -> ControlFlow:
        if not self._stack.at(Context.COMPOUND_STATEMENT):
            return self._unsupported(Step.ENTER, node)
        frame = self._stack.top
        statement = None
        if frame.expected is Expected.STATEMENT:
            statement = Statement(kind=node.kind)
            frame.require_function().body.append(statement)
        self._stack.push(Context.LOCAL_DECLARATION, Expected.VARIABLE_TYPE, statement=statement)
        return ControlFlow.CONTINUE

    def _enter_init_declarator(self, node: SyntaxNode) -> ControlFlow:
        self._stack.push(Context.LOCAL_INIT_DECLARATOR, Expected.VARIABLE_NAME)
        return ControlFlow.CONTINUE

    def _enter_number_literal(self, node: SyntaxNode) -> ControlFlow:
        if self._stack.at(Context.LOCAL_INIT_DECLARATOR, Expected.LOCAL_INIT_DECLARATOR_RIGHT):
            self._stack.top.require_expr().right = Literal(node.text)
        return ControlFlow.CONTINUE

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _declarator_slot(self) -> Expr:
        """
        Expr receiving the next declared name.

        The placeholder slot is used first; every further declarator of the
        same declaration (`int x = 1, y = 2;`) gets a new Expr of the same type.
        """
        frame = self._stack.top
        expr = frame.require_expr()
        if not expr.left.name:
            return expr
        assert frame.statement is not None
        slot = Expr(left=Variable(type_name=expr.left.type_name))
        frame.statement.expr.append(slot)
        return slot


def reduce_tree(root: SyntaxNode, module_name: str = DEFAULT_MODULE_NAME) -> ReductionResult:
    """Reduce one CST with a fresh CSTReducer."""
    return CSTReducer(module_name=module_name).reduce(root)

"""
Tree Walker and Traversal Control Protocol

Generic depth-first traversal over any externally produced tree. The walker
reports every node twice, on ENTER (before its children) and on EXIT (after
them), and obeys the ControlFlow signal returned by the consumer:

- CONTINUE: descend into the children, then deliver EXIT
- SKIP:     prune the subtree; no children, no EXIT, go on with the next sibling
- QUIT:     stop the whole traversal; nothing else is delivered

Anonymous (unnamed) nodes are reported like any other node; filtering trivia
is the consumer's decision.

The walker keeps its frames on an explicit stack instead of the Python call
stack, so trees deeper than the interpreter recursion limit are fine. The
order of events is the same as the recursive formulation.
"""

from enum import Enum
from typing import Callable, Iterator, List, Sequence, Tuple, TypeVar

from typing_extensions import Protocol

from .source_location import SourceLocation


class ControlFlow(Enum):
    CONTINUE = "continue"
    SKIP = "skip"
    QUIT = "quit"


class Step(Enum):
    ENTER = "enter"
    EXIT = "exit"


class SyntaxNode(Protocol):
    """What the walker and the reducer need from a CST node."""

    @property
    def kind(self) -> str: ...

    @property
    def is_named(self) -> bool: ...

    @property
    def children(self) -> Sequence["SyntaxNode"]: ...

    @property
    def text(self) -> str: ...

    @property
    def location(self) -> SourceLocation: ...


N = TypeVar("N", bound=SyntaxNode)
Visitor = Callable[[Step, N], ControlFlow]


def traverse(root: N, visit: Visitor[N]) -> ControlFlow:
    """
    Walk `root` depth-first, calling `visit(step, node)` on ENTER and EXIT.

    Returns ControlFlow.QUIT if the consumer aborted the traversal and
    ControlFlow.CONTINUE otherwise. SKIP returned on EXIT has nothing left to
    prune and is treated like CONTINUE.
    """
    signal = visit(Step.ENTER, root)
    if signal is ControlFlow.QUIT:
        return ControlFlow.QUIT
    if signal is ControlFlow.SKIP:
        return ControlFlow.CONTINUE

    pending: List[Tuple[N, Iterator[N]]] = [(root, iter(root.children))]
    while pending:
        node, children = pending[-1]
        child = next(children, None)
        if child is None:
            pending.pop()
            if visit(Step.EXIT, node) is ControlFlow.QUIT:
                return ControlFlow.QUIT
            continue

        signal = visit(Step.ENTER, child)
        if signal is ControlFlow.QUIT:
            return ControlFlow.QUIT
        if signal is ControlFlow.CONTINUE:
            pending.append((child, iter(child.children)))

    return ControlFlow.CONTINUE

"""
Test utilities for the cstreduce test suite.

Provides a hand-built SyntaxNode implementation for walker/reducer tests
that should not depend on a parser, and the parse-then-reduce helper.
"""

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from cstreduce.frontend.parser import CParser
from cstreduce.passes.cst_reduction import CSTReducer, ReductionResult
from cstreduce.shared.source_location import SourceLocation
from cstreduce.shared.tree_walker import ControlFlow, Step

EXAMPLES_DIR = Path(__file__).parent.parent / "examples" / "c"


@dataclass
class FakeNode:
    """Minimal SyntaxNode: kind, named flag, text and children."""
    kind: str
    children: List["FakeNode"] = field(default_factory=list)
    is_named: bool = True
    text: str = ""
    location: SourceLocation = field(default_factory=lambda: SourceLocation("<fake>", 1, 1))

    def __repr__(self) -> str:
        return f"FakeNode({self.kind!r})"


def named(kind: str, *children: FakeNode, text: str = "") -> FakeNode:
    return FakeNode(kind=kind, children=list(children), text=text)


def anon(text: str) -> FakeNode:
    return FakeNode(kind=text, is_named=False, text=text)


def leaf(kind: str, text: str) -> FakeNode:
    return FakeNode(kind=kind, text=text)


class EventRecorder:
    """Visitor recording (step, kind) pairs; answers with per-kind overrides."""

    def __init__(self, on_enter: Optional[dict] = None, on_exit: Optional[dict] = None):
        self.events: List[Tuple[str, str]] = []
        self.on_enter = on_enter or {}
        self.on_exit = on_exit or {}

    def __call__(self, step: Step, node: FakeNode) -> ControlFlow:
        self.events.append((step.value, node.kind))
        table = self.on_enter if step is Step.ENTER else self.on_exit
        return table.get(node.kind, ControlFlow.CONTINUE)


def fake_add_function() -> FakeNode:
    """tree-sitter-c shaped CST of `int add(int a, int b) { }`."""
    return named(
        "translation_unit",
        named(
            "function_definition",
            leaf("primitive_type", "int"),
            named(
                "function_declarator",
                leaf("identifier", "add"),
                named(
                    "parameter_list",
                    anon("("),
                    named("parameter_declaration", leaf("primitive_type", "int"), leaf("identifier", "a")),
                    anon(","),
                    named("parameter_declaration", leaf("primitive_type", "int"), leaf("identifier", "b")),
                    anon(")"),
                ),
            ),
            named("compound_statement", anon("{"), anon("}")),
        ),
    )


def reduce_source(source: str, parser: Optional[CParser] = None,
                  reducer: Optional[CSTReducer] = None) -> ReductionResult:
    """Parse with the lark frontend and reduce."""
    p = parser if parser is not None else CParser()
    r = reducer if reducer is not None else CSTReducer()
    return r.reduce(p.parse(source, "<test>"))


def count_named(node) -> int:
    """Number of named nodes in a SyntaxNode tree."""
    total = 0
    pending = [node]
    while pending:
        current = pending.pop()
        if current.is_named:
            total += 1
        pending.extend(current.children)
    return total


def get_example_files() -> List[Path]:
    if EXAMPLES_DIR.exists():
        return sorted(EXAMPLES_DIR.glob("*.c"))
    return []

"""
Grammar vocabulary boundary

CST producers report node kinds as free-form strings. This module is the
only place those strings are named: classify() turns them into the closed
NodeKind enumeration once, so the reducer matches on enum members and an
unknown symbol is a single, local, explicit outcome (NodeKind.UNRECOGNIZED).
"""

from enum import Enum
from typing import Dict


class NodeKind(Enum):
    """Node kinds of the tree-sitter-c vocabulary the reducer understands."""
    TRANSLATION_UNIT = "translation_unit"
    FUNCTION_DEFINITION = "function_definition"
    FUNCTION_DECLARATOR = "function_declarator"
    PRIMITIVE_TYPE = "primitive_type"
    IDENTIFIER = "identifier"
    PARAMETER_LIST = "parameter_list"
    PARAMETER_DECLARATION = "parameter_declaration"
    COMPOUND_STATEMENT = "compound_statement"
    DECLARATION = "declaration"
    INIT_DECLARATOR = "init_declarator"
    NUMBER_LITERAL = "number_literal"
    COMMENT = "comment"

    # Not a grammar symbol: any named kind outside the vocabulary above
    UNRECOGNIZED = "<unrecognized>"


_BY_GRAMMAR_NAME: Dict[str, NodeKind] = {
    kind.value: kind for kind in NodeKind if kind is not NodeKind.UNRECOGNIZED
}


def classify(grammar_kind: str) -> NodeKind:
    """Map a grammar's kind string to NodeKind (UNRECOGNIZED when unknown)."""
    return _BY_GRAMMAR_NAME.get(grammar_kind, NodeKind.UNRECOGNIZED)


def is_recognized(grammar_kind: str) -> bool:
    return grammar_kind in _BY_GRAMMAR_NAME

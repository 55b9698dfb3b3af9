"""
Lark CST adapter

Presents a lark parse tree (built with keep_all_tokens and
propagate_positions) through the SyntaxNode interface the walker and the
reducer consume:

- every rule Tree is a named node whose kind is the rule name
- a Token is named only when its terminal stands for a grammar symbol
  (IDENTIFIER -> identifier, NUMBER -> number_literal, ...); keywords and
  punctuation are anonymous and their kind is their own text
"""

from typing import Dict, List, Optional, Union

from lark import Token, Tree
from typing_extensions import TypeAlias

from ..shared.source_location import SourceLocation

LarkItem: TypeAlias = Union[Tree, Token]

# Terminals that surface as named leaves, keyed by terminal name
NAMED_TERMINALS: Dict[str, str] = {
    "IDENTIFIER": "identifier",
    "NUMBER": "number_literal",
    "STRING": "string_literal",
    "CHAR": "char_literal",
}


class LarkSyntaxNode:
    """Read-only view of one lark Tree or Token."""

    __slots__ = ("item", "source", "source_file", "_children")

    def __init__(self, item: LarkItem, source: str, source_file: str):
        self.item = item
        self.source = source
        self.source_file = source_file
        self._children: Optional[List["LarkSyntaxNode"]] = None

    @property
    def kind(self) -> str:
        if isinstance(self.item, Tree):
            return str(self.item.data)
        return NAMED_TERMINALS.get(self.item.type, str(self.item))

    @property
    def is_named(self) -> bool:
        if isinstance(self.item, Tree):
            return True
        return self.item.type in NAMED_TERMINALS

    @property
    def children(self) -> List["LarkSyntaxNode"]:
        if self._children is None:
            if isinstance(self.item, Tree):
                self._children = [
                    LarkSyntaxNode(child, self.source, self.source_file)
                    for child in self.item.children
                ]
            else:
                self._children = []
        return self._children

    @property
    def text(self) -> str:
        if isinstance(self.item, Token):
            return str(self.item)
        meta = self.item.meta
        if meta.empty:
            return ""
        return self.source[meta.start_pos:meta.end_pos]

    @property
    def location(self) -> SourceLocation:
        if isinstance(self.item, Token):
            pos = self.item
        elif not self.item.meta.empty:
            pos = self.item.meta
        else:
            return SourceLocation(file=self.source_file, line=1, column=1)
        return SourceLocation(
            file=self.source_file,
            line=pos.line,
            column=pos.column,
            start=pos.start_pos,
            end=pos.end_pos,
            end_line=pos.end_line,
            end_column=pos.end_column,
        )

    def __repr__(self) -> str:
        if self.is_named:
            return f"LarkSyntaxNode({self.kind!r})"
        return f"LarkSyntaxNode(<{self.kind}>)"

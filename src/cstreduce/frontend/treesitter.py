"""
tree-sitter C backend

Optional CST producer (install the `treesitter` extra). tree-sitter nodes
already expose kind/named/span/children; TreeSitterSyntaxNode only renames
them to the SyntaxNode interface and decodes text.
"""

import logging
from typing import List, Optional

import tree_sitter_c
from tree_sitter import Language, Node, Parser

from ..shared.errors import ParseError
from ..shared.source_location import SourceLocation
from ..utils.config import DEFAULT_FILE_ENCODING, DEFAULT_SOURCE_NAME

logger = logging.getLogger(__name__)

C_LANGUAGE = Language(tree_sitter_c.language())


class TreeSitterSyntaxNode:
    __slots__ = ("node", "source", "source_file", "_children")

    def __init__(self, node: Node, source: bytes, source_file: str):
        self.node = node
        self.source = source
        self.source_file = source_file
        self._children: Optional[List["TreeSitterSyntaxNode"]] = None

    @property
    def kind(self) -> str:
        return self.node.type

    @property
    def is_named(self) -> bool:
        return self.node.is_named

    @property
    def children(self) -> List["TreeSitterSyntaxNode"]:
        if self._children is None:
            self._children = [TreeSitterSyntaxNode(c, self.source, self.source_file) for c in self.node.children]
        return self._children

    @property
    def text(self) -> str:
        raw = self.node.text
        return raw.decode(DEFAULT_FILE_ENCODING) if raw is not None else ""

    @property
    def location(self) -> SourceLocation:
        return _location(self.node, self.source, self.source_file)

    def __repr__(self) -> str:
        return f"TreeSitterSyntaxNode({self.kind!r})"


class TreeSitterCParser:
    """Source text -> CST using tree-sitter-c."""

    def __init__(self):
        self.parser = Parser(C_LANGUAGE)

    def parse(self, source: str, source_file: str = DEFAULT_SOURCE_NAME) -> TreeSitterSyntaxNode:
        encoded = source.encode(DEFAULT_FILE_ENCODING)
        tree = self.parser.parse(encoded)
        root = tree.root_node
        if root.has_error:
            bad = _first_error(root)
            location = _location(bad, encoded, source_file) if bad is not None else None
            what = f"missing '{bad.type}'" if bad is not None and bad.is_missing else "syntax error"
            raise ParseError(f"Parse error: {what}", source_file, location, source_code=source)
        logger.debug(f"Parsed {source_file} with tree-sitter: {root.child_count} top-level item(s)")
        return TreeSitterSyntaxNode(root, encoded, source_file)


def _location(node: Node, source: bytes, source_file: str) -> SourceLocation:
    start_row, end_row = node.start_point[0], node.end_point[0]
    return SourceLocation(
        file=source_file,
        line=start_row + 1,
        column=_column(source, node.start_byte),
        start=node.start_byte,
        end=node.end_byte,
        end_line=end_row + 1,
        end_column=_column(source, node.end_byte),
    )


def _column(source: bytes, offset: int) -> int:
    """1-based character column of a byte offset (tree-sitter points count bytes)."""
    line_start = source.rfind(b"\n", 0, offset) + 1
    return len(source[line_start:offset].decode(DEFAULT_FILE_ENCODING)) + 1


def _first_error(root: Node) -> Optional[Node]:
    """First ERROR or MISSING node in document order."""
    pending = [root]
    while pending:
        node = pending.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        pending.extend(reversed(node.children))
    return None

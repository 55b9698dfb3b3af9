"""
C subset parser

Lark LALR parser over grammar.lark, producing a tree-sitter-c shaped CST
wrapped in LarkSyntaxNode.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from lark import Lark, Tree
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken

from ..shared.errors import ParseError
from ..shared.source_location import SourceLocation
from ..utils.config import (
    DEFAULT_PARSER_CACHE_FILE,
    DEFAULT_SOURCE_NAME,
    GRAMMAR_FILE_NAME,
    GRAMMAR_START_RULE,
)
from .syntax_tree import LarkSyntaxNode

logger = logging.getLogger(__name__)


class CParser:
    """
    Source text -> CST.

    The lark parser is built once per instance (with Lark's native grammar
    cache) and is reusable across parses.
    """

    def __init__(self, cache_file: Optional[Union[str, bool]] = DEFAULT_PARSER_CACHE_FILE):
        grammar_path = Path(__file__).parent / GRAMMAR_FILE_NAME
        self.parser = Lark.open(
            str(grammar_path),
            start=GRAMMAR_START_RULE,
            parser='lalr',              # Required for caching
            cache=cache_file or False,
            propagate_positions=True,   # Spans for node text and diagnostics
            keep_all_tokens=True,       # Punctuation and keywords become anonymous nodes
            maybe_placeholders=False,
        )

    def parse_tree(self, source: str, source_file: str = DEFAULT_SOURCE_NAME) -> Tree:
        """Parse to a raw lark Tree."""
        try:
            return self.parser.parse(source)
        except UnexpectedInput as e:
            raise ParseError(
                f"Parse error: {_describe(e)}",
                source_file,
                _error_location(e, source_file),
                source_code=source,
            ) from e

    def parse(self, source: str, source_file: str = DEFAULT_SOURCE_NAME) -> LarkSyntaxNode:
        tree = self.parse_tree(source, source_file)
        logger.debug(f"Parsed {source_file}: {len(tree.children)} top-level item(s)")
        return LarkSyntaxNode(tree, source, source_file)


def _describe(error: UnexpectedInput) -> str:
    if isinstance(error, UnexpectedEOF):
        return "unexpected end of input"
    if isinstance(error, UnexpectedToken):
        if error.token.type == "$END":
            return "unexpected end of input"
        return f"unexpected token '{error.token}'"
    if isinstance(error, UnexpectedCharacters):
        return f"unexpected character '{error.char}'"
    return str(error).splitlines()[0]


def _error_location(error: UnexpectedInput, source_file: str) -> Optional[SourceLocation]:
    line = getattr(error, "line", -1)
    column = getattr(error, "column", -1)
    if not isinstance(line, int) or line < 1:
        return None
    return SourceLocation(
        file=source_file,
        line=line,
        column=column,
        start=getattr(error, "pos_in_stream", 0) or 0,
    )

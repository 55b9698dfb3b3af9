"""
Source Location (Span)

Position of a CST node in the text it was parsed from.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SourceLocation:
    """
    Source location of a CST node.

    - File, 1-based line and column of the first character
    - start/end offsets into the source as the CST producer counts them
      (characters for lark, bytes for tree-sitter)
    - Immutable (frozen) for hashability
    """
    file: str
    line: int
    column: int
    start: int = 0
    end: int = 0
    end_line: int = 0
    end_column: int = 0

    def __str__(self) -> str:
        """Format as file:line:column"""
        return f"{self.file}:{self.line}:{self.column}"

"""
cstreduce frontend
==================

CST producers. The lark parser ships with the package; the tree-sitter
backend lives in frontend.treesitter and needs the `treesitter` extra.
"""

from .parser import CParser
from .syntax_tree import LarkSyntaxNode, NAMED_TERMINALS

__all__ = [
    'CParser',
    'LarkSyntaxNode',
    'NAMED_TERMINALS',
]

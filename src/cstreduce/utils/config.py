"""
Configuration constants to replace magic strings throughout cstreduce
"""

import os
import tempfile

# Domain model defaults
DEFAULT_MODULE_NAME = "main"  # Name given to the Module built for one input
DEFAULT_EXPR_KIND = "Expr"  # Kind tag of a placeholder expression slot
LITERAL_EXPR_KIND = "Literal"
VARIABLE_EXPR_KIND = "Variable"

# Parser configuration constants (cache under temp dir to avoid cluttering project root)
DEFAULT_PARSER_CACHE_FILE = os.path.join(tempfile.gettempdir(), "cstreduce_c_grammar.cache")
GRAMMAR_FILE_NAME = "grammar.lark"
GRAMMAR_START_RULE = "translation_unit"

# Backends able to produce a CST
LARK_BACKEND = "lark"
TREESITTER_BACKEND = "treesitter"
DEFAULT_BACKEND = LARK_BACKEND
SUPPORTED_BACKENDS = (LARK_BACKEND, TREESITTER_BACKEND)

# Source handling
DEFAULT_SOURCE_NAME = "<input>"
DEFAULT_FILE_ENCODING = "utf-8"

# Diagnostic colouring (NO_COLOR is honoured as well)
COLOR_ENV_VAR = "CSTREDUCE_COLOR"
COLOR_DISABLED_VALUES = ("0", "false", "no", "never")

# Error codes
UNRECOGNIZED_SYMBOL_CODE = "R0001"
UNSUPPORTED_CONSTRUCT_CODE = "R0002"
PARSE_ERROR_CODE = "R0100"
INTERNAL_ERROR_CODE = "R9999"

# Serialization
SEXPR_MAX_LINE = 100
SEXPR_INDENT = "  "

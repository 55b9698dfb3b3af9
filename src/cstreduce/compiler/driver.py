"""
Reduction Driver

Orchestrates one run: source text -> CST (lark or tree-sitter) -> CSTReducer
-> Module, collecting diagnostics in an ErrorReporter.
"""

import logging
from pathlib import Path
from typing import Any, Optional, Union

from ..passes.cst_reduction import CSTReducer, ReductionResult
from ..shared.errors import ErrorReporter, ParseError
from ..shared.nodes import Module
from ..utils.config import (
    DEFAULT_BACKEND,
    DEFAULT_MODULE_NAME,
    DEFAULT_PARSER_CACHE_FILE,
    LARK_BACKEND,
    SUPPORTED_BACKENDS,
    TREESITTER_BACKEND,
)
from ..utils.io_utils import read_source_file

logger = logging.getLogger(__name__)


class ReductionOutcome:
    """What a driver run produced."""
    def __init__(
        self,
        module: Optional[Module] = None,
        reporter: Optional[ErrorReporter] = None,
        result: Optional[ReductionResult] = None,
        success: bool = False
    ):
        self.module = module
        self.reporter = reporter
        self.result = result
        self.success = success

    def has_errors(self) -> bool:
        if self.reporter:
            return self.reporter.has_errors()
        return not self.success

    def get_errors(self) -> list:
        if self.reporter and self.reporter.has_errors():
            return [self.reporter.format_all_errors(color=False)]
        return []


class ReductionDriver:
    """
    Parser + reducer for one backend.

    Stateless between runs: the parser is reused, the reducer resets itself
    on every reduce().
    """

    def __init__(self, backend: str = DEFAULT_BACKEND, module_name: str = DEFAULT_MODULE_NAME,
                 cache_file: Optional[Union[str, bool]] = DEFAULT_PARSER_CACHE_FILE):
        if backend not in SUPPORTED_BACKENDS:
            raise ValueError(
                f"Unknown backend '{backend}' (expected one of: {', '.join(SUPPORTED_BACKENDS)})"
            )
        self.backend = backend
        self.parser = self._make_parser(backend, cache_file)
        self.reducer = CSTReducer(module_name=module_name)

    @staticmethod
    def _make_parser(backend: str, cache_file: Optional[Union[str, bool]]) -> Any:
        if backend == TREESITTER_BACKEND:
            from ..frontend.treesitter import TreeSitterCParser
            return TreeSitterCParser()
        assert backend == LARK_BACKEND
        from ..frontend.parser import CParser
        return CParser(cache_file=cache_file)

    def reduce_source(self, source: str, source_file: str) -> ReductionOutcome:
        reporter = ErrorReporter({source_file: source})
        try:
            root = self.parser.parse(source, source_file)
        except ParseError as e:
            logger.warning(f"{source_file}: {e.message}")
            reporter.report(e.to_error())
            return ReductionOutcome(reporter=reporter, success=False)

        result = self.reducer.reduce(root)
        if not result.completed:
            assert result.diagnostic is not None
            logger.warning(f"{source_file}: reduction stopped: {result.diagnostic.message}")
            reporter.report(result.diagnostic.to_error())
            return ReductionOutcome(module=result.module, reporter=reporter,
                                    result=result, success=False)

        return ReductionOutcome(module=result.module, reporter=reporter,
                                result=result, success=True)

    def reduce_file(self, path: Union[Path, str]) -> ReductionOutcome:
        path = Path(path)
        return self.reduce_source(read_source_file(path), str(path))

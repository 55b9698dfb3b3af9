#!/usr/bin/env python3
"""
Tests for the reduction driver and the command line entry point.
"""

import pytest

from cstreduce.__main__ import main
from cstreduce.compiler.driver import ReductionDriver
from cstreduce.shared.nodes import Variable


class TestReductionDriver:

    def test_success(self, driver):
        outcome = driver.reduce_source("int add(int a, int b) { }", "add.c")
        assert outcome.success
        assert not outcome.has_errors()
        assert outcome.get_errors() == []
        assert outcome.result.completed
        assert outcome.module.functions[0].args[1] == Variable("b", "int")

    def test_parse_error(self, driver):
        outcome = driver.reduce_source("int main() {", "broken.c")
        assert not outcome.success
        assert outcome.module is None
        assert outcome.result is None
        assert outcome.has_errors()
        assert "error[R0100]" in outcome.get_errors()[0]

    def test_aborted_reduction_keeps_partial_module(self, driver):
        source = "int main() {\n    int x = 1;\n    while (x) { }\n}\n"
        outcome = driver.reduce_source(source, "loop.c")
        assert not outcome.success
        assert outcome.module is not None
        assert len(outcome.module.functions[0].body) == 1
        errors = outcome.get_errors()[0]
        assert "error[R0001]: unsupported construct 'while_statement'" in errors
        assert "3 |     while (x) { }" in errors
        assert "aborting due to 1 previous error" in errors

    def test_reduce_file(self, driver, tmp_path):
        path = tmp_path / "locals.c"
        path.write_text("int main() { int x = 5; }\n", encoding="utf-8")
        outcome = driver.reduce_file(path)
        assert outcome.success
        assert outcome.module.functions[0].body[0].expr[0].left == Variable("x", "int")

    def test_module_name(self):
        driver = ReductionDriver(module_name="lib", cache_file=False)
        assert driver.reduce_source("void f() { }", "f.c").module.name == "lib"

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Unknown backend"):
            ReductionDriver(backend="clang")


class TestCommandLine:

    def _write(self, tmp_path, source, name="input.c"):
        path = tmp_path / name
        path.write_text(source, encoding="utf-8")
        return str(path)

    def test_prints_module(self, tmp_path, capsys):
        path = self._write(tmp_path, "int add(int a, int b) { }")
        assert main([path]) == 0
        out = capsys.readouterr().out
        assert out.startswith('(module "main"')
        assert '(function "add"' in out
        assert '(variable "a" "int")' in out

    def test_module_name_flag(self, tmp_path, capsys):
        path = self._write(tmp_path, "void f() { }")
        assert main([path, "--module-name", "lib"]) == 0
        assert capsys.readouterr().out.startswith('(module "lib"')

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "absent.c")]) == 1
        assert "file not found" in capsys.readouterr().err

    def test_aborted_reduction(self, tmp_path, capsys, no_color):
        path = self._write(tmp_path, "int main() { int x = 1; return x; }")
        assert main([path]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "error[R0001]" in captured.err

    def test_partial_flag(self, tmp_path, capsys, no_color):
        path = self._write(tmp_path, "int main() { int x = 1; return x; }")
        assert main([path, "--partial"]) == 1
        captured = capsys.readouterr()
        assert '(variable "x" "int")' in captured.out
        assert "return_statement" in captured.err

    def test_parse_error(self, tmp_path, capsys, no_color):
        path = self._write(tmp_path, "int main( {")
        assert main([path, "--partial"]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "error[R0100]" in captured.err

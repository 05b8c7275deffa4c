"""
Cakefile 解析测试 — 覆盖：
  1. 目标声明与依赖解析
  2. 任务行收集（制表符、空行、原样保留）
  3. "no target" 解析错误及行号
  4. 重复声明的合并
  5. 从磁盘读取

运行方式:
    pytest tests/test_parser.py -v
"""

from __future__ import annotations

import pytest

from cakefile import parse_cakefile, parse_lines, read_lines
from dag.graph import TargetGraph
from errors import CakefileReadError, ParseError


SIMPLE = [
    "a: b",
    "\techo A",
    "b:",
    "\techo B",
]


class TestDeclarations:

    def test_simple_cakefile(self):
        graph = parse_lines(SIMPLE)

        assert isinstance(graph, TargetGraph)
        assert list(graph) == ["a", "b"]
        assert graph["a"].dependencies == ["b"]
        assert graph["a"].commands == ["echo A"]
        assert graph["b"].dependencies == []
        assert graph["b"].commands == ["echo B"]

    def test_dependencies_split_on_whitespace(self):
        graph = parse_lines(["all:  build   test  ", "build:", "test:"])
        # 连续空格产生的空 token 被丢弃
        assert graph["all"].dependencies == ["build", "test"]

    def test_forward_references_are_legal(self):
        graph = parse_lines(["top: later", "later:"])
        assert graph["top"].dependencies == ["later"]

    def test_declaration_line_numbers(self):
        graph = parse_lines(["", "a:", "\tx", "", "b: a"])
        assert graph["a"].line == 2
        assert graph["b"].line == 5

    def test_target_without_commands(self):
        graph = parse_lines(["phony: a b", "a:", "b:"])
        assert graph["phony"].commands == []

    def test_str_lists_commands(self):
        graph = parse_lines(["build:", "\tmake a", "\tmake b"])
        assert str(graph["build"]) == "build: [make a, make b]"


class TestTasks:

    def test_task_text_kept_verbatim(self):
        graph = parse_lines(["t:", "\t  echo 'a:b'  ;  ls\t"])
        # 只去掉第一个制表符，其余内容原样保留
        assert graph["t"].commands == ["  echo 'a:b'  ;  ls\t"]

    def test_task_with_colon_is_not_a_declaration(self):
        graph = parse_lines(["t:", "\tfoo: bar"])
        assert list(graph) == ["t"]
        assert graph["t"].commands == ["foo: bar"]

    def test_blank_lines_do_not_end_task_block(self):
        graph = parse_lines(["t:", "\tone", "", "   ", "\ttwo", "u:", "\tthree"])
        assert graph["t"].commands == ["one", "two"]
        assert graph["u"].commands == ["three"]

    def test_double_tab_keeps_second_tab(self):
        graph = parse_lines(["t:", "\t\tindented"])
        assert graph["t"].commands == ["\tindented"]


class TestParseErrors:

    def test_line_without_colon(self):
        with pytest.raises(ParseError) as exc_info:
            parse_lines(["foo"])
        assert exc_info.value.line == 1
        assert exc_info.value.message == "no target"

    def test_colon_as_first_character(self):
        with pytest.raises(ParseError) as exc_info:
            parse_lines([":build"])
        assert exc_info.value.line == 1

    def test_error_line_number_counts_blank_and_task_lines(self):
        lines = ["a:", "\techo a", "", "b: a", "\techo b", "oops"]
        with pytest.raises(ParseError) as exc_info:
            parse_lines(lines)
        assert exc_info.value.line == 6
        assert str(exc_info.value) == "no target [line 6]"

    def test_task_before_any_declaration(self):
        with pytest.raises(ParseError) as exc_info:
            parse_lines(["", "\techo orphan", "a:"])
        assert exc_info.value.line == 2


class TestDuplicates:

    def test_duplicate_declaration_merges_into_first(self):
        graph = parse_lines([
            "a: b",
            "\tfirst",
            "b:",
            "c:",
            "a: c b",
            "\tsecond",
        ])

        assert list(graph) == ["a", "b", "c"]
        # 依赖去重追加，命令按出现顺序追加
        assert graph["a"].dependencies == ["b", "c"]
        assert graph["a"].commands == ["first", "second"]
        assert graph["a"].line == 1


class TestDeterminism:

    def test_reparse_yields_equal_graph(self):
        lines = ["all: lib app", "\techo all", "lib:", "\tcc lib.c", "app: lib", "\tcc app.c"]
        assert parse_lines(lines) == parse_lines(lines)

    def test_different_commands_are_not_equal(self):
        assert parse_lines(["a:", "\tx"]) != parse_lines(["a:", "\ty"])


class TestReadFromDisk:

    def test_parse_cakefile(self, tmp_path):
        path = tmp_path / "Cakefile"
        path.write_text("a: b\r\n\techo A\r\nb:\r\n\techo B\r\n", encoding="utf-8")

        graph = parse_cakefile(path)

        assert graph.source == str(path)
        assert graph["a"].commands == ["echo A"]
        assert graph["b"].commands == ["echo B"]

    def test_read_lines_keeps_leading_tabs(self, tmp_path):
        path = tmp_path / "Cakefile"
        path.write_text("a:\n\tcmd\n", encoding="utf-8")
        assert read_lines(path) == ["a:", "\tcmd"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(CakefileReadError) as exc_info:
            read_lines(tmp_path / "nope")
        assert "No such file" in exc_info.value.reason

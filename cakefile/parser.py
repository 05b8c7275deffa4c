"""
Target Graph Parser - converts Cakefile lines into a TargetGraph.
目标图解析器 —— 将 Cakefile 的行转换为 TargetGraph。

Grammar (line oriented):
语法（按行）：

    name: dep1 dep2        <- declaration / 目标声明
    \tcommand one          <- task, leading tab stripped / 任务行，去掉行首制表符
    \tcommand two

    other:                 <- blank lines are ignored anywhere / 空行在任何位置都被忽略
    \tcommand

Rules:
规则：
  - A non-blank line that does not start with a tab is a declaration and
    must contain ':' somewhere after its first character.
    非空且不以制表符开头的行是声明行，冒号不能位于首字符。
  - Task lines belong to the most recent declaration and are kept verbatim.
    任务行归属于最近的声明，内容原样保留，不会再被当作声明解析。
  - Declaring the same name twice merges the second block into the first.
    同名目标重复声明时，第二个块合并到第一个节点中。
  - Any error aborts the whole parse; no partial graph is returned.
    任何错误都会中止整个解析，不返回部分结果。
"""

from __future__ import annotations

import logging
import os
from typing import Iterable

from cakefile.reader import read_lines
from dag.graph import TargetGraph
from errors import ParseError
from schema import Target

logger = logging.getLogger(__name__)

TASK_PREFIX = "\t"
NO_TARGET = "no target"


def parse_lines(lines: Iterable[str], source: str = "") -> TargetGraph:
    """
    Parse an ordered sequence of raw lines into a TargetGraph.
    将有序的原始行序列解析为 TargetGraph。

    Args:
        lines:  lines without terminators, as returned by read_lines().
        source: optional file name, only used for logging.

    Raises:
        ParseError: a declaration line has no colon, or its colon is the
                    first character, or a task line precedes any declaration.
    """
    targets: dict[str, Target] = {}
    current: Target | None = None  # 当前正在收集任务的目标

    for lineno, raw in enumerate(lines, start=1):
        if not raw.strip():
            continue

        if raw.startswith(TASK_PREFIX):
            if current is None:
                raise ParseError(lineno, NO_TARGET)
            current.commands.append(raw[len(TASK_PREFIX):])
            continue

        name, dependencies = _parse_declaration(raw, lineno)
        existing = targets.get(name)
        if existing is None:
            current = Target(name=name, dependencies=dependencies, line=lineno)
            targets[name] = current
            continue

        # 重复声明：合并到最先创建的节点
        logger.warning(
            "[Parser] Target '%s' redeclared on line %d (first on line %d), merging",
            name, lineno, existing.line,
        )
        for dep in dependencies:
            if dep not in existing.dependencies:
                existing.dependencies.append(dep)
        current = existing

    graph = TargetGraph(targets, source=source)
    logger.debug("[Parser] %s parsed: %s", source or "<lines>", graph.summary())
    return graph


def parse_cakefile(path: str | os.PathLike[str]) -> TargetGraph:
    """
    Read and parse a Cakefile from disk.
    从磁盘读取并解析 Cakefile。
    """
    return parse_lines(read_lines(path), source=os.fspath(path))


def _parse_declaration(raw: str, lineno: int) -> tuple[str, list[str]]:
    """Split `name: dep1 dep2` into its name and dependency tokens."""
    decl = raw.strip()
    pos = decl.find(":")
    if pos <= 0:
        raise ParseError(lineno, NO_TARGET)
    name = decl[:pos].rstrip()
    dependencies = decl[pos + 1:].split()  # 连续空格产生的空 token 被丢弃
    return name, dependencies

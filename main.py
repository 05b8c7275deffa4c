"""
cake - command-line entry point.
cake —— 命令行入口。

Reads a Cakefile, prints the execution order, then runs every target's
commands in that order, stopping at the first failure.
读取 Cakefile，打印执行顺序，然后按该顺序运行每个目标的命令，遇到第一个失败即停止。

Usage:
    python main.py                 # run ./Cakefile (or $CAKEFILE)
    python main.py path/Cakefile   # run a specific file
    python main.py --list          # print the parsed targets only
    python main.py -v              # debug logging

Exit code: 0 on full success, 1 on any read, parse, ordering or task error.
退出码：全部成功为 0；读取、解析、排序或任务出错为 1。
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

import config
from cakefile import parse_cakefile
from dag.executor import TaskExecutor
from errors import CakeError, CakefileReadError, ParseError
from schema import RunReport
from tools.base import CommandRunner
from tools.shell import ShellCommandRunner

console = Console()                   # 进度信息 -> stdout
err_console = Console(stderr=True)    # 诊断信息 -> stderr

logger = logging.getLogger(__name__)


def _out(text: str) -> None:
    # 行内容可能含有 [..] 或 :name:，关闭 Rich markup/emoji 以原样输出
    console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)


def _err(text: str) -> None:
    err_console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)


# ======================================================================
# Event handler - prints executor progress
# 事件处理器 —— 打印执行进度
# ======================================================================

def on_event(event: str, data: Any) -> None:
    """
    Handle events from the TaskExecutor and display them.
    处理来自 TaskExecutor 的事件并在控制台展示。
    """
    if event == "task_start":
        # 每条命令执行前回显
        if config.CAKE_ECHO_COMMANDS:
            _out(f"@{data['command']}")

    elif event == "target_skipped":
        logger.debug("Skipping target %s", data["target"].name)

    elif event == "run_complete":
        report: RunReport = data
        logger.debug(report.summary())


def _report_failure(report: RunReport) -> None:
    if report.failed_command is not None:
        _err(f"Error: processing task [{report.failed_command}]")
    _err(f"Error: processing target [{report.failed_target}]")


# ======================================================================
# Driver
# 驱动
# ======================================================================

def run(
    path: str | None = None,
    list_only: bool = False,
    runner: CommandRunner | None = None,
) -> int:
    """
    Parse, order and execute a Cakefile. Returns the process exit code.
    解析、排序并执行 Cakefile，返回进程退出码。
    """
    path = path or config.CAKEFILE

    try:
        graph = parse_cakefile(path)
    except CakefileReadError as exc:
        _err(f"Error: {exc}")
        return 1
    except ParseError as exc:
        _err(f"Error: {exc.message} [line {exc.line}]")
        return 1

    if list_only:
        for target in graph.targets.values():
            _out(str(target))
        return 0

    try:
        order = graph.topological_sort(detect_cycles=config.CAKE_DETECT_CYCLES)
    except CakeError as exc:
        _err(f"Error: {exc}")
        return 1

    _out("[...Target Order...]")
    for name in order:
        _out(name)
    _out("[...Processing...]")

    executor = TaskExecutor(runner or ShellCommandRunner(), on_event=on_event)
    report = executor.execute(graph, order)
    if not report.success:
        _report_failure(report)
        return 1
    return 0


def setup_logging(verbose: bool = False) -> None:
    """
    Configure logging with rich handler, bound to stderr.
    使用 Rich 处理器配置日志系统（输出到 stderr）。
    verbose=True 时启用 DEBUG 级别。
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False, rich_tracebacks=True)],
    )


def main() -> None:
    """
    程序入口：解析命令行参数。
    - 位置参数：Cakefile 路径（可选）
    - --list：仅打印解析出的目标
    - -v / --verbose：启用调试日志
    """
    verbose = "--verbose" in sys.argv or "-v" in sys.argv
    list_only = "--list" in sys.argv
    setup_logging(verbose)

    # 过滤掉以 - 开头的选项参数，保留位置参数
    args = [a for a in sys.argv[1:] if not a.startswith("-")]
    sys.exit(run(args[0] if args else None, list_only=list_only))


if __name__ == "__main__":
    main()

"""
Exception taxonomy for cake.
cake 的异常体系。

Every fatal condition of a run derives from CakeError so the driver can
report it and exit non-zero:
所有致命错误均继承自 CakeError，由 Driver 统一报告并以非零码退出：

  - CakefileReadError:      input file missing or unreadable / 文件缺失或不可读
  - ParseError:             "no target" on a declaration line / 声明行不合法
  - MissingDependencyError: dependency names an undeclared target / 依赖未声明的目标
  - CycleError:             dependency cycle (only when detection is on) / 依赖环（仅在开启检测时）
"""

from __future__ import annotations


class CakeError(Exception):
    """Base class for all cake errors. / 所有 cake 错误的基类。"""


class CakefileReadError(CakeError):
    """
    Raised when the Cakefile cannot be opened or read.
    无法打开或读取 Cakefile 时抛出。
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class ParseError(CakeError):
    """
    Raised when a line cannot be parsed. Carries the 1-based line number.
    解析失败时抛出，携带从 1 开始的行号。
    """

    def __init__(self, line: int, message: str = "no target"):
        self.line = line
        self.message = message
        super().__init__(f"{message} [line {line}]")


class MissingDependencyError(CakeError):
    """
    Raised by the orderer when a target depends on an undeclared target.
    排序时发现某目标依赖了未声明的目标。
    """

    def __init__(self, target: str, dependency: str):
        self.target = target
        self.dependency = dependency
        super().__init__(f"target [{target}] depends on undeclared target [{dependency}]")


class CycleError(CakeError):
    """Raised when cycle detection is enabled and the graph has a cycle."""

    def __init__(self, cycle: list[str]):
        self.cycle = list(cycle)
        super().__init__(f"dependency cycle: {' -> '.join(self.cycle)}")

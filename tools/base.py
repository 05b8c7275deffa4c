"""
Command Runner - Abstract capability for running one shell command.
CommandRunner —— 运行单条 shell 命令的抽象能力接口。

The executor only ever talks to this interface, so tests can swap in a
fake that records invocations instead of spawning processes.
Executor 只依赖此接口，测试时可替换为记录调用的假实现，而不必真正启动进程。
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from schema import ExitOutcome


class CommandRunner(ABC):
    """
    Abstract base class for command runners.
    所有命令运行器的抽象基类。
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Short runner name used in logs.
        运行器名称，用于日志。
        """

    @abstractmethod
    def run(self, command: str) -> ExitOutcome:
        """
        Run `command` to completion and report whether it succeeded.
        Must not raise for ordinary command failures.
        运行 `command` 直到结束并返回是否成功；普通的命令失败不应抛出异常。
        """

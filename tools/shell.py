"""
Shell Runner - Runs a command string through `<shell> -c <command>`.
Shell 运行器 —— 通过 `<shell> -c <command>` 运行命令字符串。

The child inherits stdin/stdout/stderr and the call blocks until it exits.
There is no timeout: a hung command blocks the whole run.
子进程继承标准输入输出，调用会阻塞直到其退出；没有超时机制。
"""

from __future__ import annotations

import logging
import subprocess

import config
from schema import ExitOutcome
from tools.base import CommandRunner

logger = logging.getLogger(__name__)


class ShellCommandRunner(CommandRunner):
    """
    Spawn one shell process per command and wait for it.
    每条命令启动一个 shell 进程并等待其结束。

    Success iff the process exits normally with status 0. A negative
    return code (killed by a signal), any non-zero status, or a failure
    to spawn the shell at all are reported as failures.
    仅当进程正常退出且状态码为 0 时视为成功；被信号终止（返回码为负）、
    非零退出码、或 shell 本身无法启动都视为失败。
    """

    def __init__(self, shell: str | None = None):
        self.shell = shell or config.CAKE_SHELL

    @property
    def name(self) -> str:
        return "shell"

    def run(self, command: str) -> ExitOutcome:
        logger.debug("[Shell] %s -c %r", self.shell, command)
        try:
            result = subprocess.run([self.shell, "-c", command], check=False)
        except OSError as exc:
            logger.error("[Shell] Could not start %s: %s", self.shell, exc)
            return ExitOutcome(success=False, error=str(exc))

        if result.returncode < 0:
            logger.debug("[Shell] Command killed by signal %d", -result.returncode)
        elif result.returncode != 0:
            logger.debug("[Shell] Command exited with status %d", result.returncode)
        return ExitOutcome(success=result.returncode == 0, returncode=result.returncode)

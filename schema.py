"""
Pydantic data models for cake.
Defines the core data structures shared by the parser, the graph and the executor.
cake 的 Pydantic 数据模型。
定义了贯穿 parser、graph、executor 各层的核心数据结构。

Build-time models (immutable after parsing):
构建期模型（解析完成后只读）：
  - Target:  a named unit of work with dependencies and commands

Run-time models (produced by the executor):
运行期模型（由 Executor 产生）：
  - ExitOutcome, TaskResult, TargetRun, RunReport
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


# ======================================================================
# Target graph models
# 目标图模型
# ======================================================================

class Target(BaseModel):
    """
    A named build unit declared in a Cakefile.
    Cakefile 中声明的一个构建目标。

        name: dep1 dep2
        \tcommand one
        \tcommand two
    """
    name: str = Field(min_length=1, description="Unique target name")                          # 目标唯一名称
    dependencies: list[str] = Field(default_factory=list, description="Names of prerequisite targets")  # 依赖目标名（保持声明顺序）
    commands: list[str] = Field(default_factory=list, description="Literal shell commands")    # 原样保存的 shell 命令
    line: int = Field(default=0, ge=0, description="1-based line of the declaration")          # 声明所在行号（0 表示非文件来源）

    def __str__(self) -> str:
        return f"{self.name}: [{', '.join(self.commands)}]"


# ======================================================================
# Execution models
# 执行模型
# ======================================================================

class TargetStatus(str, Enum):
    """
    Target lifecycle states, managed by TargetStateMachine.
    目标生命周期状态，由 TargetStateMachine 强制管理合法转移。

    Transition graph:
    转移图：
        PENDING -> RUNNING -> COMPLETED
                           -> FAILED
        PENDING            -> SKIPPED   (an earlier target failed / 前序目标失败)
    """
    PENDING = "pending"       # 等待执行
    RUNNING = "running"       # 正在执行命令
    COMPLETED = "completed"   # 全部命令成功（终态）
    FAILED = "failed"         # 某条命令失败（终态）
    SKIPPED = "skipped"       # 因前序目标失败而未执行（终态）


class ExitOutcome(BaseModel):
    """
    Result of running one shell command.
    运行单条 shell 命令的结果。
    """
    success: bool                                                                  # 退出码为 0 即成功
    returncode: int | None = Field(default=None, description="None if the process never started")  # 负值表示被信号终止
    error: str | None = Field(default=None, description="Spawn failure message")   # 进程无法启动时的错误信息


class TaskResult(BaseModel):
    """One executed command and its outcome. / 单条已执行命令及其结果。"""
    command: str
    outcome: ExitOutcome


class TargetRun(BaseModel):
    """
    Execution record of a single target.
    单个目标的执行记录。
    """
    name: str
    status: TargetStatus = TargetStatus.PENDING
    task_results: list[TaskResult] = Field(default_factory=list)
    failed_command: str | None = None  # 第一条失败的命令


class RunReport(BaseModel):
    """
    Summary of a full run, returned by TaskExecutor.execute().
    完整运行的汇总，由 TaskExecutor.execute() 返回。
    """
    order: list[str] = Field(default_factory=list)              # 实际使用的执行顺序
    runs: dict[str, TargetRun] = Field(default_factory=dict)    # 目标名 -> 执行记录
    failed_target: str | None = None
    failed_command: str | None = None

    @property
    def success(self) -> bool:
        return self.failed_target is None

    def names_with_status(self, status: TargetStatus) -> list[str]:
        return [name for name in self.order if self.runs[name].status == status]

    def summary(self) -> str:
        """
        One-line summary for logging, e.g. Run[3 targets: 2 completed, 1 failed].
        生成单行摘要，用于日志输出。
        """
        counts: dict[str, int] = {}
        for run in self.runs.values():
            counts[run.status.value] = counts.get(run.status.value, 0) + 1
        parts = [f"{v} {k}" for k, v in counts.items()]
        return f"Run[{len(self.runs)} targets: {', '.join(parts)}]"

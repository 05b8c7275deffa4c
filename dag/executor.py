"""
Task Executor - Runs every target's commands in execution order.
任务执行器 —— 按执行顺序运行每个目标的命令。

Execution model:
执行模型：

  1. Walk the execution order strictly in sequence (no concurrency)
  2. For each target, run its commands one at a time through a CommandRunner
  3. The first failing command fails its target and stops the run
  4. Every target not yet run is marked SKIPPED

  1. 严格按顺序遍历执行顺序（无并发）
  2. 对每个目标，通过 CommandRunner 逐条运行其命令
  3. 第一条失败的命令使其目标失败并终止整个运行
  4. 尚未运行的目标全部标记为 SKIPPED

Side effects of already completed targets are never rolled back.
已完成目标产生的副作用不会被回滚。
"""

from __future__ import annotations

import logging
from typing import Any, Callable

import config
from dag.graph import TargetGraph
from dag.state_machine import TargetStateMachine
from schema import RunReport, Target, TargetRun, TargetStatus, TaskResult
from tools.base import CommandRunner

logger = logging.getLogger(__name__)


class TaskExecutor:
    """
    Sequential executor for a TargetGraph.
    TargetGraph 的顺序执行器。

    Events emitted via `on_event(event, data)`:
    通过 `on_event(event, data)` 发出的事件：
      - target_start      {"target": Target}
      - task_start        {"target": str, "command": str}
      - task_complete     {"target": str, "command": str, "outcome": ExitOutcome}
      - task_failed       {"target": str, "command": str, "outcome": ExitOutcome}
      - target_completed  {"target": Target, "run": TargetRun}
      - target_failed     {"target": Target, "run": TargetRun}
      - target_skipped    {"target": Target}
      - run_complete      RunReport
    """

    def __init__(
        self,
        runner: CommandRunner,
        on_event: Callable[[str, Any], None] | None = None,
    ):
        self._runner = runner                       # 实际运行命令的能力接口
        self._emit = on_event or (lambda *_: None)  # 事件回调（用于 UI 输出）
        self._sm = TargetStateMachine()

    # ------------------------------------------------------------------
    # Main execution loop
    # 主执行循环
    # ------------------------------------------------------------------

    def execute(self, graph: TargetGraph, order: list[str] | None = None) -> RunReport:
        """
        Run all targets of `graph` and return a RunReport.
        运行 `graph` 中的所有目标并返回 RunReport。

        Args:
            graph: the parsed target set.
            order: execution order; computed with graph.topological_sort()
                   when omitted.

        Command failures are reported through the RunReport, not raised.
        Ordering errors (MissingDependencyError, CycleError) propagate.
        命令失败通过 RunReport 报告而不抛出；排序错误会向上传播。
        """
        if order is None:
            order = graph.topological_sort(detect_cycles=config.CAKE_DETECT_CYCLES)

        report = RunReport(
            order=list(order),
            runs={name: TargetRun(name=name) for name in order},
        )

        for name in order:
            target = graph[name]
            run = report.runs[name]

            if not report.success:
                self._sm.transition(run, TargetStatus.SKIPPED)
                self._emit("target_skipped", {"target": target})
                continue

            if self._run_target(target, run):
                self._emit("target_completed", {"target": target, "run": run})
            else:
                report.failed_target = name
                report.failed_command = run.failed_command
                logger.info("[Executor] Target '%s' failed on: %s", name, run.failed_command)
                self._emit("target_failed", {"target": target, "run": run})

        logger.info("[Executor] %s", report.summary())
        self._emit("run_complete", report)
        return report

    # ------------------------------------------------------------------
    # Single target
    # 单个目标
    # ------------------------------------------------------------------

    def _run_target(self, target: Target, run: TargetRun) -> bool:
        """
        Run the commands of one target in order, stopping at the first failure.
        按顺序运行单个目标的命令，遇到第一条失败即停止。
        """
        self._sm.transition(run, TargetStatus.RUNNING)
        self._emit("target_start", {"target": target})

        for command in target.commands:
            self._emit("task_start", {"target": target.name, "command": command})
            outcome = self._runner.run(command)
            run.task_results.append(TaskResult(command=command, outcome=outcome))

            if not outcome.success:
                run.failed_command = command
                self._emit("task_failed", {"target": target.name, "command": command, "outcome": outcome})
                self._sm.transition(run, TargetStatus.FAILED)
                return False

            self._emit("task_complete", {"target": target.name, "command": command, "outcome": outcome})

        self._sm.transition(run, TargetStatus.COMPLETED)
        return True

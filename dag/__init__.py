"""
DAG module - Core engine for ordering and running Cakefile targets.
DAG 模块 —— 对 Cakefile 目标排序并执行的核心引擎。

Components:
  - graph.py:         TargetGraph data structure and topological sort
  - state_machine.py: Target lifecycle state machine
  - executor.py:      Sequential task executor

模块组成：
  - graph.py:         TargetGraph 数据结构与拓扑排序
  - state_machine.py: 目标生命周期状态机（强制合法状态转移）
  - executor.py:      顺序任务执行器
"""

from dag.graph import TargetGraph                  # 目标图
from dag.state_machine import TargetStateMachine   # 目标状态机
from dag.executor import TaskExecutor              # 任务执行器

"""
TargetGraph - the target set of a Cakefile and its topological ordering.
TargetGraph —— Cakefile 的目标集合及其拓扑排序。

The TargetGraph holds:
  - targets: insertion-ordered dict of Target, keyed by name
  - source:  the file the graph was parsed from (for logging only)

TargetGraph 包含：
  - targets: 按声明顺序保存的 Target 字典，key 为目标名
  - source:  解析来源文件（仅用于日志）

Key operations:
  - topological_sort(): depth-first post-order over the dependency edges
  - missing_dependencies(): dependency names with no declared target

核心操作：
  - topological_sort():      深度优先后序遍历，得到合法执行顺序
  - missing_dependencies():  找出引用了未声明目标的依赖

The graph is read-only once the parser hands it over.
解析器交付之后，图不再被修改。
"""

from __future__ import annotations

import logging
from typing import Iterator

from errors import CycleError, MissingDependencyError
from schema import Target

logger = logging.getLogger(__name__)


class TargetGraph:
    """
    Directed graph of build targets; edges run from a target to each of
    its dependencies.
    构建目标的有向图；边从目标指向它的每个依赖。

    Backed by a plain dict, so iteration follows first-seen declaration
    order and the resulting execution order is deterministic.
    底层为普通 dict，遍历顺序即首次声明顺序，因此执行顺序是确定的。
    """

    def __init__(self, targets: dict[str, Target], source: str = ""):
        self.targets = targets  # 所有目标，key 为目标名
        self.source = source

        self._validate_graph()  # 构造时做基础校验

    @classmethod
    def from_targets(cls, targets: list[Target], source: str = "") -> TargetGraph:
        """Build a graph from a list of targets; later duplicates are ignored."""
        mapping: dict[str, Target] = {}
        for t in targets:
            mapping.setdefault(t.name, t)
        return cls(mapping, source=source)

    # ------------------------------------------------------------------
    # Queries
    # 查询方法
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.targets)

    def __contains__(self, name: object) -> bool:
        return name in self.targets

    def __iter__(self) -> Iterator[str]:
        return iter(self.targets)

    def __getitem__(self, name: str) -> Target:
        return self.targets[name]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TargetGraph):
            return NotImplemented
        return list(self.targets.items()) == list(other.targets.items())

    def get_dependency_ids(self, name: str) -> list[str]:
        """
        Return the names `name` depends on, in declaration order.
        返回 `name` 的依赖目标名（保持声明顺序）。
        """
        return list(self.targets[name].dependencies)

    def missing_dependencies(self) -> list[tuple[str, str]]:
        """
        Return (target, dependency) pairs whose dependency is not declared.
        返回所有 (目标, 依赖) 对，其中依赖目标未被声明。
        """
        return [
            (t.name, dep)
            for t in self.targets.values()
            for dep in t.dependencies
            if dep not in self.targets
        ]

    # ------------------------------------------------------------------
    # Graph algorithms
    # 图算法
    # ------------------------------------------------------------------

    def topological_sort(self, detect_cycles: bool = False) -> list[str]:
        """
        Depth-first topological sort, returns target names in a valid
        execution order: every dependency before its dependant.

        深度优先拓扑排序 —— 返回合法执行顺序：每个依赖都排在依赖它的目标之前。

        Targets are entered in declaration order and dependencies are
        visited in the order they are listed. A target is marked visited
        when it is entered, so reaching it again is a no-op. On cyclic
        input this silently breaks the cycle at whichever edge closes it
        and every target still appears exactly once.

        按声明顺序进入各目标，按列出顺序访问依赖。目标在进入时即被标记为已访问，
        再次到达时直接跳过。对于有环的输入，环会在闭合它的那条边处被静默截断，
        每个目标仍恰好出现一次。

        Args:
            detect_cycles: raise CycleError instead of breaking cycles.
                           为 True 时遇到环路抛出 CycleError，而不是静默截断。

        Raises:
            MissingDependencyError: a dependency names an undeclared target.
            CycleError:             only when detect_cycles is True.
        """
        order: list[str] = []
        visited: set[str] = set()

        for root in self.targets:
            if root in visited:
                continue
            visited.add(root)
            # 显式栈代替递归，避免深链触发 RecursionError
            stack: list[tuple[str, Iterator[str]]] = [(root, iter(self.targets[root].dependencies))]

            while stack:
                name, deps = stack[-1]
                for dep in deps:
                    if dep not in self.targets:
                        raise MissingDependencyError(name, dep)
                    if dep in visited:
                        if detect_cycles:
                            self._check_cycle(stack, dep)
                        continue
                    visited.add(dep)
                    stack.append((dep, iter(self.targets[dep].dependencies)))
                    break
                else:
                    # 所有依赖都已输出，后序追加当前目标
                    stack.pop()
                    order.append(name)

        logger.debug("[Graph] Execution order: %s", order)
        return order

    @staticmethod
    def _check_cycle(stack: list[tuple[str, Iterator[str]]], dep: str) -> None:
        """Raise CycleError if `dep` is still on the DFS stack (in progress)."""
        path = [name for name, _ in stack]
        if dep in path:
            raise CycleError(path[path.index(dep):] + [dep])

    # ------------------------------------------------------------------
    # Validation & display
    # 校验与展示
    # ------------------------------------------------------------------

    def _validate_graph(self) -> None:
        """
        Basic validation: warn about dependencies on undeclared targets.
        The orderer turns these into a hard error.
        基础校验：对依赖未声明目标的情况发出警告，真正的报错由排序阶段抛出。
        """
        for name, dep in self.missing_dependencies():
            logger.warning("[Graph] Target '%s' depends on undeclared target '%s'", name, dep)

    def summary(self) -> str:
        """
        One-line summary for logging, e.g. Graph[3 targets, 2 edges, 4 commands].
        生成单行摘要，用于日志输出。
        """
        edges = sum(len(t.dependencies) for t in self.targets.values())
        commands = sum(len(t.commands) for t in self.targets.values())
        return f"Graph[{len(self.targets)} targets, {edges} edges, {commands} commands]"

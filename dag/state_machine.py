"""
Target State Machine - Validates and enforces target lifecycle transitions.
目标状态机 —— 校验并强制执行目标生命周期的合法状态转移。

The transition table is the single source of truth for what state changes
are legal. Any invalid transition raises InvalidTransitionError, so a run
record can never claim a target both failed and completed.
转移表是合法状态变化的唯一权威来源。
任何非法转移都会抛出 InvalidTransitionError，执行记录不会进入不一致状态。

Transition graph:
转移图：
    PENDING ──> RUNNING ──> COMPLETED   (happy path / 正常路径)
                        ──> FAILED
    PENDING ──────────────> SKIPPED     (an earlier target failed / 前序目标失败)
"""

from __future__ import annotations

import logging
from typing import Callable

from schema import TargetRun, TargetStatus

logger = logging.getLogger(__name__)


class InvalidTransitionError(Exception):
    """
    Raised when an illegal state transition is attempted.
    当尝试非法状态转移时抛出此异常。
    """
    pass


VALID_TRANSITIONS: dict[TargetStatus, set[TargetStatus]] = {
    TargetStatus.PENDING:   {TargetStatus.RUNNING, TargetStatus.SKIPPED},
    TargetStatus.RUNNING:   {TargetStatus.COMPLETED, TargetStatus.FAILED},
    # Terminal states — no further transitions allowed
    # 终态——不允许任何进一步转移
    TargetStatus.COMPLETED: set(),
    TargetStatus.FAILED:    set(),
    TargetStatus.SKIPPED:   set(),
}


class TargetStateMachine:
    """
    Validates and applies target state transitions.
    校验并应用目标状态转移。

    Provides a single `transition()` method that:
      1. Checks the VALID_TRANSITIONS table
      2. Applies the change to the run record
      3. Fires an optional callback for UI/logging
    """

    def __init__(self, on_transition: Callable[[str, TargetStatus, TargetStatus], None] | None = None):
        """
        Args:
            on_transition: Optional callback(target_name, old_status, new_status).
                           可选回调 callback(目标名, 旧状态, 新状态)。
        """
        self._on_transition = on_transition

    def can_transition(self, run: TargetRun, new_status: TargetStatus) -> bool:
        return new_status in VALID_TRANSITIONS.get(run.status, set())

    def transition(self, run: TargetRun, new_status: TargetStatus) -> None:
        """
        Apply a state transition. Raises InvalidTransitionError if illegal.
        应用状态转移。若转移非法则抛出 InvalidTransitionError。
        """
        if not self.can_transition(run, new_status):
            raise InvalidTransitionError(
                f"Target '{run.name}': cannot transition from {run.status.value} to {new_status.value}. "
                f"Valid targets: {sorted(s.value for s in VALID_TRANSITIONS.get(run.status, set()))}"
            )

        old_status = run.status
        run.status = new_status

        logger.debug("[SM] %s: %s -> %s", run.name, old_status.value, new_status.value)

        if self._on_transition:
            self._on_transition(run.name, old_status, new_status)

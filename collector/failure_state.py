# -*- coding: utf-8 -*-
"""
连续失败状态机

功能：
- 记录单个 Poller 的连续失败次数
- 显式表示 HEALTHY / ESCALATING 两种状态
- 采集成功时重置计数（连续失败按字面含义理解）
"""

from dataclasses import dataclass
from enum import Enum


MAX_CONSECUTIVE_FAILURES = 2


class PollerState(Enum):
    """Poller 状态"""
    HEALTHY = "healthy"          # 失败次数未达到上限，失败会被吞掉
    ESCALATING = "escalating"    # 失败次数已达到上限，本次失败需要向外抛出


@dataclass
class FailureState:
    """
    连续失败计数

    非线程安全：同一个 Poller 的调用由调度器串行执行
    """
    ceiling: int = MAX_CONSECUTIVE_FAILURES
    consecutive_failures: int = 0
    state: PollerState = PollerState.HEALTHY

    def record_failure(self) -> PollerState:
        """
        记录一次失败并返回转换后的状态

        判断使用的是本次失败之前的计数：之前已经达到上限则进入 ESCALATING。
        无论是否升级，计数都会继续增加。

        Returns:
            本次失败之后的状态
        """
        previous = self.consecutive_failures
        self.consecutive_failures += 1

        if previous >= self.ceiling:
            self.state = PollerState.ESCALATING
        else:
            self.state = PollerState.HEALTHY
        return self.state

    def record_success(self) -> PollerState:
        """采集成功，计数归零"""
        self.consecutive_failures = 0
        self.state = PollerState.HEALTHY
        return self.state

    def is_escalating(self) -> bool:
        return self.state == PollerState.ESCALATING

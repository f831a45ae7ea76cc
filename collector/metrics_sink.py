# -*- coding: utf-8 -*-
"""
Prometheus 指标输出模块

功能：
- 定义 MetricsSink 接口，Poller 只依赖接口
- 提供基于 prometheus_client 的默认实现
- 提供 Prometheus 格式的指标文本供 /metrics 端点使用
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional
from prometheus_client import Gauge, Counter, CollectorRegistry, REGISTRY, generate_latest

logger = logging.getLogger(__name__)


class MetricsSink(ABC):
    """
    指标输出接口

    功能：
    - record: 设置某个限流名称的剩余次数（Gauge，覆盖旧值）
    - increment_failures: 失败计数 +1（Counter）
    """

    @abstractmethod
    def record(self, label: str, value: int):
        """
        记录限流剩余次数

        Args:
            label: 限流名称，如 "Microsoft.Compute/HighCostGetVMScaleSet3Min"
            value: 剩余次数
        """
        pass

    @abstractmethod
    def increment_failures(self):
        """失败计数 +1"""
        pass


class PrometheusMetricsSink(MetricsSink):
    """
    基于 prometheus_client 的指标输出

    同一个 registry 上只能创建一个实例（指标名称不能重复注册），
    多个 Poller 共享同一个实例。
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        """
        初始化指标

        Args:
            registry: Prometheus registry，默认使用进程级 REGISTRY
        """
        self.registry = registry if registry is not None else REGISTRY

        # 限流剩余次数（按 rate 标签区分）
        self.remaining_gauge = Gauge(
            'ms_ratelimit_remaining_resource_gauge',
            'Remaining resource reads before reaching the throttling threshold',
            ['rate'],
            registry=self.registry
        )

        # 获取限流数据失败次数
        self.failures_counter = Counter(
            'ms_ratelimit_failures_total',
            'Number of failures trying to obtain Azure rate limits',
            registry=self.registry
        )

    def record(self, label: str, value: int):
        self.remaining_gauge.labels(rate=label).set(value)
        logger.debug(f"更新限流指标: rate={label}, value={value}")

    def increment_failures(self):
        self.failures_counter.inc()

    def get_metrics(self) -> bytes:
        """
        获取 Prometheus 格式的指标数据

        Returns:
            Prometheus text format
        """
        return generate_latest(self.registry)

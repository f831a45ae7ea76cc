# -*- coding: utf-8 -*-
"""
Prometheus Collector 模块

功能：
- 实现限流数据的采集周期（collector.poller）
- 管理连续失败状态
- 输出 Prometheus 格式的指标
"""

from .errors import (
    MetricsRetrievalError,
    RateLimitTransportError,
    RateLimitProtocolError,
    RateLimitParseError,
    RateLimitEscalationError,
)
from .failure_state import FailureState, PollerState, MAX_CONSECUTIVE_FAILURES
from .metrics_sink import MetricsSink, PrometheusMetricsSink
from .poll_result import PollResult, PollStatus

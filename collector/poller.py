# -*- coding: utf-8 -*-
"""
限流采集周期实现模块

功能：
- 获取 token 并发送一次 ARM GET 请求
- 解析限流 header 并更新 Prometheus 指标
- 连续失败计数，超过上限后抛出致命异常
"""

import logging
from typing import Dict, Optional

import requests

from collector.errors import (
    MetricsRetrievalError,
    RateLimitTransportError,
    RateLimitProtocolError,
    RateLimitEscalationError,
)
from collector.failure_state import FailureState, PollerState, MAX_CONSECUTIVE_FAILURES
from collector.metrics_sink import MetricsSink
from collector.poll_result import PollResult, PollStatus
from provider.azure.auth import TokenProvider
from provider.azure.rate_limits import parse_rate_limit_header, AZURE_HEADER_RATELIMIT_REMAINING
from provider.azure.target import RateLimitTarget

logger = logging.getLogger(__name__)

AZURE_CONNECTION_TIMEOUT_MILLIS = 4000


class RateLimitPoller:
    """
    单个订阅的限流采集器

    职责：
    1. 每次 run() 执行一个完整的采集周期（不带定时器，由调度器调用）
    2. 成功时按限流名称更新 Gauge，并重置连续失败计数
    3. 失败时失败 Counter +1；连续失败达到上限后抛出 RateLimitEscalationError

    同一实例不支持并发调用 run()。
    """

    def __init__(
        self,
        target: RateLimitTarget,
        token_provider: TokenProvider,
        metrics_sink: MetricsSink,
        session: Optional[requests.Session] = None,
        max_consecutive_failures: int = MAX_CONSECUTIVE_FAILURES
    ):
        """
        初始化采集器

        Args:
            target: 被探测的订阅
            token_provider: Token Provider，每个周期调用一次
            metrics_sink: 指标输出
            session: HTTP session，默认新建一个并在所有周期中复用
            max_consecutive_failures: 连续失败上限
        """
        self.target = target
        self.token_provider = token_provider
        self.metrics_sink = metrics_sink
        self.session = session if session is not None else requests.Session()
        self.failure_state = FailureState(ceiling=max_consecutive_failures)
        self.last_result: Optional[PollResult] = None

        # 只限制连接超时，不设置读取超时
        self.timeout = (AZURE_CONNECTION_TIMEOUT_MILLIS / 1000.0, None)

        logger.info(f"RateLimitPoller 初始化完成: subscription={target.subscription_id}")

    @property
    def state(self) -> PollerState:
        return self.failure_state.state

    def run(self) -> PollResult:
        """
        执行一次采集周期

        Returns:
            本次采集结果

        Raises:
            RateLimitEscalationError: 连续失败次数达到上限后的下一次失败
        """
        logger.debug("Run")
        subscription_id = self.target.subscription_id

        try:
            rates = self.get_rate_limits()
        except Exception as e:
            # 注入的 TokenProvider / session 抛出的其他异常同样计为采集失败
            if not isinstance(e, MetricsRetrievalError):
                logger.debug("采集过程中出现非预期异常", exc_info=True)
            self.metrics_sink.increment_failures()
            state = self.failure_state.record_failure()
            self.last_result = PollResult(
                subscription_id=subscription_id,
                status=PollStatus.FAILED,
                error=f"{type(e).__name__}: {e}"
            )

            logger.warning(
                f"Unable to get rates ({type(e).__name__}, "
                f"consecutive_failures={self.failure_state.consecutive_failures}): {e}"
            )

            if state == PollerState.ESCALATING:
                raise RateLimitEscalationError(
                    f"Unable to get rates for subscription {subscription_id} after multiple retries"
                ) from e

            return self.last_result

        # 解析全部完成后才更新指标，格式错误的 header 不会产生部分更新
        for rate, value in rates.items():
            self.metrics_sink.record(rate, value)

        self.failure_state.record_success()
        self.last_result = PollResult(
            subscription_id=subscription_id,
            status=PollStatus.SUCCESS,
            rates=rates
        )
        return self.last_result

    def get_rate_limits(self) -> Dict[str, int]:
        """
        发送请求并解析限流 header

        Returns:
            {限流名称: 剩余次数} 字典，header 缺失时返回空字典

        Raises:
            RateLimitTransportError: 获取 token 或发送请求失败
            RateLimitProtocolError: 响应码不是 200
            RateLimitParseError: header 格式错误
        """
        with self._send_request() as response:
            if response.status_code != 200:
                raise RateLimitProtocolError(response.status_code)

            header = response.headers.get(AZURE_HEADER_RATELIMIT_REMAINING)

        if header is None:
            # header 缺失不算失败
            logger.debug(f"响应中没有 {AZURE_HEADER_RATELIMIT_REMAINING} header")
            return {}

        logger.info(f"Health probe OK: {header}")
        return parse_rate_limit_header(header)

    def _send_request(self) -> requests.Response:
        """
        获取 token 并发送 GET 请求（不读取响应 body）

        Returns:
            HTTP 响应
        """
        token = self.token_provider.get_token()

        try:
            return self.session.get(
                self.target.url,
                headers={'Authorization': f'Bearer {token}'},
                timeout=self.timeout,
                stream=True
            )
        except requests.RequestException as e:
            raise RateLimitTransportError(f"Failure sending HTTP request: {e}") from e

    def close(self):
        """关闭 HTTP session"""
        self.session.close()

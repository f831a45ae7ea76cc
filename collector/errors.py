# -*- coding: utf-8 -*-
"""
采集异常定义模块

功能：
- 定义一次采集周期中可能出现的失败类型
- 所有失败类型统一继承 MetricsRetrievalError，升级判断只看失败次数
- 定义连续失败超过上限后的致命异常
"""

from typing import Optional


class MetricsRetrievalError(Exception):
    """采集失败（metrics retrieval failed）基类"""
    pass


class RateLimitTransportError(MetricsRetrievalError):
    """网络 / IO 失败（包括获取 token 失败）"""
    pass


class RateLimitProtocolError(MetricsRetrievalError):
    """HTTP 响应码不是 200"""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"Unexpected response code {status_code}")


class RateLimitParseError(MetricsRetrievalError):
    """限流 header 内容格式错误"""

    def __init__(self, message: str, header: Optional[str] = None):
        self.header = header
        super().__init__(message)


class RateLimitEscalationError(RuntimeError):
    """
    连续失败次数超过上限

    该异常不会被 Poller 吞掉，原始失败通过 __cause__ 保留
    """
    pass

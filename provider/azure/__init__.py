# -*- coding: utf-8 -*-
"""
Azure Provider 模块

功能：
- 获取 Azure Resource Manager 访问 token
- 构建限流探测请求的目标 URL
- 解析 x-ms-ratelimit-remaining-resource header
"""

from .auth import TokenProvider, ClientSecretTokenProvider
from .target import RateLimitTarget
from .rate_limits import parse_rate_limit_header, AZURE_HEADER_RATELIMIT_REMAINING

__all__ = [
    'TokenProvider',
    'ClientSecretTokenProvider',
    'RateLimitTarget',
    'parse_rate_limit_header',
    'AZURE_HEADER_RATELIMIT_REMAINING',
]

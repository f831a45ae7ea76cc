# -*- coding: utf-8 -*-
"""
Azure 限流 header 解析模块

功能：
- 解析 x-ms-ratelimit-remaining-resource header
- 格式：name1;count1,name2;count2,...
- 严格校验：任意一项格式错误都视为解析失败，不会跳过
"""

import re
from typing import Dict

from collector.errors import RateLimitParseError


AZURE_HEADER_RATELIMIT_REMAINING = "x-ms-ratelimit-remaining-resource"

# 十进制整数，允许正负号
_COUNT_PATTERN = re.compile(r'^[+-]?[0-9]+$')


def parse_rate_limit_header(header: str) -> Dict[str, int]:
    """
    解析限流 header

    Args:
        header: header 原始值，如 "Microsoft.Compute/GetVMScaleSet3Min;197,Microsoft.Compute/GetVMScaleSet30Min;1297"

    Returns:
        {限流名称: 剩余次数} 字典

    Raises:
        RateLimitParseError: 某一项缺少分号、字段数不为 2 或次数不是整数
    """
    rates: Dict[str, int] = {}

    # 末尾逗号产生的空项忽略（"a;1," 等价于 "a;1"），空 header 仍然是格式错误
    entries = header.split(',')
    while len(entries) > 1 and entries[-1] == '':
        entries.pop()

    for entry in entries:
        values = entry.split(';')
        if len(values) != 2:
            raise RateLimitParseError(
                f"Malformed rate limit entry '{entry}': expected 'name;count'",
                header=header
            )

        name, count = values
        if not _COUNT_PATTERN.match(count):
            raise RateLimitParseError(
                f"Malformed rate limit entry '{entry}': count '{count}' is not an integer",
                header=header
            )

        rates[name] = int(count)

    return rates

# -*- coding: utf-8 -*-
"""
采集结果数据结构

功能：
- 定义单次采集周期的状态
- 保存最近一次采集结果，供 /health 端点展示
"""

import time
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
from enum import Enum


class PollStatus(Enum):
    """采集状态"""
    SUCCESS = "success"    # 成功获取限流数据（header 缺失也算成功）
    FAILED = "failed"      # 采集失败


@dataclass
class PollResult:
    """单次采集结果"""
    subscription_id: str                          # 订阅 ID
    status: PollStatus                            # 采集状态
    rates: Dict[str, int] = field(default_factory=dict)  # 解析出的限流数据
    error: Optional[str] = None                   # 错误信息（failed 时）
    timestamp: float = field(default_factory=time.time)

    def is_success(self) -> bool:
        """判断是否成功"""
        return self.status == PollStatus.SUCCESS

    def is_failed(self) -> bool:
        """判断是否失败"""
        return self.status == PollStatus.FAILED

    def to_dict(self) -> Dict[str, Any]:
        return {
            'subscription_id': self.subscription_id,
            'status': self.status.value,
            'rates': dict(self.rates),
            'error': self.error,
            'timestamp': self.timestamp,
        }

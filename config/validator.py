# -*- coding: utf-8 -*-
"""
配置验证模块

功能：
- 验证配置的取值范围
- 检查采集间隔、端口、日志级别
"""

from typing import Optional, Tuple

from config.loader import ExporterConfig


VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']


def validate_config(config: ExporterConfig) -> Tuple[bool, Optional[str]]:
    """
    验证配置对象

    Args:
        config: 配置对象

    Returns:
        (is_valid, error_message) 元组
    """
    if config.poll_interval <= 0:
        return False, f"POLL_INTERVAL_SECONDS 必须是正整数: {config.poll_interval}"

    if not 1 <= config.metrics_port <= 65535:
        return False, f"METRICS_PORT 必须在 1-65535 范围内: {config.metrics_port}"

    if config.log_level not in VALID_LOG_LEVELS:
        return False, f"LOG_LEVEL 必须是以下值之一: {', '.join(VALID_LOG_LEVELS)}"

    return True, None

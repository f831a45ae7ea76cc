# -*- coding: utf-8 -*-
"""
Exporter 配置加载模块

功能：
- 从环境变量加载 Azure 凭证和 exporter 配置
- 定义清晰的数据结构（AzureCredentials / ExporterConfig）
- 缺少必填项时给出明确错误
"""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional


ENV_CLIENT_ID = 'AZURE_CLIENT_ID'
ENV_CLIENT_SECRET = 'AZURE_CLIENT_SECRET'
ENV_TENANT_ID = 'AZURE_TENANT_ID'
ENV_SUBSCRIPTION_ID = 'AZURE_SUBSCRIPTION_ID'
ENV_POLL_INTERVAL = 'POLL_INTERVAL_SECONDS'
ENV_METRICS_PORT = 'METRICS_PORT'
ENV_LOG_LEVEL = 'LOG_LEVEL'

DEFAULT_POLL_INTERVAL = 60
DEFAULT_METRICS_PORT = 8000
DEFAULT_LOG_LEVEL = 'INFO'


class ConfigurationError(ValueError):
    """启动配置错误（致命，调度开始前退出）"""
    pass


@dataclass(frozen=True)
class AzureCredentials:
    """Azure 应用凭证（三项都必填，不存在部分凭证的状态）"""
    client_id: str
    client_secret: str = field(repr=False)
    tenant_id: str


@dataclass(frozen=True)
class ExporterConfig:
    """Exporter 配置的根数据结构"""
    credentials: AzureCredentials
    subscription_id: str
    poll_interval: int = DEFAULT_POLL_INTERVAL    # 采集间隔（秒）
    metrics_port: int = DEFAULT_METRICS_PORT      # HTTP 端口
    log_level: str = DEFAULT_LOG_LEVEL            # 日志级别


def _require(environ: Mapping[str, str], name: str) -> str:
    value = environ.get(name)
    if value is None or not value.strip():
        raise ConfigurationError(f"缺少必填环境变量: {name}")
    return value.strip()


def _parse_int(environ: Mapping[str, str], name: str, default: int) -> int:
    value = environ.get(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value.strip())
    except ValueError:
        raise ConfigurationError(f"环境变量 {name} 必须是整数: {value!r}")


def load_credentials(environ: Optional[Mapping[str, str]] = None) -> AzureCredentials:
    """
    从环境变量加载 Azure 凭证

    Args:
        environ: 环境变量字典，默认使用 os.environ

    Returns:
        AzureCredentials 对象

    Raises:
        ConfigurationError: 任意一项凭证缺失或为空
    """
    if environ is None:
        environ = os.environ

    return AzureCredentials(
        client_id=_require(environ, ENV_CLIENT_ID),
        client_secret=_require(environ, ENV_CLIENT_SECRET),
        tenant_id=_require(environ, ENV_TENANT_ID)
    )


def load_exporter_config(environ: Optional[Mapping[str, str]] = None) -> ExporterConfig:
    """
    从环境变量加载完整的 exporter 配置

    Args:
        environ: 环境变量字典，默认使用 os.environ

    Returns:
        ExporterConfig 对象

    Raises:
        ConfigurationError: 必填项缺失或取值无效
    """
    if environ is None:
        environ = os.environ

    credentials = load_credentials(environ)
    subscription_id = _require(environ, ENV_SUBSCRIPTION_ID)

    log_level = environ.get(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL

    return ExporterConfig(
        credentials=credentials,
        subscription_id=subscription_id,
        poll_interval=_parse_int(environ, ENV_POLL_INTERVAL, DEFAULT_POLL_INTERVAL),
        metrics_port=_parse_int(environ, ENV_METRICS_PORT, DEFAULT_METRICS_PORT),
        log_level=log_level.strip().upper()
    )


def print_exporter_config(config: ExporterConfig):
    """
    打印配置结构（用于启动时确认，不输出 secret）

    Args:
        config: ExporterConfig 对象
    """
    print("=" * 60)
    print("Exporter 配置")
    print("=" * 60)
    print(f"  订阅 ID: {config.subscription_id}")
    print(f"  Tenant ID: {config.credentials.tenant_id}")
    print(f"  Client ID: {config.credentials.client_id}")
    print(f"  采集间隔: {config.poll_interval} 秒")
    print(f"  HTTP 端口: {config.metrics_port}")
    print(f"  日志级别: {config.log_level}")
    print("=" * 60)

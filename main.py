#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Azure Rate Limit Exporter 主程序入口

功能：
- 从环境变量加载配置
- 定时采集 Azure ARM 限流剩余次数
- 启动 Flask HTTP 服务器，暴露 /metrics 和 /health 端点
"""

from flask import Flask, jsonify
from prometheus_client import CONTENT_TYPE_LATEST
import logging
import os
import signal
import sys
from typing import Optional

from config.loader import load_exporter_config, print_exporter_config, ConfigurationError
from config.validator import validate_config
from collector import PrometheusMetricsSink
from collector.poller import RateLimitPoller
from provider.azure import ClientSecretTokenProvider, RateLimitTarget
from scheduler import PollScheduler

# 配置日志
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# 减少 Flask / azure SDK 日志
logging.getLogger('werkzeug').setLevel(logging.WARNING)
logging.getLogger('azure').setLevel(logging.WARNING)

# 创建 Flask 应用
app = Flask(__name__)

# 全局对象（在 main 函数中初始化）
metrics_sink: Optional[PrometheusMetricsSink] = None
poller: Optional[RateLimitPoller] = None
scheduler: Optional[PollScheduler] = None


@app.route('/metrics')
def metrics():
    """
    Prometheus metrics 端点

    返回限流相关的 Prometheus 指标
    """
    if metrics_sink is None:
        return "# Exporter not initialized\n", 200, {'Content-Type': CONTENT_TYPE_LATEST}

    return metrics_sink.get_metrics(), 200, {'Content-Type': CONTENT_TYPE_LATEST}


@app.route('/health')
def health():
    """
    健康检查端点

    采集已经升级为致命错误时返回 503
    """
    status = {'status': 'healthy'}
    code = 200

    if scheduler:
        status['scheduler'] = scheduler.get_status()
        if not scheduler.is_healthy():
            status['status'] = 'unhealthy'
            code = 503

    if poller:
        status['poller'] = {
            'subscription_id': poller.target.subscription_id,
            'state': poller.state.value,
            'consecutive_failures': poller.failure_state.consecutive_failures,
            'last_result': poller.last_result.to_dict() if poller.last_result else None
        }

    return jsonify(status), code


def _terminate(error: BaseException):
    """采集升级为致命错误后结束进程"""
    logger.critical(f"Exporter 退出: {error}")
    os.kill(os.getpid(), signal.SIGTERM)


def main():
    """
    主函数

    功能：
    1. 加载并验证配置（缺少凭证直接退出）
    2. 初始化指标和采集器
    3. 启动定时任务
    4. 启动 HTTP 服务器
    """
    logger.info("Starting Azure Rate Limit Exporter...")

    # Phase 1: 加载配置
    try:
        config = load_exporter_config()
    except ConfigurationError as e:
        logger.error(f"配置错误: {e}")
        sys.exit(1)

    is_valid, error_message = validate_config(config)
    if not is_valid:
        logger.error(f"配置错误: {error_message}")
        sys.exit(1)

    logging.getLogger().setLevel(config.log_level)
    print_exporter_config(config)

    # Phase 2: 初始化采集组件
    global metrics_sink, poller, scheduler
    metrics_sink = PrometheusMetricsSink()

    poller = RateLimitPoller(
        target=RateLimitTarget(config.subscription_id),
        token_provider=ClientSecretTokenProvider(config.credentials),
        metrics_sink=metrics_sink
    )

    # Phase 3: 启动定时任务
    scheduler = PollScheduler(
        poll_func=poller.run,
        interval=config.poll_interval,
        on_fatal=_terminate
    )
    scheduler.start()

    # Phase 4: 启动 Flask 服务器
    port = config.metrics_port
    logger.info(f"Starting HTTP server on port {port}")
    print(f"\n{'=' * 60}")
    print(f"Exporter 已启动")
    print(f"访问 http://localhost:{port}/metrics 查看指标")
    print(f"访问 http://localhost:{port}/health 查看健康状态")
    print(f"{'=' * 60}\n")

    try:
        app.run(host='0.0.0.0', port=port, debug=False)
    finally:
        scheduler.stop()
        poller.close()


if __name__ == '__main__':
    main()

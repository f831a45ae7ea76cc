# -*- coding: utf-8 -*-
"""
定时任务模块

功能：
- 按 POLL_INTERVAL_SECONDS 定时执行限流采集
- 在后台线程中运行，不阻塞主程序
"""

from scheduler.scheduler import PollScheduler

__all__ = ['PollScheduler']

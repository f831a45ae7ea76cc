# -*- coding: utf-8 -*-
"""
定时任务实现模块

功能：
- 按固定间隔调用采集函数
- 不直接操作 Prometheus metrics
- 只负责"什么时候采集"以及致命异常的处理
"""

import threading
import logging
from typing import Callable, Optional

from collector.errors import RateLimitEscalationError

logger = logging.getLogger(__name__)


class PollScheduler:
    """
    限流采集定时任务调度器

    职责：
    1. 在后台线程中按固定间隔调用采集函数（启动后立即执行第一次）
    2. 保证同一个采集函数的调用是串行的
    3. 采集函数抛出 RateLimitEscalationError 时停止调度并调用 on_fatal
    4. 其他异常只记录日志，不退出线程
    """

    def __init__(
        self,
        poll_func: Callable,
        interval: int = 60,
        on_fatal: Optional[Callable[[BaseException], None]] = None
    ):
        """
        初始化定时任务调度器

        Args:
            poll_func: 采集函数（通常是 RateLimitPoller.run）
            interval: 采集间隔（秒），默认 60
            on_fatal: 出现致命异常时的回调
        """
        self.poll_func = poll_func
        self.interval = interval
        self.on_fatal = on_fatal

        self._running = False
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.fatal_error: Optional[BaseException] = None
        self.runs = 0

        logger.info(f"PollScheduler 初始化完成: interval={interval}s")

    def start(self):
        """启动后台采集线程"""
        if self._running:
            logger.warning("定时任务已在运行")
            return

        self._running = True
        self._stop_event.clear()

        self._thread = threading.Thread(
            target=self._poll_loop,
            name="RateLimitPollThread",
            daemon=True
        )
        self._thread.start()
        logger.info("定时任务调度器已启动")

    def stop(self):
        """停止定时任务（不会中断正在进行的采集）"""
        if not self._running:
            return

        self._running = False
        self._stop_event.set()
        logger.info("停止定时任务调度器...")

        if self._thread and self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join(timeout=5)

        logger.info("定时任务调度器已停止")

    def _poll_loop(self):
        """采集循环"""
        logger.info(f"[Scheduler] 采集循环启动，间隔: {self.interval} 秒")

        while self._running:
            try:
                self.poll_func()
                self.runs += 1
            except RateLimitEscalationError as e:
                logger.critical(f"[Scheduler] 连续采集失败，停止调度: {e}", exc_info=True)
                self.fatal_error = e
                self._running = False
                if self.on_fatal:
                    self.on_fatal(e)
                break
            except Exception as e:
                logger.error(f"[Scheduler] 采集异常: {e}", exc_info=True)

            if self._stop_event.wait(self.interval):
                break

        logger.info("[Scheduler] 采集循环已退出")

    def is_healthy(self) -> bool:
        return self.fatal_error is None

    def get_status(self) -> dict:
        """
        获取定时任务状态

        Returns:
            状态信息字典
        """
        return {
            'running': self._running,
            'interval': self.interval,
            'runs': self.runs,
            'thread_alive': self._thread.is_alive() if self._thread else False,
            'fatal_error': str(self.fatal_error) if self.fatal_error else None
        }

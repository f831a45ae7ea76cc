# -*- coding: utf-8 -*-
"""
测试共用的 fake 对象和 fixture
"""

import io
from typing import Dict, List, Optional, Tuple

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from collector.errors import RateLimitTransportError
from collector.metrics_sink import MetricsSink
from provider.azure.auth import TokenProvider
from provider.azure.target import RateLimitTarget


SUBSCRIPTION_ID = "00000000-1111-2222-3333-444444444444"


class FakeTokenProvider(TokenProvider):
    """返回固定 token，可配置为失败"""

    def __init__(self, token: str = "eyJ0eXAiOiJKV1QiLCJhbGciOi.fake"):
        self.token = token
        self.calls = 0
        self.error: Optional[Exception] = None

    def get_token(self) -> str:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.token


class RecordingSink(MetricsSink):
    """记录所有指标写入"""

    def __init__(self):
        self.records: List[Tuple[str, int]] = []
        self.failures = 0

    def record(self, label: str, value: int):
        self.records.append((label, value))

    def increment_failures(self):
        self.failures += 1


def make_response(status_code: int = 200, headers: Optional[Dict[str, str]] = None) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response.headers = CaseInsensitiveDict(headers or {})
    response.raw = io.BytesIO(b'{"value": []}')
    return response


class FakeSession:
    """按顺序返回预设响应（或抛出预设异常）的 requests.Session 替身"""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests: List[dict] = []
        self.closed = False

    def queue(self, *responses):
        self.responses.extend(responses)

    def get(self, url, **kwargs):
        self.requests.append({'url': url, **kwargs})
        result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    def close(self):
        self.closed = True


@pytest.fixture
def target() -> RateLimitTarget:
    return RateLimitTarget(SUBSCRIPTION_ID)


@pytest.fixture
def token_provider() -> FakeTokenProvider:
    return FakeTokenProvider()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def transport_error() -> RateLimitTransportError:
    return RateLimitTransportError("token endpoint unreachable")

# -*- coding: utf-8 -*-
"""
Azure Token Provider 实现

功能：
- 使用 client credentials（client id / secret / tenant id）换取 ARM bearer token
- 每次采集都重新获取 token，不做缓存
- 日志中只输出 token 前 10 个字符
"""

import logging
from abc import ABC, abstractmethod
from azure.core.exceptions import AzureError
from azure.identity import ClientSecretCredential

from collector.errors import RateLimitTransportError
from config.loader import AzureCredentials
from provider.azure.target import AZURE_MGMT_URL

logger = logging.getLogger(__name__)

AZURE_TOKEN_SCOPE = f"{AZURE_MGMT_URL}/.default"
TOKEN_LOG_PREFIX_LENGTH = 10


class TokenProvider(ABC):
    """
    Token Provider 接口

    功能：
    - 同步返回一个可用的 bearer token
    - 失败时抛出 RateLimitTransportError
    """

    @abstractmethod
    def get_token(self) -> str:
        """
        获取 bearer token

        Returns:
            access token 字符串
        """
        pass


class ClientSecretTokenProvider(TokenProvider):
    """
    基于 azure-identity ClientSecretCredential 的 Token Provider

    每次调用都新建 credential，azure-identity 的内部 token 缓存不会跨周期复用。
    """

    def __init__(self, credentials: AzureCredentials, connection_timeout: float = 4.0):
        """
        Args:
            credentials: Azure 应用凭证
            connection_timeout: 连接超时（秒），与 ARM 请求一致
        """
        self.credentials = credentials
        self.connection_timeout = connection_timeout

    def get_token(self) -> str:
        logger.debug("Requesting new token")
        try:
            # 用完即关闭，释放 credential 自带的 transport 连接
            with ClientSecretCredential(
                tenant_id=self.credentials.tenant_id,
                client_id=self.credentials.client_id,
                client_secret=self.credentials.client_secret,
                connection_timeout=self.connection_timeout
            ) as credential:
                access_token = credential.get_token(AZURE_TOKEN_SCOPE)
        except (AzureError, ValueError) as e:
            raise RateLimitTransportError(f"Failure requesting access token: {e}") from e

        token = access_token.token
        logger.debug(f"Requested token ok {token[:TOKEN_LOG_PREFIX_LENGTH]}...")
        return token

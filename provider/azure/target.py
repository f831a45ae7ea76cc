# -*- coding: utf-8 -*-
"""
限流探测目标

功能：
- 根据订阅 ID 构建固定的 ARM 查询 URL
"""

from dataclasses import dataclass


AZURE_MGMT_URL = "https://management.azure.com"
AZURE_RESOURCE_PROVIDER = "Microsoft.Compute"
AZURE_RESOURCE_TYPE = "virtualMachineScaleSets"
AZURE_API_VERSION = "2019-12-01"


@dataclass(frozen=True)
class RateLimitTarget:
    """被探测的订阅（创建后不可变）"""
    subscription_id: str

    @property
    def url(self) -> str:
        return (
            f"{AZURE_MGMT_URL}/subscriptions/{self.subscription_id}"
            f"/providers/{AZURE_RESOURCE_PROVIDER}/{AZURE_RESOURCE_TYPE}"
            f"?api-version={AZURE_API_VERSION}"
        )

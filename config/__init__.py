# -*- coding: utf-8 -*-
"""
配置模块

功能：
- 从环境变量加载凭证和 exporter 配置
- 验证配置取值
"""

# -*- coding: utf-8 -*-
"""
云厂商 Provider 模块
"""

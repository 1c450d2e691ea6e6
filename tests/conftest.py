from __future__ import annotations

import os

import pytest

# 测试隔离：避免读取本机环境/.env 中的 DIAL 配置
os.environ.pop("DIAL_BASE_URL", None)
os.environ["DEBUG"] = "false"
os.environ["LOG_TO_FILE"] = "false"

from dial_gateway.settings import get_settings

get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()

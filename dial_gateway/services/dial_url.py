"""DIAL 网关地址归一化与路由模式解析（SSOT）。

同一个 DIAL 服务可以通过多种等价写法访问：

- https://host
- https://host/openai（Azure 资源根）
- https://host/openai/v1（OpenAI v1 兼容根）

以及它们带/不带末尾斜杠、大小写混写的变体。请求签名、模型发现、流式选项等
下游组件只消费这里解析出的结果，不各自重复推导。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from dial_gateway.settings import Settings, get_settings

logger = logging.getLogger(__name__)


DIAL_DEFAULT_BASE_URL = "https://core.dialx.ai"

AZURE_DISCOVERY_SUFFIX = "/openai"
OPENAI_V1_SUFFIX = "/openai/v1"

# 顺序敏感：先匹配更具体的 /openai/v1，避免只剥掉一半
_STRIP_SUFFIXES = (
    "/openai/v1/",
    "/openai/v1",
    "/openai/",
    "/openai",
)


class DialRoutingMode(str, Enum):
    DEFAULT = "default"
    OPENAI_V1 = "openai_v1"
    AZURE_RESOURCE_ROOT = "azure_resource_root"
    AZURE_DEFAULT_DISCOVERY = "azure_default_discovery"

    @property
    def use_azure(self) -> bool:
        return self is not DialRoutingMode.OPENAI_V1


@dataclass(frozen=True, slots=True)
class DialApiConfig:
    api_base_url: str
    model_discovery_url: str
    use_azure: bool
    mode: DialRoutingMode

    @property
    def models_url(self) -> str:
        """模型发现请求的 GET 目标（仅拼接字符串，不发请求）。"""
        return f"{self.model_discovery_url}/models"

    def as_dict(self) -> dict[str, object]:
        """交给外部请求处理器构造函数的三元组（沿用其 camelCase 字段名）。"""
        return {
            "apiBaseUrl": self.api_base_url,
            "modelDiscoveryUrl": self.model_discovery_url,
            "useAzure": self.use_azure,
        }


def _clean(raw: Optional[str]) -> str:
    return str(raw or "").strip()


def _trim_tail(text: str) -> str:
    """反复去掉末尾空白与斜杠，直到不再变化。"""
    while True:
        trimmed = text.rstrip().rstrip("/")
        if trimmed == text:
            return text
        text = trimmed


def _strip_one_suffix(base: str) -> Optional[str]:
    lowered = base.lower()
    for suffix in _STRIP_SUFFIXES:
        if lowered.endswith(suffix):
            return _trim_tail(base[: -len(suffix)])
    return None


def normalize_dial_base_url(raw: Optional[str]) -> str:
    """把用户填写的 DIAL 地址归一化为“不带 /openai 后缀的根地址”。

    - 空值/空白：返回默认地址
    - 去掉首尾空白与末尾斜杠
    - 大小写不敏感地剥离末尾的 /openai、/openai/v1（反复剥离直到不再匹配，保证幂等）
    - 只处理末尾：路径中间的 /openai/v1 原样保留；裸 host 不追加任何后缀
    """

    text = _clean(raw)
    if not text:
        return DIAL_DEFAULT_BASE_URL

    base = _trim_tail(text)
    while True:
        stripped = _strip_one_suffix(base)
        if stripped is None:
            break
        base = stripped

    # 输入只有后缀本身（例如 "/openai/v1"）时，剥离后为空，按未配置处理
    return base or DIAL_DEFAULT_BASE_URL


def classify_dial_base_url(raw: Optional[str]) -> DialRoutingMode:
    """按用户原始写法判定路由模式（先判模式，再做归一化）。"""

    text = _clean(raw)
    if not text:
        return DialRoutingMode.DEFAULT

    lowered = _trim_tail(text).lower()
    if lowered.endswith(OPENAI_V1_SUFFIX):
        return DialRoutingMode.OPENAI_V1
    if lowered.endswith(AZURE_DISCOVERY_SUFFIX):
        return DialRoutingMode.AZURE_RESOURCE_ROOT
    return DialRoutingMode.AZURE_DEFAULT_DISCOVERY


def resolve_dial_api_config(raw: Optional[str]) -> DialApiConfig:
    """解析出 {api_base_url, model_discovery_url, use_azure}。

    - 显式写到 /openai/v1：OpenAI v1 兼容模式，保留该段，发现地址与 API 地址相同
    - 其余情况：Azure 模式，API 地址为归一化后的根地址，发现地址为根地址 + /openai
    """

    mode = classify_dial_base_url(raw)

    if mode is DialRoutingMode.OPENAI_V1:
        api_base_url = _trim_tail(_clean(raw))
        model_discovery_url = api_base_url
    else:
        api_base_url = normalize_dial_base_url(raw)
        model_discovery_url = f"{api_base_url}{AZURE_DISCOVERY_SUFFIX}"

    config = DialApiConfig(
        api_base_url=api_base_url,
        model_discovery_url=model_discovery_url,
        use_azure=mode.use_azure,
        mode=mode,
    )
    logger.debug(
        "DIAL 地址解析完成 mode=%s api_base_url=%s model_discovery_url=%s",
        mode.value,
        config.api_base_url,
        config.model_discovery_url,
    )
    return config


def resolve_dial_api_config_from_settings(settings: Optional[Settings] = None) -> DialApiConfig:
    """从配置（DIAL_BASE_URL）解析；未传入时使用全局缓存的配置。"""

    if settings is None:
        settings = get_settings()
    return resolve_dial_api_config(settings.dial_base_url)

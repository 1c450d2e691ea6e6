"""DIAL 网关地址解析。"""

from dial_gateway.services.dial_url import (
    DIAL_DEFAULT_BASE_URL,
    DialApiConfig,
    DialRoutingMode,
    classify_dial_base_url,
    normalize_dial_base_url,
    resolve_dial_api_config,
    resolve_dial_api_config_from_settings,
)

__version__ = "0.1.0"

__all__ = [
    "DIAL_DEFAULT_BASE_URL",
    "DialApiConfig",
    "DialRoutingMode",
    "classify_dial_base_url",
    "normalize_dial_base_url",
    "resolve_dial_api_config",
    "resolve_dial_api_config_from_settings",
]

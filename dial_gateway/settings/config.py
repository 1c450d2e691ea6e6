"""DIAL 网关配置与环境变量加载逻辑。"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """集中式配置定义，便于后续依赖注入与测试覆盖。"""

    # 用户填写的原始地址：刻意不用 AnyHttpUrl，畸形 URL 原样交给解析器透传
    dial_base_url: Optional[str] = Field(default=None, alias="DIAL_BASE_URL")

    debug: bool = Field(default=False, alias="DEBUG")
    log_to_file: bool = Field(default=False, alias="LOG_TO_FILE")
    log_file_path: str = Field(default="logs/dial_gateway.log", alias="LOG_FILE_PATH")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("dial_base_url", mode="before")
    @classmethod
    def _blank_base_url_to_none(cls, value: object) -> Optional[str]:
        """空白字符串视为未配置（解析阶段回退到默认地址）。"""
        if value is None:
            return None
        text = str(value)
        return text if text.strip() else None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """使用 LRU 缓存避免 BaseSettings 反复解析。"""

    return Settings()

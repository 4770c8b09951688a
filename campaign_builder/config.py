"""应用配置模块 - 使用 Pydantic Settings 管理环境变量"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """应用配置类"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Campaign Builder", description="应用名称")
    app_version: str = Field(default="0.1.0", description="应用版本")
    env: Literal["development", "production", "test"] = Field(
        default="development", description="运行环境"
    )
    debug: bool = Field(default=False, description="调试模式")
    log_level: str = Field(default="INFO", description="日志级别")

    # Server
    host: str = Field(default="0.0.0.0", description="服务器地址")
    port: int = Field(default=8000, description="服务器端口")
    reload: bool = Field(default=False, description="热重载")

    # CORS
    cors_origins: list[str] = Field(
        default=[
            "http://localhost:3000",
            "http://localhost:5173",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
        ],
        description="允许的跨域源",
    )

    # Campaign Service
    campaign_service_backend: Literal["http", "memory"] = Field(
        default="memory", description="campaign 服务实现（http 调用远端 / memory 本地内存）"
    )
    campaign_service_url: str = Field(
        default="http://localhost:3001/api", description="外部 campaign 服务 Base URL"
    )
    campaign_service_token: str = Field(default="", description="外部 campaign 服务 Bearer token")
    request_timeout: int = Field(default=30, description="请求超时时间（秒）")


# 全局配置实例
settings = Settings()

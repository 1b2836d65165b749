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
    app_name: str = Field(default="FlowCanvas", description="应用名称")
    app_version: str = Field(default="0.1.0", description="应用版本")
    env: Literal["development", "production", "test"] = Field(
        default="development", description="运行环境"
    )
    debug: bool = Field(default=False, description="调试模式")

    # Logging
    log_level: str = Field(default="INFO", description="日志级别")
    log_format: Literal["json", "text"] = Field(default="text", description="日志格式")

    # Backend API
    api_base_url: str = Field(default="http://localhost:8000/api/v1", description="后端 API 地址")
    api_token: str = Field(default="", description="访问令牌（Bearer）")
    request_timeout: float = Field(default=30.0, description="请求超时时间（秒）")

    # Webhook
    webhook_url_template: str = Field(
        default="{base_url}/webhooks/{token}",
        description="Webhook 触发地址模板",
    )

    # Editor
    default_node_x: float = Field(default=300, description="侧边栏添加节点的默认横坐标")
    default_node_y: float = Field(default=200, description="侧边栏添加节点的默认纵坐标")


# 全局配置实例
settings = Settings()

"""
全局配置模块

使用 Pydantic Settings 从环境变量加载配置
"""
import sys
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .providers.drive_115.config import default_config as default_115_config


def default_cookie_file() -> Path:
    """默认 Cookie 文件位置：程序所在目录的上一级下的 data/115"""
    program_dir = Path(sys.argv[0] or ".").resolve().parent
    return program_dir.parent / "data" / "115"


class SessionSettings(BaseSettings):
    """网盘会话配置"""
    model_config = SettingsConfigDict(env_prefix="PAN115_")

    cookie_file: Path = Field(default_factory=default_cookie_file, alias="PAN115_COOKIE_FILE")

    # 下载链接与该 User-Agent 绑定
    user_agent: str = Field(default=default_115_config.USER_AGENT, alias="PAN115_USER_AGENT")

    connect_timeout: int = Field(default=default_115_config.DEFAULT_CONNECT_TIMEOUT, alias="PAN115_CONNECT_TIMEOUT")
    read_timeout: int = Field(default=default_115_config.DEFAULT_READ_TIMEOUT, alias="PAN115_READ_TIMEOUT")

    # 单页列表数量，超出部分会被截断
    list_limit: int = Field(default=default_115_config.API_FETCH_LIMIT, alias="PAN115_LIST_LIMIT")

    # 按名称排序时使用自然排序
    natural_sort: bool = Field(default=True, alias="PAN115_NATURAL_SORT")

    # 执行操作前检查登录状态
    check_login: bool = Field(default=True, alias="PAN115_CHECK_LOGIN")


class LogSettings(BaseSettings):
    """日志配置"""
    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = Field(default="WARNING", alias="LOG_LEVEL")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s",
        alias="LOG_FORMAT"
    )


class Settings(BaseSettings):
    """应用配置"""

    # 会话配置
    session: SessionSettings = Field(default_factory=SessionSettings)

    # 日志配置
    log: LogSettings = Field(default_factory=LogSettings)


@lru_cache
def get_settings() -> Settings:
    """获取配置实例（缓存）"""
    return Settings()

"""
115 网盘 Provider

导出 Cookie 会话及其配置
"""
from .session import Session115
from .auth import Credential115, load_credential
from .config import Config115, default_config
from .models import convert_to_entry, convert_to_entries

__all__ = [
    "Session115",
    "Credential115",
    "load_credential",
    "Config115",
    "default_config",
    "convert_to_entry",
    "convert_to_entries",
]

"""
Providers 包

导出各网盘的会话实现
"""

from .drive_115 import Session115, Credential115, load_credential

__all__ = [
    "Session115",
    "Credential115",
    "load_credential",
]

"""
通用数据模型

定义目录项、播放流等统一数据结构
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict, Any

# 根目录的固定 ID
ROOT_ID = "0"


class SortOrder(Enum):
    """列表排序方式

    值为后端的排序字段
    """
    NAME = "file_name"
    TIME = "user_utime"
    SIZE = "file_size"
    TYPE = "file_type"

    @property
    def ascending(self) -> bool:
        """名称和类型升序，时间和大小降序（最新/最大在前）"""
        return self in (SortOrder.NAME, SortOrder.TYPE)

    @classmethod
    def from_name(cls, name: str) -> 'SortOrder':
        """从命令行名称解析（name/time/size/type）

        Raises:
            ValueError: 未知的排序方式
        """
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown sort order: {name}") from None


@dataclass
class Entry:
    """远程文件/目录项

    目录只携带 directory_id，文件只携带 pick_code
    """
    name: str
    is_directory: bool
    pick_code: Optional[str] = None      # 文件的下载标识符
    directory_id: Optional[str] = None   # 目录自身的 ID

    # 可选字段
    size: int = 0
    modified_at: Optional[float] = None
    parent_id: Optional[str] = None

    # 扩展字段（保存原始数据）
    raw_data: Optional[Dict[str, Any]] = None

    def __post_init__(self):
        if self.is_directory:
            if not self.directory_id:
                raise ValueError(f"Directory entry '{self.name}' has no directory_id")
            self.pick_code = None
        elif self.directory_id:
            raise ValueError(f"File entry '{self.name}' must not carry a directory_id")
        elif not self.pick_code:
            raise ValueError(f"File entry '{self.name}' has no pick_code")

    @property
    def id(self) -> Optional[str]:
        """目录返回 directory_id，文件返回 pick_code"""
        return self.directory_id if self.is_directory else self.pick_code


@dataclass
class StreamCandidate:
    """可播放的流"""
    quality: str          # "Source"、"1080p" 之类或 "Unknown"
    url: str
    is_adaptive: bool     # 是否为 m3u8 自适应码率流

"""
核心抽象层

导出核心接口和数据模型
"""

from .models import (
    ROOT_ID,
    SortOrder,
    Entry,
    StreamCandidate,
)

from .exceptions import (
    CloudStorageError,
    SessionInitError,
    ListError,
    PathNotFoundError,
    InvalidPathError,
    FileNotFoundError,
    NoStreamsFoundError,
    DownloadLinkError,
    NetworkError,
)

from .session import StorageSession

__all__ = [
    # 模型
    "ROOT_ID",
    "SortOrder",
    "Entry",
    "StreamCandidate",
    # 异常
    "CloudStorageError",
    "SessionInitError",
    "ListError",
    "PathNotFoundError",
    "InvalidPathError",
    "FileNotFoundError",
    "NoStreamsFoundError",
    "DownloadLinkError",
    "NetworkError",
    # 接口
    "StorageSession",
]

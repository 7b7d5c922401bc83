"""
115 网盘路径浏览命令行工具

按斜杠路径列目录，解析文件的原始下载链接和 m3u8 转码流
"""

# 导出核心接口和数据模型
from .core import (
    # 数据模型
    ROOT_ID,
    SortOrder,
    Entry,
    StreamCandidate,
    # 异常
    CloudStorageError,
    SessionInitError,
    ListError,
    PathNotFoundError,
    InvalidPathError,
    FileNotFoundError,
    NoStreamsFoundError,
    DownloadLinkError,
    NetworkError,
    # 接口
    StorageSession,
)

# 导出会话实现
from .providers import Session115, Credential115, load_credential

# 导出配置
from .config import Settings, get_settings

# 导出服务
from .services import (
    SortedLister,
    PathResolver,
    FileLocator,
    StreamCollector,
    parse_master_playlist,
    rank_streams,
)

__all__ = [
    # 核心
    "ROOT_ID",
    "SortOrder",
    "Entry",
    "StreamCandidate",
    "CloudStorageError",
    "SessionInitError",
    "ListError",
    "PathNotFoundError",
    "InvalidPathError",
    "FileNotFoundError",
    "NoStreamsFoundError",
    "DownloadLinkError",
    "NetworkError",
    "StorageSession",
    # 会话
    "Session115",
    "Credential115",
    "load_credential",
    # 配置
    "Settings",
    "get_settings",
    # 服务
    "SortedLister",
    "PathResolver",
    "FileLocator",
    "StreamCollector",
    "parse_master_playlist",
    "rank_streams",
]

__version__ = "1.0.0"

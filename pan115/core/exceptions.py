"""
通用异常定义

所有异常对单次命令调用都是终止性的，不做重试
"""


class CloudStorageError(Exception):
    """云存储基础异常"""
    pass


class SessionInitError(CloudStorageError):
    """会话初始化失败（Cookie 缺失/无效、登录检查失败）"""
    pass


class ListError(CloudStorageError):
    """目录列表获取失败"""
    pass


class PathNotFoundError(CloudStorageError):
    """路径中某一级目录不存在"""

    def __init__(self, segment: str, path: str = ""):
        self.segment = segment
        self.path = path
        if path:
            message = f"Directory not found: {segment} (under /{path})"
        else:
            message = f"Directory not found: {segment}"
        super().__init__(message)


class InvalidPathError(CloudStorageError):
    """无效的路径"""
    pass


class FileNotFoundError(CloudStorageError):
    """文件不存在异常"""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"File not found: {name}")


class NoStreamsFoundError(CloudStorageError):
    """未能获取任何播放链接"""
    pass


class DownloadLinkError(CloudStorageError):
    """下载链接获取失败"""
    pass


class NetworkError(CloudStorageError):
    """网络错误异常"""
    pass

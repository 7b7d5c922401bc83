"""
文件定位服务

由完整文件路径找到文件项（及其 pick_code）
"""
from __future__ import annotations
import logging

from ..core.models import Entry
from ..core.exceptions import InvalidPathError, FileNotFoundError
from ..utils.helpers import split_file_path
from .listing import SortedLister
from .path_resolver import PathResolver

logger = logging.getLogger(__name__)


class FileLocator:
    """文件定位器"""

    def __init__(self, resolver: PathResolver, lister: SortedLister):
        self.resolver = resolver
        self.lister = lister

    def locate(self, file_path: str) -> Entry:
        """
        定位文件

        Args:
            file_path: 文件路径，如 "/电影/xxx.mkv"，必须包含 "/"

        Returns:
            匹配的文件项

        Raises:
            InvalidPathError: 路径中没有 "/" 或以 "/" 结尾
            PathNotFoundError: 所在目录不存在
            FileNotFoundError: 目录中没有该文件
            ListError: 列表获取失败
        """
        dir_path, file_name = split_file_path(file_path)
        if dir_path is None:
            raise InvalidPathError(f"Invalid file path (no directory separator): {file_path}")
        if not file_name:
            raise InvalidPathError(f"Invalid file path (no file name): {file_path}")

        directory_id = self.resolver.resolve(dir_path)

        for entry in self.lister.list_sorted(directory_id):
            if not entry.is_directory and entry.name == file_name:
                logger.debug(f"Located {file_path!r}: pick_code={entry.pick_code}")
                return entry

        raise FileNotFoundError(file_name)

"""
路径解析服务

后端没有"路径 -> 目录 ID"的接口，只能逐级列目录匹配
"""
from __future__ import annotations
import logging
from typing import List

from ..core.models import ROOT_ID
from ..core.exceptions import PathNotFoundError
from .listing import SortedLister

logger = logging.getLogger(__name__)


def split_segments(path: str) -> List[str]:
    """去掉一个前导 "/" 后按 "/" 切分，丢弃空段"""
    if path.startswith("/"):
        path = path[1:]
    return [segment for segment in path.split("/") if segment]


class PathResolver:
    """把 "/电影/科幻" 这样的路径解析为目录 ID"""

    def __init__(self, lister: SortedLister):
        self.lister = lister

    def resolve(self, path: str) -> str:
        """
        解析目录路径

        Args:
            path: 斜杠分隔的路径，前导 "/" 可选

        Returns:
            目录 ID，根目录为 "0"

        Raises:
            PathNotFoundError: 某一级目录不存在
            ListError: 列表获取失败
        """
        segments = split_segments(path)
        current_id = ROOT_ID

        for depth, segment in enumerate(segments):
            entries = self.lister.list_sorted(current_id)

            found = None
            for entry in entries:
                if entry.is_directory and entry.name == segment:
                    found = entry
                    break

            if found is None:
                walked = "/".join(segments[:depth])
                logger.debug(f"Path component not found: {segment} (in directory {current_id})")
                raise PathNotFoundError(segment, walked)

            current_id = found.directory_id

        logger.debug(f"Resolved {path!r} to directory {current_id}")
        return current_id

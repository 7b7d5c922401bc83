"""
排序列表服务

按稳定顺序获取目录子项，供用户列表和路径解析共用
"""
from __future__ import annotations
import logging
from typing import List, Optional

from ..core.session import StorageSession
from ..core.models import Entry, SortOrder, ROOT_ID
from ..core.exceptions import CloudStorageError, ListError
from ..utils.helpers import natural_key
from ..providers.drive_115.config import default_config

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = default_config.API_FETCH_LIMIT


class SortedLister:
    """排序列表器

    只取一页（limit），超出部分被截断并记录警告
    """

    def __init__(
        self,
        session: StorageSession,
        limit: int = DEFAULT_LIST_LIMIT,
        natural_sort: bool = True
    ):
        """
        Args:
            session: 存储会话
            limit: 单页数量
            natural_sort: 按名称排序时是否使用自然排序（否则接受后端的字典序）
        """
        self.session = session
        self.limit = limit
        self.natural_sort = natural_sort
        self.last_total: Optional[int] = None

    def list_sorted(
        self,
        directory_id: str,
        limit: Optional[int] = None,
        order: SortOrder = SortOrder.NAME
    ) -> List[Entry]:
        """
        获取目录子项

        Args:
            directory_id: 目录 ID，为空时视为根目录
            limit: 单页数量（默认使用构造时的值）
            order: 排序方式，名称以外的排序直接沿用后端顺序

        Returns:
            排好序的子项列表

        Raises:
            ListError: 会话调用失败
        """
        directory_id = directory_id or ROOT_ID
        limit = limit or self.limit

        try:
            entries, total = self.session.list_children(
                directory_id,
                limit=limit,
                offset=0,
                order=order,
                natsort=self.natural_sort
            )
        except ListError:
            raise
        except CloudStorageError as e:
            raise ListError(f"Failed to list directory {directory_id}: {e}") from e

        self.last_total = total
        if total > len(entries):
            logger.warning(
                f"Directory {directory_id} has {total} entries, only the first {len(entries)} were listed"
            )

        if order is SortOrder.NAME and self.natural_sort:
            # 目录在前（与 fc_mix=0 一致），同组内自然排序；sorted 是稳定的
            entries = sorted(entries, key=lambda e: (not e.is_directory, natural_key(e.name)))

        return entries

"""
存储会话接口

定义已认证的网盘会话所提供的最小操作集合
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

from .models import Entry, SortOrder


class StorageSession(ABC):
    """已认证的存储会话

    每次命令调用构造一个，由调用方独占并显式传给各个组件
    """

    @abstractmethod
    def list_children(
        self,
        directory_id: str,
        limit: int = 1000,
        offset: int = 0,
        order: SortOrder = SortOrder.NAME,
        natsort: bool = True
    ) -> Tuple[List[Entry], int]:
        """列出目录的子项（单页）

        Args:
            directory_id: 目录 ID（根目录为 "0"）
            limit: 每页数量
            offset: 偏移量
            order: 排序方式
            natsort: 按名称排序时是否使用自然排序

        Returns:
            Tuple[List[Entry], int]: (子项列表, 后端报告的总数)

        Raises:
            ListError: 列表获取失败
        """
        pass

    @abstractmethod
    def get_download_link(self, pick_code: str, user_agent: str) -> str:
        """获取与 User-Agent 绑定的下载链接

        Raises:
            DownloadLinkError: 获取失败
        """
        pass

    @abstractmethod
    def raw_get(self, url: str, headers: Optional[Dict[str, str]] = None) -> str:
        """带认证信息的原始 GET 请求，返回响应文本

        Raises:
            NetworkError: 请求失败
        """
        pass

    def close(self):
        """释放会话资源"""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

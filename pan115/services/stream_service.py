"""
播放流服务

从原始下载链接和 m3u8 转码清单收集可播放的 URL，并按清晰度排序
"""
from __future__ import annotations
import logging
import re
from typing import List, Optional, Tuple

from ..core.session import StorageSession
from ..core.models import StreamCandidate
from ..core.exceptions import CloudStorageError, NoStreamsFoundError
from ..providers.drive_115.config import default_config

logger = logging.getLogger(__name__)

SOURCE_QUALITY = "Source"
UNKNOWN_QUALITY = "Unknown"

M3U8_MAGIC = "#EXTM3U"
STREAM_INF_TAG = "#EXT-X-STREAM-INF"

_RESOLUTION_RE = re.compile(r'RESOLUTION=\d+x(\d+)')
_QUALITY_RE = re.compile(r'^(\d+)p$')


def parse_master_playlist(body: str) -> List[StreamCandidate]:
    """
    解析 m3u8 主清单

    每个 #EXT-X-STREAM-INF 行之后的第一个非空行是该码率的 URL，
    只接受 http 开头的 URL；清晰度取 RESOLUTION 的高度

    Args:
        body: 清单文本

    Returns:
        自适应流列表（清单顺序），不是 m3u8 时返回空列表
    """
    if not body or not body.lstrip("\ufeff \t\r\n").startswith(M3U8_MAGIC):
        return []

    streams = []
    # 等待 URL 的 #EXT-X-STREAM-INF 行
    pending = None

    for line in body.splitlines():
        line = line.strip()
        if not line:
            continue

        if pending is not None:
            if line.startswith("http"):
                match = _RESOLUTION_RE.search(pending)
                quality = f"{match.group(1)}p" if match else UNKNOWN_QUALITY
                streams.append(StreamCandidate(quality=quality, url=line, is_adaptive=True))
            pending = None

        if line.startswith(STREAM_INF_TAG):
            pending = line

    return streams


def _rank_key(candidate: StreamCandidate) -> Tuple[int, int]:
    if candidate.quality == SOURCE_QUALITY:
        return 0, 0
    match = _QUALITY_RE.match(candidate.quality)
    if match:
        return 1, -int(match.group(1))
    # 无法解析的清晰度排在最后
    return 2, 0


def rank_streams(candidates: List[StreamCandidate]) -> List[StreamCandidate]:
    """
    按清晰度排序

    Source 最前，其次按 "<数字>p" 降序，无法解析的（如 Unknown）最后；
    排序稳定，相同键保持原有相对顺序
    """
    return sorted(candidates, key=_rank_key)


class StreamCollector:
    """播放流收集器

    两个来源互不影响，任一失败只记录警告
    """

    def __init__(
        self,
        session: StorageSession,
        user_agent: Optional[str] = None,
        m3u8_url_template: Optional[str] = None
    ):
        """
        Args:
            session: 存储会话
            user_agent: 默认 User-Agent（下载链接与之绑定）
            m3u8_url_template: m3u8 清单地址模板，包含 {pick_code}
        """
        self.session = session
        self.user_agent = user_agent or default_config.USER_AGENT
        self.m3u8_url_template = m3u8_url_template or default_config.M3U8_URL_TEMPLATE

    def collect_streams(self, pick_code: str, user_agent: Optional[str] = None) -> List[StreamCandidate]:
        """
        收集播放流

        Args:
            pick_code: 文件的 pick_code
            user_agent: 请求使用的 User-Agent，之后播放也必须使用同一个

        Returns:
            播放流列表（插入顺序，未排序）

        Raises:
            NoStreamsFoundError: 两个来源都没有可用的 URL
        """
        user_agent = user_agent or self.user_agent
        streams = []

        # 1. 原始文件下载链接
        try:
            url = self.session.get_download_link(pick_code, user_agent)
            if url:
                streams.append(StreamCandidate(quality=SOURCE_QUALITY, url=url, is_adaptive=False))
        except CloudStorageError as e:
            logger.warning(f"Failed to get source URL for {pick_code}: {e}")

        # 2. m3u8 转码流
        m3u8_url = self.m3u8_url_template.format(pick_code=pick_code)
        try:
            body = self.session.raw_get(m3u8_url, {"User-Agent": user_agent})
            variants = parse_master_playlist(body)
            if not variants:
                logger.info(f"No adaptive variants found for {pick_code}")
            streams.extend(variants)
        except CloudStorageError as e:
            logger.warning(f"Failed to fetch m3u8 playlist for {pick_code}: {e}")

        if not streams:
            raise NoStreamsFoundError(f"No playable streams found for {pick_code}")

        return streams

"""
115 网盘数据模型转换器

将 115 webapi 返回的文件记录转换为统一的 Entry
"""
import logging
from typing import Any, Dict, List, Optional

from ...core.models import Entry

logger = logging.getLogger(__name__)


def convert_to_entry(item_115: Dict[str, Any]) -> Entry:
    """将 115 文件记录转换为 Entry

    115 的列表记录中，文件带有 fid（此时 cid 是父目录 ID），
    目录没有 fid（此时 cid 是目录自身 ID，pid 是父目录 ID）

    Args:
        item_115: 115 API 返回的文件记录

    Returns:
        Entry: 统一的目录项

    Raises:
        ValueError: 记录缺少 pick_code（文件）或 cid（目录）
    """
    file_id = item_115.get("fid")
    name = item_115.get("n") or item_115.get("file_name", "")
    size = _to_int(item_115.get("s") or item_115.get("file_size"))
    modified_at = _to_timestamp(item_115.get("te") or item_115.get("t"))

    if file_id:
        return Entry(
            name=name,
            is_directory=False,
            pick_code=item_115.get("pc") or item_115.get("pick_code"),
            size=size,
            modified_at=modified_at,
            parent_id=_to_str(item_115.get("cid")),
            raw_data=item_115
        )

    return Entry(
        name=name,
        is_directory=True,
        directory_id=_to_str(item_115.get("cid")),
        size=size,
        modified_at=modified_at,
        parent_id=_to_str(item_115.get("pid")),
        raw_data=item_115
    )


def convert_to_entries(items_115: List[Dict[str, Any]]) -> List[Entry]:
    """批量转换文件记录

    缺少 pick_code 的文件、缺少 cid 的目录等无效记录会被跳过
    """
    entries = []
    for item in items_115:
        if not isinstance(item, dict):
            logger.warning(f"Skipping non-object list record: {item!r}")
            continue
        try:
            entries.append(convert_to_entry(item))
        except ValueError as e:
            logger.warning(f"Skipping invalid list record: {e}")
    return entries


def _to_str(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def _to_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _to_timestamp(value: Any) -> Optional[float]:
    # "t" 有时是 "2024-01-01 12:00" 这样的字符串，只接受数字
    try:
        return float(value)
    except (TypeError, ValueError):
        return None

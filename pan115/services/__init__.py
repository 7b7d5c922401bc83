"""
服务层
"""
from .listing import SortedLister, DEFAULT_LIST_LIMIT
from .path_resolver import PathResolver
from .file_locator import FileLocator
from .stream_service import StreamCollector, parse_master_playlist, rank_streams

__all__ = [
    'SortedLister',
    'DEFAULT_LIST_LIMIT',
    'PathResolver',
    'FileLocator',
    'StreamCollector',
    'parse_master_playlist',
    'rank_streams',
]

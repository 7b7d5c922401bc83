"""
测试公共夹具：内存中的假网盘会话
"""
from typing import Dict, List, Optional, Tuple, Union

import pytest

from pan115.core.session import StorageSession
from pan115.core.models import Entry, SortOrder
from pan115.core.exceptions import ListError, DownloadLinkError, NetworkError


def make_dir(name: str, directory_id: str) -> Entry:
    return Entry(name=name, is_directory=True, directory_id=directory_id)


def make_file(name: str, pick_code: str, size: int = 0) -> Entry:
    return Entry(name=name, is_directory=False, pick_code=pick_code, size=size)


class FakeSession(StorageSession):
    """按目录 ID 返回预置子项的假会话，记录所有调用"""

    def __init__(
        self,
        tree: Dict[str, List[Entry]],
        links: Optional[Dict[str, Union[str, Exception]]] = None,
        pages: Optional[Dict[str, Union[str, Exception]]] = None,
        totals: Optional[Dict[str, int]] = None
    ):
        self.tree = tree
        self.links = links or {}
        self.pages = pages or {}
        self.totals = totals or {}
        self.list_calls: List[Tuple[str, int, SortOrder, bool]] = []
        self.link_calls: List[Tuple[str, str]] = []
        self.get_calls: List[Tuple[str, Optional[Dict[str, str]]]] = []
        self.closed = False

    def list_children(self, directory_id, limit=1000, offset=0, order=SortOrder.NAME, natsort=True):
        self.list_calls.append((directory_id, limit, order, natsort))
        if directory_id not in self.tree:
            raise ListError(f"no such directory: {directory_id}")
        entries = self.tree[directory_id]
        total = self.totals.get(directory_id, len(entries))
        return list(entries[offset:offset + limit]), total

    def get_download_link(self, pick_code, user_agent):
        self.link_calls.append((pick_code, user_agent))
        result = self.links.get(pick_code)
        if result is None:
            raise DownloadLinkError(f"no link for {pick_code}")
        if isinstance(result, Exception):
            raise result
        return result

    def raw_get(self, url, headers=None):
        self.get_calls.append((url, headers))
        result = self.pages.get(url)
        if result is None:
            raise NetworkError(f"404 for {url}")
        if isinstance(result, Exception):
            raise result
        return result

    def close(self):
        self.closed = True


@pytest.fixture
def drive_tree() -> Dict[str, List[Entry]]:
    """
    /
    ├── 电影/            (100)
    │   ├── 科幻/        (110)
    │   │   └── 星际穿越.mkv
    │   ├── a.mkv
    │   └── Movie.2024.MKV
    ├── docs/            (200)
    │   └── Docs/        (210)
    ├── a/               (300)
    │   └── b/           (310)
    │       └── c/       (320)
    └── readme.txt
    """
    return {
        "0": [
            make_file("readme.txt", "pc_readme"),
            make_dir("电影", "100"),
            make_dir("docs", "200"),
            make_dir("a", "300"),
        ],
        "100": [
            make_file("a.mkv", "pc_a"),
            make_dir("科幻", "110"),
            make_file("Movie.2024.MKV", "pc_movie"),
        ],
        "110": [make_file("星际穿越.mkv", "pc_star")],
        "200": [make_dir("Docs", "210")],
        "210": [],
        "300": [make_dir("b", "310"), make_file("b.txt", "pc_b_txt")],
        "310": [make_dir("c", "320")],
        "320": [],
    }


@pytest.fixture
def fake_session(drive_tree) -> FakeSession:
    return FakeSession(drive_tree)

"""
路径与文件名辅助工具模块
"""
from __future__ import annotations
import posixpath
import re
from typing import Optional, Tuple, Union

# 只按 ASCII 数字切分，保证奇数位一定能转成 int
_DIGIT_RUN = re.compile(r'([0-9]+)')


def natural_key(name: str) -> Tuple[Union[str, int], ...]:
    """
    自然排序键

    忽略大小写，数字部分按数值比较，如 "file2" 排在 "file10" 之前
    """
    parts = _DIGIT_RUN.split(name.casefold())
    return tuple(int(part) if i % 2 else part for i, part in enumerate(parts))


def split_extension(filename: str) -> Tuple[str, str]:
    """
    按最后一个 "." 拆分文件名

    Returns:
        (不带扩展名的文件名, 小写扩展名)，没有 "." 时扩展名为空
    """
    dot = filename.rfind('.')
    if dot == -1:
        return filename, ""
    return filename[:dot], filename[dot + 1:].lower()


def split_file_path(file_path: str) -> Tuple[Optional[str], str]:
    """
    按最后一个 "/" 拆分为 (目录路径, 文件名)

    目录部分为空时返回 "/"；没有 "/" 时目录部分为 None 由调用方处理
    """
    slash = file_path.rfind('/')
    if slash == -1:
        return None, file_path
    return file_path[:slash] or "/", file_path[slash + 1:]


def parent_dir(path: str) -> str:
    """返回路径的父目录（POSIX 语义）"""
    return posixpath.dirname(path) or "/"

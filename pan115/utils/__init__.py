"""
工具模块
"""
from .helpers import (
    natural_key,
    split_extension,
    split_file_path,
    parent_dir
)

__all__ = [
    'natural_key',
    'split_extension',
    'split_file_path',
    'parent_dir'
]

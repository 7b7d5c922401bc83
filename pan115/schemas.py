"""
命令行输出数据模型 (Pydantic)
"""
from typing import List, Optional
from pydantic import BaseModel, Field


# ==================== 通用响应 ====================

class ResponseBase(BaseModel):
    """基础响应"""
    success: bool = True


class ErrorResponse(ResponseBase):
    """错误响应"""
    success: bool = False
    error: str


# ==================== 列表 ====================

class FileItem(BaseModel):
    """列表项

    目录名以 "/" 结尾且不带扩展名字段
    """
    name: str
    type: str = Field(..., description="file 或 dir")
    extension: Optional[str] = None
    name_no_ext: Optional[str] = None


class ListResponse(ResponseBase):
    """列表响应"""
    items: List[FileItem] = []


# ==================== 播放 ====================

class PlayResponse(ResponseBase):
    """播放链接响应"""
    url: str
    user_agent: str
    dir_path: str
    filename_no_ext: str


class StreamInfo(BaseModel):
    """播放流"""
    quality: str
    url: str
    is_m3u8: bool


class StreamsResponse(ResponseBase):
    """多播放流响应"""
    streams: List[StreamInfo] = []
    user_agent: str
    dir_path: str
    filename_no_ext: str

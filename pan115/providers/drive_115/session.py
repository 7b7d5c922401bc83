"""
115 网盘 Cookie 会话

实现 StorageSession 接口：目录列表、下载链接、原始 GET
"""
import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import requests
from requests.cookies import create_cookie

from ...core.session import StorageSession
from ...core.models import Entry, SortOrder, ROOT_ID
from ...core.exceptions import (
    SessionInitError, ListError, DownloadLinkError, NetworkError
)
from .auth import Credential115, load_credential
from .models import convert_to_entries
from .config import Config115, default_config

logger = logging.getLogger(__name__)


class Session115(StorageSession):
    """115 网盘会话

    列表和原始请求走携带 Cookie 的 requests.Session，
    下载链接由 p115client 负责（接口需要加密协议）
    """

    def __init__(
        self,
        credential: Credential115,
        config: Config115 = None,
        user_agent: Optional[str] = None,
        timeout: Optional[Tuple[int, int]] = None
    ):
        """
        Args:
            credential: Cookie 凭据
            config: 115 配置（可选）
            user_agent: 列表等普通请求使用的 User-Agent
            timeout: (连接超时, 读取超时)
        """
        self.config = config or default_config
        self.credential = credential
        self.user_agent = user_agent or self.config.USER_AGENT
        self.timeout = timeout or (self.config.DEFAULT_CONNECT_TIMEOUT, self.config.DEFAULT_READ_TIMEOUT)
        self._client: Any = None

        self._http = requests.Session()
        self._http.headers.update({
            "User-Agent": self.user_agent,
            "Referer": self.config.REFERER_DOMAIN,
            "Accept": "application/json, text/plain, */*",
        })
        for name, value in credential.as_dict().items():
            cookie = create_cookie(name=name, value=value, domain=self.config.COOKIE_DOMAIN, path="/")
            self._http.cookies.set_cookie(cookie)

    @classmethod
    def from_cookie_file(cls, cookie_file: Union[str, Path], **kwargs) -> 'Session115':
        """从 Cookie 文件创建会话

        Raises:
            SessionInitError: Cookie 文件无效
        """
        return cls(load_credential(cookie_file), **kwargs)

    def close(self):
        """关闭会话"""
        self._http.close()
        # p115client 不需要显式关闭
        self._client = None

    def _get_client(self):
        """获取或创建 p115client 客户端"""
        if self._client is None:
            from p115client import P115Client

            self._client = P115Client(self.credential.to_cookie(), check_for_relogin=False)
        return self._client

    # ==================== 登录检查 ====================

    def check_login(self):
        """检查 Cookie 是否仍然有效

        Raises:
            SessionInitError: 登录检查失败
        """
        params = {"_": str(int(time.time() * 1000))}
        try:
            response = self._http.get(self.config.LOGIN_STATUS_URL, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise SessionInitError(f"Login check failed: {e}") from e

        if response.status_code in (401, 511):
            raise SessionInitError("Login check failed: cookie has expired")

        try:
            payload = response.json()
        except ValueError:
            raise SessionInitError(f"Login check failed: unexpected response (HTTP {response.status_code})")

        if not isinstance(payload, dict) or payload.get("state") in (False, 0, None):
            raise SessionInitError("Login check failed: cookie has expired")

        logger.debug(f"Logged in as UID {self.credential.uid}")

    # ==================== 文件列表 ====================

    def list_children(
        self,
        directory_id: str,
        limit: int = 1000,
        offset: int = 0,
        order: SortOrder = SortOrder.NAME,
        natsort: bool = True
    ) -> Tuple[List[Entry], int]:
        """列出目录内容（单页）"""
        use_natsort = natsort and order is SortOrder.NAME
        url = self.config.NATSORT_FILE_LIST_API_URL if use_natsort else self.config.FILE_LIST_API_URL
        params = {
            "aid": "1",
            "cid": directory_id or ROOT_ID,
            "o": order.value,
            "asc": "1" if order.ascending else "0",
            "offset": str(max(0, offset)),
            "show_dir": "1",
            "limit": str(limit),
            "snap": "0",
            "natsort": "1" if use_natsort else "0",
            "record_open_time": "1",
            "format": "json",
            "fc_mix": "0",
        }

        logger.debug(f"Listing directory {params['cid']} via {url} (order={order.value}, limit={limit})")
        try:
            response = self._http.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.exceptions.RequestException as e:
            raise ListError(f"Failed to list directory {params['cid']}: {e}") from e
        except ValueError:
            raise ListError(f"Failed to list directory {params['cid']}: invalid JSON response")

        if not isinstance(payload, dict) or not payload.get("state"):
            raise ListError(f"Failed to list directory {params['cid']}: {_error_message(payload)}")

        items = payload.get("data") or []
        if not isinstance(items, list):
            raise ListError(f"Failed to list directory {params['cid']}: malformed data field")

        entries = convert_to_entries(items)

        total = _to_count(payload.get("count"), len(entries))
        return entries, total

    # ==================== 下载链接 ====================

    def get_download_link(self, pick_code: str, user_agent: str) -> str:
        """获取下载链接

        115 的下载链接与请求时的 User-Agent 绑定，播放时必须使用同一个
        """
        if not pick_code:
            raise DownloadLinkError("Empty pick_code")

        try:
            client = self._get_client()
            url = client.download_url(
                pick_code,
                headers={"user-agent": user_agent},
                app=self.config.DOWNLOAD_APP
            )
        except Exception as e:
            logger.debug(f"download_url failed for pick_code {pick_code}: {e!r}")
            raise DownloadLinkError(f"Failed to get download URL for {pick_code}: {e}") from e

        if not url:
            raise DownloadLinkError(f"Download URL not found for pick_code: {pick_code}")
        return str(url)

    # ==================== 原始请求 ====================

    def raw_get(self, url: str, headers: Optional[Dict[str, str]] = None) -> str:
        """携带 Cookie 的 GET 请求"""
        try:
            response = self._http.get(url, headers=headers, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"GET {url} failed: {e}") from e
        return response.text


def _error_message(payload) -> str:
    if not isinstance(payload, dict):
        return "unexpected response"
    return str(
        payload.get("error")
        or payload.get("msg")
        or payload.get("message")
        or payload.get("errNo")
        or "Unknown API error"
    )


def _to_count(value, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default

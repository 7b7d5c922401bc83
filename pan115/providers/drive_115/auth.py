"""
115 网盘 Cookie 凭据

读取并校验 Cookie 文件，不负责登录流程本身
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, Dict, Tuple, Union

from ...core.exceptions import SessionInitError

logger = logging.getLogger(__name__)


@dataclass
class Credential115:
    """115 Cookie 凭据"""
    uid: str
    cid: str
    seid: str
    kid: str = ""

    KEYS: ClassVar[Tuple[str, ...]] = ("UID", "CID", "SEID", "KID")

    @classmethod
    def from_cookie(cls, cookie: str) -> 'Credential115':
        """解析 "UID=...; CID=...; SEID=..." 格式的 Cookie 字符串

        Raises:
            SessionInitError: 缺少必需字段
        """
        pairs = {}
        for item in cookie.split(";"):
            if not item.strip() or "=" not in item:
                continue
            key, value = item.split("=", 1)
            key = key.strip().upper()
            value = value.strip()
            if key in cls.KEYS and value:
                pairs[key] = value

        missing = [key for key in cls.KEYS[:3] if not pairs.get(key)]
        if missing:
            raise SessionInitError(f"Cookie is missing required fields: {', '.join(missing)}")

        return cls(
            uid=pairs["UID"],
            cid=pairs["CID"],
            seid=pairs["SEID"],
            kid=pairs.get("KID", ""),
        )

    def as_dict(self) -> Dict[str, str]:
        data = {"UID": self.uid, "CID": self.cid, "SEID": self.seid}
        if self.kid:
            data["KID"] = self.kid
        return data

    def to_cookie(self) -> str:
        """还原为 Cookie 字符串"""
        return "; ".join(f"{k}={v}" for k, v in self.as_dict().items())


def load_credential(cookie_file: Union[str, Path]) -> Credential115:
    """从 Cookie 文件加载凭据

    Args:
        cookie_file: Cookie 文件路径

    Raises:
        SessionInitError: 文件不存在、无法读取或内容无效
    """
    path = Path(cookie_file).expanduser()
    if not path.is_file():
        raise SessionInitError(f"Cookie file not found: {path}")

    try:
        text = path.read_text(encoding="utf-8").strip()
    except OSError as e:
        raise SessionInitError(f"Failed to read cookie file {path}: {e}") from e

    logger.debug(f"Loaded cookie file: {path}")
    return Credential115.from_cookie(text)

"""
115 网盘特定配置
"""
from dataclasses import dataclass


@dataclass
class Config115:
    """115 网盘配置（Cookie 会话）"""

    # API 端点
    FILE_LIST_API_URL: str = "https://webapi.115.com/files"
    NATSORT_FILE_LIST_API_URL: str = "https://aps.115.com/natsort/files.php"
    LOGIN_STATUS_URL: str = "https://my.115.com/?ct=guide&ac=status"
    M3U8_URL_TEMPLATE: str = "https://115.com/api/video/m3u8/{pick_code}.m3u8"

    # 网络配置
    USER_AGENT: str = (
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/5.37.36 "
        "(KHTML, like Gecko) Chrome/138.0.0.0 Safari/537.36"
    )
    REFERER_DOMAIN: str = "https://115.com/"
    COOKIE_DOMAIN: str = ".115.com"
    DEFAULT_CONNECT_TIMEOUT: int = 10
    DEFAULT_READ_TIMEOUT: int = 30

    # 下载链接接口使用的 app 类型
    DOWNLOAD_APP: str = "chrome"

    # 单页上限
    API_FETCH_LIMIT: int = 1000


# 默认配置实例
default_config = Config115()

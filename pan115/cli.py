"""
命令行入口

按路径浏览 115 网盘并获取播放链接，结果以单个 JSON 对象输出到 stdout：

    pan115 --action list --path /电影 --sort name
    pan115 --action play --path /电影/xxx.mkv
    pan115 --action get-streams --path /电影/xxx.mkv

日志写到 stderr，成功退出码 0，失败退出码 1
"""
import argparse
import json
import logging
import sys
from dataclasses import dataclass
from typing import List, Optional

from .config import Settings, get_settings
from .core.exceptions import CloudStorageError, SessionInitError
from .core.models import Entry, SortOrder
from .core.session import StorageSession
from .providers.drive_115 import Session115
from .schemas import (
    ResponseBase, ErrorResponse, FileItem, ListResponse,
    PlayResponse, StreamInfo, StreamsResponse
)
from .services.listing import SortedLister
from .services.path_resolver import PathResolver
from .services.file_locator import FileLocator
from .services.stream_service import StreamCollector, rank_streams
from .utils.helpers import split_extension, parent_dir

logger = logging.getLogger(__name__)

ACTIONS = ("list", "play", "get-streams")
DEFAULT_LIST_SORT = "time"


class CliUsageError(Exception):
    """命令行参数错误"""
    pass


class JsonArgumentParser(argparse.ArgumentParser):
    """参数错误时抛出异常而不是打印用法并退出，以便统一输出 JSON"""

    def error(self, message):
        raise CliUsageError(message)


@dataclass
class CliRequest:
    """校验后的命令行请求"""
    action: str
    path: str
    order: SortOrder
    user_agent: Optional[str] = None
    limit: Optional[int] = None


def build_parser() -> JsonArgumentParser:
    parser = JsonArgumentParser(
        prog="pan115",
        description="Browse a 115 drive by path and resolve playable stream URLs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('--action', default='', help='list, play or get-streams')
    parser.add_argument('--path', default='', help='Remote path (required for play/get-streams, default / for list)')
    parser.add_argument('--sort', default=None, help='List order: name, time, size or type (default: time)')
    parser.add_argument('--cookies', default=None, help='Cookie file (default: <program dir>/../data/115)')
    parser.add_argument('--user-agent', default=None, help='User-Agent the download links are bound to')
    parser.add_argument('--limit', type=int, default=None, help='Maximum entries per directory listing')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    return parser


def validate_args(args: argparse.Namespace) -> CliRequest:
    """校验参数，不涉及任何网络请求

    Raises:
        CliUsageError: 参数缺失或无效
    """
    action = (args.action or "").strip()
    if not action:
        raise CliUsageError("The --action argument is required (list, play, get-streams)")
    if action not in ACTIONS:
        raise CliUsageError(f"Unknown action: {action}")

    path = args.path or ""
    if action == "list":
        path = path or "/"
    elif not path:
        raise CliUsageError(f"The {action} action requires the --path argument")

    order = SortOrder.NAME
    if action == "list":
        try:
            order = SortOrder.from_name(args.sort or DEFAULT_LIST_SORT)
        except ValueError as e:
            raise CliUsageError(str(e)) from e

    if args.limit is not None and args.limit <= 0:
        raise CliUsageError("--limit must be a positive integer")

    return CliRequest(
        action=action,
        path=path,
        order=order,
        user_agent=args.user_agent,
        limit=args.limit,
    )


def setup_logging(settings: Settings, debug: bool = False):
    """配置日志（输出到 stderr，stdout 只留给 JSON 结果）"""
    level = logging.DEBUG if debug else getattr(logging, settings.log.level.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format=settings.log.format,
        stream=sys.stderr
    )


def create_session(settings: Settings, cookie_file: Optional[str] = None) -> Session115:
    """创建并验证 115 会话

    Raises:
        SessionInitError: Cookie 无效或登录检查失败
    """
    session_settings = settings.session
    session = Session115.from_cookie_file(
        cookie_file or session_settings.cookie_file,
        user_agent=session_settings.user_agent,
        timeout=(session_settings.connect_timeout, session_settings.read_timeout)
    )
    if session_settings.check_login:
        try:
            session.check_login()
        except SessionInitError:
            session.close()
            raise
    return session


# ==================== 输出 ====================

def output_json(response: ResponseBase):
    """输出 JSON（保留非 ASCII 字符，省略空字段）"""
    print(json.dumps(response.model_dump(exclude_none=True), ensure_ascii=False, indent=2))


def output_error(message: str) -> int:
    output_json(ErrorResponse(error=message))
    return 1


def to_file_item(entry: Entry) -> FileItem:
    """Entry 转换为列表项"""
    if entry.is_directory:
        return FileItem(name=entry.name + "/", type="dir")

    base, extension = split_extension(entry.name)
    return FileItem(
        name=entry.name,
        type="file",
        extension=extension or None,
        name_no_ext=base or None,
    )


# ==================== 操作 ====================

class ActionRunner:
    """基于一个会话组装各组件并执行操作"""

    def __init__(self, session: StorageSession, settings: Settings, request: CliRequest):
        self.request = request
        self.user_agent = request.user_agent or settings.session.user_agent
        self.lister = SortedLister(
            session,
            limit=request.limit or settings.session.list_limit,
            natural_sort=settings.session.natural_sort
        )
        self.resolver = PathResolver(self.lister)
        self.locator = FileLocator(self.resolver, self.lister)
        self.collector = StreamCollector(session, user_agent=self.user_agent)
        self.session = session

    def run(self) -> ResponseBase:
        handlers = {
            "list": self.handle_list,
            "play": self.handle_play,
            "get-streams": self.handle_get_streams,
        }
        return handlers[self.request.action](self.request.path)

    def handle_list(self, path: str) -> ListResponse:
        directory_id = self.resolver.resolve(path)
        entries = self.lister.list_sorted(directory_id, order=self.request.order)
        return ListResponse(items=[to_file_item(entry) for entry in entries])

    def handle_play(self, path: str) -> PlayResponse:
        entry = self.locator.locate(path)
        url = self.session.get_download_link(entry.pick_code, self.user_agent)
        return PlayResponse(
            url=url,
            user_agent=self.user_agent,
            dir_path=parent_dir(path),
            filename_no_ext=split_extension(entry.name)[0],
        )

    def handle_get_streams(self, path: str) -> StreamsResponse:
        entry = self.locator.locate(path)
        streams = rank_streams(self.collector.collect_streams(entry.pick_code, self.user_agent))
        return StreamsResponse(
            streams=[StreamInfo(quality=s.quality, url=s.url, is_m3u8=s.is_adaptive) for s in streams],
            user_agent=self.user_agent,
            dir_path=parent_dir(path),
            filename_no_ext=split_extension(entry.name)[0],
        )


def main(argv: Optional[List[str]] = None, session: Optional[StorageSession] = None) -> int:
    """
    命令行主函数

    Args:
        argv: 命令行参数（默认 sys.argv[1:]）
        session: 预先构造的会话（由调用方负责关闭）；为空时根据配置创建，
            在 with 块结束时关闭

    Returns:
        退出码
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        request = validate_args(args)
    except CliUsageError as e:
        return output_error(str(e))

    settings = get_settings()
    setup_logging(settings, args.debug)

    try:
        if session is not None:
            response = ActionRunner(session, settings, request).run()
        else:
            with create_session(settings, args.cookies) as owned_session:
                response = ActionRunner(owned_session, settings, request).run()
    except CloudStorageError as e:
        logger.error(f"{request.action} {request.path!r} failed: {e}")
        return output_error(str(e))
    except Exception as e:
        logger.exception(f"Unexpected error during {request.action}: {e}")
        return output_error(f"Unexpected error: {e}")

    output_json(response)
    return 0


if __name__ == '__main__':
    sys.exit(main())

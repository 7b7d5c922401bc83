"""
命令行测试：JSON 输出与退出码
"""
import json

import pytest

import pan115.cli as cli
from conftest import FakeSession
from pan115.config import get_settings
from pan115.core.models import SortOrder
from pan115.core.exceptions import SessionInitError
from pan115.providers.drive_115 import Session115, default_config

M3U8_URL = "https://115.com/api/video/m3u8/pc_star.m3u8"
MASTER_PLAYLIST = """#EXTM3U
#EXT-X-STREAM-INF:BANDWIDTH=800000,RESOLUTION=1280x720
http://cdn.example.com/720/index.m3u8
#EXT-X-STREAM-INF:BANDWIDTH=3000000,RESOLUTION=1920x1080
http://cdn.example.com/1080/index.m3u8
"""


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    for name in (
        "PAN115_USER_AGENT", "PAN115_LIST_LIMIT", "PAN115_NATURAL_SORT",
        "PAN115_CHECK_LOGIN", "PAN115_COOKIE_FILE", "LOG_LEVEL"
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def run(capsys, argv, session=None):
    code = cli.main(argv, session=session)
    return code, json.loads(capsys.readouterr().out)


# ==================== list ====================

def test_list_root_defaults(capsys, fake_session):
    code, output = run(capsys, ["--action", "list"], fake_session)

    assert code == 0
    assert output["success"] is True
    names = [item["name"] for item in output["items"]]
    # 按时间排序时沿用后端顺序
    assert names == ["readme.txt", "电影/", "docs/", "a/"]
    assert fake_session.list_calls == [("0", 1000, SortOrder.TIME, True)]


def test_list_items_shape(capsys, fake_session):
    code, output = run(capsys, ["--action", "list", "--path", "/电影", "--sort", "name"], fake_session)

    assert code == 0
    items = {item["name"]: item for item in output["items"]}
    assert list(items) == ["科幻/", "a.mkv", "Movie.2024.MKV"]
    assert items["科幻/"] == {"name": "科幻/", "type": "dir"}
    assert items["a.mkv"] == {"name": "a.mkv", "type": "file", "extension": "mkv", "name_no_ext": "a"}
    assert items["Movie.2024.MKV"]["extension"] == "mkv"
    assert items["Movie.2024.MKV"]["name_no_ext"] == "Movie.2024"
    assert fake_session.list_calls[-1][2] is SortOrder.NAME


def test_list_limit_flag(capsys, fake_session):
    code, _ = run(capsys, ["--action", "list", "--path", "/", "--limit", "2"], fake_session)
    assert code == 0
    assert fake_session.list_calls[-1][1] == 2


def test_list_missing_directory(capsys, fake_session):
    code, output = run(capsys, ["--action", "list", "--path", "/电影/纪录片"], fake_session)
    assert code == 1
    assert output["success"] is False
    assert "纪录片" in output["error"]


# ==================== 参数错误 ====================

@pytest.mark.parametrize("argv, message", [
    ([], "--action"),
    (["--action", "delete"], "Unknown action: delete"),
    (["--action", "play"], "requires the --path argument"),
    (["--action", "get-streams"], "requires the --path argument"),
    (["--action", "list", "--sort", "random"], "Unknown sort order"),
    (["--action", "list", "--limit", "0"], "--limit"),
    (["--action", "list", "--limit", "many"], "--limit"),
    (["--action", "list", "--bogus"], "--bogus"),
])
def test_usage_errors(capsys, fake_session, argv, message):
    code, output = run(capsys, argv, fake_session)
    assert code == 1
    assert output["success"] is False
    assert message in output["error"]
    # 参数错误时不访问网盘
    assert fake_session.list_calls == []


# ==================== play ====================

def test_play(capsys, drive_tree):
    session = FakeSession(drive_tree, links={"pc_star": "https://cdn.example.com/star.mkv"})
    code, output = run(capsys, ["--action", "play", "--path", "/电影/科幻/星际穿越.mkv"], session)

    assert code == 0
    assert output == {
        "success": True,
        "url": "https://cdn.example.com/star.mkv",
        "user_agent": default_config.USER_AGENT,
        "dir_path": "/电影/科幻",
        "filename_no_ext": "星际穿越",
    }
    assert session.link_calls == [("pc_star", default_config.USER_AGENT)]


def test_play_custom_user_agent(capsys, drive_tree):
    session = FakeSession(drive_tree, links={"pc_readme": "https://cdn.example.com/readme.txt"})
    code, output = run(capsys, ["--action", "play", "--path", "/readme.txt", "--user-agent", "mpv/0.38"], session)

    assert code == 0
    assert output["user_agent"] == "mpv/0.38"
    assert output["dir_path"] == "/"
    assert session.link_calls == [("pc_readme", "mpv/0.38")]


@pytest.mark.parametrize("path", ["readme.txt", "/电影/"])
def test_play_invalid_path(capsys, fake_session, path):
    code, output = run(capsys, ["--action", "play", "--path", path], fake_session)
    assert code == 1
    assert "Invalid file path" in output["error"]


def test_play_missing_file(capsys, fake_session):
    code, output = run(capsys, ["--action", "play", "--path", "/电影/b.mkv"], fake_session)
    assert code == 1
    assert output["error"] == "File not found: b.mkv"


def test_play_link_failure(capsys, fake_session):
    code, output = run(capsys, ["--action", "play", "--path", "/电影/a.mkv"], fake_session)
    assert code == 1
    assert output["success"] is False


# ==================== get-streams ====================

def test_get_streams(capsys, drive_tree):
    session = FakeSession(
        drive_tree,
        links={"pc_star": "https://cdn.example.com/star.mkv"},
        pages={M3U8_URL: MASTER_PLAYLIST}
    )
    code, output = run(capsys, ["--action", "get-streams", "--path", "/电影/科幻/星际穿越.mkv"], session)

    assert code == 0
    assert [s["quality"] for s in output["streams"]] == ["Source", "1080p", "720p"]
    assert output["streams"][0] == {
        "quality": "Source", "url": "https://cdn.example.com/star.mkv", "is_m3u8": False
    }
    assert output["streams"][1]["is_m3u8"] is True
    assert output["dir_path"] == "/电影/科幻"
    assert output["filename_no_ext"] == "星际穿越"
    assert output["user_agent"] == default_config.USER_AGENT


def test_get_streams_none_found(capsys, fake_session):
    code, output = run(capsys, ["--action", "get-streams", "--path", "/电影/科幻/星际穿越.mkv"], fake_session)
    assert code == 1
    assert "No playable streams" in output["error"]


# ==================== 会话管理 ====================

def test_injected_session_is_not_closed(capsys, fake_session):
    run(capsys, ["--action", "list"], fake_session)
    assert fake_session.closed is False


def test_created_session_is_closed(capsys, monkeypatch, drive_tree):
    session = FakeSession(drive_tree)
    monkeypatch.setattr(cli, "create_session", lambda settings, cookie_file=None: session)

    code, _ = run(capsys, ["--action", "list", "--path", "/a"])
    assert code == 0
    assert session.closed is True


def test_session_init_failure(capsys, monkeypatch):
    def fail(settings, cookie_file=None):
        raise SessionInitError("Cookie file not found: /tmp/none")

    monkeypatch.setattr(cli, "create_session", fail)
    code, output = run(capsys, ["--action", "list", "--cookies", "/tmp/none"])
    assert code == 1
    assert output == {"success": False, "error": "Cookie file not found: /tmp/none"}


def test_unexpected_error(capsys, drive_tree):
    class BrokenSession(FakeSession):
        def list_children(self, *args, **kwargs):
            raise RuntimeError("boom")

    code, output = run(capsys, ["--action", "list"], BrokenSession(drive_tree))
    assert code == 1
    assert output["error"] == "Unexpected error: boom"


def test_missing_cookie_file(capsys, monkeypatch, tmp_path):
    code, output = run(capsys, ["--action", "list", "--cookies", str(tmp_path / "115")])
    assert code == 1
    assert "Cookie file not found" in output["error"]


def test_created_session_closed_when_action_fails(capsys, monkeypatch, drive_tree):
    session = FakeSession(drive_tree)
    monkeypatch.setattr(cli, "create_session", lambda settings, cookie_file=None: session)

    code, _ = run(capsys, ["--action", "list", "--path", "/nowhere"])
    assert code == 1
    assert session.closed is True


# ==================== 登录检查 ====================

@pytest.fixture
def cookie_file(tmp_path):
    path = tmp_path / "115"
    path.write_text("UID=1_A1_2; CID=abc; SEID=def\n", encoding="utf-8")
    return path


@pytest.fixture
def session_calls(monkeypatch):
    """记录真实 Session115 上的登录检查、列表和关闭调用"""
    calls = []

    def check_login(self):
        calls.append("check_login")

    def list_children(self, directory_id, **kwargs):
        calls.append("list_children")
        return [], 0

    real_close = Session115.close

    def close(self):
        calls.append("close")
        real_close(self)

    monkeypatch.setattr(Session115, "check_login", check_login)
    monkeypatch.setattr(Session115, "list_children", list_children)
    monkeypatch.setattr(Session115, "close", close)
    return calls


def test_login_checked_once_before_action(capsys, cookie_file, session_calls):
    code, output = run(capsys, ["--action", "list", "--cookies", str(cookie_file)])
    assert code == 0
    assert output == {"success": True, "items": []}
    assert session_calls == ["check_login", "list_children", "close"]


def test_login_check_failure(capsys, monkeypatch, cookie_file, session_calls):
    def expired(self):
        session_calls.append("check_login")
        raise SessionInitError("Login check failed: cookie has expired")

    monkeypatch.setattr(Session115, "check_login", expired)
    code, output = run(capsys, ["--action", "list", "--cookies", str(cookie_file)])

    assert code == 1
    assert output == {"success": False, "error": "Login check failed: cookie has expired"}
    # 登录失败时不执行任何操作，会话只关闭一次
    assert session_calls == ["check_login", "close"]


def test_login_check_disabled(capsys, monkeypatch, cookie_file, session_calls):
    monkeypatch.setenv("PAN115_CHECK_LOGIN", "false")
    monkeypatch.setenv("PAN115_COOKIE_FILE", str(cookie_file))

    code, _ = run(capsys, ["--action", "list"])
    assert code == 0
    assert session_calls == ["list_children", "close"]

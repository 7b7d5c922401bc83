#!/usr/bin/env python3
"""
115 网盘路径浏览命令行启动脚本

使用方法:
    python run_cli.py --action list                           # 列出根目录（按时间）
    python run_cli.py --action list --path /电影 --sort name  # 按名称列出
    python run_cli.py --action play --path /电影/xxx.mkv      # 获取原始播放链接
    python run_cli.py --action get-streams --path /电影/xxx.mkv  # 获取所有播放流

环境变量:
    PAN115_COOKIE_FILE: Cookie 文件 (默认: <脚本目录>/../data/115)
    PAN115_USER_AGENT: 下载链接绑定的 User-Agent
    PAN115_CONNECT_TIMEOUT: 连接超时（秒，默认: 10）
    PAN115_READ_TIMEOUT: 读取超时（秒，默认: 30）
    PAN115_LIST_LIMIT: 单个目录最多列出的条目数 (默认: 1000)
    PAN115_NATURAL_SORT: 按名称时使用自然排序 (默认: true)
    PAN115_CHECK_LOGIN: 执行前检查登录状态 (默认: true)
    LOG_LEVEL: 日志级别 (默认: WARNING)
"""
import sys
import os

# 添加项目根目录到 Python 路径
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from pan115.cli import main


if __name__ == '__main__':
    sys.exit(main())

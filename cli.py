# cli.py
"""
[V1.0] 命令行界面 (Interface) 层
"""
import argparse
import logging
import os
import sys
from datetime import date
from typing import List, Optional

from config import GlobalConfig
from context import RunContext
from errors import ConfigurationError, ExternalToolError
from orchestrator import MODES, ReportOrchestrator

logger = logging.getLogger(__name__)


def setup_parser() -> argparse.ArgumentParser:
    """
    (V1.0) 负责所有 argparse 的定义。
    """
    global_config = GlobalConfig()
    parser = argparse.ArgumentParser(
        description="Git 提交日报提取器",
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument(
        "-r",
        "--repo-path",
        type=str,
        required=True,
        help="Git 仓库的根目录或 .git 目录路径。",
    )
    parser.add_argument(
        "-m",
        "--mode",
        choices=MODES,
        default="direct",
        help="采集模式:\n"
        "'head': 读取 HEAD 指向的最新提交\n"
        "'history': 读取分支 reflog (logs/refs/heads/<branch>)\n"
        "'direct': 直接执行 git log 按日期与作者过滤\n"
        "(默认: direct)",
    )
    parser.add_argument(
        "-b",
        "--branch",
        type=str,
        default=global_config.DEFAULT_BRANCH,
        help=f"history 模式读取的分支 (默认: {global_config.DEFAULT_BRANCH})",
    )
    parser.add_argument(
        "-s",
        "--since",
        type=str,
        default=None,
        help="direct 模式的起始日期 yyyy/MM/dd (默认: 今天)",
    )
    parser.add_argument(
        "-a",
        "--author",
        type=str,
        default=global_config.DEFAULT_AUTHOR or None,
        help="direct 模式的作者过滤 (默认: .env 中的 GIT_REPORT_AUTHOR)",
    )
    parser.add_argument(
        "-f",
        "--format",
        dest="output_format",
        choices=["text", "md", "html"],
        default="text",
        help="日报输出格式 (默认: text)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="日报保存路径 (默认: 输出到终端)",
    )
    parser.add_argument(
        "--include-unmatched",
        action="store_true",
        help="在日报末尾列出不符合模板的提交",
    )
    return parser


def run_cli(argv: Optional[List[str]] = None):
    """
    (V1.0) 主入口点。
    """
    parser = setup_parser()
    args = parser.parse_args(argv)
    global_config = GlobalConfig()

    if args.mode == "direct" and not args.author:
        logger.error("❌ direct 模式需要 -a / --author (或在 .env 中设置 GIT_REPORT_AUTHOR)")
        sys.exit(1)

    since = args.since or date.today().strftime(global_config.LOG_SINCE_DATE_FORMAT)
    repo_path = os.path.abspath(args.repo_path)

    logger.info("=" * 50)
    logger.info("🚀 提交日报提取器启动...")
    logger.info(f"   [目标仓库]: {repo_path}")
    logger.info(f"   [采集模式]: {args.mode}")
    if args.mode == "direct":
        logger.info(f"   [起始日期]: {since}")
        logger.info(f"   [作者过滤]: {args.author}")
    elif args.mode == "history":
        logger.info(f"   [分支]: {args.branch}")
    logger.info("=" * 50)

    run_context = RunContext(
        repo_path=repo_path,
        mode=args.mode,
        branch=args.branch,
        since=since,
        author=args.author or "",
        output_format=args.output_format,
        output_path=args.output,
        include_unmatched=args.include_unmatched,
        global_config=global_config,
    )

    try:
        orchestrator = ReportOrchestrator(run_context)
        content = orchestrator.run()
    except ConfigurationError as e:
        logger.error(f"❌ 仓库配置无效: {e}")
        sys.exit(1)
    except ExternalToolError as e:
        logger.error(f"❌ git 执行失败: {e}")
        sys.exit(1)

    if not args.output and content:
        print(content)
    logger.info("✅ 运行完毕。")

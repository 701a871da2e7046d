# git_utils.py
import os
import subprocess
import logging
from datetime import date, datetime
from typing import List, Optional, Union

from config import GlobalConfig
from errors import ExternalToolError

logger = logging.getLogger(__name__)


def run_git_command(
    args: List[str],
    repo_path: str,
    context: str = "执行Git命令",
    global_config: Optional[GlobalConfig] = None,
) -> str:
    """
    (V1.0) 统一的Git命令执行函数
    - 在 repo_path 下执行，强制 UTF-8 读取标准输出
    - 失败时抛出 ExternalToolError
    """
    cfg = global_config or GlobalConfig()
    cmd = [cfg.GIT_EXECUTABLE] + list(args)
    try:
        logger.info(f"在 {repo_path} 中执行命令: {' '.join(cmd)}")
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=cfg.GIT_TIMEOUT,
            cwd=repo_path,
        )
    except subprocess.TimeoutExpired as e:
        logger.error(f"{context}超时")
        raise ExternalToolError(f"{context}超时") from e
    except OSError as e:
        logger.error(f"{context}出错: {e}")
        raise ExternalToolError(f"{context}出错: {e}") from e

    if result.returncode != 0:
        logger.error(f"{context}失败: {result.stderr}")
        raise ExternalToolError(
            f"{context}失败 (exit {result.returncode})",
            returncode=result.returncode,
            stderr=result.stderr,
        )
    logger.info(f"{context}成功，输出 {len(result.stdout.splitlines())} 行")
    return result.stdout


def is_git_installed(global_config: Optional[GlobalConfig] = None) -> bool:
    """
    (V1.0) 用系统的 where / which 查找 git，
    输出中包含可执行文件名即视为已安装。
    """
    cfg = global_config or GlobalConfig()
    executable = cfg.GIT_EXECUTABLE
    if os.name == "nt":
        locator = "where"
        expected = executable if executable.lower().endswith(".exe") else executable + ".exe"
    else:
        locator = "which"
        expected = executable
    try:
        result = subprocess.run(
            [locator, executable],
            capture_output=True,
            text=True,
            timeout=cfg.GIT_TIMEOUT,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.warning(f"⚠️ 无法执行 {locator}: {e}")
        return False
    return bool(result.stdout) and os.path.basename(expected) in result.stdout


def format_since(since: Union[str, date, datetime, None], global_config: Optional[GlobalConfig] = None) -> str:
    """date/datetime -> yyyy/MM/dd；字符串原样返回；None 为今天"""
    cfg = global_config or GlobalConfig()
    if since is None:
        since = date.today()
    if isinstance(since, (date, datetime)):
        return since.strftime(cfg.LOG_SINCE_DATE_FORMAT)
    return since


def build_cat_file_args(commit_hash: str) -> List[str]:
    return ["cat-file", "-p", commit_hash]


def build_filtered_log_args(
    since: str, author: str, global_config: Optional[GlobalConfig] = None
) -> List[str]:
    """
    git log --since=... --author=... --date=iso-local
        --pretty=format:%H★%an★%at★%B⛔
    """
    cfg = global_config or GlobalConfig()
    sep = cfg.LOG_FIELD_SEPARATOR
    pretty = f"%H{sep}%an{sep}%at{sep}%B{cfg.LOG_RECORD_SEPARATOR}"
    return [
        "log",
        f"--since={since}",
        f"--author={author}",
        "--date=iso-local",
        f"--pretty=format:{pretty}",
    ]

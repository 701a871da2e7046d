import logging
from datetime import date, datetime
from typing import Optional, Union

from .base import GitToolRunner
from config import GlobalConfig
from errors import ExternalToolError
import git_utils

logger = logging.getLogger(__name__)


class LocalGitRunner(GitToolRunner):
    """
    [V1.0] 本地 git 实现。
    通过调用 git 命令行工具读取本地仓库，失败时抛出 ExternalToolError。
    """

    def __init__(self, repo_path: str, global_config: Optional[GlobalConfig] = None):
        self.repo_path = repo_path
        self.global_config = global_config or GlobalConfig()

    def is_available(self) -> bool:
        # 每次调用都重新探测，不缓存结果
        available = git_utils.is_git_installed(self.global_config)
        if not available:
            logger.error(f"❌ 未找到 {self.global_config.GIT_EXECUTABLE}，请确认已安装并加入 PATH")
        return available

    def _ensure_available(self):
        if not self.is_available():
            raise ExternalToolError(f"未找到 {self.global_config.GIT_EXECUTABLE}")

    def cat_file(self, commit_hash: str) -> str:
        if not commit_hash:
            raise ValueError("commit_hash 不能为空")
        self._ensure_available()
        return git_utils.run_git_command(
            git_utils.build_cat_file_args(commit_hash),
            self.repo_path,
            f"解压 commit {commit_hash[:7]}",
            self.global_config,
        )

    def filtered_log(self, since: Union[str, date, datetime], author: str) -> str:
        if not author:
            raise ValueError("author 不能为空")
        self._ensure_available()
        since_arg = git_utils.format_since(since, self.global_config)
        return git_utils.run_git_command(
            git_utils.build_filtered_log_args(since_arg, author, self.global_config),
            self.repo_path,
            "获取Git提交历史",
            self.global_config,
        )

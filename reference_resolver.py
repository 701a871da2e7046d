# reference_resolver.py
"""
[V1.0] 直接读取 .git 目录内的文件
- HEAD -> 当前分支 ref 文件路径 -> 最新 commit hash
- logs/refs/heads/<branch> -> 该分支的 reflog 历史
"""
import logging
import os
import re
from typing import List, Optional

from config import GlobalConfig
from errors import ConfigurationError
from log_parser import parse_history_lines
from models import CommitRecord
from utils import find_token

logger = logging.getLogger(__name__)


class ReferenceResolver:
    """
    (V1.0) 解析仓库内部的 HEAD / ref / reflog 文件。
    找不到文件时返回 None 或空列表，不抛异常。
    """

    def __init__(self, repo_root: str, global_config: Optional[GlobalConfig] = None):
        if not repo_root:
            raise ConfigurationError("repo_root 不能为空")
        if not os.path.isdir(repo_root):
            raise ConfigurationError(f"仓库路径不存在: {repo_root}")

        self.global_config = global_config or GlobalConfig()

        # (V1.1) 同时接受工作区根目录与 .git 目录本身
        root = os.path.abspath(repo_root)
        dot_git = os.path.join(root, ".git")
        self.git_dir = dot_git if os.path.isdir(dot_git) else root

    def _read_text(self, path: str) -> Optional[str]:
        try:
            with open(path, "r", encoding="utf-8", errors="replace") as f:
                return f.read()
        except OSError as e:
            logger.error(f"❌ 读取 {path} 失败: {e}")
            return None

    def _join_ref(self, ref_text: str) -> str:
        # 源文本中 / 或 \ 均视为分隔符
        parts = [p for p in re.split(r"[\\/]+", ref_text) if p]
        return os.path.join(self.git_dir, *parts)

    def resolve_head_reference_path(self) -> Optional[str]:
        """读取 HEAD，返回当前分支 ref 文件的完整路径"""
        head_file = os.path.join(self.git_dir, self.global_config.HEAD_FILE_NAME)
        if not os.path.exists(head_file):
            logger.warning(f"⚠️ 未找到 HEAD 文件: {head_file}")
            return None

        head_text = self._read_text(head_file)
        if head_text is None:
            return None

        token = self.global_config.HEAD_REF_TOKEN
        index = find_token(head_text, token)
        if index < 0:
            logger.warning(f"⚠️ HEAD 中没有 '{token}' (可能处于分离头指针状态)")
            return None

        remainder = head_text[index + len(token) :]
        ref_text = remainder.split("\n", 1)[0].strip()
        if not ref_text:
            return None

        ref_path = self._join_ref(ref_text)
        if not os.path.exists(ref_path):
            logger.warning(f"⚠️ ref 文件不存在: {ref_path}")
            return None
        return ref_path

    def resolve_latest_hash(self, reference_path: str) -> Optional[str]:
        """读取 ref 文件内容 (去掉换行) 作为最新 commit hash，不校验格式"""
        if not reference_path or not os.path.exists(reference_path):
            return None
        text = self._read_text(reference_path)
        if text is None:
            return None
        return text.replace("\r", "").replace("\n", "")

    def resolve_head_hash(self) -> Optional[str]:
        ref_path = self.resolve_head_reference_path()
        if not ref_path:
            return None
        return self.resolve_latest_hash(ref_path)

    def branch_history_path(self, branch_name: str) -> str:
        return os.path.join(
            self.git_dir, self.global_config.BRANCH_HISTORY_DIR, *branch_name.split("/")
        )

    def list_branch_history(self, branch_name: Optional[str] = None) -> List[CommitRecord]:
        """
        读取 logs/refs/heads/<branch>，按文件顺序返回 CommitRecord。
        字段不足 5 个的行直接跳过。
        """
        branch_name = branch_name or self.global_config.DEFAULT_BRANCH
        history_file = self.branch_history_path(branch_name)
        records: List[CommitRecord] = []
        if not os.path.exists(history_file):
            logger.warning(f"⚠️ 未找到分支 '{branch_name}' 的 reflog: {history_file}")
            return records

        try:
            with open(history_file, "r", encoding="utf-8", errors="replace") as f:
                records = parse_history_lines(f)
        except OSError as e:
            logger.error(f"❌ 读取 reflog {history_file} 失败: {e}")

        logger.info(f"分支 '{branch_name}' 共读取 {len(records)} 条 reflog 记录")
        return records

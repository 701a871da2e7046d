# orchestrator.py
"""
[V1.0] 业务逻辑编排器
- 采集: head / history / direct 三种模式产出 CommitRecord
- 提取: ReportExtractor 逐条生成 CommitReport
- 输出: report_builder 渲染为 text / md / html
"""
import logging
from typing import List, Optional, Tuple

from context import RunContext
from data_sources.base import GitToolRunner
from data_sources.local_git import LocalGitRunner
from errors import ExternalToolError
from log_parser import parse_commit_object, parse_git_log
from models import CommitRecord, CommitReport
from reference_resolver import ReferenceResolver
from report_extractor import ReportExtractor
import report_builder

logger = logging.getLogger(__name__)

MODES = ("head", "history", "direct")


class ReportOrchestrator:
    """
    (V1.0) 负责执行日报生成的核心业务流程。
    runner 可以注入，测试时用固定文本代替真实的 git。
    """

    def __init__(self, context: RunContext, runner: Optional[GitToolRunner] = None):
        if context.mode not in MODES:
            raise ValueError(f"未知的采集模式: {context.mode}")
        self.context = context
        self.global_config = context.global_config

        # ConfigurationError 在这里直接向上抛出
        self.resolver = ReferenceResolver(context.repo_path, self.global_config)
        self.runner = runner or LocalGitRunner(context.repo_path, self.global_config)
        self.extractor = ReportExtractor(global_config=self.global_config)

    # --- 采集 ---

    def read_commit_message(self, commit_hash: str) -> Optional[CommitRecord]:
        """用 git cat-file 解压单个 commit，失败返回 None"""
        if not commit_hash:
            return None
        try:
            text = self.runner.cat_file(commit_hash)
        except ExternalToolError as e:
            logger.error(f"❌ 读取 commit {commit_hash[:7]} 失败: {e}")
            return None
        return parse_commit_object(commit_hash, text)

    def collect_head(self) -> List[CommitRecord]:
        head_hash = self.resolver.resolve_head_hash()
        if not head_hash:
            logger.error("❌ 无法从 HEAD 解析最新 commit")
            return []
        logger.info(f"HEAD 指向 {head_hash}")
        record = self.read_commit_message(head_hash)
        return [record] if record else []

    def collect_history(self) -> List[CommitRecord]:
        records = self.resolver.list_branch_history(self.context.branch)
        if not records or not self.runner.is_available():
            return records
        # reflog 行不含提交信息，逐条补齐
        for record in records:
            full = self.read_commit_message(record.commit_hash)
            if full:
                record.message = full.message
        return records

    def collect_direct(self) -> List[CommitRecord]:
        output = self.runner.filtered_log(self.context.since, self.context.author)
        return parse_git_log(
            output,
            record_separator=self.global_config.LOG_RECORD_SEPARATOR,
            field_separator=self.global_config.LOG_FIELD_SEPARATOR,
        )

    def collect_records(self) -> List[CommitRecord]:
        logger.info(f"📥 采集模式: {self.context.mode}")
        if self.context.mode == "head":
            return self.collect_head()
        if self.context.mode == "history":
            return self.collect_history()
        return self.collect_direct()

    # --- 提取 ---

    def build_reports(
        self, records: List[CommitRecord]
    ) -> Tuple[List[Tuple[CommitRecord, CommitReport]], List[CommitRecord]]:
        matched = []
        unmatched = []
        for record in records:
            report = self.extractor.extract(record)
            if report is None:
                unmatched.append(record)
            else:
                matched.append((record, report))
        logger.info(f"✅ {len(matched)} 个提交符合日报模板，{len(unmatched)} 个未匹配")
        return matched, unmatched

    # --- 输出 ---

    def render(self, matched, unmatched) -> str:
        extra = unmatched if self.context.include_unmatched else None
        fmt = self.context.output_format
        if fmt == "html":
            return report_builder.generate_html_report(matched, self.global_config, extra)
        if fmt == "md":
            return report_builder.generate_markdown_report(matched, extra)
        return report_builder.generate_text_report(matched, extra)

    def run(self) -> Optional[str]:
        """
        (V1.0) 执行完整流程，返回渲染后的日报文本。
        filtered_log 失败时 ExternalToolError 向上抛出，由 CLI 处理。
        """
        records = self.collect_records()
        if not records:
            logger.warning("⚠️ 未获取到提交记录")

        matched, unmatched = self.build_reports(records)
        content = self.render(matched, unmatched)

        if self.context.output_path:
            report_builder.save_report(content, self.context.output_path)
        return content


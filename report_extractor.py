# report_extractor.py
"""
[V1.0] 将提交信息切分为日报格式 (版本 / 标题 / 处理要项)
[V1.2] 锚点改为可配置的有序表，默认值来自 GlobalConfig.REPORT_ANCHORS
"""
import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from config import GlobalConfig
from models import CommitRecord, CommitReport
from utils import find_token

logger = logging.getLogger(__name__)


class ReportExtractor:
    """
    按固定顺序查找四个锚点:

        <version> ... <header> ... <items> ... <developer>

    四个锚点必须严格递增出现，否则返回 None (这是正常结果，不是错误)。
    注意 header 锚点默认是单个 "-"，如果版本号里带连字符 (如 1.0.0-rc1)，
    会在版本号内部先匹配到。
    """

    def __init__(
        self,
        anchors: Optional[Dict[str, str]] = None,
        header_prefixes: Optional[Sequence[str]] = None,
        placeholder: Optional[str] = None,
        width_insensitive: Optional[Sequence[str]] = None,
        global_config: Optional[GlobalConfig] = None,
    ):
        cfg = global_config or GlobalConfig()
        anchors = dict(anchors if anchors is not None else cfg.REPORT_ANCHORS)
        if len(anchors) != 4 or not all(anchors.values()):
            raise ValueError(f"日报模板需要 4 个非空锚点，实际为: {anchors}")
        self.anchors: Tuple[str, ...] = tuple(anchors.values())
        # 只有列出的角色忽略全/半角差异，其余锚点仅忽略大小写
        roles = set(
            width_insensitive
            if width_insensitive is not None
            else cfg.REPORT_WIDTH_INSENSITIVE_ANCHORS
        )
        self.ignore_width: Tuple[bool, ...] = tuple(role in roles for role in anchors)
        self.header_prefixes: Tuple[str, ...] = tuple(
            header_prefixes if header_prefixes is not None else cfg.HEADER_PREFIXES
        )
        self.placeholder: str = (
            placeholder if placeholder is not None else cfg.BODY_PLACEHOLDER
        )

    def _locate(self, message: str) -> Optional[List[int]]:
        positions = [
            find_token(message, anchor, ignore_width=ignore_width)
            for anchor, ignore_width in zip(self.anchors, self.ignore_width)
        ]
        if positions[0] < 0:
            return None
        for previous, current in zip(positions, positions[1:]):
            if current <= previous:
                return None
        return positions

    def _section(self, message: str, positions: List[int], index: int) -> str:
        start = positions[index] + len(self.anchors[index])
        return message[start : positions[index + 1]]

    def _clean_version(self, text: str) -> str:
        return text.replace("\r", "").replace("\n", "").replace(" ", "")

    def _clean_header(self, text: str) -> str:
        for prefix in self.header_prefixes:
            text = text.replace(prefix, "")
        return text.replace("\r", "").replace("\n", "").strip()

    def _clean_body(self, text: str) -> Tuple[str, ...]:
        lines = [line.replace("\r", "") for line in text.split("\n")]
        return tuple(
            line
            for line in lines
            if line.strip() and not (self.placeholder and self.placeholder in line)
        )

    def extract_message(self, message: Optional[str], timestamp: int = 0) -> Optional[CommitReport]:
        if not message:
            return None
        positions = self._locate(message)
        if positions is None:
            return None
        return CommitReport(
            version=self._clean_version(self._section(message, positions, 0)),
            header=self._clean_header(self._section(message, positions, 1)),
            body=self._clean_body(self._section(message, positions, 2)),
            timestamp=timestamp,
        )

    def extract(self, record: CommitRecord) -> Optional[CommitReport]:
        report = self.extract_message(record.message, record.timestamp)
        if report is None:
            logger.debug(f"提交 {record.short_hash} 不符合日报模板，已跳过")
        return report

    def extract_all(
        self, records: Iterable[CommitRecord]
    ) -> List[Tuple[CommitRecord, CommitReport]]:
        """(V1.1) 批量提取，只保留匹配模板的提交"""
        results = []
        for record in records:
            report = self.extract(record)
            if report is not None:
                results.append((record, report))
        return results

# models.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple


@dataclass
class CommitRecord:
    """Git 提交记录数据模型 (reflog / git log / cat-file 三种来源共用)"""

    commit_hash: str
    parent_hash: str = ""
    author: str = ""
    author_email: str = ""
    message: str = ""
    timestamp: int = 0

    @property
    def short_hash(self) -> str:
        return self.commit_hash[:7]

    @property
    def has_message(self) -> bool:
        return bool(self.message.strip())

    @property
    def date(self) -> Optional[datetime]:
        if not self.timestamp:
            return None
        return datetime.fromtimestamp(self.timestamp)


@dataclass(frozen=True)
class CommitReport:
    """日报格式的提交摘要 (只能由 ReportExtractor 构造)"""

    version: str
    header: str
    body: Tuple[str, ...] = field(default_factory=tuple)
    timestamp: int = 0

    @property
    def date(self) -> Optional[datetime]:
        if not self.timestamp:
            return None
        return datetime.fromtimestamp(self.timestamp)

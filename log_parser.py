# log_parser.py
"""
[V1.0] 提交文本解析器
- parse_git_log: 解析 git log 自定义分隔符输出 (%H★%an★%at★%B⛔)
- parse_history_line(s): 解析 .git/logs/refs/heads/<branch> 的 reflog 行
- [V1.1] parse_commit_object: 解析 git cat-file -p 输出的原始 commit 对象
"""
import logging
import re
from typing import Iterable, List, Optional

from models import CommitRecord

logger = logging.getLogger(__name__)

RECORD_SEPARATOR = "⛔"
FIELD_SEPARATOR = "★"

# git log 的四个字段: hash, author, timestamp, message
LOG_FIELD_COUNT = 4
# reflog 行至少需要: parent, hash, author, email, timestamp
HISTORY_FIELD_COUNT = 5

_AUTHOR_LINE = re.compile(r"^(?P<name>.*?)\s*<(?P<email>[^>]*)>\s*(?P<ts>\S+)?")


def _parse_timestamp(value: str) -> int:
    """时间戳解析失败时返回 0"""
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def parse_git_log(
    log_output: Optional[str],
    record_separator: str = RECORD_SEPARATOR,
    field_separator: str = FIELD_SEPARATOR,
) -> List[CommitRecord]:
    """
    将 git log 纯文本输出解析为 CommitRecord 列表。
    字段数不足 4 的记录直接丢弃；第 4 个字段之后的内容忽略。
    """
    records: List[CommitRecord] = []
    if not log_output:
        return records

    for chunk in log_output.split(record_separator):
        if not chunk:
            continue
        fields = chunk.split(field_separator)
        if len(fields) < LOG_FIELD_COUNT:
            logger.debug(f"跳过字段不足的记录: {chunk!r}")
            continue
        # --pretty=format: 会在两条记录之间插入换行
        commit_hash = fields[0].lstrip("\r\n")
        if not commit_hash:
            logger.debug(f"跳过缺少 hash 的记录: {chunk!r}")
            continue
        records.append(
            CommitRecord(
                commit_hash=commit_hash,
                author=fields[1],
                timestamp=_parse_timestamp(fields[2]),
                message=fields[3],
            )
        )

    logger.info(f"成功解析 {len(records)} 个提交")
    return records


def parse_history_line(line: str) -> Optional[CommitRecord]:
    """解析单行 reflog 记录 (以单个空格分隔)"""
    parts = line.rstrip("\r\n").split(" ")
    if len(parts) < HISTORY_FIELD_COUNT or not parts[1]:
        logger.debug(f"reflog 格式异常，已跳过: {line!r}")
        return None
    return CommitRecord(
        parent_hash=parts[0],
        commit_hash=parts[1],
        author=parts[2],
        author_email=parts[3],
        timestamp=_parse_timestamp(parts[4]),
    )


def parse_history_lines(lines: Iterable[str]) -> List[CommitRecord]:
    records = []
    for line in lines:
        record = parse_history_line(line)
        if record:
            records.append(record)
    return records


def parse_commit_object(commit_hash: str, text: Optional[str]) -> Optional[CommitRecord]:
    """
    (V1.1) 解析 git cat-file -p <hash> 的输出。

    头部以第一个空行结束，之后全部是提交信息：
        tree <sha>
        parent <sha>
        author Name <email> 1600000000 +0800
        committer ...

        <message>
    """
    if not commit_hash or not text:
        return None

    headers, _, message = text.partition("\n\n")
    record = CommitRecord(commit_hash=commit_hash, message=message)

    for header_line in headers.split("\n"):
        key, _, value = header_line.partition(" ")
        if key == "parent" and not record.parent_hash:
            record.parent_hash = value.strip()
        elif key == "author":
            match = _AUTHOR_LINE.match(value)
            if match:
                record.author = match.group("name")
                record.author_email = match.group("email")
                record.timestamp = _parse_timestamp(match.group("ts"))
    return record

# report_builder.py
"""
[V1.0] 日报生成器
- 纯文本 / Markdown 直接拼接
- HTML: Markdown 转换后交给 Jinja2 模板渲染
"""
import logging
import os
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple

import markdown
from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import escape

from config import GlobalConfig
from models import CommitRecord, CommitReport

logger = logging.getLogger(__name__)

ReportItem = Tuple[CommitRecord, CommitReport]


def _format_time(timestamp: int) -> str:
    if not timestamp:
        return "未知时间"
    return datetime.fromtimestamp(timestamp).strftime("%Y-%m-%d %H:%M")


def _group_by_version(items: Sequence[ReportItem]) -> Dict[str, List[ReportItem]]:
    groups: Dict[str, List[ReportItem]] = {}
    for record, report in items:
        groups.setdefault(report.version or "未标注版本", []).append((record, report))
    return groups


def generate_text_report(
    items: Sequence[ReportItem],
    unmatched: Optional[Sequence[CommitRecord]] = None,
    title: str = "工作日报",
) -> str:
    """生成纯文本格式的日报 (用于终端输出)"""
    lines = [
        "=" * 80,
        f"{title:^76}",
        "=" * 80,
        f"生成时间: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
        f"日报条目: {len(items)}",
        "",
    ]
    if not items:
        lines.append("⚠️  没有符合日报模板的提交")
    for version, version_items in _group_by_version(items).items():
        lines.append(f"版本: {version}")
        lines.append("-" * 40)
        for record, report in version_items:
            lines.append(
                f"* {report.header} ({record.short_hash}, {_format_time(report.timestamp)})"
            )
            for body_line in report.body:
                lines.append(f"    {body_line}")
        lines.append("")
    if unmatched:
        lines.append("-" * 80)
        lines.append(f"未匹配模板的提交 ({len(unmatched)}):")
        for record in unmatched:
            first_line = record.message.strip().split("\n", 1)[0] if record.message else ""
            lines.append(f"  {record.short_hash} {record.author} {first_line}")
    lines.append("=" * 80)
    return "\n".join(lines)


def generate_markdown_report(
    items: Sequence[ReportItem],
    unmatched: Optional[Sequence[CommitRecord]] = None,
    title: str = "工作日报",
    escape_html: bool = False,
) -> str:
    """
    生成 Markdown 格式的日报。
    escape_html=True 时转义提交信息中的 HTML (用于 HTML 输出)。
    """

    def text(value: str) -> str:
        return str(escape(value)) if escape_html else value

    lines = [f"# {title}", "", f"> 生成时间: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}", ""]
    if not items:
        lines.append("_没有符合日报模板的提交_")
        lines.append("")
    for version, version_items in _group_by_version(items).items():
        lines.append(f"## Version {text(version)}")
        lines.append("")
        for record, report in version_items:
            lines.append(f"### {text(report.header)}")
            lines.append("")
            lines.append(f"`{record.short_hash}` · {_format_time(report.timestamp)}")
            lines.append("")
            for body_line in report.body:
                lines.append(f"- {text(body_line.strip())}")
            lines.append("")
    if unmatched:
        lines.append("## 未匹配模板的提交")
        lines.append("")
        for record in unmatched:
            first_line = record.message.strip().split("\n", 1)[0] if record.message else ""
            lines.append(
                f"- `{record.short_hash}` {text(record.author)} {text(first_line)}".rstrip()
            )
        lines.append("")
    return "\n".join(lines)


def _get_css_styles(global_config: GlobalConfig) -> str:
    """读取 CSS 文件内容"""
    css_path = os.path.join(global_config.TEMPLATES_PATH, "styles.css")
    try:
        with open(css_path, "r", encoding="utf-8") as f:
            return f.read()
    except FileNotFoundError:
        logger.error(f"❌ CSS 模板文件未找到: {css_path}")
        return "/* CSS 模板文件未找到 */"
    except OSError as e:
        logger.error(f"❌ 加载 CSS 模板失败: {e}")
        return f"/* 加载 CSS 模板失败: {e} */"


def generate_html_report(
    items: Sequence[ReportItem],
    global_config: GlobalConfig,
    unmatched: Optional[Sequence[CommitRecord]] = None,
    title: str = "工作日报",
) -> str:
    """
    (V1.0) 先生成 Markdown，再用 Jinja2 模板包装成 HTML。
    """
    env = Environment(
        loader=FileSystemLoader(global_config.TEMPLATES_PATH),
        autoescape=select_autoescape(["html", "xml"]),
    )

    body_html = markdown.markdown(
        generate_markdown_report(items, unmatched, title, escape_html=True),
        extensions=["sane_lists", "nl2br"],
    )

    template_context = {
        "title": f"{title} - {datetime.now().strftime('%Y-%m-%d')}",
        "css_content": _get_css_styles(global_config),
        "report_html": body_html,
        "total_reports": len(items),
        "total_unmatched": len(unmatched or []),
    }

    template_name = "report.html.j2"
    template = env.get_template(template_name)
    logger.info(f"🎨 正在渲染 Jinja2 模板: {template_name}")
    return template.render(**template_context)


def save_report(content: str, output_path: str) -> Optional[str]:
    """保存日报到文件"""
    try:
        directory = os.path.dirname(os.path.abspath(output_path))
        os.makedirs(directory, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(content)
        logger.info(f"✅ 日报已保存: {output_path}")
        return output_path
    except OSError as e:
        logger.error(f"❌ 保存日报失败 ({output_path}): {e}")
        return None

import logging
import sys


def setup_logging(level: str = "INFO"):
    """配置全局日志"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def _fold_char(ch: str, ignore_width: bool) -> str:
    """单字符折叠：(可选) 全角 -> 半角，再转小写。结果长度始终为 1。"""
    if ignore_width:
        code = ord(ch)
        if 0xFF01 <= code <= 0xFF5E:
            ch = chr(code - 0xFEE0)
        elif code == 0x3000:
            ch = " "
    lowered = ch.lower()
    return lowered if len(lowered) == 1 else ch


def fold_text(text: str, ignore_width: bool = False) -> str:
    return "".join(_fold_char(ch, ignore_width) for ch in text)


def find_token(text: str, token: str, start: int = 0, ignore_width: bool = False) -> int:
    """
    (V1.2) 忽略大小写的子串查找，ignore_width=True 时同时忽略全/半角差异。
    返回首次出现的位置 (基于原文下标)，找不到返回 -1。
    """
    if not text or not token:
        return -1
    return fold_text(text, ignore_width).find(fold_text(token, ignore_width), start)

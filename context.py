"""
[V1.0] 运行时配置的数据模型
"""
from dataclasses import dataclass
from typing import Optional
from config import GlobalConfig


@dataclass
class RunContext:
    """
    (V1.0) 封装一次运行所需的所有配置。
    这是从 CLI 传递到 Orchestrator 的唯一对象。
    """

    # --- 核心路径 ---
    repo_path: str

    # --- 采集参数 ---
    mode: str  # head | history | direct
    branch: str
    since: str
    author: str

    # --- 输出参数 ---
    output_format: str  # text | md | html
    output_path: Optional[str]
    include_unmatched: bool

    # --- 全局配置 ---
    global_config: GlobalConfig

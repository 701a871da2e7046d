"""
[V1.0] 全局配置
[V1.2] 更新：日报模板锚点改为可配置的有序表 (REPORT_ANCHORS)，支持 .env 覆盖。
"""
import os
from dotenv import load_dotenv

import report_templates


# --- 脚本基础路径 ---
SCRIPT_BASE_PATH = os.path.abspath(os.path.dirname(__file__))
env_path = os.path.join(SCRIPT_BASE_PATH, ".env")
if os.path.exists(env_path):
    load_dotenv(env_path)
else:
    load_dotenv()


class GlobalConfig:
    """
    (V1.0) 提交日报提取器的全局应用配置。
    """

    # --- 路径配置 ---
    SCRIPT_BASE_PATH: str = SCRIPT_BASE_PATH
    # 模板随 report_templates 包一起安装，按包所在位置定位
    TEMPLATES_PATH: str = os.path.dirname(os.path.abspath(report_templates.__file__))
    OUTPUT_FILENAME_PREFIX: str = "CommitReport"

    # --- 日志 ---
    LOG_LEVEL: str = os.getenv("GIT_REPORT_LOG_LEVEL", "INFO").upper()

    # --- Git 可执行文件 ---
    GIT_EXECUTABLE: str = os.getenv("GIT_EXECUTABLE", "git")
    GIT_TIMEOUT: int = int(os.getenv("GIT_TIMEOUT", "30"))

    # --- 仓库内部文件 ---
    HEAD_FILE_NAME: str = "HEAD"
    HEAD_REF_TOKEN: str = "ref:"
    BRANCH_HISTORY_DIR: str = os.path.join("logs", "refs", "heads")
    DEFAULT_BRANCH: str = os.getenv("GIT_REPORT_BRANCH", "develop")
    DEFAULT_AUTHOR: str = os.getenv("GIT_REPORT_AUTHOR", "")

    # --- git log 自定义分隔符 ---
    # 选自常用文字范围之外，避免与提交信息冲突
    LOG_FIELD_SEPARATOR: str = "★"
    LOG_RECORD_SEPARATOR: str = "⛔"
    LOG_SINCE_DATE_FORMAT: str = "%Y/%m/%d"

    # =================================================================
    # --- (V1.2) 日报模板 ---
    # =================================================================
    # Version 1.0.0.0
    # - ADD：增加設定檔
    # 處理要項：
    # 1.新增 Common 資料夾，將 json &filter 檔案加入索引。
    # 開發者：Tenny
    # PM：
    # 模組：scanner manager v1.0.0.0
    # 狀態：進行中

    # 顺序即匹配顺序: 版本 -> 标题 -> 处理要项 -> 开发者
    REPORT_ANCHORS: dict[str, str] = {
        "version": os.getenv("REPORT_ANCHOR_VERSION", "Version"),
        "header": os.getenv("REPORT_ANCHOR_HEADER", "-"),
        "items": os.getenv("REPORT_ANCHOR_ITEMS", "處理要項:"),
        "developer": os.getenv("REPORT_ANCHOR_DEVELOPER", "開發者"),
    }

    # 忽略全/半角差异的锚点角色 (处理要项常写成全角冒号)
    REPORT_WIDTH_INSENSITIVE_ANCHORS: tuple[str, ...] = ("items",)

    # 标题行中需要去掉的 新增/修改/删除 标记
    HEADER_PREFIXES: list[str] = ["ADD：", "CHG：", "DEL："]

    # "如题，无其他内容" 的占位行
    BODY_PLACEHOLDER: str = os.getenv("REPORT_BODY_PLACEHOLDER", "如題。")

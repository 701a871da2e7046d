"""
[V1.1] 异常定义
- 找不到文件 / 锚点属于正常结果，用 None 或空列表表示，不在此定义。
"""
from typing import Optional


class ConfigurationError(ValueError):
    """仓库路径无效 (构造时立即抛出)"""

    pass


class ExternalToolError(RuntimeError):
    """git 可执行文件缺失、超时或异常退出"""

    def __init__(self, message: str, returncode: Optional[int] = None, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr

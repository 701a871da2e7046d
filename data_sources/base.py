from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Union


class GitToolRunner(ABC):
    """
    [V1.0] 外部 git 工具的抽象接口
    解析逻辑只依赖这三个方法，测试时可以用固定文本替换真实的 git。
    """

    @abstractmethod
    def is_available(self) -> bool:
        """
        检查 git 可执行文件是否可用。
        """
        pass

    @abstractmethod
    def cat_file(self, commit_hash: str) -> str:
        """
        返回 git cat-file -p <hash> 输出的原始 commit 对象文本。
        """
        pass

    @abstractmethod
    def filtered_log(self, since: Union[str, date, datetime], author: str) -> str:
        """
        返回 git log 按日期与作者过滤后的输出，
        使用 ★ 分隔字段、⛔ 分隔记录。
        """
        pass

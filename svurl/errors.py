"""svurl 的异常类型。

所有异常都继承自 `SvURLError`，CLI 在命令入口统一捕获。
保存过程中的 `OSError` 不在此列，会直接向上抛出。
"""
from typing import Optional


class SvURLError(Exception):
    pass


class ConfigError(SvURLError):
    pass


class FileAccessError(SvURLError):
    """集合文件存在但无法读取（启动阶段的致命错误）。"""

    def __init__(self, path: str, reason: str):
        super().__init__(f"cannot read {path}: {reason}")
        self.path = path
        self.reason = reason


class UnknownSetError(SvURLError):
    def __init__(self, name: str):
        super().__init__(f"unknown set '{name}'")
        self.name = name


class InvalidModeError(SvURLError):
    def __init__(self, mode):
        super().__init__(f"incorrect mode: {mode!r}; should be 'full' or 'origin'")
        self.mode = mode


class InvalidURLError(SvURLError):
    def __init__(self, text: str, reason: Optional[str] = None):
        msg = f"invalid URL: {text!r}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)
        self.text = text


class IndexOutOfRangeError(SvURLError):
    """索引超出当前集合范围；可恢复，不修改任何状态。"""

    def __init__(self, index: int, maximum: int, name: str = "", floor: int = 0):
        if maximum < floor:
            msg = f"index {index} out of range: set '{name}' has nothing to select"
        else:
            msg = f"index {index} out of range: valid range is {floor}..{maximum}"
        super().__init__(msg)
        self.index = index
        self.maximum = maximum
        self.name = name
        self.floor = floor

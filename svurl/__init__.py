"""svurl：用命名的文件集合保存、去重并取回 URL。"""
from svurl.errors import (
    ConfigError,
    FileAccessError,
    IndexOutOfRangeError,
    InvalidModeError,
    InvalidURLError,
    SvURLError,
    UnknownSetError,
)
from svurl.merge import merge
from svurl.store import DEFAULT_SETS, InsertResult, Store, UndoResult
from svurl.transfer import SelectResult, pop_last, select_by_index, select_random

__version__ = "0.1.0"

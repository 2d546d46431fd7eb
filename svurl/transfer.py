"""按位置或随机选取集合元素，并可把它从源集合转移到目标集合。

转移成功后会保存全部集合，然后调用外部打开器。打开失败不会回滚已提交的修改，
只记录在返回结果中。
"""
import logging
import random
from dataclasses import dataclass
from typing import Optional

from svurl.errors import IndexOutOfRangeError
from svurl.store import Store

logger = logging.getLogger("svurl.transfer")


@dataclass
class SelectResult:
    value: str
    source: str
    dest: str
    index: int
    removed: bool
    opened: bool = False
    open_error: Optional[str] = None

    @property
    def message(self) -> str:
        if self.removed:
            msg = f"moved {self.value} from '{self.source}' to '{self.dest}'"
        else:
            msg = f"{self.source}[{self.index}] = {self.value}"
        if self.open_error:
            msg += f" (open failed: {self.open_error})"
        return msg


def select_by_index(store: Store, source: str, dest: str, index: int, remove: bool = True) -> SelectResult:
    """按插入顺序的 0 起始位置选取元素。

    合法范围是 `[store.index_floor, size - 1]`，按调用时的集合大小校验；
    越界抛出 `IndexOutOfRangeError` 且不修改任何状态。
    """
    src_rec = store.find(source)
    dst_rec = store.find(dest)
    members = src_rec.members
    dst_members = dst_rec.members

    maximum = len(members) - 1
    if index < store.index_floor or index > maximum:
        raise IndexOutOfRangeError(index, maximum, source, store.index_floor)

    value = list(members)[index]
    result = SelectResult(value, source, dest, index, remove)
    if not remove:
        return result

    del members[value]
    dst_members.setdefault(value, None)
    logger.info(f"已转移 {value}: '{source}' -> '{dest}'")
    store.save_all()

    try:
        store.opener(value)
        result.opened = True
    except Exception as e:
        # 打开失败只上报，集合修改已经落盘
        logger.warning(f"打开 {value} 失败: {e}")
        result.open_error = str(e)
    return result


def select_random(store: Store, source: str, dest: str, remove: bool = True, rng=None) -> SelectResult:
    """在 `[store.index_floor, size - 1]` 中均匀随机选取一个位置后按位置选取。"""
    size = store.size(source)
    rng = rng or random
    if size - 1 < store.index_floor:
        raise IndexOutOfRangeError(store.index_floor, size - 1, source, store.index_floor)
    index = rng.randint(store.index_floor, size - 1)
    return select_by_index(store, source, dest, index, remove)


def pop_last(store: Store, source: str, dest: str) -> SelectResult:
    """取出最后加入的元素并转移到 `dest`。"""
    return select_by_index(store, source, dest, store.size(source) - 1, remove=True)

"""多集合去重存储。

`Store` 按名字持有所有集合（名字 -> 路径 + 内存中的有序去重集合）。
构造时为每个集合并发提交加载任务，任何读写集合的操作都会先等待
该集合加载完成，因此不会观察到加载了一半的集合。
"""
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional

from svurl.errors import InvalidModeError, UnknownSetError
from svurl.loader import Members, load_members
from svurl.opener import open_externally
from svurl.storage import append_line, has_backup, restore_backup, save_members
from svurl.urls import parse_url

DEFAULT_SETS = {"saved": "./.saved", "origins": "./.origins", "used": "./.used"}

MODE_FULL = "full"
MODE_ORIGIN = "origin"

logger = logging.getLogger("svurl.store")


@dataclass
class SetRecord:
    name: str
    path: Path
    future: "Future[Members]" = field(repr=False)

    @property
    def members(self) -> Members:
        return self.future.result()


@dataclass
class InsertResult:
    value: str
    added: bool
    duplicate_in: Optional[str] = None
    position: Optional[int] = None

    @property
    def message(self) -> str:
        if self.added:
            return f"added {self.value}"
        return f"{self.value} already in '{self.duplicate_in}' at position {self.position}"


@dataclass
class UndoResult:
    restored: List[str]
    missing: List[str]

    @property
    def ok(self) -> bool:
        return not self.missing

    @property
    def message(self) -> str:
        if self.ok:
            return "restored " + ", ".join(self.restored)
        return "cannot undo: no backup for " + ", ".join(self.missing)


class Store:
    def __init__(
        self,
        sets: Optional[Dict[str, str]] = None,
        opener: Optional[Callable[[str], object]] = None,
        index_floor: int = 1,
    ):
        self.paths: Dict[str, str] = {**DEFAULT_SETS, **(sets or {})}
        self.opener = opener or open_externally
        self.index_floor = index_floor
        self._executor = ThreadPoolExecutor(max_workers=max(len(self.paths), 1), thread_name_prefix="svurl")
        self._sets: Dict[str, SetRecord] = {}
        for name, path in self.paths.items():
            p = Path(path)
            self._sets[name] = SetRecord(name, p, self._executor.submit(load_members, p))

    def __enter__(self) -> "Store":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        self._executor.shutdown(wait=True)

    # === 查找与等待 ===

    def names(self) -> List[str]:
        return list(self._sets)

    def find(self, name: str) -> SetRecord:
        try:
            return self._sets[name]
        except KeyError:
            raise UnknownSetError(name) from None

    def ready(self, name: str) -> Members:
        """阻塞直到集合加载完成，返回其内存集合。加载失败的异常在此抛出。"""
        return self.find(name).members

    def wait_all(self) -> None:
        for name in self._sets:
            self.ready(name)

    def members(self, name: str) -> List[str]:
        return list(self.ready(name))

    def size(self, name: str) -> int:
        return len(self.ready(name))

    def replace_members(self, name: str, values) -> None:
        members = self.ready(name)
        members.clear()
        for v in values:
            members.setdefault(v, None)

    def show(self, name: str) -> str:
        rec = self.find(name)
        lines = [f"{rec.name} ({rec.path}): {len(rec.members)}"]
        lines.extend(f"  {i}. {url}" for i, url in enumerate(rec.members, 1))
        return "\n".join(lines)

    def summary(self) -> Dict[str, dict]:
        self.wait_all()
        return {name: {"path": str(rec.path), "size": len(rec.members)} for name, rec in self._sets.items()}

    # === 去重插入 ===

    def insert_deduped(self, target: str, url: str, mode: str = MODE_FULL, check: Optional[str] = None) -> InsertResult:
        """去重插入一个 URL。

        - `mode="full"`：保存 origin + path，同时在 `check` 集合（如给出）和目标集合中查重。
        - `mode="origin"`：只保存 origin，只在目标集合中查重。

        重复时不修改任何状态，返回的结果中带有所在集合和从 1 开始的位置。
        新值先加入内存集合，再立即追加到目标文件末尾。
        """
        if mode not in (MODE_FULL, MODE_ORIGIN):
            raise InvalidModeError(mode)
        parsed = parse_url(url)

        target_rec = self.find(target)
        if mode == MODE_FULL:
            value = parsed.full_path
            lookup = [target_rec]
            if check is not None:
                check_rec = self.find(check)
                if check_rec is not target_rec:
                    lookup.append(check_rec)
        else:
            value = parsed.origin
            lookup = [target_rec]

        for rec in lookup:
            members = rec.members
            if value in members:
                position = list(members).index(value) + 1
                logger.info(f"重复: {value} 已在 '{rec.name}' 第 {position} 位")
                return InsertResult(value, False, rec.name, position)

        target_rec.members.setdefault(value, None)
        append_line(target_rec.path, value)
        logger.info(f"已添加 {value} -> '{target}'")
        return InsertResult(value, True)

    # === 持久化 ===

    def save(self, name: str) -> None:
        rec = self.find(name)
        save_members(rec.path, list(rec.members))

    def save_all(self) -> None:
        """保存所有集合。每个集合独立保存，全部尝试完后再抛出第一个失败。"""
        self.wait_all()
        futures = {name: self._executor.submit(self.save, name) for name in self._sets}
        first_error = None
        for name, fut in futures.items():
            exc = fut.exception()
            if exc is not None:
                logger.error(f"保存 '{name}' 失败: {exc}")
                if first_error is None:
                    first_error = exc
        if first_error is not None:
            raise first_error

    def undo(self, source: str, dest: str) -> UndoResult:
        """用 `.bak` 恢复两个集合的文件，撤销最近一次保存。只支持一代撤销。"""
        records = [self.find(source)]
        if dest != source:
            records.append(self.find(dest))
        self.wait_all()

        missing = [rec.name for rec in records if not has_backup(rec.path)]
        if missing:
            result = UndoResult([], missing)
            logger.warning(result.message)
            return result

        for rec in records:
            restore_backup(rec.path)
            self.replace_members(rec.name, load_members(rec.path))
        result = UndoResult([rec.name for rec in records], [])
        logger.info(result.message)
        return result

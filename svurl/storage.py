"""集合文件的持久化。

`save_members` 采用 写临时文件 -> 备份原文件 -> 原子重命名 的顺序，
保证 `path` 上永远不会出现写了一半的文件。每个文件只保留一代 `.bak` 备份，
供撤销使用。
"""
import logging
import os
import shutil
from pathlib import Path
from typing import Iterable

logger = logging.getLogger("svurl.storage")

TMP_SUFFIX = ".tmp"
BAK_SUFFIX = ".bak"


def tmp_path(path) -> Path:
    return Path(str(path) + TMP_SUFFIX)


def bak_path(path) -> Path:
    return Path(str(path) + BAK_SUFFIX)


def save_members(path, members: Iterable[str]) -> None:
    """把 `members` 按迭代顺序整体写回 `path`。

    空集合同样会写出空的临时文件并替换原文件，即清空该文件。
    任何文件系统错误都会向上抛出。
    """
    p = Path(path)
    tmp = tmp_path(p)
    bak = bak_path(p)

    # 清理上次中断遗留的临时文件
    if tmp.exists():
        tmp.unlink()

    count = 0
    with tmp.open("w", encoding="utf-8", newline="\n") as f:
        for url in members:
            f.write(url + "\n")
            count += 1
        f.flush()
        os.fsync(f.fileno())

    if p.exists():
        shutil.copyfile(p, bak)
    elif bak.exists():
        # 没有原文件可备份，旧一代备份不能留作撤销点
        bak.unlink()

    os.replace(tmp, p)
    logger.debug(f"已保存 {p}（{count} 条）")


def append_line(path, value: str) -> None:
    """在文件末尾追加一行；原文件缺少结尾换行时先补上。"""
    p = Path(path)
    prefix = ""
    if p.exists() and p.stat().st_size > 0:
        with p.open("rb") as f:
            f.seek(-1, os.SEEK_END)
            if f.read(1) != b"\n":
                prefix = "\n"
    with p.open("a", encoding="utf-8", newline="\n") as f:
        f.write(prefix + value + "\n")


def has_backup(path) -> bool:
    return bak_path(path).exists()


def restore_backup(path) -> None:
    """用 `.bak` 覆盖 `path`（重命名，备份随之消失）。"""
    os.replace(bak_path(path), Path(path))
    logger.debug(f"已从备份恢复 {path}")

"""集合加载器：把每行一个 URL 的文本文件读入有序去重集合。

有序去重集合用 dict 的键表示（值恒为 None），保留插入顺序。
"""
import logging
from pathlib import Path
from typing import Dict

from svurl.errors import FileAccessError

logger = logging.getLogger("svurl.loader")

Members = Dict[str, None]


def load_members(path) -> Members:
    """读取 `path`，返回有序去重的成员集合。

    文件不存在时创建空文件并返回空集合；文件存在但不可读则抛出 `FileAccessError`。
    空行被跳过，重复行只保留第一次出现的位置。
    """
    p = Path(path)
    members: Members = {}
    if not p.exists():
        try:
            p.parent.mkdir(parents=True, exist_ok=True)
            p.touch()
        except OSError as e:
            raise FileAccessError(str(p), e.strerror or str(e)) from e
        logger.info(f"已创建 {p}")
        return members

    try:
        with p.open("r", encoding="utf-8", newline="") as f:
            for line in f:
                url = line.rstrip("\r\n")
                if url:
                    members.setdefault(url, None)
    except (OSError, UnicodeDecodeError) as e:
        raise FileAccessError(str(p), getattr(e, "strerror", None) or str(e)) from e

    logger.debug(f"从 {p} 加载 {len(members)} 条")
    return members

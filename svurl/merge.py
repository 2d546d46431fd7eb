"""集合合并：result = (leftA ∪ rightA) \\ (leftB ∪ rightB)。

result 写回 leftA 的文件，leftB ∪ rightB 写回 leftB 的文件；
rightA 与 rightB 只读。两次写入都经过 `save_members`，因此可以撤销。
"""
import logging
from dataclasses import dataclass
from typing import List

from svurl.storage import save_members
from svurl.store import Store

logger = logging.getLogger("svurl.merge")


@dataclass
class MergeResult:
    kept: List[str]
    reference: List[str]

    @property
    def message(self) -> str:
        return f"kept {len(self.kept)}, reference {len(self.reference)}"


def union(*sets) -> List[str]:
    merged = {}
    for s in sets:
        for v in s:
            merged.setdefault(v, None)
    return list(merged)


def merge(store: Store, left_a: str, right_a: str, left_b: str, right_b: str) -> MergeResult:
    names = [left_a, right_a, left_b, right_b]
    records = [store.find(n) for n in names]
    store.wait_all()
    if len(set(names)) < len(names):
        logger.warning(f"合并参数中有重复的集合名: {names}")

    a_rec, ra_rec, b_rec, rb_rec = records
    union_a = union(a_rec.members, ra_rec.members)
    union_b = union(b_rec.members, rb_rec.members)
    excluded = set(union_b)
    kept = [v for v in union_a if v not in excluded]

    save_members(a_rec.path, kept)
    store.replace_members(left_a, kept)
    save_members(b_rec.path, union_b)
    store.replace_members(left_b, union_b)

    logger.info(f"合并完成: '{left_a}' 保留 {len(kept)} 条, '{left_b}' 共 {len(union_b)} 条")
    return MergeResult(kept, union_b)

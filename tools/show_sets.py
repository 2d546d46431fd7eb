"""本地查看工具

用法:
  python tools/show_sets.py [config.yaml] [set_name]

按配置加载全部集合，打印每个集合及其 `.bak` 备份的 JSON 对比（不修改任何文件）。
"""
import sys
import json
from pathlib import Path

from svurl.config import load_config, resolve_paths
from svurl.loader import load_members
from svurl.storage import bak_path


def describe(name: str, path: str) -> dict:
    """返回集合当前内容与备份内容的差异。"""
    current = list(load_members(path)) if Path(path).exists() else []
    bak = bak_path(path)
    backup = list(load_members(bak)) if bak.exists() else None
    info = {"name": name, "path": path, "size": len(current), "members": current}
    if backup is not None:
        info["backup_only"] = [u for u in backup if u not in current]
        info["new_since_backup"] = [u for u in current if u not in backup]
    return info


def main():
    cfg = load_config(sys.argv[1] if len(sys.argv) > 1 else None)
    paths = resolve_paths(cfg)
    if len(sys.argv) > 2:
        paths = {sys.argv[2]: paths[sys.argv[2]]}
    result = [describe(name, path) for name, path in paths.items()]
    print(json.dumps(result, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()

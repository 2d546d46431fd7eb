"""命令行入口：解析参数并调用 `Store` 上的操作。

支持两种运行方式：
- 推荐：`python -m svurl.cli ...`（作为包运行）或安装后的 `svurl ...`
- 直接运行脚本：`python svurl/cli.py ...`（会在运行时自动调整 `sys.path`）
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

# 当直接运行脚本（非包方式），修正 sys.path 以便可以使用包的绝对导入
if __package__ is None or __package__ == "":
    root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(root))

from svurl.config import index_floor, load_config, load_default_config, log_level, resolve_paths
from svurl.errors import IndexOutOfRangeError, SvURLError
from svurl.merge import merge
from svurl.store import MODE_FULL, MODE_ORIGIN, Store
from svurl.transfer import pop_last, select_by_index, select_random

logger = logging.getLogger("svurl.cli")

EXIT_OK = 0
EXIT_RECOVERABLE = 1
EXIT_CONTRACT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="svurl", description="保存、去重并取回 URL")
    parser.add_argument("--config", help="YAML 配置文件路径（优先于本地默认配置）")
    parser.add_argument("-v", "--verbose", action="store_true", help="输出调试日志")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("add", help="保存完整 URL（去掉 query 与 fragment）")
    p.add_argument("url")
    p.add_argument("--to", default="saved")
    p.add_argument("--check", default="used", help="同时查重的集合，传空字符串表示不查")

    p = sub.add_parser("origin", help="只保存 URL 的 origin")
    p.add_argument("url")
    p.add_argument("--to", default="origins")

    for name, help_text in (("pop", "取出最后保存的 URL 并打开"), ("random", "随机取出一个 URL 并打开")):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("--from", dest="source", default="saved")
        p.add_argument("--to", dest="dest", default="used")
        if name == "random":
            p.add_argument("--keep", action="store_true", help="只显示，不转移")

    p = sub.add_parser("index", help="按位置取出 URL 并打开")
    p.add_argument("index", type=int)
    p.add_argument("--from", dest="source", default="saved")
    p.add_argument("--to", dest="dest", default="used")
    p.add_argument("--keep", action="store_true", help="只显示，不转移")

    p = sub.add_parser("undo", help="用备份恢复最近一次保存前的两个集合")
    p.add_argument("--from", dest="source", default="saved")
    p.add_argument("--to", dest="dest", default="used")

    p = sub.add_parser("merge", help="LEFT_A = (LEFT_A ∪ RIGHT_A) - (LEFT_B ∪ RIGHT_B)")
    for arg in ("left_a", "right_a", "left_b", "right_b"):
        p.add_argument(arg)

    p = sub.add_parser("show", help="显示集合内容")
    p.add_argument("name", nargs="?")
    return parser


def dispatch(store: Store, args) -> str:
    cmd = args.command
    if cmd == "add":
        return store.insert_deduped(args.to, args.url, MODE_FULL, args.check or None).message
    if cmd == "origin":
        return store.insert_deduped(args.to, args.url, MODE_ORIGIN).message
    if cmd == "pop":
        return pop_last(store, args.source, args.dest).message
    if cmd == "index":
        return select_by_index(store, args.source, args.dest, args.index, remove=not args.keep).message
    if cmd == "random":
        return select_random(store, args.source, args.dest, remove=not args.keep).message
    if cmd == "undo":
        return store.undo(args.source, args.dest).message
    if cmd == "merge":
        return merge(store, args.left_a, args.right_a, args.left_b, args.right_b).message
    if cmd == "show":
        if args.name:
            return store.show(args.name)
        return json.dumps(store.summary(), ensure_ascii=False, indent=2)
    raise SvURLError(f"unknown command {cmd!r}")


def run(argv: Optional[List[str]] = None, opener=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        cfg = load_config(args.config) if args.config else load_default_config()
        level = logging.DEBUG if args.verbose else log_level(cfg)
        logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        paths = resolve_paths(cfg)
        floor = index_floor(cfg)
    except SvURLError as e:
        print(f"加载配置出错: {e}", file=sys.stderr)
        return EXIT_CONTRACT

    with Store(paths, opener=opener, index_floor=floor) as store:
        try:
            store.wait_all()
            print(dispatch(store, args))
        except IndexOutOfRangeError as e:
            logger.error(str(e))
            return EXIT_RECOVERABLE
        except SvURLError as e:
            logger.error(str(e))
            return EXIT_CONTRACT
    return EXIT_OK


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()

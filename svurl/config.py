"""配置加载器：从 YAML 加载集合文件路径等运行时配置。

提供 `load_config(path)`、`load_default_config()` 与 `resolve_paths(cfg)`。
默认的本地配置位于项目根的 `config/local_config.yaml`。
"""
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from svurl.errors import ConfigError
from svurl.store import DEFAULT_SETS


def _default_config_path() -> Path:
    # 相对于包目录的项目根 config/local_config.yaml
    pkg_root = Path(__file__).parent.parent
    return pkg_root / "config" / "local_config.yaml"


def load_config(path: Optional[str]) -> Dict[str, Any]:
    """从给定路径加载 YAML 配置，返回 dict。文件不存在时返回空 dict。"""
    p = Path(path) if path else _default_config_path()
    if not p.exists():
        return {}
    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"{p}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{p}: top level must be a mapping")
    return data


def load_default_config() -> Dict[str, Any]:
    return load_config(str(_default_config_path()))


def resolve_paths(cfg: Dict[str, Any]) -> Dict[str, str]:
    """把配置中的 `sets` 合并到默认集合之上（同名以配置为准）。"""
    sets = cfg.get("sets") or {}
    if not isinstance(sets, dict):
        raise ConfigError("'sets' must map set names to file paths")
    return {**DEFAULT_SETS, **{str(k): str(v) for k, v in sets.items()}}


def index_floor(cfg: Dict[str, Any]) -> int:
    value = cfg.get("index_floor", 1)
    try:
        value = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"'index_floor' must be an integer, got {value!r}") from None
    if value < 0:
        raise ConfigError("'index_floor' must not be negative")
    return value


def log_level(cfg: Dict[str, Any]) -> int:
    """返回 `log_level` 对应的 logging 级别数值，未知级别名抛出 `ConfigError`。"""
    value = cfg.get("log_level", "INFO")
    level = logging.getLevelName(str(value).upper())
    if not isinstance(level, int):
        raise ConfigError(f"'log_level' must be a logging level name, got {value!r}")
    return level

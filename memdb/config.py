# memdb/config.py
from __future__ import annotations
import os
from dataclasses import dataclass

from .diag import logger
from .errors import ConfigError
from .types import EQUALITY_MODES

DEFAULT_PRIMARY_KEY = "id"
DEFAULT_EQUALITY = "strict"

_TRUTHY = ("1", "true", "yes", "on")
_FALSY = ("0", "false", "no", "off", "")


@dataclass(frozen=True)
class StoreConfig:
    """
    存储配置（创建后不可变）：
    - primary_key: 主键属性名，标量过滤条件按此属性匹配
    - equality: "strict"（默认，严格相等）或 "loose"（数字串与数字互等）
    - unique_keys: True 时插入重复主键值会抛 DuplicateKey
    """
    primary_key: str = DEFAULT_PRIMARY_KEY
    equality: str = DEFAULT_EQUALITY
    unique_keys: bool = False

    def validate(self) -> "StoreConfig":
        if not isinstance(self.primary_key, str) or not self.primary_key:
            raise ConfigError(f"primary_key must be a non-empty string, got {self.primary_key!r}")
        if self.equality not in EQUALITY_MODES:
            raise ConfigError(f"equality must be one of {EQUALITY_MODES}, got {self.equality!r}")
        return self

    @classmethod
    def from_env(cls) -> "StoreConfig":
        """从 MEMDB_* 环境变量读取；非法值打 warning 并回退默认值。"""
        pk = os.environ.get("MEMDB_PRIMARY_KEY", DEFAULT_PRIMARY_KEY).strip()
        if not pk:
            logger.warning("invalid MEMDB_PRIMARY_KEY=%r, using %r", pk, DEFAULT_PRIMARY_KEY)
            pk = DEFAULT_PRIMARY_KEY

        equality = os.environ.get("MEMDB_EQUALITY", DEFAULT_EQUALITY).strip().lower()
        if equality not in EQUALITY_MODES:
            logger.warning("invalid MEMDB_EQUALITY=%r, using %r", equality, DEFAULT_EQUALITY)
            equality = DEFAULT_EQUALITY

        raw = os.environ.get("MEMDB_UNIQUE_KEYS", "0").strip().lower()
        if raw in _TRUTHY:
            unique = True
        elif raw in _FALSY:
            unique = False
        else:
            logger.warning("invalid MEMDB_UNIQUE_KEYS=%r, using False", raw)
            unique = False

        return cls(primary_key=pk, equality=equality, unique_keys=unique)

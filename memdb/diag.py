# memdb/diag.py
from __future__ import annotations

import os
import logging
from dataclasses import dataclass, asdict

logger = logging.getLogger("memdb")

_log_handler: logging.Handler | None = None


@dataclass
class OpStats:
    """
    单个 store 实例的操作统计：
    - inserted: 插入的记录数
    - matched: get / update / delete 过滤命中的记录数
    - updated / deleted: 被回调修改 / 被删除的记录数
    - tables_created / tables_dropped: 隐式建表 / 整表删除次数
    """
    inserted: int = 0
    matched: int = 0
    updated: int = 0
    deleted: int = 0
    tables_created: int = 0
    tables_dropped: int = 0

    def add(self, **delta) -> None:
        for k, v in delta.items():
            if hasattr(self, k):
                setattr(self, k, getattr(self, k) + int(v))

    def snapshot(self) -> dict:
        return asdict(self)

    def reset(self) -> None:
        for k in asdict(self):
            setattr(self, k, 0)


def enable_log(path: str | None = None, level: int = logging.DEBUG) -> str:
    """
    开启文件日志（仅初始化一次）：
    - 默认写入 __logs__/memdb.log
    - 返回实际使用的日志路径
    """
    global _log_handler
    if _log_handler is not None:
        return getattr(_log_handler, "baseFilename", path or "")
    if path is None:
        os.makedirs("__logs__", exist_ok=True)
        path = os.path.join("__logs__", "memdb.log")
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
    logger.setLevel(level)
    logger.addHandler(handler)
    _log_handler = handler
    return path


def disable_log() -> None:
    """关闭文件日志（移除 handler）"""
    global _log_handler
    if _log_handler is not None:
        logger.removeHandler(_log_handler)
        _log_handler.close()
    _log_handler = None

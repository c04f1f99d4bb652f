# memdb/operators/update.py
from __future__ import annotations
from typing import Any, Callable, Dict, List, MutableMapping, Tuple

from ..diag import OpStats, logger
from .select import SelectOperator

Setter = Callable[[MutableMapping[str, Any]], Any]


def setter_from_clauses(set_clauses: List[Dict[str, Any]]) -> Setter:
    """[{'column': c, 'value': v}, ...] -> 回调函数，逐个赋值。"""
    pairs = [(kv["column"], kv.get("value")) for kv in set_clauses]

    def setter(row: MutableMapping[str, Any]) -> None:
        for col, val in pairs:
            row[col] = val

    return setter


class UpdateOperator:
    """
    原地更新：
      - 用与 get 相同的过滤表达式选出记录
      - 按表内顺序对每条命中记录调用回调，回调拿到的是活引用
      - 回调中途抛异常：已处理过的记录还原成调用前的顶层属性，再把异常抛给调用方
    """
    def __init__(self, select: SelectOperator, stats: OpStats) -> None:
        self.select = select
        self.stats = stats

    def execute(self, table_name: str, expr: Any, callback: Setter) -> int:
        if not callable(callback):
            raise TypeError(f"update callback must be callable, got {type(callback).__name__}")
        rows = self.select.execute(table_name, expr)

        backups: List[Tuple[MutableMapping[str, Any], Dict[str, Any]]] = []
        try:
            for row in rows:
                backups.append((row, dict(row)))
                callback(row)
        except Exception:
            for row, saved in reversed(backups):
                row.clear()
                row.update(saved)
            logger.warning("UPDATE %s: callback failed, %d rows restored", table_name, len(backups))
            raise

        self.stats.add(updated=len(rows))
        logger.debug("UPDATE %s: %d rows affected", table_name, len(rows))
        return len(rows)

# memdb/operators/select.py
from __future__ import annotations
from typing import Any

from ..catalog import Catalog, Table
from ..config import StoreConfig
from ..diag import OpStats, logger
from ..predicates import build_predicate
from ..result import ResultSet


class SelectOperator:
    """顺序扫描 + 过滤；只读，返回的都是表内记录的引用。"""

    def __init__(self, catalog: Catalog, config: StoreConfig, stats: OpStats) -> None:
        self.catalog = catalog
        self.config = config
        self.stats = stats

    def _on_delete(self, table_name: str):
        def cb(n: int) -> None:
            self.stats.add(deleted=n)
            logger.debug("DELETE %s via result: %d rows", table_name, n)
        return cb

    def execute(self, table_name: str, expr: Any) -> ResultSet:
        # 谓词先编译：过滤表达式非法时在查表之前就报错
        pred = build_predicate(expr, self.config.primary_key, self.config.equality)
        table = self.catalog.get_table(table_name)
        rows = ResultSet((r for r in table if pred(r)), table, self._on_delete(table_name))
        self.stats.add(matched=len(rows))
        logger.debug("GET %s: %d of %d rows matched", table_name, len(rows), len(table))
        return rows

    def scan_all(self, table_name: str) -> Table:
        return self.catalog.get_table(table_name)

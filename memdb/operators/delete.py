# memdb/operators/delete.py
from __future__ import annotations
from typing import Any

from ..catalog import Catalog
from ..diag import OpStats, logger
from .base import remove_records
from .select import SelectOperator


class DeleteOperator:
    """
    条件删除 / 整表删除：
      - delete: 先按过滤表达式选出记录，再按对象身份一次性移除
      - drop: 删掉表名和全部记录；表不存在时什么也不做
    """
    def __init__(self, catalog: Catalog, select: SelectOperator, stats: OpStats) -> None:
        self.catalog = catalog
        self.select = select
        self.stats = stats

    def execute(self, table_name: str, expr: Any) -> int:
        rows = self.select.execute(table_name, expr)
        n = remove_records(self.catalog.get_table(table_name), rows)
        self.stats.add(deleted=n)
        logger.debug("DELETE %s: %d rows deleted", table_name, n)
        return n

    def drop(self, table_name: str) -> int:
        if not self.catalog.has_table(table_name):
            logger.debug("DROP %s: table absent, nothing to do", table_name)
            return 0
        n = len(self.catalog.get_table(table_name))
        self.catalog.drop_table(table_name)
        self.stats.add(deleted=n, tables_dropped=1)
        return n

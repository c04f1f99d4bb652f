# memdb/operators/insert.py
from __future__ import annotations
from typing import Any, Dict, List, MutableMapping

from ..catalog import Catalog
from ..config import StoreConfig
from ..diag import OpStats, logger
from ..errors import DuplicateKey, InvalidRecord
from ..types import equality_fn
from .base import as_record_list

_MISSING = object()


class InsertOperator:
    """
    追加记录：
      - 表不存在则隐式创建（空列表也会建表）
      - 先整体校验（类型 / 主键唯一），全部通过才追加，不会只写入半批
      - 存入的是调用方传进来的 dict 本身，不做拷贝
    """
    def __init__(self, catalog: Catalog, config: StoreConfig, stats: OpStats) -> None:
        self.catalog = catalog
        self.config = config
        self.stats = stats

    def _check_unique(self, table_name: str, existing: List[Dict[str, Any]],
                      records: List[MutableMapping[str, Any]]) -> None:
        # 与过滤条件用同一套相等语义：strict 下 True 与 1 不同，loose 下 "1" 与 1 相同
        pk = self.config.primary_key
        eq = equality_fn(self.config.equality)
        seen = [r[pk] for r in existing if pk in r]
        for rec in records:
            val = rec.get(pk, _MISSING)
            if val is _MISSING:
                continue
            if any(eq(old, val) for old in seen):
                raise DuplicateKey(table_name, pk, val)
            seen.append(val)

    def execute(self, table_name: str, obj: Any) -> int:
        records = as_record_list(obj)
        for i, rec in enumerate(records):
            if not isinstance(rec, MutableMapping):
                raise InvalidRecord(
                    f"Record #{i} for table '{table_name}' must be a mapping, got {type(rec).__name__}"
                )

        if self.config.unique_keys:
            existing = self.catalog.get_table(table_name) if self.catalog.has_table(table_name) else []
            self._check_unique(table_name, existing, records)

        table, created = self.catalog.ensure_table(table_name)
        table.extend(records)

        self.stats.add(inserted=len(records), tables_created=int(created))
        logger.debug("INSERT %s: %d rows", table_name, len(records))
        return len(records)


# memdb/catalog.py
# -*- coding: utf-8 -*-
from __future__ import annotations
from typing import Any, Dict, List

from .diag import logger
from .errors import TableNotFound

Table = List[Dict[str, Any]]


class Catalog:
    """
    目录管理器

    职责：
      - 维护 表名 -> 记录列表 的映射（按建表顺序）；
      - 返回的记录列表是活引用，调用方的增删改直接作用于表本身；
      - 只暴露 get/ensure/has/list/drop 等常用操作。
    """

    def __init__(self) -> None:
        self._tables: Dict[str, Table] = {}

    def get_table(self, name: str) -> Table:
        """
        获取指定表的记录列表。

        异常：
            TableNotFound: 当表不存在时抛出（同时是 KeyError）
        """
        try:
            return self._tables[name]
        except KeyError:
            raise TableNotFound(name) from None

    def ensure_table(self, name: str) -> tuple[Table, bool]:
        """
        取表，不存在则创建空表。

        返回：
            (记录列表, 是否新建)
        """
        table = self._tables.get(name)
        if table is not None:
            return table, False
        table = self._tables[name] = []
        logger.debug("table %r created", name)
        return table, True

    def drop_table(self, name: str) -> bool:
        """删除整表；表不存在时返回 False 而不报错。"""
        if self._tables.pop(name, None) is None:
            return False
        logger.debug("table %r dropped", name)
        return True

    def list_tables(self) -> List[str]:
        return list(self._tables)

    def has_table(self, name: str) -> bool:
        return name in self._tables

# memdb/store.py
# -*- coding: utf-8 -*-
"""
memdb - 基于 list / dict 的进程内表存储

用法
====
    db = MemDB()                      # 主键 "id"
    db = MemDB("name")                # 主键 "name"

    db.insert("users", {"id": 1, "name": "a"})
    db.insert("users", [{"id": 2}, {"id": 3}])

    db.get("users", 1)                          # 主键
    db.get("users", [1, 2])                     # OR
    db.get("users", {"name": "a", "age": 3})    # AND
    db.get("users", [1, {"name": "b"}])         # 混合
    db.get("users", {"name": "a"}).delete()     # 删除查到的记录

    db.update("users", 1, lambda r: r.update(age=4))
    db.delete("users", {"name": "a"})
    db.get_all("users")
    db.delete_all("users")

    users = db.use("users")           # 绑定表名，后续调用省略 table 参数
    users.insert({"id": 9})
    users.get(9)
"""
from __future__ import annotations
from typing import Any, Callable, Dict, Iterator, List, Optional

from .catalog import Catalog, Table
from .config import StoreConfig
from .diag import OpStats
from .errors import MemDBError
from .executor import Executor
from .result import ResultSet


class MemDB:
    """
    存储句柄：表名 -> 有序记录列表，外加固定的主键属性名。

    参数：
        primary_key: 主键属性名（默认 "id"）；传了 config 时以 config 为准
        config: 完整配置（equality / unique_keys 等）
    """

    def __init__(self, primary_key: Optional[str] = None,
                 config: Optional[StoreConfig] = None) -> None:
        if config is None:
            config = StoreConfig(primary_key="id" if primary_key is None else primary_key)
        elif primary_key is not None and primary_key != config.primary_key:
            config = StoreConfig(primary_key=primary_key, equality=config.equality,
                                 unique_keys=config.unique_keys)
        self._config = config.validate()
        self._catalog = Catalog()
        self._stats = OpStats()
        self._executor = Executor(self._catalog, self._config, self._stats)

    # ---------- 配置 / 元信息 ----------
    @property
    def primary_key(self) -> str:
        return self._config.primary_key

    @property
    def config(self) -> StoreConfig:
        return self._config

    @property
    def executor(self) -> Executor:
        return self._executor

    def list_tables(self) -> List[str]:
        return self._catalog.list_tables()

    def has_table(self, table: str) -> bool:
        return self._catalog.has_table(table)

    def __contains__(self, table: object) -> bool:
        return isinstance(table, str) and self._catalog.has_table(table)

    def stats(self) -> Dict[str, int]:
        return self._stats.snapshot()

    def reset_stats(self) -> None:
        self._stats.reset()

    def __repr__(self) -> str:
        return f"MemDB(primary_key={self.primary_key!r}, tables={self.list_tables()!r})"

    # ---------- CRUD ----------
    def _run(self, plan: Dict[str, Any]) -> Dict[str, Any]:
        res = self._executor.execute_plan(plan)
        if not res.get("ok"):
            raise MemDBError(res.get("error", "execution failed"))
        return res

    def insert(self, table: str, records: Any) -> None:
        self._run({"type": "Insert", "table_name": table, "rows": records})

    set = insert

    def get(self, table: str, key: Any) -> ResultSet:
        return self._run({"type": "Get", "table_name": table, "filter": key})["rows"]

    def get_all(self, table: str) -> Table:
        return self._run({"type": "GetAll", "table_name": table})["rows"]

    def update(self, table: str, key: Any, callback: Callable[[Dict[str, Any]], Any]) -> None:
        self._run({"type": "Update", "table_name": table, "filter": key, "callback": callback})

    def delete(self, table: str, key: Any) -> None:
        self._run({"type": "Delete", "table_name": table, "filter": key})

    def delete_all(self, table: str) -> None:
        self._run({"type": "DeleteAll", "table_name": table})

    def use(self, table: Optional[str] = None) -> "MemDB | TableHandle":
        """选表：返回绑定了表名的句柄；不传表名则返回存储本身。"""
        if table is None:
            return self
        return TableHandle(self, table)


class TableHandle:
    """绑定到单个表名的视图，所有操作转发给所属 MemDB。"""

    def __init__(self, db: MemDB, table: str) -> None:
        self._db = db
        self._table = table

    @property
    def table(self) -> str:
        return self._table

    @property
    def db(self) -> MemDB:
        return self._db

    def insert(self, records: Any) -> None:
        self._db.insert(self._table, records)

    set = insert

    def get(self, key: Any) -> ResultSet:
        return self._db.get(self._table, key)

    def get_all(self) -> Table:
        return self._db.get_all(self._table)

    def update(self, key: Any, callback: Callable[[Dict[str, Any]], Any]) -> None:
        self._db.update(self._table, key, callback)

    def delete(self, key: Any) -> None:
        self._db.delete(self._table, key)

    def delete_all(self) -> None:
        self._db.delete_all(self._table)

    def use(self, table: Optional[str] = None) -> "MemDB | TableHandle":
        return self._db.use(table)

    def __len__(self) -> int:
        return len(self.get_all())

    def __bool__(self) -> bool:
        # 句柄本身恒为真，不因空表 / 缺表而变成假
        return True

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        return iter(self.get_all())

    def __getitem__(self, index):
        # users[0] / users[-1] / users[1:3]：直接落到活的记录列表上
        return self.get_all()[index]

    def __repr__(self) -> str:
        return f"TableHandle(table={self._table!r})"


def mem_db(primary_key: str = "id", **options: Any) -> MemDB:
    """工厂函数：mem_db() / mem_db("name", unique_keys=True)"""
    return MemDB(config=StoreConfig(primary_key=primary_key, **options))

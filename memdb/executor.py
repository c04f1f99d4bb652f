# memdb/executor.py
from __future__ import annotations
from typing import Any, Dict

from .catalog import Catalog
from .config import StoreConfig
from .diag import OpStats

from .operators.insert import InsertOperator
from .operators.select import SelectOperator
from .operators.update import UpdateOperator, setter_from_clauses
from .operators.delete import DeleteOperator


class Executor:
    """
    执行器：把执行计划（带 "type" 的 dict）分派给各算子并组织结果。
    支持：Insert / Get / GetAll / Update / Delete / DeleteAll / ShowTables。

    存储层异常（TableNotFound / InvalidFilter ...）原样抛给调用方；
    只有未知的计划类型以 {"ok": False, "error": ...} 返回。
    """

    def __init__(self, catalog: Catalog, config: StoreConfig, stats: OpStats) -> None:
        self.catalog = catalog
        self.config = config
        self.stats = stats
        self.op_insert = InsertOperator(catalog, config, stats)
        self.op_select = SelectOperator(catalog, config, stats)
        self.op_update = UpdateOperator(self.op_select, stats)
        self.op_delete = DeleteOperator(catalog, self.op_select, stats)

    def execute_plan(self, plan: Dict[str, Any]) -> Dict[str, Any]:
        ptype = plan.get("type")
        table = plan.get("table_name")

        # 元信息：列出表
        if ptype == "ShowTables":
            return {"ok": True, "rows": self.catalog.list_tables()}

        if table is None and ptype is not None:
            return {"ok": False, "error": "no table specified"}

        # DML：插入（单条或多条）
        if ptype == "Insert":
            n = self.op_insert.execute(table, plan.get("rows"))
            return {"ok": True, "affected": n, "message": f"{n} rows inserted."}

        # DQL：过滤查询 / 全表
        if ptype == "Get":
            rows = self.op_select.execute(table, plan.get("filter"))
            return {"ok": True, "rows": rows, "affected": len(rows)}
        if ptype == "GetAll":
            rows = self.op_select.scan_all(table)
            return {"ok": True, "rows": rows, "affected": len(rows)}

        # DML：更新（回调优先，其次 SET 子句）
        if ptype == "Update":
            # 只有计划里完全没有 callback 键时才退回 SET 子句；callback=None 交给算子报错
            if "callback" in plan:
                callback = plan["callback"]
            else:
                callback = setter_from_clauses(plan.get("set_clauses") or [])
            n = self.op_update.execute(table, plan.get("filter"), callback)
            return {"ok": True, "affected": n, "message": f"{n} rows affected."}

        # DML：删除
        if ptype == "Delete":
            n = self.op_delete.execute(table, plan.get("filter"))
            return {"ok": True, "affected": n, "message": f"{n} rows deleted."}

        # DDL：整表删除（幂等）
        if ptype == "DeleteAll":
            n = self.op_delete.drop(table)
            return {"ok": True, "affected": n, "message": f"Table {table} dropped."}

        return {"ok": False, "error": f"Unsupported plan type: {ptype}"}

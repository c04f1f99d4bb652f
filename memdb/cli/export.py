# memdb/cli/export.py
from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional
import csv
import os

from openpyxl import Workbook

MAX_COL_WIDTH = 50


def collect_columns(rows: Iterable[Dict[str, Any]]) -> List[str]:
    """按首次出现的顺序收集所有属性名（记录是开放结构，列不固定）。"""
    cols: List[str] = []
    for r in rows:
        for k in r.keys():
            if k not in cols:
                cols.append(k)
    return cols


def _cell(v: Any) -> Any:
    if v is None:
        return ""
    if isinstance(v, (str, int, float, bool)):
        return v
    return str(v)


def _export_to_xlsx(path: str, columns: List[str], rows: List[Dict[str, Any]],
                    title: str) -> None:
    wb = Workbook()
    ws = wb.active
    ws.title = title[:31] or "export"

    ws.append(columns)
    for r in rows:
        ws.append([_cell(r.get(c)) for c in columns])

    # 自动调整列宽
    for column in ws.columns:
        letter = column[0].column_letter
        width = max(len(str(cell.value)) if cell.value is not None else 0 for cell in column)
        ws.column_dimensions[letter].width = min(width + 2, MAX_COL_WIDTH)

    wb.save(path)


def _export_to_csv(path: str, columns: List[str], rows: List[Dict[str, Any]]) -> None:
    with open(path, "w", newline="", encoding="utf-8-sig") as f:
        w = csv.writer(f)
        w.writerow(columns)
        for r in rows:
            w.writerow(["" if r.get(c) is None else r.get(c) for c in columns])


def export_rows(rows: Iterable[Dict[str, Any]], path: str,
                columns: Optional[List[str]] = None, title: str = "export") -> str:
    """
    把记录导出为文件。

    参数：
        rows: 记录序列（dict）
        path: 目标路径；.xlsx 用 openpyxl 写工作簿，其余扩展名写 CSV
        columns: 列顺序；缺省按属性首次出现顺序
    返回：
        实际写入的文件路径
    """
    rs = list(rows)
    cols = columns or collect_columns(rs)
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    if path.lower().endswith(".xlsx"):
        _export_to_xlsx(path, cols, rs, title)
    else:
        _export_to_csv(path, cols, rs)
    return path

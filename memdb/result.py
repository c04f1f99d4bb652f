# memdb/result.py
from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List, Optional

from .operators.base import remove_records


class ResultSet(list):
    """
    get() 的结果：命中记录的引用列表（不是拷贝），外加 delete()。

    delete() 删除的是创建结果时的那批记录（按对象身份），
    之后对本列表的 append / remove 不影响删除范围。
    """

    def __init__(self, records: Iterable[Dict[str, Any]], table: List[Dict[str, Any]],
                 on_delete: Optional[Callable[[int], None]] = None) -> None:
        super().__init__(records)
        self._table = table
        self._snapshot = tuple(self)
        self._on_delete = on_delete

    def delete(self) -> int:
        """从所属表中移除这批记录，返回实际移除的条数（已被删掉的跳过）。"""
        n = remove_records(self._table, self._snapshot)
        if self._on_delete is not None:
            self._on_delete(n)
        return n

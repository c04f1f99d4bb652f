
from __future__ import annotations
from typing import Any, Dict, Iterable, List, MutableMapping

Row = Dict[str, Any]


def remove_records(table: List[Row], records: Iterable[Row]) -> int:
    """
    按对象身份（is）从表中移除记录，返回移除条数。
    原地重建列表：表对象本身不变，已拿到的 get_all 引用仍然有效；
    不用 list.remove / index，它们按 == 比较，会误删内容相同的另一条记录。
    """
    doomed = {id(r) for r in records}
    if not doomed or not table:
        return 0
    before = len(table)
    table[:] = [r for r in table if id(r) not in doomed]
    return before - len(table)


def as_record_list(obj: Any) -> List[MutableMapping[str, Any]]:
    """单条记录或记录序列 -> 记录列表；不做拷贝。"""
    if isinstance(obj, MutableMapping):
        return [obj]
    if isinstance(obj, (list, tuple)):
        return list(obj)
    return [obj]

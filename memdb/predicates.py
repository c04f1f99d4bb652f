# memdb/predicates.py
from __future__ import annotations
from typing import Any, Callable, Dict, List, Mapping

from .errors import InvalidFilter
from .types import equality_fn, is_scalar

Clause = Dict[str, Any]

_MISSING = object()


def _normalize_clause(item: Any, primary_key: str) -> Clause:
    if is_scalar(item):
        return {primary_key: item}
    if isinstance(item, Mapping):
        for k in item:
            if not isinstance(k, str):
                raise InvalidFilter(f"Filter attribute names must be strings, got {k!r}")
        return dict(item)
    raise InvalidFilter(
        f"Unsupported filter clause {item!r} ({type(item).__name__}); "
        "expected a primary key value or an {attribute: value} mapping"
    )


def normalize_filter(expr: Any, primary_key: str) -> List[Clause]:
    """
    过滤表达式 -> 子句列表（子句之间 OR，子句内部 AND）
      1            -> [{pk: 1}]
      {"a": 1}     -> [{"a": 1}]
      [1, {"a": 1}] -> [{pk: 1}, {"a": 1}]
    """
    if isinstance(expr, (list, tuple)):
        return [_normalize_clause(item, primary_key) for item in expr]
    return [_normalize_clause(expr, primary_key)]


def build_predicate(expr: Any, primary_key: str = "id",
                    equality: str = "strict") -> Callable[[Mapping[str, Any]], bool]:
    """把过滤表达式编译成可执行谓词函数；表达式非法时立即抛 InvalidFilter。"""
    clauses = normalize_filter(expr, primary_key)
    eq = equality_fn(equality)
    pairs = [tuple(c.items()) for c in clauses]

    def pred(record: Mapping[str, Any]) -> bool:
        for clause in pairs:
            for attr, val in clause:
                lv = record.get(attr, _MISSING)
                if lv is _MISSING or not eq(lv, val):
                    break
            else:
                return True
        return False

    return pred


def matches(record: Mapping[str, Any], expr: Any, primary_key: str = "id",
            equality: str = "strict") -> bool:
    return build_predicate(expr, primary_key, equality)(record)

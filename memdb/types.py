from __future__ import annotations
from typing import Any

EQUALITY_MODES = ("strict", "loose")


def is_scalar(value: Any) -> bool:
    """主键简写只接受 str / int / float（bool 虽是 int 子类，但不算）。"""
    if isinstance(value, bool):
        return False
    return isinstance(value, (str, int, float))


def _to_number(value: Any):
    # 仿照弱类型比较：bool -> 0/1，数字串 -> float，其余返回 None
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        s = value.strip()
        if s == "":
            return 0
        try:
            return float(s)
        except ValueError:
            return None
    return None


def strict_equals(a: Any, b: Any) -> bool:
    if isinstance(a, bool) != isinstance(b, bool):
        return False
    try:
        return bool(a == b)
    except Exception:
        return False


def loose_equals(a: Any, b: Any) -> bool:
    """
    宽松比较：
      - None 只等于 None
      - 同类型直接 ==
      - 数字 / 数字串 / bool 之间按数值比较（"1" == 1, True == 1）
    """
    if a is None or b is None:
        return a is None and b is None
    if type(a) is type(b):
        return strict_equals(a, b)
    na, nb = _to_number(a), _to_number(b)
    if na is not None and nb is not None and not (isinstance(a, str) and isinstance(b, str)):
        return na == nb
    try:
        return bool(a == b)
    except Exception:
        return False


def equality_fn(mode: str):
    if mode == "loose":
        return loose_equals
    if mode == "strict":
        return strict_equals
    raise ValueError(f"Unsupported equality mode: {mode}")

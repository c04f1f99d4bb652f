# memdb/errors.py
"""Error taxonomy for the in-memory store."""


class MemDBError(Exception):
    """所有 memdb 异常的基类。"""


class TableNotFound(MemDBError, KeyError):
    """读 / 改 / 删一个从未插入过（或已被整表删除）的表。"""

    def __init__(self, table: str):
        super().__init__(table)
        self.table = table

    def __str__(self) -> str:
        return f"Table '{self.table}' doesn't exist"


class InvalidFilter(MemDBError, ValueError):
    """过滤表达式既不是标量、等值字典，也不是二者组成的列表。"""


class InvalidRecord(MemDBError, TypeError):
    """插入的记录不是可变映射（dict）。"""


class DuplicateKey(MemDBError, ValueError):
    """unique_keys 开启时主键值重复。"""

    def __init__(self, table: str, key, value):
        super().__init__(f"Duplicate entry '{value}' for key '{key}' in table '{table}'")
        self.table = table
        self.key = key
        self.value = value


class ConfigError(MemDBError, ValueError):
    """显式传入的配置非法。"""

# memdb/cli/shell.py
from __future__ import annotations
import argparse, json, re, time
from dataclasses import replace
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..config import StoreConfig
from ..diag import enable_log, logger
from ..errors import MemDBError
from ..store import MemDB
from .export import collect_columns, export_rows

BANNER = (
    "欢迎使用 memdb 客户端。\n"
    "语句以 ; 结束。输入 \\h 或 \\? 查看帮助；输入 \\q 退出。\n"
)

HELP = (
    "命令（USE 选表之后 [t] 可省略）：\n"
    "  SHOW TABLES;\n"
    "  USE <table>;\n"
    "  INSERT [t] <JSON 记录 | JSON 记录数组>;\n"
    "  GET [t] <JSON 过滤条件>;   -- 1 / \"k\" / {\"a\": 1} / [1, {\"a\": 2}]\n"
    "  ALL [t];\n"
    "  UPDATE [t] <JSON 过滤条件> SET <JSON 对象>;\n"
    "  DELETE [t] <JSON 过滤条件>;\n"
    "  DROP [t];\n"
    "  EXPORT [t] <path.xlsx | path.csv>;\n"
    "  \\q, quit, exit               -- 退出\n"
    "  \\h, \\?                       -- 帮助\n"
)

PROMPT = "memdb> "
CONT_PROMPT = "    -> "

_IDENT = re.compile(r"^([A-Za-z_][A-Za-z0-9_]*)(?:\s+(.*))?$", re.S)
_JSON_WORDS = ("true", "false", "null")


class ShellError(Exception):
    """语句无法解析（不是存储层错误）。"""


def print_table(rows: List[Dict[str, Any]], cols: Optional[List[str]] = None, elapsed: float = 0.0):
    if not rows:
        print(f"空集（{elapsed:.2f} 秒）")
        return
    cols = cols or collect_columns(rows)

    def fmt(v: Any) -> str:
        if v is None:
            return "NULL"
        if isinstance(v, (dict, list)):
            return json.dumps(v, ensure_ascii=False)
        return str(v)

    widths = [len(c) for c in cols]
    for r in rows:
        for i, c in enumerate(cols):
            widths[i] = max(widths[i], len(fmt(r.get(c))))

    def line():
        return "+" + "+".join("-" * (w + 2) for w in widths) + "+"

    print(line())
    print("| " + " | ".join(cols[i].ljust(widths[i]) for i in range(len(cols))) + " |")
    print(line())
    for r in rows:
        print("| " + " | ".join(fmt(r.get(c)).ljust(widths[i]) for i, c in enumerate(cols)) + " |")
    print(line())
    print(f"{len(rows)} 行记录（{elapsed:.2f} 秒）")


def ok(msg: str, elapsed: float = 0.0):
    print(f"{msg}（{elapsed:.2f} 秒）")


def read_statement(input_fn: Callable[[str], str] = input) -> Optional[str]:
    """逐行读取，直到遇到不在引号内的分号；EOF 或 \\q 返回 None。"""
    buf = ""
    first = True
    while True:
        try:
            line = input_fn(PROMPT if first else CONT_PROMPT)
        except EOFError:
            return None
        if not line.strip() and first:
            continue
        stripped = line.strip()
        if first and stripped in ("\\q", "quit", "exit"):
            return None
        if first and stripped in ("\\h", "\\?"):
            print(HELP.strip())
            continue
        first = False
        buf += (("" if not buf else "\n") + line)

        in_str = False
        i = 0
        while i < len(buf):
            ch = buf[i]
            if in_str:
                if ch == "\\" and i + 1 < len(buf):
                    i += 2; continue
                if ch == '"':
                    in_str = False
                i += 1; continue
            if ch == '"':
                in_str = True
            elif ch == ";":
                return buf[:i].strip()
            i += 1


def _loads(text: str, what: str) -> Any:
    if not text.strip():
        raise ShellError(f"缺少{what}")
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ShellError(f"{what}不是合法 JSON: {e.msg}（第 {e.colno} 列）") from None


class Shell:
    """MySQL 风格的交互外壳：语句 -> 执行计划 -> Executor。"""

    def __init__(self, db: MemDB) -> None:
        self.db = db
        self.current: Optional[str] = None

    def _split_table(self, rest: str) -> Tuple[str, str]:
        rest = rest.strip()
        m = _IDENT.match(rest)
        if m and m.group(1).lower() not in _JSON_WORDS:
            return m.group(1), (m.group(2) or "").strip()
        if self.current is None:
            raise ShellError("未选择表（先 USE <table>）")
        return self.current, rest

    def to_plan(self, stmt: str) -> Dict[str, Any]:
        """把一条语句（不含分号）翻译成执行计划。"""
        m = re.match(r"^\s*([A-Za-z]+)\b\s*(.*)$", stmt, re.S)
        if not m:
            raise ShellError(f"无法解析语句: {stmt!r}")
        verb, rest = m.group(1).upper(), m.group(2)

        if verb == "SHOW":
            if rest.strip().upper() != "TABLES":
                raise ShellError("只支持 SHOW TABLES")
            return {"type": "ShowTables"}
        if verb == "USE":
            name = rest.strip()
            if not _IDENT.match(name) or " " in name:
                raise ShellError("USE 需要一个表名")
            return {"type": "Use", "table_name": name}

        table, rest = self._split_table(rest)
        if verb == "INSERT":
            return {"type": "Insert", "table_name": table, "rows": _loads(rest, "记录")}
        if verb == "GET":
            return {"type": "Get", "table_name": table, "filter": _loads(rest, "过滤条件")}
        if verb == "ALL":
            return {"type": "GetAll", "table_name": table}
        if verb == "UPDATE":
            um = re.match(r"^(.*)\s+SET\s+(.*)$", rest, re.S | re.I)
            if not um:
                raise ShellError("UPDATE 语法: <过滤条件> SET <对象>")
            patch = _loads(um.group(2), "SET 对象")
            if not isinstance(patch, dict):
                raise ShellError("SET 后面需要 JSON 对象")
            return {
                "type": "Update", "table_name": table,
                "filter": _loads(um.group(1), "过滤条件"),
                "set_clauses": [{"column": k, "value": v} for k, v in patch.items()],
            }
        if verb == "DELETE":
            return {"type": "Delete", "table_name": table, "filter": _loads(rest, "过滤条件")}
        if verb == "DROP":
            return {"type": "DeleteAll", "table_name": table}
        if verb == "EXPORT":
            if not rest:
                raise ShellError("EXPORT 需要文件路径")
            return {"type": "Export", "table_name": table, "path": rest.strip("'\"")}
        raise ShellError(f"未知命令: {verb}")

    def run_statement(self, stmt: str) -> None:
        try:
            t0 = time.perf_counter()
            plan = self.to_plan(stmt)
            ptype = plan["type"]

            if ptype == "Use":
                self.current = plan["table_name"]
                print(f"已切换到表 '{self.current}'")
                return
            if ptype == "Export":
                rows = self.db.get_all(plan["table_name"])
                path = export_rows(rows, plan["path"], title=plan["table_name"])
                ok(f"已导出 {len(rows)} 行到 {path}", time.perf_counter() - t0)
                return

            res = self.db.executor.execute_plan(plan)
            elapsed = time.perf_counter() - t0
            if not res.get("ok"):
                print(f"错误: {res.get('error')}")
            elif ptype == "ShowTables":
                rows = [{"Tables_in_memdb": name} for name in res["rows"]]
                print_table(rows, ["Tables_in_memdb"], elapsed)
            elif ptype in ("Get", "GetAll"):
                print_table(res["rows"], elapsed=elapsed)
            else:
                ok(f"执行成功，影响 {res.get('affected', 0)} 行", elapsed)
        except (ShellError, MemDBError) as e:
            print(f"错误 {type(e).__name__}: {e}")
        except Exception as e:
            # 回调 / 导出等意外错误：打印后继续下一条
            logger.exception("statement failed: %s", stmt)
            print(f"错误 {type(e).__name__}: {e}")

    def loop(self, input_fn: Callable[[str], str] = input) -> None:
        print(BANNER)
        while True:
            stmt = read_statement(input_fn)
            if stmt is None:
                print("再见")
                return
            if stmt:
                self.run_statement(stmt)


def main(argv=None, input_fn: Callable[[str], str] = input):
    ap = argparse.ArgumentParser(prog="memdb-shell", description="memdb 的 MySQL 风格交互客户端")
    ap.add_argument("--primary-key", default=None, help="主键属性名（默认：id，或 MEMDB_PRIMARY_KEY）")
    ap.add_argument("--equality", choices=["strict", "loose"], default=None,
                    help="过滤相等语义（默认：strict，或 MEMDB_EQUALITY）")
    ap.add_argument("--unique-keys", action="store_true", default=None,
                    help="插入时拒绝重复的主键值")
    ap.add_argument("--log-file", default=None, help="把调试日志写入该文件")
    args = ap.parse_args(argv)

    config = StoreConfig.from_env()
    overrides = {k: v for k, v in (("primary_key", args.primary_key),
                                   ("equality", args.equality),
                                   ("unique_keys", args.unique_keys)) if v is not None}
    if overrides:
        config = replace(config, **overrides)
    if args.log_file:
        enable_log(args.log_file)

    Shell(MemDB(config=config)).loop(input_fn)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

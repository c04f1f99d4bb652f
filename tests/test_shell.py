import pytest

from memdb.cli.shell import Shell, ShellError, main, read_statement
from memdb.store import MemDB


def feed(lines):
    it = iter(lines)

    def input_fn(prompt):
        try:
            return next(it)
        except StopIteration:
            raise EOFError
    return input_fn


@pytest.fixture()
def shell():
    return Shell(MemDB())


def test_read_statement_spans_lines_and_respects_quotes():
    stmt = read_statement(feed(["", "INSERT t {\"a\": \"x;y\",", "\"id\": 1};"]))
    assert stmt == 'INSERT t {"a": "x;y",\n"id": 1}'
    assert read_statement(feed(["\\q"])) is None
    assert read_statement(feed([])) is None


def test_to_plan_with_explicit_and_current_table(shell):
    assert shell.to_plan('GET users [1, {"name": "b"}]') == {
        "type": "Get", "table_name": "users", "filter": [1, {"name": "b"}]}
    with pytest.raises(ShellError):
        shell.to_plan("GET 1")
    shell.current = "users"
    assert shell.to_plan("GET 1")["table_name"] == "users"
    assert shell.to_plan("get true")["filter"] is True
    assert shell.to_plan("ALL") == {"type": "GetAll", "table_name": "users"}


def test_to_plan_update(shell):
    plan = shell.to_plan('UPDATE t {"role": "user"} SET {"role": "guest", "n": 2}')
    assert plan["filter"] == {"role": "user"}
    assert plan["set_clauses"] == [{"column": "role", "value": "guest"}, {"column": "n", "value": 2}]
    with pytest.raises(ShellError):
        shell.to_plan("UPDATE t 1 SET [1]")
    with pytest.raises(ShellError):
        shell.to_plan("UPDATE t 1")


def test_to_plan_errors(shell):
    for stmt in ("SHOW DATABASES", "FROB t 1", "GET t {oops}", "INSERT t", "USE a b"):
        with pytest.raises(ShellError):
            shell.to_plan(stmt)


def test_session(shell, capsys):
    for stmt in ("USE users",
                 'INSERT [{"id": 1, "name": "a"}, {"id": 2, "name": "b"}]',
                 'GET [1, {"name": "b"}]',
                 'UPDATE 2 SET {"name": "bee"}',
                 "DELETE 1",
                 "ALL",
                 "SHOW TABLES",
                 "DROP",
                 "ALL"):
        shell.run_statement(stmt)
    out = capsys.readouterr().out
    assert "已切换到表 'users'" in out
    assert "2 行记录" in out
    assert "| bee " in out
    assert "1 行记录" in out
    assert "| Tables_in_memdb |" in out
    assert "错误 TableNotFound: Table 'users' doesn't exist" in out
    assert shell.db.list_tables() == []


def test_invalid_filter_is_reported(shell, capsys):
    shell.run_statement('INSERT t {"id": 1}')
    shell.run_statement("GET t null")
    assert "错误 InvalidFilter" in capsys.readouterr().out


def test_export_command(shell, tmp_path, capsys):
    shell.run_statement('INSERT t [{"id": 1}, {"id": 2, "x": "y"}]')
    path = tmp_path / "out.csv"
    shell.run_statement(f"EXPORT t {path}")
    assert "已导出 2 行" in capsys.readouterr().out
    assert path.read_text(encoding="utf-8-sig").splitlines() == ["id,x", "1,", "2,y"]


def test_main_loop(capsys, clean_env):
    rc = main(["--primary-key", "sku"], input_fn=feed([
        'INSERT p {"sku": "a1", "qty": 3};', 'GET p "a1";', "\\h", "quit"]))
    out = capsys.readouterr().out
    assert rc == 0
    assert "| a1  | 3   |" in out
    assert "SHOW TABLES;" in out
    assert out.rstrip().endswith("再见")

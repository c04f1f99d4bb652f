from openpyxl import load_workbook

from memdb.cli.export import collect_columns, export_rows


def test_collect_columns_first_seen_order():
    rows = [{"b": 1, "a": 2}, {"c": 3, "a": 4}]
    assert collect_columns(rows) == ["b", "a", "c"]


def test_export_xlsx(tmp_path, users):
    path = export_rows(users.get_all(), str(tmp_path / "sub" / "users.xlsx"), title="users")
    ws = load_workbook(path).active
    assert ws.title == "users"
    values = [list(r) for r in ws.iter_rows(values_only=True)]
    assert values[0] == ["id", "name", "age", "role"]
    assert values[1] == [1, "alice", 30, "admin"]
    assert len(values) == 4


def test_export_xlsx_stringifies_nested_values(tmp_path):
    path = export_rows([{"id": 1, "tags": ["a", "b"], "none": None}], str(tmp_path / "n.xlsx"),
                       columns=["id", "tags", "none"])
    ws = load_workbook(path).active
    row = [c.value for c in ws[2]]
    assert row[0] == 1
    assert row[1] == "['a', 'b']"
    assert row[2] in (None, "")


def test_export_csv(tmp_path):
    path = export_rows([{"id": 1, "n": None}], str(tmp_path / "x.csv"))
    assert open(path, encoding="utf-8-sig").read().splitlines() == ["id,n", "1,"]

from __future__ import annotations

from lunches.week_matrix_parser import ParsedCell, RowContext, WeekMatrixParser, parse_row


def _triples(cells):
    return [(c.user_name, c.address, c.weekday, c.token) for c in cells]


def test_floor_rows_set_sticky_address():
    matrix = [
        ["Floor 3"],
        ["Ivan", "Big"],
        ["Olga", "", "Medium"],
        ["Floor 5", "ignored"],
        ["Anna", "Only salad"],
    ]
    assert _triples(WeekMatrixParser().parse(matrix)) == [
        ("Ivan", "Floor 3", 0, "Big"),
        ("Olga", "Floor 3", 1, "Medium"),
        ("Anna", "Floor 5", 0, "Only salad"),
    ]


def test_rows_before_any_floor_have_no_address():
    cells = list(WeekMatrixParser().parse([["Ivan", "Big"]]))
    assert cells == [ParsedCell(0, "Ivan", None, 0, "Big")]


def test_empty_and_malformed_rows_are_skipped():
    matrix = [[], None, "not a row", ["", "", ""], ["Ivan", None, " ", "Big"], [None]]
    assert _triples(WeekMatrixParser().parse(matrix)) == [("Ivan", None, 2, "Big")]


def test_sparse_row_yields_only_populated_days():
    cells = list(WeekMatrixParser().parse([["Ivan", "", "Big", "", "", "Medium"]]))
    assert [(c.weekday, c.token) for c in cells] == [(1, "Big"), (4, "Medium")]


def test_cells_after_friday_are_ignored():
    cells = list(WeekMatrixParser().parse([["Ivan", "Big", "Big", "Big", "Big", "Big", "Big"]]))
    assert [c.weekday for c in cells] == [0, 1, 2, 3, 4]


def test_row_without_name_is_skipped(caplog):
    assert list(WeekMatrixParser().parse([["", "Big"]])) == []
    assert "no user name" in caplog.text


def test_row_order_and_row_index_preserved():
    cells = list(WeekMatrixParser().parse([["A", "Big", "Big"], ["Floor 1"], ["B", "", "", "Big"]]))
    assert [(c.row_index, c.user_name, c.weekday) for c in cells] == [(0, "A", 0), (0, "A", 1), (2, "B", 2)]


def test_each_parse_starts_with_fresh_context():
    parser = WeekMatrixParser()
    assert _triples(parser.parse([["Floor 9"], ["A", "Big"]])) == [("A", "Floor 9", 0, "Big")]
    assert _triples(parser.parse([["B", "Big"]])) == [("B", None, 0, "Big")]


def test_parse_is_lazy():
    def rows():
        yield ["A", "Big"]
        raise AssertionError("second row must not be read")

    it = WeekMatrixParser().parse(rows())
    assert next(it).user_name == "A"


def test_parse_row_threads_context():
    ctx, cells = parse_row(RowContext(), 0, ["Floor 2"])
    assert ctx == RowContext(address="Floor 2") and cells == []
    ctx2, cells = parse_row(ctx, 1, ["Ivan", "Big"])
    assert ctx2 is ctx
    assert cells[0].address == "Floor 2"

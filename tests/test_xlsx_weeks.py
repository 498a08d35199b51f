from __future__ import annotations

import io
from datetime import datetime

import pytest
from openpyxl import Workbook

from lunches.errors import ParseError
from lunches.importers.xlsx_weeks import XlsxWeeksReader, cell_to_str


def _build_wb(sheets: dict[str, list[list]]) -> bytes:
    wb = Workbook()
    wb.remove(wb.active)
    for title, rows in sheets.items():
        ws = wb.create_sheet(title)
        for r in rows:
            ws.append(r)
    bio = io.BytesIO()
    wb.save(bio)
    return bio.getvalue()


def test_one_week_per_sheet_in_workbook_order():
    data = _build_wb({
        "03.10.2016-07.10.2016": [["Floor 3"], ["Ivan", "Big", None, "Medium"]],
        "10.10.2016-14.10.2016 - diet": [["Olga", "Only salad"]],
    })
    weeks = list(XlsxWeeksReader().list_weeks(data, "A1:F10"))
    assert [label for label, _ in weeks] == ["03.10.2016-07.10.2016", "10.10.2016-14.10.2016 - diet"]
    matrix = weeks[0][1]
    assert matrix[0][0] == "Floor 3"
    assert matrix[1][:4] == ["Ivan", "Big", "", "Medium"]


def test_range_limits_rows_and_columns():
    data = _build_wb({"03.10.2016-07.10.2016": [["header", "Mon"], ["Ivan", "Big", "x", "x", "x", "x", "beyond"]]})
    (_, matrix), = XlsxWeeksReader().list_weeks(data, "Orders!A2:F2")
    assert matrix == [["Ivan", "Big", "x", "x", "x", "x"]]


def test_reads_workbook_from_path(tmp_path):
    path = tmp_path / "orders.xlsx"
    path.write_bytes(_build_wb({"03.10.2016-07.10.2016": [["Ivan", "Big"]]}))
    (label, matrix), = XlsxWeeksReader().list_weeks(str(path), "A1:B1")
    assert matrix == [["Ivan", "Big"]]


@pytest.mark.parametrize("bad", ["A:F", "nonsense"])
def test_unbounded_or_invalid_range(bad):
    data = _build_wb({"03.10.2016-07.10.2016": [["Ivan", "Big"]]})
    with pytest.raises(ParseError):
        list(XlsxWeeksReader().list_weeks(data, bad))


def test_cell_to_str():
    assert cell_to_str(None) == ""
    assert cell_to_str(3.0) == "3"
    assert cell_to_str(datetime(2016, 10, 3)) == "03.10.2016"
    assert cell_to_str("  Big \ufeff") == "Big"


def test_unreadable_sheet_is_yielded_as_error_and_reading_goes_on(monkeypatch):
    from lunches.importers import xlsx_weeks

    real = xlsx_weeks.cell_to_str

    def flaky(value):
        if value == "corrupt":
            raise TypeError("unsupported cell")
        return real(value)

    monkeypatch.setattr(xlsx_weeks, "cell_to_str", flaky)
    data = _build_wb({
        "03.10.2016-07.10.2016": [["Ivan", "corrupt"]],
        "10.10.2016-14.10.2016": [["Olga", "Big"]],
    })
    (first, error), (second, matrix) = XlsxWeeksReader().list_weeks(data, "A1:B1")
    assert first == "03.10.2016-07.10.2016"
    assert isinstance(error, ParseError)
    assert "unsupported cell" in str(error)
    assert (second, matrix) == ("10.10.2016-14.10.2016", [["Olga", "Big"]])

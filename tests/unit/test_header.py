from __future__ import annotations

from src.transform.header import locate_data_start


def test_size_label_in_row_two_starts_data_at_three():
    grid = [
        ["Hardness Test Results"],
        [],
        [None, "Size", "Thk"],
        ["2024-03-01", "L#12"],
    ]
    assert locate_data_start(grid) == 3


def test_date_label_marks_header():
    grid = [["Date", "Size"], [1, 2]]
    assert locate_data_start(grid) == 1


def test_first_matching_row_wins():
    grid = [["title"], ["Date"], ["Size"], [1]]
    assert locate_data_start(grid) == 2


def test_no_header_treats_whole_sheet_as_data():
    grid = [["a", "b"], [1, 2]]
    assert locate_data_start(grid) == 0


def test_empty_grid():
    assert locate_data_start([]) == 0


def test_exact_match_only():
    grid = [["size", " Size", "Size ", "DATE", "Sizes"], [1]]
    assert locate_data_start(grid) == 0


def test_non_string_cells_are_ignored():
    grid = [[None, 3.5, float("nan")], None, [None, "Size"]]
    assert locate_data_start(grid) == 3


def test_custom_labels():
    grid = [["Specimen"], [1]]
    assert locate_data_start(grid, labels=["Specimen"]) == 1
    assert locate_data_start(grid) == 0

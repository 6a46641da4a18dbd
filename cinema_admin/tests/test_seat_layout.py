import pytest

from cinema_admin.core.exceptions import ValidationError
from cinema_admin.models.theater import SeatStatus
from cinema_admin.schemas.screen import SeatLayoutConfig
from cinema_admin.services.seat_layout import alphabetic_label, expand_layout


def grid(rows, columns, walkway_row=None, walkway_col=None, **extra):
    layout = []
    for r in range(rows):
        row = []
        for c in range(columns):
            kind = "walkway" if r == walkway_row or c == walkway_col else "normal"
            row.append({"type": kind, "price": 100})
        layout.append(row)
    return SeatLayoutConfig.model_validate({"rows": rows, "columns": columns, "layout": layout, **extra})


def test_full_walkway_row_removes_one_row_of_seats():
    config = grid(5, 8, walkway_row=2)
    expansion = expand_layout(config)

    assert expansion.capacity == 5 * 8 - 8
    assert len(expansion.seats) == expansion.capacity
    assert all(seat.status == SeatStatus.AVAILABLE for seat in expansion.seats)


def test_expansion_is_deterministic():
    config = grid(4, 6, walkway_col=3)
    first = expand_layout(config)
    second = expand_layout(config)

    assert first.seats == second.seats
    assert first.capacity == 4 * 6 - 4


def test_generated_numbers_skip_walkways_and_walkway_rows():
    config = grid(3, 4, walkway_row=1, walkway_col=1)
    numbers = [seat.seat_number for seat in expand_layout(config).seats]

    # the walkway row does not consume a letter, the walkway column does not consume a number
    assert numbers == ["A1", "A2", "A3", "B1", "B2", "B3"]


def test_row_and_column_fall_back_to_grid_position():
    config = grid(2, 3, walkway_col=0)
    seats = expand_layout(config).seats

    assert [(s.row, s.column) for s in seats] == [("A", 2), ("A", 3), ("B", 2), ("B", 3)]


def test_numeric_numbering_and_row_naming():
    config = grid(2, 2, numbering_scheme="numeric", row_naming="numeric")
    seats = expand_layout(config).seats

    assert [s.seat_number for s in seats] == ["1-1", "1-2", "2-1", "2-2"]
    assert [s.row for s in seats] == ["1", "1", "2", "2"]


def test_custom_row_names():
    config = grid(2, 2, row_naming="custom", custom_row_names=["VIP", "Gold"])
    numbers = [seat.seat_number for seat in expand_layout(config).seats]

    assert numbers == ["VIP1", "VIP2", "Gold1", "Gold2"]


def test_custom_row_names_must_cover_every_seat_row():
    config = grid(3, 2, row_naming="custom", custom_row_names=["VIP", "Gold"])
    with pytest.raises(ValidationError):
        expand_layout(config)


def test_explicit_numbers_take_precedence():
    config = SeatLayoutConfig.model_validate({
        "rows": 1,
        "columns": 3,
        "layout": [[
            {"type": "premium", "number": "P1", "custom_number": "K1", "price": 300, "is_accessible": True},
            {"type": "premium", "number": "P2", "price": 300},
            {"type": "normal", "row": "Z", "column": 9, "price": 120},
        ]],
    })
    seats = expand_layout(config).seats

    assert [s.seat_number for s in seats] == ["K1", "P2", "A3"]
    assert seats[0].is_accessible
    assert seats[0].seat_type == "premium"
    assert (seats[2].row, seats[2].column) == ("Z", 9)


def test_duplicate_seat_numbers_are_rejected():
    config = SeatLayoutConfig.model_validate({
        "rows": 1,
        "columns": 2,
        "layout": [[{"type": "normal", "number": "A1"}, {"type": "normal", "number": "A1"}]],
    })
    with pytest.raises(ValidationError):
        expand_layout(config)


def test_layout_without_seats_is_rejected():
    config = SeatLayoutConfig.model_validate({
        "rows": 1,
        "columns": 2,
        "layout": [[{"type": "walkway"}, {"type": "empty"}]],
    })
    with pytest.raises(ValidationError):
        expand_layout(config)


def test_layout_metadata_does_not_drive_expansion():
    config = grid(2, 3, walkway_rows=[0], walkway_cols=[1], accessible_seats=["A1"], pricing_tiers={"normal": 999})
    seats = expand_layout(config).seats

    assert len(seats) == 6
    assert not any(s.is_accessible for s in seats)
    assert all(s.price == 100 for s in seats)


@pytest.mark.parametrize("index,label", [(0, "A"), (25, "Z"), (26, "AA"), (27, "AB"), (51, "AZ"), (52, "BA")])
def test_alphabetic_labels(index, label):
    assert alphabetic_label(index) == label

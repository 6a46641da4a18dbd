from dataclasses import dataclass, field
from typing import Optional

from cinema_admin.core.exceptions import ValidationError
from cinema_admin.models.theater import SeatStatus
from cinema_admin.schemas.screen import RowNaming, SeatLayoutConfig, SeatPosition


NON_SEAT_TYPES = ("walkway", "empty")


@dataclass
class SeatSpec:
    seat_number: str
    row: str
    column: int
    seat_type: str
    price: float
    is_accessible: bool
    status: SeatStatus = SeatStatus.AVAILABLE


@dataclass
class SeatLayoutExpansion:
    seats: list[SeatSpec] = field(default_factory=list)

    @property
    def capacity(self) -> int:
        return len(self.seats)


def is_seat(cell: SeatPosition) -> bool:
    return cell.type not in NON_SEAT_TYPES


def alphabetic_label(index: int) -> str:
    """0 -> A, 25 -> Z, 26 -> AA"""
    label = ""
    index += 1
    while index > 0:
        index, rem = divmod(index - 1, 26)
        label = chr(65 + rem) + label
    return label


def row_label(seat_row_index: int, config: SeatLayoutConfig) -> str:
    if config.row_naming == RowNaming.NUMERIC:
        return str(seat_row_index + 1)
    if config.row_naming == RowNaming.CUSTOM:
        names = config.custom_row_names
        return names[seat_row_index].strip() if seat_row_index < len(names) else ""
    return alphabetic_label(seat_row_index)


def generate_seat_number(seat_row_index: int, seat_index: int, config: SeatLayoutConfig) -> str:
    """
    Label for the seat_index-th seat (1-based, walkways and gaps not counted)
    of the seat_row_index-th row that holds at least one seat.
    """
    if config.numbering_scheme == "numeric":
        return f"{seat_row_index + 1}-{seat_index}"
    return f"{row_label(seat_row_index, config)}{seat_index}"


def _pick_number(cell: SeatPosition) -> Optional[str]:
    for candidate in (cell.custom_number, cell.number):
        if candidate and candidate.strip():
            return candidate.strip()
    return None


def expand_layout(config: SeatLayoutConfig) -> SeatLayoutExpansion:
    """
    Turn a seat layout grid into concrete seats, row-major.

    Every cell that is not a walkway or an empty gap becomes exactly one seat
    with status available, so capacity always equals the number of seats.
    Raises ValidationError for a layout with no seats, duplicate seat numbers
    or a missing custom row name.
    """
    expansion = SeatLayoutExpansion()
    seen: set[str] = set()
    seat_row_index = 0

    for cells in config.layout:
        if not any(is_seat(cell) for cell in cells):
            continue
        label = row_label(seat_row_index, config)
        if config.row_naming == RowNaming.CUSTOM and not label:
            raise ValidationError(f"Missing custom name for seat row {seat_row_index + 1}")

        seat_index = 0
        for column_index, cell in enumerate(cells):
            if not is_seat(cell):
                continue
            seat_index += 1
            number = _pick_number(cell) or generate_seat_number(seat_row_index, seat_index, config)
            if number in seen:
                raise ValidationError(f"Duplicate seat number {number}")
            seen.add(number)
            expansion.seats.append(SeatSpec(
                seat_number=number,
                row=cell.row or label,
                column=cell.column or column_index + 1,
                seat_type=cell.type,
                price=cell.price,
                is_accessible=cell.is_accessible,
            ))
        seat_row_index += 1

    if not expansion.seats:
        raise ValidationError("Seat layout must contain at least one seat")
    return expansion

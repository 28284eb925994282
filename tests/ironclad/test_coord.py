"""Unit tests for /src/ironclad/coord.py"""

from string import ascii_lowercase

import pytest

from src.ironclad.coord import Coord


@pytest.mark.parametrize(
    "row, col, notation",
    [(row, col, f"{ascii_lowercase[col]}{row + 1}") for row in range(6) for col in range(8)],
)
def test_creating_from_algebraic(row: int, col: int, notation: str) -> None:
    """The letter picks the column, the number the row. Both start counting at the top left corner."""
    coord = Coord.from_algebraic(notation)
    assert coord == Coord(row, col)
    assert coord.to_algebraic() == notation


def test_algebraic_is_case_and_whitespace_insensitive() -> None:
    assert Coord.from_algebraic(" C4 ") == Coord(3, 2)


def test_multi_digit_rows() -> None:
    assert Coord.from_algebraic("b12") == Coord(11, 1)


def test_row_zero_is_well_formed_but_off_the_board() -> None:
    """'a0' is not malformed: it names a cell above the first row (the board decides it is out of bounds)"""
    assert Coord.from_algebraic("a0") == Coord(-1, 0)


@pytest.mark.parametrize("text", ["", "a", "4c", "aa", "a-1", "12", "a1b", "ä1"])
def test_malformed_algebraic(text: str) -> None:
    with pytest.raises(ValueError):
        _ = Coord.from_algebraic(text)


@pytest.mark.parametrize(
    "other, expected",
    [
        (Coord(2, 3), True),
        (Coord(2, 1), True),
        (Coord(1, 2), True),
        (Coord(3, 2), True),
        (Coord(3, 3), False),  # diagonal
        (Coord(2, 2), False),  # itself
        (Coord(2, 4), False),  # two steps away
    ],
)
def test_is_adjacent(other: Coord, expected: bool) -> None:
    assert Coord(2, 2).is_adjacent(other) == expected


def test_step() -> None:
    assert Coord(2, 2).step((-1, 0)) == Coord(1, 2)
    assert Coord(2, 2).step((0, 1)) == Coord(2, 3)


def test_coords_sort_row_by_row() -> None:
    coords = [Coord(1, 0), Coord(0, 5), Coord(0, 1)]
    assert sorted(coords) == [Coord(0, 1), Coord(0, 5), Coord(1, 0)]

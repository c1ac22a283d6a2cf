"""
Tests for square identification and square origin reconstruction.
"""

import numpy as np
import pytest

from mgrs_grid.coordinates import GridSquare, Hemisphere, UtmPoint
from mgrs_grid.errors import InvalidSquareError, MgrsOutOfRangeError
from mgrs_grid.grid_letters import BAND_X_NORTHERN_EDGE, FALSE_NORTHING
from mgrs_grid.squares import (
    identify_square,
    resolve_row_cycles,
    snap_to_square_origin,
    square_origin,
    validate_square,
)


def test_equator_odd_zone_starts_rows_at_a():
    square = identify_square(UtmPoint(500_000.0, 0.0, 31))
    assert square == GridSquare(31, "N", "E", "A")
    assert str(square) == "31NEA"
    assert square_origin(square) == (500_000.0, 0.0)


def test_equator_even_zone_starts_rows_at_f():
    assert identify_square(UtmPoint(500_000.0, 0.0, 32)) == GridSquare(32, "N", "N", "F")


def test_column_cycle_starts():
    assert identify_square(UtmPoint(150_000.0, 0.0, 1)).column == "A"
    assert identify_square(UtmPoint(150_000.0, 0.0, 2)).column == "J"
    assert identify_square(UtmPoint(150_000.0, 0.0, 3)).column == "S"
    assert identify_square(UtmPoint(150_000.0, 0.0, 4)).column == "A"
    assert identify_square(UtmPoint(850_000.0, 0.0, 3)).column == "Z"


def test_just_south_of_equator():
    odd = identify_square(UtmPoint(500_000.0, FALSE_NORTHING - 50_000.0, 31, Hemisphere.SOUTH))
    even = identify_square(UtmPoint(500_000.0, FALSE_NORTHING - 50_000.0, 32, Hemisphere.SOUTH))
    assert odd == GridSquare(31, "M", "E", "V")
    assert even == GridSquare(32, "M", "N", "E")
    assert square_origin(odd) == (500_000.0, FALSE_NORTHING - 100_000.0)
    assert square_origin(even) == (500_000.0, FALSE_NORTHING - 100_000.0)


def test_identify_square_out_of_range():
    with pytest.raises(MgrsOutOfRangeError):
        identify_square(UtmPoint(950_000.0, 0.0, 3))
    with pytest.raises(MgrsOutOfRangeError):
        identify_square(UtmPoint(50_000.0, 0.0, 1))
    with pytest.raises(MgrsOutOfRangeError):
        identify_square(UtmPoint(500_000.0, BAND_X_NORTHERN_EDGE + 1.0, 31))
    with pytest.raises(InvalidSquareError):
        identify_square(UtmPoint(500_000.0, 0.0, 61))
    with pytest.raises(InvalidSquareError):
        identify_square(UtmPoint(500_000.0, 0.0, 0))


@pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
def test_identify_square_non_finite_input(value):
    with pytest.raises(MgrsOutOfRangeError):
        identify_square(UtmPoint(value, 0.0, 31))
    with pytest.raises(MgrsOutOfRangeError):
        identify_square(UtmPoint(500_000.0, -value, 31))


def test_row_cycle_north_of_crossing_rounds_up():
    # Band X's southern edge passes through square 79, i.e. the last row of a cycle.
    # Row V in an even zone is 14 squares into its cycle, so it sits in the next cycle up.
    nearest_northing_index = 79
    assert resolve_row_cycles(nearest_northing_index, 14) == nearest_northing_index // 20 + 1

    origin = square_origin(GridSquare(34, "X", "E", "V"))
    assert origin == (500_000.0, (14 + 4 * 20) * 100_000.0)


def test_row_cycle_north_of_crossing_same_cycle():
    # band P crosses square 8; row K (9) lies in the same cycle
    assert resolve_row_cycles(8, 9) == 0
    assert square_origin(GridSquare(31, "P", "E", "K")) == (500_000.0, 900_000.0)
    # band X: row A of an odd zone starts the cycle after the crossing
    assert square_origin(GridSquare(33, "X", "W", "A")) == (500_000.0, 8_000_000.0)


def test_row_south_of_crossing():
    # row H (7) is just below band P's crossing square (8)
    assert resolve_row_cycles(8, 7) == 0
    assert square_origin(GridSquare(31, "P", "E", "H")) == (500_000.0, 700_000.0)

    # band D crosses square -80, the first row of a cycle; row V (19) just below it is one cycle further south
    assert resolve_row_cycles(-80, 19) == -5
    assert square_origin(GridSquare(31, "D", "E", "V")) == (500_000.0, -8_100_000.0 + FALSE_NORTHING)


def test_columns_outside_zone():
    # zone 2 uses J-R; H is the column just west of the zone
    assert square_origin(GridSquare(2, "N", "H", "F"))[0] == 0.0
    assert square_origin(GridSquare(2, "N", "A", "F"))[0] == -700_000.0
    # zone 1 uses A-H; Z belongs to the previous cycle, J extends east
    assert square_origin(GridSquare(1, "N", "Z", "A"))[0] == 0.0
    assert square_origin(GridSquare(1, "N", "J", "A"))[0] == 900_000.0


@pytest.mark.parametrize(
    "square",
    [
        GridSquare(61, "N", "E", "A"),
        GridSquare(0, "N", "E", "A"),
        GridSquare(31, "n", "E", "A"),
        GridSquare(31, "N", "e", "A"),
        GridSquare(31, "N", "E", "a"),
        GridSquare(31, "N", "E", "I"),
        GridSquare(31, "N", "O", "A"),
        GridSquare(31, "A", "E", "A"),
        GridSquare(31, "Y", "E", "A"),
    ],
)
def test_invalid_squares_rejected(square):
    with pytest.raises(InvalidSquareError):
        validate_square(square)
    with pytest.raises(InvalidSquareError):
        square_origin(square)


def test_identify_and_origin_agree_everywhere():
    """
    Every point's square origin must be the 100 km corner below it, for all three column
    cycles, both row parities and every latitude band.
    """
    true_northings = np.arange(-8_850_000.0, BAND_X_NORTHERN_EDGE, 37_500.0) + 1_234.5
    for zone in (1, 2, 3, 31, 32):
        for easting in (120_000.0, 456_789.0, 899_999.0):
            for true_northing in true_northings:
                southern = true_northing < 0
                point = UtmPoint(
                    easting,
                    true_northing + FALSE_NORTHING if southern else true_northing,
                    zone,
                    Hemisphere.SOUTH if southern else Hemisphere.NORTH,
                )
                square = identify_square(point)
                expected_easting, expected_northing = snap_to_square_origin(easting, true_northing)
                if southern:
                    expected_northing += FALSE_NORTHING
                assert square_origin(square) == (expected_easting, expected_northing), (point, square)


def test_snap_to_square_origin():
    assert snap_to_square_origin(123_456.7, -50.0) == (100_000.0, -100_000.0)
    assert snap_to_square_origin(100_000.0, 9_999_999.9) == (100_000.0, 9_900_000.0)

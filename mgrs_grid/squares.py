"""
MGRS 100 km square identification and square origin reconstruction.

Column letters: UTM zone 1 uses A-H, zone 2 J-R, zone 3 S-Z, zone 4 A-H again, and so on.
Row letters cycle A-V (20 letters, 2000 km) northwards. The first square north of the
equator is 'A' for odd zones and 'F' for even zones; just south of the equator is 'V' / 'E'.
Latitude bands do not form an origin for the 100 km squares: every square has its
corners at exact 100 km multiples of UTM easting and northing.
"""

import math
import numbers
from typing import Tuple

from mgrs_grid.coordinates import GridSquare, UtmPoint
from mgrs_grid.errors import InvalidSquareError, MgrsOutOfRangeError
from mgrs_grid.grid_letters import (
    BAND_LETTERS,
    FALSE_NORTHING,
    M_PER_MGRS_SQUARE,
    NUMBER_MGRS_COLUMN_LETTERS,
    NUMBER_MGRS_ROW_LETTERS,
    index_to_letter,
    letter_to_index,
)
from mgrs_grid.latitude_bands import band_southern_edge, resolve_latitude_band
from utils.logger import Logger
from utils.math_utils import ceil_div, euclidean_mod

# Shift from the band crossing towards the middle of the band when deciding whether a row lies
# north or south of it. Bands span 8 deg (~9 squares); C and X span 12 deg (~13 squares).
LAT_CROSSING_OFFSET = 5


def _column_start(utm_zone: int) -> int:
    # zone 1 = A, zone 2 = J, zone 3 = S
    return ((utm_zone - 1) % 3) * 8


def _row_start(utm_zone: int) -> int:
    # even zones start at F
    return 5 if utm_zone % 2 == 0 else 0


def _validate_zone(utm_zone: int) -> None:
    if not isinstance(utm_zone, numbers.Integral) or isinstance(utm_zone, bool) or not 1 <= utm_zone <= 60:
        raise InvalidSquareError(f"MGRS Square Invalid: Invalid UTM zone {utm_zone!r}")


def validate_square(square: GridSquare) -> None:
    """
    Check a grid square designation before it is used.

    Raises:
        InvalidSquareError: If the zone is outside [1, 60] or any letter is lowercase or not an MGRS letter.
    """
    _validate_zone(square.utm_zone)
    for letter in (square.lat_band, square.column, square.row):
        if isinstance(letter, str) and letter != letter.upper():
            raise InvalidSquareError(f"MGRS Square Invalid: Lowercase not permitted ({square})")
        letter_to_index(letter)
    if square.lat_band not in BAND_LETTERS:
        raise InvalidSquareError(f"MGRS Square Invalid: {square.lat_band!r} is not a latitude band")


def identify_square(point: UtmPoint) -> GridSquare:
    """
    Find the MGRS 100 km square containing a UTM point.

    Parameters:
        point: The UTM point. Its hemisphere tells whether the northing carries a false northing.

    Returns:
        The grid square (zone, latitude band, column, row).
    """
    _validate_zone(point.zone)
    lat_band = resolve_latitude_band(point.northing, point.has_false_northing)
    if not math.isfinite(point.easting):
        Logger.log("ERROR", f"Easting out of range: {point.easting}")
        raise MgrsOutOfRangeError(f"Easting out of range: {point.easting}")

    # The first column actually starts (has its western edge) at 100 km easting, hence the -1
    easting_index = math.floor(point.easting / M_PER_MGRS_SQUARE) - 1
    column_id = _column_start(point.zone) + easting_index
    if not 0 <= column_id < NUMBER_MGRS_COLUMN_LETTERS:
        raise MgrsOutOfRangeError(f"Column id out of range: {column_id} (easting {point.easting})")

    northing_index = math.floor(point.true_northing / M_PER_MGRS_SQUARE)
    row_id = euclidean_mod(northing_index + _row_start(point.zone), NUMBER_MGRS_ROW_LETTERS)
    if not 0 <= row_id < NUMBER_MGRS_COLUMN_LETTERS:
        raise MgrsOutOfRangeError(f"Row id out of range: {row_id}")

    return GridSquare(
        utm_zone=point.zone,
        lat_band=lat_band,
        column=index_to_letter(column_id),
        row=index_to_letter(row_id),
    )


def resolve_row_cycles(nearest_northing_index: int, point_ind: int) -> int:
    """
    Count the whole 2000 km row cycles between the equator and the datum square below a row.

    The "datum square" is the closest square at or south of the row whose letter starts a cycle
    ('A' in odd zones, 'F' in even zones). The band only tells us which square its southern edge
    crosses (nearest_northing_index), so the row may sit in the cycle containing that crossing,
    the one above it, or, for rows just south of the band, the one below.

    :param nearest_northing_index: Index of the 100 km square through which the band's southern edge passes.
                                   Negative in the southern hemisphere.
    :param point_ind: Squares between the datum square and the row, in [0, 20).
    :return: The number of cycles, negative in the southern hemisphere.
    """
    # squares between the band crossing and the cycle start at or south of it
    lat_crossing_ind = euclidean_mod(nearest_northing_index, NUMBER_MGRS_ROW_LETTERS)
    lat_crossing_offset_ind = euclidean_mod(
        nearest_northing_index + LAT_CROSSING_OFFSET, NUMBER_MGRS_ROW_LETTERS
    )
    # squares moving north from the row to the crossing + offset, wrapped
    lat_crossing_mid_to_point = euclidean_mod(
        lat_crossing_offset_ind - point_ind, NUMBER_MGRS_ROW_LETTERS
    )

    is_south_of_crossing = (
        NUMBER_MGRS_ROW_LETTERS - lat_crossing_mid_to_point > lat_crossing_mid_to_point
        and lat_crossing_mid_to_point > LAT_CROSSING_OFFSET
    )
    if is_south_of_crossing:
        # a datum square between the crossing and the row means one more cycle down
        offset_cycles_south = 0 if lat_crossing_ind > point_ind else -1
        row_cycles = nearest_northing_index // NUMBER_MGRS_ROW_LETTERS + offset_cycles_south
    elif lat_crossing_ind > point_ind:
        # datum square lies north of the crossing
        row_cycles = ceil_div(nearest_northing_index, NUMBER_MGRS_ROW_LETTERS)
    else:
        row_cycles = nearest_northing_index // NUMBER_MGRS_ROW_LETTERS

    Logger.log(
        "DEBUG",
        f"row cycles {row_cycles}: crossing {nearest_northing_index}, point {point_ind}, "
        f"{'south' if is_south_of_crossing else 'north'} of crossing",
    )
    return row_cycles


def square_origin(square: GridSquare) -> Tuple[float, float]:
    """
    Compute the UTM easting and northing of the southwest corner of a grid square.

    Squares outside their natural zone or band are supported: a column west of the zone gives a
    negative easting, one east of it an easting past the zone's edge, and a row just outside
    the band resolves to the nearest matching row.

    Args:
        square: The grid square.

    Returns:
        (easting, northing) in meters. The northing includes the false northing for bands south of 'N'.
    """
    validate_square(square)

    easting_index = letter_to_index(square.column) - _column_start(square.utm_zone)
    # Columns more than half a cycle ahead belong to the previous repeat of the cycle, i.e. west of the zone
    easting_offset = -NUMBER_MGRS_COLUMN_LETTERS if easting_index > NUMBER_MGRS_COLUMN_LETTERS // 2 else 0
    # Note: index starts at 100 km (index + 1)
    easting_origin = (easting_index + 1 + easting_offset) * M_PER_MGRS_SQUARE

    nearest_northing_index = math.floor(band_southern_edge(square.lat_band) / M_PER_MGRS_SQUARE)
    point_ind = euclidean_mod(
        letter_to_index(square.row) - _row_start(square.utm_zone), NUMBER_MGRS_ROW_LETTERS
    )
    row_cycles = resolve_row_cycles(nearest_northing_index, point_ind)
    northing_index = point_ind + row_cycles * NUMBER_MGRS_ROW_LETTERS

    false_northing = FALSE_NORTHING if square.lat_band < "N" else 0
    northing_origin = northing_index * M_PER_MGRS_SQUARE + false_northing

    return float(easting_origin), float(northing_origin)


def snap_to_square_origin(easting: float, northing: float) -> Tuple[float, float]:
    """
    Floor a UTM coordinate to the 100 km multiples of the square it lies in.
    """
    return (
        math.floor(easting / M_PER_MGRS_SQUARE) * float(M_PER_MGRS_SQUARE),
        math.floor(northing / M_PER_MGRS_SQUARE) * float(M_PER_MGRS_SQUARE),
    )

"""
UTM <-> MGRS conversion.

An MGRS coordinate is a 100 km grid square plus the easting/northing offset from the
square's southwest corner, e.g. "31N EA 66021 00000".
"""

import math
import re

import numpy as np

from mgrs_grid.coordinates import GridSquare, Hemisphere, MgrsCoordinate, UtmPoint
from mgrs_grid.errors import InvalidSquareError, MgrsOutOfRangeError
from mgrs_grid.grid_letters import FALSE_NORTHING, M_PER_MGRS_SQUARE
from mgrs_grid.squares import identify_square, square_origin, validate_square
from utils.config_utils import get_offset_tolerance
from utils.logger import Logger

MAX_PRECISION = 5

# zone, band, column, row, then either one run of digits or two whitespace-separated groups
MGRS_PATTERN = re.compile(r"^\s*(\d{1,2})([A-Z])\s*([A-Z])([A-Z])\s*(\d*)(?:\s+(\d+))?\s*$")


def _true_origin_northing(square: GridSquare, origin_northing: float) -> float:
    return origin_northing - FALSE_NORTHING if square.hemisphere == Hemisphere.SOUTH else origin_northing


def _clamp_offset(value: float, tolerance: float, axis: str) -> float:
    """
    Pull an offset that floating-point error pushed just outside [0, 100000) back inside.
    """
    if 0 <= value < M_PER_MGRS_SQUARE:
        return value
    assert -tolerance <= value < M_PER_MGRS_SQUARE + tolerance, (
        f"{axis} offset {value} m lies outside its square; square identification and origin disagree"
    )
    Logger.log("WARNING", f"Clamping {axis} offset {value} m into its square")
    return min(max(value, 0.0), float(np.nextafter(M_PER_MGRS_SQUARE, 0)))


def to_mgrs(point: UtmPoint) -> MgrsCoordinate:
    """
    Convert a UTM point to an MGRS coordinate.

    Parameters:
        point: The UTM point.

    Returns:
        The containing grid square and the offset from its southwest corner, both offsets in [0, 100000).
    """
    square = identify_square(point)
    origin_easting, origin_northing = square_origin(square)

    # compare true northings so a point flagged south but lying north of the equator still lands in its square
    tolerance = get_offset_tolerance()
    easting = _clamp_offset(point.easting - origin_easting, tolerance, "easting")
    northing = _clamp_offset(
        point.true_northing - _true_origin_northing(square, origin_northing), tolerance, "northing"
    )
    return MgrsCoordinate(square=square, easting=easting, northing=northing)


def to_mgrs_in_square(point: UtmPoint, square: GridSquare) -> MgrsCoordinate:
    """
    Express a UTM point relative to a given grid square, which need not contain it.

    The offsets are not range checked, so a point can be addressed from a neighbouring square
    (e.g. across a zone boundary); they may be negative or exceed 100 km.
    """
    origin_easting, origin_northing = square_origin(square)
    return MgrsCoordinate(
        square=square,
        easting=point.easting - origin_easting,
        northing=point.true_northing - _true_origin_northing(square, origin_northing),
    )


def from_mgrs(coord: MgrsCoordinate) -> UtmPoint:
    """
    Convert an MGRS coordinate back to a UTM point.

    The hemisphere is south iff the latitude band is south of 'N'; the northing then carries the false northing.
    """
    origin_easting, origin_northing = square_origin(coord.square)
    return UtmPoint(
        easting=origin_easting + coord.easting,
        northing=origin_northing + coord.northing,
        zone=coord.square.utm_zone,
        hemisphere=coord.square.hemisphere,
    )


def format_mgrs(coord: MgrsCoordinate, precision: int = MAX_PRECISION) -> str:
    """
    Format an MGRS coordinate as text, e.g. "31NEA6602100000".

    :param coord: The coordinate.
    :param precision: Digits per axis, 0 (100 km) to 5 (1 m). Offsets are truncated, not rounded.
    :return: The MGRS string.
    """
    if not 0 <= precision <= MAX_PRECISION:
        raise ValueError(f"Precision must be between 0 and {MAX_PRECISION}, got {precision}")
    # offsets from to_mgrs_in_square may fall outside the square and have no text form
    for axis, offset in (("easting", coord.easting), ("northing", coord.northing)):
        if not 0 <= offset < M_PER_MGRS_SQUARE:
            raise MgrsOutOfRangeError(f"Cannot format {axis} offset {offset} m outside [0, {M_PER_MGRS_SQUARE})")

    scale = 10 ** (MAX_PRECISION - precision)
    digits = ""
    if precision > 0:
        easting = math.floor(coord.easting) // scale
        northing = math.floor(coord.northing) // scale
        digits = f"{easting:0{precision}d}{northing:0{precision}d}"
    return f"{coord.square}{digits}"


def parse_mgrs(text: str) -> MgrsCoordinate:
    """
    Parse MGRS text such as "31NEA6602100000" or "31N EA 66021 00000".

    The square is validated the same way square_origin validates it; lowercase letters are rejected.
    The offsets are the southwest corner of the cell at the given precision.
    """
    match = MGRS_PATTERN.match(text or "")
    if match is None:
        raise InvalidSquareError(f"Malformed MGRS string: {text!r}")
    zone, lat_band, column, row, easting_digits, northing_digits = match.groups()

    if northing_digits is None:
        # a single run is split in half
        if len(easting_digits) % 2 != 0:
            raise InvalidSquareError(f"MGRS string needs the same number of easting and northing digits: {text!r}")
        precision = len(easting_digits) // 2
        easting_digits, northing_digits = easting_digits[:precision], easting_digits[precision:]
    elif len(easting_digits) != len(northing_digits):
        raise InvalidSquareError(f"MGRS easting and northing groups differ in length: {text!r}")
    precision = len(easting_digits)
    if precision > MAX_PRECISION:
        raise InvalidSquareError(f"MGRS string has more than {MAX_PRECISION} digits per axis: {text!r}")

    square = GridSquare(utm_zone=int(zone), lat_band=lat_band, column=column, row=row)
    validate_square(square)

    scale = 10 ** (MAX_PRECISION - precision)
    easting = int(easting_digits) * scale if precision else 0
    northing = int(northing_digits) * scale if precision else 0
    return MgrsCoordinate(square=square, easting=float(easting), northing=float(northing))

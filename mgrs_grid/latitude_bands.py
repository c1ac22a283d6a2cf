"""
Latitude band lookup from UTM northing.

Band edges are stored as northings, which avoids a northing-to-latitude conversion at runtime.
"""

import numpy as np

from mgrs_grid.errors import InvalidSquareError, MgrsOutOfRangeError
from mgrs_grid.grid_letters import (
    BAND_LETTERS,
    BAND_NORTHING,
    BAND_X_NORTHERN_EDGE,
    FALSE_NORTHING,
)
from utils.logger import Logger


def _band_ids(northings: np.ndarray) -> np.ndarray:
    # index of the last edge <= northing, so a northing on an edge belongs to the band starting there
    return np.searchsorted(BAND_NORTHING, northings, side="right") - 1


def resolve_latitude_band(northing: float, has_false_northing: bool) -> str:
    """
    Find the latitude band a UTM northing falls into.

    :param northing: UTM northing in meters.
    :param has_false_northing: True if the northing includes the southern hemisphere false northing.
    :return: The band letter, C-X without I and O.
    """
    if has_false_northing:
        northing -= FALSE_NORTHING

    band_id = int(_band_ids(northing))
    if band_id < 0 or northing >= BAND_X_NORTHERN_EDGE or np.isnan(northing):
        Logger.log("ERROR", f"Northing {northing} m is outside the latitude bands (polar)")
        raise MgrsOutOfRangeError(f"Northing out of range (polar): {northing}")
    return BAND_LETTERS[band_id]


def resolve_latitude_bands(northings: np.ndarray, has_false_northing: bool) -> np.ndarray:
    """
    Vectorized version of resolve_latitude_band.

    Parameters:
        northings: Array of UTM northings in meters.
        has_false_northing: True if every northing includes the false northing.

    Returns:
        np.ndarray: Object array of band letters (same shape as input), None where the northing is out of range or NaN.
    """
    northings = np.asarray(northings, dtype=float)
    if has_false_northing:
        northings = northings - FALSE_NORTHING

    band_ids = _band_ids(northings)
    valid = (band_ids >= 0) & (northings < BAND_X_NORTHERN_EDGE) & ~np.isnan(northings)

    bands = np.full(northings.shape, None, dtype=object)
    bands[valid] = np.array(BAND_LETTERS, dtype=object)[band_ids[valid]]
    return bands


def band_southern_edge(lat_band: str) -> float:
    """
    Returns the northing (m, no false northing) of the southern edge of a latitude band.
    """
    if lat_band not in BAND_LETTERS:
        raise InvalidSquareError(f"Not a latitude band letter: {lat_band!r}")
    return float(BAND_NORTHING[BAND_LETTERS.index(lat_band)])

"""
Common earth utilities: reference ellipsoids and MGRS grid zone designations.
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Ellipsoid:
    """
    A reference ellipsoid.

    Attributes:
        name: Human readable name, e.g. "GRS80".
        semi_major_axis: Equatorial radius a, in meters.
        inverse_flattening: 1 / f.
    """

    name: str
    semi_major_axis: float
    inverse_flattening: float

    def __post_init__(self):
        if self.semi_major_axis <= 0:
            raise ValueError(f"Semi-major axis must be positive, got {self.semi_major_axis}")
        if self.inverse_flattening <= 1:
            raise ValueError(f"Inverse flattening must be greater than 1, got {self.inverse_flattening}")

    @property
    def flattening(self) -> float:
        return 1.0 / self.inverse_flattening

    @property
    def semi_minor_axis(self) -> float:
        return self.semi_major_axis * (1.0 - self.flattening)


GRS80 = Ellipsoid("GRS80", 6378137.0, 298.257222101)
WGS84 = Ellipsoid("WGS84", 6378137.0, 298.257223563)


# MGRS latitude bands C..X (no I, O); each spans 8 degrees except X which spans 12
MGRS_BAND_LETTERS = "CDEFGHJKLMNPQRSTUVWX"
MGRS_BAND_LATITUDE_EDGES = np.append(np.arange(-80, 80, 8), 84)

mgrs_utm_exceptions = [
    {"zone": 32, "min_lon": 3, "max_lon": 12, "bands": ["V"]},  # Norway
    {"zone": 31, "min_lon": 0, "max_lon": 9, "bands": ["X"]},  # Svalbard
    {"zone": 33, "min_lon": 9, "max_lon": 21, "bands": ["X"]},  # Svalbard
    {"zone": 35, "min_lon": 21, "max_lon": 33, "bands": ["X"]},  # Svalbard
    {"zone": 37, "min_lon": 33, "max_lon": 42, "bands": ["X"]},  # Svalbard
]


def calculate_utm_zones(latitudes: np.ndarray, longitudes: np.ndarray) -> np.ndarray:
    """
    Vectorized UTM zone numbers for the given coordinates, including the Norway and Svalbard exceptions.

    Parameters:
        latitudes (np.ndarray): Array of latitudes in degrees.
        longitudes (np.ndarray): Array of longitudes in degrees, same shape as latitudes.

    Returns:
        np.ndarray: Integer array of zones in [1, 60], same shape as the input. Entries with NaN input are 0.
    """
    latitudes = np.asarray(latitudes, dtype=float)
    longitudes = np.asarray(longitudes, dtype=float)
    assert latitudes.shape == longitudes.shape, "latitudes and longitudes must have the same shape"

    valid = ~np.isnan(latitudes) & ~np.isnan(longitudes)
    zones = np.zeros(latitudes.shape, dtype=int)
    # +180 and -180 are the same meridian, so wrap before dividing
    zones[valid] = (np.mod(longitudes[valid] + 180.0, 360.0) // 6 + 1).astype(int)

    bands = calculate_latitude_bands(latitudes)
    for exception in mgrs_utm_exceptions:
        mask = (
            valid
            & (longitudes >= exception["min_lon"])
            & (longitudes < exception["max_lon"])
            & np.isin(bands.astype(str), exception["bands"])
        )
        zones[mask] = exception["zone"]
    return zones


def calculate_latitude_bands(latitudes: np.ndarray) -> np.ndarray:
    """
    Vectorized latitude band letters. Latitudes outside [-80, 84) and NaN give None.
    """
    latitudes = np.asarray(latitudes, dtype=float)
    band_ids = np.searchsorted(MGRS_BAND_LATITUDE_EDGES, np.nan_to_num(latitudes, nan=-90.0), side="right") - 1
    valid = (band_ids >= 0) & (band_ids < len(MGRS_BAND_LETTERS)) & ~np.isnan(latitudes)

    bands = np.full(latitudes.shape, None, dtype=object)
    bands[valid] = np.array(list(MGRS_BAND_LETTERS), dtype=object)[band_ids[valid]]
    return bands


def calculate_grid_zones(latitudes: np.ndarray, longitudes: np.ndarray) -> np.ndarray:
    """
    Vectorized computation of MGRS grid zone designations (e.g. "31N") for given latitude and longitude arrays.

    Parameters:
        latitudes (np.ndarray): 1D or 2D array of latitudes in degrees.
        longitudes (np.ndarray): 1D or 2D array of longitudes in degrees.

    Returns:
        np.ndarray: Object array of grid zone designations (same shape as input), None outside UTM coverage.
    """
    bands = calculate_latitude_bands(latitudes)
    zones = calculate_utm_zones(latitudes, longitudes)

    grid_zones = np.full(bands.shape, None, dtype=object)
    for index in np.ndindex(bands.shape):
        if bands[index] is not None and zones[index] > 0:
            grid_zones[index] = f"{zones[index]}{bands[index]}"
    return grid_zones

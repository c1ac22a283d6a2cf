"""
Value types passed between the grid conversion functions.
"""

from dataclasses import dataclass
from enum import Enum

from mgrs_grid.grid_letters import FALSE_NORTHING


class Hemisphere(Enum):
    NORTH = "N"
    SOUTH = "S"


@dataclass(frozen=True)
class GridSquare:
    """
    An MGRS 100 km grid square designation, e.g. 31N EA.

    Attributes:
        utm_zone: UTM zone number in [1, 60].
        lat_band: Latitude band letter, C-X without I and O.
        column: Column letter from the 24-letter MGRS alphabet.
        row: Row letter from the 24-letter MGRS alphabet (only A-V occur in practice).
    """

    utm_zone: int
    lat_band: str
    column: str
    row: str

    def __str__(self) -> str:
        return f"{self.utm_zone}{self.lat_band}{self.column}{self.row}"

    @property
    def hemisphere(self) -> Hemisphere:
        return Hemisphere.SOUTH if self.lat_band < "N" else Hemisphere.NORTH


@dataclass(frozen=True)
class MgrsCoordinate:
    """
    A position expressed as a grid square plus the offset from the square's southwest corner.

    Attributes:
        square: The grid square containing the position.
        easting: Offset east of the square's western edge, in meters, in [0, 100000).
        northing: Offset north of the square's southern edge, in meters, in [0, 100000).
    """

    square: GridSquare
    easting: float
    northing: float


@dataclass(frozen=True)
class UtmPoint:
    """
    A UTM coordinate. The northing includes the 10,000 km false northing when the hemisphere is south.
    """

    easting: float
    northing: float
    zone: int
    hemisphere: Hemisphere = Hemisphere.NORTH

    @property
    def has_false_northing(self) -> bool:
        return self.hemisphere == Hemisphere.SOUTH

    @property
    def true_northing(self) -> float:
        """Signed distance from the equator with any false northing removed."""
        return self.northing - FALSE_NORTHING if self.has_false_northing else self.northing

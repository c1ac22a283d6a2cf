"""
Static lookup tables for the MGRS alphabet and the latitude band edges.

MGRS letters run A-Z but skip I and O, leaving 24 letters. Columns use all 24,
rows cycle over the first 20 (A-V) and latitude bands use C-X.
"""

import numpy as np

from mgrs_grid.errors import InvalidSquareError, MgrsOutOfRangeError

# Southern hemisphere gets a 10,000 km false northing offset
FALSE_NORTHING = 10_000_000

# MGRS squares are 100 km x 100 km
M_PER_MGRS_SQUARE = 100_000

# Latitude band letters start from 'C' (i.e. omit 'A' & 'B')
LAT_BAND_LETTER_OFFSET = 2

NUMBER_MGRS_COLUMN_LETTERS = 24
NUMBER_MGRS_ROW_LETTERS = 20

MGRS_LETTERS = (
    "A", "B", "C", "D", "E", "F", "G", "H", "J", "K", "L", "M",
    "N", "P", "Q", "R", "S", "T", "U", "V", "W", "X", "Y", "Z",
)  # fmt: skip

# Keyed by alphabet position (0 = A .. 25 = Z); -1 marks I and O
MGRS_LETTER_ID = (
    0, 1, 2, 3, 4, 5, 6, 7, -1, 8, 9, 10, 11, 12, -1, 13, 14, 15, 16, 17, 18, 19, 20, 21, 22, 23,
)  # fmt: skip

# Northing (m) of the southern edge of each latitude band C..X, without false northing, so the array is sorted.
# Polar regions are not included; they don't use UTM northing.
BAND_NORTHING = np.array(
    [
        -8883084.95594830438,  # -80 deg (C)
        -7991508.54271004162,
        -7100467.04938164819,
        -6210141.32687210384,
        -5320655.78919156827,
        -4432069.0568985166,
        -3544369.9095386248,
        -2657478.70944542065,
        -1771254.01828129962,
        -885503.759297154844,
        0.0,
        885503.759297154145,
        1771254.018281299155,
        2657478.709445421118,
        3544369.909538624808,
        4432069.056898516603,
        5320655.78919156827,
        6210141.326872103848,
        7100467.04938164819,
        7991508.542710041627,  # 72 deg (X)
    ]
)
BAND_NORTHING.setflags(write=False)

# 84 deg N on the central meridian, the northern limit of band X
BAND_X_NORTHERN_EDGE = 9328094.0


def letter_to_index(letter: str) -> int:
    """
    Convert an MGRS letter to its index in [0, 23].

    :param letter: A single uppercase letter, not I or O.
    :return: The letter's position in the 24-letter MGRS alphabet.
    """
    if not isinstance(letter, str) or len(letter) != 1 or not ("A" <= letter <= "Z"):
        raise InvalidSquareError(f"Not an uppercase MGRS letter: {letter!r}")
    letter_id = MGRS_LETTER_ID[ord(letter) - ord("A")]
    if letter_id < 0:
        raise InvalidSquareError(f"Letters I and O are not used by MGRS: {letter!r}")
    return letter_id


def index_to_letter(index: int) -> str:
    """
    Convert an index in [0, 23] to its MGRS letter.
    """
    if not 0 <= index < NUMBER_MGRS_COLUMN_LETTERS:
        raise MgrsOutOfRangeError(f"MGRS letter index out of range: {index}")
    return MGRS_LETTERS[index]


BAND_LETTERS = tuple(index_to_letter(i + LAT_BAND_LETTER_OFFSET) for i in range(len(BAND_NORTHING)))

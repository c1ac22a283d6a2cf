"""
Error kinds raised by the MGRS grid conversions.
"""


class MgrsOutOfRangeError(ValueError):
    """
    A northing lies outside the latitude band table (polar regions), or a derived column/row index is outside [0, 23].
    """


class InvalidSquareError(ValueError):
    """
    A grid square designation is malformed: zone outside [1, 60], or a letter that is lowercase or not in the MGRS alphabet.
    """

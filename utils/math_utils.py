"""
Integer helpers for cyclic grid indexing.
"""


def euclidean_mod(a: int, b: int) -> int:
    """
    Modulo that is never negative, for cyclic indices that run south of the equator.

    Args:
        a: The dividend, may be negative.
        b: The divisor, must be positive.

    Returns:
        int: The remainder in [0, b).
    """
    assert b > 0, "divisor must be positive"
    # Python's % floors, so a positive divisor already gives a non-negative result
    return a % b


def ceil_div(a: int, b: int) -> int:
    """
    Integer division rounding towards positive infinity.
    """
    assert b > 0, "divisor must be positive"
    return -(-a // b)

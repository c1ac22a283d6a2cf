"""
Constants in the Karney-Krueger equations for the ellipsoidal transverse Mercator projection.

Reference: R. E. Deakin, "Transverse Mercator projection Karney-Krueger equations", 2014.
"""

from dataclasses import dataclass
from functools import lru_cache

import numpy as np

from utils.config_utils import get_ellipsoid_config
from utils.logger import Logger


@dataclass(frozen=True, eq=False)
class EllipsoidProjectionConstants:
    """
    Series constants for one ellipsoid.

    Attributes:
        semi_major_axis: a, in meters.
        flattening: f.
        third_flattening: n = f / (2 - f).
        rectifying_radius: A, the radius of the sphere with the same meridian length as the ellipsoid.
        alpha: Read-only array of the coefficients alpha_1..alpha_7, stored 0-indexed.
    """

    semi_major_axis: float
    flattening: float
    third_flattening: float
    rectifying_radius: float
    alpha: np.ndarray


@lru_cache(maxsize=None)
def derive_projection_constants(a: float, f: float) -> EllipsoidProjectionConstants:
    """
    Evaluate the rectifying radius and alpha coefficients (Horner form, n up to n^8).

    :param a: Semi-major axis in meters.
    :param f: Flattening.
    :return: The constants, cached per (a, f).
    """
    if a <= 0:
        raise ValueError(f"Semi-major axis must be positive, got {a}")
    if not 0 <= f < 1:
        raise ValueError(f"Flattening must be in [0, 1), got {f}")

    n = f / (2 - f)
    n2 = n * n
    n3 = n2 * n
    n4 = n2 * n2
    n5 = n4 * n
    n6 = n4 * n2
    n7 = n6 * n
    n8 = n4 * n4

    # rectifying radius A
    rectifying_radius = a / (1.0 + n) * (1 + n2 / 4 + n4 / 64 + n6 / 256 + n8 * 25.0 / 16384)

    alpha = np.array(
        [
            (
                n
                * (
                    n
                    * (
                        n
                        * (
                            n
                            * (
                                n
                                * (n * ((37884525 - 75900428 * n) * n + 42422016) - 89611200)
                                + 46287360
                            )
                            + 63504000
                        )
                        - 135475200
                    )
                    + 101606400
                )
            )
            / 203212800,
            (
                n2
                * (
                    n
                    * (
                        n
                        * (
                            n * (n * (n * (148003883 * n + 83274912) - 178508970) + 77690880)
                            + 67374720
                        )
                        - 104509440
                    )
                    + 47174400
                )
            )
            / 174182400,
            (
                n3
                * (
                    n
                    * (n * (n * (n * (318729724 * n - 738126169) + 294981280) + 178924680) - 234938880)
                    + 81164160
                )
            )
            / 319334400,
            (
                n4
                * (n * (n * ((14967552000 - 40176129013 * n) * n + 6971354016) - 8165836800) + 2355138720)
            )
            / 7664025600,
            (n5 * (n * (n * (10421654396 * n + 3997835751) - 4266773472) + 1072709352)) / 2490808320,
            (n6 * (n * (175214326799 * n - 171950693600) + 38652967262)) / 58118860800,
            (13700311101 - 67039739596 * n) * n7 / 12454041600,
        ],
        dtype=np.float64,
    )
    alpha.setflags(write=False)

    Logger.log("DEBUG", f"Derived Karney-Krueger constants for a={a}, f={f}: A={rectifying_radius}")
    return EllipsoidProjectionConstants(
        semi_major_axis=a,
        flattening=f,
        third_flattening=n,
        rectifying_radius=rectifying_radius,
        alpha=alpha,
    )


def default_projection_constants() -> EllipsoidProjectionConstants:
    """
    Constants for the ellipsoid configured in config.yaml (GRS80 by default).
    """
    ellipsoid = get_ellipsoid_config()
    return derive_projection_constants(ellipsoid.semi_major_axis, ellipsoid.flattening)

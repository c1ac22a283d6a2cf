from fractions import Fraction

import numpy as np
import pytest

from projection.karney_krueger import default_projection_constants, derive_projection_constants

GRS80_A = 6378137.0
GRS80_F = 1 / 298.257222101

# Krueger series for alpha_1..alpha_7 as exact rationals, coefficients of n^1..n^8
ALPHA_SERIES = [
    [Fraction(1, 2), Fraction(-2, 3), Fraction(5, 16), Fraction(41, 180), Fraction(-127, 288),
     Fraction(7891, 37800), Fraction(72161, 387072), Fraction(-18975107, 50803200)],
    [0, Fraction(13, 48), Fraction(-3, 5), Fraction(557, 1440), Fraction(281, 630),
     Fraction(-1983433, 1935360), Fraction(13769, 28800), Fraction(148003883, 174182400)],
    [0, 0, Fraction(61, 240), Fraction(-103, 140), Fraction(15061, 26880), Fraction(167603, 181440),
     Fraction(-67102379, 29030400), Fraction(79682431, 79833600)],
    [0, 0, 0, Fraction(49561, 161280), Fraction(-179, 168), Fraction(6601661, 7257600),
     Fraction(97445, 49896), Fraction(-40176129013, 7664025600)],
    [0, 0, 0, 0, Fraction(34729, 80640), Fraction(-3418889, 1995840), Fraction(14644087, 9123840),
     Fraction(2605413599, 622702080)],
    [0, 0, 0, 0, 0, Fraction(212378941, 319334400), Fraction(-30705481, 10378368),
     Fraction(175214326799, 58118860800)],
    [0, 0, 0, 0, 0, 0, Fraction(1522256789, 1383782400), Fraction(-16759934899, 3113510400)],
]


def exact_constants(a, n):
    """Rectifying radius and alphas evaluated in exact arithmetic, rounded once to float."""
    n = Fraction(n)
    radius = Fraction(a) / (1 + n) * (1 + n**2 / 4 + n**4 / 64 + n**6 / 256 + 25 * n**8 / 16384)
    alpha = [sum(c * n ** (k + 1) for k, c in enumerate(series)) for series in ALPHA_SERIES]
    return float(radius), np.array([float(value) for value in alpha])


def test_grs80_constants():
    constants = derive_projection_constants(GRS80_A, GRS80_F)

    # n = 1 / 595.514444202
    assert constants.third_flattening == 1.6792203946287448e-3
    assert constants.third_flattening == GRS80_F / (2 - GRS80_F)
    assert constants.alpha.shape == (7,)

    # the Horner evaluation stays within a few ulp of the exact series
    radius, alpha = exact_constants(GRS80_A, constants.third_flattening)
    assert constants.rectifying_radius == pytest.approx(radius, rel=1e-15, abs=0)
    np.testing.assert_allclose(constants.alpha, alpha, rtol=2e-15, atol=0)

    # published GRS80 values
    assert constants.rectifying_radius == pytest.approx(6367449.14577, abs=1e-3)
    np.testing.assert_allclose(
        constants.alpha[:4],
        [8.377318247344e-4, 7.608527788826e-7, 1.197645503242e-9, 2.429170607201e-12],
        rtol=1e-6,
    )
    # higher order terms keep shrinking
    assert np.all(np.abs(np.diff(np.log10(np.abs(constants.alpha)))) > 1.5)


def test_constants_are_deterministic():
    cached = derive_projection_constants(GRS80_A, GRS80_F)
    assert derive_projection_constants(GRS80_A, GRS80_F) is cached

    recomputed = derive_projection_constants.__wrapped__(GRS80_A, GRS80_F)
    assert recomputed.rectifying_radius == cached.rectifying_radius
    assert np.array_equal(recomputed.alpha, cached.alpha)


def test_constants_are_read_only():
    constants = derive_projection_constants(GRS80_A, GRS80_F)
    with pytest.raises(ValueError):
        constants.alpha[0] = 0.0
    with pytest.raises(AttributeError):
        constants.rectifying_radius = 0.0


def test_sphere():
    constants = derive_projection_constants(1000.0, 0.0)
    assert constants.rectifying_radius == 1000.0
    assert np.all(constants.alpha == 0.0)


@pytest.mark.parametrize("a, f", [(0.0, GRS80_F), (-1.0, GRS80_F), (GRS80_A, -0.1), (GRS80_A, 1.0)])
def test_invalid_ellipsoid(a, f):
    with pytest.raises(ValueError):
        derive_projection_constants(a, f)


def test_default_constants_use_configured_grs80():
    assert default_projection_constants() is derive_projection_constants(GRS80_A, GRS80_F)

"""Approximate sine and cosine for animation.

The parabolic approximation ``sin(x) ~ x*(pi-|x|)*4/pi**2`` is exact at
0, +/-pi/2 and +/-pi and stays within about 0.06 of the true value
elsewhere.  That is fine for spinning a visual object; it must not be
used to construct geometry.

The ``_unchecked`` variants skip range reduction and expect an angle
already in ``[-pi, pi]``.
"""

from math import pi

PI2 = 2.0 * pi
HALF_PI = 0.5 * pi
_K = 4.0 / (pi * pi)


def normalize_angle(x):
    """wrap ``x`` into ``[-pi, pi)``"""
    return (x + pi) % PI2 - pi


def fast_sin_unchecked(x):
    return x * (pi - abs(x)) * _K


def fast_cos_unchecked(x):
    x += HALF_PI
    if x > pi:
        x -= PI2
    return x * (pi - abs(x)) * _K


def fast_sin(x):
    x = (x + pi) % PI2 - pi
    return x * (pi - abs(x)) * _K


def fast_cos(x):
    x = (x + HALF_PI + pi) % PI2 - pi
    return x * (pi - abs(x)) * _K

"""
Angle wrapping utilities.

Longitudes are carried in degrees throughout geoframes and canonicalized
into (-180, 180]; projection and rotation code works in radians and wraps
into [-π, π].
"""

import numpy as np


def wrap_angle(angle: float) -> float:
    """
    Wrap an angle in radians to [-π, π].

    Args:
        angle: Angle in radians (any value).

    Returns:
        Equivalent angle in [-π, π].

    Example:
        >>> wrap_angle(3.5 * np.pi)
        -1.5707963267948966
    """
    return float(np.arctan2(np.sin(angle), np.cos(angle)))


def wrap_longitude(lon: float) -> float:
    """
    Canonicalize a longitude in degrees into (-180, 180].

    Values already inside the interval are returned untouched so that no
    rounding is introduced for ordinary inputs.

    Args:
        lon: Longitude in degrees (any finite value).

    Returns:
        Equivalent longitude in (-180, 180].

    Example:
        >>> wrap_longitude(190.0)
        -170.0
        >>> wrap_longitude(-180.0)
        180.0
    """
    if -180.0 < lon <= 180.0:
        return float(lon)
    wrapped = float(np.fmod(lon + 180.0, 360.0))
    if wrapped <= 0.0:
        wrapped += 360.0
    return wrapped - 180.0


def longitude_difference(lon1: float, lon2: float) -> float:
    """Shortest signed difference lon1 - lon2 in degrees, in (-180, 180]."""
    return wrap_longitude(lon1 - lon2)

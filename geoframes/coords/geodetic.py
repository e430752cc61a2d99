"""Conversions between geodetic (LLA) and ECEF coordinates.

LLA -> ECEF is closed form. ECEF -> LLA recovers longitude exactly with
atan2 and refines latitude with Newton steps from Bowring's initial
estimate. Convergence is quadratic, so a few steps reach machine precision
anywhere outside the evolute of the meridian ellipse (~42 km from the center).

Reference ellipsoid quantities:
- Prime vertical radius: N = a / sqrt(1 - e² sin²φ)
- Semi-minor axis: b = a (1 - f)
"""

import numpy as np

from geoframes.config import DEFAULT_SOLVER_CONFIG, SolverConfig
from geoframes.coords.datums import DatumLike, resolve_datum
from geoframes.coords.ellipsoids import Ellipsoid
from geoframes.coords.types import ECEF, LLA
from geoframes.errors import NonConvergenceError


def lla_to_ecef_ellipsoid(lla: LLA, ellipsoid: Ellipsoid) -> ECEF:
    """Convert geodetic coordinates to ECEF on a given ellipsoid.

    Args:
        lla: Geodetic point (degrees, meters).
        ellipsoid: Reference ellipsoid.

    Returns:
        ECEF coordinates in meters.
    """
    lat = np.deg2rad(lla.lat)
    lon = np.deg2rad(lla.lon)
    sin_lat = np.sin(lat)
    cos_lat = np.cos(lat)

    N = ellipsoid.a / np.sqrt(1.0 - ellipsoid.e2 * sin_lat**2)

    x = (N + lla.alt) * cos_lat * np.cos(lon)
    y = (N + lla.alt) * cos_lat * np.sin(lon)
    z = (N * (1.0 - ellipsoid.e2) + lla.alt) * sin_lat

    return ECEF(float(x), float(y), float(z))


def ecef_to_lla_ellipsoid(
    ecef: ECEF,
    ellipsoid: Ellipsoid,
    config: SolverConfig = DEFAULT_SOLVER_CONFIG,
) -> LLA:
    """Convert ECEF coordinates to geodetic coordinates on a given ellipsoid.

    Args:
        ecef: ECEF point in meters.
        ellipsoid: Reference ellipsoid.
        config: Iteration tolerance/cap and polar-axis threshold.

    Returns:
        Geodetic point. On the polar axis latitude is ±90° by the sign of
        z (z == 0 counts as north) and longitude is 0 by convention.

    Raises:
        NonConvergenceError: If latitude has not settled after
            ``config.max_iterations`` refinements.
    """
    x, y, z = ecef.x, ecef.y, ecef.z
    a = ellipsoid.a
    b = ellipsoid.b
    e2 = ellipsoid.e2

    p = np.hypot(x, y)

    if p < config.polar_threshold:
        lat = 90.0 if z >= 0.0 else -90.0
        return LLA(lat, 0.0, abs(z) - b)

    lon = np.arctan2(y, x)

    # Bowring's estimate via the parametric latitude
    beta = np.arctan2(a * z, b * p)
    lat = np.arctan2(
        z + ellipsoid.ep2 * b * np.sin(beta) ** 3,
        p - e2 * a * np.cos(beta) ** 3,
    )

    # Newton on f(φ) = p sinφ - z cosφ - e² a sinφ cosφ / W, W² = 1 - e² sin²φ
    residual = np.inf
    for _ in range(config.max_iterations):
        s, c = np.sin(lat), np.cos(lat)
        W2 = 1.0 - e2 * s * s
        W = np.sqrt(W2)
        f = p * s - z * c - e2 * a * s * c / W
        df = p * c + z * s - e2 * a * ((c * c - s * s) * W2 + e2 * s * s * c * c) / (W2 * W)
        step = f / df
        lat = float(np.clip(lat - step, -np.pi / 2.0, np.pi / 2.0))
        residual = abs(step)
        if residual < config.tolerance:
            break
    else:
        raise NonConvergenceError(
            "ECEF to LLA latitude iteration", config.max_iterations, float(residual)
        )

    # Height form that stays well conditioned near the poles
    sin_lat = np.sin(lat)
    cos_lat = np.cos(lat)
    N = a / np.sqrt(1.0 - e2 * sin_lat**2)
    height = p * cos_lat + z * sin_lat - a * a / N

    return LLA(float(np.rad2deg(lat)), float(np.rad2deg(lon)), float(height))


def lla_to_ecef(lla: LLA, datum: DatumLike) -> ECEF:
    """Convert geodetic coordinates to ECEF for a datum.

    Args:
        lla: Geodetic point.
        datum: Datum, registered datum name, or ellipsoid.

    Returns:
        ECEF coordinates in meters.

    Example:
        >>> poly = LLA(45.50439, -73.61288, 159.0)
        >>> lla_to_ecef(poly, "wgs84")  # ~ (1.26333e6, -4.29599e6, 4.52692e6)
    """
    return lla_to_ecef_ellipsoid(lla, resolve_datum(datum).ellipsoid)


def ecef_to_lla(
    ecef: ECEF,
    datum: DatumLike,
    config: SolverConfig = DEFAULT_SOLVER_CONFIG,
) -> LLA:
    """Convert ECEF coordinates to geodetic coordinates for a datum.

    Raises:
        NonConvergenceError: If the latitude iteration does not converge.
    """
    return ecef_to_lla_ellipsoid(ecef, resolve_datum(datum).ellipsoid, config)


def to_ecef(lla: LLA, datum: DatumLike) -> ECEF:
    """ECEF point for an LLA point on a datum (point constructor)."""
    return lla_to_ecef(lla, datum)


def to_lla(
    ecef: ECEF,
    datum: DatumLike,
    config: SolverConfig = DEFAULT_SOLVER_CONFIG,
) -> LLA:
    """LLA point for an ECEF point on a datum (point constructor)."""
    return ecef_to_lla(ecef, datum, config)

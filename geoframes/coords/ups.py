"""Universal Polar Stereographic projection for the polar caps.

UPS covers the regions UTM leaves out: north of 84°N and south of 80°S
(each cap overlaps UTM by half a degree). It is the ellipsoidal polar
stereographic projection with k0 = 0.994 and a 2000 km false easting and
northing (Snyder, "Map Projections: A Working Manual", §21):

    t = tan(π/4 - |φ|/2) / ((1 - e sin|φ|) / (1 + e sin|φ|))^(e/2)
    ρ = 2 a k0 t / sqrt((1 + e)^(1 + e) (1 - e)^(1 - e))

    north: E = E0 + ρ sin λ,  N = N0 - ρ cos λ
    south: E = E0 + ρ sin λ,  N = N0 + ρ cos λ

The inverse iterates φ = π/2 - 2 atan(t ((1 - e sin φ)/(1 + e sin φ))^(e/2)).
"""

import numpy as np

from geoframes.config import (
    DEFAULT_SOLVER_CONFIG,
    UPS_FALSE_EASTING,
    UPS_FALSE_NORTHING,
    UPS_NORTH_MIN_LAT,
    UPS_SCALE_FACTOR,
    UPS_SOUTH_MAX_LAT,
    SolverConfig,
)
from geoframes.coords.datums import DatumLike, resolve_datum
from geoframes.coords.ellipsoids import Ellipsoid
from geoframes.coords.types import LLA, UPS, Hemisphere
from geoframes.errors import NonConvergenceError, OutOfUPSRangeError


def _rho_factor(ellipsoid: Ellipsoid) -> float:
    e = ellipsoid.e
    return 2.0 * ellipsoid.a * UPS_SCALE_FACTOR / np.sqrt(
        (1.0 + e) ** (1.0 + e) * (1.0 - e) ** (1.0 - e)
    )


def lla_to_ups(lla: LLA, datum: DatumLike) -> UPS:
    """Project a polar point with UPS.

    Raises:
        OutOfUPSRangeError: If the point is not within a polar cap
            (lat >= 83.5 or lat <= -79.5).
    """
    if UPS_SOUTH_MAX_LAT < lla.lat < UPS_NORTH_MIN_LAT:
        raise OutOfUPSRangeError(lla.lat, UPS_SOUTH_MAX_LAT, UPS_NORTH_MIN_LAT)

    ellipsoid = resolve_datum(datum).ellipsoid
    e = ellipsoid.e
    hemisphere = Hemisphere.of(lla.lat)

    phi = np.deg2rad(abs(lla.lat))
    lam = np.deg2rad(lla.lon)
    sin_phi = np.sin(phi)

    t = np.tan(np.pi / 4.0 - phi / 2.0) / (
        ((1.0 - e * sin_phi) / (1.0 + e * sin_phi)) ** (e / 2.0)
    )
    rho = _rho_factor(ellipsoid) * t

    easting = UPS_FALSE_EASTING + rho * np.sin(lam)
    if hemisphere.is_north:
        northing = UPS_FALSE_NORTHING - rho * np.cos(lam)
    else:
        northing = UPS_FALSE_NORTHING + rho * np.cos(lam)

    return UPS(float(easting), float(northing), lla.alt, hemisphere)


def ups_to_lla(
    ups: UPS,
    datum: DatumLike,
    config: SolverConfig = DEFAULT_SOLVER_CONFIG,
) -> LLA:
    """Recover geodetic coordinates from UPS coordinates.

    Raises:
        NonConvergenceError: If the latitude iteration does not settle.
    """
    ellipsoid = resolve_datum(datum).ellipsoid
    e = ellipsoid.e

    dx = ups.easting - UPS_FALSE_EASTING
    dy = ups.northing - UPS_FALSE_NORTHING
    rho = np.hypot(dx, dy)
    t = rho / _rho_factor(ellipsoid)

    phi = np.pi / 2.0 - 2.0 * np.arctan(t)
    residual = np.inf
    for _ in range(config.max_iterations):
        sin_phi = np.sin(phi)
        phi_new = np.pi / 2.0 - 2.0 * np.arctan(
            t * ((1.0 - e * sin_phi) / (1.0 + e * sin_phi)) ** (e / 2.0)
        )
        residual = abs(phi_new - phi)
        phi = phi_new
        if residual < config.tolerance:
            break
    else:
        raise NonConvergenceError(
            "UPS latitude iteration", config.max_iterations, float(residual)
        )

    if ups.is_north:
        lat = np.rad2deg(phi)
        lon = np.rad2deg(np.arctan2(dx, -dy)) if rho > 0.0 else 0.0
    else:
        lat = -np.rad2deg(phi)
        lon = np.rad2deg(np.arctan2(dx, dy)) if rho > 0.0 else 0.0

    return LLA(float(lat), float(lon), ups.alt)


def to_ups(lla: LLA, datum: DatumLike) -> UPS:
    """UPS coordinates of a polar point (point constructor)."""
    return lla_to_ups(lla, datum)

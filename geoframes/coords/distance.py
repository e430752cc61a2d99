"""Distances between geodetic points.

Three measures are provided:

- chord_distance: straight line through ECEF space. Rotations preserve
  length, so this equals the norm of the ENU offset between the points.
- distance: length along the ellipsoid surface between the points'
  surface projections, combined with their altitude difference. The
  surface arc is recovered from the surface chord c with the curvature
  correction arc = 2R asin(c / 2R), R being the Gaussian mean radius
  sqrt(M N) at the mean latitude. The error of this closed form is far
  below a millimeter for distances of tens of kilometers.
- geodesic_distance: Vincenty's iterative inverse solution for the
  geodesic on the ellipsoid.

curvature_drop isolates how far a point sits below another point's
tangent plane purely because the Earth is curved; for nearby points it
is the difference |ENU.u| - |Δalt|.
"""

import numpy as np

from geoframes.config import GEODESIC_SOLVER_CONFIG, SolverConfig
from geoframes.coords.datums import DatumLike, resolve_datum
from geoframes.coords.geodetic import lla_to_ecef
from geoframes.coords.local_frames import to_enu
from geoframes.coords.types import LLA
from geoframes.errors import NonConvergenceError
from geoframes.utils.angles import longitude_difference


def chord_distance(a: LLA, b: LLA, datum: DatumLike = "wgs84") -> float:
    """Straight-line ECEF distance between two points, in meters."""
    diff = lla_to_ecef(a, datum).to_array() - lla_to_ecef(b, datum).to_array()
    return float(np.linalg.norm(diff))


def mean_radius(lat: float, datum: DatumLike = "wgs84") -> float:
    """Gaussian mean radius of curvature sqrt(M N) at a latitude in degrees."""
    ellipsoid = resolve_datum(datum).ellipsoid
    phi = np.deg2rad(lat)
    return float(np.sqrt(ellipsoid.meridional_radius(phi) * ellipsoid.prime_vertical_radius(phi)))


def surface_arc(a: LLA, b: LLA, datum: DatumLike = "wgs84") -> float:
    """Arc length between the surface projections of two points, in meters."""
    chord = chord_distance(a.with_alt(0.0), b.with_alt(0.0), datum)
    R = mean_radius(0.5 * (a.lat + b.lat), datum)
    return float(2.0 * R * np.arcsin(min(1.0, chord / (2.0 * R))))


def distance(a: LLA, b: LLA, datum: DatumLike = "wgs84") -> float:
    """Surface distance between two points, including their altitude difference.

    Args:
        a: First point.
        b: Second point.
        datum: Datum both points refer to.

    Returns:
        sqrt(arc² + Δalt²) in meters. Symmetric in its arguments and zero
        only when both points coincide.

    Example:
        >>> poly = LLA(45.50439, -73.61288, 159.0)
        >>> mcgill = LLA(45.5047847, -73.5771511, 47.9)
        >>> distance(poly, mcgill)  # ~ 2795 m
    """
    arc = surface_arc(a, b, datum)
    return float(np.hypot(arc, b.alt - a.alt))


def curvature_drop(origin: LLA, target: LLA, datum: DatumLike = "wgs84") -> float:
    """Depth of ``target`` below the tangent plane at ``origin`` due to curvature.

    Both points are taken on the ellipsoid surface, so altitude plays no
    part. For points a few kilometers apart this is close to d² / 2R.

    Returns:
        Drop in meters (positive when the target lies below the plane).
    """
    enu = to_enu(target.with_alt(0.0), origin.with_alt(0.0), datum)
    return -enu.u


def geodesic_distance(
    a: LLA,
    b: LLA,
    datum: DatumLike = "wgs84",
    config: SolverConfig = GEODESIC_SOLVER_CONFIG,
) -> float:
    """Length of the geodesic between the surface projections of two points.

    Vincenty's inverse formula (Survey Review XXIII, 1975). Altitudes are
    ignored.

    Raises:
        NonConvergenceError: For nearly antipodal points, where the
            longitude iteration fails to settle.

    Example:
        >>> flinders = LLA(-37.95103342, 144.42486789)
        >>> buninyong = LLA(-37.65282114, 143.92649554)
        >>> geodesic_distance(flinders, buninyong)  # ~ 54972.271 m
    """
    ellipsoid = resolve_datum(datum).ellipsoid
    f = ellipsoid.f
    a_axis = ellipsoid.a
    b_axis = ellipsoid.b

    L = np.deg2rad(longitude_difference(b.lon, a.lon))
    U1 = np.arctan((1.0 - f) * np.tan(np.deg2rad(a.lat)))
    U2 = np.arctan((1.0 - f) * np.tan(np.deg2rad(b.lat)))
    sin_U1, cos_U1 = np.sin(U1), np.cos(U1)
    sin_U2, cos_U2 = np.sin(U2), np.cos(U2)

    lam = L
    residual = np.inf
    for _ in range(config.max_iterations):
        sin_lam, cos_lam = np.sin(lam), np.cos(lam)
        sin_sigma = np.hypot(
            cos_U2 * sin_lam, cos_U1 * sin_U2 - sin_U1 * cos_U2 * cos_lam
        )
        if sin_sigma == 0.0:
            return 0.0
        cos_sigma = sin_U1 * sin_U2 + cos_U1 * cos_U2 * cos_lam
        sigma = np.arctan2(sin_sigma, cos_sigma)
        sin_alpha = cos_U1 * cos_U2 * sin_lam / sin_sigma
        cos2_alpha = 1.0 - sin_alpha**2
        # Equatorial lines have cos²α = 0
        cos_2sm = cos_sigma - 2.0 * sin_U1 * sin_U2 / cos2_alpha if cos2_alpha != 0.0 else 0.0
        C = f / 16.0 * cos2_alpha * (4.0 + f * (4.0 - 3.0 * cos2_alpha))
        lam_new = L + (1.0 - C) * f * sin_alpha * (
            sigma + C * sin_sigma * (cos_2sm + C * cos_sigma * (-1.0 + 2.0 * cos_2sm**2))
        )
        residual = abs(lam_new - lam)
        lam = lam_new
        if residual < config.tolerance:
            break
    else:
        raise NonConvergenceError(
            "Vincenty inverse geodesic", config.max_iterations, float(residual)
        )

    u2 = cos2_alpha * (a_axis**2 - b_axis**2) / b_axis**2
    A = 1.0 + u2 / 16384.0 * (4096.0 + u2 * (-768.0 + u2 * (320.0 - 175.0 * u2)))
    B = u2 / 1024.0 * (256.0 + u2 * (-128.0 + u2 * (74.0 - 47.0 * u2)))
    delta_sigma = B * sin_sigma * (
        cos_2sm
        + B / 4.0 * (
            cos_sigma * (-1.0 + 2.0 * cos_2sm**2)
            - B / 6.0 * cos_2sm * (-3.0 + 4.0 * sin_sigma**2) * (-3.0 + 4.0 * cos_2sm**2)
        )
    )
    return float(b_axis * A * (sigma - delta_sigma))

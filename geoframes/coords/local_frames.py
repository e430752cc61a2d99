"""Local tangent-plane frames (ENU and NED).

A local frame is anchored at an origin given in LLA. The rotation from
ECEF to ENU depends only on the origin's latitude φ and longitude λ:

    R_ENU_ECEF = [ -sin λ           cos λ          0     ]
                 [ -sin φ cos λ    -sin φ sin λ    cos φ ]
                 [  cos φ cos λ     cos φ sin λ    sin φ ]

and is applied to the offset between the point and the origin in ECEF.
NED reorders the axes and flips the vertical: (n, e, d) = (n, e, -u).

The frame is undefined exactly at the poles, where every horizontal
direction points south (or north); origins there raise
DegenerateFrameError.
"""

from typing import Tuple

import numpy as np
from numpy.typing import NDArray

from geoframes.config import DEFAULT_SOLVER_CONFIG, POLE_TOLERANCE_DEG, SolverConfig
from geoframes.coords.datums import DatumLike
from geoframes.coords.geodetic import ecef_to_lla, lla_to_ecef
from geoframes.coords.types import ECEF, ENU, LLA, NED, VectorLike, as_vector
from geoframes.errors import DegenerateFrameError

# Row permutation + vertical flip taking ENU components to NED components
ENU_TO_NED = np.array(
    [
        [0.0, 1.0, 0.0],
        [1.0, 0.0, 0.0],
        [0.0, 0.0, -1.0],
    ],
    dtype=np.float64,
)


def check_frame_origin(origin: LLA) -> None:
    """Reject origins where the local tangent frame is degenerate.

    Raises:
        DegenerateFrameError: If the origin lies at a pole.
    """
    if 90.0 - abs(origin.lat) <= POLE_TOLERANCE_DEG:
        raise DegenerateFrameError(origin.lat)


def enu_rotation_matrix(lat: float, lon: float) -> NDArray[np.float64]:
    """Rotation taking ECEF offsets to ENU components at (lat, lon).

    Args:
        lat: Origin latitude in degrees.
        lon: Origin longitude in degrees.

    Returns:
        3x3 proper rotation matrix R with enu = R @ d_ecef.
    """
    phi = np.deg2rad(lat)
    lam = np.deg2rad(lon)
    sin_lat = np.sin(phi)
    cos_lat = np.cos(phi)
    sin_lon = np.sin(lam)
    cos_lon = np.cos(lam)

    return np.array(
        [
            [-sin_lon, cos_lon, 0.0],
            [-sin_lat * cos_lon, -sin_lat * sin_lon, cos_lat],
            [cos_lat * cos_lon, cos_lat * sin_lon, sin_lat],
        ],
        dtype=np.float64,
    )


def ned_rotation_matrix(lat: float, lon: float) -> NDArray[np.float64]:
    """Rotation taking ECEF offsets to NED components at (lat, lon) in degrees."""
    return ENU_TO_NED @ enu_rotation_matrix(lat, lon)


def local_frame(origin: LLA, datum: DatumLike) -> Tuple[NDArray[np.float64], ECEF]:
    """ECEF->ENU rotation and ECEF position of a local frame origin.

    Raises:
        DegenerateFrameError: If the origin lies at a pole.
    """
    check_frame_origin(origin)
    return enu_rotation_matrix(origin.lat, origin.lon), lla_to_ecef(origin, datum)


def ecef_to_enu(ecef: VectorLike, origin: LLA, datum: DatumLike) -> ENU:
    """Express an ECEF point in the ENU frame anchored at ``origin``.

    Args:
        ecef: ECEF point (ECEF or 3-sequence, meters).
        origin: Frame origin.
        datum: Datum of the origin.

    Returns:
        ENU offset in meters.
    """
    R, origin_ecef = local_frame(origin, datum)
    enu = R @ (as_vector(ecef) - origin_ecef.to_array())
    return ENU.from_array(enu)


def enu_to_ecef(enu: VectorLike, origin: LLA, datum: DatumLike) -> ECEF:
    """ECEF point for an ENU offset from ``origin`` (inverse of ecef_to_enu)."""
    R, origin_ecef = local_frame(origin, datum)
    return ECEF.from_array(origin_ecef.to_array() + R.T @ as_vector(enu))


def ecef_to_ned(ecef: VectorLike, origin: LLA, datum: DatumLike) -> NED:
    """Express an ECEF point in the NED frame anchored at ``origin``."""
    return ecef_to_enu(ecef, origin, datum).to_ned()


def ned_to_ecef(ned: VectorLike, origin: LLA, datum: DatumLike) -> ECEF:
    """ECEF point for an NED offset from ``origin``."""
    if isinstance(ned, NED):
        enu = ned.to_enu()
    else:
        enu = ENU_TO_NED.T @ as_vector(ned)
    return enu_to_ecef(enu, origin, datum)


def to_enu(point: LLA, origin: LLA, datum: DatumLike) -> ENU:
    """ENU coordinates of an LLA point relative to an LLA origin.

    Example:
        >>> poly = LLA(45.50439, -73.61288, 159.0)
        >>> mcgill = LLA(45.5047847, -73.5771511, 47.9)
        >>> to_enu(mcgill, poly, "wgs84")  # ~ (2792.29, 44.4889, -111.71)
    """
    return ecef_to_enu(lla_to_ecef(point, datum), origin, datum)


def to_ned(point: LLA, origin: LLA, datum: DatumLike) -> NED:
    """NED coordinates of an LLA point relative to an LLA origin."""
    return to_enu(point, origin, datum).to_ned()


def enu_to_lla(
    enu: VectorLike,
    origin: LLA,
    datum: DatumLike,
    config: SolverConfig = DEFAULT_SOLVER_CONFIG,
) -> LLA:
    """LLA point for an ENU offset from ``origin``."""
    return ecef_to_lla(enu_to_ecef(enu, origin, datum), datum, config)


def ned_to_lla(
    ned: VectorLike,
    origin: LLA,
    datum: DatumLike,
    config: SolverConfig = DEFAULT_SOLVER_CONFIG,
) -> LLA:
    """LLA point for an NED offset from ``origin``."""
    return ecef_to_lla(ned_to_ecef(ned, origin, datum), datum, config)

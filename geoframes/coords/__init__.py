"""Coordinate types, datums and conversions.

This module provides the value types and pure conversion functions:
- LLA (Latitude, Longitude, Altitude) geodetic coordinates on a datum
- ECEF (Earth-Centered Earth-Fixed) Cartesian coordinates
- ENU / NED local tangent plane coordinates about an origin
- UTM and UPS map projections
- Ellipsoids, datums and the datum registry
- Rotation matrices, distances along and through the ellipsoid
"""

from geoframes.coords.datums import (
    DATUMS,
    Datum,
    DatumRegistry,
    HelmertParameters,
    grs80,
    nad27,
    osgb36,
    resolve_datum,
    wgs84,
)
from geoframes.coords.distance import (
    chord_distance,
    curvature_drop,
    distance,
    geodesic_distance,
)
from geoframes.coords.ellipsoids import Ellipsoid, EllipsoidName
from geoframes.coords.frames import Frame, FrameType
from geoframes.coords.geodetic import ecef_to_lla, lla_to_ecef, to_ecef, to_lla
from geoframes.coords.local_frames import (
    ecef_to_enu,
    ecef_to_ned,
    enu_rotation_matrix,
    enu_to_ecef,
    enu_to_lla,
    ned_rotation_matrix,
    ned_to_ecef,
    ned_to_lla,
    to_enu,
    to_ned,
)
from geoframes.coords.rotations import (
    nearest_rotation_matrix,
    quat_to_rotation_matrix,
    rot_zyx,
    rotation_matrix_to_quat,
    rotation_matrix_to_zyx,
)
from geoframes.coords.types import ECEF, ENU, LLA, NED, UPS, UTMZ, Hemisphere, Spherical
from geoframes.coords.ups import lla_to_ups, to_ups, ups_to_lla
from geoframes.coords.utm import lla_to_utm, to_utmz, utm_band, utm_to_lla, utm_zone

__all__ = [
    # Types
    "LLA",
    "ECEF",
    "ENU",
    "NED",
    "UTMZ",
    "UPS",
    "Spherical",
    "Hemisphere",
    "Frame",
    "FrameType",
    # Ellipsoids and datums
    "Ellipsoid",
    "EllipsoidName",
    "Datum",
    "DatumRegistry",
    "HelmertParameters",
    "DATUMS",
    "wgs84",
    "osgb36",
    "nad27",
    "grs80",
    "resolve_datum",
    # Conversions
    "lla_to_ecef",
    "ecef_to_lla",
    "to_ecef",
    "to_lla",
    "ecef_to_enu",
    "enu_to_ecef",
    "ecef_to_ned",
    "ned_to_ecef",
    "enu_to_lla",
    "ned_to_lla",
    "to_enu",
    "to_ned",
    "enu_rotation_matrix",
    "ned_rotation_matrix",
    "utm_zone",
    "utm_band",
    "lla_to_utm",
    "utm_to_lla",
    "to_utmz",
    "lla_to_ups",
    "ups_to_lla",
    "to_ups",
    # Rotations
    "rot_zyx",
    "rotation_matrix_to_zyx",
    "quat_to_rotation_matrix",
    "rotation_matrix_to_quat",
    "nearest_rotation_matrix",
    # Distances
    "chord_distance",
    "distance",
    "curvature_drop",
    "geodesic_distance",
]

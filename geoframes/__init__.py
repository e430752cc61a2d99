"""Geodetic frames of reference and composable coordinate transforms.

This package converts between ECEF, LLA on a datum, local ENU/NED frames
and UTM/UPS projections, and chains rigid-body and coordinate transforms
into reusable pipelines:
- coords: Value types, datums and conversion functions
- transforms: Transform algebra, affine maps and conversion transforms
"""

__version__ = "0.1.0"

from geoframes.coords import (
    DATUMS,
    ECEF,
    ENU,
    LLA,
    NED,
    UPS,
    UTMZ,
    Datum,
    Ellipsoid,
    EllipsoidName,
    FrameType,
    Hemisphere,
    Spherical,
    chord_distance,
    curvature_drop,
    distance,
    geodesic_distance,
    grs80,
    nad27,
    osgb36,
    rot_zyx,
    to_ecef,
    to_enu,
    to_lla,
    to_ned,
    to_ups,
    to_utmz,
    wgs84,
)
from geoframes.errors import (
    DegenerateFrameError,
    FrameMismatchError,
    GeodesyError,
    InvalidLatitudeError,
    NonConvergenceError,
    NonInvertibleTransformError,
    OutOfProjectionRangeError,
    OutOfUPSRangeError,
    OutOfUTMRangeError,
    UnknownDatumError,
)
from geoframes.transforms import (
    AffineMap,
    CartesianFromSpherical,
    DatumShift,
    ECEFFromENU,
    ECEFFromLLA,
    ECEFFromNED,
    ENUFromECEF,
    LLAFromECEF,
    LLAFromUPS,
    LLAFromUTM,
    LLAFromUTMZ,
    LinearMap,
    NEDFromECEF,
    SphericalFromCartesian,
    Transform,
    Translation,
    UPSFromLLA,
    UTMFromLLA,
    UTMZFromLLA,
    compose,
    enu_from_lla,
    lla_from_enu,
    lla_from_ned,
    ned_from_lla,
    sensor_measurement_to_ecef,
    sensor_to_ecef_pipeline,
)

__all__ = [
    "__version__",
    # Types
    "LLA",
    "ECEF",
    "ENU",
    "NED",
    "UTMZ",
    "UPS",
    "Spherical",
    "Hemisphere",
    "FrameType",
    # Datums
    "Ellipsoid",
    "EllipsoidName",
    "Datum",
    "DATUMS",
    "wgs84",
    "osgb36",
    "nad27",
    "grs80",
    # Conversions
    "to_ecef",
    "to_lla",
    "to_enu",
    "to_ned",
    "to_utmz",
    "to_ups",
    "rot_zyx",
    # Distances
    "distance",
    "chord_distance",
    "curvature_drop",
    "geodesic_distance",
    # Transforms
    "Transform",
    "compose",
    "AffineMap",
    "LinearMap",
    "Translation",
    "CartesianFromSpherical",
    "SphericalFromCartesian",
    "ECEFFromLLA",
    "LLAFromECEF",
    "ENUFromECEF",
    "ECEFFromENU",
    "NEDFromECEF",
    "ECEFFromNED",
    "UTMZFromLLA",
    "LLAFromUTMZ",
    "UTMFromLLA",
    "LLAFromUTM",
    "UPSFromLLA",
    "LLAFromUPS",
    "DatumShift",
    "enu_from_lla",
    "lla_from_enu",
    "ned_from_lla",
    "lla_from_ned",
    "sensor_to_ecef_pipeline",
    "sensor_measurement_to_ecef",
    # Errors
    "GeodesyError",
    "InvalidLatitudeError",
    "UnknownDatumError",
    "OutOfProjectionRangeError",
    "OutOfUTMRangeError",
    "OutOfUPSRangeError",
    "NonConvergenceError",
    "DegenerateFrameError",
    "NonInvertibleTransformError",
    "FrameMismatchError",
]

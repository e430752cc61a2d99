"""Composable coordinate transforms.

Transforms are immutable callables tagged with the frames they consume
and produce, chained with :func:`compose`:
- Composition algebra (Transform, ComposedTransform, compose)
- Affine maps between Cartesian frames
- Spherical <-> Cartesian sensor measurements
- Geodetic conversions (LLA, ECEF, ENU, NED, UTM, UPS) and datum shifts
- Sensor -> ECEF pipelines
"""

from geoframes.transforms.affine import AffineMap, LinearMap, Translation
from geoframes.transforms.base import (
    ComposedTransform,
    FunctionTransform,
    IdentityTransform,
    Transform,
    compose,
)
from geoframes.transforms.datum_shift import DatumShift
from geoframes.transforms.geodetic import (
    ECEFFromENU,
    ECEFFromLLA,
    ECEFFromNED,
    ENUFromECEF,
    LLAFromECEF,
    LLAFromUPS,
    LLAFromUTM,
    LLAFromUTMZ,
    NEDFromECEF,
    UPSFromLLA,
    UTMFromLLA,
    UTMZFromLLA,
    enu_from_lla,
    lla_from_enu,
    lla_from_ned,
    ned_from_lla,
)
from geoframes.transforms.pipelines import sensor_measurement_to_ecef, sensor_to_ecef_pipeline
from geoframes.transforms.spherical import CartesianFromSpherical, SphericalFromCartesian

__all__ = [
    # Algebra
    "Transform",
    "ComposedTransform",
    "IdentityTransform",
    "FunctionTransform",
    "compose",
    # Affine
    "AffineMap",
    "LinearMap",
    "Translation",
    # Spherical
    "CartesianFromSpherical",
    "SphericalFromCartesian",
    # Geodetic
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
    "enu_from_lla",
    "lla_from_enu",
    "ned_from_lla",
    "lla_from_ned",
    "DatumShift",
    # Pipelines
    "sensor_to_ecef_pipeline",
    "sensor_measurement_to_ecef",
]

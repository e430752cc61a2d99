"""Sensor measurement -> ECEF pipelines.

A range/azimuth/elevation measurement taken by a sensor mounted on a
vehicle reaches ECEF through four stages:

    Spherical --CartesianFromSpherical--> sensor frame
              --AffineMap (sensor pose)--> vehicle body frame
              --AffineMap (vehicle pose)--> geographic ENU frame
              --ECEFFromENU--> ECEF

The geographic ENU frame is anchored at the vehicle's latitude and
longitude on the ellipsoid surface (altitude 0); the vehicle altitude is
the vertical translation of the vehicle pose. The whole chain is built
once and applied to every measurement.
"""

from typing import Sequence

import numpy as np

from geoframes.coords.datums import DatumLike
from geoframes.coords.frames import FrameType
from geoframes.coords.types import ECEF, LLA, Spherical
from geoframes.transforms.affine import AffineMap
from geoframes.transforms.base import Transform, compose
from geoframes.transforms.geodetic import ECEFFromENU
from geoframes.transforms.spherical import CartesianFromSpherical


def sensor_to_ecef_pipeline(
    sensor_rotation: Sequence[Sequence[float]],
    sensor_position: Sequence[float],
    vehicle_lla: LLA,
    vehicle_rotation: Sequence[Sequence[float]],
    datum: DatumLike,
) -> Transform:
    """Build the Spherical -> ECEF transform of a vehicle-mounted sensor.

    Args:
        sensor_rotation: 3x3 orientation of the sensor in the vehicle frame
            (maps sensor axes to vehicle axes).
        sensor_position: Sensor origin in the vehicle frame, meters.
        vehicle_lla: Vehicle position.
        vehicle_rotation: 3x3 orientation of the vehicle in the local ENU
            frame (maps vehicle axes to East/North/Up).
        datum: Datum of ``vehicle_lla``.

    Returns:
        Composed transform taking a Spherical measurement to ECEF.

    Example:
        >>> pipeline = sensor_to_ecef_pipeline(
        ...     rot_zyx(np.pi / 3, np.pi / 5, -np.pi / 4),
        ...     [1.0, 2.0, 0.5],
        ...     LLA(45.50439, -73.61288, 159.0),
        ...     rot_zyx(np.pi / 2, 0.0, 0.0),
        ...     wgs84,
        ... )
        >>> pipeline(Spherical(100.0, 0.2, 0.1))
    """
    vehicle_lla = vehicle_lla if isinstance(vehicle_lla, LLA) else LLA(*vehicle_lla)
    sensor_to_vehicle = AffineMap(
        sensor_rotation,
        sensor_position,
        source=FrameType.SENSOR,
        target=FrameType.BODY,
    )
    vehicle_to_geographic = AffineMap(
        vehicle_rotation,
        np.array([0.0, 0.0, vehicle_lla.alt]),
        source=FrameType.BODY,
        target=FrameType.ENU,
    )
    geographic_to_ecef = ECEFFromENU(vehicle_lla.with_alt(0.0), datum)
    return compose(
        geographic_to_ecef,
        vehicle_to_geographic,
        sensor_to_vehicle,
        CartesianFromSpherical(),
    )


def sensor_measurement_to_ecef(
    measurement: Spherical,
    sensor_rotation: Sequence[Sequence[float]],
    sensor_position: Sequence[float],
    vehicle_lla: LLA,
    vehicle_rotation: Sequence[Sequence[float]],
    datum: DatumLike,
) -> ECEF:
    """One-shot form of :func:`sensor_to_ecef_pipeline`.

    Prefer building the pipeline once when converting many measurements.
    """
    pipeline = sensor_to_ecef_pipeline(
        sensor_rotation, sensor_position, vehicle_lla, vehicle_rotation, datum
    )
    return pipeline(measurement)

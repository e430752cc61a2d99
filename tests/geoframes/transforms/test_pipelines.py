"""Unit tests for the sensor measurement -> ECEF pipeline.

The vehicle sits at Polytechnique Montréal; a sensor is mounted on it
with a fixed offset and orientation.
"""

import unittest

import numpy as np

from geoframes.coords.datums import wgs84
from geoframes.coords.frames import FrameType
from geoframes.coords.geodetic import to_ecef
from geoframes.coords.local_frames import enu_to_ecef
from geoframes.coords.rotations import rot_zyx
from geoframes.coords.types import ECEF, LLA, Spherical
from geoframes.transforms.affine import AffineMap
from geoframes.transforms.pipelines import sensor_measurement_to_ecef, sensor_to_ecef_pipeline
from geoframes.transforms.spherical import CartesianFromSpherical

VEHICLE = LLA(45.50439, -73.61288, 159.0)
SENSOR_ROTATION = rot_zyx(np.pi / 3, np.pi / 5, -np.pi / 4)
SENSOR_POSITION = np.array([1.0, 2.0, 0.5])
VEHICLE_ROTATION = rot_zyx(np.pi / 2, 0.0, 0.0)


class TestSensorPipeline(unittest.TestCase):
    """Test cases for the composed pipeline."""

    def setUp(self) -> None:
        self.pipeline = sensor_to_ecef_pipeline(
            SENSOR_ROTATION, SENSOR_POSITION, VEHICLE, VEHICLE_ROTATION, wgs84
        )

    def test_frames_and_stages(self) -> None:
        self.assertEqual(self.pipeline.source, FrameType.SPHERICAL)
        self.assertEqual(self.pipeline.target, FrameType.ECEF)
        self.assertEqual(len(self.pipeline.stages), 4)
        self.assertIsInstance(self.pipeline.stages[0], CartesianFromSpherical)

    def test_zero_range_at_vehicle_origin(self) -> None:
        pipeline = sensor_to_ecef_pipeline(
            np.eye(3), np.zeros(3), VEHICLE, np.eye(3), wgs84
        )
        ecef = pipeline(Spherical(0.0, 0.3, 0.1))
        self.assertIsInstance(ecef, ECEF)
        np.testing.assert_allclose(ecef.to_array(), to_ecef(VEHICLE, wgs84).to_array(), atol=1e-6)

    def test_zero_range_at_sensor_mount(self) -> None:
        ecef = self.pipeline(Spherical(0.0, 0.0, 0.0))
        mount_enu = VEHICLE_ROTATION @ SENSOR_POSITION + [0.0, 0.0, VEHICLE.alt]
        expected = enu_to_ecef(mount_enu, VEHICLE.with_alt(0.0), wgs84)
        np.testing.assert_allclose(ecef.to_array(), expected.to_array(), atol=1e-6)

    def test_matches_stepwise_application(self) -> None:
        measurement = Spherical(100.0, 0.2, 0.1)
        sensor = CartesianFromSpherical()(measurement)
        vehicle = AffineMap(SENSOR_ROTATION, SENSOR_POSITION)(sensor)
        geographic = AffineMap(VEHICLE_ROTATION, [0.0, 0.0, VEHICLE.alt])(vehicle)
        expected = enu_to_ecef(geographic, VEHICLE.with_alt(0.0), wgs84)
        np.testing.assert_allclose(
            self.pipeline(measurement).to_array(), expected.to_array(), atol=1e-6
        )

    def test_level_vehicle_forward_range(self) -> None:
        # Identity mounts: a 100 m measurement along x lands 100 m east of the vehicle
        pipeline = sensor_to_ecef_pipeline(np.eye(3), np.zeros(3), VEHICLE, np.eye(3), wgs84)
        ecef = pipeline(Spherical(100.0, 0.0, 0.0))
        distance = np.linalg.norm(ecef.to_array() - to_ecef(VEHICLE, wgs84).to_array())
        self.assertAlmostEqual(distance, 100.0, places=6)

    def test_one_shot_helper(self) -> None:
        measurement = Spherical(25.0, -1.0, 0.4)
        ecef = sensor_measurement_to_ecef(
            measurement, SENSOR_ROTATION, SENSOR_POSITION, VEHICLE, VEHICLE_ROTATION, wgs84
        )
        self.assertEqual(ecef, self.pipeline(measurement))

    def test_inverse_recovers_measurement(self) -> None:
        measurement = Spherical(250.0, 0.5, -0.2)
        back = self.pipeline.inverse()(self.pipeline(measurement))
        np.testing.assert_allclose(back.to_array(), measurement.to_array(), atol=1e-6)

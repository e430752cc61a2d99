"""Unit tests for LLA <-> ECEF conversion.

Test cases include:
- Known reference points (equator, poles, Polytechnique Montréal)
- Round trips for every registered datum
- Points on and near the polar axis
- Iteration cap behaviour
- Points far below the surface
"""

import unittest

import numpy as np
import pytest

from geoframes.config import SolverConfig
from geoframes.coords.datums import DATUMS, osgb36, wgs84
from geoframes.coords.ellipsoids import Ellipsoid, EllipsoidName
from geoframes.coords.geodetic import (
    ecef_to_lla,
    ecef_to_lla_ellipsoid,
    lla_to_ecef,
    lla_to_ecef_ellipsoid,
    to_ecef,
    to_lla,
)
from geoframes.coords.types import ECEF, LLA
from geoframes.errors import NonConvergenceError

POLY = LLA(45.50439, -73.61288, 159.0)

WGS84_B = 6356752.314245


class TestLLAtoECEF(unittest.TestCase):
    """Test cases for LLA to ECEF conversion."""

    def test_equator_prime_meridian(self) -> None:
        ecef = lla_to_ecef(LLA(0.0, 0.0, 0.0), wgs84)
        np.testing.assert_allclose(ecef.to_array(), [6378137.0, 0.0, 0.0], atol=1e-6)

    def test_equator_90_east(self) -> None:
        ecef = lla_to_ecef(LLA(0.0, 90.0, 0.0), wgs84)
        np.testing.assert_allclose(ecef.to_array(), [0.0, 6378137.0, 0.0], atol=1e-6)

    def test_north_pole(self) -> None:
        ecef = lla_to_ecef(LLA(90.0, 0.0, 0.0), wgs84)
        np.testing.assert_allclose(ecef.to_array(), [0.0, 0.0, WGS84_B], atol=1e-6)

    def test_south_pole_with_altitude(self) -> None:
        ecef = lla_to_ecef(LLA(-90.0, 0.0, 100.0), wgs84)
        np.testing.assert_allclose(ecef.to_array(), [0.0, 0.0, -WGS84_B - 100.0], atol=1e-6)

    def test_polytechnique_wgs84(self) -> None:
        ecef = to_ecef(POLY, wgs84)
        np.testing.assert_allclose(
            ecef.to_array(), [1.26333e6, -4.29599e6, 4.52692e6], rtol=1e-5
        )

    def test_polytechnique_osgb36(self) -> None:
        # Same LLA on a different ellipsoid gives a different ECEF point
        ecef = to_ecef(POLY, osgb36)
        np.testing.assert_allclose(
            ecef.to_array(), [1.26321e6, -4.29557e6, 4.5266e6], rtol=1e-5
        )
        self.assertGreater(
            np.linalg.norm(ecef.to_array() - to_ecef(POLY, wgs84).to_array()), 100.0
        )

    def test_datum_by_name(self) -> None:
        self.assertEqual(lla_to_ecef(POLY, "WGS84"), lla_to_ecef(POLY, wgs84))

    def test_custom_ellipsoid(self) -> None:
        sphere = Ellipsoid(a=6371000.0, f=0.0, name="sphere")
        ecef = lla_to_ecef_ellipsoid(LLA(45.0, 45.0, 0.0), sphere)
        self.assertAlmostEqual(ecef.norm(), 6371000.0, places=6)


class TestECEFtoLLA(unittest.TestCase):
    """Test cases for ECEF to LLA conversion."""

    def test_equator(self) -> None:
        lla = ecef_to_lla(ECEF(6378137.0, 0.0, 0.0), wgs84)
        self.assertAlmostEqual(lla.lat, 0.0, places=12)
        self.assertAlmostEqual(lla.lon, 0.0, places=12)
        self.assertAlmostEqual(lla.alt, 0.0, places=6)

    def test_polar_axis_north(self) -> None:
        lla = ecef_to_lla(ECEF(0.0, 0.0, WGS84_B + 10.0), wgs84)
        self.assertEqual(lla.lat, 90.0)
        self.assertEqual(lla.lon, 0.0)
        self.assertAlmostEqual(lla.alt, 10.0, places=5)

    def test_polar_axis_south(self) -> None:
        lla = ecef_to_lla(ECEF(0.0, 0.0, -WGS84_B + 5.0), wgs84)
        self.assertEqual(lla.lat, -90.0)
        self.assertAlmostEqual(lla.alt, -5.0, places=5)

    def test_earth_center(self) -> None:
        lla = ecef_to_lla(ECEF(0.0, 0.0, 0.0), wgs84)
        self.assertEqual(lla.lat, 90.0)
        self.assertAlmostEqual(lla.alt, -WGS84_B, places=5)

    def test_near_polar_axis(self) -> None:
        original = LLA(89.9999999, 30.0, 250.0)
        lla = to_lla(to_ecef(original, wgs84), wgs84)
        self.assertAlmostEqual(lla.lat, original.lat, places=9)
        self.assertAlmostEqual(lla.alt, original.alt, places=3)

    def test_iteration_cap(self) -> None:
        far = lla_to_ecef(LLA(45.0, 10.0, 5.0e6), wgs84)
        config = SolverConfig(tolerance=1e-20, max_iterations=1)
        with self.assertRaises(NonConvergenceError) as ctx:
            ecef_to_lla(far, wgs84, config)
        self.assertEqual(ctx.exception.iterations, 1)

    def test_ellipsoid_level_function(self) -> None:
        wgs = Ellipsoid.from_name(EllipsoidName.WGS84)
        lla = ecef_to_lla_ellipsoid(lla_to_ecef_ellipsoid(POLY, wgs), wgs)
        self.assertAlmostEqual(lla.lat, POLY.lat, places=9)


ROUND_TRIP_POINTS = [
    LLA(45.50439, -73.61288, 159.0),
    LLA(-33.8688, 151.2093, 58.0),
    LLA(0.0, 180.0, 0.0),
    LLA(51.4778, -0.0015, 45.0),
    LLA(-89.5, 12.0, 2800.0),
    LLA(78.2, 15.6, -30.0),
    LLA(10.0, -170.0, 35000000.0),
    LLA(27.9881, 86.925, 8848.0),
    LLA(-45.0, 0.0, -400.0),
]


@pytest.mark.parametrize("datum_name", DATUMS.names())
@pytest.mark.parametrize("point", ROUND_TRIP_POINTS, ids=repr)
def test_round_trip_every_datum(datum_name, point):
    """LLA -> ECEF -> LLA recovers the point on every registered datum."""
    back = to_lla(to_ecef(point, datum_name), datum_name)
    assert np.isclose(back.lat, point.lat, atol=1e-7)
    assert np.isclose(np.cos(np.deg2rad(back.lon - point.lon)), 1.0, atol=1e-14)
    assert np.isclose(back.alt, point.alt, atol=1e-3)


DEEP_POINTS = [
    LLA(30.0, 20.0, -6.3e6),
    LLA(-60.0, 20.0, -6.3e6),
    LLA(75.0, -120.0, -6.2e6),
]


@pytest.mark.parametrize("point", DEEP_POINTS, ids=repr)
def test_round_trip_far_below_surface(point):
    """Points tens of kilometers from the center still converge within the cap."""
    back = ecef_to_lla(lla_to_ecef(point, wgs84), wgs84)
    assert np.isclose(back.lat, point.lat, atol=1e-9)
    assert np.isclose(back.lon, point.lon, atol=1e-9)
    assert np.isclose(back.alt, point.alt, atol=1e-3)

"""Unit tests for ENU/NED local tangent frames.

The scenario places the origin at Polytechnique Montréal and looks at
McGill University, about 2.8 km east.
"""

import unittest

import numpy as np
import pytest

from geoframes.coords.datums import DATUMS, osgb36, wgs84
from geoframes.coords.geodetic import lla_to_ecef
from geoframes.coords.local_frames import (
    ecef_to_enu,
    ecef_to_ned,
    enu_rotation_matrix,
    enu_to_ecef,
    enu_to_lla,
    local_frame,
    ned_rotation_matrix,
    ned_to_ecef,
    ned_to_lla,
    to_enu,
    to_ned,
)
from geoframes.coords.types import ENU, LLA, NED
from geoframes.errors import DegenerateFrameError

POLY = LLA(45.50439, -73.61288, 159.0)
MCGILL = LLA(45.5047847, -73.5771511, 47.9)
QUEBEC = LLA(46.829853, -71.254028, 74.0)


class TestRotationMatrices(unittest.TestCase):
    """Test cases for the ECEF -> local rotations."""

    def test_orthonormal(self) -> None:
        for lat, lon in [(0.0, 0.0), (45.5, -73.6), (-80.0, 170.0), (89.0, 45.0)]:
            R = enu_rotation_matrix(lat, lon)
            np.testing.assert_allclose(R @ R.T, np.eye(3), atol=1e-12)
            self.assertAlmostEqual(np.linalg.det(R), 1.0, places=12)

    def test_equator_prime_meridian(self) -> None:
        # East = +y, North = +z, Up = +x in ECEF
        R = enu_rotation_matrix(0.0, 0.0)
        expected = np.array([[0.0, 1.0, 0.0], [0.0, 0.0, 1.0], [1.0, 0.0, 0.0]])
        np.testing.assert_allclose(R, expected, atol=1e-15)

    def test_ned_is_permuted_enu(self) -> None:
        R_enu = enu_rotation_matrix(45.0, 10.0)
        R_ned = ned_rotation_matrix(45.0, 10.0)
        np.testing.assert_allclose(R_ned[0], R_enu[1])
        np.testing.assert_allclose(R_ned[1], R_enu[0])
        np.testing.assert_allclose(R_ned[2], -R_enu[2])
        self.assertAlmostEqual(np.linalg.det(R_ned), 1.0, places=12)


class TestENU(unittest.TestCase):
    """Test cases for ENU conversion."""

    def test_mcgill_from_polytechnique(self) -> None:
        enu = to_enu(MCGILL, POLY, wgs84)
        np.testing.assert_allclose(enu.to_array(), [2792.29, 44.4889, -111.71], atol=0.05)

    def test_curvature_shows_in_up_component(self) -> None:
        enu = to_enu(MCGILL, POLY, wgs84)
        excess = abs(enu.u) - abs(MCGILL.alt - POLY.alt)
        self.assertAlmostEqual(excess, 0.610, delta=0.005)

    def test_origin_maps_to_zero(self) -> None:
        enu = to_enu(POLY, POLY, wgs84)
        np.testing.assert_allclose(enu.to_array(), np.zeros(3), atol=1e-8)

    def test_point_above_origin(self) -> None:
        enu = to_enu(POLY.with_alt(POLY.alt + 100.0), POLY, wgs84)
        np.testing.assert_allclose(enu.to_array(), [0.0, 0.0, 100.0], atol=1e-6)

    def test_norm_equals_ecef_distance(self) -> None:
        enu = to_enu(QUEBEC, POLY, wgs84)
        chord = np.linalg.norm(
            lla_to_ecef(QUEBEC, wgs84).to_array() - lla_to_ecef(POLY, wgs84).to_array()
        )
        self.assertAlmostEqual(enu.norm(), chord, places=5)

    def test_round_trip(self) -> None:
        ecef = lla_to_ecef(QUEBEC, wgs84)
        back = enu_to_ecef(ecef_to_enu(ecef, POLY, wgs84), POLY, wgs84)
        np.testing.assert_allclose(back.to_array(), ecef.to_array(), atol=1e-6)

    def test_enu_to_lla(self) -> None:
        lla = enu_to_lla(to_enu(MCGILL, POLY, wgs84), POLY, wgs84)
        self.assertAlmostEqual(lla.lat, MCGILL.lat, places=9)
        self.assertAlmostEqual(lla.lon, MCGILL.lon, places=9)
        self.assertAlmostEqual(lla.alt, MCGILL.alt, places=4)

    def test_datum_matters(self) -> None:
        enu_wgs = to_enu(MCGILL, POLY, wgs84)
        enu_osgb = to_enu(MCGILL, POLY, osgb36)
        # Same geometry on a slightly different ellipsoid: sub-meter change
        np.testing.assert_allclose(enu_wgs.to_array(), enu_osgb.to_array(), atol=1.0)

    def test_accepts_plain_sequences(self) -> None:
        enu = ecef_to_enu(list(lla_to_ecef(MCGILL, wgs84)), POLY, wgs84)
        self.assertIsInstance(enu, ENU)


class TestNED(unittest.TestCase):
    """Test cases for NED conversion."""

    def test_ned_matches_enu(self) -> None:
        enu = to_enu(MCGILL, POLY, wgs84)
        ned = to_ned(MCGILL, POLY, wgs84)
        self.assertAlmostEqual(ned.n, enu.n, places=9)
        self.assertAlmostEqual(ned.e, enu.e, places=9)
        self.assertAlmostEqual(ned.d, -enu.u, places=9)

    def test_ecef_to_ned_round_trip(self) -> None:
        ecef = lla_to_ecef(QUEBEC, wgs84)
        ned = ecef_to_ned(ecef, POLY, wgs84)
        np.testing.assert_allclose(
            ned_to_ecef(ned, POLY, wgs84).to_array(), ecef.to_array(), atol=1e-6
        )
        np.testing.assert_allclose(
            ned_to_ecef(ned.to_array(), POLY, wgs84).to_array(), ecef.to_array(), atol=1e-6
        )

    def test_ned_to_lla(self) -> None:
        lla = ned_to_lla(NED(0.0, 0.0, -50.0), POLY, wgs84)
        self.assertAlmostEqual(lla.alt, POLY.alt + 50.0, places=5)


class TestDegenerateOrigin:
    """Test suite for origins at the poles."""

    @pytest.mark.parametrize("lat", [90.0, -90.0])
    def test_pole_origin_rejected(self, lat):
        with pytest.raises(DegenerateFrameError) as excinfo:
            to_enu(LLA(0.0, 0.0), LLA(lat, 0.0), wgs84)
        assert excinfo.value.lat == lat

    def test_local_frame_rejects_pole(self):
        with pytest.raises(DegenerateFrameError):
            local_frame(LLA(90.0, 10.0), wgs84)

    def test_near_pole_is_allowed(self):
        R, _ = local_frame(LLA(89.999, 10.0), wgs84)
        np.testing.assert_allclose(R @ R.T, np.eye(3), atol=1e-12)


ENU_PAIRS = [
    (MCGILL, POLY),
    (QUEBEC, POLY),
    (LLA(-33.8688, 151.2093, 58.0), LLA(-37.8136, 144.9631, 31.0)),
    (LLA(78.2232, 15.6267, -30.0), LLA(69.6492, 18.9553, 10.0)),
    (LLA(0.5, 179.9, 0.0), LLA(-0.5, -179.9, 1200.0)),
]


@pytest.mark.parametrize("datum_name", DATUMS.names())
@pytest.mark.parametrize("point,origin", ENU_PAIRS, ids=repr)
def test_enu_round_trip_every_datum(datum_name, point, origin):
    """LLA -> ENU -> LLA recovers the point for every origin and datum."""
    back = enu_to_lla(to_enu(point, origin, datum_name), origin, datum_name)
    assert np.isclose(back.lat, point.lat, atol=1e-9)
    assert np.isclose(np.cos(np.deg2rad(back.lon - point.lon)), 1.0, atol=1e-14)
    assert np.isclose(back.alt, point.alt, atol=1e-4)

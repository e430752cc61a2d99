"""Unit tests for ECEF datum shifts."""

import numpy as np
import pytest

from geoframes.coords.datums import grs80, nad27, osgb36, wgs84
from geoframes.coords.geodetic import to_ecef
from geoframes.coords.types import ECEF, LLA
from geoframes.transforms.base import compose
from geoframes.transforms.datum_shift import DatumShift, helmert_affine
from geoframes.transforms.geodetic import ECEFFromLLA, LLAFromECEF

GREENWICH = LLA(51.4778, -0.0015, 45.0)


class TestDatumShift:
    """Test suite for Helmert-based datum shifts."""

    def test_identity_shift(self):
        shift = DatumShift(wgs84, grs80)
        assert shift.is_identity
        ecef = to_ecef(GREENWICH, wgs84)
        assert shift(ecef) == ecef

    def test_same_datum(self):
        shift = DatumShift("osgb36", "osgb36")
        ecef = to_ecef(GREENWICH, osgb36)
        np.testing.assert_allclose(shift(ecef).to_array(), ecef.to_array(), atol=1e-6)

    def test_osgb36_to_wgs84_matches_helmert(self):
        ecef = to_ecef(GREENWICH, osgb36)
        shifted = DatumShift(osgb36, wgs84)(ecef)
        expected = helmert_affine(osgb36.to_wgs84)(ecef.to_array())
        np.testing.assert_allclose(shifted.to_array(), expected, atol=1e-6)

    def test_shift_magnitude(self):
        ecef = to_ecef(GREENWICH, osgb36)
        moved = DatumShift(osgb36, wgs84)(ecef)
        offset = np.linalg.norm(moved.to_array() - ecef.to_array())
        assert 500.0 < offset < 900.0

    def test_round_trip(self):
        shift = DatumShift(osgb36, nad27)
        ecef = to_ecef(GREENWICH, osgb36)
        back = shift.inverse()(shift(ecef))
        np.testing.assert_allclose(back.to_array(), ecef.to_array(), atol=1e-6)

    def test_inverse(self):
        assert DatumShift(osgb36, wgs84).inverse() == DatumShift(wgs84, osgb36)

    def test_nad27_translation(self):
        ecef = ECEF(1.0e6, -4.0e6, 4.5e6)
        moved = DatumShift(nad27, wgs84)(ecef)
        np.testing.assert_allclose(
            moved.to_array() - ecef.to_array(), [-8.0, 160.0, 176.0], atol=1e-6
        )

    def test_geodetic_shift(self):
        # OSGB36 -> WGS84 near Greenwich moves points by ~100 m horizontally
        chain = compose(LLAFromECEF(wgs84), DatumShift(osgb36, wgs84), ECEFFromLLA(osgb36))
        moved = chain(GREENWICH)
        assert abs(moved.lat - GREENWICH.lat) < 0.01
        assert abs(moved.lon - GREENWICH.lon) < 0.01
        assert abs(moved.alt - GREENWICH.alt) < 100.0
        assert (moved.lat, moved.lon) != pytest.approx((GREENWICH.lat, GREENWICH.lon), abs=1e-5)

    def test_affine_is_single_map(self):
        shift = DatumShift(osgb36, nad27)
        ecef = to_ecef(GREENWICH, osgb36)
        np.testing.assert_allclose(shift.affine(ecef), shift(ecef).to_array())

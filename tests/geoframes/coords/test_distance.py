"""Unit tests for distances between geodetic points.

Test cases include:
- Symmetry and zero distance
- Agreement between the closed-form surface distance and Vincenty
- Curvature drop in the Polytechnique/McGill scenario
- Vincenty reference line (Flinders Peak to Buninyong)
"""

import unittest

import numpy as np
import pytest

from geoframes.coords.datums import wgs84
from geoframes.coords.distance import (
    chord_distance,
    curvature_drop,
    distance,
    geodesic_distance,
    mean_radius,
    surface_arc,
)
from geoframes.coords.local_frames import to_enu
from geoframes.coords.types import LLA
from geoframes.errors import NonConvergenceError

POLY = LLA(45.50439, -73.61288, 159.0)
MCGILL = LLA(45.5047847, -73.5771511, 47.9)
QUEBEC = LLA(46.829853, -71.254028, 74.0)

FLINDERS_PEAK = LLA(-37.95103342, 144.42486789)
BUNINYONG = LLA(-37.65282114, 143.92649554)


class TestDistance(unittest.TestCase):
    """Test cases for the surface distance."""

    def test_symmetric(self) -> None:
        for a, b in [(POLY, MCGILL), (POLY, QUEBEC), (FLINDERS_PEAK, BUNINYONG)]:
            self.assertEqual(distance(a, b), distance(b, a))

    def test_zero_for_same_point(self) -> None:
        self.assertEqual(distance(POLY, POLY), 0.0)
        self.assertEqual(chord_distance(POLY, POLY), 0.0)

    def test_positive_for_distinct_points(self) -> None:
        self.assertGreater(distance(POLY, POLY.with_alt(POLY.alt + 1e-3)), 0.0)
        self.assertGreater(distance(POLY, LLA(POLY.lat + 1e-7, POLY.lon, POLY.alt)), 0.0)

    def test_vertical_separation(self) -> None:
        self.assertAlmostEqual(distance(POLY, POLY.with_alt(1159.0)), 1000.0, places=9)

    def test_polytechnique_mcgill(self) -> None:
        enu = to_enu(MCGILL, POLY, wgs84)
        horizontal = np.hypot(enu.e, enu.n)
        d = distance(POLY, MCGILL)
        self.assertGreater(d, horizontal)
        self.assertAlmostEqual(d, np.hypot(2792.6, 111.1), delta=1.0)

    def test_agrees_with_enu_within_curvature_drop(self) -> None:
        for a, b in [(POLY, MCGILL), (MCGILL, POLY)]:
            planar = to_enu(b, a, wgs84).norm()
            self.assertLessEqual(abs(distance(a, b) - planar), curvature_drop(a, b))

    def test_agrees_with_vincenty(self) -> None:
        for a, b in [(POLY, QUEBEC), (FLINDERS_PEAK, BUNINYONG)]:
            arc = surface_arc(a, b)
            self.assertAlmostEqual(arc, geodesic_distance(a, b), delta=0.1)

    def test_chord_equals_enu_norm(self) -> None:
        enu = to_enu(QUEBEC, POLY, wgs84)
        self.assertAlmostEqual(chord_distance(POLY, QUEBEC, wgs84), enu.norm(), places=5)

    def test_arc_longer_than_chord(self) -> None:
        a, b = POLY.with_alt(0.0), QUEBEC.with_alt(0.0)
        self.assertGreater(surface_arc(a, b), chord_distance(a, b))

    def test_mean_radius(self) -> None:
        ell = wgs84.ellipsoid
        self.assertAlmostEqual(mean_radius(0.0), ell.a * np.sqrt(1.0 - ell.e2), places=6)
        self.assertAlmostEqual(mean_radius(90.0), ell.a**2 / ell.b, places=4)


class TestCurvatureDrop:
    """Test suite for the curvature term of nearby points."""

    def test_polytechnique_mcgill(self):
        assert curvature_drop(POLY, MCGILL) == pytest.approx(0.610, abs=0.005)

    def test_matches_up_component_excess(self):
        enu = to_enu(MCGILL, POLY, wgs84)
        excess = abs(enu.u) - abs(MCGILL.alt - POLY.alt)
        assert curvature_drop(POLY, MCGILL) == pytest.approx(excess, abs=0.005)

    def test_quadratic_in_distance(self):
        near = curvature_drop(POLY, LLA(POLY.lat, POLY.lon + 0.01))
        far = curvature_drop(POLY, LLA(POLY.lat, POLY.lon + 0.02))
        assert far / near == pytest.approx(4.0, rel=1e-3)

    def test_zero_at_origin(self):
        assert curvature_drop(POLY, POLY) == pytest.approx(0.0, abs=1e-8)


class TestGeodesicDistance:
    """Test suite for Vincenty's inverse solution."""

    def test_flinders_peak_buninyong(self):
        # Vincenty (1975) reference line on the GRS80 ellipsoid
        d = geodesic_distance(FLINDERS_PEAK, BUNINYONG, "grs80")
        assert d == pytest.approx(54972.271, abs=0.01)

    def test_symmetric(self):
        assert geodesic_distance(POLY, QUEBEC) == pytest.approx(
            geodesic_distance(QUEBEC, POLY), abs=1e-6
        )

    def test_coincident_points(self):
        assert geodesic_distance(POLY, POLY) == 0.0

    def test_meridian_quarter(self):
        # Equator to pole along a meridian: quarter meridian of WGS84
        d = geodesic_distance(LLA(0.0, 0.0), LLA(90.0, 0.0))
        assert d == pytest.approx(10001965.729, abs=0.01)

    def test_along_equator(self):
        d = geodesic_distance(LLA(0.0, 0.0), LLA(0.0, 1.0))
        assert d == pytest.approx(wgs84.ellipsoid.a * np.deg2rad(1.0), abs=1e-6)

    def test_nearly_antipodal_fails_to_converge(self):
        with pytest.raises(NonConvergenceError):
            geodesic_distance(LLA(0.0, 0.0), LLA(0.0, 179.9))

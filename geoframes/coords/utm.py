"""Universal Transverse Mercator projection.

Zones are 6° wide, numbered 1..60 eastwards from 180°W, with the two
standard exceptions:

- Norway: 56°N <= lat < 64°N, 3°E <= lon < 12°E belongs to zone 32
- Svalbard: 72°N <= lat <= 84°N uses the widened zones 31, 33, 35, 37

UTM is defined between 80°S and 84°N; outside that band the polar caps
are covered by UPS (see geoframes.coords.ups).

The projection uses Krüger's series in the third flattening n
(Karney, "Transverse Mercator with an accuracy of a few nanometers",
J. Geodesy 85, 2011), truncated at n⁴, which is accurate to well below a
millimeter within a zone:

    forward:  t  = sinh(atanh(sin φ) - e·atanh(e·sin φ))
              ξ' = atan(t / cos Δλ),  η' = atanh(sin Δλ / sqrt(1 + t²))
              E  = E0 + k0·A·(η' + Σ αj cos 2jξ' sinh 2jη')
              N  = N0 + k0·A·(ξ' + Σ αj sin 2jξ' cosh 2jη')

    inverse:  ξ' = ξ - Σ βj sin 2jξ cosh 2jη
              η' = η - Σ βj cos 2jξ sinh 2jη
              χ  = asin(sin ξ' / cosh η')
              φ  = χ + Σ δj sin 2jχ
              Δλ = atan2(sinh η', cos ξ')
"""

import warnings
from typing import Tuple

import numpy as np

from geoframes.config import (
    UTM_BAND_LETTERS,
    UTM_FALSE_EASTING,
    UTM_FALSE_NORTHING_SOUTH,
    UTM_MAX_LAT,
    UTM_MIN_LAT,
    UTM_SCALE_FACTOR,
    UTM_WARN_OFFSET_DEG,
    UTM_ZONE_WIDTH,
)
from geoframes.coords.datums import DatumLike, resolve_datum
from geoframes.coords.ellipsoids import Ellipsoid
from geoframes.coords.types import LLA, UTMZ, Hemisphere
from geoframes.errors import OutOfUTMRangeError
from geoframes.utils.angles import longitude_difference


def check_utm_latitude(lat: float) -> None:
    """Raise OutOfUTMRangeError unless -80 <= lat <= 84."""
    if not UTM_MIN_LAT <= lat <= UTM_MAX_LAT:
        raise OutOfUTMRangeError(lat, UTM_MIN_LAT, UTM_MAX_LAT)


def utm_zone(lat: float, lon: float) -> int:
    """UTM zone number for a position.

    Args:
        lat: Latitude in degrees.
        lon: Longitude in degrees.

    Returns:
        Zone number in 1..60, honoring the Norway and Svalbard exceptions.

    Raises:
        OutOfUTMRangeError: If the latitude is outside the UTM band.

    Example:
        >>> utm_zone(45.50439, -73.61288)
        18
        >>> utm_zone(60.0, 5.0)  # Bergen, Norway exception
        32
    """
    check_utm_latitude(lat)
    lon = LLA(lat, lon).lon

    if 56.0 <= lat < 64.0 and 3.0 <= lon < 12.0:
        return 32

    if lat >= 72.0 and 0.0 <= lon < 42.0:
        if lon < 9.0:
            return 31
        if lon < 21.0:
            return 33
        if lon < 33.0:
            return 35
        return 37

    zone = int(np.floor((lon + 180.0) / UTM_ZONE_WIDTH)) + 1
    return min(max(zone, 1), 60)


def utm_band(lat: float) -> str:
    """Latitude band letter (C..X, skipping I and O).

    Bands are 8° tall starting at 80°S; band X spans 72°N..84°N.

    Raises:
        OutOfUTMRangeError: If the latitude is outside the UTM band.
    """
    check_utm_latitude(lat)
    index = int(np.floor((lat - UTM_MIN_LAT) / 8.0))
    return UTM_BAND_LETTERS[min(index, len(UTM_BAND_LETTERS) - 1)]


def central_meridian(zone: int) -> float:
    """Longitude in degrees of a zone's central meridian."""
    if not 1 <= zone <= 60:
        raise ValueError(f"UTM zone must be in 1..60, got {zone}")
    return UTM_ZONE_WIDTH * zone - 183.0


def _series(ellipsoid: Ellipsoid) -> Tuple[float, np.ndarray, np.ndarray, np.ndarray]:
    """Rectifying radius A and Krüger coefficients α, β, δ (j = 1..4)."""
    n = ellipsoid.n
    n2 = n * n
    n3 = n2 * n
    n4 = n3 * n

    A = ellipsoid.a / (1.0 + n) * (1.0 + n2 / 4.0 + n4 / 64.0)

    alpha = np.array(
        [
            n / 2.0 - 2.0 / 3.0 * n2 + 5.0 / 16.0 * n3 + 41.0 / 180.0 * n4,
            13.0 / 48.0 * n2 - 3.0 / 5.0 * n3 + 557.0 / 1440.0 * n4,
            61.0 / 240.0 * n3 - 103.0 / 140.0 * n4,
            49561.0 / 161280.0 * n4,
        ]
    )
    beta = np.array(
        [
            n / 2.0 - 2.0 / 3.0 * n2 + 37.0 / 96.0 * n3 - 1.0 / 360.0 * n4,
            1.0 / 48.0 * n2 + 1.0 / 15.0 * n3 - 437.0 / 1440.0 * n4,
            17.0 / 480.0 * n3 - 37.0 / 840.0 * n4,
            4397.0 / 161280.0 * n4,
        ]
    )
    delta = np.array(
        [
            2.0 * n - 2.0 / 3.0 * n2 - 2.0 * n3 + 116.0 / 45.0 * n4,
            7.0 / 3.0 * n2 - 8.0 / 5.0 * n3 - 227.0 / 45.0 * n4,
            56.0 / 15.0 * n3 - 136.0 / 35.0 * n4,
            4279.0 / 630.0 * n4,
        ]
    )
    return A, alpha, beta, delta


_J = np.arange(1, 5)


def transverse_mercator(
    lat: float,
    dlon: float,
    ellipsoid: Ellipsoid,
    k0: float = UTM_SCALE_FACTOR,
) -> Tuple[float, float]:
    """Transverse Mercator projection without false offsets.

    Args:
        lat: Latitude in degrees.
        dlon: Longitude relative to the central meridian, in degrees.
        ellipsoid: Reference ellipsoid.
        k0: Scale factor on the central meridian.

    Returns:
        (x, y) in meters: x east of the central meridian, y north of the
        equator.
    """
    A, alpha, _, _ = _series(ellipsoid)
    phi = np.deg2rad(lat)
    lam = np.deg2rad(dlon)
    e = ellipsoid.e

    t = np.sinh(np.arctanh(np.sin(phi)) - e * np.arctanh(e * np.sin(phi)))
    xi_p = np.arctan2(t, np.cos(lam))
    eta_p = np.arctanh(np.sin(lam) / np.sqrt(1.0 + t * t))

    xi = xi_p + np.sum(alpha * np.sin(2 * _J * xi_p) * np.cosh(2 * _J * eta_p))
    eta = eta_p + np.sum(alpha * np.cos(2 * _J * xi_p) * np.sinh(2 * _J * eta_p))

    return float(k0 * A * eta), float(k0 * A * xi)


def inverse_transverse_mercator(
    x: float,
    y: float,
    ellipsoid: Ellipsoid,
    k0: float = UTM_SCALE_FACTOR,
) -> Tuple[float, float]:
    """Inverse of :func:`transverse_mercator`.

    Returns:
        (lat, dlon) in degrees, dlon relative to the central meridian.
    """
    A, _, beta, delta = _series(ellipsoid)
    xi = y / (k0 * A)
    eta = x / (k0 * A)

    xi_p = xi - np.sum(beta * np.sin(2 * _J * xi) * np.cosh(2 * _J * eta))
    eta_p = eta - np.sum(beta * np.cos(2 * _J * xi) * np.sinh(2 * _J * eta))

    chi = np.arcsin(np.clip(np.sin(xi_p) / np.cosh(eta_p), -1.0, 1.0))
    phi = chi + np.sum(delta * np.sin(2 * _J * chi))
    lam = np.arctan2(np.sinh(eta_p), np.cos(xi_p))

    return float(np.rad2deg(phi)), float(np.rad2deg(lam))


def lla_to_utm(
    lla: LLA,
    zone: int,
    hemisphere: Hemisphere,
    datum: DatumLike,
) -> UTMZ:
    """Project into a given UTM zone and hemisphere.

    Forcing a zone is useful to keep a data set on a single grid across
    a zone boundary. Accuracy degrades far from the central meridian, so
    a RuntimeWarning is issued beyond UTM_WARN_OFFSET_DEG.

    Raises:
        OutOfUTMRangeError: If the latitude is outside the UTM band.
    """
    check_utm_latitude(lla.lat)
    ellipsoid = resolve_datum(datum).ellipsoid
    hemisphere = Hemisphere(hemisphere)

    dlon = longitude_difference(lla.lon, central_meridian(zone))
    if abs(dlon) > UTM_WARN_OFFSET_DEG:
        warnings.warn(
            f"Longitude {lla.lon}° is {abs(dlon):.1f}° from the central meridian "
            f"of UTM zone {zone}; projection accuracy is degraded.",
            RuntimeWarning,
        )

    x, y = transverse_mercator(lla.lat, dlon, ellipsoid)
    easting = x + UTM_FALSE_EASTING
    northing = y if hemisphere.is_north else y + UTM_FALSE_NORTHING_SOUTH
    return UTMZ(easting, northing, lla.alt, zone, hemisphere)


def utm_to_lla(utm: UTMZ, datum: DatumLike) -> LLA:
    """Recover geodetic coordinates from UTM coordinates."""
    ellipsoid = resolve_datum(datum).ellipsoid
    x = utm.easting - UTM_FALSE_EASTING
    y = utm.northing if utm.is_north else utm.northing - UTM_FALSE_NORTHING_SOUTH
    lat, dlon = inverse_transverse_mercator(x, y, ellipsoid)
    return LLA(lat, central_meridian(utm.zone) + dlon, utm.alt)


def lla_to_utmz(lla: LLA, datum: DatumLike) -> UTMZ:
    """Project into the UTM zone and hemisphere the point belongs to.

    Raises:
        OutOfUTMRangeError: If the latitude is outside the UTM band.
    """
    zone = utm_zone(lla.lat, lla.lon)
    return lla_to_utm(lla, zone, Hemisphere.of(lla.lat), datum)


def utmz_to_lla(utmz: UTMZ, datum: DatumLike) -> LLA:
    """Inverse of :func:`lla_to_utmz`."""
    return utm_to_lla(utmz, datum)


def to_utmz(lla: LLA, datum: DatumLike) -> UTMZ:
    """UTM coordinates with automatic zone (point constructor).

    Example:
        >>> to_utmz(LLA(45.50439, -73.61288, 159.0), "wgs84").zone
        18
    """
    return lla_to_utmz(lla, datum)

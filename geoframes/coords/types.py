"""Coordinate value types.

All coordinates are immutable dataclasses built from plain numbers:

- LLA: geodetic latitude/longitude in degrees, altitude above the
  ellipsoid in meters
- ECEF: Earth-Centered Earth-Fixed x, y, z in meters
- ENU / NED: offsets in meters relative to a local tangent-plane origin
- UTMZ: UTM easting/northing with zone and hemisphere
- UPS: polar stereographic easting/northing with hemisphere
- Spherical: range (m), azimuth and elevation (rad) sensor measurement

Values carry no datum or origin; conversions take those explicitly.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Sequence, Union

import numpy as np
from numpy.typing import NDArray

from geoframes.errors import InvalidLatitudeError
from geoframes.utils.angles import wrap_longitude


def _check_finite(**values: float) -> None:
    for name, value in values.items():
        if not np.isfinite(value):
            raise ValueError(f"{name} must be finite, got {value}")


def _array3(arr: Sequence[float], kind: str) -> NDArray[np.float64]:
    arr = np.asarray(arr, dtype=np.float64)
    if arr.shape != (3,):
        raise ValueError(f"{kind} array must have shape (3,), got {arr.shape}")
    return arr


class Hemisphere(Enum):
    """Hemisphere of a projected coordinate."""

    NORTH = "N"
    SOUTH = "S"

    @classmethod
    def of(cls, lat: float) -> "Hemisphere":
        """Hemisphere containing a latitude; the equator counts as north."""
        return cls.NORTH if lat >= 0.0 else cls.SOUTH

    @property
    def is_north(self) -> bool:
        return self is Hemisphere.NORTH


@dataclass(frozen=True)
class LLA:
    """Geodetic coordinates relative to a reference ellipsoid.

    Attributes:
        lat: Latitude in degrees, within [-90, 90].
        lon: Longitude in degrees; any finite value is accepted and stored
            canonicalized into (-180, 180].
        alt: Height above the ellipsoid in meters.

    Raises:
        InvalidLatitudeError: If ``lat`` is outside [-90, 90].
        ValueError: If any component is not finite.

    Example:
        >>> poly = LLA(45.50439, -73.61288, 159.0)
        >>> LLA(10.0, 190.0).lon
        -170.0
    """

    lat: float
    lon: float
    alt: float = 0.0

    def __post_init__(self) -> None:
        _check_finite(lat=self.lat, lon=self.lon, alt=self.alt)
        if not -90.0 <= self.lat <= 90.0:
            raise InvalidLatitudeError(self.lat)
        object.__setattr__(self, "lat", float(self.lat))
        object.__setattr__(self, "lon", wrap_longitude(float(self.lon)))
        object.__setattr__(self, "alt", float(self.alt))

    def __iter__(self) -> Iterator[float]:
        return iter((self.lat, self.lon, self.alt))

    def to_array(self) -> NDArray[np.float64]:
        """Return [lat, lon, alt] (degrees, degrees, meters)."""
        return np.array([self.lat, self.lon, self.alt], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: Sequence[float]) -> "LLA":
        arr = _array3(arr, "LLA")
        return cls(lat=float(arr[0]), lon=float(arr[1]), alt=float(arr[2]))

    def with_alt(self, alt: float) -> "LLA":
        """Same horizontal position at another altitude."""
        return LLA(self.lat, self.lon, alt)

    def __repr__(self) -> str:
        return f"LLA(lat={self.lat}°, lon={self.lon}°, alt={self.alt} m)"


class _Cartesian3:
    """Shared behaviour of the three-component Cartesian value types."""

    _fields: tuple = ()

    def __post_init__(self) -> None:
        values = {name: getattr(self, name) for name in self._fields}
        _check_finite(**values)
        for name, value in values.items():
            object.__setattr__(self, name, float(value))

    def __iter__(self) -> Iterator[float]:
        return iter(tuple(getattr(self, name) for name in self._fields))

    def to_array(self) -> NDArray[np.float64]:
        return np.array(list(self), dtype=np.float64)

    @classmethod
    def from_array(cls, arr: Sequence[float]):
        arr = _array3(arr, cls.__name__)
        return cls(*(float(v) for v in arr))

    def norm(self) -> float:
        """Euclidean length of the vector in meters."""
        return float(np.linalg.norm(self.to_array()))


@dataclass(frozen=True)
class ECEF(_Cartesian3):
    """Earth-Centered Earth-Fixed Cartesian coordinates in meters."""

    x: float
    y: float
    z: float

    _fields = ("x", "y", "z")


@dataclass(frozen=True)
class ENU(_Cartesian3):
    """East-North-Up offset from a local origin, in meters."""

    e: float
    n: float
    u: float

    _fields = ("e", "n", "u")

    def to_ned(self) -> "NED":
        return NED(n=self.n, e=self.e, d=-self.u)


@dataclass(frozen=True)
class NED(_Cartesian3):
    """North-East-Down offset from a local origin, in meters."""

    n: float
    e: float
    d: float

    _fields = ("n", "e", "d")

    def to_enu(self) -> ENU:
        return ENU(e=self.e, n=self.n, u=-self.d)


@dataclass(frozen=True)
class UTMZ:
    """UTM coordinates with their zone.

    Attributes:
        easting: Easting in meters, including the 500 km false easting.
        northing: Northing in meters, including the 10000 km false
            northing in the southern hemisphere.
        alt: Height above the ellipsoid in meters (not projected).
        zone: UTM zone number, 1..60.
        hemisphere: Hemisphere.NORTH or Hemisphere.SOUTH.
    """

    easting: float
    northing: float
    alt: float
    zone: int
    hemisphere: Hemisphere

    def __post_init__(self) -> None:
        _check_finite(easting=self.easting, northing=self.northing, alt=self.alt)
        if int(self.zone) != self.zone or not 1 <= self.zone <= 60:
            raise ValueError(f"UTM zone must be an integer in 1..60, got {self.zone}")
        if not isinstance(self.hemisphere, Hemisphere):
            object.__setattr__(self, "hemisphere", Hemisphere(self.hemisphere))
        object.__setattr__(self, "zone", int(self.zone))

    @property
    def is_north(self) -> bool:
        return self.hemisphere.is_north

    def to_array(self) -> NDArray[np.float64]:
        """Return [easting, northing, alt]; zone and hemisphere are dropped."""
        return np.array([self.easting, self.northing, self.alt], dtype=np.float64)

    def __repr__(self) -> str:
        return (
            f"UTMZ({self.zone}{self.hemisphere.value}: E={self.easting:.3f}, "
            f"N={self.northing:.3f}, alt={self.alt})"
        )


@dataclass(frozen=True)
class UPS:
    """Universal Polar Stereographic coordinates.

    Attributes:
        easting: Easting in meters, including the 2000 km false easting.
        northing: Northing in meters, including the 2000 km false northing.
        alt: Height above the ellipsoid in meters.
        hemisphere: Polar cap the point belongs to.
    """

    easting: float
    northing: float
    alt: float
    hemisphere: Hemisphere

    def __post_init__(self) -> None:
        _check_finite(easting=self.easting, northing=self.northing, alt=self.alt)
        if not isinstance(self.hemisphere, Hemisphere):
            object.__setattr__(self, "hemisphere", Hemisphere(self.hemisphere))

    @property
    def is_north(self) -> bool:
        return self.hemisphere.is_north

    def to_array(self) -> NDArray[np.float64]:
        return np.array([self.easting, self.northing, self.alt], dtype=np.float64)


@dataclass(frozen=True)
class Spherical:
    """Range/azimuth/elevation measurement in a sensor's Cartesian frame.

    Azimuth is measured in the x-y plane from +x towards +y; elevation is
    measured from the x-y plane towards +z.

    Attributes:
        r: Range in meters (non-negative).
        azimuth: Azimuth in radians.
        elevation: Elevation in radians, within [-π/2, π/2].
    """

    r: float
    azimuth: float
    elevation: float

    def __post_init__(self) -> None:
        _check_finite(r=self.r, azimuth=self.azimuth, elevation=self.elevation)
        if self.r < 0:
            raise ValueError(f"Range must be non-negative, got {self.r}")
        if abs(self.elevation) > np.pi / 2.0 + 1e-12:
            raise ValueError(
                f"Elevation must be within [-pi/2, pi/2], got {self.elevation}"
            )

    def __iter__(self) -> Iterator[float]:
        return iter((self.r, self.azimuth, self.elevation))

    def to_array(self) -> NDArray[np.float64]:
        return np.array([self.r, self.azimuth, self.elevation], dtype=np.float64)


VectorLike = Union[Sequence[float], NDArray[np.float64], ECEF, ENU, NED]


def as_vector(value: VectorLike) -> NDArray[np.float64]:
    """Coerce a Cartesian value type or 3-sequence to a float array (3,)."""
    if isinstance(value, _Cartesian3):
        return value.to_array()
    return _array3(value, "Vector")

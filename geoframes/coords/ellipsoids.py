"""Reference ellipsoids.

An ellipsoid of revolution is fully described by its semi-major axis ``a``
and flattening ``f``; every other shape parameter is derived:

- Semi-minor axis: b = a (1 - f)
- First eccentricity squared: e² = f (2 - f)
- Second eccentricity squared: e'² = e² / (1 - e²)
- Third flattening: n = f / (2 - f)

The ellipsoids behind the registered datums form the closed set
:class:`EllipsoidName`; anything else is built directly as an
:class:`Ellipsoid`.

WGS84 parameters:
- a = 6378137.0 m
- 1/f = 298.257223563
"""

from dataclasses import dataclass
from enum import Enum

import numpy as np


class EllipsoidName(Enum):
    """Ellipsoids backing the built-in datums: value is (a [m], 1/f)."""

    WGS84 = (6378137.0, 298.257223563)
    GRS80 = (6378137.0, 298.257222101)
    AIRY1830 = (6377563.396, 299.3249646)
    CLARKE1866 = (6378206.4, 294.978698214)

    @property
    def semi_major_axis(self) -> float:
        return self.value[0]

    @property
    def inverse_flattening(self) -> float:
        return self.value[1]


@dataclass(frozen=True)
class Ellipsoid:
    """Shape of a reference ellipsoid.

    Attributes:
        a: Semi-major (equatorial) axis in meters.
        f: Flattening, 0 for a sphere.
        name: Label used in reprs and error messages.

    Raises:
        ValueError: If ``a`` is not positive or ``f`` is outside [0, 1).

    Example:
        >>> wgs = Ellipsoid.from_name(EllipsoidName.WGS84)
        >>> round(wgs.b, 6)
        6356752.314245
        >>> sphere = Ellipsoid(a=6371000.0, f=0.0, name="sphere")
        >>> sphere.e2
        0.0
    """

    a: float
    f: float
    name: str = "custom"

    def __post_init__(self) -> None:
        if not np.isfinite(self.a) or self.a <= 0:
            raise ValueError(f"Semi-major axis must be positive, got {self.a}")
        if not np.isfinite(self.f) or not 0.0 <= self.f < 1.0:
            raise ValueError(f"Flattening must be within [0, 1), got {self.f}")

    @classmethod
    def from_name(cls, name: EllipsoidName) -> "Ellipsoid":
        return cls.from_inverse_flattening(
            name.semi_major_axis, name.inverse_flattening, name=name.name
        )

    @classmethod
    def from_inverse_flattening(
        cls, a: float, inverse_flattening: float, name: str = "custom"
    ) -> "Ellipsoid":
        """Build from ``a`` and ``1/f``; an infinite ``1/f`` gives a sphere."""
        f = 0.0 if np.isinf(inverse_flattening) else 1.0 / inverse_flattening
        return cls(a=float(a), f=f, name=name)

    @classmethod
    def from_axes(cls, a: float, b: float, name: str = "custom") -> "Ellipsoid":
        """Build from the semi-major and semi-minor axes."""
        if b <= 0 or b > a:
            raise ValueError(f"Semi-minor axis must be in (0, a], got b={b}, a={a}")
        return cls(a=float(a), f=(a - b) / a, name=name)

    @property
    def b(self) -> float:
        """Semi-minor (polar) axis in meters."""
        return self.a * (1.0 - self.f)

    @property
    def e2(self) -> float:
        """First eccentricity squared."""
        return self.f * (2.0 - self.f)

    @property
    def e(self) -> float:
        """First eccentricity."""
        return float(np.sqrt(self.e2))

    @property
    def ep2(self) -> float:
        """Second eccentricity squared."""
        return self.e2 / (1.0 - self.e2)

    @property
    def n(self) -> float:
        """Third flattening, the expansion parameter of the UTM series."""
        return self.f / (2.0 - self.f)

    @property
    def inverse_flattening(self) -> float:
        return float("inf") if self.f == 0.0 else 1.0 / self.f

    def prime_vertical_radius(self, lat_rad: float) -> float:
        """Radius of curvature N in the prime vertical at a latitude (radians)."""
        return self.a / np.sqrt(1.0 - self.e2 * np.sin(lat_rad) ** 2)

    def meridional_radius(self, lat_rad: float) -> float:
        """Radius of curvature M in the meridian at a latitude (radians)."""
        w2 = 1.0 - self.e2 * np.sin(lat_rad) ** 2
        return self.a * (1.0 - self.e2) / (w2 * np.sqrt(w2))

    def __repr__(self) -> str:
        return f"Ellipsoid({self.name}: a={self.a}, 1/f={self.inverse_flattening})"

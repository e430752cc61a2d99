"""Spherical <-> Cartesian conversion for sensor measurements.

A range/azimuth/elevation measurement maps to the sensor frame as

    x = r cos(el) cos(az)
    y = r cos(el) sin(az)
    z = r sin(el)
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray

from geoframes.coords.frames import FrameType
from geoframes.coords.types import Spherical, as_vector
from geoframes.transforms.base import Transform


class CartesianFromSpherical(Transform):
    """Spherical measurement -> Cartesian vector in the measuring frame."""

    source = FrameType.SPHERICAL
    target = FrameType.CARTESIAN

    def __call__(self, s: Any) -> NDArray[np.float64]:
        if not isinstance(s, Spherical):
            s = Spherical(*s)
        cos_el = np.cos(s.elevation)
        return np.array(
            [
                s.r * cos_el * np.cos(s.azimuth),
                s.r * cos_el * np.sin(s.azimuth),
                s.r * np.sin(s.elevation),
            ],
            dtype=np.float64,
        )

    def inverse(self) -> "SphericalFromCartesian":
        return SphericalFromCartesian()

    def __eq__(self, other: object) -> bool:
        return type(other) is CartesianFromSpherical

    def __hash__(self) -> int:
        return hash(CartesianFromSpherical)

    def __repr__(self) -> str:
        return "CartesianFromSpherical()"


class SphericalFromCartesian(Transform):
    """Cartesian vector -> spherical measurement.

    At the origin the angles are undefined and reported as 0; straight
    up or down the azimuth is reported as 0.
    """

    source = FrameType.CARTESIAN
    target = FrameType.SPHERICAL

    def __call__(self, v: Any) -> Spherical:
        x, y, z = as_vector(v)
        horizontal = np.hypot(x, y)
        r = float(np.hypot(horizontal, z))
        azimuth = float(np.arctan2(y, x)) if horizontal > 0.0 else 0.0
        elevation = float(np.arctan2(z, horizontal)) if r > 0.0 else 0.0
        return Spherical(r, azimuth, elevation)

    def inverse(self) -> CartesianFromSpherical:
        return CartesianFromSpherical()

    def __eq__(self, other: object) -> bool:
        return type(other) is SphericalFromCartesian

    def __hash__(self) -> int:
        return hash(SphericalFromCartesian)

    def __repr__(self) -> str:
        return "SphericalFromCartesian()"

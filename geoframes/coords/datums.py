"""Geodetic datums and the datum registry.

A datum pairs a reference ellipsoid with the 7-parameter Helmert
transformation that takes its ECEF coordinates to WGS84. Converting
LLA <-> ECEF only needs the ellipsoid; the Helmert parameters are used
when moving coordinates between datums (see
:class:`geoframes.transforms.datum_shift.DatumShift`).

Built-in datums (resolved by name, case-insensitive):

- ``wgs84``: WGS84 ellipsoid, identity shift
- ``osgb36``: Airy 1830 ellipsoid, Ordnance Survey OSGB36 -> WGS84 shift
- ``nad27``: Clarke 1866 ellipsoid, CONUS mean 3-parameter shift
- ``grs80``: GRS80 ellipsoid, identity shift (GRS80 and WGS84 frames
  agree at the meter level)

The registry is built once at import and is read-only afterwards.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from geoframes.coords.ellipsoids import Ellipsoid, EllipsoidName
from geoframes.errors import UnknownDatumError

ARCSEC_TO_RAD = np.pi / (180.0 * 3600.0)


@dataclass(frozen=True)
class HelmertParameters:
    """Seven-parameter similarity transform, position-vector convention.

    X_wgs84 = T + (1 + s) R X_datum, with the small-angle rotation

        R = [[  1, -rz,  ry],
             [ rz,   1, -rx],
             [-ry,  rx,   1]]

    Attributes:
        tx, ty, tz: Translation in meters.
        rx, ry, rz: Rotations in arc-seconds.
        scale_ppm: Scale change s in parts per million.
    """

    tx: float = 0.0
    ty: float = 0.0
    tz: float = 0.0
    rx: float = 0.0
    ry: float = 0.0
    rz: float = 0.0
    scale_ppm: float = 0.0

    @property
    def is_identity(self) -> bool:
        return all(
            v == 0.0
            for v in (self.tx, self.ty, self.tz, self.rx, self.ry, self.rz, self.scale_ppm)
        )

    def translation(self) -> NDArray[np.float64]:
        return np.array([self.tx, self.ty, self.tz], dtype=np.float64)

    def matrix(self) -> NDArray[np.float64]:
        """Scaled rotation matrix (1 + s) R."""
        rx = self.rx * ARCSEC_TO_RAD
        ry = self.ry * ARCSEC_TO_RAD
        rz = self.rz * ARCSEC_TO_RAD
        R = np.array(
            [
                [1.0, -rz, ry],
                [rz, 1.0, -rx],
                [-ry, rx, 1.0],
            ],
            dtype=np.float64,
        )
        return (1.0 + self.scale_ppm * 1e-6) * R


@dataclass(frozen=True)
class Datum:
    """A named reference ellipsoid plus its shift to WGS84.

    Attributes:
        name: Datum name (registry key for built-in datums).
        ellipsoid: Reference ellipsoid used for LLA <-> ECEF.
        to_wgs84: Helmert parameters from this datum's ECEF frame to WGS84.
    """

    name: str
    ellipsoid: Ellipsoid
    to_wgs84: HelmertParameters = field(default_factory=HelmertParameters)

    def __repr__(self) -> str:
        return f"Datum({self.name}, {self.ellipsoid.name})"


class DatumRegistry(Mapping):
    """Read-only name -> Datum mapping.

    Example:
        >>> registry = DatumRegistry.default()
        >>> registry.get("WGS84").ellipsoid.a
        6378137.0
        >>> "nad27" in registry
        True
    """

    def __init__(self, datums: Mapping[str, Datum]) -> None:
        self._datums = MappingProxyType({k.lower(): v for k, v in datums.items()})

    @classmethod
    def default(cls) -> "DatumRegistry":
        """Registry holding the built-in datums."""
        return cls(
            {
                "wgs84": Datum("wgs84", Ellipsoid.from_name(EllipsoidName.WGS84)),
                "osgb36": Datum(
                    "osgb36",
                    Ellipsoid.from_name(EllipsoidName.AIRY1830),
                    # Ordnance Survey, "A guide to coordinate systems in Great Britain"
                    HelmertParameters(
                        tx=446.448,
                        ty=-125.157,
                        tz=542.060,
                        rx=0.1502,
                        ry=0.2470,
                        rz=0.8421,
                        scale_ppm=-20.4894,
                    ),
                ),
                "nad27": Datum(
                    "nad27",
                    Ellipsoid.from_name(EllipsoidName.CLARKE1866),
                    HelmertParameters(tx=-8.0, ty=160.0, tz=176.0),
                ),
                "grs80": Datum("grs80", Ellipsoid.from_name(EllipsoidName.GRS80)),
            }
        )

    def get(self, name: str) -> Datum:  # type: ignore[override]
        """Datum registered under ``name``.

        Raises:
            UnknownDatumError: If no datum is registered under that name.
        """
        try:
            return self._datums[name.lower()]
        except KeyError:
            raise UnknownDatumError(name, self.names()) from None

    def __getitem__(self, name: str) -> Datum:
        return self.get(name)

    def __iter__(self) -> Iterator[str]:
        return iter(self._datums)

    def __len__(self) -> int:
        return len(self._datums)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._datums

    def names(self) -> Tuple[str, ...]:
        return tuple(self._datums)


DATUMS = DatumRegistry.default()

wgs84 = DATUMS.get("wgs84")
osgb36 = DATUMS.get("osgb36")
nad27 = DATUMS.get("nad27")
grs80 = DATUMS.get("grs80")

DatumLike = Union[Datum, Ellipsoid, str]


def resolve_datum(datum: DatumLike) -> Datum:
    """Turn a datum, registry name or bare ellipsoid into a Datum.

    A bare ellipsoid becomes a custom datum with an identity shift.

    Raises:
        UnknownDatumError: For unregistered names.
        TypeError: For anything else.
    """
    if isinstance(datum, Datum):
        return datum
    if isinstance(datum, str):
        return DATUMS.get(datum)
    if isinstance(datum, Ellipsoid):
        return Datum(datum.name, datum)
    raise TypeError(f"Expected a Datum, Ellipsoid or datum name, got {type(datum)}")

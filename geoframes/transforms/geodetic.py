"""Geodetic conversions expressed as composable transforms.

Each transform captures its datum (and origin or zone where relevant)
at construction, so it can be built once and applied to many points:

    >>> to_enu = enu_from_lla(LLA(45.50439, -73.61288, 159.0), wgs84)
    >>> to_enu(LLA(46.829853, -71.254028, 74.0))   # Quebec City
    >>> to_enu.inverse()(ENU(100.0, 0.0, 0.0))      # back to LLA

Conversions provided, each with its inverse:

- ECEFFromLLA / LLAFromECEF
- ENUFromECEF / ECEFFromENU, NEDFromECEF / ECEFFromNED
- UTMZFromLLA / LLAFromUTMZ (automatic zone)
- UTMFromLLA / LLAFromUTM (fixed zone and hemisphere)
- UPSFromLLA / LLAFromUPS
- enu_from_lla, lla_from_enu, ned_from_lla, lla_from_ned (composed)
"""

from typing import Any, Tuple

import numpy as np
from numpy.typing import NDArray

from geoframes.config import DEFAULT_SOLVER_CONFIG, SolverConfig
from geoframes.coords import local_frames
from geoframes.coords.datums import Datum, DatumLike, resolve_datum
from geoframes.coords.frames import FrameType
from geoframes.coords.geodetic import ecef_to_lla, lla_to_ecef
from geoframes.coords.types import ECEF, ENU, LLA, NED, UPS, UTMZ, Hemisphere, as_vector
from geoframes.coords.ups import lla_to_ups, ups_to_lla
from geoframes.coords.utm import lla_to_utm, lla_to_utmz, utm_to_lla
from geoframes.transforms.base import Transform, compose


def _as_lla(x: Any) -> LLA:
    if isinstance(x, LLA):
        return x
    return LLA(*x)


class DatumTransform(Transform):
    """Transform bound to a datum; equality is by type and parameters."""

    def __init__(self, datum: DatumLike) -> None:
        self.datum: Datum = resolve_datum(datum)

    def _key(self) -> Tuple[Any, ...]:
        return (self.datum,)

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and other._key() == self._key()

    def __hash__(self) -> int:
        return hash((type(self), self._key()))

    def __repr__(self) -> str:
        params = ", ".join(repr(k) for k in self._key())
        return f"{type(self).__name__}({params})"


class ECEFFromLLA(DatumTransform):
    """LLA -> ECEF on a datum."""

    source = FrameType.LLA
    target = FrameType.ECEF

    def __call__(self, lla: Any) -> ECEF:
        return lla_to_ecef(_as_lla(lla), self.datum)

    def inverse(self) -> "LLAFromECEF":
        return LLAFromECEF(self.datum)


class LLAFromECEF(DatumTransform):
    """ECEF -> LLA on a datum."""

    source = FrameType.ECEF
    target = FrameType.LLA

    def __init__(self, datum: DatumLike, config: SolverConfig = DEFAULT_SOLVER_CONFIG) -> None:
        super().__init__(datum)
        self.config = config

    def _key(self) -> Tuple[Any, ...]:
        return (self.datum, self.config)

    def __call__(self, ecef: Any) -> LLA:
        if not isinstance(ecef, ECEF):
            ecef = ECEF.from_array(as_vector(ecef))
        return ecef_to_lla(ecef, self.datum, self.config)

    def inverse(self) -> ECEFFromLLA:
        return ECEFFromLLA(self.datum)


class _LocalFrameTransform(DatumTransform):
    """Shared state of the ENU/NED transforms: origin, rotation, origin ECEF."""

    def __init__(self, origin: Any, datum: DatumLike) -> None:
        super().__init__(datum)
        self.origin = _as_lla(origin)
        R, origin_ecef = local_frames.local_frame(self.origin, self.datum)
        R.flags.writeable = False
        self._rotation = R
        self._origin_ecef = origin_ecef.to_array()

    @property
    def rotation(self) -> NDArray[np.float64]:
        """ECEF -> ENU rotation at the origin."""
        return self._rotation

    @property
    def origin_ecef(self) -> ECEF:
        return ECEF.from_array(self._origin_ecef)

    def _key(self) -> Tuple[Any, ...]:
        return (self.origin, self.datum)


class ENUFromECEF(_LocalFrameTransform):
    """ECEF -> ENU relative to an LLA origin.

    Raises:
        DegenerateFrameError: At construction, if the origin is a pole.
    """

    source = FrameType.ECEF
    target = FrameType.ENU

    def __call__(self, ecef: Any) -> ENU:
        return ENU.from_array(self._rotation @ (as_vector(ecef) - self._origin_ecef))

    def inverse(self) -> "ECEFFromENU":
        return ECEFFromENU(self.origin, self.datum)


class ECEFFromENU(_LocalFrameTransform):
    """ENU (or any Cartesian 3-vector) relative to an origin -> ECEF."""

    source = FrameType.ENU
    target = FrameType.ECEF

    def __call__(self, enu: Any) -> ECEF:
        return ECEF.from_array(self._origin_ecef + self._rotation.T @ as_vector(enu))

    def inverse(self) -> ENUFromECEF:
        return ENUFromECEF(self.origin, self.datum)


class NEDFromECEF(_LocalFrameTransform):
    """ECEF -> NED relative to an LLA origin."""

    source = FrameType.ECEF
    target = FrameType.NED

    def __call__(self, ecef: Any) -> NED:
        enu = self._rotation @ (as_vector(ecef) - self._origin_ecef)
        return NED.from_array(local_frames.ENU_TO_NED @ enu)

    def inverse(self) -> "ECEFFromNED":
        return ECEFFromNED(self.origin, self.datum)


class ECEFFromNED(_LocalFrameTransform):
    """NED (or any Cartesian 3-vector) relative to an origin -> ECEF."""

    source = FrameType.NED
    target = FrameType.ECEF

    def __call__(self, ned: Any) -> ECEF:
        enu = local_frames.ENU_TO_NED.T @ as_vector(ned)
        return ECEF.from_array(self._origin_ecef + self._rotation.T @ enu)

    def inverse(self) -> NEDFromECEF:
        return NEDFromECEF(self.origin, self.datum)


class UTMZFromLLA(DatumTransform):
    """LLA -> UTM in the zone and hemisphere of each point."""

    source = FrameType.LLA
    target = FrameType.UTM

    def __call__(self, lla: Any) -> UTMZ:
        return lla_to_utmz(_as_lla(lla), self.datum)

    def inverse(self) -> "LLAFromUTMZ":
        return LLAFromUTMZ(self.datum)


class LLAFromUTMZ(DatumTransform):
    """UTM (zone carried by each point) -> LLA."""

    source = FrameType.UTM
    target = FrameType.LLA

    def __call__(self, utmz: UTMZ) -> LLA:
        return utm_to_lla(utmz, self.datum)

    def inverse(self) -> UTMZFromLLA:
        return UTMZFromLLA(self.datum)


class UTMFromLLA(DatumTransform):
    """LLA -> UTM in a fixed zone and hemisphere."""

    source = FrameType.LLA
    target = FrameType.UTM

    def __init__(self, zone: int, hemisphere: Hemisphere, datum: DatumLike) -> None:
        super().__init__(datum)
        if int(zone) != zone or not 1 <= zone <= 60:
            raise ValueError(f"UTM zone must be an integer in 1..60, got {zone}")
        self.zone = int(zone)
        self.hemisphere = Hemisphere(hemisphere)

    def _key(self) -> Tuple[Any, ...]:
        return (self.zone, self.hemisphere, self.datum)

    def __call__(self, lla: Any) -> UTMZ:
        return lla_to_utm(_as_lla(lla), self.zone, self.hemisphere, self.datum)

    def inverse(self) -> "LLAFromUTM":
        return LLAFromUTM(self.zone, self.hemisphere, self.datum)


class LLAFromUTM(UTMFromLLA):
    """UTM in a fixed zone and hemisphere -> LLA.

    Accepts UTMZ values (whose zone must match) or (easting, northing,
    alt) sequences.
    """

    source = FrameType.UTM
    target = FrameType.LLA

    def __call__(self, utm: Any) -> LLA:
        if isinstance(utm, UTMZ):
            if (utm.zone, utm.hemisphere) != (self.zone, self.hemisphere):
                raise ValueError(
                    f"Point is in zone {utm.zone}{utm.hemisphere.value}, transform "
                    f"expects {self.zone}{self.hemisphere.value}"
                )
        else:
            easting, northing, alt = as_vector(utm)
            utm = UTMZ(easting, northing, alt, self.zone, self.hemisphere)
        return utm_to_lla(utm, self.datum)

    def inverse(self) -> UTMFromLLA:
        return UTMFromLLA(self.zone, self.hemisphere, self.datum)


class UPSFromLLA(DatumTransform):
    """LLA (polar caps) -> UPS."""

    source = FrameType.LLA
    target = FrameType.UPS

    def __call__(self, lla: Any) -> UPS:
        return lla_to_ups(_as_lla(lla), self.datum)

    def inverse(self) -> "LLAFromUPS":
        return LLAFromUPS(self.datum)


class LLAFromUPS(DatumTransform):
    """UPS -> LLA."""

    source = FrameType.UPS
    target = FrameType.LLA

    def __call__(self, ups: UPS) -> LLA:
        return ups_to_lla(ups, self.datum)

    def inverse(self) -> UPSFromLLA:
        return UPSFromLLA(self.datum)


def enu_from_lla(origin: LLA, datum: DatumLike) -> Transform:
    """LLA -> ENU about ``origin``: ENUFromECEF ∘ ECEFFromLLA."""
    return compose(ENUFromECEF(origin, datum), ECEFFromLLA(datum))


def lla_from_enu(origin: LLA, datum: DatumLike) -> Transform:
    """ENU about ``origin`` -> LLA: LLAFromECEF ∘ ECEFFromENU."""
    return compose(LLAFromECEF(datum), ECEFFromENU(origin, datum))


def ned_from_lla(origin: LLA, datum: DatumLike) -> Transform:
    """LLA -> NED about ``origin``."""
    return compose(NEDFromECEF(origin, datum), ECEFFromLLA(datum))


def lla_from_ned(origin: LLA, datum: DatumLike) -> Transform:
    """NED about ``origin`` -> LLA."""
    return compose(LLAFromECEF(datum), ECEFFromNED(origin, datum))

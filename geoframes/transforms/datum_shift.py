"""Moving ECEF coordinates between datums.

Every datum carries the Helmert parameters that take its ECEF frame to
WGS84, so a shift between two datums goes through WGS84:

    X_target = H_target⁻¹(H_source(X_source))

Both legs are affine maps and are folded into a single one. To move a
geodetic position, chain it with the LLA conversions:

    >>> shift = compose(LLAFromECEF(wgs84), DatumShift(osgb36, wgs84), ECEFFromLLA(osgb36))
"""

from typing import Any

from geoframes.coords.datums import Datum, DatumLike, HelmertParameters, resolve_datum
from geoframes.coords.frames import FrameType
from geoframes.coords.types import ECEF
from geoframes.transforms.affine import AffineMap
from geoframes.transforms.base import Transform


def helmert_affine(params: HelmertParameters) -> AffineMap:
    """ECEF -> ECEF affine map applying ``params``."""
    return AffineMap(
        params.matrix(),
        params.translation(),
        source=FrameType.ECEF,
        target=FrameType.ECEF,
    )


class DatumShift(Transform):
    """ECEF in ``source_datum`` -> ECEF in ``target_datum``.

    Args:
        source_datum: Datum of the input coordinates.
        target_datum: Datum of the output coordinates.
    """

    source = FrameType.ECEF
    target = FrameType.ECEF

    def __init__(self, source_datum: DatumLike, target_datum: DatumLike) -> None:
        self.source_datum: Datum = resolve_datum(source_datum)
        self.target_datum: Datum = resolve_datum(target_datum)
        to_wgs84 = helmert_affine(self.source_datum.to_wgs84)
        from_wgs84 = helmert_affine(self.target_datum.to_wgs84).inverse()
        self._affine = from_wgs84.combine(to_wgs84)

    @property
    def affine(self) -> AffineMap:
        """The single affine map equivalent to this shift."""
        return self._affine

    @property
    def is_identity(self) -> bool:
        return self.source_datum.to_wgs84 == self.target_datum.to_wgs84

    def __call__(self, ecef: Any) -> ECEF:
        if self.is_identity:
            return ecef if isinstance(ecef, ECEF) else ECEF.from_array(ecef)
        return ECEF.from_array(self._affine(ecef))

    def inverse(self) -> "DatumShift":
        return DatumShift(self.target_datum, self.source_datum)

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, DatumShift)
            and other.source_datum == self.source_datum
            and other.target_datum == self.target_datum
        )

    def __hash__(self) -> int:
        return hash((DatumShift, self.source_datum, self.target_datum))

    def __repr__(self) -> str:
        return f"DatumShift({self.source_datum.name} -> {self.target_datum.name})"

"""Error types raised by geoframes.

Every error derives from :class:`GeodesyError`, itself a ``ValueError``,
so callers that already guard numeric input with ``except ValueError``
keep working. Each error carries the offending quantity as an attribute
so it can be inspected without parsing the message.
"""

from typing import Iterable, Optional


class GeodesyError(ValueError):
    """Base class for all geoframes errors."""


class InvalidLatitudeError(GeodesyError):
    """Latitude outside [-90, 90] degrees."""

    def __init__(self, lat: float) -> None:
        self.lat = lat
        super().__init__(f"Latitude must be within [-90, 90] degrees, got {lat}")


class UnknownDatumError(GeodesyError, KeyError):
    """Datum name not present in the registry."""

    def __init__(self, name: str, known: Iterable[str] = ()) -> None:
        self.name = name
        self.known = tuple(known)
        super().__init__(
            f"Unknown datum '{name}'. Registered datums: {', '.join(self.known)}"
        )

    def __str__(self) -> str:
        # KeyError would otherwise quote the whole message.
        return str(self.args[0])


class OutOfProjectionRangeError(GeodesyError):
    """Latitude outside the validity band of a map projection."""

    projection = "projection"

    def __init__(self, lat: float, lower: float, upper: float) -> None:
        self.lat = lat
        self.lower = lower
        self.upper = upper
        super().__init__(
            f"Latitude {lat} is outside the {self.projection} validity band "
            f"[{lower}, {upper}]"
        )


class OutOfUTMRangeError(OutOfProjectionRangeError):
    """Latitude beyond the UTM band (80°S to 84°N)."""

    projection = "UTM"


class OutOfUPSRangeError(OutOfProjectionRangeError):
    """Latitude outside the polar caps covered by UPS."""

    projection = "UPS"


class NonConvergenceError(GeodesyError):
    """An iterative solver hit its iteration cap without converging."""

    def __init__(self, what: str, iterations: int, residual: Optional[float] = None) -> None:
        self.what = what
        self.iterations = iterations
        self.residual = residual
        super().__init__(
            f"{what} did not converge after {iterations} iterations "
            f"(last residual {residual})"
        )


class DegenerateFrameError(GeodesyError):
    """Local tangent frame requested at a point where it is ill-defined."""

    def __init__(self, lat: float) -> None:
        self.lat = lat
        super().__init__(
            f"Local tangent frame is degenerate at latitude {lat}: "
            "east/north directions are undefined at the poles"
        )


class NonInvertibleTransformError(GeodesyError):
    """Transform has no (well-defined) inverse."""


class FrameMismatchError(GeodesyError):
    """Composed transforms disagree on the frame passed between them."""

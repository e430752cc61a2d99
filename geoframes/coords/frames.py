"""Frame tags carried by transforms.

Every transform declares the frame it consumes (``source``) and the frame
it produces (``target``). Composition checks adjacent tags with
:func:`frames_compatible` so that, for example, a UTM transform cannot be
fed the output of an ENU transform by mistake.

- ECEF: Earth-Centered Earth-Fixed Cartesian frame
- LLA: Latitude-Longitude-Altitude geodetic coordinates
- ENU / NED: local tangent planes anchored at an origin
- UTM / UPS: map projections
- SPHERICAL: range/azimuth/elevation sensor measurements
- BODY / SENSOR: vehicle and sensor-mounted Cartesian frames
- CARTESIAN: any 3D Cartesian vector, frame left to the caller
- ANY: no constraint (wrapped user functions)
"""

from enum import Enum
from typing import NamedTuple


class FrameType(Enum):
    """Coordinate frames a transform can consume or produce."""

    ECEF = "ecef"
    LLA = "lla"
    ENU = "enu"
    NED = "ned"
    UTM = "utm"
    UPS = "ups"
    SPHERICAL = "spherical"
    BODY = "body"
    SENSOR = "sensor"
    CARTESIAN = "cartesian"
    ANY = "any"


CARTESIAN_FRAMES = frozenset(
    {
        FrameType.ECEF,
        FrameType.ENU,
        FrameType.NED,
        FrameType.BODY,
        FrameType.SENSOR,
        FrameType.CARTESIAN,
    }
)


def frames_compatible(produced: FrameType, expected: FrameType) -> bool:
    """Whether a value in frame ``produced`` may feed a consumer of ``expected``.

    Equal tags always match and ``ANY`` matches everything. The generic
    ``CARTESIAN`` tag matches any Cartesian frame, which lets rigid affine
    maps sit between local frames without re-tagging.
    """
    if FrameType.ANY in (produced, expected) or produced == expected:
        return True
    if FrameType.CARTESIAN in (produced, expected):
        return produced in CARTESIAN_FRAMES and expected in CARTESIAN_FRAMES
    return False


class Frame(NamedTuple):
    """A frame tag with a human-readable axis description."""

    frame_type: FrameType
    description: str

    def __repr__(self) -> str:
        return f"Frame({self.frame_type.value}: {self.description})"


FRAME_ECEF = Frame(
    FrameType.ECEF,
    "Earth-Centered Earth-Fixed (x=0°N 0°E, y=0°N 90°E, z=North Pole)",
)

FRAME_LLA = Frame(
    FrameType.LLA,
    "Geodetic latitude/longitude (deg) and height above the ellipsoid (m)",
)

FRAME_ENU = Frame(
    FrameType.ENU,
    "East-North-Up local tangent plane (x=East, y=North, z=Up)",
)

FRAME_NED = Frame(
    FrameType.NED,
    "North-East-Down local tangent plane (x=North, y=East, z=Down)",
)

FRAME_BODY = Frame(
    FrameType.BODY,
    "Vehicle frame (x=forward, y=right, z=down)",
)

FRAME_SENSOR = Frame(
    FrameType.SENSOR,
    "Sensor-mounted Cartesian frame",
)

FRAMES = {
    frame.frame_type: frame
    for frame in (FRAME_ECEF, FRAME_LLA, FRAME_ENU, FRAME_NED, FRAME_BODY, FRAME_SENSOR)
}

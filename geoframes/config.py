"""Numeric constants and solver configuration.

Projection constants follow the published UTM/UPS definitions (NGA
standard NGA.SIG.0012). Iterative solvers take a :class:`SolverConfig`
explicitly; :data:`DEFAULT_SOLVER_CONFIG` is used when none is given.
"""

from dataclasses import dataclass

# UTM
UTM_SCALE_FACTOR = 0.9996
UTM_FALSE_EASTING = 500000.0  # m
UTM_FALSE_NORTHING_SOUTH = 10000000.0  # m
UTM_MIN_LAT = -80.0  # deg
UTM_MAX_LAT = 84.0  # deg
UTM_ZONE_WIDTH = 6.0  # deg
UTM_BAND_LETTERS = "CDEFGHJKLMNPQRSTUVWX"
# Forced-zone projections this far from the central meridian lose accuracy
UTM_WARN_OFFSET_DEG = 9.0

# UPS
UPS_SCALE_FACTOR = 0.994
UPS_FALSE_EASTING = 2000000.0  # m
UPS_FALSE_NORTHING = 2000000.0  # m
UPS_NORTH_MIN_LAT = 83.5  # deg
UPS_SOUTH_MAX_LAT = -79.5  # deg

# Poles: |lat| within this of 90° is treated as exactly at the pole (deg)
POLE_TOLERANCE_DEG = 1e-12


@dataclass(frozen=True)
class SolverConfig:
    """Settings for iterative geodetic solvers.

    Attributes:
        tolerance: Convergence threshold on successive latitude (or
            longitude difference) iterates, in radians.
        max_iterations: Hard cap on iterations. Reaching it without
            converging raises NonConvergenceError.
        polar_threshold: Distance from the polar axis (m) below which an
            ECEF point is treated as lying on the axis.
    """

    tolerance: float = 1e-12
    max_iterations: int = 10
    polar_threshold: float = 1e-9

    def __post_init__(self) -> None:
        if not self.tolerance > 0:
            raise ValueError(f"tolerance must be positive, got {self.tolerance}")
        if self.max_iterations < 1:
            raise ValueError(
                f"max_iterations must be at least 1, got {self.max_iterations}"
            )
        if self.polar_threshold < 0:
            raise ValueError(
                f"polar_threshold must be non-negative, got {self.polar_threshold}"
            )


DEFAULT_SOLVER_CONFIG = SolverConfig()

# Vincenty's inverse needs many more steps for long lines
GEODESIC_SOLVER_CONFIG = SolverConfig(tolerance=1e-12, max_iterations=200)

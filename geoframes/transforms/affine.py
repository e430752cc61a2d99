"""Affine maps between Cartesian frames.

An affine map applies a linear part and then a translation:

    y = M @ x + t

With M a rotation this is the rigid motion that takes coordinates in a
child frame (a sensor, a vehicle) into its parent frame, where ``t`` is
the child origin expressed in the parent and M the child's orientation.

- LinearMap: t = 0
- Translation: M = I
- AffineMap: general case, with Euler/quaternion constructors
"""

import warnings
from typing import Any, Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from geoframes.coords.frames import FrameType
from geoframes.coords.rotations import (
    is_rotation_matrix,
    nearest_rotation_matrix,
    quat_to_rotation_matrix,
    rot_zyx,
    rotation_matrix_to_quat,
    rotation_matrix_to_zyx,
)
from geoframes.coords.types import as_vector
from geoframes.errors import NonInvertibleTransformError
from geoframes.transforms.base import Transform

# Condition number beyond which inverting the linear part is unreliable
ILL_CONDITIONED = 1e12


def _readonly(arr: NDArray[np.float64]) -> NDArray[np.float64]:
    arr = np.array(arr, dtype=np.float64)
    arr.flags.writeable = False
    return arr


class AffineMap(Transform):
    """Linear map followed by a translation on 3D vectors.

    Args:
        linear: 3x3 matrix M.
        translation: 3-vector t.
        source: Frame of the input vectors.
        target: Frame of the output vectors.

    Raises:
        ValueError: If shapes are wrong or values are not finite.

    Example:
        >>> sensor_to_vehicle = AffineMap.from_euler(
        ...     np.pi / 3, np.pi / 5, -np.pi / 4, [1.0, 2.0, 0.5]
        ... )
        >>> sensor_to_vehicle([0.0, 0.0, 10.0])
    """

    def __init__(
        self,
        linear: Sequence[Sequence[float]],
        translation: Sequence[float] = (0.0, 0.0, 0.0),
        source: FrameType = FrameType.CARTESIAN,
        target: FrameType = FrameType.CARTESIAN,
    ) -> None:
        linear = np.asarray(linear, dtype=np.float64)
        if linear.shape != (3, 3):
            raise ValueError(f"Linear part must have shape (3, 3), got {linear.shape}")
        translation = as_vector(translation)
        if not (np.all(np.isfinite(linear)) and np.all(np.isfinite(translation))):
            raise ValueError("Affine map entries must be finite")
        self._linear = _readonly(linear)
        self._translation = _readonly(translation)
        self.source = source
        self.target = target

    @classmethod
    def from_euler(
        cls,
        yaw: float,
        pitch: float,
        roll: float,
        translation: Sequence[float] = (0.0, 0.0, 0.0),
        source: FrameType = FrameType.CARTESIAN,
        target: FrameType = FrameType.CARTESIAN,
    ) -> "AffineMap":
        """Rigid map with orientation Rz(yaw) Ry(pitch) Rx(roll)."""
        return cls(rot_zyx(yaw, pitch, roll), translation, source, target)

    @classmethod
    def from_quaternion(
        cls,
        q: Sequence[float],
        translation: Sequence[float] = (0.0, 0.0, 0.0),
        source: FrameType = FrameType.CARTESIAN,
        target: FrameType = FrameType.CARTESIAN,
    ) -> "AffineMap":
        """Rigid map with orientation given by quaternion [qw, qx, qy, qz].

        A non-unit quaternion is normalized with a warning.
        """
        q = np.asarray(q, dtype=np.float64)
        norm = np.linalg.norm(q)
        if norm == 0.0:
            raise ValueError("Quaternion must be non-zero")
        if abs(norm - 1.0) > 1e-6:
            warnings.warn(
                f"Quaternion norm is {norm:.6f}, not 1; normalizing.",
                UserWarning,
            )
        return cls(quat_to_rotation_matrix(q / norm), translation, source, target)

    @property
    def linear(self) -> NDArray[np.float64]:
        return self._linear

    @property
    def translation(self) -> NDArray[np.float64]:
        return self._translation

    @property
    def is_rigid(self) -> bool:
        """Whether the linear part is a proper rotation."""
        return is_rotation_matrix(self._linear)

    @property
    def euler_angles(self) -> NDArray[np.float64]:
        """[yaw, pitch, roll] of the linear part (must be a rotation)."""
        self._require_rigid()
        return rotation_matrix_to_zyx(self._linear)

    @property
    def quaternion(self) -> NDArray[np.float64]:
        """[qw, qx, qy, qz] of the linear part (must be a rotation)."""
        self._require_rigid()
        return rotation_matrix_to_quat(self._linear)

    def _require_rigid(self) -> None:
        if not self.is_rigid:
            raise ValueError("Linear part is not a rotation matrix")

    def __call__(self, x: Any) -> NDArray[np.float64]:
        return self._linear @ as_vector(x) + self._translation

    def inverse(self) -> "AffineMap":
        """Inverse map: x = M⁻¹ (y - t).

        Raises:
            NonInvertibleTransformError: If the linear part is singular.
        """
        if self.is_rigid:
            inv = self._linear.T
        else:
            if np.linalg.matrix_rank(self._linear) < 3:
                raise NonInvertibleTransformError("Linear part of the affine map is singular")
            cond = np.linalg.cond(self._linear)
            if cond > ILL_CONDITIONED:
                warnings.warn(
                    f"Inverting an ill-conditioned affine map (condition number {cond:.3g})",
                    RuntimeWarning,
                )
            inv = np.linalg.inv(self._linear)
        return AffineMap(inv, -inv @ self._translation, source=self.target, target=self.source)

    def combine(self, inner: "AffineMap") -> "AffineMap":
        """Single affine map equal to applying ``inner`` and then this map."""
        return AffineMap(
            self._linear @ inner.linear,
            self._linear @ inner.translation + self._translation,
            source=inner.source,
            target=self.target,
        )

    def orthonormalized(self) -> "AffineMap":
        """Same map with the linear part snapped to the nearest rotation."""
        return AffineMap(
            nearest_rotation_matrix(self._linear),
            self._translation,
            source=self.source,
            target=self.target,
        )

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, AffineMap)
            and np.array_equal(self._linear, other.linear)
            and np.array_equal(self._translation, other.translation)
            and (self.source, self.target) == (other.source, other.target)
        )

    def __hash__(self) -> int:
        return hash((self._linear.tobytes(), self._translation.tobytes(), self.source, self.target))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(linear={self._linear.tolist()}, "
            f"translation={self._translation.tolist()})"
        )


class LinearMap(AffineMap):
    """Affine map with zero translation."""

    def __init__(
        self,
        linear: Sequence[Sequence[float]],
        source: FrameType = FrameType.CARTESIAN,
        target: FrameType = FrameType.CARTESIAN,
    ) -> None:
        super().__init__(linear, (0.0, 0.0, 0.0), source, target)


class Translation(AffineMap):
    """Affine map with identity linear part."""

    def __init__(
        self,
        translation: Sequence[float],
        source: FrameType = FrameType.CARTESIAN,
        target: Optional[FrameType] = None,
    ) -> None:
        super().__init__(np.eye(3), translation, source, source if target is None else target)

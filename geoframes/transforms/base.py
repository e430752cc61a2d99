"""Transform composition algebra.

A :class:`Transform` is an immutable callable mapping a coordinate in its
``source`` frame to a coordinate in its ``target`` frame. Transforms
compose with :func:`compose`:

    compose(g, f)(x) == g(f(x))

Composition flattens nested chains into a single tuple of stages in
application order, so ``compose(compose(h, g), f)`` and
``compose(h, compose(g, f))`` are the same chain. A chain is invertible
when each of its stages is; its inverse applies the stage inverses in
reverse order.

Example:
    >>> to_vehicle = AffineMap.from_euler(0.3, 0.0, 0.0, [1.0, 2.0, 0.5])
    >>> pipeline = compose(to_vehicle, CartesianFromSpherical())
    >>> pipeline(Spherical(10.0, 0.0, 0.0))
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Tuple, Union

from geoframes.coords.frames import FRAMES, FrameType, frames_compatible
from geoframes.errors import FrameMismatchError, NonInvertibleTransformError


class Transform(ABC):
    """Base class of every coordinate transform.

    Subclasses implement ``__call__`` and, when an inverse exists,
    ``inverse``. ``source``/``target`` tag the frames consumed and
    produced; they are checked when transforms are composed.
    """

    source: FrameType = FrameType.ANY
    target: FrameType = FrameType.ANY

    @abstractmethod
    def __call__(self, x: Any) -> Any:
        """Apply the transform to a single coordinate."""

    def inverse(self) -> "Transform":
        """Transform undoing this one.

        Raises:
            NonInvertibleTransformError: If no inverse is available.
        """
        raise NonInvertibleTransformError(f"{type(self).__name__} has no inverse")

    @property
    def stages(self) -> Tuple["Transform", ...]:
        """Elementary transforms in application order."""
        return (self,)

    def compose(self, inner: "TransformLike") -> "Transform":
        """Transform applying ``inner`` first, then this one."""
        return compose(self, inner)

    def then(self, outer: "TransformLike") -> "Transform":
        """Transform applying this one first, then ``outer``."""
        return compose(outer, self)

    def describe(self) -> str:
        """One line per stage: name and source -> target frames."""
        lines = []
        for stage in self.stages:
            target = FRAMES.get(stage.target)
            detail = f"  [{target.description}]" if target is not None else ""
            lines.append(
                f"{type(stage).__name__}: {stage.source.value} -> {stage.target.value}{detail}"
            )
        return "\n".join(lines)


class IdentityTransform(Transform):
    """Returns its input unchanged; the neutral element of composition."""

    def __call__(self, x: Any) -> Any:
        return x

    def inverse(self) -> "IdentityTransform":
        return self

    @property
    def stages(self) -> Tuple[Transform, ...]:
        return ()

    def __eq__(self, other: object) -> bool:
        return isinstance(other, IdentityTransform)

    def __hash__(self) -> int:
        return hash(IdentityTransform)

    def __repr__(self) -> str:
        return "IdentityTransform()"


class FunctionTransform(Transform):
    """Wraps a plain callable (and optionally its inverse) as a Transform.

    Args:
        func: Forward mapping.
        inverse_func: Optional inverse mapping.
        source: Frame consumed by ``func``.
        target: Frame produced by ``func``.
        name: Label used in reprs.
    """

    def __init__(
        self,
        func: Callable[[Any], Any],
        inverse_func: Optional[Callable[[Any], Any]] = None,
        source: FrameType = FrameType.ANY,
        target: FrameType = FrameType.ANY,
        name: Optional[str] = None,
    ) -> None:
        if not callable(func):
            raise TypeError(f"Expected a callable, got {type(func)}")
        self._func = func
        self._inverse_func = inverse_func
        self.source = source
        self.target = target
        self.name = name or getattr(func, "__name__", type(func).__name__)

    def __call__(self, x: Any) -> Any:
        return self._func(x)

    def inverse(self) -> "FunctionTransform":
        if self._inverse_func is None:
            raise NonInvertibleTransformError(f"Function '{self.name}' has no inverse")
        return FunctionTransform(
            self._inverse_func,
            self._func,
            source=self.target,
            target=self.source,
            name=f"inverse({self.name})",
        )

    def __repr__(self) -> str:
        return f"FunctionTransform({self.name})"


class ComposedTransform(Transform):
    """A chain of transforms applied in order.

    Built by :func:`compose`; ``stages[0]`` is applied first.
    """

    def __init__(self, stages: Tuple[Transform, ...]) -> None:
        if len(stages) < 2:
            raise ValueError(f"A composed transform needs at least 2 stages, got {len(stages)}")
        for inner, outer in zip(stages[:-1], stages[1:]):
            if not frames_compatible(inner.target, outer.source):
                raise FrameMismatchError(
                    f"Cannot feed {type(inner).__name__} output "
                    f"({inner.target.value}) into {type(outer).__name__} "
                    f"(expects {outer.source.value})"
                )
        self._stages = tuple(stages)
        self.source = stages[0].source
        self.target = stages[-1].target

    @property
    def stages(self) -> Tuple[Transform, ...]:
        return self._stages

    def __call__(self, x: Any) -> Any:
        for stage in self._stages:
            x = stage(x)
        return x

    def inverse(self) -> Transform:
        return compose(*(stage.inverse() for stage in self._stages))

    def __eq__(self, other: object) -> bool:
        return isinstance(other, ComposedTransform) and self._stages == other._stages

    def __hash__(self) -> int:
        return hash(self._stages)

    def __repr__(self) -> str:
        inner = " ∘ ".join(repr(stage) for stage in reversed(self._stages))
        return f"ComposedTransform({inner})"


TransformLike = Union[Transform, Callable[[Any], Any]]


def as_transform(t: TransformLike) -> Transform:
    """Return ``t`` itself if it is a Transform, else wrap the callable."""
    if isinstance(t, Transform):
        return t
    return FunctionTransform(t)


def compose(*transforms: TransformLike) -> Transform:
    """Compose transforms, outermost first.

    ``compose(h, g, f)(x) == h(g(f(x)))``. Identity stages are dropped and
    nested chains are flattened, so composition is associative by
    construction. Plain callables are wrapped in FunctionTransform.

    Raises:
        FrameMismatchError: If a stage's output frame cannot feed the
            next stage.
    """
    stages: Tuple[Transform, ...] = ()
    for t in reversed(transforms):
        stages += as_transform(t).stages
    if not stages:
        return IdentityTransform()
    if len(stages) == 1:
        return stages[0]
    return ComposedTransform(stages)

"""Value types for 2D layout geometry.

Coordinates follow the usual screen convention:

- X grows to the right
- Y grows downward, so a container's top edge is its min_y
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Self


@dataclass(frozen=True)
class Size:
    """A width/height pair."""

    width: float
    height: float

    @classmethod
    def zero(cls) -> Self:
        return cls(0.0, 0.0)

    def as_tuple(self) -> tuple[float, float]:
        return (self.width, self.height)


@dataclass(frozen=True)
class Point:
    """An (x, y) position, container-relative or absolute depending on the caller."""

    x: float
    y: float

    @classmethod
    def zero(cls) -> Self:
        return cls(0.0, 0.0)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle defined by its top-left origin and size."""

    origin: Point
    size: Size

    @classmethod
    def from_xywh(cls, x: float, y: float, width: float, height: float) -> Self:
        return cls(Point(x, y), Size(width, height))

    @property
    def min_x(self) -> float:
        return self.origin.x

    @property
    def min_y(self) -> float:
        return self.origin.y

    @property
    def max_x(self) -> float:
        return self.origin.x + self.size.width

    @property
    def max_y(self) -> float:
        return self.origin.y + self.size.height

    @property
    def width(self) -> float:
        return self.size.width

    @property
    def height(self) -> float:
        return self.size.height


@dataclass(frozen=True)
class ProposedSize:
    """A size offered by a parent to a child.

    Either dimension may be None, meaning the parent leaves that dimension
    unspecified and the child should report the size it wants without
    restriction.
    """

    width: float | None = None
    height: float | None = None

    @classmethod
    def unspecified(cls) -> Self:
        """The proposal that places no constraint on either dimension."""
        return cls(None, None)

    @classmethod
    def from_size(cls, size: Size) -> Self:
        return cls(size.width, size.height)

    def replacing_unspecified(self, fallback: Size) -> Size:
        """Resolve to a concrete size, taking unspecified dimensions from fallback."""
        return Size(
            fallback.width if self.width is None else self.width,
            fallback.height if self.height is None else self.height,
        )

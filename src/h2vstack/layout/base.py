"""Base classes and protocols for the layout host contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Protocol, Sequence, runtime_checkable

from ..core.geometry import Point, ProposedSize, Rect, Size
from .anchors import Anchor

if TYPE_CHECKING:
    from .flow import Placement


@runtime_checkable
class Subview(Protocol):
    """Protocol for anything a layout can size and position.

    Any class with size_that_fits() and place() methods satisfies this
    protocol. Layouts never inspect subviews beyond these two calls and only
    hold on to them for the duration of one call.
    """

    def size_that_fits(self, proposal: ProposedSize) -> Size:
        """Report the size this view wants for the given proposal."""
        ...

    def place(self, at: Point, anchor: Anchor, proposal: ProposedSize) -> None:
        """Adopt a position and size chosen by the parent layout."""
        ...


class Layout(ABC):
    """Abstract base class for container layouts.

    A host calls size_that_fits() when it needs to know how much space the
    container wants, then place_subviews() once the container's bounds are
    final. The cache argument belongs to the host contract; layouts that keep
    no state between the two calls ignore it.
    """

    def make_cache(self, subviews: Sequence[Subview]) -> Any:
        return None

    @abstractmethod
    def size_that_fits(
        self,
        proposal: ProposedSize,
        subviews: Sequence[Subview],
        cache: Any = None,
    ) -> Size:
        """Compute the container's size for a proposal.

        Returns:
            The size the container reports to its parent.
        """
        pass

    @abstractmethod
    def place_subviews(
        self,
        bounds: Rect,
        proposal: ProposedSize,
        subviews: Sequence[Subview],
        cache: Any = None,
    ) -> list[Placement]:
        """Position every subview inside bounds.

        Returns:
            One placement per subview, in subview order.
        """
        pass

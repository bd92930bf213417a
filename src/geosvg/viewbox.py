"""Axis aligned bounds accumulator for computing the SVG viewBox."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from collections.abc import Iterable


def _min(a: float | None, b: float | None) -> float | None:
    if a is None:
        return b
    if b is None:
        return a
    return min(a, b)


def _max(a: float | None, b: float | None) -> float | None:
    if a is None:
        return b
    if b is None:
        return a
    return max(a, b)


class ViewBox(NamedTuple):
    """Bounding rectangle in user space.

    A bound that is None hasn't seen any content yet.
    Absent bounds never constrain a union, so the empty
    ViewBox is the identity element of :meth:`and_`.
    """

    min_x: float | None = None
    min_y: float | None = None
    max_x: float | None = None
    max_y: float | None = None

    @classmethod
    def from_center(cls, x: float, y: float, half_size: float) -> ViewBox:
        """A square of half width `half_size` centered on (x, y)."""
        return cls(x - half_size, y - half_size, x + half_size, y + half_size)

    @property
    def is_empty(self) -> bool:
        """True if no bound has been observed."""
        return all(bound is None for bound in self)

    @property
    def x(self) -> float:
        """Left edge, 0 if absent."""
        return 0.0 if self.min_x is None else self.min_x

    @property
    def y(self) -> float:
        """Top edge, 0 if absent."""
        return 0.0 if self.min_y is None else self.min_y

    @property
    def width(self) -> float:
        """Horizontal span, 0 if either bound is absent."""
        if self.min_x is None or self.max_x is None:
            return 0.0
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        """Vertical span, 0 if either bound is absent."""
        if self.min_y is None or self.max_y is None:
            return 0.0
        return self.max_y - self.min_y

    def and_(self, other: ViewBox) -> ViewBox:
        """Smallest box enclosing both boxes."""
        return ViewBox(
            _min(self.min_x, other.min_x),
            _min(self.min_y, other.min_y),
            _max(self.max_x, other.max_x),
            _max(self.max_y, other.max_y),
        )

    def __or__(self, other: object) -> ViewBox:  # type: ignore [override]
        if not isinstance(other, ViewBox):
            return NotImplemented
        return self.and_(other)

    def with_margin(self, margin: float) -> ViewBox:
        """Grow every present bound outward by `margin`."""
        return ViewBox(
            None if self.min_x is None else self.min_x - margin,
            None if self.min_y is None else self.min_y - margin,
            None if self.max_x is None else self.max_x + margin,
            None if self.max_y is None else self.max_y + margin,
        )


def union(viewboxes: Iterable[ViewBox]) -> ViewBox:
    """Fold a collection of boxes into one."""
    result = ViewBox()
    for viewbox in viewboxes:
        result = result.and_(viewbox)
    return result

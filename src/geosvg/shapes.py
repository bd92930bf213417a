"""Geometry containers built on geom2d primitives.

geom2d provides points (:class:`geom2d.P`), line segments
(:class:`geom2d.Line`) and rectangles (:class:`geom2d.Box`).
The composite variants here fill in the rest: line strings,
polygons with holes, triangles, and the multi-geometries.
Like the geom2d types they are immutable tuples.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

import geom2d
from geom2d import polyline

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from geom2d import TPoint
    from typing_extensions import Self, TypeAlias


class LineString(tuple[geom2d.P, ...]):
    """An ordered sequence of connected points."""

    __slots__ = ()

    def __new__(cls, points: Iterable[TPoint] = ()) -> Self:
        """Create a line string from a sequence of (x, y) points."""
        return super().__new__(cls, (geom2d.P(p) for p in points))

    def lines(self) -> Iterator[geom2d.Line]:
        """The line segments between consecutive points."""
        return polyline.polyline_to_polypath(self)

    def is_closed(self) -> bool:
        """True if the first and last points coincide."""
        return len(self) > 1 and self[0] == self[-1]

    def closed(self) -> LineString:
        """A copy closed by repeating the first point if needed."""
        if not self or self.is_closed():
            return self
        return LineString((*self, self[0]))

    def __repr__(self) -> str:
        return f'{type(self).__name__}({list(self)!r})'


class Polygon(tuple[LineString, ...]):
    """A polygon with an exterior ring and zero or more interior rings.

    Rings are closed on construction. Interior rings are holes
    and are rendered using the even-odd fill rule.
    """

    __slots__ = ()

    def __new__(
        cls,
        exterior: Iterable[TPoint],
        interiors: Iterable[Iterable[TPoint]] = (),
    ) -> Self:
        """Create a polygon.

        Args:
            exterior: Vertices of the outer ring.
            interiors: Vertices of each hole.
        """
        rings = [LineString(exterior).closed()]
        rings.extend(LineString(ring).closed() for ring in interiors)
        return super().__new__(cls, rings)

    @property
    def exterior(self) -> LineString:
        """The outer ring."""
        return self[0]

    @property
    def interiors(self) -> tuple[LineString, ...]:
        """The holes."""
        return self[1:]

    def rings(self) -> Iterator[LineString]:
        """All rings, exterior first."""
        return iter(self)

    def lines(self) -> Iterator[geom2d.Line]:
        """Every ring edge including the closing edges."""
        for ring in self:
            yield from ring.lines()

    @classmethod
    def from_box(cls, box: geom2d.Box) -> Polygon:
        """The four corners of a rectangle as a polygon."""
        return cls(box.vertices())

    def __repr__(self) -> str:
        return (
            f'{type(self).__name__}({list(self.exterior)!r}, '
            f'{[list(ring) for ring in self.interiors]!r})'
        )


class Triangle(tuple[geom2d.P, geom2d.P, geom2d.P]):
    """Three vertices."""

    __slots__ = ()

    def __new__(cls, p1: TPoint, p2: TPoint, p3: TPoint) -> Self:
        """Create a triangle from three (x, y) points."""
        return super().__new__(cls, (geom2d.P(p1), geom2d.P(p2), geom2d.P(p3)))

    def to_polygon(self) -> Polygon:
        """The triangle as a polygon without holes."""
        return Polygon(self)


class MultiPoint(tuple[geom2d.P, ...]):
    """An ordered collection of points."""

    __slots__ = ()

    def __new__(cls, points: Iterable[TPoint] = ()) -> Self:
        """Create a collection of (x, y) points."""
        return super().__new__(cls, (geom2d.P(p) for p in points))


class MultiLineString(tuple[LineString, ...]):
    """An ordered collection of line strings."""

    __slots__ = ()

    def __new__(cls, line_strings: Iterable[Iterable[TPoint]] = ()) -> Self:
        """Create a collection of line strings."""
        return super().__new__(
            cls,
            (
                ls if isinstance(ls, LineString) else LineString(ls)
                for ls in line_strings
            ),
        )


class MultiPolygon(tuple[Polygon, ...]):
    """An ordered collection of polygons."""

    __slots__ = ()

    def __new__(cls, polygons: Iterable[Polygon] = ()) -> Self:
        """Create a collection of polygons."""
        return super().__new__(cls, polygons)


class GeometryCollection(tuple['TGeometry', ...]):
    """An ordered collection of any geometry."""

    __slots__ = ()

    def __new__(cls, geometries: Iterable[TGeometry] = ()) -> Self:
        """Create a heterogeneous collection of geometries."""
        return super().__new__(cls, geometries)


TGeometry: TypeAlias = Union[
    geom2d.P,
    geom2d.Line,
    geom2d.Box,
    LineString,
    Polygon,
    Triangle,
    MultiPoint,
    MultiLineString,
    MultiPolygon,
    GeometryCollection,
]

"""Methods for converting geometry objects to SVG markup and bounds.

Every geometry variant has two independent functions: one that
renders the markup fragment and one that computes the bounds the
fragment occupies under a given style. Composite geometry is always
reduced to points and line segments, so both views are derived from
the same coordinates without one ever being computed from the other.
"""

from __future__ import annotations

import dataclasses
import logging
import numbers
from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import geom2d

from . import viewbox as vb
from .shapes import (
    GeometryCollection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Polygon,
    Triangle,
)
from .units import floatystr, to_float
from .viewbox import ViewBox

if TYPE_CHECKING:
    from collections.abc import Iterable

    from geom2d import TPoint

    from .style import Style

logger = logging.getLogger(__name__)

# Stroke width assumed for the bounds of a point when none is set.
DEFAULT_BOUNDS_STROKE_WIDTH = 1.0


@runtime_checkable
class Renderable(Protocol):
    """Anything that renders itself as an SVG fragment."""

    def to_svg_str(self, style: Style) -> str:
        """The markup fragment under `style`."""

    def viewbox(self, style: Style) -> ViewBox:
        """The bounds of the fragment under `style`."""


def coord_str(value: float) -> str:
    """Format a coordinate.

    Coordinates always show a fractional part (``10.0``), matching
    Python's shortest round-trip float representation.
    """
    return repr(to_float(value))


def _point_xy(p: TPoint) -> tuple[float, float]:
    return to_float(p[0]), to_float(p[1])


def _is_point(shape: object) -> bool:
    return (
        isinstance(shape, Sequence)
        and not isinstance(shape, str)
        and len(shape) == 2  # noqa: PLR2004
        and all(isinstance(c, numbers.Real) for c in shape)
    )


def point_to_svg(p: TPoint, style: Style) -> str:
    """A filled circle centered on the point."""
    x, y = _point_xy(p)
    return (
        f'<circle cx="{coord_str(x)}" cy="{coord_str(y)}"'
        f' r="{floatystr(style.point_radius)}"{style}/>'
    )


def point_viewbox(p: TPoint, style: Style) -> ViewBox:
    """A square around the point.

    The half size is the point radius plus the stroke width.
    An unset stroke width still inflates the bounds by
    :data:`DEFAULT_BOUNDS_STROKE_WIDTH`.
    """
    x, y = _point_xy(p)
    stroke_width = style.stroke_width
    if stroke_width is None:
        stroke_width = DEFAULT_BOUNDS_STROKE_WIDTH
    return ViewBox.from_center(x, y, style.point_radius + stroke_width)


def line_to_svg(line: geom2d.Line | Sequence[TPoint], style: Style) -> str:
    """A straight path between the two end points."""
    x1, y1 = _point_xy(line[0])
    x2, y2 = _point_xy(line[1])
    return (
        f'<path d="M {coord_str(x1)} {coord_str(y1)}'
        f' L {coord_str(x2)} {coord_str(y2)}"{style}/>'
    )


def line_viewbox(line: geom2d.Line | Sequence[TPoint], style: Style) -> ViewBox:
    """Both end points as zero radius points.

    Only the stroke width inflates line bounds.
    """
    style = dataclasses.replace(style, radius=0.0)
    return point_viewbox(line[0], style).and_(point_viewbox(line[1], style))


def linestring_to_svg(line_string: LineString, style: Style) -> str:
    """One path per segment."""
    return ''.join(line_to_svg(line, style) for line in line_string.lines())


def linestring_viewbox(line_string: LineString, style: Style) -> ViewBox:
    """Union of the segment bounds."""
    return vb.union(line_viewbox(line, style) for line in line_string.lines())


def _ring_path(ring: Iterable[TPoint]) -> str:
    it = iter(ring)
    try:
        first = next(it)
    except StopIteration:
        return ''
    x, y = _point_xy(first)
    d = [f'M {coord_str(x)} {coord_str(y)}']
    for p in it:
        x, y = _point_xy(p)
        d.append(f'L {coord_str(x)} {coord_str(y)}')
    d.append('Z')
    return ' '.join(d)


def polygon_to_svg(polygon: Polygon, style: Style) -> str:
    """A single even-odd filled path with one closed sub-path per ring.

    Returns:
        The path element, or an empty string if every ring is empty.
    """
    subpaths = []
    for ring in polygon.rings():
        subpath = _ring_path(ring)
        if subpath:
            subpaths.append(subpath)
        else:
            logger.debug('Skipping empty polygon ring')
    if not subpaths:
        return ''
    return f'<path fill-rule="evenodd" d="{" ".join(subpaths)}"{style}/>'


def polygon_viewbox(polygon: Polygon, style: Style) -> ViewBox:
    """Union of the bounds of every ring edge."""
    return vb.union(line_viewbox(line, style) for line in polygon.lines())


def to_polygon(shape: geom2d.Box | Triangle) -> Polygon:
    """Normalize a rectangle or triangle to a polygon."""
    if isinstance(shape, geom2d.Box):
        return Polygon.from_box(shape)
    return shape.to_polygon()


def collection_to_svg(shapes: Iterable[object], style: Style) -> str:
    """Concatenated member markup, in order."""
    return ''.join(to_svg_str(shape, style) for shape in shapes)


def collection_viewbox(shapes: Iterable[object], style: Style) -> ViewBox:
    """Union of the member bounds."""
    return vb.union(viewbox(shape, style) for shape in shapes)


def to_svg_str(shape: object, style: Style) -> str:
    """Render any supported geometry as an SVG fragment.

    Args:
        shape: A geom2d point, line or box, a plain (x, y) pair,
            one of the :mod:`geosvg.shapes` containers, a
            :class:`Renderable`, or a list/tuple of any of these.
        style: The style applied to the fragment.

    Returns:
        The markup fragment. Degenerate geometry renders
        an empty string.

    Raises:
        TypeError: If the object isn't something that can be rendered.
    """
    if isinstance(shape, geom2d.P):
        return point_to_svg(shape, style)
    if isinstance(shape, geom2d.Line):
        return line_to_svg(shape, style)
    if isinstance(shape, LineString):
        return linestring_to_svg(shape, style)
    if isinstance(shape, Polygon):
        return polygon_to_svg(shape, style)
    if isinstance(shape, (geom2d.Box, Triangle)):
        return polygon_to_svg(to_polygon(shape), style)
    if isinstance(
        shape,
        (MultiPoint, MultiLineString, MultiPolygon, GeometryCollection),
    ):
        return collection_to_svg(shape, style)
    if isinstance(shape, Renderable):
        return shape.to_svg_str(style)
    if _is_point(shape):
        return point_to_svg(shape, style)  # type: ignore [arg-type]
    if isinstance(shape, (list, tuple)):
        return collection_to_svg(shape, style)
    raise TypeError(f'Unsupported geometry: {type(shape).__name__}')


def viewbox(shape: object, style: Style) -> ViewBox:
    """Compute the bounds `shape` occupies when rendered with `style`.

    This mirrors :func:`to_svg_str` variant by variant
    without building any markup.

    Raises:
        TypeError: If the object isn't something that can be rendered.
    """
    if isinstance(shape, geom2d.P):
        return point_viewbox(shape, style)
    if isinstance(shape, geom2d.Line):
        return line_viewbox(shape, style)
    if isinstance(shape, LineString):
        return linestring_viewbox(shape, style)
    if isinstance(shape, Polygon):
        return polygon_viewbox(shape, style)
    if isinstance(shape, (geom2d.Box, Triangle)):
        return polygon_viewbox(to_polygon(shape), style)
    if isinstance(
        shape,
        (MultiPoint, MultiLineString, MultiPolygon, GeometryCollection),
    ):
        return collection_viewbox(shape, style)
    if isinstance(shape, Renderable):
        return shape.viewbox(style)
    if _is_point(shape):
        return point_viewbox(shape, style)  # type: ignore [arg-type]
    if isinstance(shape, (list, tuple)):
        return collection_viewbox(shape, style)
    raise TypeError(f'Unsupported geometry: {type(shape).__name__}')

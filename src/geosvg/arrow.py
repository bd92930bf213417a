"""Directed line segment drawn with an arrow head."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

import geom2d

from . import geomsvg
from . import viewbox as vb

if TYPE_CHECKING:
    from geom2d import TPoint

    from .style import Style
    from .viewbox import ViewBox

logger = logging.getLogger(__name__)

# Angle between the line direction and each head segment.
HEAD_ANGLE = math.radians(135)


class Arrow:
    """A line from `p1` to `p2` with a head at `p2`.

    The head is two short segments that sweep back from the end point
    at +/-135 degrees. Their length is the style's point radius.
    """

    def __init__(self, p1: TPoint | geom2d.Line, p2: TPoint | None = None):
        """Create an arrow from two points or a single geom2d Line."""
        self.line = geom2d.Line(p1, p2)

    def segments(self, style: Style) -> list[geom2d.Line]:
        """The base line followed by the two head segments.

        Returns:
            An empty list if the line has zero length.
        """
        start, end = self.line
        direction = end - start
        if direction.is_zero():
            logger.debug('Zero length arrow at %s', start)
            return []
        head_length = style.point_radius
        unit_dir = direction.unit()
        return [self.line] + [
            geom2d.Line(end, end + unit_dir.rotate(angle) * head_length)
            for angle in (HEAD_ANGLE, -HEAD_ANGLE)
        ]

    def to_svg_str(self, style: Style) -> str:
        return ''.join(
            geomsvg.line_to_svg(line, style) for line in self.segments(style)
        )

    def viewbox(self, style: Style) -> ViewBox:
        return vb.union(
            geomsvg.line_viewbox(line, style) for line in self.segments(style)
        )

    def __repr__(self) -> str:
        return f'Arrow({self.line.p1!r}, {self.line.p2!r})'

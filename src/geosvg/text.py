"""Text labels, handy for numbering or annotating geometry."""

from __future__ import annotations

from typing import TYPE_CHECKING
from xml.sax.saxutils import escape

from .units import floatystr, to_float
from .viewbox import ViewBox

if TYPE_CHECKING:
    from geom2d import TPoint

    from .style import Style

DEFAULT_FONT_SIZE = 10.0


class Text:
    """A text element anchored at a position.

    Text has no bounds since nothing here knows about font metrics,
    so a viewport computed from text alone is empty and text near the
    edge of other shapes may be clipped.
    """

    def __init__(
        self,
        text: object,
        position: TPoint,
        font_size: float = DEFAULT_FONT_SIZE,
    ):
        """Create a text label.

        Args:
            text: Anything with a string representation.
            position: The (x, y) anchor of the text baseline.
            font_size: Font size in user units.
        """
        self.text = text
        self.position = position
        self.font_size = font_size

    def with_font_size(self, font_size: float) -> Text:
        """A copy with a different font size."""
        return Text(self.text, self.position, float(font_size))

    def to_svg_str(self, style: Style) -> str:  # noqa: ARG002
        x, y = self.position
        return (
            f'<text font-size="{floatystr(self.font_size)}"'
            f' x="{floatystr(to_float(x))}" y="{floatystr(to_float(y))}">'
            f'{escape(str(self.text))}</text>'
        )

    def viewbox(self, style: Style) -> ViewBox:  # noqa: ARG002
        return ViewBox()

    def __repr__(self) -> str:
        return f'Text({self.text!r}, {self.position!r}, {self.font_size!r})'

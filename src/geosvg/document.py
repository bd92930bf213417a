"""Eagerly rendered SVG documents built from independently styled parts.

A document is built in three steps::

    doc = (
        SVGDocument.style_builder()
        .with_radius(2)
        .finish_style()
        .add_shape(P(10, 28.1))
        .finish_shapes()
    )

Shapes are rendered as soon as they are added, with the style of
the part at that moment. Documents combine with :meth:`SVGDocument.and_`,
and style set on a document applies to the outer svg element.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING, Any, TextIO

from . import geomsvg, svg
from .style import Style, Stylable
from .units import Unit
from .viewbox import ViewBox

if TYPE_CHECKING:
    from collections.abc import Iterable

    from typing_extensions import Self

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class SVGDocumentBuilder(Stylable):
    """Collects the style shapes of a new part will be rendered with."""

    style: Style = dataclasses.field(default_factory=Style)

    def _with_style(self, style: Style) -> Self:
        return dataclasses.replace(self, style=style)

    def finish_style(self) -> SVGDocumentPart:
        """Start adding shapes."""
        return SVGDocumentPart(style=self.style)


@dataclasses.dataclass(frozen=True)
class SVGDocumentPart(Stylable):
    """A group of shapes rendered with one style.

    Each added shape is baked into markup immediately, so changing
    the style of a part only affects shapes added afterwards.
    """

    style: Style = dataclasses.field(default_factory=Style)
    viewbox: ViewBox = ViewBox()
    shapes: tuple[str, ...] = ()

    def _with_style(self, style: Style) -> Self:
        return dataclasses.replace(self, style=style)

    def add_shape(self, shape: object) -> SVGDocumentPart:
        """Render a shape with the current style and grow the bounds."""
        return dataclasses.replace(
            self,
            viewbox=self.viewbox.and_(geomsvg.viewbox(shape, self.style)),
            shapes=(*self.shapes, geomsvg.to_svg_str(shape, self.style)),
        )

    def add_shapes(self, shapes: Iterable[object]) -> SVGDocumentPart:
        """Add shapes in order."""
        part = self
        for shape in shapes:
            part = part.add_shape(shape)
        return part

    def finish_shapes(self) -> SVGDocument:
        """Wrap this part in a document with no style of its own."""
        return SVGDocument(viewbox=self.viewbox, parts=(self,))

    def render(self) -> str:
        """The concatenated markup of every shape."""
        return ''.join(self.shapes)


@dataclasses.dataclass(frozen=True)
class SVGDocument(Stylable):
    """A renderable document made of one or more parts.

    Style setters apply to the document and cascade to every part,
    which changes the style any shape added to a part later would get
    but never touches markup that is already rendered.
    """

    style: Style = dataclasses.field(default_factory=Style)
    viewbox: ViewBox = ViewBox()
    parts: tuple[SVGDocumentPart, ...] = ()
    width: Unit | None = None
    height: Unit | None = None

    @staticmethod
    def style_builder() -> SVGDocumentBuilder:
        """Start a new part."""
        return SVGDocumentBuilder()

    def _with_style(self, style: Style) -> Self:
        return dataclasses.replace(
            self,
            style=style,
            parts=tuple(part._with_style(style) for part in self.parts),
        )

    def _update_style(self, **changes: Any) -> Self:  # noqa: ANN401
        return dataclasses.replace(
            self,
            style=dataclasses.replace(self.style, **changes),
            parts=tuple(part._update_style(**changes) for part in self.parts),
        )

    def or_style(self, other: Style) -> Self:
        """Fall back to `other` for unset fields, here and in every part."""
        return dataclasses.replace(
            self,
            style=self.style.or_style(other),
            parts=tuple(part.or_style(other) for part in self.parts),
        )

    def and_(self, other: SVGDocument) -> SVGDocument:
        """Combine two documents.

        Bounds are unioned and parts concatenated, this document's first.
        Style fields set on this document win over the other's.
        The explicit size of this document wins as well.
        """
        return SVGDocument(
            style=self.style.or_style(other.style),
            viewbox=self.viewbox.and_(other.viewbox),
            parts=(*self.parts, *other.parts),
            width=self.width if self.width is not None else other.width,
            height=self.height if self.height is not None else other.height,
        )

    def __and__(self, other: object) -> SVGDocument:
        if not isinstance(other, SVGDocument):
            return NotImplemented
        return self.and_(other)

    def with_margin(self, margin: float) -> SVGDocument:
        """Grow the viewport by `margin` on every side."""
        return dataclasses.replace(
            self, viewbox=self.viewbox.with_margin(float(margin))
        )

    def with_width(self, width: Unit | str | float) -> SVGDocument:
        """Set the display width.

        If no height is set it is computed from the viewport aspect ratio.
        """
        return dataclasses.replace(self, width=Unit.parse(width))

    def with_height(self, height: Unit | str | float) -> SVGDocument:
        """Set the display height.

        If no width is set it is computed from the viewport aspect ratio.
        """
        return dataclasses.replace(self, height=Unit.parse(height))

    def render(self) -> str:
        """Render the complete svg element."""
        if self.viewbox.is_empty:
            logger.debug('Rendering a document without any bounds')
        return svg.svg_element(
            self.viewbox,
            ''.join(part.render() for part in self.parts),
            self.width,
            self.height,
            attrs=f' {self.style}',
        )

    def to_etree(self) -> svg.TElement:
        """The rendered document as an lxml element."""
        return svg.to_etree(self.render())

    def write(self, stream: TextIO, pretty_print: bool = False) -> None:
        """Write the rendered document to a stream."""
        svg.write_svg(stream, self.render(), pretty_print=pretty_print)

    def __str__(self) -> str:
        return self.render()

"""Lazily rendered SVG trees and SVG output helpers."""

from __future__ import annotations

import dataclasses
import functools
import logging
from typing import TYPE_CHECKING, Any, TextIO

from lxml import etree

from . import geomsvg
from . import viewbox as vb
from .style import Style, Stylable
from .units import Unit, floatystr

if TYPE_CHECKING:
    from collections.abc import Iterable

    from typing_extensions import Self, TypeAlias

    from .viewbox import ViewBox

logger = logging.getLogger(__name__)

# : SVG Namespaces
SVG_NS = {
    '': 'http://www.w3.org/2000/svg',
    'svg': 'http://www.w3.org/2000/svg',
    'xlink': 'http://www.w3.org/1999/xlink',
}

TElement: TypeAlias = (
    etree._Element  # noqa: SLF001 pylint: disable=protected-access
)


class SVGError(Exception):
    """SVG markup error."""


def add_ns(tag: str, ns_map: dict[str, str], ns: str) -> str:
    """Prepend a mapped namespace to `tag`."""
    uri = ns_map[ns]
    return f'{{{uri}}}{tag}'


def svg_ns(tag: str) -> str:
    """Shortcut to prepend SVG namespace to `tag`."""
    return add_ns(tag, SVG_NS, 'svg')


def strip_ns(tag: str) -> str:
    """Strip the namespace part from the tag if any."""
    return tag.rpartition('}')[2]


def _aspect_scaled(given: Unit, numer: float, denom: float) -> Unit:
    # A degenerate span has no aspect ratio to keep.
    if denom == 0:
        logger.debug('Zero viewport span, copying size %s', given)
        return given
    return given.scale(numer / denom)


def size_attrs(
    viewbox: ViewBox, width: Unit | None, height: Unit | None
) -> str:
    """The width and height attributes of an svg element.

    If only one of `width` or `height` is given the other one is
    computed to match the aspect ratio of the viewport.

    Returns:
        An empty string if neither is given.
    """
    if width is None and height is None:
        return ''
    w = viewbox.width
    h = viewbox.height
    if width is None:
        width = _aspect_scaled(height, w, h)  # type: ignore [arg-type]
    if height is None:
        height = _aspect_scaled(width, h, w)
    return f' width="{width}" height="{height}"'


def svg_element(
    viewbox: ViewBox,
    content: str,
    width: Unit | None = None,
    height: Unit | None = None,
    attrs: str = '',
) -> str:
    """Wrap content in a top level svg element.

    Args:
        viewbox: The viewport bounds.
        content: The rendered child fragments.
        width: Optional display width.
        height: Optional display height.
        attrs: Extra attribute markup appended to the opening tag.
    """
    x = floatystr(viewbox.x)
    y = floatystr(viewbox.y)
    w = floatystr(viewbox.width)
    h = floatystr(viewbox.height)
    return (
        f'<svg xmlns="{SVG_NS["svg"]}" preserveAspectRatio="xMidYMid meet"'
        f' viewBox="{x} {y} {w} {h}"{size_attrs(viewbox, width, height)}'
        f'{attrs}>{content}</svg>'
    )


def to_etree(markup: str) -> TElement:
    """Parse rendered markup into an lxml element.

    Raises:
        SVGError: If the markup isn't well formed XML.
    """
    try:
        return etree.fromstring(markup)
    except etree.XMLSyntaxError as e:
        raise SVGError(f'Malformed SVG markup: {e}') from e


def write_svg(stream: TextIO, markup: str, pretty_print: bool = False) -> None:
    """Write rendered markup as a standalone SVG document."""
    stream.write('<?xml version="1.0" encoding="UTF-8" standalone="no"?>\n')
    data = etree.tostring(
        to_etree(markup), encoding='unicode', pretty_print=pretty_print
    )
    stream.write(data)
    if not data.endswith('\n'):
        stream.write('\n')


@dataclasses.dataclass(frozen=True)
class Svg(Stylable):
    """A lazily rendered tree of renderable items.

    Items are rendered, and their bounds computed, only when the tree
    is rendered, and always with the style current at that time.
    Siblings added with :meth:`and_` render after the items, each with
    its own style. Style setters apply to this node and cascade to
    every sibling. A margin set on a sibling grows its own bounds.

    An Svg is itself renderable: nested in another tree it renders as
    an inner svg element under the outer style.
    """

    items: tuple[Any, ...] = ()
    siblings: tuple[Svg, ...] = ()
    style: Style = dataclasses.field(default_factory=Style)
    margin: float = 0.0
    width: Unit | None = None
    height: Unit | None = None

    def _with_style(self, style: Style) -> Self:
        return dataclasses.replace(
            self,
            style=style,
            siblings=tuple(s._with_style(style) for s in self.siblings),
        )

    def _update_style(self, **changes: Any) -> Self:  # noqa: ANN401
        return dataclasses.replace(
            self,
            style=dataclasses.replace(self.style, **changes),
            siblings=tuple(s._update_style(**changes) for s in self.siblings),
        )

    def or_style(self, other: Style) -> Self:
        """Fall back to `other` for unset fields, here and in siblings."""
        return dataclasses.replace(
            self,
            style=self.style.or_style(other),
            siblings=tuple(s.or_style(other) for s in self.siblings),
        )

    def and_(self, sibling: Svg) -> Svg:
        """Append a sibling tree."""
        return dataclasses.replace(self, siblings=(*self.siblings, sibling))

    def __and__(self, other: object) -> Svg:
        if not isinstance(other, Svg):
            return NotImplemented
        return self.and_(other)

    def with_margin(self, margin: float) -> Svg:
        """Grow the computed viewport by `margin` on every side."""
        return dataclasses.replace(self, margin=float(margin))

    def with_width(self, width: Unit | str | float) -> Svg:
        """Set the display width.

        If no height is set it is computed from the viewport aspect ratio.
        """
        return dataclasses.replace(self, width=Unit.parse(width))

    def with_height(self, height: Unit | str | float) -> Svg:
        """Set the display height.

        If no width is set it is computed from the viewport aspect ratio.
        """
        return dataclasses.replace(self, height=Unit.parse(height))

    def _bounds(self) -> ViewBox:
        return vb.union(
            [
                *(geomsvg.viewbox(item, self.style) for item in self.items),
                *(s.viewbox() for s in self.siblings),
            ]
        )

    def viewbox(self, style: Style | None = None) -> ViewBox:
        """The viewport enclosing every item and sibling.

        Args:
            style: Optional overriding style, as when this tree
                is nested in another one.
        """
        if style is not None:
            return self.use_style(style).viewbox()
        return self._bounds().with_margin(self.margin)

    def svg_str(self) -> str:
        """The rendered content without the enclosing svg element."""
        return ''.join(
            [
                *(geomsvg.to_svg_str(item, self.style) for item in self.items),
                *(s.svg_str() for s in self.siblings),
            ]
        )

    def render(self) -> str:
        """Render the complete svg element."""
        return svg_element(
            self.viewbox(), self.svg_str(), self.width, self.height
        )

    def to_svg_str(self, style: Style) -> str:
        return self.use_style(style).render()

    def to_etree(self) -> TElement:
        """The rendered tree as an lxml element."""
        return to_etree(self.render())

    def write(self, stream: TextIO, pretty_print: bool = False) -> None:
        """Write the rendered tree as an SVG document."""
        write_svg(stream, self.render(), pretty_print=pretty_print)

    def __str__(self) -> str:
        return self.render()


def to_svg(item: object) -> Svg:
    """Wrap a single renderable in a lazily rendered tree."""
    return Svg(items=(item,))


def combine_to_svg(items: Iterable[object]) -> Svg | None:
    """Combine many renderables into one tree of siblings.

    Returns:
        The combined tree, or None if there is nothing to combine.
    """
    trees = [to_svg(item) for item in items]
    if not trees:
        return None
    return functools.reduce(Svg.and_, trees)

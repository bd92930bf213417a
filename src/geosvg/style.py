"""Cascading presentation style for rendered geometry."""

from __future__ import annotations

import dataclasses
import enum
from typing import TYPE_CHECKING, Any

from . import css
from .units import floatystr

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

    from typing_extensions import Self

    from .css import Color

# Effective point radius when none has been set.
DEFAULT_RADIUS = 1.0


class LineCap(enum.Enum):
    """Shape at the end of open stroked sub-paths."""

    BUTT = 'butt'
    ROUND = 'round'
    SQUARE = 'square'


class LineJoin(enum.Enum):
    """Shape at the corners of stroked paths."""

    MITER = 'miter'
    ROUND = 'round'
    BEVEL = 'bevel'


def _dasharray(lengths: Iterable[float] | str) -> tuple[float, ...]:
    if isinstance(lengths, str):
        lengths = lengths.replace(',', ' ').split()
    return tuple(float(length) for length in lengths)


class Stylable:
    """Chained style configuration.

    Every ``with_*`` method sets one style field and returns an
    updated copy of the object. Nothing is mutated in place.
    Subclasses provide the current :attr:`style` and implement
    :meth:`_with_style`. Containers override :meth:`_update_style`
    to cascade a change to the groups they contain.
    """

    style: Style

    def _with_style(self, style: Style) -> Self:
        raise NotImplementedError

    def _update_style(self, **changes: Any) -> Self:  # noqa: ANN401
        return self._with_style(dataclasses.replace(self.style, **changes))

    def use_style(self, other: Style) -> Self:
        """Replace the style wholesale."""
        return self._with_style(other)

    def or_style(self, other: Style) -> Self:
        """Fall back to `other` for every field that isn't set."""
        return self._with_style(self.style.or_style(other))

    def with_opacity(self, opacity: float) -> Self:
        """Set the group opacity."""
        return self._update_style(opacity=float(opacity))

    def with_color(self, color: Color | str) -> Self:
        """Set both the fill and the stroke color."""
        color = css.to_color(color)
        return self._update_style(fill=color, stroke_color=color)

    def with_fill_color(self, color: Color | str) -> Self:
        """Set the fill color."""
        return self._update_style(fill=css.to_color(color))

    def with_fill_opacity(self, opacity: float) -> Self:
        """Set the fill opacity."""
        return self._update_style(fill_opacity=float(opacity))

    def with_stroke_color(self, color: Color | str) -> Self:
        """Set the stroke color."""
        return self._update_style(stroke_color=css.to_color(color))

    def with_stroke_width(self, width: float) -> Self:
        """Set the stroke width. This also inflates bounds."""
        return self._update_style(stroke_width=float(width))

    def with_stroke_opacity(self, opacity: float) -> Self:
        """Set the stroke opacity."""
        return self._update_style(stroke_opacity=float(opacity))

    def with_stroke_dasharray(self, lengths: Iterable[float] | str) -> Self:
        """Set the dash pattern as a sequence of lengths."""
        return self._update_style(stroke_dasharray=_dasharray(lengths))

    def with_stroke_linecap(self, linecap: LineCap | str) -> Self:
        """Set the line cap (butt, round or square)."""
        return self._update_style(stroke_linecap=LineCap(linecap))

    def with_stroke_linejoin(self, linejoin: LineJoin | str) -> Self:
        """Set the line join (miter, round or bevel)."""
        return self._update_style(stroke_linejoin=LineJoin(linejoin))

    def with_radius(self, radius: float) -> Self:
        """Set the point radius, also used as the arrow head length."""
        return self._update_style(radius=float(radius))


@dataclasses.dataclass(frozen=True)
class Style(Stylable):
    """A set of optional SVG presentation attributes.

    An unset field renders no attribute. The point radius is never
    rendered as a presentation attribute, it sizes point circles and
    arrow heads. An unset radius means :data:`DEFAULT_RADIUS`, but is
    kept distinct from an explicit radius so that a fallback merge
    can tell which side set it.
    """

    opacity: float | None = None
    fill: Color | None = None
    fill_opacity: float | None = None
    stroke_color: Color | None = None
    stroke_width: float | None = None
    stroke_opacity: float | None = None
    stroke_dasharray: tuple[float, ...] | None = None
    stroke_linecap: LineCap | None = None
    stroke_linejoin: LineJoin | None = None
    radius: float | None = None

    @property
    def style(self) -> Style:
        """A Style is its own style (see :class:`Stylable`)."""
        return self

    @property
    def point_radius(self) -> float:
        """The effective point radius."""
        return DEFAULT_RADIUS if self.radius is None else self.radius

    def _with_style(self, style: Style) -> Style:
        return style

    def _update_style(self, **changes: Any) -> Style:  # noqa: ANN401
        return dataclasses.replace(self, **changes)

    def or_style(self, other: Style) -> Style:
        """Fallback merge.

        Keeps the value of every field that is set on this style
        and takes the value from `other` for the rest.
        There's no guarantee that any field is set afterwards.
        """
        return Style(
            **{
                field.name: (
                    getattr(other, field.name)
                    if getattr(self, field.name) is None
                    else getattr(self, field.name)
                )
                for field in dataclasses.fields(self)
            }
        )

    def attributes(self) -> Iterator[tuple[str, str]]:
        """Presentation attributes in rendering order.

        Yields:
            (name, value) pairs for every field that is set.
        """
        if self.opacity is not None:
            yield 'opacity', floatystr(self.opacity)
        if self.fill is not None:
            yield 'fill', str(self.fill)
        if self.fill_opacity is not None:
            yield 'fill-opacity', floatystr(self.fill_opacity)
        if self.stroke_color is not None:
            yield 'stroke', str(self.stroke_color)
        if self.stroke_width is not None:
            yield 'stroke-width', floatystr(self.stroke_width)
        if self.stroke_opacity is not None:
            yield 'stroke-opacity', floatystr(self.stroke_opacity)
        if self.stroke_dasharray is not None:
            yield 'stroke-dasharray', ' '.join(
                floatystr(length) for length in self.stroke_dasharray
            )
        if self.stroke_linecap is not None:
            yield 'stroke-linecap', self.stroke_linecap.value
        if self.stroke_linejoin is not None:
            yield 'stroke-linejoin', self.stroke_linejoin.value

    def __str__(self) -> str:
        return ''.join(f' {name}="{value}"' for name, value in self.attributes())

    def to_inline_style(self) -> str:
        """The presentation attributes as a CSS `style` attribute value."""
        return css.dict_to_inline_style(dict(self.attributes()))

    @classmethod
    def from_inline_style(cls, inline_style: str) -> Style:
        """Create a Style from a CSS `style` attribute value."""
        return cls.from_dict(css.inline_style_to_dict(inline_style))

    @classmethod
    def from_dict(cls, style_map: Mapping[str, Any]) -> Style:
        """Create a Style from a mapping of property names to values.

        Keys can be CSS property names (``stroke-width``) or
        field names (``stroke_width``). ``stroke`` is an alias
        of ``stroke_color``, ``color`` sets both fill and stroke.

        Raises:
            KeyError: If a property isn't a known style property.
            ValueError: If a value can't be converted.
        """
        style = cls()
        for key, value in style_map.items():
            name = key.strip().replace('-', '_')
            setter = _STYLE_SETTERS.get(name)
            if setter is None:
                raise KeyError(f'Unknown style property: {key}')
            style = getattr(style, setter)(value)
        return style


_STYLE_SETTERS = {
    'opacity': 'with_opacity',
    'fill': 'with_fill_color',
    'fill_color': 'with_fill_color',
    'fill_opacity': 'with_fill_opacity',
    'stroke': 'with_stroke_color',
    'stroke_color': 'with_stroke_color',
    'stroke_width': 'with_stroke_width',
    'stroke_opacity': 'with_stroke_opacity',
    'stroke_dasharray': 'with_stroke_dasharray',
    'stroke_linecap': 'with_stroke_linecap',
    'stroke_linejoin': 'with_stroke_linejoin',
    'radius': 'with_radius',
    'color': 'with_color',
}

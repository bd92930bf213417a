"""Test rendering and bounds of each geometry variant."""

from __future__ import annotations

import math
import re

import geom2d
import pytest
from geom2d import Box, Line, P

from geosvg import geomsvg, svg
from geosvg.arrow import Arrow
from geosvg.css import Named
from geosvg.shapes import (
    GeometryCollection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Polygon,
    Triangle,
)
from geosvg.style import Style
from geosvg.text import Text
from geosvg.viewbox import ViewBox

_RE_NUMBER = re.compile(r'[-+]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][-+]?[0-9]+)?')

SQUARE = [(0, 0), (10, 0), (10, 10), (0, 10)]
HOLE = [(2, 2), (4, 2), (4, 4)]

STYLES = (
    Style(),
    Style(radius=2.0),
    Style(stroke_width=0.5, radius=0.0),
    Style(stroke_width=3.0, fill=None, radius=4.0),
)

SHAPES = (
    P(10, 28.1),
    (3, -4),
    Line((114.19, 22.26), (15.93, -15.76)),
    LineString([(0, 0), (5, 5), (-3, 8)]),
    Polygon(SQUARE),
    Polygon(SQUARE, [HOLE]),
    Box((1, 2), (6, -3)),
    Triangle((0, 0), (4, 1), (2, 7)),
    MultiPoint([(0, 0), (100, 50)]),
    MultiLineString([[(0, 0), (1, 1)], [(20, 20), (25, 10), (30, 30)]]),
    MultiPolygon([Polygon(SQUARE), Polygon(HOLE)]),
    GeometryCollection(
        [P(-10, -10), Line((0, 0), (3, 3)), Polygon(HOLE, [])]
    ),
    [P(1, 1), [P(2, 2), Line((5, 5), (6, 6))]],
    Arrow((0, 0), (10, 10)),
)


def markup_bounds(markup: str, style: Style) -> ViewBox:
    """Bounds derived from the numbers in rendered markup."""
    root = svg.to_etree(f'<svg xmlns="{svg.SVG_NS["svg"]}">{markup}</svg>')
    stroke_width = style.stroke_width
    if stroke_width is None:
        stroke_width = 1.0
    box = ViewBox()
    for element in root:
        tag = svg.strip_ns(element.tag)
        if tag == 'circle':
            half = float(element.get('r')) + stroke_width
            box = box.and_(
                ViewBox.from_center(
                    float(element.get('cx')), float(element.get('cy')), half
                )
            )
        elif tag == 'path':
            numbers = [float(n) for n in _RE_NUMBER.findall(element.get('d'))]
            for x, y in zip(numbers[::2], numbers[1::2]):
                box = box.and_(ViewBox.from_center(x, y, stroke_width))
    return box


def assert_box_equal(a: ViewBox, b: ViewBox) -> None:
    for v1, v2 in zip(a, b):
        if v1 is None or v2 is None:
            assert v1 is v2
        else:
            assert v1 == pytest.approx(v2)


@pytest.mark.parametrize('style', STYLES)
@pytest.mark.parametrize('shape', SHAPES, ids=lambda s: type(s).__name__)
def test_bounds_agree_with_markup(shape: object, style: Style) -> None:
    markup = geomsvg.to_svg_str(shape, style)
    assert_box_equal(geomsvg.viewbox(shape, style), markup_bounds(markup, style))


def test_point() -> None:
    style = Style(radius=2.0)
    assert geomsvg.to_svg_str(P(10, 28.1), style) == (
        '<circle cx="10.0" cy="28.1" r="2"/>'
    )
    assert geomsvg.to_svg_str((3, 4), Style()) == (
        '<circle cx="3.0" cy="4.0" r="1"/>'
    )
    style = Style(stroke_width=0.5, fill=Named('red'))
    assert geomsvg.to_svg_str(P(0, 0), style) == (
        '<circle cx="0.0" cy="0.0" r="1" fill="red" stroke-width="0.5"/>'
    )


def test_point_bounds_default_stroke() -> None:
    # An unstroked point still gets one unit of stroke padding.
    assert geomsvg.viewbox(P(10, 28.1), Style(radius=2.0)) == ViewBox(
        7, 25.1, 13, 31.1
    )
    assert geomsvg.viewbox(P(0, 0), Style()) == ViewBox(-2, -2, 2, 2)
    assert geomsvg.viewbox(P(0, 0), Style(stroke_width=0.0)) == ViewBox(
        -1, -1, 1, 1
    )


def test_line() -> None:
    line = Line((114.19, 22.26), (15.93, -15.76))
    style = Style(stroke_width=2.5, radius=10.0)
    assert geomsvg.to_svg_str(line, style) == (
        '<path d="M 114.19 22.26 L 15.93 -15.76" stroke-width="2.5"/>'
    )
    # Lines ignore the point radius.
    box = geomsvg.viewbox(line, style)
    assert box.min_x == pytest.approx(13.43)
    assert box.min_y == pytest.approx(-18.26)
    assert box.max_x == pytest.approx(116.69)
    assert box.max_y == pytest.approx(24.76)


def test_linestring() -> None:
    ls = LineString([(0, 0), (1, 0), (1, 1)])
    assert geomsvg.to_svg_str(ls, Style()) == (
        '<path d="M 0.0 0.0 L 1.0 0.0"/><path d="M 1.0 0.0 L 1.0 1.0"/>'
    )
    assert geomsvg.viewbox(ls, Style()) == ViewBox(-1, -1, 2, 2)
    assert geomsvg.to_svg_str(LineString(), Style()) == ''
    assert geomsvg.viewbox(LineString([(5, 5)]), Style()).is_empty


def test_polygon_with_hole() -> None:
    polygon = Polygon(SQUARE, [HOLE])
    markup = geomsvg.to_svg_str(polygon, Style())
    assert markup == (
        '<path fill-rule="evenodd"'
        ' d="M 0.0 0.0 L 10.0 0.0 L 10.0 10.0 L 0.0 10.0 L 0.0 0.0 Z'
        ' M 2.0 2.0 L 4.0 2.0 L 4.0 4.0 L 2.0 2.0 Z"/>'
    )
    assert markup.count('Z') == 2
    path = svg.to_etree(
        f'<svg xmlns="{svg.SVG_NS["svg"]}">{markup}</svg>'
    )[0]
    assert path.get('fill-rule') == 'evenodd'


def test_polygon_bounds_include_closing_edge() -> None:
    polygon = Polygon([(0, 0), (10, 0), (5, 5)])
    assert polygon.exterior.is_closed()
    assert geomsvg.viewbox(polygon, Style(stroke_width=1.0)) == ViewBox(
        -1, -1, 11, 6
    )


def test_polygon_empty_rings() -> None:
    assert geomsvg.to_svg_str(Polygon([]), Style()) == ''
    assert geomsvg.viewbox(Polygon([]), Style()).is_empty
    markup = geomsvg.to_svg_str(Polygon([], [HOLE]), Style())
    assert markup.count('M') == 1


def test_rect_and_triangle_are_polygons() -> None:
    box = Box((1, 2), (6, -3))
    style = Style(stroke_width=0.1)
    assert geomsvg.to_svg_str(box, style) == geomsvg.to_svg_str(
        Polygon(box.vertices()), style
    )
    triangle = Triangle((0, 0), (4, 1), (2, 7))
    assert geomsvg.to_svg_str(triangle, style) == geomsvg.to_svg_str(
        Polygon(list(triangle)), style
    )
    assert geomsvg.viewbox(triangle, style) == geomsvg.viewbox(
        Polygon(list(triangle)), style
    )


def test_collections_concatenate_in_order() -> None:
    style = Style()
    p1, p2 = P(1, 2), P(3, 4)
    line = Line((0, 0), (1, 1))
    expected = geomsvg.to_svg_str(p1, style) + geomsvg.to_svg_str(line, style)
    assert geomsvg.to_svg_str(GeometryCollection([p1, line]), style) == expected
    assert geomsvg.to_svg_str([p1, line], style) == expected
    assert geomsvg.to_svg_str(MultiPoint([p1, p2]), style) == (
        geomsvg.to_svg_str(p1, style) + geomsvg.to_svg_str(p2, style)
    )


def test_empty_collections() -> None:
    for shape in (MultiPoint(), MultiPolygon(), GeometryCollection(), []):
        assert geomsvg.to_svg_str(shape, Style()) == ''
        assert geomsvg.viewbox(shape, Style()).is_empty


def test_unsupported_geometry() -> None:
    with pytest.raises(TypeError):
        geomsvg.to_svg_str('not a shape', Style())
    with pytest.raises(TypeError):
        geomsvg.viewbox(42, Style())


def test_unrepresentable_coordinates() -> None:
    assert geomsvg.to_svg_str((math.inf, 1), Style()) == (
        '<circle cx="0.0" cy="1.0" r="1"/>'
    )
    assert geomsvg.viewbox((math.nan, 1), Style()) == ViewBox(-2, -1, 2, 3)


def test_arrow() -> None:
    style = Style(radius=1.0)
    markup = Arrow((0, 0), (10, 0)).to_svg_str(style)
    assert markup.count('<path') == 3
    assert markup.startswith('<path d="M 0.0 0.0 L 10.0 0.0"/>')
    heads = Arrow((0, 0), (10, 0)).segments(style)[1:]
    ends = sorted((round(line.p2.x, 6), round(line.p2.y, 6)) for line in heads)
    s = round(math.sqrt(0.5), 6)
    assert ends == [(round(10 - s, 6), -s), (round(10 - s, 6), s)]
    for line in heads:
        assert line.p1 == P(10, 0)
        assert line.length() == pytest.approx(1.0)


def test_arrow_head_scales_with_radius() -> None:
    heads = Arrow(Line((0, 0), (0, 5))).segments(Style(radius=3.0))[1:]
    assert all(line.length() == pytest.approx(3.0) for line in heads)
    assert all(line.p2.y < 5 for line in heads)


def test_zero_length_arrow() -> None:
    arrow = Arrow((3, 3), (3, 3))
    assert arrow.to_svg_str(Style()) == ''
    assert arrow.viewbox(Style()).is_empty
    assert geomsvg.to_svg_str(arrow, Style()) == ''


def test_text() -> None:
    text = Text('a < b', (1.5, 2))
    assert geomsvg.to_svg_str(text, Style(fill=None)) == (
        '<text font-size="10" x="1.5" y="2">a &lt; b</text>'
    )
    assert text.with_font_size(12).to_svg_str(Style()) == (
        '<text font-size="12" x="1.5" y="2">a &lt; b</text>'
    )
    assert text.font_size == 10


def test_text_has_no_bounds() -> None:
    assert geomsvg.viewbox(Text(42, (100, 100)), Style()).is_empty
    collection = [Text('label', (100, 100)), P(0, 0)]
    assert geomsvg.viewbox(collection, Style()) == ViewBox(-2, -2, 2, 2)


def test_linestring_lines() -> None:
    ls = LineString([(0, 0), (1, 0), (1, 1)])
    assert list(ls.lines()) == [Line((0, 0), (1, 0)), Line((1, 0), (1, 1))]
    assert ls.closed()[-1] == geom2d.P(0, 0)
    assert ls.closed().closed() == ls.closed()

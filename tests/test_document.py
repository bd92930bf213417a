"""Test eagerly rendered documents and their composition."""

from __future__ import annotations

import io

from geom2d import Line, P

from geosvg import svg
from geosvg.css import Named, Rgb
from geosvg.document import SVGDocument, SVGDocumentPart
from geosvg.style import Style
from geosvg.text import Text
from geosvg.units import Unit
from geosvg.viewbox import ViewBox

SVG_OPEN = (
    '<svg xmlns="http://www.w3.org/2000/svg"'
    ' preserveAspectRatio="xMidYMid meet"'
)


def two_points() -> SVGDocument:
    return (
        SVGDocument.style_builder()
        .finish_style()
        .add_shapes([P(0, 0), P(4, 0)])
        .finish_shapes()
    )


def test_point_and_line() -> None:
    point = P(10, 28.1)
    line = Line((114.19, 22.26), (15.93, -15.76))

    doc = (
        SVGDocument.style_builder()
        .with_radius(2.0)
        .finish_style()
        .add_shape(point)
        .finish_shapes()
        .and_(
            SVGDocument.style_builder()
            .with_stroke_width(2.5)
            .finish_style()
            .add_shape(line)
            .finish_shapes()
        )
        .with_fill_color(Named('red'))
        .with_stroke_color(Rgb(200, 0, 100))
        .with_fill_opacity(0.7)
    )

    expected = (
        '<svg xmlns="http://www.w3.org/2000/svg"'
        ' preserveAspectRatio="xMidYMid meet"'
        ' viewBox="7 -18.26 109.69 49.36" '
        ' fill="red" fill-opacity="0.7" stroke="rgb(200,0,100)">'
        '<circle cx="10.0" cy="28.1" r="2"/>'
        '<path d="M 114.19 22.26 L 15.93 -15.76" stroke-width="2.5"/>'
        '</svg>'
    )
    assert doc.render() == expected
    assert str(doc) == expected
    # Rendering doesn't change anything.
    assert doc.render() == expected


def test_empty_document() -> None:
    part = SVGDocument.style_builder().finish_style().add_shapes([])
    assert part.render() == ''
    assert part.viewbox.is_empty
    doc = part.finish_shapes()
    assert doc.viewbox.is_empty
    assert doc.render() == f'{SVG_OPEN} viewBox="0 0 0 0" ></svg>'


def test_builder_style_is_part_style() -> None:
    part = (
        SVGDocument.style_builder()
        .with_stroke_color('black')
        .with_radius(3)
        .finish_style()
    )
    assert isinstance(part, SVGDocumentPart)
    assert part.style == Style(stroke_color=Named('black'), radius=3.0)


def test_shapes_are_baked_when_added() -> None:
    part = (
        SVGDocument.style_builder()
        .finish_style()
        .add_shape(P(0, 0))
        .with_radius(5)
        .add_shape(P(10, 0))
    )
    assert part.render() == (
        '<circle cx="0.0" cy="0.0" r="1"/><circle cx="10.0" cy="0.0" r="5"/>'
    )
    assert part.viewbox == ViewBox(-2, -6, 16, 6)

    doc = part.finish_shapes().with_radius(10).with_fill_color('green')
    assert doc.parts[0].shapes == part.shapes
    assert 'r="10"' not in doc.render()


def test_add_shape_order_only_affects_stacking() -> None:
    builder = SVGDocument.style_builder().with_stroke_width(0.5)
    shapes = [P(0, 0), Line((5, 5), (9, 1)), P(-3, 2)]
    forward = builder.finish_style().add_shapes(shapes)
    backward = builder.finish_style().add_shapes(reversed(shapes))
    assert forward.viewbox == backward.viewbox
    assert forward.shapes == tuple(reversed(backward.shapes))


def test_and_merges_style_left_wins() -> None:
    left = two_points().with_fill_color('red')
    right = (
        SVGDocument.style_builder()
        .finish_style()
        .add_shape(P(100, 100))
        .finish_shapes()
        .with_fill_color('blue')
        .with_opacity(0.5)
    )
    doc = left & right
    assert doc.style.fill == Named('red')
    assert doc.style.opacity == 0.5
    assert doc.viewbox == left.viewbox.and_(right.viewbox)
    assert doc.parts == (*left.parts, *right.parts)
    assert doc.render().endswith(
        '<circle cx="100.0" cy="100.0" r="1"/></svg>'
    )


def test_style_propagates_to_parts() -> None:
    doc = two_points().and_(two_points()).and_(two_points())
    styled = doc.with_stroke_width(3).with_color(Rgb(1, 2, 3))
    assert len(styled.parts) == 3
    for part in styled.parts:
        assert part.style.stroke_width == 3.0
        assert part.style.fill == Rgb(1, 2, 3)
        assert part.style.stroke_color == Rgb(1, 2, 3)
    assert styled.style.stroke_width == 3.0
    # Value semantics
    assert doc.style == Style()
    assert all(part.style == Style() for part in doc.parts)


def test_with_margin() -> None:
    doc = two_points().with_margin(1)
    assert doc.render().startswith(f'{SVG_OPEN} viewBox="-3 -3 10 6" ')


def test_width_keeps_aspect_ratio() -> None:
    # Viewport is 8 x 4
    doc = two_points().with_width('10cm')
    assert 'viewBox="-2 -2 8 4" width="10cm" height="5cm" ' in doc.render()
    doc = two_points().with_height(Unit(2))
    assert 'width="4" height="2"' in doc.render()
    doc = two_points().with_width(100).with_height(Unit(1, 'in'))
    assert 'width="100" height="1in"' in doc.render()


def test_width_without_bounds() -> None:
    doc = (
        SVGDocument.style_builder()
        .finish_style()
        .add_shape(Text('no bounds', (5, 5)))
        .finish_shapes()
        .with_width('5in')
    )
    assert 'viewBox="0 0 0 0" width="5in" height="5in" ' in doc.render()


def test_to_etree_and_write() -> None:
    doc = two_points().with_stroke_color('black')
    root = doc.to_etree()
    assert root.tag == svg.svg_ns('svg')
    assert root.get('viewBox') == '-2 -2 8 4'
    assert root.get('stroke') == 'black'
    assert [svg.strip_ns(e.tag) for e in root] == ['circle', 'circle']

    out = io.StringIO()
    doc.write(out, pretty_print=True)
    text = out.getvalue()
    assert text.startswith('<?xml version="1.0"')
    assert '\n  <circle' in text

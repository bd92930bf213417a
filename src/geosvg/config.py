"""Scene files: documents described as TOML.

A scene has an optional ``[document]`` table with document level
style and sizing, and a list of ``[[parts]]``, each with its own
``style`` table and a list of ``shapes``::

    [document]
    fill = "red"
    margin = 1.0
    width = "10cm"

    [[parts]]
    style = { radius = 2.0 }
    shapes = [{ type = "point", coordinates = [10, 28.1] }]
"""

from __future__ import annotations

import functools
import logging
import pathlib
from typing import TYPE_CHECKING, Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib

import geom2d

from . import shapes
from .arrow import Arrow
from .document import SVGDocument
from .style import Style
from .text import Text
from .units import Unit

if TYPE_CHECKING:
    import os
    from collections.abc import Callable, Mapping

logger = logging.getLogger(__name__)

# Document table keys that aren't style properties.
_DOCUMENT_KEYS = frozenset(('margin', 'width', 'height'))


class ConfigError(Exception):
    """Malformed scene or style configuration."""


def _require(spec: Mapping[str, Any], key: str) -> Any:  # noqa: ANN401
    try:
        return spec[key]
    except KeyError:
        raise ConfigError(
            f'{spec.get("type", "shape")} is missing "{key}"'
        ) from None


def _point(value: Any) -> geom2d.P:  # noqa: ANN401
    try:
        x, y = value
        return geom2d.P(x, y)
    except (TypeError, ValueError) as e:
        raise ConfigError(f'Invalid point: {value!r}') from e


def _points(value: Any) -> list[geom2d.P]:  # noqa: ANN401
    if not isinstance(value, list):
        raise ConfigError(f'Expected a list of points: {value!r}')
    return [_point(p) for p in value]


def _polygon(spec: Mapping[str, Any]) -> shapes.Polygon:
    if not isinstance(spec, dict):
        raise ConfigError(f'Expected a polygon table: {spec!r}')
    interiors = spec.get('interiors', [])
    if not isinstance(interiors, list):
        raise ConfigError(f'Expected a list of rings: {interiors!r}')
    return shapes.Polygon(
        _points(_require(spec, 'exterior')),
        [_points(ring) for ring in interiors],
    )


def _line(spec: Mapping[str, Any]) -> geom2d.Line:
    p1, p2 = _endpoints(spec)
    return geom2d.Line(p1, p2)


def _endpoints(spec: Mapping[str, Any]) -> list[geom2d.P]:
    points = _points(_require(spec, 'coordinates'))
    if len(points) != 2:  # noqa: PLR2004
        raise ConfigError(f'{spec["type"]} needs exactly two points')
    return points


def _triangle(spec: Mapping[str, Any]) -> shapes.Triangle:
    points = _points(_require(spec, 'coordinates'))
    if len(points) != 3:  # noqa: PLR2004
        raise ConfigError('triangle needs exactly three points')
    return shapes.Triangle(*points)


def _text(spec: Mapping[str, Any]) -> Text:
    text = Text(_require(spec, 'text'), _point(_require(spec, 'position')))
    if 'font_size' in spec:
        text = text.with_font_size(spec['font_size'])
    return text


_SHAPE_FACTORIES: dict[str, Callable[[Mapping[str, Any]], object]] = {
    'point': lambda spec: _point(_require(spec, 'coordinates')),
    'line': _line,
    'linestring': lambda spec: shapes.LineString(
        _points(_require(spec, 'coordinates'))
    ),
    'polygon': _polygon,
    'rect': lambda spec: geom2d.Box(*_endpoints(spec)),
    'triangle': _triangle,
    'multipoint': lambda spec: shapes.MultiPoint(
        _points(_require(spec, 'coordinates'))
    ),
    'multilinestring': lambda spec: shapes.MultiLineString(
        _points(ls) for ls in _require(spec, 'coordinates')
    ),
    'multipolygon': lambda spec: shapes.MultiPolygon(
        _polygon(polygon) for polygon in _require(spec, 'polygons')
    ),
    'collection': lambda spec: shapes.GeometryCollection(
        shape_from_dict(geometry) for geometry in _require(spec, 'geometries')
    ),
    'arrow': lambda spec: Arrow(*_endpoints(spec)),
    'text': _text,
}


def shape_from_dict(spec: Mapping[str, Any]) -> object:
    """Create a shape from its scene description.

    Args:
        spec: A mapping with a ``type`` key and the coordinates
            the type needs.

    Raises:
        ConfigError: If the type is unknown or the coordinates are malformed.
    """
    if not isinstance(spec, dict):
        raise ConfigError(f'Expected a shape table: {spec!r}')
    shape_type = spec.get('type')
    factory = _SHAPE_FACTORIES.get(str(shape_type).lower())
    if factory is None:
        raise ConfigError(f'Unknown shape type: {shape_type!r}')
    try:
        return factory(spec)
    except (TypeError, ValueError, AttributeError) as e:
        raise ConfigError(f'Invalid {shape_type}: {e}') from e


def style_from_dict(style_map: Mapping[str, Any]) -> Style:
    """Create a Style, reporting bad properties as ConfigError."""
    try:
        return Style.from_dict(style_map)
    except KeyError as e:
        raise ConfigError(e.args[0]) from e
    except (TypeError, ValueError, AttributeError) as e:
        raise ConfigError(f'Invalid style: {e}') from e


def scene_to_document(
    scene: Mapping[str, Any],
    margin: float | None = None,
    width: Unit | str | float | None = None,
    height: Unit | str | float | None = None,
) -> SVGDocument:
    """Build a document from a parsed scene.

    Args:
        scene: The parsed scene.
        margin: Viewport margin, overrides the document table.
        width: Display width, overrides the document table.
        height: Display height, overrides the document table.

    Raises:
        ConfigError: If the scene is malformed or has no parts.
    """
    parts = scene.get('parts', [])
    if not parts:
        raise ConfigError('Scene has no parts')
    if not isinstance(parts, list):
        raise ConfigError(f'Expected a list of parts: {parts!r}')

    documents = []
    for n, part_spec in enumerate(parts):
        if not isinstance(part_spec, dict):
            raise ConfigError(f'Expected a part table: {part_spec!r}')
        shape_specs = part_spec.get('shapes', [])
        if not isinstance(shape_specs, list):
            raise ConfigError(f'Expected a list of shapes: {shape_specs!r}')
        style = style_from_dict(part_spec.get('style', {}))
        part = (
            SVGDocument.style_builder()
            .use_style(style)
            .finish_style()
            .add_shapes(shape_from_dict(s) for s in shape_specs)
        )
        logger.debug('Part %d: %d shapes', n, len(part.shapes))
        documents.append(part.finish_shapes())
    document = functools.reduce(SVGDocument.and_, documents)

    doc_spec = scene.get('document', {})
    if not isinstance(doc_spec, dict):
        raise ConfigError(f'Expected a document table: {doc_spec!r}')
    doc_spec = dict(doc_spec)
    options = {k: doc_spec.pop(k, None) for k in _DOCUMENT_KEYS}
    overrides = {'margin': margin, 'width': width, 'height': height}
    options.update((k, v) for k, v in overrides.items() if v is not None)
    document = document.or_style(style_from_dict(doc_spec))
    return apply_document_options(document, **options)


def apply_document_options(
    document: SVGDocument,
    margin: float | None = None,
    width: Unit | str | float | None = None,
    height: Unit | str | float | None = None,
) -> SVGDocument:
    """Apply document margin and size settings.

    Raises:
        ConfigError: If a size isn't a valid unit value.
    """
    try:
        if margin is not None:
            document = document.with_margin(float(margin))
        if width is not None:
            document = document.with_width(width)
        if height is not None:
            document = document.with_height(height)
    except (TypeError, ValueError) as e:
        raise ConfigError(f'Invalid document size: {e}') from e
    return document


def load_scene(path: str | os.PathLike) -> dict[str, Any]:
    """Read a TOML scene file.

    Raises:
        ConfigError: If the file isn't valid TOML.
    """
    path = pathlib.Path(path)
    try:
        with path.open('rb') as fp:
            return tomllib.load(fp)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f'{path}: {e}') from e

"""Render geom2d geometry as SVG.

Shapes are converted to SVG markup while the viewport that encloses
them is computed alongside, inflated by stroke width and point radius.
Independently styled groups of shapes can be combined into one
document, with style set on the document cascading to its groups.

There are two ways to build an SVG:

- :class:`~geosvg.document.SVGDocument` renders shapes as they are
  added, each group with its own style.
- :class:`~geosvg.svg.Svg` keeps references to the shapes and renders
  them only when the tree is rendered.
"""

import importlib.metadata

__version__ = importlib.metadata.version('utl-geosvg')

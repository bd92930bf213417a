"""CSS color values and inline style helpers."""

from __future__ import annotations

import re
from typing import NamedTuple, TypeAlias, Union

# CSS color keywords.
# See: https://www.w3.org/TR/css-color-3/#svg-color
_CSS_COLOR_NAMES = frozenset(
    (
        'aliceblue',
        'antiquewhite',
        'aqua',
        'aquamarine',
        'azure',
        'beige',
        'bisque',
        'black',
        'blanchedalmond',
        'blue',
        'blueviolet',
        'brown',
        'burlywood',
        'cadetblue',
        'chartreuse',
        'chocolate',
        'coral',
        'cornflowerblue',
        'cornsilk',
        'crimson',
        'cyan',
        'darkblue',
        'darkcyan',
        'darkgoldenrod',
        'darkgray',
        'darkgreen',
        'darkgrey',
        'darkkhaki',
        'darkmagenta',
        'darkolivegreen',
        'darkorange',
        'darkorchid',
        'darkred',
        'darksalmon',
        'darkseagreen',
        'darkslateblue',
        'darkslategray',
        'darkslategrey',
        'darkturquoise',
        'darkviolet',
        'deeppink',
        'deepskyblue',
        'dimgray',
        'dimgrey',
        'dodgerblue',
        'firebrick',
        'floralwhite',
        'forestgreen',
        'fuchsia',
        'gainsboro',
        'ghostwhite',
        'gold',
        'goldenrod',
        'gray',
        'green',
        'greenyellow',
        'grey',
        'honeydew',
        'hotpink',
        'indianred',
        'indigo',
        'ivory',
        'khaki',
        'lavender',
        'lavenderblush',
        'lawngreen',
        'lemonchiffon',
        'lightblue',
        'lightcoral',
        'lightcyan',
        'lightgoldenrodyellow',
        'lightgray',
        'lightgreen',
        'lightgrey',
        'lightpink',
        'lightsalmon',
        'lightseagreen',
        'lightskyblue',
        'lightslategray',
        'lightslategrey',
        'lightsteelblue',
        'lightyellow',
        'lime',
        'limegreen',
        'linen',
        'magenta',
        'maroon',
        'mediumaquamarine',
        'mediumblue',
        'mediumorchid',
        'mediumpurple',
        'mediumseagreen',
        'mediumslateblue',
        'mediumspringgreen',
        'mediumturquoise',
        'mediumvioletred',
        'midnightblue',
        'mintcream',
        'mistyrose',
        'moccasin',
        'navajowhite',
        'navy',
        'oldlace',
        'olive',
        'olivedrab',
        'orange',
        'orangered',
        'orchid',
        'palegoldenrod',
        'palegreen',
        'paleturquoise',
        'palevioletred',
        'papayawhip',
        'peachpuff',
        'peru',
        'pink',
        'plum',
        'powderblue',
        'purple',
        'red',
        'rosybrown',
        'royalblue',
        'saddlebrown',
        'salmon',
        'sandybrown',
        'seagreen',
        'seashell',
        'sienna',
        'silver',
        'skyblue',
        'slateblue',
        'slategray',
        'slategrey',
        'snow',
        'springgreen',
        'steelblue',
        'tan',
        'teal',
        'thistle',
        'tomato',
        'turquoise',
        'violet',
        'wheat',
        'white',
        'whitesmoke',
        'yellow',
        'yellowgreen',
        # Non-color keywords that are valid paint values.
        'none',
        'currentcolor',
        'transparent',
    )
)

TRGB: TypeAlias = tuple[int, int, int]

# SVG whitespace
_SVG_WS = ' \t\r\n\f'

_CSSHEX_RGB_LEN = 6
_CSSHEX_RGBSHORT_LEN = 3

_RE_CSSHEX = re.compile(
    r'#([0-9a-f]{6}|[0-9a-f]{3})$',
    flags=(re.IGNORECASE | re.ASCII),
)
_RE_CSSFUNC = re.compile(
    r'(rgb|hsl)a?\s*\(([^)]*)\)$',
    flags=(re.IGNORECASE | re.ASCII),
)


def _clamp(value: float, upper: int) -> int:
    return max(min(int(value), upper), 0)


class Named(NamedTuple):
    """A CSS color keyword, i.e. ``red`` or ``none``."""

    name: str

    def __str__(self) -> str:
        return self.name


class Rgb(NamedTuple):
    """A functional ``rgb(r,g,b)`` color with 0-255 integer channels."""

    r: int
    g: int
    b: int

    def __str__(self) -> str:
        r, g, b = (_clamp(c, 255) for c in self)
        return f'rgb({r},{g},{b})'


class Hex(NamedTuple):
    """A 24 bit color rendered as ``#RRGGBB``."""

    value: int

    def __str__(self) -> str:
        return f'#{self.value & 0xFFFFFF:06X}'


class Hsl(NamedTuple):
    """A functional ``hsl(h,s%,l%)`` color.

    Hue wraps modulo 360, saturation and lightness are clamped to 100.
    """

    h: int
    s: int
    l: int  # noqa: E741

    def __str__(self) -> str:
        return (
            f'hsl({int(self.h) % 360},'
            f'{min(int(self.s), 100)}%,{min(int(self.l), 100)}%)'
        )


Color: TypeAlias = Union[Named, Rgb, Hex, Hsl]


def is_color_keyword(name: str) -> bool:
    """True if `name` is a CSS color keyword (case insensitive)."""
    return name.strip().lower() in _CSS_COLOR_NAMES


def to_color(value: Color | str) -> Color:
    """Coerce a color or a CSS color string to a Color."""
    if isinstance(value, (Named, Rgb, Hex, Hsl)):
        return value
    if isinstance(value, str):
        return parse_color(value)
    raise TypeError(f'Not a color: {value!r}')


def parse_color(css_color: str) -> Color:
    """Parse a CSS color property value.

    Args:
        css_color: A CSS color string. I.e. "#ffc0ee", "rgb(10, 20, 30)",
            "hsl(120, 50%, 50%)", "white" or "none".

    Returns:
        A Color.

    Raises:
        ValueError: If the string is not a hex color, a functional
            color with three channels, or a known color keyword.
    """
    css_color = css_color.strip()
    if _RE_CSSHEX.match(css_color):
        r, g, b = csshex_to_rgb(css_color)
        return Hex((r << 16) | (g << 8) | b)
    m = _RE_CSSFUNC.match(css_color)
    if m:
        func = m.group(1).lower()
        args = m.group(2).replace(',', ' ').split()
        if len(args) < 3:
            raise ValueError(f'Malformed color: {css_color}')
        if func == 'rgb':
            return Rgb(*(parse_channel_value(arg) for arg in args[:3]))
        try:
            h, s, l = (round(float(arg.rstrip('%'))) for arg in args[:3])  # noqa: E741
        except ValueError as e:
            raise ValueError(f'Malformed color: {css_color}') from e
        return Hsl(h, s, l)
    if not is_color_keyword(css_color):
        raise ValueError(f'Unknown color: {css_color!r}')
    return Named(css_color)


def inline_style_to_dict(inline_style: str) -> dict:
    """Create a dictionary of style properties from an inline style attribute.

    Args:
        inline_style: A string containing the value of a CSS `style` attribute.

    Returns:
        A dictionary of style properties.
    """
    style_map = {}
    if inline_style is not None and inline_style:
        for style_property in inline_style.split(';'):
            if style_property:
                name, value = style_property.split(':')
                name = name.strip(_SVG_WS)
                value = value.strip(_SVG_WS)
                if name and value:
                    style_map[name] = value
    return style_map


def dict_to_inline_style(style_map: dict) -> str:
    """Create an inline style attribute string.

    From a dictionary of CSS style properties.

    Args:
        style_map: A dictionary of CSS style properties.

    Returns:
        A string containing inline CSS style properties.
    """
    style_properties = [f'{name}:{value}' for name, value in style_map.items()]
    return ';'.join(style_properties)


def csshex_to_rgb(hex_color: str) -> TRGB:
    """Convert a CSS hex color property to RGB.

    Args:
        hex_color: A CSS hex property string.

    Returns:
        The RGB value as a tuple of three integers (r, g, b)
        in the range 0-255.
        Returns (0, 0, 0) by default if the hex value can't be parsed.
    """
    hex_color = hex_color.strip().lstrip('#')
    try:
        if len(hex_color) == _CSSHEX_RGB_LEN:
            return (
                int(hex_color[0:2], 16),
                int(hex_color[2:4], 16),
                int(hex_color[4:], 16),
            )
        if len(hex_color) == _CSSHEX_RGBSHORT_LEN:
            red = int(hex_color[0], 16)
            green = int(hex_color[1], 16)
            blue = int(hex_color[2], 16)
            return (red * 16 + red, green * 16 + green, blue * 16 + blue)
    except ValueError:
        pass

    return (0, 0, 0)


def parse_channel_value(value: str) -> int:
    """Parse a CSS color channel value.

    Args:
        value: A valid CSS color channel value string.
            Can be an integer number or an integer percentage.

    Returns:
        An integer value between 0 and 255.
        Default is 0 if the value isn't a valid channel value.
    """
    n = 0
    value = value.strip()
    try:
        if value.endswith('%'):
            n = int(float(value.rstrip('%')) * 255 / 100)
        elif value.isnumeric():
            n = int(value)
    except ValueError:
        pass
    return max(min(n, 255), 0)

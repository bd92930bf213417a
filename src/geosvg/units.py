"""CSS units and number formatting for SVG attribute values."""

from __future__ import annotations

import decimal
import logging
import math
import re
from typing import NamedTuple

logger = logging.getLogger(__name__)

PPI = 96.0  # Pixels per inch per https://www.w3.org/TR/css-values-3/#px

# A dictionary of supported absolute css unit to px conversion factors.
# The empty unit is a user unit, which is assumed to be a pixel.
# See http://www.w3.org/TR/SVG/coords.html#Units
UNIT_CONV = {
    'cm': PPI / 2.54,
    'in': PPI,
    '': 1,
    'mm': PPI / (2.54 * 10),
    'pc': PPI / 6,
    'px': 1,
    'pt': PPI / 72,
    'Q': PPI / (2.54 * 40),
}

_RE_FLOAT = re.compile(
    r'(([-+]?[0-9]+(\.[0-9]*)?|[-+]?\.[0-9]+)([eE][-+]?[0-9]+)?)'
)


def floatystr(value: float) -> str:
    """Format a display value.

    Rounded to 12 significant digits to drop float noise, and
    always written in positional notation, never with an exponent.
    """
    s = f'{decimal.Decimal(f"{value:.12g}"):f}'
    return '0' if s == '-0' else s


def to_float(value: object, default: float = 0.0) -> float:
    """Convert a numeric coordinate to a display float.

    Markup generation must always succeed, so values that
    can't be represented as a finite float become `default`.
    """
    try:
        f = float(value)  # type: ignore [arg-type]
    except (TypeError, ValueError, OverflowError):
        logger.debug('Unrepresentable coordinate: %r', value)
        return default
    if not math.isfinite(f):
        logger.debug('Non-finite coordinate: %r', value)
        return default
    return f


def unit_convert(value: float, from_unit: str = 'px', to_unit: str = 'px') -> float:
    """Convert a scalar value from one absolute unit to another."""
    return value * (UNIT_CONV[from_unit] / UNIT_CONV[to_unit])


class Unit(NamedTuple):
    """A quantity in an absolute CSS unit.

    Relative units (`%`, `em`, `rem`, `vh`, `vw`) are not supported.
    The empty symbol means no unit, which the SVG user agent
    interprets as user units.
    """

    value: float
    symbol: str = ''

    @classmethod
    def of(cls, value: float, symbol: str = '') -> Unit:
        """Create a Unit, checking the unit symbol."""
        if symbol not in UNIT_CONV:
            raise ValueError(f'Unsupported unit: {symbol!r}')
        return cls(float(value), symbol)

    @classmethod
    def parse(cls, scalar: str | float | Unit) -> Unit:
        """Create a Unit from a string like '3mm' or a plain number."""
        if isinstance(scalar, Unit):
            return scalar
        if isinstance(scalar, (int, float)):
            return cls(float(scalar))
        text = scalar.strip()
        m = _RE_FLOAT.match(text)
        if not m:
            raise ValueError(f'Invalid unit value: {scalar!r}')
        symbol = text[m.end() :].strip()
        return cls.of(float(m.group(0)), symbol)

    def scale(self, factor: float) -> Unit:
        """Multiply the numeric value, keeping the unit."""
        return Unit(self.value * factor, self.symbol)

    def convert(self, symbol: str) -> Unit:
        """Convert to another absolute unit."""
        if symbol not in UNIT_CONV:
            raise ValueError(f'Unsupported unit: {symbol!r}')
        return Unit(unit_convert(self.value, self.symbol, symbol), symbol)

    def __str__(self) -> str:
        return f'{floatystr(self.value)}{self.symbol}'

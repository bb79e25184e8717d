"""
Typed conversion of raw option values.

convert(kind, raw) returns the converted value or raises ValueError when the
text is not a complete number of the requested kind. The grammars follow the
C conversions command-line users expect (strtoimax/strtod): leading whitespace
and a sign are accepted, trailing characters are not.
"""
import math
import re

from .options import Kind

_INTEGER = re.compile(r"[ \t\n\v\f\r]*[+-]?[0-9]+")

_FLOAT = re.compile(r"""
    [ \t\n\v\f\r]*
    (?P<sign>[+-]?)
    (?:
        (?P<hex>0x(?:[0-9a-f]+\.?[0-9a-f]*|\.[0-9a-f]+)(?:p[+-]?[0-9]+)?)
      | (?P<decimal>(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?)
      | (?P<infinity>inf(?:inity)?)
      | (?P<nan>nan(?:\([0-9a-z_]*\))?)
    )
""", re.VERBOSE | re.IGNORECASE)


def to_integer(raw, /):
    if not _INTEGER.fullmatch(raw):
        raise ValueError("%r is not a valid integer" % raw)
    return int(raw)


def to_float(raw, /):
    if not (match := _FLOAT.fullmatch(raw)):
        raise ValueError("%r is not a valid floating point number" % raw)
    sign = -1.0 if match["sign"] == "-" else 1.0
    if match["hex"]:
        return math.copysign(float.fromhex(match["hex"]), sign)
    if match["infinity"]:
        return sign * math.inf
    if match["nan"]:
        return math.copysign(math.nan, sign)
    return sign * float(match["decimal"])


_CONVERTERS = {
    Kind.INTEGER: to_integer,
    Kind.FLOAT: to_float,
    Kind.STRING: str,
}


def convert(kind, raw, /):
    """
    convert raw text into the value of the given kind.

    raises
    - TypeError: kind is BOOLEAN (flags carry no value) or not a Kind.
    - ValueError: raw is not a complete INTEGER/FLOAT literal.
    """
    try:
        converter = _CONVERTERS[kind]
    except KeyError:
        raise TypeError("options of kind %r carry no value" % getattr(kind, "value", kind)) from None
    return converter(raw)


__all__ = (
    "convert",
    "to_integer",
    "to_float",
)

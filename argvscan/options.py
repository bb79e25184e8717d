r"""
argvscan option specifications and the option registry.

Overview
- Kind: declared value kind of an option (INTEGER, FLOAT, STRING, BOOLEAN).
- OptionSpec: identity (short character and/or long name, plus Kind) together with
  the accumulator state the scanner updates (count, value, raw, span, index).
- OptionRegistry: ordered collection of specs with first-match-wins lookup.

Identity rules (validated on construction)
- short: Unset or a single character other than '-'.
- long: Unset or a non-empty name that neither starts with '-' nor contains '='.
- at least one of short/long must be given.
- explicit None is rejected; omit the parameter instead.

Shadowing
- The registry performs no duplicate detection. Lookup is a linear scan in
  registration order, so when two specs share a short character or a long name
  the first one registered is the only one ever matched.
"""
import enum

from .utils import *


class Kind(enum.Enum):
    """
    value kind declared by an option.

    - INTEGER: base-10 signed integer.
    - FLOAT: C strtod-style floating point number.
    - STRING: verbatim text.
    - BOOLEAN: presence-only flag; its value is the occurrence count.
    """
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    BOOLEAN = "boolean"


class OptionSpec:
    """
    One registered option: immutable identity, mutable accumulator.

    Identity (read-only after construction)
    - short: str | Unset
    - long: str | Unset
    - kind: Kind

    Accumulator (written only by the scanner through record())
    - count: number of successful matches (starts at 0).
    - value: last converted value; None while count == 0. For BOOLEAN it is count.
    - raw: last raw value text; None for BOOLEAN and while count == 0.
    - span: (start, stop) offsets of raw inside tokens[index].
    - index: token index of the last value (or of the flag itself for BOOLEAN).
    """
    __slots__ = ("_short", "_long", "_kind", "_count", "_value", "_raw", "_span", "_index")

    def __init__(self, short=Unset, long=Unset, kind=Kind.BOOLEAN):
        if short is None or long is None:
            raise TypeError("option forms cannot be None; omit them instead")
        if not isinstance(short, str | Unset):
            raise TypeError("option short form must be a string")
        if not isinstance(long, str | Unset):
            raise TypeError("option long form must be a string")
        if short is Unset and long is Unset:
            raise TypeError("option must specify at least a short or a long form")
        if isinstance(short, str) and (len(short) != 1 or short == "-"):
            raise ValueError("option short form must be a single character other than '-'")
        if isinstance(long, str) and (not long or long.startswith("-") or "=" in long):
            raise ValueError("option long form must be a non-empty name without leading '-' or '='")
        if not isinstance(kind, Kind):
            raise TypeError("option kind must be a Kind")

        self._short = short
        self._long = long
        self._kind = kind
        self.reset()

    short = property(lambda self: self._short)
    long = property(lambda self: self._long)
    kind = property(lambda self: self._kind)
    count = property(lambda self: self._count)
    raw = property(lambda self: self._raw)
    span = property(lambda self: self._span)
    index = property(lambda self: self._index)

    @property
    def value(self):
        if self._kind is Kind.BOOLEAN:
            return self._count
        return self._value

    @property
    def spelling(self):
        """
        canonical user-facing spelling: '--long' when available, else '-s'.
        """
        return "--" + self._long if self._long is not Unset else "-" + self._short

    def reset(self):
        self._count = 0
        self._value = None
        self._raw = None
        self._span = None
        self._index = None

    def record(self, index, value=None, raw=None, span=None):
        """
        register one successful occurrence.

        the converted value must be computed before calling this method so that
        a conversion failure leaves the accumulator untouched.
        """
        self._count += 1
        self._index = index
        if self._kind is not Kind.BOOLEAN:
            self._value = value
            self._raw = raw
            self._span = span

    def copy(self):
        """
        return a fresh spec with the same identity and an empty accumulator.
        """
        return type(self)(self._short, self._long, self._kind)

    def __repr__(self):
        return "option(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __rich_repr__(self):
        yield "short", self._short
        yield "long", self._long
        yield "kind", self._kind.value
        yield "count", self._count
        if self._count:
            yield "value", self.value
            yield "index", self._index


class OptionRegistry:
    """
    ordered option collection with first-match-wins lookup.

    storage is a plain list; registration order is lookup order.
    """
    __slots__ = ("_options",)

    def __init__(self):
        self._options = []

    options = mirror("options")

    def add(self, spec, /):
        if not isinstance(spec, OptionSpec):
            raise TypeError("registry accepts OptionSpec instances only")
        self._options.append(spec)
        return spec

    def find(self, short=Unset, long=Unset):
        """
        return the first spec matching short (when given) or long, else None.

        long matching is exact and case-sensitive: a registered name that is only
        a prefix of the requested one (or the other way round) never matches.
        """
        if short is not Unset:
            for spec in self._options:
                if spec.short == short:
                    return spec
        elif long is not Unset:
            for spec in self._options:
                if spec.long == long:
                    return spec
        return None

    def __len__(self):
        return len(self._options)

    def __iter__(self):
        return iter(tuple(self._options))


__all__ = (
    "Kind",
    "OptionSpec",
    "OptionRegistry",
)

"""
argvscan faults (errors raised while scanning or querying) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every fault kind.
  Codes are grouped by domain to keep messages and log searches predictable.
- ParseException: base type for scan-time faults. Carries message + options and
  knows how to render itself (header, one-sentence message, single hint).
- QueryError: base type for accessor faults (unknown option, bad positional
  index). These are plain lookup errors: never rendered, never exiting.
- trigger(): central entry point to surface a parse fault.
- getdoc(): optional description lookup for a code from the host application.

Integration
- Parser.parse() builds a fault with context (prog, input, index, hint) and calls
  trigger(fault, shell=..., fancy=..., colorful=...).
- In shell mode the fault is printed on stderr through rich before it is raised;
  the exception always propagates so the host decides whether to exit.
"""
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping (by high-level domain)
    - switches (options/flags) (1111x)
      • UNKNOWN_SWITCH, FLAG_ASSIGNMENT, OPTION_VALUE_REQUIRED, UNCASTABLE_VALUE
    - positionals (1112x)
      • TOO_MANY_POSITIONALS
    - queries (1113x)
      • NOT_REGISTERED, POSITIONAL_INDEX
    - resources (1115x)
      • ALLOCATION_FAILURE

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- switch/flag/option errors (1111x) ---
    UNKNOWN_SWITCH              = 11112
    FLAG_ASSIGNMENT             = 11113
    OPTION_VALUE_REQUIRED       = 11117
    UNCASTABLE_VALUE            = 11119

    # --- positional errors (1112x) ---
    TOO_MANY_POSITIONALS        = 11121

    # --- query errors (1113x) ---
    NOT_REGISTERED              = 11131
    POSITIONAL_INDEX            = 11132

    # --- resource errors (1115x) ---
    ALLOCATION_FAILURE          = 11151

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ParseException(Exception):
    """
    base class of every fault raised by Parser.parse().

    options (read-only mapping, all optional)
    - prog: program name shown in the header.
    - code: FaultCode of the fault.
    - title: short title ("unknown option").
    - hint: one actionable sentence.
    - input: offending spelling (e.g. '--count', '-x').
    - value: offending raw value (conversion faults).
    - index: token index in the scanned vector.
    - shell / fancy / colorful: rendering switches merged in by trigger().
    """
    code = Unset

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        prog = self.options.get("prog")
        return "%s: %s" % (prog, self.message) if prog else str(self.message)

    def __rich__(self):
        main = __import__("__main__")

        styles = {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {})

        colorful = self.options.get("colorful", True)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), styles.get(style, "") if colorful else "")

        code = self.options.get("code", self.code)
        header = Text.assemble(
            "[ ",
            text(self.options.get("prog", "argvscan"), "prog-name"),
            " — ",
            text(code.normalize() if code else "", "code"),
            " | ",
            text(str(self.options.get("title", "error")).title(), "error-title"),
            " ]"
        )
        message = text(self.message, "error-message")
        renders = [message]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))
        if docs := self.options.get("docs"):
            renders.append(text(docs, "hint"))

        if self.options.get("fancy", False):
            return Panel(Group(*renders), title=header, title_align="left")
        return Group(header, *renders)

    def __trigger__(self):
        if self.options.get("shell", False):
            console.print(self)
        raise self

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownOptionError(ParseException):
    code = FaultCode.UNKNOWN_SWITCH
class FlagAssignmentError(ParseException):
    code = FaultCode.FLAG_ASSIGNMENT
class MissingArgumentError(ParseException):
    code = FaultCode.OPTION_VALUE_REQUIRED
class UncastableValueError(ParseException):
    code = FaultCode.UNCASTABLE_VALUE
class TooManyPositionalsError(ParseException):
    code = FaultCode.TOO_MANY_POSITIONALS
class AllocationFailureError(ParseException, MemoryError):
    code = FaultCode.ALLOCATION_FAILURE


class QueryError(LookupError):
    """
    base class of accessor faults; informational, never rendered.
    """
    code = Unset


class NotRegisteredError(QueryError, KeyError):
    code = FaultCode.NOT_REGISTERED

    def __str__(self):
        return str(self.args[0]) if self.args else ""


class PositionalIndexError(QueryError, IndexError):
    code = FaultCode.POSITIONAL_INDEX


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ParseException).
    - options are merged into the fault via __replace__(**options) before triggering.
    - parse faults always raise; shell mode additionally renders them on stderr.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    when not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "ParseException",
    "UnknownOptionError",
    "FlagAssignmentError",
    "MissingArgumentError",
    "UncastableValueError",
    "TooManyPositionalsError",
    "AllocationFailureError",
    "QueryError",
    "NotRegisteredError",
    "PositionalIndexError",
    "trigger",
    "getdoc",
)

"""
argvscan parser: register options, scan a token vector once, query the results.

What this module provides
- Parser: owns the program name, the option registry, the positional buffer and
  the positional bound. It scans argv-like vectors with a small state machine and
  exposes read-only accessors afterwards.
- Result: immutable snapshot of one option's accumulator.

Token classification (token 0 is the program name and is skipped)
- after a bare '--'                      → positional
- '--name', '--name=value' (len >= 3)    → long option
- '--'                                   → end of options, not captured
- '-abc', '-n5' (len >= 2)               → short option cluster
- anything else ('-', '', 'file.txt')    → positional

Values
- long options take the text after '=' or, without '=', the next token.
- short options take the rest of the token or, when nothing remains, the next token.
- a value token is consumed even when it starts with '-' ('-n -5' sets n to -5).
- the recorded index is the index of the token that supplied the value.

Quick start
    >>> from argvscan import Parser, Kind
    >>> parser = Parser("demo", shell=False)
    >>> _ = parser.add_option("n", "count", Kind.INTEGER)
    >>> _ = parser.add_option("v", "verbose")
    >>> parser.parse(["demo", "-vvn5", "input.txt"])
    >>> parser.int_result("n").value, parser.bool_result("v").count
    (5, 2)
    >>> parser.positional_at(0)
    Positional(token='input.txt', index=2)
"""
import shlex
from collections.abc import Iterable
from typing import Any, NamedTuple

from .faults import *
from .options import Kind, OptionSpec, OptionRegistry
from .positionals import Positional, PositionalBuffer
from .utils import *
from .values import convert


class Result(NamedTuple):
    """
    snapshot of one option after parsing.

    count is 0 (and every other field None, except value for BOOLEAN options,
    which is the count itself) when the option never appeared.
    """
    count: int
    value: Any
    raw: str | None
    span: tuple[int, int] | None
    index: int | None


def _accessor(name, kind, /):
    """
    build a typed result accessor bound to one Kind.
    """

    @rename(name)
    def accessor(self, short=Unset, long=Unset):
        return self.result(short, long, kind=kind)

    accessor.__doc__ = f"""
        Return the Result of a {kind.value} option, looked up by short or long form.

        Raises NotRegisteredError for unknown options and TypeError when the option
        was registered with another kind.
    """
    return accessor


def _sanitized(tokens):
    """
    normalize the input vector into a tuple of strings.

    a single string is split with shell rules (shlex.split); its first word is
    the program name like any other vector.

    raises
    - TypeError: not a string, or an iterable holding a non-string.
    - ValueError: a string that shlex cannot split (unbalanced quotes, trailing escape).
    """
    if isinstance(tokens, str):
        try:
            return tuple(shlex.split(tokens))
        except ValueError as error:
            raise ValueError("parse() could not split the command line: %s" % error) from None
    if not isinstance(tokens, Iterable):
        raise TypeError("parse() argument must be a string or an iterable of strings")
    tokens = tuple(tokens)
    for token in tokens:
        if not isinstance(token, str):
            raise TypeError("parse() argument must be a string or an iterable of strings")
    return tokens


class Parser:
    """
    single-use command-line scanner.

    Lifecycle
    - construct with the program name and the positional bound (negative = unbounded).
    - register options with add_option() (or pass them as `options`).
    - call parse() exactly once.
    - query with result()/int_result()/float_result()/str_result()/bool_result(),
      positional_count() and positional_at() as often as needed.

    Rendering (see argvscan.faults)
    - shell: print parse faults on stderr before raising them.
    - fancy: draw faults inside a rich Panel.
    - colorful: style fault text.

    Faults
    - parse faults stop the scan immediately; matches recorded before the fault
      are kept.
    """

    def __init__(self, prog, max_positionals=-1, /, options=(), *, shell=True, fancy=False, colorful=True):
        if not isinstance(prog, str):
            raise TypeError("parser program name must be a string")
        elif not (prog := prog.strip()):
            raise ValueError("parser program name cannot be empty")
        if isinstance(max_positionals, bool) or not isinstance(max_positionals, int):
            raise TypeError("parser 'max_positionals' must be an integer")
        for name, flag in (("shell", shell), ("fancy", fancy), ("colorful", colorful)):
            if not isinstance(flag, bool):
                raise TypeError(f"parser {name!r} must be a boolean")

        self._prog = prog
        self._registry = OptionRegistry()
        self._positionals = PositionalBuffer(max_positionals)
        self._tokens = ()
        self._parsed = False
        self._shell = shell
        self._fancy = fancy
        self._colorful = colorful

        if not isinstance(options, Iterable):
            raise TypeError("parser 'options' must be an iterable of specs or (short, long, kind) triples")
        for entry in options:
            if isinstance(entry, OptionSpec):
                self._register(entry.copy())
            elif isinstance(entry, tuple):
                self.add_option(*entry)
            else:
                raise TypeError("parser 'options' must be an iterable of specs or (short, long, kind) triples")

    prog = property(lambda self: self._prog)
    max_positionals = property(lambda self: self._positionals.limit)
    shell = property(lambda self: self._shell)
    fancy = property(lambda self: self._fancy)
    colorful = property(lambda self: self._colorful)
    tokens = property(lambda self: self._tokens)
    parsed = property(lambda self: self._parsed)

    @property
    def options(self):
        return self._registry.options

    @property
    def positionals(self):
        return tuple(self._positionals)

    def add_option(self, short=Unset, long=Unset, kind=Kind.BOOLEAN):
        """
        register an option and return its spec.

        parameters
        - short: single character (e.g. 'v' for '-v'), or omitted.
        - long: long name without dashes (e.g. 'verbose' for '--verbose'), or omitted.
        - kind: Kind of the value; BOOLEAN (the default) takes no value.

        duplicates are not rejected: lookups stop at the first registered match,
        so a later spec reusing a short or long form is never matched through it.
        """
        if self._parsed:
            raise RuntimeError("options cannot be added after parse()")
        return self._register(OptionSpec(short, long, kind))

    def _register(self, spec):
        try:
            return self._registry.add(spec)
        except MemoryError:
            self._fault(
                AllocationFailureError,
                "allocation failed while registering option %r" % spec.spelling,
                title="allocation failure",
                hint="free some memory or register fewer options",
            )

    def _fault(self, exception, message, /, **options):
        code = exception.code
        trigger(
            exception(message, **options),
            prog=self._prog,
            code=code,
            docs=getdoc(code),
            shell=self._shell,
            fancy=self._fancy,
            colorful=self._colorful,
        )

    def parse(self, tokens, /):
        """
        scan the whole vector once, updating option state and positionals.

        tokens[0] is the program invocation name and is never classified. the scan
        stops at the first fault, which is raised (and rendered first in shell mode).

        a malformed vector raises TypeError/ValueError before scanning starts; such
        errors are never rendered and leave the parser unused.
        """
        if self._parsed:
            raise RuntimeError("parse() can only be called once per parser")
        tokens = _sanitized(tokens)
        self._parsed = True
        self._tokens = tokens

        positionals_only = False
        index = 1
        while index < len(tokens):
            token = tokens[index]
            if positionals_only:
                self._capture(token, index)
            elif len(token) >= 3 and token.startswith("--"):
                index = self._scan_long(tokens, index)
            elif len(token) >= 2 and token.startswith("-"):
                if token[1] == "-":
                    positionals_only = True
                else:
                    index = self._scan_short(tokens, index)
            else:
                self._capture(token, index)
            index += 1

    def _scan_long(self, tokens, index):
        token = tokens[index]
        name, equals, inline = token[2:].partition("=")
        input = "--" + name

        if (spec := self._registry.find(long=name)) is None:
            self._fault(
                UnknownOptionError,
                "unknown option %r" % input,
                title="unknown option",
                hint="long options must be spelled in full; check the spelling",
                input=input,
                index=index,
            )

        if spec.kind is Kind.BOOLEAN:
            if equals:
                self._fault(
                    FlagAssignmentError,
                    "option %r does not take an argument" % input,
                    title="flag cannot take a value",
                    hint="remove everything from '=' (for example: %s)" % input,
                    input=input,
                    index=index,
                )
            spec.record(index)
            return index

        if equals:
            raw, start = inline, len(name) + 3
        else:
            index = self._advance(tokens, index, input)
            raw, start = tokens[index], 0

        spec.record(index, self._convert(spec, raw, input, index), raw, (start, start + len(raw)))
        return index

    def _scan_short(self, tokens, index):
        token = tokens[index]
        for offset in range(1, len(token)):
            input = "-" + token[offset]

            if (spec := self._registry.find(short=token[offset])) is None:
                self._fault(
                    UnknownOptionError,
                    "unknown option %r" % input,
                    title="unknown option",
                    hint="check the spelling; clustered flags are read one character at a time",
                    input=input,
                    index=index,
                )

            if spec.kind is Kind.BOOLEAN:
                spec.record(index)
                continue

            if offset + 1 < len(token):
                raw, start = token[offset + 1:], offset + 1
            else:
                index = self._advance(tokens, index, input)
                raw, start = tokens[index], 0

            spec.record(index, self._convert(spec, raw, input, index), raw, (start, start + len(raw)))
            break
        return index

    def _advance(self, tokens, index, input):
        if index + 1 >= len(tokens):
            self._fault(
                MissingArgumentError,
                "missing argument for option %r" % input,
                title="missing argument",
                hint="pass a value after it (for example: %s <value>)" % input,
                input=input,
                index=index,
            )
        return index + 1

    def _convert(self, spec, raw, input, index):
        try:
            return convert(spec.kind, raw)
        except ValueError:
            noun = "integer" if spec.kind is Kind.INTEGER else "floating point number"
            self._fault(
                UncastableValueError,
                "argument %r for option %r is not a valid %s" % (raw, input, noun),
                title="invalid %s" % noun,
                hint="pass a complete %s without extra characters" % noun,
                input=input,
                value=raw,
                index=index,
            )

    def _capture(self, token, index):
        try:
            captured = self._positionals.append(token, index)
        except MemoryError:
            self._fault(
                AllocationFailureError,
                "allocation failed while capturing a positional argument",
                title="allocation failure",
                hint="pass fewer positional arguments",
                index=index,
            )
        if not captured:
            self._fault(
                TooManyPositionalsError,
                "too many positional arguments (at most %d)" % self._positionals.limit,
                title="too many positional arguments",
                hint="remove the extra value %r" % token,
                input=token,
                index=index,
            )

    def _lookup(self, short, long):
        if short is Unset and long is Unset:
            raise TypeError("result lookup requires a short or a long form")
        spec = Unset
        if short is not Unset:
            spec = self._registry.find(short=short)
        if not spec and long is not Unset:
            spec = self._registry.find(long=long)
        if not spec:
            spelling = " / ".join(
                prefix + form for prefix, form in (("-", short), ("--", long)) if form is not Unset
            )
            raise NotRegisteredError("option %s is not registered" % spelling)
        return spec

    def result(self, short=Unset, long=Unset, *, kind=Unset):
        """
        return the Result of an option, looked up by short form first, then long.

        raises
        - NotRegisteredError: no option matches either form.
        - TypeError: neither form given, or `kind` is given and differs from
          the option's declared kind.
        """
        spec = self._lookup(short, long)
        if kind is not Unset and spec.kind is not kind:
            raise TypeError("option %s is a %s option, not %s" % (spec.spelling, spec.kind.value, kind.value))
        return Result(spec.count, spec.value, spec.raw, spec.span, spec.index)

    int_result = _accessor("int_result", Kind.INTEGER)
    float_result = _accessor("float_result", Kind.FLOAT)
    str_result = _accessor("str_result", Kind.STRING)
    bool_result = _accessor("bool_result", Kind.BOOLEAN)

    def positional_count(self):
        return len(self._positionals)

    def positional_at(self, position, /):
        """
        return the captured Positional at `position` (0-based, capture order).

        raises PositionalIndexError when position is negative or past the end.
        """
        if isinstance(position, bool) or not isinstance(position, int):
            raise TypeError("positional_at() argument must be an integer")
        if not 0 <= position < len(self._positionals):
            raise PositionalIndexError(
                "positional argument #%d not found (%d captured)" % (position, len(self._positionals))
            )
        return self._positionals[position]

    def __repr__(self):
        return "parser(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __rich_repr__(self):
        yield "prog", self._prog
        yield "max_positionals", self._positionals.limit
        yield "options", self.options
        yield "positionals", self.positionals
        yield "parsed", self._parsed


__all__ = (
    "Parser",
    "Result",
    "Positional",
)

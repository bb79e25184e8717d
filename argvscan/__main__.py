"""
Demo program: python -m argvscan [-v] [-n INT] [-f FLOAT] [-s STR] [ARGS...]

Registers a small option table, scans sys.argv and reports what was found.
"""
import sys

from rich.console import Console

from . import Kind, Parser, ParseException

OPTIONS = (
    ("n", "int", Kind.INTEGER),
    ("f", "float", Kind.FLOAT),
    ("v", "verbose", Kind.BOOLEAN),
    ("s", "str", Kind.STRING),
)


def main(argv=None, /, console=None):
    argv = sys.argv if argv is None else argv
    console = console or Console()

    parser = Parser(argv[0] if argv and argv[0].strip() else "argvscan", -1, OPTIONS)
    try:
        parser.parse(argv)
    except ParseException:
        return 1

    verbose = parser.bool_result("v")
    console.print("Verbosity level: %d, last at index %s" % (verbose.count, verbose.index), markup=False)

    for short, long, kind in OPTIONS:
        if kind is Kind.BOOLEAN:
            continue
        result = parser.result(short, long)
        console.print(
            "Option '--%s' specified %d times, last value is %r at index %s."
            % (long, result.count, result.value, result.index),
            highlight=False,
            markup=False,
        )

    for position, positional in enumerate(parser.positionals):
        console.print(
            "Positional argument #%d is %r at index %d." % (position, positional.token, positional.index),
            highlight=False,
            markup=False,
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())

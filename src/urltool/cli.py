#!/usr/bin/env python3
"""Command line interface: urltool [-h|-help] [URL...] [MODIFIERS]

Arguments are read in groups. Each group is a run of URLs followed by the
modifiers that apply to them; a URL after a modifier starts the next group.
Modifiers are single-dash flags in the style of Go's flag package:
``-s https``, ``-s=https``, ``-U`` or ``-U=false``.
"""

import argparse
import logging
import sys

from .batch import iter_batch
from .config import (
    ModifierConfig,
    collect_query_args,
    configure_logging,
    get_logging_config_from_env,
    split_query_arg,
)
from .errors import NoURLsError, URLParseError

logger = logging.getLogger(__name__)

# Flags that take no separate value (but accept -flag=BOOL).
_BOOL_FLAGS = frozenset({"nh", "U", "j", "fq", "sq", "h", "help"})
# Flags that take the next argument as their value unless written -flag=VALUE.
_VALUE_FLAGS = frozenset({"s", "o", "u", "pw", "H", "P", "p", "q", "f", "r"})

_TRUE = ("1", "t", "T", "TRUE", "true", "True")
_FALSE = ("0", "f", "F", "FALSE", "false", "False")

EPILOG = """\
Several groups of URLs and modifiers may be given; each group's modifiers
apply only to the URLs directly before them:

  urltool example.com -s https ftp.example.com -s ftp -P 2121

Results are printed one per line, in order. Exit status is 1 if any URL
could not be parsed or modified, and 2 on usage errors.
"""


def parse_bool(value: str) -> bool:
    """Parse a boolean flag value the way Go's strconv.ParseBool does."""
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value {value!r}")


class _HelpAction(argparse.Action):
    """Print help to stderr and exit with the usage status."""

    def __init__(self, option_strings, dest=argparse.SUPPRESS, default=argparse.SUPPRESS, help=None):
        super().__init__(option_strings=option_strings, dest=dest, default=default, nargs=0, help=help)

    def __call__(self, parser, namespace, values, option_string=None):
        parser.print_help(sys.stderr)
        parser.exit(2)


def _add_bool(group, flag: str, dest: str, help: str) -> None:
    group.add_argument(flag, dest=dest, type=parse_bool, nargs="?", const=True, default=False,
                       metavar="BOOL", help=help)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="urltool",
        usage="urltool [-h|-help] [URL...] [MODIFIERS]",
        description="Modify one or more URLs and print the results.",
        epilog=EPILOG,
        add_help=False,
        allow_abbrev=False,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-h", "-help", action=_HelpAction, help="print this help text")

    mods = parser.add_argument_group("modifiers")
    _add_bool(mods, "-nh", "disable_hacks",
              "disable URL parsing hacks (domain.tld and user:pass@domain.tld parsing)")
    mods.add_argument("-s", dest="scheme", metavar="SCHEME", help="set the URL's scheme")
    mods.add_argument("-o", dest="opaque", metavar="OPAQUE", help="set the URL's opaque value")
    mods.add_argument("-u", dest="username", metavar="USER", help="set the URL's username")
    mods.add_argument("-pw", dest="password", metavar="PASSWD", help="set the URL's password")
    _add_bool(mods, "-U", "strip_user", "strip user info from the URL")
    mods.add_argument("-H", dest="host", metavar="HOST", help="set the URL's host")
    mods.add_argument("-P", dest="port", metavar="PORT",
                      help="change the URL's host port (after taking the host from -H)")
    mods.add_argument("-p", dest="path", metavar="PATH", help="set the URL's path (or join to it)")
    _add_bool(mods, "-j", "join_path",
              "force joining the URL's path instead of setting it when relative")
    _add_bool(mods, "-fq", "force_query", "force a ? to appear in the URL")
    _add_bool(mods, "-sq", "strip_query", "strip query string before appending to it")
    mods.add_argument("-q", dest="query", type=split_query_arg, action="append", metavar="K=V",
                      help="append a ?K=V value to the query string; may be repeated; "
                           "without '=' an empty ?K= is added")
    mods.add_argument("-f", dest="fragment", metavar="FRAGMENT", help="set the URL's #fragment")
    mods.add_argument("-r", dest="relative", metavar="URL",
                      help="parse a URL relative to the input URL and use the result "
                           "(after all other modifiers)")
    return parser


def split_group(parser: argparse.ArgumentParser, args: list[str]) -> tuple[list[str], list[str], list[str]]:
    """Split one group off the front of args.

    Returns the group's URLs, its flags rewritten as -name or -name=value,
    and the arguments left over for the following groups. Unknown flags and
    missing values are reported through parser.error.
    """
    i = 0
    # A lone "-" is not a flag.
    while i < len(args) and (not args[i].startswith("-") or args[i] == "-"):
        i += 1
    urls = args[:i]

    flags = []
    while i < len(args):
        arg = args[i]
        if len(arg) < 2 or not arg.startswith("-"):
            break
        i += 1
        if arg == "--":
            break

        name = arg[2:] if arg.startswith("--") else arg[1:]
        if not name or name[0] in "-=":
            parser.error(f"bad flag syntax: {arg}")
        name, eq, value = name.partition("=")

        if name in _VALUE_FLAGS:
            if not eq:
                if i >= len(args):
                    parser.error(f"flag needs an argument: -{name}")
                value = args[i]
                i += 1
            flags.append(f"-{name}={value}")
        elif name in _BOOL_FLAGS:
            flags.append(f"-{name}{eq}{value}")
        else:
            parser.error(f"flag provided but not defined: -{name}")

    return urls, flags, args[i:]


def build_config(namespace: argparse.Namespace) -> ModifierConfig:
    options = vars(namespace)
    options["query"] = collect_query_args(options.get("query"))
    return ModifierConfig(**options)


def main(argv: list[str] | None = None) -> int:
    """Process every argument group and return the exit status."""
    configure_logging(get_logging_config_from_env())

    args = sys.argv[1:] if argv is None else list(argv)
    parser = build_parser()
    if not args:
        parser.print_help(sys.stderr)
        return 2

    out = sys.stdout
    code = 0
    separator = ""
    while args:
        urls, flags, args = split_group(parser, args)
        config = build_config(parser.parse_args(flags))
        logger.debug(f"Group of {len(urls)} URL(s) with {config}")

        if not urls:
            print(NoURLsError("no URLs given"), file=sys.stderr)
            code = 1
            continue

        try:
            for item in iter_batch(urls, config):
                if not item.ok:
                    print(item.error, file=sys.stderr)
                    code = 1
                    continue
                out.write(separator + item.url)
                separator = "\n"
        except URLParseError as e:
            # The rest of this group is dropped; later groups still run.
            print(e, file=sys.stderr)
            code = 1

    if out.isatty():
        out.write("\n")
    out.flush()
    return code


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()

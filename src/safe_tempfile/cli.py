"""CLI for safe-tempfile."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from importlib.metadata import PackageNotFoundError, version
from typing import NoReturn, Sequence

from rich.console import Console

from . import creator
from . import logging_setup
from .config import build_config
from .errors import InvalidModeError, TempfileError
from .mode import DEFAULT_MODE, parse_mode

logger = logging.getLogger(__name__)

console = Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)

DIST_NAME = "safe-tempfile"


def _package_version() -> str:
    try:
        return version(DIST_NAME)
    except PackageNotFoundError:
        return "unknown"


def _err(message: str) -> None:
    console.print(message, markup=False)


def _usage_hint(prog: str) -> None:
    _err(f"Try `{prog} --help' for more information.")


def report(prog: str, exc: TempfileError) -> None:
    """Print the diagnostic for *exc*, prefixed with *prog*."""
    _err(f"{prog}: {exc.diagnostic()}")
    if isinstance(exc, InvalidModeError):
        _usage_hint(prog)


# getopt semantics: these always take the next argument as their value.
_VALUE_OPTIONS = {
    "-d": "--directory",
    "-m": "--mode",
    "-n": "--name",
    "-p": "--prefix",
    "-s": "--suffix",
}
_LONG_OPTIONS = (*_VALUE_OPTIONS.values(), "--debug", "--help", "--version")


def _bind_option_values(argv: Sequence[str]) -> list[str]:
    """Rewrite value-taking options as ``--long=VALUE``.

    argparse refuses a separate value that starts with ``-``, so
    ``--suffix -bak`` becomes ``--suffix=-bak`` before parsing. Unique
    abbreviations of long options are expanded the same way.
    """
    out: list[str] = []
    args = iter(argv)
    for arg in args:
        if arg == "--":
            out.append(arg)
            out.extend(args)
            break
        opt = _VALUE_OPTIONS.get(arg)
        if opt is None and arg.startswith("--") and "=" not in arg:
            matches = [o for o in _LONG_OPTIONS if o.startswith(arg)]
            if len(matches) == 1 and matches[0] in _VALUE_OPTIONS.values():
                opt = matches[0]
        value = next(args, None) if opt is not None else None
        if value is None:
            out.append(arg)
        else:
            out.append(f"{opt}={value}")
    return out


class _UsageError(Exception):
    pass


class _Parser(argparse.ArgumentParser):
    """ArgumentParser whose usage errors are raised instead of exiting with 2."""

    def error(self, message: str) -> NoReturn:
        raise _UsageError(message)


def build_parser(prog: str = "tempfile") -> argparse.ArgumentParser:
    parser = _Parser(
        prog=prog,
        description="Create a temporary file in a safe manner.",
        add_help=False,
    )
    parser.add_argument("-d", "--directory", metavar="DIR",
                        help="place temporary file in DIR")
    parser.add_argument("-m", "--mode", metavar="MODE",
                        help=f"open with MODE instead of {DEFAULT_MODE:04o}")
    parser.add_argument("-n", "--name", metavar="FILE",
                        help="use FILE instead of a generated name")
    parser.add_argument("-p", "--prefix", metavar="STRING",
                        help="set temporary file's prefix to STRING")
    parser.add_argument("-s", "--suffix", metavar="STRING",
                        help="set temporary file's suffix to STRING")
    parser.add_argument("--debug", action="store_true",
                        help="log each creation attempt to stderr")
    parser.add_argument("--help", action="help",
                        help="display this help and exit")
    parser.add_argument("--version", action="version",
                        version=f"tempfile {_package_version()}",
                        help="output version information and exit")
    return parser


def run(argv: Sequence[str] | None = None, prog: str = "tempfile") -> int:
    """Run the tool and return the process exit status."""
    parser = build_parser(prog)
    try:
        args = parser.parse_args(_bind_option_values(sys.argv[1:] if argv is None else argv))
    except _UsageError as e:
        _err(f"{prog}: {e}")
        _usage_hint(prog)
        return 1

    try:
        mode = DEFAULT_MODE if args.mode is None else parse_mode(args.mode)
    except InvalidModeError as e:
        report(prog, e)
        return 1

    logging_setup.configure(prog=prog, debug=args.debug, reconfigure=True)
    config = build_config(
        directory=args.directory,
        prefix=args.prefix,
        suffix=args.suffix,
        name=args.name,
        mode=mode,
        debug=args.debug,
    )
    if config.debug != args.debug or config.log_file is not None:
        logging_setup.configure(config.log_file, prog=prog, debug=config.debug, reconfigure=True)

    try:
        path = creator.create(config)
    except TempfileError as e:
        logger.debug("Aborting: %r", e)
        report(prog, e)
        return 1

    print(path)
    return 0


def main() -> None:
    sys.exit(run(sys.argv[1:], os.path.basename(sys.argv[0]) or "tempfile"))


if __name__ == "__main__":
    main()

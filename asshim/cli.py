# © Copyright 2026 Mikołaj Kuranowski
# SPDX-License-Identifier: GPL-3.0-or-later

from argparse import REMAINDER, ArgumentParser, Namespace
from typing import NoReturn, Sequence

from .app import Shim
from .options import ShimOptions
from .policy import Policy, detect_policy
from .translate import CCTranslator, ClangTranslator, PassthroughTranslator, translator_for

# Drop-in entry points. These must not interpret any arguments,
# everything is forwarded to the translator verbatim.


def darwin_main() -> NoReturn:
    Shim(PassthroughTranslator()).main()


def clang_main() -> NoReturn:
    Shim(ClangTranslator()).main()


def cc_main() -> NoReturn:
    Shim(CCTranslator()).main()


def unified_main() -> NoReturn:
    Shim(translator_for(detect_policy())).main()


def get_arg_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="asshim",
        description="Translate a GNU as command line and run (or show) the resulting command.",
    )
    parser.add_argument(
        "-p",
        "--policy",
        type=Policy.parse,
        default=None,
        help="translation policy: passthrough, clang or cc (default: detected from platform)",
    )
    parser.add_argument(
        "--program",
        default=None,
        help="override the path of the wrapped tool",
    )
    parser.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        help="print the translated command instead of running it",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="show DEBUG logging messages",
    )
    parser.add_argument(
        "as_args",
        nargs=REMAINDER,
        help="arguments for as; use -- to separate them from the options above",
    )
    return parser


def parse_args(args_str: Sequence[str] | None = None) -> tuple[Shim, list[str]]:
    """parse_args parses the command line of ``python -m asshim`` and returns the
    configured :py:class:`~asshim.Shim` with the argument vector to run it with.
    """
    args: Namespace = get_arg_parser().parse_args(args_str)
    policy: Policy = args.policy or detect_policy()
    as_args: list[str] = args.as_args
    if as_args and as_args[0] == "--":
        as_args = as_args[1:]

    shim = Shim(
        translator_for(policy, args.program),
        ShimOptions(verbose=args.verbose, dry_run=args.dry_run),
    )
    return shim, ["as", *as_args]


def main(args_str: Sequence[str] | None = None) -> NoReturn:
    shim, argv = parse_args(args_str)
    shim.main(argv)

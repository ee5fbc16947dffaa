# © Copyright 2026 Mikołaj Kuranowski
# SPDX-License-Identifier: GPL-3.0-or-later

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Sequence, Type

from typing_extensions import LiteralString

from .policy import Policy
from .tools.types import Self

STDIN_MARKER = "-"
OUTPUT_FLAG = "-o"
DEFAULT_OUTPUT = "a.out"


@dataclass(frozen=True)
class Invocation:
    """Invocation is the original command line received by the shim."""

    program: str
    args: tuple[str, ...] = ()

    @classmethod
    def from_argv(cls: Type[Self], argv: Sequence[str]) -> Self:
        """Splits a full argument vector (as in ``sys.argv``) into the program name
        and its arguments.

        >>> Invocation.from_argv(["as", "-o", "foo.o", "foo.s"])
        Invocation(program='as', args=('-o', 'foo.o', 'foo.s'))
        >>> Invocation.from_argv([])
        Invocation(program='', args=())
        """
        if not argv:
            return cls("")
        return cls(argv[0], tuple(argv[1:]))


class Translator(ABC):
    """Translator rewrites a GNU-style ``as`` invocation into the argument vector
    of the tool which actually does the assembling. The first element of the returned
    vector is always :py:attr:`program`.
    """

    name: str
    program: str
    default_program: ClassVar[str]

    def __init__(self, program: str | None = None) -> None:
        self.name = type(self).__name__
        self.program = program or self.default_program

    @abstractmethod
    def translate(self, invocation: Invocation) -> list[str]:
        raise NotImplementedError


class PassthroughTranslator(Translator):
    """PassthroughTranslator forwards all arguments unchanged to the native assembler,
    appending a flag which silences the warning about overriding the deployment version
    (emitted when objects built for an older macOS release meet a newer SDK).

    >>> PassthroughTranslator().translate(Invocation("as", ("-arch", "x86_64", "foo.s")))
    ['/usr/bin/as', '-arch', 'x86_64', 'foo.s', '-Wno-overriding-deployment-version']
    """

    default_program: ClassVar[str] = "/usr/bin/as"
    compatibility_flag: ClassVar[LiteralString] = "-Wno-overriding-deployment-version"

    def translate(self, invocation: Invocation) -> list[str]:
        return [self.program, *invocation.args, self.compatibility_flag]


class DriverTranslator(Translator):
    """DriverTranslator turns ``as ...`` into ``<driver> -c -x assembler ...``.

    GNU as defaults to writing ``a.out`` and may be called without any input file,
    in which case it reads stdin; compiler drivers do neither. Thus, ``-o a.out``
    is appended if no output was given, and ``-`` is appended if no input was given.

    Any argument starting with ``-o`` counts as specifying the output. Any argument
    not starting with ``-``, or being exactly ``-``, counts as an input.
    """

    prefix: ClassVar[tuple[LiteralString, ...]] = ("-c", "-x", "assembler")

    output_operand_is_input: ClassVar[bool]
    """Whether the operand of a detached ``-o`` (as in ``-o foo.o``) is counted as an input.

    The two drivers disagree here. Do not unify without checking the actual grammar
    of each toolchain: ``as-clang -o foo.o`` currently does *not* read stdin.
    """

    def translate(self, invocation: Invocation) -> list[str]:
        argv = [self.program, *self.prefix]
        has_input = False
        has_output = False
        previous = ""

        for arg in invocation.args:
            argv.append(arg)

            if arg.startswith(OUTPUT_FLAG):
                has_output = True
            elif previous == OUTPUT_FLAG and not self.output_operand_is_input:
                pass  # Output filename, not an input
            elif arg == STDIN_MARKER or not arg.startswith("-"):
                has_input = True

            previous = arg

        if not has_output:
            argv.extend((OUTPUT_FLAG, DEFAULT_OUTPUT))
        if not has_input:
            argv.append(STDIN_MARKER)
        return argv


class ClangTranslator(DriverTranslator):
    """ClangTranslator is a GNU as-compatible frontend for ``clang``, for systems
    which ship clang but not GNU as (like FreeBSD).

    >>> ClangTranslator().translate(Invocation("as", ("foo.s",)))
    ['/usr/bin/clang', '-c', '-x', 'assembler', 'foo.s', '-o', 'a.out']
    >>> ClangTranslator().translate(Invocation("as"))
    ['/usr/bin/clang', '-c', '-x', 'assembler', '-o', 'a.out', '-']
    """

    default_program: ClassVar[str] = "/usr/bin/clang"
    output_operand_is_input: ClassVar[bool] = True


class CCTranslator(DriverTranslator):
    """CCTranslator is a GNU as-compatible frontend for a generic ``cc`` driver.

    >>> CCTranslator().translate(Invocation("as", ("-o", "bar.o")))
    ['/usr/bin/cc', '-c', '-x', 'assembler', '-o', 'bar.o', '-']
    """

    default_program: ClassVar[str] = "/usr/bin/cc"
    output_operand_is_input: ClassVar[bool] = False


def translator_for(policy: Policy, program: str | None = None) -> Translator:
    """Returns the :py:class:`Translator` implementing the given policy.

    >>> translator_for(Policy.CC).program
    '/usr/bin/cc'
    >>> translator_for(Policy.PASSTHROUGH, "/opt/cctools/bin/as").program
    '/opt/cctools/bin/as'
    """
    match policy:
        case Policy.PASSTHROUGH:
            return PassthroughTranslator(program)
        case Policy.CLANG:
            return ClangTranslator(program)
        case Policy.CC:
            return CCTranslator(program)

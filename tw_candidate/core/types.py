"""Shared types for tw-candidate: Candidate kinds, Variant, Modifier, ParserConfig, Command."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Literal

# Data-type tags an arbitrary value may be hinted with, e.g. bg-[length:200px]
DATA_TYPES = frozenset(
    {
        'any',
        'color',
        'url',
        'image',
        'length',
        'percentage',
        'position',
        'lookup',
        'generic-name',
        'family-name',
        'number',
        'line-width',
        'absolute-size',
        'relative-size',
        'shadow',
    }
)


class ConfigError(ValueError):
    """Raised when a ParserConfig cannot be used to parse anything."""


@dataclass(frozen=True)
class ParserConfig:
    """Per-parse configuration: the variant separator and the class prefix.

    `strip_prefix` is off by default, so the prefix is only recorded on each
    candidate and has no effect on parsing.
    """

    separator: str = ':'
    prefix: str = ''
    strip_prefix: bool = False

    def __post_init__(self) -> None:
        if not self.separator:
            raise ConfigError('separator must not be empty')
        if any(ch in self.separator for ch in '[]') or any(ch.isspace() for ch in self.separator):
            raise ConfigError(f'separator {self.separator!r} may not contain brackets or whitespace')
        if any(ch.isspace() for ch in self.prefix):
            raise ConfigError(f'prefix {self.prefix!r} may not contain whitespace')


@dataclass(frozen=True)
class CustomVariant:
    """A bracketed variant such as [&:hover], brackets removed."""

    value: str


@dataclass(frozen=True)
class CustomModifier:
    """A bracketed modifier such as /[0.5], brackets removed."""

    value: str


Variant = str | CustomVariant
Modifier = str | CustomModifier


@dataclass(frozen=True)
class UtilityCandidate:
    """A plain named utility: text-red-500, mt-4, flex."""

    raw: str
    name: str
    prefix: str = ''
    negative: bool = False
    important: bool = False
    variants: tuple[Variant, ...] = ()
    modifiers: tuple[Modifier, ...] = ()
    kind: Literal['utility'] = field(default='utility', init=False)


@dataclass(frozen=True)
class PropertyCandidate:
    """An arbitrary property declaration: [background-color:red]."""

    raw: str
    name: str
    value: str
    prefix: str = ''
    negative: bool = False
    important: bool = False
    variants: tuple[Variant, ...] = ()
    modifiers: tuple[Modifier, ...] = ()
    kind: Literal['property'] = field(default='property', init=False)


@dataclass(frozen=True)
class CustomCandidate:
    """A utility with an arbitrary value: bg-[#bada55], bg-[length:200px]."""

    raw: str
    name: str
    value: str
    value_type: str = 'any'
    prefix: str = ''
    negative: bool = False
    important: bool = False
    variants: tuple[Variant, ...] = ()
    modifiers: tuple[Modifier, ...] = ()
    kind: Literal['custom'] = field(default='custom', init=False)


Candidate = UtilityCandidate | PropertyCandidate | CustomCandidate


class Command:
    """A self-registering CLI command.

    Usage in a command module:

        command = Command(name='parse', help='Parse tokens given on the command line')

        @command.configure
        def configure(parser):
            parser.add_argument('tokens', nargs='+')

        @command.run
        def run(args, parser):
            ...
            return results
    """

    def __init__(self, name: str, help: str = ''):
        self.name = name
        self.help = help
        self._run_fn: Callable | None = None
        self._configure_fn: Callable | None = None

    def configure(self, fn: Callable) -> Callable:
        """Decorator to register the argparse configuration function."""
        self._configure_fn = fn
        return fn

    def run(self, fn: Callable) -> Callable:
        """Decorator to register the run function."""
        self._run_fn = fn
        return fn

    def add_arguments(self, parser: Any) -> None:
        if self._configure_fn is not None:
            self._configure_fn(parser)

    def execute(self, args: Any, parser: Any) -> dict[str, Candidate | None]:
        """Execute the command's run function."""
        if self._run_fn is None:
            raise RuntimeError(f'Command {self.name} has no run function')
        return self._run_fn(args, parser)

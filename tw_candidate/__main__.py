"""tw-candidate — Parse utility-class tokens into structured candidates.

Usage: tw-candidate <command> [options] ...

Commands are auto-discovered from tw_candidate/commands/.
Each command module's docstring is its documentation.
Run `tw-candidate help <command>` for full module docs.

Configuration / .env loading:
  --separator / --prefix / --strip-prefix flags win over everything.
  Otherwise TW_SEPARATOR, TW_PREFIX and TW_STRIP_PREFIX are read from the
  OS environment, then from a .env file found by walking up from the
  current directory (stopping at the nearest .git boundary).
  Use --env-file to override the .env location explicitly.
"""

import argparse
import importlib
import logging
import sys

from tw_candidate import registry
from tw_candidate.core.candidate_parser import CandidateParser
from tw_candidate.core.env import config_from_env, load_env
from tw_candidate.core.report import format_json, format_text
from tw_candidate.core.types import Candidate, ConfigError


def _load_command_module(name: str) -> object:
    """Load the raw module for a command (for docstring access)."""
    return importlib.import_module(f'tw_candidate.commands.{name}')


def _short_help(name: str, fallback: str) -> str:
    doc = (_load_command_module(name).__doc__ or '').strip()
    return doc.splitlines()[0] if doc else fallback


def _build_parser() -> argparse.ArgumentParser:
    commands = registry.all_commands()

    epilog = (
        'Examples:\n'
        '  tw-candidate parse hover:focus:text-red-500\n'
        "  tw-candidate parse --json '[background-color:red]' 'bg-[length:200px]'\n"
        '  tw-candidate parse --separator _ --prefix tw- hover_tw-underline\n'
        '  tw-candidate scan templates/index.html --fail-on-reject\n'
        '  tw-candidate help scan\n'
        '\n'
        'Environment variables (set in .env or environment):\n'
        '  TW_SEPARATOR     variant separator (default :)\n'
        '  TW_PREFIX        class prefix recorded on every candidate\n'
        '  TW_STRIP_PREFIX  1/true to require and strip the prefix\n'
    )
    parser = argparse.ArgumentParser(
        prog='tw-candidate',
        description='Parse utility-class tokens into structured candidates.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    # Global options before subcommand
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Log rejection reasons to stderr')
    sub = parser.add_subparsers(dest='command', help='Command to run')

    for name, cmd in sorted(commands.items()):
        p = sub.add_parser(name, help=_short_help(name, cmd.help))
        cmd.add_arguments(p)
        p.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')
        p.add_argument('-s', '--separator', default=None, help='Variant separator (default: $TW_SEPARATOR or :)')
        p.add_argument('--prefix', default=None, help='Class prefix (default: $TW_PREFIX or none)')
        p.add_argument(
            '--strip-prefix',
            action='store_true',
            default=None,
            help='Require the prefix on every token and strip it before parsing',
        )
        p.add_argument(
            '--fail-on-reject',
            action='store_true',
            help='Exit 1 if any token is not a recognisable utility (CI gating)',
        )

    # `help` subcommand: prints full module docstring for a command
    help_parser = sub.add_parser('help', help='Print full docs for a command')
    help_parser.add_argument('topic', nargs='?', help='Command name')

    return parser


def _print_help(topic: str | None) -> None:
    """Print full module docstring for a command."""
    commands = registry.all_commands()

    if topic is None:
        print('Available commands:\n')
        for name, cmd in sorted(commands.items()):
            print(f'  {name:<10} {_short_help(name, cmd.help)}')
        print('\nRun: tw-candidate help <command> for full docs.')
        return

    if topic not in commands:
        print(f'Unknown command: {topic}', file=sys.stderr)
        print(f'Available: {", ".join(sorted(commands))}', file=sys.stderr)
        sys.exit(1)

    doc = (_load_command_module(topic).__doc__ or '').strip()
    if not doc:
        print(f'(No module docs for {topic!r})')
        return
    print(doc)


def _check_fail_on_reject(results: dict[str, Candidate | None]) -> bool:
    """Return True if any token was rejected."""
    rejected = [raw for raw, candidate in results.items() if candidate is None]
    if rejected:
        print(f'\nFAIL: {len(rejected)} token(s) are not recognisable utilities:', file=sys.stderr)
        for raw in rejected:
            print(f'  {raw}', file=sys.stderr)
        return True
    return False


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(name)s: %(message)s', stream=sys.stderr)

    # Load .env before anything else: OS env vars always win
    env_path = load_env(env_file=args.env_file)
    if env_path:
        print(f'tw-candidate: loaded {env_path}', file=sys.stderr)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == 'help':
        _print_help(args.topic)
        return

    try:
        config = config_from_env(separator=args.separator, prefix=args.prefix, strip_prefix=args.strip_prefix)
    except ConfigError as e:
        print(f'Error: {e}', file=sys.stderr)
        sys.exit(1)

    cmd = registry.get(args.command)
    results = cmd.execute(args, CandidateParser(config))

    if args.json:
        print(format_json(results))
    else:
        print(format_text(results))

    # CI gate: after output so the report is visible even on failure
    if args.fail_on_reject and _check_fail_on_reject(results):
        sys.exit(1)


if __name__ == '__main__':
    main()

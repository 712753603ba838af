"""Parse utility-class tokens given on the command line (or `-` for stdin).

Each token is split into variants, flags, modifier and value, validated,
and printed as a candidate. Rejected tokens are listed as `no candidate`.

Example:
    tw-candidate parse hover:focus:text-red-500 '!mt-4' 'bg-[length:200px]'
    tw-candidate parse --json 'md:[&:hover]:!bg-[#bada55]/50'
    echo '-mt-4 sm:flex hidden' | tw-candidate parse -
    tw-candidate parse --separator _ hover_underline
"""

import sys

from tw_candidate.core.candidate_parser import CandidateParser
from tw_candidate.core.types import Candidate, Command

command = Command(
    name='parse',
    help='Parse tokens given as arguments (or - for stdin) into candidates.',
)


@command.configure
def configure(parser) -> None:
    parser.add_argument('tokens', nargs='+', metavar='TOKEN', help='Utility tokens, or - to read stdin')


def _expand_tokens(tokens: list[str]) -> list[str]:
    expanded = []
    for token in tokens:
        if token == '-':
            expanded.extend(sys.stdin.read().split())
        else:
            expanded.append(token)
    return expanded


@command.run
def run(args, parser: CandidateParser) -> dict[str, Candidate | None]:
    return parser.parse_many(_expand_tokens(args.tokens))

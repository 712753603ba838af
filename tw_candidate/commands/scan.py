"""Extract class tokens from markup files and parse each one.

Reads class="...", class='...' and className="..." attributes from every
file given, splits them on whitespace, and parses each distinct token once.
Useful for spotting typos and invalid arbitrary values across templates.

Example:
    tw-candidate scan templates/index.html templates/base.html
    tw-candidate scan --json --fail-on-reject src/App.jsx
"""

import os
import sys

from tw_candidate.core.candidate_parser import CandidateParser
from tw_candidate.core.extract import extract_tokens_from_file
from tw_candidate.core.types import Candidate, Command

command = Command(
    name='scan',
    help='Extract class tokens from markup files and parse them.',
)


@command.configure
def configure(parser) -> None:
    parser.add_argument('files', nargs='+', metavar='FILE', help='HTML/JSX/template files to scan')


@command.run
def run(args, parser: CandidateParser) -> dict[str, Candidate | None]:
    tokens: list[str] = []
    for path in args.files:
        if not os.path.isfile(path):
            print(f'Error: file not found: {path}', file=sys.stderr)
            sys.exit(1)
        tokens.extend(extract_tokens_from_file(path))
    return parser.parse_many(tokens)

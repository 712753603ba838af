"""tw-candidate — parse utility-class tokens into structured candidates."""

from tw_candidate.core.cache import CandidateCache
from tw_candidate.core.candidate_parser import CandidateParser, parse_candidate, reset_default_parsers
from tw_candidate.core.types import (
    Candidate,
    ConfigError,
    CustomCandidate,
    CustomModifier,
    CustomVariant,
    ParserConfig,
    PropertyCandidate,
    UtilityCandidate,
)

__all__ = [
    'Candidate',
    'CandidateCache',
    'CandidateParser',
    'ConfigError',
    'CustomCandidate',
    'CustomModifier',
    'CustomVariant',
    'ParserConfig',
    'PropertyCandidate',
    'UtilityCandidate',
    'parse_candidate',
    'reset_default_parsers',
]

"""Parser for raw utility-class tokens.

Turns one token such as `md:hover:!-mt-4/50` into a Candidate, or None when
the token is not a recognisable utility. Stages, in order:

  1. Split off variants on the separator (brackets protect separators).
  2. Strip the important (`!`) and negative (`-`) flags.
  3. Split off a trailing `/modifier` or `/[modifier]`.
  4. Classify the rest: `[prop:value]`, `name-[value]`, or a plain name.
  5. Validate, then normalize property/custom values.

Rejections at any stage return None and are logged at DEBUG. Nothing here
raises for a bad token; only a bad ParserConfig raises (ConfigError).
"""

import dataclasses
import logging
import re
from collections.abc import Callable, Iterable

from tw_candidate.core.cache import MISSING, CandidateCache
from tw_candidate.core.data_types import normalize as default_normalize
from tw_candidate.core.types import (
    Candidate,
    CustomCandidate,
    CustomModifier,
    CustomVariant,
    Modifier,
    ParserConfig,
    PropertyCandidate,
    UtilityCandidate,
    Variant,
)
from tw_candidate.core.validation import (
    is_parsable_css_value as default_is_parsable_css_value,
)
from tw_candidate.core.validation import (
    is_valid_arbitrary_value as default_is_valid_arbitrary_value,
)
from tw_candidate.core.validation import is_valid_property_name, looks_like_uri

logger = logging.getLogger(__name__)

_ARBITRARY_PROPERTY = re.compile(r'^\[([a-zA-Z0-9_-]+):(\S+)\]$')
# Bracketed modifier first, then a bare one; both must end the string
_MODIFIER = re.compile(r'/\[([^\[\]]+)\]$|/([^\[\]/]+)$')
_TYPE_TAG = re.compile(r'^([a-zA-Z][a-zA-Z0-9-]*):(.*)$', re.DOTALL)


def split_variants(raw: str, separator: str) -> tuple[str, tuple[Variant, ...]]:
    """Split a token into its base and its variants, left to right."""
    *variant_segments, base = _split_outside_brackets(raw, separator)
    return base, tuple(_parse_variant(segment) for segment in variant_segments)


def _split_outside_brackets(raw: str, separator: str) -> list[str]:
    """Split on `separator` only where bracket depth is zero.

    Single pass with a depth counter, so `[&:hover]:underline` splits once.
    A stray `]` never takes the depth below zero.
    """
    segments = []
    depth = 0
    start = 0
    i = 0
    step = len(separator)
    while i < len(raw):
        ch = raw[i]
        if ch == '[':
            depth += 1
        elif ch == ']':
            depth = max(depth - 1, 0)
        elif depth == 0 and raw.startswith(separator, i):
            segments.append(raw[start:i])
            i += step
            start = i
            continue
        i += 1
    segments.append(raw[start:])
    return segments


def _parse_variant(segment: str) -> Variant:
    if len(segment) >= 2 and segment[0] == '[' and segment[-1] == ']':
        return CustomVariant(segment[1:-1])
    return segment


def strip_flags(base: str, config: ParserConfig) -> tuple[str, bool, bool] | None:
    """Strip `!` and `-` from the front of the base. Returns (text, important, negative).

    Returns None only when `config.strip_prefix` is set and the prefix is missing.
    """
    text = base
    important = text[:1] == '!'
    if important:
        text = text[1:]

    # Negative before prefix
    negative = False
    if text[:1] == '-':
        negative = True
        text = text[1:]

    if config.strip_prefix and config.prefix:
        if not text.startswith(config.prefix):
            return None
        text = text[len(config.prefix) :]

    # Negative after prefix
    if text[:1] == '-':
        negative = True
        text = text[1:]

    return text, important, negative


def split_modifier(text: str) -> tuple[str, tuple[Modifier, ...]]:
    """Split a trailing `/name` or `/[literal]` off the text."""
    m = _MODIFIER.search(text)
    if not m:
        return text, ()
    if m.group(1) is not None:
        return text[: m.start()], (CustomModifier(m.group(1)),)
    return text[: m.start()], (m.group(2),)


def classify(text: str) -> tuple[str, str, str | None, str | None]:
    """Classify the remaining text. Returns (kind, name, value, value_type).

    Tried in order: arbitrary property, arbitrary value, plain utility.
    """
    m = _ARBITRARY_PROPERTY.match(text)
    if m:
        return 'property', m.group(1), m.group(2), None

    # Leftmost `-[` wins: bg-[a-[b]] has name `bg`, value `a-[b]`
    start = text.find('-[')
    if start != -1 and text.endswith(']'):
        name = text[:start]
        inner = text[start + 2 : -1]
        tagged = _TYPE_TAG.match(inner)
        if tagged:
            return 'custom', name, tagged.group(2), tagged.group(1)
        return 'custom', name, inner, 'any'

    return 'utility', text, None, None


def parse_structure(raw: str, config: ParserConfig) -> Candidate | None:
    """Run the structural stages (split, flags, modifier, classify) without validation."""
    if not raw:
        return None

    base, variants = split_variants(raw, config.separator)
    stripped = strip_flags(base, config)
    if stripped is None:
        logger.debug('rejected %r: missing prefix %r', raw, config.prefix)
        return None
    text, important, negative = stripped

    text, modifiers = split_modifier(text)
    if not text:
        logger.debug('rejected %r: empty utility name', raw)
        return None

    common = {
        'raw': raw,
        'prefix': config.prefix,
        'important': important,
        'negative': negative,
        'variants': variants,
        'modifiers': modifiers,
    }
    kind, name, value, value_type = classify(text)
    if kind == 'property':
        return PropertyCandidate(name=name, value=value, **common)
    if kind == 'custom':
        return CustomCandidate(name=name, value=value, value_type=value_type, **common)
    return UtilityCandidate(name=name, **common)


def parse_raw_candidate(
    raw: str,
    config: ParserConfig,
    is_valid_arbitrary_value: Callable[[str], bool] = default_is_valid_arbitrary_value,
    is_parsable_css_value: Callable[[str, str], bool] = default_is_parsable_css_value,
    normalize: Callable[[str], str] = default_normalize,
) -> Candidate | None:
    """Parse and validate one token, uncached."""
    candidate = parse_structure(raw, config)
    if candidate is None:
        return None

    if isinstance(candidate, PropertyCandidate):
        if not is_valid_property_name(candidate.name) and not is_parsable_css_value(candidate.name, candidate.value):
            logger.debug('rejected %r: invalid property name %r', raw, candidate.name)
            return None
        if looks_like_uri(f'{candidate.name}:{candidate.value}'):
            logger.debug('rejected %r: looks like a URI', raw)
            return None
    elif isinstance(candidate, CustomCandidate):
        if not is_valid_arbitrary_value(candidate.value):
            logger.debug('rejected %r: invalid arbitrary value %r', raw, candidate.value)
            return None
    else:
        return candidate

    return dataclasses.replace(candidate, value=normalize(candidate.value))


class CandidateParser:
    """Parses tokens for one configuration, memoizing every result.

    The validation collaborators can be swapped out, e.g. to plug in a real
    CSS engine or to count calls in tests.
    """

    def __init__(
        self,
        config: ParserConfig | None = None,
        *,
        cache: CandidateCache | None = None,
        is_valid_arbitrary_value: Callable[[str], bool] = default_is_valid_arbitrary_value,
        is_parsable_css_value: Callable[[str, str], bool] = default_is_parsable_css_value,
        normalize: Callable[[str], str] = default_normalize,
    ):
        self.config = config or ParserConfig()
        self.cache = cache if cache is not None else CandidateCache()
        self._is_valid_arbitrary_value = is_valid_arbitrary_value
        self._is_parsable_css_value = is_parsable_css_value
        self._normalize = normalize

    def parse(self, raw: str) -> Candidate | None:
        """Parse a token, returning the cached result on repeat lookups."""
        cached = self.cache.lookup(raw)
        if cached is not MISSING:
            return cached

        candidate = parse_raw_candidate(
            raw,
            self.config,
            is_valid_arbitrary_value=self._is_valid_arbitrary_value,
            is_parsable_css_value=self._is_parsable_css_value,
            normalize=self._normalize,
        )
        self.cache.store(raw, candidate)
        return candidate

    def parse_many(self, tokens: Iterable[str]) -> dict[str, Candidate | None]:
        """Parse each distinct token once, keeping first-seen order."""
        results: dict[str, Candidate | None] = {}
        for token in tokens:
            if token not in results:
                results[token] = self.parse(token)
        return results

    def clear(self) -> None:
        self.cache.clear()


_default_parsers: dict[ParserConfig, CandidateParser] = {}


def parse_candidate(raw: str, config: ParserConfig | None = None) -> Candidate | None:
    """Parse with a shared parser per configuration."""
    config = config or ParserConfig()
    parser = _default_parsers.get(config)
    if parser is None:
        parser = _default_parsers.setdefault(config, CandidateParser(config))
    return parser.parse(raw)


def reset_default_parsers() -> None:
    """Drop the shared parsers and their caches."""
    _default_parsers.clear()

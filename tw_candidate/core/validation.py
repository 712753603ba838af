"""Validation gate collaborators.

Decides whether a structurally well-formed candidate is semantically usable:
property names, URI-looking declarations, and arbitrary value syntax.
None of these raise; a rejected value simply returns False.
"""

import re
from urllib.parse import urlsplit

IS_VALID_PROPERTY_NAME = re.compile(r'^[a-z_-]')

# CSS identifier: optional leading dash(es), then a letter, underscore or escape
_CSS_IDENT = re.compile(r'^(?:--[\w-]+|-?[a-zA-Z_][\w-]*)$')

_MATCHING_BRACKETS = {'(': ')', '[': ']', '{': '}'}
_CLOSING_BRACKETS = {v: k for k, v in _MATCHING_BRACKETS.items()}
_QUOTES = {'"', "'", '`'}


def is_valid_property_name(name: str) -> bool:
    """Fast path: property names start with a lowercase letter, `_` or `-`."""
    return bool(IS_VALID_PROPERTY_NAME.match(name))


def is_valid_arbitrary_value(value: str) -> bool:
    """Check that a bracketed value is syntactically safe to emit.

    Brackets must balance outside of quoted strings, quotes must close,
    backslash escapes skip the next character, and a `;` is only allowed
    inside brackets or quotes (otherwise it would end the declaration).
    """
    if not value:
        return False

    stack: list[str] = []
    quote: str | None = None
    i = 0
    while i < len(value):
        ch = value[i]
        if ch == '\\':
            i += 2
            continue
        if quote is not None:
            if ch == quote:
                quote = None
        elif ch in _QUOTES:
            quote = ch
        elif ch in _MATCHING_BRACKETS:
            stack.append(ch)
        elif ch in _CLOSING_BRACKETS:
            if not stack or stack.pop() != _CLOSING_BRACKETS[ch]:
                return False
        elif ch == ';' and not stack:
            return False
        i += 1

    return not stack and quote is None


def is_parsable_css_value(name: str, value: str) -> bool:
    """Would `name: value` survive as a single declaration in a rule body?"""
    if not _CSS_IDENT.match(name):
        return False
    if '{' in value or '}' in value:
        return False
    return is_valid_arbitrary_value(value)


def looks_like_uri(declaration: str) -> bool:
    """True when the text reads as an absolute URL rather than a declaration.

    `http://example.com` splits into a scheme and a host directly. A
    scheme-prefixed URL such as `src:https://example.com` yields scheme `src`
    and no host, so the remainder is checked once more.
    """
    # Quick bailout: schemes without a // authority are not treated as URLs
    if '://' not in declaration:
        return False

    try:
        parts = urlsplit(declaration)
        if parts.scheme and parts.netloc:
            return True
        if parts.scheme and '://' in parts.path:
            nested = urlsplit(parts.path)
            return bool(nested.scheme and nested.netloc)
    except ValueError:
        # e.g. "Invalid IPv6 URL": definitely not a usable URL
        return False
    return False

"""Arbitrary-value normalization and data-type guards.

normalize() is the default canonicaliser applied to accepted property and
custom values:
  - A bare custom property (`--brand`) becomes `var(--brand)`.
  - url(...) segments are kept verbatim.
  - `_` becomes a space; an escaped `\\_` becomes a literal underscore.
  - Surrounding whitespace is trimmed.
  - Math operators inside calc()/min()/max()/clamp() get spaces around them.

The is_* guards back the data-type tags (DATA_TYPES). infer_data_type() tries
them in a fixed order to guess what an untagged value is.
"""

import re

from PIL import ImageColor

from tw_candidate.core.types import DATA_TYPES

_URL_SEGMENT = re.compile(r'(url\(.*?\))')
_MATH_FUNCTIONS = ('calc', 'min', 'max', 'clamp')

_NUMBER = r'[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?'
_LENGTH_UNITS = (
    'cm', 'mm', 'Q', 'in', 'pc', 'pt', 'px',
    'em', 'ex', 'ch', 'rem', 'lh', 'rlh',
    'vw', 'vh', 'vmin', 'vmax', 'vb', 'vi',
    'svw', 'svh', 'lvw', 'lvh', 'dvw', 'dvh',
    'cqw', 'cqh', 'cqi', 'cqb', 'cqmin', 'cqmax',
)  # fmt: skip
_NUMBER_RE = re.compile(rf'^{_NUMBER}$')
_PERCENTAGE_RE = re.compile(rf'^{_NUMBER}%$')
_LENGTH_RE = re.compile(rf'^{_NUMBER}(?:{"|".join(_LENGTH_UNITS)})$')
_CSS_FUNCTION_RE = re.compile(r'^(?:calc|min|max|clamp|var|env)\(.*\)$')
_IMAGE_FUNCTION_RE = re.compile(
    r'^(?:url|image|image-set|cross-fade|element|(?:repeating-)?(?:linear|radial|conic)-gradient)\(.*\)$'
)
_COLOR_FUNCTION_RE = re.compile(r'^(?:rgba?|hsla?|hwb|lab|lch|oklab|oklch|color)\(.*\)$', re.IGNORECASE)

COLOR_KEYWORDS = {'transparent', 'currentcolor', 'inherit', 'initial', 'unset', 'revert'}
LINE_WIDTH_KEYWORDS = {'thin', 'medium', 'thick'}
ABSOLUTE_SIZE_KEYWORDS = {'xx-small', 'x-small', 'small', 'medium', 'large', 'x-large', 'xx-large', 'xxx-large'}
RELATIVE_SIZE_KEYWORDS = {'larger', 'smaller'}
POSITION_KEYWORDS = {'center', 'top', 'right', 'bottom', 'left'}
GENERIC_FAMILY_NAMES = {
    'serif',
    'sans-serif',
    'monospace',
    'cursive',
    'fantasy',
    'system-ui',
    'ui-serif',
    'ui-sans-serif',
    'ui-monospace',
    'ui-rounded',
    'math',
    'emoji',
    'fangsong',
}


def normalize(value: str, is_root: bool = True) -> str:
    """Canonicalise an arbitrary value as written in a class name."""
    if is_root and value.startswith('--'):
        return f'var({value})'

    if 'url(' in value:
        parts = [p for p in _URL_SEGMENT.split(value) if p]
        return ''.join(p if _URL_SEGMENT.fullmatch(p) else normalize(p, is_root=False) for p in parts)

    value = _underscores_to_spaces(value)
    if is_root:
        value = value.strip()
    return _space_math_operators(value)


def _underscores_to_spaces(value: str) -> str:
    out = []
    i = 0
    while i < len(value):
        ch = value[i]
        if ch == '\\' and value[i + 1 : i + 2] == '_':
            out.append('_')
            i += 2
            continue
        out.append(' ' if ch == '_' else ch)
        i += 1
    return ''.join(out)


def _space_math_operators(value: str) -> str:
    """Put single spaces around + - * / inside math functions.

    Walks the value once, tracking a stack of open function names so that
    var(--foo-bar) and nested non-math functions are copied untouched. A `-`
    or `+` is only an operator when it follows an operand (a digit, unit
    letter, `%` or `)`); otherwise it is a sign. Exponents (1e-3) and
    hyphenated identifiers are left alone.
    """
    if not any(f'{name}(' in value for name in _MATH_FUNCTIONS):
        return value

    out: list[str] = []
    stack: list[str] = []
    name_start = 0
    for i, ch in enumerate(value):
        if ch == '(':
            stack.append(value[name_start:i].strip().lower())
            out.append(ch)
            name_start = i + 1
            continue
        if ch == ')':
            if stack:
                stack.pop()
            out.append(ch)
            name_start = i + 1
            continue
        if ch in ' ,':
            name_start = i + 1

        in_math = bool(stack) and stack[-1] in _MATH_FUNCTIONS
        if in_math and ch in '+-*/' and _is_operator(value, i):
            while out and out[-1] == ' ':
                out.pop()
            out.append(f' {ch} ')
            name_start = i + 1
            continue
        if in_math and ch == ' ' and out and out[-1].endswith(' '):
            continue
        out.append(ch)
    return ''.join(out)


def _is_operator(value: str, i: int) -> bool:
    ch = value[i]
    if ch in '*/':
        return True
    before = value[:i].rstrip()
    prev = before[-1:]
    nxt = value[i + 1 : i + 2]
    if not prev or not (prev.isalnum() or prev in '%)'):
        return False
    if prev in 'eE' and before[-2:-1].isdigit() and nxt.isdigit():
        return False
    if prev.isalpha() and nxt.isalpha():
        return False
    return True


def is_color(value: str) -> bool:
    if value.lower() in COLOR_KEYWORDS or value.startswith('var('):
        return True
    # Pillow only knows the legacy comma syntax, not `rgb(1 2 3 / 50%)`
    if _COLOR_FUNCTION_RE.match(value):
        return True
    try:
        ImageColor.getrgb(value)
    except ValueError:
        return False
    return True


def is_number(value: str) -> bool:
    return bool(_NUMBER_RE.match(value)) or bool(_CSS_FUNCTION_RE.match(value))


def is_percentage(value: str) -> bool:
    return bool(_PERCENTAGE_RE.match(value)) or bool(_CSS_FUNCTION_RE.match(value))


def is_length(value: str) -> bool:
    if value == '0' or _CSS_FUNCTION_RE.match(value):
        return True
    return bool(_LENGTH_RE.match(value))


def is_url(value: str) -> bool:
    return value.startswith('url(') and value.endswith(')')


def is_image(value: str) -> bool:
    return bool(_IMAGE_FUNCTION_RE.match(value))


def is_line_width(value: str) -> bool:
    return value in LINE_WIDTH_KEYWORDS or is_length(value)


def is_absolute_size(value: str) -> bool:
    return value in ABSOLUTE_SIZE_KEYWORDS


def is_relative_size(value: str) -> bool:
    return value in RELATIVE_SIZE_KEYWORDS


def is_position(value: str) -> bool:
    """Every space-separated part is a position keyword, length or percentage."""
    parts = value.split()
    if not parts:
        return False
    return all(p in POSITION_KEYWORDS or is_length(p) or is_percentage(p) for p in parts)


def is_generic_name(value: str) -> bool:
    return value in GENERIC_FAMILY_NAMES


def is_family_name(value: str) -> bool:
    """A comma-separated font stack whose entries are names or quoted strings."""
    entries = [e.strip() for e in value.split(',')]
    if not entries or any(not e for e in entries):
        return False
    for entry in entries:
        if entry[0] in '"\'':
            if len(entry) < 2 or entry[-1] != entry[0]:
                return False
        elif is_number(entry) or is_length(entry):
            return False
    return True


def is_shadow(value: str) -> bool:
    """Each comma-separated shadow has at least two lengths (x and y offsets)."""
    for shadow in value.split(','):
        parts = [p for p in shadow.split() if p != 'inset']
        if sum(1 for p in parts if is_length(p)) < 2:
            return False
    return True


_GUARDS = {
    'color': is_color,
    'url': is_url,
    'image': is_image,
    'length': is_length,
    'percentage': is_percentage,
    'position': is_position,
    'number': is_number,
    'line-width': is_line_width,
    'absolute-size': is_absolute_size,
    'relative-size': is_relative_size,
    'generic-name': is_generic_name,
    'family-name': is_family_name,
    'shadow': is_shadow,
}

# Order matters: the first matching guard names the inferred type
_INFERENCE_ORDER = (
    'url',
    'image',
    'number',
    'percentage',
    'length',
    'line-width',
    'absolute-size',
    'relative-size',
    'generic-name',
    'color',
    'shadow',
    'position',
    'family-name',
)


def matches_data_type(value: str, tag: str) -> bool:
    """Check a value against one data-type tag. `any` matches everything."""
    if tag == 'any':
        return True
    if tag not in DATA_TYPES:
        return False
    guard = _GUARDS.get(tag)
    # `lookup` has no syntax of its own; it names a theme key downstream
    return guard(value) if guard else True


def infer_data_type(value: str) -> str | None:
    """Return the first data-type tag whose guard accepts the value."""
    for tag in _INFERENCE_ORDER:
        if _GUARDS[tag](value):
            return tag
    return None

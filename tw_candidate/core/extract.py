"""Pull class tokens out of markup.

Only class="...", class='...', className="..." and className={'...'}-style
string attributes are read. Tokens are split on whitespace and returned once
each, in first-seen order.
"""

import re

_CLASS_ATTR = re.compile(
    r"""(?<![\w-])(?:class|className)\s*=\s*\{?\s*(?:"([^"]*)"|'([^']*)'|`([^`]*)`)""",
)


def extract_tokens(text: str) -> list[str]:
    """Return the distinct class tokens in the text, first-seen order."""
    seen: dict[str, None] = {}
    for m in _CLASS_ATTR.finditer(text):
        attr = next(g for g in m.groups() if g is not None)
        for token in attr.split():
            seen.setdefault(token, None)
    return list(seen)


def extract_tokens_from_file(path: str) -> list[str]:
    """Read a markup file from disk and extract its class tokens."""
    with open(path, encoding='utf-8') as f:
        text = f.read()
    return extract_tokens(text)

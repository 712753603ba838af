"""Configuration loading for tw-candidate.

Load order (first wins):
  1. Command-line flags (--separator, --prefix, --strip-prefix).
  2. Existing OS environment variables — never overwritten by a .env.
  3. .env file at --env-file path (if explicitly provided).
  4. .env file walking up from cwd, stopping at .git (file or dir).
  5. Defaults: separator ':', no prefix, prefix not stripped.

Recognised variables: TW_SEPARATOR, TW_PREFIX, TW_STRIP_PREFIX.
"""

import os
from collections.abc import Mapping
from pathlib import Path

from tw_candidate.core.types import ParserConfig

SEPARATOR_VAR = 'TW_SEPARATOR'
PREFIX_VAR = 'TW_PREFIX'
STRIP_PREFIX_VAR = 'TW_STRIP_PREFIX'

_TRUTHY = {'1', 'true', 'yes', 'on'}


def _find_dotenv(start: Path) -> Path | None:
    """Walk up from start, return first .env found, stop at .git boundary."""
    current = start.resolve()
    while True:
        candidate = current / '.env'
        if candidate.is_file():
            return candidate
        # .git can be a dir (normal clone) or a file (worktree)
        if (current / '.git').exists():
            return None
        parent = current.parent
        if parent == current:
            return None
        current = parent


def _parse_dotenv(path: Path) -> dict[str, str]:
    """Parse a .env file into a dict. Handles KEY=value, KEY="value" and `export KEY=value`."""
    result: dict[str, str] = {}
    for line in path.read_text(encoding='utf-8').splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        key, _, raw_value = line.partition('=')
        key = key.strip().removeprefix('export ').strip()
        value = raw_value.strip().strip('"').strip("'")
        if key:
            result[key] = value
    return result


def load_env(env_file: str | None = None) -> Path | None:
    """Load .env into os.environ for keys not already set.

    Returns the path that was loaded, or None if no .env was found/used.
    """
    if env_file:
        path = Path(env_file)
        if not path.is_file():
            return None
    else:
        path = _find_dotenv(Path.cwd())
        if path is None:
            return None

    for key, value in _parse_dotenv(path).items():
        os.environ.setdefault(key, value)
    return path


def config_from_env(
    environ: Mapping[str, str] | None = None,
    separator: str | None = None,
    prefix: str | None = None,
    strip_prefix: bool | None = None,
) -> ParserConfig:
    """Build a ParserConfig from the environment, letting explicit arguments win.

    Raises ConfigError for an unusable separator or prefix.
    """
    env = os.environ if environ is None else environ
    if separator is None:
        separator = env.get(SEPARATOR_VAR, ':')
    if prefix is None:
        prefix = env.get(PREFIX_VAR, '')
    if strip_prefix is None:
        strip_prefix = env.get(STRIP_PREFIX_VAR, '').strip().lower() in _TRUTHY
    return ParserConfig(separator=separator, prefix=prefix, strip_prefix=strip_prefix)

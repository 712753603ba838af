"""Report builder — text and JSON output for parsed candidates."""

import json
from typing import Any

from tw_candidate.core.data_types import infer_data_type, matches_data_type
from tw_candidate.core.types import Candidate, CustomCandidate, CustomModifier, CustomVariant, PropertyCandidate


def _part_to_json(part: str | CustomVariant | CustomModifier) -> Any:
    if isinstance(part, str):
        return part
    return {'type': 'custom', 'value': part.value}


def _part_to_text(part: str | CustomVariant | CustomModifier) -> str:
    return part if isinstance(part, str) else f'[{part.value}]'


def candidate_to_dict(candidate: Candidate) -> dict[str, Any]:
    """Plain-dict form of a candidate, camelCase keys."""
    obj: dict[str, Any] = {
        'raw': candidate.raw,
        'type': candidate.kind,
        'name': candidate.name,
        'prefix': candidate.prefix,
        'important': candidate.important,
        'negative': candidate.negative,
        'variants': [_part_to_json(v) for v in candidate.variants],
        'modifiers': [_part_to_json(m) for m in candidate.modifiers],
    }
    if isinstance(candidate, (PropertyCandidate, CustomCandidate)):
        obj['value'] = candidate.value
    if isinstance(candidate, CustomCandidate):
        obj['valueType'] = candidate.value_type
        if candidate.value_type == 'any':
            obj['inferredType'] = infer_data_type(candidate.value)
        else:
            obj['typeMatches'] = matches_data_type(candidate.value, candidate.value_type)
    return obj


def format_text(results: dict[str, Candidate | None]) -> str:
    """Format results as human-readable text."""
    lines = []
    parsed = 0
    for raw, candidate in results.items():
        if candidate is None:
            lines.append(f'── {raw}  ✗ no candidate')
            lines.append('')
            continue
        parsed += 1
        flags = [f for f, on in (('important', candidate.important), ('negative', candidate.negative)) if on]
        header = f'── {raw}  {candidate.kind}'
        if flags:
            header += f' ({", ".join(flags)})'
        lines.append(header)
        lines.append(f'  name: {candidate.name}')
        if isinstance(candidate, (PropertyCandidate, CustomCandidate)):
            lines.append(f'  value: {candidate.value}')
        if isinstance(candidate, CustomCandidate):
            value_type = candidate.value_type
            if value_type == 'any':
                inferred = infer_data_type(candidate.value)
                if inferred:
                    value_type += f' (looks like {inferred})'
            elif not matches_data_type(candidate.value, value_type):
                value_type += ' (tag does not match value)'
            lines.append(f'  type: {value_type}')
        if candidate.variants:
            lines.append(f'  variants: {", ".join(_part_to_text(v) for v in candidate.variants)}')
        if candidate.modifiers:
            lines.append(f'  modifiers: {", ".join(_part_to_text(m) for m in candidate.modifiers)}')
        if candidate.prefix:
            lines.append(f'  prefix: {candidate.prefix}')
        lines.append('')

    total = len(results)
    if total > 0:
        lines.append(f'PARSED {parsed}/{total} tokens  REJECTED {total - parsed}/{total} tokens')
    return '\n'.join(lines)


def format_json(results: dict[str, Candidate | None]) -> str:
    """Format results as JSON."""
    obj: dict[str, Any] = {'candidates': []}
    parsed = 0
    for raw, candidate in results.items():
        if candidate is None:
            obj['candidates'].append({'raw': raw, 'type': None})
        else:
            parsed += 1
            obj['candidates'].append(candidate_to_dict(candidate))

    obj['summary'] = {
        'total': len(results),
        'parsed': parsed,
        'rejected': len(results) - parsed,
    }
    return json.dumps(obj, indent=2)

"""
Token substitution for notification templates.

``{{ a.b.c }}`` is replaced by the value found by walking the dotted path
through ``data``. Only mappings and sequences (by numeric index) are
walked; object attributes are never read. Missing keys and ``None``
anywhere on the path render as an empty string; rendering never raises
for missing data.

Substituted values are NOT escaped. Callers that place the output in HTML
must escape untrusted values themselves.
"""

import re
from collections.abc import Mapping, Sequence
from typing import Any

TOKEN_PATTERN = re.compile(r"\{\{([^}]+)\}\}")

_MISSING = object()


def _step(current: Any, key: str) -> Any:
    if isinstance(current, Mapping):
        return current.get(key, _MISSING)
    if isinstance(current, Sequence) and not isinstance(current, (str, bytes)) and key.isdigit():
        index = int(key)
        return current[index] if index < len(current) else _MISSING
    return _MISSING


def resolve_path(data: Any, path: str) -> Any:
    """Value at dotted ``path`` inside ``data``, or None if any segment is missing."""
    current = data
    for key in path.strip().split("."):
        if current is None or current is _MISSING:
            return None
        current = _step(current, key)
    return None if current is _MISSING else current


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def render_template(template: str, data: Mapping[str, Any] | None) -> str:
    """
    Substitute every ``{{path}}`` token in ``template``.

    Args:
        template: Template text
        data: Nested mappings and sequences to resolve paths against

    Returns:
        Rendered text
    """
    return TOKEN_PATTERN.sub(
        lambda match: _stringify(resolve_path(data or {}, match.group(1))), template
    )

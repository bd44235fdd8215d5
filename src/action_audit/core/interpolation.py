"""
interpolation – ``%{name}`` placeholder substitution for audit templates.

  • %{name}   → str(params["name"])
  • %%{name}  → literal "%{name}" (escape, no interpolation)
  • a template without "%{" is returned unchanged

Missing parameters never raise: the raw template comes back with a
diagnostic suffix naming the first missing key, e.g.

    "Created user %{email} (interpolation error: key{email} not found)"

A configured template that is not a string (a number, a boolean) is returned
as its string form without substitution.
"""
from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping, Optional

PLACEHOLDER_RX = re.compile(r"%(%?)\{([A-Za-z_][A-Za-z0-9_]*)\}")

ERROR_SUFFIX = " (interpolation error: key{%s} not found)"


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    try:
        return str(value)
    except Exception:
        # A broken __str__ on caller data must not break the audit line.
        return f"<{type(value).__name__}>"


def _string_keys(params: Optional[Mapping[Any, Any]]) -> Dict[str, Any]:
    if not isinstance(params, Mapping) or not params:
        return {}
    return {_stringify(k): v for k, v in params.items()}


def find_placeholders(template: Any) -> List[str]:
    """Return placeholder names in first-appearance order (escapes excluded)."""
    if not isinstance(template, str) or "%{" not in template:
        return []
    seen: List[str] = []
    for m in PLACEHOLDER_RX.finditer(template):
        if m.group(1):
            continue
        if m.group(2) not in seen:
            seen.append(m.group(2))
    return seen


def render(template: Any, params: Optional[Mapping[Any, Any]] = None) -> str:
    """Render ``template`` against ``params``; always returns a string.

    Parameters
    ----------
    template:
        Template as configured (usually a string, possibly ``None`` or
        another scalar).
    params:
        Values to inject. Keys are matched by their string form.

    Returns
    -------
    str
        The rendered message, or the annotated raw template when a
        placeholder has no value.
    """
    if template is None:
        return ""
    if isinstance(template, bytes):
        template = template.decode("utf-8", errors="replace")
    if not isinstance(template, str):
        return _stringify(template)
    if "%{" not in template:
        return template

    values = _string_keys(params)
    out: List[str] = []
    pos = 0
    for m in PLACEHOLDER_RX.finditer(template):
        out.append(template[pos:m.start()])
        pos = m.end()
        escaped, name = m.group(1), m.group(2)
        if escaped:
            out.append("%{" + name + "}")
            continue
        if name not in values:
            return template + ERROR_SUFFIX % name
        out.append(_stringify(values[name]))
    out.append(template[pos:])
    return "".join(out)


interpolate = render

__all__ = ["PLACEHOLDER_RX", "find_placeholders", "render", "interpolate"]

from __future__ import annotations

from typing import Any

from markupsafe import Markup, escape


def _scalar_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _render(value: Any) -> str:
    if value is None:
        return "<em>null</em>"
    if isinstance(value, (list, tuple)):
        if not value:
            return "<div>[]</div>"
        return "<ol>" + "".join(f"<li>{_render(v)}</li>" for v in value) + "</ol>"
    if isinstance(value, dict):
        if not value:
            return "<div>{}</div>"
        items = "".join(
            f"<li><strong>{escape(str(k))}</strong>: {_render(v)}</li>" for k, v in value.items()
        )
        return f"<ul>{items}</ul>"
    return str(escape(_scalar_text(value)))


def format_organisation_info_html(obj: Any) -> Markup:
    """Render a JSON-like value as nested HTML lists for human-readable emails."""
    if obj is None:
        return Markup("<div><em>None</em></div>")
    return Markup(_render(obj))

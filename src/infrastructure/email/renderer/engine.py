from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, Template, TemplateNotFound, select_autoescape

from src.config.settings import Settings
from src.infrastructure.email.models import EmailMessage
from src.infrastructure.email.renderer.organisation_info import format_organisation_info_html

FALLBACK_LOCALE = "en"
TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


@dataclass(slots=True)
class EmailTemplateRenderer:
    """
    Renders ``<locale>/<template_key>/{subject.txt,body.txt,body.html}.j2``.

    Templates missing for the requested locale are taken from the fallback
    locale. HTML bodies are wrapped in ``<locale>/_layout.html.j2``.
    """

    base_path: Path
    env: Environment

    @classmethod
    def create_default(cls, base_path: Path = TEMPLATES_DIR) -> EmailTemplateRenderer:
        env = Environment(
            loader=FileSystemLoader(str(base_path)),
            autoescape=select_autoescape(enabled_extensions=("html", "xml", "html.j2")),
        )
        env.filters["organisation_info"] = format_organisation_info_html
        return cls(base_path=base_path, env=env)

    def _load(self, locale: str, name: str) -> Template:
        try:
            return self.env.get_template(f"{locale}/{name}")
        except TemplateNotFound:
            if locale == FALLBACK_LOCALE:
                raise
            return self.env.get_template(f"{FALLBACK_LOCALE}/{name}")

    def _load_optional(self, locale: str, name: str) -> Template | None:
        try:
            return self._load(locale, name)
        except TemplateNotFound:
            return None

    def render(
        self,
        *,
        template_key: str,
        settings: Settings,
        context: dict[str, Any],
        locale: str | None = None,
    ) -> EmailMessage:
        loc = (locale or settings.email_default_locale or FALLBACK_LOCALE).lower()
        ctx = {
            "app": {
                "name": settings.email_from_name,
                "primary_color": settings.email_primary_color,
                "admin_portal_url": settings.admin_portal_url,
            },
            **context,
        }

        subject = self._load(loc, f"{template_key}/subject.txt.j2").render(ctx).strip()
        text = self._load(loc, f"{template_key}/body.txt.j2").render(ctx).strip()
        html = None
        html_tpl = self._load_optional(loc, f"{template_key}/body.html.j2")
        if html_tpl is not None:
            html = html_tpl.render(ctx)
            layout = self._load_optional(loc, "_layout.html.j2")
            if layout is not None:
                html = layout.render({**ctx, "content": html})

        # Recipients and sender are filled in by the caller
        return EmailMessage(subject=subject, to=[], text=text, html=html)

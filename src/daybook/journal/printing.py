"""Printable HTML for a single entry.

Images are embedded as base64 ``data:`` URIs so the document is
self-contained when handed to the OS print service. Rendering uses a
Jinja2 environment with autoescaping; a custom template string can be
supplied for host-specific styling.
"""

from __future__ import annotations

import base64

from jinja2 import DictLoader, Environment, select_autoescape

from daybook.core.result import ErrorKind, Result, capture

from .config import FOOTER_DATE_FORMAT
from .grouping import format_footer_date
from .models import Entry, ImageBlob

ENTRY_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{{ title or "Journal Entry" }}</title>
<style>
  body { font-family: -apple-system, Helvetica, Arial, sans-serif; margin: 32px; color: #222; }
  h1 { font-size: 24px; margin-bottom: 8px; }
  .date { color: #666; font-size: 13px; margin-bottom: 16px; }
  .description { font-size: 15px; line-height: 1.5; white-space: pre-wrap; }
  .images img { max-width: 100%; border-radius: 12px; margin: 8px 0; }
</style>
</head>
<body>
{% if images %}<div class="images">
{% for src in images %}  <img src="{{ src }}">
{% endfor %}</div>
{% endif %}{% if title %}<h1>{{ title }}</h1>
{% endif %}<div class="description">{{ description }}</div>
<div class="date">{{ date }}</div>
</body>
</html>
"""

_TEMPLATE_NAME = "entry.html"


def image_data_uri(image: ImageBlob) -> str:
    encoded = base64.b64encode(image.data).decode("ascii")
    return f"data:{image.content_type};base64,{encoded}"


def _environment(template: str | None) -> Environment:
    return Environment(
        loader=DictLoader({_TEMPLATE_NAME: template or ENTRY_TEMPLATE}),
        autoescape=select_autoescape(default=True, default_for_string=True),
        keep_trailing_newline=True,
    )


def render_entry_html(entry: Entry, template: str | None = None, date_format: str = FOOTER_DATE_FORMAT) -> str:
    """Render *entry* as a standalone HTML page."""
    env = _environment(template)
    return env.get_template(_TEMPLATE_NAME).render(
        title=entry.title if entry.show_title else "",
        description=entry.description,
        date=format_footer_date(entry.date, date_format),
        images=[image_data_uri(img) for img in entry.images],
    )


async def print_entry(
    entry: Entry, service, template: str | None = None, date_format: str = FOOTER_DATE_FORMAT
) -> Result[None]:
    """Send the rendered entry to the print collaborator."""
    html = render_entry_html(entry, template, date_format)
    job_name = entry.title.strip() or "Journal Entry"
    return await capture(service.print_html(html, job_name), ErrorKind.MEDIA_IO_FAILURE, action="print")

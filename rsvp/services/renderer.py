"""
HTML rendering with Jinja2
"""
import logging
from typing import Iterable

import jinja2

from rsvp.core.exceptions import RenderError
from rsvp.models.event import Event

logger = logging.getLogger(__name__)


def join(values: Iterable[str]) -> str:
    return ", ".join(values)


class TemplateRenderer:
    """Renders the event page and the front page"""

    EVENT_TEMPLATE = "event.html"
    INDEX_TEMPLATE = "index.html"

    def __init__(self, templates_dir: str):
        # Autoescaping keeps attendee names and event fields from injecting markup
        self.env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(templates_dir),
            autoescape=True,
        )
        self.env.filters["join"] = join

    def _render(self, name: str, **context) -> str:
        try:
            return self.env.get_template(name).render(**context)
        except jinja2.TemplateError as e:
            logger.error(f"Error rendering {name}: {e}", exc_info=True)
            raise RenderError(name) from e

    def render_event(self, event: Event) -> str:
        return self._render(self.EVENT_TEMPLATE, event=event)

    def render_index(self) -> str:
        return self._render(self.INDEX_TEMPLATE)

"""Template resolution for theme views.

Resolves which view template a request renders, discovers the custom
page templates offered to editors, and renders through kida.

The kida integration lives in ``bluemountain.templating.integration``
and is imported only when a template is rendered, so the hierarchy and
discovery helpers work without the template engine installed.
"""

from bluemountain.templating.discovery import discover_page_templates, parse_template_label
from bluemountain.templating.hierarchy import (
    TEMPLATE_HIERARCHY,
    TemplateLocator,
    is_valid_template_name,
    resolve_template_name,
)

__all__ = [
    "TEMPLATE_HIERARCHY",
    "TemplateLocator",
    "discover_page_templates",
    "is_valid_template_name",
    "parse_template_label",
    "resolve_template_name",
]
